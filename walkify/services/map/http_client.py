"""Shared GET-and-decode helper for the geo providers."""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from walkify.exceptions import ProviderError


async def get_json(
    url: str,
    *,
    provider: str,
    params: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 10.0,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """GET ``url`` and return the decoded JSON body, raising ProviderError on any failure."""
    try:
        if client is not None:
            response = await client.get(url, params=params, headers=headers, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as session:
                response = await session.get(url, params=params, headers=headers)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        error_detail = _error_detail(e.response)
        if status == 429:
            raise ProviderError(f"{provider}: API quota exceeded", status_code=429) from e
        elif status in (401, 403):
            raise ProviderError(f"{provider}: API key invalid or access denied", status_code=status) from e
        elif status in (400, 422):
            raise ProviderError(
                f"{provider}: Bad request ({status}): Invalid request parameters{error_detail}",
                status_code=status,
            ) from e
        else:
            raise ProviderError(f"{provider}: API error {status}{error_detail}", status_code=status) from e
    except httpx.HTTPError as e:
        raise ProviderError(f"{provider}: request failed: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise ProviderError(f"{provider}: response is not valid JSON") from e


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return ""
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if isinstance(message, str) and message:
            return f" - {message}"
    return ""
