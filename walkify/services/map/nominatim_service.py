import logging
from typing import Dict, List, Optional, Tuple

import httpx

from walkify.config import Settings, settings as default_settings
from walkify.exceptions import ProviderError
from walkify.services.map.api_counter import APICounter, api_counter
from walkify.services.map.http_client import get_json
from walkify.services.map.map_service import GeocodeCandidate, GeocodeProvider

logger = logging.getLogger(__name__)


class NominatimService(GeocodeProvider):
    """OpenStreetMap Nominatim free-text search"""

    PROVIDER = "nominatim"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        counter: Optional[APICounter] = None,
    ):
        self.settings = settings or default_settings
        self.search_url = self.settings.nominatim_url
        self._client = client
        self._counter = counter or api_counter

    async def search(
        self,
        query: str,
        viewbox: Tuple[float, float, float, float],
        limit: int = 10,
    ) -> List[GeocodeCandidate]:
        """Search places inside the viewbox (bounded search)"""
        if not self._counter.can_make_call(self.PROVIDER):
            raise ProviderError(
                f"API call limit exceeded. Max calls per day: {self._counter.max_calls_per_day}",
                status_code=429,
            )

        min_lng, min_lat, max_lng, max_lat = viewbox
        params = {
            "q": query,
            "format": "json",
            "limit": limit,
            "bounded": 1,
            "viewbox": f"{min_lng},{min_lat},{max_lng},{max_lat}",
            "addressdetails": 1,
            "accept-language": self.settings.language,
        }

        data = await get_json(
            self.search_url,
            provider=self.PROVIDER,
            params=params,
            headers={"User-Agent": self.settings.user_agent},
            timeout=self.settings.request_timeout_s,
            client=self._client,
        )
        self._counter.record_call(self.PROVIDER)

        if not isinstance(data, list):
            raise ProviderError(f"{self.PROVIDER}: unexpected response shape")

        candidates = []
        for item in data:
            candidate = self._convert_item(item)
            if candidate is not None:
                candidates.append(candidate)
        logger.debug("Nominatim %r -> %d candidates", query, len(candidates))
        return candidates

    def _convert_item(self, item: Dict) -> Optional[GeocodeCandidate]:
        """Convert one Nominatim hit to the standard candidate format"""
        try:
            lng = float(item["lon"])
            lat = float(item["lat"])
        except (KeyError, TypeError, ValueError):
            return None

        display_name = item.get("display_name") or ""
        # The first segment of display_name is the place itself
        name = display_name.split(",")[0].strip() or item.get("name") or "Місце"

        categories = tuple(c for c in (item.get("class"), item.get("type")) if c)
        return GeocodeCandidate(
            name=name,
            coordinates=(lng, lat),
            provider=self.PROVIDER,
            address=display_name or None,
            external_id=str(item["place_id"]) if item.get("place_id") is not None else None,
            categories=categories,
            place_type=item.get("type", ""),
        )
