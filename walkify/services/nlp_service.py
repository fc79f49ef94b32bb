"""Facade for the RouteRequest parsing pipeline."""
from __future__ import annotations

from fastapi.concurrency import run_in_threadpool

from walkify.models.request import RouteRequest
from walkify.services.nlp import RouteRequestParser


class NLPService:
    """Expose parsing as a FastAPI-friendly service."""

    def __init__(self, parser: RouteRequestParser | None = None) -> None:
        self._parser = parser or RouteRequestParser()

    async def parse_query(self, text: str) -> RouteRequest:
        return await run_in_threadpool(self._parser.parse, text)
