"""Rule-based parsing package for converting Ukrainian free text into RouteRequest models."""
from .parser_service import RouteRequestParser

__all__ = ["RouteRequestParser"]
