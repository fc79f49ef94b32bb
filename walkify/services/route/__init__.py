# Route service package
from .place_resolver import PlaceResolver
from .poi_aggregator import PoiAggregator
from .response_builder import ResponseBuilderService
from .route_builder import RouteBuilder
from .route_extender import RouteExtender

__all__ = [
    "PlaceResolver",
    "PoiAggregator",
    "ResponseBuilderService",
    "RouteBuilder",
    "RouteExtender",
]
