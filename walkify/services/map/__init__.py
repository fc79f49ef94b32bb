"""Geo providers: free-text geocoding, commercial POI search and walking directions."""
from .map_service import DirectionsProvider, DirectionsResult, GeocodeCandidate, GeocodeProvider, PoiProvider
from .mapbox_service import MapboxDirectionsService, MapboxGeocodingService
from .nominatim_service import NominatimService

__all__ = [
    "DirectionsProvider",
    "DirectionsResult",
    "GeocodeCandidate",
    "GeocodeProvider",
    "PoiProvider",
    "MapboxDirectionsService",
    "MapboxGeocodingService",
    "NominatimService",
]
