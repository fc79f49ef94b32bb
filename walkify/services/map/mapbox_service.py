import logging
from typing import Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx

from walkify.config import Settings, settings as default_settings
from walkify.exceptions import ProviderError
from walkify.services.map.api_counter import APICounter, api_counter
from walkify.services.map.http_client import get_json
from walkify.services.map.map_service import (
    DirectionsProvider,
    DirectionsResult,
    GeocodeCandidate,
    PoiProvider,
)

logger = logging.getLogger(__name__)


class _MapboxClient:
    """Token, budget and transport shared by the Mapbox endpoints"""

    PROVIDER = "mapbox"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        counter: Optional[APICounter] = None,
    ):
        self.settings = settings or default_settings
        self.access_token = self.settings.mapbox_token
        self.base_url = self.settings.mapbox_base_url.rstrip("/")
        self._client = client
        self._counter = counter or api_counter

        if not self.access_token:
            logger.warning("Mapbox token is not configured – Mapbox requests will fail")

    async def _get(self, url: str, params: Dict) -> Dict:
        if not self.access_token:
            raise ProviderError("Mapbox access token is required", status_code=401)
        if not self._counter.can_make_call(self.PROVIDER):
            raise ProviderError(
                f"API call limit exceeded. Max calls per day: {self._counter.max_calls_per_day}",
                status_code=429,
            )

        data = await get_json(
            url,
            provider=self.PROVIDER,
            params={**params, "access_token": self.access_token},
            timeout=self.settings.request_timeout_s,
            client=self._client,
        )
        self._counter.record_call(self.PROVIDER)

        if not isinstance(data, dict):
            raise ProviderError(f"{self.PROVIDER}: unexpected response shape")
        return data


class MapboxGeocodingService(_MapboxClient, PoiProvider):
    """Mapbox Geocoding API (places), biased towards a proximity point"""

    async def search(
        self,
        query: str,
        proximity: Tuple[float, float],
        limit: int = 10,
    ) -> List[GeocodeCandidate]:
        url = f"{self.base_url}/geocoding/v5/mapbox.places/{quote(query, safe='')}.json"
        params = {
            "proximity": f"{proximity[0]},{proximity[1]}",
            "limit": limit,
            "language": self.settings.language,
        }
        data = await self._get(url, params)

        candidates = []
        for feature in data.get("features", []):
            candidate = self._convert_feature(feature)
            if candidate is not None:
                candidates.append(candidate)
        logger.debug("Mapbox geocoding %r -> %d candidates", query, len(candidates))
        return candidates

    def _convert_feature(self, feature: Dict) -> Optional[GeocodeCandidate]:
        """Convert a GeoJSON feature to the standard candidate format"""
        try:
            lng = float(feature["center"][0])
            lat = float(feature["center"][1])
        except (KeyError, IndexError, TypeError, ValueError):
            return None

        properties = feature.get("properties") or {}
        raw_categories = properties.get("category") or []
        # Mapbox sends POI categories as a comma separated string
        if isinstance(raw_categories, str):
            raw_categories = raw_categories.split(",")
        categories = tuple(c.strip().lower() for c in raw_categories if c and c.strip())

        place_types = feature.get("place_type") or []
        return GeocodeCandidate(
            name=feature.get("text") or feature.get("place_name") or "Місце",
            coordinates=(lng, lat),
            provider=self.PROVIDER,
            address=feature.get("place_name"),
            external_id=feature.get("id"),
            categories=categories,
            place_type=place_types[0] if place_types else "",
        )


class MapboxDirectionsService(_MapboxClient, DirectionsProvider):
    """Mapbox Directions API, walking profile"""

    async def walking_route(
        self, coordinates: Sequence[Tuple[float, float]]
    ) -> Optional[DirectionsResult]:
        if len(coordinates) < 2:
            raise ProviderError("At least two coordinates are required for directions", status_code=400)

        # Mapbox expects "lng,lat;lng,lat;..."
        path = ";".join(f"{lng},{lat}" for lng, lat in coordinates)
        url = f"{self.base_url}/directions/v5/mapbox/walking/{path}"
        params = {
            "geometries": "geojson",
            "overview": "full",
            "steps": "false",
        }
        data = await self._get(url, params)

        routes = data.get("routes") or []
        if not routes:
            logger.warning("Mapbox returned no walking route (code=%s)", data.get("code"))
            return None

        route = routes[0]
        geometry = route.get("geometry") or {}
        return DirectionsResult(
            geometry=[(float(c[0]), float(c[1])) for c in geometry.get("coordinates", [])],
            distance_m=float(route.get("distance", 0.0)),
            duration_s=float(route.get("duration", 0.0)),
        )
