"""Resolve place names and categories into concrete places near the user."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import httpx

from walkify.config import Settings, settings as default_settings
from walkify.config.place_types import Category, get_mapbox_query, get_nominatim_query
from walkify.exceptions import ProviderError
from walkify.models.place import Place
from walkify.services.map.geo import bounding_box, distance_lng_lat_km
from walkify.services.map.map_service import GeocodeCandidate, GeocodeProvider, PoiProvider
from walkify.services.map.mapbox_service import MapboxGeocodingService
from walkify.services.map.nominatim_service import NominatimService
from walkify.services.nlp.morphology import category_for_word, name_variants

logger = logging.getLogger(__name__)

LngLat = Tuple[float, float]

DEFAULT_RADIUS_M = 5000
# Nominatim viewbox half-size for category searches
CATEGORY_VIEWBOX_DEGREES = 0.1
# Rough degrees of latitude per kilometre, for name-search viewboxes
DEGREES_PER_KM = 1 / 111.0
SEARCH_LIMIT = 10


class PlaceResolver:
    """
    Place resolution service - finds the best real place for a name or a category.

    Providers are tried in a fixed order (free-text geocoder first, commercial
    geocoder second) and provider failures count as "nothing found".
    """

    def __init__(
        self,
        geocoder: Optional[GeocodeProvider] = None,
        poi_provider: Optional[PoiProvider] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.geocoder = geocoder or NominatimService(self.settings)
        self.poi_provider = poi_provider or MapboxGeocodingService(self.settings)

    async def find_place_by_name(self, name: str, origin: LngLat) -> Optional[Place]:
        """
        Find the place called ``name`` closest to ``origin``.

        Spelling variants are tried in order; the first variant that yields a
        candidate within the name search radius wins, variants are never merged.
        """
        radius_km = self.settings.name_search_radius_km
        viewbox = bounding_box(origin, radius_km * DEGREES_PER_KM)
        category = self._category_from_name(name)

        for variant in name_variants(name):
            candidates = await self._search_geocoder(variant, viewbox)
            nearest = self._within_radius(candidates, origin, radius_km)
            if not nearest:
                candidates = await self._search_poi_provider(variant, origin)
                nearest = self._within_radius(candidates, origin, radius_km)
            if nearest:
                logger.info("📍 Resolved %r as %r via %s", name, variant, nearest[0].provider)
                return self._to_place(nearest[0], category)

        logger.info("❌ No place found for name %r", name)
        return None

    async def find_nearest_place(
        self, origin: LngLat, category: Category, radius_m: int = DEFAULT_RADIUS_M
    ) -> Optional[Place]:
        """Find the nearest place of ``category`` within ``radius_m`` meters of ``origin``."""
        places = await self.find_places_nearby(origin, category, radius_m=radius_m, limit=1)
        return places[0] if places else None

    async def find_places_nearby(
        self,
        origin: LngLat,
        category: Category,
        radius_m: int = DEFAULT_RADIUS_M,
        limit: int = 1,
    ) -> List[Place]:
        """
        Places of ``category`` within ``radius_m``, nearest first.

        Only the first provider returning an in-radius candidate is used.
        """
        radius_km = radius_m / 1000

        nominatim_query = get_nominatim_query(category)
        if nominatim_query:
            candidates = await self._search_geocoder(
                nominatim_query, bounding_box(origin, CATEGORY_VIEWBOX_DEGREES)
            )
            nearest = self._within_radius(candidates, origin, radius_km)
            if nearest:
                return [self._to_place(c, category) for c in nearest[:limit]]

        mapbox_query = get_mapbox_query(category)
        candidates = await self._search_poi_provider(mapbox_query, origin)
        # "park" is a broad enough query on its own; other kinds need a category filter
        if category != Category.PARK:
            candidates = [c for c in candidates if self._has_category(c, mapbox_query)]
        nearest = self._within_radius(candidates, origin, radius_km)
        return [self._to_place(c, category) for c in nearest[:limit]]

    async def _search_geocoder(
        self, query: str, viewbox: Tuple[float, float, float, float]
    ) -> List[GeocodeCandidate]:
        try:
            return await self.geocoder.search(query, viewbox, limit=SEARCH_LIMIT)
        except (ProviderError, httpx.HTTPError) as e:
            logger.warning("⚠️ Geocoder search for %r failed, trying next provider: %s", query, e)
            return []

    async def _search_poi_provider(self, query: str, origin: LngLat) -> List[GeocodeCandidate]:
        try:
            return await self.poi_provider.search(query, origin, limit=SEARCH_LIMIT)
        except (ProviderError, httpx.HTTPError) as e:
            logger.warning("⚠️ POI search for %r failed: %s", query, e)
            return []

    @staticmethod
    def _within_radius(
        candidates: Sequence[GeocodeCandidate], origin: LngLat, radius_km: float
    ) -> List[GeocodeCandidate]:
        scored = []
        for candidate in candidates:
            distance = distance_lng_lat_km(origin, candidate.coordinates)
            if distance <= radius_km:
                scored.append((distance, candidate))
        # sort is stable: equally distant candidates keep the provider ranking
        scored.sort(key=lambda pair: pair[0])
        return [candidate for _, candidate in scored]

    @staticmethod
    def _has_category(candidate: GeocodeCandidate, category_code: str) -> bool:
        code = category_code.lower()
        return any(code in c for c in candidate.categories) or code in candidate.place_type.lower()

    @staticmethod
    def _category_from_name(name: str) -> Category:
        for word in name.lower().split():
            category = category_for_word(word)
            if category is not None:
                return category
        return Category.CUSTOM

    @staticmethod
    def _to_place(candidate: GeocodeCandidate, category: Category) -> Place:
        return Place(
            name=candidate.name,
            coordinates=candidate.coordinates,
            category=category,
            address=candidate.address,
            provenance=candidate.provider,
            external_id=candidate.external_id,
        )
