import logging
from typing import List, Sequence, Tuple

from walkify.config.place_types import Category
from walkify.models.place import Place
from walkify.services.map.geo import is_same_spot
from walkify.services.route.place_resolver import PlaceResolver

logger = logging.getLogger(__name__)


class PoiAggregator:
    """Collects nearby points of interest across several categories"""

    def __init__(self, resolver: PlaceResolver):
        self.resolver = resolver

    async def search_nearby_pois(
        self,
        center: Tuple[float, float],
        categories: Sequence[Category],
        radius_m: int,
        limit_per_type: int = 1,
    ) -> List[Place]:
        """
        Search POIs around ``center`` category by category

        Args:
            center: Search center as (lng, lat)
            categories: Categories in priority order
            radius_m: Search radius in meters
            limit_per_type: Max places taken from each category

        Returns:
            Places in category order, with no two on the same spot
        """
        limit_per_type = max(1, limit_per_type)
        max_total = limit_per_type * len(categories)
        pois: List[Place] = []

        for category in categories:
            if len(pois) >= max_total:
                break
            found = await self.resolver.find_places_nearby(
                center, category, radius_m=radius_m, limit=limit_per_type
            )
            for place in found:
                if any(is_same_spot(place.coordinates, p.coordinates) for p in pois):
                    continue
                pois.append(place)
                if len(pois) >= max_total:
                    break

        logger.info("🔍 Found %d POIs for %d categories", len(pois), len(categories))
        return pois
