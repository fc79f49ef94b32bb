"""
Route extender - lengthens a short route by threading extra POIs through it.

One extension pass is made over up to MAX_SAMPLES points of the route
geometry, followed by at most one extra park near the 70 % mark.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from walkify.config.place_types import DEFAULT_EXPLORATION_CATEGORIES, Category
from walkify.exceptions import RouteGenerationError
from walkify.models.place import Place
from walkify.models.response import RouteResult
from walkify.services.map.geo import is_same_spot, point_at_fraction, sample_along
from walkify.services.route.place_resolver import PlaceResolver
from walkify.services.route.response_builder import ResponseBuilderService
from walkify.services.route.route_builder import RouteBuilder

logger = logging.getLogger(__name__)

LngLat = Tuple[float, float]

MAX_SAMPLES = 5
SAMPLE_SEARCH_RADIUS_M = 1000
EXTRA_PARK_RADIUS_M = 1500
EXTRA_PARK_FRACTION = 0.7
# No extra park once the route has grown this much
MAX_GROWTH_FOR_EXTRA = 1.5


class RouteExtender:

    def __init__(
        self,
        resolver: PlaceResolver,
        builder: RouteBuilder,
        response_builder: Optional[ResponseBuilderService] = None,
        categories: Sequence[Category] = tuple(DEFAULT_EXPLORATION_CATEGORIES),
    ):
        self.resolver = resolver
        self.builder = builder
        self.response_builder = response_builder or ResponseBuilderService()
        self.categories = list(categories)

    async def extend_route_to_distance(
        self,
        route: RouteResult,
        target_km: float,
        origin: LngLat,
        destination: LngLat,
    ) -> RouteResult:
        """
        Extend ``route`` towards ``target_km``

        Args:
            route: Route to extend, with its waypoints already named
            target_km: Desired length in kilometers
            origin: Route start as (lng, lat)
            destination: Route end as (lng, lat)

        Returns:
            The best route assembled; never shorter than ``route``
        """
        if route.distance_km >= target_km:
            return route

        existing = [self.response_builder.waypoint_to_lng_lat(w) for w in route.waypoints]
        taken: List[LngLat] = [origin, destination, *existing]
        found: List[Place] = []

        for i, (lat, lng) in enumerate(sample_along(route.points, MAX_SAMPLES)):
            category = self.categories[i % len(self.categories)]
            place = await self.resolver.find_nearest_place(
                (lng, lat), category, radius_m=SAMPLE_SEARCH_RADIUS_M
            )
            if place is None or self._is_taken(place, taken):
                continue
            taken.append(place.coordinates)
            found.append(place)

        if not found:
            logger.info("No POIs found to extend the route, keeping %.2f km", route.distance_km)
            return route

        candidates = [route]
        extended = await self._rebuild(route, origin, destination, found)
        if extended is not None:
            candidates.append(extended)

            if (
                extended.distance_km < target_km
                and extended.distance_km < route.distance_km * MAX_GROWTH_FOR_EXTRA
                and extended.points
            ):
                lat, lng = point_at_fraction(extended.points, EXTRA_PARK_FRACTION)
                park = await self.resolver.find_nearest_place(
                    (lng, lat), Category.PARK, radius_m=EXTRA_PARK_RADIUS_M
                )
                if park is not None and not self._is_taken(park, taken):
                    with_park = await self._rebuild(route, origin, destination, found + [park])
                    if with_park is not None:
                        candidates.append(with_park)

        best = self._pick_best(candidates, route.distance_km, target_km)
        logger.info(
            "📏 Route extended %.2f -> %.2f km (target %.2f km)",
            route.distance_km, best.distance_km, target_km,
        )
        return best

    async def _rebuild(
        self,
        route: RouteResult,
        origin: LngLat,
        destination: LngLat,
        extra: Sequence[Place],
    ) -> Optional[RouteResult]:
        # Exploration routes list their last stop as a waypoint too; it stays last
        kept, at_destination = [], []
        for waypoint in route.waypoints:
            point = self.response_builder.waypoint_to_lng_lat(waypoint)
            (at_destination if is_same_spot(point, destination) else kept).append(waypoint)

        coordinates = [self.response_builder.waypoint_to_lng_lat(w) for w in kept]
        coordinates += [place.coordinates for place in extra]
        try:
            rebuilt = await self.builder.build_route(origin, destination, coordinates)
        except RouteGenerationError as e:
            logger.warning("⚠️ Extended route could not be built: %s", e)
            return None

        added = [self.response_builder.to_waypoint(place) for place in extra]
        waypoints = kept + added + at_destination
        ending = [waypoint.name for waypoint in at_destination]
        locations = [name for name in route.locations if name not in ending]
        locations += [place.name for place in extra] + ending
        return self.response_builder.with_waypoints(rebuilt, waypoints, locations)

    @staticmethod
    def _is_taken(place: Place, taken: Sequence[LngLat]) -> bool:
        return any(is_same_spot(place.coordinates, point) for point in taken)

    @staticmethod
    def _pick_best(candidates: Sequence[RouteResult], original_km: float, target_km: float) -> RouteResult:
        eligible = [c for c in candidates if c.distance_km >= original_km]
        # min() keeps the first of equals, so the original wins ties
        return min(eligible, key=lambda c: abs(target_km - c.distance_km))
