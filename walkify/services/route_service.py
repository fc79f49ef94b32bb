"""
Main route generation service
Integrates parsing, place resolution, route building and extension
"""
import logging
import math
from typing import List, Optional, Sequence, Tuple

from walkify.config import Settings, settings as default_settings
from walkify.config.place_types import DEFAULT_EXPLORATION_CATEGORIES, Category, get_category_label
from walkify.exceptions import RouteGenerationError
from walkify.models.place import Place
from walkify.models.request import RouteMode, RouteRequest
from walkify.models.response import RouteResult
from walkify.services.map.geo import is_same_spot
from walkify.services.nlp import RouteRequestParser
from walkify.services.route.place_resolver import PlaceResolver
from walkify.services.route.poi_aggregator import PoiAggregator
from walkify.services.route.response_builder import ResponseBuilderService
from walkify.services.route.route_builder import RouteBuilder
from walkify.services.route.route_extender import RouteExtender

logger = logging.getLogger(__name__)

LngLat = Tuple[float, float]

NO_DESTINATION_MESSAGE = (
    'Не вдалося визначити пункт призначення. Спробуйте "прогулянка до парку" або подібне.'
)
NO_POIS_MESSAGE = "Не вдалося знайти цікаві місця поблизу вас."

MIN_EXPLORATION_STOPS = 2


class RouteService:
    """
    Main route generation service

    Architecture: Parsing → Place resolution → Route building → Extension → Naming
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        parser: Optional[RouteRequestParser] = None,
        resolver: Optional[PlaceResolver] = None,
        aggregator: Optional[PoiAggregator] = None,
        builder: Optional[RouteBuilder] = None,
        extender: Optional[RouteExtender] = None,
        response_builder: Optional[ResponseBuilderService] = None,
    ):
        self.settings = settings or default_settings
        self.parser = parser or RouteRequestParser()
        self.resolver = resolver or PlaceResolver(settings=self.settings)
        self.aggregator = aggregator or PoiAggregator(self.resolver)
        self.builder = builder or RouteBuilder(settings=self.settings)
        self.response_builder = response_builder or ResponseBuilderService()
        self.extender = extender or RouteExtender(self.resolver, self.builder, self.response_builder)

    async def generate_route_from_text(
        self,
        origin: LngLat,
        text: str,
        route_mode: Optional[RouteMode] = None,
    ) -> RouteResult:
        """
        Main route generation process

        Args:
            origin: User location as (lng, lat)
            text: Free-text walk request in Ukrainian
            route_mode: Forces point-to-point or exploration when given

        Raises:
            RouteGenerationError: Destination, POIs or the path could not be found
        """
        # Step 1: Parse the request
        request = self.parser.parse(text)
        logger.info("🧭 Parsed walk request: %s", request.model_dump(exclude_defaults=True))

        # Step 2: Pick the mode
        if route_mode is not None:
            exploration = route_mode == RouteMode.EXPLORATION
        else:
            exploration = request.is_exploration

        if exploration:
            categories: List[Category] = []
            if request.destination_category is not None:
                categories.append(request.destination_category)
            for category in request.waypoint_categories:
                if category not in categories:
                    categories.append(category)
            return await self.generate_exploration_route(
                origin,
                types=categories,
                desired_poi_count=request.desired_stop_count,
                target_distance_km=request.target_distance_km,
            )

        return await self._generate_point_to_point(origin, request)

    async def generate_exploration_route(
        self,
        origin: LngLat,
        types: Optional[Sequence[Category]] = None,
        desired_poi_count: int = 6,
        target_distance_km: Optional[float] = None,
    ) -> RouteResult:
        """Walk through several nearby POIs with no fixed destination"""
        types = list(types) if types else list(DEFAULT_EXPLORATION_CATEGORIES)
        wanted = max(desired_poi_count, MIN_EXPLORATION_STOPS)
        limit_per_type = math.ceil(wanted / len(types))

        pois = await self.aggregator.search_nearby_pois(
            origin,
            types,
            radius_m=self.settings.exploration_search_radius_m,
            limit_per_type=limit_per_type,
        )
        if not pois:
            raise RouteGenerationError(NO_POIS_MESSAGE)

        selected = pois[:wanted]
        # The last stop is the nominal destination for the directions call
        destination = selected[-1]

        route = await self.builder.build_route(
            origin,
            destination.coordinates,
            [place.coordinates for place in selected[:-1]],
        )
        route = self.response_builder.with_stops(route, selected)

        if target_distance_km and route.distance_km < target_distance_km:
            route = await self.extender.extend_route_to_distance(
                route, target_distance_km, origin, destination.coordinates
            )
        return route

    async def _generate_point_to_point(self, origin: LngLat, request: RouteRequest) -> RouteResult:
        destination = await self._resolve_destination(origin, request)

        stops: List[Place] = []
        for name in request.waypoint_names:
            place = await self.resolver.find_place_by_name(name, origin)
            if place is None:
                logger.info("Waypoint %r not found, skipping", name)
                continue
            if self._is_duplicate(place, destination, stops):
                continue
            stops.append(place)

        satisfied = {place.category for place in stops}
        midpoint = self._midpoint(origin, destination.coordinates)
        for category in request.waypoint_categories:
            if category in satisfied:
                continue
            place = await self.resolver.find_nearest_place(
                midpoint, category, radius_m=self.settings.waypoint_search_radius_m
            )
            if place is None or self._is_duplicate(place, destination, stops):
                continue
            stops.append(place)

        route = await self.builder.build_route(
            origin, destination.coordinates, [place.coordinates for place in stops]
        )
        route = self.response_builder.with_stops(
            route, stops, locations=[destination.name] + [place.name for place in stops]
        )

        target = request.target_distance_km
        if target and route.distance_km < target:
            route = await self.extender.extend_route_to_distance(
                route, target, origin, destination.coordinates
            )
        return route

    async def _resolve_destination(self, origin: LngLat, request: RouteRequest) -> Place:
        if request.destination_name:
            place = await self.resolver.find_place_by_name(request.destination_name, origin)
            if place is None:
                raise RouteGenerationError(
                    f"Не вдалося знайти «{request.destination_name}» поблизу вас."
                )
            return place

        if request.destination_category is not None:
            place = await self.resolver.find_nearest_place(origin, request.destination_category)
            if place is None:
                label = get_category_label(request.destination_category)
                raise RouteGenerationError(f"Не вдалося знайти {label} поблизу вас.")
            return place

        raise RouteGenerationError(NO_DESTINATION_MESSAGE)

    @staticmethod
    def _is_duplicate(place: Place, destination: Place, stops: Sequence[Place]) -> bool:
        return any(is_same_spot(place.coordinates, p.coordinates) for p in [destination, *stops])

    @staticmethod
    def _midpoint(a: LngLat, b: LngLat) -> LngLat:
        return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)
