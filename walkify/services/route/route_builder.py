import logging
from typing import Optional, Sequence, Tuple

from walkify.config import Settings
from walkify.exceptions import ProviderError, RouteGenerationError
from walkify.models.response import RouteResult, RouteWaypoint
from walkify.services.map.map_service import DirectionsProvider
from walkify.services.map.mapbox_service import MapboxDirectionsService

logger = logging.getLogger(__name__)

LngLat = Tuple[float, float]

NO_ROUTE_MESSAGE = "Не вдалося побудувати маршрут між обраними точками."


class RouteBuilder:
    """
    Route builder - asks the directions provider for a walking path
    through origin, waypoints and destination
    """

    def __init__(
        self,
        directions: Optional[DirectionsProvider] = None,
        settings: Optional[Settings] = None,
    ):
        self.directions = directions or MapboxDirectionsService(settings)

    async def build_route(
        self,
        origin: LngLat,
        destination: LngLat,
        waypoints: Sequence[LngLat] = (),
    ) -> RouteResult:
        """
        Build a walking route

        Args:
            origin: Start as (lng, lat)
            destination: End as (lng, lat)
            waypoints: Intermediate stops as (lng, lat), in visiting order

        Returns:
            RouteResult with (lat, lng) points and placeholder waypoint names

        Raises:
            RouteGenerationError: The provider failed or found no path
        """
        coordinates = [origin, *waypoints, destination]
        try:
            directions = await self.directions.walking_route(coordinates)
        except ProviderError as e:
            logger.error("❌ Directions request failed: %s", e)
            raise RouteGenerationError(NO_ROUTE_MESSAGE) from e

        if directions is None or not directions.geometry:
            raise RouteGenerationError(NO_ROUTE_MESSAGE)

        route = RouteResult(
            points=[(lat, lng) for lng, lat in directions.geometry],
            waypoints=[
                RouteWaypoint(location=(lat, lng), name=f"Проміжна точка {i + 1}")
                for i, (lng, lat) in enumerate(waypoints)
            ],
            distance_km=round(directions.distance_m / 1000, 2),
            estimated_time_minutes=round(directions.duration_s / 60),
        )
        logger.info(
            "🚶 Route built: %.2f km, %d min, %d waypoints",
            route.distance_km, route.estimated_time_minutes, len(waypoints),
        )
        return route
