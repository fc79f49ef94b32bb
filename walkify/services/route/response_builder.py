"""
Response builder service - projects resolved places onto a built route
Places carry (lng, lat); route waypoints carry (lat, lng) for the map UI.
"""
from typing import List, Optional, Sequence

from walkify.config.place_types import get_marker_for_category
from walkify.models.place import Place
from walkify.models.response import RouteResult, RouteWaypoint


class ResponseBuilderService:
    """Attaches real stop names and categories to a RouteResult"""

    @staticmethod
    def to_waypoint(place: Place) -> RouteWaypoint:
        return RouteWaypoint(
            location=(place.lat, place.lng),
            name=place.name,
            category=place.category,
            marker=get_marker_for_category(place.category),
        )

    @staticmethod
    def waypoint_to_lng_lat(waypoint: RouteWaypoint) -> tuple:
        lat, lng = waypoint.location
        return (lng, lat)

    def with_stops(
        self,
        route: RouteResult,
        stops: Sequence[Place],
        locations: Optional[List[str]] = None,
    ) -> RouteResult:
        """
        Replace placeholder waypoints with the resolved places

        Args:
            route: Route returned by the builder
            stops: Places in visiting order
            locations: Display names; defaults to the stop names

        Returns:
            A new RouteResult sharing the route geometry
        """
        return route.model_copy(
            update={
                "waypoints": [self.to_waypoint(place) for place in stops],
                "locations": list(locations) if locations is not None else [p.name for p in stops],
            }
        )

    def with_waypoints(
        self,
        route: RouteResult,
        waypoints: Sequence[RouteWaypoint],
        locations: Sequence[str],
    ) -> RouteResult:
        return route.model_copy(update={"waypoints": list(waypoints), "locations": list(locations)})
