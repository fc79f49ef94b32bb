"""
Response models for walk route generation
Points and waypoint locations are (lat, lng) for the map UI.
"""
from typing import List, Tuple

from pydantic import BaseModel

from walkify.config.place_types import Category


class RouteWaypoint(BaseModel):
    """Stop along the route"""
    location: Tuple[float, float]  # (lat, lng)
    name: str
    category: Category = Category.CUSTOM
    marker: str = "custom"  # Icon code for the map: park, cafe, shop or custom


class RouteResult(BaseModel):
    """Walkable route with its stops"""
    points: List[Tuple[float, float]] = []  # (lat, lng) path geometry
    waypoints: List[RouteWaypoint] = []
    distance_km: float = 0.0
    estimated_time_minutes: int = 0
    locations: List[str] = []  # Display names in visiting order
