from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from walkify.config.place_types import Category

# (longitude, latitude), the order every geo provider expects
LngLat = Tuple[float, float]


class Center(BaseModel):
    lat: float
    lng: float

    def to_lng_lat(self) -> LngLat:
        return (self.lng, self.lat)


class RouteMode(str, Enum):
    POINT_TO_POINT = "point_to_point"
    EXPLORATION = "exploration"


class RouteRequest(BaseModel):
    """Structured walk request extracted from free text."""

    destination_category: Optional[Category] = None
    destination_name: Optional[str] = None
    waypoint_categories: List[Category] = []
    waypoint_names: List[str] = []
    target_distance_km: Optional[float] = None
    is_exploration: bool = False
    desired_stop_count: int = Field(default=6, ge=2, le=10)

    @model_validator(mode="after")
    def _single_destination(self) -> "RouteRequest":
        if self.destination_category is not None and self.destination_name:
            raise ValueError("destination_name and destination_category are mutually exclusive")
        return self


class TextRouteQuery(BaseModel):
    text: str
    origin: Center
    route_mode: Optional[RouteMode] = None


class ParseQuery(BaseModel):
    text: str


class NearbyPoisQuery(BaseModel):
    center: Center
    categories: List[Category] = []
    radius_m: int = 3000
    limit_per_type: int = Field(default=1, ge=1, le=10)
