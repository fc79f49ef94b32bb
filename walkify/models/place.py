"""
Resolved real-world places
"""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from walkify.config.place_types import Category


class Place(BaseModel):
    """A point resolved by one of the geo providers. Coordinates are (lng, lat)."""

    model_config = ConfigDict(frozen=True)

    name: str
    coordinates: Tuple[float, float]
    category: Category = Category.CUSTOM
    address: Optional[str] = None
    rating: Optional[float] = None
    rating_count: Optional[int] = None
    photo_url: Optional[str] = None
    description: Optional[str] = None
    provenance: str = "unknown"
    external_id: Optional[str] = None

    @property
    def lng(self) -> float:
        return self.coordinates[0]

    @property
    def lat(self) -> float:
        return self.coordinates[1]
