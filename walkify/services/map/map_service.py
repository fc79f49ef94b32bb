from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class GeocodeCandidate:
    """Provider-neutral search hit. Coordinates are (lng, lat)."""

    name: str
    coordinates: Tuple[float, float]
    provider: str
    address: Optional[str] = None
    external_id: Optional[str] = None
    categories: Tuple[str, ...] = field(default_factory=tuple)
    place_type: str = ""


@dataclass(frozen=True)
class DirectionsResult:
    """Walking path between ordered coordinates."""

    geometry: List[Tuple[float, float]]  # (lng, lat)
    distance_m: float
    duration_s: float


class GeocodeProvider(ABC):
    """Free-text geocoding restricted to a bounding box"""

    @abstractmethod
    async def search(
        self,
        query: str,
        viewbox: Tuple[float, float, float, float],
        limit: int = 10,
    ) -> List[GeocodeCandidate]:
        """Search places matching ``query`` inside (min_lng, min_lat, max_lng, max_lat)"""
        pass


class PoiProvider(ABC):
    """Commercial geocoding/POI search biased towards a point"""

    @abstractmethod
    async def search(
        self,
        query: str,
        proximity: Tuple[float, float],
        limit: int = 10,
    ) -> List[GeocodeCandidate]:
        """Search places matching ``query`` ranked by closeness to ``proximity`` (lng, lat)"""
        pass


class DirectionsProvider(ABC):
    """Walking directions"""

    @abstractmethod
    async def walking_route(
        self, coordinates: Sequence[Tuple[float, float]]
    ) -> Optional[DirectionsResult]:
        """Get a walking path through ordered (lng, lat) coordinates

        Returns:
            DirectionsResult, or None when the provider finds no path
        """
        pass
