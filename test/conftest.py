"""Deterministic fake providers and a stub resolver shared by the tests."""
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from walkify.config import Settings
from walkify.config.place_types import Category
from walkify.models.place import Place
from walkify.services.map.map_service import (
    DirectionsProvider,
    DirectionsResult,
    GeocodeCandidate,
    GeocodeProvider,
    PoiProvider,
)

# Kyiv, Maidan Nezalezhnosti, (lng, lat)
ORIGIN = (30.5234, 50.4501)

# Metres per second used to derive fake walking durations
WALKING_SPEED = 1.25


def candidate(name, lng, lat, provider="nominatim", categories=(), place_type="") -> GeocodeCandidate:
    return GeocodeCandidate(
        name=name,
        coordinates=(lng, lat),
        provider=provider,
        categories=tuple(categories),
        place_type=place_type,
    )


def place(name, lng, lat, category=Category.CUSTOM) -> Place:
    return Place(name=name, coordinates=(lng, lat), category=category, provenance="nominatim")


class FakeGeocoder(GeocodeProvider):
    def __init__(self, results: Optional[Dict[str, List[GeocodeCandidate]]] = None, error: Exception = None):
        self.results = results or {}
        self.error = error
        self.calls: List[Tuple[str, Tuple[float, float, float, float]]] = []

    async def search(self, query, viewbox, limit=10):
        self.calls.append((query, viewbox))
        if self.error is not None:
            raise self.error
        return list(self.results.get(query, []))


class FakePoiProvider(PoiProvider):
    def __init__(self, results: Optional[Dict[str, List[GeocodeCandidate]]] = None, error: Exception = None):
        self.results = results or {}
        self.error = error
        self.calls: List[Tuple[str, Tuple[float, float]]] = []

    async def search(self, query, proximity, limit=10):
        self.calls.append((query, proximity))
        if self.error is not None:
            raise self.error
        return list(self.results.get(query, []))


class FakeDirections(DirectionsProvider):
    """Straight-line walking paths.

    Distance comes from ``distances_m`` (one per call) when given, otherwise
    ``base_m + per_stop_m * number_of_waypoints``.
    """

    def __init__(
        self,
        distances_m: Sequence[float] = (),
        base_m: float = 1000.0,
        per_stop_m: float = 0.0,
        steps: int = 10,
        no_route_on: Sequence[int] = (),
        error: Exception = None,
    ):
        self.distances_m = list(distances_m)
        self.base_m = base_m
        self.per_stop_m = per_stop_m
        self.steps = steps
        self.no_route_on = set(no_route_on)
        self.error = error
        self.calls: List[List[Tuple[float, float]]] = []

    async def walking_route(self, coordinates):
        self.calls.append(list(coordinates))
        if self.error is not None:
            raise self.error
        if len(self.calls) in self.no_route_on:
            return None

        if self.distances_m:
            distance = self.distances_m.pop(0)
        else:
            distance = self.base_m + self.per_stop_m * (len(coordinates) - 2)

        geometry = [tuple(coordinates[0])]
        for start, end in zip(coordinates, coordinates[1:]):
            for i in range(1, self.steps + 1):
                t = i / self.steps
                geometry.append((start[0] + (end[0] - start[0]) * t, start[1] + (end[1] - start[1]) * t))
        return DirectionsResult(geometry=geometry, distance_m=distance, duration_s=distance / WALKING_SPEED)


class StubResolver:
    """Resolver double: names map to places, categories hand out places in order."""

    def __init__(
        self,
        by_name: Optional[Dict[str, Place]] = None,
        by_category: Optional[Dict[Category, List[Place]]] = None,
    ):
        self.by_name = by_name or {}
        self.by_category = by_category or {}
        self.name_calls = []
        self.nearest_calls = []
        self.nearby_calls = []
        self._served = defaultdict(int)

    async def find_place_by_name(self, name, origin):
        self.name_calls.append((name, origin))
        return self.by_name.get(name)

    async def find_nearest_place(self, origin, category, radius_m=5000):
        self.nearest_calls.append((origin, category, radius_m))
        places = self.by_category.get(category, [])
        index = self._served[category]
        if index >= len(places):
            return None
        self._served[category] += 1
        return places[index]

    async def find_places_nearby(self, origin, category, radius_m=5000, limit=1):
        self.nearby_calls.append((origin, category, radius_m, limit))
        return list(self.by_category.get(category, []))[:limit]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(mapbox_token="test-token", _env_file=None)
