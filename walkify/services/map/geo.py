"""Small spherical-geometry helpers shared by the resolver and the route extender."""
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

EARTH_RADIUS_KM = 6371.0
# ~100 m at mid latitudes; two points closer than this are the same stop
SAME_SPOT_DEGREES = 0.001


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Calculate distance between two points (Haversine formula)"""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_lng_lat_km(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Haversine distance for two (lng, lat) pairs."""
    return haversine_km(a[1], a[0], b[1], b[0])


def is_same_spot(a: Tuple[float, float], b: Tuple[float, float]) -> bool:
    """Both coordinates within SAME_SPOT_DEGREES; axis order only has to match."""
    return abs(a[0] - b[0]) < SAME_SPOT_DEGREES and abs(a[1] - b[1]) < SAME_SPOT_DEGREES


def sample_along(points: Sequence[Tuple[float, float]], count: int) -> List[Tuple[float, float]]:
    """``count`` evenly spaced interior points, interpolated between vertices.

    Spacing follows the vertex index, so a two-vertex line still yields samples.
    """
    if count <= 0 or len(points) < 2:
        return []
    return [_interpolate(points, (i + 1) / (count + 1)) for i in range(count)]


def _interpolate(points: Sequence[Tuple[float, float]], fraction: float) -> Tuple[float, float]:
    position = fraction * (len(points) - 1)
    index = min(int(position), len(points) - 2)
    t = position - index
    (x0, y0), (x1, y1) = points[index], points[index + 1]
    return (x0 + (x1 - x0) * t, y0 + (y1 - y0) * t)


def point_at_fraction(points: Sequence[Tuple[float, float]], fraction: float) -> Tuple[float, float]:
    """Point at ``fraction`` of the polyline, by vertex index."""
    if not points:
        raise ValueError("empty polyline")
    index = min(len(points) - 1, max(0, int(len(points) * fraction)))
    return points[index]


def bounding_box(center: Tuple[float, float], delta_degrees: float) -> Tuple[float, float, float, float]:
    """(min_lng, min_lat, max_lng, max_lat) around a (lng, lat) center."""
    lng, lat = center
    return (lng - delta_degrees, lat - delta_degrees, lng + delta_degrees, lat + delta_degrees)
