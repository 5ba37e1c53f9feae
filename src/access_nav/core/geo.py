"""Great-circle distance helpers."""

import math
from typing import Sequence

from ..models import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance in meters between two points."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.lon - a.lon)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Rounding can push h just outside [0, 1] near antipodes
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def path_length(path: Sequence[GeoPoint]) -> float:
    """Sum of consecutive-point distances along a path."""
    return sum(distance(path[i], path[i + 1]) for i in range(len(path) - 1))


def offset(origin: GeoPoint, d_lat: float, d_lon: float) -> GeoPoint:
    """Shift a point by a number of degrees."""
    return GeoPoint(lat=origin.lat + d_lat, lon=origin.lon + d_lon)
