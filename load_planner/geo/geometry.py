"""Plane and sphere geometry helpers for route decomposition.

Coordinates are decimal degrees. Rings follow GeoJSON order, i.e.
(longitude, latitude) vertex tuples.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from ..domain.models import GeoPoint
from ..domain.reference import PolygonShape, Ring

EARTH_RADIUS_MILES = 3958.8


def haversine_miles(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in statute miles between two points.

    Uses the Haversine formula on a sphere of radius 3958.8 mi.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_MILES * c


def path_length_miles(points: Sequence[GeoPoint]) -> float:
    """Sum of consecutive-point haversine distances."""
    return sum(haversine_miles(a, b) for a, b in zip(points, points[1:]))


def midpoint(a: GeoPoint, b: GeoPoint) -> GeoPoint:
    """Arithmetic midpoint, adequate for closely spaced route points."""
    return GeoPoint(
        latitude=(a.latitude + b.latitude) / 2,
        longitude=(a.longitude + b.longitude) / 2,
    )


@dataclass(frozen=True, slots=True)
class BoundingBox:
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @classmethod
    def of_ring(cls, ring: Iterable[Tuple[float, float]]) -> BoundingBox:
        lons, lats = zip(*ring)
        return cls(min(lons), min(lats), max(lons), max(lats))

    def contains(self, lon: float, lat: float) -> bool:
        return self.min_lon <= lon <= self.max_lon and self.min_lat <= lat <= self.max_lat


def point_in_ring(lon: float, lat: float, ring: Ring) -> bool:
    """Even-odd ray casting test; concave rings are handled."""
    inside = False
    count = len(ring)
    j = count - 1
    for i in range(count):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > lat) != (yj > lat):
            crossing = (xj - xi) * (lat - yi) / (yj - yi) + xi
            if lon < crossing:
                inside = not inside
        j = i
    return inside


def point_in_polygon(lon: float, lat: float, polygon: PolygonShape) -> bool:
    """Inside the exterior ring and outside every hole."""
    if not point_in_ring(lon, lat, polygon.exterior):
        return False
    return not any(point_in_ring(lon, lat, hole) for hole in polygon.holes)
