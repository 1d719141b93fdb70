"""Geometry helpers: great-circle distance, containment tests and polyline decoding."""

from .geometry import (
    EARTH_RADIUS_MILES,
    BoundingBox,
    haversine_miles,
    midpoint,
    path_length_miles,
    point_in_polygon,
    point_in_ring,
)
from .polyline import decode_polyline

__all__ = [
    "EARTH_RADIUS_MILES",
    "BoundingBox",
    "haversine_miles",
    "midpoint",
    "path_length_miles",
    "point_in_polygon",
    "point_in_ring",
    "decode_polyline",
]
