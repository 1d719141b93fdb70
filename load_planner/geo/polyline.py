"""Encoded polyline decoding.

Routing providers return route geometry in the Google encoded polyline
format: zig-zag encoded coordinate deltas in 5-bit chunks offset by 63.
"""

from __future__ import annotations

from typing import List, Tuple

from ..domain.models import GeoPoint


def _read_value(encoded: str, index: int) -> Tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise ValueError(f"Truncated polyline at position {index}")
        byte = ord(encoded[index]) - 63
        if byte < 0 or byte > 63:
            raise ValueError(f"Invalid polyline character {encoded[index]!r} at position {index}")
        index += 1
        result |= (byte & 0x1F) << shift
        shift += 5
        if byte < 0x20:
            break
    delta = ~(result >> 1) if result & 1 else result >> 1
    return delta, index


def decode_polyline(encoded: str, precision: int = 5) -> List[GeoPoint]:
    """Decode an encoded polyline into route points.

    Args:
        encoded: The encoded polyline string.
        precision: Decimal digits encoded per coordinate (5 for Google,
            6 for some OSRM/Valhalla outputs).

    Returns:
        The decoded points in route order.

    Raises:
        ValueError: If the string is truncated or holds invalid characters.
    """
    factor = 10**precision
    points: List[GeoPoint] = []
    index = 0
    lat = 0
    lon = 0
    while index < len(encoded):
        delta_lat, index = _read_value(encoded, index)
        delta_lon, index = _read_value(encoded, index)
        lat += delta_lat
        lon += delta_lon
        points.append(GeoPoint(latitude=lat / factor, longitude=lon / factor))
    return points
