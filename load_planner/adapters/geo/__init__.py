"""Geo adapters - Implementations of the boundary resolver port.

Available implementations:
- PolygonBoundaryResolver: Midpoint containment against jurisdiction polygons
"""

from .polygon_resolver import UNMAPPED_CODE, PolygonBoundaryResolver

__all__ = ["PolygonBoundaryResolver", "UNMAPPED_CODE"]
