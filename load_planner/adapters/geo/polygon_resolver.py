"""Polygon boundary resolver adapter.

Decomposes a route polyline into per-jurisdiction distances by testing
the midpoint of every consecutive point pair against the jurisdiction
polygons (even-odd ray casting with holes and exclaves) and adding the
haversine length of the pair to that jurisdiction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ...domain.models import GeoPoint, JurisdictionSegment
from ...domain.reference import JurisdictionBoundary, PolygonShape
from ...geo.geometry import BoundingBox, haversine_miles, midpoint, point_in_polygon

UNMAPPED_CODE = "UNMAPPED"


@dataclass
class PolygonBoundaryResolver:
    """Boundary resolver over a static set of jurisdiction polygons.

    This adapter implements BoundaryResolverPort. Bounding boxes are
    computed once; the jurisdiction hit by the previous point pair is
    tested first since consecutive route points rarely change region.

    Attributes:
        boundaries: Jurisdiction boundaries to test against
        unmapped_code: Code used when no point of a route is mapped
    """

    boundaries: Sequence[JurisdictionBoundary]
    unmapped_code: str = UNMAPPED_CODE
    _logger: logging.Logger = field(init=False, repr=False)
    _index: List[List[Tuple[BoundingBox, PolygonShape]]] = field(
        init=False, repr=False, default_factory=list
    )

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._index = [
            [(BoundingBox.of_ring(polygon.exterior), polygon) for polygon in boundary.polygons]
            for boundary in self.boundaries
        ]

    def _contains(self, boundary_index: int, lon: float, lat: float) -> bool:
        return any(
            bbox.contains(lon, lat) and point_in_polygon(lon, lat, polygon)
            for bbox, polygon in self._index[boundary_index]
        )

    def _find(self, lon: float, lat: float, hint: Optional[int] = None) -> Optional[int]:
        if hint is not None and self._contains(hint, lon, lat):
            return hint
        for boundary_index in range(len(self.boundaries)):
            if boundary_index != hint and self._contains(boundary_index, lon, lat):
                return boundary_index
        return None

    def locate(self, point: GeoPoint) -> Optional[str]:
        """Return the code of the jurisdiction containing a point.

        Args:
            point: The point to look up.

        Returns:
            Jurisdiction code, or None when no polygon contains it.
        """
        found = self._find(point.longitude, point.latitude)
        return self.boundaries[found].code if found is not None else None

    def resolve(self, points: Sequence[GeoPoint]) -> List[JurisdictionSegment]:
        """Split a route into per-jurisdiction distances.

        Pairs whose midpoint lies outside every polygon are attributed to
        the last confirmed jurisdiction; pairs before the first confirmed
        jurisdiction go to the first one confirmed later. When no pair is
        ever confirmed the whole distance is reported under the unmapped
        code, so no distance is dropped.

        Args:
            points: Ordered, already decoded route points.

        Returns:
            One segment per jurisdiction in first-encountered order.
        """
        totals: Dict[str, float] = {}
        pending = 0.0
        last_code: Optional[str] = None
        hint: Optional[int] = None
        unmapped_pairs = 0

        for start, end in zip(points, points[1:]):
            distance = haversine_miles(start, end)
            center = midpoint(start, end)
            found = self._find(center.longitude, center.latitude, hint)

            if found is None:
                unmapped_pairs += 1
                if last_code is None:
                    pending += distance
                else:
                    totals[last_code] += distance
                continue

            hint = found
            code = self.boundaries[found].code
            if last_code is None:
                totals[code] = pending
                pending = 0.0
            totals[code] = totals.get(code, 0.0) + distance
            last_code = code

        if last_code is None and len(points) >= 2:
            totals[self.unmapped_code] = pending

        if unmapped_pairs:
            self._logger.warning(
                "Route points outside known jurisdictions",
                extra={"unmapped_pairs": unmapped_pairs, "pairs": max(0, len(points) - 1)},
            )

        segments = [
            JurisdictionSegment(code=code, distance_miles=distance)
            for code, distance in totals.items()
        ]
        self._logger.debug(
            "Route resolved",
            extra={"jurisdictions": [s.code for s in segments], "points": len(points)},
        )
        return segments
