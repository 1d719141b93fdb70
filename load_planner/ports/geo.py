"""Geo ports - Abstractions for route decomposition into jurisdictions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import GeoPoint, JurisdictionSegment


class BoundaryResolverPort(Protocol):
    """Port for jurisdiction boundary resolution.

    Implementation: adapters/geo/polygon_resolver.py
    """

    def resolve(self, points: Sequence[GeoPoint]) -> Sequence[JurisdictionSegment]:
        """Split a route into per-jurisdiction distances.

        Args:
            points: Ordered, already decoded route points.

        Returns:
            One segment per jurisdiction in first-encountered order,
            distances in miles.
        """
        ...

    def locate(self, point: GeoPoint) -> Optional[str]:
        """Return the code of the jurisdiction containing a point, if any.

        Args:
            point: The point to look up.

        Returns:
            Jurisdiction code, or None when the point is unmapped.
        """
        ...
