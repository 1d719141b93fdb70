"""Route pricing service - The "price a route" use case.

Validates route geometry and cargo at the boundary, then composes the
boundary resolver and the permit pricer.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ..domain.errors import GeometryValidationError, InvalidInputError, LoadPlannerError
from ..domain.models import CargoSpecs, GeoPoint, PermitBreakdown, RoutePricing
from ..geo.polyline import decode_polyline
from ..ports.geo import BoundaryResolverPort
from ..ports.permits import PermitPricerPort


def validate_route(points: Sequence[Any]) -> None:
    """Reject routes that cannot be resolved.

    Raises:
        GeometryValidationError: If there are fewer than two points or a
            point is not a finite, in-range GeoPoint.
    """
    if len(points) < 2:
        raise GeometryValidationError(
            f"A route needs at least 2 points, got {len(points)}",
            point_count=len(points),
        )
    for index, point in enumerate(points):
        if not isinstance(point, GeoPoint):
            raise GeometryValidationError(
                f"Point {index} is not a GeoPoint",
                point_count=len(points),
                bad_index=index,
            )
        try:
            valid = point.is_valid
        except TypeError as e:
            raise GeometryValidationError(
                f"Point {index} has non-numeric coordinates",
                point_count=len(points),
                bad_index=index,
                cause=e,
            )
        if not valid:
            raise GeometryValidationError(
                f"Point {index} has invalid coordinates "
                f"({point.latitude}, {point.longitude})",
                point_count=len(points),
                bad_index=index,
            )


def validate_cargo(cargo: Any) -> None:
    """Reject cargo envelopes with negative or non-finite values.

    Raises:
        InvalidInputError: If cargo is not CargoSpecs or holds a bad value.
    """
    if not isinstance(cargo, CargoSpecs):
        raise InvalidInputError(
            f"Cargo must be CargoSpecs, got {type(cargo).__name__}",
            field_name="cargo",
        )
    for name in ("width", "height", "length", "gross_weight"):
        value = getattr(cargo, name)
        if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
            raise InvalidInputError(
                f"Cargo {name} must be a finite, non-negative number, got {value!r}",
                field_name=name,
            )


def format_permit_summary(breakdown: PermitBreakdown) -> str:
    """Render a permit breakdown as plain text, one line per jurisdiction."""
    lines = ["PERMIT SUMMARY"]
    for permit in breakdown.jurisdictions:
        escorts = []
        if permit.escort.front:
            escorts.append("front")
        if permit.escort.rear:
            escorts.append("rear")
        if permit.escort.pole_car:
            escorts.append("pole car")
        if permit.escort.police:
            escorts.append("police")
        escort_text = ", ".join(escorts) if escorts else "none"
        lines.append(
            f"  {permit.code} ({permit.distance_miles:.1f} mi): "
            f"permit ${permit.fee:,.2f}, escorts {escort_text} "
            f"${permit.escort_cost:,.2f}"
        )
    lines.append(f"Total permit fees: ${breakdown.total_permit_fees:,.2f}")
    lines.append(f"Total escort cost: ${breakdown.total_escort_cost:,.2f}")
    lines.append(f"Total: ${breakdown.total_cost:,.2f}")
    for restriction in breakdown.overall_restrictions:
        lines.append(f"Restriction: {restriction}")
    for warning in breakdown.warnings:
        lines.append(f"Warning: {warning}")
    return "\n".join(lines)


@dataclass
class RoutePricingService:
    """Service pricing permits and escorts along a route.

    Attributes:
        resolver: Splits a route into per-jurisdiction distances
        pricer: Prices permits and escorts per jurisdiction
    """

    resolver: BoundaryResolverPort
    pricer: PermitPricerPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def price(self, points: Sequence[GeoPoint], cargo: CargoSpecs) -> RoutePricing:
        """Price a route given as decoded points.

        Args:
            points: Ordered route points from the routing provider.
            cargo: Travel envelope (inches) and gross weight (pounds).

        Returns:
            RoutePricing with the segments and the permit breakdown.

        Raises:
            GeometryValidationError: If the route geometry is malformed.
            InvalidInputError: If the cargo envelope is malformed.
        """
        validate_route(points)
        validate_cargo(cargo)

        segments = tuple(self.resolver.resolve(points))
        self._logger.info(
            "Route resolved",
            extra={"jurisdictions": [s.code for s in segments]},
        )

        breakdown = self.pricer.price(segments, cargo)
        return RoutePricing(
            segments=segments,
            breakdown=breakdown,
            total_distance_miles=sum(s.distance_miles for s in segments),
        )

    def price_polyline(
        self,
        encoded: str,
        cargo: CargoSpecs,
        precision: int = 5,
    ) -> RoutePricing:
        """Price a route given as an encoded polyline.

        Raises:
            GeometryValidationError: If the polyline cannot be decoded or
                yields a malformed route.
        """
        try:
            points = decode_polyline(encoded, precision=precision)
        except (TypeError, ValueError) as e:
            raise GeometryValidationError("Could not decode route polyline", cause=e)
        return self.price(points, cargo)

    def price_safe(
        self,
        points: Sequence[GeoPoint],
        cargo: CargoSpecs,
    ) -> tuple[Optional[RoutePricing], Optional[str]]:
        """Price a route, returning an error message instead of raising.

        Returns:
            Tuple of (RoutePricing or None, error message or None).
        """
        try:
            return self.price(points, cargo), None
        except GeometryValidationError as e:
            return None, f"Invalid route: {e.message}"
        except InvalidInputError as e:
            return None, f"Invalid cargo: {e.message}"
        except LoadPlannerError as e:
            self._logger.exception("Route pricing failed")
            return None, f"Error: {e}"

    def format_result(self, pricing: RoutePricing) -> str:
        """Format a route pricing as a human-readable summary."""
        header = (
            f"Route: {pricing.total_distance_miles:.1f} mi through "
            f"{', '.join(pricing.jurisdiction_codes) or 'no jurisdictions'}"
        )
        return header + "\n" + format_permit_summary(pricing.breakdown)
