"""Permit ports - Abstractions for permit fee and escort cost pricing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import CargoSpecs, JurisdictionSegment, PermitBreakdown


class PermitPricerPort(Protocol):
    """Port for permit and escort pricing.

    Implementation: adapters/permits/schedule_pricer.py

    Unknown jurisdictions are priced with a fallback fee and a warning;
    pricing never raises for valid numeric input.
    """

    def price(
        self,
        segments: Sequence[JurisdictionSegment],
        cargo: CargoSpecs,
    ) -> PermitBreakdown:
        """Price the permits and escorts of a route.

        Args:
            segments: Per-jurisdiction distances along the route.
            cargo: Travel envelope and gross weight.

        Returns:
            PermitBreakdown with per-jurisdiction values and totals.
        """
        ...
