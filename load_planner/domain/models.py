"""Immutable domain models for the Load Planner decision core.

All models are frozen dataclasses with slots. Lengths are expressed in
inches and weights in pounds throughout; distances along a route are in
statute miles and money in US dollars.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from .reference import TrailerProfile

LOAD_FIELDS: Tuple[str, ...] = ("length", "width", "height", "weight")


class FitClass(Enum):
    """Classification of a trailer profile for a given load.

    The value is the ranking tier: lower is better. INFEASIBLE profiles
    never appear in a recommendation list.
    """

    LEGAL = 0
    PERMIT_REQUIRED = 1
    ESCORT_REQUIRED = 2
    INFEASIBLE = 3

    @property
    def tier(self) -> int:
        return self.value


class PermitType(Enum):
    """Permit categories triggered by a load on a trailer profile."""

    OVERSIZE_WIDTH = "OVERSIZE_WIDTH"
    OVERSIZE_HEIGHT = "OVERSIZE_HEIGHT"
    OVERSIZE_LENGTH = "OVERSIZE_LENGTH"
    OVERWEIGHT = "OVERWEIGHT"
    SUPERLOAD = "SUPERLOAD"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    @property
    def is_valid(self) -> bool:
        """Check the coordinates are finite and within WGS84 ranges."""
        return (
            math.isfinite(self.latitude)
            and math.isfinite(self.longitude)
            and -90 <= self.latitude <= 90
            and -180 <= self.longitude <= 180
        )


@dataclass(frozen=True, slots=True)
class CargoItem:
    """One physical piece of cargo found in an itemized line.

    Attributes:
        name: Free-text item name as written in the request
        length: Length in inches
        width: Width in inches
        height: Height in inches
        weight: Weight of one piece in pounds
        quantity: Number of identical pieces (at least 1)
        id: Stable identifier in extraction order (``item-1``, ``item-2``...)
        stackable: Placement hint for the visualizer
        fragile: Placement hint for the visualizer
        notes: Free-text placement notes
    """

    name: str
    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    weight: float = 0.0
    quantity: int = 1
    id: str = ""
    stackable: bool = True
    fragile: bool = False
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"Quantity must be at least 1, got {self.quantity}")

    @property
    def total_weight(self) -> float:
        return self.weight * self.quantity


@dataclass(frozen=True, slots=True)
class ParsedLoad:
    """Structured load record produced by extraction.

    Attributes:
        length: Load length in inches, 0 when not found
        width: Load width in inches, 0 when not found
        height: Load height in inches, 0 when not found
        weight: Load weight in pounds, 0 when not found
        items: Itemized cargo in extraction order
        confidence: Deterministic score in [0, 1]
        description: Short cargo description, if one was found
        origin: Pickup location as written, if found
        destination: Delivery location as written, if found
        pickup_date: Raw pickup date string, if found
        delivery_date: Raw delivery date string, if found
        pickup_date_iso: Pickup date as ``YYYY-MM-DD`` when it parses
        delivery_date_iso: Delivery date as ``YYYY-MM-DD`` when it parses
    """

    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    weight: float = 0.0
    items: Tuple[CargoItem, ...] = field(default_factory=tuple)
    confidence: float = 0.0
    description: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    pickup_date: Optional[str] = None
    delivery_date: Optional[str] = None
    pickup_date_iso: Optional[str] = None
    delivery_date_iso: Optional[str] = None

    @classmethod
    def empty(cls) -> ParsedLoad:
        """Return the all-zero load produced when nothing was extracted."""
        return cls()

    @property
    def matched_fields(self) -> Tuple[str, ...]:
        """Names of the required fields that hold a positive value."""
        return tuple(name for name in LOAD_FIELDS if getattr(self, name) > 0)

    @property
    def total_item_weight(self) -> float:
        return sum(item.total_weight for item in self.items)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of checking a parsed load for the required fields."""

    missing_fields: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return len(self.missing_fields) == 0


@dataclass(frozen=True, slots=True)
class LimitViolation:
    """A single legal-limit violation measured on one dimension.

    Attributes:
        dimension: One of ``length``, ``width``, ``height``, ``weight``
        measured: The load value compared against the limit
        limit: The legal (no-permit) limit of the trailer profile
    """

    dimension: str
    measured: float
    limit: float

    @property
    def excess(self) -> float:
        return max(0.0, self.measured - self.limit)

    @property
    def relative_excess(self) -> float:
        """Excess expressed as a fraction of the limit."""
        if self.limit <= 0:
            return self.excess
        return self.excess / self.limit

    @property
    def unit(self) -> str:
        return "lbs" if self.dimension == "weight" else "in"


@dataclass(frozen=True, slots=True)
class TruckRecommendation:
    """A ranked trailer/truck configuration for a load.

    Attributes:
        trailer_id: Identifier of the matched trailer profile
        trailer_name: Human-readable profile name
        fit: Classification tier of the profile for this load
        rank: 1-based position in the recommendation list
        total_excess: Sum of relative excesses over every legal limit
        score: 0-100 suitability score used after tier and excess
        violations: Every legal limit the load exceeds on this profile
        permits_required: Permit categories the load triggers
        additional_axles: Axles to add so the weight becomes permittable
        reason: Human-readable summary of the fit
        warnings: One message per violated limit plus escort notes
    """

    trailer_id: str
    trailer_name: str
    fit: FitClass
    rank: int = 0
    total_excess: float = 0.0
    score: int = 0
    violations: Tuple[LimitViolation, ...] = field(default_factory=tuple)
    permits_required: Tuple[PermitType, ...] = field(default_factory=tuple)
    additional_axles: int = 0
    reason: str = ""
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_best_choice(self) -> bool:
        return self.rank == 1

    @property
    def is_legal(self) -> bool:
        return self.fit is FitClass.LEGAL

    def flag(self, dimension: str) -> Optional[LimitViolation]:
        """Return the violation recorded for a dimension, if any."""
        for violation in self.violations:
            if violation.dimension == dimension:
                return violation
        return None


@dataclass(frozen=True, slots=True)
class JurisdictionSegment:
    """Distance travelled within one jurisdiction along a route."""

    code: str
    distance_miles: float


@dataclass(frozen=True, slots=True)
class CargoSpecs:
    """Cargo envelope used for permit pricing.

    Attributes:
        width: Overall width in inches
        height: Overall travel height in inches (cargo plus deck)
        length: Overall length in inches
        gross_weight: Gross vehicle weight in pounds
    """

    width: float
    height: float
    length: float
    gross_weight: float

    @classmethod
    def for_load(
        cls,
        load: ParsedLoad,
        profile: Optional[TrailerProfile] = None,
        tractor_weight: float = 0.0,
    ) -> CargoSpecs:
        """Build the travel envelope of a load carried on a trailer.

        Args:
            load: The extracted load.
            profile: Trailer carrying the load; without one the envelope
                is the bare cargo.
            tractor_weight: Tractor weight added to the gross weight.

        Returns:
            CargoSpecs whose height includes the deck and whose gross
            weight includes the trailer tare and the tractor.
        """
        deck_height = profile.deck_height if profile is not None else 0.0
        tare_weight = profile.tare_weight if profile is not None else 0.0
        return cls(
            width=load.width,
            height=load.height + deck_height,
            length=load.length,
            gross_weight=load.weight + tare_weight + tractor_weight,
        )


@dataclass(frozen=True, slots=True)
class EscortRequirement:
    """Escort vehicles required within one jurisdiction."""

    front: bool = False
    rear: bool = False
    pole_car: bool = False
    police: bool = False

    @property
    def vehicle_count(self) -> int:
        return int(self.front) + int(self.rear)

    @property
    def is_required(self) -> bool:
        return self.front or self.rear or self.pole_car or self.police


@dataclass(frozen=True, slots=True)
class JurisdictionPermit:
    """Permit fee and escort cost for one jurisdiction on a route.

    Attributes:
        code: Jurisdiction code (e.g. ``TX``)
        name: Jurisdiction name, or the code when unknown
        distance_miles: Miles travelled in the jurisdiction
        fee: Permit fee in USD (fallback fee when the schedule is unknown)
        escort: Escort vehicles required for the full distance
        escort_cost: Escort cost in USD
        oversize_required: Whether an oversize permit is needed
        overweight_required: Whether an overweight permit is needed
        is_superload: Whether the load crosses superload thresholds
        used_fallback: Whether the fallback fee was applied
        reasons: Why permits are required
        travel_restrictions: Jurisdiction travel restrictions
    """

    code: str
    name: str
    distance_miles: float
    fee: float
    escort: EscortRequirement = field(default_factory=EscortRequirement)
    escort_cost: float = 0.0
    oversize_required: bool = False
    overweight_required: bool = False
    is_superload: bool = False
    used_fallback: bool = False
    reasons: Tuple[str, ...] = field(default_factory=tuple)
    travel_restrictions: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class PermitBreakdown:
    """Per-jurisdiction fees and escort costs with aggregate totals."""

    jurisdictions: Tuple[JurisdictionPermit, ...] = field(default_factory=tuple)
    total_permit_fees: float = 0.0
    total_escort_cost: float = 0.0
    max_escorts: int = 0
    overall_restrictions: Tuple[str, ...] = field(default_factory=tuple)
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_jurisdictions(
        cls,
        jurisdictions: Tuple[JurisdictionPermit, ...],
        overall_restrictions: Tuple[str, ...] = (),
        warnings: Tuple[str, ...] = (),
    ) -> PermitBreakdown:
        """Build a breakdown whose totals are the per-jurisdiction sums."""
        return cls(
            jurisdictions=jurisdictions,
            total_permit_fees=sum(j.fee for j in jurisdictions),
            total_escort_cost=sum(j.escort_cost for j in jurisdictions),
            max_escorts=max(
                (j.escort.vehicle_count for j in jurisdictions), default=0
            ),
            overall_restrictions=overall_restrictions,
            warnings=warnings,
        )

    @property
    def total_cost(self) -> float:
        return self.total_permit_fees + self.total_escort_cost

    def for_jurisdiction(self, code: str) -> Optional[JurisdictionPermit]:
        for permit in self.jurisdictions:
            if permit.code == code:
                return permit
        return None


@dataclass(frozen=True, slots=True)
class LoadAnalysis:
    """Partial-success result of the "analyze text" use case.

    Attributes:
        parsed_load: The extracted load, always present
        missing_fields: Required fields validation could not find
        recommendations: Ranked trailers, empty when validation failed
        messages: Caller-facing diagnostics
    """

    parsed_load: ParsedLoad
    missing_fields: Tuple[str, ...] = field(default_factory=tuple)
    recommendations: Tuple[TruckRecommendation, ...] = field(default_factory=tuple)
    messages: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_usable(self) -> bool:
        return len(self.missing_fields) == 0

    @property
    def has_feasible_trailer(self) -> bool:
        return len(self.recommendations) > 0

    @property
    def best(self) -> Optional[TruckRecommendation]:
        return self.recommendations[0] if self.recommendations else None


@dataclass(frozen=True, slots=True)
class RoutePricing:
    """Result of the "price a route" use case."""

    segments: Tuple[JurisdictionSegment, ...]
    breakdown: PermitBreakdown
    total_distance_miles: float = 0.0

    @property
    def jurisdiction_codes(self) -> Tuple[str, ...]:
        return tuple(segment.code for segment in self.segments)
