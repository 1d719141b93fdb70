"""Schedule-based permit and escort pricer adapter.

Prices every jurisdiction of a route from its static fee schedule:
- Oversize: base fee plus every dimension surcharge whose threshold is met
- Overweight: base, per-mile and ton-mile fees, weight brackets, extra-legal fee
- Escorts: per-jurisdiction rules (or shared defaults), priced per mile,
  plus a flat police escort charge where the jurisdiction requires one
- Unknown jurisdictions: flat fallback fee and a warning
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Sequence, Tuple

from ...config import PermitConfig, get_config
from ...domain.models import (
    CargoSpecs,
    EscortRequirement,
    JurisdictionPermit,
    JurisdictionSegment,
    PermitBreakdown,
)
from ...domain.reference import (
    DimensionLimits,
    EscortRules,
    FeeSchedule,
    OversizeSchedule,
    OverweightSchedule,
    SuperloadThresholds,
)

POUNDS_PER_TON = 2000.0

_AGGREGATE_RESTRICTIONS = (
    ("night", "Daytime travel only in most states"),
    ("weekend", "Some states restrict weekend travel"),
    ("holiday", "Holiday travel restrictions in effect"),
)


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.1f}"


def oversize_fee(schedule: OversizeSchedule, cargo: CargoSpecs) -> float:
    """Base fee plus every surcharge whose threshold the cargo reaches."""
    fee = schedule.base_fee
    for surcharge in schedule.surcharges:
        if getattr(cargo, surcharge.dimension) >= surcharge.threshold:
            fee += surcharge.fee
    return fee


def overweight_fee(schedule: OverweightSchedule, cargo: CargoSpecs, miles: float) -> float:
    """Overweight permit fee for the miles driven in one jurisdiction.

    The first weight bracket covering the gross weight raises the fee
    to at least ``base + bracket fee``; the extra-legal fee is added
    per trip.
    """
    fee = schedule.base_fee
    if miles > 0:
        fee += schedule.per_mile_fee * miles
        fee += schedule.ton_mile_fee * (cargo.gross_weight / POUNDS_PER_TON) * miles
    for bracket in schedule.weight_brackets:
        if cargo.gross_weight <= bracket.up_to:
            fee = max(fee, schedule.base_fee + bracket.fee)
            break
    return fee + schedule.extra_legal_fee


def escort_requirement(rules: EscortRules, cargo: CargoSpecs) -> EscortRequirement:
    """Escorts required by one jurisdiction's rules.

    One escort rides in front; two add a rear escort. A pole car leads
    when the travel height reaches the pole-car threshold. A police
    escort is only required where the rules set a police threshold.
    """
    count = 0
    if cargo.width >= rules.two_escort_width:
        count = 2
    elif cargo.width >= rules.single_escort_width:
        count = 1
    if cargo.length >= rules.two_escort_length:
        count = max(count, 2)
    elif cargo.length >= rules.single_escort_length:
        count = max(count, 1)
    return EscortRequirement(
        front=count >= 1,
        rear=count >= 2,
        pole_car=cargo.height >= rules.pole_car_height,
        police=(
            rules.police_escort_width is not None and cargo.width >= rules.police_escort_width
        )
        or (
            rules.police_escort_height is not None
            and cargo.height >= rules.police_escort_height
        ),
    )


def is_superload(thresholds: SuperloadThresholds, cargo: CargoSpecs) -> bool:
    return (
        cargo.width >= thresholds.width
        or cargo.height >= thresholds.height
        or cargo.length >= thresholds.length
        or cargo.gross_weight >= thresholds.weight
    )


@dataclass
class SchedulePermitPricer:
    """Permit pricer over static per-jurisdiction fee schedules.

    This adapter implements PermitPricerPort. Schedules are passed in
    explicitly so any jurisdiction table can be substituted.

    Attributes:
        schedules: Fee schedules keyed by jurisdiction code
        config: Fallback fee, escort rates and shared default rules
    """

    schedules: Mapping[str, FeeSchedule]
    config: PermitConfig = field(default_factory=lambda: get_config().permits)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def price(
        self,
        segments: Sequence[JurisdictionSegment],
        cargo: CargoSpecs,
    ) -> PermitBreakdown:
        """Price the permits and escorts of a route.

        Args:
            segments: Per-jurisdiction distances in miles.
            cargo: Travel envelope (inches) and gross weight (pounds).

        Returns:
            PermitBreakdown whose totals are the per-jurisdiction sums.
        """
        permits: List[JurisdictionPermit] = []
        warnings: List[str] = []

        for segment in segments:
            schedule = self.schedules.get(segment.code.upper())
            if schedule is None:
                permit = self._price_unknown(segment, cargo)
                warnings.append(
                    f"No fee schedule for jurisdiction {segment.code}; "
                    f"applied fallback fee ${permit.fee:,.2f}"
                )
                self._logger.warning(
                    "Fallback permit fee applied",
                    extra={"jurisdiction": segment.code, "fee": permit.fee},
                )
            else:
                permit = self.price_jurisdiction(schedule, segment, cargo)
            if permit.is_superload:
                warnings.append(
                    f"{permit.name} requires a superload permit; "
                    "additional routing and timing restrictions apply"
                )
            permits.append(permit)

        two_escorts = [p.code for p in permits if p.escort.vehicle_count >= 2]
        if two_escorts:
            warnings.append(
                f"Two escorts required in {', '.join(two_escorts)}; coordinate timing carefully"
            )
        police = [p.code for p in permits if p.escort.police]
        if police:
            warnings.append(
                f"Police escort required in {', '.join(police)}; schedule in advance"
            )
        total_fees = sum(p.fee for p in permits)
        if total_fees > self.config.high_cost_threshold:
            warnings.append(f"High permit costs expected (${total_fees:,.2f})")

        breakdown = PermitBreakdown.from_jurisdictions(
            tuple(permits),
            overall_restrictions=self._aggregate_restrictions(permits),
            warnings=tuple(warnings),
        )

        self._logger.info(
            "Permits priced",
            extra={
                "jurisdictions": len(permits),
                "total_permit_fees": breakdown.total_permit_fees,
                "total_escort_cost": breakdown.total_escort_cost,
            },
        )
        return breakdown

    def price_jurisdiction(
        self,
        schedule: FeeSchedule,
        segment: JurisdictionSegment,
        cargo: CargoSpecs,
    ) -> JurisdictionPermit:
        """Price one jurisdiction with a known fee schedule.

        Args:
            schedule: The jurisdiction's fee schedule.
            segment: Miles driven in the jurisdiction.
            cargo: Travel envelope and gross weight.

        Returns:
            JurisdictionPermit with the fee rounded to cents.
        """
        limits = schedule.legal_limits or self.config.default_legal_limits()
        reasons, oversize, overweight = self._violations(limits, cargo)

        fee = 0.0
        if oversize:
            fee += oversize_fee(schedule.oversize, cargo)
        if overweight:
            fee += overweight_fee(schedule.overweight, cargo, segment.distance_miles)

        superload = schedule.superload is not None and is_superload(schedule.superload, cargo)
        if superload:
            reasons.append("Load qualifies as superload - special routing required")

        rules = schedule.escort_rules or self.config.default_escort_rules()
        escort = escort_requirement(rules, cargo)
        return JurisdictionPermit(
            code=schedule.code,
            name=schedule.name,
            distance_miles=segment.distance_miles,
            fee=round(fee, 2),
            escort=escort,
            escort_cost=self.escort_cost(
                escort, segment.distance_miles, police_fee=rules.police_escort_fee
            ),
            oversize_required=oversize,
            overweight_required=overweight,
            is_superload=superload,
            reasons=tuple(reasons),
            travel_restrictions=schedule.travel_restrictions,
        )

    def _price_unknown(self, segment: JurisdictionSegment, cargo: CargoSpecs) -> JurisdictionPermit:
        reasons, oversize, overweight = self._violations(self.config.default_legal_limits(), cargo)
        reasons.append("No fee schedule on file; conservative flat fee applied")
        escort = escort_requirement(self.config.default_escort_rules(), cargo)
        return JurisdictionPermit(
            code=segment.code,
            name=segment.code,
            distance_miles=segment.distance_miles,
            fee=round(self.config.fallback_fee, 2),
            escort=escort,
            escort_cost=self.escort_cost(escort, segment.distance_miles),
            oversize_required=oversize,
            overweight_required=overweight,
            used_fallback=True,
            reasons=tuple(reasons),
        )

    def _violations(
        self,
        limits: DimensionLimits,
        cargo: CargoSpecs,
    ) -> Tuple[List[str], bool, bool]:
        reasons: List[str] = []
        for dimension in ("width", "height", "length"):
            measured = getattr(cargo, dimension)
            limit = limits.value(dimension)
            if measured > limit:
                reasons.append(
                    f"{dimension.capitalize()} {_fmt(measured)} in exceeds {_fmt(limit)} in limit"
                )
        oversize = bool(reasons)
        overweight = cargo.gross_weight > limits.weight
        if overweight:
            reasons.append(
                f"Weight {_fmt(cargo.gross_weight)} lbs exceeds {_fmt(limits.weight)} lb limit"
            )
        return reasons, oversize, overweight

    def escort_cost(
        self,
        escort: EscortRequirement,
        miles: float,
        police_fee: float = 0.0,
    ) -> float:
        """Escort cost for the miles driven under one escort requirement."""
        cost = escort.vehicle_count * self.config.escort_rate_per_mile * miles
        if escort.pole_car and not escort.front:
            cost += self.config.pole_car_rate_per_mile * miles
        if escort.police:
            cost += police_fee
        return round(cost, 2)

    @staticmethod
    def _aggregate_restrictions(permits: Sequence[JurisdictionPermit]) -> Tuple[str, ...]:
        restrictions = [r for p in permits for r in p.travel_restrictions]
        overall: List[str] = []
        for keyword, summary in _AGGREGATE_RESTRICTIONS:
            if any(keyword in r.lower() for r in restrictions):
                overall.append(summary)
        for restriction in restrictions:
            lowered = restriction.lower()
            if any(keyword in lowered for keyword, _ in _AGGREGATE_RESTRICTIONS):
                continue
            if restriction not in overall:
                overall.append(restriction)
        return tuple(overall)
