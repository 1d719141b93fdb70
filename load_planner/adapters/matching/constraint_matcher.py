"""Constraint-based trailer matcher adapter.

Evaluates a load against every trailer profile, classifies each
profile into a fit tier and ranks the feasible ones:
- Excess over every legal limit, in inches and pounds
- Escort triggers on the travel envelope (cargo height plus deck)
- Axle additions for overweight loads
- A 0-100 suitability score as the last tie-break
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from ...config import MatchingConfig, get_config
from ...domain.models import (
    FitClass,
    LimitViolation,
    ParsedLoad,
    PermitType,
    TruckRecommendation,
)
from ...domain.reference import LoadingMethod, TrailerProfile

_OVERSIZE_PERMITS = {
    "length": PermitType.OVERSIZE_LENGTH,
    "width": PermitType.OVERSIZE_WIDTH,
    "height": PermitType.OVERSIZE_HEIGHT,
    "weight": PermitType.OVERWEIGHT,
}
_DRIVE_ON_CARGO_RE = re.compile(r"excavator|dozer|loader|tractor|tracked", re.IGNORECASE)
_DRIVE_ON_METHODS = (LoadingMethod.DRIVE_ON, LoadingMethod.TILT)

# Height clearance (inches) above which a lower deck is overkill.
OVERKILL_CLEARANCE_IN = 36.0
SNUG_CLEARANCE_IN = 12.0


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.1f}"


@dataclass(frozen=True)
class FitAssessment:
    """Intermediate evaluation of one profile for one load."""

    fit: FitClass
    violations: Tuple[LimitViolation, ...]
    permits: Tuple[PermitType, ...]
    additional_axles: int
    escort_reasons: Tuple[str, ...]
    is_superload: bool
    infeasible_reason: Optional[str] = None

    @property
    def total_excess(self) -> float:
        return sum(v.relative_excess for v in self.violations)


@dataclass
class ConstraintTrailerMatcher:
    """Trailer matcher over a static set of trailer profiles.

    This adapter implements TrailerMatcherPort. The profiles are passed
    in explicitly so the matcher is pure and testable with substitute
    tables.

    Attributes:
        profiles: The trailer profiles to evaluate, in table order
        config: Matching defaults (escort and superload triggers)
    """

    profiles: Sequence[TrailerProfile]
    config: MatchingConfig = field(default_factory=lambda: get_config().matching)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def match(self, load: ParsedLoad) -> List[TruckRecommendation]:
        """Rank the trailer profiles able to carry a load.

        Args:
            load: The extracted load (inches and pounds).

        Returns:
            Recommendations sorted by tier, then total relative excess,
            then score (descending), then table order. Infeasible
            profiles are excluded.
        """
        ranked: List[Tuple[Tuple[int, float, int, int], TruckRecommendation]] = []
        excluded = 0
        for index, profile in enumerate(self.profiles):
            assessment = self.assess(load, profile)
            if assessment.fit is FitClass.INFEASIBLE:
                excluded += 1
                self._logger.debug(
                    "Trailer excluded",
                    extra={
                        "trailer_id": profile.trailer_id,
                        "reason": assessment.infeasible_reason,
                    },
                )
                continue
            recommendation = self._recommend(load, profile, assessment)
            key = (
                assessment.fit.tier,
                recommendation.total_excess,
                -recommendation.score,
                index,
            )
            ranked.append((key, recommendation))

        ranked.sort(key=lambda item: item[0])
        recommendations = [
            replace(recommendation, rank=position)
            for position, (_, recommendation) in enumerate(ranked, start=1)
        ]

        self._logger.info(
            "Trailers matched",
            extra={
                "candidates": len(recommendations),
                "excluded": excluded,
                "best": recommendations[0].trailer_id if recommendations else None,
            },
        )
        return recommendations

    def legal_recommendations(self, load: ParsedLoad) -> List[TruckRecommendation]:
        """Recommendations that need no permit at all."""
        return [r for r in self.match(load) if r.fit is FitClass.LEGAL]

    def best_recommendation(self, load: ParsedLoad) -> Optional[TruckRecommendation]:
        """The top-ranked recommendation, or None when nothing can carry the load."""
        recommendations = self.match(load)
        return recommendations[0] if recommendations else None

    def assess(self, load: ParsedLoad, profile: TrailerProfile) -> FitAssessment:
        """Classify one profile for one load.

        Args:
            load: The extracted load.
            profile: The trailer profile.

        Returns:
            FitAssessment with the tier, violations and permits.
        """
        legal = profile.legal
        violations = tuple(
            LimitViolation(dimension=name, measured=measured, limit=legal.value(name))
            for name, measured in (
                ("length", load.length),
                ("width", load.width),
                ("height", load.height),
                ("weight", load.weight),
            )
            if measured > legal.value(name)
        )

        weight_excess = max(0.0, load.weight - legal.weight)
        axles = profile.axles.axles_needed(weight_excess)
        infeasible_reason = self._infeasible_reason(load, profile, axles)

        travel_height = load.height + profile.deck_height
        thresholds = profile.escort or self.config.default_escort_thresholds()
        escort_reasons = tuple(
            reason
            for reason, triggered in (
                (f"width over {_fmt(thresholds.width)} in", load.width > thresholds.width),
                (
                    f"travel height over {_fmt(thresholds.height)} in",
                    travel_height > thresholds.height,
                ),
                (f"length over {_fmt(thresholds.length)} in", load.length > thresholds.length),
            )
            if triggered
        )

        superload = self.config.superload_thresholds()
        gross = load.weight + profile.tare_weight + self.config.tractor_weight_lbs
        is_superload = (
            load.width > superload.width
            or travel_height > superload.height
            or load.length > superload.length
            or gross > superload.weight
        )

        permits = tuple(_OVERSIZE_PERMITS[v.dimension] for v in violations)
        if is_superload:
            permits += (PermitType.SUPERLOAD,)

        if infeasible_reason is not None:
            fit = FitClass.INFEASIBLE
        elif escort_reasons:
            fit = FitClass.ESCORT_REQUIRED
        elif violations or is_superload:
            fit = FitClass.PERMIT_REQUIRED
        else:
            fit = FitClass.LEGAL

        return FitAssessment(
            fit=fit,
            violations=violations,
            permits=permits,
            additional_axles=axles or 0,
            escort_reasons=escort_reasons,
            is_superload=is_superload,
            infeasible_reason=infeasible_reason,
        )

    def _infeasible_reason(
        self,
        load: ParsedLoad,
        profile: TrailerProfile,
        axles: Optional[int],
    ) -> Optional[str]:
        if load.length > profile.max_length:
            return f"length exceeds {_fmt(profile.max_length)} in maximum"
        if load.width > profile.max_width:
            return f"width exceeds {_fmt(profile.max_width)} in maximum"
        if load.height > profile.max_height:
            return f"height exceeds {_fmt(profile.max_height)} in maximum"
        if axles is None:
            return f"weight exceeds {_fmt(profile.max_weight)} lbs reachable with added axles"
        return None

    def _recommend(
        self,
        load: ParsedLoad,
        profile: TrailerProfile,
        assessment: FitAssessment,
    ) -> TruckRecommendation:
        warnings: List[str] = []
        for violation in assessment.violations:
            warnings.append(
                f"{violation.dimension.capitalize()} {_fmt(violation.measured)} {violation.unit} "
                f"exceeds legal {_fmt(violation.limit)} {violation.unit} "
                f"by {_fmt(violation.excess)} {violation.unit}"
            )
        if assessment.additional_axles:
            plural = "s" if assessment.additional_axles > 1 else ""
            warnings.append(
                f"Requires {assessment.additional_axles} additional axle{plural} to carry the weight"
            )
        if assessment.escort_reasons:
            warnings.append(
                "Escort vehicles required: " + ", ".join(assessment.escort_reasons)
            )
        if assessment.is_superload:
            warnings.append("Superload: route survey and special permits required")

        return TruckRecommendation(
            trailer_id=profile.trailer_id,
            trailer_name=profile.name,
            fit=assessment.fit,
            total_excess=round(assessment.total_excess, 6),
            score=self.score(load, profile, assessment),
            violations=assessment.violations,
            permits_required=assessment.permits,
            additional_axles=assessment.additional_axles,
            reason=self._reason(load, profile, assessment),
            warnings=tuple(warnings),
        )

    def score(self, load: ParsedLoad, profile: TrailerProfile, assessment: FitAssessment) -> int:
        """Suitability score in [0, 100], higher is better."""
        score = 100.0
        for violation in assessment.violations:
            if violation.dimension == "height":
                score -= min(40.0, violation.excess / 12.0 * 10)
            elif violation.dimension == "width":
                score -= min(25.0, violation.excess / 12.0 * 5)
            elif violation.dimension == "weight":
                score -= min(30.0, violation.excess / violation.limit * 100)

        clearance = profile.legal.height - load.height
        if clearance > OVERKILL_CLEARANCE_IN:
            score -= 10
        score -= 5 * len(assessment.permits)
        if 0 <= clearance <= SNUG_CLEARANCE_IN:
            score += 5

        cargo_text = " ".join(
            [load.description or ""] + [item.name for item in load.items]
        )
        if profile.loading_method in _DRIVE_ON_METHODS and _DRIVE_ON_CARGO_RE.search(cargo_text):
            score += 10

        return int(max(0, min(100, round(score))))

    def _reason(
        self,
        load: ParsedLoad,
        profile: TrailerProfile,
        assessment: FitAssessment,
    ) -> str:
        if assessment.fit is FitClass.LEGAL:
            clearance = profile.legal.height - load.height
            return f"Legal load on {profile.name} with {_fmt(clearance)} in height clearance"
        permits = ", ".join(p.value for p in assessment.permits)
        if assessment.fit is FitClass.ESCORT_REQUIRED:
            return f"{profile.name} requires escorts and permits: {permits}"
        return f"{profile.name} requires permits: {permits}"
