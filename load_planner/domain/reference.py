"""Static reference-table records.

Trailer profiles, jurisdiction fee schedules and jurisdiction boundaries
are configuration data: they are loaded once by a repository and handed
to the engines, which never mutate them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Tuple

# Ring vertices are (longitude, latitude), matching GeoJSON order.
Ring = Tuple[Tuple[float, float], ...]


class TrailerCategory(Enum):
    FLATBED = auto()
    STEP_DECK = auto()
    RGN = auto()
    LOWBOY = auto()
    DOUBLE_DROP = auto()
    LANDOLL = auto()
    CONESTOGA = auto()
    STRETCH = auto()
    SPECIALIZED = auto()


class LoadingMethod(Enum):
    CRANE = auto()
    FORKLIFT = auto()
    DRIVE_ON = auto()
    TILT = auto()


@dataclass(frozen=True, slots=True)
class DimensionLimits:
    """Length/width/height limits in inches and a weight limit in pounds."""

    length: float
    width: float
    height: float
    weight: float

    def value(self, dimension: str) -> float:
        return getattr(self, dimension)


@dataclass(frozen=True, slots=True)
class AxleConfiguration:
    """Axle metadata used to decide whether extra axles make a load permittable.

    Attributes:
        axle_count: Axles on the trailer as configured
        max_axle_count: Axles the trailer can be fitted with (jeeps, boosters)
        lbs_per_added_axle: Permittable cargo capacity gained per added axle
    """

    axle_count: int = 2
    max_axle_count: int = 2
    lbs_per_added_axle: float = 0.0

    @property
    def addable_axles(self) -> int:
        return max(0, self.max_axle_count - self.axle_count)

    def max_weight(self, legal_weight: float) -> float:
        """Absolute cargo weight reachable by adding every allowed axle."""
        return legal_weight + self.addable_axles * self.lbs_per_added_axle

    def axles_needed(self, excess_weight: float) -> Optional[int]:
        """Number of added axles covering an overweight excess.

        Returns:
            0 when there is no excess, the axle count when it is
            reachable, or None when no axle addition can carry it.
        """
        if excess_weight <= 0:
            return 0
        if self.lbs_per_added_axle <= 0:
            return None
        needed = int(-(-excess_weight // self.lbs_per_added_axle))
        if needed > self.addable_axles:
            return None
        return needed


@dataclass(frozen=True, slots=True)
class EscortThresholds:
    """Envelope dimensions (inches) above which a trailer move needs escorts.

    Height is compared with the travel height (cargo plus deck).
    """

    width: float = 144.0
    height: float = 174.0
    length: float = 960.0


@dataclass(frozen=True, slots=True)
class TrailerProfile:
    """One trailer/truck configuration.

    Attributes:
        trailer_id: Stable identifier (e.g. ``flatbed-48``)
        name: Human-readable name
        category: Trailer family
        loading_method: How cargo is usually loaded
        deck_height: Deck height above the road, inches
        deck_length: Usable deck length, inches
        deck_width: Usable deck width, inches
        tare_weight: Empty trailer weight, pounds
        legal: Permit-free cargo limits
        max_length: Permittable cargo length, inches
        max_width: Permittable cargo width, inches
        max_height: Permittable cargo height, inches
        axles: Axle configuration metadata
        escort: Escort triggers, or None to use the engine defaults
    """

    trailer_id: str
    name: str
    legal: DimensionLimits
    max_length: float
    max_width: float
    max_height: float
    category: TrailerCategory = TrailerCategory.FLATBED
    loading_method: LoadingMethod = LoadingMethod.CRANE
    deck_height: float = 60.0
    deck_length: float = 576.0
    deck_width: float = 102.0
    tare_weight: float = 15000.0
    axles: AxleConfiguration = field(default_factory=AxleConfiguration)
    escort: Optional[EscortThresholds] = None

    @property
    def max_weight(self) -> float:
        return self.axles.max_weight(self.legal.weight)


@dataclass(frozen=True, slots=True)
class DimensionSurcharge:
    """Oversize surcharge added when a dimension reaches a threshold (inches)."""

    dimension: str
    threshold: float
    fee: float


@dataclass(frozen=True, slots=True)
class WeightBracket:
    """Overweight bracket: gross weights up to ``up_to`` pounds pay ``fee``."""

    up_to: float
    fee: float


@dataclass(frozen=True, slots=True)
class OversizeSchedule:
    base_fee: float = 0.0
    surcharges: Tuple[DimensionSurcharge, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class OverweightSchedule:
    base_fee: float = 0.0
    per_mile_fee: float = 0.0
    ton_mile_fee: float = 0.0
    weight_brackets: Tuple[WeightBracket, ...] = field(default_factory=tuple)
    extra_legal_fee: float = 0.0


@dataclass(frozen=True, slots=True)
class EscortRules:
    """Jurisdiction escort rules, inches.

    Attributes:
        single_escort_width: Width requiring one (front) escort
        two_escort_width: Width requiring front and rear escorts
        pole_car_height: Height requiring a pole car
        single_escort_length: Length requiring one escort
        two_escort_length: Length requiring two escorts
        police_escort_width: Width requiring a police escort, if any
        police_escort_height: Height requiring a police escort, if any
        police_escort_fee: Flat police escort charge in USD
    """

    single_escort_width: float = 144.0
    two_escort_width: float = 192.0
    pole_car_height: float = 186.0
    single_escort_length: float = 1200.0
    two_escort_length: float = 1440.0
    police_escort_width: Optional[float] = None
    police_escort_height: Optional[float] = None
    police_escort_fee: float = 0.0


@dataclass(frozen=True, slots=True)
class SuperloadThresholds:
    width: float
    height: float
    length: float
    weight: float


@dataclass(frozen=True, slots=True)
class FeeSchedule:
    """Permit fee schedule of one jurisdiction.

    A schedule without escort rules shares the engine defaults.
    """

    code: str
    name: str
    legal_limits: Optional[DimensionLimits] = None
    oversize: OversizeSchedule = field(default_factory=OversizeSchedule)
    overweight: OverweightSchedule = field(default_factory=OverweightSchedule)
    escort_rules: Optional[EscortRules] = None
    superload: Optional[SuperloadThresholds] = None
    travel_restrictions: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class PolygonShape:
    """A polygon with an exterior ring and optional holes."""

    exterior: Ring
    holes: Tuple[Ring, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class JurisdictionBoundary:
    """Boundary of one jurisdiction, possibly made of several polygons (exclaves)."""

    code: str
    name: str
    polygons: Tuple[PolygonShape, ...]
