"""Ordered extraction rules for load dimensions and weight.

Every rule scans the whole text and yields candidates; a candidate
records how explicit its unit annotations were, where it occurred and
the specificity rank of the rule that produced it. The winner is picked
by a single deterministic key instead of nested conditionals:

1. complete readings (all three dimensions) before partial ones,
2. more explicit unit annotations before fewer (bare numbers last),
3. later occurrence in the text before earlier ones,
4. higher rule specificity before lower.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .units import (
    feet_inches,
    length_unit,
    parse_number,
    to_inches,
    to_pounds,
    weight_unit,
)

DIMENSIONS: Tuple[str, str, str] = ("length", "width", "height")

_SP = r"[ \t]*"
_NUMBER = r"(?:\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"
_INCH_PART = r"\d{1,2}(?:\.\d+)?"
_FEET = r"(?:'|ft\b\.?|feet\b|foot\b)"
_INCH = r"(?:\"|''|in\b\.?|inch(?:es)?\b)"
_METRIC = r"(?:mm|cm|meters?|metres?|m)\b"
_LENGTH_UNIT = rf"(?:{_INCH}|{_FEET}|{_METRIC})"
_SEP = rf"{_SP}(?:x|×|by|\*){_SP}"
_DIM_LABEL = r"(?:length|width|height|len|wid|ht|l|w|h)"
_DIM_SUFFIX = r"(?:long|wide|tall|high|length|width|height|l|w|h)"
_APPROX = r"(?:approx\.?|approximately|about|apx\.?|~)?"

_WEIGHT_UNIT = (
    r"(?:lbs?(?![a-z])\.?|pounds?\b|#|short\s+tons?\b|metric\s+tons?\b"
    r"|tonnes?\b|tons?\b|mt\b|kgs?\b|kilograms?\b)"
)


def _measure(tag: str) -> str:
    """One length reading: feet-and-inches, or a number with an optional unit.

    The inches part of a feet-and-inches reading needs its own inch mark,
    so a number following a feet reading is never folded into it.
    """
    return (
        rf"(?:(?P<ft_{tag}>{_NUMBER}){_SP}{_FEET}{_SP}(?P<fin_{tag}>{_INCH_PART}){_SP}{_INCH}"
        rf"|(?P<num_{tag}>{_NUMBER}){_SP}(?P<unit_{tag}>{_LENGTH_UNIT})?)"
    )


def _dimension_value(tag: str) -> str:
    return (
        rf"(?:\b(?P<lab_{tag}>{_DIM_LABEL})(?![a-z]){_SP}[:=]?{_SP})?"
        + _measure(tag)
        + rf"(?:{_SP}(?P<suf_{tag}>{_DIM_SUFFIX})\b)?"
    )


def triple_pattern(prefix: str) -> str:
    """Regex source for ``<num> x <num> x <num>`` with per-value units and labels."""
    return (
        r"(?<![\w.])(?<!\d,)"
        + _dimension_value(f"{prefix}0")
        + _SEP
        + _dimension_value(f"{prefix}1")
        + _SEP
        + _dimension_value(f"{prefix}2")
    )


def weight_pattern(tag: str, unit_required: bool = True) -> str:
    """Regex source for a weight reading (``52,000 lbs``, ``52k lbs``, ``24 tonnes``)."""
    unit = rf"(?P<wunit_{tag}>{_WEIGHT_UNIT})" + ("" if unit_required else "?")
    return rf"(?P<wnum_{tag}>{_NUMBER}){_SP}(?P<k_{tag}>k)?{_SP}{unit}"


_TRIPLE_RE = re.compile(triple_pattern("t"), re.IGNORECASE)
_LABELED_PREFIX_RE = re.compile(
    rf"\b(?P<label>length|width|height|len|wid|ht|[lwh](?={_SP}[:=]))\b"
    + rf"{_SP}(?:[:=\-]|is)?{_SP}{_APPROX}{_SP}"
    + _measure("p"),
    re.IGNORECASE,
)
_LABELED_SUFFIX_RE = re.compile(
    r"(?<![\w.])(?<!\d,)"
    + _measure("s")
    + rf"{_SP}(?P<label>long\b|wide\b|tall\b|high\b|in\s+(?:length|width|height)\b"
    + rf"|[lwh](?![\w'])(?!{_SP}[:=]))",
    re.IGNORECASE,
)
_UNIT_WEIGHT_RE = re.compile(r"(?<![\w.,])" + weight_pattern("u"), re.IGNORECASE)
_LABELED_WEIGHT_RE = re.compile(
    rf"\b(?:gross\s+weight|total\s+weight|weight|wt|gvw)\b\.?{_SP}[:=\-]?{_SP}{_APPROX}{_SP}"
    + weight_pattern("l", unit_required=False),
    re.IGNORECASE,
)


@dataclass(frozen=True)
class MeasureReading:
    """A single length reading before unit resolution."""

    raw: float
    inches: float
    unit: Optional[str]
    label: Optional[str] = None

    @property
    def is_explicit(self) -> bool:
        return self.unit is not None


@dataclass(frozen=True)
class DimensionCandidate:
    length: float
    width: float
    height: float
    explicit_units: int
    position: int
    specificity: int
    rule: str

    @property
    def is_complete(self) -> bool:
        return self.length > 0 and self.width > 0 and self.height > 0

    @property
    def rank_key(self) -> Tuple[bool, int, int, int]:
        return (self.is_complete, self.explicit_units, self.position, self.specificity)

    def value(self, dimension: str) -> float:
        return getattr(self, dimension)


@dataclass(frozen=True)
class WeightCandidate:
    pounds: float
    explicit_units: int
    position: int
    specificity: int
    rule: str

    @property
    def rank_key(self) -> Tuple[bool, int, int, int]:
        return (True, self.explicit_units, self.position, self.specificity)

    def value(self, dimension: str) -> float:
        return self.pounds


DimensionScan = Iterator[Tuple[Tuple[float, float, float], int, int]]
WeightScan = Iterator[Tuple[float, int, int]]


@dataclass(frozen=True)
class DimensionRule:
    """A named dimension pattern with its declared specificity rank."""

    name: str
    specificity: int
    scanner: Callable[[str], DimensionScan]

    def candidates(self, text: str) -> Iterator[DimensionCandidate]:
        for (length, width, height), explicit, position in self.scanner(text):
            yield DimensionCandidate(
                length=length,
                width=width,
                height=height,
                explicit_units=explicit,
                position=position,
                specificity=self.specificity,
                rule=self.name,
            )


@dataclass(frozen=True)
class WeightRule:
    """A named weight pattern with its declared specificity rank."""

    name: str
    specificity: int
    scanner: Callable[[str], WeightScan]

    def candidates(self, text: str) -> Iterator[WeightCandidate]:
        for pounds, explicit, position in self.scanner(text):
            yield WeightCandidate(
                pounds=pounds,
                explicit_units=explicit,
                position=position,
                specificity=self.specificity,
                rule=self.name,
            )


def dimension_for_label(label: Optional[str]) -> Optional[str]:
    """Map a label or suffix word (``L``, ``wide``, ``tall``...) to a dimension."""
    if not label:
        return None
    word = label.strip().lower()
    if word.startswith("in"):
        word = word.split()[-1]
    first = word[0]
    if first == "l":
        return "length"
    if first == "w":
        return "width"
    if first in ("h", "t"):
        return "height"
    return None


def read_measure(match: "re.Match[str]", tag: str) -> MeasureReading:
    """Read one length value captured by the groups named with ``tag``."""
    feet = match.group(f"ft_{tag}")
    if feet is not None:
        inches = feet_inches(parse_number(feet), parse_number(match.group(f"fin_{tag}")))
        return MeasureReading(raw=inches, inches=inches, unit="ft")
    raw = parse_number(match.group(f"num_{tag}"))
    unit = length_unit(match.group(f"unit_{tag}"))
    return MeasureReading(raw=raw, inches=to_inches(raw, unit), unit=unit)


def read_triple(match: "re.Match[str]", prefix: str) -> Tuple[Dict[str, float], int]:
    """Resolve a matched triple into named dimensions and an explicit-unit count.

    A unit written only after the last value (``48 x 8 x 9 ft``) applies
    to all three. Labels reorder the values when they name each
    dimension exactly once; otherwise the order is length, width, height.
    """
    readings: List[MeasureReading] = []
    for index in range(3):
        tag = f"{prefix}{index}"
        reading = read_measure(match, tag)
        label = match.group(f"lab_{tag}") or match.group(f"suf_{tag}")
        readings.append(
            MeasureReading(reading.raw, reading.inches, reading.unit, dimension_for_label(label))
        )

    shared = readings[2].unit
    if shared is not None and readings[0].unit is None and readings[1].unit is None:
        readings = [
            MeasureReading(r.raw, to_inches(r.raw, shared), shared, r.label)
            if r.unit is None
            else r
            for r in readings[:2]
        ] + [readings[2]]

    labels = [r.label for r in readings]
    order = labels if sorted(filter(None, labels)) == sorted(DIMENSIONS) else list(DIMENSIONS)
    values = {dimension: r.inches for dimension, r in zip(order, readings)}
    explicit = sum(1 for r in readings if r.is_explicit)
    return values, explicit


def _scan_triples(text: str) -> DimensionScan:
    for match in _TRIPLE_RE.finditer(text):
        values, explicit = read_triple(match, "t")
        if all(values[d] > 0 for d in DIMENSIONS):
            yield (values["length"], values["width"], values["height"]), explicit, match.start()


def _scan_labeled(text: str) -> DimensionScan:
    """Collect ``Length: 18 feet`` / ``8' long`` readings, the last per dimension."""
    found: Dict[str, Tuple[float, bool, int]] = {}
    for regex, tag in ((_LABELED_PREFIX_RE, "p"), (_LABELED_SUFFIX_RE, "s")):
        for match in regex.finditer(text):
            dimension = dimension_for_label(match.group("label"))
            reading = read_measure(match, tag)
            if dimension is None or reading.inches <= 0:
                continue
            previous = found.get(dimension)
            if previous is None or match.start() >= previous[2]:
                found[dimension] = (reading.inches, reading.is_explicit, match.start())
    if not found:
        return
    length, width, height = (found[d][0] if d in found else 0.0 for d in DIMENSIONS)
    explicit = sum(1 for _, is_explicit, _ in found.values() if is_explicit)
    position = min(start for _, _, start in found.values())
    yield (length, width, height), explicit, position


def read_weight(match: "re.Match[str]", tag: str) -> Tuple[float, bool]:
    """Read a weight captured by the groups named with ``tag``, in pounds."""
    unit = weight_unit(match.group(f"wunit_{tag}"))
    pounds = to_pounds(
        parse_number(match.group(f"wnum_{tag}")),
        unit,
        thousands=match.group(f"k_{tag}") is not None,
    )
    return pounds, unit is not None


def _scan_unit_weights(text: str) -> WeightScan:
    for match in _UNIT_WEIGHT_RE.finditer(text):
        pounds, explicit = read_weight(match, "u")
        if pounds > 0:
            yield pounds, int(explicit), match.start()


def _scan_labeled_weights(text: str) -> WeightScan:
    for match in _LABELED_WEIGHT_RE.finditer(text):
        pounds, explicit = read_weight(match, "l")
        if pounds > 0:
            yield pounds, int(explicit), match.start()


DIMENSION_RULES: Tuple[DimensionRule, ...] = (
    DimensionRule(name="triple", specificity=2, scanner=_scan_triples),
    DimensionRule(name="labeled", specificity=1, scanner=_scan_labeled),
)

WEIGHT_RULES: Tuple[WeightRule, ...] = (
    WeightRule(name="labeled_weight", specificity=2, scanner=_scan_labeled_weights),
    WeightRule(name="unit_weight", specificity=1, scanner=_scan_unit_weights),
)


def select_best(candidates: Sequence[DimensionCandidate]) -> Optional[DimensionCandidate]:
    """Return the winning candidate by the documented precedence key."""
    return max(candidates, key=lambda c: c.rank_key, default=None)


def select_best_weight(candidates: Sequence[WeightCandidate]) -> Optional[WeightCandidate]:
    return max(candidates, key=lambda c: c.rank_key, default=None)


def is_ambiguous(candidates: Sequence, dimension: str) -> bool:
    """Whether the equally ranked top candidates disagree on a dimension.

    Only candidates tied with the winner on completeness and unit
    explicitness are compared; position and specificity do not count.
    """
    if len(candidates) < 2:
        return False
    best = max(candidates, key=lambda c: c.rank_key)
    level = best.rank_key[:2]
    values = {
        round(c.value(dimension), 3)
        for c in candidates
        if c.rank_key[:2] == level and c.value(dimension) > 0
    }
    return len(values) > 1
