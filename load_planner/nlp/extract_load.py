"""Load extraction from free-text freight requests.

This module turns an email-like text blob into a ParsedLoad. It is a
best-effort heuristic extractor: every field that cannot be found is
left at 0 (or empty) and the confidence score reports how much was
found and how unambiguous it was. Extraction never raises for string
input.
"""

import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..domain.models import LOAD_FIELDS, CargoItem, ParsedLoad, ValidationResult
from .patterns import (
    DIMENSION_RULES,
    DIMENSIONS,
    WEIGHT_RULES,
    DimensionCandidate,
    WeightCandidate,
    is_ambiguous,
    read_triple,
    read_weight,
    select_best,
    select_best_weight,
    triple_pattern,
    weight_pattern,
)
from .shipment_details import extract_shipment_details

DEFAULT_ITEM_BONUS = 0.1
DEFAULT_AMBIGUITY_PENALTY = 0.05

_NOT_ITEM = (
    r"(?:dimensions?|dims?|size|weight|measurements?|overall|total|length|width|height"
    r"|load|l|w|h)"
)
# Lines opening with a greeting or a request are prose, not cargo items.
_NOT_ITEM_OPENER = (
    r"(?:please|pls|we|i|need|quote|hi|hello|hey|dear|thanks|thank|can|could|would"
    r"|looking|requesting|request|subject|re|fwd?|from|to|pickup|delivery|ship)"
)
_ITEM_LINE_RE = re.compile(
    r"^[ \t]*(?:[-*•]|\d+[.)])?[ \t]*"
    r"(?:(?P<qty>\d+)[ \t]*(?:x|×|pcs?\.?|pieces?|units?|ea\.?)?[ \t]+)?"
    rf"(?P<name>(?!{_NOT_ITEM}\b)(?!{_NOT_ITEM_OPENER}(?![\w-]))[a-z][^,:;\n]*?)"
    r"(?:[ \t]*[,:;\-–(][ \t]*|[ \t]+)"
    + triple_pattern("i")
    + r"(?:[ \t]*[,;\-–@(]?[ \t]*(?:weighing|at|approx\.?|@)?[ \t]*"
    + weight_pattern("i")
    + r")?",
    re.IGNORECASE | re.MULTILINE,
)
_NOT_STACKABLE_RE = re.compile(
    r"\b(?:non[- ]?stackable|do\s+not\s+stack|don'?t\s+stack|no\s+stacking)\b",
    re.IGNORECASE,
)
_FRAGILE_RE = re.compile(r"\bfragile\b", re.IGNORECASE)

Span = Tuple[int, int]


def extract_items(text: str) -> Tuple[Tuple[CargoItem, ...], Tuple[Span, ...]]:
    """Find itemized cargo lines.

    Parameters
    ----------
    text:
        The raw request text.

    Returns
    -------
    tuple
        The items in text order (ids ``item-1``, ``item-2``...) and the
        character spans of the lines they were read from.
    """
    items: List[CargoItem] = []
    spans: List[Span] = []
    for match in _ITEM_LINE_RE.finditer(text):
        values, _ = read_triple(match, "i")
        if not all(values[d] > 0 for d in DIMENSIONS):
            continue
        weight = 0.0
        if match.group("wnum_i") is not None:
            weight, _ = read_weight(match, "i")
        line_end = text.find("\n", match.end())
        line = text[match.start(): line_end if line_end != -1 else len(text)]
        quantity = int(match.group("qty")) if match.group("qty") else 1
        items.append(
            CargoItem(
                name=match.group("name").strip(),
                length=values["length"],
                width=values["width"],
                height=values["height"],
                weight=weight,
                quantity=max(1, quantity),
                id=f"item-{len(items) + 1}",
                stackable=_NOT_STACKABLE_RE.search(line) is None,
                fragile=_FRAGILE_RE.search(line) is not None,
            )
        )
        spans.append((match.start(), match.end()))
    return tuple(items), tuple(spans)


def _outside(spans: Sequence[Span], position: int) -> bool:
    return not any(start <= position < end for start, end in spans)


def _field_credit(ambiguous: bool, penalty: float) -> float:
    return 1.0 - penalty if ambiguous else 1.0


def score_confidence(
    credits: Dict[str, float],
    has_items: bool,
    item_bonus: float = DEFAULT_ITEM_BONUS,
) -> float:
    """Deterministic confidence from per-field match credits.

    Parameters
    ----------
    credits:
        Credit in [0, 1] for every required field that was matched.
    has_items:
        Whether itemized cargo lines were found.
    item_bonus:
        Added when items were found alongside at least one field.

    Returns
    -------
    float
        Score in [0, 1]; exactly 0 when no field was matched.
    """
    if not credits:
        return 0.0
    score = sum(credits.values()) / len(LOAD_FIELDS)
    if has_items:
        score += item_bonus
    return round(min(1.0, max(0.0, score)), 4)


def extract_load(
    text: str,
    item_bonus: float = DEFAULT_ITEM_BONUS,
    ambiguity_penalty: float = DEFAULT_AMBIGUITY_PENALTY,
) -> ParsedLoad:
    """Extract a structured load from free text.

    Parameters
    ----------
    text:
        The raw request text (e.g. an email body with its subject line).
    item_bonus:
        Confidence bonus when itemized cargo lines were found.
    ambiguity_penalty:
        Credit removed from a field whose equally explicit candidates
        disagree.

    Returns
    -------
    ParsedLoad
        Lengths in inches, weight in pounds; 0 for anything not found.

    Notes
    -----
    Dimension and weight readings on itemized cargo lines describe the
    pieces, not the whole load. They only feed the load when nothing
    is stated outside the item lines: the envelope of the largest piece
    for the dimensions and the total item weight for the weight.
    """
    if not text or not text.strip():
        return ParsedLoad.empty()

    items, item_spans = extract_items(text)

    dimension_candidates: List[DimensionCandidate] = [
        candidate
        for rule in DIMENSION_RULES
        for candidate in rule.candidates(text)
        if _outside(item_spans, candidate.position)
    ]
    weight_candidates: List[WeightCandidate] = [
        candidate
        for rule in WEIGHT_RULES
        for candidate in rule.candidates(text)
        if _outside(item_spans, candidate.position)
    ]

    values: Dict[str, float] = {name: 0.0 for name in LOAD_FIELDS}
    credits: Dict[str, float] = {}

    best: Optional[DimensionCandidate] = select_best(dimension_candidates)
    if best is not None:
        for dimension in DIMENSIONS:
            if best.value(dimension) > 0:
                values[dimension] = best.value(dimension)
                credits[dimension] = _field_credit(
                    is_ambiguous(dimension_candidates, dimension), ambiguity_penalty
                )
    elif items:
        for dimension in DIMENSIONS:
            values[dimension] = max(getattr(item, dimension) for item in items)
            credits[dimension] = 1.0

    best_weight: Optional[WeightCandidate] = select_best_weight(weight_candidates)
    if best_weight is not None:
        values["weight"] = best_weight.pounds
        credits["weight"] = _field_credit(
            is_ambiguous(weight_candidates, "weight"), ambiguity_penalty
        )
    elif items and any(item.weight > 0 for item in items):
        values["weight"] = sum(item.total_weight for item in items)
        credits["weight"] = 1.0

    # A reading that rounds away to 0 is not a match.
    values = {name: round(value, 2) for name, value in values.items()}
    credits = {name: credit for name, credit in credits.items() if values[name] > 0}

    details = extract_shipment_details(text)

    return ParsedLoad(
        length=values["length"],
        width=values["width"],
        height=values["height"],
        weight=values["weight"],
        items=items,
        confidence=score_confidence(credits, bool(items), item_bonus),
        description=details.description,
        origin=details.origin,
        destination=details.destination,
        pickup_date=details.pickup_date,
        delivery_date=details.delivery_date,
        pickup_date_iso=details.pickup_date_iso,
        delivery_date_iso=details.delivery_date_iso,
    )


def validate_parsed_load(load: ParsedLoad) -> ValidationResult:
    """Check a load for the fields matching needs.

    A load is usable when length, width, height and weight are all
    positive. Missing field names are reported in that order.
    """
    missing = tuple(name for name in LOAD_FIELDS if not getattr(load, name) > 0)
    return ValidationResult(missing_fields=missing)
