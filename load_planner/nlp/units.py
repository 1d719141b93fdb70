"""Unit normalization for extracted measurements.

Lengths normalize to inches and weights to pounds. Unit tokens are
matched case-insensitively; a bare number carries no unit and is read
as inches (lengths) or pounds (weights).
"""

import re
from typing import Dict, Optional

INCHES_PER_FOOT = 12.0
POUNDS_PER_TON = 2000.0
POUNDS_PER_TONNE = 2204.62
POUNDS_PER_KG = 2.20462

LENGTH_FACTORS: Dict[str, float] = {
    "in": 1.0,
    "ft": INCHES_PER_FOOT,
    "m": 39.3701,
    "cm": 0.393701,
    "mm": 0.0393701,
}

WEIGHT_FACTORS: Dict[str, float] = {
    "lb": 1.0,
    "ton": POUNDS_PER_TON,
    "tonne": POUNDS_PER_TONNE,
    "kg": POUNDS_PER_KG,
}

_LENGTH_ALIASES: Dict[str, str] = {
    '"': "in",
    "''": "in",
    "in": "in",
    "in.": "in",
    "inch": "in",
    "inches": "in",
    "'": "ft",
    "ft": "ft",
    "ft.": "ft",
    "foot": "ft",
    "feet": "ft",
    "m": "m",
    "meter": "m",
    "meters": "m",
    "metre": "m",
    "metres": "m",
    "cm": "cm",
    "mm": "mm",
}

_WEIGHT_ALIASES: Dict[str, str] = {
    "lb": "lb",
    "lbs": "lb",
    "lb.": "lb",
    "lbs.": "lb",
    "pound": "lb",
    "pounds": "lb",
    "#": "lb",
    "ton": "ton",
    "tons": "ton",
    "short ton": "ton",
    "short tons": "ton",
    "tonne": "tonne",
    "tonnes": "tonne",
    "mt": "tonne",
    "metric ton": "tonne",
    "metric tons": "tonne",
    "kg": "kg",
    "kgs": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
}


def _canonical(token: str) -> str:
    return re.sub(r"\s+", " ", token.strip().lower())


def length_unit(token: Optional[str]) -> Optional[str]:
    """Return the canonical length unit for a token, or None if unknown."""
    if not token:
        return None
    return _LENGTH_ALIASES.get(_canonical(token))


def weight_unit(token: Optional[str]) -> Optional[str]:
    """Return the canonical weight unit for a token, or None if unknown."""
    if not token:
        return None
    return _WEIGHT_ALIASES.get(_canonical(token))


def parse_number(raw: str) -> float:
    """Parse a numeric token, tolerating thousands separators.

    Parameters
    ----------
    raw:
        Digits with optional ``,`` thousands separators and decimals.

    Returns
    -------
    float
        The parsed value.
    """
    return float(raw.replace(",", ""))


def to_inches(value: float, unit: Optional[str]) -> float:
    """Convert a length to inches; a missing unit means inches."""
    if unit is None:
        return value
    return value * LENGTH_FACTORS[unit]


def feet_inches(feet: float, inches: float) -> float:
    """Combine a feet-and-inches reading (``12'6"``) into inches."""
    return feet * INCHES_PER_FOOT + inches


def to_pounds(value: float, unit: Optional[str], thousands: bool = False) -> float:
    """Convert a weight to pounds.

    Parameters
    ----------
    value:
        The numeric reading.
    unit:
        Canonical weight unit, or None for pounds.
    thousands:
        Whether the reading carried a ``k`` shorthand (``52k lbs``).
    """
    if thousands:
        value *= 1000.0
    if unit is None:
        return value
    return value * WEIGHT_FACTORS[unit]
