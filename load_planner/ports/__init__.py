"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and its
engines and reference tables. They enable dependency injection and
make every engine testable with substitute tables.
"""

from .extraction import LoadExtractorPort
from .geo import BoundaryResolverPort
from .matching import TrailerMatcherPort
from .permits import PermitPricerPort
from .reference import (
    BoundaryRepositoryPort,
    FeeScheduleRepositoryPort,
    TrailerRepositoryPort,
)

__all__ = [
    # Engines
    "LoadExtractorPort",
    "TrailerMatcherPort",
    "BoundaryResolverPort",
    "PermitPricerPort",
    # Reference data
    "TrailerRepositoryPort",
    "FeeScheduleRepositoryPort",
    "BoundaryRepositoryPort",
]
