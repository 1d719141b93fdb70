"""Typed domain errors for the Load Planner.

Engines never raise for well-typed input: degraded results are encoded
in their return values (confidence, warnings, fallback fees). These
errors cover contract violations at the orchestrator boundary and
unreadable reference data.

All errors inherit from LoadPlannerError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class LoadPlannerError(Exception):
    """Base error for the load planner domain.

    All domain-specific errors inherit from this class.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidInputError(LoadPlannerError):
    """Caller input violates the orchestrator contract.

    Raised for non-string or too-short request text and for
    negative or non-finite cargo dimensions.

    Attributes:
        field_name: Name of the offending input
    """

    field_name: str = ""


@dataclass
class GeometryValidationError(LoadPlannerError):
    """Route geometry cannot be resolved into jurisdictions.

    Attributes:
        point_count: Number of points supplied
        bad_index: Index of the first invalid coordinate, if any
    """

    point_count: int = 0
    bad_index: Optional[int] = None


@dataclass
class ReferenceDataError(LoadPlannerError):
    """A static reference table could not be loaded.

    Attributes:
        file_path: Path to the reference file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class ConfigurationError(LoadPlannerError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
