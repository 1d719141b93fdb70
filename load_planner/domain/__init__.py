"""Domain layer - Core business models, reference records and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    GeometryValidationError,
    InvalidInputError,
    LoadPlannerError,
    ReferenceDataError,
)
from .models import (
    LOAD_FIELDS,
    CargoItem,
    CargoSpecs,
    EscortRequirement,
    FitClass,
    GeoPoint,
    JurisdictionPermit,
    JurisdictionSegment,
    LimitViolation,
    LoadAnalysis,
    ParsedLoad,
    PermitBreakdown,
    PermitType,
    RoutePricing,
    TruckRecommendation,
    ValidationResult,
)
from .reference import (
    AxleConfiguration,
    DimensionLimits,
    DimensionSurcharge,
    EscortRules,
    EscortThresholds,
    FeeSchedule,
    JurisdictionBoundary,
    LoadingMethod,
    OversizeSchedule,
    OverweightSchedule,
    PolygonShape,
    SuperloadThresholds,
    TrailerCategory,
    TrailerProfile,
    WeightBracket,
)

__all__ = [
    # Models
    "LOAD_FIELDS",
    "CargoItem",
    "ParsedLoad",
    "ValidationResult",
    "FitClass",
    "PermitType",
    "LimitViolation",
    "TruckRecommendation",
    "GeoPoint",
    "JurisdictionSegment",
    "CargoSpecs",
    "EscortRequirement",
    "JurisdictionPermit",
    "PermitBreakdown",
    "LoadAnalysis",
    "RoutePricing",
    # Reference data
    "TrailerCategory",
    "LoadingMethod",
    "DimensionLimits",
    "AxleConfiguration",
    "EscortThresholds",
    "TrailerProfile",
    "DimensionSurcharge",
    "WeightBracket",
    "OversizeSchedule",
    "OverweightSchedule",
    "EscortRules",
    "SuperloadThresholds",
    "FeeSchedule",
    "PolygonShape",
    "JurisdictionBoundary",
    # Errors
    "LoadPlannerError",
    "InvalidInputError",
    "GeometryValidationError",
    "ReferenceDataError",
    "ConfigurationError",
]
