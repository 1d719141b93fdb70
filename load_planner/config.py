"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for the tunable values
of the decision core: extraction scoring, matching defaults, permit
fallbacks and the location of the static reference tables.

Configuration can be overridden via environment variables:
- LP_EXTRACT_ITEM_BONUS=0.15
- LP_MATCH_TRACTOR_WEIGHT_LBS=18000
- LP_PERMIT_FALLBACK_FEE=300
- LP_DATA_DATA_DIR=/path/to/tables
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.reference import (
    DimensionLimits,
    EscortRules,
    EscortThresholds,
    SuperloadThresholds,
)


class ExtractionConfig(BaseSettings):
    """Load extraction scoring.

    Environment variables prefixed with LP_EXTRACT_.
    """

    model_config = SettingsConfigDict(env_prefix="LP_EXTRACT_")

    default_strategy: str = "rule_based"
    item_bonus: float = Field(default=0.1, ge=0.0, le=1.0)
    ambiguity_penalty: float = Field(default=0.05, ge=0.0, le=1.0)
    min_text_length: int = Field(default=10, ge=0)


class MatchingConfig(BaseSettings):
    """Trailer matching defaults, inches and pounds.

    Environment variables prefixed with LP_MATCH_.
    """

    model_config = SettingsConfigDict(env_prefix="LP_MATCH_")

    tractor_weight_lbs: float = 17000.0

    escort_width_in: float = 144.0
    escort_height_in: float = 174.0
    escort_length_in: float = 960.0

    superload_width_in: float = 192.0
    superload_height_in: float = 192.0
    superload_length_in: float = 1440.0
    superload_weight_lbs: float = 200000.0

    def default_escort_thresholds(self) -> EscortThresholds:
        return EscortThresholds(
            width=self.escort_width_in,
            height=self.escort_height_in,
            length=self.escort_length_in,
        )

    def superload_thresholds(self) -> SuperloadThresholds:
        return SuperloadThresholds(
            width=self.superload_width_in,
            height=self.superload_height_in,
            length=self.superload_length_in,
            weight=self.superload_weight_lbs,
        )


class PermitConfig(BaseSettings):
    """Permit pricing defaults shared by jurisdictions lacking specific rules.

    Environment variables prefixed with LP_PERMIT_.
    """

    model_config = SettingsConfigDict(env_prefix="LP_PERMIT_")

    fallback_fee: float = Field(default=250.0, ge=0.0)
    high_cost_threshold: float = Field(default=500.0, ge=0.0)
    escort_rate_per_mile: float = 1.85
    pole_car_rate_per_mile: float = 1.65

    legal_width_in: float = 102.0
    legal_height_in: float = 162.0
    legal_length_in: float = 780.0
    legal_weight_lbs: float = 80000.0

    single_escort_width_in: float = 144.0
    two_escort_width_in: float = 192.0
    pole_car_height_in: float = 186.0
    single_escort_length_in: float = 1200.0
    two_escort_length_in: float = 1440.0

    def default_legal_limits(self) -> DimensionLimits:
        return DimensionLimits(
            length=self.legal_length_in,
            width=self.legal_width_in,
            height=self.legal_height_in,
            weight=self.legal_weight_lbs,
        )

    def default_escort_rules(self) -> EscortRules:
        return EscortRules(
            single_escort_width=self.single_escort_width_in,
            two_escort_width=self.two_escort_width_in,
            pole_car_height=self.pole_car_height_in,
            single_escort_length=self.single_escort_length_in,
            two_escort_length=self.two_escort_length_in,
        )


class ReferenceDataConfig(BaseSettings):
    """Static reference table locations.

    Environment variables prefixed with LP_DATA_.
    """

    model_config = SettingsConfigDict(env_prefix="LP_DATA_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent / "data"
    )
    trailers_file: str = "trailers.csv"
    fee_schedules_file: str = "fee_schedules.json"
    boundaries_file: str = "boundaries.geojson"

    @property
    def trailers_path(self) -> Path:
        """Full path to the trailer profile CSV file."""
        return self.data_dir / self.trailers_file

    @property
    def fee_schedules_path(self) -> Path:
        """Full path to the fee schedule JSON file."""
        return self.data_dir / self.fee_schedules_file

    @property
    def boundaries_path(self) -> Path:
        """Full path to the jurisdiction boundary GeoJSON file."""
        return self.data_dir / self.boundaries_file


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with LP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="LP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.permits.fallback_fee)
        print(config.data.trailers_path)

    Environment variables prefixed with LP_.
    """

    model_config = SettingsConfigDict(env_prefix="LP_")

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    permits: PermitConfig = Field(default_factory=PermitConfig)
    data: ReferenceDataConfig = Field(default_factory=ReferenceDataConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
