"""CSV trailer profile repository adapter.

Loads the trailer legal-limit table from a CSV file with:
- Configuration injection (path from config)
- Caching support
- Typed errors for unreadable or malformed tables
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from ...config import ReferenceDataConfig, get_config
from ...domain.errors import ReferenceDataError
from ...domain.reference import (
    AxleConfiguration,
    DimensionLimits,
    EscortThresholds,
    LoadingMethod,
    TrailerCategory,
    TrailerProfile,
)

REQUIRED_COLUMNS = (
    "trailer_id",
    "name",
    "legal_length_in",
    "legal_width_in",
    "legal_height_in",
    "legal_weight_lbs",
    "max_length_in",
    "max_width_in",
    "max_height_in",
)


def _number(row: Mapping[str, str], column: str, default: Optional[float] = None) -> float:
    raw = (row.get(column) or "").strip()
    if not raw:
        if default is None:
            raise ValueError(f"Missing value for column {column!r}")
        return default
    return float(raw)


def _escort_thresholds(row: Mapping[str, str]) -> Optional[EscortThresholds]:
    columns = ("escort_width_in", "escort_height_in", "escort_length_in")
    if not any((row.get(c) or "").strip() for c in columns):
        return None
    defaults = EscortThresholds()
    return EscortThresholds(
        width=_number(row, "escort_width_in", defaults.width),
        height=_number(row, "escort_height_in", defaults.height),
        length=_number(row, "escort_length_in", defaults.length),
    )


def parse_trailer_row(row: Mapping[str, str]) -> TrailerProfile:
    """Build a TrailerProfile from one CSV row.

    Raises:
        ValueError: If a required value is missing or not numeric.
        KeyError: If a category or loading method is unknown.
    """
    axle_count = int(_number(row, "axle_count", 2))
    return TrailerProfile(
        trailer_id=row["trailer_id"].strip(),
        name=(row.get("name") or "").strip() or row["trailer_id"].strip(),
        category=TrailerCategory[(row.get("category") or "FLATBED").strip().upper()],
        loading_method=LoadingMethod[(row.get("loading_method") or "CRANE").strip().upper()],
        deck_height=_number(row, "deck_height_in", 60.0),
        deck_length=_number(row, "deck_length_in", 576.0),
        deck_width=_number(row, "deck_width_in", 102.0),
        tare_weight=_number(row, "tare_weight_lbs", 15000.0),
        legal=DimensionLimits(
            length=_number(row, "legal_length_in"),
            width=_number(row, "legal_width_in"),
            height=_number(row, "legal_height_in"),
            weight=_number(row, "legal_weight_lbs"),
        ),
        max_length=_number(row, "max_length_in"),
        max_width=_number(row, "max_width_in"),
        max_height=_number(row, "max_height_in"),
        axles=AxleConfiguration(
            axle_count=axle_count,
            max_axle_count=int(_number(row, "max_axle_count", axle_count)),
            lbs_per_added_axle=_number(row, "lbs_per_added_axle", 0.0),
        ),
        escort=_escort_thresholds(row),
    )


@dataclass
class CSVTrailerRepository:
    """Trailer profile repository that loads from a CSV file.

    This adapter implements TrailerRepositoryPort.

    Attributes:
        config: Reference data configuration (paths, file names)
        path: Optional explicit CSV path overriding the configured one
    """

    config: ReferenceDataConfig = field(default_factory=lambda: get_config().data)
    path: Optional[Path] = None
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _profiles: Optional[List[TrailerProfile]] = field(default=None, repr=False)
    _by_id: Optional[Dict[str, TrailerProfile]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def source_path(self) -> Path:
        return self.path or self.config.trailers_path

    def load(self) -> Sequence[TrailerProfile]:
        """Load the trailer profiles.

        Returns:
            The profiles in table order.

        Raises:
            ReferenceDataError: If the table cannot be read or is malformed.
        """
        if self._profiles is not None:
            return self._profiles

        self._logger.debug(
            "Loading trailer profiles",
            extra={"trailers_path": str(self.source_path)},
        )

        try:
            profiles = self._read_profiles()
        except (OSError, KeyError, ValueError) as e:
            raise ReferenceDataError(
                f"Failed to load trailer profiles: {e}",
                file_path=str(self.source_path),
                cause=e,
            )

        self._profiles = profiles
        self._logger.info("Trailer profiles loaded", extra={"profiles": len(profiles)})
        return profiles

    def _read_profiles(self) -> List[TrailerProfile]:
        profiles: List[TrailerProfile] = []
        with self.source_path.open(encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or ())]
            if missing:
                raise ValueError(f"Missing columns: {', '.join(missing)}")
            for row in reader:
                if not (row.get("trailer_id") or "").strip():
                    continue
                profiles.append(parse_trailer_row(row))
        if not profiles:
            raise ValueError("Trailer table is empty")
        return profiles

    def get(self, trailer_id: str) -> Optional[TrailerProfile]:
        """Get a trailer profile by identifier.

        Args:
            trailer_id: The profile identifier to look up.

        Returns:
            The profile, or None if not found.
        """
        return self._index().get(trailer_id)

    def _index(self) -> Dict[str, TrailerProfile]:
        """Profiles keyed by identifier, loading the table if needed."""
        if self._by_id is None:
            self._by_id = {profile.trailer_id: profile for profile in self.load()}
        return self._by_id

    def clear_cache(self) -> None:
        """Clear cached trailer profiles."""
        self._profiles = None
        self._by_id = None
        self._logger.debug("Trailer cache cleared")
