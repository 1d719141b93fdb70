"""JSON fee schedule repository adapter.

Loads per-jurisdiction permit fee schedules from a JSON document of the
form ``{"jurisdictions": [...]}``. Lengths are inches, weights pounds,
fees US dollars.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ...config import ReferenceDataConfig, get_config
from ...domain.errors import ReferenceDataError
from ...domain.reference import (
    DimensionLimits,
    DimensionSurcharge,
    EscortRules,
    FeeSchedule,
    OversizeSchedule,
    OverweightSchedule,
    SuperloadThresholds,
    WeightBracket,
)

_DIMENSIONS = ("length", "width", "height")


def _limits(data: Mapping[str, Any]) -> DimensionLimits:
    return DimensionLimits(
        length=float(data["length"]),
        width=float(data["width"]),
        height=float(data["height"]),
        weight=float(data["weight"]),
    )


def _oversize(data: Mapping[str, Any]) -> OversizeSchedule:
    surcharges = []
    for item in data.get("surcharges", []):
        dimension = str(item["dimension"]).lower()
        if dimension not in _DIMENSIONS:
            raise ValueError(f"Unknown surcharge dimension {dimension!r}")
        surcharges.append(
            DimensionSurcharge(
                dimension=dimension,
                threshold=float(item["threshold"]),
                fee=float(item["fee"]),
            )
        )
    return OversizeSchedule(
        base_fee=float(data.get("base_fee", 0.0)),
        surcharges=tuple(surcharges),
    )


def _overweight(data: Mapping[str, Any]) -> OverweightSchedule:
    brackets = sorted(
        (
            WeightBracket(up_to=float(item["up_to"]), fee=float(item["fee"]))
            for item in data.get("weight_brackets", [])
        ),
        key=lambda bracket: bracket.up_to,
    )
    return OverweightSchedule(
        base_fee=float(data.get("base_fee", 0.0)),
        per_mile_fee=float(data.get("per_mile_fee", 0.0)),
        ton_mile_fee=float(data.get("ton_mile_fee", 0.0)),
        weight_brackets=tuple(brackets),
        extra_legal_fee=float(data.get("extra_legal_fee", 0.0)),
    )


def _escort_rules(data: Mapping[str, Any]) -> EscortRules:
    known = {f.name for f in fields(EscortRules)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown escort rule keys: {', '.join(sorted(unknown))}")
    return EscortRules(**{key: float(value) for key, value in data.items()})


def _superload(data: Mapping[str, Any]) -> SuperloadThresholds:
    return SuperloadThresholds(
        width=float(data["width"]),
        height=float(data["height"]),
        length=float(data["length"]),
        weight=float(data["weight"]),
    )


def parse_fee_schedule(data: Mapping[str, Any]) -> FeeSchedule:
    """Build a FeeSchedule from one ``jurisdictions`` entry.

    Raises:
        KeyError: If a required key is missing.
        ValueError: If a value has the wrong type or an unknown key.
    """
    code = str(data["code"]).strip().upper()
    legal = data.get("legal_limits")
    escort = data.get("escort_rules")
    superload = data.get("superload")
    return FeeSchedule(
        code=code,
        name=str(data.get("name") or code),
        legal_limits=_limits(legal) if legal else None,
        oversize=_oversize(data.get("oversize") or {}),
        overweight=_overweight(data.get("overweight") or {}),
        escort_rules=_escort_rules(escort) if escort else None,
        superload=_superload(superload) if superload else None,
        travel_restrictions=tuple(str(r) for r in data.get("travel_restrictions", [])),
    )


@dataclass
class JSONFeeScheduleRepository:
    """Fee schedule repository that loads from a JSON file.

    This adapter implements FeeScheduleRepositoryPort.

    Attributes:
        config: Reference data configuration (paths, file names)
        path: Optional explicit JSON path overriding the configured one
    """

    config: ReferenceDataConfig = field(default_factory=lambda: get_config().data)
    path: Optional[Path] = None
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _schedules: Optional[Dict[str, FeeSchedule]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def source_path(self) -> Path:
        return self.path or self.config.fee_schedules_path

    def load(self) -> Mapping[str, FeeSchedule]:
        """Load the fee schedules keyed by jurisdiction code.

        Returns:
            Mapping of jurisdiction code to schedule.

        Raises:
            ReferenceDataError: If the file cannot be read or is malformed.
        """
        if self._schedules is not None:
            return self._schedules

        self._logger.debug(
            "Loading fee schedules",
            extra={"fee_schedules_path": str(self.source_path)},
        )

        try:
            with self.source_path.open(encoding="utf-8") as f:
                document = json.load(f)
            schedules: Dict[str, FeeSchedule] = {}
            for entry in document["jurisdictions"]:
                schedule = parse_fee_schedule(entry)
                schedules[schedule.code] = schedule
        except (OSError, AttributeError, KeyError, TypeError, ValueError) as e:
            raise ReferenceDataError(
                f"Failed to load fee schedules: {e}",
                file_path=str(self.source_path),
                cause=e,
            )

        self._schedules = schedules
        self._logger.info("Fee schedules loaded", extra={"jurisdictions": len(schedules)})
        return schedules

    def clear_cache(self) -> None:
        """Clear cached fee schedules."""
        self._schedules = None
        self._logger.debug("Fee schedule cache cleared")
