"""Load analysis service - The "analyze text" use case.

Composes extraction, validation and trailer matching, producing a
partial-success result with diagnostic messages instead of failing
when the text is incomplete.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from ..config import ExtractionConfig, get_config
from ..domain.errors import InvalidInputError, LoadPlannerError
from ..domain.models import LoadAnalysis
from ..ports.extraction import LoadExtractorPort
from ..ports.matching import TrailerMatcherPort

NO_TRAILER_MESSAGE = "No trailer profile can carry this load."


def missing_fields_message(missing: Tuple[str, ...]) -> str:
    return (
        f"Could not extract: {', '.join(missing)}. "
        "Please provide dimensions (L x W x H) and weight."
    )


@dataclass
class LoadAnalysisService:
    """Service analyzing a freight request text.

    This service orchestrates:
    1. Load extraction
    2. Validation of the required fields
    3. Trailer matching (only for usable loads)

    Attributes:
        extractor: Extracts structured loads from text
        matcher: Ranks trailer profiles for a load
        config: Extraction configuration (minimum text length)
    """

    extractor: LoadExtractorPort
    matcher: TrailerMatcherPort
    config: ExtractionConfig = field(default_factory=lambda: get_config().extraction)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def analyze(self, text: Any) -> LoadAnalysis:
        """Analyze a freight request text.

        Args:
            text: The raw request text.

        Returns:
            LoadAnalysis with the parsed load, missing fields, ranked
            recommendations and caller-facing messages.

        Raises:
            InvalidInputError: If text is not a string or is shorter
                than the configured minimum length.
        """
        if not isinstance(text, str):
            raise InvalidInputError(
                f"Text must be a string, got {type(text).__name__}",
                field_name="text",
            )
        if len(text.strip()) < self.config.min_text_length:
            raise InvalidInputError(
                f"Text must be at least {self.config.min_text_length} characters",
                field_name="text",
            )

        self._logger.info("Starting load analysis", extra={"text_length": len(text)})

        # Step 1: Extraction
        load = self.extractor.extract(text)
        self._logger.info(
            "Load extracted",
            extra={"confidence": load.confidence, "items": len(load.items)},
        )

        # Step 2: Validation
        validation = self.extractor.validate(load)
        if not validation.is_valid:
            self._logger.info(
                "Load incomplete",
                extra={"missing_fields": validation.missing_fields},
            )
            return LoadAnalysis(
                parsed_load=load,
                missing_fields=validation.missing_fields,
                messages=(missing_fields_message(validation.missing_fields),),
            )

        # Step 3: Matching
        recommendations = tuple(self.matcher.match(load))
        messages: Tuple[str, ...] = ()
        if not recommendations:
            messages = (NO_TRAILER_MESSAGE,)

        self._logger.info(
            "Load analyzed",
            extra={
                "recommendations": len(recommendations),
                "best": recommendations[0].trailer_id if recommendations else None,
            },
        )
        return LoadAnalysis(
            parsed_load=load,
            recommendations=recommendations,
            messages=messages,
        )

    def analyze_safe(self, text: Any) -> tuple[Optional[LoadAnalysis], Optional[str]]:
        """Analyze a text, returning an error message instead of raising.

        Args:
            text: The raw request text.

        Returns:
            Tuple of (LoadAnalysis or None, error message or None).
        """
        try:
            return self.analyze(text), None
        except InvalidInputError as e:
            return None, f"Invalid input: {e.message}"
        except LoadPlannerError as e:
            self._logger.exception("Load analysis failed")
            return None, f"Error: {e}"

    def format_result(self, analysis: LoadAnalysis) -> str:
        """Format an analysis as a human-readable summary."""
        load = analysis.parsed_load
        lines = [
            f"Load: {load.length:g} x {load.width:g} x {load.height:g} in, "
            f"{load.weight:,.0f} lbs (confidence {load.confidence:.0%})"
        ]
        for recommendation in analysis.recommendations:
            lines.append(
                f"{recommendation.rank}. {recommendation.trailer_name} "
                f"[{recommendation.fit.name}] score {recommendation.score}"
            )
        lines.extend(analysis.messages)
        return "\n".join(lines)
