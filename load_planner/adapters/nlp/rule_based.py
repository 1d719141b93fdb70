"""Rule-based load extractor adapter.

This adapter wraps the ordered-rule extraction logic from
nlp/extract_load.py with the LoadExtractorPort interface.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...config import ExtractionConfig, get_config
from ...domain.models import ParsedLoad, ValidationResult
from ...nlp.extract_load import extract_load, validate_parsed_load


@dataclass
class RuleBasedLoadExtractor:
    """Heuristic load extractor using ordered regex rules.

    Attributes:
        config: Extraction scoring configuration
    """

    config: ExtractionConfig = field(default_factory=lambda: get_config().extraction)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def extract(self, text: str) -> ParsedLoad:
        """Extract a structured load from text.

        Args:
            text: The raw request text.

        Returns:
            ParsedLoad with dimensions, weight, items and confidence.
        """
        load = extract_load(
            text,
            item_bonus=self.config.item_bonus,
            ambiguity_penalty=self.config.ambiguity_penalty,
        )

        self._logger.debug(
            "Load extraction (rule-based)",
            extra={
                "matched_fields": load.matched_fields,
                "items": len(load.items),
                "confidence": load.confidence,
            },
        )

        return load

    def validate(self, load: ParsedLoad) -> ValidationResult:
        """Check that every required field was extracted.

        Args:
            load: The extracted load.

        Returns:
            ValidationResult listing missing field names.
        """
        return validate_parsed_load(load)
