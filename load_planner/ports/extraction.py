"""Extraction ports - Abstractions for load extraction from text.

These protocols define the contract for turning a free-text freight
request into a structured load, so heuristic and model-based
extractors can be swapped without changing the orchestration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import ParsedLoad, ValidationResult


class LoadExtractorPort(Protocol):
    """Port for load extraction from text.

    Implementation: adapters/nlp/rule_based.py

    Extraction never fails on malformed text: absent fields are 0
    and the confidence reports what was found.
    """

    def extract(self, text: str) -> ParsedLoad:
        """Extract a structured load from text.

        Args:
            text: The raw request text.

        Returns:
            ParsedLoad with dimensions in inches, weight in pounds and
            a confidence in [0, 1].
        """
        ...

    def validate(self, load: ParsedLoad) -> ValidationResult:
        """Check that every required field was extracted.

        Args:
            load: The extracted load.

        Returns:
            ValidationResult listing missing field names.
        """
        ...
