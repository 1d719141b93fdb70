"""Matching adapters - Implementations of the trailer matching port.

Available implementations:
- ConstraintTrailerMatcher: Legal-limit constraints with tiered ranking
"""

from .constraint_matcher import ConstraintTrailerMatcher, FitAssessment

__all__ = ["ConstraintTrailerMatcher", "FitAssessment"]
