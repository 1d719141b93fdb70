"""Matching ports - Abstractions for ranking trailers against a load."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import ParsedLoad, TruckRecommendation


class TrailerMatcherPort(Protocol):
    """Port for trailer matching.

    Implementation: adapters/matching/constraint_matcher.py

    The matcher evaluates a load against the full set of trailer
    profiles and returns feasible ones ranked best-first.
    """

    def match(self, load: ParsedLoad) -> Sequence[TruckRecommendation]:
        """Rank the trailer profiles able to carry a load.

        Args:
            load: The extracted load.

        Returns:
            Recommendations sorted best-first; infeasible profiles
            are excluded.
        """
        ...
