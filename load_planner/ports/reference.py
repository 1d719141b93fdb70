"""Reference data ports - Abstractions for the static reference tables.

Each table is configuration data loaded once and cached by its
repository; engines receive the loaded tables and never read files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.reference import FeeSchedule, JurisdictionBoundary, TrailerProfile


class TrailerRepositoryPort(Protocol):
    """Port for loading trailer profiles.

    Implementation: adapters/reference/csv_trailers.py
    """

    def load(self) -> Sequence[TrailerProfile]:
        """Load every trailer profile, in table order.

        Returns:
            The trailer profiles.
        """
        ...

    def get(self, trailer_id: str) -> Optional[TrailerProfile]:
        """Get a trailer profile by identifier.

        Args:
            trailer_id: The profile identifier (e.g. 'flatbed-48').

        Returns:
            The profile, or None if not found.
        """
        ...


class FeeScheduleRepositoryPort(Protocol):
    """Port for loading per-jurisdiction fee schedules.

    Implementation: adapters/reference/json_fee_schedules.py
    """

    def load(self) -> Mapping[str, FeeSchedule]:
        """Load the fee schedules keyed by jurisdiction code.

        Returns:
            Mapping of jurisdiction code to schedule.
        """
        ...


class BoundaryRepositoryPort(Protocol):
    """Port for loading jurisdiction boundary polygons.

    Implementation: adapters/reference/geojson_boundaries.py
    """

    def load(self) -> Sequence[JurisdictionBoundary]:
        """Load every jurisdiction boundary.

        Returns:
            The boundaries, in file order.
        """
        ...
