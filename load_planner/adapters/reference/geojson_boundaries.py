"""GeoJSON jurisdiction boundary repository adapter.

Loads jurisdiction polygons from a GeoJSON FeatureCollection. Each
feature carries ``properties.code`` and ``properties.name``; geometry
is a Polygon or a MultiPolygon with ``[lon, lat]`` coordinates.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ...config import ReferenceDataConfig, get_config
from ...domain.errors import ReferenceDataError
from ...domain.reference import JurisdictionBoundary, PolygonShape, Ring


def _ring(coordinates: Sequence[Sequence[float]]) -> Ring:
    ring = tuple((float(point[0]), float(point[1])) for point in coordinates)
    # GeoJSON rings repeat the first vertex at the end.
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring = ring[:-1]
    if len(ring) < 3:
        raise ValueError("Polygon ring needs at least three distinct vertices")
    return ring


def _polygon(rings: Sequence[Any]) -> PolygonShape:
    if not rings:
        raise ValueError("Polygon without rings")
    return PolygonShape(
        exterior=_ring(rings[0]),
        holes=tuple(_ring(hole) for hole in rings[1:]),
    )


def parse_feature(feature: Any) -> JurisdictionBoundary:
    """Build a JurisdictionBoundary from one GeoJSON feature.

    Raises:
        KeyError: If code or geometry is missing.
        ValueError: If the geometry type is not Polygon or MultiPolygon.
    """
    properties = feature["properties"]
    geometry = feature["geometry"]
    code = str(properties["code"]).strip().upper()
    kind = geometry["type"]
    if kind == "Polygon":
        polygons = (_polygon(geometry["coordinates"]),)
    elif kind == "MultiPolygon":
        polygons = tuple(_polygon(rings) for rings in geometry["coordinates"])
    else:
        raise ValueError(f"Unsupported geometry type {kind!r} for {code}")
    return JurisdictionBoundary(
        code=code,
        name=str(properties.get("name") or code),
        polygons=polygons,
    )


@dataclass
class GeoJSONBoundaryRepository:
    """Boundary repository that loads from a GeoJSON file.

    This adapter implements BoundaryRepositoryPort.

    Attributes:
        config: Reference data configuration (paths, file names)
        path: Optional explicit GeoJSON path overriding the configured one
    """

    config: ReferenceDataConfig = field(default_factory=lambda: get_config().data)
    path: Optional[Path] = None
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _boundaries: Optional[List[JurisdictionBoundary]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def source_path(self) -> Path:
        return self.path or self.config.boundaries_path

    def load(self) -> Sequence[JurisdictionBoundary]:
        """Load the jurisdiction boundaries.

        Returns:
            The boundaries in file order.

        Raises:
            ReferenceDataError: If the file cannot be read or is malformed.
        """
        if self._boundaries is not None:
            return self._boundaries

        self._logger.debug(
            "Loading jurisdiction boundaries",
            extra={"boundaries_path": str(self.source_path)},
        )

        try:
            with self.source_path.open(encoding="utf-8") as f:
                document = json.load(f)
            if document.get("type") != "FeatureCollection":
                raise ValueError("Boundary file is not a FeatureCollection")
            boundaries = [parse_feature(feature) for feature in document["features"]]
        except (OSError, AttributeError, KeyError, TypeError, IndexError, ValueError) as e:
            raise ReferenceDataError(
                f"Failed to load jurisdiction boundaries: {e}",
                file_path=str(self.source_path),
                cause=e,
            )

        self._boundaries = boundaries
        self._logger.info(
            "Jurisdiction boundaries loaded",
            extra={"jurisdictions": len(boundaries)},
        )
        return boundaries

    def clear_cache(self) -> None:
        """Clear cached boundaries."""
        self._boundaries = None
        self._logger.debug("Boundary cache cleared")
