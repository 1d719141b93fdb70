"""Reference data adapters - File-backed static reference tables.

Available implementations:
- CSVTrailerRepository: Trailer legal-limit table from CSV
- JSONFeeScheduleRepository: Per-jurisdiction fee schedules from JSON
- GeoJSONBoundaryRepository: Jurisdiction polygons from GeoJSON
"""

from .csv_trailers import CSVTrailerRepository
from .geojson_boundaries import GeoJSONBoundaryRepository
from .json_fee_schedules import JSONFeeScheduleRepository

__all__ = [
    "CSVTrailerRepository",
    "JSONFeeScheduleRepository",
    "GeoJSONBoundaryRepository",
]
