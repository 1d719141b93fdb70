"""High-level entry points for the Load Planner decision core.

Two independent pipelines are exposed:

1. Analyze text: extraction, validation and trailer matching.
2. Price a route: jurisdiction resolution and permit/escort pricing.

Both delegate to the services wired by the default container, so the
reference tables are loaded once per process.
"""

from typing import Optional, Sequence, Union

from .container import Container, get_container
from .domain.models import (
    CargoSpecs,
    GeoPoint,
    LoadAnalysis,
    PermitBreakdown,
    RoutePricing,
)
from .logging_config import configure_logging
from .ports.reference import TrailerRepositoryPort
from .services import LoadAnalysisService, RoutePricingService
from .services import format_permit_summary as _format_permit_summary

SAMPLE_REQUEST = """Subject: RE: Quote request - CAT 320 Excavator

Hi team,

Need a rate for a CAT 320 excavator.
Dimensions: 32' 6" L x 10' 6" W x 10' 2" H
Weight: 52,000 lbs
Pickup: Denver, CO
Delivery: Salt Lake City, UT
Pickup date: 11/04
"""

SAMPLE_ROUTE = (
    GeoPoint(39.74, -104.99),
    GeoPoint(39.56, -107.32),
    GeoPoint(39.06, -108.55),
    GeoPoint(38.99, -110.16),
    GeoPoint(40.76, -111.89),
)


def analyze_load_text(text: str, container: Optional[Container] = None) -> LoadAnalysis:
    """Analyze a freight request text.

    Raises:
        InvalidInputError: If text is not a string or is too short.
        ReferenceDataError: If the trailer table cannot be loaded.
    """
    container = container or get_container()
    service: LoadAnalysisService = container.resolve(LoadAnalysisService)
    return service.analyze(text)


def price_route(
    route: Union[str, Sequence[GeoPoint]],
    cargo: CargoSpecs,
    container: Optional[Container] = None,
) -> RoutePricing:
    """Price permits and escorts for a route.

    The route is either decoded points or an encoded polyline string.

    Raises:
        GeometryValidationError: If the route geometry is malformed.
        InvalidInputError: If the cargo envelope is malformed.
        ReferenceDataError: If a boundary or fee table cannot be loaded.
    """
    container = container or get_container()
    service: RoutePricingService = container.resolve(RoutePricingService)
    if isinstance(route, str):
        return service.price_polyline(route, cargo)
    return service.price(route, cargo)


def format_permit_summary(breakdown: PermitBreakdown) -> str:
    return _format_permit_summary(breakdown)


def run_pipeline() -> None:
    """Run both pipelines on a sample request and route."""
    container = get_container()
    analysis_service: LoadAnalysisService = container.resolve(LoadAnalysisService)
    pricing_service: RoutePricingService = container.resolve(RoutePricingService)

    analysis = analysis_service.analyze(SAMPLE_REQUEST)
    print(analysis_service.format_result(analysis))

    best = analysis.best
    if best is None:
        return

    profile = container.resolve(TrailerRepositoryPort).get(best.trailer_id)
    cargo = CargoSpecs.for_load(
        analysis.parsed_load,
        profile,
        tractor_weight=container.config.matching.tractor_weight_lbs,
    )
    pricing = pricing_service.price(SAMPLE_ROUTE, cargo)
    print()
    print(pricing_service.format_result(pricing))


if __name__ == "__main__":
    configure_logging()
    run_pipeline()
