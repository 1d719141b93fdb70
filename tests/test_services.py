"""Tests for the load analysis and route pricing services."""

import pytest

from load_planner.adapters.geo import PolygonBoundaryResolver
from load_planner.adapters.matching import ConstraintTrailerMatcher
from load_planner.adapters.nlp import RuleBasedLoadExtractor
from load_planner.adapters.permits import SchedulePermitPricer
from load_planner.config import ExtractionConfig, MatchingConfig, PermitConfig
from load_planner.domain import (
    CargoSpecs,
    FitClass,
    GeoPoint,
    GeometryValidationError,
    InvalidInputError,
)
from load_planner.geo import path_length_miles
from load_planner.services import (
    LoadAnalysisService,
    RoutePricingService,
    format_permit_summary,
)


@pytest.fixture
def analysis_service(simple_profiles):
    return LoadAnalysisService(
        extractor=RuleBasedLoadExtractor(ExtractionConfig()),
        matcher=ConstraintTrailerMatcher(simple_profiles, MatchingConfig()),
        config=ExtractionConfig(),
    )


@pytest.fixture
def pricing_service(grid_boundaries, schedule_aa):
    return RoutePricingService(
        resolver=PolygonBoundaryResolver(grid_boundaries),
        pricer=SchedulePermitPricer({"AA": schedule_aa}, PermitConfig()),
    )


ROUTE = [GeoPoint(0.5, lon) for lon in (0.2, 0.7, 1.5, 1.8)]
WIDE_CARGO = CargoSpecs(width=150, height=170, length=600, gross_weight=70000)


def test_usable_load_gets_recommendations(analysis_service):
    analysis = analysis_service.analyze("48 x 8 x 9, 42000 lbs")

    assert analysis.is_usable
    assert analysis.has_feasible_trailer
    assert analysis.messages == ()
    assert analysis.best.fit is FitClass.LEGAL
    assert analysis.best.rank == 1


def test_incomplete_load_suppresses_recommendations(analysis_service):
    analysis = analysis_service.analyze("Width: 12 feet, need a quote asap")

    assert not analysis.is_usable
    assert analysis.missing_fields == ("length", "height", "weight")
    assert analysis.recommendations == ()
    assert analysis.messages == (
        "Could not extract: length, height, weight. "
        "Please provide dimensions (L x W x H) and weight.",
    )


def test_load_nothing_can_carry(analysis_service):
    analysis = analysis_service.analyze("Dimensions: 100 x 30 x 12 ft, 40000 lbs")

    assert analysis.is_usable
    assert not analysis.has_feasible_trailer
    assert analysis.messages == ("No trailer profile can carry this load.",)


@pytest.mark.parametrize("text", ["short", "   tiny   ", None, 42, b"48 x 8 x 9, 42000 lbs"])
def test_invalid_text_is_rejected(analysis_service, text):
    with pytest.raises(InvalidInputError):
        analysis_service.analyze(text)


def test_analyze_safe_returns_error_message(analysis_service):
    analysis, error = analysis_service.analyze_safe("short")

    assert analysis is None
    assert error.startswith("Invalid input:")


def test_format_analysis(analysis_service):
    text = analysis_service.format_result(analysis_service.analyze("48 x 8 x 9, 42000 lbs"))

    assert "42,000 lbs" in text
    assert "1. Flat [LEGAL]" in text


def test_route_pricing(pricing_service):
    pricing = pricing_service.price(ROUTE, WIDE_CARGO)

    assert pricing.jurisdiction_codes == ("AA", "BB")
    assert pricing.total_distance_miles == pytest.approx(path_length_miles(ROUTE))
    assert pricing.breakdown.for_jurisdiction("AA").fee == pytest.approx(75.0)
    assert pricing.breakdown.for_jurisdiction("BB").used_fallback


@pytest.mark.parametrize(
    "points, bad_index",
    [
        ([], None),
        ([GeoPoint(0.5, 0.5)], None),
        ([GeoPoint(0.5, 0.5), GeoPoint(float("nan"), 0.5)], 1),
        ([GeoPoint(95, 0.5), GeoPoint(0.5, 0.5)], 0),
        ([GeoPoint(0.5, 0.5), (0.5, 0.6)], 1),
    ],
)
def test_malformed_routes_are_rejected(pricing_service, points, bad_index):
    with pytest.raises(GeometryValidationError) as excinfo:
        pricing_service.price(points, WIDE_CARGO)

    assert excinfo.value.bad_index == bad_index
    assert excinfo.value.point_count == len(points)


@pytest.mark.parametrize(
    "cargo",
    [
        CargoSpecs(width=-1, height=170, length=600, gross_weight=70000),
        CargoSpecs(width=150, height=float("inf"), length=600, gross_weight=70000),
        CargoSpecs(width=150, height=170, length=float("nan"), gross_weight=70000),
        {"width": 150},
    ],
)
def test_malformed_cargo_is_rejected(pricing_service, cargo):
    with pytest.raises(InvalidInputError):
        pricing_service.price(ROUTE, cargo)


def test_price_polyline(pricing_service):
    pricing = pricing_service.price_polyline("_p~iF~ps|U_ulLnnqC_mqNvxq`@", WIDE_CARGO)

    assert pricing.jurisdiction_codes == ("UNMAPPED",)
    assert pricing.breakdown.jurisdictions[0].used_fallback


def test_price_polyline_rejects_garbage(pricing_service):
    with pytest.raises(GeometryValidationError):
        pricing_service.price_polyline("_p~iF~ps|", WIDE_CARGO)


def test_price_safe(pricing_service):
    pricing, error = pricing_service.price_safe([GeoPoint(0.5, 0.5)], WIDE_CARGO)

    assert pricing is None
    assert error.startswith("Invalid route:")

    pricing, error = pricing_service.price_safe(ROUTE, WIDE_CARGO)
    assert error is None
    assert pricing.total_distance_miles > 0


def test_permit_summary(pricing_service):
    summary = format_permit_summary(pricing_service.price(ROUTE, WIDE_CARGO).breakdown)

    assert summary.startswith("PERMIT SUMMARY")
    assert "AA (" in summary
    assert "escorts front" in summary
    assert "Warning: No fee schedule for jurisdiction BB" in summary
