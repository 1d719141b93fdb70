"""End-to-end tests over the bundled reference tables."""

import logging

import pytest

from load_planner import logging_config
from load_planner.config import AppConfig, ObservabilityConfig
from load_planner.container import Container
from load_planner.domain import CargoSpecs, FitClass, GeoPoint, InvalidInputError
from load_planner.pipeline import (
    SAMPLE_REQUEST,
    SAMPLE_ROUTE,
    analyze_load_text,
    format_permit_summary,
    price_route,
    run_pipeline,
)
from load_planner.ports import TrailerRepositoryPort


@pytest.fixture
def container():
    return Container.create_default(AppConfig())


def test_sample_request_analysis(container):
    analysis = analyze_load_text(SAMPLE_REQUEST, container)

    load = analysis.parsed_load
    assert (load.length, load.width, load.height) == (390, 126, 122)
    assert load.weight == 52000
    assert load.origin == "Denver, CO"
    assert load.destination == "Salt Lake City, UT"
    assert analysis.best.fit is FitClass.PERMIT_REQUIRED
    assert all(r.fit is not FitClass.INFEASIBLE for r in analysis.recommendations)


def test_short_text_is_rejected(container):
    with pytest.raises(InvalidInputError):
        analyze_load_text("48x8x9", container)


def test_denver_to_salt_lake_city(container):
    analysis = analyze_load_text(SAMPLE_REQUEST, container)
    profile = container.resolve(TrailerRepositoryPort).get(analysis.best.trailer_id)
    cargo = CargoSpecs.for_load(
        analysis.parsed_load,
        profile,
        tractor_weight=container.config.matching.tractor_weight_lbs,
    )

    pricing = price_route(SAMPLE_ROUTE, cargo, container)

    assert pricing.jurisdiction_codes == ("CO", "UT")
    breakdown = pricing.breakdown
    assert breakdown.total_permit_fees == pytest.approx(sum(j.fee for j in breakdown.jurisdictions))
    assert all(j.oversize_required for j in breakdown.jurisdictions)
    assert not any(j.used_fallback for j in breakdown.jurisdictions)
    assert "Total permit fees" in format_permit_summary(breakdown)


def test_polyline_outside_bundled_region(container):
    cargo = CargoSpecs(width=120, height=150, length=600, gross_weight=80000)

    pricing = price_route("_p~iF~ps|U_ulLnnqC_mqNvxq`@", cargo, container)

    assert pricing.jurisdiction_codes == ("UNMAPPED",)
    assert any("UNMAPPED" in warning for warning in pricing.breakdown.warnings)


def test_route_through_unknown_jurisdiction_never_raises(container):
    # Starts in Kansas and ends east of the bundled region.
    route = [GeoPoint(38.0, -97.0), GeoPoint(38.2, -93.0), GeoPoint(38.5, -90.5)]
    cargo = CargoSpecs(width=150, height=160, length=700, gross_weight=90000)

    pricing = price_route(route, cargo, container)

    assert pricing.jurisdiction_codes == ("KS",)
    assert pricing.breakdown.total_cost > 0


def test_run_pipeline_prints_both_results(capsys):
    run_pipeline()

    output = capsys.readouterr().out
    assert "Load: 390 x 126 x 122 in" in output
    assert "PERMIT SUMMARY" in output


def test_configure_logging_applies_once(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_config, "_configured", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    logging_config.configure_logging(ObservabilityConfig(level="debug"))
    logging_config.configure_logging()

    assert len(calls) == 1
    assert calls[0]["level"] == logging.DEBUG
