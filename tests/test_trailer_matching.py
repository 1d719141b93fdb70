"""Tests for trailer matching and ranking."""

from dataclasses import replace

import pytest

from load_planner.adapters.matching import ConstraintTrailerMatcher
from load_planner.adapters.reference import CSVTrailerRepository
from load_planner.config import MatchingConfig, ReferenceDataConfig
from load_planner.domain import (
    EscortThresholds,
    FitClass,
    ParsedLoad,
    PermitType,
)


def make_load(length, width, height, weight, description=None):
    return ParsedLoad(
        length=length,
        width=width,
        height=height,
        weight=weight,
        confidence=1.0,
        description=description,
    )


@pytest.fixture
def bundled_profiles():
    return CSVTrailerRepository(ReferenceDataConfig()).load()


def test_legal_load_ranks_by_score_then_table_order(simple_profiles):
    matcher = ConstraintTrailerMatcher(simple_profiles, MatchingConfig())
    recommendations = matcher.match(make_load(240, 96, 96, 30000))

    assert [r.trailer_id for r in recommendations] == ["flat", "box", "low"]
    assert [r.rank for r in recommendations] == [1, 2, 3]
    assert all(r.fit is FitClass.LEGAL for r in recommendations)
    assert recommendations[0].is_best_choice
    assert not recommendations[1].is_best_choice
    assert recommendations[2].score < recommendations[0].score


def test_tiers_order_permit_before_escort(simple_profiles):
    matcher = ConstraintTrailerMatcher(simple_profiles, MatchingConfig())
    load = make_load(300, 110, 120, 45000, description="CAT excavator")

    recommendations = matcher.match(load)

    assert [r.trailer_id for r in recommendations] == ["low", "flat"]
    low, flat = recommendations
    assert low.fit is FitClass.PERMIT_REQUIRED
    assert low.additional_axles == 1
    assert PermitType.OVERSIZE_WIDTH in low.permits_required
    assert PermitType.OVERWEIGHT in low.permits_required
    assert low.flag("width").excess == 8
    assert low.flag("height") is None
    assert flat.fit is FitClass.ESCORT_REQUIRED
    assert any("Escort vehicles required" in w for w in flat.warnings)
    assert all(0 <= r.score <= 100 for r in recommendations)


def test_infeasible_profiles_are_excluded(simple_profiles):
    matcher = ConstraintTrailerMatcher(simple_profiles, MatchingConfig())
    load = make_load(300, 110, 80, 30000)

    ids = [r.trailer_id for r in matcher.match(load)]

    assert "box" not in ids
    assert ids


def test_nothing_can_carry_an_oversized_load(simple_profiles):
    matcher = ConstraintTrailerMatcher(simple_profiles, MatchingConfig())
    load = make_load(300, 250, 80, 30000)

    assert matcher.match(load) == []
    assert matcher.best_recommendation(load) is None


def test_weight_beyond_axle_capacity_is_infeasible(bundled_profiles):
    matcher = ConstraintTrailerMatcher(bundled_profiles, MatchingConfig())

    recommendations = matcher.match(make_load(300, 96, 100, 100000))

    assert [r.trailer_id for r in recommendations] == ["lowboy-3axle"]
    assert recommendations[0].additional_axles == 4


def test_profile_escort_thresholds_override_defaults(simple_profiles):
    custom = replace(
        simple_profiles[0],
        trailer_id="wide-ok",
        escort=EscortThresholds(width=200, height=250, length=1200),
    )
    matcher = ConstraintTrailerMatcher([simple_profiles[0], custom], MatchingConfig())

    recommendations = matcher.match(make_load(300, 150, 60, 30000))

    assert [r.trailer_id for r in recommendations] == ["wide-ok", "flat"]
    assert recommendations[0].fit is FitClass.PERMIT_REQUIRED
    assert recommendations[1].fit is FitClass.ESCORT_REQUIRED


def test_superload_alone_requires_a_permit(simple_profiles):
    config = MatchingConfig(superload_weight_lbs=50000)
    matcher = ConstraintTrailerMatcher(simple_profiles[:1], config)

    (recommendation,) = matcher.match(make_load(240, 96, 96, 30000))

    assert recommendation.fit is FitClass.PERMIT_REQUIRED
    assert recommendation.violations == ()
    assert recommendation.permits_required == (PermitType.SUPERLOAD,)


def test_legal_recommendations_filters_permitted_profiles(simple_profiles):
    matcher = ConstraintTrailerMatcher(simple_profiles, MatchingConfig())
    load = make_load(300, 96, 110, 30000)

    legal = matcher.legal_recommendations(load)

    assert [r.trailer_id for r in legal] == ["low"]
    assert all(r.is_legal for r in legal)


LOADS = [
    make_load(240, 96, 96, 30000),
    make_load(390, 126, 122, 52000, description="CAT 320 Excavator"),
    make_load(600, 140, 130, 70000),
    make_load(900, 160, 100, 40000),
    make_load(1800, 120, 110, 60000, description="wind turbine blade"),
    make_load(480, 100, 150, 90000),
]


@pytest.mark.parametrize("load", LOADS)
def test_matching_is_idempotent(bundled_profiles, load):
    matcher = ConstraintTrailerMatcher(bundled_profiles, MatchingConfig())

    assert matcher.match(load) == matcher.match(load)


@pytest.mark.parametrize("load", LOADS)
def test_recommendations_are_feasible_and_ordered(bundled_profiles, load):
    matcher = ConstraintTrailerMatcher(bundled_profiles, MatchingConfig())

    recommendations = matcher.match(load)

    assert all(r.fit is not FitClass.INFEASIBLE for r in recommendations)
    assert [r.rank for r in recommendations] == list(range(1, len(recommendations) + 1))
    for first, second in zip(recommendations, recommendations[1:]):
        assert first.fit.tier <= second.fit.tier
        if first.fit is second.fit:
            assert first.total_excess <= second.total_excess


def test_empty_load_fits_every_trailer_legally(bundled_profiles):
    matcher = ConstraintTrailerMatcher(bundled_profiles, MatchingConfig())

    recommendations = matcher.match(ParsedLoad.empty())

    assert sorted(r.trailer_id for r in recommendations) == sorted(
        p.trailer_id for p in bundled_profiles
    )
    assert all(r.fit is FitClass.LEGAL for r in recommendations)
    assert all(r.violations == () and r.additional_axles == 0 for r in recommendations)
