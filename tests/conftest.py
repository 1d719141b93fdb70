"""Shared fixtures: substitute reference tables and clean global state."""

import pytest

from load_planner.config import reset_config
from load_planner.container import reset_container
from load_planner.domain import (
    AxleConfiguration,
    DimensionLimits,
    DimensionSurcharge,
    FeeSchedule,
    JurisdictionBoundary,
    LoadingMethod,
    OversizeSchedule,
    OverweightSchedule,
    PolygonShape,
    SuperloadThresholds,
    TrailerCategory,
    TrailerProfile,
    WeightBracket,
)


@pytest.fixture(autouse=True)
def _fresh_globals():
    reset_config()
    reset_container()
    yield
    reset_container()
    reset_config()


def square(min_lon, min_lat, max_lon, max_lat):
    return (
        (min_lon, min_lat),
        (max_lon, min_lat),
        (max_lon, max_lat),
        (min_lon, max_lat),
    )


@pytest.fixture
def grid_boundaries():
    """Two unit squares side by side: AA west of lon 1, BB east of it."""
    return [
        JurisdictionBoundary("AA", "Alpha", (PolygonShape(square(0, 0, 1, 1)),)),
        JurisdictionBoundary("BB", "Bravo", (PolygonShape(square(1, 0, 2, 1)),)),
    ]


@pytest.fixture
def simple_profiles():
    return [
        TrailerProfile(
            trailer_id="flat",
            name="Flat",
            legal=DimensionLimits(length=576, width=102, height=102, weight=48000),
            max_length=720,
            max_width=192,
            max_height=132,
            deck_height=60,
            tare_weight=15000,
            axles=AxleConfiguration(2, 4, 12000),
        ),
        TrailerProfile(
            trailer_id="low",
            name="Low",
            legal=DimensionLimits(length=576, width=102, height=144, weight=40000),
            max_length=720,
            max_width=192,
            max_height=174,
            category=TrailerCategory.LOWBOY,
            loading_method=LoadingMethod.DRIVE_ON,
            deck_height=18,
            tare_weight=20000,
            axles=AxleConfiguration(2, 5, 15000),
        ),
        TrailerProfile(
            trailer_id="box",
            name="Box",
            legal=DimensionLimits(length=576, width=102, height=102, weight=44000),
            max_length=576,
            max_width=102,
            max_height=102,
            category=TrailerCategory.CONESTOGA,
            loading_method=LoadingMethod.FORKLIFT,
            axles=AxleConfiguration(2, 2, 0),
        ),
    ]


@pytest.fixture
def schedule_aa():
    return FeeSchedule(
        code="AA",
        name="Alpha",
        legal_limits=DimensionLimits(length=780, width=102, height=162, weight=80000),
        oversize=OversizeSchedule(
            base_fee=50,
            surcharges=(
                DimensionSurcharge("width", 144, 25),
                DimensionSurcharge("height", 180, 30),
            ),
        ),
        overweight=OverweightSchedule(
            base_fee=40,
            per_mile_fee=0.1,
            ton_mile_fee=0.01,
            weight_brackets=(WeightBracket(120000, 100),),
            extra_legal_fee=10,
        ),
        superload=SuperloadThresholds(width=192, height=200, length=1440, weight=200000),
        travel_restrictions=("No night travel",),
    )
