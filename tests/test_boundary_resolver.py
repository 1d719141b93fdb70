"""Tests for splitting routes into per-jurisdiction distances."""

import logging

import pytest

from load_planner.adapters.geo import UNMAPPED_CODE, PolygonBoundaryResolver
from load_planner.domain import GeoPoint, JurisdictionBoundary, PolygonShape
from load_planner.geo import haversine_miles, path_length_miles


def along_equator_band(*longitudes, latitude=0.5):
    return [GeoPoint(latitude, lon) for lon in longitudes]


def test_route_within_one_jurisdiction(grid_boundaries):
    resolver = PolygonBoundaryResolver(grid_boundaries)
    points = [GeoPoint(0.1, 0.5), GeoPoint(0.5, 0.5), GeoPoint(0.9, 0.6)]

    segments = resolver.resolve(points)

    assert [s.code for s in segments] == ["AA"]
    assert segments[0].distance_miles == pytest.approx(path_length_miles(points))


def test_reentry_is_summed_under_one_code(grid_boundaries):
    resolver = PolygonBoundaryResolver(grid_boundaries)
    points = along_equator_band(0.2, 0.7, 1.5, 1.8, 1.5, 0.7, 0.2)

    segments = resolver.resolve(points)

    assert [s.code for s in segments] == ["AA", "BB"]
    aa = 2 * haversine_miles(points[0], points[1])
    assert segments[0].distance_miles == pytest.approx(aa)
    assert sum(s.distance_miles for s in segments) == pytest.approx(path_length_miles(points))


def test_leading_unmapped_distance_goes_to_first_jurisdiction(grid_boundaries, caplog):
    resolver = PolygonBoundaryResolver(grid_boundaries)
    points = along_equator_band(-0.5, -0.1, 0.5)

    with caplog.at_level(logging.WARNING):
        segments = resolver.resolve(points)

    assert [s.code for s in segments] == ["AA"]
    assert segments[0].distance_miles == pytest.approx(path_length_miles(points))
    assert "outside known jurisdictions" in caplog.text


def test_unmapped_distance_goes_to_last_jurisdiction(grid_boundaries):
    resolver = PolygonBoundaryResolver(grid_boundaries)
    points = along_equator_band(0.4, 1.4, 1.8, 3.0)

    segments = resolver.resolve(points)

    assert [s.code for s in segments] == ["AA", "BB"]
    assert segments[0].distance_miles == pytest.approx(haversine_miles(points[0], points[1]))
    assert segments[1].distance_miles == pytest.approx(path_length_miles(points[1:]))


def test_fully_unmapped_route_keeps_its_distance(grid_boundaries):
    resolver = PolygonBoundaryResolver(grid_boundaries)
    points = along_equator_band(0.2, 0.8, latitude=5.0)

    segments = resolver.resolve(points)

    assert [s.code for s in segments] == [UNMAPPED_CODE]
    assert segments[0].distance_miles == pytest.approx(path_length_miles(points))


def test_single_point_route_has_no_segments(grid_boundaries):
    resolver = PolygonBoundaryResolver(grid_boundaries)

    assert resolver.resolve([GeoPoint(0.5, 0.5)]) == []


@pytest.mark.parametrize(
    "longitudes",
    [
        (0.1, 0.9),
        (0.3, 1.7, 0.4, 1.2),
        (-1.0, 0.5, 1.5, 2.5, 3.5),
        (1.9, 1.1, 0.9, 0.1, -0.4),
    ],
)
def test_distance_is_conserved(grid_boundaries, longitudes):
    resolver = PolygonBoundaryResolver(grid_boundaries)
    points = along_equator_band(*longitudes)

    segments = resolver.resolve(points)

    assert sum(s.distance_miles for s in segments) == pytest.approx(path_length_miles(points))
    assert len({s.code for s in segments}) == len(segments)


def test_holes_and_exclaves():
    def square(min_lon, min_lat, max_lon, max_lat):
        return ((min_lon, min_lat), (max_lon, min_lat), (max_lon, max_lat), (min_lon, max_lat))

    boundary = JurisdictionBoundary(
        "CC",
        "Charlie",
        (
            PolygonShape(square(0, 0, 4, 4), holes=(square(1, 1, 3, 3),)),
            PolygonShape(square(10, 0, 11, 1)),
        ),
    )
    resolver = PolygonBoundaryResolver([boundary])

    assert resolver.locate(GeoPoint(0.5, 0.5)) == "CC"
    assert resolver.locate(GeoPoint(2, 2)) is None
    assert resolver.locate(GeoPoint(0.5, 10.5)) == "CC"
    assert resolver.locate(GeoPoint(0.5, 7)) is None
