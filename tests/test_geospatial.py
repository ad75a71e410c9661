import math

import pytest

from placeintel.models.domain import Coordinate
from placeintel.services.geospatial import (
    EARTH_RADIUS_M,
    bearing_between,
    bearing_degrees,
    bounding_box,
    centroid,
    distance_meters,
    haversine_m,
    is_inside_circle,
    within_radius,
)

PARIS = Coordinate(48.8566, 2.3522)
LONDON = Coordinate(51.5074, -0.1278)


def test_distance_is_zero_for_identical_points():
    assert distance_meters(PARIS, PARIS) == 0.0


def test_distance_is_symmetric_and_matches_known_value():
    forward = distance_meters(PARIS, LONDON)
    backward = distance_meters(LONDON, PARIS)

    assert forward == pytest.approx(backward)
    assert forward == pytest.approx(343_500, rel=0.01)


def test_one_degree_of_latitude_uses_mean_earth_radius():
    assert haversine_m(0.0, 0.0, 1.0, 0.0) == pytest.approx(EARTH_RADIUS_M * math.pi / 180)


@pytest.mark.parametrize(
    "target, expected",
    [
        ((1.0, 0.0), 0.0),
        ((0.0, 1.0), 90.0),
        ((-1.0, 0.0), 180.0),
        ((0.0, -1.0), 270.0),
    ],
)
def test_bearing_cardinal_directions(target, expected):
    assert bearing_degrees(0.0, 0.0, *target) == pytest.approx(expected)


def test_bearing_is_within_range():
    bearing = bearing_between(LONDON, PARIS)

    assert 0.0 <= bearing < 360.0
    assert bearing == pytest.approx(148.0, abs=1.0)


def test_centroid_of_empty_input_is_none():
    assert centroid([]) is None


def test_centroid_of_single_point_is_unchanged():
    assert centroid([PARIS]) is PARIS


def test_centroid_of_nearby_points_is_their_mean():
    points = [Coordinate(10.0, 20.0), Coordinate(10.002, 20.002)]

    center = centroid(points)

    assert center.latitude == pytest.approx(10.001, abs=1e-6)
    assert center.longitude == pytest.approx(20.001, abs=1e-6)


def test_centroid_across_antimeridian_stays_near_it():
    center = centroid([Coordinate(0.0, 179.9), Coordinate(0.0, -179.9)])

    assert abs(center.longitude) == pytest.approx(180.0, abs=1e-6)
    assert center.latitude == pytest.approx(0.0, abs=1e-9)


def test_bounding_box():
    assert bounding_box([]) is None

    southwest, northeast = bounding_box([PARIS, LONDON, Coordinate(50.0, 1.0)])

    assert southwest == Coordinate(48.8566, -0.1278)
    assert northeast == Coordinate(51.5074, 2.3522)


def test_within_radius_is_inclusive():
    north = Coordinate(50.0 / (EARTH_RADIUS_M * math.pi / 180), 0.0)
    origin = Coordinate(0.0, 0.0)

    assert within_radius(origin, north, 50.0 + 1e-6)
    assert not within_radius(origin, north, 49.0)
    assert is_inside_circle(north.latitude, north.longitude, 0.0, 0.0, 51.0)
