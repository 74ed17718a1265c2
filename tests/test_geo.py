import math

import pytest

from nearfeed.core.geo import EARTH_RADIUS_KM, GeoPoint, distance, haversine_km

POINTS = [
    GeoPoint(lat=0.0, lon=0.0),
    GeoPoint(lat=37.7749, lon=-122.4194),
    GeoPoint(lat=48.8566, lon=2.3522),
    GeoPoint(lat=-33.8688, lon=151.2093),
    GeoPoint(lat=89.9, lon=179.9),
    # Out of range on purpose: no validation, still a finite number.
    GeoPoint(lat=123.0, lon=-400.0),
]


@pytest.mark.parametrize("a", POINTS)
def test_distance_to_self_is_zero(a):
    assert distance(a, a) < 1e-9


@pytest.mark.parametrize("a", POINTS)
@pytest.mark.parametrize("b", POINTS)
def test_distance_is_symmetric_and_non_negative(a, b):
    d_ab = distance(a, b)
    assert d_ab >= 0
    assert math.isfinite(d_ab)
    assert d_ab == pytest.approx(distance(b, a), abs=1e-9)


def test_one_degree_on_equator_is_about_111_km():
    d = haversine_km(GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=0.0, lon=1.0))
    assert d == pytest.approx(EARTH_RADIUS_KM * math.pi / 180, rel=1e-9)
    assert d == pytest.approx(111.19, abs=0.01)


def test_antipodal_points_are_half_circumference():
    d = distance(GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=0.0, lon=180.0))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)


def test_known_city_pair():
    # San Francisco -> Paris is roughly 8,960 km.
    d = distance(POINTS[1], POINTS[2])
    assert 8900 < d < 9000


def test_nan_coordinate_is_not_clamped_to_zero():
    assert math.isnan(distance(GeoPoint(lat=float("nan"), lon=0.0), GeoPoint(lat=0.0, lon=0.0)))
