import math
import random

import pytest
from geographiclib.geodesic import Geodesic

from usnglib import GeographicPoint, Hemisphere, OutOfProjectionDomain, System, UtmUpsCoordinate
from usnglib.models import PrecisionLevel
from usnglib.projection import (
    central_meridian,
    forward,
    inverse,
    latitude_band_for,
    latlon_to_ups,
    latlon_to_utm,
    normalize_lon,
    polar_zone_for,
    ups_to_latlon,
    utm_zone_for,
)


def _sample_points(seed, count, lat_min, lat_max):
    rng = random.Random(seed)
    return [
        GeographicPoint(rng.uniform(lat_min, lat_max), rng.uniform(-180.0, 179.999999))
        for _ in range(count)
    ]


def _assert_same_point(actual, expected):
    assert actual.lat == pytest.approx(expected.lat, abs=1e-9)
    assert abs(normalize_lon(actual.lon - expected.lon)) <= 1e-9


@pytest.mark.parametrize("point", _sample_points(1, 400, -80.0, 83.999999))
def test_utm_round_trip(point):
    coord = forward(point)
    assert coord.system is System.UTM
    _assert_same_point(inverse(coord), point)


@pytest.mark.parametrize("point", _sample_points(2, 100, 84.0, 89.9) + _sample_points(3, 100, -89.9, -80.000001))
def test_ups_round_trip(point):
    coord = forward(point)
    assert coord.system is System.UPS
    _assert_same_point(inverse(coord), point)


def _near_east_edge(seed, count):
    rng = random.Random(seed)
    points = []
    for _ in range(count):
        zone = rng.randint(1, 60)
        lon = normalize_lon(central_meridian(zone) + rng.uniform(2.0, 2.999))
        points.append(GeographicPoint(rng.uniform(-79.0, 83.0), lon))
    return points


@pytest.mark.parametrize("point", _near_east_edge(4, 100))
def test_neighbouring_zone_round_trip(point):
    zone = utm_zone_for(point.lon) % 60 + 1
    coord = forward(point, zone_hint=zone)
    assert coord.zone_number == zone
    _assert_same_point(inverse(coord), point)


def test_central_meridian():
    assert central_meridian(1) == -177.0
    assert central_meridian(13) == -105.0
    assert central_meridian(60) == 177.0


@pytest.mark.parametrize("lon, zone", [
    (-180.0, 1), (-174.000001, 1), (-174.0, 2), (-105.0, 13), (0.0, 31), (179.9, 60), (180.0, 1),
])
def test_utm_zone_for(lon, zone):
    assert utm_zone_for(lon) == zone


@pytest.mark.parametrize("lat, band", [
    (-80.0, "C"), (-72.0, "D"), (-0.5, "M"), (0.0, "N"), (7.99, "N"), (72.0, "X"), (83.99, "X"), (84.0, "X"),
])
def test_latitude_band_for(lat, band):
    assert latitude_band_for(lat) == band


def test_polar_zone_for():
    assert polar_zone_for(-85.0, -10.0) == "A"
    assert polar_zone_for(-85.0, 10.0) == "B"
    assert polar_zone_for(85.0, -10.0) == "Y"
    assert polar_zone_for(85.0, 10.0) == "Z"


def test_central_meridian_on_equator():
    easting, northing = latlon_to_utm(0.0, -105.0, 13)
    assert easting == pytest.approx(500000.0, abs=1e-6)
    assert northing == pytest.approx(0.0, abs=1e-6)


def test_zone_edge_on_equator():
    easting, _ = latlon_to_utm(0.0, -108.0, 13)
    assert easting == pytest.approx(166021.4431, abs=1e-3)


def test_southern_false_northing():
    _, north = latlon_to_utm(-10.0, -105.0, 13, Hemisphere.NORTH)
    _, south = latlon_to_utm(-10.0, -105.0, 13, Hemisphere.SOUTH)
    assert south - north == pytest.approx(10000000.0)


def test_utm_scale_matches_geodesic_distance():
    # 0.9996 on the central meridian
    a = forward(GeographicPoint(45.0, -105.0))
    b = forward(GeographicPoint(45.01, -105.0))
    grid = b.northing - a.northing
    ground = Geodesic.WGS84.Inverse(45.0, -105.0, 45.01, -105.0)["s12"]
    assert grid / ground == pytest.approx(0.9996, abs=1e-6)


def test_ups_pole_is_false_origin():
    for lat in (90.0, -90.0):
        easting, northing = latlon_to_ups(lat, 0.0)
        assert easting == pytest.approx(2000000.0, abs=1e-6)
        assert northing == pytest.approx(2000000.0, abs=1e-6)


def test_ups_scale_at_pole():
    _, northing = latlon_to_ups(89.99, 0.0)
    grid = 2000000.0 - northing
    ground = Geodesic.WGS84.Inverse(89.99, 0.0, 90.0, 0.0)["s12"]
    assert grid / ground == pytest.approx(0.994, abs=1e-6)


def test_ups_orientation():
    # Greenwich points down the north grid and up the south grid
    _, n_north = latlon_to_ups(85.0, 0.0)
    _, n_south = latlon_to_ups(-85.0, 0.0)
    assert n_north < 2000000.0
    assert n_south > 2000000.0
    e_east, _ = latlon_to_ups(85.0, 90.0)
    assert e_east > 2000000.0


def test_ups_inverse_at_pole():
    lat, lon = ups_to_latlon(Hemisphere.SOUTH, 2000000.0, 2000000.0)
    assert lat == pytest.approx(-90.0)
    assert lon == 0.0


def test_forward_picks_ups_beyond_utm_limits():
    assert forward(GeographicPoint(84.0, 10.0)).latitude_band == "Z"
    assert forward(GeographicPoint(-80.5, -10.0)).latitude_band == "A"
    assert forward(GeographicPoint(-80.0, -10.0)).system is System.UTM


def test_forward_results_are_point_precision():
    assert forward(GeographicPoint(10.0, 10.0)).precision is PrecisionLevel.ONE_M


def test_zone_hint_outside_utm_rejected():
    with pytest.raises(OutOfProjectionDomain):
        forward(GeographicPoint(88.0, 10.0), zone_hint=32)


@pytest.mark.parametrize("zone", [0, 61])
def test_invalid_zone_hint_rejected(zone):
    with pytest.raises(OutOfProjectionDomain):
        forward(GeographicPoint(10.0, 10.0), zone_hint=zone)


def test_far_zone_hint_rejected():
    with pytest.raises(OutOfProjectionDomain):
        forward(GeographicPoint(10.0, 10.0), zone_hint=1)


def test_inverse_rejects_easting_outside_zone():
    coord = UtmUpsCoordinate(System.UTM, 13, "N", Hemisphere.NORTH, 1200000.0, 100.0)
    with pytest.raises(OutOfProjectionDomain):
        inverse(coord)


def test_inverse_rejects_latitude_beyond_utm():
    coord = UtmUpsCoordinate(System.UTM, 13, "C", Hemisphere.SOUTH, 500000.0, 234789.0)
    with pytest.raises(OutOfProjectionDomain):
        inverse(coord)


def test_inverse_rejects_ups_outside_cap():
    # about 1900 km from the pole, far outside the polar cap
    coord = UtmUpsCoordinate(System.UPS, None, "Z", Hemisphere.NORTH, 2000000.0, 100000.0)
    with pytest.raises(OutOfProjectionDomain):
        inverse(coord)


def test_inverse_rejects_ups_outside_grid():
    coord = UtmUpsCoordinate(System.UPS, None, "B", Hemisphere.SOUTH, 4500000.0, 2000000.0)
    with pytest.raises(OutOfProjectionDomain):
        inverse(coord)


def test_normalize_lon():
    assert normalize_lon(180.0) == -180.0
    assert normalize_lon(-181.0) == 179.0
    assert math.isclose(normalize_lon(540.5), -179.5)
