"""Tests for the ENU local frame."""
import math
import pytest

from aerosurvey.core.exceptions import InvalidParameter, MissingPrecondition
from aerosurvey.core.types import AltitudeReference, GeodeticCoord, LocalCoord, LocalOrigin, VehiclePose
from aerosurvey.frames.geodetic import geodetic_to_ecef
from aerosurvey.frames.local import (
    LocalFrame,
    ecef_to_local,
    enu_rotation,
    frame_for,
    geodetic_to_local,
    local_to_ecef,
    local_to_geodetic,
    pose_to_local,
)


def test_origin_maps_to_zero(origin):
    local = geodetic_to_local(origin, origin)
    assert local.x == pytest.approx(0.0, abs=1e-6)
    assert local.y == pytest.approx(0.0, abs=1e-6)
    assert local.z == pytest.approx(0.0, abs=1e-6)


def test_zero_maps_to_origin(origin):
    g = local_to_geodetic(LocalCoord(0.0, 0.0, 0.0), origin)
    assert g.latitude == pytest.approx(origin.latitude, abs=1e-9)
    assert g.longitude == pytest.approx(origin.longitude, abs=1e-9)
    assert g.altitude == pytest.approx(origin.altitude, abs=1e-3)


def test_rotation_is_orthonormal():
    r = enu_rotation(47.0, 8.0)
    for i in range(3):
        for j in range(3):
            dot = sum(r[i][k] * r[j][k] for k in range(3))
            assert dot == pytest.approx(1.0 if i == j else 0.0, abs=1e-12)


def test_axes_point_east_north_up(origin):
    north = GeodeticCoord(origin.latitude + 0.001, origin.longitude, origin.altitude)
    east = GeodeticCoord(origin.latitude, origin.longitude + 0.001, origin.altitude)
    above = GeodeticCoord(origin.latitude, origin.longitude, origin.altitude + 100.0)
    n = geodetic_to_local(north, origin)
    e = geodetic_to_local(east, origin)
    u = geodetic_to_local(above, origin)
    assert n.y > 100.0 and abs(n.x) < 1e-3
    assert e.x > 60.0 and abs(e.y) < 0.1
    assert u.z == pytest.approx(100.0, abs=1e-3)
    assert abs(u.x) < 1e-6 and abs(u.y) < 1e-6


def test_one_hundred_meters_north_is_about_0_0009_degrees(origin):
    g = local_to_geodetic(LocalCoord(0.0, 100.0, 0.0), origin)
    assert g.latitude - origin.latitude == pytest.approx(0.0009, abs=2e-5)
    assert g.longitude == pytest.approx(origin.longitude, abs=1e-9)


@pytest.mark.parametrize(
    "local",
    [
        LocalCoord(0.0, 0.0, 0.0),
        LocalCoord(123.4, -56.7, 60.0),
        LocalCoord(-5000.0, 5000.0, 500.0),
        LocalCoord(0.001, 0.002, -0.003),
    ],
)
def test_local_round_trip(origin, local):
    back = geodetic_to_local(local_to_geodetic(local, origin), origin)
    assert back.distance_to(local) < 1e-3


def test_geodetic_round_trip_within_tolerance():
    origin = LocalOrigin(-33.8688, 151.2093, 20.0)
    p = GeodeticCoord(-33.86, 151.22, 300.0)
    back = local_to_geodetic(geodetic_to_local(p, origin), origin)
    assert back.latitude == pytest.approx(p.latitude, abs=1e-6)
    assert back.longitude == pytest.approx(p.longitude, abs=1e-6)
    assert back.altitude == pytest.approx(p.altitude, abs=1e-3)


def test_ecef_round_trip(origin):
    local = LocalCoord(10.0, 20.0, 30.0)
    back = ecef_to_local(local_to_ecef(local, origin), origin)
    assert back.distance_to(local) < 1e-6


def test_missing_origin_raises():
    with pytest.raises(MissingPrecondition):
        geodetic_to_local(GeodeticCoord(0.0, 0.0, 0.0), None)
    with pytest.raises(MissingPrecondition):
        local_to_geodetic(LocalCoord(1.0, 1.0, 0.0), None)
    with pytest.raises(MissingPrecondition):
        LocalFrame(None)


def test_frame_cached_per_origin(origin):
    assert frame_for(origin) is frame_for(LocalOrigin(origin.latitude, origin.longitude, origin.altitude))
    assert frame_for(origin) is not frame_for(LocalOrigin(0.0, 0.0, 0.0))


def test_frame_origin_ecef_matches_forward_conversion(origin):
    frame = LocalFrame(origin)
    expected = geodetic_to_ecef(origin)
    assert frame.origin_ecef == expected
    assert frame.origin is origin


def test_pose_to_local_wraps_yaw(origin):
    pose = VehiclePose(GeodeticCoord(origin.latitude, origin.longitude, origin.altitude + 25.0), yaw_deg=-30.0)
    local, heading = pose_to_local(pose, origin)
    assert local.z == pytest.approx(25.0, abs=1e-3)
    assert heading == pytest.approx(330.0)


def test_frame_is_deterministic(origin):
    a = LocalFrame(origin).to_ecef(LocalCoord(1.0, 2.0, 3.0))
    b = LocalFrame(origin).to_ecef(LocalCoord(1.0, 2.0, 3.0))
    assert (a.x, a.y, a.z) == (b.x, b.y, b.z)
    assert not math.isnan(a.x)


def test_relative_pose_is_height_above_origin(origin):
    pose = VehiclePose(GeodeticCoord(origin.latitude, origin.longitude, 25.0, AltitudeReference.RELATIVE))
    local, _ = pose_to_local(pose, origin)
    assert local.z == pytest.approx(25.0, abs=1e-3)
    assert abs(local.x) < 1e-6 and abs(local.y) < 1e-6


def test_relative_and_ellipsoidal_agree(origin):
    rel = GeodeticCoord(origin.latitude + 0.001, origin.longitude, 60.0, AltitudeReference.RELATIVE)
    ell = GeodeticCoord(origin.latitude + 0.001, origin.longitude, origin.altitude + 60.0)
    assert geodetic_to_local(rel, origin).distance_to(geodetic_to_local(ell, origin)) < 1e-9


@pytest.mark.parametrize("ref", [AltitudeReference.SEA_LEVEL, AltitudeReference.TERRAIN])
def test_unresolvable_altitude_reference_rejected(origin, ref):
    with pytest.raises(InvalidParameter):
        geodetic_to_local(GeodeticCoord(origin.latitude, origin.longitude, 10.0, ref), origin)
