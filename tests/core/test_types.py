"""Tests for the shared data model."""
import dataclasses
import pytest

from aerosurvey.core.exceptions import InvalidParameter
from aerosurvey.core.types import (
    AltitudeReference,
    GeodeticCoord,
    LocalCoord,
    LocalOrigin,
    PathSegment,
    PathType,
    Waypoint,
)


def test_local_coord_offset_and_distance():
    a = LocalCoord(1.0, 2.0, 3.0)
    b = a.offset(3.0, 4.0)
    assert b == LocalCoord(4.0, 6.0, 3.0)
    assert a.distance_to(b) == pytest.approx(5.0)
    assert a.with_z(0.0) == LocalCoord(1.0, 2.0, 0.0)


def test_is_close_tolerance():
    a = LocalCoord(0.0, 0.0, 0.0)
    assert a.is_close(LocalCoord(5e-7, -5e-7, 0.0))
    assert not a.is_close(LocalCoord(2e-6, 0.0, 0.0))


def test_local_origin_from_geodetic():
    g = GeodeticCoord(10.0, 20.0, 30.0)
    o = LocalOrigin.from_geodetic(g)
    assert isinstance(o, LocalOrigin)
    assert (o.latitude, o.longitude, o.altitude) == (10.0, 20.0, 30.0)


def test_waypoint_is_immutable():
    wp = Waypoint(GeodeticCoord(0.0, 0.0, 0.0), LocalCoord(0.0, 0.0, 0.0))
    with pytest.raises(dataclasses.FrozenInstanceError):
        wp.local = LocalCoord(1.0, 0.0, 0.0)


def test_waypoint_ids_unique():
    a = Waypoint(GeodeticCoord(0.0, 0.0), LocalCoord(0.0, 0.0))
    b = Waypoint(GeodeticCoord(0.0, 0.0), LocalCoord(0.0, 0.0))
    assert a.id != b.id


def test_replace_waypoints_returns_new_segment():
    wp = Waypoint(GeodeticCoord(0.0, 0.0), LocalCoord(0.0, 0.0))
    seg = PathSegment(waypoints=(wp,), type=PathType.GRID)
    seg2 = seg.replace_waypoints([wp, wp])
    assert len(seg) == 1
    assert len(seg2) == 2
    assert seg2.id == seg.id


def test_command_altitude():
    g = GeodeticCoord(0.0, 0.0, 548.0)
    local = LocalCoord(0.0, 0.0, 60.0)
    assert Waypoint(g, local).command_altitude == 60.0
    assert Waypoint(g, local, altitude_ref=AltitudeReference.ELLIPSOID).command_altitude == 548.0
    with pytest.raises(InvalidParameter):
        Waypoint(g, local, altitude_ref=AltitudeReference.TERRAIN).command_altitude
