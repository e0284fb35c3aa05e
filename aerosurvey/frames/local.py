"""
East-North-Up tangent frame anchored at a mission's LocalOrigin.
to_local = R . (p - origin_ecef); the inverse applies R transposed and adds origin_ecef back.
"""
import math
from functools import lru_cache
from typing import Tuple

from aerosurvey.core.exceptions import MissingPrecondition
from aerosurvey.core.types import (
    AltitudeReference,
    EcefVector,
    GeodeticCoord,
    LocalCoord,
    LocalOrigin,
    VehiclePose,
)
from aerosurvey.frames.geodetic import ecef_to_geodetic, geodetic_to_ecef, validate_geodetic

Matrix3 = Tuple[Tuple[float, float, float], Tuple[float, float, float], Tuple[float, float, float]]


def enu_rotation(latitude_deg: float, longitude_deg: float) -> Matrix3:
    """Rows are the East, North and Up unit vectors (in ECEF) at the given point."""
    lat = math.radians(latitude_deg)
    lon = math.radians(longitude_deg)
    sl, cl = math.sin(lat), math.cos(lat)
    so, co = math.sin(lon), math.cos(lon)
    return (
        (-so, co, 0.0),
        (-sl * co, -sl * so, cl),
        (cl * co, cl * so, sl),
    )


class LocalFrame:
    """
    ENU frame for one mission origin. Origin ECEF and the rotation are computed once;
    the object holds no mutable state, so one frame can serve any number of callers.
    """

    __slots__ = ("_origin", "_origin_ecef", "_rotation")

    def __init__(self, origin: LocalOrigin):
        if origin is None:
            raise MissingPrecondition("local origin is required")
        validate_geodetic(origin)
        self._origin = origin
        self._origin_ecef = geodetic_to_ecef(origin)
        self._rotation = enu_rotation(origin.latitude, origin.longitude)

    @property
    def origin(self) -> LocalOrigin:
        return self._origin

    @property
    def origin_ecef(self) -> EcefVector:
        return self._origin_ecef

    @property
    def rotation(self) -> Matrix3:
        return self._rotation

    def to_local(self, point: EcefVector) -> LocalCoord:
        o = self._origin_ecef
        dx, dy, dz = point.x - o.x, point.y - o.y, point.z - o.z
        e, n, u = self._rotation
        return LocalCoord(
            e[0] * dx + e[1] * dy + e[2] * dz,
            n[0] * dx + n[1] * dy + n[2] * dz,
            u[0] * dx + u[1] * dy + u[2] * dz,
        )

    def to_ecef(self, local: LocalCoord) -> EcefVector:
        o = self._origin_ecef
        e, n, u = self._rotation
        # R is orthonormal, so its transpose is its inverse
        return EcefVector(
            o.x + e[0] * local.x + n[0] * local.y + u[0] * local.z,
            o.y + e[1] * local.x + n[1] * local.y + u[1] * local.z,
            o.z + e[2] * local.x + n[2] * local.y + u[2] * local.z,
        )

    def resolve_altitude(self, coord: GeodeticCoord) -> GeodeticCoord:
        """RELATIVE altitudes are heights above the origin; returns the ellipsoidal equivalent."""
        if AltitudeReference(coord.altitude_ref) is AltitudeReference.RELATIVE:
            return GeodeticCoord(
                coord.latitude,
                coord.longitude,
                self._origin.altitude + coord.altitude,
                AltitudeReference.ELLIPSOID,
            )
        return coord

    def geodetic_to_local(self, coord: GeodeticCoord) -> LocalCoord:
        """SEA_LEVEL and TERRAIN altitudes need a geoid or terrain model and raise InvalidParameter."""
        return self.to_local(geodetic_to_ecef(self.resolve_altitude(coord)))

    def local_to_geodetic(self, local: LocalCoord) -> GeodeticCoord:
        return ecef_to_geodetic(self.to_ecef(local))

    def __repr__(self) -> str:
        o = self._origin
        return f"LocalFrame(origin=({o.latitude}, {o.longitude}, {o.altitude}))"


@lru_cache(maxsize=64)
def frame_for(origin: LocalOrigin) -> LocalFrame:
    """Cached LocalFrame per origin value. Origins are frozen, so the cache never goes stale."""
    return LocalFrame(origin)


def _frame(origin: LocalOrigin) -> LocalFrame:
    if origin is None:
        raise MissingPrecondition("local origin is required")
    return frame_for(origin)


def ecef_to_local(point: EcefVector, origin: LocalOrigin) -> LocalCoord:
    return _frame(origin).to_local(point)


def local_to_ecef(local: LocalCoord, origin: LocalOrigin) -> EcefVector:
    return _frame(origin).to_ecef(local)


def geodetic_to_local(coord: GeodeticCoord, origin: LocalOrigin) -> LocalCoord:
    return _frame(origin).geodetic_to_local(coord)


def local_to_geodetic(local: LocalCoord, origin: LocalOrigin) -> GeodeticCoord:
    return _frame(origin).local_to_geodetic(local)


def pose_to_local(pose: VehiclePose, origin: LocalOrigin) -> Tuple[LocalCoord, float]:
    """
    Express a live vehicle pose in the mission frame for display.
    Returns (position, heading_deg); heading stays clockwise from north in [0, 360).
    """
    local = geodetic_to_local(pose.geodetic, origin)
    return local, pose.yaw_deg % 360.0
