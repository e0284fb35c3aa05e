"""
WGS84 ellipsoid: geodetic (lat, lon, h) <-> ECEF (x, y, z).
Forward conversion is closed-form; the inverse starts from Bowring's parametric
latitude and refines it by fixed-point iteration.
"""
import math

from aerosurvey.core.exceptions import InvalidParameter, OutOfRange
from aerosurvey.core.types import AltitudeReference, EcefVector, GeodeticCoord

# WGS84 defining constants
WGS84_A = 6378137.0
WGS84_F = 1.0 / 298.257223563
WGS84_B = WGS84_A * (1.0 - WGS84_F)
WGS84_E2 = WGS84_F * (2.0 - WGS84_F)  # first eccentricity squared
WGS84_EP2 = WGS84_E2 / (1.0 - WGS84_E2)  # second eccentricity squared

_MAX_ITERATIONS = 10
_LAT_TOLERANCE_RAD = 1e-12
_POLAR_AXIS_M = 1e-9


def validate_geodetic(coord: GeodeticCoord) -> None:
    """Raise OutOfRange unless lat in [-90, 90], lon in [-180, 180] and altitude is finite."""
    lat, lon, alt = coord.latitude, coord.longitude, coord.altitude
    if not (math.isfinite(lat) and math.isfinite(lon) and math.isfinite(alt)):
        raise OutOfRange(f"non-finite geodetic component: ({lat}, {lon}, {alt})")
    if not -90.0 <= lat <= 90.0:
        raise OutOfRange(f"latitude {lat} outside [-90, 90]")
    if not -180.0 <= lon <= 180.0:
        raise OutOfRange(f"longitude {lon} outside [-180, 180]")


def prime_vertical_radius(lat_rad: float) -> float:
    """Radius of curvature in the prime vertical, N(lat)."""
    s = math.sin(lat_rad)
    return WGS84_A / math.sqrt(1.0 - WGS84_E2 * s * s)


def geodetic_to_ecef(coord: GeodeticCoord) -> EcefVector:
    """
    Geodetic (deg, deg, m above ellipsoid) to ECEF meters.
    Only ELLIPSOID altitudes are accepted; RELATIVE ones are resolved by the local frame first.
    """
    validate_geodetic(coord)
    ref = AltitudeReference(coord.altitude_ref)
    if ref is not AltitudeReference.ELLIPSOID:
        raise InvalidParameter(f"altitude must be ellipsoidal for ECEF conversion, got {ref.value}")
    lat = math.radians(coord.latitude)
    lon = math.radians(coord.longitude)
    n = prime_vertical_radius(lat)
    h = coord.altitude
    cos_lat = math.cos(lat)
    x = (n + h) * cos_lat * math.cos(lon)
    y = (n + h) * cos_lat * math.sin(lon)
    z = (n * (1.0 - WGS84_E2) + h) * math.sin(lat)
    return EcefVector(x, y, z)


def ecef_to_geodetic(vec: EcefVector) -> GeodeticCoord:
    """
    ECEF meters to geodetic (deg, deg, m above ellipsoid).
    Sub-millimeter for any altitude in atmospheric flight range.
    """
    x, y, z = vec.x, vec.y, vec.z
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        raise OutOfRange(f"non-finite ECEF component: ({x}, {y}, {z})")

    p = math.hypot(x, y)
    lon = math.atan2(y, x)

    if p < _POLAR_AXIS_M:
        # On the rotation axis longitude is arbitrary; keep atan2's answer.
        lat_deg = 90.0 if z >= 0 else -90.0
        return GeodeticCoord(lat_deg, math.degrees(lon), abs(z) - WGS84_B, AltitudeReference.ELLIPSOID)

    # Bowring's initial estimate
    theta = math.atan2(z * WGS84_A, p * WGS84_B)
    st, ct = math.sin(theta), math.cos(theta)
    lat = math.atan2(
        z + WGS84_EP2 * WGS84_B * st ** 3,
        p - WGS84_E2 * WGS84_A * ct ** 3,
    )

    for _ in range(_MAX_ITERATIONS):
        n = prime_vertical_radius(lat)
        h = p / math.cos(lat) - n
        new_lat = math.atan2(z, p * (1.0 - WGS84_E2 * n / (n + h)))
        if abs(new_lat - lat) < _LAT_TOLERANCE_RAD:
            lat = new_lat
            break
        lat = new_lat

    sin_lat = math.sin(lat)
    # Stable at every latitude, unlike p / cos(lat) - N near the poles.
    h = p * math.cos(lat) + z * sin_lat - WGS84_A * math.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)
    return GeodeticCoord(math.degrees(lat), math.degrees(lon), h, AltitudeReference.ELLIPSOID)
