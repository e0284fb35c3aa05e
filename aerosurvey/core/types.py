"""
Data model shared by the frame transforms and the survey path generator.
Geodetic angles in degrees; distances and altitudes in meters; headings in degrees
clockwise from north.
"""
import math
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .exceptions import InvalidParameter


def _new_id() -> str:
    return str(uuid.uuid4())


class AltitudeReference(Enum):
    """What an altitude value is measured from."""

    ELLIPSOID = "ELLIPSOID"
    SEA_LEVEL = "SEA_LEVEL"
    TERRAIN = "TERRAIN"
    RELATIVE = "RELATIVE"


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class MissionEndAction(Enum):
    RTL = "RTL"
    LAND = "LAND"
    HOLD = "HOLD"


class PathType(Enum):
    STRAIGHT = "STRAIGHT"
    GRID = "GRID"
    POLYGON = "POLYGON"
    PERIMETER = "PERIMETER"
    CUSTOM = "CUSTOM"


class ActionType(Enum):
    TAKE_PHOTO = "TAKE_PHOTO"
    START_VIDEO = "START_VIDEO"
    STOP_VIDEO = "STOP_VIDEO"
    ROTATE_GIMBAL = "ROTATE_GIMBAL"
    CUSTOM_PAYLOAD = "CUSTOM_PAYLOAD"


@dataclass(frozen=True)
class GeodeticCoord:
    """WGS84 latitude/longitude (deg) and altitude (m), tagged with its reference."""

    latitude: float
    longitude: float
    altitude: float = 0.0
    altitude_ref: AltitudeReference = AltitudeReference.ELLIPSOID


@dataclass(frozen=True)
class LocalOrigin(GeodeticCoord):
    """
    Geodetic anchor of a mission's ENU frame. Fixed when the mission is created;
    every stored LocalCoord of that mission is relative to it.
    """

    @classmethod
    def from_geodetic(cls, coord: GeodeticCoord) -> "LocalOrigin":
        return cls(coord.latitude, coord.longitude, coord.altitude, coord.altitude_ref)


@dataclass(frozen=True)
class EcefVector:
    """Earth-centered, earth-fixed position in meters. Derived only."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class LocalCoord:
    """East-North-Up position relative to a mission origin."""

    x: float
    y: float
    z: float = 0.0

    def offset(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "LocalCoord":
        return LocalCoord(self.x + dx, self.y + dy, self.z + dz)

    def with_z(self, z: float) -> "LocalCoord":
        return LocalCoord(self.x, self.y, z)

    def distance_to(self, other: "LocalCoord") -> float:
        return math.sqrt(
            (other.x - self.x) ** 2 + (other.y - self.y) ** 2 + (other.z - self.z) ** 2
        )

    def is_close(self, other: "LocalCoord", eps: float = 1e-6) -> bool:
        """True if every component differs by at most eps meters."""
        return (
            abs(self.x - other.x) <= eps
            and abs(self.y - other.y) <= eps
            and abs(self.z - other.z) <= eps
        )


@dataclass(frozen=True)
class RenderCoord:
    """Position in a consumer's axis convention. Produced on demand, never persisted."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class CameraProfile:
    sensor_width_mm: float
    sensor_height_mm: float
    image_width_px: int
    image_height_px: int
    focal_length_mm: float
    name: str = ""


@dataclass(frozen=True)
class CoverageParams:
    """
    Raster pattern parameters.
    overlap is the side overlap between adjacent lines, as a fraction in (0, 1).
    line_spacing None means: derive it from the camera footprint and overlap.
    front_overlap sets the photo trigger distance along each line.
    """

    altitude_agl: float
    overlap: float
    orientation: Orientation = Orientation.HORIZONTAL
    snake: bool = True
    pattern_length: float = 100.0
    number_of_lines: int = 1
    line_spacing: Optional[float] = None
    front_overlap: float = 0.75


@dataclass(frozen=True)
class SafetyParams:
    mission_end_action: MissionEndAction = MissionEndAction.RTL
    rtl_altitude: float = 50.0
    climb_speed: float = 3.0


@dataclass(frozen=True)
class CameraPose:
    """Gimbal orientation at a waypoint. Pitch -90 is nadir."""

    heading_deg: float = 0.0
    pitch_deg: float = -90.0
    roll_deg: float = 0.0


@dataclass(frozen=True)
class MissionAction:
    type: ActionType
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Waypoint:
    """
    A flight-plan point carrying both its geodetic and local positions.
    Both describe the same physical point under the mission origin, so a waypoint
    is never edited in place; build a new one from the new local position instead.

    geodetic.altitude is always ellipsoidal. altitude_ref says which altitude the
    flight plan commands: RELATIVE flies local.z (height above the origin),
    ELLIPSOID flies geodetic.altitude. See command_altitude.
    """

    geodetic: GeodeticCoord
    local: LocalCoord
    altitude_ref: AltitudeReference = AltitudeReference.RELATIVE
    camera: CameraPose = field(default_factory=CameraPose)
    speed: Optional[float] = None
    hold_time: float = 0.0
    actions: Tuple[MissionAction, ...] = ()
    id: str = field(default_factory=_new_id)

    @property
    def command_altitude(self) -> float:
        ref = AltitudeReference(self.altitude_ref)
        if ref is AltitudeReference.RELATIVE:
            return self.local.z
        if ref is AltitudeReference.ELLIPSOID:
            return self.geodetic.altitude
        raise InvalidParameter(f"no commanded altitude for reference {ref.value}")


@dataclass(frozen=True)
class PathSegment:
    """Ordered waypoints in flight order. Replacing waypoints yields a new segment."""

    waypoints: Tuple[Waypoint, ...]
    type: PathType = PathType.GRID
    speed: float = 5.0
    id: str = field(default_factory=_new_id)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.waypoints)

    def replace_waypoints(self, waypoints) -> "PathSegment":
        return replace(self, waypoints=tuple(waypoints))


@dataclass(frozen=True)
class VehiclePose:
    """Live pose reported by the telemetry bridge."""

    geodetic: GeodeticCoord
    roll_deg: float = 0.0
    pitch_deg: float = 0.0
    yaw_deg: float = 0.0
