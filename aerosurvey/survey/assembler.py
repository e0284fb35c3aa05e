"""
Path assembly: takeoff ground point + raster waypoints + mission-end transition.
Each step only appends; the result is a new PathSegment and no existing segment is touched.
"""
import logging
import math
from typing import Any, Callable, List, Optional, Sequence

from aerosurvey.core.chunked import CHUNK_SIZE, process_in_chunks
from aerosurvey.core.exceptions import InvalidParameter, MissingPrecondition
from aerosurvey.core.types import (
    ActionType,
    AltitudeReference,
    CameraPose,
    LocalCoord,
    LocalOrigin,
    MissionAction,
    MissionEndAction,
    PathSegment,
    PathType,
    SafetyParams,
    Waypoint,
)
from aerosurvey.frames.local import frame_for

logger = logging.getLogger(__name__)

COINCIDENT_EPS_M = 1e-6
# Trigger distance 0 disarms distance-based capture.
STOP_CAPTURE_DISTANCE_M = 0.0
DEFAULT_SPEED_MS = 5.0


def heading_between(a: LocalCoord, b: LocalCoord) -> float:
    """ENU heading from a to b, clockwise from north in [0, 360). 0 for coincident points."""
    dx, dy = b.x - a.x, b.y - a.y
    if abs(dx) < 1e-12 and abs(dy) < 1e-12:
        return 0.0
    return math.degrees(math.atan2(dx, dy)) % 360.0


def waypoint_from_local(
    local: LocalCoord,
    origin: LocalOrigin,
    altitude_ref: AltitudeReference = AltitudeReference.RELATIVE,
    camera: Optional[CameraPose] = None,
    speed: Optional[float] = None,
    hold_time: float = 0.0,
    actions: Sequence[MissionAction] = (),
) -> Waypoint:
    """
    Full waypoint with its geodetic position computed from local under origin.
    altitude_ref must be RELATIVE or ELLIPSOID, the two altitudes a waypoint carries.
    """
    if origin is None:
        raise MissingPrecondition("local origin is required to create a waypoint")
    altitude_ref = AltitudeReference(altitude_ref)
    if altitude_ref not in (AltitudeReference.RELATIVE, AltitudeReference.ELLIPSOID):
        raise InvalidParameter(f"waypoints are commanded RELATIVE or ELLIPSOID, got {altitude_ref.value}")
    geodetic = frame_for(origin).local_to_geodetic(local)
    return Waypoint(
        geodetic=geodetic,
        local=local,
        altitude_ref=altitude_ref,
        camera=camera or CameraPose(),
        speed=speed,
        hold_time=hold_time,
        actions=tuple(actions),
    )


def _check_preconditions(raster_points, takeoff, origin) -> None:
    if origin is None:
        raise MissingPrecondition("mission local origin is not set")
    if takeoff is None:
        raise MissingPrecondition("mission takeoff point is not set")
    if not raster_points:
        raise MissingPrecondition("raster pattern is empty")


def _raster_waypoint_builder(
    raster_points: Sequence[LocalCoord],
    origin: LocalOrigin,
    altitude_ref: AltitudeReference,
    camera_pitch_deg: float,
    speed: float,
    photo_spacing_m: Optional[float],
) -> Callable[[int], Waypoint]:
    """
    Maps a raster index to its waypoint; the camera faces the direction of travel.
    Points come in (entry, exit) pairs per line: even indices arm distance capture,
    odd indices disarm it so nothing is shot on the legs between lines.
    """
    last = len(raster_points) - 1
    start_capture = stop_capture = ()
    if photo_spacing_m is not None:
        start_capture = (MissionAction(ActionType.TAKE_PHOTO, {"trigger_distance_m": photo_spacing_m}),)
        stop_capture = (MissionAction(ActionType.TAKE_PHOTO, {"trigger_distance_m": STOP_CAPTURE_DISTANCE_M}),)

    def build(i: int) -> Waypoint:
        here = raster_points[i]
        if i < last:
            heading = heading_between(here, raster_points[i + 1])
        elif last > 0:
            heading = heading_between(raster_points[i - 1], here)
        else:
            heading = 0.0
        return waypoint_from_local(
            here,
            origin,
            altitude_ref=altitude_ref,
            camera=CameraPose(heading_deg=heading, pitch_deg=camera_pitch_deg),
            speed=speed,
            actions=start_capture if i % 2 == 0 else stop_capture,
        )

    return build


def _finish(
    raster_waypoints: List[Waypoint],
    raster_points: Sequence[LocalCoord],
    takeoff: LocalCoord,
    safety: SafetyParams,
    origin: LocalOrigin,
    altitude_ref: AltitudeReference,
    speed: float,
    path_type: PathType,
) -> PathSegment:
    ground = LocalCoord(takeoff.x, takeoff.y, 0.0)
    waypoints = [waypoint_from_local(ground, origin, altitude_ref=altitude_ref, speed=speed)]
    waypoints.extend(raster_waypoints)

    end_action = MissionEndAction(safety.mission_end_action)
    if end_action in (MissionEndAction.RTL, MissionEndAction.LAND):
        if raster_points[-1].is_close(ground, COINCIDENT_EPS_M):
            logger.debug("Last raster point is the takeoff ground point; no landing leg appended")
        else:
            waypoints.append(waypoint_from_local(ground, origin, altitude_ref=altitude_ref, speed=speed))

    segment = PathSegment(
        waypoints=tuple(waypoints),
        type=path_type,
        speed=speed,
        metadata={
            "mission_end_action": end_action.value,
            "rtl_altitude": safety.rtl_altitude,
            "climb_speed": safety.climb_speed,
        },
    )
    logger.info("Assembled %s segment with %d waypoints", path_type.value, len(segment))
    return segment


def assemble_path(
    raster_points: Sequence[LocalCoord],
    takeoff: LocalCoord,
    safety: Optional[SafetyParams],
    origin: LocalOrigin,
    altitude_ref: AltitudeReference = AltitudeReference.RELATIVE,
    speed: float = DEFAULT_SPEED_MS,
    camera_pitch_deg: float = -90.0,
    photo_spacing_m: Optional[float] = None,
    path_type: PathType = PathType.GRID,
) -> PathSegment:
    """
    Build the complete flight path for a raster.

    raster_points are (entry, exit) pairs per line, as generate_raster returns them.
    Order: takeoff ground point (takeoff x/y, z=0), every raster point as a waypoint,
    then for RTL or LAND a landing ground point at takeoff x/y, skipped when the last
    raster point already sits there. HOLD ends on the last raster point.
    safety None means RTL with default altitudes.

    Raises:
        MissingPrecondition: origin or takeoff absent, or raster_points empty.
    """
    _check_preconditions(raster_points, takeoff, origin)
    safety = safety or SafetyParams()
    build = _raster_waypoint_builder(raster_points, origin, altitude_ref, camera_pitch_deg, speed, photo_spacing_m)
    raster_waypoints = [build(i) for i in range(len(raster_points))]
    return _finish(raster_waypoints, raster_points, takeoff, safety, origin, altitude_ref, speed, path_type)


async def assemble_path_async(
    raster_points: Sequence[LocalCoord],
    takeoff: LocalCoord,
    safety: Optional[SafetyParams],
    origin: LocalOrigin,
    altitude_ref: AltitudeReference = AltitudeReference.RELATIVE,
    speed: float = DEFAULT_SPEED_MS,
    camera_pitch_deg: float = -90.0,
    photo_spacing_m: Optional[float] = None,
    path_type: PathType = PathType.GRID,
    chunk_size: int = CHUNK_SIZE,
    on_progress: Optional[Callable[[float], None]] = None,
    cancel: Any = None,
) -> PathSegment:
    """
    Same result as assemble_path, with waypoint synthesis run through the chunked
    processor. Raises Cancelled (partial = raster waypoints built so far) if cancel is set.
    """
    _check_preconditions(raster_points, takeoff, origin)
    safety = safety or SafetyParams()
    build = _raster_waypoint_builder(raster_points, origin, altitude_ref, camera_pitch_deg, speed, photo_spacing_m)
    result = await process_in_chunks(
        range(len(raster_points)), build, chunk_size=chunk_size, on_progress=on_progress, cancel=cancel
    )
    raster_waypoints = result.raise_if_cancelled()
    return _finish(raster_waypoints, raster_points, takeoff, safety, origin, altitude_ref, speed, path_type)
