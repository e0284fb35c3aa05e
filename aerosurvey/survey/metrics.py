"""
Mission summary numbers over assembled segments: 3D path length in the local
frame, flight time at segment speed, photo count, and decimated previews.
"""
import math
from dataclasses import dataclass, replace
from typing import Sequence

from aerosurvey.core.exceptions import InvalidParameter
from aerosurvey.core.types import ActionType, PathSegment, Waypoint

METERS_TO_FEET = 3.28084
PREVIEW_POINT_LIMIT = 50
_LEG_EPS_M = 1e-9


@dataclass(frozen=True)
class MissionSummary:
    segment_count: int
    waypoint_count: int
    total_distance_m: float
    total_distance_ft: float
    estimated_flight_time_s: float
    estimated_flight_time: str
    photo_count: int


def path_length_m(segment: PathSegment) -> float:
    """Sum of straight 3D legs between consecutive waypoints."""
    wps = segment.waypoints
    return sum(wps[i - 1].local.distance_to(wps[i].local) for i in range(1, len(wps)))


def estimate_flight_time_s(segment: PathSegment) -> float:
    if segment.speed <= 0:
        raise InvalidParameter(f"segment speed must be positive, got {segment.speed}")
    return path_length_m(segment) / segment.speed


def format_mm_ss(seconds: float) -> str:
    """Seconds as MM:SS; minutes keep growing past 59."""
    total = int(round(seconds))
    return f"{total // 60:02d}:{total % 60:02d}"


def _trigger_distance(wp: Waypoint):
    for action in wp.actions:
        if action.type is ActionType.TAKE_PHOTO:
            return action.params.get("trigger_distance_m")
    return None


def photo_count(segment: PathSegment) -> int:
    """
    Photos shot on legs that start at an armed capture waypoint (positive trigger
    distance): one at the leg start plus one every trigger distance along it.
    Legs after a waypoint with trigger 0, or no capture action, shoot nothing.
    """
    wps = segment.waypoints
    count = 0
    for i in range(1, len(wps)):
        trigger = _trigger_distance(wps[i - 1])
        if not trigger or trigger <= 0:
            continue
        leg = wps[i - 1].local.distance_to(wps[i].local)
        count += int((leg + _LEG_EPS_M) // trigger) + 1
    return count


def summarize(segments: Sequence[PathSegment]) -> MissionSummary:
    distance = sum(path_length_m(s) for s in segments)
    seconds = sum(estimate_flight_time_s(s) for s in segments)
    return MissionSummary(
        segment_count=len(segments),
        waypoint_count=sum(len(s) for s in segments),
        total_distance_m=distance,
        total_distance_ft=distance * METERS_TO_FEET,
        estimated_flight_time_s=seconds,
        estimated_flight_time=format_mm_ss(seconds),
        photo_count=sum(photo_count(s) for s in segments),
    )


def preview_waypoints(segment: PathSegment, limit: int = PREVIEW_POINT_LIMIT) -> PathSegment:
    """
    Decimated copy for display: every k-th waypoint plus the last one, so at most
    about `limit` points. Segments already under the limit come back unchanged.
    """
    if limit < 2:
        raise InvalidParameter(f"preview limit must be >= 2, got {limit}")
    n = len(segment)
    if n <= limit:
        return segment
    skip = math.ceil(n / limit)
    kept = [wp for i, wp in enumerate(segment.waypoints) if i % skip == 0 or i == n - 1]
    metadata = dict(segment.metadata, is_preview=True, original_length=n)
    return replace(segment, waypoints=tuple(kept), metadata=metadata)
