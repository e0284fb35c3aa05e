"""
Pre-flight checks for an assembled survey segment against the drone envelope.
All implement the core Constraint interface.
"""
from typing import Dict, List, Sequence, Tuple

from aerosurvey.core.constraints import Constraint
from aerosurvey.core.types import MissionEndAction, PathSegment
from aerosurvey.survey.metrics import estimate_flight_time_s


class AltitudeCeilingConstraint(Constraint):
    """No waypoint above max_altitude_m (local z, i.e. relative to the origin)."""

    def __init__(self, max_altitude_m: float):
        self.max_altitude_m = max_altitude_m

    def check(self, segment: PathSegment) -> Tuple[bool, float]:
        if not segment.waypoints:
            return True, 0.0
        highest = max(wp.local.z for wp in segment.waypoints)
        if highest <= self.max_altitude_m:
            return True, 0.0
        return False, highest - self.max_altitude_m


class SpeedLimitConstraint(Constraint):
    """Segment speed and every per-waypoint speed within the drone's max speed."""

    def __init__(self, max_speed_ms: float):
        self.max_speed_ms = max_speed_ms

    def check(self, segment: PathSegment) -> Tuple[bool, float]:
        speeds = [segment.speed] + [wp.speed for wp in segment.waypoints if wp.speed is not None]
        fastest = max(speeds)
        if fastest <= self.max_speed_ms:
            return True, 0.0
        return False, fastest - self.max_speed_ms


class EnduranceConstraint(Constraint):
    """Estimated flight time fits one battery, keeping reserve_fraction of it unused. Violation in seconds."""

    def __init__(self, battery_minutes: float, reserve_fraction: float = 0.0):
        self.battery_minutes = battery_minutes
        self.reserve_fraction = reserve_fraction

    def check(self, segment: PathSegment) -> Tuple[bool, float]:
        usable_s = self.battery_minutes * 60.0 * (1.0 - self.reserve_fraction)
        needed_s = estimate_flight_time_s(segment)
        if needed_s <= usable_s:
            return True, 0.0
        return False, needed_s - usable_s


class RtlAltitudeConstraint(Constraint):
    """For RTL missions the return altitude must clear every waypoint and stay under the ceiling."""

    def __init__(self, max_altitude_m: float):
        self.max_altitude_m = max_altitude_m

    def check(self, segment: PathSegment) -> Tuple[bool, float]:
        if segment.metadata.get("mission_end_action") != MissionEndAction.RTL.value:
            return True, 0.0
        rtl = float(segment.metadata.get("rtl_altitude", 0.0))
        highest = max((wp.local.z for wp in segment.waypoints), default=0.0)
        if rtl < highest:
            return False, highest - rtl
        if rtl > self.max_altitude_m:
            return False, rtl - self.max_altitude_m
        return True, 0.0


def default_constraints(
    max_altitude_m: float,
    max_speed_ms: float,
    battery_minutes: float,
    reserve_fraction: float = 0.0,
) -> List[Constraint]:
    return [
        AltitudeCeilingConstraint(max_altitude_m),
        SpeedLimitConstraint(max_speed_ms),
        EnduranceConstraint(battery_minutes, reserve_fraction),
        RtlAltitudeConstraint(max_altitude_m),
    ]


def run_preflight_checks(segment: PathSegment, constraints: Sequence[Constraint]) -> Dict[str, dict]:
    """{constraint name: {"ok": bool, "violation": float}} for every constraint."""
    report = {}
    for c in constraints:
        ok, violation = c.check(segment)
        report[c.name] = {"ok": ok, "violation": violation}
    return report
