"""
Mission document: JSON-ready dicts for origin, takeoff, safety and path segments.
Geodetic, local and origin are stored together so a loaded mission needs no
recomputation; render-frame coordinates are never written.
"""
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from aerosurvey.core.exceptions import MissingPrecondition
from aerosurvey.core.types import (
    ActionType,
    AltitudeReference,
    CameraPose,
    GeodeticCoord,
    LocalCoord,
    LocalOrigin,
    MissionAction,
    MissionEndAction,
    PathSegment,
    PathType,
    SafetyParams,
    Waypoint,
)

DOCUMENT_VERSION = 1


@dataclass
class MissionDocument:
    origin: LocalOrigin
    segments: List[PathSegment] = field(default_factory=list)
    takeoff: Optional[LocalCoord] = None
    safety: Optional[SafetyParams] = None
    name: str = ""


def geodetic_to_dict(g: GeodeticCoord) -> dict:
    return {"lat": g.latitude, "lon": g.longitude, "alt": g.altitude, "alt_ref": g.altitude_ref.value}


def geodetic_from_dict(d: dict, cls=GeodeticCoord):
    return cls(d["lat"], d["lon"], d["alt"], AltitudeReference(d.get("alt_ref", "ELLIPSOID")))


def local_to_dict(c: LocalCoord) -> dict:
    return {"x": c.x, "y": c.y, "z": c.z}


def local_from_dict(d: dict) -> LocalCoord:
    return LocalCoord(d["x"], d["y"], d["z"])


def waypoint_to_dict(wp: Waypoint) -> dict:
    return {
        "id": wp.id,
        "geodetic": geodetic_to_dict(wp.geodetic),
        "local": local_to_dict(wp.local),
        "alt_ref": wp.altitude_ref.value,
        # derived from alt_ref; ignored on load
        "command_alt": wp.command_altitude,
        "camera": {"heading": wp.camera.heading_deg, "pitch": wp.camera.pitch_deg, "roll": wp.camera.roll_deg},
        "speed": wp.speed,
        "hold_time": wp.hold_time,
        "actions": [{"type": a.type.value, "params": dict(a.params)} for a in wp.actions],
    }


def waypoint_from_dict(d: dict) -> Waypoint:
    cam = d.get("camera", {})
    return Waypoint(
        geodetic=geodetic_from_dict(d["geodetic"]),
        local=local_from_dict(d["local"]),
        altitude_ref=AltitudeReference(d.get("alt_ref", "RELATIVE")),
        camera=CameraPose(cam.get("heading", 0.0), cam.get("pitch", -90.0), cam.get("roll", 0.0)),
        speed=d.get("speed"),
        hold_time=d.get("hold_time", 0.0),
        actions=tuple(MissionAction(ActionType(a["type"]), dict(a.get("params", {}))) for a in d.get("actions", [])),
        id=d["id"],
    )


def segment_to_dict(segment: PathSegment) -> dict:
    return {
        "id": segment.id,
        "type": segment.type.value,
        "speed": segment.speed,
        "metadata": dict(segment.metadata),
        "waypoints": [waypoint_to_dict(wp) for wp in segment.waypoints],
    }


def segment_from_dict(d: dict) -> PathSegment:
    return PathSegment(
        waypoints=tuple(waypoint_from_dict(w) for w in d.get("waypoints", [])),
        type=PathType(d.get("type", "GRID")),
        speed=d.get("speed", 5.0),
        id=d["id"],
        metadata=dict(d.get("metadata", {})),
    )


def mission_to_dict(doc: MissionDocument) -> Dict[str, Any]:
    if doc.origin is None:
        raise MissingPrecondition("mission document needs a local origin")
    out = {
        "version": DOCUMENT_VERSION,
        "name": doc.name,
        "local_origin": geodetic_to_dict(doc.origin),
        "takeoff_point": local_to_dict(doc.takeoff) if doc.takeoff is not None else None,
        "safety": None,
        "path_segments": [segment_to_dict(s) for s in doc.segments],
    }
    if doc.safety is not None:
        out["safety"] = {
            "mission_end_action": MissionEndAction(doc.safety.mission_end_action).value,
            "rtl_altitude": doc.safety.rtl_altitude,
            "climb_speed": doc.safety.climb_speed,
        }
    return out


def mission_from_dict(d: Dict[str, Any]) -> MissionDocument:
    if not d.get("local_origin"):
        raise MissingPrecondition("mission document has no local origin")
    safety = None
    if d.get("safety"):
        s = d["safety"]
        safety = SafetyParams(MissionEndAction(s["mission_end_action"]), s["rtl_altitude"], s["climb_speed"])
    takeoff = local_from_dict(d["takeoff_point"]) if d.get("takeoff_point") else None
    return MissionDocument(
        origin=geodetic_from_dict(d["local_origin"], cls=LocalOrigin),
        segments=[segment_from_dict(s) for s in d.get("path_segments", [])],
        takeoff=takeoff,
        safety=safety,
        name=d.get("name", ""),
    )


def save_mission(doc: MissionDocument, path: str) -> str:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w") as f:
        json.dump(mission_to_dict(doc), f, indent=2)
    return path


def load_mission(path: str) -> MissionDocument:
    with open(path, "r") as f:
        return mission_from_dict(json.load(f))
