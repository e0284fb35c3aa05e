"""
Survey planner: camera + coverage parameters -> footprint and spacing -> raster
-> assembled PathSegment with geodetic positions attached.
"""
import logging
from dataclasses import replace
from typing import Any, Callable, Optional, Tuple

from aerosurvey.core.chunked import CHUNK_SIZE
from aerosurvey.core.exceptions import MissingPrecondition
from aerosurvey.core.types import (
    AltitudeReference,
    CameraProfile,
    CoverageParams,
    LocalCoord,
    LocalOrigin,
    Orientation,
    PathSegment,
    SafetyParams,
)
from aerosurvey.survey.assembler import DEFAULT_SPEED_MS, assemble_path, assemble_path_async
from aerosurvey.survey.footprint import Footprint, Spacing, compute_footprint, compute_spacing
from aerosurvey.survey.raster import generate_raster

logger = logging.getLogger(__name__)


def resolve_coverage(camera: CameraProfile, coverage: CoverageParams) -> Tuple[CoverageParams, Footprint, Spacing]:
    """
    Fill in line_spacing from the cross-track footprint and side overlap unless the
    caller set it. Overlaps are validated either way.
    """
    if camera is None:
        raise MissingPrecondition("camera profile is required")
    footprint = compute_footprint(camera, coverage.altitude_agl)
    spacing = compute_spacing(footprint, coverage.overlap, coverage.front_overlap)
    line_spacing = coverage.line_spacing if coverage.line_spacing is not None else spacing.line_m
    logger.debug(
        "Footprint %.2f x %.2f m, GSD %.3f cm/px, line spacing %.2f m",
        footprint.width_m, footprint.height_m, footprint.gsd_cm_per_px, line_spacing,
    )
    return replace(coverage, line_spacing=line_spacing), footprint, spacing


def _raster_start(takeoff: LocalCoord, offset: Optional[LocalCoord]) -> LocalCoord:
    if takeoff is None:
        raise MissingPrecondition("mission takeoff point is not set")
    if offset is None:
        return takeoff
    return takeoff.offset(offset.x, offset.y, offset.z)


def _with_survey_metadata(segment: PathSegment, coverage: CoverageParams, footprint: Footprint, spacing: Spacing) -> PathSegment:
    metadata = dict(segment.metadata)
    metadata.update({
        "altitude_agl": coverage.altitude_agl,
        "orientation": Orientation(coverage.orientation).value,
        "snake": coverage.snake,
        "number_of_lines": coverage.number_of_lines,
        "pattern_length": coverage.pattern_length,
        "line_spacing": coverage.line_spacing,
        "trigger_distance": spacing.trigger_m,
        "footprint_width_m": footprint.width_m,
        "footprint_height_m": footprint.height_m,
        "gsd_cm_per_px": footprint.gsd_cm_per_px,
    })
    return replace(segment, metadata=metadata)


def plan_survey(
    camera: CameraProfile,
    coverage: CoverageParams,
    origin: LocalOrigin,
    takeoff: LocalCoord,
    safety: Optional[SafetyParams] = None,
    raster_offset: Optional[LocalCoord] = None,
    speed: float = DEFAULT_SPEED_MS,
    altitude_ref: AltitudeReference = AltitudeReference.RELATIVE,
    camera_pitch_deg: float = -90.0,
) -> PathSegment:
    """
    Plan a grid survey. The raster starts at takeoff + raster_offset and flies at
    altitude_agl above that start point.
    Returns a GRID PathSegment whose metadata records footprint, GSD and spacing.
    """
    resolved, footprint, spacing = resolve_coverage(camera, coverage)
    start = _raster_start(takeoff, raster_offset)
    raster = generate_raster(resolved, start)
    segment = assemble_path(
        raster,
        takeoff,
        safety,
        origin,
        altitude_ref=altitude_ref,
        speed=speed,
        camera_pitch_deg=camera_pitch_deg,
        photo_spacing_m=spacing.trigger_m,
    )
    return _with_survey_metadata(segment, resolved, footprint, spacing)


async def plan_survey_async(
    camera: CameraProfile,
    coverage: CoverageParams,
    origin: LocalOrigin,
    takeoff: LocalCoord,
    safety: Optional[SafetyParams] = None,
    raster_offset: Optional[LocalCoord] = None,
    speed: float = DEFAULT_SPEED_MS,
    altitude_ref: AltitudeReference = AltitudeReference.RELATIVE,
    camera_pitch_deg: float = -90.0,
    chunk_size: int = CHUNK_SIZE,
    on_progress: Optional[Callable[[float], None]] = None,
    cancel: Any = None,
) -> PathSegment:
    """plan_survey for large rasters: yields to the event loop every chunk_size waypoints."""
    resolved, footprint, spacing = resolve_coverage(camera, coverage)
    start = _raster_start(takeoff, raster_offset)
    raster = generate_raster(resolved, start)
    segment = await assemble_path_async(
        raster,
        takeoff,
        safety,
        origin,
        altitude_ref=altitude_ref,
        speed=speed,
        camera_pitch_deg=camera_pitch_deg,
        photo_spacing_m=spacing.trigger_m,
        chunk_size=chunk_size,
        on_progress=on_progress,
        cancel=cancel,
    )
    return _with_survey_metadata(segment, resolved, footprint, spacing)
