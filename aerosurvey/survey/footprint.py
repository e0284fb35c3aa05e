"""
Camera ground footprint, ground sample distance and overlap spacing.
Nadir camera over flat ground; no lens distortion.
"""
import math
from dataclasses import dataclass

from aerosurvey.core.exceptions import InvalidParameter
from aerosurvey.core.types import CameraProfile

HECTARE_M2 = 10_000.0


@dataclass(frozen=True)
class Footprint:
    """Ground area covered by one image, and the GSD along the image width."""

    width_m: float
    height_m: float
    gsd_cm_per_px: float


@dataclass(frozen=True)
class Spacing:
    """line_m: distance between flight lines (cross-track). trigger_m: distance between photos on a line."""

    line_m: float
    trigger_m: float


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameter(f"{name} must be a positive finite number, got {value}")


def _require_fraction(name: str, value: float) -> None:
    if not math.isfinite(value) or not 0.0 < value < 1.0:
        raise InvalidParameter(f"{name} must be in (0, 1), got {value}")


def validate_camera(camera: CameraProfile) -> None:
    _require_positive("focal_length_mm", camera.focal_length_mm)
    _require_positive("sensor_width_mm", camera.sensor_width_mm)
    _require_positive("sensor_height_mm", camera.sensor_height_mm)
    _require_positive("image_width_px", camera.image_width_px)
    _require_positive("image_height_px", camera.image_height_px)


def ground_sample_distance(camera: CameraProfile, altitude_agl: float) -> float:
    """GSD in cm/pixel along the image width."""
    validate_camera(camera)
    _require_positive("altitude_agl", altitude_agl)
    return (camera.sensor_width_mm / camera.image_width_px) * altitude_agl * 100.0 / camera.focal_length_mm


def compute_footprint(camera: CameraProfile, altitude_agl: float) -> Footprint:
    """
    gsd = (sensor_width / image_width) * altitude * 100 / focal_length   [cm/px]
    width = gsd * image_width / 100; height likewise from the sensor/image heights.
    """
    gsd = ground_sample_distance(camera, altitude_agl)
    gsd_h = (camera.sensor_height_mm / camera.image_height_px) * altitude_agl * 100.0 / camera.focal_length_mm
    return Footprint(
        width_m=gsd * camera.image_width_px / 100.0,
        height_m=gsd_h * camera.image_height_px / 100.0,
        gsd_cm_per_px=gsd,
    )


def compute_line_spacing(dimension_m: float, overlap: float) -> float:
    """Distance between adjacent passes so consecutive footprints share `overlap` of dimension_m."""
    _require_positive("footprint dimension", dimension_m)
    _require_fraction("overlap", overlap)
    return dimension_m * (1.0 - overlap)


def compute_spacing(footprint: Footprint, side_overlap: float, front_overlap: float) -> Spacing:
    """Image width lies across the flight line; image height along it."""
    return Spacing(
        line_m=compute_line_spacing(footprint.width_m, side_overlap),
        trigger_m=compute_line_spacing(footprint.height_m, front_overlap),
    )


def field_of_view_deg(focal_length_mm: float, sensor_dimension_mm: float) -> float:
    _require_positive("focal_length_mm", focal_length_mm)
    _require_positive("sensor dimension", sensor_dimension_mm)
    return math.degrees(2.0 * math.atan(sensor_dimension_mm / (2.0 * focal_length_mm)))


def altitude_for_gsd(camera: CameraProfile, gsd_cm_per_px: float) -> float:
    """Altitude AGL (m) at which the camera reaches the requested GSD."""
    validate_camera(camera)
    _require_positive("gsd_cm_per_px", gsd_cm_per_px)
    return gsd_cm_per_px * camera.focal_length_mm * camera.image_width_px / (camera.sensor_width_mm * 100.0)


def images_per_hectare(spacing: Spacing) -> float:
    """Photos needed per hectare once overlap is accounted for."""
    return HECTARE_M2 / (spacing.line_m * spacing.trigger_m)
