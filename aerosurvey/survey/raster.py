"""
Boustrophedon (lawn-mower) raster generation in the mission's local ENU frame.
Output order is flight order; consumers must not re-sort it.
"""
import logging
import math
from typing import List, Tuple

from aerosurvey.core.exceptions import InvalidParameter
from aerosurvey.core.types import CoverageParams, LocalCoord, Orientation

logger = logging.getLogger(__name__)

Line = Tuple[LocalCoord, LocalCoord]


def _orientation(params: CoverageParams) -> Orientation:
    try:
        return Orientation(params.orientation)
    except ValueError:
        raise InvalidParameter(f"unknown orientation: {params.orientation!r}") from None


def validate_coverage(params: CoverageParams) -> None:
    """Range checks for a raster with resolved line spacing."""
    n = params.number_of_lines
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidParameter(f"number_of_lines must be an integer >= 1, got {n!r}")
    if not math.isfinite(params.pattern_length) or params.pattern_length <= 0:
        raise InvalidParameter(f"pattern_length must be positive, got {params.pattern_length}")
    if not math.isfinite(params.altitude_agl) or params.altitude_agl <= 0:
        raise InvalidParameter(f"altitude_agl must be positive, got {params.altitude_agl}")
    if n > 1:
        spacing = params.line_spacing
        if spacing is None or not math.isfinite(spacing) or spacing <= 0:
            raise InvalidParameter(f"line_spacing must be positive for {n} lines, got {spacing}")
    _orientation(params)


def is_reversed(params: CoverageParams, index: int) -> bool:
    """Odd lines fly backwards in a snake pattern."""
    return params.snake and index % 2 == 1


def line_heading_deg(params: CoverageParams, index: int) -> float:
    """ENU heading flown along line `index`."""
    reverse = is_reversed(params, index)
    if _orientation(params) is Orientation.HORIZONTAL:
        return 270.0 if reverse else 90.0
    return 180.0 if reverse else 0.0


def raster_lines(params: CoverageParams, origin_local: LocalCoord) -> List[Line]:
    """
    numberOfLines parallel passes of pattern_length, each as (entry, exit) in flight order.
    Horizontal passes run east and step north; vertical passes run north and step east.
    All points sit at origin_local.z + altitude_agl.
    """
    validate_coverage(params)
    orientation = _orientation(params)
    length = params.pattern_length
    z = origin_local.z + params.altitude_agl
    spacing = params.line_spacing if params.number_of_lines > 1 else 0.0

    lines: List[Line] = []
    for i in range(params.number_of_lines):
        offset = i * spacing
        if orientation is Orientation.HORIZONTAL:
            start = LocalCoord(origin_local.x, origin_local.y + offset, z)
            end = LocalCoord(origin_local.x + length, origin_local.y + offset, z)
        else:
            start = LocalCoord(origin_local.x + offset, origin_local.y, z)
            end = LocalCoord(origin_local.x + offset, origin_local.y + length, z)
        if is_reversed(params, i):
            start, end = end, start
        lines.append((start, end))

    logger.debug(
        "Raster: %d %s lines, length %.2f m, spacing %.2f m, snake=%s",
        len(lines), orientation.value, length, spacing, params.snake,
    )
    return lines


def generate_raster(params: CoverageParams, origin_local: LocalCoord) -> List[LocalCoord]:
    """Line endpoints flattened in flight order: 2 * number_of_lines points."""
    points: List[LocalCoord] = []
    for start, end in raster_lines(params, origin_local):
        points.append(start)
        points.append(end)
    return points


def lines_to_cover(area_extent_m: float, footprint_m: float, spacing_m: float) -> int:
    """
    Passes needed so footprints span area_extent_m across track.
    The first pass covers footprint_m; each further pass adds spacing_m.
    """
    for name, value in (("area_extent_m", area_extent_m), ("footprint_m", footprint_m), ("spacing_m", spacing_m)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidParameter(f"{name} must be positive, got {value}")
    if area_extent_m <= footprint_m:
        return 1
    return math.ceil((area_extent_m - footprint_m) / spacing_m) + 1
