"""
Axis adapters between mission ENU coordinates and consumer conventions.
Pure permutations and sign flips: no trigonometry, so no precision loss.
"""
from enum import Enum

from aerosurvey.core.exceptions import InvalidParameter
from aerosurvey.core.types import LocalCoord, RenderCoord


class RenderConvention(Enum):
    """
    Y_UP:       x = east, y = up, z = north (default scene convention)
    Y_UP_SOUTH: x = east, y = up, z = -north (right-handed scene engines)
    NED:        x = north, y = east, z = down (robotics body / nav frame)
    """

    Y_UP = "y_up"
    Y_UP_SOUTH = "y_up_south"
    NED = "ned"


def _convention(convention) -> RenderConvention:
    """Accepts a RenderConvention or its string value."""
    try:
        return RenderConvention(convention)
    except ValueError:
        raise InvalidParameter(f"unknown render convention: {convention!r}") from None


def to_render_frame(local: LocalCoord, convention: RenderConvention = RenderConvention.Y_UP) -> RenderCoord:
    convention = _convention(convention)
    if convention is RenderConvention.Y_UP:
        return RenderCoord(local.x, local.z, local.y)
    if convention is RenderConvention.Y_UP_SOUTH:
        return RenderCoord(local.x, local.z, -local.y)
    # NED
    return RenderCoord(local.y, local.x, -local.z)


def from_render_frame(render: RenderCoord, convention: RenderConvention = RenderConvention.Y_UP) -> LocalCoord:
    convention = _convention(convention)
    if convention is RenderConvention.Y_UP:
        return LocalCoord(render.x, render.z, render.y)
    if convention is RenderConvention.Y_UP_SOUTH:
        return LocalCoord(render.x, -render.z, render.y)
    # NED
    return LocalCoord(render.y, render.x, -render.z)


# Y-up scenes measure yaw counter-clockwise from +x (east); ENU headings run clockwise from north.
_Y_UP_OFFSET_DEG = 90.0


def heading_to_render(heading_deg: float, convention: RenderConvention = RenderConvention.Y_UP) -> float:
    """ENU heading (clockwise from north) to the consumer's yaw angle in [0, 360)."""
    convention = _convention(convention)
    if convention is RenderConvention.NED:
        return heading_deg % 360.0
    return (_Y_UP_OFFSET_DEG - heading_deg) % 360.0


def heading_from_render(angle_deg: float, convention: RenderConvention = RenderConvention.Y_UP) -> float:
    # The Y-up mapping is its own inverse: h = offset - (offset - h).
    return heading_to_render(angle_deg, convention)
