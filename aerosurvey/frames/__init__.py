from .geodetic import ecef_to_geodetic, geodetic_to_ecef, validate_geodetic
from .local import (
    LocalFrame,
    ecef_to_local,
    geodetic_to_local,
    local_to_ecef,
    local_to_geodetic,
    pose_to_local,
)
from .render import (
    RenderConvention,
    from_render_frame,
    heading_from_render,
    heading_to_render,
    to_render_frame,
)

__all__ = [
    "geodetic_to_ecef",
    "ecef_to_geodetic",
    "validate_geodetic",
    "LocalFrame",
    "ecef_to_local",
    "local_to_ecef",
    "geodetic_to_local",
    "local_to_geodetic",
    "pose_to_local",
    "RenderConvention",
    "to_render_frame",
    "from_render_frame",
    "heading_to_render",
    "heading_from_render",
]
