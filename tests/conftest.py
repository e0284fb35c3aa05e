"""
Shared pytest fixtures for survey planning tests.
Ensures project root is on sys.path so aerosurvey.* and validation/ import correctly.
"""
import os
import sys
import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from aerosurvey.core.types import (  # noqa: E402
    CameraProfile,
    CoverageParams,
    LocalCoord,
    LocalOrigin,
    MissionEndAction,
    Orientation,
    SafetyParams,
)


@pytest.fixture
def origin():
    """Mission origin near Zurich, 488 m above the ellipsoid."""
    return LocalOrigin(47.3977, 8.5456, 488.0)


@pytest.fixture
def camera():
    """Full-frame 36 x 24 mm, 6000 x 4000 px, 50 mm lens."""
    return CameraProfile(
        sensor_width_mm=36.0,
        sensor_height_mm=24.0,
        image_width_px=6000,
        image_height_px=4000,
        focal_length_mm=50.0,
    )


@pytest.fixture
def coverage():
    return CoverageParams(
        altitude_agl=50.0,
        overlap=0.7,
        orientation=Orientation.HORIZONTAL,
        snake=True,
        pattern_length=100.0,
        number_of_lines=4,
        line_spacing=20.0,
    )


@pytest.fixture
def takeoff():
    return LocalCoord(0.0, 0.0, 0.0)


@pytest.fixture
def rtl_safety():
    return SafetyParams(mission_end_action=MissionEndAction.RTL, rtl_altitude=60.0, climb_speed=3.0)
