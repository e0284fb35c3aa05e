"""
Mission settings constants for plan and export (run_all.py).
Edit this file to change the survey origin, camera, raster pattern, safety behaviour and drone envelope.
"""

from typing import Tuple

# ---------------------------------------------------------------------------
# Mission frame
# ---------------------------------------------------------------------------

MISSION_NAME = "Field survey"

# Local origin (lat_deg, lon_deg, ellipsoidal alt_m). Fixed for the mission's lifetime.
LOCAL_ORIGIN: Tuple[float, float, float] = (47.3977, 8.5456, 488.0)

# Takeoff point in the local ENU frame (east_m, north_m, up_m)
TAKEOFF_POINT: Tuple[float, float, float] = (0.0, 0.0, 0.0)

# Offset of the first raster point from the takeoff point (east_m, north_m, up_m)
RASTER_START_OFFSET: Tuple[float, float, float] = (10.0, 10.0, 0.0)

# ---------------------------------------------------------------------------
# Camera (full-frame 24 MP, 35 mm lens)
# ---------------------------------------------------------------------------

CAMERA_NAME = "Full frame 24MP / 35mm"
CAMERA_SENSOR_WIDTH_MM = 35.9
CAMERA_SENSOR_HEIGHT_MM = 24.0
CAMERA_IMAGE_WIDTH_PX = 6000
CAMERA_IMAGE_HEIGHT_PX = 4000
CAMERA_FOCAL_LENGTH_MM = 35.0
CAMERA_PITCH_DEG = -90.0  # nadir

# ---------------------------------------------------------------------------
# Coverage pattern
# ---------------------------------------------------------------------------

SURVEY_ALTITUDE_AGL_M = 60.0
SURVEY_SIDE_OVERLAP = 0.70  # fraction, between adjacent lines
SURVEY_FRONT_OVERLAP = 0.80  # fraction, between photos on a line
SURVEY_ORIENTATION = "horizontal"  # "horizontal" (lines run east) | "vertical" (lines run north)
SURVEY_SNAKE = True
SURVEY_PATTERN_LENGTH_M = 200.0
# Width of the area to cover across track; the number of lines is derived from it.
SURVEY_AREA_WIDTH_M = 150.0
# Set to a positive number to override the line spacing derived from the footprint.
SURVEY_LINE_SPACING_OVERRIDE_M = None
SEGMENT_SPEED_MS = 5.0

# ---------------------------------------------------------------------------
# Safety
# ---------------------------------------------------------------------------

MISSION_END_ACTION = "RTL"  # "RTL" | "LAND" | "HOLD"
RTL_ALTITUDE_M = 70.0
CLIMB_SPEED_MS = 3.0

# ---------------------------------------------------------------------------
# Drone envelope (pre-flight checks)
# ---------------------------------------------------------------------------

DRONE_MAX_ALTITUDE_M = 120.0
DRONE_MAX_SPEED_MS = 16.0
DRONE_BATTERY_MINUTES = 25.0
BATTERY_RESERVE_FRACTION = 0.2

# ---------------------------------------------------------------------------
# Large mission handling and export
# ---------------------------------------------------------------------------

CHUNK_SIZE = 200
LARGE_PATH_THRESHOLD = 200  # raster points above this go through the chunked processor
PREVIEW_POINT_LIMIT = 50
RENDER_CONVENTION = "y_up"  # "y_up" | "y_up_south" | "ned"
