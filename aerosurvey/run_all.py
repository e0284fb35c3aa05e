"""
Single entry point: plan the grid survey described in aerosurvey.mission_settings end-to-end.
Saves the mission document, a summary with pre-flight checks, and a plot to outputs/.
"""
import asyncio
import json
import os
import sys
from dataclasses import asdict, replace

# Add project root so "aerosurvey" imports work when run as a script
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from aerosurvey.mission_settings import (
    BATTERY_RESERVE_FRACTION,
    CAMERA_FOCAL_LENGTH_MM,
    CAMERA_IMAGE_HEIGHT_PX,
    CAMERA_IMAGE_WIDTH_PX,
    CAMERA_NAME,
    CAMERA_PITCH_DEG,
    CAMERA_SENSOR_HEIGHT_MM,
    CAMERA_SENSOR_WIDTH_MM,
    CHUNK_SIZE,
    CLIMB_SPEED_MS,
    DRONE_BATTERY_MINUTES,
    DRONE_MAX_ALTITUDE_M,
    DRONE_MAX_SPEED_MS,
    LARGE_PATH_THRESHOLD,
    LOCAL_ORIGIN,
    MISSION_END_ACTION,
    MISSION_NAME,
    PREVIEW_POINT_LIMIT,
    RASTER_START_OFFSET,
    RENDER_CONVENTION,
    RTL_ALTITUDE_M,
    SEGMENT_SPEED_MS,
    SURVEY_ALTITUDE_AGL_M,
    SURVEY_AREA_WIDTH_M,
    SURVEY_FRONT_OVERLAP,
    SURVEY_LINE_SPACING_OVERRIDE_M,
    SURVEY_ORIENTATION,
    SURVEY_PATTERN_LENGTH_M,
    SURVEY_SIDE_OVERLAP,
    SURVEY_SNAKE,
    TAKEOFF_POINT,
)


def build_inputs():
    """Turn the settings constants into (camera, coverage, origin, takeoff, offset, safety)."""
    from aerosurvey.core.types import (
        CameraProfile,
        CoverageParams,
        LocalCoord,
        LocalOrigin,
        MissionEndAction,
        Orientation,
        SafetyParams,
    )

    camera = CameraProfile(
        sensor_width_mm=CAMERA_SENSOR_WIDTH_MM,
        sensor_height_mm=CAMERA_SENSOR_HEIGHT_MM,
        image_width_px=CAMERA_IMAGE_WIDTH_PX,
        image_height_px=CAMERA_IMAGE_HEIGHT_PX,
        focal_length_mm=CAMERA_FOCAL_LENGTH_MM,
        name=CAMERA_NAME,
    )
    coverage = CoverageParams(
        altitude_agl=SURVEY_ALTITUDE_AGL_M,
        overlap=SURVEY_SIDE_OVERLAP,
        orientation=Orientation(SURVEY_ORIENTATION),
        snake=SURVEY_SNAKE,
        pattern_length=SURVEY_PATTERN_LENGTH_M,
        number_of_lines=1,
        line_spacing=SURVEY_LINE_SPACING_OVERRIDE_M,
        front_overlap=SURVEY_FRONT_OVERLAP,
    )
    origin = LocalOrigin(*LOCAL_ORIGIN)
    takeoff = LocalCoord(*TAKEOFF_POINT)
    offset = LocalCoord(*RASTER_START_OFFSET)
    safety = SafetyParams(
        mission_end_action=MissionEndAction(MISSION_END_ACTION),
        rtl_altitude=RTL_ALTITUDE_M,
        climb_speed=CLIMB_SPEED_MS,
    )
    return camera, coverage, origin, takeoff, offset, safety


def run_survey():
    """Plan the survey from mission_settings; save to outputs/ (mission JSON, summary JSON, plot).
    The number of lines is derived from SURVEY_AREA_WIDTH_M and the camera footprint.
    Rasters above LARGE_PATH_THRESHOLD points are assembled with the chunked processor.
    """
    from aerosurvey.frames.render import RenderConvention, heading_to_render, to_render_frame
    from aerosurvey.survey.checks import default_constraints, run_preflight_checks
    from aerosurvey.survey.document import MissionDocument, save_mission
    from aerosurvey.survey.metrics import preview_waypoints, summarize
    from aerosurvey.survey.planner import plan_survey, plan_survey_async, resolve_coverage
    from aerosurvey.survey.raster import lines_to_cover

    camera, coverage, origin, takeoff, offset, safety = build_inputs()
    resolved, footprint, _spacing = resolve_coverage(camera, coverage)
    n_lines = lines_to_cover(SURVEY_AREA_WIDTH_M, footprint.width_m, resolved.line_spacing)
    coverage = replace(coverage, number_of_lines=n_lines)

    kwargs = dict(
        safety=safety,
        raster_offset=offset,
        speed=SEGMENT_SPEED_MS,
        camera_pitch_deg=CAMERA_PITCH_DEG,
    )
    if 2 * n_lines > LARGE_PATH_THRESHOLD:
        def report(fraction):
            print(f"  waypoints: {fraction:.0%}")

        segment = asyncio.run(
            plan_survey_async(camera, coverage, origin, takeoff, chunk_size=CHUNK_SIZE, on_progress=report, **kwargs)
        )
    else:
        segment = plan_survey(camera, coverage, origin, takeoff, **kwargs)

    summary = summarize([segment])
    checks = run_preflight_checks(
        segment,
        default_constraints(
            DRONE_MAX_ALTITUDE_M, DRONE_MAX_SPEED_MS, DRONE_BATTERY_MINUTES, BATTERY_RESERVE_FRACTION
        ),
    )

    out_dir = os.path.join(ROOT, "outputs")
    os.makedirs(out_dir, exist_ok=True)
    doc = MissionDocument(origin=origin, segments=[segment], takeoff=takeoff, safety=safety, name=MISSION_NAME)
    mission_path = save_mission(doc, os.path.join(out_dir, "survey_mission.json"))
    print(f"Survey mission saved to {mission_path}")

    # Render coordinates go to the summary only; the mission document stays in ENU.
    convention = RenderConvention(RENDER_CONVENTION)
    preview = preview_waypoints(segment, PREVIEW_POINT_LIMIT)
    out = {
        "module": "Grid survey (raster coverage)",
        "mission_name": MISSION_NAME,
        "camera": asdict(camera),
        "footprint": asdict(footprint),
        "coverage": {
            "altitude_agl_m": coverage.altitude_agl,
            "side_overlap": coverage.overlap,
            "front_overlap": coverage.front_overlap,
            "orientation": coverage.orientation.value,
            "snake": coverage.snake,
            "pattern_length_m": coverage.pattern_length,
            "number_of_lines": n_lines,
            "line_spacing_m": resolved.line_spacing,
        },
        "segment_metadata": segment.metadata,
        "summary": asdict(summary),
        "constraint_checks": checks,
        "preflight_ok": all(c["ok"] for c in checks.values()),
        "waypoint_count": len(segment),
        "preview_waypoint_count": len(preview.waypoints),
        "render_convention": convention.value,
        "render_preview": [
            {
                "position": list(asdict(to_render_frame(wp.local, convention)).values()),
                "yaw_deg": heading_to_render(wp.camera.heading_deg, convention),
            }
            for wp in preview.waypoints
        ],
    }
    summary_path = os.path.join(out_dir, "survey_summary.json")
    with open(summary_path, "w") as f:
        json.dump(out, f, indent=2)
    print(f"Survey summary saved to {summary_path}")

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(8, 8))
        xs = [wp.local.x for wp in segment.waypoints]
        ys = [wp.local.y for wp in segment.waypoints]
        ax1.plot(xs, ys, "b-o", markersize=3)
        ax1.plot(xs[0], ys[0], "g*", markersize=12, label="Takeoff")
        ax1.set_xlabel("East (m)")
        ax1.set_ylabel("North (m)")
        ax1.set_title("Survey path (local ENU)")
        ax1.set_aspect("equal", adjustable="datalim")
        ax1.legend()
        ax1.grid(True)
        dist = [0.0]
        for a, b in zip(segment.waypoints, segment.waypoints[1:]):
            dist.append(dist[-1] + a.local.distance_to(b.local))
        ax2.plot(dist, [wp.local.z for wp in segment.waypoints], "g-")
        ax2.set_xlabel("Distance flown (m)")
        ax2.set_ylabel("Altitude (m, relative)")
        ax2.set_title("Altitude profile")
        ax2.grid(True)
        plt.tight_layout()
        plot_path = os.path.join(out_dir, "survey_mission_plot.png")
        plt.savefig(plot_path)
        plt.close(fig)
        print(f"Survey plot saved to {plot_path}")
    except Exception as e:
        print(f"Warning: could not save survey plot: {e}")

    return out


def main():
    print("Planning survey mission...")
    run_survey()
    print("Done. Check outputs/")


if __name__ == "__main__":
    main()
