"""
Validation: randomized geodetic -> local -> geodetic round trips around random origins.
Run from project root with PYTHONPATH set. Reports worst-case horizontal and vertical error.
"""
import os
import random
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def main(num_origins: int = 20, points_per_origin: int = 50, seed: int = 123):
    from aerosurvey.core.types import GeodeticCoord, LocalOrigin
    from aerosurvey.frames.local import geodetic_to_local, local_to_geodetic

    rng = random.Random(seed)
    max_deg = 0.0
    max_alt_m = 0.0
    runs = 0
    for _ in range(num_origins):
        origin = LocalOrigin(rng.uniform(-85.0, 85.0), rng.uniform(-179.0, 179.0), rng.uniform(-50.0, 3000.0))
        for _ in range(points_per_origin):
            p = GeodeticCoord(
                origin.latitude + rng.uniform(-0.05, 0.05),
                origin.longitude + rng.uniform(-0.05, 0.05),
                origin.altitude + rng.uniform(-100.0, 1000.0),
            )
            back = local_to_geodetic(geodetic_to_local(p, origin), origin)
            max_deg = max(max_deg, abs(back.latitude - p.latitude), abs(back.longitude - p.longitude))
            max_alt_m = max(max_alt_m, abs(back.altitude - p.altitude))
            runs += 1
    print(f"Round-trip validation ({runs} points, {num_origins} origins)")
    print(f"  Max horizontal error: {max_deg:.3e} deg")
    print(f"  Max vertical error:   {max_alt_m * 1000:.3f} mm")
    return {"runs": runs, "max_error_deg": max_deg, "max_error_alt_m": max_alt_m}


if __name__ == "__main__":
    main()
