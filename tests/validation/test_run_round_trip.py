"""Tests for validation.run_round_trip."""
import os
import sys
import importlib.util
import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def _load_run_round_trip_main():
    """Load main() from validation/run_round_trip.py without package shadowing."""
    path = os.path.join(ROOT, "validation", "run_round_trip.py")
    spec = importlib.util.spec_from_file_location("run_round_trip", path)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod.main


def test_main_returns_dict_with_expected_keys():
    main = _load_run_round_trip_main()
    result = main(num_origins=5, points_per_origin=20)
    assert result["runs"] == 100
    assert result["max_error_deg"] < 1e-6
    assert result["max_error_alt_m"] < 1e-3
