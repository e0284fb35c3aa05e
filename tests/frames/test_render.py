"""Tests for render-frame axis adapters and heading mapping."""
import pytest

from aerosurvey.core.exceptions import InvalidParameter
from aerosurvey.core.types import LocalCoord, RenderCoord
from aerosurvey.frames.render import (
    RenderConvention,
    from_render_frame,
    heading_from_render,
    heading_to_render,
    to_render_frame,
)


def test_y_up_swaps_north_and_up():
    r = to_render_frame(LocalCoord(1.0, 2.0, 3.0))
    assert r == RenderCoord(1.0, 3.0, 2.0)


def test_y_up_south_negates_north():
    r = to_render_frame(LocalCoord(1.0, 2.0, 3.0), RenderConvention.Y_UP_SOUTH)
    assert r == RenderCoord(1.0, 3.0, -2.0)


def test_ned():
    r = to_render_frame(LocalCoord(1.0, 2.0, 3.0), RenderConvention.NED)
    assert r == RenderCoord(2.0, 1.0, -3.0)


@pytest.mark.parametrize("convention", list(RenderConvention))
def test_adapters_are_exact_inverses(convention):
    local = LocalCoord(-12.5, 40.25, 61.0)
    assert from_render_frame(to_render_frame(local, convention), convention) == local


def test_unknown_convention_rejected():
    with pytest.raises(InvalidParameter):
        to_render_frame(LocalCoord(0.0, 0.0, 0.0), "z_up")
    with pytest.raises(InvalidParameter):
        heading_to_render(0.0, "z_up")


def test_convention_accepts_string_value():
    local = LocalCoord(1.0, 2.0, 3.0)
    assert to_render_frame(local, "ned") == to_render_frame(local, RenderConvention.NED)
    assert from_render_frame(RenderCoord(1.0, 3.0, -2.0), "y_up_south") == local
    assert heading_to_render(0.0, "y_up") == pytest.approx(90.0)


@pytest.mark.parametrize(
    "heading,expected",
    [(0.0, 90.0), (90.0, 0.0), (180.0, 270.0), (270.0, 180.0), (45.0, 45.0)],
)
def test_heading_to_y_up(heading, expected):
    assert heading_to_render(heading) == pytest.approx(expected)


def test_heading_ned_is_identity_mod_360():
    assert heading_to_render(370.0, RenderConvention.NED) == pytest.approx(10.0)


@pytest.mark.parametrize("convention", list(RenderConvention))
@pytest.mark.parametrize("heading", [0.0, 30.0, 135.0, 359.0])
def test_heading_round_trip(convention, heading):
    back = heading_from_render(heading_to_render(heading, convention), convention)
    assert back == pytest.approx(heading)
