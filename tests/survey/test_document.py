"""Tests for mission document serialization."""
import json
import os
import pytest

from aerosurvey.core.exceptions import MissingPrecondition
from aerosurvey.core.types import LocalOrigin
from aerosurvey.survey.document import (
    DOCUMENT_VERSION,
    MissionDocument,
    load_mission,
    mission_from_dict,
    mission_to_dict,
    save_mission,
)
from aerosurvey.survey.planner import plan_survey


@pytest.fixture
def document(camera, coverage, origin, takeoff, rtl_safety):
    seg = plan_survey(camera, coverage, origin, takeoff, safety=rtl_safety)
    return MissionDocument(origin=origin, segments=[seg], takeoff=takeoff, safety=rtl_safety, name="Test field")


def test_dict_layout(document):
    d = mission_to_dict(document)
    assert d["version"] == DOCUMENT_VERSION
    assert d["local_origin"]["lat"] == document.origin.latitude
    assert d["safety"]["mission_end_action"] == "RTL"
    wp = d["path_segments"][0]["waypoints"][1]
    assert set(wp) >= {"id", "geodetic", "local", "alt_ref", "camera", "actions"}
    assert wp["actions"][0]["type"] == "TAKE_PHOTO"
    assert wp["alt_ref"] == "RELATIVE"
    assert wp["command_alt"] == pytest.approx(wp["local"]["z"])
    json.dumps(d)


def test_dict_round_trip_preserves_everything(document):
    back = mission_from_dict(mission_to_dict(document))
    assert isinstance(back.origin, LocalOrigin)
    assert back.origin == document.origin
    assert back.takeoff == document.takeoff
    assert back.safety == document.safety
    assert back.name == "Test field"
    assert back.segments[0] == document.segments[0]


def test_save_and_load(tmp_path, document):
    path = save_mission(document, os.path.join(str(tmp_path), "sub", "mission.json"))
    assert os.path.isfile(path)
    loaded = load_mission(path)
    assert [wp.id for wp in loaded.segments[0].waypoints] == [wp.id for wp in document.segments[0].waypoints]
    assert [wp.local for wp in loaded.segments[0].waypoints] == [wp.local for wp in document.segments[0].waypoints]


def test_origin_required():
    with pytest.raises(MissingPrecondition):
        mission_to_dict(MissionDocument(origin=None))
    with pytest.raises(MissingPrecondition):
        mission_from_dict({"path_segments": []})


def test_optional_fields_absent(origin):
    back = mission_from_dict(mission_to_dict(MissionDocument(origin=origin)))
    assert back.takeoff is None
    assert back.safety is None
    assert back.segments == []
