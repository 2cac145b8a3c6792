from __future__ import annotations

import pytest
import yaml

from aphrodite_shared.orientation.presets import ALL_PRESETS
from aphrodite_shared.orientation.serialization import (
    anchor_from_mapping,
    effect_from_mapping,
    preset_from_mapping,
    preset_to_mapping,
    program_from_mapping,
    program_to_mapping,
    trigger_from_mapping,
    view_frame_from_mapping,
    view_frame_to_mapping,
)
from aphrodite_shared.orientation.types import (
    AngleAnchor,
    AscLeavesHouse,
    HouseAnchor,
    LockRule,
    ObjectAnchor,
    PlanetCrossesAngle,
    SignAnchor,
    SignSubject,
    SnapAnchorToAngle,
    ZeroPoint,
)

PROGRAM = {
    "baseFrame": {
        "referenceFrame": "houses",
        "anchor": {"kind": "angle", "type": "ASC"},
        "screenAngleDeg": 180,
        "direction": "ccw",
    },
    "locks": [{"subject": {"kind": "house"}, "frame": "houses", "mode": "follow-anchor"}],
    "rules": [
        {
            "id": "asc-out",
            "trigger": {"type": "ascLeavesHouse", "house": 1},
            "effect": {"type": "rotate", "wheel": "zodiac", "delta": 30},
            "animationMs": 500,
        },
        {
            "id": "sun-mc",
            "trigger": {"type": "planetCrossesAngle", "planet": 0, "angle": "MC"},
            "effect": {
                "type": "setViewFrame",
                "viewFrame": {
                    "screenZero": 90,
                    "direction": -1,
                    "anchor": {"kind": "angle", "type": "MC"},
                },
            },
            "locks": [{"subject": {"kind": "angle", "types": ["ASC"]}, "frame": "screen"}],
            "recurring": True,
        },
    ],
}


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"kind": "object", "id": 0}, ObjectAnchor(0)),
        ({"kind": "object", "id": "chiron"}, ObjectAnchor("chiron")),
        ({"kind": "house", "index": 10}, HouseAnchor(10)),
        ({"kind": "sign", "index": 0}, SignAnchor(0)),
        ({"kind": "angle", "type": "MC"}, AngleAnchor("MC")),
    ],
)
def test_anchor_from_mapping(payload, expected) -> None:
    assert anchor_from_mapping(payload) == expected


@pytest.mark.parametrize(
    "payload",
    [
        {"kind": "planet", "id": 0},
        {"kind": "house", "index": 13},
        {"kind": "angle", "type": "VERTEX"},
        {"kind": "angle"},
    ],
)
def test_anchor_from_mapping_rejects_malformed(payload) -> None:
    with pytest.raises(ValueError):
        anchor_from_mapping(payload)


def test_program_round_trips_through_mapping():
    program = program_from_mapping(PROGRAM)
    assert program.rules[0].trigger == AscLeavesHouse(1)
    assert program.rules[0].animation_ms == 500
    assert program.rules[1].trigger == PlanetCrossesAngle(planet=0, angle="MC")
    assert program.rules[1].recurring is True
    frame = program.rules[1].effect.view_frame
    assert frame.model == ZeroPoint(screen_zero=90.0, sign=-1)
    assert program_from_mapping(program_to_mapping(program)) == program


def test_snake_case_keys_are_accepted():
    frame = view_frame_from_mapping(
        {"reference_frame": "signs", "anchor": {"kind": "sign", "index": 0}, "screen_angle_deg": 90}
    )
    assert frame.reference_frame == "signs"
    assert frame.model.screen_angle_deg == 90.0
    effect = effect_from_mapping({"type": "snapAnchorToAngle", "anchor": "MC", "screen_angle": 90})
    assert effect == SnapAnchorToAngle(anchor="MC", screen_angle=90.0)


def test_zero_point_frame_mapping_uses_direction_for_sign():
    frame = view_frame_from_mapping({"screenZero": 90, "worldZero": 95, "sign": -1})
    mapping = view_frame_to_mapping(frame)
    assert mapping["direction"] == -1
    assert mapping["worldZero"] == 95.0
    assert "screenAngleDeg" not in mapping


def test_unknown_trigger_and_effect_types_are_rejected():
    with pytest.raises(ValueError):
        trigger_from_mapping({"type": "moonVoid"})
    with pytest.raises(ValueError):
        effect_from_mapping({"type": "zoom", "factor": 2})
    with pytest.raises(ValueError):
        effect_from_mapping({"type": "rotate", "wheel": "planets", "delta": 5})


@pytest.mark.parametrize("preset", ALL_PRESETS, ids=lambda preset: preset.id)
def test_presets_survive_yaml(preset) -> None:
    text = yaml.safe_dump(preset_to_mapping(preset), sort_keys=False, allow_unicode=True)
    assert preset_from_mapping(yaml.safe_load(text)) == preset


def test_lock_rule_defaults():
    rule = program_from_mapping({"locks": [{"subject": {"kind": "sign"}}]}).locks[0]
    assert rule == LockRule(subject=SignSubject(), frame="world", mode="exact")


@pytest.mark.parametrize(
    "payload",
    [
        {"direction": "clockwise", "screenAngleDeg": 90},
        {"direction": "CW"},
        {"direction": 1},
        {"screenZero": 90, "direction": "cw"},
        {"screenZero": 90, "direction": 0},
        {"screenZero": 90, "sign": True},
        {"screenZero": 90, "sign": 2},
    ],
)
def test_invalid_direction_is_rejected_not_defaulted(payload) -> None:
    with pytest.raises(ValueError):
        view_frame_from_mapping(payload)


def test_omitted_direction_takes_model_default():
    assert view_frame_from_mapping({"screenAngleDeg": 90}).model.direction == "ccw"
    assert view_frame_from_mapping({"screenZero": 90}).model.sign == 1
    assert view_frame_from_mapping({"screenZero": 90, "direction": -1.0}).model.sign == -1
