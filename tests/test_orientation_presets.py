from __future__ import annotations

import pytest

from aphrodite_shared.orientation.anchors import SnapshotResolver
from aphrodite_shared.orientation.locks import is_locked_to_screen
from aphrodite_shared.orientation.presets import (
    ALL_PRESETS,
    DEFAULT_PRESET,
    get_preset_by_id,
    get_preset_by_name,
    list_presets,
)
from aphrodite_shared.orientation.transform import frame_key, project_element
from aphrodite_shared.orientation.types import AngleAnchor, ObjectAnchor, ZeroPoint


def test_catalogue_ids_are_unique_and_ordered():
    ids = [preset.id for preset in list_presets()]
    assert ids == [
        "asc-left",
        "asc-right",
        "mc-top",
        "mc-top-mirrored",
        "aries-top",
        "fixed-houses",
        "fixed-signs",
        "sun-locked",
        "biwheel-natal-transit",
    ]
    assert DEFAULT_PRESET.id == "asc-left"


def test_lookup_by_id_and_name():
    assert get_preset_by_id("mc-top").frame.anchor == AngleAnchor("MC")
    assert get_preset_by_id("missing") is None
    assert get_preset_by_name("mc at top (mirrored)").id == "mc-top-mirrored"
    assert get_preset_by_name("SUN LOCKED").frame.anchor == ObjectAnchor(0)
    assert get_preset_by_name("Nope") is None


def test_mirrored_preset_uses_unbound_zero_point():
    model = get_preset_by_id("mc-top-mirrored").frame.model
    assert isinstance(model, ZeroPoint)
    assert model.world_zero is None and model.sign == -1 and model.screen_zero == 90.0


@pytest.mark.parametrize(
    ("preset_id", "longitude", "expected"),
    [
        ("asc-left", 95.0, 180.0),
        ("asc-right", 95.0, 0.0),
        ("mc-top", 5.0, 90.0),
        ("aries-top", 0.0, 90.0),
        ("aries-top", 30.0, 60.0),
        ("fixed-houses", 95.0, 180.0),
        ("sun-locked", 280.0, 90.0),
    ],
)
def test_presets_place_their_anchor(natal_snapshot, preset_id, longitude, expected) -> None:
    preset = get_preset_by_id(preset_id)
    screen = project_element(longitude, preset.frame, SnapshotResolver(natal_snapshot))
    assert screen == pytest.approx(expected)


def test_sun_locked_pins_the_sun_to_screen():
    preset = get_preset_by_id("sun-locked")
    assert is_locked_to_screen(preset.locks, "object", 0)
    assert not is_locked_to_screen(preset.locks, "object", 1)


def test_presets_have_distinct_frame_keys_where_frames_differ():
    keys = {frame_key(preset.frame) for preset in ALL_PRESETS}
    # aries-top/fixed-signs and asc-left/biwheel share a frame and differ in locks.
    assert len(keys) == len(ALL_PRESETS) - 2
