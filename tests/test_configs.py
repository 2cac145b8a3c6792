from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from aphrodite_shared.configs.glyphs import DEFAULT_GLYPH_CONFIG, GlyphConfig, merge_glyph_config
from aphrodite_shared.configs.visual import (
    DEFAULT_VISUAL_CONFIG,
    VisualConfig,
    merge_visual_config,
)
from aphrodite_shared.utils.merging import layered_merge


def test_visual_defaults():
    config = DEFAULT_VISUAL_CONFIG
    assert config.ring_width == 30 and config.ring_spacing == 10
    assert len(config.sign_colors) == 12
    assert len(config.house_colors) == 12
    assert len(config.planet_colors) == 10
    assert config.aspect_colors["trine"] == "#00FF00"
    assert config.sign_color(12) == config.sign_colors[0]
    mapping = config.to_mapping()
    assert mapping["backgroundColor"] == "#FFFFFF"
    assert "background_color" not in mapping


def test_aspect_colors_merge_per_aspect():
    merged = merge_visual_config({"aspectColors": {"trine": "#123456"}})
    assert merged.aspect_colors["trine"] == "#123456"
    assert merged.aspect_colors["square"] == DEFAULT_VISUAL_CONFIG.aspect_colors["square"]
    assert len(merged.aspect_colors) == len(DEFAULT_VISUAL_CONFIG.aspect_colors)


def test_list_fields_are_replaced_wholesale():
    merged = merge_visual_config({"signColors": ["#000000"]}, {"ringWidth": 18})
    assert merged.sign_colors == ["#000000"]
    assert merged.ring_width == 18


def test_later_layers_win_and_none_is_skipped():
    merged = merge_visual_config(
        {"strokeColor": "#111111"},
        None,
        {"strokeColor": "#222222", "backgroundColor": None},
    )
    assert merged.stroke_color == "#222222"
    assert merged.background_color == "#FFFFFF"


def test_snake_case_and_model_layers():
    layer = VisualConfig(ring_spacing=4)
    merged = merge_visual_config({"stroke_width": 3}, layer)
    assert merged.stroke_width == 3
    assert merged.ring_spacing == 4
    # Unset fields of a model layer do not reset earlier layers.
    assert merge_visual_config({"ringWidth": 5}, layer).ring_width == 5


def test_visual_config_rejects_unknown_keys():
    with pytest.raises(ValidationError):
        merge_visual_config({"ringColour": "#FFFFFF"})
    with pytest.raises(ValidationError):
        VisualConfig(ringWidth=-1)


def test_glyph_defaults():
    assert DEFAULT_GLYPH_CONFIG.sign_glyph(0) == "♈"
    assert DEFAULT_GLYPH_CONFIG.planet_glyph(0) == "☉"
    assert DEFAULT_GLYPH_CONFIG.planet_glyph(42) is None
    assert DEFAULT_GLYPH_CONFIG.glyph_font == "Arial"


def test_glyph_tables_merge_entry_by_entry_from_json():
    layer = json.loads('{"planetGlyphs": {"0": "Su"}, "aspectGlyphs": {"trine": "T"}}')
    merged = merge_glyph_config(layer, {"glyphSize": 16})
    assert merged.planet_glyph(0) == "Su"
    assert merged.planet_glyph(1) == "☽"
    assert merged.aspect_glyphs["trine"] == "T"
    assert merged.aspect_glyphs["square"] == "□"
    assert merged.glyph_size == 16


def test_sign_glyph_indices_are_checked():
    with pytest.raises(ValidationError):
        merge_glyph_config({"signGlyphs": {"12": "?"}})
    with pytest.raises(ValidationError):
        GlyphConfig(glyph_size=0)


def test_layered_merge_only_deepens_listed_keys():
    merged = layered_merge(
        [{"a": {"x": 1}, "b": {"x": 1}}, {"a": {"y": 2}, "b": {"y": 2}}],
        deep_keys=("a",),
    )
    assert merged == {"a": {"x": 1, "y": 2}, "b": {"y": 2}}

