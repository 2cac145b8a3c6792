"""Glyph (symbol) configuration shared by every chart renderer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.merging import layered_merge

__all__ = [
    "DEFAULT_GLYPH_CONFIG",
    "GLYPH_DEEP_KEYS",
    "GlyphConfig",
    "merge_glyph_config",
]

GLYPH_DEEP_KEYS: tuple[str, ...] = ("signGlyphs", "planetGlyphs", "aspectGlyphs")

_SIGN_GLYPHS = {
    0: "♈",  # Aries
    1: "♉",  # Taurus
    2: "♊",  # Gemini
    3: "♋",  # Cancer
    4: "♌",  # Leo
    5: "♍",  # Virgo
    6: "♎",  # Libra
    7: "♏",  # Scorpio
    8: "♐",  # Sagittarius
    9: "♑",  # Capricorn
    10: "♒",  # Aquarius
    11: "♓",  # Pisces
}

_PLANET_GLYPHS = {
    0: "☉",  # Sun
    1: "☽",  # Moon
    2: "☿",  # Mercury
    3: "♀",  # Venus
    4: "♂",  # Mars
    5: "♃",  # Jupiter
    6: "♄",  # Saturn
    7: "♅",  # Uranus
    8: "♆",  # Neptune
    9: "♇",  # Pluto
}

_ASPECT_GLYPHS = {
    "conjunction": "☌",
    "opposition": "☍",
    "trine": "△",
    "square": "□",
    "sextile": "⚹",
    "semisextile": "⚺",
    "semisquare": "∠",
    "sesquiquadrate": "⚻",
    "quincunx": "⚼",
}


class GlyphConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    sign_glyphs: dict[int, str] = Field(
        default_factory=lambda: dict(_SIGN_GLYPHS), alias="signGlyphs"
    )
    planet_glyphs: dict[int, str] = Field(
        default_factory=lambda: dict(_PLANET_GLYPHS), alias="planetGlyphs"
    )
    aspect_glyphs: dict[str, str] = Field(
        default_factory=lambda: dict(_ASPECT_GLYPHS), alias="aspectGlyphs"
    )
    glyph_size: float = Field(default=12, gt=0, alias="glyphSize")
    glyph_font: str = Field(default="Arial", alias="glyphFont")

    @field_validator("sign_glyphs")
    @classmethod
    def _check_sign_indices(cls, value: dict[int, str]) -> dict[int, str]:
        bad = sorted(index for index in value if not 0 <= index <= 11)
        if bad:
            raise ValueError(f"sign glyph indices must be within 0..11, got {bad}")
        return value

    def to_mapping(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def sign_glyph(self, index: int) -> str | None:
        return self.sign_glyphs.get(index)

    def planet_glyph(self, index: int) -> str | None:
        return self.planet_glyphs.get(index)


DEFAULT_GLYPH_CONFIG = GlyphConfig()

_ALIASES = {name: info.alias or name for name, info in GlyphConfig.model_fields.items()}
_INDEXED_KEYS = ("signGlyphs", "planetGlyphs")


def _as_layer(layer: GlyphConfig | Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if layer is None:
        return None
    if isinstance(layer, GlyphConfig):
        return layer.model_dump(by_alias=True, exclude_unset=True)
    normalized: dict[str, Any] = {}
    for key, value in layer.items():
        key = _ALIASES.get(key, key)
        # JSON object keys arrive as strings ("0"); the defaults use ints.
        if key in _INDEXED_KEYS and isinstance(value, Mapping):
            value = {
                int(index) if isinstance(index, str) and index.isdigit() else index: glyph
                for index, glyph in value.items()
            }
        normalized[key] = value
    return normalized


def merge_glyph_config(*layers: GlyphConfig | Mapping[str, Any] | None) -> GlyphConfig:
    """Layer partial glyph configs over the package defaults.

    The three glyph tables are merged entry by entry; every other key is
    overwritten by the last layer that sets it.
    """

    merged = layered_merge(
        [DEFAULT_GLYPH_CONFIG.to_mapping(), *(_as_layer(layer) for layer in layers)],
        deep_keys=GLYPH_DEEP_KEYS,
    )
    return GlyphConfig.model_validate(merged)
