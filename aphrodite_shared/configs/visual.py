"""Visual styling configuration shared by every chart renderer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..utils.merging import layered_merge

__all__ = [
    "DEFAULT_VISUAL_CONFIG",
    "VISUAL_DEEP_KEYS",
    "VisualConfig",
    "merge_visual_config",
]

VISUAL_DEEP_KEYS: tuple[str, ...] = ("aspectColors",)

_SIGN_COLORS = [
    "#FF6B6B",  # Aries
    "#FFA07A",  # Taurus
    "#FFD700",  # Gemini
    "#98D8C8",  # Cancer
    "#FF6347",  # Leo
    "#F0E68C",  # Virgo
    "#87CEEB",  # Libra
    "#9370DB",  # Scorpio
    "#FFA500",  # Sagittarius
    "#2F4F4F",  # Capricorn
    "#00CED1",  # Aquarius
    "#FF69B4",  # Pisces
]

_HOUSE_COLORS = ["#E8E8E8", "#D3D3D3", "#C0C0C0", "#A9A9A9", "#808080", "#696969"] * 2

_PLANET_COLORS = [
    "#FFD700",  # Sun
    "#C0C0C0",  # Moon
    "#FF6347",  # Mercury
    "#FFA500",  # Venus
    "#FF4500",  # Mars
    "#FFD700",  # Jupiter
    "#9370DB",  # Saturn
    "#00CED1",  # Uranus
    "#4169E1",  # Neptune
    "#8B4513",  # Pluto
]

_ASPECT_COLORS = {
    "conjunction": "#FF0000",
    "opposition": "#0000FF",
    "trine": "#00FF00",
    "square": "#FF0000",
    "sextile": "#FFFF00",
    "semisextile": "#FFA500",
    "semisquare": "#FF6347",
    "sesquiquadrate": "#FF6347",
    "quincunx": "#9370DB",
}


class VisualConfig(BaseModel):
    """Colours and stroke settings. Serialises with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    ring_width: float = Field(default=30, ge=0, alias="ringWidth")
    ring_spacing: float = Field(default=10, ge=0, alias="ringSpacing")
    sign_colors: list[str] = Field(default_factory=lambda: list(_SIGN_COLORS), alias="signColors")
    house_colors: list[str] = Field(
        default_factory=lambda: list(_HOUSE_COLORS), alias="houseColors"
    )
    planet_colors: list[str] = Field(
        default_factory=lambda: list(_PLANET_COLORS), alias="planetColors"
    )
    aspect_colors: dict[str, str] = Field(
        default_factory=lambda: dict(_ASPECT_COLORS), alias="aspectColors"
    )
    aspect_stroke_width: float = Field(default=2, ge=0, alias="aspectStrokeWidth")
    background_color: str = Field(default="#FFFFFF", alias="backgroundColor")
    stroke_color: str = Field(default="#000000", alias="strokeColor")
    stroke_width: float = Field(default=1, ge=0, alias="strokeWidth")

    def to_mapping(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def sign_color(self, index: int) -> str:
        return self.sign_colors[index % len(self.sign_colors)]


DEFAULT_VISUAL_CONFIG = VisualConfig()

_ALIASES = {name: info.alias or name for name, info in VisualConfig.model_fields.items()}


def _as_layer(layer: VisualConfig | Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if layer is None:
        return None
    if isinstance(layer, VisualConfig):
        return layer.model_dump(by_alias=True, exclude_unset=True)
    return {_ALIASES.get(key, key): value for key, value in layer.items()}


def merge_visual_config(*layers: VisualConfig | Mapping[str, Any] | None) -> VisualConfig:
    """Layer partial configs over the package defaults.

    Later layers overwrite earlier ones key by key; ``aspectColors`` is merged
    per aspect so an override for one aspect keeps the other defaults.
    """

    merged = layered_merge(
        [DEFAULT_VISUAL_CONFIG.to_mapping(), *(_as_layer(layer) for layer in layers)],
        deep_keys=VISUAL_DEEP_KEYS,
    )
    return VisualConfig.model_validate(merged)
