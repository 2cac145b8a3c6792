"""Chart presets: a wheel definition bundled with resolved styling.

Styling is resolved in three layers, later layers winning:

1. package defaults (:mod:`aphrodite_shared.configs`)
2. the wheel's ``default_visual_config`` / ``default_glyph_config``
3. preset-specific overrides
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..configs.glyphs import GlyphConfig, merge_glyph_config
from ..configs.visual import VisualConfig, merge_visual_config
from ..wheels.registry import DEFAULT_REGISTRY, WheelRegistry
from ..wheels.types import WheelDefinition

LOG = logging.getLogger(__name__)

__all__ = [
    "CHART_PRESETS",
    "CLASSIC_PRESET",
    "ChartPreset",
    "MINIMAL_PRESET",
    "MODERN_PRESET",
    "create_preset_from_wheel",
    "get_chart_preset",
    "preset_names",
]


@dataclass(frozen=True, slots=True)
class ChartPreset:
    name: str
    wheel: WheelDefinition
    visual_config: VisualConfig
    glyph_config: GlyphConfig
    description: str | None = None

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            payload["description"] = self.description
        payload["wheel"] = self.wheel.to_mapping()
        payload["visualConfig"] = self.visual_config.to_mapping()
        payload["glyphConfig"] = self.glyph_config.to_mapping()
        return payload


def create_preset_from_wheel(
    wheel_name: str,
    preset_name: str,
    visual_overrides: Mapping[str, Any] | None = None,
    glyph_overrides: Mapping[str, Any] | None = None,
    *,
    registry: WheelRegistry | None = None,
    description: str | None = None,
) -> ChartPreset:
    """Compose a preset from the named wheel.

    Raises
    ------
    LookupError
        If ``wheel_name`` is not registered.
    """

    wheel = (registry or DEFAULT_REGISTRY).get(wheel_name)
    if wheel is None:
        raise LookupError(f"Wheel definition not found: {wheel_name}")
    LOG.debug("Composing chart preset %s from wheel %s", preset_name, wheel.name)
    return ChartPreset(
        name=preset_name,
        description=description,
        wheel=wheel,
        visual_config=merge_visual_config(wheel.default_visual_config, visual_overrides),
        glyph_config=merge_glyph_config(wheel.default_glyph_config, glyph_overrides),
    )


CLASSIC_PRESET = create_preset_from_wheel(
    "Standard Natal Wheel",
    "Classic",
    description="Traditional astrological styling with warm, vibrant colors",
)

MODERN_PRESET = create_preset_from_wheel(
    "Standard Natal Wheel",
    "Modern",
    {
        "signColors": [
            "#E63946",  # Aries
            "#F77F00",  # Taurus
            "#FCBF49",  # Gemini
            "#06A77D",  # Cancer
            "#D62828",  # Leo
            "#F1FAEE",  # Virgo
            "#A8DADC",  # Libra
            "#457B9D",  # Scorpio
            "#1D3557",  # Sagittarius
            "#2A2D34",  # Capricorn
            "#4A90E2",  # Aquarius
            "#E91E63",  # Pisces
        ],
        "houseColors": ["#F5F5F5", "#E0E0E0", "#CCCCCC", "#B0B0B0", "#9E9E9E", "#757575"] * 2,
        "planetColors": [
            "#FFB800",  # Sun
            "#E0E0E0",  # Moon
            "#FF6B6B",  # Mercury
            "#4ECDC4",  # Venus
            "#FF4757",  # Mars
            "#FFA502",  # Jupiter
            "#5F27CD",  # Saturn
            "#00D2D3",  # Uranus
            "#3742FA",  # Neptune
            "#2F3542",  # Pluto
        ],
        "backgroundColor": "#FAFAFA",
        "strokeColor": "#333333",
    },
    description="Contemporary styling with cooler tones and modern colors",
)

MINIMAL_PRESET = create_preset_from_wheel(
    "Standard Natal Wheel",
    "Minimal",
    {
        "signColors": ["#E8E8E8", "#D3D3D3", "#C0C0C0", "#A9A9A9", "#808080", "#696969"] * 2,
        "houseColors": ["#FFFFFF", "#F5F5F5", "#E8E8E8", "#D3D3D3", "#C0C0C0", "#A9A9A9"] * 2,
        "planetColors": [
            "#000000",
            "#666666",
            "#333333",
            "#444444",
            "#222222",
            "#555555",
            "#111111",
            "#777777",
            "#888888",
            "#000000",
        ],
        "aspectColors": {
            "conjunction": "#000000",
            "opposition": "#333333",
            "trine": "#666666",
            "square": "#000000",
            "sextile": "#999999",
        },
        "backgroundColor": "#FFFFFF",
        "strokeColor": "#000000",
        "strokeWidth": 1,
    },
    {"glyphSize": 10},
    description="Clean, minimal design with muted colors",
)

CHART_PRESETS: dict[str, ChartPreset] = {
    "classic": CLASSIC_PRESET,
    "modern": MODERN_PRESET,
    "minimal": MINIMAL_PRESET,
}


def get_chart_preset(name: str) -> ChartPreset | None:
    return CHART_PRESETS.get(name)


def preset_names() -> list[str]:
    return list(CHART_PRESETS)
