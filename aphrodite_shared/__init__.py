"""Shared, platform-agnostic data layer for Aphrodite chart rendering.

The package describes *what* to draw (wheel layouts, styling and glyphs) and
*where* to draw it (the orientation engine mapping world longitudes to
screen angles). Rendering and astronomical computation live with the hosts.
"""

from __future__ import annotations

from .configs import GlyphConfig, VisualConfig, merge_glyph_config, merge_visual_config
from .orientation import (
    ChartSnapshot,
    OrientationEngine,
    ViewFrame,
    screen_to_world,
    world_to_screen,
)
from .presets import ChartPreset, create_preset_from_wheel, get_chart_preset
from .wheels import DEFAULT_REGISTRY, WheelDefinition, WheelRegistry

__version__ = "0.3.0"

__all__ = [
    "ChartPreset",
    "ChartSnapshot",
    "DEFAULT_REGISTRY",
    "GlyphConfig",
    "OrientationEngine",
    "ViewFrame",
    "VisualConfig",
    "WheelDefinition",
    "WheelRegistry",
    "__version__",
    "create_preset_from_wheel",
    "get_chart_preset",
    "merge_glyph_config",
    "merge_visual_config",
    "screen_to_world",
    "world_to_screen",
]
