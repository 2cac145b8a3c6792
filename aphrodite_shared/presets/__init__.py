"""Ready-to-use chart presets."""

from __future__ import annotations

from .chart_presets import (
    CHART_PRESETS,
    ChartPreset,
    create_preset_from_wheel,
    get_chart_preset,
    preset_names,
)

__all__ = [
    "CHART_PRESETS",
    "ChartPreset",
    "create_preset_from_wheel",
    "get_chart_preset",
    "preset_names",
]
