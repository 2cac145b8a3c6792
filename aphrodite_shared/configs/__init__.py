"""Default visual and glyph styling with layered merging."""

from __future__ import annotations

from .glyphs import DEFAULT_GLYPH_CONFIG, GlyphConfig, merge_glyph_config
from .visual import DEFAULT_VISUAL_CONFIG, VisualConfig, merge_visual_config

__all__ = [
    "DEFAULT_GLYPH_CONFIG",
    "DEFAULT_VISUAL_CONFIG",
    "GlyphConfig",
    "VisualConfig",
    "merge_glyph_config",
    "merge_visual_config",
]
