"""Orientation and view frame engine for chart rendering."""

from __future__ import annotations

from .anchors import (
    AnchorLongitudeResolver,
    SnapshotResolver,
    bind_world_zero,
    resolve_anchor,
    resolve_world_zero,
    sign_start,
)
from .engine import (
    EvaluationResult,
    OrientationEngine,
    evaluate_program,
    house_for_longitude,
)
from .locks import effective_lock, is_locked_to_screen, matching_locks, rule_applies
from .presets import ALL_PRESETS, DEFAULT_PRESET, get_preset_by_id, get_preset_by_name
from .serialization import program_from_mapping, program_to_mapping
from .transform import (
    frame_key,
    normalize_view_frame,
    project_element,
    screen_to_world,
    world_to_screen,
)
from .types import (
    AnchorRelative,
    AngleAnchor,
    AngleSubject,
    AscLeavesHouse,
    ChartSnapshot,
    CustomTrigger,
    HouseAnchor,
    HouseSubject,
    LockRule,
    MirrorEffect,
    ObjectAnchor,
    ObjectSubject,
    OrientationPreset,
    OrientationProgram,
    OrientationRule,
    OrientationRuntimeState,
    PlanetCrossesAngle,
    PlanetCrossesHouse,
    RotateEffect,
    SetViewFrameEffect,
    SignAnchor,
    SignSubject,
    SnapAnchorToAngle,
    SnapHouseToAngle,
    ViewFrame,
    ZeroPoint,
)

__all__ = [
    "ALL_PRESETS",
    "DEFAULT_PRESET",
    "AnchorLongitudeResolver",
    "AnchorRelative",
    "AngleAnchor",
    "AngleSubject",
    "AscLeavesHouse",
    "ChartSnapshot",
    "CustomTrigger",
    "EvaluationResult",
    "HouseAnchor",
    "HouseSubject",
    "LockRule",
    "MirrorEffect",
    "ObjectAnchor",
    "ObjectSubject",
    "OrientationEngine",
    "OrientationPreset",
    "OrientationProgram",
    "OrientationRule",
    "OrientationRuntimeState",
    "PlanetCrossesAngle",
    "PlanetCrossesHouse",
    "RotateEffect",
    "SetViewFrameEffect",
    "SignAnchor",
    "SignSubject",
    "SnapAnchorToAngle",
    "SnapHouseToAngle",
    "SnapshotResolver",
    "ViewFrame",
    "ZeroPoint",
    "bind_world_zero",
    "effective_lock",
    "evaluate_program",
    "frame_key",
    "get_preset_by_id",
    "get_preset_by_name",
    "house_for_longitude",
    "is_locked_to_screen",
    "matching_locks",
    "normalize_view_frame",
    "program_from_mapping",
    "program_to_mapping",
    "project_element",
    "resolve_anchor",
    "resolve_world_zero",
    "rule_applies",
    "screen_to_world",
    "sign_start",
    "world_to_screen",
]
