"""Conversion between orientation dataclasses and JSON-shaped mappings.

The mapping shape uses the camelCase keys shared with the web renderer
(``screenAngleDeg``, ``followAnchor`` ...). Parsers also accept the
snake_case spelling of each key so values coming from YAML settings files
round-trip without a translation step.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .types import (
    AnchorRelative,
    AnchorTarget,
    AngleAnchor,
    AngleSubject,
    AscLeavesHouse,
    CustomTrigger,
    HouseAnchor,
    HouseSubject,
    LockRule,
    LockSubject,
    MirrorEffect,
    ObjectAnchor,
    ObjectSubject,
    OrientationEffect,
    OrientationPreset,
    OrientationProgram,
    OrientationRule,
    OrientationTrigger,
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
    "DEFAULT_FRAME_VALUES",
    "anchor_from_mapping",
    "anchor_to_mapping",
    "effect_from_mapping",
    "effect_to_mapping",
    "lock_rule_from_mapping",
    "lock_rule_to_mapping",
    "preset_from_mapping",
    "preset_to_mapping",
    "program_from_mapping",
    "program_to_mapping",
    "rule_from_mapping",
    "rule_to_mapping",
    "subject_from_mapping",
    "subject_to_mapping",
    "trigger_from_mapping",
    "trigger_to_mapping",
    "view_frame_from_mapping",
    "view_frame_to_mapping",
]


DEFAULT_FRAME_VALUES: dict[str, Any] = {
    "referenceFrame": "ecliptic",
    "anchor": {"kind": "angle", "type": "ASC"},
    "screenAngleDeg": 180.0,
    "direction": "ccw",
    "radialFlip": False,
    "angularFlip": False,
}


def _snake(key: str) -> str:
    return "".join(f"_{ch.lower()}" if ch.isupper() else ch for ch in key)


def _get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    if key in data and data[key] is not None:
        return data[key]
    snake = _snake(key)
    if snake in data and data[snake] is not None:
        return data[snake]
    return default


def _zero_point_sign(value: Any) -> int:
    if isinstance(value, bool) or value not in (1, -1):
        raise ValueError(f"zero-point direction must be +1 or -1, got {value!r}")
    return int(value)


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    value = _get(data, key)
    if value is None:
        raise ValueError(f"{context} requires '{key}'")
    return value


def _tuple_or_none(values: Iterable[Any] | None) -> tuple[Any, ...] | None:
    if values is None:
        return None
    return tuple(values)


# ---------------------------------------------------------------------------
# Anchors


def anchor_from_mapping(data: Mapping[str, Any] | AnchorTarget) -> AnchorTarget:
    """Parse ``{"kind": ..., ...}`` into an anchor target."""

    if isinstance(data, (ObjectAnchor, HouseAnchor, SignAnchor, AngleAnchor)):
        return data
    kind = data.get("kind")
    if kind == "object":
        return ObjectAnchor(_require(data, "id", "object anchor"))
    if kind == "house":
        return HouseAnchor(int(_require(data, "index", "house anchor")))
    if kind == "sign":
        return SignAnchor(int(_require(data, "index", "sign anchor")))
    if kind == "angle":
        return AngleAnchor(str(_require(data, "type", "angle anchor")))
    raise ValueError(f"unknown anchor kind: {kind!r}")


def anchor_to_mapping(anchor: AnchorTarget) -> dict[str, Any]:
    if isinstance(anchor, ObjectAnchor):
        return {"kind": "object", "id": anchor.id}
    if isinstance(anchor, HouseAnchor):
        return {"kind": "house", "index": anchor.index}
    if isinstance(anchor, SignAnchor):
        return {"kind": "sign", "index": anchor.index}
    if isinstance(anchor, AngleAnchor):
        return {"kind": "angle", "type": anchor.type}
    raise TypeError(f"unsupported anchor target: {anchor!r}")


# ---------------------------------------------------------------------------
# View frames


def view_frame_from_mapping(data: Mapping[str, Any] | ViewFrame | None) -> ViewFrame:
    """Build a total :class:`ViewFrame` from a partial mapping.

    Omitted fields take the values in :data:`DEFAULT_FRAME_VALUES`. The
    zero-point model is selected when ``screenZero`` is present; its
    ``direction`` is then read as the ±1 multiplier (default ``+1``) and
    ``worldZero`` may be left out to be bound from the anchor later.
    """

    if isinstance(data, ViewFrame):
        return data
    data = data or {}

    anchor_data = _get(data, "anchor", DEFAULT_FRAME_VALUES["anchor"])
    anchor = anchor_from_mapping(anchor_data)
    direction = _get(data, "direction")

    screen_zero = _get(data, "screenZero")
    if screen_zero is not None:
        sign = _get(data, "sign", direction)
        world_zero = _get(data, "worldZero")
        model: AnchorRelative | ZeroPoint = ZeroPoint(
            screen_zero=float(screen_zero),
            world_zero=None if world_zero is None else float(world_zero),
            sign=1 if sign is None else _zero_point_sign(sign),
            scale=float(_get(data, "scale", 1.0)),
        )
    else:
        if direction is None:
            direction = DEFAULT_FRAME_VALUES["direction"]
        model = AnchorRelative(
            screen_angle_deg=float(
                _get(data, "screenAngleDeg", DEFAULT_FRAME_VALUES["screenAngleDeg"])
            ),
            direction=direction,
        )

    return ViewFrame(
        reference_frame=_get(data, "referenceFrame", DEFAULT_FRAME_VALUES["referenceFrame"]),
        anchor=anchor,
        model=model,
        radial_flip=bool(_get(data, "radialFlip", False)),
        angular_flip=bool(_get(data, "angularFlip", False)),
    )


def view_frame_to_mapping(frame: ViewFrame) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "referenceFrame": frame.reference_frame,
        "anchor": anchor_to_mapping(frame.anchor),
    }
    model = frame.model
    if isinstance(model, ZeroPoint):
        payload["screenZero"] = model.screen_zero
        if model.world_zero is not None:
            payload["worldZero"] = model.world_zero
        payload["direction"] = model.sign
        payload["scale"] = model.scale
    else:
        payload["screenAngleDeg"] = model.screen_angle_deg
        payload["direction"] = model.direction
    payload["radialFlip"] = frame.radial_flip
    payload["angularFlip"] = frame.angular_flip
    return payload


# ---------------------------------------------------------------------------
# Locks


def subject_from_mapping(data: Mapping[str, Any] | LockSubject) -> LockSubject:
    if isinstance(data, (ObjectSubject, HouseSubject, SignSubject, AngleSubject)):
        return data
    kind = data.get("kind")
    if kind == "object":
        return ObjectSubject(tuple(_get(data, "ids", ())))
    if kind == "house":
        return HouseSubject(_tuple_or_none(_get(data, "indices")))
    if kind == "sign":
        return SignSubject(_tuple_or_none(_get(data, "indices")))
    if kind == "angle":
        return AngleSubject(_tuple_or_none(_get(data, "types")))
    raise ValueError(f"unknown lock subject kind: {kind!r}")


def subject_to_mapping(subject: LockSubject) -> dict[str, Any]:
    if isinstance(subject, ObjectSubject):
        return {"kind": "object", "ids": list(subject.ids)}
    if isinstance(subject, HouseSubject):
        payload: dict[str, Any] = {"kind": "house"}
        if subject.indices is not None:
            payload["indices"] = list(subject.indices)
        return payload
    if isinstance(subject, SignSubject):
        payload = {"kind": "sign"}
        if subject.indices is not None:
            payload["indices"] = list(subject.indices)
        return payload
    if isinstance(subject, AngleSubject):
        payload = {"kind": "angle"}
        if subject.types is not None:
            payload["types"] = list(subject.types)
        return payload
    raise TypeError(f"unsupported lock subject: {subject!r}")


def lock_rule_from_mapping(data: Mapping[str, Any] | LockRule) -> LockRule:
    if isinstance(data, LockRule):
        return data
    follow = _get(data, "followAnchor")
    return LockRule(
        subject=subject_from_mapping(_require(data, "subject", "lock rule")),
        frame=_get(data, "frame", "world"),
        mode=_get(data, "mode", "exact"),
        follow_anchor=None if follow is None else anchor_from_mapping(follow),
    )


def lock_rule_to_mapping(rule: LockRule) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "subject": subject_to_mapping(rule.subject),
        "frame": rule.frame,
        "mode": rule.mode,
    }
    if rule.follow_anchor is not None:
        payload["followAnchor"] = anchor_to_mapping(rule.follow_anchor)
    return payload


# ---------------------------------------------------------------------------
# Triggers, effects and rules


def trigger_from_mapping(data: Mapping[str, Any] | OrientationTrigger) -> OrientationTrigger:
    if isinstance(data, (AscLeavesHouse, PlanetCrossesHouse, PlanetCrossesAngle, CustomTrigger)):
        return data
    kind = data.get("type")
    if kind == "ascLeavesHouse":
        return AscLeavesHouse(int(_require(data, "house", kind)))
    if kind == "planetCrossesHouse":
        return PlanetCrossesHouse(
            planet=_require(data, "planet", kind), house=int(_require(data, "house", kind))
        )
    if kind == "planetCrossesAngle":
        return PlanetCrossesAngle(
            planet=_require(data, "planet", kind), angle=str(_require(data, "angle", kind))
        )
    if kind == "custom":
        return CustomTrigger(str(_require(data, "id", kind)))
    raise ValueError(f"unknown orientation trigger type: {kind!r}")


def trigger_to_mapping(trigger: OrientationTrigger) -> dict[str, Any]:
    if isinstance(trigger, AscLeavesHouse):
        return {"type": trigger.type, "house": trigger.house}
    if isinstance(trigger, PlanetCrossesHouse):
        return {"type": trigger.type, "planet": trigger.planet, "house": trigger.house}
    if isinstance(trigger, PlanetCrossesAngle):
        return {"type": trigger.type, "planet": trigger.planet, "angle": trigger.angle}
    if isinstance(trigger, CustomTrigger):
        return {"type": trigger.type, "id": trigger.id}
    raise TypeError(f"unsupported orientation trigger: {trigger!r}")


def effect_from_mapping(data: Mapping[str, Any] | OrientationEffect) -> OrientationEffect:
    if isinstance(
        data,
        (RotateEffect, SetViewFrameEffect, MirrorEffect, SnapHouseToAngle, SnapAnchorToAngle),
    ):
        return data
    kind = data.get("type")
    if kind == "rotate":
        return RotateEffect(
            wheel=_require(data, "wheel", kind), delta=float(_require(data, "delta", kind))
        )
    if kind == "setViewFrame":
        return SetViewFrameEffect(view_frame_from_mapping(_require(data, "viewFrame", kind)))
    if kind == "mirror":
        return MirrorEffect(wheel=_require(data, "wheel", kind))
    if kind == "snapHouseToAngle":
        return SnapHouseToAngle(
            house=int(_require(data, "house", kind)),
            screen_angle=float(_require(data, "screenAngle", kind)),
        )
    if kind == "snapAnchorToAngle":
        return SnapAnchorToAngle(
            anchor=str(_require(data, "anchor", kind)),
            screen_angle=float(_require(data, "screenAngle", kind)),
        )
    raise ValueError(f"unknown orientation effect type: {kind!r}")


def effect_to_mapping(effect: OrientationEffect) -> dict[str, Any]:
    if isinstance(effect, RotateEffect):
        return {"type": effect.type, "wheel": effect.wheel, "delta": effect.delta}
    if isinstance(effect, SetViewFrameEffect):
        return {"type": effect.type, "viewFrame": view_frame_to_mapping(effect.view_frame)}
    if isinstance(effect, MirrorEffect):
        return {"type": effect.type, "wheel": effect.wheel}
    if isinstance(effect, SnapHouseToAngle):
        return {"type": effect.type, "house": effect.house, "screenAngle": effect.screen_angle}
    if isinstance(effect, SnapAnchorToAngle):
        return {"type": effect.type, "anchor": effect.anchor, "screenAngle": effect.screen_angle}
    raise TypeError(f"unsupported orientation effect: {effect!r}")


def rule_from_mapping(data: Mapping[str, Any] | OrientationRule) -> OrientationRule:
    if isinstance(data, OrientationRule):
        return data
    animation = _get(data, "animationMs")
    return OrientationRule(
        id=str(_require(data, "id", "orientation rule")),
        trigger=trigger_from_mapping(_require(data, "trigger", "orientation rule")),
        effect=effect_from_mapping(_require(data, "effect", "orientation rule")),
        animation_ms=None if animation is None else int(animation),
        locks=tuple(lock_rule_from_mapping(item) for item in _get(data, "locks", ())),
        recurring=bool(_get(data, "recurring", False)),
    )


def rule_to_mapping(rule: OrientationRule) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": rule.id,
        "trigger": trigger_to_mapping(rule.trigger),
        "effect": effect_to_mapping(rule.effect),
    }
    if rule.animation_ms is not None:
        payload["animationMs"] = rule.animation_ms
    if rule.locks:
        payload["locks"] = [lock_rule_to_mapping(lock) for lock in rule.locks]
    if rule.recurring:
        payload["recurring"] = True
    return payload


def program_from_mapping(data: Mapping[str, Any] | OrientationProgram) -> OrientationProgram:
    if isinstance(data, OrientationProgram):
        return data
    return OrientationProgram(
        base_frame=view_frame_from_mapping(_get(data, "baseFrame")),
        locks=tuple(lock_rule_from_mapping(item) for item in _get(data, "locks", ())),
        rules=tuple(rule_from_mapping(item) for item in _get(data, "rules", ())),
    )


def program_to_mapping(program: OrientationProgram) -> dict[str, Any]:
    return {
        "baseFrame": view_frame_to_mapping(program.base_frame),
        "locks": [lock_rule_to_mapping(lock) for lock in program.locks],
        "rules": [rule_to_mapping(rule) for rule in program.rules],
    }


def preset_from_mapping(data: Mapping[str, Any] | OrientationPreset) -> OrientationPreset:
    if isinstance(data, OrientationPreset):
        return data
    return OrientationPreset(
        id=str(_require(data, "id", "orientation preset")),
        name=str(_require(data, "name", "orientation preset")),
        description=str(_get(data, "description", "")),
        frame=view_frame_from_mapping(_get(data, "frame")),
        locks=tuple(lock_rule_from_mapping(item) for item in _get(data, "locks", ())),
    )


def preset_to_mapping(preset: OrientationPreset) -> dict[str, Any]:
    return {
        "id": preset.id,
        "name": preset.name,
        "description": preset.description,
        "frame": view_frame_to_mapping(preset.frame),
        "locks": [lock_rule_to_mapping(lock) for lock in preset.locks],
    }
