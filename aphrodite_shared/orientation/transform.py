"""World longitude ↔ screen angle mapping.

Two models are supported and selected by the type of ``ViewFrame.model``:

``AnchorRelative``
    The legacy model. The offset of a longitude from the anchor's longitude
    is negated for ``ccw`` frames, added to ``screen_angle_deg`` and, when
    ``angular_flip`` is set, reflected about ``screen_angle_deg``.

``ZeroPoint``
    ``screen = screen_zero + sign * Δ(world, world_zero) * scale``. Once
    ``world_zero`` is bound the transform needs no anchor lookup at all.

Screen angles are in degrees with 0° at 3 o'clock, growing clockwise.
Neither direction ever raises on numeric input; non-finite values simply
propagate.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..utils.angles import norm360, shortest_delta
from .anchors import AnchorLongitudeResolver, bind_world_zero, resolve_anchor
from .serialization import view_frame_from_mapping
from .types import (
    AnchorRelative,
    AnchorTarget,
    AngleAnchor,
    HouseAnchor,
    ObjectAnchor,
    SignAnchor,
    ViewFrame,
    ZeroPoint,
)

__all__ = [
    "anchor_key",
    "frame_key",
    "normalize_view_frame",
    "project_element",
    "screen_to_world",
    "world_to_screen",
]


def _zero_for(model: ZeroPoint, anchor_longitude: float | None) -> float:
    if model.world_zero is not None:
        return model.world_zero
    if anchor_longitude is None:
        raise ValueError(
            "zero-point frame has no world zero; bind it or pass the anchor longitude"
        )
    return anchor_longitude


def _anchor_for(anchor_longitude: float | None) -> float:
    if anchor_longitude is None:
        raise ValueError("anchor-relative frames need the anchor longitude")
    return anchor_longitude


def world_to_screen(
    world_longitude: float,
    frame: ViewFrame,
    anchor_longitude: float | None = None,
) -> float:
    """Return the screen angle for ``world_longitude`` under ``frame``.

    ``anchor_longitude`` is the anchor's world longitude. It is required for
    anchor-relative frames and for zero-point frames whose ``world_zero``
    is still unbound.
    """

    model = frame.model
    if isinstance(model, ZeroPoint):
        world_zero = _zero_for(model, anchor_longitude)
        delta = shortest_delta(world_longitude, world_zero)
        return norm360(model.screen_zero + model.sign * delta * model.scale)

    offset = shortest_delta(world_longitude, _anchor_for(anchor_longitude))
    if model.direction == "ccw":
        offset = -offset
    screen_angle = model.screen_angle_deg + offset
    if frame.angular_flip:
        screen_angle = model.screen_angle_deg - (screen_angle - model.screen_angle_deg)
    return norm360(screen_angle)


def screen_to_world(
    screen_angle: float,
    frame: ViewFrame,
    anchor_longitude: float | None = None,
) -> float:
    """Inverse of :func:`world_to_screen`, used for hit testing."""

    model = frame.model
    if isinstance(model, ZeroPoint):
        world_zero = _zero_for(model, anchor_longitude)
        delta = shortest_delta(screen_angle, model.screen_zero)
        return norm360(world_zero + model.sign * delta / model.scale)

    offset = shortest_delta(screen_angle, model.screen_angle_deg)
    if frame.angular_flip:
        offset = -offset
    if model.direction == "ccw":
        offset = -offset
    return norm360(_anchor_for(anchor_longitude) + offset)


def project_element(
    world_longitude: float | None,
    frame: ViewFrame,
    resolver: AnchorLongitudeResolver,
) -> float | None:
    """Return the screen angle of an element, or ``None`` to skip it.

    The element is skipped when its own longitude is unknown or when the
    frame's anchor cannot be resolved for the current chart.
    """

    if world_longitude is None:
        return None
    bound = bind_world_zero(frame, resolver)
    if bound is None:
        return None
    if isinstance(bound.model, ZeroPoint):
        return world_to_screen(world_longitude, bound)
    anchor_longitude = resolve_anchor(bound.anchor, resolver)
    if anchor_longitude is None:
        return None
    return world_to_screen(world_longitude, bound, anchor_longitude)


def normalize_view_frame(partial: Mapping[str, Any] | ViewFrame | None = None) -> ViewFrame:
    """Return a total :class:`ViewFrame` from a partially specified one.

    Defaults: ``referenceFrame='ecliptic'``, ``anchor={angle: ASC}``,
    ``screenAngleDeg=180``, ``direction='ccw'`` and both flips off.
    """

    return view_frame_from_mapping(partial)


def anchor_key(anchor: AnchorTarget) -> str:
    """Return ``kind:value`` for ``anchor``.

    Object ids use ``repr`` so the integer ``0`` and the string ``"0"`` do
    not collide.
    """

    if isinstance(anchor, ObjectAnchor):
        return f"object:{anchor.id!r}"
    if isinstance(anchor, HouseAnchor):
        return f"house:{anchor.index}"
    if isinstance(anchor, SignAnchor):
        return f"sign:{anchor.index}"
    if isinstance(anchor, AngleAnchor):
        return f"angle:{anchor.type}"
    raise TypeError(f"unsupported anchor target: {anchor!r}")


def frame_key(frame: ViewFrame) -> str:
    """Deterministic cache key; equal keys imply equivalent transforms."""

    parts = [frame.reference_frame, anchor_key(frame.anchor)]
    model = frame.model
    if isinstance(model, AnchorRelative):
        parts.extend([repr(float(model.screen_angle_deg)), model.direction])
    else:
        world_zero = "*" if model.world_zero is None else repr(float(model.world_zero))
        parts.extend(
            [
                "zp",
                repr(float(model.screen_zero)),
                world_zero,
                "+1" if model.sign > 0 else "-1",
                repr(float(model.scale)),
            ]
        )
    if frame.radial_flip:
        parts.append("rf")
    if frame.angular_flip:
        parts.append("af")
    return "|".join(parts)
