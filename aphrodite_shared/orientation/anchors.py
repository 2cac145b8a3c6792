"""Anchor resolution against host-supplied chart data."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Protocol

from ..utils.angles import norm360
from .types import (
    AnchorTarget,
    AngleAnchor,
    AstroObjectId,
    ChartSnapshot,
    HouseAnchor,
    ObjectAnchor,
    SignAnchor,
    ViewFrame,
    ZeroPoint,
)

__all__ = [
    "AnchorLongitudeResolver",
    "SnapshotResolver",
    "bind_world_zero",
    "resolve_anchor",
    "resolve_world_zero",
    "sign_start",
]

LOG = logging.getLogger(__name__)

_OPPOSITE_ANGLES = {"DESC": "ASC", "IC": "MC"}


def sign_start(sign_index: int) -> float:
    """Return the ecliptic longitude where sign ``sign_index`` begins."""

    return float(sign_index) * 30.0


class AnchorLongitudeResolver(Protocol):
    """Lookup capability implemented by the host application.

    Every lookup except :meth:`sign_start` may return ``None`` when the
    chart has no data for the requested element.
    """

    def object_longitude(self, object_id: AstroObjectId) -> float | None: ...

    def house_cusp(self, house_number: int) -> float | None: ...

    def sign_start(self, sign_index: int) -> float: ...

    def angle_longitude(self, angle_type: str) -> float | None: ...


class SnapshotResolver:
    """:class:`AnchorLongitudeResolver` backed by a :class:`ChartSnapshot`.

    Object ids are matched exactly first and then by their string form, so a
    chart keyed ``"0"`` still resolves the Sun when asked for ``0``. When the
    snapshot only carries ASC and MC, DESC and IC are derived as their
    opposites.
    """

    def __init__(self, snapshot: ChartSnapshot) -> None:
        self.snapshot = snapshot
        self._by_text = {str(key): value for key, value in snapshot.object_longitudes.items()}

    def object_longitude(self, object_id: AstroObjectId) -> float | None:
        longitudes = self.snapshot.object_longitudes
        if object_id in longitudes:
            return float(longitudes[object_id])
        value = self._by_text.get(str(object_id))
        return None if value is None else float(value)

    def house_cusp(self, house_number: int) -> float | None:
        value = self.snapshot.house_cusps.get(int(house_number))
        return None if value is None else float(value)

    def sign_start(self, sign_index: int) -> float:
        return sign_start(sign_index)

    def angle_longitude(self, angle_type: str) -> float | None:
        angles = self.snapshot.angle_longitudes
        if angle_type in angles:
            return float(angles[angle_type])
        opposite = _OPPOSITE_ANGLES.get(angle_type)
        if opposite is not None and opposite in angles:
            return norm360(float(angles[opposite]) + 180.0)
        return None


def resolve_anchor(target: AnchorTarget, resolver: AnchorLongitudeResolver) -> float | None:
    """Return the world longitude of ``target`` or ``None`` when unknown.

    ``None`` means the element cannot be placed under this frame for the
    current tick; it is never a stand-in for 0°.
    """

    if isinstance(target, ObjectAnchor):
        return resolver.object_longitude(target.id)
    if isinstance(target, HouseAnchor):
        return resolver.house_cusp(target.index)
    if isinstance(target, SignAnchor):
        return resolver.sign_start(target.index)
    if isinstance(target, AngleAnchor):
        return resolver.angle_longitude(target.type)
    raise TypeError(f"unsupported anchor target: {target!r}")


def resolve_world_zero(frame: ViewFrame, resolver: AnchorLongitudeResolver) -> float | None:
    """Return the longitude that defines the frame's zero.

    A bound zero-point frame answers directly; every other frame resolves its
    anchor.
    """

    model = frame.model
    if isinstance(model, ZeroPoint) and model.world_zero is not None:
        return model.world_zero
    return resolve_anchor(frame.anchor, resolver)


def bind_world_zero(frame: ViewFrame, resolver: AnchorLongitudeResolver) -> ViewFrame | None:
    """Return ``frame`` with its zero-point ``world_zero`` resolved.

    Intended to run once per render pass so per-element transforms never
    touch the resolver. Anchor-relative and already-bound frames come back
    unchanged; ``None`` is returned when the anchor cannot be resolved.
    """

    model = frame.model
    if not isinstance(model, ZeroPoint) or model.world_zero is not None:
        return frame
    longitude = resolve_anchor(frame.anchor, resolver)
    if longitude is None:
        LOG.debug("Cannot bind world zero; anchor %r unresolved", frame.anchor)
        return None
    return frame.with_model(replace(model, world_zero=longitude))
