"""Mapping merge helpers used by the styling and preset layers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

__all__ = ["layered_merge"]


def layered_merge(
    layers: Iterable[Mapping[str, Any] | None],
    *,
    deep_keys: Iterable[str] = (),
) -> dict[str, Any]:
    """Merge ``layers`` left to right with selective one-level deep merging.

    Top-level keys are shallow-overwritten by later layers, except for the keys
    listed in ``deep_keys`` whose mapping values are combined key by key.
    ``None`` entries and ``None`` values are skipped so a partially specified
    layer never erases an earlier value.
    """

    deep = frozenset(deep_keys)
    result: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if value is None:
                continue
            if key in deep and isinstance(value, Mapping):
                current = result.get(key)
                combined = dict(current) if isinstance(current, Mapping) else {}
                combined.update(value)
                result[key] = combined
            else:
                result[key] = value
    return result
