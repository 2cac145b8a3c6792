"""Angle utilities shared across the orientation modules."""

from __future__ import annotations

import math

__all__ = [
    "norm360",
    "shortest_delta",
]


def norm360(x: float) -> float:
    """Normalize angle to [0, 360)."""

    y = math.fmod(x, 360.0)
    y = y + 360.0 if y < 0 else y
    # fmod of a tiny negative value plus 360 rounds up to exactly 360
    return 0.0 if y >= 360.0 else y


def shortest_delta(a: float, b: float) -> float:
    """Return ``a - b`` folded onto the shortest signed arc, in (-180, 180].

    A half-turn separation resolves to ``+180`` so the result never leaves
    the half-open interval. Offsets computed with this helper can therefore
    never produce a jump larger than a half-turn.
    """

    delta = math.fmod(a - b, 360.0)
    if delta > 180.0:
        delta -= 360.0
    elif delta <= -180.0:
        delta += 360.0
    return delta
