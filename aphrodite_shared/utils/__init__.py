"""Utility submodule for aphrodite_shared."""

from __future__ import annotations

from .angles import norm360, shortest_delta
from .merging import layered_merge

__all__ = [
    "layered_merge",
    "norm360",
    "shortest_delta",
]
