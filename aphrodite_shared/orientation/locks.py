"""Lock rule matching.

:func:`rule_applies` is a pure predicate. When several rules match the same
element, :func:`effective_lock` picks one according to a precedence policy:
``"last"`` (the default, later declarations override earlier ones, the same
way program locks are followed by rule locks) or ``"first"``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from .types import (
    AngleSubject,
    AnchorTarget,
    HouseSubject,
    LockRule,
    ObjectSubject,
    SignSubject,
    ViewFrame,
)

__all__ = [
    "LockPrecedence",
    "effective_lock",
    "follow_anchor",
    "is_locked_to_screen",
    "matching_locks",
    "rule_applies",
]

LockPrecedence = Literal["last", "first"]


def rule_applies(rule: LockRule, element_kind: str, element_id: object) -> bool:
    """Return ``True`` when ``rule`` covers the element.

    A kind mismatch is not an error; the rule simply does not apply. House,
    sign and angle subjects without an explicit list cover every element of
    their kind.
    """

    subject = rule.subject
    if subject.kind != element_kind:
        return False
    if isinstance(subject, ObjectSubject):
        return element_id in subject.ids
    if isinstance(subject, (HouseSubject, SignSubject)):
        return subject.indices is None or element_id in subject.indices
    if isinstance(subject, AngleSubject):
        return subject.types is None or element_id in subject.types
    return False


def matching_locks(
    rules: Iterable[LockRule], element_kind: str, element_id: object
) -> list[LockRule]:
    """Return every rule covering the element, in declaration order."""

    return [rule for rule in rules if rule_applies(rule, element_kind, element_id)]


def effective_lock(
    rules: Iterable[LockRule],
    element_kind: str,
    element_id: object,
    *,
    precedence: LockPrecedence = "last",
) -> LockRule | None:
    """Return the single lock that governs the element, if any."""

    if precedence not in ("last", "first"):
        raise ValueError(f"unknown lock precedence: {precedence!r}")
    matches = matching_locks(rules, element_kind, element_id)
    if not matches:
        return None
    return matches[-1] if precedence == "last" else matches[0]


def is_locked_to_screen(
    rules: Iterable[LockRule],
    element_kind: str,
    element_id: object,
    *,
    precedence: LockPrecedence = "last",
) -> bool:
    """Return ``True`` when the governing lock pins the element to the screen."""

    rule = effective_lock(rules, element_kind, element_id, precedence=precedence)
    return rule is not None and rule.frame == "screen"


def follow_anchor(rule: LockRule, frame: ViewFrame) -> AnchorTarget | None:
    """Return the anchor ``rule`` follows under ``frame``, if it follows one."""

    return rule.anchor_for(frame)
