"""Semver-like version helpers for wheel definitions."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import NamedTuple

from .types import WheelDefinition

__all__ = [
    "VersionParts",
    "are_versions_compatible",
    "compare_versions",
    "get_latest_version",
    "get_version_parts",
    "is_newer_version",
    "is_older_version",
    "is_valid_version",
]

_VERSION_RE = re.compile(r"^\d+\.\d+\.\d+$")


class VersionParts(NamedTuple):
    major: int
    minor: int
    patch: int


def _numeric_parts(version: str) -> list[int]:
    parts = []
    for chunk in version.split("."):
        try:
            parts.append(int(chunk))
        except ValueError:
            parts.append(0)
    return parts


def compare_versions(v1: str, v2: str) -> int:
    """Return -1, 0 or 1; missing trailing components count as zero."""

    parts1 = _numeric_parts(v1)
    parts2 = _numeric_parts(v2)
    width = max(len(parts1), len(parts2))
    parts1 += [0] * (width - len(parts1))
    parts2 += [0] * (width - len(parts2))
    if parts1 < parts2:
        return -1
    if parts1 > parts2:
        return 1
    return 0


def is_newer_version(v1: str, v2: str) -> bool:
    return compare_versions(v1, v2) > 0


def is_older_version(v1: str, v2: str) -> bool:
    return compare_versions(v1, v2) < 0


def is_valid_version(version: object) -> bool:
    return isinstance(version, str) and bool(_VERSION_RE.match(version))


def get_version_parts(version: str) -> VersionParts | None:
    if not is_valid_version(version):
        return None
    major, minor, patch = (int(part) for part in version.split("."))
    return VersionParts(major, minor, patch)


def are_versions_compatible(v1: str, v2: str) -> bool:
    """Two versions are compatible when both are valid and share a major."""

    parts1 = get_version_parts(v1)
    parts2 = get_version_parts(v2)
    if parts1 is None or parts2 is None:
        return False
    return parts1.major == parts2.major


def get_latest_version(wheels: Iterable[WheelDefinition]) -> WheelDefinition | None:
    """Return the newest definition; versioned ones beat unversioned ones.

    Ties keep the earliest definition.
    """

    latest: WheelDefinition | None = None
    for wheel in wheels:
        if latest is None:
            latest = wheel
        elif wheel.version and latest.version:
            if is_newer_version(wheel.version, latest.version):
                latest = wheel
        elif wheel.version and not latest.version:
            latest = wheel
    return latest
