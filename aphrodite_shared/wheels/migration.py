"""Step-wise migration of wheel definitions between versions.

Migrations are registered per version step (``1.0.0 -> 1.0.1``). Migrating a
definition walks from its version towards the target one step at a time,
running the functions registered for each step in registration order and
stamping the new version afterwards. A step without registered functions
only bumps the version.

The next step from a version is the closest registered step that does not
overshoot the target. Without one the patch number is bumped while the target
shares major and minor, otherwise the walk moves to the next minor (or major)
release so every walk terminates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .types import WheelDefinition
from .versioning import compare_versions, get_version_parts, is_valid_version

LOG = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_MIGRATIONS",
    "MigrationFunction",
    "MigrationRegistry",
    "MigrationResult",
]

MigrationFunction = Callable[[WheelDefinition], WheelDefinition]


@dataclass(frozen=True, slots=True)
class MigrationResult:
    success: bool
    migrated: WheelDefinition | None = None
    errors: tuple[str, ...] = ()
    steps: tuple[str, ...] = field(default=())


def _step_key(from_version: str, to_version: str) -> str:
    return f"{from_version}->{to_version}"


class MigrationRegistry:
    """Holds migration functions keyed by version step."""

    def __init__(self) -> None:
        self._steps: dict[str, list[MigrationFunction]] = {}
        self._targets: dict[str, set[str]] = {}

    def register(self, from_version: str, to_version: str, migration: MigrationFunction) -> None:
        if not is_valid_version(from_version) or not is_valid_version(to_version):
            raise ValueError(
                f"migration versions must be major.minor.patch: {from_version!r} -> {to_version!r}"
            )
        if compare_versions(from_version, to_version) >= 0:
            raise ValueError(f"migration must move forward: {from_version} -> {to_version}")
        self._steps.setdefault(_step_key(from_version, to_version), []).append(migration)
        self._targets.setdefault(from_version, set()).add(to_version)

    def _next_version(self, current: str, target: str) -> str:
        registered = [
            candidate
            for candidate in self._targets.get(current, ())
            if compare_versions(candidate, target) <= 0
        ]
        if registered:
            return min(registered, key=get_version_parts)
        now = get_version_parts(current)
        goal = get_version_parts(target)
        if (now.major, now.minor) == (goal.major, goal.minor):
            return f"{now.major}.{now.minor}.{now.patch + 1}"
        if now.major == goal.major:
            return f"{now.major}.{now.minor + 1}.0"
        return f"{now.major + 1}.0.0"

    def needs_migration(self, definition: WheelDefinition, target_version: str) -> bool:
        if not is_valid_version(definition.version) or not is_valid_version(target_version):
            return False
        return compare_versions(definition.version, target_version) < 0

    def migrate(self, definition: WheelDefinition, target_version: str) -> MigrationResult:
        """Migrate ``definition`` to ``target_version``.

        Failures are reported through the result rather than raised.
        """

        if not definition.version:
            return MigrationResult(False, errors=("Wheel definition has no version",))
        if not is_valid_version(definition.version):
            return MigrationResult(
                False, errors=(f"Invalid source version format: {definition.version}",)
            )
        if not is_valid_version(target_version):
            return MigrationResult(
                False, errors=(f"Invalid target version format: {target_version}",)
            )

        order = compare_versions(definition.version, target_version)
        if order == 0:
            return MigrationResult(True, migrated=definition)
        if order > 0:
            return MigrationResult(
                False,
                errors=(
                    f"Cannot migrate backwards from {definition.version} to {target_version}",
                ),
            )

        current = definition
        version = definition.version
        steps: list[str] = []
        while compare_versions(version, target_version) < 0:
            next_version = self._next_version(version, target_version)
            key = _step_key(version, next_version)
            try:
                for migration in self._steps.get(key, ()):
                    current = migration(current)
            except Exception as exc:
                LOG.warning("Wheel migration %s failed for %s: %s", key, definition.name, exc)
                return MigrationResult(
                    False, errors=(f"Migration failed for {key}: {exc}",), steps=tuple(steps)
                )
            current = current.with_version(next_version)
            steps.append(key)
            LOG.debug("Migrated %s across %s", definition.name, key)
            version = next_version

        return MigrationResult(True, migrated=current, steps=tuple(steps))


DEFAULT_MIGRATIONS = MigrationRegistry()
