"""Name-keyed registry of wheel definitions.

Lookups are case and whitespace insensitive: ``"Standard Natal Wheel"`` and
``"standard natal wheel"`` resolve to the same key. Definitions registered at
runtime shadow built-ins with the same normalised name; unregistering such a
definition makes the built-in visible again.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from .definitions import BUILT_IN_WHEELS
from .types import WheelDefinition

LOG = logging.getLogger(__name__)

__all__ = ["DEFAULT_REGISTRY", "WheelRegistry", "normalize_wheel_name"]

_WHITESPACE = re.compile(r"\s+")


def normalize_wheel_name(name: str) -> str:
    return _WHITESPACE.sub("-", name.lower())


class WheelRegistry:
    """Mutable registry holding built-in and user-registered wheels."""

    def __init__(self, built_ins: Iterable[WheelDefinition] = BUILT_IN_WHEELS) -> None:
        self._built_ins: dict[str, WheelDefinition] = {
            normalize_wheel_name(defn.name): defn for defn in built_ins
        }
        self._user: dict[str, WheelDefinition] = {}

    def register(self, definition: WheelDefinition) -> WheelDefinition:
        key = normalize_wheel_name(definition.name)
        if key in self._user:
            LOG.debug("Replacing user wheel definition %s", definition.name)
        elif key in self._built_ins:
            LOG.debug("User wheel definition %s shadows a built-in", definition.name)
        self._user[key] = definition
        return definition

    def unregister(self, name: str) -> bool:
        """Remove a user definition; built-ins cannot be removed."""

        removed = self._user.pop(normalize_wheel_name(name), None)
        return removed is not None

    def get(self, name: str) -> WheelDefinition | None:
        key = normalize_wheel_name(name)
        definition = self._user.get(key)
        if definition is not None:
            return definition
        return self._built_ins.get(key)

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def list(self) -> list[WheelDefinition]:
        """Return the visible definitions, built-ins first, each name once."""

        visible = [
            self._user.get(key, defn) for key, defn in self._built_ins.items()
        ]
        visible.extend(
            defn for key, defn in self._user.items() if key not in self._built_ins
        )
        return visible

    def built_in_names(self) -> list[str]:
        return [defn.name for defn in self._built_ins.values()]

    def user_names(self) -> list[str]:
        return [defn.name for defn in self._user.values()]

    def clear_user(self) -> None:
        self._user.clear()


DEFAULT_REGISTRY = WheelRegistry()
