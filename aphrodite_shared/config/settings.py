"""Configuration models and helpers for Aphrodite shared settings."""

from __future__ import annotations

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..orientation.engine import OrientationEngine
from ..orientation.presets import ALL_PRESETS, get_preset_by_id
from ..orientation.types import OrientationPreset, OrientationProgram
from ..presets.chart_presets import CHART_PRESETS, ChartPreset
from ..wheels.registry import DEFAULT_REGISTRY, WheelRegistry
from ..wheels.types import WheelDefinition

LOG = logging.getLogger(__name__)

__all__ = [
    "CONFIG_FILENAME",
    "CURRENT_SETTINGS_SCHEMA_VERSION",
    "OrientationCfg",
    "PresetsCfg",
    "Settings",
    "build_orientation_engine",
    "config_path",
    "default_settings",
    "ensure_default_config",
    "get_config_home",
    "load_settings",
    "save_settings",
]

CURRENT_SETTINGS_SCHEMA_VERSION = 2

# -------------------- Settings Schema --------------------


class OrientationCfg(BaseModel):
    """Defaults for chart orientation and the rule engine."""

    default_preset: str = "asc-left"
    lock_precedence: Literal["last", "first"] = "last"
    recurring_rules: bool = False

    @field_validator("default_preset")
    @classmethod
    def _known_preset(cls, value: str) -> str:
        if get_preset_by_id(value) is None:
            known = ", ".join(preset.id for preset in ALL_PRESETS)
            raise ValueError(f"unknown orientation preset {value!r} (expected one of {known})")
        return value

    def preset(self) -> OrientationPreset:
        preset = get_preset_by_id(self.default_preset)
        assert preset is not None
        return preset


class PresetsCfg(BaseModel):
    """Default chart preset and wheel used when the host does not choose one."""

    default_chart_preset: str = "classic"
    default_wheel: str = "Standard Natal Wheel"

    @field_validator("default_chart_preset")
    @classmethod
    def _known_chart_preset(cls, value: str) -> str:
        if value not in CHART_PRESETS:
            raise ValueError(
                f"unknown chart preset {value!r} (expected one of {', '.join(CHART_PRESETS)})"
            )
        return value

    def chart_preset(self) -> ChartPreset:
        return CHART_PRESETS[self.default_chart_preset]

    def wheel(self, registry: WheelRegistry | None = None) -> WheelDefinition | None:
        """Resolve the default wheel; user wheels may be registered later."""

        return (registry or DEFAULT_REGISTRY).get(self.default_wheel)


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    orientation: OrientationCfg = Field(default_factory=OrientationCfg)
    presets: PresetsCfg = Field(default_factory=PresetsCfg)


def build_orientation_engine(
    program: OrientationProgram,
    settings: Settings | None = None,
    **kwargs,
) -> OrientationEngine:
    """Build an engine whose rule and lock policies come from ``settings``."""

    cfg = (settings or Settings()).orientation
    kwargs.setdefault("recurring_default", cfg.recurring_rules)
    kwargs.setdefault("lock_precedence", cfg.lock_precedence)
    return OrientationEngine(program, **kwargs)


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    if os.name == "nt":
        base = Path(
            os.environ.get(
                "LOCALAPPDATA", str(Path.home() / "AppData" / "Local")
            )
        )
        return base / "Aphrodite"
    return Path(os.environ.get("APHRODITE_HOME", str(Path.home() / ".aphrodite")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    LOG.debug("Saved settings to %s", target_path)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _upgrade_settings_payload(
    data: dict[str, object], *, schema_version: int
) -> tuple[dict[str, object], bool]:
    """Apply upgrades required for older settings payloads."""

    upgraded = deepcopy(data)
    version = max(1, schema_version)
    changed = False

    if version < 2:
        # v1 kept the preset choices at the top level.
        orientation = dict(upgraded.get("orientation") or {})
        presets = dict(upgraded.get("presets") or {})
        if "orientation_preset" in upgraded:
            orientation.setdefault("default_preset", upgraded.pop("orientation_preset"))
        if "chart_preset" in upgraded:
            presets.setdefault("default_chart_preset", upgraded.pop("chart_preset"))
        if "wheel" in upgraded:
            presets.setdefault("default_wheel", upgraded.pop("wheel"))
        if orientation:
            upgraded["orientation"] = orientation
        if presets:
            upgraded["presets"] = presets
        version = 2
        changed = True

    if version < CURRENT_SETTINGS_SCHEMA_VERSION:
        version = CURRENT_SETTINGS_SCHEMA_VERSION
        changed = True

    if upgraded.get("schema_version") != version:
        upgraded["schema_version"] = version
        changed = True

    return upgraded, changed


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        LOG.warning("Ignoring malformed settings file %s", source_path)
        raw = {}
    schema_version = _coerce_schema_version(raw.get("schema_version"))
    data, upgraded = _upgrade_settings_payload(raw, schema_version=schema_version)
    settings = Settings(**data)
    if upgraded:
        LOG.info("Upgraded settings schema to v%s at %s", settings.schema_version, source_path)
        save_settings(settings, source_path)
    return settings


def ensure_default_config() -> Path:
    """Ensure a configuration file exists on disk and return its path."""

    target = config_path()
    if not target.exists():
        save_settings(default_settings(), target)
    return target
