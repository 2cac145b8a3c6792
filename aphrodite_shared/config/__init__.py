"""Persisted settings for hosts embedding the shared chart layer."""

from __future__ import annotations

from .settings import (
    Settings,
    build_orientation_engine,
    config_path,
    default_settings,
    get_config_home,
    load_settings,
    save_settings,
)

__all__ = [
    "Settings",
    "build_orientation_engine",
    "config_path",
    "default_settings",
    "get_config_home",
    "load_settings",
    "save_settings",
]
