"""Wheel definitions, registry and text loaders."""

from __future__ import annotations

from .definitions import BUILT_IN_WHEELS, STANDARD_NATAL
from .loader import (
    ValidationIssue,
    ValidationReport,
    WheelDefinitionValidationError,
    export_wheel_definition_to_json,
    load_wheel_definition,
    load_wheel_definition_from_json,
    load_wheel_definition_from_yaml,
    register_wheel_definition_from_json,
    validate_wheel_payload,
)
from .migration import DEFAULT_MIGRATIONS, MigrationRegistry, MigrationResult
from .registry import DEFAULT_REGISTRY, WheelRegistry, normalize_wheel_name
from .types import RingDefinition, WheelDefinition
from .versioning import (
    are_versions_compatible,
    compare_versions,
    get_latest_version,
    get_version_parts,
    is_newer_version,
    is_older_version,
    is_valid_version,
)

__all__ = [
    "BUILT_IN_WHEELS",
    "DEFAULT_MIGRATIONS",
    "DEFAULT_REGISTRY",
    "MigrationRegistry",
    "MigrationResult",
    "RingDefinition",
    "STANDARD_NATAL",
    "ValidationIssue",
    "ValidationReport",
    "WheelDefinition",
    "WheelDefinitionValidationError",
    "WheelRegistry",
    "are_versions_compatible",
    "compare_versions",
    "export_wheel_definition_to_json",
    "get_latest_version",
    "get_version_parts",
    "is_newer_version",
    "is_older_version",
    "is_valid_version",
    "load_wheel_definition",
    "load_wheel_definition_from_json",
    "load_wheel_definition_from_yaml",
    "normalize_wheel_name",
    "register_wheel_definition_from_json",
    "validate_wheel_payload",
]
