"""Load, validate and export wheel definitions from text.

Validation walks the whole payload and collects every problem with a field
path such as ``rings[0].radius`` rather than stopping at the first one.
:func:`validate_wheel_payload` returns the findings as a report value; the
``load_*`` helpers raise :class:`WheelDefinitionValidationError` when the
report is not clean.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .registry import DEFAULT_REGISTRY, WheelRegistry
from .types import DATA_SOURCE_KINDS, RING_TYPES, WheelDefinition

LOG = logging.getLogger(__name__)

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "WheelDefinitionValidationError",
    "export_wheel_definition_to_json",
    "load_wheel_definition",
    "load_wheel_definition_from_json",
    "load_wheel_definition_from_yaml",
    "register_wheel_definition_from_json",
    "validate_wheel_payload",
]

_VERSION_RE = re.compile(r"^\d+\.\d+\.\d+$")


class ValidationIssue(BaseModel):
    field: str | None = None
    message: str


class ValidationReport(BaseModel):
    """Outcome of validating a wheel payload."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def fields(self) -> list[str | None]:
        return [issue.field for issue in self.issues]


class WheelDefinitionValidationError(ValueError):
    """Raised when a wheel definition cannot be loaded.

    ``field`` is the path of the first problem; ``issues`` holds all of them.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        *,
        issues: list[ValidationIssue] | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.issues = list(issues or [])


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _validate_data_source(source: Any, path: str, issues: list[ValidationIssue]) -> None:
    if not isinstance(source, Mapping):
        issues.append(ValidationIssue(field=path, message="must be an object"))
        return
    kind = source.get("kind")
    if kind not in DATA_SOURCE_KINDS:
        issues.append(
            ValidationIssue(
                field=f"{path}.kind",
                message=f"must be one of {', '.join(DATA_SOURCE_KINDS)}",
            )
        )
        return
    if kind in ("layer_houses", "layer_planets", "layer_varga_planets"):
        if not _non_empty_str(source.get("layerId")):
            issues.append(
                ValidationIssue(field=f"{path}.layerId", message=f"required for {kind}")
            )
    if kind == "layer_varga_planets" and not _non_empty_str(source.get("vargaId")):
        issues.append(
            ValidationIssue(field=f"{path}.vargaId", message=f"required for {kind}")
        )
    if kind == "aspect_set":
        if not _non_empty_str(source.get("aspectSetId")):
            issues.append(
                ValidationIssue(field=f"{path}.aspectSetId", message="required for aspect_set")
            )
        flt = source.get("filter")
        if flt is not None:
            _validate_filter(flt, f"{path}.filter", issues)


def _validate_filter(flt: Any, path: str, issues: list[ValidationIssue]) -> None:
    if not isinstance(flt, Mapping):
        issues.append(ValidationIssue(field=path, message="must be an object"))
        return
    include = flt.get("includeTypes")
    if include is not None and not (
        isinstance(include, list) and all(isinstance(name, str) for name in include)
    ):
        issues.append(
            ValidationIssue(field=f"{path}.includeTypes", message="must be an array of strings")
        )
    strength = flt.get("minStrength")
    if strength is not None and not _is_number(strength):
        issues.append(ValidationIssue(field=f"{path}.minStrength", message="must be a number"))
    only_major = flt.get("onlyMajor")
    if only_major is not None and not isinstance(only_major, bool):
        issues.append(ValidationIssue(field=f"{path}.onlyMajor", message="must be a boolean"))


def _validate_ring(ring: Any, index: int, issues: list[ValidationIssue]) -> None:
    path = f"rings[{index}]"
    if not isinstance(ring, Mapping):
        issues.append(ValidationIssue(field=path, message="ring must be an object"))
        return
    if not _non_empty_str(ring.get("slug")):
        issues.append(ValidationIssue(field=f"{path}.slug", message="must be a non-empty string"))
    if ring.get("type") not in RING_TYPES:
        issues.append(
            ValidationIssue(
                field=f"{path}.type", message=f"must be one of {', '.join(RING_TYPES)}"
            )
        )
    if not _non_empty_str(ring.get("label")):
        issues.append(ValidationIssue(field=f"{path}.label", message="must be a non-empty string"))
    if not _is_number(ring.get("orderIndex")):
        issues.append(ValidationIssue(field=f"{path}.orderIndex", message="must be a number"))

    radii_ok = True
    for key in ("radiusInner", "radiusOuter"):
        value = ring.get(key)
        if not _is_number(value) or not 0 <= value <= 1:
            radii_ok = False
            issues.append(
                ValidationIssue(field=f"{path}.{key}", message="must be a number between 0 and 1")
            )
    if radii_ok and ring["radiusInner"] >= ring["radiusOuter"]:
        issues.append(
            ValidationIssue(
                field=f"{path}.radius", message="radiusInner must be less than radiusOuter"
            )
        )

    _validate_data_source(ring.get("dataSource"), f"{path}.dataSource", issues)

    options = ring.get("displayOptions")
    if options is not None and not isinstance(options, Mapping):
        issues.append(
            ValidationIssue(field=f"{path}.displayOptions", message="must be an object")
        )


def validate_wheel_payload(payload: Any) -> ValidationReport:
    """Return every structural problem found in ``payload``."""

    issues: list[ValidationIssue] = []
    if not isinstance(payload, Mapping):
        issues.append(ValidationIssue(message="wheel definition must be an object"))
        return ValidationReport(issues=issues)

    if not _non_empty_str(payload.get("name")):
        issues.append(ValidationIssue(field="name", message="must be a non-empty string"))

    rings = payload.get("rings")
    if not isinstance(rings, list):
        issues.append(ValidationIssue(field="rings", message="must be an array"))
    elif not rings:
        issues.append(ValidationIssue(field="rings", message="must contain at least one ring"))
    else:
        for index, ring in enumerate(rings):
            _validate_ring(ring, index, issues)

    description = payload.get("description")
    if description is not None and not isinstance(description, str):
        issues.append(ValidationIssue(field="description", message="must be a string"))

    version = payload.get("version")
    if version is not None:
        if not isinstance(version, str):
            issues.append(ValidationIssue(field="version", message="must be a string"))
        elif not _VERSION_RE.match(version):
            issues.append(
                ValidationIssue(
                    field="version",
                    message=f"must be in major.minor.patch format, got {version!r}",
                )
            )

    author = payload.get("author")
    if author is not None and not isinstance(author, str):
        issues.append(ValidationIssue(field="author", message="must be a string"))

    tags = payload.get("tags")
    if tags is not None:
        if not isinstance(tags, list):
            issues.append(ValidationIssue(field="tags", message="must be an array"))
        elif not all(isinstance(tag, str) for tag in tags):
            issues.append(ValidationIssue(field="tags", message="must be an array of strings"))

    for key in ("config", "defaultVisualConfig", "defaultGlyphConfig"):
        value = payload.get(key)
        if value is not None and not isinstance(value, Mapping):
            issues.append(ValidationIssue(field=key, message="must be an object"))

    return ValidationReport(issues=issues)


def load_wheel_definition(payload: Any) -> WheelDefinition:
    """Validate an already parsed payload and build the definition."""

    report = validate_wheel_payload(payload)
    if not report.ok:
        first = report.issues[0]
        label = f"{first.field}: {first.message}" if first.field else first.message
        more = len(report.issues) - 1
        message = f"invalid wheel definition ({label})"
        if more:
            message += f" and {more} more issue(s)"
        raise WheelDefinitionValidationError(message, first.field, issues=report.issues)
    return WheelDefinition.from_mapping(payload)


def load_wheel_definition_from_json(text: str) -> WheelDefinition:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise WheelDefinitionValidationError(f"invalid JSON: {exc}") from exc
    return load_wheel_definition(payload)


def load_wheel_definition_from_yaml(text: str) -> WheelDefinition:
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WheelDefinitionValidationError(f"invalid YAML: {exc}") from exc
    return load_wheel_definition(payload)


def register_wheel_definition_from_json(
    text: str, registry: WheelRegistry | None = None
) -> WheelDefinition:
    """Load ``text`` and register the result, returning the definition."""

    definition = load_wheel_definition_from_json(text)
    (registry or DEFAULT_REGISTRY).register(definition)
    LOG.debug("Registered wheel definition %s from JSON", definition.name)
    return definition


def export_wheel_definition_to_json(definition: WheelDefinition, pretty: bool = True) -> str:
    payload = definition.to_mapping()
    if pretty:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return json.dumps(payload, ensure_ascii=False)
