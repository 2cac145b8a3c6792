"""Wheel and ring structures.

A wheel is an ordered list of concentric rings. Each ring names a data source
that a renderer resolves against its chart layers. The structures here are
plain data; validation of untrusted payloads lives in :mod:`.loader`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Literal, TypeAlias, Union, get_args

__all__ = [
    "DATA_SOURCE_KINDS",
    "RING_TYPES",
    "AspectSetFilter",
    "AspectSetSource",
    "LayerHousesSource",
    "LayerPlanetsSource",
    "LayerVargaPlanetsSource",
    "RingDataSource",
    "RingDefinition",
    "RingType",
    "StaticNakshatraSource",
    "StaticZodiacSource",
    "WheelDefinition",
    "data_source_from_mapping",
    "data_source_to_mapping",
]

RingType = Literal["signs", "houses", "planets", "aspects"]
RING_TYPES: tuple[str, ...] = get_args(RingType)

DATA_SOURCE_KINDS: tuple[str, ...] = (
    "static_zodiac",
    "static_nakshatras",
    "layer_houses",
    "layer_planets",
    "layer_varga_planets",
    "aspect_set",
)


@dataclass(frozen=True, slots=True)
class StaticZodiacSource:
    kind: ClassVar[str] = "static_zodiac"


@dataclass(frozen=True, slots=True)
class StaticNakshatraSource:
    kind: ClassVar[str] = "static_nakshatras"


@dataclass(frozen=True, slots=True)
class LayerHousesSource:
    layer_id: str
    kind: ClassVar[str] = "layer_houses"


@dataclass(frozen=True, slots=True)
class LayerPlanetsSource:
    layer_id: str
    kind: ClassVar[str] = "layer_planets"


@dataclass(frozen=True, slots=True)
class LayerVargaPlanetsSource:
    """Divisional chart positions (for example ``d9`` for the Navamsa)."""

    layer_id: str
    varga_id: str
    kind: ClassVar[str] = "layer_varga_planets"


@dataclass(frozen=True, slots=True)
class AspectSetFilter:
    include_types: tuple[str, ...] | None = None
    min_strength: float | None = None
    only_major: bool | None = None

    def __post_init__(self) -> None:
        if self.include_types is not None:
            object.__setattr__(self, "include_types", tuple(self.include_types))

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.include_types is not None:
            payload["includeTypes"] = list(self.include_types)
        if self.min_strength is not None:
            payload["minStrength"] = self.min_strength
        if self.only_major is not None:
            payload["onlyMajor"] = self.only_major
        return payload


@dataclass(frozen=True, slots=True)
class AspectSetSource:
    aspect_set_id: str
    filter: AspectSetFilter | None = None
    kind: ClassVar[str] = "aspect_set"


RingDataSource: TypeAlias = Union[
    StaticZodiacSource,
    StaticNakshatraSource,
    LayerHousesSource,
    LayerPlanetsSource,
    LayerVargaPlanetsSource,
    AspectSetSource,
]


def data_source_from_mapping(payload: Mapping[str, Any]) -> RingDataSource:
    """Build a data source from its JSON form; ``kind`` selects the class."""

    kind = payload.get("kind")
    if kind == "static_zodiac":
        return StaticZodiacSource()
    if kind == "static_nakshatras":
        return StaticNakshatraSource()
    if kind == "layer_houses":
        return LayerHousesSource(layer_id=payload["layerId"])
    if kind == "layer_planets":
        return LayerPlanetsSource(layer_id=payload["layerId"])
    if kind == "layer_varga_planets":
        return LayerVargaPlanetsSource(
            layer_id=payload["layerId"], varga_id=payload["vargaId"]
        )
    if kind == "aspect_set":
        raw_filter = payload.get("filter")
        flt = None
        if isinstance(raw_filter, Mapping):
            flt = AspectSetFilter(
                include_types=raw_filter.get("includeTypes"),
                min_strength=raw_filter.get("minStrength"),
                only_major=raw_filter.get("onlyMajor"),
            )
        return AspectSetSource(aspect_set_id=payload["aspectSetId"], filter=flt)
    raise ValueError(f"unknown data source kind: {kind!r}")


def data_source_to_mapping(source: RingDataSource) -> dict[str, Any]:
    payload: dict[str, Any] = {"kind": source.kind}
    if isinstance(source, (LayerHousesSource, LayerPlanetsSource)):
        payload["layerId"] = source.layer_id
    elif isinstance(source, LayerVargaPlanetsSource):
        payload["layerId"] = source.layer_id
        payload["vargaId"] = source.varga_id
    elif isinstance(source, AspectSetSource):
        payload["aspectSetId"] = source.aspect_set_id
        if source.filter is not None:
            payload["filter"] = source.filter.to_mapping()
    return payload


@dataclass(frozen=True, slots=True)
class RingDefinition:
    """A single ring; radii are normalised to the wheel radius (0..1)."""

    slug: str
    type: RingType
    label: str
    order_index: int
    radius_inner: float
    radius_outer: float
    data_source: RingDataSource
    display_options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def thickness(self) -> float:
        return self.radius_outer - self.radius_inner

    def to_mapping(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "type": self.type,
            "label": self.label,
            "orderIndex": self.order_index,
            "radiusInner": self.radius_inner,
            "radiusOuter": self.radius_outer,
            "dataSource": data_source_to_mapping(self.data_source),
            "displayOptions": dict(self.display_options),
        }

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> RingDefinition:
        return cls(
            slug=payload["slug"],
            type=payload["type"],
            label=payload["label"],
            order_index=payload["orderIndex"],
            radius_inner=float(payload["radiusInner"]),
            radius_outer=float(payload["radiusOuter"]),
            data_source=data_source_from_mapping(payload["dataSource"]),
            display_options=dict(payload.get("displayOptions") or {}),
        )


@dataclass(frozen=True, slots=True)
class WheelDefinition:
    """Complete wheel layout plus wheel-specific styling defaults and metadata.

    ``default_visual_config`` and ``default_glyph_config`` hold partial
    overrides in their JSON (camelCase) form; they are layered over the
    package defaults when a chart preset is composed.
    """

    name: str
    rings: tuple[RingDefinition, ...]
    description: str | None = None
    config: Mapping[str, Any] = field(default_factory=dict)
    default_visual_config: Mapping[str, Any] | None = None
    default_glyph_config: Mapping[str, Any] | None = None
    version: str | None = None
    author: str | None = None
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rings", tuple(self.rings))
        object.__setattr__(self, "tags", tuple(self.tags))

    def ring(self, slug: str) -> RingDefinition | None:
        for ring in self.rings:
            if ring.slug == slug:
                return ring
        return None

    def ordered_rings(self) -> list[RingDefinition]:
        return sorted(self.rings, key=lambda ring: ring.order_index)

    def with_version(self, version: str) -> WheelDefinition:
        return replace(self, version=version)

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            payload["description"] = self.description
        if self.version is not None:
            payload["version"] = self.version
        if self.author is not None:
            payload["author"] = self.author
        if self.tags:
            payload["tags"] = list(self.tags)
        payload["rings"] = [ring.to_mapping() for ring in self.rings]
        payload["config"] = dict(self.config)
        if self.default_visual_config is not None:
            payload["defaultVisualConfig"] = dict(self.default_visual_config)
        if self.default_glyph_config is not None:
            payload["defaultGlyphConfig"] = dict(self.default_glyph_config)
        return payload

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> WheelDefinition:
        """Build a definition from an already validated JSON mapping."""

        return cls(
            name=payload["name"],
            rings=tuple(RingDefinition.from_mapping(ring) for ring in payload["rings"]),
            description=payload.get("description"),
            config=dict(payload.get("config") or {}),
            default_visual_config=payload.get("defaultVisualConfig"),
            default_glyph_config=payload.get("defaultGlyphConfig"),
            version=payload.get("version"),
            author=payload.get("author"),
            tags=tuple(payload.get("tags") or ()),
        )
