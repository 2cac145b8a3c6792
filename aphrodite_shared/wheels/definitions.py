"""Built-in wheel definitions shipped with the package."""

from __future__ import annotations

from .types import (
    AspectSetFilter,
    AspectSetSource,
    LayerHousesSource,
    LayerPlanetsSource,
    LayerVargaPlanetsSource,
    RingDataSource,
    RingDefinition,
    StaticNakshatraSource,
    StaticZodiacSource,
    WheelDefinition,
)

__all__ = [
    "BI_WHEEL_NATAL_TRANSIT",
    "BI_WHEEL_SYNASTRY",
    "BUILT_IN_WHEELS",
    "COMPLEX_NATAL",
    "SIMPLE_NATAL",
    "STANDARD_NATAL",
    "VEDIC_NATAL",
]

_AUTHOR = "Gaia Tools"


def _ring(
    slug: str,
    type_: str,
    label: str,
    order_index: int,
    inner: float,
    outer: float,
    source: RingDataSource,
) -> RingDefinition:
    return RingDefinition(
        slug=slug,
        type=type_,
        label=label,
        order_index=order_index,
        radius_inner=inner,
        radius_outer=outer,
        data_source=source,
    )


_ZODIAC = StaticZodiacSource()
_NATAL_HOUSES = LayerHousesSource("natal")
_NATAL_PLANETS = LayerPlanetsSource("natal")


# Also seeded by the chart service database migration; keep the name stable.
STANDARD_NATAL = WheelDefinition(
    name="Standard Natal Wheel",
    description="Default wheel with signs, houses, and planets",
    version="1.0.0",
    author=_AUTHOR,
    tags=("natal", "standard", "default"),
    rings=(
        _ring("ring_signs", "signs", "Zodiac Signs", 0, 0.85, 1.0, _ZODIAC),
        _ring("ring_houses", "houses", "Houses", 1, 0.75, 0.85, _NATAL_HOUSES),
        _ring("ring_planets", "planets", "Natal Planets", 2, 0.55, 0.75, _NATAL_PLANETS),
    ),
    default_visual_config={"ringWidth": 30, "ringSpacing": 10},
    default_glyph_config={"glyphSize": 12},
)

SIMPLE_NATAL = WheelDefinition(
    name="Simple Natal Wheel",
    description="Minimal natal wheel with just signs, houses, and major planets",
    version="1.0.0",
    author=_AUTHOR,
    tags=("natal", "simple", "minimal"),
    rings=(
        _ring("ring_signs", "signs", "Zodiac Signs", 0, 0.85, 1.0, _ZODIAC),
        _ring("ring_houses", "houses", "Houses", 1, 0.75, 0.85, _NATAL_HOUSES),
        _ring("ring_planets", "planets", "Major Planets", 2, 0.60, 0.75, _NATAL_PLANETS),
    ),
    default_visual_config={"ringWidth": 30, "ringSpacing": 12},
    default_glyph_config={"glyphSize": 14},
)

COMPLEX_NATAL = WheelDefinition(
    name="Complex Natal Wheel",
    description="Extended natal wheel with aspects, asteroids, and additional detail",
    version="1.0.0",
    author=_AUTHOR,
    tags=("natal", "complex", "detailed"),
    rings=(
        _ring("ring_signs", "signs", "Zodiac Signs", 0, 0.88, 1.0, _ZODIAC),
        _ring("ring_houses", "houses", "Houses", 1, 0.78, 0.88, _NATAL_HOUSES),
        _ring(
            "ring_aspects",
            "aspects",
            "Major Aspects",
            2,
            0.70,
            0.78,
            AspectSetSource("natal_major", AspectSetFilter(only_major=True)),
        ),
        _ring("ring_planets", "planets", "Natal Planets", 3, 0.50, 0.70, _NATAL_PLANETS),
    ),
    default_visual_config={"ringWidth": 28, "ringSpacing": 8},
    default_glyph_config={"glyphSize": 13},
)

BI_WHEEL_NATAL_TRANSIT = WheelDefinition(
    name="Bi-Wheel Natal-Transit",
    description="Bi-wheel showing natal chart with transit overlays",
    version="1.0.0",
    author=_AUTHOR,
    tags=("bi-wheel", "natal", "transit"),
    rings=(
        _ring("ring_signs", "signs", "Zodiac Signs", 0, 0.90, 1.0, _ZODIAC),
        _ring("ring_houses_natal", "houses", "Natal Houses", 1, 0.80, 0.90, _NATAL_HOUSES),
        _ring(
            "ring_planets_transit",
            "planets",
            "Transit Planets",
            2,
            0.65,
            0.80,
            LayerPlanetsSource("transit"),
        ),
        _ring("ring_planets_natal", "planets", "Natal Planets", 3, 0.45, 0.65, _NATAL_PLANETS),
    ),
    default_visual_config={"ringWidth": 25, "ringSpacing": 8},
    default_glyph_config={"glyphSize": 11},
)

BI_WHEEL_SYNASTRY = WheelDefinition(
    name="Bi-Wheel Synastry",
    description="Bi-wheel for comparing two natal charts side by side",
    version="1.0.0",
    author=_AUTHOR,
    tags=("bi-wheel", "synastry"),
    rings=(
        _ring("ring_signs", "signs", "Zodiac Signs", 0, 0.90, 1.0, _ZODIAC),
        _ring(
            "ring_houses_a", "houses", "Person A Houses", 1, 0.80, 0.90,
            LayerHousesSource("person_a"),
        ),
        _ring(
            "ring_planets_a", "planets", "Person A Planets", 2, 0.65, 0.80,
            LayerPlanetsSource("person_a"),
        ),
        _ring(
            "ring_houses_b", "houses", "Person B Houses", 3, 0.50, 0.65,
            LayerHousesSource("person_b"),
        ),
        _ring(
            "ring_planets_b", "planets", "Person B Planets", 4, 0.30, 0.50,
            LayerPlanetsSource("person_b"),
        ),
    ),
    default_visual_config={"ringWidth": 20, "ringSpacing": 8},
    default_glyph_config={"glyphSize": 10},
)

VEDIC_NATAL = WheelDefinition(
    name="Vedic Natal Wheel",
    description="Sidereal layout with nakshatra ring and Navamsa overlay",
    version="1.0.0",
    author=_AUTHOR,
    tags=("vedic", "jyotish", "sidereal"),
    rings=(
        _ring("ring_nakshatras", "signs", "Nakshatras", 0, 0.85, 1.0, StaticNakshatraSource()),
        _ring("ring_houses", "houses", "Whole Sign Houses", 1, 0.75, 0.85, _NATAL_HOUSES),
        _ring("ring_planets", "planets", "Natal Planets", 2, 0.55, 0.75, _NATAL_PLANETS),
        _ring(
            "ring_navamsa",
            "planets",
            "Navamsa Overlay",
            3,
            0.35,
            0.55,
            LayerVargaPlanetsSource("natal", "d9"),
        ),
    ),
    default_visual_config={"ringWidth": 28, "ringSpacing": 8},
    default_glyph_config={"glyphSize": 12},
)

BUILT_IN_WHEELS: tuple[WheelDefinition, ...] = (
    STANDARD_NATAL,
    SIMPLE_NATAL,
    COMPLEX_NATAL,
    BI_WHEEL_NATAL_TRANSIT,
    BI_WHEEL_SYNASTRY,
    VEDIC_NATAL,
)
