"""Predefined orientation presets for common chart viewing preferences."""

from __future__ import annotations

from .types import (
    AnchorRelative,
    AngleAnchor,
    AngleSubject,
    HouseAnchor,
    HouseSubject,
    LockRule,
    ObjectAnchor,
    ObjectSubject,
    OrientationPreset,
    SignAnchor,
    SignSubject,
    ViewFrame,
    ZeroPoint,
)

__all__ = [
    "ALL_PRESETS",
    "DEFAULT_PRESET",
    "get_preset_by_id",
    "get_preset_by_name",
    "list_presets",
]

_HOUSES_FOLLOW_ANCHOR = LockRule(subject=HouseSubject(), frame="houses", mode="follow-anchor")


def _houses_frame(anchor, screen_angle_deg: float) -> ViewFrame:
    return ViewFrame(
        reference_frame="houses",
        anchor=anchor,
        model=AnchorRelative(screen_angle_deg=screen_angle_deg, direction="ccw"),
    )


PRESET_ASC_LEFT = OrientationPreset(
    id="asc-left",
    name="ASC at 9 o'clock",
    description=(
        "Traditional Western astrology orientation with Ascendant at the left "
        "(9 o'clock). Houses are fixed, planets animate through them."
    ),
    frame=_houses_frame(AngleAnchor("ASC"), 180.0),
    locks=(_HOUSES_FOLLOW_ANCHOR,),
)

PRESET_ASC_RIGHT = OrientationPreset(
    id="asc-right",
    name="ASC at 3 o'clock",
    description=(
        "Alternative orientation with Ascendant at the right (3 o'clock). "
        "Houses are fixed, planets animate through them."
    ),
    frame=_houses_frame(AngleAnchor("ASC"), 0.0),
    locks=(_HOUSES_FOLLOW_ANCHOR,),
)

PRESET_MC_TOP = OrientationPreset(
    id="mc-top",
    name="MC at Top",
    description=(
        "Midheaven-centered view with MC at the top (12 o'clock). "
        "Houses follow MC, signs rotate underneath."
    ),
    frame=_houses_frame(AngleAnchor("MC"), 90.0),
    locks=(_HOUSES_FOLLOW_ANCHOR,),
)

# world_zero is bound from the MC longitude once a chart is available.
PRESET_MC_TOP_MIRRORED = OrientationPreset(
    id="mc-top-mirrored",
    name="MC at Top (Mirrored)",
    description=(
        "MC at top with mirrored orientation. Houses numbered from 180° CCW. "
        "Uses the zero-point model with direction -1."
    ),
    frame=ViewFrame(
        reference_frame="houses",
        anchor=AngleAnchor("MC"),
        model=ZeroPoint(screen_zero=90.0, sign=-1),
    ),
    locks=(LockRule(subject=AngleSubject(("ASC",)), frame="screen", mode="exact"),),
)

PRESET_ARIES_TOP = OrientationPreset(
    id="aries-top",
    name="Aries at Top",
    description=(
        "Zodiac-centric view with Aries at the top (12 o'clock). "
        "Signs are fixed, houses rotate underneath."
    ),
    frame=ViewFrame(
        reference_frame="signs",
        anchor=SignAnchor(0),
        model=AnchorRelative(screen_angle_deg=90.0, direction="ccw"),
    ),
    locks=(LockRule(subject=SignSubject(), frame="signs", mode="exact"),),
)

PRESET_FIXED_HOUSES = OrientationPreset(
    id="fixed-houses",
    name="Fixed Houses",
    description=(
        "Houses are locked to screen positions, signs rotate underneath. "
        "Useful for mundane and event charts."
    ),
    frame=_houses_frame(HouseAnchor(1), 180.0),
    locks=(LockRule(subject=HouseSubject(), frame="screen", mode="exact"),),
)

PRESET_FIXED_SIGNS = OrientationPreset(
    id="fixed-signs",
    name="Fixed Signs",
    description=(
        "Signs are locked to screen positions, houses rotate underneath. "
        "Useful for transit overlays and zodiac-centric analysis."
    ),
    frame=ViewFrame(
        reference_frame="signs",
        anchor=SignAnchor(0),
        model=AnchorRelative(screen_angle_deg=90.0, direction="ccw"),
    ),
    locks=(LockRule(subject=SignSubject(), frame="screen", mode="exact"),),
)

PRESET_SUN_LOCKED = OrientationPreset(
    id="sun-locked",
    name="Sun Locked",
    description=(
        "Sun is centered at a chosen angle, other planets animate relative to it. "
        "Useful for solar-focused analysis."
    ),
    frame=ViewFrame(
        reference_frame="ecliptic",
        anchor=ObjectAnchor(0),
        model=AnchorRelative(screen_angle_deg=90.0, direction="ccw"),
    ),
    locks=(LockRule(subject=ObjectSubject((0,)), frame="screen", mode="exact"),),
)

# A single frame template; a real bi-wheel may use one frame per layer.
PRESET_BIWHEEL_NATAL_TRANSIT = OrientationPreset(
    id="biwheel-natal-transit",
    name="Biwheel Natal/Transit",
    description=(
        "Outer wheel: natal houses fixed. Inner wheel: transit signs fixed. "
        "For comparing natal and transit charts."
    ),
    frame=_houses_frame(AngleAnchor("ASC"), 180.0),
    locks=(_HOUSES_FOLLOW_ANCHOR,),
)

DEFAULT_PRESET = PRESET_ASC_LEFT

ALL_PRESETS: tuple[OrientationPreset, ...] = (
    PRESET_ASC_LEFT,
    PRESET_ASC_RIGHT,
    PRESET_MC_TOP,
    PRESET_MC_TOP_MIRRORED,
    PRESET_ARIES_TOP,
    PRESET_FIXED_HOUSES,
    PRESET_FIXED_SIGNS,
    PRESET_SUN_LOCKED,
    PRESET_BIWHEEL_NATAL_TRANSIT,
)


def list_presets() -> list[OrientationPreset]:
    return list(ALL_PRESETS)


def get_preset_by_id(preset_id: str) -> OrientationPreset | None:
    for preset in ALL_PRESETS:
        if preset.id == preset_id:
            return preset
    return None


def get_preset_by_name(name: str) -> OrientationPreset | None:
    """Return the preset whose display name matches ``name`` ignoring case."""

    wanted = name.casefold()
    for preset in ALL_PRESETS:
        if preset.name.casefold() == wanted:
            return preset
    return None
