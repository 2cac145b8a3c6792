"""Orientation and view frame types for chart rendering.

A :class:`ViewFrame` describes how world longitudes are laid out on the
screen. :class:`LockRule` objects describe which elements stay visually fixed
while the chart animates, and an :class:`OrientationProgram` adds rules that
swap frames when the chart reaches certain states.

Screen angles follow one convention everywhere: 0° is 3 o'clock, 90° is
12 o'clock, and the angle grows clockwise.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import ClassVar, Literal, TypeAlias, Union, get_args

__all__ = [
    "ANGLE_TYPES",
    "AngleAnchor",
    "AngleSubject",
    "AngleType",
    "AnchorRelative",
    "AnchorTarget",
    "AscLeavesHouse",
    "AstroObjectId",
    "ChartSnapshot",
    "CustomTrigger",
    "Direction",
    "ElementKind",
    "HouseAnchor",
    "HouseSubject",
    "LockFrame",
    "LockMode",
    "LockRule",
    "LockSubject",
    "MirrorEffect",
    "ObjectAnchor",
    "ObjectSubject",
    "OrientationEffect",
    "OrientationPreset",
    "OrientationProgram",
    "OrientationRule",
    "OrientationRuntimeState",
    "OrientationTrigger",
    "PlanetCrossesAngle",
    "PlanetCrossesHouse",
    "ReferenceFrame",
    "RotateEffect",
    "SetViewFrameEffect",
    "SignAnchor",
    "SignSubject",
    "SnapAnchorToAngle",
    "SnapHouseToAngle",
    "ViewFrame",
    "ViewModel",
    "WheelName",
    "ZeroPoint",
]


ReferenceFrame = Literal["ecliptic", "houses", "signs", "angles"]
AngleType = Literal["ASC", "DESC", "MC", "IC"]
Direction = Literal["cw", "ccw"]
LockFrame = Literal["world", "houses", "signs", "screen"]
LockMode = Literal["exact", "follow-anchor"]
ElementKind = Literal["object", "house", "sign", "angle"]
WheelName = Literal["zodiac", "houses", "all"]

# Standard planets use 0=Sun .. 9=Pluto; other points use symbolic names
# such as "chiron" or "north_node".
AstroObjectId: TypeAlias = Union[int, str]

ANGLE_TYPES: tuple[str, ...] = get_args(AngleType)
REFERENCE_FRAMES: tuple[str, ...] = get_args(ReferenceFrame)
LOCK_FRAMES: tuple[str, ...] = get_args(LockFrame)
WHEEL_NAMES: tuple[str, ...] = get_args(WheelName)


def _check_house(index: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= 12:
        raise ValueError(f"house index must be an integer in 1..12, got {index!r}")
    return index


def _check_sign(index: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 11:
        raise ValueError(f"sign index must be an integer in 0..11, got {index!r}")
    return index


def _check_angle(name: str) -> str:
    if name not in ANGLE_TYPES:
        raise ValueError(f"angle type must be one of {ANGLE_TYPES}, got {name!r}")
    return name


# ---------------------------------------------------------------------------
# Anchor targets


@dataclass(frozen=True, slots=True)
class ObjectAnchor:
    """Anchor pinned to a celestial body."""

    kind: ClassVar[str] = "object"

    id: AstroObjectId


@dataclass(frozen=True, slots=True)
class HouseAnchor:
    """Anchor pinned to a house cusp (1..12)."""

    kind: ClassVar[str] = "house"

    index: int

    def __post_init__(self) -> None:
        _check_house(self.index)


@dataclass(frozen=True, slots=True)
class SignAnchor:
    """Anchor pinned to the start of a sign (0=Aries .. 11=Pisces)."""

    kind: ClassVar[str] = "sign"

    index: int

    def __post_init__(self) -> None:
        _check_sign(self.index)


@dataclass(frozen=True, slots=True)
class AngleAnchor:
    """Anchor pinned to one of the chart angles."""

    kind: ClassVar[str] = "angle"

    type: str

    def __post_init__(self) -> None:
        _check_angle(self.type)


AnchorTarget: TypeAlias = Union[ObjectAnchor, HouseAnchor, SignAnchor, AngleAnchor]


# ---------------------------------------------------------------------------
# View frames


@dataclass(frozen=True, slots=True)
class AnchorRelative:
    """Legacy model: offsets are measured from the anchor's longitude.

    ``screen_angle_deg`` is where the anchor lands on screen. ``direction``
    gives the visual sign order; ``"ccw"`` is the usual astrological layout.
    """

    screen_angle_deg: float = 180.0
    direction: Direction = "ccw"

    def __post_init__(self) -> None:
        if self.direction not in ("cw", "ccw"):
            raise ValueError(f"direction must be 'cw' or 'ccw', got {self.direction!r}")


@dataclass(frozen=True, slots=True)
class ZeroPoint:
    """Direct linear model: ``world_zero`` maps onto ``screen_zero``.

    ``sign`` is +1 or -1 (-1 mirrors the wheel) and ``scale`` stretches the
    mapping. ``world_zero`` may be left unbound in declarative frames, in
    which case it is resolved from the frame's anchor for each render pass
    (see :func:`aphrodite_shared.orientation.anchors.bind_world_zero`).
    """

    screen_zero: float
    world_zero: float | None = None
    sign: int = 1
    scale: float = 1.0

    def __post_init__(self) -> None:
        if self.sign not in (1, -1):
            raise ValueError(f"sign must be +1 or -1, got {self.sign!r}")
        if self.scale == 0:
            raise ValueError("scale must be non-zero")

    @property
    def is_bound(self) -> bool:
        return self.world_zero is not None


ViewModel: TypeAlias = Union[AnchorRelative, ZeroPoint]


@dataclass(frozen=True, slots=True)
class ViewFrame:
    """Mapping configuration between world longitudes and screen angles.

    Exactly one of the two models is active, chosen by the type of
    ``model``. ``radial_flip`` is consumed by ring geometry only and never
    affects the angular transform.
    """

    reference_frame: ReferenceFrame = "ecliptic"
    anchor: AnchorTarget = field(default_factory=lambda: AngleAnchor("ASC"))
    model: ViewModel = field(default_factory=AnchorRelative)
    radial_flip: bool = False
    angular_flip: bool = False

    def __post_init__(self) -> None:
        if self.reference_frame not in REFERENCE_FRAMES:
            raise ValueError(
                f"reference frame must be one of {REFERENCE_FRAMES}, "
                f"got {self.reference_frame!r}"
            )

    @property
    def is_zero_point(self) -> bool:
        return isinstance(self.model, ZeroPoint)

    @property
    def screen_angle_deg(self) -> float:
        """Screen position of the frame's reference point."""

        if isinstance(self.model, ZeroPoint):
            return self.model.screen_zero
        return self.model.screen_angle_deg

    def with_model(self, model: ViewModel) -> "ViewFrame":
        return replace(self, model=model)


# ---------------------------------------------------------------------------
# Lock rules


@dataclass(frozen=True, slots=True)
class ObjectSubject:
    kind: ClassVar[str] = "object"

    ids: tuple[AstroObjectId, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", tuple(self.ids))


@dataclass(frozen=True, slots=True)
class HouseSubject:
    """Houses to lock; ``indices=None`` locks every house."""

    kind: ClassVar[str] = "house"

    indices: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        if self.indices is not None:
            object.__setattr__(self, "indices", tuple(self.indices))
        for index in self.indices or ():
            _check_house(index)


@dataclass(frozen=True, slots=True)
class SignSubject:
    """Signs to lock; ``indices=None`` locks every sign."""

    kind: ClassVar[str] = "sign"

    indices: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        if self.indices is not None:
            object.__setattr__(self, "indices", tuple(self.indices))
        for index in self.indices or ():
            _check_sign(index)


@dataclass(frozen=True, slots=True)
class AngleSubject:
    """Angles to lock; ``types=None`` locks every angle."""

    kind: ClassVar[str] = "angle"

    types: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.types is not None:
            object.__setattr__(self, "types", tuple(self.types))
        for name in self.types or ():
            _check_angle(name)


LockSubject: TypeAlias = Union[ObjectSubject, HouseSubject, SignSubject, AngleSubject]


@dataclass(frozen=True, slots=True)
class LockRule:
    """Describes what is visually fixed vs. moving during animation.

    ``frame`` is the coordinate system the lock operates in. In
    ``follow-anchor`` mode the locked elements keep their offset from
    ``follow_anchor``, or from the owning frame's anchor when it is unset.
    """

    subject: LockSubject
    frame: LockFrame = "world"
    mode: LockMode = "exact"
    follow_anchor: AnchorTarget | None = None

    def __post_init__(self) -> None:
        if self.frame not in LOCK_FRAMES:
            raise ValueError(f"lock frame must be one of {LOCK_FRAMES}, got {self.frame!r}")
        if self.mode not in ("exact", "follow-anchor"):
            raise ValueError(f"lock mode must be 'exact' or 'follow-anchor', got {self.mode!r}")

    def anchor_for(self, view_frame: ViewFrame) -> AnchorTarget | None:
        """Return the anchor this rule follows under ``view_frame``."""

        if self.mode != "follow-anchor":
            return None
        return self.follow_anchor if self.follow_anchor is not None else view_frame.anchor


@dataclass(frozen=True, slots=True)
class OrientationPreset:
    """Named bundle of a view frame and its lock rules."""

    id: str
    name: str
    description: str
    frame: ViewFrame
    locks: tuple[LockRule, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "locks", tuple(self.locks))


# ---------------------------------------------------------------------------
# Chart snapshots


def _frozen(mapping: Mapping | None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class ChartSnapshot:
    """Read-only longitudes supplied by the host for one evaluation tick."""

    object_longitudes: Mapping[AstroObjectId, float] = field(default_factory=dict)
    house_cusps: Mapping[int, float] = field(default_factory=dict)
    angle_longitudes: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "object_longitudes", _frozen(self.object_longitudes))
        object.__setattr__(
            self, "house_cusps", _frozen({int(k): v for k, v in (self.house_cusps or {}).items()})
        )
        object.__setattr__(self, "angle_longitudes", _frozen(self.angle_longitudes))


# ---------------------------------------------------------------------------
# Dynamic orientation rules


@dataclass(frozen=True, slots=True)
class AscLeavesHouse:
    type: ClassVar[str] = "ascLeavesHouse"

    house: int

    def __post_init__(self) -> None:
        _check_house(self.house)


@dataclass(frozen=True, slots=True)
class PlanetCrossesHouse:
    type: ClassVar[str] = "planetCrossesHouse"

    planet: AstroObjectId
    house: int

    def __post_init__(self) -> None:
        _check_house(self.house)


@dataclass(frozen=True, slots=True)
class PlanetCrossesAngle:
    type: ClassVar[str] = "planetCrossesAngle"

    planet: AstroObjectId
    angle: str

    def __post_init__(self) -> None:
        _check_angle(self.angle)


@dataclass(frozen=True, slots=True)
class CustomTrigger:
    """Opaque trigger evaluated by a host-supplied predicate."""

    type: ClassVar[str] = "custom"

    id: str


OrientationTrigger: TypeAlias = Union[
    AscLeavesHouse, PlanetCrossesHouse, PlanetCrossesAngle, CustomTrigger
]


def _check_wheel(wheel: str) -> None:
    if wheel not in WHEEL_NAMES:
        raise ValueError(f"wheel must be one of {WHEEL_NAMES}, got {wheel!r}")


@dataclass(frozen=True, slots=True)
class RotateEffect:
    type: ClassVar[str] = "rotate"

    wheel: WheelName
    delta: float

    def __post_init__(self) -> None:
        _check_wheel(self.wheel)


@dataclass(frozen=True, slots=True)
class SetViewFrameEffect:
    type: ClassVar[str] = "setViewFrame"

    view_frame: ViewFrame


@dataclass(frozen=True, slots=True)
class MirrorEffect:
    type: ClassVar[str] = "mirror"

    wheel: WheelName

    def __post_init__(self) -> None:
        _check_wheel(self.wheel)


@dataclass(frozen=True, slots=True)
class SnapHouseToAngle:
    type: ClassVar[str] = "snapHouseToAngle"

    house: int
    screen_angle: float

    def __post_init__(self) -> None:
        _check_house(self.house)


@dataclass(frozen=True, slots=True)
class SnapAnchorToAngle:
    type: ClassVar[str] = "snapAnchorToAngle"

    anchor: str
    screen_angle: float

    def __post_init__(self) -> None:
        _check_angle(self.anchor)


OrientationEffect: TypeAlias = Union[
    RotateEffect, SetViewFrameEffect, MirrorEffect, SnapHouseToAngle, SnapAnchorToAngle
]


@dataclass(frozen=True, slots=True)
class OrientationRule:
    """Trigger/effect pair with optional animation timing and extra locks.

    Rules fire once per program lifetime unless ``recurring`` is set, in
    which case they re-arm once their trigger condition has reset.
    """

    id: str
    trigger: OrientationTrigger
    effect: OrientationEffect
    animation_ms: int | None = None
    locks: tuple[LockRule, ...] = ()
    recurring: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "locks", tuple(self.locks or ()))


@dataclass(frozen=True, slots=True)
class OrientationProgram:
    """Base frame, base locks and the ordered list of dynamic rules."""

    base_frame: ViewFrame
    locks: tuple[LockRule, ...] = ()
    rules: tuple[OrientationRule, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "locks", tuple(self.locks or ()))
        object.__setattr__(self, "rules", tuple(self.rules or ()))


@dataclass
class OrientationRuntimeState:
    """Mutable evaluation state owned by a single chart-view session.

    ``previous_house_positions`` is keyed ``"<subject>:<watched house>"``
    (for example ``"ASC:1"`` or ``"4:10"``) and stores the subject's house
    number observed on the previous tick.
    """

    applied_rule_ids: set[str] = field(default_factory=set)
    previous_house_positions: dict[str, int] = field(default_factory=dict)
    previous_snapshot: ChartSnapshot | None = None
    active_frame: ViewFrame | None = None
    wheel_frames: dict[str, ViewFrame] = field(default_factory=dict)
    effect_locks: dict[str, tuple[LockRule, ...]] = field(default_factory=dict)

    def frame_for(self, wheel: str) -> ViewFrame | None:
        """Return the frame used to draw ``wheel`` ("zodiac" or "houses")."""

        return self.wheel_frames.get(wheel, self.active_frame)
