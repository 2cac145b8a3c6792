"""Evaluation of orientation programs against successive chart snapshots.

Each call to :meth:`OrientationEngine.evaluate` is one tick. Rules run in
declaration order, so when two fired rules both replace the frame the later
one wins. Rules fire once per session unless they are marked ``recurring``
(or the engine is built with ``recurring_default=True``); recurring rules
re-arm on the first tick where their trigger condition has reset.

Triggers whose inputs are missing from the snapshot simply do not fire that
tick.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from ..utils.angles import norm360, shortest_delta
from .anchors import SnapshotResolver
from .locks import LockPrecedence, effective_lock
from .types import (
    AnchorRelative,
    AngleAnchor,
    AscLeavesHouse,
    ChartSnapshot,
    CustomTrigger,
    HouseAnchor,
    LockRule,
    MirrorEffect,
    OrientationProgram,
    OrientationRule,
    OrientationRuntimeState,
    OrientationTrigger,
    PlanetCrossesAngle,
    PlanetCrossesHouse,
    RotateEffect,
    SetViewFrameEffect,
    SnapAnchorToAngle,
    SnapHouseToAngle,
    ViewFrame,
    ZeroPoint,
)

__all__ = [
    "CustomPredicate",
    "EvaluationResult",
    "OrientationEngine",
    "evaluate_program",
    "house_for_longitude",
    "house_position_key",
]

LOG = logging.getLogger(__name__)

CustomPredicate = Callable[[ChartSnapshot, ChartSnapshot | None], bool]

_WHEELS = ("zodiac", "houses")
# Angle crossings are only reported near conjunction so the wrap at the
# opposition point is not mistaken for a crossing.
_CROSSING_WINDOW_DEG = 90.0


def house_for_longitude(longitude: float, cusps: Mapping[int, float]) -> int | None:
    """Return the house (1..12) containing ``longitude``.

    House *n* spans from cusp *n* up to, but excluding, cusp *n + 1*,
    wrapping through 0° Aries. ``None`` is returned when a cusp is missing.
    """

    if any(number not in cusps for number in range(1, 13)):
        return None
    for number in range(1, 13):
        start = float(cusps[number])
        end = float(cusps[number % 12 + 1])
        span = norm360(end - start)
        if norm360(longitude - start) < span:
            return number
    return None


def house_position_key(subject: object, house: int) -> str:
    """Return the ``previous_house_positions`` key for a watched house."""

    return f"{subject}:{house}"


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Outcome of a single evaluation tick."""

    frame: ViewFrame
    locks: tuple[LockRule, ...]
    fired: tuple[str, ...] = ()
    rearmed: tuple[str, ...] = ()
    animation_ms: int | None = None
    wheel_frames: Mapping[str, ViewFrame] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.fired)


def _rotate(frame: ViewFrame, delta: float) -> ViewFrame:
    model = frame.model
    if isinstance(model, ZeroPoint):
        return frame.with_model(replace(model, screen_zero=norm360(model.screen_zero + delta)))
    return frame.with_model(
        replace(model, screen_angle_deg=norm360(model.screen_angle_deg + delta))
    )


def _mirror(frame: ViewFrame) -> ViewFrame:
    # The zero-point model carries its own mirror multiplier.
    model = frame.model
    if isinstance(model, ZeroPoint):
        return frame.with_model(replace(model, sign=-model.sign))
    return replace(frame, angular_flip=not frame.angular_flip)


def _snap(frame: ViewFrame, anchor, screen_angle: float) -> ViewFrame:
    model = frame.model
    if isinstance(model, AnchorRelative):
        direction = model.direction
    else:
        # sign +1 grows screen angles with longitude, as "cw" does.
        direction = "cw" if model.sign > 0 else "ccw"
    return replace(
        frame,
        anchor=anchor,
        model=AnchorRelative(screen_angle_deg=norm360(screen_angle), direction=direction),
    )


def _replaces_frame(rule: OrientationRule) -> bool:
    return isinstance(rule.effect, (SetViewFrameEffect, SnapHouseToAngle, SnapAnchorToAngle))


class OrientationEngine:
    """Evaluate an :class:`OrientationProgram` tick by tick.

    ``custom_predicates`` maps custom trigger ids to callables receiving the
    current and previous snapshot. ``reference_cusps`` fixes the houses used
    by house triggers (for example natal cusps while transits animate); the
    snapshot's own cusps are used when it is omitted.

    The engine itself is stateless and may be shared; every chart-view
    session owns its :class:`OrientationRuntimeState`.
    """

    def __init__(
        self,
        program: OrientationProgram,
        *,
        custom_predicates: Mapping[str, CustomPredicate] | None = None,
        reference_cusps: Mapping[int, float] | None = None,
        recurring_default: bool = False,
        lock_precedence: LockPrecedence = "last",
    ) -> None:
        if lock_precedence not in ("last", "first"):
            raise ValueError(f"unknown lock precedence: {lock_precedence!r}")
        self.program = program
        self.custom_predicates = dict(custom_predicates or {})
        self.reference_cusps = (
            None
            if reference_cusps is None
            else {int(number): float(cusp) for number, cusp in reference_cusps.items()}
        )
        self.recurring_default = recurring_default
        self.lock_precedence = lock_precedence
        self._rules_by_id = {rule.id: rule for rule in program.rules}

    def new_state(self) -> OrientationRuntimeState:
        return OrientationRuntimeState(active_frame=self.program.base_frame)

    def active_locks(self, state: OrientationRuntimeState) -> tuple[LockRule, ...]:
        """Program locks followed by the locks of effects still in force."""

        locks = list(self.program.locks)
        for extra in state.effect_locks.values():
            locks.extend(extra)
        return tuple(locks)

    def lock_for(
        self, state: OrientationRuntimeState, element_kind: str, element_id: object
    ) -> LockRule | None:
        """Return the lock governing one element under the current state."""

        return effective_lock(
            self.active_locks(state), element_kind, element_id, precedence=self.lock_precedence
        )

    # -- evaluation -----------------------------------------------------

    def evaluate(
        self, snapshot: ChartSnapshot, state: OrientationRuntimeState
    ) -> EvaluationResult:
        if state.active_frame is None:
            state.active_frame = self.program.base_frame

        previous = state.previous_snapshot
        resolver = SnapshotResolver(snapshot)
        cusps = self.reference_cusps if self.reference_cusps is not None else snapshot.house_cusps

        fired: list[str] = []
        rearmed: list[str] = []
        animation_ms: int | None = None

        for rule in self.program.rules:
            if rule.id in state.applied_rule_ids:
                recurring = rule.recurring or self.recurring_default
                if recurring and self._has_reset(
                    rule.trigger, snapshot, previous, state, resolver, cusps
                ):
                    state.applied_rule_ids.discard(rule.id)
                    state.effect_locks.pop(rule.id, None)
                    rearmed.append(rule.id)
                    LOG.debug("Orientation rule %s re-armed", rule.id)
                continue

            if not self._has_fired(rule.trigger, snapshot, previous, state, resolver, cusps):
                continue

            self._apply(rule, state)
            state.applied_rule_ids.add(rule.id)
            if rule.locks:
                state.effect_locks[rule.id] = rule.locks
            fired.append(rule.id)
            if rule.animation_ms is not None:
                animation_ms = max(animation_ms or 0, rule.animation_ms)
            LOG.debug("Orientation rule %s fired (%s)", rule.id, rule.effect.type)

        self._record_house_positions(state, resolver, cusps)
        state.previous_snapshot = snapshot

        return EvaluationResult(
            frame=state.active_frame,
            locks=self.active_locks(state),
            fired=tuple(fired),
            rearmed=tuple(rearmed),
            animation_ms=animation_ms,
            wheel_frames=MappingProxyType(
                {wheel: state.frame_for(wheel) for wheel in _WHEELS}
            ),
        )

    # -- triggers -------------------------------------------------------

    @staticmethod
    def _house_subject(trigger: OrientationTrigger) -> tuple[object, int] | None:
        if isinstance(trigger, AscLeavesHouse):
            return "ASC", trigger.house
        if isinstance(trigger, PlanetCrossesHouse):
            return trigger.planet, trigger.house
        return None

    @staticmethod
    def _subject_longitude(subject: object, resolver: SnapshotResolver) -> float | None:
        if subject == "ASC":
            return resolver.angle_longitude("ASC")
        return resolver.object_longitude(subject)  # type: ignore[arg-type]

    def _current_house(
        self, subject: object, resolver: SnapshotResolver, cusps: Mapping[int, float]
    ) -> int | None:
        longitude = self._subject_longitude(subject, resolver)
        if longitude is None:
            return None
        return house_for_longitude(longitude, cusps)

    @staticmethod
    def _angle_delta(
        trigger: PlanetCrossesAngle, snapshot: ChartSnapshot | None
    ) -> float | None:
        if snapshot is None:
            return None
        resolver = SnapshotResolver(snapshot)
        planet = resolver.object_longitude(trigger.planet)
        angle = resolver.angle_longitude(trigger.angle)
        if planet is None or angle is None:
            return None
        return shortest_delta(planet, angle)

    def _crossed(
        self,
        trigger: PlanetCrossesAngle,
        snapshot: ChartSnapshot,
        previous: ChartSnapshot | None,
    ) -> bool:
        before = self._angle_delta(trigger, previous)
        after = self._angle_delta(trigger, snapshot)
        if before is None or after is None:
            return False
        if abs(before) >= _CROSSING_WINDOW_DEG or abs(after) >= _CROSSING_WINDOW_DEG:
            return False
        if before == 0.0:
            return False
        return after == 0.0 or (before < 0.0) != (after < 0.0)

    def _custom(
        self, trigger: CustomTrigger, snapshot: ChartSnapshot, previous: ChartSnapshot | None
    ) -> bool:
        predicate = self.custom_predicates.get(trigger.id)
        if predicate is None:
            LOG.debug("No predicate registered for custom trigger %s", trigger.id)
            return False
        return bool(predicate(snapshot, previous))

    def _has_fired(
        self,
        trigger: OrientationTrigger,
        snapshot: ChartSnapshot,
        previous: ChartSnapshot | None,
        state: OrientationRuntimeState,
        resolver: SnapshotResolver,
        cusps: Mapping[int, float],
    ) -> bool:
        watched = self._house_subject(trigger)
        if watched is not None:
            subject, house = watched
            before = state.previous_house_positions.get(house_position_key(subject, house))
            after = self._current_house(subject, resolver, cusps)
            return before == house and after is not None and after != house
        if isinstance(trigger, PlanetCrossesAngle):
            return self._crossed(trigger, snapshot, previous)
        if isinstance(trigger, CustomTrigger):
            return self._custom(trigger, snapshot, previous)
        raise TypeError(f"unsupported orientation trigger: {trigger!r}")

    def _has_reset(
        self,
        trigger: OrientationTrigger,
        snapshot: ChartSnapshot,
        previous: ChartSnapshot | None,
        state: OrientationRuntimeState,
        resolver: SnapshotResolver,
        cusps: Mapping[int, float],
    ) -> bool:
        watched = self._house_subject(trigger)
        if watched is not None:
            subject, house = watched
            return self._current_house(subject, resolver, cusps) == house
        if isinstance(trigger, PlanetCrossesAngle):
            return not self._crossed(trigger, snapshot, previous)
        if isinstance(trigger, CustomTrigger):
            return not self._custom(trigger, snapshot, previous)
        raise TypeError(f"unsupported orientation trigger: {trigger!r}")

    def _record_house_positions(
        self,
        state: OrientationRuntimeState,
        resolver: SnapshotResolver,
        cusps: Mapping[int, float],
    ) -> None:
        for rule in self.program.rules:
            watched = self._house_subject(rule.trigger)
            if watched is None:
                continue
            subject, house = watched
            key = house_position_key(subject, house)
            current = self._current_house(subject, resolver, cusps)
            if current is None:
                state.previous_house_positions.pop(key, None)
            else:
                state.previous_house_positions[key] = current

    # -- effects --------------------------------------------------------

    def _replace_frame(self, state: OrientationRuntimeState, frame: ViewFrame) -> None:
        state.active_frame = frame
        state.wheel_frames.clear()
        for rule_id in list(state.effect_locks):
            rule = self._rules_by_id.get(rule_id)
            if rule is not None and _replaces_frame(rule):
                del state.effect_locks[rule_id]

    def _apply(self, rule: OrientationRule, state: OrientationRuntimeState) -> None:
        effect = rule.effect
        current = state.active_frame
        assert current is not None

        if isinstance(effect, RotateEffect):
            self._transform_wheels(state, effect.wheel, lambda f: _rotate(f, effect.delta))
        elif isinstance(effect, MirrorEffect):
            self._transform_wheels(state, effect.wheel, _mirror)
        elif isinstance(effect, SetViewFrameEffect):
            self._replace_frame(state, effect.view_frame)
        elif isinstance(effect, SnapHouseToAngle):
            self._replace_frame(
                state, _snap(current, HouseAnchor(effect.house), effect.screen_angle)
            )
        elif isinstance(effect, SnapAnchorToAngle):
            self._replace_frame(
                state, _snap(current, AngleAnchor(effect.anchor), effect.screen_angle)
            )
        else:
            raise TypeError(f"unsupported orientation effect: {effect!r}")

    @staticmethod
    def _transform_wheels(
        state: OrientationRuntimeState,
        wheel: str,
        change: Callable[[ViewFrame], ViewFrame],
    ) -> None:
        if wheel == "all":
            assert state.active_frame is not None
            state.active_frame = change(state.active_frame)
            for name in list(state.wheel_frames):
                state.wheel_frames[name] = change(state.wheel_frames[name])
            return
        frame = state.frame_for(wheel)
        assert frame is not None
        state.wheel_frames[wheel] = change(frame)


def evaluate_program(
    program: OrientationProgram,
    snapshot: ChartSnapshot,
    state: OrientationRuntimeState,
    *,
    custom_predicates: Mapping[str, CustomPredicate] | None = None,
    reference_cusps: Mapping[int, float] | None = None,
    recurring_default: bool = False,
) -> EvaluationResult:
    """Run one tick of ``program`` without keeping an engine around."""

    engine = OrientationEngine(
        program,
        custom_predicates=custom_predicates,
        reference_cusps=reference_cusps,
        recurring_default=recurring_default,
    )
    return engine.evaluate(snapshot, state)
