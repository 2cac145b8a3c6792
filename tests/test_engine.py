from __future__ import annotations

import logging

import pytest

from aphrodite_shared.config.settings import Settings, build_orientation_engine
from aphrodite_shared.orientation.engine import (
    OrientationEngine,
    evaluate_program,
    house_for_longitude,
)
from aphrodite_shared.orientation.transform import world_to_screen
from aphrodite_shared.orientation.types import (
    AnchorRelative,
    AngleAnchor,
    AscLeavesHouse,
    ChartSnapshot,
    CustomTrigger,
    HouseAnchor,
    HouseSubject,
    LockRule,
    MirrorEffect,
    OrientationProgram,
    OrientationRule,
    OrientationRuntimeState,
    PlanetCrossesAngle,
    PlanetCrossesHouse,
    RotateEffect,
    SetViewFrameEffect,
    SnapAnchorToAngle,
    SnapHouseToAngle,
    ViewFrame,
    ZeroPoint,
)


BASE_FRAME = ViewFrame(
    reference_frame="houses",
    anchor=AngleAnchor("ASC"),
    model=AnchorRelative(180.0, "ccw"),
)
BASE_LOCK = LockRule(subject=HouseSubject(), frame="houses", mode="follow-anchor")
EQUAL_CUSPS = {number: (95.0 + 30.0 * (number - 1)) % 360.0 for number in range(1, 13)}


def _tick(asc: float, *, sun: float = 280.0, mc: float = 5.0) -> ChartSnapshot:
    return ChartSnapshot(
        object_longitudes={0: sun},
        house_cusps=EQUAL_CUSPS,
        angle_longitudes={"ASC": asc, "MC": mc},
    )


def _program(*rules: OrientationRule) -> OrientationProgram:
    return OrientationProgram(base_frame=BASE_FRAME, locks=(BASE_LOCK,), rules=rules)


@pytest.mark.parametrize(
    ("longitude", "house"),
    [(95.0, 1), (124.9, 1), (125.0, 2), (64.0, 11), (70.0, 12), (10.0, 10), (94.99, 12)],
)
def test_house_for_longitude_wraps_through_aries(longitude: float, house: int) -> None:
    assert house_for_longitude(longitude, EQUAL_CUSPS) == house


def test_house_for_longitude_needs_all_cusps():
    partial = {number: cusp for number, cusp in EQUAL_CUSPS.items() if number != 7}
    assert house_for_longitude(100.0, partial) is None


def test_asc_leaves_house_fires_once_by_default():
    rule = OrientationRule(
        id="asc-out",
        trigger=AscLeavesHouse(1),
        effect=RotateEffect(wheel="zodiac", delta=30.0),
        animation_ms=400,
    )
    engine = OrientationEngine(_program(rule), reference_cusps=EQUAL_CUSPS)
    state = engine.new_state()

    first = engine.evaluate(_tick(100.0), state)
    assert first.fired == () and not first.changed
    assert state.previous_house_positions == {"ASC:1": 1}

    second = engine.evaluate(_tick(130.0), state)
    assert second.fired == ("asc-out",)
    assert second.animation_ms == 400
    assert second.wheel_frames["zodiac"].model.screen_angle_deg == pytest.approx(210.0)
    assert second.wheel_frames["houses"] == BASE_FRAME
    assert second.frame == BASE_FRAME

    engine.evaluate(_tick(100.0), state)
    again = engine.evaluate(_tick(130.0), state)
    assert again.fired == ()
    assert state.applied_rule_ids == {"asc-out"}


def test_recurring_rule_rearms_after_condition_resets():
    rule = OrientationRule(
        id="asc-out",
        trigger=AscLeavesHouse(1),
        effect=MirrorEffect(wheel="all"),
        recurring=True,
    )
    engine = OrientationEngine(_program(rule), reference_cusps=EQUAL_CUSPS)
    state = engine.new_state()

    engine.evaluate(_tick(100.0), state)
    assert engine.evaluate(_tick(130.0), state).frame.angular_flip is True
    back = engine.evaluate(_tick(100.0), state)
    assert back.rearmed == ("asc-out",) and back.fired == ()
    assert "asc-out" not in state.applied_rule_ids
    assert engine.evaluate(_tick(130.0), state).frame.angular_flip is False


def test_recurring_default_comes_from_settings():
    rule = OrientationRule(
        id="asc-out", trigger=AscLeavesHouse(1), effect=RotateEffect("all", 10.0)
    )
    settings = Settings.model_validate({"orientation": {"recurring_rules": True}})
    engine = build_orientation_engine(_program(rule), settings, reference_cusps=EQUAL_CUSPS)
    state = engine.new_state()
    for asc in (100.0, 130.0, 100.0, 130.0):
        result = engine.evaluate(_tick(asc), state)
    assert result.fired == ("asc-out",)
    assert result.frame.model.screen_angle_deg == pytest.approx(200.0)


def test_planet_crosses_house_uses_snapshot_cusps():
    rule = OrientationRule(
        id="sun-out-of-7",
        trigger=PlanetCrossesHouse(planet=0, house=7),
        effect=SnapHouseToAngle(house=10, screen_angle=90.0),
        locks=(LockRule(subject=HouseSubject([10]), frame="screen"),),
    )
    engine = OrientationEngine(_program(rule))
    state = engine.new_state()
    engine.evaluate(_tick(100.0, sun=280.0), state)
    result = engine.evaluate(_tick(100.0, sun=310.0), state)

    assert result.fired == ("sun-out-of-7",)
    assert result.frame.anchor == HouseAnchor(10)
    assert result.frame.model == AnchorRelative(90.0, "ccw")
    assert result.frame.reference_frame == "houses"
    assert result.locks == (BASE_LOCK, rule.locks[0])


def test_planet_crosses_angle_detects_sign_change_near_conjunction():
    rule = OrientationRule(
        id="sun-mc",
        trigger=PlanetCrossesAngle(planet=0, angle="MC"),
        effect=SetViewFrameEffect(BASE_FRAME.with_model(AnchorRelative(0.0, "cw"))),
    )
    engine = OrientationEngine(_program(rule))
    state = engine.new_state()
    engine.evaluate(_tick(100.0, sun=3.0), state)
    result = engine.evaluate(_tick(100.0, sun=7.0), state)
    assert result.fired == ("sun-mc",)
    assert result.frame.model == AnchorRelative(0.0, "cw")


def test_planet_at_opposition_is_not_a_crossing():
    rule = OrientationRule(
        id="sun-mc",
        trigger=PlanetCrossesAngle(planet=0, angle="MC"),
        effect=MirrorEffect("houses"),
    )
    engine = OrientationEngine(_program(rule))
    state = engine.new_state()
    engine.evaluate(_tick(100.0, sun=183.0), state)
    assert engine.evaluate(_tick(100.0, sun=187.0), state).fired == ()


def test_custom_trigger_uses_registered_predicate(caplog):
    rule = OrientationRule(
        id="eclipse",
        trigger=CustomTrigger("eclipse-season"),
        effect=RotateEffect("houses", -15.0),
    )
    unknown = OrientationRule(
        id="unknown", trigger=CustomTrigger("nope"), effect=MirrorEffect("zodiac")
    )
    engine = OrientationEngine(
        _program(rule, unknown),
        custom_predicates={"eclipse-season": lambda snap, prev: prev is not None},
    )
    state = engine.new_state()
    with caplog.at_level(logging.DEBUG, logger="aphrodite_shared.orientation.engine"):
        assert engine.evaluate(_tick(100.0), state).fired == ()
        result = engine.evaluate(_tick(100.0), state)
    assert result.fired == ("eclipse",)
    assert result.wheel_frames["houses"].model.screen_angle_deg == pytest.approx(165.0)
    assert any("nope" in record.getMessage() for record in caplog.records)


def test_later_rule_wins_and_withdraws_replaced_frame_locks():
    screen_lock = LockRule(subject=HouseSubject([1]), frame="screen")
    world_lock = LockRule(subject=HouseSubject([1]), frame="world")
    first = OrientationRule(
        id="first",
        trigger=CustomTrigger("always"),
        effect=SetViewFrameEffect(BASE_FRAME.with_model(AnchorRelative(0.0, "ccw"))),
        locks=(screen_lock,),
        animation_ms=200,
    )
    second = OrientationRule(
        id="second",
        trigger=CustomTrigger("always"),
        effect=SetViewFrameEffect(BASE_FRAME.with_model(AnchorRelative(270.0, "ccw"))),
        locks=(world_lock,),
        animation_ms=600,
    )
    engine = OrientationEngine(
        _program(first, second), custom_predicates={"always": lambda snap, prev: True}
    )
    state = engine.new_state()
    result = engine.evaluate(_tick(100.0), state)

    assert result.fired == ("first", "second")
    assert result.frame.model.screen_angle_deg == pytest.approx(270.0)
    assert result.animation_ms == 600
    assert result.locks == (BASE_LOCK, world_lock)


def test_lock_for_follows_engine_precedence():
    rule = OrientationRule(
        id="pin-mc",
        trigger=CustomTrigger("always"),
        effect=RotateEffect("zodiac", 0.0),
        locks=(LockRule(subject=HouseSubject([10]), frame="screen"),),
    )
    predicates = {"always": lambda snap, prev: True}
    last = OrientationEngine(_program(rule), custom_predicates=predicates)
    first = OrientationEngine(
        _program(rule), custom_predicates=predicates, lock_precedence="first"
    )
    for engine, expected in ((last, "screen"), (first, "houses")):
        state = engine.new_state()
        engine.evaluate(_tick(100.0), state)
        assert engine.lock_for(state, "house", 10).frame == expected


def test_mirror_on_zero_point_frame_negates_sign():
    frame = ViewFrame(anchor=AngleAnchor("MC"), model=ZeroPoint(screen_zero=90.0, sign=-1))
    rule = OrientationRule(
        id="flip", trigger=CustomTrigger("always"), effect=MirrorEffect("all")
    )
    result = evaluate_program(
        OrientationProgram(frame, rules=(rule,)),
        _tick(100.0),
        OrientationRuntimeState(),
        custom_predicates={"always": lambda snap, prev: True},
    )
    assert result.frame.model.sign == 1
    assert result.frame.angular_flip is False


def test_missing_inputs_do_not_fire():
    rule = OrientationRule(
        id="moon-mc", trigger=PlanetCrossesAngle(planet=1, angle="MC"), effect=MirrorEffect("all")
    )
    engine = OrientationEngine(_program(rule))
    state = engine.new_state()
    engine.evaluate(_tick(100.0), state)
    assert engine.evaluate(_tick(100.0), state).fired == ()


def test_engine_rejects_unknown_lock_precedence():
    with pytest.raises(ValueError):
        OrientationEngine(_program(), lock_precedence="middle")


@pytest.mark.parametrize(("sign", "direction"), [(1, "cw"), (-1, "ccw")])
def test_snap_from_zero_point_frame_keeps_direction(sign: int, direction: str) -> None:
    frame = ViewFrame(
        anchor=AngleAnchor("ASC"), model=ZeroPoint(screen_zero=0.0, world_zero=0.0, sign=sign)
    )
    rule = OrientationRule(
        id="snap-asc",
        trigger=CustomTrigger("always"),
        effect=SnapAnchorToAngle(anchor="ASC", screen_angle=0.0),
    )
    before = world_to_screen(10.0, frame)
    result = evaluate_program(
        OrientationProgram(frame, rules=(rule,)),
        _tick(0.0),
        OrientationRuntimeState(),
        custom_predicates={"always": lambda snap, prev: True},
    )
    assert result.frame.model == AnchorRelative(0.0, direction)
    assert world_to_screen(10.0, result.frame, 0.0) == pytest.approx(before)


def test_recurring_angle_trigger_rearms_after_crossing():
    rule = OrientationRule(
        id="sun-mc",
        trigger=PlanetCrossesAngle(planet=0, angle="MC"),
        effect=RotateEffect("zodiac", 10.0),
        recurring=True,
    )
    engine = OrientationEngine(_program(rule))
    state = engine.new_state()
    outcomes = [engine.evaluate(_tick(100.0, sun=sun), state) for sun in (3.0, 7.0, 8.0, 4.0)]

    assert [result.fired for result in outcomes] == [(), ("sun-mc",), (), ("sun-mc",)]
    assert outcomes[2].rearmed == ("sun-mc",)
    assert outcomes[3].wheel_frames["zodiac"].model.screen_angle_deg == pytest.approx(200.0)


def test_recurring_custom_trigger_rearms_when_predicate_turns_false():
    flag = {"on": True}
    rule = OrientationRule(
        id="eclipse",
        trigger=CustomTrigger("eclipse-season"),
        effect=MirrorEffect("all"),
        recurring=True,
    )
    engine = OrientationEngine(
        _program(rule), custom_predicates={"eclipse-season": lambda snap, prev: flag["on"]}
    )
    state = engine.new_state()

    assert engine.evaluate(_tick(100.0), state).fired == ("eclipse",)
    assert engine.evaluate(_tick(100.0), state).fired == ()
    flag["on"] = False
    assert engine.evaluate(_tick(100.0), state).rearmed == ("eclipse",)
    flag["on"] = True
    result = engine.evaluate(_tick(100.0), state)
    assert result.fired == ("eclipse",)
    assert result.frame.angular_flip is False


def test_reference_cusps_accept_text_house_numbers():
    text_cusps = {str(number): cusp for number, cusp in EQUAL_CUSPS.items()}
    rule = OrientationRule(
        id="asc-out", trigger=AscLeavesHouse(1), effect=RotateEffect("all", 30.0)
    )
    engine = OrientationEngine(_program(rule), reference_cusps=text_cusps)
    state = engine.new_state()
    bare = [ChartSnapshot(angle_longitudes={"ASC": asc, "MC": 5.0}) for asc in (100.0, 130.0)]

    engine.evaluate(bare[0], state)
    assert state.previous_house_positions == {"ASC:1": 1}
    assert engine.evaluate(bare[1], state).fired == ("asc-out",)
    assert engine.reference_cusps[1] == pytest.approx(95.0)
