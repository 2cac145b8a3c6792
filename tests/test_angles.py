from __future__ import annotations

import pytest

hypothesis = pytest.importorskip("hypothesis")
given = hypothesis.given
settings = hypothesis.settings
st = hypothesis.strategies

from aphrodite_shared.utils.angles import norm360, shortest_delta

finite = st.floats(-1e6, 1e6, allow_nan=False, allow_infinity=False)


def test_norm360_wraps_into_range():
    assert norm360(370.0) == 10.0
    assert norm360(-10.0) == 350.0
    assert norm360(360.0) == 0.0
    assert norm360(-1e-15) == 0.0


@given(finite)
def test_norm360_range_and_idempotence(angle: float) -> None:
    wrapped = norm360(angle)
    assert 0.0 <= wrapped < 360.0
    assert norm360(wrapped) == wrapped


@settings(deadline=None)
@given(finite, st.integers(-5, 5))
def test_norm360_turn_invariance(angle: float, turns: int) -> None:
    shifted = norm360(angle + turns * 360.0)
    assert shortest_delta(shifted, norm360(angle)) == pytest.approx(0.0, abs=1e-6)


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        (185.0, 95.0, 90.0),
        (10.0, 350.0, 20.0),
        (350.0, 10.0, -20.0),
        (0.0, 180.0, 180.0),
        (180.0, 0.0, 180.0),
        (95.0, 95.0, 0.0),
    ],
)
def test_shortest_delta_examples(a: float, b: float, expected: float) -> None:
    assert shortest_delta(a, b) == pytest.approx(expected)


@given(finite, finite)
def test_shortest_delta_half_open_range(a: float, b: float) -> None:
    delta = shortest_delta(a, b)
    assert -180.0 < delta <= 180.0
