from __future__ import annotations

import pytest

from aphrodite_shared.orientation.types import ChartSnapshot
from aphrodite_shared.wheels.registry import WheelRegistry

# Equal 30° houses starting at 95° (ASC in early Cancer).
EQUAL_CUSPS = {number: (95.0 + 30.0 * (number - 1)) % 360.0 for number in range(1, 13)}


@pytest.fixture
def registry() -> WheelRegistry:
    """Isolated registry so tests never leak user wheels into each other."""

    return WheelRegistry()


@pytest.fixture
def natal_snapshot() -> ChartSnapshot:
    return ChartSnapshot(
        object_longitudes={0: 280.0, 1: 40.0, "chiron": 12.5},
        house_cusps=EQUAL_CUSPS,
        angle_longitudes={"ASC": 95.0, "MC": 5.0},
    )


@pytest.fixture(autouse=True)
def _isolated_config_home(tmp_path, monkeypatch):
    monkeypatch.setenv("APHRODITE_HOME", str(tmp_path / "aphrodite-home"))
    yield
