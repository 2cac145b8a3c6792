from __future__ import annotations

from dataclasses import replace

from aphrodite_shared.wheels.definitions import STANDARD_NATAL, VEDIC_NATAL
from aphrodite_shared.wheels.registry import WheelRegistry, normalize_wheel_name


def test_normalize_wheel_name():
    assert normalize_wheel_name("Standard Natal Wheel") == "standard-natal-wheel"
    assert normalize_wheel_name("  Bi-Wheel\tSynastry ") == "-bi-wheel-synastry-"


def test_built_ins_are_available(registry: WheelRegistry) -> None:
    assert registry.built_in_names() == [
        "Standard Natal Wheel",
        "Simple Natal Wheel",
        "Complex Natal Wheel",
        "Bi-Wheel Natal-Transit",
        "Bi-Wheel Synastry",
        "Vedic Natal Wheel",
    ]
    assert registry.get("vedic natal wheel") is VEDIC_NATAL
    assert registry.has("STANDARD NATAL WHEEL")
    assert "Standard  Natal Wheel" in registry
    assert registry.get("unknown") is None


def test_user_registration_shadows_built_in(registry: WheelRegistry) -> None:
    custom = replace(STANDARD_NATAL, description="House style", version="1.1.0")
    registry.register(custom)

    assert registry.get("standard natal wheel") is custom
    assert registry.list().count(custom) == 1
    assert STANDARD_NATAL not in registry.list()
    assert registry.user_names() == ["Standard Natal Wheel"]

    assert registry.unregister("Standard Natal Wheel") is True
    assert registry.get("standard natal wheel") is STANDARD_NATAL


def test_unregister_never_removes_built_ins(registry: WheelRegistry) -> None:
    assert registry.unregister("Vedic Natal Wheel") is False
    assert registry.has("Vedic Natal Wheel")


def test_user_only_wheels_are_listed_after_built_ins(registry: WheelRegistry) -> None:
    extra = replace(VEDIC_NATAL, name="Draconic Wheel")
    registry.register(extra)
    assert registry.list()[-1] is extra
    assert len(registry.list()) == 7
    registry.clear_user()
    assert registry.user_names() == []


def test_registries_are_independent(registry: WheelRegistry) -> None:
    other = WheelRegistry(built_ins=())
    registry.register(replace(VEDIC_NATAL, name="Only Here"))
    assert not other.has("Only Here")
    assert other.list() == []
