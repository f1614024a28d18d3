import dataclasses
import math

import pytest

from spring_motion import (
    InvalidParameterError,
    Spring,
    animate,
    create,
    is_at_rest,
    jump_to,
    set_target,
    target_of,
    value_of,
)
from spring_motion.settings import MAX_SUBSTEP_MS, MAX_SUBSTEPS


def _run(spring, delta_ms=16.0, max_ticks=5000):
    """Animate until rest; return (final spring, values seen, ticks used)."""
    values = []
    ticks = 0
    while not spring.at_rest and ticks < max_ticks:
        spring = animate(delta_ms, spring)
        values.append(spring.value)
        ticks += 1
    return spring, values, ticks


@pytest.mark.parametrize("strength,dampness", [(1, 0), (100, 2), (170, 1.0), (0.5, 10)])
def test_create_starts_resting_at_zero(strength, dampness):
    s = create(strength, dampness)
    assert s.value == 0.0
    assert s.velocity == 0.0
    assert s.target == 0.0
    assert s.at_rest is True
    assert s.strength == strength
    assert s.dampness == dampness


@pytest.mark.parametrize("strength,dampness,param", [(0, 1, "strength"), (-1, 1, "strength"), (10, -1, "dampness")])
def test_create_rejects_invalid_parameters(strength, dampness, param):
    with pytest.raises(InvalidParameterError) as info:
        create(strength, dampness)
    assert info.value.parameter == param
    assert isinstance(info.value, ValueError)


def test_create_rejects_non_finite():
    with pytest.raises(InvalidParameterError):
        create(float("nan"), 1)
    with pytest.raises(InvalidParameterError):
        create(100, float("inf"))


def test_direct_construction_is_validated_too():
    with pytest.raises(InvalidParameterError):
        Spring(strength=0, dampness=1)


def test_animate_zero_or_negative_delta_is_noop():
    s = set_target(100, create(100, 2))
    assert animate(0, s) is s
    assert animate(-16, s) is s
    assert animate(float("nan"), s) is s


def test_animate_resting_spring_is_noop():
    s = create(100, 2)
    assert animate(16, s) is s
    assert animate(10_000, s) == s


def test_set_target_restarts_motion_before_value_changes():
    s = create(100, 2)
    moving = set_target(100, s)
    assert is_at_rest(moving) is False
    assert value_of(moving) == 0.0
    assert target_of(moving) == 100.0
    # prior state untouched
    assert s.at_rest is True and s.target == 0.0


def test_set_target_to_current_value_keeps_rest():
    s = create(100, 2)
    assert set_target(0, s).at_rest is True


def test_jump_to_drops_velocity_from_any_state():
    s = set_target(100, create(100, 2))
    s = animate(100, s)
    assert s.velocity != 0.0
    j = jump_to(42, s)
    assert j.value == 42.0
    assert j.velocity == 0.0
    assert j.at_rest is False
    landed = jump_to(100, s)
    assert landed.at_rest is True


def test_jump_to_away_from_target_leaves_rest():
    s = jump_to(50, create(100, 2))
    assert s.at_rest is False
    final, _, _ = _run(s)
    assert final.at_rest and final.value == 0.0


def test_end_to_end_settles_within_two_seconds():
    s = set_target(100, create(100, 2))
    peak = 0.0
    for _ in range(125):  # 125 * 16ms = 2s
        s = animate(16, s)
        peak = max(peak, s.value)
    assert s.at_rest is True
    assert s.value == 100.0
    assert s.velocity == 0.0
    assert peak <= 110.0


@pytest.mark.parametrize("dampness", [0.2, 0.5, 1.0, 2.0, 5.0, 10.0])
@pytest.mark.parametrize("strength", [50, 100, 400])
def test_converges_for_usable_range(strength, dampness):
    s = set_target(250, create(strength, dampness))
    final, _, ticks = _run(s, 16.0, max_ticks=5000)
    assert final.at_rest, f"did not settle after {ticks} ticks"
    assert final.value == 250.0


@pytest.mark.parametrize("dampness", [1.0, 1.5, 3.0, 10.0])
def test_no_overshoot_explosion_when_damped(dampness):
    s = jump_to(-80, create(300, dampness))
    s = set_target(120, s)
    _, values, _ = _run(s)
    span = 200.0
    assert all(math.isfinite(v) for v in values)
    assert max(values) <= 120 + 0.1 * span
    assert min(values) >= -80 - 0.1 * span


def test_underdamped_overshoots_but_stays_bounded():
    s = set_target(100, create(170, 0.2))
    final, values, _ = _run(s)
    assert max(values) > 100.0
    assert max(values) < 200.0
    assert final.value == 100.0


def test_undamped_spring_never_rests():
    s = set_target(100, create(100, 0))
    final, values, ticks = _run(s, max_ticks=500)
    assert ticks == 500
    assert final.at_rest is False
    assert max(abs(v) for v in values) < 250.0


def test_rest_always_snaps_to_target():
    s = set_target(100, create(100, 0.7))
    for _ in range(400):
        s = animate(16, s)
        if s.at_rest:
            assert s.value == s.target
            assert s.velocity == 0.0


def test_splitting_a_delta_gives_the_same_state():
    s = set_target(100, create(100, 2))
    assert animate(16, animate(16, s)) == animate(32, s)


def test_huge_delta_is_truncated():
    s = set_target(100, create(100, 0.1))
    capped = MAX_SUBSTEP_MS * MAX_SUBSTEPS
    assert animate(1e9, s) == animate(capped, s)
    assert math.isfinite(animate(1e9, s).value)


def test_springs_are_immutable():
    s = create(100, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.value = 3.0  # type: ignore[misc]


def test_method_and_function_forms_agree():
    s = Spring.create(100, 2)
    assert s.set_target(10) == set_target(10, s)
    assert s.jump_to(5) == jump_to(5, s)
    moving = s.set_target(10)
    assert moving.animate(16) == animate(16, moving)


def test_derived_properties():
    s = create(100, 2)
    assert s.damping_coefficient == pytest.approx(40.0)
    assert jump_to(30, s).displacement == 30.0
    assert create(1, 0).regime == "undamped"
    assert create(1, 0.5).regime == "underdamped"
    assert create(1, 1).regime == "critical"
    assert create(1, 3).regime == "overdamped"


def test_resting_flag_cannot_be_forced_off_target():
    with pytest.raises(InvalidParameterError) as info:
        Spring(strength=100, dampness=2, value=5.0, velocity=3.0, target=0.0, at_rest=True)
    assert info.value.parameter == "at_rest"
    with pytest.raises(InvalidParameterError):
        Spring(strength=100, dampness=2, value=0.0, velocity=3.0, target=0.0, at_rest=True)
    with pytest.raises(InvalidParameterError):
        dataclasses.replace(create(100, 2), target=50.0)


def test_inconsistent_state_is_fine_while_moving():
    s = Spring(strength=100, dampness=2, value=5.0, velocity=3.0, target=0.0, at_rest=False)
    final, _, _ = _run(s)
    assert final.at_rest and final.value == 0.0
