"""Tests for the Qt spring animator."""

from __future__ import annotations

from spring_motion import Spring
from spring_motion.animator import SpringAnimator
from spring_motion.reduced_motion import motion_preference


def test_resting_animator_is_idle(qtbot):
    anim = SpringAnimator(Spring.create(400, 1.0), interval_ms=5)
    assert not anim.is_active()
    assert anim.value() == 0.0


def test_animator_runs_until_settled(qtbot):
    anim = SpringAnimator(Spring.create(400, 1.0), interval_ms=5)
    values = []
    anim.valueChanged.connect(values.append)
    with qtbot.waitSignal(anim.settled, timeout=5000) as blocker:
        anim.set_target(100)
        assert anim.is_active()
    assert blocker.args == [100.0]
    assert anim.value() == 100.0
    assert values and values[-1] == 100.0
    assert not anim.is_active()


def test_jump_away_from_target_starts_timer(qtbot):
    anim = SpringAnimator(Spring.create(400, 1.0), interval_ms=5)
    anim.jump_to(60)
    assert anim.is_active()
    anim.stop()
    assert not anim.is_active()
    assert anim.spring().value == 60.0


def test_reduced_motion_skips_timer(qtbot):
    anim = SpringAnimator(Spring.create(400, 1.0), interval_ms=5)
    values = []
    anim.valueChanged.connect(values.append)
    with motion_preference.overridden(True):
        anim.set_target(100)
    assert not anim.is_active()
    assert values == [100.0]
    assert anim.driver.at_rest


def test_per_animator_reduced_motion(qtbot):
    anim = SpringAnimator(Spring.create(400, 1.0), interval_ms=5, reduced_motion=True)
    anim.set_target(100)
    assert not anim.is_active()
    assert anim.value() == 100.0
