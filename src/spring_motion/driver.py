"""Headless tick driver for a single spring.

Implements the host side of the spring contract: hold the "current" spring,
feed it elapsed time on every tick while it moves, stop ticking once it rests
and resume when a retarget or jump leaves it moving again. No Qt dependency;
``animator.SpringAnimator`` wires this to a ``QTimer``.

Listeners:
 - value listeners receive the new value whenever it changes
 - rest listeners receive the final value when the spring settles

Listener failures are logged and never interrupt the driver or the remaining
listeners.

Usage::
    driver = SpringDriver(Spring.create(170, 1.0))
    unsubscribe = driver.subscribe_value(lambda v: widget.setFixedWidth(int(v)))
    driver.set_target(240)
    while driver.running:
        driver.tick(16)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .reduced_motion import MotionPreference, collapse, motion_preference
from .spring import Spring

__all__ = ["SpringDriver", "Listener"]

log = logging.getLogger(__name__)

Listener = Callable[[float], None]


@dataclass(eq=False)
class _Subscription:
    handler: Listener
    active: bool = True


class SpringDriver:
    """Owns the current ``Spring`` and advances it on ticks.

    Parameters
    ----------
    spring: Spring
        Initial state. A spring that is not at rest starts out running.
    name: str
        Label used in log messages.
    reduced_motion: bool, optional
        Per-driver override; None follows ``preference``.
    preference: MotionPreference, optional
        Defaults to the process-wide ``motion_preference``.
    """

    def __init__(
        self,
        spring: Spring,
        *,
        name: str = "spring",
        reduced_motion: Optional[bool] = None,
        preference: Optional[MotionPreference] = None,
    ) -> None:
        self._spring = spring
        self._name = name
        self._reduced_override = reduced_motion
        self._preference = preference if preference is not None else motion_preference
        self._value_subs: List[_Subscription] = []
        self._rest_subs: List[_Subscription] = []
        self._last_ms: Optional[float] = None

    # Queries -----------------------------------------------------------
    @property
    def spring(self) -> Spring:
        return self._spring

    @property
    def value(self) -> float:
        return self._spring.value

    @property
    def target(self) -> float:
        return self._spring.target

    @property
    def at_rest(self) -> bool:
        return self._spring.at_rest

    @property
    def running(self) -> bool:
        """True while the host should keep delivering ticks."""
        return not self._spring.at_rest

    @property
    def reduced_motion(self) -> bool:
        return self._preference.resolve(self._reduced_override)

    # Subscriptions -----------------------------------------------------
    def subscribe_value(self, handler: Listener) -> Callable[[], None]:
        return self._subscribe(self._value_subs, handler)

    def subscribe_rest(self, handler: Listener) -> Callable[[], None]:
        return self._subscribe(self._rest_subs, handler)

    def _subscribe(self, bucket: List[_Subscription], handler: Listener) -> Callable[[], None]:
        sub = _Subscription(handler)
        bucket.append(sub)

        def unsubscribe() -> None:
            sub.active = False
            if sub in bucket:
                bucket.remove(sub)

        return unsubscribe

    # Commands ----------------------------------------------------------
    def set_target(self, target: float) -> Spring:
        """Retarget; with reduced motion the spring jumps straight there."""
        new = self._spring.set_target(target)
        if self.reduced_motion:
            new = collapse(new)
        return self._replace(new)

    def jump_to(self, value: float) -> Spring:
        return self._replace(self._spring.jump_to(value))

    def replace(self, spring: Spring) -> Spring:
        """Swap in another spring (e.g. new strength/dampness, same kinematics)."""
        return self._replace(spring)

    def tick(self, delta_ms: float) -> Spring:
        """Advance by ``delta_ms``; a no-op while the spring rests."""
        if not self.running:
            return self._spring
        return self._replace(self._spring.animate(delta_ms))

    def advance_to(self, now_ms: float) -> Spring:
        """Advance using a monotonic timestamp instead of a delta.

        The first call after the spring starts moving only records the
        timestamp, so idle time is never integrated.
        """
        if not self.running:
            self._last_ms = None
            return self._spring
        if self._last_ms is None:
            self._last_ms = now_ms
            return self._spring
        delta = now_ms - self._last_ms
        self._last_ms = now_ms
        return self.tick(delta)

    # Internal ----------------------------------------------------------
    def _replace(self, new: Spring) -> Spring:
        prev = self._spring
        self._spring = new
        if prev.at_rest and not new.at_rest:
            self._last_ms = None
            log.debug("%s started: %r -> %r", self._name, new.value, new.target)
        if new.value != prev.value:
            self._notify(self._value_subs, new.value)
        if not prev.at_rest and new.at_rest:
            self._last_ms = None
            log.debug("%s settled at %r", self._name, new.value)
            self._notify(self._rest_subs, new.value)
        return new

    def _notify(self, bucket: List[_Subscription], value: float) -> None:
        for sub in list(bucket):
            if not sub.active:
                continue
            try:
                sub.handler(value)
            except Exception:
                log.exception("%s listener %r failed", self._name, sub.handler)
