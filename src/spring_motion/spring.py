"""Damped spring state machine.

A ``Spring`` is an immutable value describing a single damped harmonic
oscillator pulled toward a target. Hosts feed it elapsed-time deltas and read
back the current value and a rest flag, which makes it suitable for driving
dimensions, opacity or any other scalar toward a moving goal.

Design Goals:
 - Headless/test friendly (no Qt imports, no I/O)
 - Immutable updates: every operation returns a new ``Spring`` so callers can
   keep prior states around (diffing, undo)
 - Stable under irregular frame timing via fixed-size sub-stepping
 - Settles to exactly ``target`` once motion is no longer perceptible

Public API:
 - Spring dataclass (``create``, ``set_target``, ``jump_to``, ``animate``)
 - create(strength, dampness) -> Spring
 - set_target(new_target, spring) -> Spring
 - jump_to(new_value, spring) -> Spring
 - animate(delta_ms, spring) -> Spring
 - value_of(spring) / target_of(spring) / is_at_rest(spring)

Physics Model:
``strength`` is the stiffness k and ``dampness`` the damping ratio ζ of

    x'' = -k (x - target) - 2 ζ sqrt(k) x'

Deltas are milliseconds while the integration runs in seconds, so a spring
with strength 100 has an angular frequency of 10 rad/s. Each ``animate`` call
is split into equal sub-steps no longer than ``MAX_SUBSTEP_MS`` and each
sub-step uses semi-implicit Euler (velocity first, then position with the new
velocity). Integration stays stable while ``2 ζ sqrt(k) * 0.001 < 2``, which
covers strengths up to a few thousand with dampness up to 10.

Equilibrium:
The spring rests once ``|value - target| < DISPLACEMENT_EPSILON`` and
``|velocity| < VELOCITY_EPSILON``. The thresholds are absolute, so springs
working on tiny ranges (e.g. 0..1 opacity) settle too early; animate over a
large range (0..1000) and rescale the output instead. An undamped spring
(dampness 0) keeps oscillating and never rests.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

from .errors import InvalidParameterError
from .settings import (
    DISPLACEMENT_EPSILON,
    MAX_SUBSTEP_MS,
    MAX_SUBSTEPS,
    MS_PER_SECOND,
    VELOCITY_EPSILON,
)

__all__ = [
    "Spring",
    "create",
    "set_target",
    "jump_to",
    "animate",
    "value_of",
    "target_of",
    "is_at_rest",
]

log = logging.getLogger(__name__)


def _validate(strength: float, dampness: float) -> None:
    if not math.isfinite(strength) or strength <= 0:
        log.debug("rejecting spring strength=%r", strength)
        raise InvalidParameterError(
            f"strength must be a finite number > 0, got {strength!r}",
            parameter="strength",
            value=strength,
        )
    if not math.isfinite(dampness) or dampness < 0:
        log.debug("rejecting spring dampness=%r", dampness)
        raise InvalidParameterError(
            f"dampness must be a finite number >= 0, got {dampness!r}",
            parameter="dampness",
            value=dampness,
        )


@dataclass(frozen=True)
class Spring:
    strength: float  # k
    dampness: float  # ζ (1.0 is critical)
    value: float = 0.0
    velocity: float = 0.0
    target: float = 0.0
    at_rest: bool = True

    def __post_init__(self) -> None:
        _validate(self.strength, self.dampness)
        # A resting spring sits still on its target; animate() never revisits it.
        if self.at_rest and (self.value != self.target or self.velocity != 0.0):
            raise InvalidParameterError(
                f"a resting spring needs value == target and velocity == 0, got "
                f"value={self.value!r} target={self.target!r} velocity={self.velocity!r}",
                parameter="at_rest",
                value=self.at_rest,
            )

    @classmethod
    def create(cls, strength: float, dampness: float) -> "Spring":
        """Return a resting spring at 0 with the given motion characteristics."""
        return cls(strength=float(strength), dampness=float(dampness))

    # Derived -----------------------------------------------------------
    @property
    def damping_coefficient(self) -> float:
        """Velocity coefficient of the ODE (``2 ζ sqrt(k)``)."""
        return 2.0 * self.dampness * math.sqrt(self.strength)

    @property
    def displacement(self) -> float:
        return self.value - self.target

    @property
    def regime(self) -> str:
        if self.dampness == 0:
            return "undamped"
        if self.dampness < 1.0:
            return "underdamped"
        if self.dampness == 1.0:
            return "critical"
        return "overdamped"

    # Mutators (return new springs) -------------------------------------
    def set_target(self, new_target: float) -> "Spring":
        """Retarget the spring, keeping its current position and velocity.

        The spring only stays at rest when it already sits still on the new
        target.
        """
        new_target = float(new_target)
        return replace(
            self,
            target=new_target,
            at_rest=(new_target == self.value and self.velocity == 0.0),
        )

    def jump_to(self, new_value: float) -> "Spring":
        """Teleport to ``new_value`` and drop any momentum."""
        new_value = float(new_value)
        return replace(
            self,
            value=new_value,
            velocity=0.0,
            at_rest=(new_value == self.target),
        )

    def animate(self, delta_ms: float) -> "Spring":
        """Advance the simulation by ``delta_ms`` milliseconds.

        Resting springs and non-positive deltas return ``self`` unchanged.
        """
        if self.at_rest or not delta_ms > 0:
            return self

        # Bound the work per call; hitches beyond this are truncated.
        total_ms = min(float(delta_ms), MAX_SUBSTEP_MS * MAX_SUBSTEPS)
        steps = max(1, math.ceil(total_ms / MAX_SUBSTEP_MS))
        h = (total_ms / steps) / MS_PER_SECOND

        k = self.strength
        c = self.damping_coefficient
        target = self.target
        x = self.value
        v = self.velocity
        for _ in range(steps):
            a = -k * (x - target) - c * v
            v += a * h
            x += v * h

        if abs(x - target) < DISPLACEMENT_EPSILON and abs(v) < VELOCITY_EPSILON:
            return replace(self, value=target, velocity=0.0, at_rest=True)
        return replace(self, value=x, velocity=v, at_rest=False)


# Convenience functions (stateless wrappers)


def create(strength: float, dampness: float) -> Spring:
    return Spring.create(strength, dampness)


def set_target(new_target: float, spring: Spring) -> Spring:
    return spring.set_target(new_target)


def jump_to(new_value: float, spring: Spring) -> Spring:
    return spring.jump_to(new_value)


def animate(delta_ms: float, spring: Spring) -> Spring:
    return spring.animate(delta_ms)


def value_of(spring: Spring) -> float:
    return spring.value


def target_of(spring: Spring) -> float:
    return spring.target


def is_at_rest(spring: Spring) -> bool:
    return spring.at_rest
