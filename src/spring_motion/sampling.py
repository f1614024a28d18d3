"""Spring sampling helpers.

Runs ``Spring.animate`` at a fixed frame rate to produce value trajectories,
normalized easing curves and settle-time estimates. Useful for precomputing
keyframes, previewing parameter choices and testing.

Public API:
 - sample_trajectory(spring, frame_ms=1000/60, max_ms=5000) -> list[float]
 - easing_samples(strength, dampness, fps=60, max_ms=3000) -> list[float]
 - settle_duration_ms(strength, dampness, distance, ...) -> float | None
 - is_overshooting(samples, target=1.0, start=0.0) -> bool
 - peak_overshoot(samples, start, target) -> float

Easing curves are produced by moving a spring across ``EASING_RANGE`` units
and dividing by that range, since equilibrium detection uses absolute
thresholds tuned for large magnitudes.

Reduced Motion:
When reduced motion is active (globally or via the ``reduced_motion``
argument), ``easing_samples`` returns ``[0.0, 1.0]``.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .reduced_motion import motion_preference
from .settings import DEFAULT_FPS, DEFAULT_FRAME_MS, EASING_RANGE
from .spring import Spring

__all__ = [
    "sample_trajectory",
    "easing_samples",
    "settle_duration_ms",
    "is_overshooting",
    "peak_overshoot",
]


def _check_timing(frame_ms: float, max_ms: float) -> None:
    if frame_ms <= 0:
        raise ValueError("frame_ms must be > 0")
    if max_ms <= 0:
        raise ValueError("max_ms must be > 0")


def sample_trajectory(
    spring: Spring,
    frame_ms: float = DEFAULT_FRAME_MS,
    max_ms: float = 5000.0,
) -> List[float]:
    """Return the spring value after each frame until it rests.

    Parameters
    ----------
    spring: Spring
        Starting state. A resting spring yields an empty list.
    frame_ms: float
        Delta fed to every ``animate`` call. Must be > 0.
    max_ms: float
        Simulated time cap for springs that never settle. Must be > 0.
    """
    _check_timing(frame_ms, max_ms)
    samples: List[float] = []
    elapsed = 0.0
    while not spring.at_rest and elapsed < max_ms:
        spring = spring.animate(frame_ms)
        elapsed += frame_ms
        samples.append(spring.value)
    return samples


def easing_samples(
    strength: float,
    dampness: float,
    fps: int = DEFAULT_FPS,
    max_ms: float = 3000.0,
    *,
    reduced_motion: Optional[bool] = None,
) -> List[float]:
    """Generate normalized progress samples (0.0 -> 1.0) for a spring.

    The first sample is always 0.0 and the last exactly 1.0, even when the
    spring is cut off by ``max_ms`` before it settles. ``reduced_motion``
    overrides the process-wide preference for this call.
    """
    spring = Spring.create(strength, dampness)
    if fps <= 0:
        raise ValueError("fps must be > 0")
    _check_timing(1000.0 / fps, max_ms)
    if motion_preference.resolve(reduced_motion):
        return [0.0, 1.0]

    values = sample_trajectory(spring.set_target(EASING_RANGE), 1000.0 / fps, max_ms)
    samples = [0.0] + [v / EASING_RANGE for v in values]
    if samples[-1] != 1.0:
        samples.append(1.0)
    return samples


def settle_duration_ms(
    strength: float,
    dampness: float,
    distance: float,
    frame_ms: float = DEFAULT_FRAME_MS,
    max_ms: float = 10000.0,
) -> Optional[float]:
    """Return simulated milliseconds until a spring travelling ``distance`` rests.

    Returns None when the spring is still moving after ``max_ms`` (e.g.
    dampness 0).
    """
    _check_timing(frame_ms, max_ms)
    spring = Spring.create(strength, dampness).set_target(distance)
    elapsed = 0.0
    while not spring.at_rest:
        if elapsed >= max_ms:
            return None
        spring = spring.animate(frame_ms)
        elapsed += frame_ms
    return elapsed


def is_overshooting(samples: Sequence[float], target: float = 1.0, start: float = 0.0) -> bool:
    """Return True if any sample passes ``target`` in the direction of travel."""
    return peak_overshoot(samples, start, target) > 0.0


def peak_overshoot(samples: Sequence[float], start: float, target: float) -> float:
    """Largest distance any sample travelled past ``target`` (0.0 if none)."""
    direction = 1.0 if target >= start else -1.0
    peak = 0.0
    for s in samples:
        excess = (s - target) * direction
        if excess > peak:
            peak = excess
    return peak
