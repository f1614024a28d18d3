"""Reduced motion preference for spring drivers and easing sampling.

Users who prefer reduced motion should see values land on their targets at
once instead of springing there. The pure ``Spring`` operations never look at
this preference; ``SpringDriver``, ``SpringAnimator`` and ``easing_samples``
do, each accepting a per-call/per-instance ``reduced_motion`` override that
wins over the process-wide ``motion_preference``.

The process-wide preference is read from ``SPRING_PREFER_REDUCED_MOTION``
when this module is imported.
"""

from __future__ import annotations

import contextlib
import os
from typing import Iterator, Mapping, Optional

from .settings import REDUCED_MOTION_ENV
from .spring import Spring

__all__ = [
    "MotionPreference",
    "motion_preference",
    "collapse",
]

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class MotionPreference:
    """Reduced-motion switch with scoped overrides.

    ``resolve(override)`` is what consumers call: an explicit ``True``/``False``
    from the caller beats the stored preference.
    """

    def __init__(self, reduced: bool = False) -> None:
        self._reduced = bool(reduced)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MotionPreference":
        env = os.environ if environ is None else environ
        return cls(env.get(REDUCED_MOTION_ENV, "").strip().lower() in _TRUTHY)

    @property
    def reduced(self) -> bool:
        return self._reduced

    def set_reduced(self, enabled: bool) -> None:
        self._reduced = bool(enabled)

    def resolve(self, override: Optional[bool] = None) -> bool:
        return self._reduced if override is None else bool(override)

    @contextlib.contextmanager
    def overridden(self, reduced: bool = True) -> Iterator["MotionPreference"]:
        """Temporarily replace the stored preference (restored on any exit)."""
        saved = self._reduced
        self._reduced = bool(reduced)
        try:
            yield self
        finally:
            self._reduced = saved

    def __repr__(self) -> str:
        return f"MotionPreference(reduced={self._reduced})"


motion_preference = MotionPreference.from_env()


def collapse(spring: Spring) -> Spring:
    """Finish any pending motion by landing on the target with no velocity."""
    if spring.at_rest:
        return spring
    return spring.jump_to(spring.target)
