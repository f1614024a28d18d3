"""Global configuration and constants for spring integration and driving."""

from __future__ import annotations

import os
from typing import Final

# Deltas arrive in milliseconds; the physics runs in seconds.
MS_PER_SECOND: Final = 1000.0

# Sub-stepping. A single animate() call never integrates more than
# MAX_SUBSTEPS * MAX_SUBSTEP_MS of simulated time.
MAX_SUBSTEP_MS: Final = 1.0
MAX_SUBSTEPS: Final = 1000

# Equilibrium detection (absolute, independent of strength/dampness).
# Tuned for value ranges in the tens to hundreds; rescale tiny ranges downstream.
DISPLACEMENT_EPSILON: Final = 1.0
VELOCITY_EPSILON: Final = 5.0  # units per second

# Travel distance used when sampling normalized easing curves.
EASING_RANGE: Final = 1000.0

DEFAULT_FPS: Final = 60
DEFAULT_FRAME_MS: Final = 1000.0 / DEFAULT_FPS


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


FRAME_INTERVAL_MS: Final = _env_int("SPRING_FRAME_INTERVAL_MS", 16)

# Truthy values ("1", "true", "yes", "on") start the process with reduced motion.
REDUCED_MOTION_ENV: Final = "SPRING_PREFER_REDUCED_MOTION"
