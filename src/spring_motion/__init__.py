"""spring-motion public API.

Curated surface for hosts driving values with damped springs. The Qt
integration lives in ``spring_motion.animator`` and is not imported here so
the core stays usable without PyQt6 loaded.
"""

from __future__ import annotations

from .errors import InvalidParameterError  # noqa: F401
from .spring import (  # noqa: F401
    Spring,
    create,
    set_target,
    jump_to,
    animate,
    value_of,
    target_of,
    is_at_rest,
)
from .driver import SpringDriver  # noqa: F401
from .sampling import (  # noqa: F401
    sample_trajectory,
    easing_samples,
    settle_duration_ms,
    is_overshooting,
    peak_overshoot,
)
from .reduced_motion import (  # noqa: F401
    MotionPreference,
    motion_preference,
    collapse,
)

__version__ = "0.1.0"
