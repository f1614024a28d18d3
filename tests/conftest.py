# Headless Qt for the animator tests and a deterministic reduced-motion default.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.pop("SPRING_PREFER_REDUCED_MOTION", None)


@pytest.fixture(autouse=True)
def _reset_motion_preference():
    from spring_motion.reduced_motion import motion_preference

    motion_preference.set_reduced(False)
    yield
    motion_preference.set_reduced(False)
