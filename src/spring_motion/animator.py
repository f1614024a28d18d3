"""Qt integration for springs.

``SpringAnimator`` drives a ``SpringDriver`` from a ``QTimer`` and measures
real elapsed time with ``QElapsedTimer``, so irregular timer delivery is
absorbed by the spring's sub-stepping. The timer only runs while the spring
moves.

Signals:
 - valueChanged(float): emitted on every value change
 - settled(float): emitted once the spring comes to rest

Usage::
    anim = SpringAnimator(Spring.create(170, 1.0), parent=widget)
    anim.valueChanged.connect(lambda v: widget.setFixedWidth(int(v)))
    anim.set_target(320)
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QElapsedTimer, QObject, QTimer, pyqtSignal

from .driver import SpringDriver
from .settings import FRAME_INTERVAL_MS
from .spring import Spring

__all__ = ["SpringAnimator"]

log = logging.getLogger(__name__)


class SpringAnimator(QObject):
    valueChanged = pyqtSignal(float)
    settled = pyqtSignal(float)

    def __init__(
        self,
        spring: Spring,
        parent: Optional[QObject] = None,
        *,
        interval_ms: int = FRAME_INTERVAL_MS,
        reduced_motion: Optional[bool] = None,
    ):
        super().__init__(parent)
        self._driver = SpringDriver(
            spring,
            name=f"animator[{id(self):x}]",
            reduced_motion=reduced_motion,
        )
        self._driver.subscribe_value(self.valueChanged.emit)
        self._driver.subscribe_rest(self.settled.emit)
        self._clock = QElapsedTimer()
        self._timer = QTimer(self)
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self._on_tick)  # type: ignore[attr-defined]
        self._sync_timer()

    # Queries -----------------------------------------------------------
    @property
    def driver(self) -> SpringDriver:
        return self._driver

    def spring(self) -> Spring:
        return self._driver.spring

    def value(self) -> float:
        return self._driver.value

    def is_active(self) -> bool:
        return self._timer.isActive()

    # Commands ----------------------------------------------------------
    def set_target(self, target: float) -> None:
        self._driver.set_target(target)
        self._sync_timer()

    def jump_to(self, value: float) -> None:
        self._driver.jump_to(value)
        self._sync_timer()

    def stop(self) -> None:
        """Stop ticking without touching the spring (e.g. widget teardown)."""
        self._timer.stop()

    # Internal ----------------------------------------------------------
    def _on_tick(self) -> None:
        self._driver.tick(float(self._clock.restart()))
        self._sync_timer()

    def _sync_timer(self) -> None:
        if self._driver.running and not self._timer.isActive():
            self._clock.start()
            self._timer.start()
            log.debug("spring animator timer started")
        elif not self._driver.running and self._timer.isActive():
            self._timer.stop()
            log.debug("spring animator timer stopped")
