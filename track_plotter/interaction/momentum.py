"""Post-drag coasting as a cancellable scheduled task."""
from __future__ import annotations

import logging
from typing import Callable, Protocol

from PyQt5 import QtCore

from track_plotter.model.view_state import ViewState

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16
DECAY = 0.95
STOP_VELOCITY = 0.01


class FrameScheduler(Protocol):
    def schedule(self, callback: Callable[[], None], delay_ms: int) -> object:  # pragma: no cover - protocol only
        ...

    def cancel(self, handle: object) -> None:  # pragma: no cover - protocol only
        ...


class QtFrameScheduler:
    """Schedule frame callbacks on single-shot ``QTimer`` instances."""

    def __init__(self) -> None:
        self._timers: set[QtCore.QTimer] = set()

    def schedule(self, callback: Callable[[], None], delay_ms: int) -> QtCore.QTimer:
        timer = QtCore.QTimer()
        timer.setSingleShot(True)
        timer.setTimerType(QtCore.Qt.PreciseTimer)

        def _fire() -> None:
            self._timers.discard(timer)
            timer.deleteLater()
            callback()

        timer.timeout.connect(_fire)
        self._timers.add(timer)
        timer.start(delay_ms)
        return timer

    def cancel(self, handle: object) -> None:
        if handle in self._timers:
            self._timers.discard(handle)
            handle.stop()
            handle.deleteLater()


class MomentumTask:
    """Pan the view with a decaying velocity until it comes to rest.

    Velocity is in pixels per millisecond. Each tick pans by
    ``velocity * frame_interval_ms`` pixels and then decays the velocity; the
    task reschedules itself only while either component is above
    ``stop_velocity``. :meth:`cancel` both stops the pending timer and marks
    the task so a tick that is already queued does nothing.
    """

    def __init__(
        self,
        view: ViewState,
        velocity: tuple[float, float],
        scheduler: FrameScheduler,
        on_frame: Callable[[], None],
        *,
        frame_interval_ms: int = FRAME_INTERVAL_MS,
        decay: float = DECAY,
        stop_velocity: float = STOP_VELOCITY,
        on_finished: Callable[["MomentumTask"], None] | None = None,
    ) -> None:
        self._view = view
        self._vx, self._vy = velocity
        self._scheduler = scheduler
        self._on_frame = on_frame
        self._frame_interval_ms = frame_interval_ms
        self._decay = decay
        self._stop_velocity = stop_velocity
        self._on_finished = on_finished
        self._handle: object | None = None
        self._cancelled = False
        self._finished = False

    @property
    def velocity(self) -> tuple[float, float]:
        return self._vx, self._vy

    @property
    def active(self) -> bool:
        return not self._cancelled and not self._finished

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        if not self.active:
            return
        self._handle = self._scheduler.schedule(self._tick, self._frame_interval_ms)

    def cancel(self) -> None:
        if not self.active:
            return
        self._cancelled = True
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None
        logger.debug("Momentum cancelled at velocity (%.3f, %.3f)", self._vx, self._vy)

    def _tick(self) -> None:
        self._handle = None
        if not self.active:
            return
        self._view.pan(
            self._vx * self._frame_interval_ms, self._vy * self._frame_interval_ms
        )
        self._vx *= self._decay
        self._vy *= self._decay
        self._on_frame()
        if abs(self._vx) > self._stop_velocity or abs(self._vy) > self._stop_velocity:
            self._handle = self._scheduler.schedule(
                self._tick, self._frame_interval_ms
            )
            return
        self._finished = True
        if self._on_finished is not None:
            self._on_finished(self)
