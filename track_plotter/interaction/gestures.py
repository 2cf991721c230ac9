"""Gesture state machine driving pan, zoom, pinch and coasting.

Every input event goes through :meth:`GestureController.handle`, the single
update function for the view. The current gesture is one of the tagged
states below; there are no scattered drag/pinch flags.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Tuple, Union

from track_plotter.interaction import (
    InputEvent,
    PointerMoved,
    PointerPressed,
    PointerReleased,
    PointerSource,
    TouchChanged,
    TouchPhase,
    WheelScrolled,
    ZoomRequested,
)
from track_plotter.interaction.momentum import (
    DECAY,
    FRAME_INTERVAL_MS,
    STOP_VELOCITY,
    FrameScheduler,
    MomentumTask,
)
from track_plotter.model.view_state import ViewState

logger = logging.getLogger(__name__)

# exp(120 * 0.002) ~= 1.27x per wheel notch.
WHEEL_ZOOM_RATE = 0.002
ZOOM_STEP = 1.2


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    source: PointerSource
    last_x: float
    last_y: float
    last_time_ms: float
    velocity: Tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class Pinching:
    distance: float
    mid_x: float
    mid_y: float


@dataclass(frozen=True)
class Coasting:
    task: MomentumTask


GestureState = Union[Idle, Dragging, Pinching, Coasting]


def _pinch_geometry(
    first: tuple[float, float], second: tuple[float, float]
) -> tuple[float, float, float]:
    distance = math.hypot(first[0] - second[0], first[1] - second[1])
    return distance, (first[0] + second[0]) / 2, (first[1] + second[1]) / 2


class GestureController:
    """Apply input events to a :class:`ViewState`."""

    def __init__(
        self,
        view: ViewState,
        scheduler: FrameScheduler,
        request_repaint: Callable[[], None],
        *,
        frame_interval_ms: int = FRAME_INTERVAL_MS,
        decay: float = DECAY,
        stop_velocity: float = STOP_VELOCITY,
    ) -> None:
        self._view = view
        self._scheduler = scheduler
        self._request_repaint = request_repaint
        self._frame_interval_ms = frame_interval_ms
        self._decay = decay
        self._stop_velocity = stop_velocity
        self._state: GestureState = Idle()

    @property
    def state(self) -> GestureState:
        return self._state

    def handle(self, event: InputEvent) -> bool:
        """Apply ``event``; return True when the view needs repainting."""
        if isinstance(event, PointerPressed):
            self.cancel_momentum()
            self._state = Dragging(
                PointerSource.MOUSE, event.x, event.y, event.timestamp_ms
            )
            return False
        if isinstance(event, PointerMoved):
            state = self._state
            if isinstance(state, Dragging) and state.source is PointerSource.MOUSE:
                return self._drag_to(state, event.x, event.y, event.timestamp_ms)
            return False
        if isinstance(event, PointerReleased):
            state = self._state
            if isinstance(state, Dragging) and state.source is PointerSource.MOUSE:
                self._state = Idle()
            return False
        if isinstance(event, WheelScrolled):
            self.cancel_momentum()
            factor = math.exp(event.angle_delta * WHEEL_ZOOM_RATE)
            return self._view.zoom_about(factor, event.x, event.y)
        if isinstance(event, ZoomRequested):
            self.cancel_momentum()
            return self._view.zoom_about(
                event.factor, self._view.width / 2, self._view.height / 2
            )
        if isinstance(event, TouchChanged):
            return self._handle_touch(event)
        return False

    def cancel_momentum(self) -> None:
        state = self._state
        if isinstance(state, Coasting):
            state.task.cancel()
            self._state = Idle()

    # ------------------------------------------------------------------
    # Touch handling
    # ------------------------------------------------------------------
    def _handle_touch(self, event: TouchChanged) -> bool:
        if event.phase is TouchPhase.BEGIN:
            self.cancel_momentum()
        if event.phase in (TouchPhase.END, TouchPhase.CANCEL) or not event.points:
            return self._release_touch()

        if len(event.points) == 1:
            x, y = event.points[0]
            state = self._state
            if isinstance(state, Dragging) and state.source is PointerSource.TOUCH:
                return self._drag_to(state, x, y, event.timestamp_ms)
            self.cancel_momentum()
            self._state = Dragging(PointerSource.TOUCH, x, y, event.timestamp_ms)
            return False

        distance, mid_x, mid_y = _pinch_geometry(event.points[0], event.points[1])
        state = self._state
        if not isinstance(state, Pinching):
            self.cancel_momentum()
            self._state = Pinching(distance, mid_x, mid_y)
            return False
        self._view.pan(mid_x - state.mid_x, mid_y - state.mid_y)
        if state.distance > 0:
            self._view.zoom_about(distance / state.distance, mid_x, mid_y)
        self._state = Pinching(distance, mid_x, mid_y)
        return True

    def _release_touch(self) -> bool:
        state = self._state
        if isinstance(state, Dragging) and state.source is PointerSource.TOUCH:
            vx, vy = state.velocity
            if abs(vx) > self._stop_velocity or abs(vy) > self._stop_velocity:
                self._start_momentum(state.velocity)
                return False
        if not isinstance(state, Coasting):
            self._state = Idle()
        return False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _drag_to(self, state: Dragging, x: float, y: float, timestamp_ms: float) -> bool:
        dx = x - state.last_x
        dy = y - state.last_y
        self._view.pan(dx, dy)
        elapsed = timestamp_ms - state.last_time_ms
        velocity = (dx / elapsed, dy / elapsed) if elapsed > 0 else state.velocity
        self._state = Dragging(state.source, x, y, timestamp_ms, velocity)
        return True

    def _start_momentum(self, velocity: tuple[float, float]) -> None:
        task = MomentumTask(
            self._view,
            velocity,
            self._scheduler,
            self._request_repaint,
            frame_interval_ms=self._frame_interval_ms,
            decay=self._decay,
            stop_velocity=self._stop_velocity,
            on_finished=self._momentum_finished,
        )
        self._state = Coasting(task)
        logger.debug("Coasting from velocity (%.3f, %.3f)", *velocity)
        task.start()

    def _momentum_finished(self, task: MomentumTask) -> None:
        state = self._state
        if isinstance(state, Coasting) and state.task is task:
            self._state = Idle()
