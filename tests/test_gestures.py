import math

import pytest

pytest.importorskip("PyQt5")

from track_plotter.interaction import (
    PointerMoved,
    PointerPressed,
    PointerReleased,
    TouchChanged,
    TouchPhase,
    WheelScrolled,
    ZoomRequested,
)
from track_plotter.interaction.gestures import (
    WHEEL_ZOOM_RATE,
    Coasting,
    Dragging,
    GestureController,
    Idle,
    Pinching,
)
from track_plotter.interaction.momentum import MomentumTask
from track_plotter.model.view_state import ViewState


class ManualScheduler:
    """Frame scheduler that runs callbacks only when asked to."""

    def __init__(self) -> None:
        self.pending = []
        self.cancelled = []

    def schedule(self, callback, delay_ms):
        handle = object()
        self.pending.append((handle, callback, delay_ms))
        return handle

    def cancel(self, handle) -> None:
        self.cancelled.append(handle)
        self.pending = [entry for entry in self.pending if entry[0] is not handle]

    def run_next(self) -> None:
        _handle, callback, _delay = self.pending.pop(0)
        callback()

    def run_all(self, limit: int = 10_000) -> int:
        frames = 0
        while self.pending and frames < limit:
            self.run_next()
            frames += 1
        return frames


@pytest.fixture
def view():
    return ViewState(scale=100.0, origin_lon=0.0, origin_lat=10.0, width=800, height=600)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def repaints():
    return []


@pytest.fixture
def controller(view, scheduler, repaints):
    return GestureController(view, scheduler, lambda: repaints.append(1))


def _touch(phase, *points, t=0.0):
    return TouchChanged(phase, tuple(points), t)


def _start_coasting(controller):
    controller.handle(_touch(TouchPhase.BEGIN, (100.0, 100.0), t=0.0))
    controller.handle(_touch(TouchPhase.UPDATE, (110.0, 100.0), t=10.0))
    controller.handle(_touch(TouchPhase.END, t=12.0))


def test_mouse_drag_pans_and_release_does_not_coast(controller, view, scheduler) -> None:
    anchor = view.unproject(100.0, 100.0)

    controller.handle(PointerPressed(100.0, 100.0, 0.0))
    assert controller.handle(PointerMoved(130.0, 90.0, 20.0))
    controller.handle(PointerReleased(130.0, 90.0, 25.0))

    assert view.project(*anchor) == pytest.approx((130.0, 90.0))
    assert isinstance(controller.state, Idle)
    assert scheduler.pending == []


def test_mouse_move_without_press_is_ignored(controller, view) -> None:
    before = (view.origin_lon, view.origin_lat)

    assert not controller.handle(PointerMoved(50.0, 50.0, 5.0))

    assert (view.origin_lon, view.origin_lat) == before


def test_drag_tracks_velocity_in_pixels_per_ms(controller) -> None:
    controller.handle(_touch(TouchPhase.BEGIN, (0.0, 0.0), t=100.0))
    controller.handle(_touch(TouchPhase.UPDATE, (20.0, -10.0), t=110.0))

    state = controller.state
    assert isinstance(state, Dragging)
    assert state.velocity == pytest.approx((2.0, -1.0))


def test_touch_release_coasts_with_decaying_velocity(controller, view, scheduler, repaints) -> None:
    _start_coasting(controller)

    state = controller.state
    assert isinstance(state, Coasting)
    task = state.task
    assert task.velocity == pytest.approx((1.0, 0.0))
    origin_after_drag = view.origin_lon

    scheduler.run_next()

    assert task.velocity == pytest.approx((0.95, 0.0))
    assert view.origin_lon == pytest.approx(origin_after_drag - 16.0 / view.scale)
    assert repaints == [1]


def test_coasting_stops_below_threshold(controller, view, scheduler, repaints) -> None:
    _start_coasting(controller)
    origin_after_drag = view.origin_lon

    frames = scheduler.run_all()

    expected_frames = math.ceil(math.log(0.01) / math.log(0.95))
    assert frames == expected_frames
    assert len(repaints) == frames
    assert isinstance(controller.state, Idle)
    travelled_px = (origin_after_drag - view.origin_lon) * view.scale
    assert travelled_px == pytest.approx(16.0 * (1 - 0.95**frames) / (1 - 0.95))


def test_new_touch_cancels_coasting(controller, scheduler) -> None:
    _start_coasting(controller)
    task = controller.state.task
    scheduler.run_next()

    controller.handle(_touch(TouchPhase.BEGIN, (300.0, 300.0), t=50.0))

    assert task.cancelled
    assert not task.active
    assert scheduler.pending == []
    assert isinstance(controller.state, Dragging)


def test_wheel_and_press_cancel_coasting(controller, scheduler) -> None:
    _start_coasting(controller)
    task = controller.state.task

    controller.handle(WheelScrolled(10.0, 10.0, 120))

    assert task.cancelled
    assert isinstance(controller.state, Idle)

    _start_coasting(controller)
    task = controller.state.task
    controller.handle(PointerPressed(0.0, 0.0, 99.0))
    assert task.cancelled
    assert scheduler.pending == []


def test_slow_touch_release_does_not_coast(controller, scheduler) -> None:
    controller.handle(_touch(TouchPhase.BEGIN, (100.0, 100.0), t=0.0))
    controller.handle(_touch(TouchPhase.UPDATE, (100.05, 100.0), t=100.0))
    controller.handle(_touch(TouchPhase.END, t=110.0))

    assert isinstance(controller.state, Idle)
    assert scheduler.pending == []


def test_wheel_zooms_about_cursor(controller, view) -> None:
    anchor = view.unproject(250.0, 120.0)

    assert controller.handle(WheelScrolled(250.0, 120.0, 120))

    assert view.scale == pytest.approx(100.0 * math.exp(120 * WHEEL_ZOOM_RATE))
    assert view.project(*anchor) == pytest.approx((250.0, 120.0))


def test_wheel_down_zooms_out(controller, view) -> None:
    controller.handle(WheelScrolled(400.0, 300.0, -120))

    assert view.scale < 100.0


def test_zoom_request_uses_viewport_center(controller, view) -> None:
    center = view.center()

    controller.handle(ZoomRequested(2.0))

    assert view.scale == pytest.approx(200.0)
    assert view.center() == pytest.approx(center)


def test_pinch_zooms_about_midpoint(controller, view) -> None:
    anchor = view.unproject(400.0, 300.0)

    assert not controller.handle(_touch(TouchPhase.BEGIN, (300.0, 300.0), (500.0, 300.0)))
    assert isinstance(controller.state, Pinching)
    assert controller.handle(_touch(TouchPhase.UPDATE, (250.0, 300.0), (550.0, 300.0), t=16.0))

    assert view.scale == pytest.approx(150.0)
    assert view.project(*anchor) == pytest.approx((400.0, 300.0))


def test_pinch_midpoint_drift_pans(controller, view) -> None:
    anchor = view.unproject(400.0, 300.0)

    controller.handle(_touch(TouchPhase.BEGIN, (300.0, 300.0), (500.0, 300.0)))
    controller.handle(_touch(TouchPhase.UPDATE, (320.0, 310.0), (520.0, 310.0), t=16.0))

    assert view.scale == pytest.approx(100.0)
    assert view.project(*anchor) == pytest.approx((420.0, 310.0))


def test_pinch_dropping_to_one_finger_drags(controller) -> None:
    controller.handle(_touch(TouchPhase.BEGIN, (300.0, 300.0), (500.0, 300.0)))

    controller.handle(_touch(TouchPhase.UPDATE, (300.0, 300.0), t=16.0))

    state = controller.state
    assert isinstance(state, Dragging)
    assert (state.last_x, state.last_y) == (300.0, 300.0)


def test_touch_cancel_returns_to_idle_without_momentum(controller, scheduler) -> None:
    controller.handle(_touch(TouchPhase.BEGIN, (300.0, 300.0), (500.0, 300.0)))

    controller.handle(_touch(TouchPhase.CANCEL, t=5.0))

    assert isinstance(controller.state, Idle)
    assert scheduler.pending == []


def test_momentum_task_cancel_ignores_queued_tick(view, scheduler) -> None:
    frames = []
    task = MomentumTask(view, (1.0, 1.0), scheduler, lambda: frames.append(1))
    task.start()
    _handle, callback, delay = scheduler.pending[0]
    assert delay == 16

    task.cancel()
    callback()

    assert frames == []
    assert scheduler.pending == []


def test_zoom_request_cancels_coasting(controller, scheduler) -> None:
    _start_coasting(controller)
    task = controller.state.task

    controller.handle(ZoomRequested(1.2))

    assert task.cancelled
    assert isinstance(controller.state, Idle)
    assert scheduler.pending == []


def test_pinch_from_coincident_fingers_keeps_scale_finite(controller, view) -> None:
    controller.handle(_touch(TouchPhase.BEGIN, (400.0, 300.0), (400.0, 300.0)))

    controller.handle(_touch(TouchPhase.UPDATE, (350.0, 300.0), (450.0, 300.0), t=16.0))

    assert math.isfinite(view.scale)
    assert view.scale == pytest.approx(100.0)
    assert controller.state == Pinching(100.0, 400.0, 300.0)

    controller.handle(_touch(TouchPhase.UPDATE, (300.0, 300.0), (500.0, 300.0), t=32.0))

    assert view.scale == pytest.approx(200.0)
