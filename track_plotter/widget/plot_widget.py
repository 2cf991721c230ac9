"""Qt widget hosting the plot canvas.

The widget owns the coordinator and translates Qt paint, resize, mouse,
wheel and touch events into coordinator calls and input events. It holds no
plot state of its own.
"""
from __future__ import annotations

from PyQt5 import QtCore, QtGui, QtWidgets

from track_plotter.config import PlotterSettings
from track_plotter.interaction import (
    PointerMoved,
    PointerPressed,
    PointerReleased,
    TouchChanged,
    TouchPhase,
    WheelScrolled,
)
from track_plotter.plot_coordinator import PlotCoordinator

_TOUCH_PHASES = {
    QtCore.QEvent.TouchBegin: TouchPhase.BEGIN,
    QtCore.QEvent.TouchUpdate: TouchPhase.UPDATE,
    QtCore.QEvent.TouchEnd: TouchPhase.END,
    QtCore.QEvent.TouchCancel: TouchPhase.CANCEL,
}


class TrackPlotWidget(QtWidgets.QOpenGLWidget):
    """Canvas widget wiring paint and input events to the coordinator."""

    tracksChanged = QtCore.pyqtSignal(list)

    def __init__(self, settings: PlotterSettings) -> None:
        super().__init__()
        self.setMinimumSize(320, 240)
        self.setAutoFillBackground(False)
        self.setAttribute(QtCore.Qt.WA_AcceptTouchEvents, True)
        self.setCursor(QtCore.Qt.OpenHandCursor)
        self.coordinator = PlotCoordinator(
            settings,
            request_repaint=self.update,
            tracks_changed=self.tracksChanged.emit,
        )

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def paintGL(self) -> None:  # noqa: D401 - Qt signature
        painter = QtGui.QPainter(self)
        self.coordinator.paint(painter)
        painter.end()

    def resizeEvent(self, event) -> None:  # noqa: D401 - Qt signature
        self.coordinator.handle_resize(self.width(), self.height())
        super().resizeEvent(event)

    def wheelEvent(self, event: QtGui.QWheelEvent) -> None:  # noqa: D401 - Qt signature
        delta = event.angleDelta().y()
        if delta == 0:
            super().wheelEvent(event)
            return
        pos = event.pos()
        self.coordinator.handle_event(WheelScrolled(pos.x(), pos.y(), delta))
        event.accept()

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401 - Qt signature
        if event.button() != QtCore.Qt.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.localPos()
        self.coordinator.handle_event(PointerPressed(pos.x(), pos.y(), event.timestamp()))
        self.setCursor(QtCore.Qt.ClosedHandCursor)
        event.accept()

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401 - Qt signature
        pos = event.localPos()
        self.coordinator.handle_event(PointerMoved(pos.x(), pos.y(), event.timestamp()))
        event.accept()

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401 - Qt signature
        if event.button() != QtCore.Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.localPos()
        self.coordinator.handle_event(PointerReleased(pos.x(), pos.y(), event.timestamp()))
        self.setCursor(QtCore.Qt.OpenHandCursor)
        event.accept()

    def event(self, event: QtCore.QEvent) -> bool:  # noqa: D401 - Qt signature
        phase = _TOUCH_PHASES.get(event.type())
        if phase is None:
            return super().event(event)
        points = tuple(
            (point.pos().x(), point.pos().y())
            for point in event.touchPoints()
            if point.state() != QtCore.Qt.TouchPointReleased
        )
        self.coordinator.handle_event(TouchChanged(phase, points, event.timestamp()))
        event.accept()
        return True
