"""Flat-colored polyline strategy."""
from __future__ import annotations

from PyQt5 import QtCore, QtGui

from track_plotter.model.view_state import ViewState
from track_plotter.model.world_model import Track
from track_plotter.rendering.base.track_renderer import TrackRenderer
from track_plotter.rendering.colors import flat_rgb, to_qcolor
from track_plotter.rendering.primitives.mapping import to_path, track_screen_coordinates


class FlatTrackRenderer(TrackRenderer):
    """Stroke each track as one continuous path in its display color."""

    name = "flat"

    def draw_track(
        self, painter: QtGui.QPainter, track: Track, view: ViewState
    ) -> None:
        xs, ys = track_screen_coordinates(track.points, view)
        painter.setPen(self._pen(to_qcolor(flat_rgb(track.hue))))
        if len(xs) == 1:
            painter.drawPoint(QtCore.QPointF(float(xs[0]), float(ys[0])))
            return
        painter.drawPath(to_path(xs, ys))
