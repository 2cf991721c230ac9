"""Coordinate grid pass drawn beneath the tracks."""
from __future__ import annotations

from PyQt5 import QtCore, QtGui

from track_plotter.model.view_state import ViewState
from track_plotter.rendering.grid import GRID_TARGET_PX, GridLines, grid_lines


class GridOverlay:
    def __init__(self, target_px: float = GRID_TARGET_PX) -> None:
        self.target_px = target_px

    def draw(
        self, painter: QtGui.QPainter, view: ViewState, color: QtGui.QColor
    ) -> GridLines | None:
        lines = grid_lines(view, self.target_px)
        if lines is None:
            return None
        painter.save()
        painter.setRenderHint(QtGui.QPainter.Antialiasing, False)
        pen = QtGui.QPen(color, 1)
        pen.setCosmetic(True)
        painter.setPen(pen)
        for lon in lines.lons:
            x, _ = view.project(0.0, lon)
            painter.drawLine(QtCore.QLineF(x, 0.0, x, float(view.height)))
        for lat in lines.lats:
            _, y = view.project(lat, 0.0)
            painter.drawLine(QtCore.QLineF(0.0, y, float(view.width), y))
        painter.restore()
        return lines
