"""Common interface for the interchangeable track drawing strategies."""
from __future__ import annotations

from typing import Sequence

from PyQt5 import QtCore, QtGui

from track_plotter.model.view_state import ViewState
from track_plotter.model.world_model import Track

TRACK_LINE_WIDTH = 2


class TrackRenderer:
    """Draw visible tracks onto a painter.

    Strategies differ only in how strokes are colored; geometry always comes
    from :meth:`ViewState.project_arrays` so switching strategies never moves
    content on screen.
    """

    name = "base"

    def __init__(self, line_width: int = TRACK_LINE_WIDTH) -> None:
        self._line_width = max(1, line_width)

    def draw(
        self, painter: QtGui.QPainter, tracks: Sequence[Track], view: ViewState
    ) -> None:
        painter.save()
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        painter.setBrush(QtCore.Qt.NoBrush)
        try:
            for track in tracks:
                if track.visible and track.points:
                    self.draw_track(painter, track, view)
        finally:
            painter.restore()

    def draw_track(
        self, painter: QtGui.QPainter, track: Track, view: ViewState
    ) -> None:
        raise NotImplementedError

    def _pen(self, color: QtGui.QColor) -> QtGui.QPen:
        pen = QtGui.QPen(color, self._line_width)
        pen.setCosmetic(True)
        pen.setCapStyle(QtCore.Qt.RoundCap)
        pen.setJoinStyle(QtCore.Qt.RoundJoin)
        return pen
