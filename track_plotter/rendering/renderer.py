"""Plot renderer: background, grid, tracks, legend.

This module belongs to the rendering layer. It turns world/view state into
QPainter calls without mutating the model (apart from the lazily cached
vertex buffers on each track) and without performing IO.
"""
from __future__ import annotations

from typing import Mapping, Sequence

from PyQt5 import QtCore, QtGui

from track_plotter.model.view_state import ViewState
from track_plotter.model.world_model import Track
from track_plotter.rendering.base.flat_renderer import FlatTrackRenderer
from track_plotter.rendering.base.track_renderer import TrackRenderer
from track_plotter.rendering.base.vertex_renderer import VertexColorTrackRenderer
from track_plotter.rendering.colors import DEFAULT_THEME, theme_colors
from track_plotter.rendering.grid import GRID_TARGET_PX
from track_plotter.rendering.overlays.grid_overlay import GridOverlay
from track_plotter.rendering.overlays.legend_overlay import AltitudeLegend

FLAT_MODE = "flat"
ALTITUDE_MODE = "altitude"
COLOR_MODES = (FLAT_MODE, ALTITUDE_MODE)


def default_strategies() -> dict[str, TrackRenderer]:
    return {
        FLAT_MODE: FlatTrackRenderer(),
        ALTITUDE_MODE: VertexColorTrackRenderer(),
    }


class PlotRenderer:
    """Paint the background first, then the grid, the tracks and the legend."""

    def __init__(
        self,
        *,
        theme: str = DEFAULT_THEME,
        grid_spacing_px: float = GRID_TARGET_PX,
        strategies: Mapping[str, TrackRenderer] | None = None,
    ) -> None:
        self.theme = theme
        self._grid = GridOverlay(grid_spacing_px)
        self._strategies = dict(strategies or default_strategies())
        self.legend = AltitudeLegend()

    def strategy(self, mode: str) -> TrackRenderer:
        return self._strategies.get(mode) or self._strategies[FLAT_MODE]

    def render(
        self,
        painter: QtGui.QPainter,
        tracks: Sequence[Track],
        view: ViewState,
        mode: str,
        status_message: str | None = None,
    ) -> None:
        colors = theme_colors(self.theme)
        viewport = QtCore.QRectF(0.0, 0.0, float(view.width), float(view.height))
        painter.fillRect(viewport, QtGui.QColor(colors.background))
        self._grid.draw(painter, view, QtGui.QColor(colors.grid))

        if not tracks:
            if status_message:
                painter.save()
                painter.setPen(QtGui.QColor(colors.text))
                painter.drawText(viewport, QtCore.Qt.AlignCenter, status_message)
                painter.restore()
            self.legend.update(tracks, mode)
            return

        self.strategy(mode).draw(painter, tracks, view)
        self.legend.update(tracks, mode)
        self.legend.draw(painter, view.width, view.height, colors)
