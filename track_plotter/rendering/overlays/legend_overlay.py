"""Altitude color-scale legend."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from PyQt5 import QtCore, QtGui

from track_plotter.model.world_model import Track, visible_altitude_range
from track_plotter.rendering.colors import (
    ALTITUDE_LIGHTNESS,
    ALTITUDE_SATURATION,
    COLD_HUE,
    HOT_HUE,
    ThemeColors,
    hsl_to_rgb,
    to_qcolor,
)

ALTITUDE_MODE = "altitude"
_BAR_WIDTH = 140
_BAR_HEIGHT = 10
_MARGIN = 12
_GRADIENT_STOPS = 6


@dataclass(frozen=True)
class LegendRange:
    minimum: float
    maximum: float

    @property
    def min_label(self) -> str:
        return f"{self.minimum:.1f} m"

    @property
    def max_label(self) -> str:
        return f"{self.maximum:.1f} m"


class AltitudeLegend:
    """Track the current altitude scale and draw it.

    The range is recomputed only when the color mode or the visible track
    set changes; reloaded tracks are new instances and count as a change.
    """

    def __init__(self) -> None:
        self._key: tuple | None = None
        self._range: LegendRange | None = None
        self.recomputations = 0

    @property
    def current(self) -> LegendRange | None:
        return self._range

    def update(self, tracks: Sequence[Track], mode: str) -> LegendRange | None:
        key = (mode, tuple((track.id, id(track)) for track in tracks if track.visible))
        if key == self._key:
            return self._range
        self._key = key
        self.recomputations += 1
        if mode != ALTITUDE_MODE:
            self._range = None
            return None
        extremes = visible_altitude_range(tracks)
        self._range = LegendRange(*extremes) if extremes else None
        return self._range

    def draw(
        self,
        painter: QtGui.QPainter,
        width: int,
        height: int,
        theme: ThemeColors,
    ) -> None:
        legend = self._range
        if legend is None:
            return
        metrics = painter.fontMetrics()
        text_height = metrics.height()
        box = QtCore.QRectF(
            width - _BAR_WIDTH - 3 * _MARGIN,
            height - _BAR_HEIGHT - text_height - 3 * _MARGIN,
            _BAR_WIDTH + 2 * _MARGIN,
            _BAR_HEIGHT + text_height + 2 * _MARGIN,
        )
        bar = QtCore.QRectF(
            box.left() + _MARGIN, box.top() + _MARGIN, _BAR_WIDTH, _BAR_HEIGHT
        )
        gradient = QtGui.QLinearGradient(bar.topLeft(), bar.topRight())
        for index in range(_GRADIENT_STOPS):
            ratio = index / (_GRADIENT_STOPS - 1)
            hue = COLD_HUE + (HOT_HUE - COLD_HUE) * ratio
            gradient.setColorAt(
                ratio,
                to_qcolor(hsl_to_rgb(hue, ALTITUDE_SATURATION, ALTITUDE_LIGHTNESS)),
            )

        painter.save()
        painter.setPen(QtCore.Qt.NoPen)
        painter.setBrush(QtGui.QColor(theme.legend_background))
        painter.drawRoundedRect(box, 4, 4)
        painter.setBrush(QtGui.QBrush(gradient))
        painter.drawRect(bar)
        painter.setPen(QtGui.QColor(theme.text))
        text_top = bar.bottom() + 2
        painter.drawText(
            QtCore.QRectF(bar.left(), text_top, _BAR_WIDTH, text_height),
            QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter,
            legend.min_label,
        )
        painter.drawText(
            QtCore.QRectF(bar.left(), text_top, _BAR_WIDTH, text_height),
            QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter,
            legend.max_label,
        )
        painter.restore()
