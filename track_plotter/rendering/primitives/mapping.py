"""Mapping helpers from track geometry to screen-space Qt primitives."""
from __future__ import annotations

from typing import Sequence

import numpy as np
from PyQt5 import QtCore, QtGui

from track_plotter.model.geo_types import GeoPoint
from track_plotter.model.view_state import ViewState


def track_screen_coordinates(
    points: Sequence[GeoPoint], view: ViewState
) -> tuple[np.ndarray, np.ndarray]:
    """Project ``points`` into screen space in path order."""
    lats = np.fromiter((point.lat for point in points), dtype=np.float64, count=len(points))
    lons = np.fromiter((point.lon for point in points), dtype=np.float64, count=len(points))
    return view.project_arrays(lats, lons)


def to_polygon(xs: np.ndarray, ys: np.ndarray) -> QtGui.QPolygonF:
    return QtGui.QPolygonF(
        [QtCore.QPointF(float(x), float(y)) for x, y in zip(xs, ys)]
    )


def to_path(xs: np.ndarray, ys: np.ndarray) -> QtGui.QPainterPath:
    path = QtGui.QPainterPath()
    if len(xs) == 0:
        return path
    path.moveTo(float(xs[0]), float(ys[0]))
    for x, y in zip(xs[1:], ys[1:]):
        path.lineTo(float(x), float(y))
    return path
