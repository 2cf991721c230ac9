"""Per-vertex colored line strip strategy used for altitude coloring.

Each track gets a vertex buffer built once and cached on
``Track.render_buffer``: positions as (lon, lat), a color per vertex and a
color per segment. A segment takes the color of its later vertex, or of the
earlier one when the later vertex has no altitude, so color changes follow
the path. Tracks without any altitude keep their flat color.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PyQt5 import QtCore, QtGui

from track_plotter.model.view_state import ViewState
from track_plotter.model.world_model import Track
from track_plotter.rendering.base.track_renderer import TrackRenderer
from track_plotter.rendering.colors import altitude_colors, flat_rgb, to_qcolor
from track_plotter.rendering.primitives.mapping import to_polygon


@dataclass(frozen=True)
class VertexBuffer:
    track_id: str
    positions: np.ndarray
    vertex_colors: np.ndarray
    segment_colors: np.ndarray

    @property
    def count(self) -> int:
        return int(self.positions.shape[0])


def build_vertex_buffer(track: Track) -> VertexBuffer:
    count = len(track.points)
    positions = np.empty((count, 2), dtype=np.float64)
    altitudes = np.full(count, np.nan, dtype=np.float64)
    for index, point in enumerate(track.points):
        positions[index] = (point.lon, point.lat)
        if point.altitude is not None:
            altitudes[index] = point.altitude

    flat = np.asarray(flat_rgb(track.hue), dtype=np.float32)
    vertex_colors = np.tile(flat, (count, 1))
    has_altitude = np.isfinite(altitudes)
    if track.has_altitude:
        colors = altitude_colors(
            altitudes, track.stats.min_altitude, track.stats.max_altitude
        )
        vertex_colors[has_altitude] = colors[has_altitude]

    if count > 1:
        segment_colors = np.where(
            has_altitude[1:, None], vertex_colors[1:], vertex_colors[:-1]
        ).astype(np.float32)
    else:
        segment_colors = np.empty((0, 3), dtype=np.float32)
    return VertexBuffer(track.id, positions, vertex_colors, segment_colors)


def color_runs(segment_colors: np.ndarray) -> list[tuple[int, int]]:
    """Split segments into ``[start, stop)`` runs sharing one color."""
    count = segment_colors.shape[0]
    if count == 0:
        return []
    changes = np.flatnonzero(np.any(segment_colors[1:] != segment_colors[:-1], axis=1)) + 1
    bounds = [0, *changes.tolist(), count]
    return list(zip(bounds[:-1], bounds[1:]))


class VertexColorTrackRenderer(TrackRenderer):
    """Stroke each segment with its interpolated altitude color."""

    name = "altitude"

    def __init__(self, line_width: int = 2) -> None:
        super().__init__(line_width)
        self.buffers_built = 0

    def buffer_for(self, track: Track) -> VertexBuffer:
        buffer = track.render_buffer
        if not isinstance(buffer, VertexBuffer) or buffer.track_id != track.id:
            buffer = build_vertex_buffer(track)
            track.render_buffer = buffer
            self.buffers_built += 1
        return buffer

    def draw_track(
        self, painter: QtGui.QPainter, track: Track, view: ViewState
    ) -> None:
        buffer = self.buffer_for(track)
        xs, ys = view.project_arrays(buffer.positions[:, 1], buffer.positions[:, 0])
        if buffer.count == 1:
            painter.setPen(self._pen(to_qcolor(buffer.vertex_colors[0])))
            painter.drawPoint(QtCore.QPointF(float(xs[0]), float(ys[0])))
            return
        for start, stop in color_runs(buffer.segment_colors):
            painter.setPen(self._pen(to_qcolor(buffer.segment_colors[start])))
            painter.drawPolyline(to_polygon(xs[start:stop + 1], ys[start:stop + 1]))
