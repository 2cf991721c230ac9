"""Model-layer state for the loaded track set.

The world model owns every loaded track along with its derived bounds,
statistics and display color. Tracks are replaced wholesale on each load; the
only per-track mutations afterwards are visibility and the lazily attached
render buffer. Rendering and file IO live elsewhere.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from PyQt5 import QtCore

from track_plotter.model.geo_types import Bounds, GeoPoint, TrackStats, coerce_points
from track_plotter.model.track_stats import compute_bounds, compute_stats

logger = logging.getLogger(__name__)

FLAT_SATURATION = 100
FLAT_LIGHTNESS = 60


def track_hue(track_id: str) -> int:
    """Return a stable hue (0-359) for ``track_id`` using a DJB2 hash.

    The hash runs over UTF-16 code units so ids outside the BMP hash the same
    way a browser's ``charCodeAt`` loop would.
    """
    value = 5381
    encoded = track_id.encode("utf-16-le")
    for index in range(0, len(encoded), 2):
        code_unit = encoded[index] | (encoded[index + 1] << 8)
        value = (value * 33 + code_unit) & 0xFFFFFFFF
    return value % 360


@dataclass(eq=False)
class Track:
    """A loaded track. Identity matters: reloads produce new instances."""

    id: str
    points: list[GeoPoint]
    bounds: Bounds
    stats: TrackStats
    hue: int
    visible: bool = True
    render_buffer: Any = field(default=None, repr=False)

    @property
    def color(self) -> str:
        return f"hsl({self.hue}, {FLAT_SATURATION}%, {FLAT_LIGHTNESS}%)"

    @property
    def has_altitude(self) -> bool:
        return (
            self.stats.min_altitude is not None
            and self.stats.max_altitude is not None
        )

    def release_render_buffer(self) -> None:
        self.render_buffer = None


def _record_field(record: object, name: str, fallback: str | None = None) -> Any:
    if isinstance(record, Mapping):
        if name in record:
            return record[name]
        return record.get(fallback) if fallback else None
    value = getattr(record, name, None)
    if value is None and fallback:
        value = getattr(record, fallback, None)
    return value


def build_track(track_id: str, raw_points: Iterable[object]) -> Track | None:
    """Build a :class:`Track`, or ``None`` when no usable point remains."""
    points = coerce_points(raw_points)
    if not points:
        return None
    return Track(
        id=track_id,
        points=points,
        bounds=compute_bounds(points),
        stats=compute_stats(points),
        hue=track_hue(track_id),
    )


class WorldModel(QtCore.QObject):
    """Mutable, in-memory set of loaded tracks."""

    tracksReplaced = QtCore.pyqtSignal()
    visibilityChanged = QtCore.pyqtSignal(str, bool)

    def __init__(self) -> None:
        super().__init__()
        self._tracks: list[Track] = []
        self._by_id: dict[str, Track] = {}
        self._generation = 0

    @property
    def tracks(self) -> list[Track]:
        return list(self._tracks)

    @property
    def generation(self) -> int:
        return self._generation

    def is_empty(self) -> bool:
        return not self._tracks

    def track(self, track_id: str) -> Track | None:
        return self._by_id.get(track_id)

    def load(self, records: Iterable[object]) -> list[Track]:
        """Replace the track set with ``records``.

        Each record provides ``id`` and ``points`` (or ``coords``). Records
        without a usable point are skipped. Render buffers of the previous set
        are released; they are never carried over to the new instances.
        """
        tracks: list[Track] = []
        by_id: dict[str, Track] = {}
        for record in records:
            track_id = _record_field(record, "id")
            if track_id is None:
                continue
            track_id = str(track_id)
            raw_points = _record_field(record, "points", "coords") or []
            track = build_track(track_id, raw_points)
            if track is None:
                logger.info("Skipping empty track: %s", track_id)
                continue
            if track_id in by_id:
                logger.warning("Duplicate track id %s; keeping the last", track_id)
                tracks = [existing for existing in tracks if existing.id != track_id]
            tracks.append(track)
            by_id[track_id] = track

        for old in self._tracks:
            old.release_render_buffer()
        self._tracks = tracks
        self._by_id = by_id
        self._generation += 1
        logger.info(
            "Loaded %s tracks (generation %s)", len(tracks), self._generation
        )
        self.tracksReplaced.emit()
        return list(tracks)

    def compute_world_bounds(self) -> Bounds | None:
        if not self._tracks:
            return None
        bounds = self._tracks[0].bounds
        for track in self._tracks[1:]:
            bounds = bounds.union(track.bounds)
        return bounds

    def set_visibility(self, track_id: str, visible: bool) -> bool:
        track = self._by_id.get(track_id)
        if track is None or track.visible == visible:
            return False
        track.visible = visible
        self.visibilityChanged.emit(track_id, visible)
        return True


def visible_altitude_range(tracks: Iterable[Track]) -> tuple[float, float] | None:
    """Union of the altitude extremes of the visible tracks that have any."""
    minimum: float | None = None
    maximum: float | None = None
    for track in tracks:
        if not track.visible or not track.has_altitude:
            continue
        low = track.stats.min_altitude
        high = track.stats.max_altitude
        minimum = low if minimum is None else min(minimum, low)
        maximum = high if maximum is None else max(maximum, high)
    if minimum is None or maximum is None:
        return None
    return minimum, maximum
