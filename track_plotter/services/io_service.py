"""Flat-file loading for the plots directory.

Each regular, non-hidden file in the directory is one track whose id is the
file name. Parsed points are cached per path and reused while the file's
modification time is unchanged. A file that cannot be read or parsed is
logged and skipped; it never aborts loading of the others.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from track_plotter.model.geo_types import GeoPoint
from track_plotter.parsing import FormatError, parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackRecord:
    id: str
    points: list[GeoPoint]


class PlotDirectoryService:
    """List, read and parse the track files of one directory."""

    def __init__(self, plots_dir: Path) -> None:
        self.plots_dir = Path(plots_dir)
        self._cache: dict[Path, tuple[float, list[GeoPoint]]] = {}
        self._lock = threading.Lock()

    def list_plot_files(self) -> list[Path]:
        if not self.plots_dir.is_dir():
            logger.warning("Plots directory not found: %s", self.plots_dir)
            return []
        try:
            files = [
                path
                for path in self.plots_dir.iterdir()
                if not path.name.startswith(".") and path.is_file()
            ]
        except OSError as exc:
            logger.warning("Cannot list plots directory %s: %s", self.plots_dir, exc)
            return []
        return sorted(files, key=lambda path: path.name)

    def read_points(self, path: Path) -> list[GeoPoint]:
        """Return the points of ``path``; failures yield ``[]``."""
        try:
            mtime = path.stat().st_mtime
        except OSError as exc:
            logger.warning("Cannot stat track file %s: %s", path, exc)
            return []
        with self._lock:
            cached = self._cache.get(path)
        if cached is not None and cached[0] == mtime:
            return cached[1]
        try:
            raw = path.read_bytes()
        except OSError as exc:
            logger.warning("Cannot read track file %s: %s", path, exc)
            return []
        try:
            points = parse(raw, source=path.name)
        except FormatError as exc:
            logger.info("Empty track skipped: %s", exc)
            points = []
        with self._lock:
            self._cache[path] = (mtime, points)
        return points

    def load_all(self) -> list[TrackRecord]:
        """Load every track file that yields at least one point."""
        records: list[TrackRecord] = []
        files = self.list_plot_files()
        for path in files:
            points = self.read_points(path)
            if points:
                records.append(TrackRecord(path.name, points))
        self._prune_cache(files)
        logger.info(
            "Loaded %s of %s track files from %s",
            len(records),
            len(files),
            self.plots_dir,
        )
        return records

    def _prune_cache(self, files: list[Path]) -> None:
        keep = set(files)
        with self._lock:
            for path in [path for path in self._cache if path not in keep]:
                del self._cache[path]
