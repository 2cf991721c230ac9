"""Background loading of the plots directory."""
from __future__ import annotations

import logging

from PyQt5 import QtCore

from track_plotter.services.io_service import PlotDirectoryService

logger = logging.getLogger(__name__)


class TrackLoadSignals(QtCore.QObject):
    loaded = QtCore.pyqtSignal(int, list)
    failed = QtCore.pyqtSignal(int, str)


class TrackLoadTask(QtCore.QRunnable):
    """Read and parse every track file off the GUI thread.

    The full record list is emitted once, so receivers never see a partially
    parsed track set.
    """

    def __init__(self, generation: int, service: PlotDirectoryService) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self.signals = TrackLoadSignals()
        self._generation = generation
        self._service = service

    def run(self) -> None:
        try:
            records = self._service.load_all()
        except Exception as exc:  # pragma: no cover - worker thread boundary
            logger.exception("Track reload %s failed", self._generation)
            self.signals.failed.emit(self._generation, str(exc))
            return
        self.signals.loaded.emit(self._generation, records)
