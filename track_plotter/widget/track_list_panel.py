"""Sidebar listing loaded tracks with visibility toggles and details."""
from __future__ import annotations

from PyQt5 import QtCore, QtGui, QtWidgets

from track_plotter.model.track_summary import format_track_info
from track_plotter.model.world_model import Track
from track_plotter.rendering.colors import flat_rgb, to_qcolor

_ID_ROLE = QtCore.Qt.UserRole
_SWATCH_SIZE = 12


def _swatch_icon(track: Track) -> QtGui.QIcon:
    pixmap = QtGui.QPixmap(_SWATCH_SIZE, _SWATCH_SIZE)
    pixmap.fill(to_qcolor(flat_rgb(track.hue)))
    return QtGui.QIcon(pixmap)


class TrackListPanel(QtWidgets.QWidget):
    visibilityToggled = QtCore.pyqtSignal(str, bool)

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._tracks: dict[str, Track] = {}
        self._list = QtWidgets.QListWidget()
        self._info = QtWidgets.QLabel("Select a track above")
        self._info.setWordWrap(True)
        self._info.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(QtWidgets.QLabel("Tracks"))
        layout.addWidget(self._list, 1)
        layout.addWidget(self._info)

        self._list.itemChanged.connect(self._on_item_changed)
        self._list.currentItemChanged.connect(self._on_current_changed)

    def set_tracks(self, tracks: list[Track]) -> None:
        self._tracks = {track.id: track for track in tracks}
        self._list.blockSignals(True)
        self._list.clear()
        for track in tracks:
            item = QtWidgets.QListWidgetItem(_swatch_icon(track), track.id)
            item.setData(_ID_ROLE, track.id)
            item.setFlags(item.flags() | QtCore.Qt.ItemIsUserCheckable)
            item.setCheckState(QtCore.Qt.Checked if track.visible else QtCore.Qt.Unchecked)
            self._list.addItem(item)
        self._list.blockSignals(False)
        self._info.setText("Select a track above")

    def _on_item_changed(self, item: QtWidgets.QListWidgetItem) -> None:
        track_id = item.data(_ID_ROLE)
        self.visibilityToggled.emit(track_id, item.checkState() == QtCore.Qt.Checked)

    def _on_current_changed(
        self, current: QtWidgets.QListWidgetItem | None, _previous
    ) -> None:
        if current is None:
            return
        track = self._tracks.get(current.data(_ID_ROLE))
        if track is None:
            return
        self._info.setText("\n".join([track.id, *format_track_info(track)]))
