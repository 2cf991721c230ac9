"""Main window: plot canvas plus sidebar controls."""
from __future__ import annotations

import logging
from pathlib import Path

from PyQt5 import QtCore, QtWidgets

from track_plotter.config import PlotterSettings, save_settings
from track_plotter.rendering.renderer import ALTITUDE_MODE, FLAT_MODE
from track_plotter.widget.plot_widget import TrackPlotWidget
from track_plotter.widget.track_list_panel import TrackListPanel

logger = logging.getLogger(__name__)


class PlotterWindow(QtWidgets.QMainWindow):
    def __init__(
        self, settings: PlotterSettings, main_script_path: Path | None = None
    ) -> None:
        super().__init__()
        self._settings = settings
        self._main_script_path = main_script_path
        self.setWindowTitle(f"Track Plotter - {settings.plots_dir}")
        self.resize(1200, 800)

        self.plot = TrackPlotWidget(settings)
        self.panel = TrackListPanel()
        coordinator = self.plot.coordinator

        reload_button = QtWidgets.QPushButton("Reload")
        fit_button = QtWidgets.QPushButton("Fit")
        zoom_in_button = QtWidgets.QPushButton("Zoom in")
        zoom_out_button = QtWidgets.QPushButton("Zoom out")
        self._altitude_toggle = QtWidgets.QCheckBox("Color by altitude")
        self._altitude_toggle.setChecked(settings.color_mode == ALTITUDE_MODE)
        self._theme_button = QtWidgets.QPushButton()
        self._update_theme_label()

        zoom_row = QtWidgets.QHBoxLayout()
        zoom_row.addWidget(zoom_in_button)
        zoom_row.addWidget(zoom_out_button)

        sidebar = QtWidgets.QWidget()
        sidebar.setMinimumWidth(240)
        sidebar_layout = QtWidgets.QVBoxLayout(sidebar)
        sidebar_layout.addWidget(reload_button)
        sidebar_layout.addWidget(fit_button)
        sidebar_layout.addLayout(zoom_row)
        sidebar_layout.addWidget(self._altitude_toggle)
        sidebar_layout.addWidget(self._theme_button)
        sidebar_layout.addWidget(self.panel, 1)

        splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal)
        splitter.addWidget(sidebar)
        splitter.addWidget(self.plot)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        reload_button.clicked.connect(coordinator.reload)
        fit_button.clicked.connect(coordinator.fit_view)
        zoom_in_button.clicked.connect(lambda: coordinator.zoom_step(True))
        zoom_out_button.clicked.connect(lambda: coordinator.zoom_step(False))
        self._altitude_toggle.toggled.connect(self._on_altitude_toggled)
        self._theme_button.clicked.connect(self._toggle_theme)
        self.plot.tracksChanged.connect(self.panel.set_tracks)
        self.panel.visibilityToggled.connect(coordinator.set_visibility)

    def start(self) -> None:
        self.plot.coordinator.reload()

    def _on_altitude_toggled(self, checked: bool) -> None:
        self.plot.coordinator.set_color_mode(ALTITUDE_MODE if checked else FLAT_MODE)

    def _toggle_theme(self) -> None:
        coordinator = self.plot.coordinator
        coordinator.set_theme("light" if coordinator.theme == "dark" else "dark")
        self._update_theme_label()

    def _update_theme_label(self) -> None:
        label = "Light mode" if self._settings.theme == "dark" else "Dark mode"
        self._theme_button.setText(label)

    def closeEvent(self, event) -> None:  # noqa: D401 - Qt signature
        save_settings(self._settings, self._main_script_path)
        logger.info("Settings saved")
        super().closeEvent(event)
