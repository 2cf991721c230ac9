"""Non-widget coordinator for the plot canvas.

Owns the world model, view state, gesture controller and renderer, and is
the only place where they meet. Qt widgets forward resize, paint and input
events here; the coordinator asks for repaints through a callback.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from PyQt5 import QtCore, QtGui

from track_plotter.config import PlotterSettings
from track_plotter.interaction import InputEvent, ZoomRequested
from track_plotter.interaction.gestures import ZOOM_STEP, GestureController
from track_plotter.interaction.momentum import FrameScheduler, QtFrameScheduler
from track_plotter.model.view_state import ViewState
from track_plotter.model.world_model import Track, WorldModel
from track_plotter.rendering.colors import THEMES
from track_plotter.rendering.renderer import COLOR_MODES, PlotRenderer
from track_plotter.services.io_service import PlotDirectoryService
from track_plotter.services.load_task import TrackLoadSignals, TrackLoadTask

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Loading tracks..."
EMPTY_MESSAGE = "No tracks loaded."
LOAD_FAILED_MESSAGE = "Could not load tracks."


class PlotCoordinator:
    """Coordinate track data, the view and rendering for one canvas."""

    def __init__(
        self,
        settings: PlotterSettings,
        request_repaint: Callable[[], None],
        tracks_changed: Callable[[list[Track]], None] | None = None,
        *,
        scheduler: FrameScheduler | None = None,
        service: PlotDirectoryService | None = None,
    ) -> None:
        self._settings = settings
        self._request_repaint = request_repaint
        self._emit_tracks_changed = tracks_changed
        self._world = WorldModel()
        self._view = ViewState()
        self._renderer = PlotRenderer(
            theme=settings.theme, grid_spacing_px=settings.grid_spacing_px
        )
        self._gestures = GestureController(
            self._view,
            scheduler or QtFrameScheduler(),
            request_repaint,
            frame_interval_ms=settings.frame_interval_ms,
            decay=settings.momentum_decay,
            stop_velocity=settings.stop_velocity,
        )
        self._service = service or PlotDirectoryService(settings.plots_dir)
        self._fitted = False
        self._status_message = LOADING_MESSAGE
        self._reload_generation = 0
        self._pending_loads: dict[int, TrackLoadSignals] = {}
        self._world.tracksReplaced.connect(self._on_tracks_replaced)
        self._world.visibilityChanged.connect(self._on_visibility_changed)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def world(self) -> WorldModel:
        return self._world

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def gestures(self) -> GestureController:
        return self._gestures

    @property
    def renderer(self) -> PlotRenderer:
        return self._renderer

    @property
    def color_mode(self) -> str:
        return self._settings.color_mode

    @property
    def theme(self) -> str:
        return self._settings.theme

    @property
    def status_message(self) -> str:
        return self._status_message

    # ------------------------------------------------------------------
    # Canvas events
    # ------------------------------------------------------------------
    def handle_resize(self, width: int, height: int) -> None:
        self._view.resize(width, height)
        if not self._fitted:
            self._fit()
        self._request_repaint()

    def handle_event(self, event: InputEvent) -> bool:
        changed = self._gestures.handle(event)
        if changed:
            self._request_repaint()
        return changed

    def paint(self, painter: QtGui.QPainter) -> None:
        self._renderer.render(
            painter,
            self._world.tracks,
            self._view,
            self._settings.color_mode,
            self._status_message,
        )

    # ------------------------------------------------------------------
    # Track data
    # ------------------------------------------------------------------
    def apply_tracks(self, records: Iterable[object]) -> list[Track]:
        """Replace the track set; the first non-empty load fits the view."""
        return self._world.load(records)

    def _on_tracks_replaced(self) -> None:
        self._status_message = EMPTY_MESSAGE if self._world.is_empty() else ""
        if not self._fitted:
            self._fit()
        if self._emit_tracks_changed is not None:
            self._emit_tracks_changed(self._world.tracks)
        self._request_repaint()

    def _on_visibility_changed(self, _track_id: str, _visible: bool) -> None:
        self._request_repaint()

    def reload(self) -> int:
        """Start a background reload and return its generation."""
        self._reload_generation += 1
        generation = self._reload_generation
        task = TrackLoadTask(generation, self._service)
        task.signals.loaded.connect(self._handle_loaded)
        task.signals.failed.connect(self._handle_load_failed)
        self._pending_loads[generation] = task.signals
        logger.info("Starting track reload %s from %s", generation, self._service.plots_dir)
        QtCore.QThreadPool.globalInstance().start(task)
        return generation

    def _handle_loaded(self, generation: int, records: list) -> None:
        self._pending_loads.pop(generation, None)
        if generation != self._reload_generation:
            logger.info(
                "Applying reload %s after newer reload %s was requested",
                generation,
                self._reload_generation,
            )
        self.apply_tracks(records)

    def _handle_load_failed(self, generation: int, message: str) -> None:
        self._pending_loads.pop(generation, None)
        logger.warning("Track reload %s failed: %s", generation, message)
        if self._world.is_empty():
            self._status_message = LOAD_FAILED_MESSAGE
        self._request_repaint()

    # ------------------------------------------------------------------
    # View commands
    # ------------------------------------------------------------------
    def fit_view(self) -> bool:
        self._gestures.cancel_momentum()
        fitted = self._fit()
        self._request_repaint()
        return fitted

    def zoom_step(self, zoom_in: bool) -> bool:
        factor = ZOOM_STEP if zoom_in else 1 / ZOOM_STEP
        return self.handle_event(ZoomRequested(factor))

    def set_color_mode(self, mode: str) -> bool:
        if mode not in COLOR_MODES or mode == self._settings.color_mode:
            return False
        self._settings.color_mode = mode
        self._request_repaint()
        return True

    def set_theme(self, theme: str) -> bool:
        if theme not in THEMES or theme == self._settings.theme:
            return False
        self._settings.theme = theme
        self._renderer.theme = theme
        self._request_repaint()
        return True

    def set_visibility(self, track_id: str, visible: bool) -> bool:
        return self._world.set_visibility(track_id, visible)

    def _fit(self) -> bool:
        fitted = self._view.fit_to_bounds(self._world.compute_world_bounds())
        if fitted:
            self._fitted = True
        return fitted
