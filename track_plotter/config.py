"""Configuration helpers for Track Plotter settings persistence."""
from __future__ import annotations

from configparser import ConfigParser, Error
from dataclasses import dataclass
import os
from pathlib import Path
import sys
from typing import Optional

from track_plotter.interaction.momentum import DECAY, FRAME_INTERVAL_MS, STOP_VELOCITY
from track_plotter.rendering.colors import THEMES
from track_plotter.rendering.grid import GRID_TARGET_PX
from track_plotter.rendering.renderer import ALTITUDE_MODE, COLOR_MODES

CONFIG_FILENAME = "track_plotter.ini"
DEFAULT_PLOTS_DIRNAME = "plots"
_SECTION = "plotter"
_MOMENTUM_SECTION = "momentum"


@dataclass
class PlotterSettings:
    plots_dir: Path
    color_mode: str = ALTITUDE_MODE
    theme: str = "dark"
    grid_spacing_px: float = float(GRID_TARGET_PX)
    momentum_decay: float = DECAY
    frame_interval_ms: int = FRAME_INTERVAL_MS
    stop_velocity: float = STOP_VELOCITY


def _config_dir(main_script_path: Optional[Path]) -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    if main_script_path is not None:
        return main_script_path.resolve().parent
    main_module = sys.modules.get("__main__")
    if main_module and getattr(main_module, "__file__", None):
        return Path(main_module.__file__).resolve().parent
    return Path.cwd()


def config_path(main_script_path: Optional[Path]) -> Path:
    return _config_dir(main_script_path) / CONFIG_FILENAME


def default_settings(main_script_path: Optional[Path]) -> PlotterSettings:
    return PlotterSettings(
        plots_dir=_config_dir(main_script_path) / DEFAULT_PLOTS_DIRNAME
    )


def _read_float(
    parser: ConfigParser, section: str, key: str, fallback: float, *, low: float, high: float
) -> float:
    try:
        value = parser.getfloat(section, key, fallback=fallback)
    except ValueError:
        return fallback
    if not (low <= value <= high):
        return fallback
    return value


def load_settings(main_script_path: Optional[Path]) -> PlotterSettings:
    settings = default_settings(main_script_path)
    ini_path = config_path(main_script_path)
    if not ini_path.exists():
        return settings
    parser = ConfigParser()
    try:
        with ini_path.open("r", encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, Error):
        return settings

    plots_dir = parser.get(_SECTION, "plots_dir", fallback=None)
    if plots_dir:
        candidate = Path(plots_dir).expanduser()
        if not candidate.is_absolute():
            candidate = ini_path.parent / candidate
        settings.plots_dir = candidate
    color_mode = parser.get(_SECTION, "color_mode", fallback=settings.color_mode)
    if color_mode in COLOR_MODES:
        settings.color_mode = color_mode
    theme = parser.get(_SECTION, "theme", fallback=settings.theme)
    if theme in THEMES:
        settings.theme = theme
    settings.grid_spacing_px = _read_float(
        parser, _SECTION, "grid_spacing_px", settings.grid_spacing_px, low=10.0, high=1000.0
    )
    settings.momentum_decay = _read_float(
        parser, _MOMENTUM_SECTION, "decay", settings.momentum_decay, low=0.0, high=0.999
    )
    settings.frame_interval_ms = int(
        _read_float(
            parser,
            _MOMENTUM_SECTION,
            "frame_interval_ms",
            settings.frame_interval_ms,
            low=1,
            high=1000,
        )
    )
    settings.stop_velocity = _read_float(
        parser, _MOMENTUM_SECTION, "stop_velocity", settings.stop_velocity, low=1e-6, high=10.0
    )
    return settings


def save_settings(settings: PlotterSettings, main_script_path: Optional[Path]) -> None:
    config = ConfigParser()
    ini_path = config_path(main_script_path)
    if ini_path.exists():
        try:
            with ini_path.open("r", encoding="utf-8") as handle:
                config.read_file(handle)
        except (OSError, Error):
            return
    config[_SECTION] = {
        "plots_dir": str(settings.plots_dir),
        "color_mode": settings.color_mode,
        "theme": settings.theme,
        "grid_spacing_px": str(settings.grid_spacing_px),
    }
    config[_MOMENTUM_SECTION] = {
        "decay": str(settings.momentum_decay),
        "frame_interval_ms": str(settings.frame_interval_ms),
        "stop_velocity": str(settings.stop_velocity),
    }
    try:
        with ini_path.open("w", encoding="utf-8") as handle:
            config.write(handle)
            handle.flush()
            os.fsync(handle.fileno())
    except OSError:
        return
