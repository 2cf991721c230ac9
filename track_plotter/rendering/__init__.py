"""Rendering helpers for the plot canvas."""
from __future__ import annotations

from track_plotter.rendering.colors import (
    altitude_to_rgb,
    hsl_to_rgb,
    theme_colors,
)
from track_plotter.rendering.grid import GRID_TARGET_PX, GridLines, grid_lines, grid_step
from track_plotter.rendering.renderer import (
    ALTITUDE_MODE,
    COLOR_MODES,
    FLAT_MODE,
    PlotRenderer,
)

__all__ = [
    "ALTITUDE_MODE",
    "COLOR_MODES",
    "FLAT_MODE",
    "GRID_TARGET_PX",
    "GridLines",
    "PlotRenderer",
    "altitude_to_rgb",
    "grid_lines",
    "grid_step",
    "hsl_to_rgb",
    "theme_colors",
]
