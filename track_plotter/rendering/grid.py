"""Coordinate grid spacing and line placement."""
from __future__ import annotations

import math
from dataclasses import dataclass, field

from track_plotter.model.view_state import ViewState

GRID_TARGET_PX = 100
NICE_MULTIPLIERS = (1, 2, 5, 10)
# Guards against pathological views producing unbounded line lists.
MAX_GRID_LINES = 2000


@dataclass(frozen=True)
class GridLines:
    step: float
    lons: list[float] = field(default_factory=list)
    lats: list[float] = field(default_factory=list)


def grid_step(scale: float, target_px: float = GRID_TARGET_PX) -> float | None:
    """Return the smallest 1/2/5/10 x 10^k step of at least ``target_px`` on screen."""
    if not math.isfinite(scale) or scale <= 0 or target_px <= 0:
        return None
    raw = target_px / scale
    if not math.isfinite(raw) or raw <= 0:
        return None
    power = 10.0 ** math.floor(math.log10(raw))
    for multiplier in NICE_MULTIPLIERS:
        step = multiplier * power
        if raw <= step:
            return step
    return NICE_MULTIPLIERS[-1] * power


def grid_lines(view: ViewState, target_px: float = GRID_TARGET_PX) -> GridLines | None:
    """Return grid longitudes (vertical lines) and latitudes (horizontal)."""
    step = grid_step(view.scale, target_px)
    if step is None:
        return None
    visible = view.visible_bounds()
    first_lon = math.ceil(visible.min_lon / step)
    last_lon = math.floor(visible.max_lon / step)
    first_lat = math.floor(visible.max_lat / step)
    last_lat = math.ceil(visible.min_lat / step)
    if (
        last_lon - first_lon > MAX_GRID_LINES
        or first_lat - last_lat > MAX_GRID_LINES
    ):
        return GridLines(step)

    lons = [index * step for index in range(first_lon, last_lon + 1)]
    lats = [index * step for index in range(first_lat, last_lat - 1, -1)]
    return GridLines(step, lons, lats)
