"""Geographic-to-screen view state for the plot canvas.

The view is an affine map with one scale for both axes (pixels per degree)
and an origin naming the geographic coordinate under the top-left pixel:

    x = (lon - origin_lon) * scale
    y = (origin_lat - lat) * scale

Screen Y grows downward while latitude grows northward, hence the inverted
latitude term. The state is transient and owned by the plot coordinator.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from track_plotter.model.geo_types import Bounds

# Substituted for a zero lat/lon span so single points and straight
# north-south or east-west tracks can still be fitted.
MIN_RANGE_DEG = 1e-6


@dataclass
class ViewState:
    scale: float = 1.0
    origin_lon: float = 0.0
    origin_lat: float = 0.0
    width: int = 0
    height: int = 0

    def project(self, lat: float, lon: float) -> tuple[float, float]:
        return (
            (lon - self.origin_lon) * self.scale,
            (self.origin_lat - lat) * self.scale,
        )

    def unproject(self, x: float, y: float) -> tuple[float, float]:
        """Return the (lat, lon) under screen pixel (x, y)."""
        return (
            self.origin_lat - y / self.scale,
            self.origin_lon + x / self.scale,
        )

    def project_arrays(
        self, lats: Sequence[float] | np.ndarray, lons: Sequence[float] | np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Vectorized :meth:`project` shared by every renderer."""
        lat_array = np.asarray(lats, dtype=np.float64)
        lon_array = np.asarray(lons, dtype=np.float64)
        xs = (lon_array - self.origin_lon) * self.scale
        ys = (self.origin_lat - lat_array) * self.scale
        return xs, ys

    def center(self) -> tuple[float, float]:
        return self.unproject(self.width / 2, self.height / 2)

    def visible_bounds(self) -> Bounds:
        bottom_lat, right_lon = self.unproject(self.width, self.height)
        return Bounds(
            min_lat=bottom_lat,
            max_lat=self.origin_lat,
            min_lon=self.origin_lon,
            max_lon=right_lon,
        )

    def center_on(self, lat: float, lon: float) -> None:
        self.origin_lon = lon - self.width / (2 * self.scale)
        self.origin_lat = lat + self.height / (2 * self.scale)

    def fit_to_bounds(
        self,
        bounds: Bounds | None,
        width: int | None = None,
        height: int | None = None,
    ) -> bool:
        """Scale and center the view so ``bounds`` fills the viewport.

        The tighter axis decides the scale; returns ``False`` without
        touching the view when there is nothing to fit.
        """
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height
        if bounds is None or self.width <= 0 or self.height <= 0:
            return False
        lon_range = max(bounds.lon_range, MIN_RANGE_DEG)
        lat_range = max(bounds.lat_range, MIN_RANGE_DEG)
        self.scale = min(self.width / lon_range, self.height / lat_range)
        self.center_on(*bounds.center())
        return True

    def zoom_about(self, factor: float, x: float, y: float) -> bool:
        """Multiply the scale by ``factor`` keeping (x, y) fixed in the world."""
        if not math.isfinite(factor) or factor <= 0:
            return False
        new_scale = self.scale * factor
        if not math.isfinite(new_scale) or new_scale <= 0:
            return False
        lat, lon = self.unproject(x, y)
        self.scale = new_scale
        self.origin_lon = lon - x / new_scale
        self.origin_lat = lat + y / new_scale
        return True

    def pan(self, dx: float, dy: float) -> None:
        """Move the content by (dx, dy) pixels."""
        self.origin_lon -= dx / self.scale
        self.origin_lat += dy / self.scale

    def resize(self, width: int, height: int) -> None:
        """Change the viewport size keeping the geographic center in place."""
        center_lat, center_lon = self.center()
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self.center_on(center_lat, center_lon)
