"""Color helpers shared by both track renderers and the legend."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PyQt5 import QtGui

from track_plotter.model.world_model import FLAT_LIGHTNESS, FLAT_SATURATION

COLD_HUE = 240.0
HOT_HUE = 0.0
ALTITUDE_SATURATION = 100.0
ALTITUDE_LIGHTNESS = 50.0

RGB = tuple[float, float, float]


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert CSS-style HSL (degrees, percent, percent) to RGB in 0..1."""
    s /= 100.0
    l /= 100.0
    a = s * min(l, 1 - l)

    def channel(n: float) -> float:
        k = (n + h / 30.0) % 12
        return l - a * max(-1.0, min(k - 3, 9 - k, 1.0))

    return channel(0), channel(8), channel(4)


def hsl_to_rgb_array(h: np.ndarray, s: float, l: float) -> np.ndarray:
    """Vectorized :func:`hsl_to_rgb` over an array of hues; returns (n, 3)."""
    hues = np.asarray(h, dtype=np.float64)
    s /= 100.0
    l /= 100.0
    a = s * min(l, 1 - l)
    channels = []
    for n in (0.0, 8.0, 4.0):
        k = np.mod(n + hues / 30.0, 12)
        channels.append(l - a * np.maximum(-1.0, np.minimum(np.minimum(k - 3, 9 - k), 1.0)))
    return np.stack(channels, axis=-1)


def altitude_ratio(altitude: float, minimum: float, maximum: float) -> float:
    span = (maximum - minimum) or 1.0
    return max(0.0, min(1.0, (altitude - minimum) / span))


def altitude_hue(altitude: float, minimum: float, maximum: float) -> float:
    ratio = altitude_ratio(altitude, minimum, maximum)
    return COLD_HUE + (HOT_HUE - COLD_HUE) * ratio


def altitude_to_rgb(altitude: float, minimum: float, maximum: float) -> RGB:
    return hsl_to_rgb(
        altitude_hue(altitude, minimum, maximum),
        ALTITUDE_SATURATION,
        ALTITUDE_LIGHTNESS,
    )


def altitude_colors(
    altitudes: np.ndarray, minimum: float, maximum: float
) -> np.ndarray:
    """Return (n, 3) altitude colors; NaN altitudes give NaN rows."""
    span = (maximum - minimum) or 1.0
    ratios = np.clip((np.asarray(altitudes, dtype=np.float64) - minimum) / span, 0.0, 1.0)
    hues = COLD_HUE + (HOT_HUE - COLD_HUE) * ratios
    colors = hsl_to_rgb_array(hues, ALTITUDE_SATURATION, ALTITUDE_LIGHTNESS)
    colors[~np.isfinite(ratios)] = np.nan
    return colors


def flat_rgb(hue: float) -> RGB:
    return hsl_to_rgb(hue, FLAT_SATURATION, FLAT_LIGHTNESS)


def to_qcolor(rgb: RGB | np.ndarray) -> QtGui.QColor:
    red, green, blue = (max(0.0, min(1.0, float(value))) for value in rgb)
    return QtGui.QColor.fromRgbF(red, green, blue)


@dataclass(frozen=True)
class ThemeColors:
    background: str
    grid: str
    text: str
    legend_background: str


THEMES = {
    "light": ThemeColors(
        background="#ffffff",
        grid="#e0e0e0",
        text="#333333",
        legend_background="#f2f2f2",
    ),
    "dark": ThemeColors(
        background="#181818",
        grid="#333333",
        text="#dddddd",
        legend_background="#262626",
    ),
}
DEFAULT_THEME = "dark"


def theme_colors(name: str | None) -> ThemeColors:
    return THEMES.get(name or DEFAULT_THEME, THEMES[DEFAULT_THEME])
