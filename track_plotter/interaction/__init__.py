"""Input events consumed by the gesture controller.

Qt events are translated into these plain values at the widget boundary so
the gesture logic can be driven (and tested) without a window.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class PointerSource(Enum):
    MOUSE = "mouse"
    TOUCH = "touch"


class TouchPhase(Enum):
    BEGIN = "begin"
    UPDATE = "update"
    END = "end"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerPressed:
    x: float
    y: float
    timestamp_ms: float


@dataclass(frozen=True)
class PointerMoved:
    x: float
    y: float
    timestamp_ms: float


@dataclass(frozen=True)
class PointerReleased:
    x: float
    y: float
    timestamp_ms: float


@dataclass(frozen=True)
class WheelScrolled:
    """Wheel rotation in Qt angle-delta units (positive scrolls up)."""

    x: float
    y: float
    angle_delta: float


@dataclass(frozen=True)
class ZoomRequested:
    """Zoom about the viewport center, e.g. from toolbar buttons."""

    factor: float


@dataclass(frozen=True)
class TouchChanged:
    phase: TouchPhase
    points: Tuple[Tuple[float, float], ...]
    timestamp_ms: float


InputEvent = Union[
    PointerPressed,
    PointerMoved,
    PointerReleased,
    WheelScrolled,
    ZoomRequested,
    TouchChanged,
]
