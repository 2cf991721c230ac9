"""Track file parsing."""
from __future__ import annotations

from track_plotter.parsing.columnar_parser import infer_radians, parse_columnar
from track_plotter.parsing.gpx_parser import parse_gpx
from track_plotter.parsing.track_parser import (
    COLUMNAR_FORMAT,
    GPX_FORMAT,
    FormatError,
    detect_format,
    parse,
    parse_points,
)

__all__ = [
    "COLUMNAR_FORMAT",
    "GPX_FORMAT",
    "FormatError",
    "detect_format",
    "infer_radians",
    "parse",
    "parse_columnar",
    "parse_gpx",
    "parse_points",
]
