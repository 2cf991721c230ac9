"""Format detection and the parse entry points used by loaders."""
from __future__ import annotations

import logging

from track_plotter.model.geo_types import GeoPoint
from track_plotter.parsing.columnar_parser import parse_columnar
from track_plotter.parsing.gpx_parser import parse_gpx

logger = logging.getLogger(__name__)

GPX_FORMAT = "gpx"
COLUMNAR_FORMAT = "columnar"

_BOM = b"\xef\xbb\xbf"


class FormatError(ValueError):
    """Raised when a file contains no recognizable track points."""


def detect_format(raw: bytes) -> str:
    head = raw[:256]
    if head.startswith(_BOM):
        head = head[len(_BOM):]
    return GPX_FORMAT if head.lstrip().startswith(b"<") else COLUMNAR_FORMAT


def parse_points(raw: bytes) -> list[GeoPoint]:
    """Parse ``raw`` tolerantly; an unusable file yields ``[]``."""
    if not raw:
        return []
    if detect_format(raw) == GPX_FORMAT:
        return parse_gpx(raw)
    return parse_columnar(raw)


def parse(raw: bytes, source: str | None = None) -> list[GeoPoint]:
    """Parse ``raw`` and raise :class:`FormatError` when no point survives."""
    points = parse_points(raw)
    if not points:
        raise FormatError(f"No track points found in {source or 'input'}")
    logger.debug("Parsed %s points from %s", len(points), source or "input")
    return points
