"""Parser for the legacy pipe-delimited track format.

Layout, by 0-based column:

* basic rows (5 to 7 fields): ``3`` longitude, ``4`` latitude
* extended rows (8+ fields): ``3`` longitude, ``4`` latitude, ``5`` speed,
  ``6`` heading, ``7`` altitude

Longitude comes first in the source and is swapped into (lat, lon) order.
Angles are in radians or degrees; an optional first line ``units=rad`` or
``units=deg`` says which. Without that marker the unit is guessed by
``infer_radians``.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Iterable, NamedTuple

from track_plotter.model.geo_types import GeoPoint, finite_or_none, make_point

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
BASIC_FIELD_COUNT = 5
EXTENDED_FIELD_COUNT = 8
LON_COLUMN = 3
LAT_COLUMN = 4
SPEED_COLUMN = 5
HEADING_COLUMN = 6
ALTITUDE_COLUMN = 7

_UNITS_MARKER = re.compile(
    r"^\s*units\s*=\s*(rad|radians|deg|degrees)\s*$", re.IGNORECASE
)


class ColumnarRow(NamedTuple):
    lat: float
    lon: float
    speed: float | None = None
    heading: float | None = None
    altitude: float | None = None


def unit_marker(line: str) -> str | None:
    """Return ``"rad"``/``"deg"`` when ``line`` is a units header."""
    match = _UNITS_MARKER.match(line)
    if match is None:
        return None
    return "rad" if match.group(1).lower().startswith("rad") else "deg"


def parse_row(line: str) -> ColumnarRow | None:
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < BASIC_FIELD_COUNT:
        return None
    lon = finite_or_none(fields[LON_COLUMN].strip() or None)
    lat = finite_or_none(fields[LAT_COLUMN].strip() or None)
    if lat is None or lon is None:
        return None
    if len(fields) < EXTENDED_FIELD_COUNT:
        return ColumnarRow(lat=lat, lon=lon)
    return ColumnarRow(
        lat=lat,
        lon=lon,
        speed=finite_or_none(fields[SPEED_COLUMN].strip() or None),
        heading=finite_or_none(fields[HEADING_COLUMN].strip() or None),
        altitude=finite_or_none(fields[ALTITUDE_COLUMN].strip() or None),
    )


def infer_radians(coordinates: Iterable[tuple[float, float]]) -> bool:
    """Guess whether unmarked coordinates are radians.

    Best effort only: a file whose every latitude and longitude magnitude is
    at most pi is taken to be radians. Degree tracks that stay within about
    3.14 degrees of the equator and prime meridian are misread by this rule.
    """
    seen = False
    for lat, lon in coordinates:
        seen = True
        if abs(lat) > math.pi or abs(lon) > math.pi:
            return False
    return seen


def _to_point(row: ColumnarRow, radians: bool) -> GeoPoint | None:
    if not radians:
        return make_point(row.lat, row.lon, row.altitude, row.speed, row.heading)
    heading = math.degrees(row.heading) if row.heading is not None else None
    return make_point(
        math.degrees(row.lat),
        math.degrees(row.lon),
        row.altitude,
        row.speed,
        heading,
    )


def parse_columnar(raw: bytes) -> list[GeoPoint]:
    """Return the file's points in line order, skipping malformed lines."""
    lines = raw.decode("utf-8-sig", errors="replace").splitlines()
    unit = unit_marker(lines[0]) if lines else None
    if unit is not None:
        lines = lines[1:]

    rows: list[ColumnarRow] = []
    skipped = 0
    for line in lines:
        if not line.strip():
            continue
        row = parse_row(line)
        if row is None:
            skipped += 1
            continue
        rows.append(row)
    if skipped:
        logger.debug("Skipped %s malformed columnar lines", skipped)
    if not rows:
        return []

    if unit is None:
        radians = infer_radians((row.lat, row.lon) for row in rows)
        logger.debug("Inferred columnar units: %s", "rad" if radians else "deg")
    else:
        radians = unit == "rad"

    points: list[GeoPoint] = []
    for row in rows:
        point = _to_point(row, radians)
        if point is not None:
            points.append(point)
    return points
