"""Value types shared by the parsing, statistics and world layers.

Everything here is immutable. Points are normalized on construction through
``make_point`` so downstream code can assume finite, in-range coordinates.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Mapping


@dataclass(frozen=True)
class GeoPoint:
    """One track sample in degrees, with optional telemetry fields."""

    lat: float
    lon: float
    altitude: float | None = None
    speed: float | None = None
    heading: float | None = None


@dataclass(frozen=True)
class Bounds:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def lat_range(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_range(self) -> float:
        return self.max_lon - self.min_lon

    def center(self) -> tuple[float, float]:
        """Return the (lat, lon) midpoint."""
        return (
            (self.min_lat + self.max_lat) / 2,
            (self.min_lon + self.max_lon) / 2,
        )

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.min_lat, other.min_lat),
            max(self.max_lat, other.max_lat),
            min(self.min_lon, other.min_lon),
            max(self.max_lon, other.max_lon),
        )


@dataclass(frozen=True)
class TrackStats:
    start: GeoPoint
    end: GeoPoint
    min_altitude: float | None
    max_altitude: float | None
    max_speed: float | None
    total_distance_m: float


def finite_or_none(value: object) -> float | None:
    """Coerce ``value`` to a finite float, or ``None`` when that fails."""
    if value is None:
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def wrap_longitude(lon: float) -> float:
    if -180.0 <= lon <= 180.0:
        return lon
    wrapped = math.fmod(lon + 180.0, 360.0)
    if wrapped < 0:
        wrapped += 360.0
    return wrapped - 180.0


def make_point(
    lat: object,
    lon: object,
    altitude: object = None,
    speed: object = None,
    heading: object = None,
) -> GeoPoint | None:
    """Build a normalized point, returning ``None`` for unusable coordinates.

    Latitudes outside [-90, 90] cannot be repaired and drop the point;
    longitudes are wrapped into [-180, 180].
    """
    lat_value = finite_or_none(lat)
    lon_value = finite_or_none(lon)
    if lat_value is None or lon_value is None:
        return None
    if abs(lat_value) > 90.0:
        return None
    return GeoPoint(
        lat=lat_value,
        lon=wrap_longitude(lon_value),
        altitude=finite_or_none(altitude),
        speed=finite_or_none(speed),
        heading=finite_or_none(heading),
    )


def coerce_point(value: object) -> GeoPoint | None:
    """Accept a GeoPoint, a mapping, or a bare ``[lat, lon]`` pair."""
    if isinstance(value, GeoPoint):
        return make_point(
            value.lat, value.lon, value.altitude, value.speed, value.heading
        )
    if isinstance(value, Mapping):
        altitude = value.get("altitude", value.get("alt"))
        return make_point(
            value.get("lat"),
            value.get("lon"),
            altitude,
            value.get("speed"),
            value.get("heading"),
        )
    if isinstance(value, (list, tuple)) and len(value) >= 2:
        return make_point(value[0], value[1])
    return None


def coerce_points(values: Iterable[object]) -> list[GeoPoint]:
    points: list[GeoPoint] = []
    for value in values:
        point = coerce_point(value)
        if point is not None:
            points.append(point)
    return points
