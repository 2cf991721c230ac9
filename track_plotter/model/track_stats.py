"""Per-track statistics: distance, altitude and speed extremes, bounds."""
from __future__ import annotations

import math
from typing import Sequence

from track_plotter.model.geo_types import Bounds, GeoPoint, TrackStats

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in metres."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.lon - a.lon)
    s = (
        math.sin(d_lat / 2) ** 2
        + math.sin(d_lon / 2) ** 2 * math.cos(lat1) * math.cos(lat2)
    )
    s = min(1.0, max(0.0, s))
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(s), math.sqrt(1 - s))


def _finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def compute_stats(points: Sequence[GeoPoint]) -> TrackStats:
    """Reduce ``points`` in a single pass.

    Altitude and speed are reduced independently; a point without altitude
    still contributes distance and speed.
    """
    if not points:
        raise ValueError("compute_stats requires at least one point")

    min_alt: float | None = None
    max_alt: float | None = None
    max_speed: float | None = None
    distance = 0.0
    previous: GeoPoint | None = None
    for point in points:
        altitude = point.altitude
        if _finite(altitude):
            if min_alt is None or altitude < min_alt:
                min_alt = altitude
            if max_alt is None or altitude > max_alt:
                max_alt = altitude
        speed = point.speed
        if _finite(speed) and (max_speed is None or speed > max_speed):
            max_speed = speed
        if previous is not None:
            distance += haversine_m(previous, point)
        previous = point

    return TrackStats(
        start=points[0],
        end=points[-1],
        min_altitude=min_alt,
        max_altitude=max_alt,
        max_speed=max_speed,
        total_distance_m=distance,
    )


def compute_bounds(points: Sequence[GeoPoint]) -> Bounds:
    if not points:
        raise ValueError("compute_bounds requires at least one point")
    lats = [point.lat for point in points]
    lons = [point.lon for point in points]
    return Bounds(min(lats), max(lats), min(lons), max(lons))
