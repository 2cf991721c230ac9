"""Human-readable track summaries for the sidebar info panel."""
from __future__ import annotations

from track_plotter.model.geo_types import GeoPoint
from track_plotter.model.world_model import Track


def format_position(point: GeoPoint) -> str:
    return f"{point.lat:.5f}, {point.lon:.5f}"


def format_track_info(track: Track) -> list[str]:
    stats = track.stats
    lines = [
        f"Points: {len(track.points)}",
        f"Start: {format_position(stats.start)}",
        f"End: {format_position(stats.end)}",
    ]
    if stats.min_altitude is not None and stats.max_altitude is not None:
        lines.append(
            f"Altitude: {stats.min_altitude:.1f}-{stats.max_altitude:.1f} m"
        )
    if stats.max_speed is not None:
        lines.append(f"Top speed: {stats.max_speed:.2f} m/s")
    lines.append(f"Distance: {stats.total_distance_m / 1000:.2f} km")
    return lines
