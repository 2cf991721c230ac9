import pytest

from track_plotter.model.geo_types import Bounds, GeoPoint, coerce_point, make_point
from track_plotter.model.track_stats import compute_bounds, compute_stats, haversine_m


def _three_points():
    return [
        GeoPoint(10.0, 20.0, altitude=100.0),
        GeoPoint(10.001, 20.0, altitude=150.0),
        GeoPoint(10.002, 20.0, altitude=90.0),
    ]


def test_three_point_track_stats() -> None:
    points = _three_points()

    stats = compute_stats(points)

    assert stats.min_altitude == 90.0
    assert stats.max_altitude == 150.0
    assert stats.total_distance_m == pytest.approx(222.4, abs=0.5)
    assert stats.start == points[0]
    assert stats.end == points[-1]
    assert stats.max_speed is None


def test_haversine_is_symmetric_and_zero_for_identical_points() -> None:
    a = GeoPoint(51.5, -0.12)
    b = GeoPoint(48.85, 2.35)

    assert haversine_m(a, b) == pytest.approx(haversine_m(b, a))
    assert haversine_m(a, a) == 0.0
    assert haversine_m(a, b) == pytest.approx(343_500, rel=0.01)


def test_haversine_triangle_inequality() -> None:
    a = GeoPoint(0.0, 0.0)
    b = GeoPoint(1.0, 1.0)
    c = GeoPoint(2.0, 0.5)

    assert haversine_m(a, c) <= haversine_m(a, b) + haversine_m(b, c) + 1e-6


def test_antipodal_distance_is_finite() -> None:
    distance = haversine_m(GeoPoint(0.0, 0.0), GeoPoint(0.0, 180.0))

    assert distance == pytest.approx(20_015_087, rel=1e-4)


def test_missing_fields_are_reduced_independently() -> None:
    points = [
        GeoPoint(0.0, 0.0, speed=3.0),
        GeoPoint(0.0, 0.001, altitude=12.0),
        GeoPoint(0.0, 0.002, speed=7.5),
    ]

    stats = compute_stats(points)

    assert stats.min_altitude == stats.max_altitude == 12.0
    assert stats.max_speed == 7.5
    assert stats.total_distance_m > 0


def test_single_point_track() -> None:
    point = GeoPoint(1.0, 2.0)

    stats = compute_stats([point])

    assert stats.total_distance_m == 0.0
    assert stats.start == stats.end == point
    assert compute_bounds([point]) == Bounds(1.0, 1.0, 2.0, 2.0)


def test_empty_track_is_rejected() -> None:
    with pytest.raises(ValueError):
        compute_stats([])


def test_bounds_union_and_center() -> None:
    merged = Bounds(0.0, 1.0, 10.0, 11.0).union(Bounds(-1.0, 0.5, 10.5, 12.0))

    assert merged == Bounds(-1.0, 1.0, 10.0, 12.0)
    assert merged.center() == (0.0, 11.0)


def test_make_point_normalizes_input() -> None:
    assert make_point("nan", 1) is None
    assert make_point(91, 0) is None
    assert abs(make_point(0, 540).lon) == pytest.approx(180.0)
    assert make_point(0, -190).lon == pytest.approx(170.0)
    assert make_point(1, 2, altitude="inf").altitude is None


def test_coerce_point_accepts_pairs_and_mappings() -> None:
    assert coerce_point([1, 2]) == GeoPoint(1.0, 2.0)
    assert coerce_point({"lat": 1, "lon": 2, "alt": 30}) == GeoPoint(1.0, 2.0, altitude=30.0)
    assert coerce_point("1,2") is None
