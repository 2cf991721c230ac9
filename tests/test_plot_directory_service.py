import os
from pathlib import Path

import pytest

pytest.importorskip("lxml")

from track_plotter.services.io_service import PlotDirectoryService

GPX = b"""<gpx><trk><trkseg>
<trkpt lat="10" lon="20"><ele>100</ele></trkpt>
<trkpt lat="10.001" lon="20"><ele>150</ele></trkpt>
</trkseg></trk></gpx>"""


@pytest.fixture
def plots_dir(tmp_path):
    directory = tmp_path / "plots"
    directory.mkdir()
    (directory / "b.gpx").write_bytes(GPX)
    (directory / "a.txt").write_bytes(b"x|x|x|20|10\nx|x|x|21|11\n")
    (directory / ".hidden.gpx").write_bytes(GPX)
    (directory / "notes.txt").write_bytes(b"nothing to see here\n")
    (directory / "nested").mkdir()
    return directory


def test_lists_visible_regular_files_sorted(plots_dir) -> None:
    service = PlotDirectoryService(plots_dir)

    names = [path.name for path in service.list_plot_files()]

    assert names == ["a.txt", "b.gpx", "notes.txt"]


def test_load_all_skips_files_without_points(plots_dir) -> None:
    service = PlotDirectoryService(plots_dir)

    records = service.load_all()

    assert [record.id for record in records] == ["a.txt", "b.gpx"]
    assert [(p.lat, p.lon) for p in records[0].points] == [(10.0, 20.0), (11.0, 21.0)]
    assert records[1].points[1].altitude == 150.0


def test_missing_directory_yields_nothing(tmp_path) -> None:
    service = PlotDirectoryService(tmp_path / "missing")

    assert service.load_all() == []


def test_parsed_points_are_cached_by_mtime(plots_dir) -> None:
    service = PlotDirectoryService(plots_dir)
    path = plots_dir / "a.txt"

    first = service.read_points(path)
    assert service.read_points(path) is first

    path.write_bytes(b"x|x|x|30|40\n")
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + 10))

    refreshed = service.read_points(path)
    assert refreshed is not first
    assert [(p.lat, p.lon) for p in refreshed] == [(40.0, 30.0)]


def test_unreadable_file_does_not_abort_the_load(plots_dir, monkeypatch) -> None:
    service = PlotDirectoryService(plots_dir)
    original = Path.read_bytes

    def failing_read(self):
        if self.name == "b.gpx":
            raise PermissionError("denied")
        return original(self)

    monkeypatch.setattr(Path, "read_bytes", failing_read)

    records = service.load_all()

    assert [record.id for record in records] == ["a.txt"]


def test_deleted_files_drop_out_of_the_cache(plots_dir) -> None:
    service = PlotDirectoryService(plots_dir)
    service.load_all()

    (plots_dir / "b.gpx").unlink()
    records = service.load_all()

    assert [record.id for record in records] == ["a.txt"]
    assert plots_dir / "b.gpx" not in service._cache


def test_unlistable_directory_yields_nothing(plots_dir, monkeypatch) -> None:
    def refuse(self):
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "iterdir", refuse)
    service = PlotDirectoryService(plots_dir)

    assert service.list_plot_files() == []
    assert service.load_all() == []
