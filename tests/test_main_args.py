from pathlib import Path

import pytest

pytest.importorskip("PyQt5")

from track_plotter.main import parse_args


def test_plots_dir_argument() -> None:
    args = parse_args(["--plots-dir", "/data/tracks"])

    assert args.plots_dir == Path("/data/tracks")


def test_unknown_qt_arguments_are_ignored() -> None:
    args = parse_args(["-platform", "offscreen"])

    assert args.plots_dir is None
