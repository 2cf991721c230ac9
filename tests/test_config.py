import pytest

pytest.importorskip("PyQt5")

from track_plotter import config
from track_plotter.config import PlotterSettings, load_settings, save_settings


def test_defaults_when_no_ini(tmp_path) -> None:
    script = tmp_path / "main.py"

    settings = load_settings(script)

    assert settings.plots_dir == tmp_path.resolve() / "plots"
    assert settings.color_mode == "altitude"
    assert settings.theme == "dark"
    assert settings.grid_spacing_px == 100.0
    assert settings.momentum_decay == 0.95
    assert settings.frame_interval_ms == 16
    assert settings.stop_velocity == 0.01


def test_saved_settings_round_trip(tmp_path) -> None:
    script = tmp_path / "main.py"
    settings = PlotterSettings(
        plots_dir=tmp_path / "tracks",
        color_mode="flat",
        theme="light",
        grid_spacing_px=80.0,
        momentum_decay=0.9,
        frame_interval_ms=20,
        stop_velocity=0.05,
    )

    save_settings(settings, script)

    assert (tmp_path / config.CONFIG_FILENAME).exists()
    assert load_settings(script) == settings


def test_invalid_values_fall_back_to_defaults(tmp_path) -> None:
    script = tmp_path / "main.py"
    (tmp_path / config.CONFIG_FILENAME).write_text(
        "[plotter]\n"
        "plots_dir = relative/plots\n"
        "color_mode = rainbow\n"
        "theme = light\n"
        "grid_spacing_px = lots\n"
        "[momentum]\n"
        "decay = 5\n"
        "frame_interval_ms = 0\n",
        encoding="utf-8",
    )

    settings = load_settings(script)

    assert settings.plots_dir == tmp_path.resolve() / "relative" / "plots"
    assert settings.color_mode == "altitude"
    assert settings.theme == "light"
    assert settings.grid_spacing_px == 100.0
    assert settings.momentum_decay == 0.95
    assert settings.frame_interval_ms == 16


def test_unparseable_ini_is_ignored(tmp_path) -> None:
    script = tmp_path / "main.py"
    (tmp_path / config.CONFIG_FILENAME).write_text("not an ini file", encoding="utf-8")

    settings = load_settings(script)

    assert settings.plots_dir == tmp_path.resolve() / "plots"
