"""Entry point for the standalone Track Plotter."""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
import sys

from PyQt5 import QtWidgets

from track_plotter.config import load_settings
from track_plotter.widget.window import PlotterWindow

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    base_dir = os.path.dirname(sys.argv[0]) or "."
    log_path = os.path.join(base_dir, "track_plotter_log.txt")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot GPX and pipe-delimited tracks.")
    parser.add_argument(
        "--plots-dir",
        type=Path,
        default=None,
        help="Directory holding the track files (overrides the ini setting).",
    )
    args, _qt_args = parser.parse_known_args(argv)
    return args


def main() -> None:
    configure_logging()
    logger.info("Starting Track Plotter")

    main_script_path = Path(__file__).resolve()
    args = parse_args(sys.argv[1:])
    settings = load_settings(main_script_path)
    if args.plots_dir is not None:
        settings.plots_dir = args.plots_dir

    app = QtWidgets.QApplication(sys.argv)
    window = PlotterWindow(settings, main_script_path)
    window.show()
    window.start()

    def cleanup():
        try:
            if window:
                window.close()
        except Exception:  # pragma: no cover - best effort
            logger.exception("Unexpected error while closing window")

    app.aboutToQuit.connect(cleanup)

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
