"""Entry point for the Railway Control Panel."""

import argparse
import logging
import os
import sys
from pathlib import Path

from PyQt5 import QtWidgets

from rail_panel.config import config_path, load_panel_config, save_tracks_path
from rail_panel.services.track_file_store import TrackFileError
from rail_panel.ui.control_panel_presenter import ControlPanelPresenter
from rail_panel.ui.main_window import RailPanelApp, RailPanelWindow

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Railway Control Panel")
    parser.add_argument(
        "--log-level",
        default=os.getenv("RAIL_PANEL_LOG_LEVEL", "INFO"),
        help=(
            "Logging level (e.g. DEBUG, INFO). Defaults to RAIL_PANEL_LOG_LEVEL "
            "environment variable or INFO."
        ),
    )
    parser.add_argument(
        "--log-file",
        default=os.getenv("RAIL_PANEL_LOG_PATH"),
        help=(
            "Optional log file path. Defaults to rail_panel_log.txt next to the "
            "executable."
        ),
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level DEBUG",
    )
    parser.add_argument(
        "--tracks-file",
        type=Path,
        help="Tracks JSON file to edit; remembered in rail_panel.ini for later runs.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings INI file. Defaults to rail_panel.ini next to the executable.",
    )
    return parser.parse_args(argv)


def configure_logging(log_level_name: str, log_path: str | None) -> str:
    resolved_level_name = log_level_name.upper()
    log_level = getattr(logging, resolved_level_name, logging.INFO)

    if not log_path:
        base_dir = os.path.dirname(sys.argv[0])
        log_path = os.path.join(base_dir, "rail_panel_log.txt")

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )

    return log_path


def build_presenter(args: argparse.Namespace) -> ControlPanelPresenter:
    ini_path = args.config or config_path(Path(sys.argv[0]))
    cfg = load_panel_config(ini_path)
    if args.tracks_file is not None:
        cfg.tracks_file = args.tracks_file.resolve()
        save_tracks_path(cfg.tracks_file, ini_path)
    logger.debug("Using settings %s and tracks file %s", ini_path, cfg.tracks_file)
    return ControlPanelPresenter.from_config(cfg)


def main() -> None:
    args = parse_args()
    log_level_name = "DEBUG" if args.debug else args.log_level
    log_path = configure_logging(log_level_name, args.log_file)
    logger.info(
        "Starting Railway Control Panel (log level %s, log file %s)",
        log_level_name.upper(),
        log_path,
    )

    app = RailPanelApp(sys.argv)
    presenter = build_presenter(args)
    try:
        presenter.load()
    except TrackFileError as exc:
        logger.error("Cannot start with unreadable tracks file: %s", exc)
        QtWidgets.QMessageBox.critical(
            None,
            "Railway Control Panel",
            f"The tracks file could not be read:\n\n{exc}",
        )
        sys.exit(1)

    window = RailPanelWindow(presenter)
    app.window = window
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
