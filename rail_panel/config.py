"""Configuration helpers for Railway Control Panel settings persistence."""
from __future__ import annotations

from configparser import ConfigParser, Error
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
import sys
from typing import Optional

from rail_panel.model.segment_input import GRID_STEP, SegmentInput
from rail_panel.services.track_file_store import (
    DEFAULT_TRACKS_FILENAME,
    ON_CORRUPT_FAIL,
    ON_CORRUPT_POLICIES,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "rail_panel.ini"
_PATHS_SECTION = "paths"
_TRACKS_KEY = "tracks_file"
_PLACEMENT_SECTION = "placement"
_DEFAULTS_SECTION = "defaults"
_PERSISTENCE_SECTION = "persistence"


@dataclass
class PanelConfig:
    tracks_file: Path = Path(DEFAULT_TRACKS_FILENAME)
    grid_step: int = GRID_STEP
    on_corrupt: str = ON_CORRUPT_FAIL
    form_defaults: SegmentInput = field(default_factory=SegmentInput)


def _config_dir(main_script_path: Optional[Path]) -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    if main_script_path is not None:
        return main_script_path.resolve().parent
    main_module = sys.modules.get("__main__")
    if main_module and getattr(main_module, "__file__", None):
        return Path(main_module.__file__).resolve().parent
    return Path.cwd()


def config_path(main_script_path: Optional[Path]) -> Path:
    return _config_dir(main_script_path) / CONFIG_FILENAME


def _read_parser(ini_path: Path) -> Optional[ConfigParser]:
    parser = ConfigParser(inline_comment_prefixes=(";", "#"))
    try:
        with ini_path.open("r", encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, Error):
        logger.warning("Could not read %s; using defaults", ini_path, exc_info=True)
        return None
    return parser


def load_panel_config(ini_path: Path) -> PanelConfig:
    cfg = PanelConfig()
    if not ini_path.exists():
        return cfg
    parser = _read_parser(ini_path)
    if parser is None:
        return cfg

    stored_path = parser.get(_PATHS_SECTION, _TRACKS_KEY, fallback="").strip()
    if stored_path:
        cfg.tracks_file = Path(stored_path)

    try:
        grid_step = parser.getint(_PLACEMENT_SECTION, "grid_step", fallback=cfg.grid_step)
    except ValueError:
        logger.warning("Ignoring non-integer grid_step in %s", ini_path)
    else:
        if grid_step > 0:
            cfg.grid_step = grid_step
        else:
            logger.warning("Ignoring non-positive grid_step %d in %s", grid_step, ini_path)

    on_corrupt = parser.get(_PERSISTENCE_SECTION, "on_corrupt", fallback=cfg.on_corrupt)
    on_corrupt = on_corrupt.strip().lower()
    if on_corrupt in ON_CORRUPT_POLICIES:
        cfg.on_corrupt = on_corrupt
    else:
        logger.warning("Ignoring unknown on_corrupt policy %r in %s", on_corrupt, ini_path)

    if parser.has_section(_DEFAULTS_SECTION):
        defaults = parser[_DEFAULTS_SECTION]
        base = cfg.form_defaults
        cfg.form_defaults = SegmentInput(
            image_name=defaults.get("image_name", base.image_name),
            x=defaults.get("x", base.x),
            y=defaults.get("y", base.y),
            rotation=defaults.get("rotation", base.rotation),
            scale_x=defaults.get("scale_x", base.scale_x),
            scale_y=defaults.get("scale_y", base.scale_y),
        )
    return cfg


def save_tracks_path(tracks_file: Path, ini_path: Path) -> None:
    config = ConfigParser()
    config.optionxform = str
    if ini_path.exists():
        try:
            with ini_path.open("r", encoding="utf-8") as handle:
                config.read_file(handle)
        except (OSError, Error):
            logger.warning("Not updating unreadable %s", ini_path, exc_info=True)
            return
    if not config.has_section(_PATHS_SECTION):
        config.add_section(_PATHS_SECTION)
    config[_PATHS_SECTION][_TRACKS_KEY] = str(tracks_file)
    try:
        with ini_path.open("w", encoding="utf-8") as handle:
            config.write(handle)
            handle.flush()
            os.fsync(handle.fileno())
    except OSError:
        logger.warning("Could not write %s", ini_path, exc_info=True)
