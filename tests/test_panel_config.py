from pathlib import Path

from rail_panel.config import (
    PanelConfig,
    config_path,
    load_panel_config,
    save_tracks_path,
)
from rail_panel.model.segment_input import SegmentInput


def test_missing_ini_gives_defaults(tmp_path: Path) -> None:
    cfg = load_panel_config(tmp_path / "rail_panel.ini")

    assert cfg == PanelConfig()
    assert cfg.tracks_file == Path("tracks.json")
    assert cfg.grid_step == 5
    assert cfg.on_corrupt == "fail"
    assert cfg.form_defaults == SegmentInput()


def test_ini_values_override_defaults(tmp_path: Path) -> None:
    ini_path = tmp_path / "rail_panel.ini"
    ini_path.write_text(
        "[paths]\n"
        "tracks_file = layouts/yard.json\n"
        "[placement]\n"
        "grid_step = 10 ; coarser grid\n"
        "[persistence]\n"
        "on_corrupt = EMPTY\n"
        "[defaults]\n"
        "image_name = straight.png\n"
        "x = 0\n",
        encoding="utf-8",
    )

    cfg = load_panel_config(ini_path)

    assert cfg.tracks_file == Path("layouts/yard.json")
    assert cfg.grid_step == 10
    assert cfg.on_corrupt == "empty"
    assert cfg.form_defaults == SegmentInput(image_name="straight.png", x="0")


def test_invalid_values_fall_back_per_key(tmp_path: Path) -> None:
    ini_path = tmp_path / "rail_panel.ini"
    ini_path.write_text(
        "[placement]\ngrid_step = fine\n[persistence]\non_corrupt = shrug\n",
        encoding="utf-8",
    )

    cfg = load_panel_config(ini_path)

    assert cfg.grid_step == 5
    assert cfg.on_corrupt == "fail"


def test_non_positive_grid_step_is_ignored(tmp_path: Path) -> None:
    ini_path = tmp_path / "rail_panel.ini"
    ini_path.write_text("[placement]\ngrid_step = 0\n", encoding="utf-8")

    assert load_panel_config(ini_path).grid_step == 5


def test_unparseable_ini_gives_defaults(tmp_path: Path) -> None:
    ini_path = tmp_path / "rail_panel.ini"
    ini_path.write_text("grid_step = 10\n", encoding="utf-8")

    assert load_panel_config(ini_path) == PanelConfig()


def test_save_tracks_path_preserves_other_sections(tmp_path: Path) -> None:
    ini_path = tmp_path / "rail_panel.ini"
    ini_path.write_text("[placement]\ngrid_step = 10\n", encoding="utf-8")

    save_tracks_path(Path("yard.json"), ini_path)

    cfg = load_panel_config(ini_path)
    assert cfg.tracks_file == Path("yard.json")
    assert cfg.grid_step == 10


def test_config_path_sits_next_to_script(tmp_path: Path) -> None:
    script = tmp_path / "rail_panel_main.py"

    assert config_path(script) == tmp_path / "rail_panel.ini"
