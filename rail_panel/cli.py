"""Command-line access to a tracks file without the Qt window."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from rail_panel.config import config_path, load_panel_config
from rail_panel.services.track_file_store import TrackFileError
from rail_panel.ui.control_panel_presenter import ControlPanelPresenter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rail-panel-cli", description="Edit a railway tracks file")
    parser.add_argument("--tracks-file", type=Path, help="Tracks JSON file (overrides the INI setting)")
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings INI file. Defaults to rail_panel.ini next to the executable.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level written to stderr")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="Print every segment in file order")
    commands.add_parser("next", help="Print the number the next added segment will get")

    add = commands.add_parser("add", help="Add a segment; numbers snap to the grid")
    add.add_argument("--image", help="Image resource name")
    add.add_argument("--x", help="X position")
    add.add_argument("--y", help="Y position")
    add.add_argument("--rotation", help="Rotation in degrees")
    add.add_argument("--scale-x", help="Horizontal scale")
    add.add_argument("--scale-y", help="Vertical scale")

    delete = commands.add_parser("delete", help="Delete a segment by number")
    delete.add_argument("segment_number", type=int)
    return parser


def run(args: argparse.Namespace, out=None) -> int:
    out = out or sys.stdout
    cfg = load_panel_config(args.config or config_path(Path(sys.argv[0])))
    if args.tracks_file is not None:
        cfg.tracks_file = args.tracks_file
    presenter = ControlPanelPresenter.from_config(cfg)
    try:
        presenter.load()
    except TrackFileError as exc:
        logger.error("Cannot read tracks file: %s", exc)
        return 1

    if args.command == "list":
        for segment in presenter.state.store:
            print(
                f"{segment.segment_number}\t{segment.image_name}\t{segment.x}\t{segment.y}\t"
                f"{segment.rotation:g}\t{segment.scale_x:g}\t{segment.scale_y:g}",
                file=out,
            )
    elif args.command == "next":
        print(presenter.next_segment_number(), file=out)
    elif args.command == "add":
        form = cfg.form_defaults
        overrides = {
            "image_name": args.image,
            "x": args.x,
            "y": args.y,
            "rotation": args.rotation,
            "scale_x": args.scale_x,
            "scale_y": args.scale_y,
        }
        form = replace(form, **{k: v for k, v in overrides.items() if v is not None})
        segment = presenter.add_segment(form)
        print(f"Added {segment.describe()}", file=out)
    elif args.command == "delete":
        if presenter.delete_segment(args.segment_number):
            print(f"Deleted segment {args.segment_number}", file=out)
        else:
            print(f"No segment {args.segment_number}", file=out)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
