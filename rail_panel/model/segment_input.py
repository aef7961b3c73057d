"""Parsing of the Add Track form fields into a placed segment."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from rail_panel.model.track_segment import DEFAULT_ROTATION, DEFAULT_SCALE, TrackSegment

GRID_STEP = 5


@dataclass(frozen=True)
class SegmentInput:
    """Raw text of the Add Track form, exactly as typed."""

    image_name: str = "picture77.png"
    x: str = "400"
    y: str = "150"
    rotation: str = "0"
    scale_x: str = "1"
    scale_y: str = "1"


_INT_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def parse_int(value: str, default: int = 0) -> int:
    """Plain ASCII digits with an optional sign and no padding; anything else is *default*."""

    if not isinstance(value, str) or _INT_PATTERN.fullmatch(value) is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        # digit strings past the interpreter's int conversion limit
        return default
    if not INT32_MIN <= parsed <= INT32_MAX:
        return default
    return parsed


def parse_float(value: str, default: float) -> float:
    if not isinstance(value, str) or _FLOAT_PATTERN.fullmatch(value) is None:
        return default
    parsed = float(value)
    if not math.isfinite(parsed):
        return default
    return parsed


def snap_to_grid(value: int, step: int = GRID_STEP) -> int:
    """Drop *value* to a multiple of *step*, truncating toward zero."""

    if step <= 0:
        raise ValueError(f"grid step must be positive, got {step}")
    if value < 0:
        return -((-value // step) * step)
    return (value // step) * step


def build_segment(
    form: SegmentInput,
    segment_number: int,
    grid_step: int = GRID_STEP,
) -> TrackSegment:
    """Create the segment described by *form*, substituting defaults for bad numbers."""

    return TrackSegment(
        image_name=form.image_name,
        x=snap_to_grid(parse_int(form.x), grid_step),
        y=snap_to_grid(parse_int(form.y), grid_step),
        segment_number=segment_number,
        rotation=parse_float(form.rotation, DEFAULT_ROTATION),
        scale_x=parse_float(form.scale_x, DEFAULT_SCALE),
        scale_y=parse_float(form.scale_y, DEFAULT_SCALE),
    )
