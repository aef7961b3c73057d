from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

DEFAULT_ROTATION = 0.0
DEFAULT_SCALE = 1.0
DEFAULT_SIZE = 100.0

# Older tracks files name the render size sizeWidth/sizeHeight.
_LEGACY_SIZE_KEYS = {"width": "sizeWidth", "height": "sizeHeight"}


class TrackSegmentError(ValueError):
    """Raised when a serialized track segment cannot be decoded."""


@dataclass(frozen=True)
class TrackSegment:
    """One placed track image on the panel canvas."""

    image_name: str
    x: int
    y: int
    segment_number: int
    rotation: float = DEFAULT_ROTATION
    scale_x: float = DEFAULT_SCALE
    scale_y: float = DEFAULT_SCALE
    width: float = DEFAULT_SIZE
    height: float = DEFAULT_SIZE

    def to_dict(self) -> dict[str, object]:
        return {
            "imageName": self.image_name,
            "x": self.x,
            "y": self.y,
            "segmentNumber": self.segment_number,
            "rotation": float(self.rotation),
            "scaleX": float(self.scale_x),
            "scaleY": float(self.scale_y),
            "width": float(self.width),
            "height": float(self.height),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "TrackSegment":
        if not isinstance(payload, Mapping):
            raise TrackSegmentError(
                f"expected a JSON object, got {type(payload).__name__}"
            )
        image_name = payload.get("imageName")
        if not isinstance(image_name, str):
            raise TrackSegmentError("'imageName' must be a string")
        return cls(
            image_name=image_name,
            x=_required_int(payload, "x"),
            y=_required_int(payload, "y"),
            segment_number=_required_int(payload, "segmentNumber"),
            rotation=_optional_float(payload, "rotation", DEFAULT_ROTATION),
            scale_x=_optional_float(payload, "scaleX", DEFAULT_SCALE),
            scale_y=_optional_float(payload, "scaleY", DEFAULT_SCALE),
            width=_optional_float(payload, "width", DEFAULT_SIZE),
            height=_optional_float(payload, "height", DEFAULT_SIZE),
        )

    def describe(self) -> str:
        return f"Segment {self.segment_number} (X: {self.x}, Y: {self.y})"


def _required_int(payload: Mapping[str, object], key: str) -> int:
    if key not in payload:
        raise TrackSegmentError(f"missing required field '{key}'")
    value = payload[key]
    # bool is an int subclass but never a valid coordinate or number
    if isinstance(value, bool) or not isinstance(value, int):
        raise TrackSegmentError(f"'{key}' must be an integer, got {value!r}")
    return value


def _optional_float(payload: Mapping[str, object], key: str, default: float) -> float:
    if key in payload:
        value = payload[key]
    elif key in _LEGACY_SIZE_KEYS and _LEGACY_SIZE_KEYS[key] in payload:
        value = payload[_LEGACY_SIZE_KEYS[key]]
    else:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TrackSegmentError(f"'{key}' must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError as exc:
        raise TrackSegmentError(f"'{key}' is out of range") from exc
    if not math.isfinite(number):
        raise TrackSegmentError(f"'{key}' must be finite, got {value!r}")
    return number
