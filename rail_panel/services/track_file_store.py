from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from rail_panel.model.track_segment import TrackSegment, TrackSegmentError

logger = logging.getLogger(__name__)

DEFAULT_TRACKS_FILENAME = "tracks.json"

ON_CORRUPT_FAIL = "fail"
ON_CORRUPT_EMPTY = "empty"
ON_CORRUPT_POLICIES = (ON_CORRUPT_FAIL, ON_CORRUPT_EMPTY)


class TrackFileError(ValueError):
    """The tracks file exists but does not hold a valid segment list."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def encode_segments(segments: Iterable[TrackSegment]) -> str:
    return json.dumps([segment.to_dict() for segment in segments], indent=2, allow_nan=False)


def decode_segments(raw: bytes, path: Path) -> list[TrackSegment]:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TrackFileError(path, f"not UTF-8 text ({exc})") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TrackFileError(path, f"invalid JSON ({exc})") from exc
    except RecursionError as exc:
        raise TrackFileError(path, "JSON nested too deeply") from exc
    if not isinstance(payload, list):
        raise TrackFileError(path, "expected a JSON array of track segments")
    segments: list[TrackSegment] = []
    for index, entry in enumerate(payload):
        try:
            segments.append(TrackSegment.from_dict(entry))
        except TrackSegmentError as exc:
            raise TrackFileError(path, f"entry {index}: {exc}") from exc
    return segments


class TrackFileStore:
    """Full-snapshot JSON persistence of the segment list."""

    def __init__(
        self,
        path: Path | str = DEFAULT_TRACKS_FILENAME,
        on_corrupt: str = ON_CORRUPT_FAIL,
    ) -> None:
        if on_corrupt not in ON_CORRUPT_POLICIES:
            raise ValueError(
                f"on_corrupt must be one of {', '.join(ON_CORRUPT_POLICIES)}, got {on_corrupt!r}"
            )
        self._path = Path(path)
        self._on_corrupt = on_corrupt

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[TrackSegment]:
        if not self._path.exists():
            logger.info("No tracks file at %s; starting empty", self._path)
            return []
        raw = self._path.read_bytes()
        try:
            segments = decode_segments(raw, self._path)
        except TrackFileError:
            if self._on_corrupt == ON_CORRUPT_EMPTY:
                logger.warning(
                    "Ignoring unreadable tracks file %s; starting empty", self._path, exc_info=True
                )
                return []
            raise
        logger.info("Loaded %d track segments from %s", len(segments), self._path)
        return segments

    def save(self, segments: Iterable[TrackSegment]) -> None:
        segments = list(segments)
        self._path.write_text(encode_segments(segments), encoding="utf-8")
        logger.debug("Saved %d track segments to %s", len(segments), self._path)
