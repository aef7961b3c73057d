from __future__ import annotations

import logging
from typing import Iterable, Iterator

from rail_panel.model.track_segment import TrackSegment

logger = logging.getLogger(__name__)


class TrackSegmentStore:
    """Insertion-ordered in-memory collection of placed track segments."""

    def __init__(self, segments: Iterable[TrackSegment] = ()) -> None:
        self._segments: list[TrackSegment] = list(segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[TrackSegment]:
        return iter(tuple(self._segments))

    def __contains__(self, segment: object) -> bool:
        return segment in self._segments

    @property
    def segments(self) -> tuple[TrackSegment, ...]:
        return tuple(self._segments)

    def add(self, segment: TrackSegment) -> None:
        self._segments.append(segment)
        logger.debug("Added segment %d (%s)", segment.segment_number, segment.image_name)

    def delete(self, segment_number: int) -> int:
        """Remove every segment numbered *segment_number*; returns how many went."""

        remaining = [s for s in self._segments if s.segment_number != segment_number]
        removed = len(self._segments) - len(remaining)
        self._segments = remaining
        if removed:
            logger.debug("Deleted segment %d", segment_number)
        return removed

    def next_segment_number(self) -> int:
        if not self._segments:
            return 1
        return max(s.segment_number for s in self._segments) + 1

    def find(self, segment_number: int) -> TrackSegment | None:
        for segment in self._segments:
            if segment.segment_number == segment_number:
                return segment
        return None

    def replace_all(self, segments: Iterable[TrackSegment]) -> None:
        self._segments = list(segments)
