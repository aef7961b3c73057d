from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

from rail_panel.model.segment_input import GRID_STEP, SegmentInput, build_segment
from rail_panel.model.segment_store import TrackSegmentStore
from rail_panel.model.track_segment import TrackSegment
from rail_panel.services.track_file_store import TrackFileStore

if TYPE_CHECKING:
    from rail_panel.config import PanelConfig

logger = logging.getLogger(__name__)

NO_SELECTION_TEXT = "No track selected"


@dataclass
class PanelState:
    """Mutable state of one control panel, owned by the event loop."""

    store: TrackSegmentStore = field(default_factory=TrackSegmentStore)
    selected_segment_number: Optional[int] = None
    form: SegmentInput = field(default_factory=SegmentInput)


class ControlPanelPresenter:
    """Applies add/delete intents to the panel state and commits each change to disk."""

    def __init__(
        self,
        file_store: TrackFileStore,
        state: PanelState | None = None,
        grid_step: int = GRID_STEP,
    ) -> None:
        self._file_store = file_store
        self.state = state or PanelState()
        self._grid_step = grid_step
        self._listeners: List[Callable[[PanelState], None]] = []

    @classmethod
    def from_config(cls, cfg: "PanelConfig") -> "ControlPanelPresenter":
        file_store = TrackFileStore(cfg.tracks_file, on_corrupt=cfg.on_corrupt)
        return cls(file_store, PanelState(form=cfg.form_defaults), grid_step=cfg.grid_step)

    # --- Wiring helpers -------------------------------------------------
    def add_listener(self, callback: Callable[[PanelState], None]) -> None:
        self._listeners.append(callback)

    @property
    def file_store(self) -> TrackFileStore:
        return self._file_store

    # --- Loading ---------------------------------------------------------
    def load(self) -> None:
        self.state.store.replace_all(self._file_store.load())
        self.state.selected_segment_number = None
        self._notify()

    # --- Mutations -------------------------------------------------------
    def next_segment_number(self) -> int:
        return self.state.store.next_segment_number()

    def add_segment(self, form: SegmentInput | None = None) -> TrackSegment:
        if form is not None:
            self.state.form = form
        segment = build_segment(self.state.form, self.next_segment_number(), self._grid_step)
        self.state.store.add(segment)
        logger.info("Added track %s", segment.describe())
        self._commit()
        return segment

    def delete_segment(self, segment_number: int) -> bool:
        removed = self.state.store.delete(segment_number)
        if self.state.selected_segment_number == segment_number:
            self.state.selected_segment_number = None
        if not removed:
            logger.debug("No segment %d to delete", segment_number)
            return False
        logger.info("Deleted track segment %d", segment_number)
        self._commit()
        return True

    def delete_selected(self) -> bool:
        selected = self.state.selected_segment_number
        if selected is None:
            return False
        self.state.selected_segment_number = None
        removed = self.state.store.delete(selected)
        if removed:
            logger.info("Deleted track segment %d", selected)
        self._commit()
        return bool(removed)

    # --- Selection -------------------------------------------------------
    def select(self, segment_number: int | None) -> None:
        if segment_number is not None and self.state.store.find(segment_number) is None:
            return
        self.state.selected_segment_number = segment_number
        self._notify()

    def selected_segment(self) -> TrackSegment | None:
        number = self.state.selected_segment_number
        if number is None:
            return None
        return self.state.store.find(number)

    def selection_text(self) -> str:
        segment = self.selected_segment()
        detail = segment.describe() if segment is not None else NO_SELECTION_TEXT
        return f"Last Clicked Track: {detail}"

    # --- Internals -------------------------------------------------------
    def _commit(self) -> None:
        self._file_store.save(self.state.store.segments)
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self.state)
