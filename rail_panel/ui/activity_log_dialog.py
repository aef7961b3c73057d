"""Live view of the panel's own track edits and file activity."""

from __future__ import annotations

import logging

from PyQt5 import QtCore, QtGui, QtWidgets

ACTIVITY_LOGGER_NAME = "rail_panel"

# (label, minimum level shown)
ACTIVITY_FILTERS = (
    ("Track edits and saves", logging.DEBUG),
    ("Track edits", logging.INFO),
    ("Problems only", logging.WARNING),
)


class _ActivitySignal(QtCore.QObject):
    recorded = QtCore.pyqtSignal(int, str)


class ActivityLogHandler(logging.Handler):
    """Relays records from the ``rail_panel`` loggers as ``(level, text)`` pairs."""

    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.signal = _ActivitySignal()
        self.setFormatter(logging.Formatter("%(asctime)s  %(message)s", datefmt="%H:%M:%S"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.signal.recorded.emit(record.levelno, text)


class ActivityLogDialog(QtWidgets.QDialog):
    """Lists segment adds, deletes and tracks-file loads/saves as they happen."""

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Track Activity")
        self.resize(560, 320)

        self._entries: list[tuple[int, str]] = []
        self._min_level = ACTIVITY_FILTERS[0][1]

        self._filter_combo = QtWidgets.QComboBox()
        for label, level in ACTIVITY_FILTERS:
            self._filter_combo.addItem(label, level)
        self._filter_combo.currentIndexChanged.connect(self._on_filter_changed)

        self._list = QtWidgets.QListWidget()
        self._count_label = QtWidgets.QLabel()

        clear_button = QtWidgets.QPushButton("Clear")
        clear_button.clicked.connect(self.clear)

        top_row = QtWidgets.QHBoxLayout()
        top_row.addWidget(QtWidgets.QLabel("Show:"))
        top_row.addWidget(self._filter_combo, 1)

        bottom_row = QtWidgets.QHBoxLayout()
        bottom_row.addWidget(self._count_label)
        bottom_row.addStretch(1)
        bottom_row.addWidget(clear_button)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addLayout(top_row)
        layout.addWidget(self._list, 1)
        layout.addLayout(bottom_row)

        self._handler = ActivityLogHandler()
        self._handler.signal.recorded.connect(self._record)
        self._attached = False
        self._update_count()

    def attach(self) -> None:
        if self._attached:
            return
        logging.getLogger(ACTIVITY_LOGGER_NAME).addHandler(self._handler)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        logging.getLogger(ACTIVITY_LOGGER_NAME).removeHandler(self._handler)
        self._attached = False

    def set_minimum_level(self, level: int) -> None:
        index = self._filter_combo.findData(level)
        if index >= 0:
            self._filter_combo.setCurrentIndex(index)

    def visible_entries(self) -> list[str]:
        return [self._list.item(row).text() for row in range(self._list.count())]

    def clear(self) -> None:
        self._entries.clear()
        self._list.clear()
        self._update_count()

    def closeEvent(self, event: QtCore.QEvent) -> None:  # noqa: N802
        self.detach()
        super().closeEvent(event)

    def _record(self, level: int, text: str) -> None:
        self._entries.append((level, text))
        if level >= self._min_level:
            self._append_item(level, text)
        self._update_count()

    def _on_filter_changed(self, index: int) -> None:
        self._min_level = int(self._filter_combo.itemData(index))
        self._list.clear()
        for level, text in self._entries:
            if level >= self._min_level:
                self._append_item(level, text)
        self._update_count()

    def _append_item(self, level: int, text: str) -> None:
        item = QtWidgets.QListWidgetItem(text)
        if level >= logging.WARNING:
            item.setForeground(QtGui.QBrush(QtGui.QColor("red")))
        self._list.addItem(item)
        self._list.scrollToBottom()

    def _update_count(self) -> None:
        self._count_label.setText(f"{self._list.count()} of {len(self._entries)} entries")
