from __future__ import annotations

import logging

from PyQt5 import QtCore, QtWidgets

from rail_panel.model.segment_input import SegmentInput
from rail_panel.ui.control_panel_presenter import ControlPanelPresenter, PanelState

logger = logging.getLogger(__name__)


class ControlPanel(QtWidgets.QWidget):
    """Add/delete form and segment list for the railway panel."""

    statusMessage = QtCore.pyqtSignal(str)

    def __init__(
        self,
        presenter: ControlPanelPresenter,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._presenter = presenter
        self._is_updating = False

        form = presenter.state.form
        self.image_edit = QtWidgets.QLineEdit(form.image_name)
        self.x_edit = QtWidgets.QLineEdit(form.x)
        self.y_edit = QtWidgets.QLineEdit(form.y)
        self.rotation_edit = QtWidgets.QLineEdit(form.rotation)
        self.scale_x_edit = QtWidgets.QLineEdit(form.scale_x)
        self.scale_y_edit = QtWidgets.QLineEdit(form.scale_y)
        self.segment_label = QtWidgets.QLabel()

        self.add_button = QtWidgets.QPushButton("Add Track")
        self.add_button.clicked.connect(self._add_track)
        self.delete_button = QtWidgets.QPushButton("Delete Track")
        self.delete_button.setStyleSheet("background-color: red; color: white;")
        self.delete_button.clicked.connect(self._delete_track)

        self.segment_list = QtWidgets.QListWidget()
        self.segment_list.itemClicked.connect(self._on_item_clicked)
        self.selection_label = QtWidgets.QLabel()

        position_row = QtWidgets.QHBoxLayout()
        position_row.addWidget(QtWidgets.QLabel("Image"))
        position_row.addWidget(self.image_edit)
        position_row.addWidget(QtWidgets.QLabel("X"))
        position_row.addWidget(self.x_edit)
        position_row.addWidget(QtWidgets.QLabel("Y"))
        position_row.addWidget(self.y_edit)

        transform_row = QtWidgets.QHBoxLayout()
        transform_row.addWidget(self.segment_label)
        transform_row.addWidget(QtWidgets.QLabel("Rotation"))
        transform_row.addWidget(self.rotation_edit)
        transform_row.addWidget(QtWidgets.QLabel("Scale X"))
        transform_row.addWidget(self.scale_x_edit)
        transform_row.addWidget(QtWidgets.QLabel("Scale Y"))
        transform_row.addWidget(self.scale_y_edit)

        button_row = QtWidgets.QHBoxLayout()
        button_row.addWidget(self.add_button)
        button_row.addWidget(self.delete_button)
        button_row.addStretch(1)

        layout = QtWidgets.QVBoxLayout()
        layout.addWidget(self.segment_list, 1)
        layout.addWidget(self.selection_label)
        layout.addLayout(position_row)
        layout.addLayout(transform_row)
        layout.addLayout(button_row)
        self.setLayout(layout)

        presenter.add_listener(self.refresh)
        self.refresh(presenter.state)

    def form_input(self) -> SegmentInput:
        return SegmentInput(
            image_name=self.image_edit.text(),
            x=self.x_edit.text(),
            y=self.y_edit.text(),
            rotation=self.rotation_edit.text(),
            scale_x=self.scale_x_edit.text(),
            scale_y=self.scale_y_edit.text(),
        )

    def refresh(self, state: PanelState) -> None:
        self._is_updating = True
        try:
            self.segment_list.clear()
            for segment in state.store:
                item = QtWidgets.QListWidgetItem(
                    f"{segment.describe()} {segment.image_name} "
                    f"rot {segment.rotation:g}° scale {segment.scale_x:g}x{segment.scale_y:g}"
                )
                item.setData(QtCore.Qt.UserRole, segment.segment_number)
                self.segment_list.addItem(item)
                if segment.segment_number == state.selected_segment_number:
                    item.setSelected(True)
        finally:
            self._is_updating = False
        self.segment_label.setText(f"Segment: {self._presenter.next_segment_number()}")
        self.selection_label.setText(self._presenter.selection_text())
        self.delete_button.setEnabled(state.selected_segment_number is not None)

    def _on_item_clicked(self, item: QtWidgets.QListWidgetItem) -> None:
        if self._is_updating:
            return
        number = item.data(QtCore.Qt.UserRole)
        if number is None:
            return
        self._presenter.select(int(number))

    def _add_track(self) -> None:
        try:
            segment = self._presenter.add_segment(self.form_input())
        except OSError as exc:
            logger.exception("Failed to save tracks after adding a segment")
            self.statusMessage.emit(f"Could not save tracks: {exc}")
            self.refresh(self._presenter.state)
            return
        self.statusMessage.emit(f"Added {segment.describe()}")

    def _delete_track(self) -> None:
        selected = self._presenter.state.selected_segment_number
        try:
            deleted = self._presenter.delete_selected()
        except OSError as exc:
            logger.exception("Failed to save tracks after deleting a segment")
            self.statusMessage.emit(f"Could not save tracks: {exc}")
            self.refresh(self._presenter.state)
            return
        if deleted:
            self.statusMessage.emit(f"Deleted segment {selected}")
