from __future__ import annotations

from PyQt5 import QtWidgets

from rail_panel.ui.activity_log_dialog import ActivityLogDialog
from rail_panel.ui.control_panel import ControlPanel
from rail_panel.ui.control_panel_presenter import ControlPanelPresenter

WINDOW_TITLE = "Railway Control Panel"


class RailPanelApp(QtWidgets.QApplication):
    """Thin application wrapper for the railway panel."""

    def __init__(self, argv: list[str]):
        super().__init__(argv)
        self.setQuitOnLastWindowClosed(True)
        self.window: RailPanelWindow | None = None


class RailPanelWindow(QtWidgets.QMainWindow):
    def __init__(self, presenter: ControlPanelPresenter) -> None:
        super().__init__()
        self.setWindowTitle(f"{WINDOW_TITLE} [{presenter.file_store.path.name}]")
        self.resize(900, 600)

        self.panel = ControlPanel(presenter, self)
        self.setCentralWidget(self.panel)
        self.panel.statusMessage.connect(self.statusBar().showMessage)

        self._activity_dialog: ActivityLogDialog | None = None
        view_menu = self.menuBar().addMenu("&View")
        activity_action = view_menu.addAction("Track &Activity")
        activity_action.triggered.connect(self.show_activity_log)

    def show_activity_log(self) -> ActivityLogDialog:
        if self._activity_dialog is None:
            self._activity_dialog = ActivityLogDialog(self)
        self._activity_dialog.attach()
        self._activity_dialog.show()
        self._activity_dialog.raise_()
        return self._activity_dialog
