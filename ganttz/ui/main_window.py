# Rev 0.1.0
# ganttZ Main Window
# Import bar | Recorder | Latest summary | Tabs: Gantt Chart · Task Management · Meetings (n)

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel, QComboBox,
    QTabWidget, QDockWidget, QFileDialog, QMessageBox, QFrame, QScrollArea
)

from ganttz.app_context import AppContext
from ganttz.services.project_controller import AppState
from ganttz.ui.diagnostics_panel import DiagnosticsPanel
from ganttz.ui.panels.gantt_panel import GanttPanel
from ganttz.ui.panels.meeting_recorder_panel import MeetingRecorderPanel
from ganttz.ui.panels.meeting_summary_panel import MeetingSummaryPanel
from ganttz.ui.panels.meetings_panel import MeetingsPanel
from ganttz.ui.tasks_view import TasksView
from ganttz.ui.themes import THEMES, get_theme
from ganttz.ui.window_mode import fit_to_screen
from ganttz.utils.config import save_settings
from ganttz.utils.logging_setup import get_logger
from ganttz.viewmodels.gantt_viewmodel import GanttViewModel
from ganttz.viewmodels.meeting_recorder_viewmodel import MeetingRecorderViewModel
from ganttz.viewmodels.project_viewmodel import ProjectViewModel

_SPREADSHEET_FILTER = "Spreadsheets (*.xlsx *.xlsm *.csv);;All files (*)"


class MainWindow(QMainWindow):
    def __init__(self, ctx: AppContext, parent=None):
        super().__init__(parent)
        self._ctx = ctx
        self._settings = ctx.settings
        self._log = get_logger("MainWindow")

        self._vm = ProjectViewModel(ctx.controller)
        self._recorder_vm = MeetingRecorderViewModel(
            ctx.recording, ctx.controller, self._vm,
            analysis_delay_ms=int(self._settings["recording"]["analysis_delay_ms"]),
            parent=self,
        )

        self.setWindowTitle("ganttZ - Project Management Dashboard")
        win = self._settings["main_window"]
        fit_to_screen(self, width=int(win["width"]), height=int(win["height"]))

        # ---- import bar ----
        import_card = QFrame(); import_card.setObjectName("Card")
        ic = QVBoxLayout(import_card)
        title = QLabel("Import Spreadsheet"); title.setObjectName("CardTitle")
        hint = QLabel("Columns: Task Name, Start Date, End Date, Duration, Progress, Assignee, Priority, Status")
        hint.setProperty("dim", True)
        self._btn_import = QPushButton("Choose File…")
        self._btn_sample = QPushButton("Load Sample")
        self._loaded = QLabel("")
        self._cmb_theme = QComboBox()
        for key, theme in THEMES.items():
            self._cmb_theme.addItem(theme.name, key)
            self._cmb_theme.setItemData(self._cmb_theme.count() - 1, theme.description, Qt.ToolTipRole)
        bar = QHBoxLayout()
        bar.addWidget(self._btn_import)
        bar.addWidget(self._btn_sample)
        bar.addWidget(self._loaded, 1)
        bar.addWidget(QLabel("Theme:"))
        bar.addWidget(self._cmb_theme)
        ic.addWidget(title)
        ic.addWidget(hint)
        ic.addLayout(bar)

        # ---- project area (hidden until tasks exist) ----
        self._recorder = MeetingRecorderPanel(self._recorder_vm)
        self._summary = MeetingSummaryPanel()
        self._gantt = GanttPanel(GanttViewModel(float(self._settings["timeline"]["min_bar_width"])))
        self._tasks_view = TasksView(self._vm)
        self._meetings = MeetingsPanel()

        self._tabs = QTabWidget()
        self._tabs.addTab(self._gantt, "Gantt Chart")
        self._tabs.addTab(self._tasks_view, "Task Management")
        self._tabs.addTab(self._meetings, "Meetings (0)")

        self._project = QWidget()
        pl = QVBoxLayout(self._project)
        pl.setContentsMargins(0, 0, 0, 0)
        pl.addWidget(self._recorder)
        pl.addWidget(self._summary)
        pl.addWidget(self._tabs, 1)

        self._empty = QLabel(
            "Upload a spreadsheet or load sample data to get started with your project dashboard."
        )
        self._empty.setAlignment(Qt.AlignCenter)

        central = QWidget(self)
        v = QVBoxLayout(central)
        v.addWidget(import_card)
        v.addWidget(self._empty, 1)
        v.addWidget(self._project, 1)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(central)
        self.setCentralWidget(scroll)

        # ---- diagnostics dock ----
        dock = QDockWidget("Diagnostics", self)
        dock.setObjectName("DiagnosticsDock")
        dock.setAllowedAreas(Qt.BottomDockWidgetArea | Qt.TopDockWidgetArea)
        dock.setWidget(DiagnosticsPanel(self))
        self.addDockWidget(Qt.BottomDockWidgetArea, dock)
        dock.setVisible(bool(self._settings["ui"].get("diagnostics_dock_visible")))

        ix = self._cmb_theme.findData(self._settings["ui"].get("theme", "default"))
        self._cmb_theme.setCurrentIndex(max(0, ix))

        # ---- wiring ----
        self._btn_import.clicked.connect(self._on_import_clicked)
        self._btn_sample.clicked.connect(self._vm.load_sample)
        self._cmb_theme.currentIndexChanged.connect(self._on_theme_changed)
        self._vm.stateChanged.connect(self._render)
        self._vm.errorOccurred.connect(self._show_error)
        self._recorder_vm.errorOccurred.connect(self._show_error)

        self._apply_theme(self._cmb_theme.currentData())
        self._render(self._vm.state)

    # -------------------- rendering --------------------

    def _render(self, state: AppState) -> None:
        has_tasks = state.has_tasks
        self._empty.setVisible(not has_tasks)
        self._project.setVisible(has_tasks)
        self._loaded.setText(f"Loaded: {state.file_name}" if state.file_name else "")

        self._gantt.set_tasks(state.tasks)
        self._tasks_view.set_state(state)
        self._summary.set_meeting(state.latest_meeting)
        self._meetings.set_meetings(state.meetings)
        self._tabs.setTabText(2, f"Meetings ({len(state.meetings)})")

    # -------------------- actions --------------------

    def _on_import_clicked(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Import Spreadsheet", "", _SPREADSHEET_FILTER)
        if path:
            self._vm.import_file(path)

    def _on_theme_changed(self, _ix: int) -> None:
        key = self._cmb_theme.currentData()
        self._apply_theme(key)
        self._settings["ui"]["theme"] = key
        try:
            save_settings(self._settings)
        except OSError as exc:
            self._log.warning("Could not save settings: %s", exc)

    def _apply_theme(self, key: str) -> None:
        theme = get_theme(key)
        self.setStyleSheet(theme.stylesheet())
        self._gantt.set_theme(theme)
        self._gantt.set_tasks(self._vm.state.tasks)

    def _show_error(self, title: str, message: str) -> None:
        QMessageBox.warning(self, title, message)

    def closeEvent(self, ev):
        self._recorder_vm.shutdown()
        self._tasks_view.closeEvent(ev)
        super().closeEvent(ev)
