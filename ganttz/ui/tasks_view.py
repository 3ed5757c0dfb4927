# ganttz/ui/tasks_view.py
# Rev 0.1.0: task table, pending proposal box and audit history
from __future__ import annotations

from PySide6.QtCore import Qt, QSettings
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView,
    QHBoxLayout, QPushButton, QDialog, QSplitter, QLabel, QFrame
)

from ganttz.models.entities import Task
from ganttz.services.project_controller import AppState
from ganttz.ui.panels.history_panel import HistoryPanel
from ganttz.ui.task_editor_dialog import TaskEditorDialog
from ganttz.viewmodels.history_viewmodel import HistoryViewModel, format_date
from ganttz.viewmodels.project_viewmodel import ProjectViewModel

_COLUMNS = ["ID", "Name", "Status", "Priority", "Progress", "Assignee", "Start", "End", "Pending"]


class TasksView(QWidget):
    def __init__(self, vm: ProjectViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm
        self._tasks: dict[str, Task] = {}

        # ---------- Controls ----------
        self._btn_edit = QPushButton("Edit")
        self._btn_accept = QPushButton("Accept Changes")
        self._btn_reject = QPushButton("Reject Changes")
        self._btn_history = QPushButton("History")
        self._btn_history.setCheckable(True)
        self._btn_history.setChecked(True)  # panel visible by default
        for b in (self._btn_edit, self._btn_accept, self._btn_reject):
            b.setEnabled(False)

        # ---------- Table ----------
        self._table = QTableWidget(0, len(_COLUMNS))
        self._table.setHorizontalHeaderLabels(_COLUMNS)
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.itemDoubleClicked.connect(lambda _item: self._on_edit_clicked())
        self._table.itemSelectionChanged.connect(self._on_selection_changed)

        hdr = self._table.horizontalHeader()
        hdr.setStretchLastSection(False)
        for col in range(len(_COLUMNS)):
            hdr.setSectionResizeMode(col, QHeaderView.ResizeToContents)
        hdr.setSectionResizeMode(1, QHeaderView.Stretch)            # Name

        vh = self._table.verticalHeader()
        vh.setVisible(False)
        vh.setDefaultSectionSize(22)
        self._table.setWordWrap(False)
        self._table.setAlternatingRowColors(True)

        # ---------- Pending proposal box ----------
        self._pending = QFrame()
        self._pending.setObjectName("Card")
        self._pending_lbl = QLabel("")
        self._pending_lbl.setWordWrap(True)
        _p = QVBoxLayout(self._pending)
        _p.addWidget(self._pending_lbl)
        self._pending.setVisible(False)

        # ---------- History panel (bottom) ----------
        self._history = HistoryPanel(self)
        self._history.setObjectName("HistoryPanel")

        top_bar = QHBoxLayout()
        top_bar.addWidget(self._btn_edit)
        top_bar.addWidget(self._btn_accept)
        top_bar.addWidget(self._btn_reject)
        top_bar.addWidget(self._btn_history)
        top_bar.addStretch(1)

        top_holder = QWidget(self)
        _top_layout = QVBoxLayout(top_holder)
        _top_layout.setContentsMargins(0, 0, 0, 0)
        _top_layout.addLayout(top_bar)
        _top_layout.addWidget(self._table, 1)
        _top_layout.addWidget(self._pending)

        self._split = QSplitter(Qt.Vertical, self)
        self._split.addWidget(top_holder)
        self._split.addWidget(self._history)
        self._split.setStretchFactor(0, 3)
        self._split.setStretchFactor(1, 2)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addWidget(self._split, 1)

        # ---------- Wire ----------
        self._btn_edit.clicked.connect(self._on_edit_clicked)
        self._btn_accept.clicked.connect(self._on_accept_clicked)
        self._btn_reject.clicked.connect(self._on_reject_clicked)
        self._btn_history.toggled.connect(self._toggle_history)
        self._vm.historyLoaded.connect(self._on_history_loaded)

    # ---------- Public API ----------
    def set_state(self, state: AppState) -> None:
        selected = self._selected_task_id()
        self._tasks = {t.id: t for t in state.tasks}
        self._render(list(state.tasks))
        if selected in self._tasks:
            self._select(selected)
        self._on_selection_changed()

    # ---------- Lifecycle (persist splitter sizes) ----------
    def showEvent(self, ev):
        super().showEvent(ev)
        sizes = QSettings("ganttZ", "ui").value("tasks_split_sizes")
        if sizes:
            self._split.setSizes([int(x) for x in sizes])
        else:
            self._split.setSizes([700, 300])

    def closeEvent(self, ev):
        QSettings("ganttZ", "ui").setValue("tasks_split_sizes", self._split.sizes())
        super().closeEvent(ev)

    # ---------- Internals ----------
    def _render(self, tasks: list[Task]) -> None:
        self._table.setRowCount(len(tasks))
        for r, t in enumerate(tasks):
            cells = [
                t.id, t.name, t.status.value, t.priority.value, f"{t.progress}%",
                t.assignee or "—", format_date(t.start_date), format_date(t.end_date),
                "Yes" if t.has_pending_proposal else "",
            ]
            for c, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setData(Qt.UserRole, t.id)
                self._table.setItem(r, c, item)
        self._table.resizeColumnsToContents()

    def _select(self, task_id: str) -> None:
        for row in range(self._table.rowCount()):
            item = self._table.item(row, 0)
            if item and item.data(Qt.UserRole) == task_id:
                self._table.selectRow(row)
                return

    def _selected_task_id(self) -> str | None:
        items = self._table.selectedItems()
        if not items:
            return None
        return items[0].data(Qt.UserRole)

    def _selected_task(self) -> Task | None:
        tid = self._selected_task_id()
        return self._tasks.get(tid) if tid is not None else None

    def _on_selection_changed(self):
        task = self._selected_task()
        has_sel = task is not None
        pending = has_sel and task.has_pending_proposal
        self._btn_edit.setEnabled(has_sel)
        self._btn_accept.setEnabled(pending)
        self._btn_reject.setEnabled(pending)

        if pending:
            lines = HistoryViewModel.describe_proposal(task.pending_proposal)
            self._pending_lbl.setText("<b>Proposed changes</b><br/>" + "<br/>".join(lines))
        self._pending.setVisible(bool(pending))

        if has_sel and self._btn_history.isChecked():
            self._vm.load_history(task.id)
        elif not has_sel:
            self._history.set_updates([])

    # ----- Buttons -----
    def _on_edit_clicked(self):
        task = self._selected_task()
        if task is None:
            return
        dlg = TaskEditorDialog(task, self)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        changes, reason = dlg.values()
        if not changes:
            return
        self._vm.update_task(task.id, changes, reason or "Manual update")

    def _on_accept_clicked(self):
        tid = self._selected_task_id()
        if tid is not None:
            self._vm.accept_proposal(tid)

    def _on_reject_clicked(self):
        tid = self._selected_task_id()
        if tid is not None:
            self._vm.reject_proposal(tid)

    def _toggle_history(self, on: bool):
        self._history.setVisible(on)
        if not on:
            self._split.setSizes([1_000, 0])
            return
        if self._split.sizes()[1] == 0:
            self._split.setSizes([700, 300])
        tid = self._selected_task_id()
        if tid is not None:
            self._vm.load_history(tid)

    def _on_history_loaded(self, task_id: str, rows: list[dict]):
        if task_id == self._selected_task_id():
            self._history.set_updates(rows, self._tasks[task_id].name)
