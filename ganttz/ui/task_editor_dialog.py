# ganttz/ui/task_editor_dialog.py
# Rev 0.1.0: edit schedule/status fields; name is read-only
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Tuple

from PySide6.QtCore import Qt, QDate
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit, QSpinBox,
    QDialogButtonBox, QComboBox, QLabel, QWidget, QDateEdit
)

from ganttz.models.entities import Task
from ganttz.models.types import Priority, Status
from ganttz.ui.window_mode import lock_dialog_fixed


def _to_qdate(value: datetime) -> QDate:
    return QDate(value.year, value.month, value.day)


def _from_qdate(qd: QDate, like: datetime) -> datetime:
    """Keep the existing time of day and tzinfo; only the calendar date is edited."""
    return like.replace(year=qd.year(), month=qd.month(), day=qd.day())


class TaskEditorDialog(QDialog):
    """
    values() returns (changes, reason). Only fields whose value differs from
    the task are included in changes.
    """

    def __init__(self, task: Task, parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle(f"Edit Task {task.id}")
        self._task = task

        self._name = QLineEdit(task.name)
        self._name.setReadOnly(True)

        self._cmb_status = QComboBox()
        for s in Status:
            self._cmb_status.addItem(s.value, s)
        self._cmb_status.setCurrentIndex(max(0, self._cmb_status.findData(task.status)))

        self._cmb_priority = QComboBox()
        for p in Priority:
            self._cmb_priority.addItem(p.value, p)
        self._cmb_priority.setCurrentIndex(max(0, self._cmb_priority.findData(task.priority)))

        self._progress = QSpinBox()
        self._progress.setRange(0, 100)
        self._progress.setSuffix("%")
        self._progress.setValue(task.progress)

        self._assignee = QLineEdit(task.assignee or "")

        self._start = QDateEdit(_to_qdate(task.start_date)); self._start.setCalendarPopup(True)
        self._end = QDateEdit(_to_qdate(task.end_date)); self._end.setCalendarPopup(True)

        self._reason = QTextEdit()
        self._reason.setAcceptRichText(False)
        self._reason.setPlaceholderText("Reason for change (recorded in the audit trail)")

        form = QFormLayout()
        form.addRow("Name:", self._name)
        form.addRow(QLabel("<hr/>"))
        form.addRow("Status:", self._cmb_status)
        form.addRow("Priority:", self._cmb_priority)
        form.addRow("Progress:", self._progress)
        form.addRow("Assignee:", self._assignee)
        form.addRow("Start:", self._start)
        form.addRow("End:", self._end)
        form.addRow("Reason:", self._reason)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)

        lock_dialog_fixed(self, width_ratio=0.4, height_ratio=0.6)
        self._cmb_status.setFocus(Qt.OtherFocusReason)

    def values(self) -> Tuple[Dict[str, Any], str]:
        t = self._task
        candidate: Dict[str, Any] = {
            "status": self._cmb_status.currentData(),
            "priority": self._cmb_priority.currentData(),
            "progress": int(self._progress.value()),
            "assignee": self._assignee.text().strip() or None,
            "start_date": _from_qdate(self._start.date(), t.start_date),
            "end_date": _from_qdate(self._end.date(), t.end_date),
        }
        changes = {k: v for k, v in candidate.items() if getattr(t, k) != v}
        return changes, self._reason.toPlainText().strip()
