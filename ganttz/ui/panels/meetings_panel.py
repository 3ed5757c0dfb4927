# Rev 0.1.0
from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

from ganttz.models.entities import Meeting
from ganttz.services.meeting_insights import summarize_meeting
from ganttz.viewmodels.history_viewmodel import format_date


class MeetingsPanel(QWidget):
    """Meeting history list, oldest first."""

    def __init__(self, parent=None):
        super().__init__(parent)
        title = QLabel("Meeting History"); title.setObjectName("CardTitle")
        self._empty = QLabel(
            "No meetings recorded yet. Start by recording a meeting in the Meeting Recorder section."
        )
        self._empty.setAlignment(Qt.AlignCenter)
        self._list = QListWidget()

        lay = QVBoxLayout(self)
        lay.addWidget(title)
        lay.addWidget(self._empty)
        lay.addWidget(self._list, 1)

    def set_meetings(self, meetings: Sequence[Meeting]) -> None:
        self._list.clear()
        self._empty.setVisible(not meetings)
        self._list.setVisible(bool(meetings))
        for m in meetings:
            ins = summarize_meeting(m)
            text = (
                f"{m.title}\n{format_date(m.date)} • {ins.duration_minutes}min\n"
                f"{m.summary}\n{ins.total_proposals} task updates proposed"
            )
            item = QListWidgetItem(text)
            item.setData(Qt.UserRole, m.id)
            self._list.addItem(item)
