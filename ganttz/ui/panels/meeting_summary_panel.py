# Rev 0.1.0
from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (
    QDialog, QDialogButtonBox, QFrame, QHBoxLayout, QLabel, QPushButton, QTextEdit, QVBoxLayout, QWidget
)

from ganttz.models.entities import Meeting
from ganttz.services.meeting_insights import AT_RISK, MINOR_ISSUES, summarize_meeting
from ganttz.ui.window_mode import lock_dialog_fixed
from ganttz.viewmodels.history_viewmodel import format_date

_OVERALL_COLORS = {AT_RISK: "#dc2626", MINOR_ISSUES: "#ca8a04"}


class TranscriptDialog(QDialog):
    def __init__(self, meeting: Meeting, parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle(f"{meeting.title} - Full Transcript")
        text = QTextEdit()
        text.setReadOnly(True)
        text.setPlainText(meeting.transcript)
        btns = QDialogButtonBox(QDialogButtonBox.Close)
        btns.rejected.connect(self.reject)
        lay = QVBoxLayout(self)
        lay.addWidget(text, 1)
        lay.addWidget(btns)
        lock_dialog_fixed(self, width_ratio=0.45, height_ratio=0.55)


class MeetingSummaryPanel(QFrame):
    """Latest meeting: overall status, summary, counts and proposals."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("Card")
        self._meeting: Optional[Meeting] = None

        title = QLabel("Latest Meeting Summary"); title.setObjectName("CardTitle")
        self._heading = QLabel("")
        self._overall = QLabel("")
        self._summary = QLabel(""); self._summary.setWordWrap(True)
        self._counts = QLabel("")
        self._proposals = QLabel(""); self._proposals.setWordWrap(True)
        self._btn_transcript = QPushButton("View Full Transcript")
        self._btn_transcript.clicked.connect(self._show_transcript)

        head = QHBoxLayout()
        head.addWidget(self._heading, 1)
        head.addWidget(self._overall)

        lay = QVBoxLayout(self)
        lay.addWidget(title)
        lay.addLayout(head)
        lay.addWidget(self._summary)
        lay.addWidget(self._counts)
        lay.addWidget(self._proposals)
        lay.addWidget(self._btn_transcript)
        self.setVisible(False)

    def set_meeting(self, meeting: Optional[Meeting]) -> None:
        self._meeting = meeting
        self.setVisible(meeting is not None)
        if meeting is None:
            return
        ins = summarize_meeting(meeting)
        self._heading.setText(
            f"<b>{meeting.title}</b><br/>{format_date(meeting.date)} • {ins.duration_minutes} minutes"
        )
        color = _OVERALL_COLORS.get(ins.overall_status, "#16a34a")
        self._overall.setText(ins.overall_status)
        self._overall.setStyleSheet(f"color: {color}; font-weight: 600;")
        self._summary.setText(meeting.summary)
        self._counts.setText(
            f"Task updates: {ins.total_proposals}   Delayed: {ins.delayed}   Blocked: {ins.blocked}"
        )
        self._proposals.setText("<br/>".join(
            f"Task {p.task_id}: {p.reason} ({round(p.confidence * 100)}% confidence)"
            for p in meeting.proposals
        ))

    def _show_transcript(self) -> None:
        if self._meeting is not None:
            TranscriptDialog(self._meeting, self).exec()
