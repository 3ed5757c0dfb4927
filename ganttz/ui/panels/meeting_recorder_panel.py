# Rev 0.1.0
from __future__ import annotations

from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QLineEdit, QPushButton, QVBoxLayout

from ganttz.services.recording import RecordingState, format_elapsed
from ganttz.viewmodels.meeting_recorder_viewmodel import MeetingRecorderViewModel


class MeetingRecorderPanel(QFrame):
    def __init__(self, vm: MeetingRecorderViewModel, parent=None):
        super().__init__(parent)
        self.setObjectName("Card")
        self._vm = vm

        title = QLabel("Meeting Recorder"); title.setObjectName("CardTitle")
        hint = QLabel("Record a project meeting; proposed task changes appear in Task Management for review.")
        hint.setWordWrap(True); hint.setProperty("dim", True)

        self._title = QLineEdit()
        self._title.setPlaceholderText("Enter meeting title...")
        self._clock = QLabel("00:00")
        self._clock.setStyleSheet("font-family: monospace; font-size: 18px;")
        self._badge = QLabel("")

        self._btn_start = QPushButton("Start Recording")
        self._btn_pause = QPushButton("Pause")
        self._btn_stop = QPushButton("Stop && Analyze")
        self._btn_cancel = QPushButton("Cancel Analysis")

        row = QHBoxLayout()
        row.addWidget(self._clock)
        row.addWidget(self._badge)
        row.addStretch(1)
        for b in (self._btn_start, self._btn_pause, self._btn_stop, self._btn_cancel):
            row.addWidget(b)

        lay = QVBoxLayout(self)
        lay.addWidget(title)
        lay.addWidget(hint)
        lay.addWidget(self._title)
        lay.addLayout(row)

        self._btn_start.clicked.connect(lambda: self._vm.start(self._title.text()))
        self._btn_pause.clicked.connect(self._vm.toggle_pause)
        self._btn_stop.clicked.connect(self._vm.stop)
        self._btn_cancel.clicked.connect(self._vm.cancel_analysis)
        self._title.textChanged.connect(lambda _t: self._sync())

        vm.elapsedChanged.connect(lambda s: self._clock.setText(format_elapsed(s)))
        vm.stateChanged.connect(self._on_state)
        vm.analyzingChanged.connect(lambda _busy: self._sync())
        self._sync()

    def _on_state(self, state: str) -> None:
        if state == RecordingState.IDLE.value:
            self._title.clear()
        self._sync()

    def _sync(self) -> None:
        state = self._vm.session.state
        active = state is not RecordingState.IDLE
        busy = self._vm.is_analyzing

        self._title.setEnabled(not active)
        self._btn_start.setVisible(not active)
        self._btn_start.setEnabled(bool(self._title.text().strip()) and not busy)
        self._btn_pause.setVisible(active)
        self._btn_pause.setText("Resume" if state is RecordingState.PAUSED else "Pause")
        self._btn_stop.setVisible(active)
        self._btn_cancel.setVisible(busy)

        if busy:
            self._badge.setText("Analyzing…")
        elif active:
            self._badge.setText("Paused" if state is RecordingState.PAUSED else "● Recording")
        else:
            self._badge.setText("")
