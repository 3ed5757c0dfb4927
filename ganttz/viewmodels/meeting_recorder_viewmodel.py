# Rev 0.1.0
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from ganttz.services.errors import GanttzError
from ganttz.services.project_controller import ProjectController
from ganttz.services.recording import RecordingResult, RecordingSession, RecordingState
from ganttz.utils.logging_setup import get_logger
from ganttz.viewmodels.project_viewmodel import ProjectViewModel


class MeetingRecorderViewModel(QObject):
    """
    Drives a RecordingSession from the Qt event loop.

    A repeating 1 s timer advances the session while recording; it is
    stopped on pause and on stop. After stop, a single-shot timer simulates
    analysis; cancel_analysis() aborts it before the meeting is produced.
    """

    elapsedChanged = Signal(int)
    stateChanged = Signal(str)             # RecordingState value
    analyzingChanged = Signal(bool)
    errorOccurred = Signal(str, str)       # title, message

    def __init__(
        self,
        session: RecordingSession,
        controller: ProjectController,
        project_vm: ProjectViewModel,
        *,
        analysis_delay_ms: int = 2000,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._session = session
        self._controller = controller
        self._project_vm = project_vm
        self._log = get_logger("MeetingRecorderViewModel")

        self._ticker = QTimer(self)
        self._ticker.setInterval(1000)
        self._ticker.timeout.connect(self._on_tick)

        self._analysis = QTimer(self)
        self._analysis.setSingleShot(True)
        self._analysis.setInterval(max(0, int(analysis_delay_ms)))
        self._analysis.timeout.connect(self._on_analysis_done)
        self._pending: Optional[RecordingResult] = None

    # ---- state
    @property
    def session(self) -> RecordingSession:
        return self._session

    @property
    def is_analyzing(self) -> bool:
        return self._pending is not None

    # ---- commands
    def start(self, title: str) -> bool:
        if self.is_analyzing:
            self.errorOccurred.emit("Recording", "The previous meeting is still being analysed.")
            return False
        try:
            self._session.start(title)
        except GanttzError as exc:
            self._report("Cannot start recording", exc)
            return False
        self._ticker.start()
        self.elapsedChanged.emit(0)
        self.stateChanged.emit(self._session.state.value)
        return True

    def toggle_pause(self) -> None:
        try:
            self._session.toggle_pause()
        except GanttzError as exc:
            self._report("Recording", exc)
            return
        if self._session.state is RecordingState.RECORDING:
            self._ticker.start()
        else:
            self._ticker.stop()
        self.stateChanged.emit(self._session.state.value)

    def stop(self) -> bool:
        self._ticker.stop()
        try:
            result = self._session.stop()
        except GanttzError as exc:
            self._report("Recording", exc)
            return False
        self.stateChanged.emit(self._session.state.value)
        self.elapsedChanged.emit(0)
        self._pending = result
        self._analysis.start()
        self.analyzingChanged.emit(True)
        return True

    def cancel_analysis(self) -> None:
        if self._pending is None:
            return
        self._analysis.stop()
        self._log.info("Analysis of %r cancelled", self._pending.title)
        self._pending = None
        self.analyzingChanged.emit(False)

    def shutdown(self) -> None:
        """Stop all timers; used when the window closes."""
        self._ticker.stop()
        self.cancel_analysis()

    # ---- timer slots
    def _on_tick(self) -> None:
        self.elapsedChanged.emit(self._session.tick())

    def _on_analysis_done(self) -> None:
        result, self._pending = self._pending, None
        self.analyzingChanged.emit(False)
        if result is None:
            return
        try:
            meeting = self._controller.analyze_recording(result)
        except GanttzError as exc:
            self._report("Analysis failed", exc)
            return
        self._project_vm.complete_meeting(meeting)

    def _report(self, title: str, exc: Exception) -> None:
        self._log.warning("%s: %s", title, exc)
        self.errorOccurred.emit(title, str(exc))
