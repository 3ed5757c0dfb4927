# Rev 0.1.0

"""Meeting recording session (Rev 0.1.0)
Pure state machine; the view model owns the 1 Hz timer and calls tick().
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from ganttz.services.errors import RecordingPermissionError, RecordingStateError
from ganttz.utils.logging_setup import get_logger


class RecordingState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    PAUSED = "paused"


@dataclass(frozen=True)
class RecordingResult:
    title: str
    duration_seconds: int
    audio: bytes = b""


class AudioCapture(Protocol):
    """Opaque audio source. ``start`` raises RecordingPermissionError when denied."""
    def start(self) -> None: ...

    def stop(self) -> bytes: ...


class SimulatedAudioCapture:
    """No device access; always granted, yields an empty payload."""

    def start(self) -> None:
        pass

    def stop(self) -> bytes:
        return b""


class RecordingSession:
    def __init__(self, capture: Optional[AudioCapture] = None):
        self._capture = capture or SimulatedAudioCapture()
        self._state = RecordingState.IDLE
        self._elapsed = 0
        self._title = ""
        self._log = get_logger("RecordingSession")

    @property
    def state(self) -> RecordingState:
        return self._state

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def title(self) -> str:
        return self._title

    @property
    def is_active(self) -> bool:
        return self._state is not RecordingState.IDLE

    def start(self, title: str) -> None:
        if self.is_active:
            raise RecordingStateError("a recording is already in progress")
        if not (title or "").strip():
            raise RecordingStateError("a meeting title is required to start recording")
        try:
            self._capture.start()
        except RecordingPermissionError:
            self._log.warning("Audio capture denied; recording not started")
            raise
        self._title = title.strip()
        self._elapsed = 0
        self._state = RecordingState.RECORDING
        self._log.info("Recording started: %s", self._title)

    def pause(self) -> None:
        if self._state is not RecordingState.RECORDING:
            raise RecordingStateError("nothing is being recorded")
        self._state = RecordingState.PAUSED

    def resume(self) -> None:
        if self._state is not RecordingState.PAUSED:
            raise RecordingStateError("recording is not paused")
        self._state = RecordingState.RECORDING

    def toggle_pause(self) -> None:
        if self._state is RecordingState.PAUSED:
            self.resume()
        else:
            self.pause()

    def tick(self, seconds: int = 1) -> int:
        """Advance the clock; ignored unless actively recording."""
        if self._state is RecordingState.RECORDING:
            self._elapsed += seconds
        return self._elapsed

    def stop(self) -> RecordingResult:
        if not self.is_active:
            raise RecordingStateError("no recording to stop")
        audio = self._capture.stop()
        result = RecordingResult(title=self._title, duration_seconds=self._elapsed, audio=audio)
        self._log.info("Recording stopped after %ds", self._elapsed)
        self._state = RecordingState.IDLE
        self._elapsed = 0
        self._title = ""
        return result


def format_elapsed(seconds: int) -> str:
    mins, secs = divmod(max(int(seconds), 0), 60)
    return f"{mins:02d}:{secs:02d}"
