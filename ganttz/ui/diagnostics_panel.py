# ganttZ diagnostics panel
# Rev 0.1.0

from __future__ import annotations
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPlainTextEdit, QPushButton, QLabel

from ganttz.utils.logging_setup import log_file_path

_MAX_LINES = 400
_REFRESH_MS = 2000


def tail_lines(path: Path, max_lines: int = _MAX_LINES) -> str:
    """Last ``max_lines`` lines of ``path``, or a placeholder when it cannot be read."""
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
    except FileNotFoundError:
        return "(no log written yet)"
    except OSError as e:
        return f"(error reading log: {e})"
    return "".join(lines[-max_lines:])


class DiagnosticsPanel(QWidget):
    """Log tail for the diagnostics dock; polls only while visible."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("DiagnosticsPanel")
        self._path = log_file_path()

        self._lbl = QLabel(f"Log: {self._path}")
        self._lbl.setProperty("dim", True)
        self._btn_refresh = QPushButton("Refresh")
        self._btn_auto = QPushButton("Auto: On")
        self._btn_auto.setCheckable(True)
        self._btn_auto.setChecked(True)

        top = QHBoxLayout()
        top.addWidget(self._lbl, 1)
        top.addWidget(self._btn_refresh)
        top.addWidget(self._btn_auto)

        self._view = QPlainTextEdit(self)
        self._view.setReadOnly(True)
        self._view.setLineWrapMode(QPlainTextEdit.NoWrap)

        layout = QVBoxLayout(self)
        layout.addLayout(top)
        layout.addWidget(self._view, 1)

        self._timer = QTimer(self)
        self._timer.setInterval(_REFRESH_MS)
        self._timer.timeout.connect(self.refresh)

        self._btn_refresh.clicked.connect(self.refresh)
        self._btn_auto.toggled.connect(self._on_auto_toggled)

    def refresh(self) -> None:
        self._view.setPlainText(tail_lines(self._path))
        self._view.moveCursor(QTextCursor.End)

    def _on_auto_toggled(self, on: bool) -> None:
        self._btn_auto.setText("Auto: On" if on else "Auto: Off")
        if on and self.isVisible():
            self._timer.start()
        else:
            self._timer.stop()

    def showEvent(self, ev):
        self.refresh()
        if self._btn_auto.isChecked():
            self._timer.start()
        super().showEvent(ev)

    def hideEvent(self, ev):
        self._timer.stop()
        super().hideEvent(ev)
