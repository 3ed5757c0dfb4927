# Rev 0.1.0: Gantt rows: name/status header + bar on the shared axis
from __future__ import annotations
from typing import Any, Dict, List

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QScrollArea, QFrame, QSizePolicy

from ganttz.ui.themes import Theme, get_theme
from ganttz.viewmodels.gantt_viewmodel import GanttViewModel


class _BarTrack(QWidget):
    """Paints one task bar at (offset, width) fractions of its own width."""

    def __init__(self, offset: float, width: float, progress: int, color: str, parent=None):
        super().__init__(parent)
        self._offset = offset
        self._width = width
        self._progress = progress
        self._color = QColor(color)
        self.setFixedHeight(22)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

    def paintEvent(self, _ev):
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing)
        full = QRectF(self.rect())
        p.setPen(Qt.NoPen)
        p.setBrush(QColor("#e5e7eb"))
        p.drawRoundedRect(full, 4, 4)

        bar = QRectF(full.width() * self._offset, 0, full.width() * self._width, full.height())
        p.setBrush(self._color)
        p.drawRoundedRect(bar, 4, 4)

        if self._progress > 0:
            p.setPen(QColor("#ffffff"))
            p.drawText(bar, Qt.AlignCenter, f"{self._progress}%")
        p.end()


class GanttPanel(QWidget):
    def __init__(self, vm: GanttViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm
        self._theme: Theme = get_theme("default")

        self._axis = QLabel("")
        self._axis.setProperty("dim", True)

        self._rows = QVBoxLayout()
        self._rows.setContentsMargins(8, 8, 8, 8)
        self._rows.setSpacing(10)
        body = QWidget()
        body.setLayout(self._rows)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setWidget(body)

        title = QLabel("Project Timeline"); title.setObjectName("CardTitle")
        root = QVBoxLayout(self)
        root.addWidget(title)
        root.addWidget(self._axis)
        root.addWidget(scroll, 1)

    def set_theme(self, theme: Theme) -> None:
        self._theme = theme

    def set_tasks(self, tasks) -> None:
        self._clear()
        rows = self._vm.rows(tasks)
        self._axis.setText(self._vm.axis_label())
        for r in rows:
            self._rows.addWidget(self._make_row(r))
        self._rows.addStretch(1)

    def _clear(self) -> None:
        while (item := self._rows.takeAt(0)):
            w = item.widget()
            if w: w.deleteLater()

    def _make_row(self, r: Dict[str, Any]) -> QWidget:
        box = QWidget()
        lay = QVBoxLayout(box)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.setSpacing(4)

        head = QHBoxLayout()
        dot = QLabel("●")
        dot.setStyleSheet(f"color: {self._theme.priority_color(r['priority'])};")
        head.addWidget(dot)
        name = QLabel(r["name"]); name.setStyleSheet("font-weight: 600;")
        head.addWidget(name)
        head.addWidget(self._status_badge(r["status"]))
        if r["pending"]:
            head.addWidget(self._pill("Pending Changes", "#c2410c", "#fff7ed"))
        head.addStretch(1)
        dates = QLabel(r["dates"]); dates.setProperty("dim", True)
        head.addWidget(dates)
        lay.addLayout(head)

        lay.addWidget(_BarTrack(r["offset"], r["width"], r["progress"], self._theme.bar))
        return box

    def _status_badge(self, status: str) -> QLabel:
        fg, bg = self._theme.status_colors(status)
        return self._pill(status, fg, bg)

    @staticmethod
    def _pill(text: str, fg: str, bg: str) -> QLabel:
        lab = QLabel(text)
        lab.setStyleSheet(
            f"QLabel {{ color: {fg}; background-color: {bg}; border: 1px solid {fg};"
            " border-radius: 8px; padding: 1px 6px; font-size: 11px; }"
        )
        lab.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        return lab
