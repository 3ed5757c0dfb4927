# Rev 0.1.0: audit trail cards, one per field change
from __future__ import annotations
from typing import List, Dict, Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QScrollArea, QFrame, QSizePolicy

_KIND_STYLES = {
    "manual":  ("#0066cc", "#e6f2ff"),
    "meeting": ("#aa4400", "#fff2e6"),
    "system":  ("#555555", "#f2f2f2"),
}


class HistoryPanel(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)

        self._title = QLabel("Audit Trail")
        self._title.setObjectName("HistoryPanelTitle")
        self._title.setSizePolicy(QSizePolicy.Preferred, QSizePolicy.Fixed)

        self._count = QLabel("")
        self._count.setProperty("dim", True)

        header = QHBoxLayout()
        header.setContentsMargins(12, 8, 12, 0)
        header.addWidget(self._title, 1)
        header.addWidget(self._count, 0, Qt.AlignRight)

        self._list_layout = QVBoxLayout()
        self._list_layout.setContentsMargins(12, 8, 12, 12)
        self._list_layout.setSpacing(8)

        body = QWidget()
        body.setObjectName("HistoryPanelBody")
        body.setLayout(self._list_layout)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setWidget(body)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addLayout(header)
        root.addWidget(self._scroll, 1)

        self.set_updates([])

    # ---- Public API
    def set_updates(self, updates: List[Dict[str, Any]], subject: str = "") -> None:
        self._title.setText(f"Audit Trail: {subject}" if subject else "Audit Trail")
        self._count.setText(f"{len(updates)} change(s)" if updates else "")
        self._clear()
        if not updates:
            self._list_layout.addWidget(self._empty_state())
            self._list_layout.addStretch(1)
            return
        for u in updates:
            self._list_layout.addWidget(self._make_card(u))
        self._list_layout.addStretch(1)

    # ---- Internals
    def _clear(self) -> None:
        while (item := self._list_layout.takeAt(0)):
            w = item.widget()
            if w: w.deleteLater()

    def _empty_state(self) -> QWidget:
        box = QFrame()
        box.setFrameShape(QFrame.StyledPanel)
        lay = QVBoxLayout(box)
        lbl = QLabel("No history yet. Select a task to see its changes here.")
        lbl.setAlignment(Qt.AlignCenter)
        lbl.setObjectName("HistoryEmpty")
        lay.addWidget(lbl)
        return box

    def _make_card(self, u: Dict[str, Any]) -> QWidget:
        kind = u.get("kind") or "manual"

        card = QFrame()
        card.setObjectName("HistoryCard")
        card.setFrameShape(QFrame.StyledPanel)
        card.setProperty("historyKind", kind)

        outer = QVBoxLayout(card)
        outer.setContentsMargins(12, 8, 12, 8)
        outer.setSpacing(6)

        # row 1: timestamp + badge
        row1 = QHBoxLayout()
        row1.setSpacing(8)
        ts_lbl = QLabel(u.get("updated_local") or ""); ts_lbl.setObjectName("HistoryTimestamp"); ts_lbl.setProperty("dim", True)
        row1.addWidget(ts_lbl, 1)
        row1.addWidget(self._badge(kind), 0, Qt.AlignRight)
        outer.addLayout(row1)

        s_lbl = QLabel(u.get("summary") or ""); s_lbl.setObjectName("HistorySummary")
        outer.addWidget(s_lbl)

        reason = u.get("reason") or ""
        if reason:
            r_lbl = QLabel(reason); r_lbl.setWordWrap(True); r_lbl.setObjectName("HistoryNote")
            outer.addWidget(r_lbl)

        if u.get("meeting_id"):
            m_lbl = QLabel(f"From {u['meeting_id']}"); m_lbl.setProperty("dim", True)
            outer.addWidget(m_lbl)

        return card

    @staticmethod
    def _badge(kind: str) -> QLabel:
        fg, bg = _KIND_STYLES.get(kind, ("#444444", "#eeeeee"))
        lab = QLabel(kind)
        lab.setObjectName("HistoryBadge")
        lab.setStyleSheet(
            "QLabel#HistoryBadge {"
            f"  color: {fg};"
            f"  background-color: {bg};"
            f"  border: 1px solid {fg};"
            "  border-radius: 6px;"
            "  padding: 2px 6px;"
            "}"
        )
        lab.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        return lab
