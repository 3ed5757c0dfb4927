# Rev 0.1.0
# ganttz/viewmodels/history_viewmodel.py
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ganttz.models.entities import AuditEntry, Proposal

_FIELD_LABELS = {
    "name": "Name",
    "start_date": "Start",
    "end_date": "End",
    "duration": "Duration",
    "progress": "Progress",
    "assignee": "Assignee",
    "priority": "Priority",
    "status": "Status",
    "dependencies": "Dependencies",
    "imported": "Imported",
}


def format_date(value: Optional[datetime]) -> str:
    """'Jan 05, 2024' or '—'."""
    if value is None:
        return "—"
    return value.strftime("%b %d, %Y")


def format_value(field: str, value: Any) -> str:
    if value is None:
        return "—"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return format_date(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) or "—"
    if field == "progress":
        return f"{value}%"
    return str(value)


def _local(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone().strftime("%b %d %Y %H:%M")


class HistoryViewModel:
    """Decorate audit entries with display strings for the history panel."""

    def load(self, entries: Iterable[AuditEntry], *, newest_first: bool = True) -> List[Dict[str, Any]]:
        rows = [self._decorate(e) for e in entries]
        return rows[::-1] if newest_first else rows

    @staticmethod
    def _decorate(e: AuditEntry) -> Dict[str, Any]:
        label = _FIELD_LABELS.get(e.field, e.field)
        if e.field == "imported":
            summary = str(e.new_value or "Imported")
        else:
            summary = f"{label}: {format_value(e.field, e.old_value)} → {format_value(e.field, e.new_value)}"
        return {
            "id": e.id,
            "kind": e.kind.value,
            "field": e.field,
            "summary": summary,
            "reason": (e.reason or "").strip(),
            "meeting_id": e.meeting_id,
            "updated_local": _local(e.timestamp),
        }

    @staticmethod
    def describe_proposal(p: Optional[Proposal]) -> List[str]:
        if p is None:
            return []
        lines = [
            f"{_FIELD_LABELS.get(field, field)}: {format_value(field, value)}"
            for field, value in p.field_changes().items()
        ]
        lines.append(f"Reason: {p.reason}")
        lines.append(f"Confidence: {round(p.confidence * 100)}%  ·  {p.meeting_id}")
        return lines
