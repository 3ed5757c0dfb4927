# tests/test_viewmodels.py
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from ganttz.models.entities import AuditEntry
from ganttz.models.types import AuditKind, Status
from ganttz.viewmodels.gantt_viewmodel import GanttViewModel
from ganttz.viewmodels.history_viewmodel import HistoryViewModel, format_date, format_value

from conftest import make_proposal, make_task


def _entry(entry_id, field, old, new, *, kind=AuditKind.MANUAL, meeting_id=None, reason=None):
    return AuditEntry(
        id=entry_id, timestamp=datetime(2024, 1, 2, 12, tzinfo=timezone.utc), kind=kind,
        field=field, old_value=old, new_value=new, reason=reason, meeting_id=meeting_id,
    )


def test_history_rows_newest_first_with_summaries():
    entries = [
        _entry("a1", "imported", None, "imported from plan.csv", kind=AuditKind.SYSTEM),
        _entry("a2", "status", Status.IN_PROGRESS, Status.DELAYED,
               kind=AuditKind.MEETING, meeting_id="meeting-1", reason=" slipped "),
        _entry("a3", "progress", 40, 55),
    ]
    rows = HistoryViewModel().load(entries)

    assert [r["id"] for r in rows] == ["a3", "a2", "a1"]
    assert rows[0]["summary"] == "Progress: 40% → 55%"
    assert rows[1]["summary"] == "Status: In Progress → Delayed"
    assert rows[1]["kind"] == "meeting"
    assert rows[1]["meeting_id"] == "meeting-1"
    assert rows[1]["reason"] == "slipped"
    assert rows[2]["summary"] == "imported from plan.csv"


def test_history_rows_oldest_first():
    entries = [_entry("a1", "progress", 0, 10), _entry("a2", "progress", 10, 20)]
    rows = HistoryViewModel().load(entries, newest_first=False)
    assert [r["id"] for r in rows] == ["a1", "a2"]


def test_format_helpers():
    assert format_date(None) == "—"
    assert format_date(datetime(2024, 1, 5)) == "Jan 05, 2024"
    assert format_value("end_date", datetime(2024, 1, 25)) == "Jan 25, 2024"
    assert format_value("dependencies", ("2", "3")) == "2, 3"
    assert format_value("assignee", None) == "—"


def test_describe_proposal():
    lines = HistoryViewModel.describe_proposal(
        make_proposal("2", proposed_end_date=datetime(2024, 1, 25), confidence=0.92)
    )
    assert lines == [
        "Status: Delayed",
        "Progress: 40%",
        "End: Jan 25, 2024",
        "Reason: Mentioned in meeting",
        "Confidence: 92%  ·  meeting-a",
    ]
    assert HistoryViewModel.describe_proposal(None) == []


def test_gantt_rows_carry_geometry_and_pending_flag():
    vm = GanttViewModel()
    tasks = [
        make_task("A", "2024-01-01", "2024-01-10"),
        replace(make_task("B", "2024-01-05", "2024-01-20"), pending_proposal=make_proposal("B")),
    ]
    rows = vm.rows(tasks)

    assert [r["id"] for r in rows] == ["A", "B"]
    assert rows[0]["offset"] == 0.0
    assert rows[1]["pending"] is True
    assert rows[0]["pending"] is False
    assert rows[0]["dates"] == "Jan 01, 2024 - Jan 10, 2024"
    assert vm.axis_label() == "Jan 01, 2024 → Jan 20, 2024"


def test_gantt_axis_label_empty():
    vm = GanttViewModel()
    assert vm.rows([]) == []
    assert vm.axis_label() == ""
