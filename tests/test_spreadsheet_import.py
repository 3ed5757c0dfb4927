# tests/test_spreadsheet_import.py
from __future__ import annotations

from datetime import datetime

import pytest
from openpyxl import Workbook

from ganttz.models.types import AuditKind, Priority, Status
from ganttz.services.errors import ImportParseError
from ganttz.services.spreadsheet_import import (
    import_tasks,
    parse_date,
    parse_progress,
    tasks_from_rows,
)


def test_row_with_only_a_name_gets_defaults(clock, ids):
    [task] = tasks_from_rows([(2, {"Task": "X"})], clock=clock, id_factory=ids)

    assert task.id == "1"
    assert task.name == "X"
    assert task.duration == 1
    assert task.progress == 0
    assert task.assignee == "Unassigned"
    assert task.priority is Priority.MEDIUM
    assert task.status is Status.NOT_STARTED
    assert task.start_date == clock()
    assert task.end_date == clock()
    assert task.pending_proposal is None

    [entry] = task.audit_trail
    assert entry.kind is AuditKind.SYSTEM
    assert entry.field == "imported"
    assert entry.reason == "Initial import"


def test_first_non_empty_alias_wins(clock):
    rows = [
        (2, {"Task Name": "A", "Name": "B"}),
        (3, {"Task Name": "  ", "Name": "B"}),
        (4, {"Resource": "Lee", "% Complete": "45%"}),
    ]
    a, b, c = tasks_from_rows(rows, clock=clock)
    assert (a.name, b.name) == ("A", "B")
    assert c.name == "Task 3"
    assert (c.assignee, c.progress) == ("Lee", 45)


def test_aliases_are_case_sensitive(clock):
    [task] = tasks_from_rows([(2, {"task name": "lowercase"})], clock=clock)
    assert task.name == "Task 1"


def test_blank_rows_are_skipped_and_ids_stay_dense(clock):
    rows = [(2, {"Task": "A"}), (3, {"Task": "", "Status": None}), (4, {"Task": "B"})]
    tasks = tasks_from_rows(rows, clock=clock)
    assert [(t.id, t.name) for t in tasks] == [("1", "A"), ("2", "B")]


def test_bad_value_reports_row_and_column(clock):
    rows = [(2, {"Task": "A"}), (3, {"Task": "B", "Status": "Finished"})]
    with pytest.raises(ImportParseError) as exc:
        tasks_from_rows(rows, path="plan.csv", clock=clock)
    assert exc.value.row == 3
    assert exc.value.column == "Status"
    assert "plan.csv" in str(exc.value)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-01-05", datetime(2024, 1, 5)),
        ("01/05/2024", datetime(2024, 1, 5)),
        ("Jan 05, 2024", datetime(2024, 1, 5)),
        (45292, datetime(2024, 1, 1)),
    ],
)
def test_parse_date_accepts_common_spellings(raw, expected):
    assert parse_date(raw) == expected


def test_parse_progress_bounds():
    assert parse_progress("100") == 100
    with pytest.raises(ValueError):
        parse_progress(150)


def test_import_csv(tmp_path, clock):
    path = tmp_path / "plan.csv"
    path.write_text(
        "Task Name,Start Date,End Date,Duration,Progress,Assignee,Priority,Status\n"
        "Kickoff,2024-01-01,2024-01-03,2,100,Ana,high,Completed\n"
        ",,,,,,,\n"
        "Build,2024-01-04,2024-02-01,28,10,Ben,Low,in progress\n",
        encoding="utf-8",
    )
    tasks = import_tasks(path, clock=clock)

    assert [t.name for t in tasks] == ["Kickoff", "Build"]
    kickoff, build = tasks
    assert kickoff.priority is Priority.HIGH
    assert kickoff.status is Status.COMPLETED
    assert build.status is Status.IN_PROGRESS
    assert build.end_date == datetime(2024, 2, 1)
    assert build.audit_trail[0].new_value == "imported from plan.csv"


def test_import_xlsx(tmp_path, clock):
    wb = Workbook()
    ws = wb.active
    ws.append(["Name", "Start Date", "End Date", "Progress", "Status"])
    ws.append(["Design", datetime(2024, 1, 20), datetime(2024, 2, 10), 45, "Delayed"])
    path = tmp_path / "plan.xlsx"
    wb.save(path)

    [task] = import_tasks(path, clock=clock)
    assert task.name == "Design"
    assert task.start_date == datetime(2024, 1, 20)
    assert task.progress == 45
    assert task.status is Status.DELAYED


def test_unsupported_extension(tmp_path):
    path = tmp_path / "plan.txt"
    path.write_text("Task\nA\n", encoding="utf-8")
    with pytest.raises(ImportParseError, match="unsupported file type"):
        import_tasks(path)


def test_missing_file(tmp_path):
    with pytest.raises(ImportParseError, match="file not found"):
        import_tasks(tmp_path / "nope.csv")


def test_corrupt_workbook(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"this is not a zip archive")
    with pytest.raises(ImportParseError, match="unreadable spreadsheet"):
        import_tasks(path)


def test_zero_falls_through_to_later_alias(clock):
    rows = [
        (2, {"Task": "A", "Progress": 0, "% Complete": 60}),
        (3, {"Task": "B", "Progress": "0", "% Complete": "75%"}),
        (4, {"Task": "C", "Progress": 0, "% Complete": ""}),
        (5, {"Task": "D", "Duration": 0}),
    ]
    a, b, c, d = tasks_from_rows(rows, clock=clock)
    assert (a.progress, b.progress, c.progress) == (60, 75, 0)
    assert d.duration == 0
