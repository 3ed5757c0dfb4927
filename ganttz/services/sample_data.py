# Rev 0.1.0
"""Built-in demo project used by "Load Sample"."""
from __future__ import annotations

from datetime import datetime
from typing import List

from ganttz.models.entities import AuditEntry, Task
from ganttz.models.types import AuditKind, Priority, Status

SAMPLE_FILE_NAME = "sample-project.xlsx"


def _d(s: str) -> datetime:
    return datetime.fromisoformat(s)


def _status_entry(entry_id: str, when: str, old: Status, new: Status, reason: str,
                  *, kind: AuditKind = AuditKind.MANUAL, meeting_id: str | None = None) -> AuditEntry:
    return AuditEntry(
        id=entry_id, timestamp=_d(when), kind=kind, field="status",
        old_value=old, new_value=new, reason=reason, meeting_id=meeting_id,
    )


def sample_tasks() -> List[Task]:
    return [
        Task(
            id="1", name="Project Planning",
            start_date=_d("2024-01-01"), end_date=_d("2024-01-15"),
            duration=14, progress=100, assignee="John Doe",
            priority=Priority.HIGH, status=Status.COMPLETED,
            audit_trail=(
                _status_entry("audit-1", "2024-01-01", Status.NOT_STARTED, Status.IN_PROGRESS, "Project kickoff"),
                _status_entry("audit-2", "2024-01-15", Status.IN_PROGRESS, Status.COMPLETED,
                              "All planning documents finalized"),
            ),
        ),
        Task(
            id="2", name="Requirements Gathering",
            start_date=_d("2024-01-10"), end_date=_d("2024-01-25"),
            duration=15, progress=80, assignee="Jane Smith",
            priority=Priority.HIGH, status=Status.IN_PROGRESS,
            audit_trail=(
                _status_entry("audit-3", "2024-01-10", Status.NOT_STARTED, Status.IN_PROGRESS,
                              "Started stakeholder interviews"),
            ),
        ),
        Task(
            id="3", name="Design Phase",
            start_date=_d("2024-01-20"), end_date=_d("2024-02-10"),
            duration=21, progress=45, assignee="Mike Johnson",
            priority=Priority.MEDIUM, status=Status.DELAYED,
            dependencies=("2",),
            audit_trail=(
                _status_entry("audit-4", "2024-01-20", Status.NOT_STARTED, Status.IN_PROGRESS, "Design work started"),
                _status_entry("audit-5", "2024-02-01", Status.IN_PROGRESS, Status.DELAYED,
                              "Waiting for client feedback on mockups",
                              kind=AuditKind.MEETING, meeting_id="meeting-1"),
            ),
        ),
    ]
