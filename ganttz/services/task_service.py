# Rev 0.1.0

"""Task service (Rev 0.1.0)
Apply validated field updates to tasks and record one audit entry per
field that actually changed.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ganttz.models.entities import AuditEntry, Task
from ganttz.models.types import AuditKind, Priority, Status, TRACKED_FIELD_NAMES
from ganttz.repositories.memory_task_repository import MemoryTaskRepository
from ganttz.services.audit import (
    Clock, IdFactory, diff_fields, epoch_millis, make_entry, new_audit_id, utcnow,
)
from ganttz.services.errors import InvalidTaskUpdateError, TaskNotFoundError
from ganttz.utils.logging_setup import get_logger


class TaskService:
    def __init__(
        self,
        repo: MemoryTaskRepository,
        *,
        clock: Clock = utcnow,
        id_factory: IdFactory = new_audit_id,
    ):
        self._repo = repo
        self._clock = clock
        self._id_factory = id_factory
        self._log = get_logger("TaskService")

    # ---- queries
    def get_task(self, task_id: str) -> Task:
        task = self._repo.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def list_tasks(self) -> List[Task]:
        return self._repo.list_tasks()

    def history(self, task_id: str, *, newest_first: bool = True) -> List[AuditEntry]:
        trail = list(self.get_task(task_id).audit_trail)
        return trail[::-1] if newest_first else trail

    # ---- commands
    def replace_all(self, tasks: Iterable[Task]) -> List[Task]:
        self._repo.replace_all(tasks)
        self._log.info("Task store replaced; %d task(s)", self._repo.count())
        return self._repo.list_tasks()

    def save(self, task: Task) -> Task:
        self._repo.save(task)
        return task

    def apply_update(
        self,
        task_id: str,
        field_changes: Mapping[str, Any],
        reason: Optional[str] = None,
        *,
        kind: AuditKind = AuditKind.MANUAL,
        meeting_id: Optional[str] = None,
    ) -> Task:
        """
        Commit every changed field and append one audit entry per change.
        Any pending proposal on the task is cleared, whether or not a
        field changed.
        """
        task = self.get_task(task_id)
        coerced = self._validate(task, field_changes)

        entries = []
        values: Dict[str, Any] = {}
        for name, old, new in diff_fields(task, coerced):
            entries.append(make_entry(
                name, old, new,
                kind=kind, reason=reason, meeting_id=meeting_id,
                clock=self._clock, id_factory=self._id_factory,
            ))
            values[name] = new

        if not entries and task.pending_proposal is None:
            return task

        updated = replace(
            task,
            **values,
            audit_trail=task.audit_trail + tuple(entries),
            pending_proposal=None,
        )
        self._repo.save(updated)
        self._log.info(
            "Task %s updated (%s): %s",
            task_id, kind.value, ", ".join(values) or "no field changes",
        )
        return updated

    # ---- validation
    def _validate(self, task: Task, changes: Mapping[str, Any]) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name, value in changes.items():
            if name not in TRACKED_FIELD_NAMES:
                raise InvalidTaskUpdateError(name, value, "not an editable task field")
            out[name] = _COERCERS[name](name, value)

        start = out.get("start_date", task.start_date)
        end = out.get("end_date", task.end_date)
        if epoch_millis(end) < epoch_millis(start):
            raise InvalidTaskUpdateError("end_date", end, "ends before the task starts")
        return out


def _enum(cls):
    def coerce(name: str, value: Any):
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise InvalidTaskUpdateError(name, value, f"expected one of: {allowed}") from None
    return coerce


def _progress(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTaskUpdateError(name, value, "expected an integer")
    if not 0 <= value <= 100:
        raise InvalidTaskUpdateError(name, value, "must be between 0 and 100")
    return value


def _duration(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidTaskUpdateError(name, value, "expected a non-negative integer")
    return value


def _timestamp(name: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise InvalidTaskUpdateError(name, value, "expected a date or datetime")


def _name(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidTaskUpdateError(name, value, "expected a non-empty string")
    return value.strip()


def _assignee(name: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidTaskUpdateError(name, value, "expected a string")
    return value.strip() or None


def _dependencies(name: str, value: Any) -> tuple:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidTaskUpdateError(name, value, "expected a list of task ids")
    return tuple(str(v) for v in value)


_COERCERS = {
    "name": _name,
    "start_date": _timestamp,
    "end_date": _timestamp,
    "duration": _duration,
    "progress": _progress,
    "assignee": _assignee,
    "priority": _enum(Priority),
    "status": _enum(Status),
    "dependencies": _dependencies,
}
