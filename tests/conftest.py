# Rev 0.1.0

"""Pytest fixtures for ganttZ (Rev 0.1.0)"""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
import itertools

import pytest

from ganttz.models.entities import Proposal, Task
from ganttz.models.types import Priority, Status
from ganttz.repositories.memory_task_repository import MemoryTaskRepository
from ganttz.services.reconciliation_service import ReconciliationService
from ganttz.services.task_service import TaskService


class FixedClock:
    """Deterministic clock; advance() moves it forward."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kw) -> None:
        self.now = self.now + timedelta(**kw)


class SeqIds:
    def __init__(self, prefix: str = "audit-t"):
        self._prefix = prefix
        self._n = itertools.count(1)

    def __call__(self) -> str:
        return f"{self._prefix}{next(self._n)}"


def make_task(task_id: str, start: str = "2024-01-01", end: str = "2024-01-10", **kw) -> Task:
    defaults = dict(
        name=f"Task {task_id}",
        duration=9,
        progress=0,
        assignee="Unassigned",
        priority=Priority.MEDIUM,
        status=Status.IN_PROGRESS,
    )
    defaults.update(kw)
    return Task(
        id=task_id,
        start_date=datetime.fromisoformat(start),
        end_date=datetime.fromisoformat(end),
        **defaults,
    )


def make_proposal(task_id: str, meeting_id: str = "meeting-a", n: int = 1, **kw) -> Proposal:
    fields = dict(
        reason="Mentioned in meeting",
        confidence=0.9,
        proposed_status=Status.DELAYED,
        proposed_progress=40,
    )
    fields.update(kw)
    return Proposal(
        id=f"{meeting_id}-proposal-{n}",
        task_id=task_id,
        meeting_id=meeting_id,
        timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc),
        **fields,
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def ids() -> SeqIds:
    return SeqIds()


@pytest.fixture()
def repo() -> MemoryTaskRepository:
    return MemoryTaskRepository([
        make_task("1", name="Planning"),
        make_task("2", "2024-01-05", "2024-01-20", name="Design", priority=Priority.HIGH),
    ])


@pytest.fixture()
def task_service(repo, clock, ids) -> TaskService:
    return TaskService(repo, clock=clock, id_factory=ids)


@pytest.fixture()
def reconciliation(task_service) -> ReconciliationService:
    return ReconciliationService(task_service)
