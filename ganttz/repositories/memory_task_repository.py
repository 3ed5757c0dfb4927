# Rev 0.1.0
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ganttz.models.entities import Task


class MemoryTaskRepository:
    """
    Ordered, session-only task store.

    Tasks are immutable; writes replace the stored record by id and keep
    first insertion order.
    """

    def __init__(self, tasks: Iterable[Task] = ()):
        self._tasks: Dict[str, Task] = {}
        self.replace_all(tasks)

    # -------------------------
    # Queries
    # -------------------------
    def get_task(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def list_tasks(self) -> List[Task]:
        return list(self._tasks.values())

    def count(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    # -------------------------
    # Commands
    # -------------------------
    def replace_all(self, tasks: Iterable[Task]) -> None:
        fresh: Dict[str, Task] = {}
        for t in tasks:
            if t.id in fresh:
                raise ValueError(f"duplicate task id {t.id!r}")
            fresh[t.id] = t
        self._tasks = fresh

    def save(self, task: Task) -> None:
        """Replace an existing task in place; unknown ids are appended."""
        self._tasks[task.id] = task
