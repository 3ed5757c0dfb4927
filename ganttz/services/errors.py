# Rev 0.1.0
"""Error taxonomy for ganttZ services.

Every error is scoped to the operation that raised it; the store is left as
it was before the call.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Optional, Union


class GanttzError(Exception):
    """Base class for recoverable application errors."""


class ImportParseError(GanttzError):
    def __init__(
        self,
        path: Union[str, Path, None],
        message: str,
        *,
        row: Optional[int] = None,
        column: Optional[str] = None,
    ):
        self.path = str(path) if path is not None else None
        self.row = row
        self.column = column
        where = []
        if row is not None:
            where.append(f"row {row}")
        if column is not None:
            where.append(f"column {column!r}")
        loc = f" ({', '.join(where)})" if where else ""
        src = f"{self.path}: " if self.path else ""
        super().__init__(f"{src}{message}{loc}")


class TaskNotFoundError(GanttzError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"task {task_id!r} does not exist")


class NoPendingProposalError(GanttzError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"task {task_id!r} has no pending proposal")


class InvalidTaskUpdateError(GanttzError):
    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(f"{field}={value!r}: {message}")


class RecordingPermissionError(GanttzError):
    """Audio capture was refused (microphone permission or device denial)."""


class RecordingStateError(GanttzError):
    """Recorder command issued in a state that does not allow it."""
