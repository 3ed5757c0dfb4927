# ganttZ type definitions
# Rev 0.1.0

from __future__ import annotations
from enum import Enum


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Status(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    DELAYED = "Delayed"
    BLOCKED = "Blocked"


class AuditKind(str, Enum):
    """Where a change came from: the user, a meeting proposal, or the app."""
    MANUAL = "manual"
    MEETING = "meeting"
    SYSTEM = "system"


class TrackedField(str, Enum):
    NAME = "name"
    START_DATE = "start_date"
    END_DATE = "end_date"
    DURATION = "duration"
    PROGRESS = "progress"
    ASSIGNEE = "assignee"
    PRIORITY = "priority"
    STATUS = "status"
    DEPENDENCIES = "dependencies"


TRACKED_FIELD_NAMES = frozenset(f.value for f in TrackedField)

