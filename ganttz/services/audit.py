# Rev 0.1.0
"""Audit trail helpers: change detection and entry construction.

Equality policy for "did this field change":
  - datetimes compare as epoch milliseconds (naive values are taken as UTC)
  - enums compare by their value
  - lists/tuples compare element-wise as tuples
  - everything else uses ==
"""
from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ganttz.models.entities import AuditEntry, Task
from ganttz.models.types import AuditKind

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_audit_id() -> str:
    return f"audit-{uuid.uuid4().hex[:12]}"


def epoch_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def normalize_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return epoch_millis(value)
    if isinstance(value, date):
        return epoch_millis(datetime(value.year, value.month, value.day))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return tuple(normalize_value(v) for v in value)
    return value


def values_equal(a: Any, b: Any) -> bool:
    return normalize_value(a) == normalize_value(b)


def diff_fields(task: Task, changes: Dict[str, Any]) -> List[Tuple[str, Any, Any]]:
    """(field, old, new) for every entry in ``changes`` that differs from ``task``."""
    out: List[Tuple[str, Any, Any]] = []
    for name, new in changes.items():
        old = getattr(task, name)
        if not values_equal(old, new):
            out.append((name, old, new))
    return out


def make_entry(
    field: str,
    old: Any,
    new: Any,
    *,
    kind: AuditKind,
    reason: Optional[str] = None,
    meeting_id: Optional[str] = None,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_audit_id,
) -> AuditEntry:
    return AuditEntry(
        id=id_factory(),
        timestamp=clock(),
        kind=kind,
        field=field,
        old_value=old,
        new_value=new,
        reason=reason,
        meeting_id=meeting_id,
    )
