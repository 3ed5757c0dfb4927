# Rev 0.1.0
"""Lightweight entities for the in-memory task store (Rev 0.1.0)"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from .types import AuditKind, Priority, Status, TrackedField


@dataclass(frozen=True)
class AuditEntry:
    id: str
    timestamp: datetime
    kind: AuditKind
    field: str
    old_value: Any
    new_value: Any
    reason: Optional[str] = None
    meeting_id: Optional[str] = None


@dataclass(frozen=True)
class Proposal:
    id: str
    task_id: str
    reason: str
    confidence: float
    meeting_id: str
    timestamp: datetime
    proposed_status: Optional[Status] = None
    proposed_progress: Optional[int] = None
    proposed_end_date: Optional[datetime] = None

    def field_changes(self) -> Dict[str, Any]:
        """Proposed values keyed by tracked field name; absent proposals are skipped."""
        changes: Dict[str, Any] = {}
        if self.proposed_status is not None:
            changes[TrackedField.STATUS.value] = self.proposed_status
        if self.proposed_progress is not None:
            changes[TrackedField.PROGRESS.value] = self.proposed_progress
        if self.proposed_end_date is not None:
            changes[TrackedField.END_DATE.value] = self.proposed_end_date
        return changes


@dataclass(frozen=True)
class Task:
    id: str
    name: str
    start_date: datetime
    end_date: datetime
    duration: int = 1              # days; stored, not derived
    progress: int = 0              # 0..100
    assignee: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    status: Status = Status.NOT_STARTED
    dependencies: Tuple[str, ...] = ()
    audit_trail: Tuple[AuditEntry, ...] = ()
    pending_proposal: Optional[Proposal] = None

    @property
    def has_pending_proposal(self) -> bool:
        return self.pending_proposal is not None


@dataclass(frozen=True)
class Meeting:
    id: str
    title: str
    date: datetime
    duration: int                  # seconds
    transcript: str
    summary: str
    proposals: Tuple[Proposal, ...] = ()
    audio: Optional[bytes] = field(default=None, repr=False)
