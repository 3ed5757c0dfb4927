# Rev 0.1.0

"""Proposal reconciliation (Rev 0.1.0)
Attach meeting proposals to tasks as pending, then accept or reject them.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from ganttz.models.entities import Meeting, Proposal, Task
from ganttz.models.types import AuditKind
from ganttz.services.errors import NoPendingProposalError
from ganttz.services.task_service import TaskService
from ganttz.utils.logging_setup import get_logger


@dataclass(frozen=True)
class AttachOutcome:
    updated_tasks: Tuple[Task, ...] = ()
    unmatched: Tuple[Proposal, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.unmatched


class ReconciliationService:
    def __init__(self, task_service: TaskService):
        self._tasks = task_service
        self._log = get_logger("ReconciliationService")

    def attach_proposals(self, meeting: Meeting) -> AttachOutcome:
        updated: List[Task] = []
        unmatched: List[Proposal] = []
        for proposal in meeting.proposals:
            task = self._find(proposal.task_id)
            if task is None:
                self._log.warning(
                    "Unmatched proposal %s from %s: no task %r",
                    proposal.id, meeting.id, proposal.task_id,
                )
                unmatched.append(proposal)
                continue
            if task.pending_proposal is not None:
                self._log.info(
                    "Task %s: pending proposal %s replaced by %s",
                    task.id, task.pending_proposal.id, proposal.id,
                )
            task = self._tasks.save(replace(task, pending_proposal=proposal))
            # a task hit twice in one meeting only appears once, with the last proposal
            updated = [t for t in updated if t.id != task.id]
            updated.append(task)
        return AttachOutcome(updated_tasks=tuple(updated), unmatched=tuple(unmatched))

    def accept_proposal(self, task_id: str) -> Task:
        proposal = self._pending(task_id)
        task = self._tasks.apply_update(
            task_id,
            proposal.field_changes(),
            proposal.reason,
            kind=AuditKind.MEETING,
            meeting_id=proposal.meeting_id,
        )
        self._log.info("Task %s: accepted proposal %s", task_id, proposal.id)
        return task

    def reject_proposal(self, task_id: str) -> Task:
        proposal = self._pending(task_id)
        task = self._tasks.save(replace(self._tasks.get_task(task_id), pending_proposal=None))
        self._log.info("Task %s: rejected proposal %s", task_id, proposal.id)
        return task

    def pending_tasks(self) -> List[Task]:
        return [t for t in self._tasks.list_tasks() if t.pending_proposal is not None]

    # ---- internals
    def _find(self, task_id: str):
        for task in self._tasks.list_tasks():
            if task.id == task_id:
                return task
        return None

    def _pending(self, task_id: str) -> Proposal:
        task = self._tasks.get_task(task_id)
        if task.pending_proposal is None:
            raise NoPendingProposalError(task_id)
        return task.pending_proposal
