# Rev 0.1.0

"""Project controller (Rev 0.1.0)
Owns the session state and exposes the commands the UI issues. Every
command returns a fresh AppState snapshot; failures raise a GanttzError and
leave the previous state in place.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

from ganttz.models.entities import Meeting, Proposal, Task
from ganttz.repositories.memory_meeting_repository import MemoryMeetingRepository
from ganttz.services.audit import Clock, IdFactory, new_audit_id, utcnow
from ganttz.services.proposal_generator import ProposalGenerator
from ganttz.services.reconciliation_service import AttachOutcome, ReconciliationService
from ganttz.services.recording import RecordingResult
from ganttz.services.sample_data import SAMPLE_FILE_NAME, sample_tasks
from ganttz.services.spreadsheet_import import import_tasks
from ganttz.services.task_service import TaskService
from ganttz.utils.logging_setup import get_logger


@dataclass(frozen=True)
class AppState:
    tasks: Tuple[Task, ...] = ()
    meetings: Tuple[Meeting, ...] = ()
    file_name: str = ""
    unmatched_proposals: Tuple[Proposal, ...] = ()

    @property
    def latest_meeting(self) -> Optional[Meeting]:
        return self.meetings[-1] if self.meetings else None

    @property
    def has_tasks(self) -> bool:
        return bool(self.tasks)

    def task(self, task_id: str) -> Optional[Task]:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None


class ProjectController:
    def __init__(
        self,
        task_service: TaskService,
        reconciliation: ReconciliationService,
        meetings: MemoryMeetingRepository,
        generator: ProposalGenerator,
        *,
        clock: Clock = utcnow,
        id_factory: IdFactory = new_audit_id,
    ):
        self._tasks = task_service
        self._reconciliation = reconciliation
        self._meetings = meetings
        self._generator = generator
        self._clock = clock
        self._id_factory = id_factory
        self._file_name = ""
        self._unmatched: Tuple[Proposal, ...] = ()
        self._log = get_logger("ProjectController")

    @property
    def state(self) -> AppState:
        return AppState(
            tasks=tuple(self._tasks.list_tasks()),
            meetings=tuple(self._meetings.list_meetings()),
            file_name=self._file_name,
            unmatched_proposals=self._unmatched,
        )

    # ---- commands
    def import_tasks(self, path: Union[str, Path]) -> AppState:
        path = Path(path)
        tasks = import_tasks(path, clock=self._clock, id_factory=self._id_factory)
        self._tasks.replace_all(tasks)
        self._file_name = path.name
        self._unmatched = ()
        return self.state

    def load_sample(self) -> AppState:
        self._tasks.replace_all(sample_tasks())
        self._file_name = SAMPLE_FILE_NAME
        self._unmatched = ()
        self._log.info("Sample project loaded")
        return self.state

    def update_task(self, task_id: str, changes: Mapping[str, Any], reason: Optional[str] = None) -> AppState:
        self._tasks.apply_update(task_id, changes, reason)
        return self.state

    def analyze_recording(self, recording: RecordingResult) -> Meeting:
        return self._generator.generate(recording, self._tasks.list_tasks())

    def complete_meeting(self, meeting: Meeting) -> AppState:
        self._meetings.add(meeting)
        outcome: AttachOutcome = self._reconciliation.attach_proposals(meeting)
        self._unmatched = outcome.unmatched
        self._log.info(
            "Meeting %s stored; %d task(s) with pending changes, %d unmatched",
            meeting.id, len(outcome.updated_tasks), len(outcome.unmatched),
        )
        return self.state

    def accept_proposal(self, task_id: str) -> AppState:
        self._reconciliation.accept_proposal(task_id)
        return self.state

    def reject_proposal(self, task_id: str) -> AppState:
        self._reconciliation.reject_proposal(task_id)
        return self.state
