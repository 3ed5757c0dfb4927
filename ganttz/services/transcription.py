# Rev 0.1.0

"""
Transcription/inference port used by the proposal generator.

The core only talks to the Protocol, so a real speech-to-text or
language-model backend can replace the canned default without touching
reconciliation.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Protocol, Sequence, Tuple

from ganttz.models.entities import Task
from ganttz.models.types import Status


@dataclass(frozen=True)
class ProposalDraft:
    """A proposed change before it is stamped with meeting-scoped ids."""
    task_id: str
    reason: str
    confidence: float
    proposed_status: Optional[Status] = None
    proposed_progress: Optional[int] = None
    proposed_end_date: Optional[datetime] = None


class TranscriptionService(Protocol):
    def transcribe(self, audio: bytes) -> str: ...

    def summarize(self, transcript: str) -> str: ...

    def propose(self, transcript: str, tasks: Sequence[Task]) -> List[ProposalDraft]: ...


CANNED_TRANSCRIPT = (
    "Meeting discussion about project progress. John mentioned that the project planning phase is "
    "nearly complete with scope definition finished. Jane reported that the project charter is 90% "
    "done and should be ready by end of week. Mike noted some delays in stakeholder analysis due to "
    "scheduling conflicts with key stakeholders. The team discussed that requirements gathering is "
    "progressing well with functional requirements at 80% completion. There are some concerns about "
    "the design phase timeline due to dependencies on requirements completion."
)

CANNED_SUMMARY = (
    "Project planning phase nearing completion. Charter development at 90%. Stakeholder analysis "
    "experiencing delays due to scheduling conflicts. Requirements gathering progressing well with "
    "functional requirements at 80%."
)


@dataclass(frozen=True)
class ProposalTemplate:
    reason: str
    confidence: float
    proposed_status: Optional[Status] = None
    proposed_progress: Optional[int] = None
    proposed_end_date: Optional[datetime] = None
    end_date_slip: Optional[timedelta] = None   # relative to the bound task's end
    task_id: Optional[str] = None      # None: bind to the next open task


CANNED_TEMPLATES: Tuple[ProposalTemplate, ...] = (
    ProposalTemplate(
        reason="Charter development mentioned as nearly complete in meeting",
        confidence=0.85,
        proposed_status=Status.COMPLETED,
        proposed_progress=100,
    ),
    ProposalTemplate(
        reason="Stakeholder scheduling conflicts mentioned causing delays",
        confidence=0.92,
        proposed_status=Status.DELAYED,
        proposed_progress=40,
        end_date_slip=timedelta(days=10),
    ),
)


class CannedTranscriptionService:
    """
    Offline stand-in: ignores the audio and returns fixed text.

    Templates without an explicit task id are bound, in order, to the
    tasks that are not yet Completed; surplus templates are dropped. A
    template's end_date_slip is added to the bound task's current end date.
    """

    def __init__(
        self,
        transcript: str = CANNED_TRANSCRIPT,
        summary: str = CANNED_SUMMARY,
        templates: Sequence[ProposalTemplate] = CANNED_TEMPLATES,
    ):
        self._transcript = transcript
        self._summary = summary
        self._templates = tuple(templates)

    def transcribe(self, audio: bytes) -> str:
        return self._transcript

    def summarize(self, transcript: str) -> str:
        return self._summary

    def propose(self, transcript: str, tasks: Sequence[Task]) -> List[ProposalDraft]:
        by_id = {t.id: t for t in tasks}
        open_ids = [t.id for t in tasks if t.status != Status.COMPLETED]
        drafts: List[ProposalDraft] = []
        for tpl in self._templates:
            task_id = tpl.task_id
            if task_id is None:
                if not open_ids:
                    continue
                task_id = open_ids.pop(0)
            drafts.append(ProposalDraft(
                task_id=task_id,
                reason=tpl.reason,
                confidence=tpl.confidence,
                proposed_status=tpl.proposed_status,
                proposed_progress=tpl.proposed_progress,
                proposed_end_date=_end_date(tpl, by_id.get(task_id)),
            ))
        return drafts


def _end_date(tpl: ProposalTemplate, task: Optional[Task]) -> Optional[datetime]:
    if tpl.end_date_slip is None or task is None:
        return tpl.proposed_end_date
    return task.end_date + tpl.end_date_slip
