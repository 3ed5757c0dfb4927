# Rev 0.1.0
"""Turn a finished recording into a Meeting with stamped proposals."""
from __future__ import annotations

import uuid
from typing import Callable, Sequence

from ganttz.models.entities import Meeting, Proposal, Task
from ganttz.services.audit import Clock, utcnow
from ganttz.services.recording import RecordingResult
from ganttz.services.transcription import CannedTranscriptionService, ProposalDraft, TranscriptionService
from ganttz.utils.logging_setup import get_logger


def new_meeting_id() -> str:
    return f"meeting-{uuid.uuid4().hex[:10]}"


def clamp_confidence(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)


class ProposalGenerator:
    def __init__(
        self,
        transcription: TranscriptionService | None = None,
        *,
        clock: Clock = utcnow,
        meeting_id_factory: Callable[[], str] = new_meeting_id,
    ):
        self._transcription = transcription or CannedTranscriptionService()
        self._clock = clock
        self._new_meeting_id = meeting_id_factory
        self._log = get_logger("ProposalGenerator")

    def generate(self, recording: RecordingResult, tasks: Sequence[Task]) -> Meeting:
        now = self._clock()
        meeting_id = self._new_meeting_id()

        transcript = self._transcription.transcribe(recording.audio)
        summary = self._transcription.summarize(transcript)
        drafts = self._transcription.propose(transcript, tasks)

        proposals = tuple(
            self._stamp(draft, meeting_id, n, now) for n, draft in enumerate(drafts, start=1)
        )
        title = recording.title.strip() or f"Project Meeting - {now:%m/%d/%Y}"
        self._log.info("Meeting %s analysed: %d proposal(s)", meeting_id, len(proposals))
        return Meeting(
            id=meeting_id,
            title=title,
            date=now,
            duration=recording.duration_seconds,
            transcript=transcript,
            summary=summary,
            proposals=proposals,
            audio=recording.audio or None,
        )

    def _stamp(self, draft: ProposalDraft, meeting_id: str, n: int, now) -> Proposal:
        confidence = clamp_confidence(draft.confidence)
        if confidence != draft.confidence:
            self._log.warning(
                "Proposal for task %s: confidence %r clamped to %.2f",
                draft.task_id, draft.confidence, confidence,
            )
        return Proposal(
            id=f"{meeting_id}-proposal-{n}",
            task_id=draft.task_id,
            reason=draft.reason,
            confidence=confidence,
            meeting_id=meeting_id,
            timestamp=now,
            proposed_status=draft.proposed_status,
            proposed_progress=draft.proposed_progress,
            proposed_end_date=draft.proposed_end_date,
        )
