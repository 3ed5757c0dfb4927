# ganttZ application context
# Rev 0.1.0

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .repositories.memory_meeting_repository import MemoryMeetingRepository
from .repositories.memory_task_repository import MemoryTaskRepository
from .services.audit import Clock, utcnow
from .services.project_controller import ProjectController
from .services.proposal_generator import ProposalGenerator
from .services.reconciliation_service import ReconciliationService
from .services.recording import AudioCapture, RecordingSession
from .services.task_service import TaskService
from .services.transcription import TranscriptionService
from .utils.config import load_settings
from .utils.logging_setup import get_logger


@dataclass
class AppContext:
    """Central container for shared app resources."""
    settings: Dict[str, Any]
    tasks_repo: MemoryTaskRepository
    meetings_repo: MemoryMeetingRepository
    task_service: TaskService
    reconciliation: ReconciliationService
    controller: ProjectController
    recording: RecordingSession

    @classmethod
    def create(
        cls,
        *,
        settings: Optional[Dict[str, Any]] = None,
        transcription: Optional[TranscriptionService] = None,
        capture: Optional[AudioCapture] = None,
        clock: Clock = utcnow,
    ) -> "AppContext":
        """Wire repositories, services and the controller."""
        log = get_logger("AppContext")
        settings = settings if settings is not None else load_settings()
        tasks_repo = MemoryTaskRepository()
        meetings_repo = MemoryMeetingRepository()
        task_service = TaskService(tasks_repo, clock=clock)
        reconciliation = ReconciliationService(task_service)
        generator = ProposalGenerator(transcription, clock=clock)
        controller = ProjectController(
            task_service, reconciliation, meetings_repo, generator, clock=clock,
        )
        log.info("AppContext initialized (theme=%s)", settings.get("ui", {}).get("theme"))
        return cls(
            settings=settings,
            tasks_repo=tasks_repo,
            meetings_repo=meetings_repo,
            task_service=task_service,
            reconciliation=reconciliation,
            controller=controller,
            recording=RecordingSession(capture),
        )
