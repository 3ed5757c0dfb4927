# Rev 0.1.0
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from PySide6.QtCore import QObject, Signal

from ganttz.models.entities import Meeting
from ganttz.services.errors import GanttzError
from ganttz.services.project_controller import AppState, ProjectController
from ganttz.utils.logging_setup import get_logger
from ganttz.viewmodels.history_viewmodel import HistoryViewModel


class ProjectViewModel(QObject):
    """
    Qt-facing wrapper over ProjectController.

    Commands return True on success. Failures are logged and reported via
    errorOccurred(title, message); the previous state stays in effect.
    """

    stateChanged = Signal(object)          # AppState
    historyLoaded = Signal(str, list)      # task_id, decorated entries
    errorOccurred = Signal(str, str)       # title, message

    def __init__(self, controller: ProjectController):
        super().__init__()
        self._controller = controller
        self._history = HistoryViewModel()
        self._log = get_logger("ProjectViewModel")

    @property
    def state(self) -> AppState:
        return self._controller.state

    # ---- commands
    def import_file(self, path: str | Path) -> bool:
        return self._run("Import failed", self._controller.import_tasks, path)

    def load_sample(self) -> bool:
        return self._run("Load failed", self._controller.load_sample)

    def update_task(self, task_id: str, changes: Mapping[str, Any], reason: Optional[str]) -> bool:
        return self._run("Update failed", self._controller.update_task, task_id, changes, reason)

    def complete_meeting(self, meeting: Meeting) -> bool:
        ok = self._run("Meeting failed", self._controller.complete_meeting, meeting)
        unmatched = self.state.unmatched_proposals
        if ok and unmatched:
            ids = ", ".join(sorted({p.task_id for p in unmatched}))
            self.errorOccurred.emit(
                "Unmatched proposals",
                f"{len(unmatched)} proposed change(s) referenced unknown task(s): {ids}",
            )
        return ok

    def accept_proposal(self, task_id: str) -> bool:
        return self._run("Accept failed", self._controller.accept_proposal, task_id)

    def reject_proposal(self, task_id: str) -> bool:
        return self._run("Reject failed", self._controller.reject_proposal, task_id)

    def load_history(self, task_id: str) -> None:
        task = self.state.task(task_id)
        rows = self._history.load(task.audit_trail) if task else []
        self.historyLoaded.emit(task_id, rows)

    # ---- internals
    def _run(self, title: str, fn, *args) -> bool:
        try:
            state = fn(*args)
        except GanttzError as exc:
            self._log.warning("%s: %s", title, exc)
            self.errorOccurred.emit(title, str(exc))
            return False
        self.stateChanged.emit(state)
        return True
