# tests/test_project_controller.py
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ganttz.app_context import AppContext
from ganttz.models.entities import Meeting
from ganttz.models.types import AuditKind, Status
from ganttz.services.errors import ImportParseError, NoPendingProposalError, TaskNotFoundError
from ganttz.services.recording import RecordingResult
from ganttz.services.sample_data import SAMPLE_FILE_NAME
from ganttz.utils.config import defaults

from conftest import make_proposal


@pytest.fixture()
def controller(clock):
    return AppContext.create(settings=defaults(), clock=clock).controller


def test_initial_state_is_empty(controller):
    state = controller.state
    assert not state.has_tasks
    assert state.meetings == ()
    assert state.latest_meeting is None
    assert state.file_name == ""


def test_load_sample(controller):
    state = controller.load_sample()
    assert state.file_name == SAMPLE_FILE_NAME
    assert [t.id for t in state.tasks] == ["1", "2", "3"]
    assert state.task("3").dependencies == ("2",)


def test_import_replaces_store(controller, tmp_path):
    controller.load_sample()
    path = tmp_path / "next.csv"
    path.write_text("Task Name,Status\nOnly,Blocked\n", encoding="utf-8")

    state = controller.import_tasks(path)

    assert state.file_name == "next.csv"
    assert [(t.id, t.name, t.status) for t in state.tasks] == [("1", "Only", Status.BLOCKED)]


def test_failed_import_keeps_previous_state(controller, tmp_path):
    before = controller.load_sample()
    path = tmp_path / "bad.csv"
    path.write_text("Task Name,Progress\nA,lots\n", encoding="utf-8")

    with pytest.raises(ImportParseError):
        controller.import_tasks(path)
    assert controller.state == before


def test_meeting_round_trip(controller, clock):
    controller.load_sample()
    meeting = controller.analyze_recording(RecordingResult("Weekly", 300))
    state = controller.complete_meeting(meeting)

    assert state.latest_meeting == meeting
    assert state.unmatched_proposals == ()
    assert not state.task("1").has_pending_proposal
    assert state.task("2").has_pending_proposal
    assert state.task("3").has_pending_proposal

    state = controller.accept_proposal("2")
    done = state.task("2")
    assert (done.status, done.progress) == (Status.COMPLETED, 100)
    new_entries = done.audit_trail[1:]
    assert sorted(e.field for e in new_entries) == ["progress", "status"]
    assert all(e.kind is AuditKind.MEETING and e.meeting_id == meeting.id for e in new_entries)

    state = controller.reject_proposal("3")
    assert not state.task("3").has_pending_proposal
    assert len(state.task("3").audit_trail) == 2
    with pytest.raises(NoPendingProposalError):
        controller.accept_proposal("3")


def test_unmatched_proposals_surface_in_state(controller):
    controller.load_sample()
    meeting = Meeting(
        id="meeting-x", title="Sync", date=datetime(2024, 3, 1, tzinfo=timezone.utc),
        duration=60, transcript="", summary="",
        proposals=(make_proposal("1.2", meeting_id="meeting-x"),),
    )
    state = controller.complete_meeting(meeting)
    assert [p.task_id for p in state.unmatched_proposals] == ["1.2"]
    assert len(state.meetings) == 1

    state = controller.load_sample()
    assert state.unmatched_proposals == ()


def test_update_task(controller):
    controller.load_sample()
    state = controller.update_task("2", {"progress": 90}, "nearly there")
    assert state.task("2").progress == 90
    assert state.task("2").audit_trail[-1].reason == "nearly there"
    with pytest.raises(TaskNotFoundError):
        controller.update_task("42", {"progress": 1})


def test_every_generated_proposal_can_be_accepted_on_imported_plan(controller, tmp_path):
    path = tmp_path / "current.csv"
    path.write_text(
        "Task Name,Start Date,End Date,Status\n"
        "Build,2025-03-01,2025-04-01,In Progress\n"
        "Ship,2025-04-02,2025-05-01,Not Started\n",
        encoding="utf-8",
    )
    controller.import_tasks(path)
    meeting = controller.analyze_recording(RecordingResult("Weekly", 300))
    state = controller.complete_meeting(meeting)
    pending = [t.id for t in state.tasks if t.has_pending_proposal]
    assert pending == ["1", "2"]

    for task_id in pending:
        state = controller.accept_proposal(task_id)

    assert not any(t.has_pending_proposal for t in state.tasks)
    ship = state.task("2")
    assert ship.status is Status.DELAYED
    assert ship.end_date == datetime(2025, 5, 11)
    assert ship.end_date > ship.start_date
    assert state.task("1").status is Status.COMPLETED
