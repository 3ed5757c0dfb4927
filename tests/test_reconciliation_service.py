# tests/test_reconciliation_service.py
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ganttz.models.entities import Meeting
from ganttz.models.types import AuditKind, Status
from ganttz.services.errors import NoPendingProposalError, TaskNotFoundError

from conftest import make_proposal


def _meeting(*proposals, meeting_id="meeting-a") -> Meeting:
    return Meeting(
        id=meeting_id,
        title="Weekly sync",
        date=datetime(2024, 3, 1, tzinfo=timezone.utc),
        duration=600,
        transcript="...",
        summary="...",
        proposals=tuple(proposals),
    )


def test_attach_sets_pending_without_audit(reconciliation, repo):
    outcome = reconciliation.attach_proposals(_meeting(make_proposal("2")))

    assert outcome.ok
    assert [t.id for t in outcome.updated_tasks] == ["2"]
    task = repo.get_task("2")
    assert task.pending_proposal.id == "meeting-a-proposal-1"
    assert task.audit_trail == ()
    assert task.status is Status.IN_PROGRESS


def test_newer_proposal_replaces_pending_without_audit(reconciliation, repo):
    reconciliation.attach_proposals(_meeting(make_proposal("1")))
    newer = make_proposal("1", meeting_id="meeting-b", proposed_status=Status.BLOCKED)
    reconciliation.attach_proposals(_meeting(newer, meeting_id="meeting-b"))

    task = repo.get_task("1")
    assert task.pending_proposal == newer
    assert task.audit_trail == ()


def test_unmatched_proposals_are_reported_and_ignored(reconciliation, repo):
    stray = make_proposal("1.2", n=2)
    outcome = reconciliation.attach_proposals(_meeting(make_proposal("1"), stray))

    assert not outcome.ok
    assert outcome.unmatched == (stray,)
    assert repo.get_task("1").has_pending_proposal
    assert not repo.get_task("2").has_pending_proposal


def test_accept_transfers_proposed_fields_with_meeting_provenance(reconciliation, repo, clock):
    proposal = make_proposal("2", proposed_end_date=datetime(2024, 1, 25))
    reconciliation.attach_proposals(_meeting(proposal))

    task = reconciliation.accept_proposal("2")

    assert task.status is Status.DELAYED
    assert task.progress == 40
    assert task.end_date == datetime(2024, 1, 25)
    assert task.pending_proposal is None
    assert sorted(e.field for e in task.audit_trail) == ["end_date", "progress", "status"]
    for e in task.audit_trail:
        assert e.kind is AuditKind.MEETING
        assert e.meeting_id == "meeting-a"
        assert e.reason == proposal.reason
        assert e.timestamp == clock()
    assert repo.get_task("2") == task


def test_accept_only_records_fields_that_differ(reconciliation):
    reconciliation.attach_proposals(_meeting(make_proposal("1", proposed_status=Status.IN_PROGRESS)))
    task = reconciliation.accept_proposal("1")
    assert [e.field for e in task.audit_trail] == ["progress"]


def test_accept_without_pending_raises(reconciliation):
    with pytest.raises(NoPendingProposalError):
        reconciliation.accept_proposal("1")


def test_accept_unknown_task_raises(reconciliation):
    with pytest.raises(TaskNotFoundError):
        reconciliation.accept_proposal("nope")


def test_reject_clears_pending_and_leaves_fields(reconciliation, repo):
    reconciliation.attach_proposals(_meeting(make_proposal("2")))
    before = repo.get_task("2")

    task = reconciliation.reject_proposal("2")

    assert task.pending_proposal is None
    assert task.audit_trail == ()
    assert (task.status, task.progress) == (before.status, before.progress)
    with pytest.raises(NoPendingProposalError):
        reconciliation.reject_proposal("2")


def test_manual_edit_discards_pending_proposal(reconciliation, task_service):
    reconciliation.attach_proposals(_meeting(make_proposal("1")))
    task_service.apply_update("1", {"assignee": "Ana"}, "override")

    assert reconciliation.pending_tasks() == []
    with pytest.raises(NoPendingProposalError):
        reconciliation.accept_proposal("1")
