# tests/test_task_service.py
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from ganttz.models.types import AuditKind, Priority, Status
from ganttz.services.errors import InvalidTaskUpdateError, TaskNotFoundError

from conftest import make_proposal


def test_single_change_records_one_manual_entry(task_service, repo, clock):
    task = task_service.apply_update("1", {"status": Status.DELAYED}, "Vendor slipped")

    assert task.status is Status.DELAYED
    assert repo.get_task("1") == task
    assert len(task.audit_trail) == 1
    entry = task.audit_trail[0]
    assert (entry.kind, entry.field, entry.old_value, entry.new_value, entry.reason) == (
        AuditKind.MANUAL, "status", Status.IN_PROGRESS, Status.DELAYED, "Vendor slipped",
    )
    assert entry.meeting_id is None
    assert entry.timestamp == clock()


def test_entry_count_matches_changed_fields_only(task_service):
    task = task_service.apply_update(
        "1",
        {"status": Status.IN_PROGRESS, "progress": 30, "assignee": "Ana", "priority": Priority.MEDIUM},
        "weekly sync",
    )
    assert sorted(e.field for e in task.audit_trail) == ["assignee", "progress"]


def test_repeating_identical_update_is_a_noop(task_service):
    task_service.apply_update("1", {"progress": 50}, "first")
    task = task_service.apply_update("1", {"progress": 50}, "again")
    assert len(task.audit_trail) == 1
    assert task.progress == 50


def test_sequence_of_updates_accumulates_entries_in_order(task_service, clock):
    task_service.apply_update("1", {"progress": 10})
    clock.advance(minutes=5)
    task_service.apply_update("1", {"progress": 20, "status": "Blocked"})
    clock.advance(minutes=5)
    task = task_service.apply_update("1", {"progress": 20})

    assert [e.field for e in task.audit_trail] == ["progress", "progress", "status"]
    assert [e.new_value for e in task.audit_trail] == [10, 20, Status.BLOCKED]
    assert len({e.id for e in task.audit_trail}) == 3


def test_string_enums_are_coerced(task_service):
    task = task_service.apply_update("2", {"status": "Delayed", "priority": "Low"})
    assert task.status is Status.DELAYED
    assert task.priority is Priority.LOW


def test_update_clears_pending_proposal(task_service, repo):
    repo.save(replace(repo.get_task("1"), pending_proposal=make_proposal("1")))
    task = task_service.apply_update("1", {"assignee": "Ana"}, "manual override")
    assert task.pending_proposal is None
    assert repo.get_task("1").pending_proposal is None


def test_update_without_changes_still_drops_pending_proposal(task_service, repo):
    repo.save(replace(repo.get_task("1"), pending_proposal=make_proposal("1")))
    task = task_service.apply_update("1", {"progress": 0})
    assert task.pending_proposal is None
    assert task.audit_trail == ()


def test_unknown_task_raises_and_leaves_store_intact(task_service, repo):
    before = repo.list_tasks()
    with pytest.raises(TaskNotFoundError) as exc:
        task_service.apply_update("99", {"progress": 10})
    assert exc.value.task_id == "99"
    assert repo.list_tasks() == before


@pytest.mark.parametrize(
    "changes",
    [
        {"colour": "red"},
        {"progress": 101},
        {"progress": -1},
        {"progress": "50"},
        {"progress": True},
        {"status": "Done"},
        {"priority": "Urgent"},
        {"name": "   "},
        {"end_date": datetime(2023, 12, 1)},
        {"start_date": "2024-01-01"},
        {"dependencies": "2"},
    ],
)
def test_invalid_updates_are_rejected_without_commit(task_service, repo, changes):
    before = repo.get_task("1")
    with pytest.raises(InvalidTaskUpdateError):
        task_service.apply_update("1", {"assignee": "Ana", **changes})
    assert repo.get_task("1") == before


def test_equal_instants_are_not_changes(task_service):
    # same instant, one naive (UTC by policy) and one aware
    aware = datetime(2024, 1, 10, tzinfo=timezone.utc)
    task = task_service.apply_update("1", {"end_date": aware})
    assert task.audit_trail == ()


def test_dependencies_compare_by_value(task_service):
    task = task_service.apply_update("2", {"dependencies": ["1"]})
    assert task.dependencies == ("1",)
    task = task_service.apply_update("2", {"dependencies": ("1",)})
    assert len(task.audit_trail) == 1


def test_history_newest_first(task_service, clock):
    task_service.apply_update("1", {"progress": 10})
    clock.advance(hours=1)
    task_service.apply_update("1", {"progress": 20})
    newest = task_service.history("1")
    oldest = task_service.history("1", newest_first=False)
    assert [e.new_value for e in newest] == [20, 10]
    assert [e.new_value for e in oldest] == [10, 20]
