# Rev 0.1.0
from __future__ import annotations

from dataclasses import dataclass

from ganttz.models.entities import Meeting
from ganttz.models.types import Status

ON_TRACK = "On Track"
MINOR_ISSUES = "Minor Issues"
AT_RISK = "At Risk"


@dataclass(frozen=True)
class MeetingInsights:
    overall_status: str
    total_proposals: int
    delayed: int
    blocked: int
    duration_minutes: int


def summarize_meeting(meeting: Meeting) -> MeetingInsights:
    statuses = [p.proposed_status for p in meeting.proposals]
    delayed = sum(1 for s in statuses if s == Status.DELAYED)
    blocked = sum(1 for s in statuses if s == Status.BLOCKED)
    total = len(statuses)
    trouble = delayed + blocked

    if trouble == 0:
        overall = ON_TRACK
    elif trouble < total / 2:
        overall = MINOR_ISSUES
    else:
        overall = AT_RISK

    return MeetingInsights(
        overall_status=overall,
        total_proposals=total,
        delayed=delayed,
        blocked=blocked,
        duration_minutes=int(meeting.duration / 60 + 0.5),
    )
