# Rev 0.1.0
from __future__ import annotations

from typing import List, Optional

from ganttz.models.entities import Meeting


class MemoryMeetingRepository:
    """Append-only meeting history, oldest first."""

    def __init__(self):
        self._meetings: List[Meeting] = []

    def add(self, meeting: Meeting) -> None:
        if any(m.id == meeting.id for m in self._meetings):
            raise ValueError(f"duplicate meeting id {meeting.id!r}")
        self._meetings.append(meeting)

    def list_meetings(self) -> List[Meeting]:
        return list(self._meetings)

    def latest(self) -> Optional[Meeting]:
        return self._meetings[-1] if self._meetings else None

    def get(self, meeting_id: str) -> Optional[Meeting]:
        for m in self._meetings:
            if m.id == meeting_id:
                return m
        return None
