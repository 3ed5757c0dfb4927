# Rev 0.1.0
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ganttz.models.entities import Task
from ganttz.services.timeline_layout import DEFAULT_MIN_WIDTH, TimelineLayout, compute_layout
from ganttz.viewmodels.history_viewmodel import format_date


class GanttViewModel:
    """Rows for the timeline panel: one bar per task, in store order."""

    def __init__(self, min_width: float = DEFAULT_MIN_WIDTH):
        self._min_width = min_width
        self.layout = TimelineLayout()

    def rows(self, tasks: Iterable[Task]) -> List[Dict[str, Any]]:
        tasks = list(tasks)
        self.layout = compute_layout(tasks, self._min_width)
        out: List[Dict[str, Any]] = []
        for t in tasks:
            bar = self.layout.bar(t.id)
            out.append({
                "id": t.id,
                "name": t.name,
                "status": t.status.value,
                "priority": t.priority.value,
                "progress": t.progress,
                "dates": f"{format_date(t.start_date)} - {format_date(t.end_date)}",
                "offset": bar.offset,
                "width": bar.width,
                "pending": t.has_pending_proposal,
            })
        return out

    def axis_label(self) -> str:
        if self.layout.axis_start is None:
            return ""
        return f"{format_date(self.layout.axis_start)} → {format_date(self.layout.axis_end)}"
