# Rev 0.1.0
"""Gantt axis and bar geometry.

Offsets and widths are fractions of the shared axis (0.0 .. 1.0).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, Optional, Tuple

from ganttz.models.entities import Task
from ganttz.services.audit import epoch_millis

DEFAULT_MIN_WIDTH = 0.02


@dataclass(frozen=True)
class BarGeometry:
    offset: float = 0.0
    width: float = 0.0

    def percent(self, ndigits: int = 1) -> Tuple[float, float]:
        return round(self.offset * 100, ndigits), round(self.width * 100, ndigits)


@dataclass(frozen=True)
class TimelineLayout:
    axis_start: Optional[datetime] = None
    axis_end: Optional[datetime] = None
    bars: Dict[str, BarGeometry] = field(default_factory=dict)

    @property
    def span_ms(self) -> int:
        if self.axis_start is None or self.axis_end is None:
            return 0
        return epoch_millis(self.axis_end) - epoch_millis(self.axis_start)

    def bar(self, task_id: str) -> BarGeometry:
        return self.bars.get(task_id, BarGeometry())


def _clamp(x: float) -> float:
    return min(max(x, 0.0), 1.0)


def compute_layout(tasks: Iterable[Task], min_width: float = DEFAULT_MIN_WIDTH) -> TimelineLayout:
    tasks = list(tasks)
    if not tasks:
        return TimelineLayout()

    starts = [(epoch_millis(t.start_date), t.start_date) for t in tasks]
    ends = [(epoch_millis(t.end_date), t.end_date) for t in tasks]
    axis_lo, axis_start = min(starts, key=lambda p: p[0])
    axis_hi, axis_end = max(ends, key=lambda p: p[0])
    span = axis_hi - axis_lo

    if span <= 0:
        return TimelineLayout(axis_start, axis_end, {t.id: BarGeometry() for t in tasks})

    bars: Dict[str, BarGeometry] = {}
    for t in tasks:
        s, e = epoch_millis(t.start_date), epoch_millis(t.end_date)
        offset = _clamp((s - axis_lo) / span)
        width = _clamp(max((e - s) / span, min_width))
        bars[t.id] = BarGeometry(offset=offset, width=width)
    return TimelineLayout(axis_start, axis_end, bars)
