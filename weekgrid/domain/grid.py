"""
Gantt grid positioning: where a task's bar sits on a 7-column week.

A task spanning several weeks is positioned again for every window it touches,
each time clipped to that window, so no cross-week state is kept. Row packing
among overlapping bars is left to the renderer.
"""
from dataclasses import dataclass

from weekgrid.domain.calendar_date import CalendarDate
from weekgrid.domain.task_dates import resolve_interval
from weekgrid.domain.week_window import DAYS_IN_WEEK, WeekWindow
from weekgrid.domain.work_task import WorkTask


@dataclass(frozen=True)
class GridPosition:
    column_start: int  # 1 = Monday ... 7 = Sunday
    column_span: int

    @property
    def column_end(self) -> int:
        return self.column_start + self.column_span - 1

    def covers(self, column: int) -> bool:
        return self.column_start <= column <= self.column_end


@dataclass(frozen=True)
class PositionedTask:
    task: WorkTask
    start: CalendarDate
    end: CalendarDate
    position: GridPosition

    @property
    def column_start(self) -> int:
        return self.position.column_start

    @property
    def column_span(self) -> int:
        return self.position.column_span


def _clip(start: CalendarDate, end: CalendarDate, window: WeekWindow) -> GridPosition | None:
    if end < window.start or start > window.end:
        return None

    visible_start = max(start, window.start)
    visible_end = min(end, window.end)

    column_start = window.start.days_until(visible_start) + 1
    column_span = visible_start.days_until(visible_end) + 1

    # Never overflow the grid, never collapse below one column (bad durations)
    column_span = max(1, min(column_span, DAYS_IN_WEEK - column_start + 1))
    return GridPosition(column_start=column_start, column_span=column_span)


def position(task: WorkTask, window: WeekWindow) -> GridPosition | None:
    """Column start/span of ``task`` within ``window``, or None if not visible."""
    interval = resolve_interval(task)
    if interval is None:
        return None
    return _clip(interval[0], interval[1], window)


def position_tasks(tasks: list[WorkTask], window: WeekWindow) -> list[PositionedTask]:
    """Visible tasks with their grid positions, ordered by resolved start date."""
    positioned: list[PositionedTask] = []
    for task in tasks:
        interval = resolve_interval(task)
        if interval is None:
            continue
        start, end = interval
        pos = _clip(start, end, window)
        if pos is None:
            continue
        positioned.append(PositionedTask(task=task, start=start, end=end, position=pos))

    # sorted() is stable: tasks starting the same day keep input order
    return sorted(positioned, key=lambda p: p.start)
