"""
Day-by-day view of a positioned week (mobile accordion).

A multi-day task is listed under every day its bar covers, not only its start
day, so each day shows everything happening on it.
"""
from dataclasses import dataclass

from weekgrid.domain.calendar_date import CalendarDate
from weekgrid.domain.grid import PositionedTask
from weekgrid.domain.week_window import WeekWindow
from weekgrid.domain.work_task import WorkTask


# ---------------------------------------------------------------------------
# Labels (es)
# ---------------------------------------------------------------------------

WEEKDAY_NAME = {
    0: "lunes", 1: "martes", 2: "miércoles", 3: "jueves",
    4: "viernes", 5: "sábado", 6: "domingo",
}
MONTH_NAME = {
    1: "enero", 2: "febrero", 3: "marzo", 4: "abril", 5: "mayo", 6: "junio",
    7: "julio", 8: "agosto", 9: "septiembre", 10: "octubre", 11: "noviembre", 12: "diciembre",
}
MONTH_SHORT = {
    1: "ene", 2: "feb", 3: "mar", 4: "abr", 5: "may", 6: "jun",
    7: "jul", 8: "ago", 9: "sept", 10: "oct", 11: "nov", 12: "dic",
}


@dataclass(frozen=True)
class DayInfo:
    name: str
    number: str
    is_today: bool
    date_key: str
    full_date: str


@dataclass(frozen=True)
class DayGroup:
    date: CalendarDate
    info: DayInfo
    tasks: list[WorkTask]


def day_info(day: CalendarDate, today: CalendarDate) -> DayInfo:
    name = WEEKDAY_NAME[day.weekday()]
    return DayInfo(
        name=name,
        number=str(day.day),
        is_today=day == today,
        date_key=day.isoformat(),
        full_date=f"{name} {day.day} de {MONTH_NAME[day.month]}",
    )


def format_week_range(window: WeekWindow) -> str:
    """E.g. ``13 oct - 19 oct 2025``"""
    s, e = window.start, window.end
    return f"{s.day} {MONTH_SHORT[s.month]} - {e.day} {MONTH_SHORT[e.month]} {e.year}"


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def group_by_day(
    positioned: list[PositionedTask],
    window: WeekWindow,
) -> dict[CalendarDate, list[WorkTask]]:
    """One entry per window day, in order; days without tasks map to []."""
    grouped: dict[CalendarDate, list[WorkTask]] = {}
    for index, day in enumerate(window.days):
        column = index + 1
        grouped[day] = [p.task for p in positioned if p.position.covers(column)]
    return grouped


def build_day_groups(
    positioned: list[PositionedTask],
    window: WeekWindow,
    today: CalendarDate,
) -> list[DayGroup]:
    by_day = group_by_day(positioned, window)
    return [
        DayGroup(date=day, info=day_info(day, today), tasks=tasks)
        for day, tasks in by_day.items()
    ]


def default_expanded_days(window: WeekWindow, today: CalendarDate) -> set[str]:
    """Only today's row when today is in the window, otherwise every row."""
    if window.contains(today):
        return {today.isoformat()}
    return {d.isoformat() for d in window.days}
