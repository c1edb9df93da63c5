"""
Effective start/end dates of a work task.

Start priority: StartDate -> InitialDate -> none (task has no calendar position).
End: start + (duration - 1) days, duration defaulting to 1. The explicit end
fields (EndDateTask -> EndDate) are consulted only when the task carries no
duration at all, so bar length always matches the reported day count.
"""
import logging

from weekgrid.domain.calendar_date import (
    MAX_DATE, MIN_DATE, CalendarDate, CalendarDateError, parse_optional,
)
from weekgrid.domain.work_task import WorkTask

logger = logging.getLogger(__name__)


def _first_date(*values: str | None) -> CalendarDate | None:
    for value in values:
        if value is None or not str(value).strip():
            continue
        parsed = parse_optional(value)
        if parsed is None:
            logger.debug("Ignoring unparseable task date %r", value)
            continue
        return parsed
    return None


def resolve_start(task: WorkTask) -> CalendarDate | None:
    return _first_date(task.start_date, task.initial_date)


def resolve_end(start: CalendarDate, task: WorkTask) -> CalendarDate:
    duration = task.duration
    if duration is None:
        explicit_end = _first_date(task.end_date_task, task.end_date)
        if explicit_end is not None:
            return explicit_end
        duration = 1
    try:
        return start.add_days(duration - 1)
    except CalendarDateError:
        logger.debug("Duration %d runs off the calendar from %s, clamping", duration, start)
        return MAX_DATE if duration > 0 else MIN_DATE


def resolve_interval(task: WorkTask) -> tuple[CalendarDate, CalendarDate] | None:
    """(start, end) inclusive, or None when no start date resolves."""
    start = resolve_start(task)
    if start is None:
        return None
    return start, resolve_end(start, task)
