"""
Monday-to-Sunday week window.

Monday is day 1 of the week (ISO), whatever the locale. Uses date only.
"""
from dataclasses import dataclass
from datetime import date

from weekgrid.domain.calendar_date import CalendarDate

DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class WeekWindow:
    start: CalendarDate  # Monday
    end: CalendarDate  # Sunday
    days: tuple[CalendarDate, ...]

    @property
    def key(self) -> str:
        return self.start.isoformat()

    def contains(self, d: CalendarDate) -> bool:
        return self.start <= d <= self.end

    def column_of(self, d: CalendarDate) -> int | None:
        """Grid column (1 = Monday ... 7 = Sunday) of a date, or None outside the window."""
        if not self.contains(d):
            return None
        return self.start.days_until(d) + 1


def week_window(reference: CalendarDate | date | str) -> WeekWindow:
    """Window of the week containing ``reference``; any time component is dropped first."""
    ref = CalendarDate.coerce(reference)
    start = ref.add_days(-ref.weekday())
    days = tuple(start.add_days(i) for i in range(DAYS_IN_WEEK))
    return WeekWindow(start=start, end=days[-1], days=days)
