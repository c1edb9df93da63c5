"""Week navigation state: the current reference date and a change counter."""
import logging
from datetime import date
from typing import Callable

from weekgrid.domain.calendar_date import CalendarDate
from weekgrid.domain.week_window import WeekWindow, week_window

logger = logging.getLogger(__name__)

TodayProvider = Callable[[], "CalendarDate | date"]


def _settings_today() -> date:
    from weekgrid.config import get_settings
    return get_settings().today()


class WeekNavigator:
    """
    Owns the reference date of the visible week.

    Every transition bumps ``version``; a fetch issued for one version is
    stale as soon as the version moves on.
    """

    def __init__(
        self,
        reference_date: CalendarDate | date | str | None = None,
        today: TodayProvider | None = None,
    ):
        self._today = today or _settings_today
        self.reference_date = (
            CalendarDate.coerce(reference_date) if reference_date is not None else self.today()
        )
        self.version = 0

    def today(self) -> CalendarDate:
        return CalendarDate.coerce(self._today())

    @property
    def window(self) -> WeekWindow:
        return week_window(self.reference_date)

    def _move_to(self, new_reference: CalendarDate) -> WeekWindow:
        self.reference_date = new_reference
        self.version += 1
        window = self.window
        logger.debug("Week -> %s..%s (v%d)", window.start, window.end, self.version)
        return window

    def previous_week(self) -> WeekWindow:
        return self._move_to(self.reference_date.add_days(-7))

    def next_week(self) -> WeekWindow:
        return self._move_to(self.reference_date.add_days(7))

    def go_to_today(self) -> WeekWindow:
        return self._move_to(self.today())

    def touch(self) -> int:
        """Bump the version without moving (refresh, filter change)."""
        self.version += 1
        return self.version

    def is_current_week(self) -> bool:
        return self.window == week_window(self.today())
