"""
Pytest fixtures for testing
"""
import pytest

from weekgrid.domain.calendar_date import CalendarDate
from weekgrid.domain.week_window import week_window
from weekgrid.domain.work_task import WorkTask

# Reference week: Monday 2025-10-13 .. Sunday 2025-10-19
MONDAY = CalendarDate(2025, 10, 13)
WEDNESDAY = CalendarDate(2025, 10, 15)
FRIDAY = CalendarDate(2025, 10, 17)
SUNDAY = CalendarDate(2025, 10, 19)


def make_task(start: str | None = None, days: int | None = None, **kwargs) -> WorkTask:
    """WorkTask with a start date and duration; other fields as keyword args"""
    return WorkTask(start_date=start, days=days, **kwargs)


class FakeFetcher:
    """In-memory work-data service: tasks keyed by week start, every call recorded"""

    def __init__(self, tasks_by_week=None, error=None):
        self.tasks_by_week = tasks_by_week or {}
        self.error = error
        self.calls = []

    async def fetch_tasks_in_range(self, start, end, subdivision=-1, lot="-1", status=-1):
        self.calls.append((start, end, subdivision, lot, status))
        if self.error is not None:
            raise self.error
        return list(self.tasks_by_week.get(start, []))


@pytest.fixture
def window():
    """Week window of the reference week"""
    return week_window(MONDAY)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()
