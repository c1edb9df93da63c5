"""
Weekly schedule controller: week navigation, task fetch, grid and day views.

Load state machine:  IDLE -> LOADING -> LOADED | ERROR

Every load is tagged with the navigator version at the moment it is issued.
A response (or failure) arriving after the version moved on is stale and is
dropped, so a slow fetch for an earlier week can never overwrite the week on
screen. Task lists are replaced wholesale, never merged.
"""
import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Coroutine, Protocol

from weekgrid.application.week_navigator import WeekNavigator
from weekgrid.domain.calendar_date import CalendarDate
from weekgrid.domain.day_grouping import (
    DayGroup, build_day_groups, default_expanded_days, group_by_day,
)
from weekgrid.domain.grid import PositionedTask, position_tasks
from weekgrid.domain.week_window import WeekWindow
from weekgrid.domain.work_task import WorkTask

logger = logging.getLogger(__name__)

ALL = -1  # "no filter" value understood by the work-data service


class LoadState(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    LOADED = "LOADED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ScheduleFilters:
    subdivision: int = ALL
    lot: str = str(ALL)
    status: int = ALL


class TaskFetcher(Protocol):
    async def fetch_tasks_in_range(
        self,
        start: CalendarDate,
        end: CalendarDate,
        subdivision: int = ALL,
        lot: str = str(ALL),
        status: int = ALL,
    ) -> list[WorkTask]:
        ...


class WeeklySchedule:
    def __init__(
        self,
        fetcher: TaskFetcher,
        navigator: WeekNavigator | None = None,
        filters: ScheduleFilters | None = None,
    ):
        self.fetcher = fetcher
        self.navigator = navigator or WeekNavigator()
        self.filters = filters or ScheduleFilters()
        self.state = LoadState.IDLE
        self.error: str | None = None
        self._tasks: tuple[WorkTask, ...] = ()
        self._inflight: asyncio.Future | None = None

    # --- loading ---

    @property
    def loading(self) -> bool:
        return self.state == LoadState.LOADING

    def load(self) -> Coroutine[Any, Any, bool]:
        """
        Issue a fetch for the current window and return the coroutine to await.

        The request is tagged now, at issue time. The coroutine resolves to
        True when its response was applied, False when it failed or was stale.
        """
        version = self.navigator.version
        window = self.navigator.window
        filters = self.filters
        self.state = LoadState.LOADING
        self.error = None
        return self._run_load(version, window, filters)

    async def _run_load(self, version: int, window: WeekWindow, filters: ScheduleFilters) -> bool:
        if version != self.navigator.version:
            logger.debug("Skipping superseded load v%d", version)
            return False

        # Drop the fetch of a superseded load
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        logger.info("Loading week tasks %s..%s (v%d)", window.start, window.end, version)
        fetch = asyncio.ensure_future(self.fetcher.fetch_tasks_in_range(
            window.start, window.end,
            subdivision=filters.subdivision, lot=filters.lot, status=filters.status,
        ))
        self._inflight = fetch

        try:
            tasks = await fetch
        except asyncio.CancelledError:
            if self._inflight is not fetch:
                logger.debug("Fetch v%d cancelled by a newer load", version)
                return False
            raise
        except Exception as exc:
            if version != self.navigator.version:
                logger.info("Discarding stale failure for v%d: %s", version, exc)
                return False
            logger.warning("Week tasks fetch failed for %s..%s: %s", window.start, window.end, exc)
            self.state = LoadState.ERROR
            self.error = str(exc) or exc.__class__.__name__
            return False
        finally:
            if self._inflight is fetch:
                self._inflight = None

        if version != self.navigator.version:
            logger.info("Discarding stale response for v%d (current v%d)", version, self.navigator.version)
            return False

        self._tasks = tuple(tasks)
        self.state = LoadState.LOADED
        logger.info("%d task(s) loaded for week %s", len(self._tasks), window.start)
        return True

    # --- transitions (each one triggers a new load) ---

    def previous_week(self) -> Coroutine[Any, Any, bool]:
        self.navigator.previous_week()
        return self.load()

    def next_week(self) -> Coroutine[Any, Any, bool]:
        self.navigator.next_week()
        return self.load()

    def go_to_today(self) -> Coroutine[Any, Any, bool]:
        self.navigator.go_to_today()
        return self.load()

    def refresh(self) -> Coroutine[Any, Any, bool]:
        self.navigator.touch()
        return self.load()

    def set_filters(
        self,
        subdivision: int | None = None,
        lot: str | None = None,
        status: int | None = None,
    ) -> Coroutine[Any, Any, bool]:
        changes: dict[str, Any] = {}
        if subdivision is not None:
            changes["subdivision"] = subdivision
        if lot is not None:
            changes["lot"] = lot.strip() or str(ALL)
        if status is not None:
            changes["status"] = status
        self.filters = replace(self.filters, **changes)
        self.navigator.touch()
        return self.load()

    # --- views ---

    def is_current_week(self) -> bool:
        return self.navigator.is_current_week()

    def get_week_window(self) -> WeekWindow:
        return self.navigator.window

    def get_tasks(self) -> list[WorkTask]:
        return list(self._tasks)

    def get_positioned_tasks(self) -> list[PositionedTask]:
        return position_tasks(list(self._tasks), self.navigator.window)

    def get_tasks_by_day(self) -> dict[CalendarDate, list[WorkTask]]:
        return group_by_day(self.get_positioned_tasks(), self.navigator.window)

    def get_day_groups(self) -> list[DayGroup]:
        return build_day_groups(self.get_positioned_tasks(), self.navigator.window, self.navigator.today())

    def get_default_expanded_days(self) -> set[str]:
        return default_expanded_days(self.navigator.window, self.navigator.today())
