"""
Weekly schedule API endpoints (read-only view model for the calendar page)
"""
import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from weekgrid.api.deps import get_today, get_work_client
from weekgrid.application.week_navigator import WeekNavigator
from weekgrid.domain.calendar_date import CalendarDate, CalendarDateError
from weekgrid.domain.day_grouping import (
    build_day_groups, default_expanded_days, format_week_range,
)
from weekgrid.domain.grid import PositionedTask, position_tasks
from weekgrid.domain.work_task import WorkTask
from weekgrid.infrastructure.work_api import WorkApiClient, WorkApiError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/schedule", tags=["schedule"])


# === Response models ===

class TaskResponse(BaseModel):
    task_id: int | None
    has_valid_task_id: bool
    lot_id: int | None
    lot_number: str | None
    subdivision_id: int | None
    subdivision_name: str | None
    progress: str | None
    manager_id: int | None
    manager_name: str | None
    is_complete: bool
    address: str | None
    obs: str | None


class BarResponse(BaseModel):
    task: TaskResponse
    start_date: str
    end_date: str
    column_start: int
    column_span: int


class DayResponse(BaseModel):
    date: str
    name: str
    number: str
    full_date: str
    is_today: bool
    tasks: list[TaskResponse]


class WeekResponse(BaseModel):
    reference_date: str
    start_date: str
    end_date: str
    range_label: str
    previous_date: str
    next_date: str
    is_current_week: bool
    days: list[DayResponse]
    bars: list[BarResponse]
    expanded_days: list[str]


# === Helpers ===

def _task_response(t: WorkTask) -> TaskResponse:
    return TaskResponse(
        task_id=t.task_id,
        has_valid_task_id=t.has_valid_task_id,
        lot_id=t.lot_id,
        lot_number=t.lot_number,
        subdivision_id=t.subdivision_id,
        subdivision_name=t.subdivision_name,
        progress=t.progress,
        manager_id=t.manager_id,
        manager_name=t.manager_name,
        is_complete=t.is_complete,
        address=t.address,
        obs=t.obs,
    )


def _bar_response(p: PositionedTask) -> BarResponse:
    return BarResponse(
        task=_task_response(p.task),
        start_date=p.start.isoformat(),
        end_date=p.end.isoformat(),
        column_start=p.column_start,
        column_span=p.column_span,
    )


# === Endpoints ===

@router.get("/week", response_model=WeekResponse)
def get_week(
    ref: str | None = Query(None, alias="date"),
    sub: int = -1,
    lot: str = "-1",
    status: int = -1,
    client: WorkApiClient = Depends(get_work_client),
    today_value: date = Depends(get_today),
):
    """Week containing ``date`` (default: today) laid out as Gantt bars and day rows"""
    today = CalendarDate.from_date(today_value)
    try:
        reference = CalendarDate.parse(ref) if ref else today
        navigator = WeekNavigator(reference, today=lambda: today)
        window = navigator.window
        previous_date = reference.add_days(-7)
        next_date = reference.add_days(7)
    except CalendarDateError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        tasks = client.get_tasks_by_range(
            window.start, window.end, subdivision=sub, lot=lot or "-1", status=status,
        )
    except WorkApiError as e:
        logger.warning("Week %s unavailable: %s", window.start, e)
        raise HTTPException(status_code=502, detail=str(e))

    positioned = position_tasks(tasks, window)
    groups = build_day_groups(positioned, window, today)

    return WeekResponse(
        reference_date=reference.isoformat(),
        start_date=window.start.isoformat(),
        end_date=window.end.isoformat(),
        range_label=format_week_range(window),
        previous_date=previous_date.isoformat(),
        next_date=next_date.isoformat(),
        is_current_week=navigator.is_current_week(),
        days=[
            DayResponse(
                date=g.info.date_key,
                name=g.info.name,
                number=g.info.number,
                full_date=g.info.full_date,
                is_today=g.info.is_today,
                tasks=[_task_response(t) for t in g.tasks],
            )
            for g in groups
        ],
        bars=[_bar_response(p) for p in positioned],
        expanded_days=sorted(default_expanded_days(window, today)),
    )
