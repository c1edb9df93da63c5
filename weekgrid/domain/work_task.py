"""
Work task (field work order) as read from the work-data service.

Only the scheduling subset is interpreted; display fields are carried through
unchanged and the full record is kept in ``raw``.
"""
from dataclasses import dataclass, field
from typing import Any


def _opt_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (ValueError, OverflowError):  # NaN, Infinity
            return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true")
    return value is True or value == 1


@dataclass(frozen=True)
class WorkTask:
    task_id: int | None = None  # null until an assignment is persisted
    start_date: str | None = None
    initial_date: str | None = None
    end_date_task: str | None = None
    end_date: str | None = None
    days: int | None = None
    work_days: int | None = None
    is_complete: bool = False
    manager_id: int | None = None
    manager_name: str | None = None
    lot_id: int | None = None
    lot_number: str | None = None
    subdivision_id: int | None = None
    subdivision_name: str | None = None
    progress: str | None = None
    address: str | None = None
    sf_quantity: str | None = None
    colors: str | None = None
    door_desc: str | None = None
    obs: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "WorkTask":
        """Build from a task-range record (``LotDetail`` shape, PascalCase keys)."""
        progress = record.get("Progress")
        if isinstance(progress, (int, float)) and not isinstance(progress, bool):
            progress = f"Progreso {progress}"
        return cls(
            task_id=_opt_int(record.get("TaskId")),
            start_date=_opt_str(record.get("StartDate")),
            initial_date=_opt_str(record.get("InitialDate")),
            end_date_task=_opt_str(record.get("EndDateTask")),
            end_date=_opt_str(record.get("EndDate")),
            days=_opt_int(record.get("Days")),
            work_days=_opt_int(record.get("WorkDays")),
            is_complete=_flag(record.get("IsComplete")) or _flag(record.get("Completed")),
            manager_id=_opt_int(record.get("UserId")),
            manager_name=_opt_str(record.get("Manager")),
            lot_id=_opt_int(record.get("LoteId")),
            lot_number=_opt_str(record.get("Number")),
            subdivision_id=_opt_int(record.get("SubdivisionId")),
            subdivision_name=_opt_str(record.get("SubName")),
            progress=_opt_str(progress),
            address=_opt_str(record.get("address")),
            sf_quantity=_opt_str(record.get("SFQuantity")),
            colors=_opt_str(record.get("Colors")),
            door_desc=_opt_str(record.get("DoorDesc")),
            obs=_opt_str(record.get("Obs")),
            raw=dict(record),
        )

    @property
    def duration(self) -> int | None:
        """Duration in days: Days, else WorkDays; zero or missing means no duration."""
        return self.days or self.work_days or None

    @property
    def has_valid_task_id(self) -> bool:
        return bool(self.task_id and self.task_id > 0)
