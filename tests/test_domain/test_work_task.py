"""Tests for building WorkTask from task-range records"""
from weekgrid.domain.work_task import WorkTask


RECORD = {
    "IdDet": 7,
    "TaskId": 321,
    "LoteId": 55,
    "Number": "10A",
    "ProgressStatusId": 2,
    "InitialDate": "2025-10-13T00:00:00.000Z",
    "EndDate": "2025-10-20T00:00:00.000Z",
    "IsComplete": 0,
    "Obs": "Second coat",
    "SubdivisionId": 4,
    "SubName": "Oak Ridge",
    "Progress": "Interior paint",
    "Days": 3,
    "UserId": 12,
    "Manager": "Ana Pérez",
    "StartDate": "2025-10-15",
    "EndDateTask": "",
    "WorkDays": 4,
    "Completed": 0,
    "address": "12 Elm St",
}


def test_from_record_maps_scheduling_fields():
    t = WorkTask.from_record(RECORD)
    assert t.task_id == 321
    assert t.start_date == "2025-10-15"
    assert t.initial_date == "2025-10-13T00:00:00.000Z"
    assert t.end_date_task == ""
    assert t.days == 3
    assert t.work_days == 4
    assert t.duration == 3
    assert t.is_complete is False
    assert t.manager_id == 12
    assert t.manager_name == "Ana Pérez"


def test_from_record_keeps_display_fields_and_raw():
    t = WorkTask.from_record(RECORD)
    assert t.lot_number == "10A"
    assert t.subdivision_name == "Oak Ridge"
    assert t.address == "12 Elm St"
    assert t.raw["IdDet"] == 7


def test_numeric_progress_gets_label():
    t = WorkTask.from_record({"Progress": 40})
    assert t.progress == "Progreso 40"


def test_completion_from_either_flag():
    assert WorkTask.from_record({"IsComplete": 1}).is_complete is True
    assert WorkTask.from_record({"Completed": True}).is_complete is True
    assert WorkTask.from_record({"Completed": "1"}).is_complete is True
    assert WorkTask.from_record({"IsComplete": 0, "Completed": 0}).is_complete is False


def test_missing_and_null_task_id():
    assert WorkTask.from_record({}).task_id is None
    assert WorkTask.from_record({"TaskId": None}).has_valid_task_id is False
    assert WorkTask.from_record({"TaskId": 0}).has_valid_task_id is False
    assert WorkTask.from_record({"TaskId": "15"}).has_valid_task_id is True


def test_duration_falls_back_to_work_days():
    assert WorkTask.from_record({"Days": 0, "WorkDays": 2}).duration == 2
    assert WorkTask.from_record({"Days": None}).duration is None
    assert WorkTask.from_record({"Days": "x"}).duration is None


def test_non_finite_numbers_read_as_missing():
    t = WorkTask.from_record({"StartDate": "2025-10-15", "Days": float("nan")})
    assert t.days is None
    assert t.duration is None
    assert WorkTask.from_record({"Days": float("inf"), "WorkDays": 3}).duration == 3
    assert WorkTask.from_record({"TaskId": float("-inf")}).has_valid_task_id is False
