"""
Tests for Weekly schedule API endpoints
"""
import pytest
from datetime import date
from unittest.mock import Mock

from fastapi.testclient import TestClient

from conftest import make_task
from weekgrid.api.deps import get_today, get_work_client
from weekgrid.domain.work_task import WorkTask
from weekgrid.infrastructure.work_api import WorkApiError
from weekgrid.main import app


@pytest.fixture
def work_client():
    """Mock work-data client"""
    mock = Mock()
    mock.get_tasks_by_range.return_value = []
    return mock


@pytest.fixture
def client(work_client):
    """Test client with the work-data client and today overridden"""
    app.dependency_overrides[get_work_client] = lambda: work_client
    app.dependency_overrides[get_today] = lambda: date(2025, 10, 15)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.text == "ok"


def test_week_defaults_to_today(client, work_client):
    response = client.get("/api/v1/schedule/week")
    assert response.status_code == 200
    data = response.json()
    assert data["start_date"] == "2025-10-13"
    assert data["end_date"] == "2025-10-19"
    assert data["range_label"] == "13 oct - 19 oct 2025"
    assert data["is_current_week"] is True
    assert data["expanded_days"] == ["2025-10-15"]
    assert [d["date"] for d in data["days"]][0] == "2025-10-13"
    assert data["days"][2]["is_today"] is True

    args, kwargs = work_client.get_tasks_by_range.call_args
    assert (args[0].isoformat(), args[1].isoformat()) == ("2025-10-13", "2025-10-19")
    assert kwargs == {"subdivision": -1, "lot": "-1", "status": -1}


def test_week_bars_and_days(client, work_client):
    work_client.get_tasks_by_range.return_value = [
        make_task("2025-10-24", 5, task_id=2, lot_number="10A"),  # Fri..Tue
        WorkTask(task_id=3),  # undated
        make_task("2025-10-21", 1, task_id=1),
    ]
    response = client.get("/api/v1/schedule/week", params={"date": "2025-10-22", "sub": 4, "status": 2})
    assert response.status_code == 200
    data = response.json()

    assert data["is_current_week"] is False
    assert data["previous_date"] == "2025-10-15"
    assert data["next_date"] == "2025-10-29"
    assert [(b["task"]["task_id"], b["column_start"], b["column_span"]) for b in data["bars"]] == [
        (1, 2, 1), (2, 5, 3),
    ]
    assert data["bars"][1]["end_date"] == "2025-10-28"
    assert data["bars"][1]["task"]["lot_number"] == "10A"

    tasks_per_day = [[t["task_id"] for t in d["tasks"]] for d in data["days"]]
    assert tasks_per_day == [[], [1], [], [], [2], [2], [2]]
    assert len(data["expanded_days"]) == 7

    assert work_client.get_tasks_by_range.call_args.kwargs == {"subdivision": 4, "lot": "-1", "status": 2}


def test_invalid_date_is_422(client, work_client):
    response = client.get("/api/v1/schedule/week", params={"date": "22/10/2025"})
    assert response.status_code == 422
    work_client.get_tasks_by_range.assert_not_called()


@pytest.mark.parametrize("value", ["9999-12-31", "0001-01-01"])
def test_week_at_calendar_edge_is_422(client, work_client, value):
    # no Sunday after 9999-12-31, no previous week before 0001-01-01
    response = client.get("/api/v1/schedule/week", params={"date": value})
    assert response.status_code == 422
    work_client.get_tasks_by_range.assert_not_called()


def test_upstream_failure_is_502(client, work_client):
    work_client.get_tasks_by_range.side_effect = WorkApiError("service down")
    response = client.get("/api/v1/schedule/week")
    assert response.status_code == 502
    assert response.json()["detail"] == "service down"
