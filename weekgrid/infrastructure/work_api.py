"""
Client for the external work-data service (task-range endpoint).

GET {WORK_API_BASE_URL}/task-range?startDate=&endDate=&sub=&lot=&status=

The service answers with a bare list of LotDetail records, or with the list
wrapped as ``{"data": [...]}`` / ``{"tasks": [...]}``.
"""
import asyncio
import logging
import threading
from typing import Any

import requests

from weekgrid.domain.calendar_date import CalendarDate
from weekgrid.domain.work_task import WorkTask

logger = logging.getLogger(__name__)


class WorkApiError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def normalize_task_payload(payload: Any) -> list[dict[str, Any]]:
    """Extract the record list from any of the known response shapes."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("data", "tasks"):
            if isinstance(payload.get(key), list):
                return payload[key]
    logger.warning("Unexpected task-range response format: %r", payload)
    return []


def _date_param(value: CalendarDate | str, name: str) -> str:
    if isinstance(value, CalendarDate):
        return value.isoformat()
    if not value or not str(value).strip():
        raise WorkApiError(f"{name} is required")
    return str(value).strip()


class WorkApiClient:
    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: int = 10,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """Injected session, else one per thread (requests.Session is not thread-safe)"""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    @classmethod
    def from_settings(cls, settings) -> "WorkApiClient":
        return cls(
            base_url=settings.WORK_API_BASE_URL,
            token=settings.WORK_API_TOKEN,
            timeout=settings.WORK_API_TIMEOUT,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get_tasks_by_range(
        self,
        start: CalendarDate | str,
        end: CalendarDate | str,
        subdivision: int = -1,
        lot: str = "-1",
        status: int = -1,
    ) -> list[WorkTask]:
        """Blocking fetch of every task in [start, end] (both inclusive)."""
        params = {
            "startDate": _date_param(start, "startDate"),
            "endDate": _date_param(end, "endDate"),
            "sub": str(subdivision),
            "lot": lot,
            "status": str(status),
        }
        url = f"{self.base_url}/task-range"
        logger.info("Fetching tasks by range: %s", params)

        try:
            resp = self.session.get(url, params=params, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Task-range request failed: %s", exc)
            raise WorkApiError(
                f"Error fetching tasks for {params['startDate']} - {params['endDate']}: {exc}"
            ) from exc

        if resp.status_code >= 400:
            message = None
            try:
                body = resp.json()
                if isinstance(body, dict):
                    message = body.get("message") or body.get("msg")
            except ValueError:
                pass
            logger.error("Task-range endpoint returned HTTP %d: %s", resp.status_code, message)
            raise WorkApiError(
                message or f"Error fetching tasks for {params['startDate']} - {params['endDate']}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise WorkApiError("Task-range endpoint returned invalid JSON") from exc

        records = normalize_task_payload(payload)
        tasks = [WorkTask.from_record(r) for r in records if isinstance(r, dict)]
        logger.info("%d task(s) loaded for %s - %s", len(tasks), params["startDate"], params["endDate"])
        return tasks

    async def fetch_tasks_in_range(
        self,
        start: CalendarDate,
        end: CalendarDate,
        subdivision: int = -1,
        lot: str = "-1",
        status: int = -1,
    ) -> list[WorkTask]:
        """Async wrapper: the blocking request runs in a worker thread."""
        return await asyncio.to_thread(
            self.get_tasks_by_range, start, end,
            subdivision=subdivision, lot=lot, status=status,
        )
