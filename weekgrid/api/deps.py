"""
FastAPI dependencies (work-data client, local "today")
"""
from datetime import date

from weekgrid.config import get_settings
from weekgrid.infrastructure.work_api import WorkApiClient

_client: WorkApiClient | None = None


def get_work_client() -> WorkApiClient:
    """Shared work-data client (singleton, one HTTP session per worker thread)"""
    global _client
    if _client is None:
        _client = WorkApiClient.from_settings(get_settings())
    return _client


def get_today() -> date:
    """Today in the configured local calendar"""
    return get_settings().today()
