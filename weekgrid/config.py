"""
Application configuration using Pydantic Settings
"""
from datetime import date, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Work-data service (task-range endpoint lives under this prefix)
    WORK_API_BASE_URL: str = "http://localhost:3000/api/work"
    WORK_API_TOKEN: str = ""
    WORK_API_TIMEOUT: int = 10

    # Calendar: single local calendar, only used to decide what "today" is
    TIMEZONE: str = "America/New_York"

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def today(self) -> date:
        """Current calendar day in the configured local timezone"""
        return datetime.now(tz=ZoneInfo(self.TIMEZONE)).date()


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
