"""Application configuration."""

import os
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    analytics_timezone: str = "UTC"
    analytics_default_days: int = 30
    analytics_max_days: int = 365
    store_page_size: int = 1000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def tz(self) -> ZoneInfo:
        """Return the time zone used for calendar-day bucketing."""
        return ZoneInfo(self.analytics_timezone)


def parse_days(raw: str | None, default: int, maximum: int) -> int:
    """Parse the `days` query parameter, falling back to the default."""
    value = parse_int(raw)
    if value is None or value <= 0:
        return default
    return min(value, maximum)


def parse_int(raw: str | None) -> int | None:
    """Parse an integer query parameter, returning None when malformed."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None
