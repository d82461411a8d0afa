"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from screen_time_tracker.domain.periods import Granularity
from screen_time_tracker.services.periods import period_capacity_minutes

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    granularity: Granularity = Granularity.WEEKLY
    default_leaderboard_limit: int = Field(default=100, ge=1)
    timezone: str = "UTC"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def period_capacity_minutes(self) -> int:
        """Maximum minutes per entry for the configured granularity."""
        return period_capacity_minutes(self.granularity)
