"""Tests for settings loading."""

import pytest

from screen_time_tracker.config import Settings
from screen_time_tracker.domain.periods import Granularity


def test_settings_read_granularity_from_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "header.payload.signature")
    monkeypatch.setenv("GRANULARITY", "daily")

    settings = Settings()

    assert settings.granularity is Granularity.DAILY
    assert settings.period_capacity_minutes == 1440


def test_weekly_capacity(settings: Settings) -> None:
    assert settings.period_capacity_minutes == 7 * 1440


def test_settings_read_timezone_and_log_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "header.payload.signature")
    monkeypatch.setenv("TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.timezone == "Europe/Berlin"
    assert settings.log_level == "DEBUG"
