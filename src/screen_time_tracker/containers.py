"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from screen_time_tracker.adapters.supabase_entry_repository import (
    SupabaseEntryRepository,
)
from screen_time_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from screen_time_tracker.adapters.supabase_streak_repository import (
    SupabaseStreakRepository,
)
from screen_time_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from screen_time_tracker.config import Settings
from screen_time_tracker.services.aggregation import AggregationService
from screen_time_tracker.services.entries import EntryService
from screen_time_tracker.services.leaderboard import LeaderboardService
from screen_time_tracker.services.stats import StatsService
from screen_time_tracker.services.streaks import StreakService
from screen_time_tracker.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService
    streak_service: StreakService
    aggregation_service: AggregationService
    leaderboard_service: LeaderboardService
    stats_service: StatsService
    user_settings_service: UserSettingsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(supabase_client)
    streak_repository = SupabaseStreakRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    user_settings_repository = SupabaseUserSettingsRepository(supabase_client)

    entry_service = EntryService(
        repository=entry_repository,
        streak_repository=streak_repository,
        granularity=resolved_settings.granularity,
    )
    streak_service = StreakService(streak_repository)
    aggregation_service = AggregationService(
        repository=entry_repository,
        granularity=resolved_settings.granularity,
    )
    user_settings_service = UserSettingsService(user_settings_repository)
    leaderboard_service = LeaderboardService(
        aggregation_service=aggregation_service,
        streak_service=streak_service,
        user_settings_service=user_settings_service,
        profile_repository=profile_repository,
        default_limit=resolved_settings.default_leaderboard_limit,
    )
    stats_service = StatsService(
        entry_service=entry_service,
        streak_service=streak_service,
    )

    return AppContainer(
        settings=resolved_settings,
        entry_service=entry_service,
        streak_service=streak_service,
        aggregation_service=aggregation_service,
        leaderboard_service=leaderboard_service,
        stats_service=stats_service,
        user_settings_service=user_settings_service,
    )
