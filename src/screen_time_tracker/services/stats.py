"""Statistics service for the user dashboard."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from screen_time_tracker.domain.entries import Entry
from screen_time_tracker.domain.periods import DateRange, LeaderboardPeriod
from screen_time_tracker.domain.stats import DashboardSummary, WindowTotal
from screen_time_tracker.services.entries import EntryService
from screen_time_tracker.services.periods import period_start_of, resolve_named_range
from screen_time_tracker.services.streaks import StreakService

RECENT_ENTRY_COUNT = 5


@dataclass
class StatsService:
    """Service for computing a user's own totals."""

    entry_service: EntryService
    streak_service: StreakService

    def get_summary(
        self, user_id: UUID, now: date | datetime | None = None
    ) -> DashboardSummary:
        """Return current period, weekly and monthly totals with streak info."""
        resolved_now = now or datetime.now(tz=UTC)
        granularity = self.entry_service.granularity
        monthly_range = resolve_named_range(
            LeaderboardPeriod.MONTHLY, resolved_now, granularity
        )
        weekly_range = resolve_named_range(
            LeaderboardPeriod.WEEKLY, resolved_now, granularity
        )
        current_start = period_start_of(resolved_now, granularity)
        entries = self.entry_service.list_entries(
            user_id, monthly_range.start, monthly_range.end
        )
        return DashboardSummary(
            current_period_start=current_start,
            current_period_minutes=_sum_minutes(
                entries, DateRange(start=current_start, end=monthly_range.end)
            ),
            weekly=_window_total(entries, weekly_range),
            monthly=_window_total(entries, monthly_range),
            streak=self.streak_service.get_streak(user_id),
            recent_entries=self.entry_service.list_recent_entries(
                user_id, RECENT_ENTRY_COUNT
            ),
        )


def _window_total(entries: list[Entry], date_range: DateRange) -> WindowTotal:
    return WindowTotal(
        start=date_range.start,
        end=date_range.end,
        minutes=_sum_minutes(entries, date_range),
    )


def _sum_minutes(entries: list[Entry], date_range: DateRange) -> int:
    return sum(
        entry.duration_minutes
        for entry in entries
        if entry.period_start in date_range
    )
