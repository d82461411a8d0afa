"""Leaderboard ranking over named windows."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from screen_time_tracker.domain.errors import ValidationError
from screen_time_tracker.domain.leaderboard import LeaderboardEntry
from screen_time_tracker.domain.periods import LeaderboardPeriod
from screen_time_tracker.services.aggregation import AggregationService
from screen_time_tracker.services.profiles import ProfileRepository
from screen_time_tracker.services.streaks import StreakService
from screen_time_tracker.services.user_settings import UserSettingsService

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100


@dataclass
class LeaderboardService:
    """Builds ranked leaderboard snapshots.

    Snapshots are recomputed on every call from read-time data.
    """

    aggregation_service: AggregationService
    streak_service: StreakService
    user_settings_service: UserSettingsService
    profile_repository: ProfileRepository
    default_limit: int = DEFAULT_LIMIT

    def build_leaderboard(
        self,
        period: LeaderboardPeriod | str | None = LeaderboardPeriod.WEEKLY,
        limit: int | None = None,
        now: date | datetime | None = None,
    ) -> list[LeaderboardEntry]:
        """Return ranked rows for the window, best total first."""
        window = LeaderboardPeriod.parse(period)
        resolved_limit = self.default_limit if limit is None else limit
        if resolved_limit < 0:
            raise ValidationError("limit must not be negative")
        date_range, totals = self.aggregation_service.aggregate_window(
            window, now or datetime.now(tz=UTC)
        )
        candidates = [user_id for user_id, total in totals.items() if total > 0]
        visible = self.user_settings_service.visible_users(candidates)
        candidates = [user_id for user_id in candidates if user_id in visible]
        profiles = self.profile_repository.list_profiles(candidates)
        candidates = [user_id for user_id in candidates if user_id in profiles]
        streaks = self.streak_service.current_streaks(candidates)

        ranked = rank_totals({user_id: totals[user_id] for user_id in candidates})
        rows = [
            LeaderboardEntry(
                user_id=user_id,
                display_name=profiles[user_id].display_name,
                avatar_url=profiles[user_id].avatar_url,
                total_minutes=totals[user_id],
                current_streak=streaks.get(user_id, 0),
                rank=ranked[user_id],
            )
            for user_id in candidates
        ]
        rows.sort(key=lambda row: (row.rank, row.display_name, str(row.user_id)))
        logger.info(
            "Built leaderboard",
            extra={
                "period": str(window),
                "range_start": date_range.start.isoformat(),
                "range_end": date_range.end.isoformat(),
                "rows": len(rows),
            },
        )
        return rows[:resolved_limit]


def rank_totals(totals: dict[UUID, int]) -> dict[UUID, int]:
    """Assign competition ranks over totals, highest total ranked 1.

    Equal totals share a rank; the next distinct total skips the tied
    positions (1, 2, 2, 4).
    """
    ordered = sorted(totals.values(), reverse=True)
    first_position: dict[int, int] = {}
    for position, total in enumerate(ordered, start=1):
        first_position.setdefault(total, position)
    return {user_id: first_position[total] for user_id, total in totals.items()}
