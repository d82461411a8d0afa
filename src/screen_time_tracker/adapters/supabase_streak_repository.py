"""Supabase repository for streak state."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from screen_time_tracker.domain.streaks import StreakState
from screen_time_tracker.services.streaks import StreakRepository

STREAKS_TABLE = "user_streaks"
STREAK_COLUMNS = (
    "user_id, current_streak, longest_streak, last_log_period_start, version"
)


@dataclass
class SupabaseStreakRepository(StreakRepository):
    """Supabase implementation for streak reads."""

    client: Client

    def get_streak(self, user_id: UUID) -> StreakState | None:
        """Return the streak row for a user."""
        response = (
            self.client.table(STREAKS_TABLE)
            .select(STREAK_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_streak(response.data[0])

    def list_streaks(self, user_ids: list[UUID]) -> dict[UUID, StreakState]:
        """Return streak rows for the given users."""
        if not user_ids:
            return {}
        response = (
            self.client.table(STREAKS_TABLE)
            .select(STREAK_COLUMNS)
            .in_("user_id", [str(user_id) for user_id in user_ids])
            .execute()
        )
        states = [_parse_streak(row) for row in response.data or []]
        return {state.user_id: state for state in states}


def _parse_streak(row: dict[str, object]) -> StreakState:
    last_raw = row.get("last_log_period_start")
    last_logged = (
        date.fromisoformat(last_raw)
        if isinstance(last_raw, str) and last_raw
        else None
    )
    return StreakState(
        user_id=UUID(str(row["user_id"])),
        current_streak=int(row.get("current_streak") or 0),
        longest_streak=int(row.get("longest_streak") or 0),
        last_logged_period_start=last_logged,
        version=int(row.get("version") or 0),
    )
