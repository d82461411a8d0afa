"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from screen_time_tracker.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_show_on_leaderboard(self, user_id: UUID) -> bool | None:
        """Return the stored visibility flag for a user."""
        response = (
            self.client.table("user_settings")
            .select("show_on_leaderboard")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("show_on_leaderboard")

    def set_show_on_leaderboard(self, user_id: UUID, visible: bool) -> None:
        """Create or update the user's visibility flag."""
        self.client.table("user_settings").upsert(
            {
                "user_id": str(user_id),
                "show_on_leaderboard": visible,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

    def list_leaderboard_visibility(self, user_ids: list[UUID]) -> dict[UUID, bool]:
        """Return stored visibility flags for the given users."""
        if not user_ids:
            return {}
        response = (
            self.client.table("user_settings")
            .select("user_id, show_on_leaderboard")
            .in_("user_id", [str(user_id) for user_id in user_ids])
            .execute()
        )
        flags: dict[UUID, bool] = {}
        for row in response.data or []:
            value = row.get("show_on_leaderboard")
            if value is not None:
                flags[UUID(str(row["user_id"]))] = bool(value)
        return flags
