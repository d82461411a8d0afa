"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from screen_time_tracker.domain.leaderboard import UserProfile
from screen_time_tracker.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile lookups."""

    client: Client

    def list_profiles(self, user_ids: list[UUID]) -> dict[UUID, UserProfile]:
        """Return display identity for users that are not deleted."""
        if not user_ids:
            return {}
        response = (
            self.client.table("users")
            .select("id, display_name, avatar_url")
            .in_("id", [str(user_id) for user_id in user_ids])
            .is_("deleted_at", "null")
            .execute()
        )
        profiles = {}
        for row in response.data or []:
            user_id = UUID(str(row["id"]))
            profiles[user_id] = UserProfile(
                user_id=user_id,
                display_name=str(row.get("display_name") or ""),
                avatar_url=row.get("avatar_url"),
            )
        return profiles
