"""User profile lookups."""

from typing import Protocol
from uuid import UUID

from screen_time_tracker.domain.leaderboard import UserProfile


class ProfileRepository(Protocol):
    """Read interface for public user identity."""

    def list_profiles(self, user_ids: list[UUID]) -> dict[UUID, UserProfile]:
        """Return profiles of active users keyed by id.

        Deleted or unknown users are absent.
        """
