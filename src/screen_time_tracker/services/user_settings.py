"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_show_on_leaderboard(self, user_id: UUID) -> bool | None:
        """Return the user's leaderboard visibility if set."""

    def set_show_on_leaderboard(self, user_id: UUID, visible: bool) -> None:
        """Create or update the user's leaderboard visibility."""

    def list_leaderboard_visibility(self, user_ids: list[UUID]) -> dict[UUID, bool]:
        """Return stored visibility flags; users without settings are absent."""


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository

    def get_show_on_leaderboard(self, user_id: UUID) -> bool:
        """Return the user's visibility, visible when unset."""
        visible = self.repository.get_show_on_leaderboard(user_id)
        return True if visible is None else visible

    def set_show_on_leaderboard(self, user_id: UUID, visible: bool) -> None:
        """Persist the user's leaderboard visibility."""
        self.repository.set_show_on_leaderboard(user_id, visible)

    def visible_users(self, user_ids: list[UUID]) -> set[UUID]:
        """Return the subset of users that may appear on the leaderboard."""
        if not user_ids:
            return set()
        flags = self.repository.list_leaderboard_visibility(user_ids)
        return {user_id for user_id in user_ids if flags.get(user_id, True)}
