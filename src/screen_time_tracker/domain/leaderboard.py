"""Leaderboard domain models."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserProfile:
    """Public identity shown on the leaderboard."""

    user_id: UUID
    display_name: str
    avatar_url: str | None = None


@dataclass(frozen=True)
class LeaderboardEntry:
    """A ranked leaderboard row."""

    user_id: UUID
    display_name: str
    avatar_url: str | None
    total_minutes: int
    current_streak: int
    rank: int
