"""Domain models for logging streaks."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class StreakState:
    """Cached consecutive-period summary for a user."""

    user_id: UUID
    current_streak: int = 0
    longest_streak: int = 0
    last_logged_period_start: date | None = None
    version: int = 0


@dataclass(frozen=True)
class StreakChange:
    """Streak state to persist alongside an entry insert.

    ``expected_version`` is the version that was read before the transition,
    or ``None`` when no streak row existed yet.
    """

    state: StreakState
    expected_version: int | None
