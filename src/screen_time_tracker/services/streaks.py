"""Consecutive-period streak tracking."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import UUID

from screen_time_tracker.domain.periods import Granularity
from screen_time_tracker.domain.streaks import StreakState
from screen_time_tracker.services.periods import next_period_start

logger = logging.getLogger(__name__)


class StreakRepository(Protocol):
    """Read interface for cached streak state.

    Writes go through ``EntryRepository.insert_entry`` so that they commit
    together with the entry that caused them.
    """

    def get_streak(self, user_id: UUID) -> StreakState | None:
        """Return the streak row for a user, if present."""

    def list_streaks(self, user_ids: list[UUID]) -> dict[UUID, StreakState]:
        """Return streak rows keyed by user id for the given users."""


def advance_streak(
    state: StreakState | None,
    user_id: UUID,
    period_start: date,
    granularity: Granularity,
) -> StreakState:
    """Apply one accepted entry at ``period_start`` to a user's streak.

    ``period_start`` must already be period-aligned. Entries for a period at
    or before the last logged one, including a duplicate of the last
    period, leave the state unchanged.
    """
    if state is None:
        return StreakState(
            user_id=user_id,
            current_streak=1,
            longest_streak=1,
            last_logged_period_start=period_start,
        )

    last = state.last_logged_period_start
    if last is not None and period_start <= last:
        return state

    if last is None or period_start == next_period_start(last, granularity):
        current = state.current_streak + 1
    else:
        current = 1

    return replace(
        state,
        current_streak=current,
        longest_streak=max(state.longest_streak, current),
        last_logged_period_start=period_start,
    )


@dataclass
class StreakService:
    """Service exposing streak reads."""

    repository: StreakRepository

    def get_streak(self, user_id: UUID) -> StreakState:
        """Return the user's streak, or the zero state if none exists yet."""
        state = self.repository.get_streak(user_id)
        if state is None:
            logger.debug("No streak recorded yet", extra={"user_id": str(user_id)})
            return StreakState(user_id=user_id)
        return state

    def current_streaks(self, user_ids: list[UUID]) -> dict[UUID, int]:
        """Return current streak counts, defaulting to zero."""
        if not user_ids:
            return {}
        states = self.repository.list_streaks(user_ids)
        return {
            user_id: states[user_id].current_streak if user_id in states else 0
            for user_id in user_ids
        }
