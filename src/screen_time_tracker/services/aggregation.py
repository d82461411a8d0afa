"""Aggregation of logged minutes over leaderboard windows."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from screen_time_tracker.domain.periods import DateRange, Granularity, LeaderboardPeriod
from screen_time_tracker.services.periods import resolve_named_range


class MinutesRepository(Protocol):
    """Range-scan interface over non-deleted entries."""

    def sum_minutes_by_user(self, start: date, end: date) -> dict[UUID, int]:
        """Return total minutes per user for period starts within range."""


@dataclass
class AggregationService:
    """Sums entry durations per user."""

    repository: MinutesRepository
    granularity: Granularity

    def aggregate(self, date_range: DateRange) -> dict[UUID, int]:
        """Return total minutes per user for entries within ``date_range``.

        Users without matching entries are absent from the result.
        """
        return self.repository.sum_minutes_by_user(date_range.start, date_range.end)

    def aggregate_window(
        self, period: LeaderboardPeriod | str | None, now: date | datetime
    ) -> tuple[DateRange, dict[UUID, int]]:
        """Resolve a named window and aggregate it."""
        date_range = resolve_named_range(period, now, self.granularity)
        return date_range, self.aggregate(date_range)
