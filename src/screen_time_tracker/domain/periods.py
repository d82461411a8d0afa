"""Domain types for tracking periods and leaderboard windows."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class Granularity(StrEnum):
    """Length of a tracking period for a deployment."""

    DAILY = "daily"
    WEEKLY = "weekly"


class LeaderboardPeriod(StrEnum):
    """Named leaderboard windows."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ALL_TIME = "all_time"

    @classmethod
    def parse(cls, value: str | None) -> "LeaderboardPeriod":
        """Return the window for a name, falling back to weekly."""
        if value is None:
            return cls.WEEKLY
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.WEEKLY


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of period start dates."""

    start: date
    end: date

    def __contains__(self, value: object) -> bool:
        return isinstance(value, date) and self.start <= value <= self.end


@dataclass(frozen=True)
class PeriodOption:
    """A selectable period with a human readable label."""

    label: str
    period_start: date
    period_end: date
