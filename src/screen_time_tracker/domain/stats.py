"""Domain models for dashboard statistics."""

from dataclasses import dataclass, field
from datetime import date

from screen_time_tracker.domain.entries import Entry
from screen_time_tracker.domain.streaks import StreakState


@dataclass(frozen=True)
class WindowTotal:
    """Minutes logged by one user within a window."""

    start: date
    end: date
    minutes: int


@dataclass(frozen=True)
class DashboardSummary:
    """Per-user overview of recent screen time."""

    current_period_start: date
    current_period_minutes: int
    weekly: WindowTotal
    monthly: WindowTotal
    streak: StreakState
    recent_entries: list[Entry] = field(default_factory=list)
