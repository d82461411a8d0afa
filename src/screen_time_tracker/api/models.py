"""Request and response models for the HTTP API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from screen_time_tracker.domain.entries import Entry
from screen_time_tracker.domain.leaderboard import LeaderboardEntry
from screen_time_tracker.domain.periods import PeriodOption
from screen_time_tracker.domain.stats import DashboardSummary, WindowTotal
from screen_time_tracker.domain.streaks import StreakState


class EntryCreate(BaseModel):
    """Payload for logging a new entry."""

    period_start: date
    minutes: int
    note: str | None = None


class EntryUpdate(BaseModel):
    """Payload for editing an entry."""

    minutes: int
    note: str | None = None


class EntryOut(BaseModel):
    """Serialized entry."""

    id: UUID
    user_id: UUID
    period_start: date
    minutes: int
    note: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, entry: Entry) -> "EntryOut":
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            period_start=entry.period_start,
            minutes=entry.duration_minutes,
            note=entry.note,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class StreakOut(BaseModel):
    """Serialized streak state."""

    user_id: UUID
    current_streak: int
    longest_streak: int
    last_logged_period_start: date | None

    @classmethod
    def from_domain(cls, state: StreakState) -> "StreakOut":
        return cls(
            user_id=state.user_id,
            current_streak=state.current_streak,
            longest_streak=state.longest_streak,
            last_logged_period_start=state.last_logged_period_start,
        )


class LeaderboardRow(BaseModel):
    """Serialized leaderboard row."""

    user_id: UUID
    display_name: str
    avatar_url: str | None
    total_minutes: int
    current_streak: int
    rank: int

    @classmethod
    def from_domain(cls, row: LeaderboardEntry) -> "LeaderboardRow":
        return cls(
            user_id=row.user_id,
            display_name=row.display_name,
            avatar_url=row.avatar_url,
            total_minutes=row.total_minutes,
            current_streak=row.current_streak,
            rank=row.rank,
        )


class LeaderboardOut(BaseModel):
    """Leaderboard response."""

    period: str
    entries: list[LeaderboardRow]


class WindowTotalOut(BaseModel):
    start: date
    end: date
    minutes: int

    @classmethod
    def from_domain(cls, total: WindowTotal) -> "WindowTotalOut":
        return cls(start=total.start, end=total.end, minutes=total.minutes)


class SummaryOut(BaseModel):
    """Dashboard summary for one user."""

    current_period_start: date
    current_period_minutes: int
    weekly: WindowTotalOut
    monthly: WindowTotalOut
    streak: StreakOut
    recent_entries: list[EntryOut]

    @classmethod
    def from_domain(cls, summary: DashboardSummary) -> "SummaryOut":
        return cls(
            current_period_start=summary.current_period_start,
            current_period_minutes=summary.current_period_minutes,
            weekly=WindowTotalOut.from_domain(summary.weekly),
            monthly=WindowTotalOut.from_domain(summary.monthly),
            streak=StreakOut.from_domain(summary.streak),
            recent_entries=[
                EntryOut.from_domain(entry) for entry in summary.recent_entries
            ],
        )


class PeriodOptionOut(BaseModel):
    label: str
    period_start: date
    period_end: date

    @classmethod
    def from_domain(cls, option: PeriodOption) -> "PeriodOptionOut":
        return cls(
            label=option.label,
            period_start=option.period_start,
            period_end=option.period_end,
        )


class LeaderboardVisibility(BaseModel):
    """Leaderboard visibility setting."""

    show_on_leaderboard: bool = Field(default=True)
