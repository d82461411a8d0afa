"""Screen time entry logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from screen_time_tracker.domain.entries import Entry, EntryDraft
from screen_time_tracker.domain.errors import NotFoundError, ValidationError
from screen_time_tracker.domain.periods import Granularity
from screen_time_tracker.domain.streaks import StreakChange
from screen_time_tracker.services.periods import (
    is_period_aligned,
    period_capacity_minutes,
    period_start_of,
)
from screen_time_tracker.services.streaks import StreakRepository, advance_streak

logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for screen time entries.

    Every read only sees entries that are not soft-deleted.
    """

    def insert_entry(self, draft: EntryDraft, streak: StreakChange | None) -> Entry:
        """Insert an entry and apply the streak change in one atomic write.

        Raises ``ConflictError`` when a non-deleted entry already exists for
        the user and period, and ``ConcurrencyConflictError`` when the stored
        streak version no longer matches ``streak.expected_version``.
        """

    def get_entry(self, entry_id: UUID) -> Entry | None:
        """Return a non-deleted entry by id."""

    def update_entry(
        self, entry_id: UUID, duration_minutes: int, note: str | None
    ) -> Entry:
        """Update an entry's duration and note."""

    def soft_delete_entry(self, entry_id: UUID, deleted_at: datetime) -> None:
        """Mark an entry as deleted."""

    def list_entries(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[Entry]:
        """Return a user's entries with period start in range, newest first."""

    def list_recent_entries(self, user_id: UUID, limit: int) -> list[Entry]:
        """Return a user's most recent entries."""

    def sum_minutes_by_user(self, start: date, end: date) -> dict[UUID, int]:
        """Return total minutes per user for period starts within range."""


@dataclass
class EntryService:
    """Service that validates and records screen time entries."""

    repository: EntryRepository
    streak_repository: StreakRepository
    granularity: Granularity

    @property
    def capacity_minutes(self) -> int:
        return period_capacity_minutes(self.granularity)

    def record_entry(
        self,
        user_id: UUID,
        period_start: date,
        minutes: int,
        note: str | None = None,
        now: date | datetime | None = None,
    ) -> Entry:
        """Validate and persist an entry, advancing the user's streak.

        Periods after the one containing ``now`` are rejected.
        """
        draft = EntryDraft(
            user_id=user_id,
            period_start=self._validate_period_start(
                period_start, now or datetime.now(tz=UTC)
            ),
            duration_minutes=self._validate_minutes(minutes),
            note=_normalize_note(note),
        )
        current = self.streak_repository.get_streak(user_id)
        advanced = advance_streak(
            current, user_id, draft.period_start, self.granularity
        )
        streak = None
        if advanced != current:
            streak = StreakChange(
                state=advanced,
                expected_version=current.version if current else None,
            )
        entry = self.repository.insert_entry(draft, streak)
        logger.info(
            "Recorded screen time entry",
            extra={
                "user_id": str(user_id),
                "entry_id": str(entry.id),
                "period_start": draft.period_start.isoformat(),
                "current_streak": advanced.current_streak,
            },
        )
        return entry

    def update_entry(
        self, user_id: UUID, entry_id: UUID, minutes: int, note: str | None = None
    ) -> Entry:
        """Update the duration and note of an entry owned by the user."""
        self._get_owned_entry(user_id, entry_id)
        return self.repository.update_entry(
            entry_id, self._validate_minutes(minutes), _normalize_note(note)
        )

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Soft-delete an entry owned by the user.

        Streaks are not recomputed on delete.
        """
        self._get_owned_entry(user_id, entry_id)
        self.repository.soft_delete_entry(entry_id, datetime.now(tz=UTC))
        logger.info(
            "Deleted screen time entry",
            extra={"user_id": str(user_id), "entry_id": str(entry_id)},
        )

    def list_entries(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[Entry]:
        """Return the user's entries, optionally bounded by period start."""
        if start and end and start > end:
            raise ValidationError("start must not be after end")
        return self.repository.list_entries(user_id, start, end)

    def list_recent_entries(self, user_id: UUID, limit: int = 5) -> list[Entry]:
        """Return the user's most recent entries."""
        return self.repository.list_recent_entries(user_id, limit)

    def _get_owned_entry(self, user_id: UUID, entry_id: UUID) -> Entry:
        entry = self.repository.get_entry(entry_id)
        if entry is None or entry.user_id != user_id:
            raise NotFoundError(f"Entry {entry_id} not found")
        return entry

    def _validate_minutes(self, minutes: int) -> int:
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise ValidationError("Duration must be a whole number of minutes")
        if not 0 <= minutes <= self.capacity_minutes:
            logger.warning(
                "Rejected entry duration",
                extra={"minutes": minutes, "capacity": self.capacity_minutes},
            )
            raise ValidationError(
                f"Duration must be between 0 and {self.capacity_minutes} minutes"
            )
        return minutes

    def _validate_period_start(
        self, period_start: date, now: date | datetime
    ) -> date:
        if not isinstance(period_start, date) or not is_period_aligned(
            period_start, self.granularity
        ):
            raise ValidationError(
                f"{period_start} is not the start of a {self.granularity} period"
            )
        current = period_start_of(now, self.granularity)
        if period_start > current:
            logger.warning(
                "Rejected future period",
                extra={
                    "period_start": period_start.isoformat(),
                    "current_period_start": current.isoformat(),
                },
            )
            raise ValidationError(
                f"{period_start} is after the current period ({current})"
            )
        return period_start


def _normalize_note(note: str | None) -> str | None:
    if note is None:
        return None
    return note.strip() or None
