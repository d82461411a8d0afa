"""Domain models for screen time entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class Entry:
    """One logged duration for a user in one period."""

    id: UUID
    user_id: UUID
    period_start: date
    duration_minutes: int
    note: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class EntryDraft:
    """Validated entry that has not been persisted yet."""

    user_id: UUID
    period_start: date
    duration_minutes: int
    note: str | None = None
