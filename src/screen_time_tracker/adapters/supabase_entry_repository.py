"""Supabase repository for screen time entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from screen_time_tracker.domain.entries import Entry, EntryDraft
from screen_time_tracker.domain.errors import (
    ConcurrencyConflictError,
    ConflictError,
    NotFoundError,
)
from screen_time_tracker.domain.streaks import StreakChange
from screen_time_tracker.services.entries import EntryRepository

ENTRIES_TABLE = "screen_time_logs"
ENTRY_COLUMNS = (
    "id, user_id, period_start, minutes, notes, created_at, updated_at, deleted_at"
)
RECORD_ENTRY_FUNCTION = "record_screen_time_entry"
SUM_MINUTES_FUNCTION = "sum_screen_time_by_user"

UNIQUE_VIOLATION = "23505"
SERIALIZATION_FAILURE = "40001"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for screen time entries."""

    client: Client

    def insert_entry(self, draft: EntryDraft, streak: StreakChange | None) -> Entry:
        """Insert the entry and update the streak inside one database function."""
        params: dict[str, object] = {
            "p_user_id": str(draft.user_id),
            "p_period_start": draft.period_start.isoformat(),
            "p_minutes": draft.duration_minutes,
            "p_notes": draft.note,
            "p_update_streak": streak is not None,
            "p_current_streak": None,
            "p_longest_streak": None,
            "p_last_log_period_start": None,
            "p_expected_version": None,
        }
        if streak is not None:
            last = streak.state.last_logged_period_start
            params.update(
                {
                    "p_current_streak": streak.state.current_streak,
                    "p_longest_streak": streak.state.longest_streak,
                    "p_last_log_period_start": last.isoformat() if last else None,
                    "p_expected_version": streak.expected_version,
                }
            )
        try:
            response = self.client.rpc(RECORD_ENTRY_FUNCTION, params).execute()
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise ConflictError(
                    f"An entry for {draft.period_start} already exists"
                ) from exc
            if exc.code == SERIALIZATION_FAILURE:
                raise ConcurrencyConflictError(
                    "Streak was updated concurrently; retry the entry"
                ) from exc
            raise
        row = _first_row(response.data)
        if row is None:
            raise RuntimeError("Failed to create screen time entry")
        return _parse_entry(row)

    def get_entry(self, entry_id: UUID) -> Entry | None:
        """Return a non-deleted entry by id."""
        response = (
            self._active_entries()
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def update_entry(
        self, entry_id: UUID, duration_minutes: int, note: str | None
    ) -> Entry:
        """Update minutes and notes for a non-deleted entry."""
        response = _active(
            self.client.table(ENTRIES_TABLE)
            .update({"minutes": duration_minutes, "notes": note})
            .eq("id", str(entry_id))
        ).execute()
        if not response.data:
            raise NotFoundError(f"Entry {entry_id} not found")
        return _parse_entry(response.data[0])

    def soft_delete_entry(self, entry_id: UUID, deleted_at: datetime) -> None:
        """Set deleted_at on a non-deleted entry."""
        _active(
            self.client.table(ENTRIES_TABLE)
            .update({"deleted_at": deleted_at.isoformat()})
            .eq("id", str(entry_id))
        ).execute()

    def list_entries(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[Entry]:
        """Return a user's entries within the optional period bounds."""
        query = self._active_entries().eq("user_id", str(user_id))
        if start is not None:
            query = query.gte("period_start", start.isoformat())
        if end is not None:
            query = query.lte("period_start", end.isoformat())
        response = query.order("period_start", desc=True).execute()
        return [_parse_entry(row) for row in response.data or []]

    def list_recent_entries(self, user_id: UUID, limit: int) -> list[Entry]:
        """Return a user's most recent entries."""
        response = (
            self._active_entries()
            .eq("user_id", str(user_id))
            .order("period_start", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def sum_minutes_by_user(self, start: date, end: date) -> dict[UUID, int]:
        """Return per-user totals computed by the database."""
        response = self.client.rpc(
            SUM_MINUTES_FUNCTION,
            {"p_start": start.isoformat(), "p_end": end.isoformat()},
        ).execute()
        totals: dict[UUID, int] = {}
        for row in response.data or []:
            totals[UUID(row["user_id"])] = int(row.get("total_minutes") or 0)
        return totals

    def _active_entries(self):  # type: ignore[no-untyped-def]
        return _active(self.client.table(ENTRIES_TABLE).select(ENTRY_COLUMNS))


def _active(query):  # type: ignore[no-untyped-def]
    """Restrict a query to entries that are not soft-deleted."""
    return query.is_("deleted_at", "null")


def _first_row(data: object) -> dict[str, object] | None:
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None


def _parse_entry(row: dict[str, object]) -> Entry:
    return Entry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        period_start=date.fromisoformat(str(row["period_start"])),
        duration_minutes=int(row.get("minutes", 0)),
        note=row.get("notes"),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
        deleted_at=_parse_timestamp(row.get("deleted_at")),
    )


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
