"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from screen_time_tracker.config import Settings
from screen_time_tracker.containers import AppContainer
from screen_time_tracker.domain.entries import Entry, EntryDraft
from screen_time_tracker.domain.errors import (
    ConcurrencyConflictError,
    ConflictError,
    NotFoundError,
)
from screen_time_tracker.domain.leaderboard import UserProfile
from screen_time_tracker.domain.periods import Granularity
from screen_time_tracker.domain.streaks import StreakChange, StreakState
from screen_time_tracker.services.aggregation import AggregationService
from screen_time_tracker.services.entries import EntryRepository, EntryService
from screen_time_tracker.services.leaderboard import LeaderboardService
from screen_time_tracker.services.profiles import ProfileRepository
from screen_time_tracker.services.stats import StatsService
from screen_time_tracker.services.streaks import StreakRepository, StreakService
from screen_time_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)

# A Sunday.
WEEK_0 = date(2025, 10, 5)


@dataclass
class InMemoryStreakRepository(StreakRepository):
    """In-memory streak repository for tests."""

    states: dict[UUID, StreakState] = field(default_factory=dict)

    def get_streak(self, user_id: UUID) -> StreakState | None:
        return self.states.get(user_id)

    def list_streaks(self, user_ids: list[UUID]) -> dict[UUID, StreakState]:
        return {
            user_id: self.states[user_id]
            for user_id in user_ids
            if user_id in self.states
        }


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository that commits entry and streak together."""

    streaks: InMemoryStreakRepository = field(default_factory=InMemoryStreakRepository)
    entries: dict[UUID, Entry] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def insert_entry(self, draft: EntryDraft, streak: StreakChange | None) -> Entry:
        with self._lock:
            for existing in self.entries.values():
                if (
                    existing.user_id == draft.user_id
                    and existing.period_start == draft.period_start
                    and existing.deleted_at is None
                ):
                    raise ConflictError("duplicate period")
            if streak is not None:
                stored = self.streaks.states.get(draft.user_id)
                stored_version = stored.version if stored else None
                if stored_version != streak.expected_version:
                    raise ConcurrencyConflictError("stale streak")
                self.streaks.states[draft.user_id] = replace(
                    streak.state, version=(stored_version or 0) + 1
                )
            now = datetime.now(tz=UTC)
            entry = Entry(
                id=uuid4(),
                user_id=draft.user_id,
                period_start=draft.period_start,
                duration_minutes=draft.duration_minutes,
                note=draft.note,
                created_at=now,
                updated_at=now,
            )
            self.entries[entry.id] = entry
            return entry

    def get_entry(self, entry_id: UUID) -> Entry | None:
        entry = self.entries.get(entry_id)
        if entry is None or entry.deleted_at is not None:
            return None
        return entry

    def update_entry(
        self, entry_id: UUID, duration_minutes: int, note: str | None
    ) -> Entry:
        entry = self.get_entry(entry_id)
        if entry is None:
            raise NotFoundError("missing")
        updated = replace(
            entry,
            duration_minutes=duration_minutes,
            note=note,
            updated_at=datetime.now(tz=UTC),
        )
        self.entries[entry_id] = updated
        return updated

    def soft_delete_entry(self, entry_id: UUID, deleted_at: datetime) -> None:
        entry = self.get_entry(entry_id)
        if entry is not None:
            self.entries[entry_id] = replace(entry, deleted_at=deleted_at)

    def list_entries(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[Entry]:
        rows = [
            entry
            for entry in self._active()
            if entry.user_id == user_id
            and (start is None or entry.period_start >= start)
            and (end is None or entry.period_start <= end)
        ]
        return sorted(rows, key=lambda entry: entry.period_start, reverse=True)

    def list_recent_entries(self, user_id: UUID, limit: int) -> list[Entry]:
        return self.list_entries(user_id, None, None)[:limit]

    def sum_minutes_by_user(self, start: date, end: date) -> dict[UUID, int]:
        totals: dict[UUID, int] = {}
        for entry in self._active():
            if start <= entry.period_start <= end:
                totals[entry.user_id] = (
                    totals.get(entry.user_id, 0) + entry.duration_minutes
                )
        return totals

    def add(
        self,
        user_id: UUID,
        period_start: date,
        minutes: int,
        deleted: bool = False,
    ) -> Entry:
        """Seed an entry without touching streaks."""
        entry = Entry(
            id=uuid4(),
            user_id=user_id,
            period_start=period_start,
            duration_minutes=minutes,
            deleted_at=datetime.now(tz=UTC) if deleted else None,
        )
        self.entries[entry.id] = entry
        return entry

    def _active(self) -> list[Entry]:
        return [entry for entry in self.entries.values() if entry.deleted_at is None]


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def list_profiles(self, user_ids: list[UUID]) -> dict[UUID, UserProfile]:
        return {
            user_id: self.profiles[user_id]
            for user_id in user_ids
            if user_id in self.profiles
        }

    def add(self, display_name: str, avatar_url: str | None = None) -> UUID:
        user_id = uuid4()
        self.profiles[user_id] = UserProfile(
            user_id=user_id, display_name=display_name, avatar_url=avatar_url
        )
        return user_id


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    visibility: dict[UUID, bool] = field(default_factory=dict)

    def get_show_on_leaderboard(self, user_id: UUID) -> bool | None:
        return self.visibility.get(user_id)

    def set_show_on_leaderboard(self, user_id: UUID, visible: bool) -> None:
        self.visibility[user_id] = visible

    def list_leaderboard_visibility(self, user_ids: list[UUID]) -> dict[UUID, bool]:
        return {
            user_id: self.visibility[user_id]
            for user_id in user_ids
            if user_id in self.visibility
        }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        granularity=Granularity.WEEKLY,
    )


@pytest.fixture
def streak_repository() -> InMemoryStreakRepository:
    return InMemoryStreakRepository()


@pytest.fixture
def entry_repository(
    streak_repository: InMemoryStreakRepository,
) -> InMemoryEntryRepository:
    return InMemoryEntryRepository(streaks=streak_repository)


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def user_settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def entry_service(
    entry_repository: InMemoryEntryRepository,
    streak_repository: InMemoryStreakRepository,
) -> EntryService:
    return EntryService(
        repository=entry_repository,
        streak_repository=streak_repository,
        granularity=Granularity.WEEKLY,
    )


@pytest.fixture
def leaderboard_service(
    entry_repository: InMemoryEntryRepository,
    streak_repository: InMemoryStreakRepository,
    profile_repository: InMemoryProfileRepository,
    user_settings_repository: InMemoryUserSettingsRepository,
) -> LeaderboardService:
    return LeaderboardService(
        aggregation_service=AggregationService(
            repository=entry_repository, granularity=Granularity.WEEKLY
        ),
        streak_service=StreakService(streak_repository),
        user_settings_service=UserSettingsService(user_settings_repository),
        profile_repository=profile_repository,
    )


@pytest.fixture
def container(
    settings: Settings,
    entry_service: EntryService,
    leaderboard_service: LeaderboardService,
) -> AppContainer:
    streak_service = leaderboard_service.streak_service
    return AppContainer(
        settings=settings,
        entry_service=entry_service,
        streak_service=streak_service,
        aggregation_service=leaderboard_service.aggregation_service,
        leaderboard_service=leaderboard_service,
        stats_service=StatsService(
            entry_service=entry_service, streak_service=streak_service
        ),
        user_settings_service=leaderboard_service.user_settings_service,
    )
