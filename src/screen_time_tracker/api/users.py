"""Per-user endpoints for entries, streaks and settings."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, Response, status

from screen_time_tracker.api.models import (
    EntryCreate,
    EntryOut,
    EntryUpdate,
    LeaderboardVisibility,
    StreakOut,
    SummaryOut,
)
from screen_time_tracker.services.periods import local_now

if TYPE_CHECKING:
    from screen_time_tracker.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["users"])


@router.post("/entries", status_code=status.HTTP_201_CREATED)
async def record_entry(
    user_id: UUID, payload: EntryCreate, request: Request, tz: str | None = None
) -> EntryOut:
    """Log screen time for one period."""
    container: AppContainer = request.app.state.container
    entry = container.entry_service.record_entry(
        user_id=user_id,
        period_start=payload.period_start,
        minutes=payload.minutes,
        note=payload.note,
        now=local_now(tz or container.settings.timezone),
    )
    return EntryOut.from_domain(entry)


@router.get("/entries")
async def list_entries(
    user_id: UUID,
    request: Request,
    start: date | None = None,
    end: date | None = None,
) -> list[EntryOut]:
    """Return the user's entries, newest period first."""
    container: AppContainer = request.app.state.container
    entries = container.entry_service.list_entries(user_id, start, end)
    return [EntryOut.from_domain(entry) for entry in entries]


@router.patch("/entries/{entry_id}")
async def update_entry(
    user_id: UUID, entry_id: UUID, payload: EntryUpdate, request: Request
) -> EntryOut:
    """Edit the duration or note of an entry."""
    container: AppContainer = request.app.state.container
    entry = container.entry_service.update_entry(
        user_id, entry_id, payload.minutes, payload.note
    )
    return EntryOut.from_domain(entry)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(user_id: UUID, entry_id: UUID, request: Request) -> Response:
    """Soft-delete an entry."""
    container: AppContainer = request.app.state.container
    container.entry_service.delete_entry(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/streak")
async def get_streak(user_id: UUID, request: Request) -> StreakOut:
    """Return the user's streak; users without entries get zeros."""
    container: AppContainer = request.app.state.container
    return StreakOut.from_domain(container.streak_service.get_streak(user_id))


@router.get("/summary")
async def get_summary(
    user_id: UUID, request: Request, tz: str | None = None
) -> SummaryOut:
    """Return dashboard totals for the user."""
    container: AppContainer = request.app.state.container
    summary = container.stats_service.get_summary(
        user_id, now=local_now(tz or container.settings.timezone)
    )
    return SummaryOut.from_domain(summary)


@router.get("/settings/leaderboard")
async def get_leaderboard_visibility(
    user_id: UUID, request: Request
) -> LeaderboardVisibility:
    container: AppContainer = request.app.state.container
    visible = container.user_settings_service.get_show_on_leaderboard(user_id)
    return LeaderboardVisibility(show_on_leaderboard=visible)


@router.put("/settings/leaderboard")
async def set_leaderboard_visibility(
    user_id: UUID, payload: LeaderboardVisibility, request: Request
) -> LeaderboardVisibility:
    container: AppContainer = request.app.state.container
    container.user_settings_service.set_show_on_leaderboard(
        user_id, payload.show_on_leaderboard
    )
    return payload
