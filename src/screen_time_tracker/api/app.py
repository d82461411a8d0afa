"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from screen_time_tracker.api.models import (
    LeaderboardOut,
    LeaderboardRow,
    PeriodOptionOut,
)
from screen_time_tracker.api.users import router as users_router
from screen_time_tracker.app_logging import configure_logging
from screen_time_tracker.containers import AppContainer
from screen_time_tracker.domain.errors import (
    ConcurrencyConflictError,
    ConflictError,
    NotFoundError,
    TrackerError,
    ValidationError,
)
from screen_time_tracker.domain.periods import LeaderboardPeriod
from screen_time_tracker.services.periods import local_now, recent_period_options

_ERROR_STATUS = {
    ValidationError: 422,
    ConflictError: status.HTTP_409_CONFLICT,
    ConcurrencyConflictError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = app.state.container.settings
        logger.info(
            "Starting screen time tracker",
            extra={
                "environment": settings.environment,
                "granularity": str(settings.granularity),
            },
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(users_router)

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(
        request: Request, exc: TrackerError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info(
            "Request rejected",
            extra={"path": request.url.path, "error": exc.code},
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.code, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/leaderboard")
    async def leaderboard(
        request: Request,
        period: str = LeaderboardPeriod.WEEKLY.value,
        limit: int | None = Query(default=None, ge=0),
        tz: str | None = None,
    ) -> LeaderboardOut:
        """Return the ranked leaderboard for a named window."""
        state_container: AppContainer = request.app.state.container
        window = LeaderboardPeriod.parse(period)
        rows = state_container.leaderboard_service.build_leaderboard(
            window, limit, now=local_now(tz or state_container.settings.timezone)
        )
        return LeaderboardOut(
            period=window.value,
            entries=[LeaderboardRow.from_domain(row) for row in rows],
        )

    @app.get("/periods")
    async def periods(
        request: Request,
        count: int = Query(default=4, ge=1, le=52),
        tz: str | None = None,
    ) -> list[PeriodOptionOut]:
        """Return recent periods that entries can be logged against."""
        state_container: AppContainer = request.app.state.container
        options = recent_period_options(
            local_now(tz or state_container.settings.timezone),
            state_container.settings.granularity,
            count,
        )
        return [PeriodOptionOut.from_domain(option) for option in options]

    return app

