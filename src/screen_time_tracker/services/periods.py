"""Calendar arithmetic for tracking periods.

Every period boundary used by the streak, aggregation and leaderboard code is
computed here. Apart from ``local_now`` all functions are pure and
deterministic given ``now``.
"""

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from screen_time_tracker.domain.errors import ValidationError
from screen_time_tracker.domain.periods import (
    DateRange,
    Granularity,
    LeaderboardPeriod,
    PeriodOption,
)

MINUTES_PER_DAY = 24 * 60
EPOCH_FLOOR = date(1900, 1, 1)

_PERIOD_LENGTH_DAYS = {
    Granularity.DAILY: 1,
    Granularity.WEEKLY: 7,
}

# Number of periods before the current one that each window reaches back.
_WINDOW_LOOKBACK_PERIODS: dict[Granularity, dict[LeaderboardPeriod, int | None]] = {
    Granularity.DAILY: {
        LeaderboardPeriod.DAILY: 0,
        LeaderboardPeriod.WEEKLY: 6,
        LeaderboardPeriod.MONTHLY: 29,
        LeaderboardPeriod.ALL_TIME: None,
    },
    Granularity.WEEKLY: {
        LeaderboardPeriod.DAILY: 0,
        LeaderboardPeriod.WEEKLY: 3,
        LeaderboardPeriod.MONTHLY: 12,
        LeaderboardPeriod.ALL_TIME: None,
    },
}

_PERIOD_NOUNS = {
    Granularity.DAILY: ("Today", "Yesterday", "Days"),
    Granularity.WEEKLY: ("Current Week", "Last Week", "Weeks"),
}


def period_length(granularity: Granularity) -> timedelta:
    """Return the length of one period."""
    return timedelta(days=_PERIOD_LENGTH_DAYS[granularity])


def period_capacity_minutes(granularity: Granularity) -> int:
    """Return the maximum loggable minutes in one period."""
    return _PERIOD_LENGTH_DAYS[granularity] * MINUTES_PER_DAY


def period_start_of(instant: date | datetime, granularity: Granularity) -> date:
    """Return the canonical start date of the period containing ``instant``.

    Weekly periods start on Sunday.
    """
    day = instant.date() if isinstance(instant, datetime) else instant
    if granularity is Granularity.DAILY:
        return day
    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)


def is_period_aligned(value: date, granularity: Granularity) -> bool:
    """Return True when ``value`` is the start of a period."""
    if isinstance(value, datetime):
        return False
    return period_start_of(value, granularity) == value


def period_end_of(period_start: date, granularity: Granularity) -> datetime:
    """Return the last instant of the period starting at ``period_start``."""
    last_day = period_start + period_length(granularity) - timedelta(days=1)
    return datetime.combine(last_day, time.max)


def next_period_start(period_start: date, granularity: Granularity) -> date:
    """Return the start of the period following ``period_start``."""
    return period_start + period_length(granularity)


def resolve_named_range(
    name: LeaderboardPeriod | str | None,
    now: date | datetime,
    granularity: Granularity,
) -> DateRange:
    """Resolve a leaderboard window name into concrete bounds.

    Unknown names resolve like ``weekly``. The range ends at ``now``.
    """
    period = (
        name if isinstance(name, LeaderboardPeriod) else LeaderboardPeriod.parse(name)
    )
    today = now.date() if isinstance(now, datetime) else now
    lookback = _WINDOW_LOOKBACK_PERIODS[granularity][period]
    if lookback is None:
        return DateRange(start=EPOCH_FLOOR, end=today)
    current = period_start_of(today, granularity)
    start = current - period_length(granularity) * lookback
    return DateRange(start=start, end=today)


def recent_period_options(
    now: date | datetime, granularity: Granularity, count: int = 4
) -> list[PeriodOption]:
    """Return the most recent ``count`` periods, newest first, with labels."""
    current = period_start_of(now, granularity)
    current_label, previous_label, plural = _PERIOD_NOUNS[granularity]
    options = []
    for offset in range(max(count, 0)):
        start = current - period_length(granularity) * offset
        end = period_end_of(start, granularity).date()
        span = _format_span(start, end)
        if offset == 0:
            label = f"{current_label} ({span})"
        elif offset == 1:
            label = f"{previous_label} ({span})"
        else:
            label = f"{offset} {plural} Ago ({span})"
        options.append(PeriodOption(label=label, period_start=start, period_end=end))
    return options


def _format_span(start: date, end: date) -> str:
    start_month = start.strftime("%b")
    end_month = end.strftime("%b")
    if start == end:
        return f"{start_month} {start.day}"
    if start_month == end_month:
        return f"{start_month} {start.day}-{end.day}"
    return f"{start_month} {start.day} - {end_month} {end.day}"


def local_now(timezone_name: str | None = None) -> datetime:
    """Return the current time in ``timezone_name``, UTC when unset."""
    if not timezone_name:
        return datetime.now(tz=UTC)
    try:
        tz = ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(f"Unknown timezone {timezone_name!r}") from exc
    return datetime.now(tz=tz)
