"""Tests for minute aggregation."""

from datetime import date, timedelta
from uuid import uuid4

from screen_time_tracker.domain.periods import DateRange, Granularity
from screen_time_tracker.services.aggregation import AggregationService
from tests.conftest import WEEK_0, InMemoryEntryRepository

WEEK = timedelta(days=7)


def test_aggregate_sums_entries_in_range_per_user() -> None:
    repository = InMemoryEntryRepository()
    alice, bob, carol = uuid4(), uuid4(), uuid4()
    repository.add(alice, WEEK_0, 100)
    repository.add(alice, WEEK_0 + WEEK, 50)
    repository.add(alice, WEEK_0 + 2 * WEEK, 999)
    repository.add(bob, WEEK_0 + WEEK, 70)
    repository.add(bob, WEEK_0, 500, deleted=True)
    repository.add(carol, WEEK_0 - WEEK, 40)
    service = AggregationService(repository, Granularity.WEEKLY)

    totals = service.aggregate(DateRange(start=WEEK_0, end=WEEK_0 + WEEK))

    assert totals == {alice: 150, bob: 70}


def test_aggregate_window_resolves_named_range() -> None:
    repository = InMemoryEntryRepository()
    user_id = uuid4()
    now = date(2025, 11, 5)
    repository.add(user_id, date(2025, 11, 2), 30)
    repository.add(user_id, date(2025, 10, 12), 20)
    repository.add(user_id, date(2025, 10, 5), 10)
    service = AggregationService(repository, Granularity.WEEKLY)

    date_range, totals = service.aggregate_window("weekly", now)

    assert date_range == DateRange(start=date(2025, 10, 12), end=now)
    assert totals == {user_id: 50}
    _, daily = service.aggregate_window("daily", now)
    assert daily == {user_id: 30}
    _, all_time = service.aggregate_window("all_time", now)
    assert all_time == {user_id: 60}
