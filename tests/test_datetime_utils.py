from datetime import date, datetime, timedelta, timezone

from app.utils.datetime_utils import (
    end_of_day,
    ensure_utc,
    start_of_day,
    subtract_months,
    to_naive_utc,
)


def test_day_bounds_are_computed_in_utc():
    kigali = timezone(timedelta(hours=2))
    # 01:30 in Kigali is still the previous UTC day
    moment = datetime(2026, 3, 9, 1, 30, tzinfo=kigali)

    assert start_of_day(moment) == datetime(2026, 3, 8, tzinfo=timezone.utc)
    assert end_of_day(moment) == datetime(2026, 3, 8, 23, 59, 59, 999999, tzinfo=timezone.utc)


def test_day_bounds_accept_plain_dates():
    assert start_of_day(date(2026, 3, 8)) == datetime(2026, 3, 8, tzinfo=timezone.utc)
    assert end_of_day(date(2026, 3, 8)).microsecond == 999999


def test_naive_values_are_taken_as_utc():
    naive = datetime(2026, 3, 8, 10, 0)

    assert ensure_utc(naive) == datetime(2026, 3, 8, 10, 0, tzinfo=timezone.utc)
    assert to_naive_utc(naive) == naive
    assert to_naive_utc(None) is None


def test_to_naive_utc_converts_offsets():
    moment = datetime(2026, 3, 8, 10, 0, tzinfo=timezone(timedelta(hours=-5)))

    assert to_naive_utc(moment) == datetime(2026, 3, 8, 15, 0)


def test_subtract_months_clamps_day_and_crosses_years():
    assert subtract_months(datetime(2026, 3, 31), 1) == datetime(2026, 2, 28)
    assert subtract_months(datetime(2026, 1, 15), 1) == datetime(2025, 12, 15)
    assert subtract_months(datetime(2024, 3, 30), 1) == datetime(2024, 2, 29)
    assert subtract_months(datetime(2026, 5, 10), 14) == datetime(2025, 3, 10)
