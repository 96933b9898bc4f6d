from datetime import date, datetime, timedelta, timezone

from app.core.timezone import (
    day_bounds_utc,
    day_window,
    reference_today,
    to_reference_day,
    to_reference_time
)

UTC = timezone.utc


def test_reference_midnight_is_1830_utc():
    """Minuit UTC+5:30 = 18:30:00 UTC la veille"""
    assert to_reference_day(datetime(2024, 3, 10, 18, 29, 59, tzinfo=UTC)) == date(2024, 3, 10)
    assert to_reference_day(datetime(2024, 3, 10, 18, 30, 0, tzinfo=UTC)) == date(2024, 3, 11)
    assert to_reference_day(datetime(2024, 3, 10, 18, 30, 1, tzinfo=UTC)) == date(2024, 3, 11)


def test_naive_instant_is_treated_as_utc():
    assert to_reference_day(datetime(2024, 3, 10, 18, 30)) == date(2024, 3, 11)
    assert to_reference_day(datetime(2024, 3, 10, 0, 0)) == date(2024, 3, 10)


def test_other_timezones_are_normalized_first():
    """Un instant exprimé dans un autre fuseau est ramené à la référence"""
    new_york = timezone(timedelta(hours=-5))
    # 14:00 à New York = 19:00 UTC = 00:30 le lendemain en UTC+5:30
    assert to_reference_day(datetime(2024, 3, 10, 14, 0, tzinfo=new_york)) == date(2024, 3, 11)

    tokyo = timezone(timedelta(hours=9))
    # 03:00 à Tokyo = 18:00 UTC la veille = 23:30 UTC+5:30
    assert to_reference_day(datetime(2024, 3, 11, 3, 0, tzinfo=tokyo)) == date(2024, 3, 10)


def test_reference_time_offset():
    ref = to_reference_time(datetime(2024, 1, 1, 0, 0, tzinfo=UTC))
    assert ref.utcoffset() == timedelta(hours=5, minutes=30)
    assert (ref.hour, ref.minute) == (5, 30)


def test_day_bounds_utc():
    start, end = day_bounds_utc(date(2024, 3, 11))
    assert start == datetime(2024, 3, 10, 18, 30, tzinfo=UTC)
    assert end - start == timedelta(days=1)


def test_day_window_is_inclusive():
    now = datetime(2024, 3, 10, 19, 0, tzinfo=UTC)
    assert reference_today(now) == date(2024, 3, 11)
    start, end = day_window(7, now)
    assert end == date(2024, 3, 11)
    assert start == date(2024, 3, 5)
    assert (end - start).days + 1 == 7


def test_day_window_single_day():
    now = datetime(2024, 12, 31, 12, 0, tzinfo=UTC)
    assert day_window(1, now) == (date(2024, 12, 31), date(2024, 12, 31))
