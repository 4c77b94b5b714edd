from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from progressbattery.timeutil import (
    add_day,
    add_month,
    days_in_month,
    days_in_year,
    format_remaining,
    plural,
    seconds_between,
    start_of_day,
    start_of_month,
    start_of_year,
)


@pytest.mark.parametrize(
    "seconds, text",
    [
        (-5, "0m"),
        (0, "0m"),
        (59, "0m"),
        (60, "1m"),
        (3600, "1h 0m"),
        (90061, "1d 1h 1m"),
        (86400 * 3, "3d 0h 0m"),
    ],
)
def test_format_remaining(seconds, text):
    assert format_remaining(seconds) == text


def test_seconds_between_uses_real_time_across_fall_back():
    tz = ZoneInfo("America/New_York")
    start = datetime(2024, 11, 3, tzinfo=tz)
    # Same tzinfo, so plain subtraction would report 24h.
    assert (add_day(start) - start).total_seconds() == 24 * 3600
    assert seconds_between(start, add_day(start)) == 25 * 3600


def test_period_starts():
    now = datetime(2024, 5, 17, 13, 45, 12, 345, tzinfo=timezone.utc)
    assert start_of_day(now) == datetime(2024, 5, 17, tzinfo=timezone.utc)
    assert start_of_month(now) == datetime(2024, 5, 1, tzinfo=timezone.utc)
    assert start_of_year(now) == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_add_month_rolls_over_year():
    assert add_month(datetime(2024, 12, 1)) == datetime(2025, 1, 1)
    assert add_month(datetime(2024, 1, 1)) == datetime(2024, 2, 1)


def test_calendar_lengths():
    assert days_in_month(datetime(2024, 2, 10)) == 29
    assert days_in_month(datetime(2100, 2, 10)) == 28
    assert days_in_year(datetime(2000, 6, 1)) == 366
    assert days_in_year(datetime(1900, 6, 1)) == 365


def test_plural():
    assert plural(1, "day") == "1 day"
    assert plural(0, "day") == "0 days"
    assert plural(12, "year") == "12 years"
