import math
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from progressbattery.progress import (
    Configuration,
    ProgressResult,
    TimeScale,
    compute_progress,
    day_progress,
    describe_remaining,
    hour_progress,
    life_progress,
    month_progress,
    year_progress,
)

UTC = timezone.utc
NEW_YORK = ZoneInfo("America/New_York")


def test_hour_start_and_end():
    start = datetime(2024, 6, 15, 10, 0, 0, tzinfo=UTC)
    assert hour_progress(start) == 0.0
    assert hour_progress(start + timedelta(minutes=15)) == pytest.approx(0.25)
    assert hour_progress(start + timedelta(minutes=59, seconds=59, microseconds=999_000)) == pytest.approx(1.0, abs=1e-6)


def test_hour_in_local_zone_after_spring_forward():
    # 03:00 EDT is the first hour after the 02:00 gap.
    now = datetime(2024, 3, 10, 3, 30, tzinfo=NEW_YORK)
    assert hour_progress(now) == pytest.approx(0.5)


@pytest.mark.parametrize("fold", [0, 1])
def test_hour_repeated_after_fall_back(fold):
    # 01:xx happens twice on 2024-11-03: first in EDT (fold=0), then in EST.
    start = datetime(2024, 11, 3, 1, 0, tzinfo=NEW_YORK, fold=fold)
    assert hour_progress(start) == 0.0
    assert hour_progress(start.replace(minute=30)) == pytest.approx(0.5)
    assert hour_progress(start.replace(minute=59, second=59)) == pytest.approx(3599 / 3600)

    result = compute_progress(TimeScale.HOUR, start.replace(minute=30))
    assert describe_remaining(result) == "30m left in the hour"


@pytest.mark.parametrize(
    "day, hours",
    [
        (datetime(2024, 3, 10, tzinfo=NEW_YORK), 23),
        (datetime(2024, 11, 3, tzinfo=NEW_YORK), 25),
        (datetime(2024, 6, 1, tzinfo=NEW_YORK), 24),
    ],
)
def test_day_length_follows_dst(day, hours):
    assert day_progress(day) == 0.0
    last_second = day.replace(hour=23, minute=59, second=59)
    assert day_progress(last_second) == pytest.approx(1.0 - 1 / (hours * 3600))


def test_day_progress_skips_missing_hour():
    # Only 11 real hours have passed by noon on a 23-hour day.
    noon = datetime(2024, 3, 10, 12, 0, tzinfo=NEW_YORK)
    assert day_progress(noon) == pytest.approx(11 / 23)


def test_month_uses_leap_february():
    assert month_progress(datetime(2024, 2, 15, tzinfo=UTC)) == pytest.approx(14 / 29)
    assert month_progress(datetime(2023, 2, 15, tzinfo=UTC)) == pytest.approx(14 / 28)


def test_month_advances_within_a_day():
    morning = month_progress(datetime(2024, 1, 1, 6, tzinfo=UTC))
    noon = month_progress(datetime(2024, 1, 1, 12, tzinfo=UTC))
    assert 0.0 < morning < noon
    assert noon == pytest.approx(0.5 / 31)


def test_month_remaining_days_hint():
    result = compute_progress(TimeScale.MONTH, datetime(2024, 2, 15, 9, tzinfo=UTC))
    assert result.remaining_units_hint == 14
    assert describe_remaining(result) == "14 days left in the month"

    last_day = compute_progress(TimeScale.MONTH, datetime(2024, 4, 30, tzinfo=UTC))
    assert last_day.remaining_units_hint == 0


def test_year_absorbs_leap_day():
    assert year_progress(datetime(2024, 7, 1, tzinfo=UTC)) == pytest.approx(182 / 366)
    assert year_progress(datetime(2023, 7, 1, tzinfo=UTC)) == pytest.approx(181 / 365)


def test_year_end_is_close_to_one():
    now = datetime(2023, 12, 31, 23, 59, 59, 999_000, tzinfo=UTC)
    assert year_progress(now) == pytest.approx(1.0, abs=1e-9)
    assert year_progress(now + timedelta(milliseconds=1)) == 0.0


@pytest.mark.parametrize("scale", [TimeScale.HOUR, TimeScale.DAY, TimeScale.MONTH, TimeScale.YEAR])
def test_fraction_bounded_and_monotonic(scale):
    start = datetime(2024, 2, 29, tzinfo=UTC)
    values = [compute_progress(scale, start + timedelta(minutes=7 * i)).fraction for i in range(8)]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert values == sorted(values)


def test_life_ratio_of_whole_years():
    now = datetime(2026, 10, 19, tzinfo=UTC)
    config = Configuration(birth_year=now.year - 30, life_expectancy_years=80)
    result = compute_progress(TimeScale.LIFE, now, config)
    assert result.fraction == 0.375
    assert result.percentage == 37
    assert result.remaining_units_hint == 50
    assert describe_remaining(result) == "50 years left"


def test_life_over_expectancy_is_not_clamped():
    now = datetime(2026, 1, 1, tzinfo=UTC)
    result = compute_progress(TimeScale.LIFE, now, Configuration(birth_year=1926, life_expectancy_years=80))
    assert result.fraction == 1.25
    assert result.percentage == 100
    assert result.display_fraction == 1.0
    assert result.remaining_units_hint == 0


@pytest.mark.parametrize("expectancy", [0, -10, math.nan, math.inf])
def test_degenerate_life_expectancy(expectancy):
    now = datetime(2026, 1, 1, tzinfo=UTC)
    result = compute_progress(TimeScale.LIFE, now, Configuration(birth_year=1990, life_expectancy_years=expectancy))
    assert result.fraction == 0.0
    assert result.remaining_units_hint is None


def test_missing_or_absurd_birth_year():
    now = datetime(2026, 1, 1, tzinfo=UTC)
    assert life_progress(now, None, 80) == 0.0
    assert compute_progress(TimeScale.LIFE, now, Configuration(birth_year=-5000)).fraction > 1.0
    assert compute_progress(TimeScale.LIFE, now, Configuration(birth_year=10_000)).fraction < 0.0


@pytest.mark.parametrize("scale", [TimeScale.MONTH, TimeScale.YEAR])
def test_undefined_boundary_yields_zero(scale):
    result = compute_progress(scale, datetime(9999, 12, 15, tzinfo=UTC))
    assert result.fraction == 0.0
    assert result.percentage == 0


def test_percentage_truncates_and_clamps():
    assert ProgressResult(TimeScale.DAY, 0.999).percentage == 99
    assert ProgressResult(TimeScale.DAY, 1.0000001).percentage == 100
    assert ProgressResult(TimeScale.DAY, -0.0001).percentage == 0


def test_describe_remaining_hour_and_day():
    now = datetime(2024, 6, 15, 10, 35, tzinfo=UTC)
    assert describe_remaining(compute_progress(TimeScale.HOUR, now)) == "25m left in the hour"
    assert describe_remaining(compute_progress(TimeScale.DAY, now)) == "13h 25m left in the day"
    assert describe_remaining(ProgressResult(TimeScale.YEAR, 0.5, remaining_units_hint=1)) == "1 day left in the year"


def test_default_now_is_local_time():
    result = compute_progress(TimeScale.DAY)
    assert result.computed_at is not None
    assert 0.0 <= result.fraction <= 1.0


def test_scale_from_label():
    assert TimeScale.from_label("day") is TimeScale.DAY
    assert TimeScale.from_label(" Life ") is TimeScale.LIFE
    with pytest.raises(ValueError):
        TimeScale.from_label("Week")
