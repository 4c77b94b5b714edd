from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime

from progressbattery.constants import (
    DEFAULT_BIRTH_YEAR,
    DEFAULT_LIFE_EXPECTANCY_YEARS,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
)
from progressbattery.timeutil import (
    add_day,
    add_hour,
    add_month,
    add_year,
    days_in_month,
    days_in_year,
    format_remaining,
    local_now,
    plural,
    seconds_between,
    start_of_day,
    start_of_hour,
    start_of_month,
    start_of_year,
)

log = logging.getLogger(__name__)


class TimeScale(enum.Enum):
    HOUR = "Hour"
    DAY = "Day"
    MONTH = "Month"
    YEAR = "Year"
    LIFE = "Life"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> TimeScale:
        for scale in cls:
            if scale.value.lower() == (label or "").strip().lower():
                return scale
        raise ValueError(f"Unknown time scale: {label!r}")


@dataclass(frozen=True)
class Configuration:
    birth_year: int | None = DEFAULT_BIRTH_YEAR
    life_expectancy_years: float = DEFAULT_LIFE_EXPECTANCY_YEARS
    refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS


@dataclass(frozen=True)
class ProgressResult:
    scale: TimeScale
    fraction: float
    remaining_units_hint: int | None = None
    computed_at: datetime | None = field(default=None, compare=False)

    @property
    def display_fraction(self) -> float:
        return max(0.0, min(1.0, self.fraction))

    @property
    def percentage(self) -> int:
        return max(0, min(100, int(self.fraction * 100)))


# Errors a boundary computation can hit: datetime.replace past year 9999,
# timestamp() outside the platform's range.
_CALENDAR_ERRORS = (ValueError, OverflowError, OSError, ZeroDivisionError)


def _period_fraction(now: datetime, start: datetime, end: datetime) -> float:
    total = seconds_between(start, end)
    if total <= 0:
        return 0.0
    return seconds_between(start, now) / total


def hour_progress(now: datetime) -> float:
    start = start_of_hour(now)
    return _period_fraction(now, start, add_hour(start))


def day_progress(now: datetime) -> float:
    start = start_of_day(now)
    return _period_fraction(now, start, add_day(start))


def month_progress(now: datetime) -> float:
    start = start_of_month(now)
    return _period_fraction(now, start, add_month(start))


def year_progress(now: datetime) -> float:
    start = start_of_year(now)
    return _period_fraction(now, start, add_year(start))


def life_progress(now: datetime, birth_year: int | None, life_expectancy_years: float) -> float:
    """Whole years lived over life expectancy.

    Only the birth year is known, so the ratio steps once per calendar year.
    The result may exceed 1.0 and is left unclamped.
    """
    if birth_year is None:
        return 0.0
    if not math.isfinite(life_expectancy_years) or life_expectancy_years <= 0:
        return 0.0
    age = now.year - int(birth_year)
    return age / life_expectancy_years


def _remaining_hint(scale: TimeScale, now: datetime, config: Configuration) -> int | None:
    if scale is TimeScale.MONTH:
        return days_in_month(now) - now.day
    if scale is TimeScale.YEAR:
        return days_in_year(now) - now.timetuple().tm_yday
    if scale is TimeScale.LIFE:
        expectancy = config.life_expectancy_years
        if config.birth_year is None or not math.isfinite(expectancy) or expectancy <= 0:
            return None
        return max(0, int(expectancy - (now.year - int(config.birth_year))))
    return None


_CALCULATORS = {
    TimeScale.HOUR: hour_progress,
    TimeScale.DAY: day_progress,
    TimeScale.MONTH: month_progress,
    TimeScale.YEAR: year_progress,
}


def compute_progress(
    scale: TimeScale,
    now: datetime | None = None,
    config: Configuration | None = None,
) -> ProgressResult:
    now = local_now() if now is None else now
    config = Configuration() if config is None else config

    try:
        if scale is TimeScale.LIFE:
            fraction = life_progress(now, config.birth_year, config.life_expectancy_years)
        else:
            fraction = _CALCULATORS[scale](now)
        hint = _remaining_hint(scale, now, config)
    except _CALENDAR_ERRORS as e:
        log.debug("Progress for %s at %s is undefined: %s", scale.label, now, e)
        return ProgressResult(scale=scale, fraction=0.0, computed_at=now)

    if not math.isfinite(fraction):
        fraction = 0.0
    return ProgressResult(scale=scale, fraction=fraction, remaining_units_hint=hint, computed_at=now)


def describe_remaining(result: ProgressResult) -> str:
    """Human readable remaining-time text for tooltips, e.g. "12 days left in the month"."""
    now = result.computed_at
    try:
        if result.scale is TimeScale.HOUR and now is not None:
            left = seconds_between(now, add_hour(start_of_hour(now)))
            return f"{format_remaining(left)} left in the hour"
        if result.scale is TimeScale.DAY and now is not None:
            left = seconds_between(now, add_day(start_of_day(now)))
            return f"{format_remaining(left)} left in the day"
    except _CALENDAR_ERRORS:
        return ""

    hint = result.remaining_units_hint
    if hint is None:
        return ""
    if result.scale is TimeScale.MONTH:
        return f"{plural(hint, 'day')} left in the month"
    if result.scale is TimeScale.YEAR:
        return f"{plural(hint, 'day')} left in the year"
    if result.scale is TimeScale.LIFE:
        return f"{plural(hint, 'year')} left"
    return ""
