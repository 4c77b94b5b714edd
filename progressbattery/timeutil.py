from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


def local_now() -> datetime:
    # Naive local wall-clock time; .timestamp() resolves it through the host's
    # timezone rules, so boundaries built from it honour DST.
    return datetime.now()


def start_of_hour(dt: datetime) -> datetime:
    return dt.replace(minute=0, second=0, microsecond=0)


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0, fold=0)


def start_of_month(dt: datetime) -> datetime:
    return start_of_day(dt).replace(day=1)


def start_of_year(dt: datetime) -> datetime:
    return start_of_month(dt).replace(month=1)


def add_hour(start: datetime) -> datetime:
    # One hour of real time, so the repeated hour of a fall-back day is 3600s too.
    if start.tzinfo is None:
        return datetime.fromtimestamp(start.timestamp() + 3600)
    return (start.astimezone(timezone.utc) + timedelta(hours=1)).astimezone(start.tzinfo)


def add_day(start: datetime) -> datetime:
    # Wall-clock addition: lands on the next local midnight even on 23h/25h days.
    return start + timedelta(days=1)


def add_month(start: datetime) -> datetime:
    if start.month == 12:
        return start.replace(year=start.year + 1, month=1)
    return start.replace(month=start.month + 1)


def add_year(start: datetime) -> datetime:
    return start.replace(year=start.year + 1)


def seconds_between(start: datetime, end: datetime) -> float:
    """Real elapsed seconds between two instants.

    Subtracting aware datetimes that share a tzinfo compares wall-clock
    fields only, so both sides go through POSIX timestamps instead.
    """
    return end.timestamp() - start.timestamp()


def days_in_month(dt: datetime) -> int:
    return calendar.monthrange(dt.year, dt.month)[1]


def days_in_year(dt: datetime) -> int:
    return 366 if calendar.isleap(dt.year) else 365


@dataclass(frozen=True)
class Remaining:
    days: int
    hours: int
    minutes: int

    def __str__(self) -> str:
        parts: list[str] = []
        if self.days:
            parts.append(f"{self.days}d")
        if self.hours or self.days:
            parts.append(f"{self.hours}h")
        parts.append(f"{self.minutes}m")
        return " ".join(parts)


def format_remaining(total_seconds: float) -> str:
    total = int(total_seconds)
    if total <= 0:
        return "0m"

    minutes = total // 60
    days = minutes // (24 * 60)
    minutes -= days * 24 * 60
    hours = minutes // 60
    minutes -= hours * 60
    return str(Remaining(days=days, hours=hours, minutes=minutes))


def plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
