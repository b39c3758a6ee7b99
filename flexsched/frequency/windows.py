"""Time-window arithmetic in the scheduler timezone.

Windows are ``HH:mm`` bands of civil time. Computations convert the
absolute instant to a naive local wall-clock datetime, do day arithmetic
there, and localize the result at the end, so DST transitions never move a
wall-clock target.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import Iterable
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Europe/Paris"
MINUTES_PER_DAY = 24 * 60


def parse_time(value: str) -> tuple[int, int]:
    """Split ``HH:mm`` into ``(hours, minutes)``."""
    hours, _, minutes = value.partition(":")
    return int(hours), int(minutes)


def time_to_minutes(value: str) -> int:
    hours, minutes = parse_time(value)
    return hours * 60 + minutes


def window_duration_minutes(window_start: str, window_end: str) -> int:
    """Window length in minutes; an end at or before the start means the next day."""
    start_total = time_to_minutes(window_start)
    end_total = time_to_minutes(window_end)
    if end_total <= start_total:
        end_total += MINUTES_PER_DAY
    return end_total - start_total


def resolve_timezone(tz: str | ZoneInfo | None) -> ZoneInfo:
    if tz is None:
        return ZoneInfo(DEFAULT_TIMEZONE)
    if isinstance(tz, ZoneInfo):
        return tz
    return ZoneInfo(tz)


def ensure_aware(instant: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def to_local(instant: datetime, tz: ZoneInfo) -> datetime:
    """Wall-clock time of ``instant`` in ``tz``, as a naive datetime."""
    return ensure_aware(instant).astimezone(tz).replace(tzinfo=None)


def from_local(local: datetime, tz: ZoneInfo) -> datetime:
    """Absolute UTC instant for a naive wall-clock datetime in ``tz``."""
    return local.replace(tzinfo=tz).astimezone(timezone.utc)


def weekday_index(value: datetime) -> int:
    """Day of week with 0 = Sunday ... 6 = Saturday."""
    return (value.weekday() + 1) % 7


def is_in_window(local_dt: datetime, window_start: str, window_end: str) -> bool:
    """Check whether a local datetime falls inside ``[start, end)``.

    Only hours and minutes are compared. A window whose start is after its
    end (e.g. 22:00-06:00) wraps past midnight.
    """
    current = local_dt.hour * 60 + local_dt.minute
    start_total = time_to_minutes(window_start)
    end_total = time_to_minutes(window_end)

    if start_total <= end_total:
        return start_total <= current < end_total
    return current >= start_total or current < end_total


def get_next_window_start(
    from_instant: datetime,
    window_start: str,
    window_end: str,
    days_of_week: Iterable[int] | None = None,
    *,
    tz: str | ZoneInfo | None = None,
) -> datetime:
    """Return the first window opening strictly after ``from_instant``.

    With ``days_of_week`` (0 = Sunday) only those local weekdays qualify;
    the search gives up after one week. Returns an aware UTC datetime.
    """
    zone = resolve_timezone(tz)
    local = to_local(from_instant, zone)
    hours, minutes = parse_time(window_start)

    candidate = local.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    if candidate <= local:
        candidate += timedelta(days=1)

    allowed = set(days_of_week or ())
    if allowed:
        attempts = 0
        while weekday_index(candidate) not in allowed and attempts < 7:
            candidate += timedelta(days=1)
            attempts += 1

    return from_local(candidate, zone)


def get_random_time_in_window(
    instant: datetime,
    window_start: str,
    window_end: str,
    *,
    tz: str | ZoneInfo | None = None,
    rng: random.Random | None = None,
) -> datetime:
    """Pick a uniformly random minute inside the window opening on the local date of ``instant``."""
    zone = resolve_timezone(tz)
    generator = rng if rng is not None else random

    duration = window_duration_minutes(window_start, window_end)
    target = time_to_minutes(window_start) + generator.randrange(duration)

    local = to_local(instant, zone)
    minute_of_day = target % MINUTES_PER_DAY
    result = local.replace(
        hour=minute_of_day // 60,
        minute=minute_of_day % 60,
        second=0,
        microsecond=0,
    )
    if target >= MINUTES_PER_DAY:
        result += timedelta(days=1)

    return from_local(result, zone)


def get_random_jitter(jitter_minutes: int, rng: random.Random | None = None) -> int:
    """Uniform integer offset in ``[-jitter_minutes, +jitter_minutes]``."""
    generator = rng if rng is not None else random
    return generator.randint(-jitter_minutes, jitter_minutes)
