"""Next-run calculation for flexible frequencies.

Handles:
- interval runs with random jitter
- daily and weekly time windows
- a fixed civil timezone (Europe/Paris unless told otherwise)
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from loguru import logger

from flexsched.frequency.types import (
    DailyFrequency,
    FrequencyConfig,
    IntervalFrequency,
    NextRunResult,
    WeeklyFrequency,
)
from flexsched.frequency.validation import to_frequency
from flexsched.frequency.windows import (
    ensure_aware,
    get_next_window_start,
    get_random_jitter,
    get_random_time_in_window,
    is_in_window,
    resolve_timezone,
    to_local,
)

_DAY_NAMES = {
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "fr": ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"),
}

_MONTH_NAMES = {
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    "fr": (
        "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ),
}

_AT = {"en": "at", "fr": "à"}


def describe_instant(
    instant: datetime,
    *,
    tz: str | ZoneInfo | None = None,
    locale: str = "en",
) -> str:
    """Render an instant as local weekday, day, month and time."""
    lang = locale if locale in _DAY_NAMES else "en"
    local = to_local(instant, resolve_timezone(tz))
    day = _DAY_NAMES[lang][local.weekday()]
    month = _MONTH_NAMES[lang][local.month - 1]
    return f"{day} {local.day} {month} {_AT[lang]} {local:%H:%M}"


def calculate_next_run(
    config: FrequencyConfig,
    now: datetime | None = None,
    *,
    rng: random.Random | None = None,
    tz: str | ZoneInfo | None = None,
    locale: str = "en",
) -> NextRunResult:
    """Compute the next execution for a frequency config.

    Args:
        config: Frequency configuration.
        now: Reference instant (defaults to the current UTC time; naive
            values are taken as UTC).
        rng: Random source for jitter and window offsets.
        tz: Timezone whose civil time windows and weekdays refer to.
        locale: Language of the description ("en" or "fr").

    Raises:
        ConfigurationError: if the config does not validate.
    """
    frequency = to_frequency(config)
    zone = resolve_timezone(tz)
    current = ensure_aware(now) if now is not None else datetime.now(timezone.utc)

    if isinstance(frequency, IntervalFrequency):
        jitter = get_random_jitter(frequency.jitter_minutes, rng) if frequency.jitter_minutes else 0
        next_run_at = current + timedelta(minutes=frequency.interval_minutes + jitter)

        window = frequency.window
        if window and not is_in_window(to_local(next_run_at, zone), window.start, window.end):
            snapped_from = next_run_at
            next_run_at = get_next_window_start(next_run_at, window.start, window.end, tz=zone)
            next_run_at = get_random_time_in_window(
                next_run_at, window.start, window.end, tz=zone, rng=rng
            )
            logger.debug(
                "Frequency: {} is outside {}-{}, moved to {}",
                snapped_from.isoformat(),
                window.start,
                window.end,
                next_run_at.isoformat(),
            )
    elif isinstance(frequency, DailyFrequency):
        window = frequency.window
        opening = get_next_window_start(current, window.start, window.end, tz=zone)
        next_run_at = get_random_time_in_window(opening, window.start, window.end, tz=zone, rng=rng)
    elif isinstance(frequency, WeeklyFrequency):
        window = frequency.window
        opening = get_next_window_start(
            current, window.start, window.end, frequency.days_of_week, tz=zone
        )
        next_run_at = get_random_time_in_window(opening, window.start, window.end, tz=zone, rng=rng)
    else:
        raise TypeError(f"unsupported frequency {frequency!r}")

    next_run_at = next_run_at.astimezone(timezone.utc)
    delay_ms = int((next_run_at - current) / timedelta(milliseconds=1))
    description = describe_instant(next_run_at, tz=zone, locale=locale)

    logger.debug("Frequency: next {} run at {} (in {} ms)", config.type, next_run_at.isoformat(), delay_ms)
    return NextRunResult(next_run_at=next_run_at, delay_ms=delay_ms, description=description)


def preview_runs(
    config: FrequencyConfig,
    now: datetime | None = None,
    count: int = 5,
    *,
    rng: random.Random | None = None,
    tz: str | ZoneInfo | None = None,
    locale: str = "en",
) -> list[NextRunResult]:
    """List the next ``count`` runs as a scheduler would chain them.

    Each run is computed from the previous run's instant, so every
    ``delay_ms`` is relative to the run before it (the first to ``now``).
    """
    if count < 1:
        raise ValueError("count must be >= 1")

    results: list[NextRunResult] = []
    reference = now
    for _ in range(count):
        result = calculate_next_run(config, reference, rng=rng, tz=tz, locale=locale)
        results.append(result)
        reference = result.next_run_at
    return results
