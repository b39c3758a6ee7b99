"""Frequency configuration validation."""

from __future__ import annotations

import re

from flexsched.frequency.types import (
    FREQUENCY_TYPES,
    ConfigurationError,
    DailyFrequency,
    Frequency,
    FrequencyConfig,
    FrequencyValidationResult,
    IntervalFrequency,
    TimeWindow,
    WeeklyFrequency,
)
from flexsched.frequency.windows import parse_time, window_duration_minutes

_TIME_RE = re.compile(r"^[0-9]{2}:[0-9]{2}$")

MIN_WINDOW_MINUTES = 60


def _check_time(name: str, value: str | None, errors: list[str]) -> bool:
    """Record format/range problems for one window bound; True when usable."""
    if not value:
        return False
    if not _TIME_RE.match(value):
        errors.append(f"{name} must be in HH:mm format (got: {value})")
        return False
    hours, minutes = parse_time(value)
    if hours > 23 or minutes > 59:
        errors.append(f"{name} is out of range, expected 00:00-23:59 (got: {value})")
        return False
    return True


def _format_half(value: int) -> str:
    half = value / 2
    return str(int(half)) if half.is_integer() else str(half)


def validate_frequency_config(config: FrequencyConfig) -> FrequencyValidationResult:
    """Check a frequency config and report every problem at once.

    Never raises. Only a missing ``type`` stops the checks early.
    """
    errors: list[str] = []

    if not config.type:
        errors.append("Frequency type is required ('interval', 'daily', 'weekly')")
        return FrequencyValidationResult(valid=False, errors=errors)

    if config.type not in FREQUENCY_TYPES:
        errors.append(
            f"Invalid frequency type: {config.type}. Accepted values: interval, daily, weekly"
        )

    if config.type == "interval":
        if not config.interval_minutes or config.interval_minutes <= 0:
            errors.append("intervalMinutes is required and must be > 0 for type 'interval'")
        if config.jitter_minutes is not None and config.jitter_minutes < 0:
            errors.append(f"jitterMinutes must be >= 0 (got: {config.jitter_minutes})")
        if (
            config.jitter_minutes is not None
            and config.interval_minutes
            and config.jitter_minutes > config.interval_minutes / 2
        ):
            errors.append(
                f"jitterMinutes ({config.jitter_minutes}) cannot exceed half of "
                f"intervalMinutes ({_format_half(config.interval_minutes)})"
            )

    if config.type in ("daily", "weekly"):
        if not config.window_start:
            errors.append(f"windowStart is required for type '{config.type}'")
        if not config.window_end:
            errors.append(f"windowEnd is required for type '{config.type}'")

    start_ok = _check_time("windowStart", config.window_start, errors)
    end_ok = _check_time("windowEnd", config.window_end, errors)

    if config.type == "weekly":
        if not config.days_of_week:
            errors.append("daysOfWeek is required and cannot be empty for type 'weekly'")
        else:
            invalid = [day for day in config.days_of_week if day < 0 or day > 6]
            if invalid:
                errors.append(
                    f"daysOfWeek contains invalid values: {', '.join(str(d) for d in invalid)}. "
                    "Accepted values: 0-6 (0=Sunday)"
                )

    if start_ok and end_ok:
        duration = window_duration_minutes(config.window_start, config.window_end)
        if duration < MIN_WINDOW_MINUTES:
            errors.append(
                f"Time window must span at least 1 hour (current duration: {duration} minutes)"
            )

    return FrequencyValidationResult(valid=not errors, errors=errors)


def to_frequency(config: FrequencyConfig) -> Frequency:
    """Validate ``config`` and narrow it to its typed variant.

    Raises ConfigurationError listing every validation problem.
    """
    validation = validate_frequency_config(config)
    if not validation.valid:
        raise ConfigurationError(validation.errors)

    window = (
        TimeWindow(config.window_start, config.window_end)
        if config.window_start and config.window_end
        else None
    )

    if config.type == "interval":
        return IntervalFrequency(
            interval_minutes=config.interval_minutes,
            jitter_minutes=config.jitter_minutes or 0,
            window=window,
        )
    if config.type == "daily":
        return DailyFrequency(window=window)
    return WeeklyFrequency(window=window, days_of_week=tuple(config.days_of_week))
