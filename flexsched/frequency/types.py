"""Frequency types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Union

from flexsched.frequency.windows import time_to_minutes, window_duration_minutes

FrequencyType = Literal["interval", "daily", "weekly"]

FREQUENCY_TYPES: tuple[str, ...] = ("interval", "daily", "weekly")

# Wire (camelCase) key -> dataclass field.
_WIRE_KEYS = {
    "type": "type",
    "intervalMinutes": "interval_minutes",
    "jitterMinutes": "jitter_minutes",
    "windowStart": "window_start",
    "windowEnd": "window_end",
    "daysOfWeek": "days_of_week",
}


class ConfigurationError(ValueError):
    """Raised when a frequency configuration cannot be used."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Invalid frequency configuration: {', '.join(self.errors)}")


@dataclass(frozen=True)
class FrequencyConfig:
    """Loosely typed frequency record, as stored and sent over the wire.

    Which fields matter depends on ``type``. Nothing here is validated;
    see ``validate_frequency_config`` and ``to_frequency``.
    """

    type: str | None = None
    interval_minutes: int | None = None
    jitter_minutes: int | None = None
    window_start: str | None = None
    window_end: str | None = None
    days_of_week: tuple[int, ...] | None = None

    @property
    def has_window(self) -> bool:
        return bool(self.window_start and self.window_end)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FrequencyConfig:
        """Build a config from a camelCase or snake_case mapping.

        Raises ConfigurationError when a field cannot be coerced.
        """
        if not isinstance(data, dict):
            raise ConfigurationError([f"frequency must be a mapping (got: {type(data).__name__})"])

        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _WIRE_KEYS.get(key, key)
            if name in _WIRE_KEYS.values():
                values[name] = value

        errors: list[str] = []
        kind = values.get("type")
        interval = _coerce_int(values.get("interval_minutes"), "intervalMinutes", errors)
        jitter = _coerce_int(values.get("jitter_minutes"), "jitterMinutes", errors)
        start = _coerce_time(values.get("window_start"), "windowStart", errors)
        end = _coerce_time(values.get("window_end"), "windowEnd", errors)
        days = _coerce_days(values.get("days_of_week"), errors)
        if errors:
            raise ConfigurationError(errors)

        return cls(
            type=str(kind) if kind is not None else None,
            interval_minutes=interval,
            jitter_minutes=jitter,
            window_start=start,
            window_end=end,
            days_of_week=days,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape, omitting absent fields."""
        out: dict[str, Any] = {}
        for key, name in _WIRE_KEYS.items():
            value = getattr(self, name)
            if value is None:
                continue
            out[key] = list(value) if name == "days_of_week" else value
        return out


def _coerce_int(value: Any, name: str, errors: list[str]) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        errors.append(f"{name} must be an integer (got: {value!r})")
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    errors.append(f"{name} must be an integer (got: {value!r})")
    return None


def _coerce_time(value: Any, name: str, errors: list[str]) -> str | None:
    if value is None:
        return None
    # YAML 1.1 reads an unquoted 18:00 as the sexagesimal integer 1080.
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return f"{value // 60:02d}:{value % 60:02d}"
    if isinstance(value, str):
        return value.strip()
    errors.append(f"{name} must be a string in HH:mm format (got: {value!r})")
    return None


def _coerce_days(value: Any, errors: list[str]) -> tuple[int, ...] | None:
    if value is None:
        return None
    items = value if isinstance(value, (list, tuple)) else [value]
    days: list[int] = []
    for item in items:
        day = _coerce_int(item, "daysOfWeek", errors)
        if day is not None:
            days.append(day)
    return tuple(days)


@dataclass(frozen=True)
class TimeWindow:
    """Daily HH:mm band in the scheduler timezone; may cross midnight."""

    start: str
    end: str

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end)

    @property
    def crosses_midnight(self) -> bool:
        return self.end_minutes <= self.start_minutes

    @property
    def duration_minutes(self) -> int:
        return window_duration_minutes(self.start, self.end)


@dataclass(frozen=True)
class IntervalFrequency:
    """Run every ``interval_minutes`` ± ``jitter_minutes``."""

    interval_minutes: int
    jitter_minutes: int = 0
    window: TimeWindow | None = None

    def to_config(self) -> FrequencyConfig:
        return FrequencyConfig(
            type="interval",
            interval_minutes=self.interval_minutes,
            jitter_minutes=self.jitter_minutes or None,
            window_start=self.window.start if self.window else None,
            window_end=self.window.end if self.window else None,
        )


@dataclass(frozen=True)
class DailyFrequency:
    """Run once a day at a random time inside ``window``."""

    window: TimeWindow

    def to_config(self) -> FrequencyConfig:
        return FrequencyConfig(type="daily", window_start=self.window.start, window_end=self.window.end)


@dataclass(frozen=True)
class WeeklyFrequency:
    """Run on the allowed days (0 = Sunday) at a random time inside ``window``."""

    window: TimeWindow
    days_of_week: tuple[int, ...] = field(default_factory=tuple)

    def to_config(self) -> FrequencyConfig:
        return FrequencyConfig(
            type="weekly",
            window_start=self.window.start,
            window_end=self.window.end,
            days_of_week=self.days_of_week,
        )


Frequency = Union[IntervalFrequency, DailyFrequency, WeeklyFrequency]


@dataclass(frozen=True)
class NextRunResult:
    """Outcome of a next-run computation."""

    next_run_at: datetime
    delay_ms: int
    description: str

    @property
    def next_run_at_ms(self) -> int:
        return int(self.next_run_at.timestamp() * 1000)


@dataclass
class FrequencyValidationResult:
    """Validation outcome; ``errors`` lists every problem found."""

    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FrequencyPreset:
    """Named, ready-made frequency offered to users."""

    id: str
    label: str
    description: str
    config: FrequencyConfig
