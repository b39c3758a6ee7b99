"""Human-readable rendering and comparison of frequency configs."""

from __future__ import annotations

from flexsched.frequency.types import FrequencyConfig

_LABELS = {
    "en": {"every": "Every", "daily": "Daily", "weekly": "Weekly", "unknown": "Unknown configuration"},
    "fr": {"every": "Toutes les", "daily": "Quotidien", "weekly": "Hebdo", "unknown": "Configuration inconnue"},
}

_DAY_ABBREVIATIONS = {
    "en": ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
    "fr": ("dim", "lun", "mar", "mer", "jeu", "ven", "sam"),
}


def format_duration(minutes: int) -> str:
    """Compact duration: 90 -> "1h30min", 120 -> "2h", 45 -> "45min"."""
    hours, rest = divmod(minutes, 60)
    if hours > 0 and rest > 0:
        return f"{hours}h{rest}min"
    if hours > 0:
        return f"{hours}h"
    return f"{rest}min"


def _day_name(day: int, lang: str) -> str:
    names = _DAY_ABBREVIATIONS[lang]
    return names[day] if 0 <= day < len(names) else str(day)


def format_frequency_config(config: FrequencyConfig, locale: str = "en") -> str:
    """Describe a frequency config in one short line."""
    lang = locale if locale in _LABELS else "en"
    labels = _LABELS[lang]
    window = f"({config.window_start}-{config.window_end})"

    if config.type == "interval":
        text = f"{labels['every']} {format_duration(config.interval_minutes or 0)}"
        if config.jitter_minutes:
            text += f" ± {format_duration(config.jitter_minutes)}"
        if config.has_window:
            text += f" {window}"
        return text

    if config.type == "daily":
        return f"{labels['daily']} {window}"

    if config.type == "weekly":
        days = ", ".join(_day_name(day, lang) for day in sorted(config.days_of_week or ()))
        if not days:
            return f"{labels['weekly']} {window}"
        return f"{labels['weekly']} {days} {window}"

    return labels["unknown"]


def are_frequency_configs_equal(a: FrequencyConfig, b: FrequencyConfig) -> bool:
    """Structural equality; the order of ``days_of_week`` does not matter."""
    if a.type != b.type:
        return False
    if a.interval_minutes != b.interval_minutes:
        return False
    if a.jitter_minutes != b.jitter_minutes:
        return False
    if a.window_start != b.window_start:
        return False
    if a.window_end != b.window_end:
        return False

    if a.days_of_week is not None and b.days_of_week is not None:
        if len(a.days_of_week) != len(b.days_of_week):
            return False
        return sorted(a.days_of_week) == sorted(b.days_of_week)
    return a.days_of_week is None and b.days_of_week is None
