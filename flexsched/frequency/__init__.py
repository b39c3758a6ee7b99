"""Flexible frequencies: interval with jitter, daily and weekly windows."""

from flexsched.frequency.calculator import calculate_next_run, describe_instant, preview_runs
from flexsched.frequency.format import are_frequency_configs_equal, format_frequency_config
from flexsched.frequency.presets import FREQUENCY_PRESETS, get_preset
from flexsched.frequency.types import (
    ConfigurationError,
    DailyFrequency,
    Frequency,
    FrequencyConfig,
    FrequencyPreset,
    FrequencyValidationResult,
    IntervalFrequency,
    NextRunResult,
    TimeWindow,
    WeeklyFrequency,
)
from flexsched.frequency.validation import to_frequency, validate_frequency_config

__all__ = [
    "calculate_next_run",
    "describe_instant",
    "preview_runs",
    "validate_frequency_config",
    "to_frequency",
    "format_frequency_config",
    "are_frequency_configs_equal",
    "FREQUENCY_PRESETS",
    "get_preset",
    "ConfigurationError",
    "Frequency",
    "FrequencyConfig",
    "FrequencyPreset",
    "FrequencyValidationResult",
    "IntervalFrequency",
    "DailyFrequency",
    "WeeklyFrequency",
    "NextRunResult",
    "TimeWindow",
]
