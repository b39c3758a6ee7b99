"""Ready-made frequencies offered to users."""

from flexsched.frequency.types import FrequencyConfig, FrequencyPreset

FREQUENCY_PRESETS: tuple[FrequencyPreset, ...] = (
    FrequencyPreset(
        id="hourly",
        label="Every hour ± 15min",
        description="Runs roughly every hour (between 45min and 1h15)",
        config=FrequencyConfig(type="interval", interval_minutes=60, jitter_minutes=15),
    ),
    FrequencyPreset(
        id="every-2h",
        label="Every 2h ± 30min",
        description="Runs roughly every 2 hours (between 1h30 and 2h30)",
        config=FrequencyConfig(type="interval", interval_minutes=120, jitter_minutes=30),
    ),
    FrequencyPreset(
        id="every-4h",
        label="Every 4h ± 1h",
        description="Runs roughly every 4 hours (between 3h and 5h)",
        config=FrequencyConfig(type="interval", interval_minutes=240, jitter_minutes=60),
    ),
    FrequencyPreset(
        id="every-6h",
        label="Every 6h ± 1h",
        description="Runs roughly every 6 hours (between 5h and 7h)",
        config=FrequencyConfig(type="interval", interval_minutes=360, jitter_minutes=60),
    ),
    FrequencyPreset(
        id="daily-night",
        label="Daily (night 00h-05h)",
        description="Once a day, between midnight and 5am",
        config=FrequencyConfig(type="daily", window_start="00:00", window_end="05:00"),
    ),
    FrequencyPreset(
        id="daily-morning",
        label="Daily (morning 06h-09h)",
        description="Once a day, between 6am and 9am",
        config=FrequencyConfig(type="daily", window_start="06:00", window_end="09:00"),
    ),
    FrequencyPreset(
        id="daily-evening",
        label="Daily (evening 18h-22h)",
        description="Once a day, between 6pm and 10pm",
        config=FrequencyConfig(type="daily", window_start="18:00", window_end="22:00"),
    ),
    FrequencyPreset(
        id="weekly-weekdays-night",
        label="Weekly Mon-Fri (night)",
        description="Once a week, Monday to Friday between 00h and 05h",
        config=FrequencyConfig(
            type="weekly",
            window_start="00:00",
            window_end="05:00",
            days_of_week=(1, 2, 3, 4, 5),
        ),
    ),
    FrequencyPreset(
        id="weekly-weekend",
        label="Weekly weekend (morning)",
        description="Once a week, Saturday or Sunday between 06h and 10h",
        config=FrequencyConfig(
            type="weekly",
            window_start="06:00",
            window_end="10:00",
            days_of_week=(0, 6),
        ),
    ),
)


def get_preset(preset_id: str) -> FrequencyPreset:
    """Look up a preset by id; raises KeyError when unknown."""
    for preset in FREQUENCY_PRESETS:
        if preset.id == preset_id:
            return preset
    raise KeyError(f"unknown preset '{preset_id}'")
