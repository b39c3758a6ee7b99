import random
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from flexsched.frequency.calculator import calculate_next_run, describe_instant, preview_runs
from flexsched.frequency.types import ConfigurationError, FrequencyConfig
from flexsched.frequency.windows import is_in_window, to_local, weekday_index

PARIS = ZoneInfo("Europe/Paris")
# Monday 2026-06-15, 12:00 in Paris
NOW = datetime(2026, 6, 15, 10, 0, tzinfo=timezone.utc)


def test_interval_without_jitter_is_deterministic() -> None:
    config = FrequencyConfig(type="interval", interval_minutes=60, jitter_minutes=0)

    first = calculate_next_run(config, NOW)
    second = calculate_next_run(config, NOW)

    assert first.next_run_at == NOW + timedelta(minutes=60)
    assert first.delay_ms == 3_600_000
    assert first == second


def test_interval_applies_drawn_jitter(fixed_random) -> None:
    rng = fixed_random(jitter=-15)
    config = FrequencyConfig(type="interval", interval_minutes=60, jitter_minutes=15)

    result = calculate_next_run(config, NOW, rng=rng)

    assert rng.randint_calls == [(-15, 15)]
    assert result.next_run_at == NOW + timedelta(minutes=45)
    assert result.delay_ms == 45 * 60_000


def test_interval_stays_within_jitter_bounds() -> None:
    rng = random.Random(1234)
    config = FrequencyConfig(type="interval", interval_minutes=120, jitter_minutes=30)

    for _ in range(300):
        result = calculate_next_run(config, NOW, rng=rng)
        assert NOW + timedelta(minutes=90) <= result.next_run_at <= NOW + timedelta(minutes=150)


def test_interval_inside_window_keeps_candidate(fixed_random) -> None:
    rng = fixed_random()
    config = FrequencyConfig(type="interval", interval_minutes=60, window_start="08:00", window_end="20:00")

    result = calculate_next_run(config, NOW, rng=rng)

    assert result.next_run_at == NOW + timedelta(minutes=60)
    assert rng.randrange_calls == []


def test_interval_landing_on_window_end_is_snapped(fixed_random) -> None:
    rng = fixed_random(offset=0)
    config = FrequencyConfig(type="interval", interval_minutes=60, window_start="08:00", window_end="20:00")
    # 19:00 in Paris: the candidate is exactly 20:00, the excluded window end.
    now = datetime(2026, 6, 15, 17, 0, tzinfo=timezone.utc)

    result = calculate_next_run(config, now, rng=rng)

    assert rng.randrange_calls == [720]
    assert result.next_run_at == datetime(2026, 6, 16, 6, 0, tzinfo=timezone.utc)


def test_interval_outside_window_lands_inside() -> None:
    rng = random.Random(99)
    config = FrequencyConfig(
        type="interval",
        interval_minutes=240,
        jitter_minutes=60,
        window_start="22:00",
        window_end="05:00",
    )

    for hour in range(0, 24, 3):
        now = datetime(2026, 6, 15, hour, 0, tzinfo=timezone.utc)
        result = calculate_next_run(config, now, rng=rng)
        assert is_in_window(to_local(result.next_run_at, PARIS), "22:00", "05:00")
        assert result.next_run_at > now


def test_daily_picks_time_in_next_window(fixed_random) -> None:
    rng = fixed_random(offset=30)
    config = FrequencyConfig(type="daily", window_start="06:00", window_end="09:00")

    result = calculate_next_run(config, NOW, rng=rng)

    assert rng.randrange_calls == [180]
    assert result.next_run_at == datetime(2026, 6, 16, 4, 30, tzinfo=timezone.utc)
    assert result.next_run_at.tzinfo == timezone.utc
    assert result.delay_ms == int(timedelta(hours=18, minutes=30).total_seconds() * 1000)
    assert result.description == "Tuesday 16 June at 06:30"


def test_daily_ignores_interval_and_jitter(fixed_random) -> None:
    rng = fixed_random(offset=0)
    config = FrequencyConfig(
        type="daily",
        window_start="14:00",
        window_end="16:00",
        interval_minutes=5,
        jitter_minutes=100,
    )

    result = calculate_next_run(config, NOW, rng=rng)

    assert rng.randint_calls == []
    assert result.next_run_at == datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_daily_result_always_in_window() -> None:
    rng = random.Random(5)
    config = FrequencyConfig(type="daily", window_start="22:00", window_end="06:00")

    for step in range(40):
        now = NOW + timedelta(hours=5 * step, minutes=7 * step)
        result = calculate_next_run(config, now, rng=rng)
        assert is_in_window(to_local(result.next_run_at, PARIS), "22:00", "06:00")
        assert result.delay_ms > 0


def test_weekly_runs_only_on_allowed_days() -> None:
    rng = random.Random(11)
    config = FrequencyConfig(type="weekly", window_start="06:00", window_end="10:00", days_of_week=(0, 6))

    for step in range(30):
        now = NOW + timedelta(hours=11 * step)
        result = calculate_next_run(config, now, rng=rng)
        local = to_local(result.next_run_at, PARIS)
        assert weekday_index(local) in (0, 6)
        assert is_in_window(local, "06:00", "10:00")


def test_weekly_next_allowed_day(fixed_random) -> None:
    rng = fixed_random(offset=0)
    config = FrequencyConfig(type="weekly", window_start="00:00", window_end="05:00", days_of_week=(5,))

    result = calculate_next_run(config, NOW, rng=rng)

    # Friday 2026-06-19 00:00 in Paris
    assert result.next_run_at == datetime(2026, 6, 18, 22, 0, tzinfo=timezone.utc)
    assert result.description == "Friday 19 June at 00:00"


def test_weekly_wrapping_window_can_run_after_midnight(fixed_random) -> None:
    rng = fixed_random(offset=180)
    config = FrequencyConfig(type="weekly", window_start="22:00", window_end="06:00", days_of_week=(1,))

    result = calculate_next_run(config, NOW, rng=rng)

    # Window opens Monday 22:00 in Paris; three hours in is Tuesday 01:00
    assert result.next_run_at == datetime(2026, 6, 15, 23, 0, tzinfo=timezone.utc)
    assert weekday_index(to_local(result.next_run_at, PARIS)) == 2
    assert result.description == "Tuesday 16 June at 01:00"


def test_invalid_config_raises_configuration_error() -> None:
    config = FrequencyConfig(type="interval", interval_minutes=60, jitter_minutes=40)

    with pytest.raises(ConfigurationError, match="jitterMinutes \\(40\\) cannot exceed"):
        calculate_next_run(config, NOW)


def test_naive_now_is_treated_as_utc() -> None:
    config = FrequencyConfig(type="interval", interval_minutes=30)

    result = calculate_next_run(config, datetime(2026, 6, 15, 10, 0))

    assert result.next_run_at == NOW + timedelta(minutes=30)


def test_now_defaults_to_current_time() -> None:
    config = FrequencyConfig(type="interval", interval_minutes=30)
    before = datetime.now(timezone.utc)

    result = calculate_next_run(config)

    assert before + timedelta(minutes=30) <= result.next_run_at
    assert result.next_run_at <= datetime.now(timezone.utc) + timedelta(minutes=30)


def test_other_timezone(fixed_random) -> None:
    rng = fixed_random(offset=0)
    config = FrequencyConfig(type="daily", window_start="09:00", window_end="10:00")

    # 08:00 in New York (EDT, UTC-4)
    result = calculate_next_run(
        config,
        datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc),
        rng=rng,
        tz="America/New_York",
    )

    assert result.next_run_at == datetime(2026, 6, 15, 13, 0, tzinfo=timezone.utc)


def test_french_description(fixed_random) -> None:
    config = FrequencyConfig(type="daily", window_start="06:00", window_end="09:00")

    result = calculate_next_run(config, NOW, rng=fixed_random(offset=30), locale="fr")

    assert result.description == "mardi 16 juin à 06:30"


def test_describe_instant_falls_back_to_english() -> None:
    text = describe_instant(datetime(2026, 8, 1, 7, 5, tzinfo=timezone.utc), locale="xx")
    assert text == "Saturday 1 August at 09:05"


def test_preview_runs_chains_from_previous_run(fixed_random) -> None:
    config = FrequencyConfig(type="daily", window_start="06:00", window_end="09:00")

    results = preview_runs(config, NOW, 3, rng=fixed_random(offset=0))

    assert [r.next_run_at.day for r in results] == [16, 17, 18]
    assert results[1].delay_ms == 24 * 3_600_000


def test_preview_runs_requires_positive_count() -> None:
    config = FrequencyConfig(type="interval", interval_minutes=30)

    with pytest.raises(ValueError, match="count must be >= 1"):
        preview_runs(config, NOW, 0)
