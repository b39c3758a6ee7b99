"""Settings loading utilities."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from flexsched.config.schema import SchedulerSettings


def get_data_dir() -> Path:
    """Get the flexsched data directory (~/.flexsched)."""
    return Path.home() / ".flexsched"


def get_config_path() -> Path:
    return get_data_dir() / "config.json"


def load_settings(config_path: Path | None = None) -> SchedulerSettings:
    """Load settings from file, falling back to defaults.

    A missing file is not an error. An unreadable or invalid one is logged
    and ignored.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return SchedulerSettings.model_validate(data)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load settings from {}: {}", path, e)
            logger.warning("Using default settings.")

    return SchedulerSettings()


def save_settings(settings: SchedulerSettings, config_path: Path | None = None) -> Path:
    """Write settings as camelCase JSON and return the path written."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = settings.model_dump(by_alias=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp_path.replace(path)
    return path
