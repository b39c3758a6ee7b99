"""Configuration module for flexsched."""

from flexsched.config.loader import get_config_path, get_data_dir, load_settings, save_settings
from flexsched.config.schema import SchedulerSettings

__all__ = ["SchedulerSettings", "load_settings", "save_settings", "get_config_path", "get_data_dir"]
