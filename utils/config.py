"""
Configuration Management

Simple utility for loading and validating environment configuration.
"""

import logging
import os
from typing import Optional

import pytz
from dotenv import load_dotenv

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SCHEDULE_DEFAULT_KEYS = (
    "DEFAULT_DAYS_SHIFT1",
    "DEFAULT_DAYS_SHIFT2",
    "DEFAULT_HOURS_SHIFT1",
    "DEFAULT_HOURS_SHIFT2",
)


def load_config(env_path: Optional[str] = None) -> bool:
    """
    Load environment configuration from .env file.

    Args:
        env_path: Optional path to .env file. If None, searches in current directory.

    Returns:
        bool: True if .env file was found and loaded, False otherwise
    """
    if env_path:
        return load_dotenv(env_path)
    return load_dotenv()


def get_app_config() -> dict:
    """
    Get application configuration settings.

    Returns:
        dict: Application settings
    """
    return {
        "timezone": os.getenv("TIMEZONE", "Europe/Copenhagen"),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "report_file_prefix": os.getenv("REPORT_FILE_PREFIX", "production_report"),
    }


def get_log_level() -> int:
    """Numeric logging level from LOG_LEVEL, INFO when unknown"""
    level = getattr(logging, get_app_config()["log_level"], None)
    return level if isinstance(level, int) else logging.INFO


def validate_config() -> list:
    """
    Validate application configuration.

    Returns:
        list: List of configuration problems (empty if all valid)
    """
    problems = []
    app_config = get_app_config()

    if app_config["log_level"] not in VALID_LOG_LEVELS:
        problems.append(
            f"LOG_LEVEL: '{app_config['log_level']}' is not one of {list(VALID_LOG_LEVELS)}"
        )

    if app_config["timezone"] not in pytz.all_timezones_set:
        problems.append(f"TIMEZONE: unknown timezone '{app_config['timezone']}'")

    for key in SCHEDULE_DEFAULT_KEYS:
        raw = os.getenv(key)
        if raw is None:
            continue
        try:
            value = int(raw)
        except ValueError:
            problems.append(f"{key}: '{raw}' is not an integer")
            continue
        if value < 0:
            problems.append(f"{key}: must be non-negative, got {value}")

    return problems
