import logging

import pytest

from utils.config import get_app_config, get_log_level, validate_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("TIMEZONE", "LOG_LEVEL", "REPORT_FILE_PREFIX",
                "DEFAULT_DAYS_SHIFT1", "DEFAULT_DAYS_SHIFT2",
                "DEFAULT_HOURS_SHIFT1", "DEFAULT_HOURS_SHIFT2"):
        monkeypatch.delenv(key, raising=False)


def test_defaults_are_valid():
    assert get_app_config() == {
        "timezone": "Europe/Copenhagen",
        "log_level": "INFO",
        "report_file_prefix": "production_report",
    }
    assert validate_config() == []


def test_log_level_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert get_log_level() == logging.DEBUG


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    assert get_log_level() == logging.INFO
    assert len(validate_config()) == 1


def test_validate_config_reports_each_problem(monkeypatch):
    monkeypatch.setenv("TIMEZONE", "Mars/Olympus")
    monkeypatch.setenv("DEFAULT_DAYS_SHIFT1", "five")
    monkeypatch.setenv("DEFAULT_HOURS_SHIFT2", "-2")

    problems = validate_config()

    assert len(problems) == 3
    assert any(p.startswith("TIMEZONE") for p in problems)
    assert any(p.startswith("DEFAULT_DAYS_SHIFT1") for p in problems)
    assert any(p.startswith("DEFAULT_HOURS_SHIFT2") for p in problems)
