"""Tests for settings validation and logger setup."""

import sys

import pytest
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from marathon_plan.config.settings import Settings
from marathon_plan.core.logger import setup_logger


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "LOG_LEVEL",
        "LOG_FILE",
        "DEFAULT_GOAL_MARATHON_TIME",
        "DEFAULT_WORKOUT_DAYS",
        "RACE_START_TIME",
        "RACE_LOCATION",
        "RACE_INSTRUCTIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    """Test defaults when nothing is configured."""
    settings = Settings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.log_file is None
    assert settings.default_goal_marathon_time == "04:00:00"
    assert settings.default_workout_days == [2, 4, 6]
    assert settings.race_start_time == "07:00"


def test_environment_overrides(clean_env):
    """Test values are read from the environment."""
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("DEFAULT_WORKOUT_DAYS", "[7, 3]")
    clean_env.setenv("RACE_START_TIME", "6:30")
    clean_env.setenv("RACE_LOCATION", "Boston")

    settings = Settings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.default_workout_days == [3, 7]
    assert settings.race_start_time == "06:30"
    assert settings.race_location == "Boston"


def test_invalid_values_fall_back(clean_env):
    """Test soft validators fall back to defaults."""
    clean_env.setenv("LOG_LEVEL", "verbose")
    clean_env.setenv("DEFAULT_GOAL_MARATHON_TIME", "fast")
    clean_env.setenv("DEFAULT_WORKOUT_DAYS", "[0, 2, 2]")

    settings = Settings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.default_goal_marathon_time == "04:00:00"
    assert settings.default_workout_days == [2, 4, 6]


def test_invalid_race_start_time(clean_env):
    """Test an out of range race start time is a hard error."""
    clean_env.setenv("RACE_START_TIME", "25:00")
    with pytest.raises(PydanticValidationError):
        Settings(_env_file=None)


def test_invalid_digits_in_goal_fall_back(clean_env):
    """Test a goal with non-ASCII digits falls back to the default goal."""
    clean_env.setenv("DEFAULT_GOAL_MARATHON_TIME", "3:3０:00")
    assert Settings(_env_file=None).default_goal_marathon_time == "04:00:00"


def test_setup_logger_writes_file(clean_env, tmp_path):
    """Test the file sink is created under a new directory at the configured level."""
    log_file = tmp_path / "logs" / "plans.log"
    settings = Settings(_env_file=None, LOG_LEVEL="DEBUG", LOG_FILE=str(log_file))
    try:
        handler_ids = setup_logger(settings)
        logger.debug("plan generated")
        logger.complete()

        assert len(handler_ids) == 2
        assert log_file.exists()
        assert "plan generated" in log_file.read_text(encoding="utf-8")
    finally:
        logger.remove()
        logger.add(sys.stderr)


def test_setup_logger_respects_level(clean_env, tmp_path):
    """Test messages below LOG_LEVEL do not reach the file sink."""
    log_file = tmp_path / "plans.log"
    settings = Settings(_env_file=None, LOG_LEVEL="WARNING", LOG_FILE=str(log_file))
    try:
        setup_logger(settings)
        logger.info("week assigned")
        logger.warning("race date ignored")
        logger.complete()

        content = log_file.read_text(encoding="utf-8")
        assert "race date ignored" in content
        assert "week assigned" not in content
    finally:
        logger.remove()
        logger.add(sys.stderr)


def test_setup_logger_defaults_to_module_settings(clean_env, monkeypatch):
    """Test the module-level settings are used when none are passed."""
    from marathon_plan.core import logger as logger_module

    monkeypatch.setattr(logger_module.default_settings, "log_file", None)
    try:
        assert len(setup_logger()) == 1
    finally:
        logger.remove()
        logger.add(sys.stderr)
