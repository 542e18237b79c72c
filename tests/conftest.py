"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

import pytest
from loguru import logger

from marathon_plan.plans.types import DistanceUnit, PaceFormat, TrainingPreferences


@pytest.fixture
def miles_preferences() -> TrainingPreferences:
    """Miles / min-per-mile preferences training Tuesday, Thursday, Saturday."""
    return TrainingPreferences(
        distance_unit=DistanceUnit.MILES,
        pace_format=PaceFormat.MIN_PER_MILE,
        workout_days=[2, 4, 6],
    )


@pytest.fixture
def km_preferences() -> TrainingPreferences:
    """Kilometers / min-per-km preferences training Tuesday, Thursday, Saturday."""
    return TrainingPreferences(
        distance_unit=DistanceUnit.KILOMETERS,
        pace_format=PaceFormat.MIN_PER_KM,
        workout_days=[2, 4, 6],
    )


@pytest.fixture
def log_records():
    """Capture loguru records as (level, message) tuples.

    Usage:
        def test_something(log_records):
            do_work()
            assert ("WARNING", "...") in log_records
    """
    records: list[tuple[str, str]] = []
    handler_id = logger.add(
        lambda message: records.append((message.record["level"].name, message.record["message"])),
        level="DEBUG",
    )
    try:
        yield records
    finally:
        logger.remove(handler_id)
