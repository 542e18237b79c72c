"""Tests for input validators."""

import datetime

import pytest

from marathon_plan.plans.errors import TrainingPlanError, ValidationError
from marathon_plan.plans.validators import (
    validate_preferences,
    validate_start_date,
    validate_week,
    validate_workout_days,
)


@pytest.mark.parametrize("week", [0, 15, -1, True])
def test_validate_week_rejects_out_of_range(week):
    """Test that weeks outside 1..14 are rejected."""
    with pytest.raises(ValidationError, match="Must be between 1 and 14") as exc_info:
        validate_week(week)
    assert exc_info.value.field == "week"


def test_validate_week_accepts_plan_weeks():
    """Test that every plan week passes."""
    for week in range(1, 15):
        validate_week(week)


def test_validate_workout_days_sorts():
    """Test that valid days come back sorted."""
    assert validate_workout_days([6, 2, 4]) == [2, 4, 6]


def test_validate_workout_days_errors():
    """Test empty, out of range and duplicate days."""
    with pytest.raises(ValidationError, match="At least one workout day"):
        validate_workout_days([])
    with pytest.raises(ValidationError, match="between 1 \\(Monday\\) and 7 \\(Sunday\\)"):
        validate_workout_days([0, 3])
    with pytest.raises(ValidationError, match="duplicates"):
        validate_workout_days([2, 2])


def test_validate_preferences_required():
    """Test that missing preferences are rejected."""
    with pytest.raises(ValidationError, match="Training preferences are required"):
        validate_preferences(None)


def test_validate_start_date():
    """Test that a missing start date is rejected and datetimes are narrowed to dates."""
    with pytest.raises(ValidationError, match="Start date is required"):
        validate_start_date(None)
    assert validate_start_date(datetime.datetime(2024, 1, 1, 9, 30)) == datetime.date(2024, 1, 1)


def test_validation_error_is_value_error():
    """Test that callers can catch engine errors as ValueError."""
    error = ValidationError("bad", field="week")
    assert isinstance(error, TrainingPlanError)
    assert isinstance(error, ValueError)
    assert error.message == "bad"
