"""Input validators for plan generation.

Enforces the shape of caller-supplied inputs before any calculation runs:
- Week index within the 14-week plan
- Workout weekday set non-empty, in 1..7, without duplicates
- Preferences and start date present
"""

import datetime
from collections.abc import Iterable

from marathon_plan.plans.constants import TOTAL_WEEKS
from marathon_plan.plans.errors import ValidationError
from marathon_plan.plans.types import TrainingPreferences


def validate_week(week: int) -> None:
    """Validate a training week index.

    Args:
        week: Training week number

    Raises:
        ValidationError: If week is not an integer in 1..14
    """
    if isinstance(week, bool) or not isinstance(week, int) or not 1 <= week <= TOTAL_WEEKS:
        raise ValidationError(f"Invalid week: {week}. Must be between 1 and {TOTAL_WEEKS}.", field="week")


def validate_workout_days(workout_days: Iterable[int] | None) -> list[int]:
    """Validate a set of workout weekdays.

    Args:
        workout_days: Weekday numbers (1=Monday..7=Sunday)

    Returns:
        The days sorted ascending

    Raises:
        ValidationError: If empty, out of range, or duplicated
    """
    days = list(workout_days or [])
    if not days:
        raise ValidationError("At least one workout day must be specified", field="workout_days")
    if any(isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= 7 for day in days):
        raise ValidationError("Workout days must be between 1 (Monday) and 7 (Sunday)", field="workout_days")
    if len(set(days)) != len(days):
        raise ValidationError(f"Workout days must not contain duplicates: {days}", field="workout_days")
    return sorted(days)


def validate_preferences(preferences: TrainingPreferences | None) -> TrainingPreferences:
    """Validate that preferences are present.

    Raises:
        ValidationError: If preferences are missing
    """
    if preferences is None:
        raise ValidationError("Training preferences are required", field="preferences")
    return preferences


def validate_start_date(start_date: datetime.date | None) -> datetime.date:
    """Validate that a plan start date is present.

    Raises:
        ValidationError: If the start date is missing
    """
    if start_date is None:
        raise ValidationError("Start date is required", field="start_date")
    if isinstance(start_date, datetime.datetime):
        return start_date.date()
    return start_date
