"""Plan entry point.

Chooses between the full 14-week scheduler and the short-timeline adapter
based on how much time remains before race day.
"""

import datetime

from loguru import logger

from marathon_plan.config.settings import settings
from marathon_plan.plans.dates import calculate_start_date_from_race_date, weeks_between
from marathon_plan.plans.scheduler import TrainingScheduler
from marathon_plan.plans.short_timeline import (
    generate_short_timeline_plan,
    requires_short_timeline_handling,
)
from marathon_plan.plans.types import (
    AdaptedWorkoutPlan,
    AssignmentPreferences,
    MarathonTime,
    ScheduledTrainingPlan,
    TrainingPreferences,
)
from marathon_plan.plans.validators import validate_preferences, validate_workout_days


def build_training_plan(
    race_date: datetime.date,
    goal_marathon_time: str | MarathonTime | None,
    preferences: TrainingPreferences,
    today: datetime.date | None = None,
    assignment_preferences: AssignmentPreferences | None = None,
) -> ScheduledTrainingPlan | AdaptedWorkoutPlan:
    """Build the plan for a race.

    The full plan starts 13 weeks before the week of the final workout. When
    ``today`` is already past that start and fewer than 14 weeks remain, the
    short-timeline adapter is used instead.

    Args:
        race_date: Marathon date
        goal_marathon_time: Goal finish time; defaults to settings
        preferences: Training preferences; workout days default to settings
        today: Reference date for the remaining-time check (no check if None)
        assignment_preferences: Preferences for the assignment engine

    Returns:
        ScheduledTrainingPlan for a full timeline, AdaptedWorkoutPlan otherwise

    Raises:
        ValidationError: If inputs are malformed
        SchedulingError: If no workout day falls within 7 days of race day
    """
    preferences = validate_preferences(preferences)
    if not preferences.workout_days:
        preferences = preferences.model_copy(update={"workout_days": list(settings.default_workout_days)})
    workout_days = validate_workout_days(preferences.workout_days)
    goal = goal_marathon_time or settings.default_goal_marathon_time

    start_date = calculate_start_date_from_race_date(race_date, workout_days)

    if today is not None and today > start_date and requires_short_timeline_handling(today, race_date):
        logger.info(
            f"Only {weeks_between(today, race_date)} weeks until race day {race_date.isoformat()}; "
            "using short timeline adaptation"
        )
        return generate_short_timeline_plan(today, race_date, goal, preferences)

    scheduler = TrainingScheduler(
        start_date=start_date,
        preferences=preferences,
        goal_marathon_time=goal,
        race_date=race_date,
        workout_days=workout_days,
        assignment_preferences=assignment_preferences,
    )
    return scheduler.generate_scheduled_plan()
