"""Easy and recovery run generation.

Easy runs fill the weekdays beyond the three key sessions; recovery runs are
the first extra day in 5+ day weeks. Both use the pace calculator's easy pace
(recovery runs 30 seconds per mile slower).
"""

from loguru import logger

from marathon_plan.plans.constants import (
    EASY_RUN_DISTANCE_MILES,
    RECOVERY_OFFSET_SECONDS,
    RECOVERY_RUN_DISTANCE_MILES,
)
from marathon_plan.plans.pace import (
    format_pace_for_user,
    pace_time_to_seconds,
    paces_for_goal,
    round_half_up,
    seconds_to_pace_time,
)
from marathon_plan.plans.types import EasyRunWorkout, MarathonTime, TrainingPreferences, WorkoutType
from marathon_plan.plans.validators import validate_preferences, validate_week
from marathon_plan.plans.workouts.formatting import (
    format_distance,
    segment,
    segment_minutes,
    to_display_distance,
)


def generate_easy_run(
    week: int,
    goal_marathon_time: str | MarathonTime,
    preferences: TrainingPreferences,
) -> EasyRunWorkout:
    """Generate the easy run for a training week.

    Raises:
        ValidationError: If week is outside 1..14 or the goal time is malformed
    """
    validate_week(week)
    validate_preferences(preferences)
    paces = paces_for_goal(goal_marathon_time, preferences)
    unit = preferences.distance_unit

    miles = EASY_RUN_DISTANCE_MILES[week]
    easy_seconds = pace_time_to_seconds(paces.easy_pace)
    easy_pace = format_pace_for_user(paces.easy_pace, preferences)
    distance = to_display_distance(miles, unit)

    logger.debug(f"Generated easy run week={week} distance={miles}mi")

    return EasyRunWorkout(
        type=WorkoutType.EASY_RUN,
        name=f"Week {week} Easy Run",
        description=f"{distance:.1f} {unit.value} easy run",
        week=week,
        distance_unit=unit,
        distance=distance,
        total_distance=distance,
        target_pace=easy_pace,
        estimated_duration=round_half_up(segment_minutes(miles, easy_seconds)),
        instructions=[
            f"Run {format_distance(distance, unit)} at an easy, conversational pace",
            "You should be able to hold a conversation throughout the run",
            "Focus on building aerobic base and recovery",
        ],
        structure=segment("Easy run", distance, unit, easy_pace),
    )


def generate_recovery_run(
    week: int,
    goal_marathon_time: str | MarathonTime,
    preferences: TrainingPreferences,
) -> EasyRunWorkout:
    """Generate the recovery run for a training week.

    Raises:
        ValidationError: If week is outside 1..14 or the goal time is malformed
    """
    validate_week(week)
    validate_preferences(preferences)
    paces = paces_for_goal(goal_marathon_time, preferences)
    unit = preferences.distance_unit

    miles = RECOVERY_RUN_DISTANCE_MILES[week]
    recovery_seconds = pace_time_to_seconds(paces.easy_pace) + RECOVERY_OFFSET_SECONDS
    recovery_pace = format_pace_for_user(seconds_to_pace_time(recovery_seconds), preferences)
    distance = to_display_distance(miles, unit)

    logger.debug(f"Generated recovery run week={week} distance={miles}mi")

    return EasyRunWorkout(
        type=WorkoutType.RECOVERY_RUN,
        name=f"Week {week} Recovery Run",
        description=f"{distance:.1f} {unit.value} recovery run",
        week=week,
        distance_unit=unit,
        distance=distance,
        total_distance=distance,
        target_pace=recovery_pace,
        estimated_duration=round_half_up(segment_minutes(miles, recovery_seconds)),
        instructions=[
            f"Run {format_distance(distance, unit)} at a very relaxed recovery pace",
            "Keep the effort lighter than your easy runs",
            "Focus on loosening up and promoting recovery between hard sessions",
        ],
        structure=segment("Recovery run", distance, unit, recovery_pace),
    )
