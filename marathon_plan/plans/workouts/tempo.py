"""Tempo run generation.

Tempo runs are run at training pace (12 seconds per mile faster than goal
marathon pace) between a 1 mile warm-up and a 1 mile cool-down at easy pace.
"""

from loguru import logger

from marathon_plan.plans.constants import (
    TEMPO_COOL_DOWN_MILES,
    TEMPO_DISTANCE_MILES,
    TEMPO_WARM_UP_MILES,
    WEEKS,
)
from marathon_plan.plans.pace import (
    format_pace_for_user,
    pace_time_to_seconds,
    paces_for_goal,
    round_half_up,
)
from marathon_plan.plans.types import MarathonTime, TempoRunWorkout, TrainingPreferences
from marathon_plan.plans.validators import validate_preferences, validate_week
from marathon_plan.plans.workouts.formatting import (
    build_structure,
    format_distance,
    format_distance_phrase,
    segment,
    segment_minutes,
    to_display_distance,
)


def generate_tempo_run(
    week: int,
    goal_marathon_time: str | MarathonTime,
    preferences: TrainingPreferences,
) -> TempoRunWorkout:
    """Generate the tempo run for a training week.

    Args:
        week: Training week (1..14)
        goal_marathon_time: Goal finish time ("H:MM:SS" or MarathonTime)
        preferences: Training preferences (display units)

    Returns:
        TempoRunWorkout with distances in the display unit

    Raises:
        ValidationError: If week is outside 1..14 or the goal time is malformed
    """
    validate_week(week)
    validate_preferences(preferences)
    paces = paces_for_goal(goal_marathon_time, preferences)
    unit = preferences.distance_unit

    tempo_miles = TEMPO_DISTANCE_MILES[week]
    total_miles = TEMPO_WARM_UP_MILES + tempo_miles + TEMPO_COOL_DOWN_MILES

    easy_seconds = pace_time_to_seconds(paces.easy_pace)
    tempo_seconds = pace_time_to_seconds(paces.tempo_pace)
    estimated_duration = round_half_up(
        segment_minutes(TEMPO_WARM_UP_MILES, easy_seconds)
        + segment_minutes(tempo_miles, tempo_seconds)
        + segment_minutes(TEMPO_COOL_DOWN_MILES, easy_seconds)
    )

    tempo_pace = format_pace_for_user(paces.tempo_pace, preferences)
    easy_pace = format_pace_for_user(paces.easy_pace, preferences)
    marathon_pace = format_pace_for_user(paces.marathon_pace, preferences)

    warm_up = to_display_distance(TEMPO_WARM_UP_MILES, unit)
    tempo = to_display_distance(tempo_miles, unit)
    cool_down = to_display_distance(TEMPO_COOL_DOWN_MILES, unit)

    logger.debug(f"Generated tempo run week={week} distance={tempo_miles}mi duration={estimated_duration}min")

    return TempoRunWorkout(
        name=f"Week {week} Tempo Run",
        description=f"{tempo:.1f} {unit.value} at training pace ({tempo_pace})",
        week=week,
        distance_unit=unit,
        warm_up_distance=warm_up,
        tempo_distance=tempo,
        cool_down_distance=cool_down,
        total_distance=to_display_distance(total_miles, unit),
        target_pace=tempo_pace,
        easy_pace=easy_pace,
        estimated_duration=estimated_duration,
        instructions=[
            f"Warm up with {format_distance_phrase(TEMPO_WARM_UP_MILES, unit)} easy jog",
            f"Run {format_distance(tempo, unit)} at training pace: {tempo_pace}",
            f"Cool down with {format_distance_phrase(TEMPO_COOL_DOWN_MILES, unit)} easy jog",
            'Training pace should feel "comfortably hard" - sustainable for the full marathon distance',
            f"This pace is 10-12 seconds faster than your goal marathon pace ({marathon_pace})",
            "Building in this cushion helps ensure you can maintain pace on race day",
            "Focus on smooth, efficient running form at this effort level",
            "If you feel you're pushing too hard, you may need to adjust your marathon goal time",
        ],
        structure=build_structure(
            segment("Warm-up", warm_up, unit, easy_pace),
            segment("Tempo", tempo, unit, tempo_pace),
            segment("Cool-down", cool_down, unit, easy_pace),
        ),
    )


def generate_all_tempo_runs(
    goal_marathon_time: str | MarathonTime,
    preferences: TrainingPreferences,
) -> list[TempoRunWorkout]:
    """Generate the tempo run for every week of the plan."""
    return [generate_tempo_run(week, goal_marathon_time, preferences) for week in WEEKS]
