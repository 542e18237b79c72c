"""800m interval generation.

Rep time comes from the goal time's unit-shift rule (3:15:00 -> 3:15 per
800m) and recovery between reps equals the rep time.
"""

from loguru import logger

from marathon_plan.plans.constants import (
    INTERVAL_COOL_DOWN_MILES,
    INTERVAL_REP_METERS,
    INTERVAL_REP_MILES,
    INTERVAL_REPETITIONS,
    INTERVAL_STRESS_MULTIPLIER,
    INTERVAL_WARM_UP_MILES,
    WEEKS,
)
from marathon_plan.plans.pace import (
    format_pace_for_user,
    format_pace_time,
    pace_time_to_seconds,
    paces_for_goal,
    round_half_up,
)
from marathon_plan.plans.types import IntervalSet, IntervalWorkout, MarathonTime, TrainingPreferences
from marathon_plan.plans.validators import validate_preferences, validate_week
from marathon_plan.plans.workouts.formatting import (
    build_structure,
    format_distance_phrase,
    segment,
    segment_minutes,
    to_display_distance,
)


def generate_interval_workout(
    week: int,
    goal_marathon_time: str | MarathonTime,
    preferences: TrainingPreferences,
) -> IntervalWorkout:
    """Generate the 800m interval session for a training week.

    Total distance is a 2 mile warm-up, the reps, and a 1 mile cool-down.
    Duration counts each rep plus its recovery, with warm-up and cool-down
    at easy pace.

    Raises:
        ValidationError: If week is outside 1..14 or the goal time is malformed
    """
    validate_week(week)
    validate_preferences(preferences)
    paces = paces_for_goal(goal_marathon_time, preferences)
    unit = preferences.distance_unit

    repetitions = INTERVAL_REPETITIONS[week]
    rep_seconds = pace_time_to_seconds(paces.interval_rep_time)
    recovery_seconds = rep_seconds
    easy_seconds = pace_time_to_seconds(paces.easy_pace)

    total_miles = INTERVAL_WARM_UP_MILES + repetitions * INTERVAL_REP_MILES + INTERVAL_COOL_DOWN_MILES
    estimated_duration = round_half_up(
        segment_minutes(INTERVAL_WARM_UP_MILES, easy_seconds)
        + repetitions * (rep_seconds + recovery_seconds) / 60
        + segment_minutes(INTERVAL_COOL_DOWN_MILES, easy_seconds)
    )

    rep_time = format_pace_time(paces.interval_rep_time)
    recovery_time = rep_time
    interval_pace = format_pace_for_user(paces.interval_pace, preferences)
    easy_pace = format_pace_for_user(paces.easy_pace, preferences)

    warm_up = to_display_distance(INTERVAL_WARM_UP_MILES, unit)
    cool_down = to_display_distance(INTERVAL_COOL_DOWN_MILES, unit)
    rep_distance = round(to_display_distance(INTERVAL_REP_MILES, unit), 1)

    interval_set = IntervalSet(
        distance=rep_distance,
        distance_meters=INTERVAL_REP_METERS,
        repetitions=repetitions,
        target_pace=interval_pace,
        rep_time=rep_time,
        recovery_time=recovery_seconds,
    )

    logger.debug(f"Generated interval workout week={week} reps={repetitions} rep_time={rep_time}")

    return IntervalWorkout(
        name=f"Week {week} 800m Intervals",
        description=f"{repetitions} x 800m intervals with {recovery_time} recovery",
        week=week,
        distance_unit=unit,
        warm_up_distance=warm_up,
        cool_down_distance=cool_down,
        intervals=[interval_set],
        total_distance=to_display_distance(total_miles, unit),
        target_pace=interval_pace,
        easy_pace=easy_pace,
        estimated_duration=estimated_duration,
        instructions=[
            f"Warm up with {format_distance_phrase(INTERVAL_WARM_UP_MILES, unit)} easy jog",
            f"Run {repetitions} x {format_distance_phrase(INTERVAL_REP_MILES, unit)} at {rep_time} per 800m ({interval_pace})",
            f"Recovery: {recovery_time} easy jog/walk between intervals",
            f"Cool down with {format_distance_phrase(INTERVAL_COOL_DOWN_MILES, unit)} easy jog",
            "Interval pace should feel like your 5K race pace - hard but sustainable",
            "Recovery time matches your interval time - use it fully to prepare for the next rep",
            "Focus on completing all repetitions rather than hitting exact pace",
            "Walk during recovery if needed - full recovery is more important than jogging",
            "Maintain good running form even when fatigued",
        ],
        structure=build_structure(
            segment("Warm-up", warm_up, unit, easy_pace),
            f"Intervals ({repetitions} x 800m at {rep_time}, {recovery_time} recovery)",
            segment("Cool-down", cool_down, unit, easy_pace),
        ),
    )


def generate_all_interval_workouts(
    goal_marathon_time: str | MarathonTime,
    preferences: TrainingPreferences,
) -> list[IntervalWorkout]:
    """Generate the interval session for every week of the plan."""
    return [generate_interval_workout(week, goal_marathon_time, preferences) for week in WEEKS]


def calculate_interval_training_stress(workout: IntervalWorkout) -> int:
    """Training stress of an interval session: rep distance x 2.5."""
    total_interval_distance = sum(interval.distance * interval.repetitions for interval in workout.intervals)
    return round_half_up(total_interval_distance * INTERVAL_STRESS_MULTIPLIER)
