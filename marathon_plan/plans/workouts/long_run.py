"""Long run generation.

A long run is a block of easy running (by time) followed immediately by a
marathon pace finish (by distance). The final week's long run is the
marathon itself.
"""

from loguru import logger

from marathon_plan.config.settings import settings
from marathon_plan.plans.constants import (
    LONG_RUN_EASY_MINUTES,
    LONG_RUN_MARATHON_PACE_MILES,
    MARATHON_DISTANCE_MILES,
    MAX_LONG_RUN_EASY_PACE_SECONDS,
    RACE_WEEK,
    WEEKS,
)
from marathon_plan.plans.pace import (
    format_pace_for_user,
    pace_time_to_seconds,
    paces_for_goal,
    round_half_up,
    seconds_to_pace_time,
)
from marathon_plan.plans.types import (
    LongRunWorkout,
    MarathonTime,
    PaceSet,
    RaceDetails,
    TrainingPreferences,
    WorkoutType,
)
from marathon_plan.plans.validators import validate_preferences, validate_week
from marathon_plan.plans.workouts.formatting import (
    build_structure,
    format_distance,
    segment,
    to_display_distance,
)


def build_race_details() -> RaceDetails:
    """Race-day metadata from settings."""
    return RaceDetails(
        start_time=settings.race_start_time,
        location=settings.race_location,
        instructions=settings.race_instructions,
    )


def generate_long_run(
    week: int,
    goal_marathon_time: str | MarathonTime,
    preferences: TrainingPreferences,
) -> LongRunWorkout:
    """Generate the long run for a training week.

    Weeks 1-13: easy minutes from the progression table, with easy distance
    computed at easy pace capped at 9:00/mile, then the marathon pace miles.
    Week 14: the full marathon at marathon pace, tagged as race day.

    Args:
        week: Training week (1..14)
        goal_marathon_time: Goal finish time ("H:MM:SS" or MarathonTime)
        preferences: Training preferences (display units)

    Returns:
        LongRunWorkout (type MARATHON_RACE in week 14)

    Raises:
        ValidationError: If week is outside 1..14 or the goal time is malformed
    """
    validate_week(week)
    validate_preferences(preferences)
    paces = paces_for_goal(goal_marathon_time, preferences)

    if week == RACE_WEEK:
        return _generate_race(paces, preferences)

    unit = preferences.distance_unit
    easy_minutes = LONG_RUN_EASY_MINUTES[week]
    marathon_pace_miles = LONG_RUN_MARATHON_PACE_MILES[week]

    easy_seconds = min(pace_time_to_seconds(paces.long_run_pace), MAX_LONG_RUN_EASY_PACE_SECONDS)
    marathon_seconds = pace_time_to_seconds(paces.marathon_pace)
    easy_miles = easy_minutes * 60 / easy_seconds
    estimated_duration = easy_minutes + round_half_up(marathon_pace_miles * marathon_seconds / 60)

    easy_pace = format_pace_for_user(seconds_to_pace_time(easy_seconds), preferences)
    marathon_pace = format_pace_for_user(paces.marathon_pace, preferences)
    easy_cap = format_pace_for_user(seconds_to_pace_time(MAX_LONG_RUN_EASY_PACE_SECONDS), preferences)

    easy_distance = to_display_distance(easy_miles, unit)
    marathon_pace_distance = to_display_distance(marathon_pace_miles, unit)

    logger.debug(
        f"Generated long run week={week} easy={easy_minutes}min mp={marathon_pace_miles}mi "
        f"duration={estimated_duration}min"
    )

    return LongRunWorkout(
        type=WorkoutType.LONG_RUN,
        name=f"Week {week} Long Run",
        description=f"{easy_minutes} mins easy + {marathon_pace_distance:.1f} {unit.value} at marathon pace",
        week=week,
        distance_unit=unit,
        easy_run_distance=easy_distance,
        marathon_pace_distance=marathon_pace_distance,
        easy_run_duration=easy_minutes,
        total_distance=to_display_distance(easy_miles + marathon_pace_miles, unit),
        target_pace=easy_pace,
        target_easy_pace=easy_pace,
        target_marathon_pace=marathon_pace,
        estimated_duration=estimated_duration,
        instructions=[
            f"Run {easy_minutes} minutes at easy pace: {easy_pace} (max {easy_cap})",
            f"Immediately transition to {format_distance(marathon_pace_distance, unit)} at marathon pace: {marathon_pace}",
            "Easy pace should feel conversational - you should be able to talk",
            'Marathon pace should feel "comfortably hard" - sustainable for 26.2 miles',
            "No rest between easy and marathon pace portions - immediate transition",
            "Practice race day fueling during the marathon pace portion",
            "Focus on maintaining form as you transition from easy to marathon pace",
            "This workout simulates running marathon pace on tired legs",
            "If you struggle with marathon pace, your goal time may be too aggressive",
        ],
        structure=build_structure(
            segment("Easy run", easy_distance, unit, easy_pace),
            segment("Marathon pace", marathon_pace_distance, unit, marathon_pace),
        ),
    )


def _generate_race(paces: PaceSet, preferences: TrainingPreferences) -> LongRunWorkout:
    unit = preferences.distance_unit
    marathon_seconds = pace_time_to_seconds(paces.marathon_pace)
    estimated_duration = round_half_up(MARATHON_DISTANCE_MILES * marathon_seconds / 60)
    marathon_pace = format_pace_for_user(paces.marathon_pace, preferences)
    easy_pace = format_pace_for_user(paces.long_run_pace, preferences)
    distance = to_display_distance(MARATHON_DISTANCE_MILES, unit)
    race_details = build_race_details()

    logger.debug(f"Generated marathon race distance={MARATHON_DISTANCE_MILES}mi duration={estimated_duration}min")

    return LongRunWorkout(
        type=WorkoutType.MARATHON_RACE,
        name="Marathon Race",
        description=f"Marathon Race - {format_distance(distance, unit)}",
        week=RACE_WEEK,
        distance_unit=unit,
        easy_run_distance=0.0,
        marathon_pace_distance=distance,
        easy_run_duration=LONG_RUN_EASY_MINUTES[RACE_WEEK],
        total_distance=distance,
        target_pace=marathon_pace,
        target_easy_pace=easy_pace,
        target_marathon_pace=marathon_pace,
        estimated_duration=estimated_duration,
        instructions=[
            f"Run {format_distance(distance, unit)} at marathon pace: {marathon_pace}",
            "Start conservatively - the first miles should feel easy at marathon pace",
            "Focus on feeling smooth and controlled at marathon pace",
            "Execute the fueling and hydration strategy you practiced on long runs",
            race_details.instructions,
        ],
        structure=segment("Marathon Race", distance, unit, marathon_pace),
        is_race_day=True,
        race_details=race_details,
    )


def generate_all_long_runs(
    goal_marathon_time: str | MarathonTime,
    preferences: TrainingPreferences,
) -> list[LongRunWorkout]:
    """Generate the long run for every week, ending with the marathon."""
    return [generate_long_run(week, goal_marathon_time, preferences) for week in WEEKS]
