"""Short-timeline adaptation.

When fewer than 14 weeks remain before race day, the canonical curriculum is
re-mapped onto the weeks that are available. The workout generators are
reused unchanged; only the week index fed to them changes.

| available weeks | strategy   |
|-----------------|------------|
| < 4             | defer      |
| 4-5             | minimal    |
| 6-9             | prioritize |
| 10-13           | compress   |
| >= 14           | standard   |
"""

import datetime

from loguru import logger

from marathon_plan.plans.constants import (
    ABSOLUTE_MINIMUM_WEEKS,
    MIN_KEY_WORKOUTS,
    MINIMAL_LONG_RUN_WEEKS,
    MINIMAL_STRATEGY_MAX_WEEKS,
    PRIORITIZE_STRATEGY_MAX_WEEKS,
    RECOMMENDED_MINIMUM_WEEKS,
    WEEKS,
)
from marathon_plan.plans.dates import weeks_between
from marathon_plan.plans.pace import coerce_marathon_time
from marathon_plan.plans.types import (
    AdaptationStrategy,
    AdaptedWorkoutPlan,
    MarathonTime,
    TimelineAssessment,
    TrainingPreferences,
    WorkoutContent,
)
from marathon_plan.plans.validators import validate_preferences
from marathon_plan.plans.workouts import (
    generate_interval_workout,
    generate_long_run,
    generate_tempo_run,
)

RECOMMENDED_ACTIONS: dict[AdaptationStrategy, str] = {
    AdaptationStrategy.DEFER: (
        "Consider deferring to a later race. 4 weeks is the absolute minimum for any meaningful training adaptation."
    ),
    AdaptationStrategy.MINIMAL: (
        "Focus only on maintaining current fitness and race strategy practice. Avoid increasing training load."
    ),
    AdaptationStrategy.PRIORITIZE: "Prioritize long runs and tempo work. Skip some interval sessions if needed.",
    AdaptationStrategy.COMPRESS: "Compress the standard 14-week plan by skipping some build-up weeks.",
    AdaptationStrategy.STANDARD: "Follow the standard 14-week plan.",
}

DEFER_WARNING = "Timeline too short for safe marathon training"

# Fixed week lists; they are hand-picked, not derived
_DROP_WHEN_AT_LEAST_12 = frozenset({2, 4})
_DROP_WHEN_AT_LEAST_10 = frozenset({1, 2, 4, 6})
_KEEP_WHEN_AT_LEAST_8: tuple[int, ...] = (3, 5, 7, 8, 9, 10, 12, 14)
_KEEP_WHEN_AT_LEAST_6: tuple[int, ...] = (5, 7, 9, 10, 12, 14)
_KEEP_OTHERWISE: tuple[int, ...] = (7, 9, 12, 14)


def assess_timeline_viability(start_date: datetime.date, race_date: datetime.date) -> TimelineAssessment:
    """Assess whether the window before race day supports marathon training.

    Args:
        start_date: First training day
        race_date: Marathon date

    Returns:
        TimelineAssessment with the chosen strategy
    """
    available_weeks = weeks_between(start_date, race_date)

    if available_weeks < ABSOLUTE_MINIMUM_WEEKS:
        strategy = AdaptationStrategy.DEFER
    elif available_weeks <= MINIMAL_STRATEGY_MAX_WEEKS:
        strategy = AdaptationStrategy.MINIMAL
    elif available_weeks <= PRIORITIZE_STRATEGY_MAX_WEEKS:
        strategy = AdaptationStrategy.PRIORITIZE
    elif available_weeks < RECOMMENDED_MINIMUM_WEEKS:
        strategy = AdaptationStrategy.COMPRESS
    else:
        strategy = AdaptationStrategy.STANDARD

    return TimelineAssessment(
        available_weeks=available_weeks,
        start_date=start_date,
        race_date=race_date,
        is_viable=strategy != AdaptationStrategy.DEFER,
        strategy=strategy,
        recommended_action=RECOMMENDED_ACTIONS[strategy],
    )


def generate_compressed_week_mapping(available_weeks: int) -> list[int]:
    """Canonical weeks to run when only ``available_weeks`` remain."""
    if available_weeks >= RECOMMENDED_MINIMUM_WEEKS:
        return list(WEEKS)
    if available_weeks >= 12:
        return [week for week in WEEKS if week not in _DROP_WHEN_AT_LEAST_12]
    if available_weeks >= 10:
        return [week for week in WEEKS if week not in _DROP_WHEN_AT_LEAST_10]
    if available_weeks >= 8:
        return list(_KEEP_WHEN_AT_LEAST_8)
    if available_weeks >= 6:
        return list(_KEEP_WHEN_AT_LEAST_6)
    return list(_KEEP_OTHERWISE)


def workouts_per_week(available_weeks: int, week_mapping: list[int], preferences: TrainingPreferences) -> int:
    """Key workouts that fit in each mapped week (at most 3)."""
    slots = min(3, available_weeks * 3 // len(week_mapping))
    if preferences.workout_days:
        slots = min(slots, len(preferences.workout_days))
    return slots


def _generate_full_weeks(
    week_mapping: list[int], goal: MarathonTime, preferences: TrainingPreferences
) -> list[WorkoutContent]:
    workouts: list[WorkoutContent] = []
    for week in week_mapping:
        workouts.append(generate_tempo_run(week, goal, preferences))
        workouts.append(generate_interval_workout(week, goal, preferences))
        workouts.append(generate_long_run(week, goal, preferences))
    return workouts


def _generate_prioritized(
    available_weeks: int, week_mapping: list[int], goal: MarathonTime, preferences: TrainingPreferences
) -> list[WorkoutContent]:
    slots = workouts_per_week(available_weeks, week_mapping, preferences)
    workouts: list[WorkoutContent] = []
    for week in week_mapping:
        workouts.append(generate_long_run(week, goal, preferences))
        if slots >= 2:
            workouts.append(generate_tempo_run(week, goal, preferences))
        if slots >= 3:
            workouts.append(generate_interval_workout(week, goal, preferences))
    return workouts


def _generate_minimal(week_mapping: list[int], goal: MarathonTime, preferences: TrainingPreferences) -> list[WorkoutContent]:
    return [generate_long_run(week, goal, preferences) for week in week_mapping]


def generate_warnings_and_recommendations(
    assessment: TimelineAssessment, workout_count: int
) -> tuple[list[str], list[str]]:
    """Accumulate risk warnings and advice for a shortened plan."""
    warnings: list[str] = []
    recommendations: list[str] = []

    if assessment.available_weeks < 6:
        warnings.extend(
            [
                "Extremely short timeline - injury risk is elevated",
                "Limited time for fitness adaptations",
            ]
        )
        recommendations.extend(
            [
                "Consider a shorter race distance (half marathon or 10K)",
                "Focus on race strategy and pacing practice",
            ]
        )
    elif assessment.available_weeks < 10:
        warnings.extend(
            [
                "Compressed timeline may limit fitness gains",
                "Higher injury risk due to accelerated training",
            ]
        )
        recommendations.extend(
            [
                "Prioritize consistency over intensity",
                "Consider adjusting goal time to be more conservative",
            ]
        )
    elif assessment.available_weeks < RECOMMENDED_MINIMUM_WEEKS:
        warnings.append("Shortened build-up phase")
        recommendations.extend(
            [
                "Focus on quality over quantity",
                "Ensure adequate recovery between hard sessions",
            ]
        )

    if workout_count < MIN_KEY_WORKOUTS:
        warnings.append("Limited number of key workouts for marathon preparation")

    recommendations.extend(
        [
            "Prioritize sleep and nutrition for faster recovery",
            "Consider working with a coach for personalized adjustments",
        ]
    )
    return warnings, recommendations


def generate_short_timeline_plan(
    start_date: datetime.date,
    race_date: datetime.date,
    goal_marathon_time: str | MarathonTime,
    preferences: TrainingPreferences,
) -> AdaptedWorkoutPlan:
    """Generate a plan for whatever time remains before race day.

    A race date before the start date is not an error: it yields negative
    available weeks, the defer strategy and no workouts.

    Args:
        start_date: First training day
        race_date: Marathon date
        goal_marathon_time: Goal finish time
        preferences: Training preferences

    Returns:
        AdaptedWorkoutPlan with workouts, warnings and recommendations

    Raises:
        ValidationError: If the goal time is malformed or preferences are missing
    """
    validate_preferences(preferences)
    goal = coerce_marathon_time(goal_marathon_time)
    assessment = assess_timeline_viability(start_date, race_date)

    logger.info(
        f"Short timeline plan: {assessment.available_weeks} weeks available, strategy={assessment.strategy.value}"
    )

    if not assessment.is_viable:
        return AdaptedWorkoutPlan(
            weeks=assessment.available_weeks,
            week_mapping=[],
            workouts=[],
            warnings=[DEFER_WARNING],
            recommendations=[assessment.recommended_action],
        )

    if assessment.strategy == AdaptationStrategy.MINIMAL:
        week_mapping = list(MINIMAL_LONG_RUN_WEEKS[: assessment.available_weeks])
        workouts = _generate_minimal(week_mapping, goal, preferences)
    else:
        week_mapping = generate_compressed_week_mapping(assessment.available_weeks)
        if assessment.strategy == AdaptationStrategy.PRIORITIZE:
            workouts = _generate_prioritized(assessment.available_weeks, week_mapping, goal, preferences)
        else:
            workouts = _generate_full_weeks(week_mapping, goal, preferences)

    warnings, recommendations = generate_warnings_and_recommendations(assessment, len(workouts))
    for warning in warnings:
        logger.warning(f"Short timeline: {warning}")

    return AdaptedWorkoutPlan(
        weeks=assessment.available_weeks,
        week_mapping=week_mapping,
        workouts=workouts,
        warnings=warnings,
        recommendations=recommendations,
    )


def requires_short_timeline_handling(start_date: datetime.date, race_date: datetime.date) -> bool:
    return weeks_between(start_date, race_date) < RECOMMENDED_MINIMUM_WEEKS


def get_recommended_minimum_timeline() -> int:
    return RECOMMENDED_MINIMUM_WEEKS


def get_absolute_minimum_timeline() -> int:
    return ABSOLUTE_MINIMUM_WEEKS
