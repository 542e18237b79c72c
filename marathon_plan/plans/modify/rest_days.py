"""Rest-day validation and suggestions for a weekly workout pattern."""

from collections.abc import Iterable

from loguru import logger

from marathon_plan.plans.dates import get_day_name
from marathon_plan.plans.modify.week_types import RestDayAnalysis, RestDayConflict, RestDayResolution
from marathon_plan.plans.types import AssignmentPreferences
from marathon_plan.plans.validators import validate_workout_days

ALL_DAYS = (1, 2, 3, 4, 5, 6, 7)
MIN_REST_DAYS = 2
MAX_CONSECUTIVE_WORKOUT_DAYS = 3

ENFORCED_REST_DAY_PENALTY = 25
FLEXIBLE_REST_DAY_PENALTY = 15
INSUFFICIENT_REST_PENALTY = 30
CONSECUTIVE_DAYS_PENALTY = 10


def _previous_day(day: int) -> int:
    return 7 if day == 1 else day - 1


def _next_day(day: int) -> int:
    return 1 if day == 7 else day + 1


def find_consecutive_workout_days(workout_days: Iterable[int]) -> list[list[int]]:
    """Runs of two or more consecutive workout days.

    A run ending on Sunday continues into a run starting on Monday, so
    [6, 7, 1] is a single run of three days.
    """
    days = sorted(set(workout_days))
    if not days:
        return []

    runs: list[list[int]] = [[days[0]]]
    for day in days[1:]:
        if day == runs[-1][-1] + 1:
            runs[-1].append(day)
        else:
            runs.append([day])

    if len(runs) > 1 and runs[-1][-1] == 7 and runs[0][0] == 1:
        runs[0] = runs.pop() + runs[0]

    return [run for run in runs if len(run) > 1]


def validate_rest_days(
    workout_days: list[int],
    preferred_rest_days: list[int],
    preferences: AssignmentPreferences | None = None,
) -> RestDayAnalysis:
    """Check a workout pattern against preferred rest days.

    Args:
        workout_days: Weekdays with workouts (1=Monday..7=Sunday)
        preferred_rest_days: Weekdays the runner would rather rest
        preferences: Assignment preferences; enforce_rest_days raises severity

    Returns:
        RestDayAnalysis; invalid when any conflict is high severity
    """
    preferences = preferences or AssignmentPreferences()
    conflicts: list[RestDayConflict] = []
    recommendations: list[str] = []
    score = 100

    for day in workout_days:
        if day not in preferred_rest_days:
            continue
        day_name = get_day_name(day)
        conflicts.append(
            RestDayConflict(
                day=day,
                type="workout_on_rest_day",
                severity="high" if preferences.enforce_rest_days else "medium",
                description=f"Workout scheduled on preferred rest day ({day_name})",
                suggestions=[
                    "Move workout to a different day",
                    f"Remove {day_name} from preferred rest days",
                    "Consider this as a flexible rest day",
                ],
            )
        )
        score -= ENFORCED_REST_DAY_PENALTY if preferences.enforce_rest_days else FLEXIBLE_REST_DAY_PENALTY

    total_rest_days = 7 - len(set(workout_days))
    if total_rest_days < MIN_REST_DAYS:
        conflicts.append(
            RestDayConflict(
                day=0,
                type="insufficient_rest",
                severity="high",
                description=(
                    f"Only {total_rest_days} rest day{'' if total_rest_days == 1 else 's'} per week - "
                    f"minimum {MIN_REST_DAYS} recommended"
                ),
                suggestions=[
                    "Reduce number of workout days",
                    "Consider alternating high and low intensity days",
                    "Add recovery runs instead of complete rest",
                ],
            )
        )
        score -= INSUFFICIENT_REST_PENALTY

    for run in find_consecutive_workout_days(workout_days):
        if len(run) <= MAX_CONSECUTIVE_WORKOUT_DAYS:
            continue
        conflicts.append(
            RestDayConflict(
                day=run[0],
                type="insufficient_rest",
                severity="medium",
                description=f"{len(run)} consecutive workout days detected",
                suggestions=[
                    "Add rest day in the middle of the sequence",
                    "Replace one workout with a recovery run",
                    "Consider active recovery activities",
                ],
            )
        )
        score -= CONSECUTIVE_DAYS_PENALTY

    if not preferred_rest_days:
        recommendations.append("Consider setting preferred rest days for better recovery planning")
    if total_rest_days >= 3 and len(preferred_rest_days) < 2:
        recommendations.append("You have flexibility to add more preferred rest days")
    if not any(day in (6, 7) for day in preferred_rest_days) and any(day in (6, 7) for day in workout_days):
        recommendations.append("Consider keeping at least one weekend day for rest and recovery")

    return RestDayAnalysis(
        conflicts=conflicts,
        recommendations=recommendations,
        quality_score=max(0, score),
        is_valid=not any(conflict.severity == "high" for conflict in conflicts),
    )


def _rest_day_score(rest_day: int, workout_days: list[int]) -> int:
    score = 0
    if _previous_day(rest_day) in workout_days and _next_day(rest_day) in workout_days:
        score += 20
    if rest_day in (6, 7):
        score += 5
    if rest_day == 1 and 7 in workout_days:
        score += 10
    return score


def suggest_optimal_rest_days(workout_days: list[int], target_rest_days: int = MIN_REST_DAYS) -> list[int]:
    """Pick the free days that best break up the workout pattern.

    Days between two workouts score highest, then Monday after a Sunday
    workout, then weekend days. Ties keep weekday order.
    """
    available = [day for day in ALL_DAYS if day not in workout_days]
    if len(available) <= target_rest_days:
        return available

    ranked = sorted(available, key=lambda day: -_rest_day_score(day, workout_days))
    return sorted(ranked[:target_rest_days])


def resolve_rest_day_conflicts(
    workout_days: list[int],
    preferred_rest_days: list[int],
    preferences: AssignmentPreferences | None = None,
) -> RestDayResolution:
    """Suggest a pattern without workouts on preferred rest days.

    Only acts when rest days are enforced. Each conflicting workout moves to
    the previous or next free day (wrapping around the week); when neither is
    free the day is dropped from the preferred rest days instead.
    """
    preferences = preferences or AssignmentPreferences()
    days = validate_workout_days(workout_days)
    new_workout_days = list(days)
    new_rest_days = list(preferred_rest_days)
    changes: list[str] = []

    if preferences.enforce_rest_days:
        for conflict_day in [day for day in days if day in preferred_rest_days]:
            alternatives = [
                day
                for day in (_previous_day(conflict_day), _next_day(conflict_day))
                if day not in new_workout_days and day not in preferred_rest_days
            ]
            if alternatives:
                new_day = alternatives[0]
                new_workout_days.remove(conflict_day)
                new_workout_days.append(new_day)
                changes.append(f"Moved workout from {get_day_name(conflict_day)} to {get_day_name(new_day)}")
            else:
                new_rest_days.remove(conflict_day)
                changes.append(f"Removed {get_day_name(conflict_day)} from preferred rest days")

    if changes:
        logger.debug(f"Resolved rest day conflicts: {changes}")

    return RestDayResolution(
        suggested_workout_days=sorted(new_workout_days),
        suggested_rest_days=sorted(new_rest_days),
        changes=changes,
    )
