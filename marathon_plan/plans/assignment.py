"""Workout assignment engine.

Decides which workout type goes on which selected weekday, then scores the
weekly pattern. Conflicts and suggestions are advisory and never block
plan generation.

Policies by number of workout days:
- 1 day: long run only
- 2 days: long run + one quality session (interval on even weeks, tempo on odd)
- 3 days: long run + tempo + interval
- 4 days: long run + tempo + interval + easy run
- 5+ days: long run + tempo + interval + recovery run, then easy runs
"""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from marathon_plan.plans.constants import (
    ADJACENT_HARD_PENALTY,
    BASE_QUALITY_SCORE,
    INSUFFICIENT_REST_PENALTY,
    MIN_REST_DAYS,
    NON_OPTIMAL_LONG_RUN_PENALTY,
    OPTIMAL_BONUS,
    PREFERRED_QUALITY_DAYS,
    RACE_WEEK,
    WEEKEND_DAYS,
)
from marathon_plan.plans.pace import round_half_up
from marathon_plan.plans.types import (
    AssignmentPreferences,
    WeeklyAssignment,
    WorkoutAssignment,
    WorkoutType,
)

ALL_DAYS: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7)

HIGH_INTENSITY_TYPES = frozenset(
    {
        WorkoutType.TEMPO_RUN,
        WorkoutType.INTERVAL_800M,
        WorkoutType.LONG_RUN,
        WorkoutType.MARATHON_RACE,
    }
)

WORKOUT_TYPE_NAMES: dict[WorkoutType, str] = {
    WorkoutType.EASY_RUN: "Easy Run",
    WorkoutType.TEMPO_RUN: "Tempo Run",
    WorkoutType.INTERVAL_800M: "Intervals",
    WorkoutType.LONG_RUN: "Long Run",
    WorkoutType.RECOVERY_RUN: "Recovery Run",
    WorkoutType.MARATHON_RACE: "Marathon Race",
}

LONG_RUN_ADJACENT_CONFLICT = "Long run scheduled adjacent to other workouts - consider more recovery time"
TEMPO_SANDWICHED_CONFLICT = "Tempo run between two other workouts - may impact recovery"
INTERVAL_SANDWICHED_CONFLICT = "Interval session between two other workouts - may impact performance"
PREFERRED_REST_DAY_CONFLICT = "Workout scheduled on a preferred rest day"


def is_high_intensity(workout_type: WorkoutType) -> bool:
    return workout_type in HIGH_INTENSITY_TYPES


def get_workout_type_name(workout_type: WorkoutType) -> str:
    """Human readable workout type name, e.g. "Tempo Run"."""
    return WORKOUT_TYPE_NAMES.get(workout_type, str(workout_type))


def is_long_run_type(workout_type: WorkoutType) -> bool:
    return workout_type in (WorkoutType.LONG_RUN, WorkoutType.MARATHON_RACE)


def generate_schedule_suggestions(workout_days: Iterable[int]) -> list[str]:
    """Suggestions for improving a set of workout weekdays.

    Args:
        workout_days: Selected weekdays (1=Monday..7=Sunday)

    Returns:
        Suggestions covering frequency, weekend availability and spacing
    """
    days = sorted(set(workout_days))
    suggestions: list[str] = []

    if len(days) < 3:
        suggestions.append("Consider adding more workout days - 3-4 days per week is optimal for marathon training")
    elif len(days) > 5:
        suggestions.append("Consider reducing workout days to allow for adequate recovery")

    if not any(day in WEEKEND_DAYS for day in days):
        suggestions.append("Consider adding a weekend day for long runs")

    if any(later - earlier == 1 for earlier, later in zip(days, days[1:])):
        suggestions.append("Consider spacing out consecutive workout days for better recovery")

    return suggestions


class WorkoutAssignmentEngine:
    """Assigns workout types to weekdays and scores the resulting week."""

    def __init__(self, preferences: AssignmentPreferences | None = None):
        self.preferences = preferences or AssignmentPreferences()

    def assign_workouts_to_week(
        self,
        workout_days: Iterable[int],
        week: int,
        overrides: AssignmentPreferences | Mapping[str, Any] | None = None,
    ) -> WeeklyAssignment:
        """Assign workout types to a week's selected days.

        Args:
            workout_days: Selected weekdays (1=Monday..7=Sunday)
            week: Training week; week 14 turns the long run into the race
            overrides: Preferences for this call only, either a full
                AssignmentPreferences or a mapping of fields to replace

        Returns:
            WeeklyAssignment with assignments sorted by weekday
        """
        prefs = self._resolve_preferences(overrides)
        days = sorted(set(workout_days))

        if not days:
            return WeeklyAssignment(
                week=week,
                assignments=[],
                total_workouts=0,
                rest_days=list(ALL_DAYS),
                quality_score=0,
                suggestions=["Add at least 3 workout days for effective training"],
            )

        assignments = self._assign(days, week, prefs)
        rest_days = [day for day in ALL_DAYS if day not in days]
        score, suggestions = self._analyze_week_quality(assignments, rest_days)

        logger.debug(f"Assigned week={week} days={days} score={score}")

        return WeeklyAssignment(
            week=week,
            assignments=assignments,
            total_workouts=len(days),
            rest_days=rest_days,
            quality_score=score,
            suggestions=suggestions,
        )

    def _resolve_preferences(
        self, overrides: AssignmentPreferences | Mapping[str, Any] | None
    ) -> AssignmentPreferences:
        if overrides is None:
            return self.preferences
        if isinstance(overrides, AssignmentPreferences):
            return overrides
        return AssignmentPreferences.model_validate({**self.preferences.model_dump(), **dict(overrides)})

    def _assign(self, days: list[int], week: int, prefs: AssignmentPreferences) -> list[WorkoutAssignment]:
        long_run_day = self.select_long_run_day(days, prefs)
        assignments = [self._long_run_assignment(long_run_day, days, week, prefs)]
        remaining = [day for day in days if day != long_run_day]

        if len(days) == 2:
            quality_type = WorkoutType.INTERVAL_800M if week % 2 == 0 else WorkoutType.TEMPO_RUN
            assignments.append(
                self._with_rest_day_conflicts(
                    WorkoutAssignment(
                        day_of_week=remaining[0],
                        workout_type=quality_type,
                        priority=2,
                        is_optimal=True,
                    ),
                    prefs,
                )
            )
        elif len(days) >= 3:
            tempo_day, interval_day = self.assign_tempo_and_intervals(remaining, prefs)
            assignments.append(self._tempo_assignment(tempo_day, days, prefs))
            assignments.append(self._interval_assignment(interval_day, days, prefs))

            filler_days = [day for day in remaining if day not in (tempo_day, interval_day)]
            for index, day in enumerate(filler_days):
                # 4-day weeks get a single easy run; 5+ lead with a recovery run
                if len(days) >= 5 and index == 0:
                    workout_type = WorkoutType.RECOVERY_RUN
                else:
                    workout_type = WorkoutType.EASY_RUN
                assignments.append(
                    self._with_rest_day_conflicts(
                        WorkoutAssignment(day_of_week=day, workout_type=workout_type, priority=3, is_optimal=True),
                        prefs,
                    )
                )

        return sorted(assignments, key=lambda assignment: assignment.day_of_week)

    @staticmethod
    def select_long_run_day(days: list[int], prefs: AssignmentPreferences) -> int:
        """Pick the long run day.

        Explicit preference if selected, else the latest weekend day when
        weekend long runs are preferred, else the last selected day.
        """
        if prefs.preferred_long_run_day is not None and prefs.preferred_long_run_day in days:
            return prefs.preferred_long_run_day
        if prefs.prefer_weekend_long_runs:
            weekend_days = [day for day in days if day in WEEKEND_DAYS]
            if weekend_days:
                return weekend_days[-1]
        return days[-1]

    @staticmethod
    def assign_tempo_and_intervals(available_days: list[int], prefs: AssignmentPreferences) -> tuple[int, int]:
        """Pick tempo and interval days from the days left after the long run.

        Per-type preferences win when available; otherwise the earliest two
        days are used with tempo on the earlier one.
        """
        if prefs.preferred_tempo_day is not None and prefs.preferred_tempo_day in available_days:
            tempo_day = prefs.preferred_tempo_day
            if prefs.preferred_interval_day is not None and prefs.preferred_interval_day in available_days and prefs.preferred_interval_day != tempo_day:
                return tempo_day, prefs.preferred_interval_day
            interval_day = next(day for day in available_days if day != tempo_day)
            return tempo_day, interval_day

        if prefs.preferred_interval_day is not None and prefs.preferred_interval_day in available_days:
            interval_day = prefs.preferred_interval_day
            tempo_day = next(day for day in available_days if day != interval_day)
            return tempo_day, interval_day

        return available_days[0], available_days[1]

    def _long_run_assignment(
        self, day: int, days: list[int], week: int, prefs: AssignmentPreferences
    ) -> WorkoutAssignment:
        conflicts = []
        if prefs.avoid_back_to_back_hard and _adjacent_workout_days(day, days):
            conflicts.append(LONG_RUN_ADJACENT_CONFLICT)
        return self._with_rest_day_conflicts(
            WorkoutAssignment(
                day_of_week=day,
                workout_type=WorkoutType.MARATHON_RACE if week == RACE_WEEK else WorkoutType.LONG_RUN,
                priority=1,
                is_optimal=self.is_optimal_long_run_day(day, prefs),
                conflicts=conflicts,
            ),
            prefs,
        )

    def _tempo_assignment(self, day: int, days: list[int], prefs: AssignmentPreferences) -> WorkoutAssignment:
        conflicts = []
        if prefs.avoid_back_to_back_hard and len(_adjacent_workout_days(day, days)) > 1:
            conflicts.append(TEMPO_SANDWICHED_CONFLICT)
        return self._with_rest_day_conflicts(
            WorkoutAssignment(
                day_of_week=day,
                workout_type=WorkoutType.TEMPO_RUN,
                priority=2,
                is_optimal=self.is_optimal_quality_day(day, prefs.preferred_tempo_day),
                conflicts=conflicts,
            ),
            prefs,
        )

    def _interval_assignment(self, day: int, days: list[int], prefs: AssignmentPreferences) -> WorkoutAssignment:
        conflicts = []
        if prefs.avoid_back_to_back_hard and len(_adjacent_workout_days(day, days)) > 1:
            conflicts.append(INTERVAL_SANDWICHED_CONFLICT)
        return self._with_rest_day_conflicts(
            WorkoutAssignment(
                day_of_week=day,
                workout_type=WorkoutType.INTERVAL_800M,
                priority=2,
                is_optimal=self.is_optimal_quality_day(day, prefs.preferred_interval_day),
                conflicts=conflicts,
            ),
            prefs,
        )

    @staticmethod
    def _with_rest_day_conflicts(assignment: WorkoutAssignment, prefs: AssignmentPreferences) -> WorkoutAssignment:
        if assignment.day_of_week not in prefs.preferred_rest_days:
            return assignment
        return assignment.model_copy(update={"conflicts": [*assignment.conflicts, PREFERRED_REST_DAY_CONFLICT]})

    @staticmethod
    def is_optimal_long_run_day(day: int, prefs: AssignmentPreferences) -> bool:
        if prefs.preferred_long_run_day == day:
            return True
        return prefs.prefer_weekend_long_runs and day in WEEKEND_DAYS

    @staticmethod
    def is_optimal_quality_day(day: int, preferred_day: int | None) -> bool:
        """Tempo and interval sessions fit best on their preferred day or Tuesday-Thursday."""
        return preferred_day == day or day in PREFERRED_QUALITY_DAYS

    @staticmethod
    def _analyze_week_quality(assignments: list[WorkoutAssignment], rest_days: list[int]) -> tuple[int, list[str]]:
        score: float = BASE_QUALITY_SCORE
        suggestions: list[str] = []

        hard = [assignment for assignment in assignments if is_high_intensity(assignment.workout_type)]
        for current, following in zip(hard, hard[1:]):
            if following.day_of_week - current.day_of_week == 1:
                score -= ADJACENT_HARD_PENALTY
                suggestions.append(
                    f"Consider adding rest between {get_workout_type_name(current.workout_type)} "
                    f"and {get_workout_type_name(following.workout_type)}"
                )

        long_run = next((assignment for assignment in assignments if is_long_run_type(assignment.workout_type)), None)
        if long_run is not None and not long_run.is_optimal:
            score -= NON_OPTIMAL_LONG_RUN_PENALTY
            suggestions.append("Consider moving long run to weekend for better recovery")

        if len(rest_days) < MIN_REST_DAYS:
            score -= INSUFFICIENT_REST_PENALTY
            suggestions.append("Consider adding more rest days for better recovery")

        optimal = sum(1 for assignment in assignments if assignment.is_optimal)
        score += optimal / len(assignments) * OPTIMAL_BONUS

        return max(0, min(100, round_half_up(score))), suggestions


def _adjacent_workout_days(day: int, days: list[int]) -> list[int]:
    return [neighbor for neighbor in (day - 1, day + 1) if 1 <= neighbor <= 7 and neighbor in days]
