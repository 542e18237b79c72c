"""Training scheduler - assembles the dated 14-week plan.

Flow:
1. Build dated slots for every week (calendar utilities)
2. Assign a workout type to each slot, week by week (assignment engine)
3. Generate content for each slot (workout generators)
4. Count workouts by type for the summary
"""

import datetime
from collections import Counter
from collections.abc import Callable, Iterable

from loguru import logger

from marathon_plan.config.settings import settings
from marathon_plan.plans.assignment import WorkoutAssignmentEngine
from marathon_plan.plans.constants import RACE_WEEK, TOTAL_WEEKS
from marathon_plan.plans.dates import (
    calculate_plan_end_date,
    find_final_workout_date,
    generate_full_plan_schedule,
    get_training_week_start,
)
from marathon_plan.plans.pace import coerce_marathon_time
from marathon_plan.plans.types import (
    AssignmentPreferences,
    LongRunWorkout,
    MarathonTime,
    PlanSummary,
    ScheduledTrainingPlan,
    ScheduledWorkout,
    TrainingPreferences,
    WorkoutContent,
    WorkoutSchedule,
    WorkoutType,
)
from marathon_plan.plans.validators import (
    validate_preferences,
    validate_start_date,
    validate_workout_days,
)
from marathon_plan.plans.workouts import (
    generate_easy_run,
    generate_interval_workout,
    generate_long_run,
    generate_recovery_run,
    generate_tempo_run,
)

WorkoutGenerator = Callable[[int, MarathonTime, TrainingPreferences], WorkoutContent]

GENERATORS: dict[WorkoutType, WorkoutGenerator] = {
    WorkoutType.TEMPO_RUN: generate_tempo_run,
    WorkoutType.INTERVAL_800M: generate_interval_workout,
    WorkoutType.LONG_RUN: generate_long_run,
    WorkoutType.MARATHON_RACE: generate_long_run,
    WorkoutType.EASY_RUN: generate_easy_run,
    WorkoutType.RECOVERY_RUN: generate_recovery_run,
}


def calculate_plan_summary(workouts: Iterable[ScheduledWorkout]) -> PlanSummary:
    """Count scheduled workouts by type."""
    counts = Counter(workout.workout_type for workout in workouts)
    return PlanSummary(
        total_workouts=sum(counts.values()),
        tempo_runs=counts[WorkoutType.TEMPO_RUN],
        interval_sessions=counts[WorkoutType.INTERVAL_800M],
        long_runs=counts[WorkoutType.LONG_RUN],
        marathon_races=counts[WorkoutType.MARATHON_RACE],
        easy_runs=counts[WorkoutType.EASY_RUN],
        recovery_runs=counts[WorkoutType.RECOVERY_RUN],
    )


class TrainingScheduler:
    """Coordinates calendar, assignment and content generation for one plan.

    Inputs are validated at construction; ``generate_scheduled_plan`` is a
    pure function of them and returns an identical plan on every call.
    """

    def __init__(
        self,
        start_date: datetime.date | None,
        preferences: TrainingPreferences | None,
        goal_marathon_time: str | MarathonTime | None = None,
        race_date: datetime.date | None = None,
        workout_days: Iterable[int] | None = None,
        assignment_preferences: AssignmentPreferences | None = None,
    ):
        """Validate and store scheduler inputs.

        Args:
            start_date: Any date in week 1 (weeks start on Monday)
            preferences: Training preferences
            goal_marathon_time: Goal finish time; defaults to settings
            race_date: Optional race date; the race lands on it in week 14
            workout_days: Weekdays to train on; defaults to preferences.workout_days
            assignment_preferences: Preferences for the assignment engine

        Raises:
            ValidationError: If start date, workout days, preferences or goal
                time are missing or malformed
        """
        self.start_date = validate_start_date(start_date)
        if workout_days is None and preferences is not None:
            workout_days = preferences.workout_days
        self.workout_days = validate_workout_days(workout_days)
        self.preferences = validate_preferences(preferences)
        self.goal_marathon_time = coerce_marathon_time(goal_marathon_time or settings.default_goal_marathon_time)
        self.race_date = race_date
        self.engine = WorkoutAssignmentEngine(assignment_preferences)

    def generate_scheduled_plan(self) -> ScheduledTrainingPlan:
        """Generate the complete dated plan.

        Returns:
            ScheduledTrainingPlan with workouts ordered by date
        """
        logger.info(
            f"Generating scheduled plan start={self.start_date.isoformat()} "
            f"days={self.workout_days} race_date={self.race_date}"
        )
        schedule = self._build_schedule()
        workouts = [self._create_workout(slot) for slot in self._assign_workout_types(schedule)]
        summary = calculate_plan_summary(workouts)

        logger.info(
            f"Generated plan with {summary.total_workouts} workouts "
            f"(tempo={summary.tempo_runs}, intervals={summary.interval_sessions}, "
            f"long={summary.long_runs}, races={summary.marathon_races}, easy={summary.easy_runs}, "
            f"recovery={summary.recovery_runs})"
        )

        return ScheduledTrainingPlan(
            start_date=self.start_date,
            end_date=self.race_date or calculate_plan_end_date(self.start_date),
            total_weeks=TOTAL_WEEKS,
            workouts=workouts,
            summary=summary,
        )

    def get_workouts_for_week(self, week: int) -> list[ScheduledWorkout]:
        return [workout for workout in self.generate_scheduled_plan().workouts if workout.week == week]

    def get_workouts_for_date_range(
        self, start_date: datetime.date, end_date: datetime.date
    ) -> list[ScheduledWorkout]:
        """Workouts scheduled between two dates, inclusive."""
        return [
            workout
            for workout in self.generate_scheduled_plan().workouts
            if start_date <= workout.date <= end_date
        ]

    def _race_week_start(self) -> datetime.date:
        return get_training_week_start(self.start_date) + datetime.timedelta(weeks=RACE_WEEK - 1)

    def _build_schedule(self) -> list[WorkoutSchedule]:
        """Dated slots, with week 14's last slot on the race date.

        The race date belongs to this plan when its final workout day (the
        latest selected weekday on or before the race) falls in week 14. That
        includes a race after week 14's Sunday, such as a Monday race with a
        Saturday last workout day; the race slot still lands on the race date.
        Any other race date is ignored.
        """
        race_date = self.race_date
        if race_date is not None:
            week14_start = self._race_week_start()
            final_workout_date = find_final_workout_date(race_date, self.workout_days)
            if get_training_week_start(final_workout_date) != week14_start:
                logger.warning(
                    f"Race date {race_date.isoformat()} is outside week 14 "
                    f"(starting {week14_start.isoformat()}); "
                    "scheduling week 14 on the selected workout days"
                )
                race_date = None
            elif race_date > week14_start + datetime.timedelta(days=6):
                logger.info(
                    f"Race date {race_date.isoformat()} follows week 14 "
                    f"(starting {week14_start.isoformat()}); race slot placed on the race date"
                )
        return generate_full_plan_schedule(self.start_date, self.workout_days, race_date)

    def _assign_workout_types(self, schedule: list[WorkoutSchedule]) -> list[WorkoutSchedule]:
        by_week: dict[int, list[WorkoutSchedule]] = {}
        for slot in schedule:
            by_week.setdefault(slot.week, []).append(slot)

        typed: list[WorkoutSchedule] = []
        for week, slots in sorted(by_week.items()):
            days = [slot.day_of_week for slot in slots]
            overrides = None
            if week == RACE_WEEK:
                # The last slot of race week is the race
                overrides = {"preferred_long_run_day": slots[-1].day_of_week}
            weekly = self.engine.assign_workouts_to_week(days, week, overrides)
            types_by_day = {assignment.day_of_week: assignment.workout_type for assignment in weekly.assignments}
            typed.extend(slot.model_copy(update={"workout_type": types_by_day[slot.day_of_week]}) for slot in slots)
        return typed

    def _create_workout(self, slot: WorkoutSchedule) -> ScheduledWorkout:
        content = GENERATORS[slot.workout_type](slot.week, self.goal_marathon_time, self.preferences)
        is_race_day = isinstance(content, LongRunWorkout) and content.is_race_day
        return ScheduledWorkout(
            date=slot.date,
            week=slot.week,
            day_of_week=slot.day_of_week,
            workout_type=content.type,
            content=content,
            is_race_day=is_race_day,
            race_details=content.race_details if is_race_day else None,
        )
