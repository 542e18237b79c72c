"""Tests for the training scheduler.

Plan under test: starts Monday 2024-01-01, trains Tue/Thu/Sat/Sun, goal 3:30:00.
"""

import datetime

import pytest

from marathon_plan.plans.errors import ValidationError
from marathon_plan.plans.scheduler import TrainingScheduler, calculate_plan_summary
from marathon_plan.plans.types import TrainingPreferences, WorkoutType

START = datetime.date(2024, 1, 1)


@pytest.fixture
def scheduler(miles_preferences) -> TrainingScheduler:
    return TrainingScheduler(
        start_date=START,
        preferences=miles_preferences,
        goal_marathon_time="3:30:00",
        workout_days=[2, 4, 6, 7],
    )


def test_plan_counts(scheduler):
    """Test 14 weeks x 4 days with the long run replaced by the race in week 14."""
    plan = scheduler.generate_scheduled_plan()

    assert plan.total_weeks == 14
    assert plan.summary.total_workouts == 56
    assert plan.summary.tempo_runs == 14
    assert plan.summary.interval_sessions == 14
    assert plan.summary.long_runs == 13
    assert plan.summary.marathon_races == 1
    assert plan.summary.easy_runs == 14
    assert plan.summary.recovery_runs == 0
    assert plan.summary == calculate_plan_summary(plan.workouts)


def test_weekday_roles(scheduler):
    """Test each weekday keeps its role across the plan."""
    plan = scheduler.generate_scheduled_plan()
    roles = {(workout.day_of_week, workout.workout_type) for workout in plan.workouts}

    assert roles == {
        (2, WorkoutType.TEMPO_RUN),
        (4, WorkoutType.INTERVAL_800M),
        (6, WorkoutType.EASY_RUN),
        (7, WorkoutType.LONG_RUN),
        (7, WorkoutType.MARATHON_RACE),
    }


def test_workouts_are_in_date_order(scheduler):
    """Test plan workouts are chronological and start in week 1."""
    plan = scheduler.generate_scheduled_plan()
    dates = [workout.date for workout in plan.workouts]

    assert dates == sorted(dates)
    assert plan.workouts[0].date == datetime.date(2024, 1, 2)
    assert plan.workouts[0].name == "Week 1 Tempo Run"
    assert plan.end_date == datetime.date(2024, 4, 8)


def test_race_is_last_workout(scheduler):
    """Test exactly one race day, on the final Sunday."""
    plan = scheduler.generate_scheduled_plan()
    race_days = [workout for workout in plan.workouts if workout.is_race_day]

    assert len(race_days) == 1
    assert race_days[0] is plan.workouts[-1]
    assert race_days[0].date == datetime.date(2024, 4, 7)
    assert race_days[0].race_details is not None
    assert race_days[0].distance == 26.22


def test_generation_is_idempotent(scheduler):
    """Test repeated generation yields identical plans."""
    assert scheduler.generate_scheduled_plan() == scheduler.generate_scheduled_plan()


def test_race_date_moves_final_slot(miles_preferences):
    """Test a mid-week race date becomes the race day."""
    race_date = datetime.date(2024, 4, 4)  # Thursday of week 14
    scheduler = TrainingScheduler(
        start_date=START,
        preferences=miles_preferences,
        goal_marathon_time="3:30:00",
        race_date=race_date,
        workout_days=[2, 4, 6],
    )
    plan = scheduler.generate_scheduled_plan()
    week14 = [workout for workout in plan.workouts if workout.week == 14]

    assert plan.end_date == race_date
    assert week14[-1].date == race_date
    assert week14[-1].workout_type == WorkoutType.MARATHON_RACE
    assert all(workout.date <= race_date for workout in plan.workouts)


def test_race_date_outside_final_week_is_ignored(miles_preferences, log_records):
    """Test a race date outside week 14 is logged and not used for placement."""
    scheduler = TrainingScheduler(
        start_date=START,
        preferences=miles_preferences,
        goal_marathon_time="3:30:00",
        race_date=datetime.date(2024, 6, 1),
        workout_days=[2, 4, 6],
    )
    plan = scheduler.generate_scheduled_plan()

    assert plan.workouts[-1].date == datetime.date(2024, 4, 6)
    assert any(level == "WARNING" and "outside week 14" in message for level, message in log_records)


def test_race_after_final_week_sunday_keeps_race_date(miles_preferences):
    """Test a Monday race following a Saturday last workout is dated on the Monday."""
    race_date = datetime.date(2024, 4, 8)  # Monday after week 14
    scheduler = TrainingScheduler(
        start_date=START,
        preferences=miles_preferences,
        goal_marathon_time="3:30:00",
        race_date=race_date,
        workout_days=[2, 4, 6],
    )
    week14 = scheduler.get_workouts_for_week(14)

    assert [workout.date for workout in week14] == [
        datetime.date(2024, 4, 2),
        datetime.date(2024, 4, 4),
        race_date,
    ]
    assert [workout.workout_type for workout in week14] == [
        WorkoutType.TEMPO_RUN,
        WorkoutType.INTERVAL_800M,
        WorkoutType.MARATHON_RACE,
    ]
    assert week14[-1].is_race_day
    assert week14[-1].day_of_week == 1


def test_workout_days_default_to_preferences(miles_preferences):
    """Test preferences.workout_days is used when no days are passed."""
    scheduler = TrainingScheduler(start_date=START, preferences=miles_preferences, goal_marathon_time="3:30:00")
    assert scheduler.workout_days == [2, 4, 6]
    assert scheduler.generate_scheduled_plan().summary.total_workouts == 42


def test_goal_defaults_to_settings(miles_preferences):
    """Test a missing goal time falls back to the configured default."""
    scheduler = TrainingScheduler(start_date=START, preferences=miles_preferences)
    assert scheduler.goal_marathon_time.hours == 4


def test_get_workouts_for_week_and_range(scheduler):
    """Test week and date range filters."""
    week1 = scheduler.get_workouts_for_week(1)
    assert [workout.day_of_week for workout in week1] == [2, 4, 6, 7]

    in_range = scheduler.get_workouts_for_date_range(datetime.date(2024, 1, 1), datetime.date(2024, 1, 4))
    assert [workout.workout_type for workout in in_range] == [WorkoutType.TEMPO_RUN, WorkoutType.INTERVAL_800M]


def test_invalid_inputs_raise():
    """Test constructor validation of start date, days and goal time."""
    preferences = TrainingPreferences(workout_days=[2, 4, 6])
    with pytest.raises(ValidationError, match="Start date is required"):
        TrainingScheduler(start_date=None, preferences=preferences)
    with pytest.raises(ValidationError, match="At least one workout day"):
        TrainingScheduler(start_date=START, preferences=TrainingPreferences())
    with pytest.raises(ValidationError):
        TrainingScheduler(start_date=START, preferences=preferences, goal_marathon_time="3:30")
