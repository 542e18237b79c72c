"""Tests for the workout assignment engine."""

from marathon_plan.plans.assignment import (
    LONG_RUN_ADJACENT_CONFLICT,
    PREFERRED_REST_DAY_CONFLICT,
    WorkoutAssignmentEngine,
    generate_schedule_suggestions,
    get_workout_type_name,
    is_high_intensity,
)
from marathon_plan.plans.types import AssignmentPreferences, WorkoutType


def _types_by_day(weekly):
    return {assignment.day_of_week: assignment.workout_type for assignment in weekly.assignments}


def test_three_day_week():
    """Test tempo, intervals and a weekend long run on a standard week."""
    weekly = WorkoutAssignmentEngine().assign_workouts_to_week([2, 4, 6], week=1)

    assert _types_by_day(weekly) == {
        2: WorkoutType.TEMPO_RUN,
        4: WorkoutType.INTERVAL_800M,
        6: WorkoutType.LONG_RUN,
    }
    assert weekly.rest_days == [1, 3, 5, 7]
    assert weekly.total_workouts == 3
    assert weekly.quality_score == 100


def test_four_day_week_adds_easy_run():
    """Test the fourth day becomes an easy run and Sunday takes the long run."""
    weekly = WorkoutAssignmentEngine().assign_workouts_to_week([2, 4, 6, 7], week=1)

    assert _types_by_day(weekly) == {
        2: WorkoutType.TEMPO_RUN,
        4: WorkoutType.INTERVAL_800M,
        6: WorkoutType.EASY_RUN,
        7: WorkoutType.LONG_RUN,
    }


def test_seven_day_week_leads_fillers_with_recovery_run():
    """Test 5+ day weeks get one recovery run and the rest easy runs."""
    weekly = WorkoutAssignmentEngine().assign_workouts_to_week([1, 2, 3, 4, 5, 6, 7], week=1)
    types = _types_by_day(weekly)

    assert types[7] == WorkoutType.LONG_RUN
    assert types[1] == WorkoutType.TEMPO_RUN
    assert types[2] == WorkoutType.INTERVAL_800M
    assert types[3] == WorkoutType.RECOVERY_RUN
    assert [types[day] for day in (4, 5, 6)] == [WorkoutType.EASY_RUN] * 3
    assert weekly.quality_score == 74
    assert "Consider adding more rest days for better recovery" in weekly.suggestions


def test_two_day_week_alternates_quality_session():
    """Test two-day weeks alternate tempo (odd weeks) and intervals (even weeks)."""
    engine = WorkoutAssignmentEngine()

    odd = _types_by_day(engine.assign_workouts_to_week([6, 7], week=1))
    even = _types_by_day(engine.assign_workouts_to_week([6, 7], week=2))

    assert odd == {6: WorkoutType.TEMPO_RUN, 7: WorkoutType.LONG_RUN}
    assert even == {6: WorkoutType.INTERVAL_800M, 7: WorkoutType.LONG_RUN}


def test_two_day_week_scores_adjacent_hard_days():
    """Test back-to-back hard days cost 15 points."""
    weekly = WorkoutAssignmentEngine().assign_workouts_to_week([6, 7], week=2)

    assert weekly.quality_score == 95
    assert weekly.suggestions[0] == "Consider adding rest between Intervals and Long Run"
    long_run = next(a for a in weekly.assignments if a.workout_type == WorkoutType.LONG_RUN)
    assert LONG_RUN_ADJACENT_CONFLICT in long_run.conflicts


def test_one_day_week_is_long_run_only():
    """Test a single day gets the long run."""
    weekly = WorkoutAssignmentEngine().assign_workouts_to_week([3], week=5)
    assert _types_by_day(weekly) == {3: WorkoutType.LONG_RUN}


def test_empty_week():
    """Test no days gives an empty, zero-score week."""
    weekly = WorkoutAssignmentEngine().assign_workouts_to_week([], week=1)

    assert weekly.assignments == []
    assert weekly.quality_score == 0
    assert weekly.suggestions == ["Add at least 3 workout days for effective training"]


def test_race_week_long_run_is_marathon():
    """Test week 14 turns the long run into the race."""
    weekly = WorkoutAssignmentEngine().assign_workouts_to_week([2, 4, 6], week=14)
    assert _types_by_day(weekly)[6] == WorkoutType.MARATHON_RACE


def test_preferences_steer_days():
    """Test explicit day preferences win over the defaults."""
    preferences = AssignmentPreferences(preferred_long_run_day=2, preferred_tempo_day=6, preferred_interval_day=4)
    weekly = WorkoutAssignmentEngine(preferences).assign_workouts_to_week([2, 4, 6], week=1)

    assert _types_by_day(weekly) == {
        2: WorkoutType.LONG_RUN,
        4: WorkoutType.INTERVAL_800M,
        6: WorkoutType.TEMPO_RUN,
    }


def test_mapping_overrides_apply_to_one_call():
    """Test mapping overrides change a single call only."""
    engine = WorkoutAssignmentEngine()

    overridden = engine.assign_workouts_to_week([2, 4, 6], week=1, overrides={"preferred_long_run_day": 2})
    default = engine.assign_workouts_to_week([2, 4, 6], week=1)

    assert _types_by_day(overridden)[2] == WorkoutType.LONG_RUN
    assert _types_by_day(default)[6] == WorkoutType.LONG_RUN


def test_preferred_rest_day_conflict_is_advisory():
    """Test workouts on preferred rest days are flagged but still assigned."""
    engine = WorkoutAssignmentEngine(AssignmentPreferences(preferred_rest_days=[6]))
    weekly = engine.assign_workouts_to_week([2, 4, 6], week=1)

    long_run = next(a for a in weekly.assignments if a.day_of_week == 6)
    assert long_run.workout_type == WorkoutType.LONG_RUN
    assert PREFERRED_REST_DAY_CONFLICT in long_run.conflicts


def test_workout_type_helpers():
    """Test intensity classification and display names."""
    assert is_high_intensity(WorkoutType.TEMPO_RUN)
    assert is_high_intensity(WorkoutType.MARATHON_RACE)
    assert not is_high_intensity(WorkoutType.EASY_RUN)
    assert get_workout_type_name(WorkoutType.INTERVAL_800M) == "Intervals"


def test_schedule_suggestions():
    """Test suggestions for too few, weekday-only, consecutive days."""
    assert generate_schedule_suggestions([1, 2]) == [
        "Consider adding more workout days - 3-4 days per week is optimal for marathon training",
        "Consider adding a weekend day for long runs",
        "Consider spacing out consecutive workout days for better recovery",
    ]
    assert generate_schedule_suggestions([2, 4, 6]) == []
