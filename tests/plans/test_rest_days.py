"""Tests for rest-day validation and suggestions."""

from marathon_plan.plans.modify import (
    find_consecutive_workout_days,
    resolve_rest_day_conflicts,
    suggest_optimal_rest_days,
    validate_rest_days,
)
from marathon_plan.plans.types import AssignmentPreferences

ENFORCED = AssignmentPreferences(enforce_rest_days=True)


def test_workout_on_preferred_rest_day():
    """Test a flexible rest-day conflict is medium severity and still valid."""
    analysis = validate_rest_days([2, 4, 6], [6])

    assert len(analysis.conflicts) == 1
    conflict = analysis.conflicts[0]
    assert conflict.type == "workout_on_rest_day"
    assert conflict.severity == "medium"
    assert conflict.description == "Workout scheduled on preferred rest day (Saturday)"
    assert analysis.quality_score == 85
    assert analysis.is_valid
    assert analysis.recommendations == ["You have flexibility to add more preferred rest days"]


def test_enforced_rest_day_conflict_is_invalid():
    """Test enforced rest days raise severity and penalty."""
    analysis = validate_rest_days([2, 4, 6], [6], ENFORCED)

    assert analysis.conflicts[0].severity == "high"
    assert analysis.quality_score == 75
    assert not analysis.is_valid


def test_insufficient_rest_and_long_streak():
    """Test six workout days in a row."""
    analysis = validate_rest_days([1, 2, 3, 4, 5, 6], [])

    descriptions = [conflict.description for conflict in analysis.conflicts]
    assert descriptions == [
        "Only 1 rest day per week - minimum 2 recommended",
        "6 consecutive workout days detected",
    ]
    assert analysis.quality_score == 60
    assert not analysis.is_valid
    assert analysis.recommendations == [
        "Consider setting preferred rest days for better recovery planning",
        "Consider keeping at least one weekend day for rest and recovery",
    ]


def test_find_consecutive_workout_days_wraps_week():
    """Test Sunday runs into Monday."""
    assert find_consecutive_workout_days([6, 7, 1, 3]) == [[6, 7, 1]]
    assert find_consecutive_workout_days([1, 2, 4, 5]) == [[1, 2], [4, 5]]
    assert find_consecutive_workout_days([2, 4, 6]) == []
    assert find_consecutive_workout_days(range(1, 8)) == [[1, 2, 3, 4, 5, 6, 7]]


def test_wrapped_streak_counts_as_one_run():
    """Test Fri-Sat-Sun-Mon is one four-day streak."""
    analysis = validate_rest_days([1, 5, 6, 7], [2, 3])
    assert [c.description for c in analysis.conflicts] == ["4 consecutive workout days detected"]


def test_suggest_optimal_rest_days():
    """Test Monday after a Sunday workout ranks first."""
    assert suggest_optimal_rest_days([2, 4, 6, 7]) == [1, 3]
    assert suggest_optimal_rest_days([1, 2, 3, 4, 5]) == [6, 7]
    assert suggest_optimal_rest_days([2, 4, 6, 7], target_rest_days=1) == [1]


def test_resolve_moves_workout_off_rest_day():
    """Test a conflicting workout moves to the previous free day."""
    resolution = resolve_rest_day_conflicts([2, 4, 6], [6], ENFORCED)

    assert resolution.suggested_workout_days == [2, 4, 5]
    assert resolution.suggested_rest_days == [6]
    assert resolution.changes == ["Moved workout from Saturday to Friday"]


def test_resolve_drops_rest_day_when_no_neighbor_is_free():
    """Test the rest day is dropped when both neighbors are taken."""
    resolution = resolve_rest_day_conflicts([5, 6, 7], [6], ENFORCED)

    assert resolution.suggested_workout_days == [5, 6, 7]
    assert resolution.suggested_rest_days == []
    assert resolution.changes == ["Removed Saturday from preferred rest days"]


def test_resolve_without_enforcement_changes_nothing():
    """Test flexible rest days are left alone."""
    resolution = resolve_rest_day_conflicts([2, 4, 6], [6])

    assert resolution.suggested_workout_days == [2, 4, 6]
    assert resolution.changes == []
