"""Tests for plan calendar utilities."""

import datetime

import pytest

from marathon_plan.plans.dates import (
    calculate_plan_end_date,
    calculate_start_date_from_race_date,
    find_final_workout_date,
    format_workout_date,
    generate_full_plan_schedule,
    generate_week14_workout_dates,
    get_day_name,
    get_next_day_of_week,
    get_training_week_start,
    is_date_in_plan,
    weeks_between,
)
from marathon_plan.plans.errors import SchedulingError, ValidationError


def test_training_week_starts_on_monday():
    """Test any date maps to the Monday of its week."""
    assert get_training_week_start(datetime.date(2024, 1, 3)) == datetime.date(2024, 1, 1)
    assert get_training_week_start(datetime.date(2024, 1, 7)) == datetime.date(2024, 1, 1)
    assert get_training_week_start(datetime.date(2024, 1, 1)) == datetime.date(2024, 1, 1)


def test_plan_end_date_is_fourteen_weeks_later():
    """Test end date is start plus 14 weeks."""
    assert calculate_plan_end_date(datetime.date(2024, 1, 1)) == datetime.date(2024, 4, 8)


def test_weeks_between_truncates_toward_zero():
    """Test partial weeks are dropped in both directions."""
    assert weeks_between(datetime.date(2024, 1, 1), datetime.date(2024, 1, 10)) == 1
    assert weeks_between(datetime.date(2024, 1, 15), datetime.date(2024, 1, 1)) == -2
    assert weeks_between(datetime.date(2024, 1, 1), datetime.date(2024, 1, 5)) == 0


def test_find_final_workout_date():
    """Test the race date is used when it is a workout day, else the latest workout day before it."""
    race_date = datetime.date(2025, 8, 30)  # Saturday
    assert find_final_workout_date(race_date, [6]) == race_date
    assert find_final_workout_date(race_date, [1, 3]) == datetime.date(2025, 8, 27)


def test_find_final_workout_date_without_days():
    """Test SchedulingError when no weekday can be found."""
    with pytest.raises(SchedulingError):
        find_final_workout_date(datetime.date(2025, 8, 30), [])


def test_start_date_from_race_date():
    """Test the plan starts 13 weeks before the race week's Monday."""
    assert calculate_start_date_from_race_date(datetime.date(2025, 8, 30), {1, 3, 6}) == datetime.date(2025, 5, 26)


def test_week14_dates_land_last_slot_on_race_day():
    """Test the final slot moves to the race date and later slots are dropped."""
    week_start = datetime.date(2025, 8, 25)
    race_date = datetime.date(2025, 8, 29)  # Friday
    slots = generate_week14_workout_dates(week_start, [1, 3, 6], race_date)

    assert [slot.date for slot in slots] == [
        datetime.date(2025, 8, 25),
        datetime.date(2025, 8, 27),
        race_date,
    ]
    assert slots[-1].day_of_week == 5
    assert all(slot.week == 14 for slot in slots)


def test_full_plan_schedule():
    """Test one slot per workout day for all 14 weeks."""
    schedule = generate_full_plan_schedule(datetime.date(2024, 1, 3), [2, 4, 6])

    assert len(schedule) == 42
    assert schedule[0].date == datetime.date(2024, 1, 2)
    assert schedule[-1].date == datetime.date(2024, 4, 6)
    assert schedule[-1].week == 14


def test_get_day_name():
    """Test weekday names and range validation."""
    assert get_day_name(1) == "Monday"
    assert get_day_name(7) == "Sunday"
    with pytest.raises(ValidationError):
        get_day_name(0)


def test_get_next_day_of_week_is_strictly_after():
    """Test the same weekday rolls to the following week."""
    monday = datetime.date(2024, 1, 1)
    assert get_next_day_of_week(monday, 1) == datetime.date(2024, 1, 8)
    assert get_next_day_of_week(monday, 3) == datetime.date(2024, 1, 3)


def test_format_workout_date():
    """Test the long date format."""
    assert format_workout_date(datetime.date(2024, 1, 1)) == "Monday, January 1, 2024"


def test_is_date_in_plan_is_inclusive():
    """Test plan bounds are inclusive."""
    start, end = datetime.date(2024, 1, 1), datetime.date(2024, 4, 8)
    assert is_date_in_plan(start, start, end)
    assert is_date_in_plan(end, start, end)
    assert not is_date_in_plan(datetime.date(2024, 4, 9), start, end)
