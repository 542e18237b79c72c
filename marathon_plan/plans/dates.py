"""Calendar utilities for the 14-week plan.

Training weeks always start on Monday, whatever weekdays the athlete trains
on. Weekday numbers are ISO: 1=Monday .. 7=Sunday.
"""

import datetime
from collections.abc import Iterable

from loguru import logger

from marathon_plan.plans.constants import RACE_WEEK, TOTAL_WEEKS
from marathon_plan.plans.errors import SchedulingError, ValidationError
from marathon_plan.plans.types import WorkoutSchedule

DAY_NAMES: tuple[str, ...] = ("", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Longest walk back from the race date looking for a selected weekday
MAX_RACE_DAY_LOOKBACK = 7


def get_training_week_start(day: datetime.date) -> datetime.date:
    """Monday of the week containing ``day``."""
    return day - datetime.timedelta(days=day.isoweekday() - 1)


def calculate_plan_end_date(start_date: datetime.date) -> datetime.date:
    return start_date + datetime.timedelta(weeks=TOTAL_WEEKS)


def weeks_between(start_date: datetime.date, end_date: datetime.date) -> int:
    """Whole weeks from start to end, truncated toward zero (negative if end is first)."""
    return int((end_date - start_date).days / 7)


def find_final_workout_date(race_date: datetime.date, workout_days: Iterable[int]) -> datetime.date:
    """Find the last workout date on or before the race date.

    The race date itself if it falls on a selected weekday, otherwise the most
    recent selected weekday within 7 days before it.

    Raises:
        SchedulingError: If no selected weekday falls within the window
    """
    days = set(workout_days)
    for offset in range(MAX_RACE_DAY_LOOKBACK + 1):
        candidate = race_date - datetime.timedelta(days=offset)
        if candidate.isoweekday() in days:
            return candidate
    raise SchedulingError(
        f"No workout day found within {MAX_RACE_DAY_LOOKBACK} days of race date {race_date.isoformat()}",
        field="race_date",
    )


def calculate_start_date_from_race_date(race_date: datetime.date, workout_days: Iterable[int]) -> datetime.date:
    """Work backward from the race date to the plan's first Monday.

    The Monday of the final workout's week is week 14; week 1 starts 13 weeks
    before it.

    Args:
        race_date: Marathon date
        workout_days: Selected weekdays (1=Monday..7=Sunday)

    Returns:
        Monday that starts week 1

    Raises:
        SchedulingError: If no selected weekday falls within 7 days of the race
    """
    final_workout_date = find_final_workout_date(race_date, workout_days)
    week14_start = get_training_week_start(final_workout_date)
    start_date = week14_start - datetime.timedelta(weeks=TOTAL_WEEKS - 1)
    logger.debug(f"Race date {race_date.isoformat()} -> plan start {start_date.isoformat()}")
    return start_date


def generate_weekly_workout_dates(
    week_start: datetime.date,
    workout_days: Iterable[int],
    week: int,
) -> list[WorkoutSchedule]:
    """Dated slots for one week, in ascending weekday order."""
    return [
        WorkoutSchedule(
            date=week_start + datetime.timedelta(days=day - 1),
            week=week,
            day_of_week=day,
        )
        for day in sorted(workout_days)
    ]


def generate_week14_workout_dates(
    week_start: datetime.date,
    workout_days: Iterable[int],
    race_date: datetime.date,
) -> list[WorkoutSchedule]:
    """Dated slots for the race week.

    The last slot moves to the race date itself; earlier slots are kept only
    when they fall before the race.
    """
    days = sorted(workout_days)
    if not days:
        return []

    schedules = [
        WorkoutSchedule(date=week_start + datetime.timedelta(days=day - 1), week=RACE_WEEK, day_of_week=day)
        for day in days[:-1]
    ]
    schedules = [schedule for schedule in schedules if schedule.date < race_date]
    schedules.append(WorkoutSchedule(date=race_date, week=RACE_WEEK, day_of_week=race_date.isoweekday()))
    return schedules


def generate_full_plan_schedule(
    start_date: datetime.date,
    workout_days: Iterable[int],
    race_date: datetime.date | None = None,
) -> list[WorkoutSchedule]:
    """Enumerate every dated slot of the 14-week plan.

    Args:
        start_date: Any date in week 1 (normalized to its Monday)
        workout_days: Selected weekdays
        race_date: Optional race date; week 14's last slot lands on it

    Returns:
        Slots ordered by week, then date
    """
    days = sorted(workout_days)
    first_monday = get_training_week_start(start_date)
    schedules: list[WorkoutSchedule] = []
    for week in range(1, TOTAL_WEEKS + 1):
        week_start = first_monday + datetime.timedelta(weeks=week - 1)
        if week == RACE_WEEK and race_date is not None:
            schedules.extend(generate_week14_workout_dates(week_start, days, race_date))
        else:
            schedules.extend(generate_weekly_workout_dates(week_start, days, week))
    return schedules


def get_day_name(day_of_week: int) -> str:
    """Weekday name for 1=Monday..7=Sunday.

    Raises:
        ValidationError: If the number is not a weekday
    """
    if not 1 <= day_of_week <= 7:
        raise ValidationError(f"Invalid day of week: {day_of_week}", field="day_of_week")
    return DAY_NAMES[day_of_week]


def get_next_day_of_week(from_date: datetime.date, day_of_week: int) -> datetime.date:
    """Next occurrence of a weekday strictly after ``from_date``."""
    if not 1 <= day_of_week <= 7:
        raise ValidationError(f"Invalid day of week: {day_of_week}", field="day_of_week")
    days_to_add = day_of_week - from_date.isoweekday()
    if days_to_add <= 0:
        days_to_add += 7
    return from_date + datetime.timedelta(days=days_to_add)


def format_workout_date(day: datetime.date) -> str:
    """Long form date, e.g. "Monday, January 1, 2024"."""
    return f"{DAY_NAMES[day.isoweekday()]}, {day:%B} {day.day}, {day.year}"


def is_date_in_plan(day: datetime.date, start_date: datetime.date, end_date: datetime.date) -> bool:
    return start_date <= day <= end_date
