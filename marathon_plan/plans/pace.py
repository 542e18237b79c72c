"""Centralized pace calculation - single source of truth.

Every target pace in a plan is derived here from the goal marathon time.
Paces are computed and stored per mile; conversion to kilometers happens
only in the formatting helpers so rounding never compounds.
"""

import math
import re

from loguru import logger

from marathon_plan.plans.constants import (
    EASY_OFFSET_SECONDS,
    KM_PER_MILE,
    MARATHON_DISTANCE_MILES,
    MIN_EASY_PACE_SECONDS,
    MIN_TEMPO_PACE_SECONDS,
    TEMPO_OFFSET_SECONDS,
)
from marathon_plan.plans.errors import ValidationError
from marathon_plan.plans.types import (
    DistanceUnit,
    MarathonTime,
    PaceFormat,
    PaceSet,
    PaceTime,
    TrainingPreferences,
)

# 5K pace per km to marathon pace per km (seconds slower)
FIVE_K_TO_MARATHON_OFFSET_SECONDS = 80
MARATHON_DISTANCE_KM = 42.195

# ASCII digits only; str.isdigit also accepts superscripts and full-width digits
TIME_SEGMENT_PATTERN = re.compile(r"[0-9]+")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives."""
    return int(math.floor(value + 0.5))


def _parse_segments(value: str, expected: tuple[int, ...], field: str) -> list[int]:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    parts = value.strip().split(":")
    if len(parts) not in expected:
        raise ValidationError(
            f"Invalid time format '{value}'. Expected {' or '.join(_format_hint(n) for n in expected)}",
            field=field,
        )
    if not all(TIME_SEGMENT_PATTERN.fullmatch(part) for part in parts):
        raise ValidationError(f"Invalid time format '{value}'. All segments must be numeric", field=field)
    return [int(part) for part in parts]


def _format_hint(segments: int) -> str:
    return "MM:SS" if segments == 2 else "HH:MM:SS"


def parse_time_string(value: str) -> PaceTime:
    """Parse "MM:SS" or "HH:MM:SS" into a PaceTime.

    Hours are folded into minutes, so "1:05:30" becomes 65:30.

    Raises:
        ValidationError: If the string is malformed
    """
    segments = _parse_segments(value, (2, 3), "time")
    if len(segments) == 3:
        hours, minutes, seconds = segments
        minutes += hours * 60
    else:
        minutes, seconds = segments
    return seconds_to_pace_time(minutes * 60 + seconds)


def parse_marathon_time(value: str) -> MarathonTime:
    """Parse a goal marathon time string "H:MM:SS".

    Args:
        value: Goal finish time, e.g. "3:30:00"

    Returns:
        MarathonTime with hours, minutes and seconds

    Raises:
        ValidationError: If the string does not have exactly three numeric
            segments or the total time is zero
    """
    hours, minutes, seconds = _parse_segments(value, (3,), "goal_marathon_time")
    if minutes >= 60 or seconds >= 60:
        raise ValidationError(
            f"Invalid marathon time '{value}'. Minutes and seconds must be below 60",
            field="goal_marathon_time",
        )
    marathon_time = MarathonTime(hours=hours, minutes=minutes, seconds=seconds)
    if marathon_time.total_seconds <= 0:
        raise ValidationError("Goal marathon time must be greater than zero", field="goal_marathon_time")
    return marathon_time


def coerce_marathon_time(value: str | MarathonTime) -> MarathonTime:
    """Accept either a parsed MarathonTime or its string form."""
    if isinstance(value, MarathonTime):
        if value.total_seconds <= 0:
            raise ValidationError("Goal marathon time must be greater than zero", field="goal_marathon_time")
        return value
    return parse_marathon_time(value)


def pace_time_to_seconds(pace: PaceTime) -> int:
    return pace.minutes * 60 + pace.seconds


def seconds_to_pace_time(seconds: float) -> PaceTime:
    """Convert seconds to a normalized PaceTime.

    The total is rounded before splitting so seconds never reach 60.

    Raises:
        ValidationError: If seconds is negative
    """
    if seconds < 0:
        raise ValidationError(f"Pace seconds must be non-negative, got {seconds}", field="seconds")
    minutes, remainder = divmod(round_half_up(seconds), 60)
    return PaceTime(minutes=minutes, seconds=remainder)


def format_pace_time(pace: PaceTime) -> str:
    """Format as M:SS with zero-padded seconds."""
    return f"{pace.minutes}:{pace.seconds:02d}"


def format_seconds(seconds: int) -> str:
    """Format a duration in seconds as M:SS."""
    return format_pace_time(seconds_to_pace_time(seconds))


def pace_unit_for(preferences: TrainingPreferences) -> DistanceUnit:
    """Unit a pace is displayed in for these preferences."""
    if preferences.pace_format == PaceFormat.MIN_PER_KM:
        return DistanceUnit.KILOMETERS
    return DistanceUnit.MILES


def convert_pace(pace: PaceTime, from_unit: DistanceUnit, to_unit: DistanceUnit) -> PaceTime:
    """Convert a pace between per-mile and per-kilometer."""
    if from_unit == to_unit:
        return pace
    seconds = pace_time_to_seconds(pace)
    if from_unit == DistanceUnit.MILES:
        return seconds_to_pace_time(seconds / KM_PER_MILE)
    return seconds_to_pace_time(seconds * KM_PER_MILE)


def format_pace_for_user(pace: PaceTime, preferences: TrainingPreferences) -> str:
    """Format a canonical per-mile pace for display, e.g. "8:01/mi" or "4:59/km"."""
    unit = pace_unit_for(preferences)
    display = convert_pace(pace, DistanceUnit.MILES, unit)
    suffix = "/km" if unit == DistanceUnit.KILOMETERS else "/mi"
    return f"{format_pace_time(display)}{suffix}"


def calculate_training_paces(marathon_time: MarathonTime, preferences: TrainingPreferences) -> PaceSet:
    """Derive every training pace from the goal marathon time.

    - Marathon pace: goal time / 26.2188 miles
    - Tempo pace: marathon pace - 12s/mile, never faster than 3:00/mile
    - Interval: hours become minutes and minutes become seconds for the 800m
      rep time (3:15:00 -> 3:15 per 800m); per-mile equivalent is double
    - Easy / long run pace: marathon pace + 60s/mile, never faster than 9:00/mile

    Args:
        marathon_time: Goal finish time
        preferences: Training preferences (display unit)

    Returns:
        PaceSet with per-mile paces
    """
    marathon_seconds = pace_time_to_seconds(seconds_to_pace_time(marathon_time.total_seconds / MARATHON_DISTANCE_MILES))
    tempo_seconds = max(marathon_seconds - TEMPO_OFFSET_SECONDS, MIN_TEMPO_PACE_SECONDS)
    rep_seconds = marathon_time.hours * 60 + marathon_time.minutes
    easy_seconds = max(marathon_seconds + EASY_OFFSET_SECONDS, MIN_EASY_PACE_SECONDS)

    paces = PaceSet(
        marathon_pace=seconds_to_pace_time(marathon_seconds),
        tempo_pace=seconds_to_pace_time(tempo_seconds),
        interval_pace=seconds_to_pace_time(rep_seconds * 2),
        interval_rep_time=seconds_to_pace_time(rep_seconds),
        easy_pace=seconds_to_pace_time(easy_seconds),
        long_run_pace=seconds_to_pace_time(easy_seconds),
        unit=preferences.distance_unit,
    )
    logger.debug(
        f"Calculated paces: marathon={format_pace_time(paces.marathon_pace)} "
        f"tempo={format_pace_time(paces.tempo_pace)} "
        f"interval_rep={format_pace_time(paces.interval_rep_time)} "
        f"easy={format_pace_time(paces.easy_pace)}"
    )
    return paces


def paces_for_goal(goal_marathon_time: str | MarathonTime, preferences: TrainingPreferences) -> PaceSet:
    """Parse the goal time (if needed) and calculate its PaceSet."""
    return calculate_training_paces(coerce_marathon_time(goal_marathon_time), preferences)


def estimate_5k_to_marathon_time(five_k_time: str) -> str:
    """Estimate a marathon finish time from a 5K time.

    Marathon pace per km is taken as 5K pace per km plus 80 seconds.

    Args:
        five_k_time: 5K time as "MM:SS" or "HH:MM:SS"

    Returns:
        Estimated marathon time as "H:MM:SS"
    """
    five_k_seconds = pace_time_to_seconds(parse_time_string(five_k_time))
    if five_k_seconds <= 0:
        raise ValidationError("5K time must be greater than zero", field="five_k_time")
    marathon_pace_per_km = five_k_seconds / 5 + FIVE_K_TO_MARATHON_OFFSET_SECONDS
    total = round_half_up(marathon_pace_per_km * MARATHON_DISTANCE_KM)
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def get_recommended_marathon_pace(goal_marathon_time: str, preferences: TrainingPreferences) -> str:
    return format_pace_for_user(paces_for_goal(goal_marathon_time, preferences).marathon_pace, preferences)


def get_recommended_tempo_pace(goal_marathon_time: str, preferences: TrainingPreferences) -> str:
    return format_pace_for_user(paces_for_goal(goal_marathon_time, preferences).tempo_pace, preferences)


def get_recommended_interval_pace(goal_marathon_time: str, preferences: TrainingPreferences) -> str:
    """Interval rep time per 800m plus its per-unit equivalent, e.g. "3:30 per 800m (7:00/mi)"."""
    paces = paces_for_goal(goal_marathon_time, preferences)
    per_unit = format_pace_for_user(paces.interval_pace, preferences)
    return f"{format_pace_time(paces.interval_rep_time)} per 800m ({per_unit})"


def get_recommended_easy_pace(goal_marathon_time: str, preferences: TrainingPreferences) -> str:
    return format_pace_for_user(paces_for_goal(goal_marathon_time, preferences).easy_pace, preferences)
