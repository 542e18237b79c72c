"""Shared distance and structure formatting for workout content.

Distances are computed in miles and converted to the display unit here,
at content assembly time.
"""

from marathon_plan.plans.constants import KM_PER_MILE
from marathon_plan.plans.types import DistanceUnit

STRUCTURE_SEPARATOR = " → "


def to_display_distance(miles: float, unit: DistanceUnit) -> float:
    """Convert a canonical mile distance to the display unit (2 decimals)."""
    if unit == DistanceUnit.KILOMETERS:
        return round(miles * KM_PER_MILE, 2)
    return round(miles, 2)


def unit_abbreviation(unit: DistanceUnit) -> str:
    return "km" if unit == DistanceUnit.KILOMETERS else "mi"


def unit_name(unit: DistanceUnit, value: float) -> str:
    """Unit word for a quantity: "mile"/"miles" or "km"."""
    if unit == DistanceUnit.KILOMETERS:
        return "km"
    return "mile" if value == 1 else "miles"


def format_distance(value: float, unit: DistanceUnit) -> str:
    """Format a display distance with one decimal, e.g. "3.0 miles"."""
    return f"{value:.1f} {unit_name(unit, value)}"


def format_distance_phrase(miles: float, unit: DistanceUnit) -> str:
    """Format a fixed segment length for instructions, e.g. "1 mile" or "1.6 km"."""
    value = round(to_display_distance(miles, unit), 1)
    if value == int(value):
        text = str(int(value))
    else:
        text = f"{value:.1f}"
    return f"{text} {unit_name(unit, value)}"


def segment(label: str, distance: float, unit: DistanceUnit, pace: str | None = None) -> str:
    """Describe one structure segment, e.g. "Warm-up (1.0 mi at 9:01/mi)"."""
    body = f"{distance:.1f} {unit_abbreviation(unit)}"
    if pace:
        body = f"{body} at {pace}"
    return f"{label} ({body})"


def build_structure(*segments: str) -> str:
    return STRUCTURE_SEPARATOR.join(segments)


def segment_minutes(miles: float, pace_seconds_per_mile: int) -> float:
    return miles * pace_seconds_per_mile / 60
