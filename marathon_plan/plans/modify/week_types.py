"""Types for week customization.

This module defines the schemas used to override a week's workout pattern:
templates, per-week customizations, comparisons and bulk operations. All
state lives in a caller-owned store; these are plain values.
"""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field

from marathon_plan.plans.types import WorkoutAssignment, WorkoutType


class WeekIntensity(StrEnum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"
    RECOVERY = "recovery"
    RACE = "race"


class WeekTemplate(BaseModel):
    """Reusable weekly workout pattern.

    Attributes:
        id: Template identifier ("standard", "custom_<uuid>", ...)
        name: Display name
        description: Short description
        workout_days: Weekdays in the pattern (1=Monday..7=Sunday)
        workout_types: Workout type for each weekday in workout_days
        intensity: Overall intensity of the week
        is_default: True for the template used when a week is not customized
    """

    id: str
    name: str
    description: str
    workout_days: list[int]
    workout_types: dict[int, WorkoutType]
    intensity: WeekIntensity = WeekIntensity.MODERATE
    is_default: bool = False


class WeekCustomization(BaseModel):
    """Override applied to one training week.

    Either ``template_id`` or ``custom_assignments`` is set.
    """

    week_number: int = Field(ge=1, le=14)
    template_id: str | None = None
    custom_assignments: list[WorkoutAssignment] | None = None
    is_customized: bool = True
    notes: str | None = None


class WeekDifferences(BaseModel):
    added: list[int] = Field(default_factory=list)
    removed: list[int] = Field(default_factory=list)
    unchanged: list[int] = Field(default_factory=list)


class WeekComparison(BaseModel):
    """Weekday differences between a baseline and an override.

    Attributes:
        week_number: Week being compared
        default_days: Baseline workout days
        override_days: Overridden workout days
        differences: Added, removed and unchanged weekdays
        impact_score: 0 (no change) to 10 (everything changed)
    """

    week_number: int
    default_days: list[int]
    override_days: list[int]
    differences: WeekDifferences
    impact_score: int = Field(ge=0, le=10)


class BulkOperation(BaseModel):
    """Operation applied to several weeks of workout-day overrides at once."""

    type: Literal["copy", "reset", "apply_template"]
    target_weeks: list[int]
    source_week: int | None = None
    template: WeekTemplate | None = None


class BulkOperationValidation(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ConsistencyReport(BaseModel):
    score: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list)


class WeekCustomizationState(BaseModel):
    """Everything a week customization store persists."""

    customizations: dict[int, WeekCustomization] = Field(default_factory=dict)
    custom_templates: list[WeekTemplate] = Field(default_factory=list)


class RestDayConflict(BaseModel):
    """A rest-day problem in a weekly pattern.

    Attributes:
        day: Weekday concerned, or 0 for a whole-week problem
        type: Kind of conflict
        severity: high severity makes the configuration invalid
        description: Human readable description
        suggestions: Ways to resolve it
    """

    day: int = Field(ge=0, le=7)
    type: Literal["workout_on_rest_day", "insufficient_rest", "too_many_rest_days"]
    severity: Literal["low", "medium", "high"]
    description: str
    suggestions: list[str] = Field(default_factory=list)


class RestDayAnalysis(BaseModel):
    conflicts: list[RestDayConflict] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    quality_score: int = Field(ge=0, le=100)
    is_valid: bool


class RestDayResolution(BaseModel):
    suggested_workout_days: list[int]
    suggested_rest_days: list[int]
    changes: list[str] = Field(default_factory=list)
