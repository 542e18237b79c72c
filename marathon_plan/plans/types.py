"""Canonical marathon plan schema.

This module defines the immutable domain types shared by every stage of plan
generation:
- All paces are stored per MILE (canonical) and converted for display only
- Workout content is a tagged union discriminated on ``type``
- Every entity is created fresh per generation call and never mutated
"""

import datetime
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class DistanceUnit(StrEnum):
    MILES = "miles"
    KILOMETERS = "kilometers"


class PaceFormat(StrEnum):
    MIN_PER_MILE = "min_per_mile"
    MIN_PER_KM = "min_per_km"


class WorkoutType(StrEnum):
    EASY_RUN = "easy_run"
    TEMPO_RUN = "tempo_run"
    INTERVAL_800M = "interval_800m"
    LONG_RUN = "long_run"
    RECOVERY_RUN = "recovery_run"
    MARATHON_RACE = "marathon_race"


class AdaptationStrategy(StrEnum):
    """Short-timeline adaptation strategy, chosen from available weeks."""

    STANDARD = "standard"
    COMPRESS = "compress"
    PRIORITIZE = "prioritize"
    MINIMAL = "minimal"
    DEFER = "defer"


class MarathonTime(BaseModel):
    """Goal marathon finish time."""

    model_config = ConfigDict(frozen=True)

    hours: int = Field(ge=0)
    minutes: int = Field(ge=0)
    seconds: int = Field(ge=0)

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds


class PaceTime(BaseModel):
    """A pace as minutes:seconds per distance unit (seconds always 0..59)."""

    model_config = ConfigDict(frozen=True)

    minutes: int = Field(ge=0)
    seconds: int = Field(ge=0, lt=60)


class TrainingPreferences(BaseModel):
    """User-supplied training preferences.

    Attributes:
        distance_unit: Unit used for every displayed distance
        pace_format: Unit used for every displayed pace
        workout_days: Weekday numbers the user trains on (1=Monday..7=Sunday)
    """

    model_config = ConfigDict(frozen=True)

    distance_unit: DistanceUnit = DistanceUnit.MILES
    pace_format: PaceFormat = PaceFormat.MIN_PER_MILE
    workout_days: list[int] = Field(default_factory=list)


class PaceSet(BaseModel):
    """Training paces derived from a single goal time.

    Attributes:
        marathon_pace: Goal marathon pace (per mile)
        tempo_pace: Tempo/training pace (per mile)
        interval_pace: Per-mile equivalent of the 800m rep time
        interval_rep_time: Time for one 800m rep (also the recovery duration)
        easy_pace: Easy running pace (per mile)
        long_run_pace: Long run easy-portion pace (per mile)
        unit: Display unit the paces will be formatted for
    """

    model_config = ConfigDict(frozen=True)

    marathon_pace: PaceTime
    tempo_pace: PaceTime
    interval_pace: PaceTime
    interval_rep_time: PaceTime
    easy_pace: PaceTime
    long_run_pace: PaceTime
    unit: DistanceUnit = DistanceUnit.MILES


class RaceDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_time: str
    location: str
    instructions: str


class IntervalSet(BaseModel):
    """One block of repeated intervals.

    Attributes:
        distance: Rep distance in the display unit
        distance_meters: Rep distance in meters
        repetitions: Number of reps
        target_pace: Display pace for the rep (per mile or per km)
        rep_time: Target time for a single rep (M:SS)
        recovery_time: Recovery between reps, in seconds
    """

    model_config = ConfigDict(frozen=True)

    distance: float
    distance_meters: int = 800
    repetitions: int
    target_pace: str
    rep_time: str
    recovery_time: int


class TempoRunWorkout(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal[WorkoutType.TEMPO_RUN] = WorkoutType.TEMPO_RUN
    name: str
    description: str
    week: int
    distance_unit: DistanceUnit
    warm_up_distance: float
    tempo_distance: float
    cool_down_distance: float
    total_distance: float
    target_pace: str
    easy_pace: str
    estimated_duration: int
    instructions: list[str]
    structure: str


class IntervalWorkout(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal[WorkoutType.INTERVAL_800M] = WorkoutType.INTERVAL_800M
    name: str
    description: str
    week: int
    distance_unit: DistanceUnit
    warm_up_distance: float
    cool_down_distance: float
    intervals: list[IntervalSet]
    total_distance: float
    target_pace: str
    easy_pace: str
    estimated_duration: int
    instructions: list[str]
    structure: str


class LongRunWorkout(BaseModel):
    """Long run, or the marathon itself in the final week.

    Attributes:
        easy_run_distance: Distance of the easy-pace portion (0 on race day)
        marathon_pace_distance: Distance run at marathon pace
        easy_run_duration: Minutes of easy running from the progression table
        is_race_day: True only for the marathon race
        race_details: Race-day metadata, present only on race day
    """

    model_config = ConfigDict(frozen=True)

    type: Literal[WorkoutType.LONG_RUN, WorkoutType.MARATHON_RACE] = WorkoutType.LONG_RUN
    name: str
    description: str
    week: int
    distance_unit: DistanceUnit
    easy_run_distance: float
    marathon_pace_distance: float
    easy_run_duration: int
    total_distance: float
    target_pace: str
    target_easy_pace: str
    target_marathon_pace: str
    estimated_duration: int
    instructions: list[str]
    structure: str
    is_race_day: bool = False
    race_details: RaceDetails | None = None


class EasyRunWorkout(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal[WorkoutType.EASY_RUN, WorkoutType.RECOVERY_RUN] = WorkoutType.EASY_RUN
    name: str
    description: str
    week: int
    distance_unit: DistanceUnit
    distance: float
    total_distance: float
    target_pace: str
    estimated_duration: int
    instructions: list[str]
    structure: str


WorkoutContent = Annotated[
    TempoRunWorkout | IntervalWorkout | LongRunWorkout | EasyRunWorkout,
    Field(discriminator="type"),
]


class WorkoutSchedule(BaseModel):
    """A dated slot in the plan, before content is generated."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    week: int = Field(ge=1, le=14)
    day_of_week: int = Field(ge=1, le=7)
    workout_type: WorkoutType | None = None


class ScheduledWorkout(BaseModel):
    """A dated slot merged with its generated content."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    week: int
    day_of_week: int
    workout_type: WorkoutType
    content: WorkoutContent
    is_race_day: bool = False
    race_details: RaceDetails | None = None

    @property
    def name(self) -> str:
        return self.content.name

    @property
    def description(self) -> str:
        return self.content.description

    @property
    def type(self) -> WorkoutType:
        return self.content.type

    @property
    def distance(self) -> float:
        return self.content.total_distance

    @property
    def duration(self) -> int:
        return self.content.estimated_duration

    @property
    def pace(self) -> str:
        return self.content.target_pace

    @property
    def intervals(self) -> list[IntervalSet] | None:
        if isinstance(self.content, IntervalWorkout):
            return self.content.intervals
        return None

    @property
    def instructions(self) -> list[str]:
        return self.content.instructions

    @property
    def structure(self) -> str:
        return self.content.structure


class PlanSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_workouts: int = 0
    tempo_runs: int = 0
    interval_sessions: int = 0
    long_runs: int = 0
    marathon_races: int = 0
    easy_runs: int = 0
    recovery_runs: int = 0


class ScheduledTrainingPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: datetime.date
    end_date: datetime.date
    total_weeks: int
    workouts: list[ScheduledWorkout]
    summary: PlanSummary


class WorkoutAssignment(BaseModel):
    """Role assigned to a single weekday.

    Attributes:
        day_of_week: Weekday number (1=Monday..7=Sunday)
        workout_type: Workout placed on that day
        priority: 1 is highest (long run), larger numbers are less important
        is_optimal: Whether the day is a good fit for the workout type
        conflicts: Advisory conflict descriptions
    """

    model_config = ConfigDict(frozen=True)

    day_of_week: int = Field(ge=1, le=7)
    workout_type: WorkoutType
    priority: int = Field(ge=1)
    is_optimal: bool = False
    conflicts: list[str] = Field(default_factory=list)


class AssignmentPreferences(BaseModel):
    """Preferences steering which weekday receives which workout."""

    model_config = ConfigDict(frozen=True)

    preferred_tempo_day: int | None = Field(default=None, ge=1, le=7)
    preferred_interval_day: int | None = Field(default=None, ge=1, le=7)
    preferred_long_run_day: int | None = Field(default=None, ge=1, le=7)
    min_rest_between_hard_workouts: int = Field(default=1, ge=0)
    preferred_rest_days: list[int] = Field(default_factory=list)
    prefer_weekend_long_runs: bool = True
    avoid_back_to_back_hard: bool = True
    enforce_rest_days: bool = False


class WeeklyAssignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    week: int
    assignments: list[WorkoutAssignment]
    total_workouts: int
    rest_days: list[int]
    quality_score: int = Field(ge=0, le=100)
    suggestions: list[str] = Field(default_factory=list)


class TimelineAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    available_weeks: int
    start_date: datetime.date
    race_date: datetime.date
    is_viable: bool
    strategy: AdaptationStrategy
    recommended_action: str


class AdaptedWorkoutPlan(BaseModel):
    """Short-timeline plan.

    Attributes:
        weeks: Number of calendar weeks actually available
        week_mapping: Canonical week number used for each available week
        workouts: Generated workout content, in training order
        warnings: Risk warnings for the compressed timeline
        recommendations: Advice for the athlete
    """

    model_config = ConfigDict(frozen=True)

    weeks: int
    week_mapping: list[int] = Field(default_factory=list)
    workouts: list[WorkoutContent] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
