"""Marathon training plans.

This module provides:
- Training paces derived from a goal marathon time
- Week-indexed workout generators for the 14-week curriculum
- Weekday assignment and calendar scheduling
- Short-timeline adaptation when fewer than 14 weeks remain

Distances are canonical in miles and converted only for display.
"""

from marathon_plan.plans.assignment import WorkoutAssignmentEngine
from marathon_plan.plans.errors import SchedulingError, TrainingPlanError, ValidationError
from marathon_plan.plans.pace import calculate_training_paces, parse_marathon_time
from marathon_plan.plans.planner import build_training_plan
from marathon_plan.plans.scheduler import TrainingScheduler
from marathon_plan.plans.short_timeline import assess_timeline_viability, generate_short_timeline_plan
from marathon_plan.plans.types import (
    AdaptedWorkoutPlan,
    DistanceUnit,
    PaceFormat,
    ScheduledTrainingPlan,
    ScheduledWorkout,
    TrainingPreferences,
    WorkoutType,
)

__all__ = [
    "AdaptedWorkoutPlan",
    "DistanceUnit",
    "PaceFormat",
    "ScheduledTrainingPlan",
    "ScheduledWorkout",
    "SchedulingError",
    "TrainingPlanError",
    "TrainingPreferences",
    "TrainingScheduler",
    "ValidationError",
    "WorkoutAssignmentEngine",
    "WorkoutType",
    "assess_timeline_viability",
    "build_training_plan",
    "calculate_training_paces",
    "generate_short_timeline_plan",
]
