"""Workout content generators.

Each generator is a pure function of (week, goal marathon time, preferences)
driven by the week-indexed progression tables in ``plans.constants``.
"""

from marathon_plan.plans.workouts.easy_run import (
    generate_easy_run,
    generate_recovery_run,
)
from marathon_plan.plans.workouts.intervals import (
    calculate_interval_training_stress,
    generate_all_interval_workouts,
    generate_interval_workout,
)
from marathon_plan.plans.workouts.long_run import (
    generate_all_long_runs,
    generate_long_run,
)
from marathon_plan.plans.workouts.tempo import (
    generate_all_tempo_runs,
    generate_tempo_run,
)

__all__ = [
    "calculate_interval_training_stress",
    "generate_all_interval_workouts",
    "generate_all_long_runs",
    "generate_all_tempo_runs",
    "generate_easy_run",
    "generate_interval_workout",
    "generate_long_run",
    "generate_recovery_run",
    "generate_tempo_run",
]
