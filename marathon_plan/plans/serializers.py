"""Serializers for scheduled plans - JSON serialization utilities.

The engine never touches storage; these helpers produce the flat records a
persistence layer stores.
"""

from typing import Any

from marathon_plan.plans.constants import KM_PER_MILE
from marathon_plan.plans.types import DistanceUnit, ScheduledTrainingPlan, ScheduledWorkout


def serialize_plan(plan: ScheduledTrainingPlan) -> dict:
    """Serialize ScheduledTrainingPlan to JSON-serializable dict.

    Args:
        plan: ScheduledTrainingPlan to serialize

    Returns:
        JSON-serializable dictionary
    """
    return plan.model_dump(mode="json")


def deserialize_plan(data: dict) -> ScheduledTrainingPlan:
    """Deserialize dict to ScheduledTrainingPlan.

    Args:
        data: Dictionary containing plan data

    Returns:
        ScheduledTrainingPlan object
    """
    return ScheduledTrainingPlan.model_validate(data)


def distance_in_km(workout: ScheduledWorkout) -> float:
    """Total workout distance in kilometers, whatever the display unit."""
    if workout.content.distance_unit == DistanceUnit.KILOMETERS:
        return round(workout.distance, 2)
    return round(workout.distance * KM_PER_MILE, 2)


def to_persistence_record(workout: ScheduledWorkout, training_plan_id: str) -> dict[str, Any]:
    """Flatten one scheduled workout into a storage record."""
    intervals = workout.intervals
    return {
        "name": workout.name,
        "description": workout.description,
        "type": workout.workout_type.value,
        "week": workout.week,
        "day": workout.day_of_week,
        "scheduled_date": workout.date.isoformat(),
        "distance_km": distance_in_km(workout),
        "duration": workout.duration,
        "pace": workout.pace,
        "intervals": [interval.model_dump(mode="json") for interval in intervals] if intervals else None,
        "instructions": list(workout.instructions),
        "is_race_day": workout.is_race_day,
        "race_details": workout.race_details.model_dump(mode="json") if workout.race_details else None,
        "structure": workout.structure,
        "training_plan_id": training_plan_id,
    }


def to_persistence_records(plan: ScheduledTrainingPlan, training_plan_id: str) -> list[dict[str, Any]]:
    """Flatten a plan into storage records, one per workout, in plan order."""
    return [to_persistence_record(workout, training_plan_id) for workout in plan.workouts]
