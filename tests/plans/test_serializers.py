"""Tests for plan serialization and persistence records."""

import datetime

import pytest

from marathon_plan.plans.scheduler import TrainingScheduler
from marathon_plan.plans.serializers import (
    deserialize_plan,
    distance_in_km,
    serialize_plan,
    to_persistence_records,
)
from marathon_plan.plans.types import ScheduledTrainingPlan


@pytest.fixture
def plan(miles_preferences) -> ScheduledTrainingPlan:
    return TrainingScheduler(
        start_date=datetime.date(2024, 1, 1),
        preferences=miles_preferences,
        goal_marathon_time="3:30:00",
        workout_days=[2, 4, 6, 7],
    ).generate_scheduled_plan()


def test_serialize_plan_is_json_ready(plan):
    """Test dates serialize as ISO strings and content keeps its type tag."""
    data = serialize_plan(plan)

    assert data["start_date"] == "2024-01-01"
    assert data["workouts"][0]["content"]["type"] == "tempo_run"
    assert deserialize_plan(data) == plan


def test_persistence_records(plan):
    """Test one flat record per workout with distances in km."""
    records = to_persistence_records(plan, "plan-123")

    assert len(records) == 56
    tempo = records[0]
    assert tempo["name"] == "Week 1 Tempo Run"
    assert tempo["type"] == "tempo_run"
    assert tempo["week"] == 1
    assert tempo["day"] == 2
    assert tempo["scheduled_date"] == "2024-01-02"
    assert tempo["distance_km"] == 8.05
    assert tempo["duration"] == 41
    assert tempo["pace"] == "7:49/mi"
    assert tempo["intervals"] is None
    assert tempo["race_details"] is None
    assert tempo["training_plan_id"] == "plan-123"

    intervals = records[1]
    assert intervals["intervals"][0]["distance_meters"] == 800
    assert intervals["intervals"][0]["repetitions"] == 2

    race = records[-1]
    assert race["is_race_day"] is True
    assert race["race_details"]["start_time"] == "07:00"


def test_distance_in_km_for_km_plan(km_preferences):
    """Test km plans are not converted twice."""
    plan = TrainingScheduler(
        start_date=datetime.date(2024, 1, 1),
        preferences=km_preferences,
        goal_marathon_time="3:30:00",
    ).generate_scheduled_plan()

    assert distance_in_km(plan.workouts[0]) == 8.05
