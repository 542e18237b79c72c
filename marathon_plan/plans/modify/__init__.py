"""Week customization: templates, per-week overrides and rest-day checks."""

from marathon_plan.plans.modify.rest_days import (
    find_consecutive_workout_days,
    resolve_rest_day_conflicts,
    suggest_optimal_rest_days,
    validate_rest_days,
)
from marathon_plan.plans.modify.week_repository import (
    InMemoryWeekCustomizationStore,
    JsonFileWeekCustomizationStore,
    WeekCustomizationStore,
)
from marathon_plan.plans.modify.week_templates import (
    DEFAULT_TEMPLATES,
    WeekTemplateManager,
    build_custom_template,
    compare_week_days,
    execute_bulk_operation,
    find_best_matching_template,
    generate_week_suggestions,
    get_templates_by_intensity,
    validate_bulk_operation,
)
from marathon_plan.plans.modify.week_types import (
    BulkOperation,
    WeekCustomization,
    WeekIntensity,
    WeekTemplate,
)

__all__ = [
    "DEFAULT_TEMPLATES",
    "BulkOperation",
    "InMemoryWeekCustomizationStore",
    "JsonFileWeekCustomizationStore",
    "WeekCustomization",
    "WeekCustomizationStore",
    "WeekIntensity",
    "WeekTemplate",
    "WeekTemplateManager",
    "build_custom_template",
    "compare_week_days",
    "execute_bulk_operation",
    "find_best_matching_template",
    "find_consecutive_workout_days",
    "generate_week_suggestions",
    "get_templates_by_intensity",
    "resolve_rest_day_conflicts",
    "suggest_optimal_rest_days",
    "validate_bulk_operation",
    "validate_rest_days",
]
