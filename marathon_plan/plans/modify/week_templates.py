"""Week template management.

Lets a user override a week's workout pattern with a template or custom
assignments, and reports conflicts and consistency across the plan. State
is read from and written to a caller-owned WeekCustomizationStore.
"""

import uuid
from collections.abc import Iterable, Mapping

from loguru import logger

from marathon_plan.plans.assignment import is_high_intensity, is_long_run_type
from marathon_plan.plans.constants import RACE_WEEK, TOTAL_WEEKS, WEEKEND_DAYS, WEEKS
from marathon_plan.plans.errors import ValidationError
from marathon_plan.plans.modify.week_repository import WeekCustomizationStore
from marathon_plan.plans.modify.week_types import (
    BulkOperation,
    BulkOperationValidation,
    ConsistencyReport,
    WeekComparison,
    WeekCustomization,
    WeekCustomizationState,
    WeekDifferences,
    WeekIntensity,
    WeekTemplate,
)
from marathon_plan.plans.pace import round_half_up
from marathon_plan.plans.types import WorkoutAssignment, WorkoutType
from marathon_plan.plans.validators import validate_week, validate_workout_days

DEFAULT_TEMPLATE_ID = "standard"

DEFAULT_TEMPLATES: tuple[WeekTemplate, ...] = (
    WeekTemplate(
        id="standard",
        name="Standard Week",
        description="Balanced training with tempo, intervals, and long run",
        workout_days=[2, 4, 6],
        workout_types={2: WorkoutType.TEMPO_RUN, 4: WorkoutType.INTERVAL_800M, 6: WorkoutType.LONG_RUN},
        intensity=WeekIntensity.MODERATE,
        is_default=True,
    ),
    WeekTemplate(
        id="easy",
        name="Easy Week",
        description="Lower intensity for recovery or beginners",
        workout_days=[2, 4, 6],
        workout_types={2: WorkoutType.EASY_RUN, 4: WorkoutType.EASY_RUN, 6: WorkoutType.LONG_RUN},
        intensity=WeekIntensity.EASY,
    ),
    WeekTemplate(
        id="hard",
        name="Hard Week",
        description="High intensity training for experienced runners",
        workout_days=[1, 3, 5, 6],
        workout_types={
            1: WorkoutType.TEMPO_RUN,
            3: WorkoutType.INTERVAL_800M,
            5: WorkoutType.EASY_RUN,
            6: WorkoutType.LONG_RUN,
        },
        intensity=WeekIntensity.HARD,
    ),
    WeekTemplate(
        id="recovery",
        name="Recovery Week",
        description="Light training for recovery and adaptation",
        workout_days=[3, 6],
        workout_types={3: WorkoutType.EASY_RUN, 6: WorkoutType.RECOVERY_RUN},
        intensity=WeekIntensity.RECOVERY,
    ),
    WeekTemplate(
        id="race",
        name="Race Week",
        description="Taper week leading to race day",
        workout_days=[2, 4, 7],
        workout_types={2: WorkoutType.EASY_RUN, 4: WorkoutType.EASY_RUN, 7: WorkoutType.MARATHON_RACE},
        intensity=WeekIntensity.RACE,
    ),
)

# Jaccard similarity a template must exceed to count as a match
TEMPLATE_MATCH_THRESHOLD = 0.5

CONSECUTIVE_HARD_WEEK_LIMIT = 3
CONSECUTIVE_HARD_WEEK_PENALTY = 15
HARD_WEEK_MIN_WORKOUTS = 3
RECOVERY_WEEK_MAX_WORKOUTS = 2
MIN_RECOVERY_WEEKS = 2
FEW_RECOVERY_WEEKS_PENALTY = 10
RACE_WEEK_HARD_PENALTY = 20


def template_to_assignments(template: WeekTemplate) -> list[WorkoutAssignment]:
    """Expand a template into per-day assignments.

    Raises:
        ValidationError: If a template day has no workout type
    """
    assignments = []
    for day in sorted(template.workout_days):
        workout_type = template.workout_types.get(day)
        if workout_type is None:
            raise ValidationError(f"No workout type defined for day {day} in template {template.id}", field="workout_types")
        assignments.append(
            WorkoutAssignment(
                day_of_week=day,
                workout_type=workout_type,
                priority=1 if is_long_run_type(workout_type) else 2,
                is_optimal=True,
            )
        )
    return assignments


def get_templates_by_intensity(intensity: WeekIntensity | str) -> list[WeekTemplate]:
    return [template for template in DEFAULT_TEMPLATES if template.intensity == intensity]


def calculate_template_match_score(workout_days: Iterable[int], template_days: Iterable[int]) -> float:
    """Jaccard similarity of two weekday sets (0..1)."""
    workout_set, template_set = set(workout_days), set(template_days)
    union = workout_set | template_set
    if not union:
        return 0.0
    return len(workout_set & template_set) / len(union)


def find_best_matching_template(workout_days: Iterable[int]) -> WeekTemplate | None:
    """Default template closest to the given days, if similar enough."""
    days = list(workout_days)
    best_match: WeekTemplate | None = None
    best_score = -1.0
    for template in DEFAULT_TEMPLATES:
        score = calculate_template_match_score(days, template.workout_days)
        if score > best_score:
            best_score = score
            best_match = template
    return best_match if best_score > TEMPLATE_MATCH_THRESHOLD else None


def compare_week_days(week_number: int, default_days: list[int], override_days: list[int]) -> WeekComparison:
    """Compare a week's default workout days with an override.

    Impact is the share of changed days scaled to 0-10, measured against
    at least a full week.
    """
    default_set, override_set = set(default_days), set(override_days)
    added = [day for day in override_days if day not in default_set]
    removed = [day for day in default_days if day not in override_set]
    unchanged = [day for day in default_days if day in override_set]

    max_possible_changes = max(len(default_days), len(override_days), 7)
    impact_score = round_half_up((len(added) + len(removed)) / max_possible_changes * 10)

    return WeekComparison(
        week_number=week_number,
        default_days=list(default_days),
        override_days=list(override_days),
        differences=WeekDifferences(added=added, removed=removed, unchanged=unchanged),
        impact_score=min(impact_score, 10),
    )


def validate_bulk_operation(
    operation: BulkOperation,
    total_weeks: int = TOTAL_WEEKS,
    existing_overrides: Mapping[int, list[int]] | None = None,
) -> BulkOperationValidation:
    """Check a bulk operation before running it.

    Args:
        operation: Operation to check
        total_weeks: Number of weeks in the plan
        existing_overrides: Current workout-day overrides by week

    Returns:
        Validation result with blocking errors and non-blocking warnings
    """
    existing_overrides = existing_overrides or {}
    errors: list[str] = []
    warnings: list[str] = []

    invalid_weeks = [week for week in operation.target_weeks if not 1 <= week <= total_weeks]
    if invalid_weeks:
        errors.append(f"Invalid week numbers: {', '.join(str(week) for week in invalid_weeks)}")

    if operation.type == "copy":
        if operation.source_week is None:
            errors.append("Source week is required for copy operations")
        elif not 1 <= operation.source_week <= total_weeks:
            errors.append(f"Invalid source week: {operation.source_week}")

    if operation.type == "apply_template" and operation.template is None:
        errors.append("Template is required for apply_template operations")

    affected_weeks = [week for week in operation.target_weeks if existing_overrides.get(week)]
    if affected_weeks:
        warnings.append(
            f"This will overwrite existing customizations for weeks: {', '.join(str(week) for week in affected_weeks)}"
        )

    if total_weeks in operation.target_weeks:
        warnings.append("Modifying race week schedule - ensure this aligns with your race strategy")

    return BulkOperationValidation(is_valid=not errors, errors=errors, warnings=warnings)


def execute_bulk_operation(
    operation: BulkOperation,
    default_workout_days: list[int],
    existing_overrides: Mapping[int, list[int]] | None = None,
) -> dict[int, list[int]]:
    """Apply a bulk operation to workout-day overrides.

    Returns:
        New overrides mapping; the input mapping is left untouched
    """
    overrides = {week: list(days) for week, days in (existing_overrides or {}).items()}

    if operation.type == "copy" and operation.source_week is not None:
        source_days = overrides.get(operation.source_week) or default_workout_days
        for week in operation.target_weeks:
            overrides[week] = list(source_days)
    elif operation.type == "reset":
        for week in operation.target_weeks:
            overrides.pop(week, None)
    elif operation.type == "apply_template" and operation.template is not None:
        for week in operation.target_weeks:
            overrides[week] = list(operation.template.workout_days)

    logger.debug(f"Executed bulk {operation.type} on weeks {operation.target_weeks}")
    return overrides


def generate_week_suggestions(week_number: int, current_days: list[int], total_weeks: int = TOTAL_WEEKS) -> list[str]:
    """Suggestions for one week's workout days, based on its place in the plan."""
    suggestions: list[str] = []

    if week_number == total_weeks:
        suggestions.append("Consider reducing to 2 easy workouts for race week taper")
        if len(current_days) > 2:
            suggestions.append("Race week typically benefits from minimal training volume")

    if total_weeks - 4 <= week_number <= total_weeks - 2 and len(current_days) < 3:
        suggestions.append("Peak training weeks typically benefit from 3-4 workouts")

    if week_number <= 4 and len(current_days) > 3:
        suggestions.append("Consider starting with 3 workouts per week to build base fitness")

    if len(current_days) >= 3 and not any(day in WEEKEND_DAYS for day in current_days):
        suggestions.append("Consider adding a weekend day for long runs")

    days = sorted(current_days)
    if any(days[i + 1] == days[i] + 1 and days[i + 2] == days[i] + 2 for i in range(len(days) - 2)):
        suggestions.append("Avoid 3+ consecutive workout days for better recovery")

    return suggestions


def _new_template_id() -> str:
    return f"custom_{uuid.uuid4().hex}"


def build_custom_template(
    name: str,
    description: str,
    workout_days: list[int],
    intensity: WeekIntensity = WeekIntensity.MODERATE,
) -> WeekTemplate:
    """Build a template from workout days alone.

    Weekend days get long runs and weekdays get easy runs.
    """
    days = validate_workout_days(workout_days)
    workout_types = {
        day: WorkoutType.LONG_RUN if day in WEEKEND_DAYS else WorkoutType.EASY_RUN
        for day in days
    }
    return WeekTemplate(
        id=_new_template_id(),
        name=name,
        description=description,
        workout_days=days,
        workout_types=workout_types,
        intensity=intensity,
    )


class WeekTemplateManager:
    """Per-week overrides of the default weekly pattern.

    Args:
        store: Caller-owned store the manager loads from and saves to
    """

    def __init__(self, store: WeekCustomizationStore):
        self.store = store
        self._state: WeekCustomizationState = store.load()

    def _draft(self) -> WeekCustomizationState:
        return self._state.model_copy(deep=True)

    def _commit(self, state: WeekCustomizationState) -> None:
        # In-memory state only advances once the store has accepted it
        self.store.save(state)
        self._state = state

    def get_available_templates(self) -> list[WeekTemplate]:
        return [*DEFAULT_TEMPLATES, *self._state.custom_templates]

    def get_template(self, template_id: str) -> WeekTemplate | None:
        return next((template for template in self.get_available_templates() if template.id == template_id), None)

    def apply_template_to_week(self, week_number: int, template_id: str) -> WeekCustomization:
        """Override a week with a template.

        Raises:
            ValidationError: If the week is invalid or the template is unknown
        """
        validate_week(week_number)
        template = self.get_template(template_id)
        if template is None:
            raise ValidationError(f"Template {template_id} not found", field="template_id")

        customization = WeekCustomization(
            week_number=week_number,
            template_id=template_id,
            notes=f"Applied {template.name} template",
        )
        state = self._draft()
        state.customizations[week_number] = customization
        self._commit(state)
        logger.info(f"Applied template {template_id} to week {week_number}")
        return customization

    def apply_custom_assignments(self, week_number: int, assignments: list[WorkoutAssignment]) -> WeekCustomization:
        validate_week(week_number)
        customization = WeekCustomization(
            week_number=week_number,
            custom_assignments=list(assignments),
            notes="Custom workout assignments",
        )
        state = self._draft()
        state.customizations[week_number] = customization
        self._commit(state)
        logger.info(f"Applied {len(assignments)} custom assignments to week {week_number}")
        return customization

    def copy_week_to_others(self, source_week: int, target_weeks: list[int]) -> list[WeekCustomization]:
        """Copy a week's customization to other weeks.

        Raises:
            ValidationError: If a week is invalid or the source is not customized
        """
        validate_week(source_week)
        for week in target_weeks:
            validate_week(week)
        source = self._state.customizations.get(source_week)
        if source is None:
            raise ValidationError(f"Week {source_week} has no customization to copy", field="source_week")

        state = self._draft()
        copies = []
        for week in target_weeks:
            copy = source.model_copy(
                update={"week_number": week, "notes": f"Copied from week {source_week}"},
                deep=True,
            )
            state.customizations[week] = copy
            copies.append(copy)
        self._commit(state)
        logger.info(f"Copied week {source_week} customization to weeks {target_weeks}")
        return copies

    def reset_weeks_to_default(self, week_numbers: list[int]) -> None:
        for week in week_numbers:
            validate_week(week)
        state = self._draft()
        for week in week_numbers:
            state.customizations.pop(week, None)
        self._commit(state)
        logger.info(f"Reset weeks {week_numbers} to default")

    def get_week_customization(self, week_number: int) -> WeekCustomization | None:
        return self._state.customizations.get(week_number)

    def get_customized_weeks(self) -> list[WeekCustomization]:
        return [self._state.customizations[week] for week in sorted(self._state.customizations)]

    def get_effective_assignments(self, week_number: int) -> list[WorkoutAssignment]:
        """Assignments in force for a week: custom, then template, then the default template."""
        validate_week(week_number)
        customization = self._state.customizations.get(week_number)
        if customization is not None:
            if customization.custom_assignments is not None:
                return list(customization.custom_assignments)
            if customization.template_id:
                template = self.get_template(customization.template_id)
                if template is not None:
                    return template_to_assignments(template)
                logger.warning(
                    f"Week {week_number} references missing template {customization.template_id}; using default"
                )
        default = self.get_template(DEFAULT_TEMPLATE_ID)
        return template_to_assignments(default) if default else []

    def compare_weeks(self, week1: int, week2: int) -> WeekComparison:
        """Compare the effective workout days of two weeks."""
        days1 = sorted(assignment.day_of_week for assignment in self.get_effective_assignments(week1))
        days2 = sorted(assignment.day_of_week for assignment in self.get_effective_assignments(week2))
        return compare_week_days(week2, days1, days2)

    def detect_adjacent_week_conflicts(self, week_number: int) -> list[str]:
        """Hard Sunday followed by hard Monday across a week boundary."""
        validate_week(week_number)
        conflicts = []
        if week_number > 1 and self._hard_on(week_number - 1, 7) and self._hard_on(week_number, 1):
            conflicts.append(
                f"Back-to-back hard workouts: Week {week_number - 1} Sunday and Week {week_number} Monday"
            )
        if week_number < TOTAL_WEEKS and self._hard_on(week_number, 7) and self._hard_on(week_number + 1, 1):
            conflicts.append(
                f"Back-to-back hard workouts: Week {week_number} Sunday and Week {week_number + 1} Monday"
            )
        return conflicts

    def _hard_on(self, week_number: int, day: int) -> bool:
        return any(
            assignment.day_of_week == day and is_high_intensity(assignment.workout_type)
            for assignment in self.get_effective_assignments(week_number)
        )

    def create_custom_template(
        self,
        name: str,
        description: str,
        workout_days: list[int],
        workout_types: Mapping[int, WorkoutType],
        intensity: WeekIntensity = WeekIntensity.MODERATE,
    ) -> WeekTemplate:
        """Create and store a custom template.

        Raises:
            ValidationError: If days are invalid or a day has no workout type
        """
        days = validate_workout_days(workout_days)
        missing = [day for day in days if day not in workout_types]
        if missing:
            raise ValidationError(f"No workout type defined for days {missing}", field="workout_types")

        template = WeekTemplate(
            id=_new_template_id(),
            name=name,
            description=description,
            workout_days=days,
            workout_types={day: workout_types[day] for day in days},
            intensity=intensity,
        )
        state = self._draft()
        state.custom_templates.append(template)
        self._commit(state)
        logger.info(f"Created custom template {template.id} ({name})")
        return template

    def delete_custom_template(self, template_id: str) -> bool:
        """Delete a custom template; default templates cannot be deleted."""
        remaining = [template for template in self._state.custom_templates if template.id != template_id]
        if len(remaining) == len(self._state.custom_templates):
            return False
        state = self._draft()
        state.custom_templates = remaining
        self._commit(state)
        logger.info(f"Deleted custom template {template_id}")
        return True

    def get_training_plan_consistency(self) -> ConsistencyReport:
        """Score how well the customized weeks hang together across the plan."""
        score = 100
        issues: list[str] = []

        consecutive_hard_weeks = 0
        for week in WEEKS:
            hard = sum(1 for assignment in self.get_effective_assignments(week) if is_high_intensity(assignment.workout_type))
            if hard >= HARD_WEEK_MIN_WORKOUTS:
                consecutive_hard_weeks += 1
                if consecutive_hard_weeks >= CONSECUTIVE_HARD_WEEK_LIMIT:
                    score -= CONSECUTIVE_HARD_WEEK_PENALTY
                    issues.append(f"Too many consecutive hard weeks (weeks {week - 2}-{week})")
            else:
                consecutive_hard_weeks = 0

        recovery_weeks = [
            week for week in WEEKS if len(self.get_effective_assignments(week)) <= RECOVERY_WEEK_MAX_WORKOUTS
        ]
        if len(recovery_weeks) < MIN_RECOVERY_WEEKS:
            score -= FEW_RECOVERY_WEEKS_PENALTY
            issues.append("Consider adding more recovery weeks")

        race_week_hard = sum(
            1
            for assignment in self.get_effective_assignments(RACE_WEEK)
            if is_high_intensity(assignment.workout_type) and assignment.workout_type != WorkoutType.MARATHON_RACE
        )
        if race_week_hard > 1:
            score -= RACE_WEEK_HARD_PENALTY
            issues.append("Race week should have minimal hard workouts before the marathon")

        return ConsistencyReport(score=max(0, min(100, score)), issues=issues)
