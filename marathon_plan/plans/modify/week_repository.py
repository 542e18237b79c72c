"""Stores for week customizations.

The template manager never keeps ambient global state. Callers own a store
and pass it in; the manager loads from it once and saves after every change,
adopting the new state only once the save succeeds.
"""

import json
from pathlib import Path
from typing import Protocol

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from marathon_plan.plans.modify.week_types import WeekCustomizationState


class WeekCustomizationStore(Protocol):
    """Load/save interface for week customization state."""

    def load(self) -> WeekCustomizationState: ...

    def save(self, state: WeekCustomizationState) -> None: ...


class InMemoryWeekCustomizationStore:
    """Store that keeps state in the object itself."""

    def __init__(self, state: WeekCustomizationState | None = None):
        self._state = state.model_copy(deep=True) if state else WeekCustomizationState()

    def load(self) -> WeekCustomizationState:
        return self._state.model_copy(deep=True)

    def save(self, state: WeekCustomizationState) -> None:
        self._state = state.model_copy(deep=True)


class JsonFileWeekCustomizationStore:
    """Store backed by a JSON file.

    A missing file loads as empty state. A corrupt file is logged and also
    loads as empty state, so a bad file never blocks plan editing.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> WeekCustomizationState:
        if not self.path.exists():
            return WeekCustomizationState()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return WeekCustomizationState.model_validate(data)
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning(f"Failed to load week customizations from {self.path}: {e}")
            return WeekCustomizationState()

    def save(self, state: WeekCustomizationState) -> None:
        """Write the state beside the target, then rename it over the target.

        A failed write leaves the previous file untouched.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            tmp_path.write_text(json.dumps(state.model_dump(mode="json"), indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Saved {len(state.customizations)} week customizations to {self.path}")
