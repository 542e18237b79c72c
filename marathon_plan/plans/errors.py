"""Training plan error types.

All user-correctable input problems raised by the engine derive from
TrainingPlanError so callers can catch a single type and present the
message back to the user.

- ValidationError: malformed goal time, week outside 1..14, bad weekday set,
  missing start date or preferences
- SchedulingError: no workout weekday within 7 days of the race date
"""


class TrainingPlanError(ValueError):
    """Base error for training plan generation.

    Attributes:
        message: Human readable description of the problem
        field: Optional name of the offending input
    """

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class ValidationError(TrainingPlanError):
    """Raised when an input does not have the expected shape."""


class SchedulingError(TrainingPlanError):
    """Raised when inputs are well formed but cannot be placed on the calendar."""
