from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    default_goal_marathon_time: str = Field(
        default="04:00:00",
        validation_alias="DEFAULT_GOAL_MARATHON_TIME",
        description="Goal finish time used when a plan is requested without one (H:MM:SS)",
    )
    default_workout_days: list[int] = Field(
        default=[2, 4, 6],
        validation_alias="DEFAULT_WORKOUT_DAYS",
        description="Weekdays (1=Monday..7=Sunday) used when preferences carry none",
    )

    # Race-day metadata attached to the terminal workout of week 14
    race_start_time: str = Field(default="07:00", validation_alias="RACE_START_TIME")
    race_location: str = Field(default="TBD - Set in user preferences", validation_alias="RACE_LOCATION")
    race_instructions: str = Field(
        default="Marathon Race Day - Execute your race plan and trust your training!",
        validation_alias="RACE_INSTRUCTIONS",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("default_goal_marathon_time")
    @classmethod
    def validate_default_goal_marathon_time(cls, value: str) -> str:
        """Fall back to 04:00:00 when the configured goal is not H:MM:SS."""
        parts = value.split(":")
        if len(parts) != 3 or not all(part.isascii() and part.isdigit() for part in parts):
            logger.warning(f"Invalid DEFAULT_GOAL_MARATHON_TIME '{value}'. Expected H:MM:SS. Defaulting to 04:00:00.")
            return "04:00:00"
        return value

    @field_validator("default_workout_days")
    @classmethod
    def validate_default_workout_days(cls, value: list[int]) -> list[int]:
        """Ensure configured default workout days are valid weekday numbers."""
        cleaned = sorted({day for day in value if 1 <= day <= 7})
        if not cleaned or len(cleaned) != len(value):
            logger.warning(f"Invalid DEFAULT_WORKOUT_DAYS {value}. Days must be unique values 1-7. Defaulting to [2, 4, 6].")
            return [2, 4, 6]
        return cleaned

    @field_validator("race_start_time")
    @classmethod
    def validate_race_start_time(cls, value: str) -> str:
        """Validate that race start time is HH:MM."""
        parts = value.split(":")
        if len(parts) != 2 or not all(part.isascii() and part.isdigit() for part in parts):
            raise ValueError(f"RACE_START_TIME must be HH:MM, got '{value}'")
        hours, minutes = int(parts[0]), int(parts[1])
        if hours > 23 or minutes > 59:
            raise ValueError(f"RACE_START_TIME out of range: '{value}'")
        return f"{hours:02d}:{minutes:02d}"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
