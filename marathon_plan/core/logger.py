"""Loguru sinks for applications embedding the marathon plan engine.

The engine only ever logs through ``loguru.logger``; it never installs sinks
itself. An application calls ``setup_logger`` once at startup, passing its
Settings (or relying on the module-level ones read from LOG_LEVEL / LOG_FILE).
"""

import sys
from pathlib import Path

from loguru import logger

from marathon_plan.config.settings import Settings
from marathon_plan.config.settings import settings as default_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def _add_file_sink(log_file: str, level: str, rotation: str, retention: str) -> int:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return logger.add(
        log_path,
        format=FILE_FORMAT,
        level=level,
        rotation=rotation,
        retention=retention,
        compression="zip",
        backtrace=True,
        diagnose=True,
    )


def setup_logger(
    settings: Settings | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> list[int]:
    """Replace loguru's sinks with a coloured stderr sink and an optional file sink.

    Args:
        settings: Source of LOG_LEVEL and LOG_FILE; the module-level settings
            when omitted
        rotation: File rotation trigger (e.g. "10 MB", "1 day")
        retention: How long rotated files are kept (e.g. "7 days")

    Returns:
        Handler ids of the sinks added, for ``logger.remove``
    """
    settings = settings or default_settings
    level = settings.log_level

    logger.remove()
    handler_ids = [logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)]
    if settings.log_file:
        handler_ids.append(_add_file_sink(settings.log_file, level, rotation, retention))

    destination = f"stderr and {settings.log_file}" if settings.log_file else "stderr"
    logger.info(f"Plan engine logging to {destination} at level={level}")
    return handler_ids
