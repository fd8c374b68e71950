"""
Initialization - Logging Module.

Configures loguru logger for scripts and services.
Sets up stderr output plus optional file rotation and retention.
"""

import sys

from loguru import logger


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logger with stderr sink and optional rotating file."""
    logger.remove()
    logger.add(sys.stderr, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            level=level,
            encoding="utf-8",
        )
