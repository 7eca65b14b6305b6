"""
Logging configuration module.

The package logs through loguru but stays silent until the application opts
in: ``esendex/__init__.py`` disables the ``esendex`` namespace and
``setup_logging`` enables it again alongside the sinks it installs.
"""

import sys
from typing import Optional

from loguru import logger

PACKAGE = "esendex"

DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(
    level: str = "INFO",
    format: str = DEFAULT_FORMAT,
    log_file: Optional[str] = None,
    replace_sinks: bool = True,
) -> None:
    """
    Enable client logging and install loguru sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log message format
        log_file: Optional file path to write logs (rotated at 10 MB)
        replace_sinks: Remove existing sinks first. Pass False when the
            application already configured loguru and only wants the
            client's messages added to it.
    """
    if replace_sinks:
        logger.remove()

    only_client = None if replace_sinks else (lambda record: record["name"].startswith(PACKAGE))

    logger.add(
        sys.stderr,
        format=format,
        level=level,
        colorize=True,
        filter=only_client,
    )

    if log_file:
        logger.add(
            log_file,
            format=format,
            level=level,
            rotation="10 MB",
            retention="7 days",
            filter=only_client,
        )

    logger.enable(PACKAGE)
    logger.debug(f"Esendex client logging enabled at level {level}")


def disable_logging() -> None:
    """Silence the client's log messages without touching sinks."""
    logger.disable(PACKAGE)
