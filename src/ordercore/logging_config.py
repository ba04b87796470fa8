"""loguru setup for the ordercore CLI.

Console records go to stderr.  Every record from DEBUG up is also
appended to the configured log file, one JSON object per line.
"""

from __future__ import annotations

import sys

from loguru import logger

from ordercore.config import Settings

_CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> {message}"


def configure_logging(settings: Settings, level: str | None = None) -> None:
    """Replace loguru's default handler with the ordercore sinks.

    ``level`` overrides ``settings.log_level`` for the console only.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.log_level).upper(),
        format=_CONSOLE_FORMAT,
    )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
    )
