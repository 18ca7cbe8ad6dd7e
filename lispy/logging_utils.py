"""Runtime logging helpers."""

from __future__ import annotations

import sys

from loguru import logger

from lispy.config import get_log_level

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_CONFIGURED_LEVEL: str | None = None


def configure_logging(level: str | None = None) -> None:
    """Configure process-level logging once per level.

    The level comes from the argument, else LISPY_LOG_LEVEL, else WARNING.
    Replaces loguru's default sink with a single stderr sink and enables the
    ``lispy`` logger, which the package disables on import.
    """
    global _CONFIGURED_LEVEL
    resolved = (level or get_log_level()).upper()
    if resolved == _CONFIGURED_LEVEL:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved,
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    logger.enable("lispy")
    _CONFIGURED_LEVEL = resolved
