"""Logging setup for the code explainer."""

from __future__ import annotations

import logging

from code_explainer.core.config import get_settings

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def resolve_level(name: str) -> int:
    """Map a level name to its number, falling back to INFO for unknown names."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: str | None = None) -> None:
    """Attach a stream handler to the package logger once per process."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (level or get_settings().log_level).upper()
    resolved = resolve_level(level_name)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("code_explainer")
    logger.setLevel(resolved)
    logger.addHandler(handler)

    _CONFIGURED = True
    logger.debug("Logging initialized at %s", level_name)
