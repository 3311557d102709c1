"""Logging configuration for the net worth service."""

import logging
import sys
from typing import Optional

from networth.config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Loggers that stay at WARNING unless the service runs at DEBUG
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access")


def resolve_level(level_name: Optional[str] = None) -> int:
    """Map a level name (default: settings.log_level) to a logging level, INFO if unknown."""
    name = (level_name or get_settings().log_level).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level_name: Optional[str] = None) -> None:
    """Configure stdout logging for the networth package."""
    level = resolve_level(level_name)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("networth").setLevel(level)

    noisy_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)
