from __future__ import annotations

import logging
import sys

from .settings import settings

LOGGER_NAME = "permission_store"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the shared package logger; repeated calls only adjust the level."""
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(level or settings.log_level)
    return log


logger = setup_logging()


__all__ = ["LOGGER_NAME", "logger", "setup_logging"]
