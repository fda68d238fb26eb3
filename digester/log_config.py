"""Logging configuration for command-line use of the digester."""

from __future__ import annotations

import logging.config
import os
from typing import Any, Dict, Optional

LOG_LEVEL_ENV_VAR = "DIGESTER_LOG_LEVEL"


def build_logging(level: Optional[str] = None) -> Dict[str, Any]:
    log_level = (level or os.getenv(LOG_LEVEL_ENV_VAR, "INFO")).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "plain",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
        "loggers": {
            "digester": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the console logging setup; ``level`` overrides ``DIGESTER_LOG_LEVEL``."""

    logging.config.dictConfig(build_logging(level))
