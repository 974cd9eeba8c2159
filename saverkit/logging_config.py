"""Logging configuration helpers."""

from __future__ import annotations

import logging
import os
from logging.config import dictConfig

LOG_LEVEL_ENV = "SAVERKIT_LOG_LEVEL"


def resolve_level(verbose: bool = False) -> str:
    if verbose:
        return "DEBUG"
    level = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    return level if isinstance(logging.getLevelName(level), int) else "INFO"


def configure_logging(verbose: bool = False) -> None:
    """Send saverkit logs to stderr so stdout stays free for the tools' output."""

    level = resolve_level(verbose)
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                    "level": level,
                }
            },
            "root": {
                "handlers": ["console"],
                "level": level,
            },
        }
    )
