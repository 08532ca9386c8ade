"""Logging configuration"""

import logging.config
from typing import Optional

from splitt.config import Settings, get_settings


def build_logging_config(settings: Settings) -> dict:
    """
    Build a dictConfig mapping for the engine loggers.

    Args:
        settings: Settings providing the log level

    Returns:
        Mapping accepted by logging.config.dictConfig
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "{levelname} {asctime} {name} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "verbose",
            },
        },
        "loggers": {
            "splitt": {
                "handlers": ["console"],
                "level": settings.log_level,
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure the ``splitt`` logger hierarchy from settings"""
    logging.config.dictConfig(build_logging_config(settings or get_settings()))
