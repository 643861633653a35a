"""Logging configuration for the queue service."""

import logging
from logging.config import dictConfig

from app.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings.

    Uvicorn keeps its own handlers; everything else, including the
    ``app.*`` module loggers, goes through the single stream handler.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": settings.log_format}},
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": level,
                }
            },
            "root": {"handlers": ["default"], "level": level},
            "loggers": {
                "sqlalchemy.engine": {"level": logging.WARNING},
                "sqlalchemy.pool": {"level": logging.WARNING},
            },
        }
    )
