"""Logging setup for the service process."""

from __future__ import annotations

import logging.config

from .config import Settings

VERBOSE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
COMPACT_FORMAT = "time=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


def configure_logging(settings: Settings) -> None:
    verbose = settings.debug or settings.environment == "local"
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": VERBOSE_FORMAT if verbose else COMPACT_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "wallet_ledger": {"level": settings.log_level, "propagate": True},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
            "root": {"level": settings.log_level, "handlers": ["console"]},
        }
    )
