"""Logging helpers for the multichain package."""

import logging

from multichain.core.config import Settings, get_settings

PACKAGE_LOGGER = "multichain"


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Apply the configured log level to the package logger.

    Handlers are left to the host application.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.log_level.upper())
    return logger
