"""
MD Compose - Logger Module

This module sets up logging for the application.
"""

import logging

from mdcompose.config import LOG_FORMAT, LOG_LEVEL, LOGGER_NAME


def setup_logger(
    log_level: int | None = None,
    log_format: str | None = None,
    logger_name: str | None = None,
) -> logging.Logger:
    """Set up and configure the application logger.

    Args:
        log_level: Logging level to use (default: config.LOG_LEVEL)
        log_format: Logging format string (default: config.LOG_FORMAT)
        logger_name: Name for the logger (default: config.LOGGER_NAME)

    Returns:
        A configured Logger instance
    """
    logging.basicConfig(level=log_level or LOG_LEVEL, format=log_format or LOG_FORMAT)

    configured = logging.getLogger(logger_name or LOGGER_NAME)
    if log_level is not None:
        configured.setLevel(log_level)
    return configured


# Shared logger instance
logger = setup_logger()
