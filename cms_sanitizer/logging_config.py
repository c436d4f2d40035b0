"""Centralized logging configuration for the CMS sanitizer."""

import logging
import sys
from typing import Optional

from cms_sanitizer.config import get_log_level

LOGGER_NAME = "cms_sanitizer"


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure and return the package logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    if logger.handlers:
        return logger

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Prevent duplicate logs
    logger.propagate = False

    return logger


def get_logger() -> logging.Logger:
    """Get the package logger instance."""
    return logging.getLogger(LOGGER_NAME)


def log_sanitization_event(
    event_type: str,
    extra_data: Optional[dict] = None,
    level: int = logging.DEBUG,
) -> None:
    """Log a summary of what a sanitizer call changed.

    Args:
        event_type: Type of event (content_sanitized, fallback_to_text)
        extra_data: Optional counts or sizes to include
        level: Logging level for the record
    """
    logger = get_logger()

    log_data = {"event_type": event_type}

    if extra_data:
        log_data.update(extra_data)

    logger.log(level, f"Sanitization event: {log_data}")


# Initialize logging on import
setup_logging(get_log_level())
