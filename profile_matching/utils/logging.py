"""Logging configuration for profile-matching."""

import logging
import sys

# Logger name for the library
LOGGER_NAME = "profile_matching"

# Default log format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Track if logging has been configured
_configured = False


def configure_logging(
    level: str | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
) -> logging.Logger:
    """Configure and return the main library logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to INFO if not specified.
        format_string: Format string for log messages.
        date_format: Format string for timestamps.

    Returns:
        The configured root library logger.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)

    if level is None:
        level = "INFO"
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Only add handlers if not already configured
    if not _configured:
        logger.handlers.clear()

        formatter = logging.Formatter(format_string, datefmt=date_format)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        # Prevent propagation to root logger
        logger.propagate = False

        _configured = True
    else:
        for handler in logger.handlers:
            handler.setLevel(log_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific module.

    Args:
        name: The module name (will be prefixed with 'profile_matching.').

    Returns:
        A child logger for the module.
    """
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Reset logging configuration (useful for testing)."""
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

    _configured = False
