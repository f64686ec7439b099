"""
Centralized logging for the i18nsupport package.

Provides consistent logging across all modules with output to:
- Console (stdout, level from I18NSUPPORT_LOG_LEVEL, default WARNING)
- File (only if I18NSUPPORT_LOG_FILE names one)
"""
import logging
import os
import sys

LOG_FILE_ENV = "I18NSUPPORT_LOG_FILE"
LOG_LEVEL_ENV = "I18NSUPPORT_LOG_LEVEL"

# Formatter with timestamp, level, module, and message
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s() | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_level() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    return getattr(logging, level_name, logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Returns a configured logger instance.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        A logging.Logger instance configured for console (and optional file) output.
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    log_file = os.environ.get(LOG_FILE_ENV)
    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(_console_level())
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # handlers are attached per module, don't duplicate through the root logger
    logger.propagate = False

    return logger
