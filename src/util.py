#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

# Standard library imports
import logging
import os
from datetime import date
from logging.handlers import RotatingFileHandler

# Local application imports
import constants as const


# Module-level logger
logger = logging.getLogger(__name__)


def setup_logger(name: str | None = None, level: str | None = None, console: bool = True, log_file: str | None = None) -> logging.Logger:
    """
    Setup a logger with file and optional console output.

    Args:
        name: Logger name (use __name__ from calling module). If None, configures root logger.
        level: Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO or env LOG_LEVEL.
        console: Whether to also log to console (default True for main apps)
        log_file: Custom log filename (defaults to const.LOG_FILE)

    Returns:
        logging.Logger: Configured logger instance

    Example:
        # For application entry point (cli.py):
        util.setup_logger(name=None, level='INFO', console=True, log_file=const.CLI_LOG_FILE)
        logger = logging.getLogger(__name__)

        # For library modules:
        logger = util.get_logger(__name__)
    """
    # Determine log level from parameter, environment, or default to INFO
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # Get or create logger
    logger = logging.getLogger(name) if name else logging.getLogger()

    # Avoid duplicate handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(numeric_level)

    # Include logger name and module info for better tracking
    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%H:%M:%S"
    )

    log_filename = log_file if log_file else const.LOG_FILE

    # File handler with rotation (don't delete on startup)
    file_handler = RotatingFileHandler(
        filename=log_filename,
        maxBytes=const.MAX_LOG_SIZE,
        backupCount=const.BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setFormatter(detailed_formatter)
    file_handler.setLevel(logging.DEBUG)  # Capture everything to file
    logger.addHandler(file_handler)

    # Console handler (optional, with less verbose format)
    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(numeric_level)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module-specific logger. This is the standard way to get loggers in library modules.

    Args:
        name: Use __name__ from the calling module

    Returns:
        logging.Logger: Logger instance for the module
    """
    return logging.getLogger(name)


def set_log_level(level: str) -> None:
    """
    Dynamically change log level for all loggers.

    Args:
        level: Log level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Example:
        util.set_log_level('DEBUG')  # Enable debug logging
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Update console handlers to new level (keep file at DEBUG)
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(numeric_level)


def to_db_date(d: date | None) -> str | None:
    """Format a date as YYYY-MM-DD, None stays None"""
    if d is None:
        return None
    return d.strftime(const.DB_DATE_FORMAT)
