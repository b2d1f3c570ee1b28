"""Logging utilities for ts-interface-builder."""

import logging
import sys
from pathlib import Path
from typing import TextIO

PACKAGE_LOGGER = "ts_interface_builder"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: str = "WARNING",
    log_file: str | None = None,
    format_string: str | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Set up a logger with a console handler and an optional file handler.

    Diagnostics go to stderr by default so that nothing interferes with
    generated output written to stdout.

    Args:
        name: Logger name (the package logger unless overridden)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        format_string: Optional custom format string
        stream: Console stream, stderr when omitted

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Re-running setup replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger by name.

    Args:
        name: Logger name, usually the calling module's ``__name__``

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
