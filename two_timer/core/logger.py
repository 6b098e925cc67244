"""
Logging setup shared by every two_timer module.

Configuration comes from the environment the first time a logger is requested.
Handlers sit on the package logger only; per-module levels decide what reaches them.
"""

import logging
import os
import sys
from typing import Optional


LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

# Only the package logger is configured, never the root logger of the host application
PACKAGE_LOGGER = "two_timer"

_configured = False


def _level(name: str) -> int:
    try:
        return LOG_LEVELS[name.upper()]
    except KeyError:
        raise ValueError(f"unknown log level {name!r}, expected one of {', '.join(LOG_LEVELS)}") from None


def _qualify(module_name: str) -> str:
    """'english.parser.range_parser' and 'two_timer.english.parser.range_parser' name the same logger"""
    if module_name == PACKAGE_LOGGER or module_name.startswith(PACKAGE_LOGGER + "."):
        return module_name
    return f"{PACKAGE_LOGGER}.{module_name}"


def setup_logging(
    level: str = None,
    log_file: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT,
    console_output: bool = True,
):
    """
    Configure the package logger, once

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
               When None, TWO_TIMER_LOG_LEVEL is read, falling back to WARNING
        log_file: optional path of a file receiving the same records
        format_string: logging format string
        console_output: whether to log to stdout

    Raises:
        ValueError: if level is not a known level name
    """
    global _configured

    if _configured:
        return

    if level is None:
        level = os.environ.get("TWO_TIMER_LOG_LEVEL", "WARNING")
        if level.upper() not in LOG_LEVELS:
            level = "WARNING"

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_level(level))
    package_logger.handlers.clear()
    package_logger.propagate = False

    formatter = logging.Formatter(format_string)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger, configuring the package logger on first use

    Args:
        name: logger name, usually __name__

    Returns:
        logging.Logger: the logger
    """
    if not _configured:
        auto_setup()

    return logging.getLogger(name)


def set_module_log_level(module_name: str, level: str) -> logging.Logger:
    """
    Override the level of one part of the package, e.g. DEBUG for "english.parser.range_parser"

    Args:
        module_name: logger name, with or without the two_timer prefix
        level: level name

    Returns:
        logging.Logger: the logger that was changed

    Raises:
        ValueError: if level is not a known level name
    """
    logger = logging.getLogger(_qualify(module_name))
    logger.setLevel(_level(level))
    return logger


def disable_module_logging(module_name: str) -> logging.Logger:
    """Silence one part of the package, its submodules included"""
    logger = logging.getLogger(_qualify(module_name))
    logger.setLevel(logging.CRITICAL + 1)
    return logger


def auto_setup():
    """
    Configure logging from the environment

    Environment:
        TWO_TIMER_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
        TWO_TIMER_LOG_FILE: log file path
        TWO_TIMER_LOG_FORMAT: default or simple
    """
    log_file = os.environ.get("TWO_TIMER_LOG_FILE", None)
    log_format = os.environ.get("TWO_TIMER_LOG_FORMAT", "default")

    format_string = SIMPLE_FORMAT if log_format == "simple" else DEFAULT_FORMAT

    setup_logging(log_file=log_file, format_string=format_string)
