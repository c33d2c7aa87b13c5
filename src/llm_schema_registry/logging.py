"""Logging utilities for the schema registry.

This module provides standardized logging functionality for registry operations.
"""

import logging
from enum import Enum
from typing import Any, Dict

LOGGER_NAME = "llm_schema_registry"

# Library code never configures handlers; applications do.
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class LogLevel(int, Enum):
    """Log levels for the registry."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for registry logging."""

    SCHEMA_REGISTRY = "schema_registry"
    SCHEMA_REPO = "schema_repo"
    SCHEMA_FILTER = "schema_filter"
    CONFIGURATION = "configuration"


def get_logger(name: str) -> logging.Logger:
    """Return a child logger of the package logger.

    Args:
        name: Module-level name, e.g. ``"registry"``

    Returns:
        Logger named ``llm_schema_registry.<name>``
    """
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


_logger = get_logger("events")


def _emit(level: LogLevel, event: LogEvent, message: str, data: Dict[str, Any]) -> None:
    _logger.log(level, message, extra={"event": event.value, "data": data})


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level registry event."""
    _emit(LogLevel.DEBUG, event, message, data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level registry event."""
    _emit(LogLevel.INFO, event, message, data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level registry event."""
    _emit(LogLevel.WARNING, event, message, data)
