"""
Module: logger.py
Description: Structured logging configuration for raincheck.

Configures structlog for JSON output so that delivery, requeue and
store-timeout events can be shipped to any log aggregator as structured
records.

Key Components:
- JSON output with timestamp and log level processors
- configure_logging() to apply a minimum level from settings
- get_logger() helper function

Dependencies: structlog, logging, datetime
"""

import logging

import structlog
from datetime import datetime, timezone


def _add_timestamp(logger, method_name, event_dict):
    event_dict["timestamp"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    """Record the structlog method name as an upper-case level field."""
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure structlog for JSON output at the given minimum level.

    Args:
        log_level: Standard logging level name (DEBUG, INFO, ...)
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    structlog.configure(
        processors=[
            _add_timestamp,
            _add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Rain check stored", queue_key="webhooks", rain_check_id="req_1")
        {"queue_key": "webhooks", "rain_check_id": "req_1", "event": "Rain check stored", "timestamp": "...", "level": "INFO"}
    """
    return structlog.get_logger(name)
