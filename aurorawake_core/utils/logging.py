"""
Logging configuration for aurorawake-core.

Provides structured logging using structlog. Every module obtains its
logger through :func:`get_logger`; the host application decides once,
through :func:`setup_logging` or :func:`setup_logging_from_config`, how
records are rendered.
"""

import logging
import sys
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

if TYPE_CHECKING:
    from aurorawake_core.models.alarm import Alarm
    from aurorawake_core.models.config import AuroraConfig

Processor = Any


def render_datetimes(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Render datetime values as ISO 8601 strings.

    Ring times are timezone-aware; rendering them early keeps the offset
    visible in both console and JSON output.
    """
    for key, value in event_dict.items():
        if isinstance(value, (datetime, date)):
            event_dict[key] = value.isoformat()
    return event_dict


def _build_processors(format_type: str) -> List[Processor]:
    shared: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        render_datetimes,
    ]

    if format_type == "json":
        return shared + [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    return shared + [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def setup_logging(
    level: str = "INFO",
    format_type: str = "text",
    log_file: Optional[str] = None,
) -> None:
    """
    Configure structured logging for the scheduling engine.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Format type ("text" or "json")
        log_file: Optional log file path for stdlib loggers

    Example:
        >>> setup_logging(level="DEBUG", format_type="json")
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=numeric_level, format="%(message)s", stream=sys.stdout)

    structlog.configure(
        processors=_build_processors(format_type.lower()),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if log_file:
        handler = logging.FileHandler(log_file)
        handler.setLevel(numeric_level)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logging.getLogger().addHandler(handler)


def setup_logging_from_config(config: "AuroraConfig", log_file: Optional[str] = None) -> None:
    """Apply the log level and format carried by a loaded configuration."""
    setup_logging(level=config.log_level, format_type=config.log_format, log_file=log_file)


def get_logger(name: str, **initial_values: Any) -> structlog.BoundLogger:
    """
    Get a logger instance with optional initial context.

    Args:
        name: Logger name (usually __name__)
        **initial_values: Initial context values to bind

    Returns:
        Configured logger instance

    Example:
        >>> logger = get_logger(__name__, component="store")
        >>> logger.info("alarm_created", alarm_id="alarm_123")
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def log_alarm(alarm: "Alarm") -> Dict[str, Any]:
    """
    Scheduling state of an alarm as log fields.

    Example:
        >>> logger.info("alarm_snoozed", **log_alarm(snoozed))
    """
    return {
        "alarm_id": alarm.id,
        "active": alarm.active,
        "next_ring_time": alarm.next_ring_time,
        "armed": alarm.notification_id is not None,
    }


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Create a structured log entry for errors.

    Args:
        error: Exception instance
        context: Additional context

    Returns:
        Dict with structured error data

    Example:
        >>> try:
        ...     await persistence.save_all(alarms)
        ... except Exception as e:
        ...     logger.error("save_failed", **log_error(e, {"count": len(alarms)}))
    """
    error_data: Dict[str, Any] = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_data["context"] = context

    return error_data
