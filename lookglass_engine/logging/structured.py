"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

Structured logger that outputs one JSON object per record.

Design:
- JSON output (one line per record, greppable with jq)
- Wraps Python's logging module (levels, handlers, propagation)
- Contextual metadata (level_id, bounce counts, etc.)
- Type-safe events (LogEvent enum)

Example:
    >>> logger = StructuredLogger(component="tracer")
    >>> logger.debug(
    ...     event=LogEvent.TRACE_COMPLETED,
    ...     message="Traced sight-line",
    ...     metadata={'bounces': 2, 'termination': 'hit_item'}
    ... )

Output:
    {
        "timestamp": "2026-10-16T15:30:45.123456+00:00",
        "level": "DEBUG",
        "component": "tracer",
        "event": "trace.completed",
        "message": "Traced sight-line",
        "metadata": {"bounces": 2, "termination": "hit_item"}
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .events import LogEvent


class StructuredLogger:
    """
    JSON structured logger.

    Wraps Python's logging module with structured metadata support.
    The level check happens before the JSON payload is built, so DEBUG
    records on hot paths cost nothing when DEBUG is off.

    Attributes:
        component: Component name (e.g., "tracer", "session")
        logger: Underlying Python logger instance
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "tracer")
            level: Logging level (default: INFO)
            logger_name: Custom logger name (default: lookglass.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"lookglass.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        # Configure JSON formatter if not already configured
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[Exception] = None
    ) -> None:
        """
        Internal log method with structured format.

        Args:
            level: Log level name (DEBUG, INFO, WARNING)
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception summarized under "exception"
        """
        log_level = getattr(logging, level)
        if not self.logger.isEnabledFor(log_level):
            return

        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        self.logger.log(log_level, json.dumps(log_entry, default=str))

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message."""
        self._log('DEBUG', event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log INFO level message.

        Example:
            >>> logger.info(
            ...     event=LogEvent.LEVEL_LOADED,
            ...     message="Loaded level",
            ...     metadata={'level_id': 'first_reflection'}
            ... )
        """
        self._log('INFO', event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[Exception] = None
    ) -> None:
        """
        Log WARNING level message.

        Example:
            >>> logger.warning(
            ...     event=LogEvent.TRACE_LOOP_GUARD,
            ...     message="Bounce cap reached",
            ...     metadata={'max_bounces': 64}
            ... )
        """
        self._log('WARNING', event, message, metadata, exc_info)


class JSONFormatter(logging.Formatter):
    """
    Pass-through formatter for records produced by StructuredLogger.

    The message is already a JSON document.
    """

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(
    component: str,
    level: int = logging.INFO
) -> StructuredLogger:
    """
    Factory function to create configured StructuredLogger.

    Args:
        component: Component identifier
        level: Logging level (default: INFO)

    Returns:
        Configured StructuredLogger instance

    Example:
        >>> logger = create_logger("tracer", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
