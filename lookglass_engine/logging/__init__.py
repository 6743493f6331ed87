"""
Structured Logging for lookglass
================================

Bounded Context: Observability

JSON-structured logging for the engine and its consumers.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from lookglass_engine.logging import StructuredLogger, LogEvent
    >>> logger = StructuredLogger(component="levels")
    >>> logger.info(
    ...     event=LogEvent.LEVEL_LOADED,
    ...     message="Loaded level",
    ...     metadata={'level_id': 'first_reflection', 'items': 3}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
