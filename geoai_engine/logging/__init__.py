"""
Structured Logging for the GeoAI engine
=======================================

Bounded Context: Observability

JSON-structured logging with typed events.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function
    set_engine_level: Change the level of all engine loggers

Example:
    >>> from geoai_engine.logging import create_logger, LogEvent
    >>> logger = create_logger("dispatcher")
    >>> logger.info(
    ...     event=LogEvent.OPERATION_COMPLETED,
    ...     message="within returned 2 features",
    ...     metadata={'op': 'within', 'count': 2}
    ... )

Output:
    {
        "timestamp": "2026-10-19T15:30:45.123456",
        "level": "INFO",
        "component": "dispatcher",
        "event": "operation.completed",
        "message": "within returned 2 features",
        "metadata": {"op": "within", "count": 2}
    }
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger, set_engine_level

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
    'set_engine_level',
]
