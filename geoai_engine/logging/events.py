"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the spatial operation engine.

Event Naming Convention:
    <component>.<action>

    component: operation, unit, partition, buffer, config
    action: dispatched, completed, rejected, ...

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, message, metadata.op
    | filter event = "operation.rejected"
    | stats count() by metadata.op
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - operation.*: Dispatcher lifecycle
    - unit.*: Distance normalization
    - partition.*: Reference/data split
    - buffer.*: Buffer-union progress
    - config.*: Configuration loading
    """

    # ========== Operation Events ==========
    OPERATION_DISPATCHED = "operation.dispatched"
    """Validated request routed to an operation."""

    OPERATION_COMPLETED = "operation.completed"
    """Operation produced a result."""

    OPERATION_REJECTED = "operation.rejected"
    """Operation failed with a typed engine error."""

    # ========== Unit Events ==========
    UNIT_NORMALIZED = "unit.normalized"
    """Distance converted to kilometers."""

    UNIT_UNRECOGNIZED = "unit.unrecognized"
    """Unit token not in the alias table."""

    # ========== Partition Events ==========
    PARTITION_FAILED = "partition.failed"
    """Point collection too small for a reference/data split."""

    # ========== Buffer Events ==========
    BUFFER_FOLD_STEP = "buffer.fold_step"
    """One pairwise union step of the buffer fold."""

    BUFFER_COMPLETED = "buffer.completed"
    """All buffers merged into one geometry."""

    BUFFER_FAILED = "buffer.failed"
    """shapely could not union or buffer the geometry."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Engine configuration loaded."""

