"""
Engine Error Taxonomy
=====================

Bounded Context: Failure reporting

Every failure the engine can report is one of these exceptions. Lower-level
errors (units, partition) are wrapped by the dispatcher, never swallowed,
and stay reachable through ``.cause`` / ``__cause__``.

Hierarchy:

    GeoEngineError
    ├── UnitError
    │   ├── UnrecognizedUnit
    │   └── InvalidMagnitude
    ├── PartitionError
    │   ├── NoPoints
    │   └── NoDataPoints
    └── EngineError
        ├── BadParams
        ├── EngineUnitError
        ├── EnginePartitionError
        └── EngineGeometryError

``user_message`` is the text a chat layer can show back to the user.
"""

from typing import Any, Optional


class GeoEngineError(Exception):
    """Base exception for all engine errors."""

    user_message: str = "The spatial operation could not be completed."


# ========== Unit Errors ==========

class UnitError(GeoEngineError):
    """A distance value or unit could not be normalized to kilometers."""


class UnrecognizedUnit(UnitError):
    """The unit token is not in the alias table."""

    def __init__(self, unit: str):
        self.unit = unit
        self.user_message = (
            f"I don't recognize the unit '{unit}'. "
            f"Did you mean kilometers, meters, centimeters or millimeters?"
        )
        super().__init__(f"Unrecognized distance unit: '{unit}'")


class InvalidMagnitude(UnitError):
    """The distance is zero, negative, non-finite or not a number."""

    def __init__(self, value: Any):
        self.value = value
        self.user_message = (
            f"The distance must be a positive number, got {value!r}."
        )
        super().__init__(f"Invalid distance magnitude: {value!r}")


# ========== Partition Errors ==========

class PartitionError(GeoEngineError):
    """A point collection cannot be split into reference and data points."""


class NoPoints(PartitionError):
    """The point collection is empty."""

    def __init__(self):
        self.user_message = (
            "There are no pins on the map. Place a few pins first, "
            "the last one is used as the reference point."
        )
        super().__init__("Point collection is empty")


class NoDataPoints(PartitionError):
    """Only the reference point exists; nothing to measure against it."""

    def __init__(self, reference_id: Optional[str] = None):
        self.reference_id = reference_id
        self.user_message = (
            "Only the reference point is on the map. "
            "Place at least one more pin to compare against it."
        )
        super().__init__(
            f"No data points available (only reference point "
            f"'{reference_id}' exists)"
        )


# ========== Engine Errors ==========

class EngineError(GeoEngineError):
    """Failure of a dispatched operation."""

    def __init__(
        self,
        op: Optional[str],
        message: str,
        cause: Optional[GeoEngineError] = None,
    ):
        self.op = op
        self.cause = cause
        if cause is not None:
            self.user_message = cause.user_message
        super().__init__(f"[{op or '?'}] {message}")


class BadParams(EngineError):
    """The request's op or params shape is invalid."""

    def __init__(self, op: Optional[str], detail: str):
        self.detail = detail
        super().__init__(op, f"Bad parameters: {detail}")
        self.user_message = f"I couldn't run that request: {detail}."


class EngineUnitError(EngineError):
    """Wraps a UnitError raised while normalizing an operation's distance."""

    def __init__(self, op: str, cause: UnitError):
        super().__init__(op, str(cause), cause)


class EnginePartitionError(EngineError):
    """Wraps a PartitionError raised while selecting the reference point."""

    def __init__(self, op: str, cause: PartitionError):
        super().__init__(op, str(cause), cause)


class EngineGeometryError(EngineError):
    """The geometry computation itself failed or had no input."""

    def __init__(self, op: str, detail: str):
        self.detail = detail
        super().__init__(op, f"Geometry error: {detail}")
        self.user_message = f"The {op} operation failed: {detail}."
