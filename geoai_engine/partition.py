"""
Reference-Point Partitioner
===========================

Splits an ordered pin collection into the reference point and the data
points, following the "last placed pin is the reference" convention.

The engine itself prefers an explicit reference (see ``split_reference``);
``partition`` is the convention helper used when the caller did not pass one.
"""

from typing import List, Sequence, Tuple

from geoai_engine.errors import NoDataPoints, NoPoints
from geoai_engine.geometry import Point
from geoai_engine.logging import LogEvent, create_logger

logger = create_logger("partition")


def partition(points: Sequence[Point]) -> Tuple[Point, List[Point]]:
    """
    Use the last point as reference and the rest, in order, as data.

    Raises:
        NoPoints: If *points* is empty
        NoDataPoints: If only one point exists
    """
    if not points:
        logger.warning(
            event=LogEvent.PARTITION_FAILED,
            message="Cannot partition an empty point collection",
        )
        raise NoPoints()

    reference = points[-1]
    data = list(points[:-1])
    if not data:
        logger.warning(
            event=LogEvent.PARTITION_FAILED,
            message="Only the reference point exists",
            metadata={'reference_id': reference.id},
        )
        raise NoDataPoints(reference.id)

    return reference, data


def split_reference(points: Sequence[Point], reference: Point) -> List[Point]:
    """
    Data points for an explicitly supplied *reference*.

    Any point sharing the reference's id is treated as the reference itself
    and left out. Order of the remaining points is preserved.

    Raises:
        NoPoints: If *points* is empty
        NoDataPoints: If nothing is left to measure
    """
    if not points:
        logger.warning(
            event=LogEvent.PARTITION_FAILED,
            message="Cannot split an empty point collection",
            metadata={'reference_id': reference.id},
        )
        raise NoPoints()

    data = [p for p in points if p.id != reference.id]
    if not data:
        logger.warning(
            event=LogEvent.PARTITION_FAILED,
            message="No data points besides the explicit reference",
            metadata={'reference_id': reference.id, 'points': len(points)},
        )
        raise NoDataPoints(reference.id)
    return data
