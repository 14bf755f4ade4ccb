"""
Buffer-Union Operation ("buffer")
=================================

Buffers every point by the same radius and merges the buffers with an
ordered left fold:

    result_0 = buffer(p_0)
    result_i = union(result_{i-1}, buffer(p_i))

The final geometry is the union of all n buffers whatever the point count
or layout. Single-point input returns the disk unchanged.
"""

from typing import Sequence

from shapely.errors import GEOSException

from geoai_engine.config import DEFAULT_BUFFER_SEGMENTS, KM_PER_DEGREE
from geoai_engine.errors import EngineGeometryError
from geoai_engine.geometry import (
    Geometry,
    MultiPolygon,
    Point,
    Polygon,
    covering_radius,
    disk,
    from_shapely,
    km_to_degrees,
)
from geoai_engine.logging import LogEvent, create_logger

logger = create_logger("buffer")

OP = "buffer"


def buffer(
    points: Sequence[Point],
    distance_km: float,
    km_per_degree: float = KM_PER_DEGREE,
    segments: int = DEFAULT_BUFFER_SEGMENTS,
) -> Geometry:
    """
    Union of the buffers of every point.

    Args:
        points: Points to buffer, all of them (no reference split)
        distance_km: Buffer radius in kilometers
        km_per_degree: Planar degree approximation
        segments: Segments per quarter circle for each disk

    Returns:
        Polygon, or MultiPolygon when buffers do not touch

    Raises:
        EngineGeometryError: If *points* is empty or the union fails
    """
    if not points:
        raise EngineGeometryError(OP, "no points to buffer")

    radius_deg = km_to_degrees(distance_km, km_per_degree)
    disks = [disk(p, radius_deg, segments) for p in points]

    if len(disks) == 1:
        merged: Geometry = disks[0]
    else:
        merged = fold_union(disks)

    logger.info(
        event=LogEvent.BUFFER_COMPLETED,
        message=f"Buffered {len(points)} point(s) by {distance_km} km",
        metadata={
            'points': len(points),
            'distance_km': distance_km,
            'radius_deg': radius_deg,
            'result_type': type(merged).__name__,
        },
    )
    return merged


def fold_union(polygons: Sequence[Polygon]) -> Geometry:
    """
    Merge polygons with an ordered pairwise union, left to right.

    Raises:
        EngineGeometryError: If *polygons* is empty or shapely fails
    """
    if not polygons:
        raise EngineGeometryError(OP, "nothing to union")

    result = polygons[0].to_shapely()
    for step, polygon in enumerate(polygons[1:], start=1):
        try:
            result = result.union(polygon.to_shapely())
        except GEOSException as e:
            logger.error(
                event=LogEvent.BUFFER_FAILED,
                message=f"Union failed at step {step}/{len(polygons) - 1}",
                metadata={'step': step, 'polygons': len(polygons)},
                exc_info=e,
            )
            raise EngineGeometryError(OP, f"union failed at step {step}: {e}") from e
        logger.debug(
            event=LogEvent.BUFFER_FOLD_STEP,
            message=f"Union step {step}/{len(polygons) - 1}",
            metadata={'step': step, 'result_type': result.geom_type},
        )

    try:
        return from_shapely(result)
    except ValueError as e:
        raise EngineGeometryError(OP, str(e)) from e


def buffer_geometry(
    geometry: Geometry,
    distance_km: float,
    km_per_degree: float = KM_PER_DEGREE,
    segments: int = DEFAULT_BUFFER_SEGMENTS,
) -> Geometry:
    """
    Buffer a supplied geometry instead of the pins.

    Points reuse the disk construction; polygons are offset by shapely with
    the same covering radius so straight-edge and arc distances both reach
    at least *distance_km*.

    Raises:
        EngineGeometryError: If shapely cannot buffer the geometry
    """
    radius_deg = km_to_degrees(distance_km, km_per_degree)

    if isinstance(geometry, Point):
        return disk(geometry, radius_deg, segments)

    if not isinstance(geometry, (Polygon, MultiPolygon)):
        raise EngineGeometryError(OP, f"cannot buffer {type(geometry).__name__}")

    try:
        buffered = geometry.to_shapely().buffer(
            covering_radius(radius_deg, segments), quad_segs=segments
        )
        return from_shapely(buffered)
    except (GEOSException, ValueError) as e:
        logger.error(
            event=LogEvent.BUFFER_FAILED,
            message=f"Could not buffer {type(geometry).__name__}",
            metadata={'distance_km': distance_km},
            exc_info=e,
        )
        raise EngineGeometryError(OP, f"buffer failed: {e}") from e
