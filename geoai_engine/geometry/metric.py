"""
Planar Degree Metric
====================

Distances on the (longitude, latitude) plane with a fixed km-per-degree
factor. No projection or geodesic correction is applied; every operation
measures with these functions so their results agree with each other.
"""

import math
from typing import Sequence

import numpy as np

from geoai_engine.config import KM_PER_DEGREE
from geoai_engine.geometry.shapes import Point, Polygon


def km_to_degrees(distance_km: float, km_per_degree: float = KM_PER_DEGREE) -> float:
    """Convert a kilometer distance to planar degrees (``km / 111.0`` by default)."""
    return distance_km / km_per_degree


def degrees_to_km(distance_deg: float, km_per_degree: float = KM_PER_DEGREE) -> float:
    """Inverse of km_to_degrees."""
    return distance_deg * km_per_degree


def coordinates_array(points: Sequence[Point]) -> np.ndarray:
    """Nx2 float array of (longitude, latitude) rows."""
    if not points:
        return np.empty((0, 2), dtype=float)
    return np.array([p.coordinates for p in points], dtype=float)


def distances_to(points: Sequence[Point], reference: Point) -> np.ndarray:
    """
    Euclidean distance of each point to *reference*, in degrees.

    Returns:
        Float array of shape (N,), aligned with *points*
    """
    coords = coordinates_array(points)
    return np.hypot(
        coords[:, 0] - reference.longitude,
        coords[:, 1] - reference.latitude,
    )


# Relative slack on the vertex radius; float rounding of the vertices must not
# move an edge inside the circle.
_EDGE_SLACK = 1e-9


def covering_radius(radius_deg: float, segments: int) -> float:
    """
    Vertex radius of a 4 * segments regular polygon whose edges lie on or
    just outside the circle of *radius_deg*.
    """
    return radius_deg / math.cos(math.pi / (4 * segments)) * (1.0 + _EDGE_SLACK)


def disk(center: Point, radius_deg: float, segments: int) -> Polygon:
    """
    Regular polygon approximating a disk around *center*.

    The polygon is circumscribed about the true circle: its edge midpoints
    sit at *radius_deg* (plus a relative 1e-9), so every position within
    *radius_deg* of the center is covered.

    Args:
        center: Disk center
        radius_deg: Radius in degrees (> 0)
        segments: Segments per quarter circle

    Returns:
        Polygon with 4 * segments edges
    """
    if not radius_deg > 0:
        raise ValueError(f"radius_deg must be > 0, got {radius_deg}")
    if segments < 1:
        raise ValueError(f"segments must be >= 1, got {segments}")

    n = 4 * segments
    vertex_radius = covering_radius(radius_deg, segments)
    angles = np.linspace(0.0, 2.0 * math.pi, n, endpoint=False)
    xs = center.longitude + vertex_radius * np.cos(angles)
    ys = center.latitude + vertex_radius * np.sin(angles)

    ring = [(float(x), float(y)) for x, y in zip(xs, ys)]
    ring.append(ring[0])
    return Polygon(rings=(tuple(ring),))
