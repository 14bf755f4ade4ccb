"""
Distance-Filter Operation ("within")
====================================

Selects data points whose planar distance to the reference point is at most
``distance_km / km_per_degree`` degrees.

Design:
- Pure function (no state)
- Inclusive boundary (distance == threshold is kept)
- Output order follows input order
"""

from typing import Sequence

import numpy as np

from geoai_engine.config import KM_PER_DEGREE
from geoai_engine.geometry import Point, degrees_to_km, distances_to, km_to_degrees
from geoai_engine.schemas import Feature, FeatureCollection


def within(
    data: Sequence[Point],
    reference: Point,
    distance_km: float,
    km_per_degree: float = KM_PER_DEGREE,
) -> FeatureCollection:
    """
    Data points within *distance_km* of *reference*.

    Args:
        data: Candidate points (reference excluded)
        reference: Point distances are measured from
        distance_km: Threshold in kilometers
        km_per_degree: Planar degree approximation

    Returns:
        FeatureCollection of matching points, possibly empty. Each feature
        carries ``id``, ``distance_deg`` and ``distance_km`` properties.
    """
    if not data:
        return FeatureCollection()

    threshold_deg = km_to_degrees(distance_km, km_per_degree)
    distances = distances_to(data, reference)
    mask = distances <= threshold_deg

    features = [
        Feature(
            geometry=data[idx],
            properties={
                'id': data[idx].id,
                'distance_deg': float(distances[idx]),
                'distance_km': degrees_to_km(float(distances[idx]), km_per_degree),
            },
        )
        for idx in np.flatnonzero(mask)
    ]
    return FeatureCollection(features=tuple(features))
