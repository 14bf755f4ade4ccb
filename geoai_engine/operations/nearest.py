"""
Nearest-K Operation ("nearest")
===============================

Orders data points by planar distance to the reference point and keeps the
first k. Same metric as "within", no threshold.
"""

from typing import Sequence

import numpy as np

from geoai_engine.config import KM_PER_DEGREE
from geoai_engine.geometry import Point, degrees_to_km, distances_to
from geoai_engine.schemas import Feature, FeatureCollection


def nearest(
    data: Sequence[Point],
    reference: Point,
    k: int,
    km_per_degree: float = KM_PER_DEGREE,
) -> FeatureCollection:
    """
    The *k* data points closest to *reference*.

    Equal distances keep their original collection order (stable sort).
    A *k* larger than ``len(data)`` returns every data point. Validation of
    *k* itself happens in the request schema.

    Returns:
        FeatureCollection ordered by ascending distance; features carry
        ``id``, ``rank`` (1-based), ``distance_deg`` and ``distance_km``.
    """
    if not data:
        return FeatureCollection()

    distances = distances_to(data, reference)
    order = np.argsort(distances, kind="stable")[:k]

    features = [
        Feature(
            geometry=data[idx],
            properties={
                'id': data[idx].id,
                'rank': rank,
                'distance_deg': float(distances[idx]),
                'distance_km': degrees_to_km(float(distances[idx]), km_per_degree),
            },
        )
        for rank, idx in enumerate(order, start=1)
    ]
    return FeatureCollection(features=tuple(features))
