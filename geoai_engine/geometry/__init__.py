"""
Geometry Layer
==============

Bounded Context: Pure geometric values and the planar degree metric.

Responsibilities:
- Point / Polygon / MultiPolygon value types (immutable)
- GeoJSON and shapely conversion
- Planar distances and disk construction
- NO state, NO logging, NO request handling
"""

from geoai_engine.geometry.shapes import (
    Geometry,
    MultiPolygon,
    Point,
    Polygon,
    from_shapely,
    geometry_from_dict,
)
from geoai_engine.geometry.metric import (
    covering_radius,
    degrees_to_km,
    disk,
    distances_to,
    km_to_degrees,
)

__all__ = [
    "Geometry",
    "Point",
    "Polygon",
    "MultiPolygon",
    "geometry_from_dict",
    "from_shapely",
    "km_to_degrees",
    "degrees_to_km",
    "distances_to",
    "disk",
    "covering_radius",
]
