"""
Geometric Shapes Module
========================

Pure geometric value types - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- GeoJSON in/out via to_dict()/from_dict()
- shapely used only at the edges (union, containment, generic buffering)
- Thread-safe (immutable values)

Coordinates are (longitude, latitude) pairs treated as planar degrees.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple, Union

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry.base import BaseGeometry

Position = Tuple[float, float]
Ring = Tuple[Position, ...]


def _position(raw: Iterable[float]) -> Position:
    """Coerce a coordinate pair and reject non-finite values."""
    values = tuple(float(v) for v in raw)
    if len(values) < 2:
        raise ValueError(f"Position needs 2 coordinates, got {values}")
    x, y = values[0], values[1]
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"Position must be finite, got ({x}, {y})")
    return (x, y)


def _ring(raw: Iterable[Iterable[float]]) -> Ring:
    """Coerce a linear ring; it must be closed and have >= 4 positions."""
    ring = tuple(_position(p) for p in raw)
    if len(ring) < 4:
        raise ValueError(f"Ring must have at least 4 positions, got {len(ring)}")
    if ring[0] != ring[-1]:
        raise ValueError("Ring must be closed (first position == last position)")
    return ring


@dataclass(frozen=True)
class Point:
    """
    Immutable pin / reference point.

    Attributes:
        id: Identifier, unique within a point collection
        longitude: x coordinate (degrees, planar)
        latitude: y coordinate (degrees, planar)

    Example:
        >>> Point("a", 103.85, 1.29).to_dict()
        {'type': 'Point', 'coordinates': [103.85, 1.29]}
    """

    id: str
    longitude: float
    latitude: float

    def __post_init__(self):
        """Validate invariants."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Point id must be a non-empty string, got {self.id!r}")
        lon, lat = _position((self.longitude, self.latitude))
        object.__setattr__(self, 'longitude', lon)
        object.__setattr__(self, 'latitude', lat)

    @property
    def coordinates(self) -> Position:
        """(longitude, latitude) pair."""
        return (self.longitude, self.latitude)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a GeoJSON Point geometry."""
        return {'type': 'Point', 'coordinates': [self.longitude, self.latitude]}

    def to_shapely(self) -> ShapelyPoint:
        return ShapelyPoint(self.longitude, self.latitude)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], point_id: str = "geometry") -> 'Point':
        """
        Deserialize from a pin dict or a GeoJSON Point geometry.

        Pin dicts look like ``{"id", "longitude", "latitude"}`` (an extra
        ``coordinates`` key is ignored). GeoJSON geometries carry no id, so
        *point_id* is used.

        Raises:
            ValueError: If required keys missing or invalid values
        """
        try:
            if 'longitude' in data or 'latitude' in data:
                raw_id = data.get('id')
                return cls(
                    id=point_id if raw_id is None else str(raw_id),
                    longitude=float(data['longitude']),
                    latitude=float(data['latitude']),
                )
            if data.get('type') != 'Point':
                raise ValueError(f"Expected Point geometry, got {data.get('type')!r}")
            lon, lat = _position(data['coordinates'])
            return cls(id=point_id, longitude=lon, latitude=lat)
        except KeyError as e:
            raise ValueError(f"Missing required Point field: {e}")
        except TypeError as e:
            raise ValueError(f"Invalid Point data: {e}")


@dataclass(frozen=True)
class Polygon:
    """
    Immutable ring-based polygon.

    Attributes:
        rings: Exterior ring first, then any holes. Each ring is closed.
    """

    rings: Tuple[Ring, ...]

    def __post_init__(self):
        """Validate rings and precompute the shapely shape."""
        rings = tuple(_ring(r) for r in self.rings)
        if not rings:
            raise ValueError("Polygon must have an exterior ring")
        object.__setattr__(self, 'rings', rings)
        object.__setattr__(self, '_shape', ShapelyPolygon(rings[0], rings[1:]))

    @property
    def exterior(self) -> Ring:
        return self.rings[0]

    @property
    def holes(self) -> Tuple[Ring, ...]:
        return self.rings[1:]

    def contains_point(self, point: Point) -> bool:
        """True if *point* is inside or on the boundary of the polygon."""
        return bool(self._shape.covers(point.to_shapely()))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a GeoJSON Polygon geometry."""
        return {
            'type': 'Polygon',
            'coordinates': [[list(p) for p in ring] for ring in self.rings],
        }

    def to_shapely(self) -> ShapelyPolygon:
        return self._shape

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Polygon':
        if data.get('type') != 'Polygon':
            raise ValueError(f"Expected Polygon geometry, got {data.get('type')!r}")
        try:
            return cls(rings=tuple(data['coordinates']))
        except KeyError as e:
            raise ValueError(f"Missing required Polygon field: {e}")


@dataclass(frozen=True)
class MultiPolygon:
    """
    Immutable collection of disjoint polygons (e.g. a union of far-apart buffers).
    """

    polygons: Tuple[Polygon, ...]

    def __post_init__(self):
        """Validate members."""
        polygons = tuple(self.polygons)
        if not polygons:
            raise ValueError("MultiPolygon must contain at least one polygon")
        for polygon in polygons:
            if not isinstance(polygon, Polygon):
                raise TypeError(
                    f"MultiPolygon members must be Polygon, got {type(polygon)}"
                )
        object.__setattr__(self, 'polygons', polygons)

    def contains_point(self, point: Point) -> bool:
        """True if *point* is inside or on the boundary of any member."""
        return any(polygon.contains_point(point) for polygon in self.polygons)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a GeoJSON MultiPolygon geometry."""
        return {
            'type': 'MultiPolygon',
            'coordinates': [
                polygon.to_dict()['coordinates'] for polygon in self.polygons
            ],
        }

    def to_shapely(self) -> ShapelyMultiPolygon:
        return ShapelyMultiPolygon([p.to_shapely() for p in self.polygons])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MultiPolygon':
        if data.get('type') != 'MultiPolygon':
            raise ValueError(
                f"Expected MultiPolygon geometry, got {data.get('type')!r}"
            )
        try:
            return cls(polygons=tuple(
                Polygon(rings=tuple(rings)) for rings in data['coordinates']
            ))
        except KeyError as e:
            raise ValueError(f"Missing required MultiPolygon field: {e}")


Geometry = Union[Point, Polygon, MultiPolygon]


def geometry_from_dict(data: Dict[str, Any]) -> Geometry:
    """
    Parse a GeoJSON geometry dict into a Geometry.

    Raises:
        ValueError: If the type is unsupported or the coordinates invalid
    """
    if not isinstance(data, dict):
        raise ValueError(f"Geometry must be a mapping, got {type(data).__name__}")

    geometry_type = data.get('type')
    if geometry_type == 'Point':
        return Point.from_dict(data)
    if geometry_type == 'Polygon':
        return Polygon.from_dict(data)
    if geometry_type == 'MultiPolygon':
        return MultiPolygon.from_dict(data)
    raise ValueError(
        f"Unsupported geometry type: {geometry_type!r}. "
        f"Must be 'Point', 'Polygon' or 'MultiPolygon'"
    )


def _polygon_from_shapely(shape: ShapelyPolygon) -> Polygon:
    rings = [tuple(shape.exterior.coords)]
    rings.extend(tuple(interior.coords) for interior in shape.interiors)
    return Polygon(rings=tuple(rings))


def from_shapely(shape: BaseGeometry) -> Union[Polygon, MultiPolygon]:
    """
    Convert an areal shapely geometry back into an engine value type.

    Lower-dimensional parts of a GeometryCollection are dropped.

    Raises:
        ValueError: If the shape is empty or has no areal part
    """
    if shape.is_empty:
        raise ValueError("Cannot convert an empty geometry")

    if shape.geom_type == 'Polygon':
        return _polygon_from_shapely(shape)

    parts = [
        part for part in getattr(shape, 'geoms', ())
        if part.geom_type == 'Polygon' and not part.is_empty
    ]
    if not parts:
        raise ValueError(f"Geometry has no polygonal part: {shape.geom_type}")
    if len(parts) == 1:
        return _polygon_from_shapely(parts[0])
    return MultiPolygon(polygons=tuple(_polygon_from_shapely(p) for p in parts))
