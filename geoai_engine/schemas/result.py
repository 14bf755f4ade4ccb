"""
Operation Result Schema
=======================

Bounded Context: Output Data Structures

Design:
- Feature / FeatureCollection mirror their GeoJSON counterparts
- OperationResult wraps either a Geometry (buffer) or a FeatureCollection
  (within / nearest) together with a count and a one-line summary
- Built fresh per request, never cached by the engine
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

from geoai_engine.geometry import Geometry


@dataclass(frozen=True)
class Feature:
    """
    Geometry plus free-form properties.

    Example:
        >>> Feature(geometry=Point("a", 0, 0), properties={'id': 'a'}).to_dict()
        {'type': 'Feature', 'geometry': {'type': 'Point', 'coordinates': [0.0, 0.0]}, 'properties': {'id': 'a'}}
    """
    geometry: Geometry
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a GeoJSON Feature."""
        return {
            'type': 'Feature',
            'geometry': self.geometry.to_dict(),
            'properties': dict(self.properties),
        }


@dataclass(frozen=True)
class FeatureCollection:
    """Ordered, immutable set of features."""
    features: Tuple[Feature, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'features', tuple(self.features))

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self):
        return iter(self.features)

    @property
    def ids(self) -> List[str]:
        """The ``id`` property of every feature, in order."""
        return [f.properties.get('id') for f in self.features]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a GeoJSON FeatureCollection."""
        return {
            'type': 'FeatureCollection',
            'features': [f.to_dict() for f in self.features],
        }


ResultData = Union[Geometry, FeatureCollection]


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of one dispatched operation.

    Attributes:
        op: Operation name ("within", "nearest", "buffer")
        data: Geometry for buffer, FeatureCollection otherwise
        count: Features returned, or points buffered
        summary: Human-readable description of what was done
    """
    op: str
    data: ResultData
    count: int
    summary: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the rendering layer."""
        return {
            'op': self.op,
            'mapData': self.data.to_dict(),
            'count': self.count,
            'summary': self.summary,
        }
