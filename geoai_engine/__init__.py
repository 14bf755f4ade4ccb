"""
GeoAI Spatial Operation Engine
==============================

Bounded Context: Spatial operations over user-placed map pins.

Turns an already-parsed ``{op, params}`` request and a pin collection into
GeoJSON-ready geometry. Natural-language parsing, map rendering and
transport live outside this package.

Architecture:

    geoai_engine/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── shapes.py      # Point, Polygon, MultiPolygon
    │   └── metric.py      # Planar degree distances, disks
    │
    ├── operations/        # within, nearest, buffer (pure functions)
    ├── schemas/           # OperationRequest, FeatureCollection, OperationResult
    ├── logging/           # Structured JSON logging
    │
    ├── units.py           # Distance unit normalizer
    ├── partition.py       # Reference / data point split
    ├── registry.py        # Operation registry
    ├── dispatcher.py      # Request routing (entry point)
    └── session.py         # PinBoard: caller-side pin convention

Usage:

    from geoai_engine import OperationDispatcher, Point

    dispatcher = OperationDispatcher()
    result = dispatcher.dispatch(
        {"op": "within", "params": {"distance_km": 500, "unit": "m"}},
        points=[Point("a", 103.851, 1.290), Point("ref", 103.852, 1.291)],
    )
    result.to_dict()["mapData"]   # GeoJSON FeatureCollection

    # Or keep the "last pin is the reference" convention in a PinBoard
    from geoai_engine import PinBoard

    board = PinBoard()
    board.add(103.851, 1.290)
    board.add(103.852, 1.291)
    board.run("nearest")          # k defaults to 5
"""

from geoai_engine.config import EngineConfig, RequestDefaults
from geoai_engine.dispatcher import OperationDispatcher, dispatch
from geoai_engine.errors import (
    BadParams,
    EngineError,
    EngineGeometryError,
    EnginePartitionError,
    EngineUnitError,
    GeoEngineError,
    InvalidMagnitude,
    NoDataPoints,
    NoPoints,
    PartitionError,
    UnitError,
    UnrecognizedUnit,
)
from geoai_engine.geometry import MultiPolygon, Point, Polygon
from geoai_engine.schemas import (
    Feature,
    FeatureCollection,
    OperationRequest,
    OperationResult,
)
from geoai_engine.session import PinBoard
from geoai_engine.units import normalize, parse_distance

__all__ = [
    # Entry points
    "OperationDispatcher",
    "dispatch",
    "PinBoard",
    # Config
    "EngineConfig",
    "RequestDefaults",
    # Geometry
    "Point",
    "Polygon",
    "MultiPolygon",
    # Schemas
    "OperationRequest",
    "OperationResult",
    "Feature",
    "FeatureCollection",
    # Units
    "normalize",
    "parse_distance",
    # Errors
    "GeoEngineError",
    "UnitError",
    "UnrecognizedUnit",
    "InvalidMagnitude",
    "PartitionError",
    "NoPoints",
    "NoDataPoints",
    "EngineError",
    "BadParams",
    "EngineUnitError",
    "EnginePartitionError",
    "EngineGeometryError",
]

__version__ = "0.1.0"
