"""
GeoAI Engine Schemas
====================

Bounded Context: Data Structures

Immutable, typed request and result structures.

Design:
- Frozen dataclasses (immutability)
- Validation in the constructor (BadParams for request shapes)
- from_dict() for plain-data input, to_dict() for GeoJSON output

Public API
----------
Request Types:
    OpName, WithinParams, NearestParams, BufferParams, OperationRequest

Result Types:
    Feature, FeatureCollection, OperationResult
"""

from .request import (
    OpName,
    WithinParams,
    NearestParams,
    BufferParams,
    OperationParams,
    OperationRequest,
)
from .result import Feature, FeatureCollection, OperationResult

__all__ = [
    # Request types
    'OpName',
    'WithinParams',
    'NearestParams',
    'BufferParams',
    'OperationParams',
    'OperationRequest',
    # Result types
    'Feature',
    'FeatureCollection',
    'OperationResult',
]
