"""
Operations Layer
================

Bounded Context: The three canonical spatial operations.

- within: distance filter around a reference point
- nearest: k nearest data points to a reference point
- buffer: buffer every point and fold the buffers into one geometry

All functions are pure: inputs in, fresh geometry out.
"""

from geoai_engine.operations.within import within
from geoai_engine.operations.nearest import nearest
from geoai_engine.operations.buffer import buffer, buffer_geometry, fold_union

__all__ = [
    "within",
    "nearest",
    "buffer",
    "buffer_geometry",
    "fold_union",
]
