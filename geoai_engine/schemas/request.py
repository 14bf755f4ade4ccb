"""
Operation Request Schema
========================

Bounded Context: Input Data Structures

The ``{op, params}`` payload the language layer produces. Each op has
exactly one params shape; anything else is rejected with BadParams.

Shapes:
    within  -> {"distance_km": number, "unit"?: str}
    nearest -> {"k": positive int}
    buffer  -> {"distance": number, "unit"?: str, "geometry"?: GeoJSON}

Distance magnitudes are checked later by the unit normalizer, so a negative
distance surfaces as an InvalidMagnitude rather than a shape error.
"""

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Union

from geoai_engine.errors import BadParams
from geoai_engine.geometry import (
    Geometry,
    MultiPolygon,
    Point,
    Polygon,
    geometry_from_dict,
)


class OpName(str, Enum):
    """Closed set of spatial operations."""
    WITHIN = "within"
    NEAREST = "nearest"
    BUFFER = "buffer"


def _check_number(op: str, key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise BadParams(op, f"'{key}' must be a number, got {value!r}")
    return float(value)


def _check_unit(op: str, unit: Any) -> Optional[str]:
    if unit is not None and not isinstance(unit, str):
        raise BadParams(op, f"'unit' must be a string, got {unit!r}")
    return unit


@dataclass(frozen=True)
class WithinParams:
    """
    Distance threshold for the within operation.

    ``distance_km`` is the wire name; its value is in ``unit`` when one is
    given (``distance_km=25000, unit="metres"`` means 25 km) and in
    kilometers otherwise. The dispatcher converts it with units.normalize.
    """
    OP: ClassVar[OpName] = OpName.WITHIN
    REQUIRED: ClassVar[FrozenSet[str]] = frozenset({"distance_km"})
    OPTIONAL: ClassVar[FrozenSet[str]] = frozenset({"unit"})

    distance_km: float
    unit: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(
            self, 'distance_km', _check_number(self.OP.value, 'distance_km', self.distance_km)
        )
        _check_unit(self.OP.value, self.unit)


@dataclass(frozen=True)
class NearestParams:
    """Neighbor count for the nearest operation."""
    OP: ClassVar[OpName] = OpName.NEAREST
    REQUIRED: ClassVar[FrozenSet[str]] = frozenset({"k"})
    OPTIONAL: ClassVar[FrozenSet[str]] = frozenset()

    k: int

    def __post_init__(self):
        k = self.k
        # JSON numbers such as 3.0 are accepted as integers
        if isinstance(k, float) and k.is_integer():
            k = int(k)
        if isinstance(k, bool) or not isinstance(k, int):
            raise BadParams(self.OP.value, f"'k' must be an integer, got {self.k!r}")
        if k <= 0:
            raise BadParams(self.OP.value, f"'k' must be > 0, got {k}")
        object.__setattr__(self, 'k', k)


@dataclass(frozen=True)
class BufferParams:
    """Radius (and optional source geometry) for the buffer operation."""
    OP: ClassVar[OpName] = OpName.BUFFER
    REQUIRED: ClassVar[FrozenSet[str]] = frozenset({"distance"})
    OPTIONAL: ClassVar[FrozenSet[str]] = frozenset({"unit", "geometry"})

    distance: float
    unit: Optional[str] = None
    geometry: Optional[Geometry] = None

    def __post_init__(self):
        object.__setattr__(
            self, 'distance', _check_number(self.OP.value, 'distance', self.distance)
        )
        _check_unit(self.OP.value, self.unit)

        if isinstance(self.geometry, dict):
            try:
                object.__setattr__(self, 'geometry', geometry_from_dict(self.geometry))
            except (TypeError, ValueError) as e:
                raise BadParams(self.OP.value, f"invalid 'geometry': {e}") from e
        elif self.geometry is not None and not isinstance(
            self.geometry, (Point, Polygon, MultiPolygon)
        ):
            raise BadParams(
                self.OP.value,
                f"'geometry' must be a GeoJSON mapping, got {self.geometry!r}"
            )


OperationParams = Union[WithinParams, NearestParams, BufferParams]

PARAMS_BY_OP = {
    OpName.WITHIN: WithinParams,
    OpName.NEAREST: NearestParams,
    OpName.BUFFER: BufferParams,
}


def _op_name(raw: Any) -> OpName:
    try:
        return OpName(raw)
    except ValueError:
        raise BadParams(
            str(raw),
            f"unknown operation {raw!r}, expected one of "
            f"{', '.join(op.value for op in OpName)}"
        ) from None


@dataclass(frozen=True)
class OperationRequest:
    """
    Validated ``{op, params}`` pair.

    Invariants:
        - op is one of OpName
        - params is the params class registered for op

    Example:
        >>> OperationRequest.from_dict({"op": "nearest", "params": {"k": 3}})
        OperationRequest(op=<OpName.NEAREST: 'nearest'>, params=NearestParams(k=3))
    """
    op: OpName
    params: OperationParams

    def __post_init__(self):
        """Validate invariants."""
        op = _op_name(self.op)
        object.__setattr__(self, 'op', op)

        expected = PARAMS_BY_OP[op]
        if not isinstance(self.params, expected):
            raise BadParams(
                op.value,
                f"params must be {expected.__name__}, got {type(self.params).__name__}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OperationRequest':
        """
        Deserialize and validate a plain ``{op, params}`` mapping.

        Raises:
            BadParams: Unknown op, missing/extra params keys or wrong types
        """
        if not isinstance(data, dict):
            raise BadParams(None, f"request must be a mapping, got {type(data).__name__}")
        if 'op' not in data:
            raise BadParams(None, "request is missing 'op'")

        op = _op_name(data['op'])
        params = data.get('params')
        if not isinstance(params, dict):
            raise BadParams(op.value, f"'params' must be a mapping, got {params!r}")

        params_cls = PARAMS_BY_OP[op]
        keys = set(params)
        missing = params_cls.REQUIRED - keys
        if missing:
            raise BadParams(op.value, f"missing {', '.join(sorted(missing))}")
        extra = keys - params_cls.REQUIRED - params_cls.OPTIONAL
        if extra:
            raise BadParams(
                op.value,
                f"unexpected {', '.join(sorted(extra))} for '{op.value}'"
            )

        return cls(op=op, params=params_cls(**params))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to ``{op, params}`` (unset optional keys omitted)."""
        params: Dict[str, Any] = {}
        for key in sorted(type(self.params).REQUIRED | type(self.params).OPTIONAL):
            value = getattr(self.params, key)
            if value is None:
                continue
            params[key] = value.to_dict() if hasattr(value, 'to_dict') else value
        return {'op': self.op.value, 'params': params}
