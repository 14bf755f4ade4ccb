"""
Operation Dispatcher
====================

Routes a validated ``{op, params}`` request plus the caller's points to the
matching operation and shapes the result.

Design:
- Stateless between calls: points and reference arrive with every request
- No defaults: a missing parameter is BadParams, never a fallback value
- Lower-level errors are wrapped (EngineUnitError, EnginePartitionError)
  with the original kept on ``.cause``
- Reference point is explicit when given; otherwise the last point is used
  (see geoai_engine.partition)
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from geoai_engine.config import EngineConfig
from geoai_engine.errors import (
    BadParams,
    EngineError,
    EnginePartitionError,
    EngineUnitError,
    PartitionError,
    UnitError,
)
from geoai_engine.geometry import Point
from geoai_engine.logging import LogEvent, create_logger
from geoai_engine.operations import buffer, buffer_geometry, nearest, within
from geoai_engine.partition import partition, split_reference
from geoai_engine.registry import OperationRegistry
from geoai_engine.schemas import OperationRequest, OperationResult, OpName
from geoai_engine.units import normalize

RequestLike = Union[OperationRequest, Dict[str, Any]]
PointLike = Union[Point, Dict[str, Any]]

logger = create_logger("dispatcher")


def _format_km(distance_km: float) -> str:
    return f"{distance_km:g} km"


class OperationDispatcher:
    """
    Entry point of the spatial operation engine.

    Usage:
        dispatcher = OperationDispatcher()
        result = dispatcher.dispatch(
            {"op": "within", "params": {"distance_km": 5}},
            points=[Point("a", 103.85, 1.29), Point("ref", 103.86, 1.30)],
        )
        result.to_dict()  # {'op': 'within', 'mapData': {...}, ...}

    Thread Safety:
        dispatch() keeps no per-call state on the instance; concurrent
        calls with their own inputs do not interact.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.logger = logger

        self.registry = OperationRegistry()
        self.registry.register(OpName.WITHIN.value, self._handle_within)
        self.registry.register(OpName.NEAREST.value, self._handle_nearest)
        self.registry.register(OpName.BUFFER.value, self._handle_buffer)

    # ── Public API ────────────────────────────────────────────────

    def dispatch(
        self,
        request: RequestLike,
        points: Sequence[PointLike],
        reference: Optional[PointLike] = None,
    ) -> OperationResult:
        """
        Validate *request* and run it against *points*.

        Args:
            request: OperationRequest or plain ``{op, params}`` mapping
            points: Ordered pins (Point or pin dicts). A pin dict without an
                id is named "pin-<index>", or "pin-<index>-<n>" if that id
                is already used by another pin
            reference: Explicit reference point; when omitted the last
                point of *points* is the reference for within/nearest

        Returns:
            OperationResult with GeoJSON-serializable data

        Raises:
            BadParams: Invalid op, params or points
            EngineUnitError: Distance/unit could not be normalized
            EnginePartitionError: Not enough points for a reference split
            EngineGeometryError: Buffer had no input or failed
        """
        try:
            if not isinstance(request, OperationRequest):
                request = OperationRequest.from_dict(request)
            op = request.op.value
            pins = self._coerce_points(op, points)
            ref = self._coerce_reference(op, reference)

            self.logger.info(
                event=LogEvent.OPERATION_DISPATCHED,
                message=f"Dispatching '{op}' over {len(pins)} point(s)",
                metadata={
                    'op': op,
                    'points': len(pins),
                    'explicit_reference': ref is not None,
                },
            )
            result = self.registry.execute(op, request, pins, ref)
        except EngineError as e:
            self.logger.warning(
                event=LogEvent.OPERATION_REJECTED,
                message=str(e),
                metadata={
                    'op': e.op,
                    'error': type(e).__name__,
                    'cause': type(e.cause).__name__ if e.cause else None,
                },
            )
            raise

        self.logger.info(
            event=LogEvent.OPERATION_COMPLETED,
            message=result.summary,
            metadata={'op': result.op, 'count': result.count},
        )
        return result

    @property
    def available_operations(self):
        return self.registry.available_operations

    # ── Handlers ──────────────────────────────────────────────────

    def _handle_within(
        self,
        request: OperationRequest,
        points: List[Point],
        reference: Optional[Point],
    ) -> OperationResult:
        op = request.op.value
        distance_km = self._distance_km(op, request.params.distance_km, request.params.unit)
        ref, data = self._reference_and_data(op, points, reference)

        features = within(data, ref, distance_km, self.config.km_per_degree)
        return OperationResult(
            op=op,
            data=features,
            count=len(features),
            summary=f"Found {len(features)} pin(s) within {_format_km(distance_km)}.",
        )

    def _handle_nearest(
        self,
        request: OperationRequest,
        points: List[Point],
        reference: Optional[Point],
    ) -> OperationResult:
        op = request.op.value
        ref, data = self._reference_and_data(op, points, reference)

        features = nearest(data, ref, request.params.k, self.config.km_per_degree)
        return OperationResult(
            op=op,
            data=features,
            count=len(features),
            summary=f"Returned {len(features)} nearest pin(s).",
        )

    def _handle_buffer(
        self,
        request: OperationRequest,
        points: List[Point],
        reference: Optional[Point],
    ) -> OperationResult:
        # Every point is buffered; the reference plays no part here
        op = request.op.value
        params = request.params
        distance_km = self._distance_km(op, params.distance, params.unit)

        if params.geometry is not None:
            geometry = buffer_geometry(
                params.geometry, distance_km,
                self.config.km_per_degree, self.config.buffer_segments,
            )
            return OperationResult(
                op=op,
                data=geometry,
                count=1,
                summary=f"Buffered the supplied geometry by {_format_km(distance_km)}.",
            )

        geometry = buffer(
            points, distance_km,
            self.config.km_per_degree, self.config.buffer_segments,
        )
        return OperationResult(
            op=op,
            data=geometry,
            count=len(points),
            summary=f"Buffered {len(points)} pin(s) by {_format_km(distance_km)}.",
        )

    # ── Private helpers ───────────────────────────────────────────

    def _distance_km(self, op: str, value: float, unit: Optional[str]) -> float:
        try:
            return normalize(value, unit)
        except UnitError as e:
            raise EngineUnitError(op, e) from e

    def _reference_and_data(
        self,
        op: str,
        points: List[Point],
        reference: Optional[Point],
    ) -> Tuple[Point, List[Point]]:
        try:
            if reference is None:
                return partition(points)
            return reference, split_reference(points, reference)
        except PartitionError as e:
            raise EnginePartitionError(op, e) from e

    @staticmethod
    def _coerce_points(op: str, points: Sequence[PointLike]) -> List[Point]:
        if points is None:
            raise BadParams(op, "points must be a sequence, got None")

        raw_points = list(points)
        # Pins without an id get "pin-<index>", skipping ids already in use
        taken = {
            raw.id if isinstance(raw, Point) else str(raw['id'])
            for raw in raw_points
            if isinstance(raw, Point) or (isinstance(raw, dict) and raw.get('id') is not None)
        }

        pins: List[Point] = []
        seen = set()
        for idx, raw in enumerate(raw_points):
            fallback_id = f"pin-{idx}"
            suffix = idx
            while fallback_id in taken:
                suffix += 1
                fallback_id = f"pin-{idx}-{suffix}"
            try:
                pin = raw if isinstance(raw, Point) else Point.from_dict(raw, point_id=fallback_id)
            except (TypeError, ValueError, AttributeError) as e:
                raise BadParams(op, f"invalid point at index {idx}: {e}") from e
            if pin.id in seen:
                raise BadParams(op, f"duplicate point id '{pin.id}'")
            seen.add(pin.id)
            taken.add(pin.id)
            pins.append(pin)
        return pins

    @staticmethod
    def _coerce_reference(op: str, reference: Optional[PointLike]) -> Optional[Point]:
        if reference is None or isinstance(reference, Point):
            return reference
        try:
            return Point.from_dict(reference, point_id="reference")
        except (TypeError, ValueError, AttributeError) as e:
            raise BadParams(op, f"invalid reference point: {e}") from e


def dispatch(
    request: RequestLike,
    points: Sequence[PointLike],
    reference: Optional[PointLike] = None,
    config: Optional[EngineConfig] = None,
) -> OperationResult:
    """One-shot dispatch with a fresh OperationDispatcher."""
    return OperationDispatcher(config).dispatch(request, points, reference)
