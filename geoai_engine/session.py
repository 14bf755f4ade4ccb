"""
Pin Board
=========

Caller-side state for a map session: the ordered pins a user has placed.

The engine is stateless and takes its reference point explicitly. The
"most recently placed pin is the reference" convention and the request
defaults (e.g. nearest k = 5) live here, above the engine.

Design:
- Mutable pin list (private state)
- Immutable snapshots (pins returns a tuple)
- Thread-safety via encapsulation (caller must synchronize if multi-threaded)
"""

from typing import Any, Dict, List, Optional, Tuple

from geoai_engine.config import EngineConfig
from geoai_engine.dispatcher import OperationDispatcher
from geoai_engine.geometry import Point
from geoai_engine.schemas import OperationRequest, OperationResult, OpName


class PinBoard:
    """
    Ordered pins plus the reference-point convention.

    Usage:
        board = PinBoard()
        board.add(103.85, 1.29)
        board.add(103.86, 1.30)          # becomes the reference point
        result = board.run("nearest")    # k defaults to 5
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        dispatcher: Optional[OperationDispatcher] = None,
    ):
        self.config = config or EngineConfig()
        self.dispatcher = dispatcher or OperationDispatcher(self.config)
        self._pins: List[Point] = []
        self._next_id = 1

    @property
    def pins(self) -> Tuple[Point, ...]:
        """Snapshot of the pins in placement order."""
        return tuple(self._pins)

    @property
    def reference_point(self) -> Optional[Point]:
        """Most recently placed pin, or None when the board is empty."""
        return self._pins[-1] if self._pins else None

    def add(self, longitude: float, latitude: float, pin_id: Optional[str] = None) -> Point:
        """
        Place a pin; it becomes the new reference point.

        Raises:
            ValueError: If *pin_id* is already on the board or coordinates are invalid
        """
        if pin_id is None:
            pin_id = self._generate_id()
        elif any(p.id == pin_id for p in self._pins):
            raise ValueError(f"Pin '{pin_id}' already placed")

        pin = Point(id=pin_id, longitude=longitude, latitude=latitude)
        self._pins.append(pin)
        return pin

    def remove(self, pin_id: str) -> Point:
        """
        Remove a pin by id.

        Raises:
            KeyError: If no pin has that id
        """
        for idx, pin in enumerate(self._pins):
            if pin.id == pin_id:
                return self._pins.pop(idx)
        raise KeyError(pin_id)

    def clear(self) -> None:
        """Remove all pins."""
        self._pins.clear()

    def build_request(self, op: str, params: Optional[Dict[str, Any]] = None) -> OperationRequest:
        """
        Build a request, filling missing params from the configured defaults.

        Raises:
            BadParams: If params are still incomplete or invalid
        """
        params = dict(params or {})
        defaults = self.config.defaults

        if op == OpName.NEAREST.value and 'k' not in params and defaults.nearest_k is not None:
            params['k'] = defaults.nearest_k
        elif defaults.distance_km is not None:
            if op == OpName.WITHIN.value and 'distance_km' not in params:
                params['distance_km'] = defaults.distance_km
            elif op == OpName.BUFFER.value and 'distance' not in params:
                params['distance'] = defaults.distance_km

        return OperationRequest.from_dict({'op': op, 'params': params})

    def run(self, op: str, params: Optional[Dict[str, Any]] = None) -> OperationResult:
        """
        Run an operation over the board with the latest pin as reference.

        Raises:
            EngineError: Any dispatcher failure (see OperationDispatcher.dispatch)
        """
        request = self.build_request(op, params)
        reference = self.reference_point if request.op != OpName.BUFFER else None
        return self.dispatcher.dispatch(request, self.pins, reference)

    def _generate_id(self) -> str:
        taken = {p.id for p in self._pins}
        while f"pin-{self._next_id}" in taken:
            self._next_id += 1
        pin_id = f"pin-{self._next_id}"
        self._next_id += 1
        return pin_id

    def __len__(self) -> int:
        return len(self._pins)

    def __repr__(self) -> str:
        return f"PinBoard(pins={len(self._pins)})"
