"""
OperationRegistry - Explicit operation registration pattern

Bounded Context: Operation registration and lookup
Responsibilities:
  - Register operation handlers by name
  - Reject unknown operations before execution
  - Report the registered operation names

Threading: Thread-safe (uses lock for write operations)
"""

from typing import Any, Callable, Dict, Set
import threading

from geoai_engine.errors import BadParams


class OperationRegistry:
    """
    Registry mapping operation names to handlers.

    Key Features:
      - Fail-fast: Unknown operations raise BadParams immediately
      - Introspection: Query available operations at runtime

    Example:
        registry = OperationRegistry()
        registry.register('within', handle_within)

        result = registry.execute('within', request, points, reference)
    """

    def __init__(self):
        self._handlers: Dict[str, Callable[..., Any]] = {}
        self._lock = threading.Lock()

    def register(self, op: str, handler: Callable[..., Any]) -> None:
        """
        Register an operation with its handler.

        Raises:
            ValueError: If the operation is already registered
        """
        with self._lock:
            if op in self._handlers:
                raise ValueError(f"Operation '{op}' already registered")

            self._handlers[op] = handler

    def execute(self, op: str, *args: Any, **kwargs: Any) -> Any:
        """
        Run the handler registered for *op*.

        Raises:
            BadParams: If *op* is not registered
        """
        handler = self._handlers.get(op)
        if handler is None:
            raise BadParams(
                op,
                f"operation '{op}' not available, available operations: "
                f"{', '.join(sorted(self.available_operations))}"
            )
        return handler(*args, **kwargs)

    @property
    def available_operations(self) -> Set[str]:
        """Snapshot of registered operation names."""
        return set(self._handlers.keys())

    def __len__(self) -> int:
        return len(self._handlers)
