"""Tests for OperationRegistry."""

import pytest

from geoai_engine.errors import BadParams
from geoai_engine.registry import OperationRegistry


@pytest.fixture()
def registry():
    registry = OperationRegistry()
    registry.register("echo", lambda value: value)
    return registry


def test_execute(registry):
    assert registry.execute("echo", 42) == 42


def test_execute_kwargs(registry):
    assert registry.execute("echo", value="x") == "x"


def test_unknown_operation(registry):
    with pytest.raises(BadParams) as exc_info:
        registry.execute("missing")
    assert exc_info.value.op == "missing"
    assert "echo" in str(exc_info.value)


def test_duplicate_registration(registry):
    with pytest.raises(ValueError):
        registry.register("echo", lambda: None)


def test_available_operations(registry):
    assert registry.available_operations == {"echo"}
    assert len(registry) == 1


def test_available_operations_is_a_copy(registry):
    registry.available_operations.add("rogue")
    with pytest.raises(BadParams):
        registry.execute("rogue")
