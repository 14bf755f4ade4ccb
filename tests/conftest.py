"""Shared test fixtures: small pin sets with hand-checkable geometry."""

import pytest

from geoai_engine import EngineConfig, OperationDispatcher, Point


@pytest.fixture()
def example_points():
    """a and b are data points, c (last) is the reference."""
    return [
        Point("a", 0.0, 0.0),
        Point("b", 0.0, 0.01),
        Point("c", 1.0, 1.0),
    ]


@pytest.fixture()
def line_points():
    """Data points along the x axis at growing distance from origin, origin last."""
    return [
        Point("p3", 0.3, 0.0),
        Point("p1", 0.1, 0.0),
        Point("p4", -0.4, 0.0),
        Point("p2", 0.0, 0.2),
        Point("origin", 0.0, 0.0),
    ]


@pytest.fixture()
def config():
    return EngineConfig(buffer_segments=32)


@pytest.fixture()
def dispatcher(config):
    return OperationDispatcher(config)
