"""Tests for reference-point partitioning."""

import pytest

from geoai_engine.errors import NoDataPoints, NoPoints, PartitionError
from geoai_engine.geometry import Point
from geoai_engine.partition import partition, split_reference


class TestPartition:
    def test_last_point_is_reference(self, example_points):
        reference, data = partition(example_points)

        assert reference.id == "c"
        assert [p.id for p in data] == ["a", "b"]

    def test_input_not_mutated(self, example_points):
        before = list(example_points)
        partition(example_points)
        assert example_points == before

    def test_empty_raises_no_points(self):
        with pytest.raises(NoPoints):
            partition([])

    def test_single_point_raises_no_data_points(self):
        with pytest.raises(NoDataPoints) as exc_info:
            partition([Point("only", 1.0, 2.0)])
        assert exc_info.value.reference_id == "only"
        assert isinstance(exc_info.value, PartitionError)

    def test_accepts_tuple(self, example_points):
        reference, data = partition(tuple(example_points))
        assert reference.id == "c"
        assert isinstance(data, list)


class TestSplitReference:
    def test_external_reference_keeps_all_points(self, example_points):
        reference = Point("elsewhere", 5.0, 5.0)
        data = split_reference(example_points, reference)
        assert [p.id for p in data] == ["a", "b", "c"]

    def test_reference_in_collection_is_excluded(self, example_points):
        data = split_reference(example_points, example_points[0])
        assert [p.id for p in data] == ["b", "c"]

    def test_only_reference_raises_no_data_points(self):
        ref = Point("r", 0.0, 0.0)
        with pytest.raises(NoDataPoints):
            split_reference([ref], ref)

    def test_empty_raises_no_points(self):
        with pytest.raises(NoPoints):
            split_reference([], Point("r", 0.0, 0.0))
