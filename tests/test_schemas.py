"""Tests for request validation and result serialization."""

import pytest

from geoai_engine.errors import BadParams
from geoai_engine.geometry import Point, Polygon
from geoai_engine.schemas import (
    BufferParams,
    Feature,
    FeatureCollection,
    NearestParams,
    OperationRequest,
    OperationResult,
    OpName,
    WithinParams,
)

SQUARE = [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]


class TestOperationRequestFromDict:
    def test_within(self):
        request = OperationRequest.from_dict({'op': 'within', 'params': {'distance_km': 5}})
        assert request.op is OpName.WITHIN
        assert request.params == WithinParams(distance_km=5.0)

    def test_within_with_unit(self):
        request = OperationRequest.from_dict(
            {'op': 'within', 'params': {'distance_km': 500, 'unit': 'm'}}
        )
        assert request.params.unit == 'm'
        # the raw value stays in the given unit until normalization
        assert request.params.distance_km == 500.0

    def test_nearest(self):
        request = OperationRequest.from_dict({'op': 'nearest', 'params': {'k': 3}})
        assert request.params == NearestParams(k=3)

    def test_nearest_integral_float(self):
        request = OperationRequest.from_dict({'op': 'nearest', 'params': {'k': 3.0}})
        assert request.params.k == 3
        assert isinstance(request.params.k, int)

    def test_buffer_with_geometry(self):
        request = OperationRequest.from_dict({
            'op': 'buffer',
            'params': {'distance': 1, 'geometry': {'type': 'Polygon', 'coordinates': [SQUARE]}},
        })
        assert isinstance(request.params.geometry, Polygon)

    @pytest.mark.parametrize(
        "data",
        [
            {'op': 'within', 'params': {'k': 3}},
            {'op': 'within', 'params': {}},
            {'op': 'nearest', 'params': {'k': 3, 'distance_km': 1}},
            {'op': 'buffer', 'params': {'distance_km': 1}},
            {'op': 'nearest', 'params': {'k': 0}},
            {'op': 'nearest', 'params': {'k': -2}},
            {'op': 'nearest', 'params': {'k': 2.5}},
            {'op': 'nearest', 'params': {'k': True}},
            {'op': 'nearest', 'params': {'k': '3'}},
            {'op': 'within', 'params': {'distance_km': '5'}},
            {'op': 'within', 'params': {'distance_km': 5, 'unit': 3}},
            {'op': 'buffer', 'params': {'distance': 1, 'geometry': {'type': 'LineString'}}},
            {'op': 'buffer', 'params': {'distance': 1, 'geometry': 'here'}},
            {'op': 'within', 'params': None},
            {'op': 'within'},
        ],
    )
    def test_invalid_params(self, data):
        with pytest.raises(BadParams) as exc_info:
            OperationRequest.from_dict(data)
        assert exc_info.value.op == data['op']

    @pytest.mark.parametrize("op", ["route", "WITHIN", "", None])
    def test_unknown_op(self, op):
        with pytest.raises(BadParams):
            OperationRequest.from_dict({'op': op, 'params': {}})

    def test_missing_op(self):
        with pytest.raises(BadParams) as exc_info:
            OperationRequest.from_dict({'params': {'k': 1}})
        assert exc_info.value.op is None

    def test_not_a_mapping(self):
        with pytest.raises(BadParams):
            OperationRequest.from_dict([('op', 'within')])

    def test_negative_distance_passes_shape_check(self):
        # magnitude is the unit normalizer's concern
        request = OperationRequest.from_dict({'op': 'within', 'params': {'distance_km': -1}})
        assert request.params.distance_km == -1.0


class TestOperationRequest:
    def test_mismatched_params_type(self):
        with pytest.raises(BadParams):
            OperationRequest(op=OpName.WITHIN, params=NearestParams(k=1))

    def test_op_string_coerced(self):
        request = OperationRequest(op="buffer", params=BufferParams(distance=2))
        assert request.op is OpName.BUFFER

    def test_to_dict_omits_unset_optionals(self):
        request = OperationRequest(op=OpName.BUFFER, params=BufferParams(distance=2))
        assert request.to_dict() == {'op': 'buffer', 'params': {'distance': 2.0}}

    def test_to_dict_serializes_geometry(self):
        data = {
            'op': 'buffer',
            'params': {
                'distance': 2.0,
                'geometry': {'type': 'Point', 'coordinates': [1.0, 2.0]},
                'unit': 'km',
            },
        }
        assert OperationRequest.from_dict(data).to_dict() == data


class TestResult:
    def test_feature_collection(self):
        features = (
            Feature(geometry=Point("a", 0, 0), properties={'id': 'a'}),
            Feature(geometry=Point("b", 1, 1), properties={'id': 'b'}),
        )
        collection = FeatureCollection(features=features)

        assert len(collection) == 2
        assert collection.ids == ['a', 'b']
        assert collection.to_dict() == {
            'type': 'FeatureCollection',
            'features': [
                {'type': 'Feature',
                 'geometry': {'type': 'Point', 'coordinates': [0.0, 0.0]},
                 'properties': {'id': 'a'}},
                {'type': 'Feature',
                 'geometry': {'type': 'Point', 'coordinates': [1.0, 1.0]},
                 'properties': {'id': 'b'}},
            ],
        }

    def test_empty_collection(self):
        assert FeatureCollection().to_dict() == {'type': 'FeatureCollection', 'features': []}

    def test_operation_result_to_dict(self):
        result = OperationResult(
            op='nearest', data=FeatureCollection(), count=0, summary="Returned 0 nearest pin(s).",
        )
        assert result.to_dict() == {
            'op': 'nearest',
            'mapData': {'type': 'FeatureCollection', 'features': []},
            'count': 0,
            'summary': "Returned 0 nearest pin(s).",
        }
