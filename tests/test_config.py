"""Tests for EngineConfig and RequestDefaults."""

import logging

import pytest

from geoai_engine.config import (
    DEFAULT_BUFFER_SEGMENTS,
    KM_PER_DEGREE,
    EngineConfig,
    RequestDefaults,
)


class TestDefaults:
    def test_engine_defaults(self):
        config = EngineConfig()
        assert config.km_per_degree == KM_PER_DEGREE == 111.0
        assert config.buffer_segments == DEFAULT_BUFFER_SEGMENTS
        assert config.logging_level == logging.INFO
        assert config.defaults == RequestDefaults(nearest_k=5, distance_km=None)

    def test_log_level_case_insensitive(self):
        assert EngineConfig(log_level="debug").logging_level == logging.DEBUG


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {'km_per_degree': 0},
            {'km_per_degree': -111.0},
            {'buffer_segments': 4},
            {'buffer_segments': 16.0},
            {'buffer_segments': True},
            {'log_level': 'LOUD'},
        ],
    )
    def test_invalid_engine_config(self, kwargs):
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {'nearest_k': 0},
            {'nearest_k': 2.5},
            {'nearest_k': False},
            {'distance_km': 0},
            {'distance_km': -3.0},
        ],
    )
    def test_invalid_request_defaults(self, kwargs):
        with pytest.raises(ValueError):
            RequestDefaults(**kwargs)

    def test_disabled_defaults(self):
        defaults = RequestDefaults(nearest_k=None)
        assert defaults.nearest_k is None


class TestFromDict:
    def test_partial(self):
        config = EngineConfig.from_dict({'buffer_segments': 16})
        assert config.buffer_segments == 16
        assert config.km_per_degree == 111.0

    def test_nested_defaults(self):
        config = EngineConfig.from_dict({'defaults': {'nearest_k': 3, 'distance_km': 2.0}})
        assert config.defaults.nearest_k == 3
        assert config.defaults.distance_km == 2.0

    def test_none_is_default(self):
        assert EngineConfig.from_dict(None) == EngineConfig()

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            EngineConfig.from_dict({'km_per_degre': 100})

    def test_unknown_defaults_key(self):
        with pytest.raises(TypeError):
            EngineConfig.from_dict({'defaults': {'k': 3}})


class TestFromYaml:
    def test_load(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text(
            "km_per_degree: 100.0\n"
            "buffer_segments: 32\n"
            "log_level: WARNING\n"
            "defaults:\n"
            "  nearest_k: 4\n"
            "  distance_km: null\n"
        )
        config = EngineConfig.from_yaml(path)

        assert config.km_per_degree == 100.0
        assert config.buffer_segments == 32
        assert config.logging_level == logging.WARNING
        assert config.defaults.nearest_k == 4
        assert config.defaults.distance_km is None

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert EngineConfig.from_yaml(path) == EngineConfig()

    def test_string_path(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("buffer_segments: 12\n")
        assert EngineConfig.from_yaml(str(path)).buffer_segments == 12

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            EngineConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("defaults: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            EngineConfig.from_yaml(path)

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            EngineConfig.from_yaml(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("buffer_segments: 2\n")
        with pytest.raises(ValueError):
            EngineConfig.from_yaml(path)
