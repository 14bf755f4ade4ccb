"""
Configuration schema for the spatial operation engine.

Engine settings (degree approximation, disk fidelity, log level) and the
caller-side request defaults used by the pin board. Both are immutable after
construction and validated in ``__post_init__``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import yaml

from geoai_engine.logging import LogEvent, create_logger, set_engine_level

KM_PER_DEGREE = 111.0
DEFAULT_BUFFER_SEGMENTS = 64

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}

logger = create_logger("config")


@dataclass(frozen=True)
class RequestDefaults:
    """
    Defaults filled in by the caller before a request reaches the engine.

    The dispatcher never applies these; missing params there are BadParams.
    """

    nearest_k: Optional[int] = 5
    distance_km: Optional[float] = None

    def __post_init__(self):
        """Validate defaults."""
        if self.nearest_k is not None:
            if isinstance(self.nearest_k, bool) or not isinstance(self.nearest_k, int):
                raise ValueError(
                    f"nearest_k must be an integer, got {self.nearest_k!r}"
                )
            if self.nearest_k <= 0:
                raise ValueError(f"nearest_k must be > 0, got {self.nearest_k}")

        if self.distance_km is not None and not self.distance_km > 0:
            raise ValueError(
                f"distance_km must be > 0, got {self.distance_km}"
            )


@dataclass(frozen=True)
class EngineConfig:
    """
    Main configuration for the spatial operation engine.

    Attributes:
        km_per_degree: Planar degree approximation used by every operation
        buffer_segments: Segments per quarter circle when building disks
        log_level: Level for engine loggers
        defaults: Caller-side request defaults
    """

    km_per_degree: float = KM_PER_DEGREE
    buffer_segments: int = DEFAULT_BUFFER_SEGMENTS
    log_level: str = "INFO"
    defaults: RequestDefaults = field(default_factory=RequestDefaults)

    def __post_init__(self):
        """Validate engine configuration."""
        if not self.km_per_degree > 0:
            raise ValueError(
                f"km_per_degree must be > 0, got {self.km_per_degree}"
            )

        if isinstance(self.buffer_segments, bool) or not isinstance(self.buffer_segments, int):
            raise ValueError(
                f"buffer_segments must be an integer, got {self.buffer_segments!r}"
            )
        if self.buffer_segments < 8:
            raise ValueError(
                f"buffer_segments must be >= 8, got {self.buffer_segments}"
            )

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(_LOG_LEVELS)}"
            )

    @property
    def logging_level(self) -> int:
        """Numeric level for the stdlib logging module."""
        return getattr(logging, self.log_level.upper())

    def configure_logging(self) -> None:
        """
        Apply log_level to the engine loggers.

        Building a config or a dispatcher never changes logger levels.
        """
        set_engine_level(self.logging_level)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EngineConfig":
        """Build a config from a plain mapping (missing keys use defaults)."""
        data = dict(data or {})
        defaults = RequestDefaults(**(data.pop("defaults", None) or {}))

        unknown = set(data) - {"km_per_degree", "buffer_segments", "log_level"}
        if unknown:
            raise ValueError(
                f"Unknown config keys: {', '.join(sorted(unknown))}"
            )

        return cls(defaults=defaults, **data)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "EngineConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            km_per_degree: 111.0
            buffer_segments: 64
            log_level: "INFO"

            defaults:
              nearest_k: 5
              distance_km: null
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise ValueError(
                f"Config root in {path} must be a mapping, got {type(data).__name__}"
            )

        config = cls.from_dict(data)
        logger.info(
            event=LogEvent.CONFIG_LOADED,
            message=f"Loaded engine config from {path}",
            metadata={
                'path': str(path),
                'buffer_segments': config.buffer_segments,
                'log_level': config.log_level,
            },
        )
        return config
