"""Pipeline configuration"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..errors import ConfigError

OUTPUT_FORMATS = ('dot', 'json')


@dataclass
class PipelineConfig:
    # Paths ('-' or None means stdin / stdout)
    input_path: Optional[str] = None
    output_path: Optional[str] = None

    # Output
    output_format: str = 'dot'
    functions: List[str] = field(default_factory=list)

    # Processing
    n_jobs: int = 1
    chunk_size: int = 64
    show_progress: bool = False

    # Logging
    log_level: str = 'WARNING'

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Unknown output_format: {self.output_format}. Expected one of {list(OUTPUT_FORMATS)}"
            )
        if not isinstance(self.n_jobs, int) or self.n_jobs < 1:
            raise ConfigError(f"n_jobs must be a positive integer, got {self.n_jobs!r}")
        if not isinstance(self.chunk_size, int) or self.chunk_size < 1:
            raise ConfigError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")

    @classmethod
    def from_yaml(cls, path: str) -> 'PipelineConfig':
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        unknown = sorted(k for k in data if k not in cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown config keys in {path}: {unknown}")
        return cls(**data)

    def update(self, **overrides: Any) -> 'PipelineConfig':
        """Apply non-None overrides (e.g. CLI flags) and re-validate"""
        for key, value in overrides.items():
            if key not in self.__dataclass_fields__:
                raise ConfigError(f"Unknown config key: {key}")
            if value is not None:
                setattr(self, key, value)
        self.validate()
        return self

    def save(self, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
