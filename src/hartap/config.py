"""
HarTap Convert Configuration

YAML-loadable settings for the convert pipeline. Command-line flags override
values read from a config file.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

import yaml

OUTPUT_FORMATS = ('yaml', 'json')
LOG_LEVELS = ('debug', 'info', 'warning', 'error')


@dataclass
class ConvertConfig:
    """Settings for one HAR to OpenAPI conversion."""

    # Document metadata
    title: str = "Unofficial API Reference"
    version: str = "0.1.0"
    description: Optional[str] = None
    server_url: Optional[str] = None  # derived from the first entry when unset

    # Output
    output_dir: str = "./docs"
    format: str = "yaml"
    redact: bool = True
    docs: bool = True
    spec_url: str = "./openapi/openapi.yaml"
    normalize_paths: bool = True

    # Entry filtering
    filter_hosts: List[str] = field(default_factory=list)
    filter_regex: Optional[str] = None
    successful_only: bool = True
    drop_preflight: bool = True

    log_level: str = "info"

    def __post_init__(self):
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f'Invalid format "{self.format}". Must be "yaml" or "json".')
        if not isinstance(self.log_level, str) or self.log_level.lower() not in LOG_LEVELS:
            raise ValueError(f'Invalid log level "{self.log_level}". Must be one of: {", ".join(LOG_LEVELS)}')
        self.filter_hosts = _host_list(self.filter_hosts)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConvertConfig':
        """
        Create config from a dictionary.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")

        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'ConvertConfig':
        """
        Load config from a YAML file. An empty file yields the defaults.

        Raises:
            ValueError: If the file is not valid YAML or holds invalid settings
        """
        with open(yaml_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid config file {yaml_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {yaml_path}")

        return cls.from_dict(data)

    def merge_cli_overrides(self, **overrides: Any) -> 'ConvertConfig':
        """Return a copy where every non-None override replaces the current value."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


def _host_list(value: Any) -> List[str]:
    """Accept a list of hosts or a single comma-separated string, as on the command line."""
    if value is None:
        return []
    if isinstance(value, str):
        return [h.strip() for h in value.split(',') if h.strip()]
    if isinstance(value, (list, tuple)) and all(isinstance(h, str) for h in value):
        return list(value)
    raise ValueError(f"filter_hosts must be a list of host names, got: {value!r}")
