"""
Configuration management and loading.

Handles application settings from an optional YAML file.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from lab_tools.core.matrix import MAX_DIMENSION
from lab_tools.storage.log_file import DEFAULT_LOG_FILE
from lab_tools.storage.models import MAX_NAME_LENGTH
from lab_tools.storage.repository import DEFAULT_CAPACITY


@dataclass(frozen=True)
class LogAnalyzerConfig:
    """Settings for the log analyzer."""
    log_file: str = DEFAULT_LOG_FILE

    def __post_init__(self):
        """Validate the log file path is usable."""
        if not isinstance(self.log_file, str) or not self.log_file.strip():
            raise ValueError("log_file must be a non-empty string")


@dataclass(frozen=True)
class InventoryConfig:
    """Limits for the inventory manager."""
    capacity: int = DEFAULT_CAPACITY
    max_name_length: int = MAX_NAME_LENGTH

    def __post_init__(self):
        """Validate limits are positive."""
        if self.capacity <= 0:
            raise ValueError("capacity must be > 0")
        if self.max_name_length <= 0:
            raise ValueError("max_name_length must be > 0")


@dataclass(frozen=True)
class MatrixConfig:
    """Limits for the matrix calculator."""
    max_dimension: int = MAX_DIMENSION

    def __post_init__(self):
        """Validate the dimension limit is positive."""
        if self.max_dimension <= 0:
            raise ValueError("max_dimension must be > 0")


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    log_analyzer: LogAnalyzerConfig = field(default_factory=LogAnalyzerConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    matrix: MatrixConfig = field(default_factory=MatrixConfig)


_SECTION_KEYS = {
    'log_analyzer': {'log_file'},
    'inventory': {'capacity', 'max_name_length'},
    'matrix': {'max_dimension'},
}


def load_config(path: Optional[str] = None) -> AppConfig:
    """Load and validate configuration from a YAML file.

    Every section and key is optional. Unknown keys are rejected so a
    typo never silently falls back to a default.

    Args:
        path: Path to YAML configuration file, or None for defaults

    Returns:
        Validated AppConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    if path is None:
        return AppConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if raw_config is None:
        return AppConfig()
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping of sections")

    unknown_keys = set(raw_config.keys()) - set(_SECTION_KEYS)
    if unknown_keys:
        raise ValueError(f"Unknown configuration sections: {unknown_keys}")

    sections = {
        name: _section(raw_config, name) for name in _SECTION_KEYS
    }

    log_data = sections['log_analyzer']
    inventory_data = sections['inventory']
    matrix_data = sections['matrix']

    return AppConfig(
        log_analyzer=LogAnalyzerConfig(
            log_file=log_data.get('log_file', DEFAULT_LOG_FILE)
        ),
        inventory=InventoryConfig(
            capacity=_positive_int(inventory_data, 'capacity', DEFAULT_CAPACITY, 'inventory'),
            max_name_length=_positive_int(inventory_data, 'max_name_length', MAX_NAME_LENGTH, 'inventory'),
        ),
        matrix=MatrixConfig(
            max_dimension=_positive_int(matrix_data, 'max_dimension', MAX_DIMENSION, 'matrix'),
        ),
    )


def _section(raw_config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return one validated section, or an empty dict if it is absent."""
    data = raw_config.get(name)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be a dictionary")

    unknown_keys = set(data.keys()) - _SECTION_KEYS[name]
    if unknown_keys:
        raise ValueError(f"Unknown keys in {name}: {unknown_keys}")
    return data


def _positive_int(data: Dict[str, Any], key: str, default: int, path: str) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"'{key}' in {path} must be a positive integer")
    return value
