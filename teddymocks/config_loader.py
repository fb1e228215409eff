"""YAML configuration loader for teddymocks.yaml.

Reads an optional teddymocks.yaml from a project directory and converts it
into a TeddyMocksConfig. The pytest plugin loads it from the rootdir with
load_project_config() and installs it as the default for each test; other
callers pass the result to set_default_config() themselves.

Unknown fields and wrong value types are rejected with ConfigError so typos
do not silently fall back to defaults.

Example teddymocks.yaml:
    validate_arguments: true
    argument_comparison: identity
    swallow_constructor_errors: false
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

from teddymocks.config import TeddyMocksConfig
from teddymocks.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_FILENAME = "teddymocks.yaml"

_BOOL_FIELDS = frozenset({"validate_arguments", "swallow_constructor_errors"})
_ALLOWED_TOP_LEVEL_FIELDS = _BOOL_FIELDS | {"argument_comparison"}


class ConfigMissingError(ConfigError):
    """Raised when teddymocks.yaml is not found.

    Subclass of ConfigError so callers can catch either the missing-file
    case alone or every configuration problem.
    """

    directory: Path

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        super().__init__(f"{CONFIG_FILENAME} not found in {directory}")


def load_config(directory: Path) -> TeddyMocksConfig:
    """Load and validate teddymocks.yaml from a directory.

    Args:
        directory: Directory containing teddymocks.yaml.

    Returns:
        TeddyMocksConfig with file values over defaults.

    Raises:
        ConfigMissingError: If the file does not exist.
        ConfigError: If the file cannot be read, is not valid YAML, has
            unknown fields or invalid values.
    """
    config_file = directory / CONFIG_FILENAME
    if not config_file.exists():
        raise ConfigMissingError(directory)

    try:
        content = config_file.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read {config_file}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Failed to decode {config_file}: {e}") from e

    data = _parse_yaml(content)
    _validate_schema(data)
    return _build_config(data)


def load_project_config(directory: Path) -> TeddyMocksConfig:
    """Load teddymocks.yaml from a directory, or built-in defaults if absent.

    Invalid files still raise ConfigError.
    """
    try:
        return load_config(directory)
    except ConfigMissingError:
        return TeddyMocksConfig()


def _parse_yaml(content: str) -> dict[str, Any]:
    """Parse YAML content; empty documents become an empty dict."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {CONFIG_FILENAME}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(
            f"{CONFIG_FILENAME} must be a YAML mapping, got {type(data).__name__}"
        )
    return data


def _validate_schema(data: dict[str, Any]) -> None:
    unknown_fields = set(data.keys()) - _ALLOWED_TOP_LEVEL_FIELDS
    if unknown_fields:
        # str() so non-string YAML keys sort without TypeError
        first_unknown = sorted(str(k) for k in unknown_fields)[0]
        raise ConfigError(f"Unknown field '{first_unknown}' in {CONFIG_FILENAME}")

    for name in _BOOL_FIELDS & data.keys():
        if not isinstance(data[name], bool):
            raise ConfigError(
                f"{name} must be a boolean, got {type(data[name]).__name__}"
            )

    comparison = data.get("argument_comparison")
    if comparison is not None and not isinstance(comparison, str):
        raise ConfigError(
            f"argument_comparison must be a string, got {type(comparison).__name__}"
        )


def _build_config(data: dict[str, Any]) -> TeddyMocksConfig:
    config = TeddyMocksConfig(**data)
    errors = config.validate()
    if errors:
        raise ConfigError("; ".join(errors))
    return config
