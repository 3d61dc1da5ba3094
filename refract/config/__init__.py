"""
Configuration Management for refract

YAML/JSON configuration with:
- Environment variable interpolation
- Layered configs merged over the defaults
- Validation of the logging and composition sections
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional, Union
import os
import re
import yaml
import json
from pathlib import Path

from ..errors import ConfigurationError
from ..logging import configure_logging, resolve_level


class Config:
    """
    Configuration with dict-like access.

    Supports:
    - Dot notation: config.logging.level
    - Dotted lookups with defaults: config.get("composition.strict", False)
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def __getattr__(self, name: str) -> Any:
        """Access config with dot notation."""
        if name.startswith("_"):
            return object.__getattribute__(self, name)

        if name in self._data:
            value = self._data[name]
            if isinstance(value, dict):
                return Config(value)
            return value

        raise AttributeError(f"Config has no attribute '{name}'")

    def __getitem__(self, key: str) -> Any:
        """Access config with bracket notation."""
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Get value with default."""
        keys = key.split(".")
        value = self._data

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return self._data

    def __repr__(self) -> str:
        return f"Config({self._data})"


def load_yaml(path: Union[str, Path]) -> Config:
    """
    Load YAML config file.

    Args:
        path: Path to YAML file

    Returns:
        Config object
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    return Config(_interpolate_env_vars(data))


def load_json(path: Union[str, Path]) -> Config:
    """
    Load JSON config file.

    Args:
        path: Path to JSON file

    Returns:
        Config object
    """
    with open(path, "r") as f:
        data = json.load(f)

    return Config(_interpolate_env_vars(data))


_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


def _interpolate_env_vars(data: Any) -> Any:
    """Recursively interpolate environment variables."""
    if isinstance(data, dict):
        return {k: _interpolate_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_interpolate_env_vars(item) for item in data]
    elif isinstance(data, str):
        # Unset variables are left as written
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), data)
    else:
        return data


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Config:
    """Merge two config dictionaries, recursing into nested sections."""
    merged = base.copy()

    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value).to_dict()
        else:
            merged[key] = value

    return Config(merged)


# Default configuration for refract
DEFAULT_CONFIG = """
logging:
  level: WARNING
  format: plain

composition:
  strict: false
"""


def get_default_config() -> Config:
    """Get default refract configuration."""
    return Config(yaml.safe_load(DEFAULT_CONFIG))


@dataclass(frozen=True)
class RefractSettings:
    """Settings resolved from a config."""

    strict_composition: bool = False
    log_level: int = resolve_level("WARNING")
    log_format: str = "plain"


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ConfigurationError(f"Expected a boolean for {key}, got {value!r}", config_key=key)


def apply_config(
    config: Optional[Union[Config, Dict[str, Any]]] = None, stream: Any = None
) -> RefractSettings:
    """
    Validate ``config`` over the defaults and apply its logging section.

    Args:
        config: Config or plain dict; missing keys fall back to the defaults
        stream: Stream for the log handler (defaults to stderr)

    Returns:
        The resolved settings

    Raises:
        ConfigurationError: On unknown levels or formats, or non-boolean flags
    """
    override = config.to_dict() if isinstance(config, Config) else (config or {})
    merged = merge_configs(get_default_config().to_dict(), override)

    settings = RefractSettings(
        strict_composition=_as_bool(
            merged.get("composition.strict"), "composition.strict"
        ),
        log_level=resolve_level(merged.get("logging.level")),
        log_format=merged.get("logging.format"),
    )
    configure_logging(settings.log_level, fmt=settings.log_format, stream=stream)
    return settings


__all__ = [
    "Config",
    "load_yaml",
    "load_json",
    "merge_configs",
    "DEFAULT_CONFIG",
    "get_default_config",
    "RefractSettings",
    "apply_config",
]
