"""Configuration loading utilities."""

import json
import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pydantic
from loguru import logger

from resdk.config.schema import Config
from resdk.core.errors import ConfigError
from resdk.utils.helpers import ensure_dir, get_data_path

# Word starts: "notFound" -> "not|Found", "HTTPPort" -> "HTTP|Port".
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return get_data_path() / "config.json"


def load_config(config_path: Path | None = None, *, strict: bool = False) -> Config:
    """
    Load configuration from file, or defaults when the file does not exist.

    Args:
        config_path: Optional path to config file. Uses default if not provided.
        strict: Raise ``ConfigError`` for an unreadable or invalid file instead
            of falling back to defaults.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path) as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                raise ConfigError("Config root must be a JSON object")
            return Config(**convert_keys(raw))
        except (json.JSONDecodeError, pydantic.ValidationError, ConfigError) as e:
            if strict:
                if isinstance(e, ConfigError):
                    raise
                raise ConfigError(f"Invalid config at {path}: {e}") from e
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Using default configuration.")

    return Config()


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.

    Returns:
        The path written.
    """
    path = config_path or get_config_path()
    _atomic_write_config(path, config)
    return path


def _atomic_write_config(path: Path, config: Config) -> None:
    """Atomically write config as camelCase JSON."""
    ensure_dir(path.parent)
    data = convert_to_camel(config.model_dump())
    tmp_path = path.with_name(f".{path.name}.tmp-{os.getpid()}")
    with open(tmp_path, "w") as f:
        json.dump(data, f, indent=2)
    os.replace(tmp_path, path)


def _rekey(data: Any, rename: Callable[[str], str]) -> Any:
    if isinstance(data, dict):
        return {rename(key): _rekey(value, rename) for key, value in data.items()}
    if isinstance(data, list):
        return [_rekey(item, rename) for item in data]
    return data


def convert_keys(data: Any) -> Any:
    """Rename camelCase file keys to the snake_case field names."""
    return _rekey(data, camel_to_snake)


def convert_to_camel(data: Any) -> Any:
    """Rename snake_case field names to camelCase file keys."""
    return _rekey(data, snake_to_camel)


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
