"""Configuration module for resdk."""

from resdk.config.loader import get_config_path, load_config, save_config
from resdk.config.schema import Config, ResponsesConfig, ServerConfig, TelemetryConfig

__all__ = [
    "Config",
    "ResponsesConfig",
    "ServerConfig",
    "TelemetryConfig",
    "get_config_path",
    "load_config",
    "save_config",
]
