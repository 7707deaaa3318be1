"""Configuration load/save and defaults."""

from .config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG,
    Config,
    ConfigManager,
    default_config,
    load_config,
)

__all__ = [
    "Config",
    "ConfigManager",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG",
    "default_config",
    "load_config",
]
