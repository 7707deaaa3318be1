"""Configuration management for gpusnap."""

import copy
import json
import os
from typing import Any

import yaml

from gpusnap.utils.errors import ConfigError

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)

CONFIG_ENV_VAR = "GPUSNAP_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "collector": {
        "command_timeout_seconds": 5,
        "cuda_device_order": "PCI_BUS_ID",
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8000,
    },
    "dashboard": {
        "url": "http://127.0.0.1:8000/gpu",
        "refresh_seconds": 5,
    },
    "logging": {
        "level": "INFO",
    },
}


class Config:
    """Unified configuration container for gpusnap."""

    def __init__(self, config_dict: dict[str, Any] | None = None):
        """Initialize configuration.

        Args:
            config_dict: Optional dictionary to use as base (deep copy)
        """
        self.config = copy.deepcopy(config_dict or {})

    def update(self, config_dict: dict[str, Any]) -> None:
        """Update configuration with provided values.

        Nested sections are merged one level deep, so a file that only sets
        ``server.port`` keeps the default ``server.host``.

        Args:
            config_dict: Dictionary with configuration overrides
        """
        for key, value in config_dict.items():
            if isinstance(self.config.get(key), dict) and isinstance(value, dict):
                self.config[key] = {**self.config[key], **value}
            else:
                self.config[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Configuration key (e.g., 'server.port')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self.config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return copy.deepcopy(self.config)


def _ensure_parent_dir(filepath: str) -> None:
    parent = os.path.dirname(filepath) or "."
    os.makedirs(parent, exist_ok=True)


class ConfigManager:
    """Manages loading and saving configuration files.

    Empty files load as an empty Config.
    """

    @staticmethod
    def load_yaml(filepath: str) -> Config:
        """Load configuration from YAML file."""
        with open(filepath, encoding="utf-8") as f:
            return Config(yaml.safe_load(f))

    @staticmethod
    def load_json(filepath: str) -> Config:
        """Load configuration from JSON file."""
        with open(filepath, encoding="utf-8") as f:
            text = f.read()
        return Config(json.loads(text) if text.strip() else None)

    @staticmethod
    def save_yaml(config: Config, filepath: str) -> None:
        """Save configuration to YAML file."""
        _ensure_parent_dir(filepath)
        with open(filepath, "w", encoding="utf-8") as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False)

    @staticmethod
    def save_json(config: Config, filepath: str, indent: int = 2) -> None:
        """Save configuration to JSON file."""
        _ensure_parent_dir(filepath)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=indent)

    @staticmethod
    def load(filepath: str) -> Config:
        """Load a YAML or JSON file, chosen by extension."""
        if filepath.endswith(JSON_SUFFIXES):
            return ConfigManager.load_json(filepath)
        if filepath.endswith(YAML_SUFFIXES):
            return ConfigManager.load_yaml(filepath)
        raise ConfigError(f"Unsupported config format (use .yaml, .yml or .json): {filepath}")

    @staticmethod
    def load_or_default(
        filepath: str | None = None,
        default_config: dict[str, Any] | None = None,
    ) -> Config:
        """Load configuration from file or return defaults.

        Args:
            filepath: Optional path to configuration file
            default_config: Optional default config dict if file not found

        Returns:
            Config object (file values merged over defaults)
        """
        base = Config(default_config or {})
        if not filepath or not os.path.exists(filepath):
            return base
        base.update(ConfigManager.load(filepath).config)
        return base


def default_config() -> Config:
    """Return a fresh Config holding the built-in defaults."""
    return Config(DEFAULT_CONFIG)


def load_config(filepath: str | None = None) -> Config:
    """Load gpusnap configuration.

    Args:
        filepath: Config file path; falls back to $GPUSNAP_CONFIG, then defaults

    Returns:
        Config with file values merged over DEFAULT_CONFIG

    Raises:
        ConfigError: The file is missing, unreadable, or not YAML/JSON
    """
    filepath = filepath or os.environ.get(CONFIG_ENV_VAR)
    if not filepath:
        return default_config()
    if not os.path.exists(filepath):
        raise ConfigError(f"Config file not found: {filepath}")
    try:
        loaded = ConfigManager.load(filepath)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not read config file {filepath}: {exc}") from exc
    if not isinstance(loaded.config, dict):
        raise ConfigError(f"Config file must contain a mapping: {filepath}")
    config = default_config()
    config.update(loaded.config)
    return config
