"""Shared utilities: exceptions and logging setup."""

from .errors import (
    CommandError,
    ConfigError,
    GpuSnapError,
    ParseError,
    ServiceUnavailableError,
)
from .log import LOG_FORMAT, configure_logging

__all__ = [
    "GpuSnapError",
    "CommandError",
    "ParseError",
    "ConfigError",
    "ServiceUnavailableError",
    "LOG_FORMAT",
    "configure_logging",
]
