"""Custom exceptions for gpusnap.

Callers can tell a missing tool apart from a parse failure and from a
broken configuration, and handle each at the narrowest scope.
"""

from typing import Optional, Sequence


class GpuSnapError(Exception):
    """Base exception for all gpusnap errors."""

    pass


class CommandError(GpuSnapError):
    """Raised when an external tool is missing, exits non-zero, or times out."""

    def __init__(
        self,
        command: Sequence[str],
        message: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{' '.join(self.command)}: {message}")


class ParseError(GpuSnapError):
    """Raised when tool output does not have the expected shape."""

    pass


class ConfigError(GpuSnapError):
    """Raised when configuration is invalid or a config file cannot be read."""

    pass


class ServiceUnavailableError(GpuSnapError):
    """Raised when a remote gpusnap service cannot be reached."""

    pass
