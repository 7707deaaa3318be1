"""Host platform identification and tool availability checks."""

import sys
from typing import Optional

from .runner import CommandRunner

PLATFORM_LINUX = "linux"
PLATFORM_MACOS = "darwin"
PLATFORM_WINDOWS = "win32"

NVIDIA_SMI = "nvidia-smi"


def detect_platform(raw: Optional[str] = None) -> str:
    """Return the host platform identifier.

    Args:
        raw: Optional sys.platform-style value to normalize (defaults to sys.platform)

    Returns:
        "linux", "darwin", "win32", or the raw family name for other hosts
        (e.g. "freebsd13" becomes "freebsd")
    """
    value = (raw if raw is not None else sys.platform).lower()
    if value.startswith("linux"):
        return PLATFORM_LINUX
    if value in ("win32", "cygwin"):
        return PLATFORM_WINDOWS
    if value.startswith("freebsd"):
        return "freebsd"
    if value.startswith("openbsd"):
        return "openbsd"
    return value


def command_available(runner: CommandRunner, cmd_name: str) -> bool:
    """Check if a command is on PATH using `which`.

    Args:
        runner: Command runner used for the probe
        cmd_name: Command name (e.g. "nvidia-smi")

    Returns:
        True if `which` finds the command
    """
    return runner.succeeds(["which", cmd_name])


def nvidia_smi_available(runner: CommandRunner, platform: str) -> bool:
    """Probe for nvidia-smi without parsing any output.

    POSIX hosts check PATH with `which`. Windows has no `which`, and the
    driver installer usually puts nvidia-smi on PATH, so it is invoked
    directly with `-L`.
    """
    if platform == PLATFORM_WINDOWS:
        return runner.succeeds([NVIDIA_SMI, "-L"])
    return command_available(runner, NVIDIA_SMI)
