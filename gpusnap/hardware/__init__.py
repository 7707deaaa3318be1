"""Hardware detection and query utilities for gpusnap."""

from .apple import get_mps_info, is_apple_silicon
from .env import (
    PLATFORM_LINUX,
    PLATFORM_MACOS,
    PLATFORM_WINDOWS,
    command_available,
    detect_platform,
    nvidia_smi_available,
)
from .nvidia import (
    NVIDIA_QUERY_FIELDS,
    build_query_command,
    parse_gpu_line,
    parse_gpu_stats,
    query_gpu_stats,
)
from .parsers import match_labeled_int, parse_core_count, parse_vm_stat
from .runner import DEFAULT_COMMAND_TIMEOUT, CommandRunner

__all__ = [
    "CommandRunner",
    "DEFAULT_COMMAND_TIMEOUT",
    "PLATFORM_LINUX",
    "PLATFORM_MACOS",
    "PLATFORM_WINDOWS",
    "detect_platform",
    "command_available",
    "nvidia_smi_available",
    "NVIDIA_QUERY_FIELDS",
    "build_query_command",
    "parse_gpu_line",
    "parse_gpu_stats",
    "query_gpu_stats",
    "is_apple_silicon",
    "get_mps_info",
    "match_labeled_int",
    "parse_vm_stat",
    "parse_core_count",
]
