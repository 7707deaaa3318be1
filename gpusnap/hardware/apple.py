"""Apple Silicon (MPS) GPU telemetry from macOS system utilities.

macOS has no GPU query tool comparable to nvidia-smi. The integrated GPU
shares unified memory with the CPU, so memory figures come from sysctl and
vm_stat, the core count from system_profiler, and utilization,
temperature, power, clocks and fan speed are reported as UNKNOWN.
"""

import logging
from typing import Optional, Tuple

from gpusnap.schema import (
    UNKNOWN,
    GpuRecord,
    MaybeInt,
    MemoryInfo,
    Utilization,
    is_known,
)
from gpusnap.utils.errors import CommandError, ParseError

from .parsers import pages_to_mb, parse_core_count, parse_vm_stat, round_half_up
from .runner import CommandRunner

logger = logging.getLogger(__name__)

APPLE_SILICON_BRAND_PREFIX = "Apple M"
APPLE_GPU_NAME = "Apple Silicon GPU"
BYTES_PER_GB = 1024 * 1024 * 1024

BRAND_STRING_COMMAND = ["sysctl", "-n", "machdep.cpu.brand_string"]
MEMSIZE_COMMAND = ["sysctl", "-n", "hw.memsize"]
VM_STAT_COMMAND = ["vm_stat"]
DISPLAYS_PROFILE_COMMAND = ["system_profiler", "SPDisplaysDataType"]


def is_apple_silicon(brand_string: str) -> bool:
    """Return True for an Apple M-series CPU brand string (e.g. "Apple M2 Pro")."""
    return APPLE_SILICON_BRAND_PREFIX in brand_string


def get_total_memory_gb(runner: CommandRunner) -> MaybeInt:
    """Physical memory in whole GB, UNKNOWN if hw.memsize is not an integer.

    Raises:
        CommandError: sysctl failed
    """
    raw = runner.run(MEMSIZE_COMMAND).strip()
    try:
        return round_half_up(int(raw) / BYTES_PER_GB)
    except ValueError:
        logger.warning("Unexpected hw.memsize value: %r", raw)
        return UNKNOWN


def get_memory_usage_mb(runner: CommandRunner) -> Tuple[MaybeInt, MaybeInt]:
    """Return (used_mb, free_mb) from vm_stat, or (UNKNOWN, UNKNOWN) on failure."""
    try:
        pages = parse_vm_stat(runner.run(VM_STAT_COMMAND))
    except CommandError as exc:
        logger.warning("Error getting memory stats: %s", exc)
        return UNKNOWN, UNKNOWN
    return pages_to_mb(pages.used), pages_to_mb(pages.free)


def get_gpu_core_count(runner: CommandRunner) -> Optional[int]:
    """Integrated GPU core count, or None when system_profiler does not report it."""
    try:
        return parse_core_count(runner.run(DISPLAYS_PROFILE_COMMAND))
    except (CommandError, ParseError) as exc:
        logger.warning("Could not read GPU core count: %s", exc)
        return None


def memory_utilization_percent(used_mb: MaybeInt, total_gb: MaybeInt) -> MaybeInt:
    """Percent of unified memory in use, UNKNOWN unless both operands are known."""
    if not is_known(used_mb) or not is_known(total_gb) or not total_gb:
        return UNKNOWN
    return round_half_up(used_mb / (total_gb * 1024) * 100)


def get_mps_info(runner: CommandRunner) -> Optional[GpuRecord]:
    """Build the Apple Silicon GPU record.

    Returns:
        A type="mps" GpuRecord, or None when the host is not Apple Silicon or
        the brand string / memory size cannot be queried
    """
    try:
        brand = runner.run(BRAND_STRING_COMMAND).strip()
    except CommandError as exc:
        logger.warning("Error detecting MPS: %s", exc)
        return None
    if not is_apple_silicon(brand):
        logger.debug("CPU brand %r is not Apple Silicon", brand)
        return None

    try:
        total_gb = get_total_memory_gb(runner)
    except CommandError as exc:
        logger.warning("Error detecting MPS: %s", exc)
        return None

    used_mb, free_mb = get_memory_usage_mb(runner)
    cores = get_gpu_core_count(runner)

    return GpuRecord(
        index=0,
        name=APPLE_GPU_NAME,
        type="mps",
        model=brand,
        cores=cores,
        memory=MemoryInfo(
            total=total_gb * 1024 if is_known(total_gb) else UNKNOWN,
            used=used_mb,
            free=free_mb,
        ),
        utilization=Utilization(
            gpu=UNKNOWN,
            memory=memory_utilization_percent(used_mb, total_gb),
        ),
    )
