"""NVIDIA GPU telemetry via nvidia-smi."""

import logging
import re
from typing import List, Optional

from gpusnap.schema import (
    UNKNOWN,
    ClockInfo,
    FanInfo,
    GpuRecord,
    MaybeFloat,
    MaybeInt,
    MemoryInfo,
    PowerInfo,
    Utilization,
)

from .env import NVIDIA_SMI
from .runner import CommandRunner

logger = logging.getLogger(__name__)

# Column order of the query; parse_gpu_line depends on it.
NVIDIA_QUERY_FIELDS = [
    "index",
    "name",
    "driver_version",
    "temperature.gpu",
    "utilization.gpu",
    "utilization.memory",
    "memory.total",
    "memory.free",
    "memory.used",
    "power.draw",
    "power.limit",
    "clocks.current.graphics",
    "clocks.current.memory",
    "fan.speed",
]

DEFAULT_CUDA_DEVICE_ORDER = "PCI_BUS_ID"

_INT_RE = re.compile(r"^[+-]?\d+")
_FLOAT_RE = re.compile(r"^[+-]?\d+(?:\.\d+)?")


def build_query_command(fields: Optional[List[str]] = None) -> List[str]:
    """Return the nvidia-smi argv for a header-less, unit-less CSV query."""
    query_string = ",".join(fields or NVIDIA_QUERY_FIELDS)
    return [
        NVIDIA_SMI,
        f"--query-gpu={query_string}",
        "--format=csv,noheader,nounits",
    ]


def _parse_int(text: str) -> MaybeInt:
    """Parse a leading integer ("1500.5" -> 1500); non-numeric values are UNKNOWN."""
    match = _INT_RE.match(text.strip())
    return int(match.group(0)) if match else UNKNOWN


def _parse_float(text: str) -> MaybeFloat:
    match = _FLOAT_RE.match(text.strip())
    return float(match.group(0)) if match else UNKNOWN


def _parse_fan_speed(text: str) -> int:
    # GPUs without a fan sensor report an empty or "[N/A]" field.
    value = _parse_int(text)
    return value if value is not UNKNOWN and value else 0


def parse_gpu_line(line: str) -> Optional[GpuRecord]:
    """Parse one nvidia-smi CSV line into a cuda GpuRecord.

    Args:
        line: e.g. "0, Test GPU, 525.60, 45, 10, 5, 8192, 6000, 2192, 50.5, 150.0, 1500, 7000, 30"

    Returns:
        GpuRecord, or None if the line does not carry the expected column count
    """
    values = [value.strip() for value in line.split(",")]
    if len(values) != len(NVIDIA_QUERY_FIELDS):
        return None

    (
        index,
        name,
        driver_version,
        temperature,
        gpu_util,
        memory_util,
        memory_total,
        memory_free,
        memory_used,
        power_draw,
        power_limit,
        clock_graphics,
        clock_memory,
        fan_speed,
    ) = values

    parsed_index = _parse_int(index)
    return GpuRecord(
        index=parsed_index if parsed_index is not UNKNOWN else 0,
        name=name,
        type="cuda",
        driver_version=driver_version,
        temperature=_parse_int(temperature),
        utilization=Utilization(gpu=_parse_int(gpu_util), memory=_parse_int(memory_util)),
        memory=MemoryInfo(
            total=_parse_int(memory_total),
            free=_parse_int(memory_free),
            used=_parse_int(memory_used),
        ),
        power=PowerInfo(draw=_parse_float(power_draw), limit=_parse_float(power_limit)),
        clocks=ClockInfo(graphics=_parse_int(clock_graphics), memory=_parse_int(clock_memory)),
        fan=FanInfo(speed=_parse_fan_speed(fan_speed)),
    )


def parse_gpu_stats(output: str) -> List[GpuRecord]:
    """Parse full nvidia-smi output, one GPU per non-blank line."""
    gpus: List[GpuRecord] = []
    for line in output.strip().splitlines():
        if not line.strip():
            continue
        record = parse_gpu_line(line)
        if record is None:
            logger.warning("Skipping malformed nvidia-smi line: %r", line)
            continue
        gpus.append(record)
    return gpus


def query_gpu_stats(
    runner: CommandRunner,
    cuda_device_order: str = DEFAULT_CUDA_DEVICE_ORDER,
) -> List[GpuRecord]:
    """Run the nvidia-smi query and return one record per GPU.

    CUDA_DEVICE_ORDER is forced so indices follow PCI bus order.

    Raises:
        CommandError: nvidia-smi failed
    """
    output = runner.run(
        build_query_command(),
        env_overrides={"CUDA_DEVICE_ORDER": cuda_device_order},
    )
    return parse_gpu_stats(output)
