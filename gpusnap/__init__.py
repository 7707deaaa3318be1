"""gpusnap: point-in-time GPU telemetry for NVIDIA and Apple Silicon hosts.

Provides:
- collector (GpuTelemetryCollector, collect_snapshot)
- schema (TelemetrySnapshot, GpuRecord, UNKNOWN)
- hardware (nvidia-smi and macOS tool queries behind a CommandRunner)
- configs (Config, ConfigManager, load_config)
- api (create_app: FastAPI app serving GET /gpu)
- client (fetch_snapshot)
"""

from gpusnap.collector import GpuTelemetryCollector, collect_snapshot
from gpusnap.configs import Config, ConfigManager, load_config
from gpusnap.hardware import CommandRunner
from gpusnap.schema import (
    UNKNOWN,
    ClockInfo,
    FanInfo,
    GpuRecord,
    MemoryInfo,
    PowerInfo,
    TelemetrySnapshot,
    Utilization,
    is_known,
)
from gpusnap.utils.errors import (
    CommandError,
    ConfigError,
    GpuSnapError,
    ParseError,
    ServiceUnavailableError,
)

__version__ = "0.1.0"

__all__ = [
    "GpuTelemetryCollector",
    "collect_snapshot",
    "CommandRunner",
    "Config",
    "ConfigManager",
    "load_config",
    "UNKNOWN",
    "is_known",
    "TelemetrySnapshot",
    "GpuRecord",
    "Utilization",
    "MemoryInfo",
    "PowerInfo",
    "ClockInfo",
    "FanInfo",
    "GpuSnapError",
    "CommandError",
    "ParseError",
    "ConfigError",
    "ServiceUnavailableError",
]
