"""Telemetry snapshot schema.

This module defines the JSON shape returned by ``GET /gpu`` and printed by
``gpusnap snapshot``. Sensors that a platform simply does not expose are
carried as the ``UNKNOWN`` marker rather than a sentinel number, and are
written to JSON as ``"N/A"``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple, Union

GpuType = Literal["cuda", "mps"]

UNKNOWN_JSON_VALUE = "N/A"


class UnknownValue:
    """Marker for a metric the underlying tool does not report."""

    _instance: Optional["UnknownValue"] = None

    def __new__(cls) -> "UnknownValue":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNKNOWN"

    def __reduce__(self):
        return (UnknownValue, ())


UNKNOWN = UnknownValue()

MaybeInt = Union[int, UnknownValue]
MaybeFloat = Union[float, UnknownValue]


def is_known(value: Any) -> bool:
    """Return True if value is a real reading rather than the UNKNOWN marker."""
    return value is not UNKNOWN


def _to_json(value: Any) -> Any:
    return UNKNOWN_JSON_VALUE if value is UNKNOWN else value


def _from_json(value: Any) -> Any:
    if value is None or value == UNKNOWN_JSON_VALUE:
        return UNKNOWN
    return value


@dataclass(frozen=True)
class Utilization:
    """GPU core and memory-controller utilization in percent."""

    gpu: MaybeInt = UNKNOWN
    memory: MaybeInt = UNKNOWN


@dataclass(frozen=True)
class MemoryInfo:
    """Memory totals in MB."""

    total: MaybeInt = UNKNOWN
    free: MaybeInt = UNKNOWN
    used: MaybeInt = UNKNOWN


@dataclass(frozen=True)
class PowerInfo:
    """Power draw and limit in watts."""

    draw: MaybeFloat = UNKNOWN
    limit: MaybeFloat = UNKNOWN


@dataclass(frozen=True)
class ClockInfo:
    """Current graphics and memory clocks in MHz."""

    graphics: MaybeInt = UNKNOWN
    memory: MaybeInt = UNKNOWN


@dataclass(frozen=True)
class FanInfo:
    """Fan speed in percent."""

    speed: MaybeInt = UNKNOWN


@dataclass(frozen=True)
class GpuRecord:
    """Normalized telemetry for one GPU.

    Attributes:
        index: Device index (nvidia-smi index, 0 for Apple Silicon)
        name: Human-readable GPU name
        type: "cuda" for NVIDIA GPUs, "mps" for Apple Silicon
        driver_version: NVIDIA driver version, absent for Apple Silicon
        temperature: Core temperature in Celsius
        model: Raw chip brand string (Apple Silicon only)
        cores: GPU core count when system_profiler reports it
    """

    index: int
    name: str
    type: GpuType
    driver_version: Optional[str] = None
    temperature: MaybeInt = UNKNOWN
    utilization: Utilization = field(default_factory=Utilization)
    memory: MemoryInfo = field(default_factory=MemoryInfo)
    power: PowerInfo = field(default_factory=PowerInfo)
    clocks: ClockInfo = field(default_factory=ClockInfo)
    fan: FanInfo = field(default_factory=FanInfo)
    model: Optional[str] = None
    cores: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Export as the camelCase JSON shape consumed by dashboards."""
        payload: Dict[str, Any] = {
            "index": self.index,
            "name": self.name,
        }
        if self.driver_version is not None:
            payload["driverVersion"] = self.driver_version
        payload.update(
            {
                "temperature": _to_json(self.temperature),
                "utilization": {
                    "gpu": _to_json(self.utilization.gpu),
                    "memory": _to_json(self.utilization.memory),
                },
                "memory": {
                    "total": _to_json(self.memory.total),
                    "free": _to_json(self.memory.free),
                    "used": _to_json(self.memory.used),
                },
                "power": {
                    "draw": _to_json(self.power.draw),
                    "limit": _to_json(self.power.limit),
                },
                "clocks": {
                    "graphics": _to_json(self.clocks.graphics),
                    "memory": _to_json(self.clocks.memory),
                },
                "fan": {"speed": _to_json(self.fan.speed)},
                "type": self.type,
            }
        )
        if self.model is not None:
            payload["model"] = self.model
        if self.cores is not None:
            payload["cores"] = self.cores
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "GpuRecord":
        """Build a record from its JSON shape; "N/A" and null become UNKNOWN."""
        utilization = payload.get("utilization") or {}
        memory = payload.get("memory") or {}
        power = payload.get("power") or {}
        clocks = payload.get("clocks") or {}
        fan = payload.get("fan") or {}
        return cls(
            index=int(payload.get("index", 0)),
            name=str(payload.get("name", "")),
            type=payload.get("type", "cuda"),
            driver_version=payload.get("driverVersion"),
            temperature=_from_json(payload.get("temperature")),
            utilization=Utilization(
                gpu=_from_json(utilization.get("gpu")),
                memory=_from_json(utilization.get("memory")),
            ),
            memory=MemoryInfo(
                total=_from_json(memory.get("total")),
                free=_from_json(memory.get("free")),
                used=_from_json(memory.get("used")),
            ),
            power=PowerInfo(
                draw=_from_json(power.get("draw")),
                limit=_from_json(power.get("limit")),
            ),
            clocks=ClockInfo(
                graphics=_from_json(clocks.get("graphics")),
                memory=_from_json(clocks.get("memory")),
            ),
            fan=FanInfo(speed=_from_json(fan.get("speed"))),
            model=payload.get("model"),
            cores=payload.get("cores"),
        )


@dataclass(frozen=True)
class TelemetrySnapshot:
    """One point-in-time collection result. Never persisted.

    ``gpus`` is stored as a tuple; any iterable passed in is converted.
    """

    has_nvidia_smi: bool
    has_mps: bool
    platform: str
    gpus: Tuple[GpuRecord, ...] = ()
    error: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "gpus", tuple(self.gpus))

    @property
    def status_code(self) -> int:
        """HTTP status matching this snapshot: 500 when collection failed."""
        return 500 if self.error else 200

    def to_dict(self) -> Dict[str, Any]:
        """Export as the ``GET /gpu`` response body."""
        payload: Dict[str, Any] = {
            "hasNvidiaSmi": self.has_nvidia_smi,
            "hasMps": self.has_mps,
            "platform": self.platform,
            "gpus": [gpu.to_dict() for gpu in self.gpus],
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "TelemetrySnapshot":
        """Parse a ``GET /gpu`` response body."""
        return cls(
            has_nvidia_smi=bool(payload.get("hasNvidiaSmi", False)),
            has_mps=bool(payload.get("hasMps", False)),
            platform=str(payload.get("platform", "")),
            gpus=[GpuRecord.from_dict(item) for item in payload.get("gpus") or []],
            error=payload.get("error"),
        )

    @classmethod
    def failed(cls, platform: str, message: str) -> "TelemetrySnapshot":
        """Snapshot returned when collection fails as a whole."""
        return cls(
            has_nvidia_smi=False,
            has_mps=False,
            platform=platform,
            gpus=(),
            error=message,
        )
