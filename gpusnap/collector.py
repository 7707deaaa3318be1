"""GPU telemetry collector.

Detects which vendor tooling is present, queries it, and returns a
``TelemetrySnapshot``. ``collect()`` never raises: a failure anywhere that
is not handled by a narrower step becomes the snapshot's ``error``.
"""

import logging
from typing import List, Optional

from gpusnap.configs import Config, default_config
from gpusnap.hardware.apple import get_mps_info
from gpusnap.hardware.env import PLATFORM_MACOS, detect_platform, nvidia_smi_available
from gpusnap.hardware.nvidia import DEFAULT_CUDA_DEVICE_ORDER, query_gpu_stats
from gpusnap.hardware.runner import DEFAULT_COMMAND_TIMEOUT, CommandRunner
from gpusnap.schema import GpuRecord, TelemetrySnapshot

logger = logging.getLogger(__name__)


class GpuTelemetryCollector:
    """Produce a fresh telemetry snapshot per call.

    Args:
        runner: Command runner used for every tool invocation
        platform: Platform identifier override (defaults to the host's)
        config: Configuration; ``collector.*`` keys are read
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        platform: Optional[str] = None,
        config: Optional[Config] = None,
    ) -> None:
        self.config = config or default_config()
        self.runner = runner or CommandRunner(
            timeout=float(
                self.config.get("collector.command_timeout_seconds", DEFAULT_COMMAND_TIMEOUT)
            )
        )
        self.platform = platform
        self.cuda_device_order = str(
            self.config.get("collector.cuda_device_order", DEFAULT_CUDA_DEVICE_ORDER)
        )

    def _platform(self) -> str:
        return self.platform if self.platform is not None else detect_platform()

    def collect(self) -> TelemetrySnapshot:
        """Collect telemetry for all detected GPUs."""
        platform = self._platform()
        try:
            return self._collect(platform)
        except Exception as exc:
            logger.exception("Error fetching GPU stats")
            return TelemetrySnapshot.failed(platform, f"Failed to fetch GPU stats: {exc}")

    def _collect(self, platform: str) -> TelemetrySnapshot:
        gpus: List[GpuRecord] = []

        has_nvidia_smi = nvidia_smi_available(self.runner, platform)
        if has_nvidia_smi:
            gpus.extend(query_gpu_stats(self.runner, cuda_device_order=self.cuda_device_order))

        has_mps = False
        if platform == PLATFORM_MACOS:
            mps = get_mps_info(self.runner)
            if mps is not None:
                has_mps = True
                gpus.append(mps)

        logger.debug(
            "Collected %d GPU(s) on %s (nvidia-smi=%s, mps=%s)",
            len(gpus),
            platform,
            has_nvidia_smi,
            has_mps,
        )
        return TelemetrySnapshot(
            has_nvidia_smi=has_nvidia_smi,
            has_mps=has_mps,
            platform=platform,
            gpus=gpus,
        )


def collect_snapshot(
    runner: Optional[CommandRunner] = None,
    platform: Optional[str] = None,
    config: Optional[Config] = None,
) -> TelemetrySnapshot:
    """Convenience wrapper: build a collector and collect once."""
    return GpuTelemetryCollector(runner=runner, platform=platform, config=config).collect()
