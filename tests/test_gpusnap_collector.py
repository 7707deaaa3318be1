"""Tests for the GPU telemetry collector."""

import logging
import sys

import pytest

from fakes import NVIDIA_SAMPLE_LINE, VM_STAT_OUTPUT, apple_responses, nvidia_query_key, nvidia_responses
from gpusnap import collector as collector_mod
from gpusnap.collector import GpuTelemetryCollector, collect_snapshot
from gpusnap.configs import Config, default_config
from gpusnap.hardware.runner import CommandRunner
from gpusnap.utils.errors import CommandError


def test_linux_with_nvidia(fake_runner) -> None:
    snapshot = GpuTelemetryCollector(runner=fake_runner(nvidia_responses()), platform="linux").collect()
    assert snapshot.has_nvidia_smi is True
    assert snapshot.has_mps is False
    assert snapshot.platform == "linux"
    assert [g.type for g in snapshot.gpus] == ["cuda"]
    assert snapshot.error is None
    assert snapshot.status_code == 200


def test_no_gpu_is_not_an_error(fake_runner) -> None:
    snapshot = GpuTelemetryCollector(runner=fake_runner(), platform="linux").collect()
    assert snapshot.to_dict() == {
        "hasNvidiaSmi": False,
        "hasMps": False,
        "platform": "linux",
        "gpus": [],
    }
    assert snapshot.status_code == 200


def test_probe_failure_never_invokes_query(fake_runner) -> None:
    runner = fake_runner({nvidia_query_key(): NVIDIA_SAMPLE_LINE})
    snapshot = GpuTelemetryCollector(runner=runner, platform="linux").collect()
    assert snapshot.has_nvidia_smi is False
    assert not any(g.type == "cuda" for g in snapshot.gpus)
    assert all(args != nvidia_query_key() for args, _ in runner.calls)


@pytest.mark.parametrize("platform", ["linux", "win32", "freebsd"])
def test_mps_never_reported_off_macos(fake_runner, platform: str) -> None:
    runner = fake_runner({**apple_responses(), **nvidia_responses(), ("nvidia-smi", "-L"): "GPU 0\n"})
    snapshot = GpuTelemetryCollector(runner=runner, platform=platform).collect()
    assert snapshot.has_mps is False
    assert not any(g.type == "mps" for g in snapshot.gpus)
    assert not runner.called("sysctl")


def test_apple_silicon_host(fake_runner) -> None:
    snapshot = GpuTelemetryCollector(runner=fake_runner(apple_responses()), platform="darwin").collect()
    assert snapshot.has_mps is True
    assert snapshot.has_nvidia_smi is False
    assert len(snapshot.gpus) == 1
    gpu = snapshot.gpus[0]
    assert gpu.type == "mps"
    assert gpu.memory.total == 16384


def test_intel_mac_has_no_mps(fake_runner) -> None:
    runner = fake_runner(apple_responses(brand="Intel Core i9\n"))
    snapshot = GpuTelemetryCollector(runner=runner, platform="darwin").collect()
    assert snapshot.has_mps is False
    assert snapshot.gpus == ()
    assert snapshot.error is None


def test_macos_with_both_vendors_lists_cuda_first(fake_runner) -> None:
    runner = fake_runner({**nvidia_responses(), **apple_responses()})
    snapshot = GpuTelemetryCollector(runner=runner, platform="darwin").collect()
    assert snapshot.has_nvidia_smi and snapshot.has_mps
    assert [g.type for g in snapshot.gpus] == ["cuda", "mps"]


def test_vm_stat_failure_still_returns_mps_record(fake_runner) -> None:
    responses = apple_responses(vm_stat=CommandError(["vm_stat"], "command not found"))
    snapshot = GpuTelemetryCollector(runner=fake_runner(responses), platform="darwin").collect()
    data = snapshot.to_dict()
    assert data["hasMps"] is True
    assert data["gpus"][0]["memory"]["used"] == "N/A"
    assert data["gpus"][0]["memory"]["free"] == "N/A"


def test_unexpected_failure_is_captured(fake_runner, caplog: pytest.LogCaptureFixture) -> None:
    runner = fake_runner({("which", "nvidia-smi"): RuntimeError("boom")})
    with caplog.at_level(logging.ERROR, logger="gpusnap.collector"):
        snapshot = GpuTelemetryCollector(runner=runner, platform="linux").collect()
    assert snapshot.has_nvidia_smi is False
    assert snapshot.has_mps is False
    assert snapshot.gpus == ()
    assert snapshot.error == "Failed to fetch GPU stats: boom"
    assert snapshot.status_code == 500
    assert "Error fetching GPU stats" in caplog.text


def test_query_failure_after_successful_probe_fails_request(fake_runner) -> None:
    runner = fake_runner(
        {
            ("which", "nvidia-smi"): "/usr/bin/nvidia-smi\n",
            nvidia_query_key(): CommandError(["nvidia-smi"], "exited with status 9", returncode=9),
        }
    )
    snapshot = GpuTelemetryCollector(runner=runner, platform="linux").collect()
    assert snapshot.status_code == 500
    assert snapshot.error.startswith("Failed to fetch GPU stats:")
    assert snapshot.has_nvidia_smi is False
    assert snapshot.gpus == ()


def test_each_collect_is_a_fresh_snapshot(fake_runner) -> None:
    runner = fake_runner(nvidia_responses())
    collector = GpuTelemetryCollector(runner=runner, platform="linux")
    first = collector.collect()
    runner.responses[nvidia_query_key()] = "0, Test GPU, 525.60, 80, 99, 5, 8192, 100, 8092, 250.0, 300.0, 1500, 7000, 90\n"
    second = collector.collect()
    assert first.gpus[0].temperature == 45
    assert second.gpus[0].temperature == 80


def test_platform_defaults_to_host(fake_runner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(collector_mod, "detect_platform", lambda: "linux")
    snapshot = GpuTelemetryCollector(runner=fake_runner()).collect()
    assert snapshot.platform == "linux"


def test_config_sets_timeout_and_device_order(fake_runner) -> None:
    config = default_config()
    config.update({"collector": {"command_timeout_seconds": 2, "cuda_device_order": "FASTEST_FIRST"}})
    collector = GpuTelemetryCollector(config=config, platform="linux")
    assert isinstance(collector.runner, CommandRunner)
    assert collector.runner.timeout == 2.0

    runner = fake_runner(nvidia_responses())
    GpuTelemetryCollector(runner=runner, config=config, platform="linux").collect()
    query_env = [env for args, env in runner.calls if args == nvidia_query_key()][0]
    assert query_env == {"CUDA_DEVICE_ORDER": "FASTEST_FIRST"}


def test_collect_snapshot_wrapper(fake_runner) -> None:
    snapshot = collect_snapshot(runner=fake_runner(), platform="win32", config=Config({}))
    assert snapshot.platform == "win32"
    assert snapshot.gpus == ()


def _write_tool(directory, name: str, body: str) -> None:  # noqa: ANN001
    path = directory / name
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(0o755)


@pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell scripts as fake tools")
def test_undecodable_tool_output_still_yields_mps_record(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_tool(
        tmp_path,
        "sysctl",
        'case "$2" in\n'
        '  machdep.cpu.brand_string) echo "Apple M2 Pro" ;;\n'
        "  hw.memsize) echo 17179869184 ;;\n"
        "esac\n",
    )
    lines = " ".join(f"'{line}'" for line in VM_STAT_OUTPUT.splitlines())
    _write_tool(tmp_path, "vm_stat", f"printf '%s\\n' {lines}\n")
    _write_tool(
        tmp_path,
        "system_profiler",
        "printf 'Graphics/Displays:\\n  Chipset Model: Apple M2 Pro \\377\\376\\n  Total Number of Cores: 19\\n'\n",
    )
    monkeypatch.setenv("PATH", str(tmp_path))

    snapshot = GpuTelemetryCollector(platform="darwin").collect()

    assert snapshot.error is None
    assert snapshot.has_mps is True
    gpu = snapshot.gpus[0]
    assert gpu.type == "mps"
    assert gpu.cores == 19
    assert gpu.memory.used == 2048
