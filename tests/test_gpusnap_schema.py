"""Tests for the telemetry snapshot schema."""

import copy
import pickle

import pytest

from gpusnap.schema import (
    UNKNOWN,
    FanInfo,
    GpuRecord,
    MemoryInfo,
    TelemetrySnapshot,
    UnknownValue,
    Utilization,
    is_known,
)


def _cuda_record() -> GpuRecord:
    return GpuRecord(
        index=0,
        name="Test GPU",
        type="cuda",
        driver_version="525.60",
        temperature=45,
        utilization=Utilization(gpu=10, memory=5),
        memory=MemoryInfo(total=8192, free=6000, used=2192),
        fan=FanInfo(speed=30),
    )


def test_unknown_is_a_singleton() -> None:
    assert UnknownValue() is UNKNOWN
    assert copy.deepcopy(UNKNOWN) is UNKNOWN
    assert pickle.loads(pickle.dumps(UNKNOWN)) is UNKNOWN


def test_is_known_distinguishes_zero_from_unknown() -> None:
    assert is_known(0)
    assert is_known(0.0)
    assert not is_known(UNKNOWN)


def test_record_defaults_are_unknown() -> None:
    record = GpuRecord(index=0, name="x", type="mps")
    assert record.temperature is UNKNOWN
    assert record.power.draw is UNKNOWN
    assert record.clocks.graphics is UNKNOWN
    assert record.fan.speed is UNKNOWN


def test_cuda_record_to_dict_uses_camel_case_and_omits_absent_fields() -> None:
    data = _cuda_record().to_dict()
    assert data["driverVersion"] == "525.60"
    assert data["type"] == "cuda"
    assert data["memory"] == {"total": 8192, "free": 6000, "used": 2192}
    assert data["power"] == {"draw": "N/A", "limit": "N/A"}
    assert "model" not in data
    assert "cores" not in data


def test_mps_record_to_dict_has_no_driver_version() -> None:
    record = GpuRecord(index=0, name="Apple Silicon GPU", type="mps", model="Apple M2 Pro", cores=19)
    data = record.to_dict()
    assert "driverVersion" not in data
    assert data["model"] == "Apple M2 Pro"
    assert data["cores"] == 19
    assert data["temperature"] == "N/A"
    assert data["fan"] == {"speed": "N/A"}


def test_record_from_dict_maps_na_back_to_unknown() -> None:
    record = GpuRecord.from_dict(_cuda_record().to_dict())
    assert record == _cuda_record()
    assert record.power.draw is UNKNOWN


def test_snapshot_to_dict_shape() -> None:
    snapshot = TelemetrySnapshot(has_nvidia_smi=True, has_mps=False, platform="linux", gpus=[_cuda_record()])
    data = snapshot.to_dict()
    assert set(data) == {"hasNvidiaSmi", "hasMps", "platform", "gpus"}
    assert data["hasNvidiaSmi"] is True
    assert data["gpus"][0]["name"] == "Test GPU"
    assert snapshot.status_code == 200


def test_failed_snapshot_has_error_and_empty_defaults() -> None:
    snapshot = TelemetrySnapshot.failed("darwin", "Failed to fetch GPU stats: boom")
    data = snapshot.to_dict()
    assert data == {
        "hasNvidiaSmi": False,
        "hasMps": False,
        "platform": "darwin",
        "gpus": [],
        "error": "Failed to fetch GPU stats: boom",
    }
    assert snapshot.status_code == 500


def test_snapshot_from_dict_tolerates_missing_keys() -> None:
    snapshot = TelemetrySnapshot.from_dict({"platform": "linux"})
    assert snapshot.has_nvidia_smi is False
    assert snapshot.gpus == ()
    assert snapshot.error is None


def test_snapshot_gpus_are_immutable() -> None:
    snapshot = TelemetrySnapshot(has_nvidia_smi=True, has_mps=False, platform="linux", gpus=[_cuda_record()])
    assert isinstance(snapshot.gpus, tuple)
    with pytest.raises(AttributeError):
        snapshot.gpus.append(_cuda_record())
