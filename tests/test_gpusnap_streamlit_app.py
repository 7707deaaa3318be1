"""Tests for the Streamlit app's data-source helpers."""

import pytest

from gpusnap.configs import default_config
from gpusnap.schema import TelemetrySnapshot
from gpusnap.ui import streamlit_app


def _empty(platform: str) -> TelemetrySnapshot:
    return TelemetrySnapshot(has_nvidia_smi=False, has_mps=False, platform=platform)


def test_parse_args_ignores_streamlit_extras() -> None:
    args = streamlit_app._parse_args(["--url", "http://h/gpu", "--unknown", "x"])
    assert args.url == "http://h/gpu"
    assert args.config is None


def test_load_snapshot_from_service(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(streamlit_app, "fetch_snapshot", lambda url: _empty(url))
    snapshot = streamlit_app.load_snapshot(streamlit_app.SOURCE_SERVICE, "http://h/gpu", default_config())
    assert snapshot.platform == "http://h/gpu"


def test_load_snapshot_local(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def _collect(config):  # noqa: ANN001
        seen["config"] = config
        return _empty("linux")

    monkeypatch.setattr(streamlit_app, "collect_snapshot", _collect)
    config = default_config()
    snapshot = streamlit_app.load_snapshot(streamlit_app.SOURCE_LOCAL, "ignored", config)
    assert snapshot.platform == "linux"
    assert seen["config"] is config


class _Stopped(Exception):
    pass


def test_main_reports_bad_config_and_stops(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    shown = []

    def _stop():
        raise _Stopped()

    monkeypatch.delenv("GPUSNAP_CONFIG", raising=False)
    monkeypatch.setattr(streamlit_app.st, "error", shown.append)
    monkeypatch.setattr(streamlit_app.st, "stop", _stop)
    with pytest.raises(_Stopped):
        streamlit_app.main(["--config", str(tmp_path / "missing.yaml")])
    assert len(shown) == 1
    assert "not found" in shown[0]
