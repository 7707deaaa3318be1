"""GPU panel component for gpusnap dashboards."""

from __future__ import annotations

from typing import Any

from gpusnap.schema import GpuRecord, TelemetrySnapshot, is_known
from gpusnap.ui.theme import DARK_THEME, GpusnapTheme


def _known(value: Any) -> Any:
    return value if is_known(value) else None


def _fmt(value: Any, suffix: str = "", precision: int = 0) -> str:
    if value is None:
        return "N/A"
    return f"{float(value):.{precision}f}{suffix}"


def thermal_state(temperature: float | None) -> str:
    """Classify a GPU temperature into green / amber / red."""
    if temperature is None:
        return "N/A"
    if temperature < 70:
        return "green"
    if temperature <= 85:
        return "amber"
    return "red"


def gpu_display_row(gpu: GpuRecord) -> dict[str, Any]:
    """Flatten a GpuRecord into display values; unknown readings become None."""
    used = _known(gpu.memory.used)
    total = _known(gpu.memory.total)
    memory_percent = used / total * 100.0 if used is not None and total else None
    temperature = _known(gpu.temperature)
    return {
        "label": f"[{gpu.type}] {gpu.index}: {gpu.name}",
        "type": gpu.type,
        "model": gpu.model,
        "driver_version": gpu.driver_version,
        "cores": gpu.cores,
        "utilization_percent": _known(gpu.utilization.gpu),
        "temperature_c": temperature,
        "thermal_state": thermal_state(temperature),
        "power_draw_w": _known(gpu.power.draw),
        "power_limit_w": _known(gpu.power.limit),
        "memory_used_mb": used,
        "memory_total_mb": total,
        "memory_percent": memory_percent,
        "clock_graphics_mhz": _known(gpu.clocks.graphics),
        "clock_memory_mhz": _known(gpu.clocks.memory),
        "fan_percent": _known(gpu.fan.speed),
    }


class GpuPanel:
    """Render capability flags and per-GPU live metrics for one snapshot."""

    def __init__(
        self,
        snapshot: TelemetrySnapshot,
        theme: GpusnapTheme = DARK_THEME,
    ) -> None:
        self.snapshot = snapshot
        self.theme = theme

    def to_dict(self) -> dict[str, Any]:
        """Return serializable panel payload."""
        return {
            "platform": self.snapshot.platform,
            "capabilities": {
                "nvidia_smi": self.snapshot.has_nvidia_smi,
                "mps": self.snapshot.has_mps,
            },
            "gpus": [gpu_display_row(gpu) for gpu in self.snapshot.gpus],
            "error": self.snapshot.error,
        }

    def _render_gpu(self, row: dict[str, Any]) -> None:
        import streamlit as st

        details = [f"<div><b>Type:</b> {row['type']}</div>"]
        if row["model"]:
            details.append(f"<div><b>Model:</b> {row['model']}</div>")
        if row["driver_version"]:
            details.append(f"<div><b>Driver:</b> {row['driver_version']}</div>")
        if row["cores"] is not None:
            details.append(f"<div><b>GPU Cores:</b> {row['cores']}</div>")
        st.markdown(
            f"<div style='background:{self.theme.card_color};padding:10px;border-radius:8px;'>"
            f"<div style='font-weight:700;'>{row['label']}</div>" + "".join(details) + "</div>",
            unsafe_allow_html=True,
        )

        cols = st.columns(4)
        cols[0].metric("Utilization", _fmt(row["utilization_percent"], "%"))
        cols[1].metric("Temperature (°C)", _fmt(row["temperature_c"]))
        cols[2].metric("Power Draw (W)", _fmt(row["power_draw_w"], precision=1))
        cols[3].metric("Fan", _fmt(row["fan_percent"], "%"))
        if row["thermal_state"] != "N/A":
            color = self.theme.thermal_color(row["thermal_state"])
            st.markdown(
                f"<div style='color:{color};font-size:12px;'>Thermal State: {row['thermal_state'].upper()}</div>",
                unsafe_allow_html=True,
            )

        used = row["memory_used_mb"]
        total = row["memory_total_mb"]
        if used is not None and total is not None:
            st.caption(f"Memory Used: {float(used):.0f}/{float(total):.0f} MB")
            pct = row["memory_percent"] or 0.0
            st.progress(max(0.0, min(1.0, float(pct) / 100.0)))
        else:
            st.caption(f"Memory Used: N/A (total {_fmt(total, ' MB')})")

    def render(self) -> None:
        """Render flags, any collection error, and one card per GPU."""
        import streamlit as st

        data = self.to_dict()
        caps = data["capabilities"]
        st.markdown(
            f"<div style='color:{self.theme.text_color};margin:6px 0;'>"
            f"<b>Platform:</b> {data['platform']} &nbsp; "
            f"<b>nvidia-smi:</b> {'yes' if caps['nvidia_smi'] else 'no'} &nbsp; "
            f"<b>MPS:</b> {'yes' if caps['mps'] else 'no'}</div>",
            unsafe_allow_html=True,
        )
        if data["error"]:
            st.error(data["error"])
        if not data["gpus"]:
            st.info("No GPUs detected.")
            return
        for row in data["gpus"]:
            self._render_gpu(row)
