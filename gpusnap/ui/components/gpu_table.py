"""Tabular view of every GPU in a snapshot."""

from __future__ import annotations

import pandas as pd

from gpusnap.schema import UNKNOWN_JSON_VALUE, TelemetrySnapshot
from gpusnap.ui.components.gpu_panel import gpu_display_row

TABLE_COLUMNS = {
    "label": "GPU",
    "utilization_percent": "Util (%)",
    "temperature_c": "Temp (°C)",
    "power_draw_w": "Power (W)",
    "power_limit_w": "Power Limit (W)",
    "memory_used_mb": "Mem Used (MB)",
    "memory_total_mb": "Mem Total (MB)",
    "clock_graphics_mhz": "Graphics Clock (MHz)",
    "clock_memory_mhz": "Memory Clock (MHz)",
    "fan_percent": "Fan (%)",
}


def snapshot_to_dataframe(snapshot: TelemetrySnapshot) -> pd.DataFrame:
    """One row per GPU, unknown readings shown as "N/A"."""
    rows = []
    for gpu in snapshot.gpus:
        row = gpu_display_row(gpu)
        rows.append(
            {
                title: (row[key] if row[key] is not None else UNKNOWN_JSON_VALUE)
                for key, title in TABLE_COLUMNS.items()
            }
        )
    return pd.DataFrame(rows, columns=list(TABLE_COLUMNS.values()))


def render_gpu_table(snapshot: TelemetrySnapshot) -> None:
    """Render the GPU table in Streamlit."""
    import streamlit as st

    df = snapshot_to_dataframe(snapshot)
    if df.empty:
        return
    st.dataframe(df.astype(str), hide_index=True)
