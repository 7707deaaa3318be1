"""Dashboard components."""

from .gpu_panel import GpuPanel, gpu_display_row, thermal_state
from .gpu_table import render_gpu_table, snapshot_to_dataframe
from .memory_chart import MemoryChart

__all__ = [
    "GpuPanel",
    "MemoryChart",
    "gpu_display_row",
    "render_gpu_table",
    "snapshot_to_dataframe",
    "thermal_state",
]
