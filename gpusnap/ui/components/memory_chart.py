"""Memory usage bar chart component."""

from __future__ import annotations

from typing import Any, Dict, List

from gpusnap.schema import TelemetrySnapshot, is_known
from gpusnap.ui.theme import DARK_THEME, GpusnapTheme


class MemoryChart:
    """Render used vs free memory per GPU as a stacked bar chart."""

    def __init__(self, snapshot: TelemetrySnapshot, theme: GpusnapTheme = DARK_THEME) -> None:
        self.snapshot = snapshot
        self.theme = theme

    def to_dict(self) -> Dict[str, List[Any]]:
        """Return chart series; GPUs without known used/free memory are left out."""
        labels: List[str] = []
        used: List[int] = []
        free: List[int] = []
        for gpu in self.snapshot.gpus:
            if not is_known(gpu.memory.used) or not is_known(gpu.memory.free):
                continue
            labels.append(f"{gpu.type}:{gpu.index} {gpu.name}")
            used.append(gpu.memory.used)
            free.append(gpu.memory.free)
        return {"labels": labels, "used_mb": used, "free_mb": free}

    def build_figure(self) -> Any:
        """Build the Plotly figure."""
        import plotly.graph_objects as go

        data = self.to_dict()
        fig = go.Figure()
        fig.add_trace(
            go.Bar(
                x=data["labels"],
                y=data["used_mb"],
                name="used",
                marker={"color": self.theme.memory_used_color},
            )
        )
        fig.add_trace(
            go.Bar(
                x=data["labels"],
                y=data["free_mb"],
                name="free",
                marker={"color": self.theme.memory_free_color},
            )
        )
        fig.update_layout(barmode="stack", yaxis_title="MB", height=320)
        return fig

    def render(self) -> None:
        """Render the chart in Streamlit."""
        import streamlit as st

        if not self.to_dict()["labels"]:
            return
        st.plotly_chart(self.build_figure(), use_container_width=True)
