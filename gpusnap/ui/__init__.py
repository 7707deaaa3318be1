"""Streamlit dashboard for gpusnap snapshots.

Components import Streamlit lazily inside ``render()`` so payload helpers
(``to_dict``) work without a Streamlit session.
"""

from .components import GpuPanel, MemoryChart, gpu_display_row, snapshot_to_dataframe
from .theme import DARK_THEME, LIGHT_THEME, GpusnapTheme

__all__ = [
    "DARK_THEME",
    "LIGHT_THEME",
    "GpusnapTheme",
    "GpuPanel",
    "MemoryChart",
    "gpu_display_row",
    "snapshot_to_dataframe",
]
