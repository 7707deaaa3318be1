"""Streamlit dashboard that polls GPU telemetry snapshots.

Launched by ``gpusnap dashboard``, which runs:
    python -m streamlit run streamlit_app.py -- [--url URL] [--config PATH]
"""

from __future__ import annotations

import argparse
import sys
import time
from datetime import datetime
from typing import List, Optional

import streamlit as st

from gpusnap.collector import collect_snapshot
from gpusnap.client import fetch_snapshot
from gpusnap.configs import Config, load_config
from gpusnap.schema import TelemetrySnapshot
from gpusnap.ui.components import GpuPanel, MemoryChart, render_gpu_table
from gpusnap.ui.theme import DARK_THEME, LIGHT_THEME
from gpusnap.utils.errors import ConfigError, ServiceUnavailableError

SOURCE_SERVICE = "gpusnap service"
SOURCE_LOCAL = "Local collector"
UI_THEME_OPTIONS = ["Dark", "Light"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="gpusnap dashboard")
    parser.add_argument("--url", help="gpusnap /gpu endpoint to poll")
    parser.add_argument("--config", help="YAML/JSON config path")
    args, _ = parser.parse_known_args(argv)
    return args


def load_snapshot(source: str, url: str, config: Config) -> TelemetrySnapshot:
    """Fetch a snapshot from the service, or collect one in-process."""
    if source == SOURCE_LOCAL:
        return collect_snapshot(config=config)
    return fetch_snapshot(url)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    try:
        config = load_config(args.config)
    except ConfigError as exc:
        st.error(str(exc))
        st.stop()

    st.set_page_config(page_title="gpusnap", layout="wide")
    st.title("GPU Telemetry")

    with st.sidebar:
        source = st.radio("Source", [SOURCE_SERVICE, SOURCE_LOCAL])
        url = st.text_input("Endpoint", value=args.url or config.get("dashboard.url"))
        theme_name = st.selectbox("Theme", UI_THEME_OPTIONS)
        auto_refresh = st.checkbox("Auto refresh", value=True)
        refresh_seconds = st.number_input(
            "Refresh interval (s)",
            min_value=1,
            max_value=300,
            value=int(config.get("dashboard.refresh_seconds", 5)),
        )
        st.button("Refresh now")

    theme = DARK_THEME if theme_name == "Dark" else LIGHT_THEME

    try:
        snapshot = load_snapshot(source, url, config)
    except ServiceUnavailableError as exc:
        st.error(str(exc))
        snapshot = None

    if snapshot is not None:
        st.caption(f"Snapshot taken {datetime.now().strftime('%H:%M:%S')}")
        GpuPanel(snapshot, theme=theme).render()
        render_gpu_table(snapshot)
        MemoryChart(snapshot, theme=theme).render()

    if auto_refresh:
        time.sleep(float(refresh_seconds))
        st.rerun()


if __name__ == "__main__":
    main()
