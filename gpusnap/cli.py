"""Command-line interface for gpusnap."""

import argparse
import json
import logging
import subprocess
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from pathlib import Path
from typing import List, Optional

from gpusnap.collector import collect_snapshot
from gpusnap.client import fetch_snapshot
from gpusnap.configs import load_config
from gpusnap.utils.errors import ConfigError, ServiceUnavailableError
from gpusnap.utils.log import configure_logging

try:
    GPUSNAP_CLI_VERSION = package_version("gpusnap")
except PackageNotFoundError:
    GPUSNAP_CLI_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def run_snapshot(args: argparse.Namespace) -> int:
    """Execute `gpusnap snapshot`."""
    if args.url:
        try:
            snapshot = fetch_snapshot(args.url)
        except ServiceUnavailableError as exc:
            print(f"[ERROR] {exc}", file=sys.stderr)
            return 2
    else:
        snapshot = collect_snapshot(config=args.config_obj)

    indent = None if args.compact else 2
    print(json.dumps(snapshot.to_dict(), indent=indent))
    return 1 if snapshot.error else 0


def run_serve(args: argparse.Namespace) -> int:
    """Execute `gpusnap serve`."""
    import uvicorn

    from gpusnap.api import create_app

    config = args.config_obj
    host = args.host or config.get("server.host")
    port = int(args.port or config.get("server.port"))
    logger.info("Serving GPU telemetry on http://%s:%d/gpu", host, port)
    uvicorn.run(
        create_app(config=config),
        host=host,
        port=port,
        log_level=str(config.get("logging.level", "INFO")).lower(),
    )
    return 0


def _build_streamlit_command(args: argparse.Namespace) -> List[str]:
    app_path = Path(__file__).resolve().parent / "ui" / "streamlit_app.py"
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path), "--"]
    if args.url:
        cmd.extend(["--url", args.url])
    if args.config:
        cmd.extend(["--config", args.config])
    return cmd


def run_dashboard(args: argparse.Namespace) -> int:
    """Execute `gpusnap dashboard`."""
    return int(subprocess.call(_build_streamlit_command(args)))


def build_parser() -> argparse.ArgumentParser:
    """Build top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="gpusnap",
        description="Report current GPU telemetry (NVIDIA via nvidia-smi, Apple Silicon via macOS tools).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"gpusnap {GPUSNAP_CLI_VERSION}",
        help="Show CLI version and exit",
    )
    parser.add_argument("--config", help="YAML/JSON config path (default: $GPUSNAP_CONFIG)")
    parser.add_argument(
        "--log-level",
        help="Logging level (default: logging.level from config)",
    )
    sub = parser.add_subparsers(dest="command")

    snapshot = sub.add_parser("snapshot", help="Print one telemetry snapshot as JSON")
    snapshot.add_argument("--url", help="Fetch from a running service instead of collecting locally")
    snapshot.add_argument("--compact", action="store_true", help="Single-line JSON output")
    snapshot.set_defaults(func=run_snapshot)

    serve = sub.add_parser("serve", help="Serve GET /gpu over HTTP")
    serve.add_argument("--host", help="Bind address (default: server.host)")
    serve.add_argument("--port", type=int, help="Port (default: server.port)")
    serve.set_defaults(func=run_serve)

    dashboard = sub.add_parser("dashboard", help="Launch the Streamlit dashboard")
    dashboard.add_argument("--url", help="gpusnap /gpu endpoint to poll")
    dashboard.set_defaults(func=run_dashboard)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "command", None):
        parser.print_help()
        return 0

    try:
        args.config_obj = load_config(args.config)
    except ConfigError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    configure_logging(args.log_level or args.config_obj.get("logging.level", "INFO"))
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
