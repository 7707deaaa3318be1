"""HTTP API exposing GPU telemetry snapshots."""

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from gpusnap.collector import GpuTelemetryCollector
from gpusnap.configs import Config, default_config

logger = logging.getLogger(__name__)
router = APIRouter(tags=["gpu"])


@router.get("/gpu")
def get_gpu(request: Request) -> JSONResponse:
    """Return a fresh telemetry snapshot.

    Responds 200 on normal completion, including hosts with no GPU, and
    500 with an ``error`` field when collection failed as a whole.
    """
    collector: GpuTelemetryCollector = request.app.state.collector
    snapshot = collector.collect()
    if snapshot.error:
        logger.warning("GPU collection failed: %s", snapshot.error)
    return JSONResponse(content=snapshot.to_dict(), status_code=snapshot.status_code)


@router.get("/health")
def health() -> dict:
    """Liveness check."""
    return {"status": "ok"}


def create_app(
    config: Optional[Config] = None,
    collector: Optional[GpuTelemetryCollector] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Configuration passed to the default collector
        collector: Pre-built collector (e.g. one with a fake runner)
    """
    config = config or default_config()
    app = FastAPI(title="gpusnap GPU telemetry service")
    app.state.config = config
    app.state.collector = collector or GpuTelemetryCollector(config=config)
    app.include_router(router)
    return app
