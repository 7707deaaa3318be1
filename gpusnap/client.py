"""Client for a running gpusnap service."""

import logging

import requests

from gpusnap.schema import TelemetrySnapshot
from gpusnap.utils.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_TIMEOUT = 10.0


def fetch_snapshot(url: str, timeout: float = DEFAULT_CLIENT_TIMEOUT) -> TelemetrySnapshot:
    """GET a snapshot from a gpusnap ``/gpu`` endpoint.

    Both 200 and 500 responses carry a well-formed snapshot body, so a 500
    is returned as a snapshot with ``error`` set rather than raised.

    Args:
        url: Full endpoint URL, e.g. "http://127.0.0.1:8000/gpu"
        timeout: Request timeout in seconds

    Raises:
        ServiceUnavailableError: The service could not be reached or returned
            something other than a snapshot
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise ServiceUnavailableError(f"Could not reach {url}: {exc}") from exc

    if response.status_code not in (200, 500):
        raise ServiceUnavailableError(f"{url} returned HTTP {response.status_code}")
    try:
        payload = response.json()
    except ValueError as exc:
        raise ServiceUnavailableError(f"{url} did not return JSON") from exc
    if not isinstance(payload, dict):
        raise ServiceUnavailableError(f"{url} returned an unexpected payload")

    snapshot = TelemetrySnapshot.from_dict(payload)
    if response.status_code == 500 and not snapshot.error:
        snapshot = TelemetrySnapshot.failed(snapshot.platform, f"{url} returned HTTP 500")
    logger.debug("Fetched %d GPU(s) from %s", len(snapshot.gpus), url)
    return snapshot
