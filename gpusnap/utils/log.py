"""Logging setup shared by the CLI and the API server."""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Configure root logging to stderr, keeping stdout free for JSON output.

    Args:
        level: Level name (e.g. "INFO", "debug") or numeric logging level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
