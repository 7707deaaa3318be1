"""Pytest configuration and fixtures."""

from typing import Dict, Optional, Tuple

import pytest

from fakes import FakeRunner, Response


@pytest.fixture
def fake_runner():
    """Factory fixture: fake_runner({argv_tuple: output_or_exception})."""

    def _make(responses: Optional[Dict[Tuple[str, ...], Response]] = None) -> FakeRunner:
        return FakeRunner(responses)

    return _make
