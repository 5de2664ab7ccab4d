"""Shared fixtures for CLI tests."""

import pytest

from coachplan.core.logger import setup_logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Commands bind loguru to the runner's stderr; rebind it once the test is done."""
    yield
    setup_logger(level="WARNING")
