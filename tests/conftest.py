"""Pytest configuration and fixtures."""

import logging

import pytest

from tapline.reporting import TapReporter
from tapline.sinks import MemorySink


@pytest.fixture(autouse=True)
def reset_tapline_logger():
    """Undo handler/level changes the CLI makes to the tapline logger."""
    yield

    logger = logging.getLogger("tapline")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def reporter(sink):
    """Reporter writing into an in-memory sink."""
    return TapReporter(sink)


@pytest.fixture
def planned(reporter):
    """Factory: set a plan and return the reporter."""
    def _planned(count):
        reporter.plan(count)
        return reporter
    return _planned
