"""
TAP Output Sinks

This package provides the destinations a reporter writes TAP lines to.
A sink has a single job: write_line(text).

Usage:
    from tapline.sinks import create_sink, StreamSink, FileSink, MemorySink

    # Create from config
    config, _ = load_config("tapline.yaml")
    sink = create_sink(config.sink)

    # Or create directly
    sink = FileSink("results/run.tap")

    # Use as a context manager to close files
    with sink:
        reporter = TapReporter(sink)
        reporter.plan(1)
        reporter.ok(True, "it works")
"""

# Factory
from .factory import create_sink

# Base
from .base import BaseSink

# Implementations
from .file import FileSink
from .memory import MemorySink
from .stream import StreamSink

__all__ = [
    # Factory
    "create_sink",
    # Base
    "BaseSink",
    # Implementations
    "StreamSink",
    "FileSink",
    "MemorySink",
]
