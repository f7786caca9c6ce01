"""
Sink factory for creating sinks from configuration.

This module provides a factory function to create the appropriate
sink based on SinkConfig.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import BaseSink
from .file import FileSink
from .stream import StreamSink

if TYPE_CHECKING:
    from ..config import SinkConfig


def create_sink(config: SinkConfig) -> BaseSink:
    """
    Create a sink instance from SinkConfig.

    Args:
        config: Sink configuration from a parsed config file

    Returns:
        StreamSink for stdout/stderr, FileSink for file

    Raises:
        ValueError: If the sink type is unsupported or config is incomplete

    Example:
        from tapline.config import load_config
        from tapline.sinks import create_sink

        config, _ = load_config("tapline.yaml")
        with create_sink(config.sink) as sink:
            sink.write_line("1..1")
    """
    from ..config import SinkType

    if config.type == SinkType.STDOUT:
        return StreamSink(flush=config.flush, standard="stdout")

    elif config.type == SinkType.STDERR:
        return StreamSink(flush=config.flush, standard="stderr")

    elif config.type == SinkType.FILE:
        if not config.path:
            raise ValueError("File sink requires a 'path' in sink config")
        return FileSink(config.path, mode=config.mode.value)

    else:
        raise ValueError(f"Unsupported sink type: {config.type}")
