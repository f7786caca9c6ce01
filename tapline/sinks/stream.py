"""
Stream sinks for TAP output.

This module writes TAP lines to text streams such as stdout and stderr.
"""

from __future__ import annotations

import sys
from typing import TextIO

from .base import BaseSink

STANDARD_STREAMS = ("stdout", "stderr")


class StreamSink(BaseSink):
    """
    Sink that writes newline-terminated lines to a text stream.

    When no stream is given, the named standard stream is looked up on
    sys at every write so that a stream swapped in later (pytest's capsys,
    a CLI runner) is honoured. The sink never closes the stream.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        flush: bool = True,
        standard: str = "stdout",
    ):
        """
        Initialize the stream sink.

        Args:
            stream: Stream to write to, or None for a standard stream
            flush: Flush after every line so TAP consumers see results live
            standard: "stdout" or "stderr", used when stream is None
        """
        if standard not in STANDARD_STREAMS:
            raise ValueError(f"Unknown standard stream: {standard!r}")
        self._stream = stream
        self.flush = flush
        self.standard = standard

    @property
    def stream(self) -> TextIO:
        if self._stream is not None:
            return self._stream
        return getattr(sys, self.standard)

    def write_line(self, text: str) -> None:
        stream = self.stream
        stream.write(text + "\n")
        if self.flush:
            stream.flush()
