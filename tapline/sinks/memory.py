"""In-memory sink, mostly for testing code that reports TAP."""

from __future__ import annotations

from .base import BaseSink


class MemorySink(BaseSink):
    """Sink that keeps every line in a list."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def getvalue(self) -> str:
        """Return the collected output as it would appear in a stream."""
        return "".join(line + "\n" for line in self.lines)

    def clear(self) -> None:
        self.lines.clear()
