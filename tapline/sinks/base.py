"""
Base sink interface for TAP output.

This module defines the abstract base class that all sink
implementations must follow.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseSink(ABC):
    """
    Abstract base class for line sinks.

    A sink is where TAP lines end up: a terminal, a file, or a list in
    memory. The reporter only ever calls write_line(); opening and
    closing the underlying resource is the sink's business.
    """

    @abstractmethod
    def write_line(self, text: str) -> None:
        """
        Write one line of output.

        Args:
            text: The line, without a trailing newline
        """
        pass

    def close(self) -> None:
        """
        Release any resource held by the sink.

        The default does nothing; sinks that own a file override it.
        """
        pass

    def __enter__(self) -> BaseSink:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
