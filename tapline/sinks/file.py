"""
File sink for TAP output.

This module writes TAP lines to a file on disk, opening it on the
first write.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from .base import BaseSink

logger = logging.getLogger(__name__)


class FileSink(BaseSink):
    """
    Sink that writes TAP lines to a file.

    The file is opened lazily and parent directories are created as
    needed. Call close() (or use the sink as a context manager) when done.
    """

    def __init__(self, path: str | Path, mode: str = "w", encoding: str = "utf-8"):
        """
        Initialize the file sink.

        Args:
            path: Destination file
            mode: "w" to truncate, "a" to append
            encoding: Text encoding for the file
        """
        if mode not in ("w", "a"):
            raise ValueError(f"Unsupported file mode: {mode!r} (use 'w' or 'a')")
        self.path = Path(path)
        self.mode = mode
        self.encoding = encoding
        self._handle: TextIO | None = None

    @property
    def is_open(self) -> bool:
        return self._handle is not None and not self._handle.closed

    def write_line(self, text: str) -> None:
        if not self.is_open:
            self._open()
        self._handle.write(text + "\n")
        self._handle.flush()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            logger.debug(f"Closed TAP file {self.path}")
            self._handle = None

    def _open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = open(self.path, self.mode, encoding=self.encoding)
        logger.debug(f"Opened TAP file {self.path} (mode={self.mode})")
        # Later reopens after close() must not truncate what was written
        self.mode = "a"
