"""
Typed data structures for reporter configuration.

This module contains the enums and dataclasses that represent a
parsed tapline configuration file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


DEFAULT_POUND_TOKEN = "<pound>"


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class SinkType(str, Enum):
    """Where TAP lines are written."""
    STDOUT = "stdout"
    STDERR = "stderr"
    FILE = "file"


class FileMode(str, Enum):
    """How a file sink treats an existing file."""
    WRITE = "w"
    APPEND = "a"


# ─────────────────────────────────────────────────────────────────────────────
# Sections
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class SinkConfig:
    """Configuration for the output sink."""
    type: SinkType = SinkType.STDOUT
    path: str | None = None  # Required for FILE
    mode: FileMode = FileMode.WRITE  # FILE only
    flush: bool = True  # Stream sinks only


@dataclass
class DiagnosticsConfig:
    """Settings for '#' diagnostic lines."""
    # Replaces every '#' inside a diagnostic message
    pound_token: str = DEFAULT_POUND_TOKEN


@dataclass
class FinishConfig:
    """Settings for the end-of-run plan check."""
    enabled: bool = True


# ─────────────────────────────────────────────────────────────────────────────
# Top level
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ReporterConfig:
    """Fully parsed and validated reporter configuration."""
    version: int = 1
    sink: SinkConfig = field(default_factory=SinkConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    finish: FinishConfig = field(default_factory=FinishConfig)
