"""
Config parser for tapline.

This module converts validated YAML data into a typed ReporterConfig.
"""

from __future__ import annotations

from typing import Any

from .models import (
    DEFAULT_POUND_TOKEN,
    DiagnosticsConfig,
    FileMode,
    FinishConfig,
    ReporterConfig,
    SinkConfig,
    SinkType,
)


class ConfigParser:
    """Parses and converts validated YAML to a typed ReporterConfig."""

    def __init__(self, data: dict[str, Any]):
        self.data = data

    def parse(self) -> ReporterConfig:
        """Convert validated data to a typed ReporterConfig."""
        return ReporterConfig(
            version=self.data.get("version", 1),
            sink=self._parse_sink(),
            diagnostics=self._parse_diagnostics(),
            finish=self._parse_finish(),
        )

    def _parse_sink(self) -> SinkConfig:
        sink = self.data.get("sink") or {}
        return SinkConfig(
            type=SinkType(sink.get("type", SinkType.STDOUT.value)),
            path=sink.get("path"),
            mode=FileMode(sink.get("mode", FileMode.WRITE.value)),
            flush=sink.get("flush", True),
        )

    def _parse_diagnostics(self) -> DiagnosticsConfig:
        diagnostics = self.data.get("diagnostics") or {}
        return DiagnosticsConfig(
            pound_token=diagnostics.get("pound_token", DEFAULT_POUND_TOKEN),
        )

    def _parse_finish(self) -> FinishConfig:
        finish = self.data.get("finish") or {}
        return FinishConfig(enabled=finish.get("enabled", True))
