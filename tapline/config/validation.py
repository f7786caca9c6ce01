"""
Schema validation for reporter configuration.

This module checks raw parsed YAML against the configuration schema
and reports errors with helpful messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import FileMode, SinkType


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "sink.path"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"✗ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   Hint: {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of schema validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✓ Config validation passed"
        lines = [f"Config validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Config Validator
# ─────────────────────────────────────────────────────────────────────────────

class ConfigValidator:
    """Validates raw parsed YAML against the configuration schema."""

    TOP_LEVEL = {"version", "sink", "diagnostics", "finish"}
    SINK_KEYS = {"type", "path", "mode", "flush"}
    DIAGNOSTICS_KEYS = {"pound_token"}
    FINISH_KEYS = {"enabled"}
    SUPPORTED_VERSIONS = {1}
    VALID_SINK_TYPES = {t.value for t in SinkType}
    VALID_FILE_MODES = {m.value for m in FileMode}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._check_keys("", self.data, self.TOP_LEVEL)
        self._validate_version()
        self._validate_sink()
        self._validate_diagnostics()
        self._validate_finish()
        return self.result

    def _check_keys(self, prefix: str, section: dict[str, Any], allowed: set[str]) -> None:
        """Report keys that are not part of the schema."""
        for key in sorted(set(section) - allowed, key=str):
            where = f"{prefix}.{key}" if prefix else str(key)
            self.result.add_error(
                where,
                f"Unknown field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(allowed))}"
            )

    def _section(self, name: str) -> dict[str, Any] | None:
        """Fetch an optional mapping section, reporting a wrong type."""
        section = self.data.get(name)
        if section is None:
            return None
        if not isinstance(section, dict):
            self.result.add_error(name, "Must be an object", value=section)
            return None
        return section

    def _validate_version(self) -> None:
        if "version" not in self.data:
            return
        version = self.data["version"]
        if not isinstance(version, int) or isinstance(version, bool):
            self.result.add_error(
                "version",
                "Must be an integer",
                value=version,
                suggestion="Use 'version: 1'"
            )
        elif version not in self.SUPPORTED_VERSIONS:
            self.result.add_error(
                "version",
                "Unsupported config version",
                value=version,
                suggestion=f"Supported versions: {', '.join(map(str, sorted(self.SUPPORTED_VERSIONS)))}"
            )

    def _validate_sink(self) -> None:
        sink = self._section("sink")
        if sink is None:
            return
        self._check_keys("sink", sink, self.SINK_KEYS)

        sink_type = sink.get("type", SinkType.STDOUT.value)
        if sink_type not in self.VALID_SINK_TYPES:
            self.result.add_error(
                "sink.type",
                "Invalid sink type",
                value=sink_type,
                suggestion=f"Valid sink types: {', '.join(sorted(self.VALID_SINK_TYPES))}"
            )
            return

        if sink_type == SinkType.FILE.value:
            path = sink.get("path")
            if not path:
                self.result.add_error(
                    "sink.path",
                    "Required when type is 'file'",
                    suggestion="Add 'path: results.tap' to the sink section"
                )
            elif not isinstance(path, str):
                self.result.add_error("sink.path", "Must be a string", value=path)

            mode = sink.get("mode", FileMode.WRITE.value)
            if mode not in self.VALID_FILE_MODES:
                self.result.add_error(
                    "sink.mode",
                    "Invalid file mode",
                    value=mode,
                    suggestion="Use 'w' to overwrite or 'a' to append"
                )
        else:
            for key in ("path", "mode"):
                if key in sink:
                    self.result.add_error(
                        f"sink.{key}",
                        "Only valid when type is 'file'",
                        value=sink[key]
                    )

        if "flush" in sink and not isinstance(sink["flush"], bool):
            self.result.add_error("sink.flush", "Must be true or false", value=sink["flush"])

    def _validate_diagnostics(self) -> None:
        diagnostics = self._section("diagnostics")
        if diagnostics is None:
            return
        self._check_keys("diagnostics", diagnostics, self.DIAGNOSTICS_KEYS)

        if "pound_token" not in diagnostics:
            return
        token = diagnostics["pound_token"]
        if not isinstance(token, str):
            self.result.add_error("diagnostics.pound_token", "Must be a string", value=token)
        elif not token:
            self.result.add_error(
                "diagnostics.pound_token",
                "Cannot be empty",
                suggestion="Use the default '<pound>' or another visible marker"
            )
        elif "#" in token:
            self.result.add_error(
                "diagnostics.pound_token",
                "Cannot contain '#'",
                value=token,
                suggestion="The token replaces '#' in diagnostics, so it must not reintroduce one"
            )

    def _validate_finish(self) -> None:
        finish = self._section("finish")
        if finish is None:
            return
        self._check_keys("finish", finish, self.FINISH_KEYS)

        if "enabled" in finish and not isinstance(finish["enabled"], bool):
            self.result.add_error("finish.enabled", "Must be true or false", value=finish["enabled"])
