"""
Assertion result models.

This module defines the data structure returned by every check,
including any diagnostic lines the check wants reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AssertionStatus(str, Enum):
    """Status of an assertion check."""
    PASSED = "passed"
    FAILED = "failed"


@dataclass
class AssertionResult:
    """
    Result of a single assertion check.

    Attributes:
        status: Whether the assertion passed or failed
        description: Text that goes after the sequence number on the TAP line
        diagnostics: Messages to emit as '#' lines before the result line
        expected: What was expected (for comparison assertions)
        actual: What was actually found
    """
    status: AssertionStatus
    description: str
    diagnostics: list[str] = field(default_factory=list)
    expected: Any = None
    actual: Any = None

    @property
    def passed(self) -> bool:
        return self.status == AssertionStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status == AssertionStatus.FAILED

    def __str__(self) -> str:
        """Format as a human-readable string."""
        if self.passed:
            return f"PASS: {self.description}"

        lines = [f"FAIL: {self.description}"]
        if self.expected is not None:
            lines.append(f"   Expected: {_format_value(self.expected)}")
        if self.actual is not None:
            lines.append(f"   Actual:   {_format_value(self.actual)}")
        for message in self.diagnostics:
            lines.append(f"   {message}")
        return "\n".join(lines)

    @classmethod
    def from_outcome(
        cls,
        outcome: bool,
        description: str,
        diagnostics: list[str] | None = None,
        expected: Any = None,
        actual: Any = None,
    ) -> AssertionResult:
        """Create a result from a plain boolean outcome."""
        return cls(
            status=AssertionStatus.PASSED if outcome else AssertionStatus.FAILED,
            description=description,
            diagnostics=diagnostics or [],
            expected=expected,
            actual=actual,
        )


def _format_value(value: Any, max_length: int = 100) -> str:
    """Format a value for display, truncating if too long."""
    formatted = repr(value)
    if len(formatted) > max_length:
        return formatted[: max_length - 3] + "..."
    return formatted
