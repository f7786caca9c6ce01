"""
Session state for TAP reporting.

This module defines the plan/counter bookkeeping behind a reporter
and the error raised when the planning protocol is misused.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class TaplineError(RuntimeError):
    """Base class for errors raised by tapline itself."""


class UsagePanic(TaplineError):
    """
    The planning protocol was misused.

    Raised when the plan is set twice, or when an assertion runs before
    any plan exists. This is a bug in the test script, not a test
    failure, and it is never caught by the reporter.
    """


# ─────────────────────────────────────────────────────────────────────────────
# Session
# ─────────────────────────────────────────────────────────────────────────────

class SessionState(str, Enum):
    """Planning state of a session."""
    UNPLANNED = "unplanned"
    PLANNED = "planned"


@dataclass
class TestSession:
    """
    Plan and counters for one test run.

    Attributes:
        planned: Declared number of assertions, None until plan() is called
        counter: Assertions executed so far
        passed: How many of those passed
        failed: How many of those failed
    """
    # Keep pytest from trying to collect this as a test class
    __test__ = False

    planned: int | None = None
    counter: int = 0
    passed: int = 0
    failed: int = 0

    @property
    def state(self) -> SessionState:
        if self.planned is None:
            return SessionState.UNPLANNED
        return SessionState.PLANNED

    @property
    def is_planned(self) -> bool:
        return self.state == SessionState.PLANNED

    @property
    def plan_matched(self) -> bool:
        """True if the number of assertions run equals the plan."""
        return self.is_planned and self.counter == self.planned

    @property
    def all_passed(self) -> bool:
        return self.failed == 0

    def set_plan(self, count: int) -> None:
        """Move from UNPLANNED to PLANNED."""
        if self.is_planned:
            raise UsagePanic("You tried to set the plan twice")
        self.planned = count

    def record(self, passed: bool) -> int:
        """
        Count one assertion.

        Returns:
            The sequence number of the assertion

        Raises:
            UsagePanic: If no plan has been set
        """
        if not self.is_planned:
            raise UsagePanic("You tried to run tests without a plan")
        self.counter += 1
        if passed:
            self.passed += 1
        else:
            self.failed += 1
        return self.counter

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "state": self.state.value,
            "planned": self.planned,
            "counter": self.counter,
            "passed": self.passed,
            "failed": self.failed,
        }

    def summary(self) -> str:
        """Generate a one-line human-readable summary."""
        if not self.is_planned:
            return "No plan set"
        text = f"{self.passed}/{self.counter} passed, {self.failed} failed, {self.planned} planned"
        if not self.plan_matched:
            text += " (plan mismatch)"
        return text
