"""
TAP reporter.

This module provides the TapReporter class which turns a plan and a
sequence of assertion outcomes into numbered TAP lines.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..assertions import AssertionEngine, AssertionResult
from ..assertions.engine import PatternLike
from ..config.models import DEFAULT_POUND_TOKEN
from ..sinks import BaseSink, StreamSink, create_sink
from .models import TestSession, UsagePanic

if TYPE_CHECKING:
    from ..config import ReporterConfig

logger = logging.getLogger(__name__)


class TapReporter:
    """
    Emits Test Anything Protocol output for a single test run.

    Every assertion funnels through record_outcome(), which numbers the
    result and writes exactly one line; every line goes through _emit().
    Failing assertions are data, not exceptions: they print "not ok" and
    the run carries on. Misusing the plan raises UsagePanic.

    Example:
        t = TapReporter()
        t.plan(3)

        t.ok(True, "True is True")           # ok 1 - True is True
        t.is_(1, 2, "one is two")            # not ok 2 - one is two
        t.can_ok({"method1": len}, "method1")  # ok 3 - object can [ method1 ]
    """

    def __init__(
        self,
        sink: BaseSink | None = None,
        pound_token: str = DEFAULT_POUND_TOKEN,
        engine: AssertionEngine | None = None,
    ):
        """
        Initialize the reporter.

        Args:
            sink: Where TAP lines go; defaults to stdout
            pound_token: Replacement for '#' inside diagnostic messages
            engine: Assertion engine; the default one is fine for most uses
        """
        self.sink = sink if sink is not None else StreamSink()
        self.pound_token = pound_token
        self.engine = engine or AssertionEngine()
        self.session = TestSession()

    @classmethod
    def from_config(cls, config: ReporterConfig) -> TapReporter:
        """
        Create a TapReporter from a parsed ReporterConfig.

        Args:
            config: The parsed configuration

        Returns:
            TapReporter writing to the configured sink
        """
        return cls(
            sink=create_sink(config.sink),
            pound_token=config.diagnostics.pound_token,
        )

    @property
    def planned(self) -> int | None:
        return self.session.planned

    @property
    def counter(self) -> int:
        return self.session.counter

    # ─────────────────────────────────────────────────────────────────────
    # Plan and primitives
    # ─────────────────────────────────────────────────────────────────────

    def plan(self, count: int) -> None:
        """
        Declare how many assertions this run will execute.

        The plan can only be set once. Emits the line "1..<count>".

        Raises:
            UsagePanic: If a plan was already set
            ValueError: If count is not a non-negative integer
        """
        if self.session.is_planned:
            self._panic(f"You tried to set the plan twice (already {self.session.planned})")
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise ValueError(f"Plan must be a non-negative integer, got {count!r}")

        self.session.set_plan(count)
        logger.debug(f"Planned {count} tests")
        self._emit(f"1..{count}")

    def record_outcome(self, passed: bool, description: str) -> bool:
        """
        Record one assertion outcome and emit its result line.

        Line breaks in the description are written as "\\n" and "\\r" so
        the result always fits on one line.

        Returns:
            The outcome, so callers can react to a failure

        Raises:
            UsagePanic: If no plan has been set
        """
        self._require_plan()
        return self._write_outcome(passed, description)

    def record(self, result: AssertionResult) -> bool:
        """Emit a checked result: its diagnostics first, then its result line."""
        self._require_plan()
        return self._write_result(result)

    def pass_(self, description: str) -> bool:
        """Record an unconditional pass."""
        return self.record_outcome(True, description)

    def fail(self, description: str) -> bool:
        """Record an unconditional failure."""
        return self.record_outcome(False, description)

    def diag(self, message: Any) -> None:
        """
        Emit a diagnostic comment.

        Each line of the message becomes a "# " line. Any '#' inside the
        message is replaced by the pound token so it cannot be mistaken
        for TAP syntax. Diagnostics are legal at any time and are not
        numbered.
        """
        for line in str(message).splitlines() or [""]:
            self._emit("# " + line.replace("#", self.pound_token))

    # ─────────────────────────────────────────────────────────────────────
    # Assertions
    # ─────────────────────────────────────────────────────────────────────

    def is_(self, actual: Any, expected: Any, description: str) -> bool:
        """Pass if actual equals expected after type coercion (5 equals "5")."""
        return self.record(self.engine.equals(actual, expected, description))

    def ok(self, value: Any, description: str) -> bool:
        """Pass if value is truthy."""
        return self.record(self.engine.truthy(value, description))

    def like(self, text: Any, pattern: PatternLike, description: str) -> bool:
        """Pass if pattern (a regex string or compiled pattern) is found in text."""
        return self.record(self.engine.like(text, pattern, description))

    def unlike(self, text: Any, pattern: PatternLike, description: str) -> bool:
        """Pass if pattern is not found in text."""
        return self.record(self.engine.unlike(text, pattern, description))

    def can_ok(self, obj: Any, *names: str) -> bool:
        """
        Pass if obj has a callable member for every name.

        A "# Missing <name> method" diagnostic precedes the result line
        for each member that is absent.
        """
        return self.record(self.engine.can(obj, *names))

    def throws_ok(self, func: Any, pattern: PatternLike) -> bool:
        """Pass if func() raises an exception whose "<Type>: <message>" matches pattern."""
        self._require_plan()
        return self._write_result(self.engine.throws(func, pattern))

    def dies_ok(self, func: Any) -> bool:
        """Pass if func() raises anything."""
        self._require_plan()
        return self._write_result(self.engine.dies(func))

    def lives_ok(self, func: Any, description: str) -> bool:
        """Pass if func() raises nothing."""
        self._require_plan()
        return self._write_result(self.engine.lives(func, description))

    # ─────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────

    def finish(self) -> bool:
        """
        Check the run against its plan.

        Emits a diagnostic if the number of assertions run differs from
        the plan, and another if any assertion failed. Emits nothing when
        everything is in order.

        Returns:
            True if every assertion passed and the plan was met

        Raises:
            UsagePanic: If no plan has been set
        """
        self._require_plan()
        session = self.session
        success = True

        if not session.plan_matched:
            message = (
                f"Looks like you planned {session.planned} {_tests(session.planned)} "
                f"but ran {session.counter}."
            )
            logger.warning(message)
            self.diag(message)
            success = False

        if not session.all_passed:
            message = (
                f"Looks like you failed {session.failed} {_tests(session.failed)} "
                f"of {session.counter} run."
            )
            logger.warning(message)
            self.diag(message)
            success = False

        logger.info(f"Finished run: {session.summary()}")
        return success

    def close(self) -> None:
        """Close the sink."""
        self.sink.close()

    def __enter__(self) -> TapReporter:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _require_plan(self) -> None:
        if not self.session.is_planned:
            self.diag("You tried to run tests without a plan. Gotta have a plan.")
            self._panic("You tried to run tests without a plan")

    def _panic(self, message: str) -> None:
        logger.error(message)
        raise UsagePanic(message)

    def _write_result(self, result: AssertionResult) -> bool:
        for message in result.diagnostics:
            self.diag(message)
        return self._write_outcome(result.passed, result.description)

    def _write_outcome(self, passed: bool, description: Any) -> bool:
        number = self.session.record(passed)
        status = "ok" if passed else "not ok"
        self._emit(f"{status} {number} - {_single_line(description)}")
        return passed

    def _emit(self, text: str) -> None:
        self.sink.write_line(text)


def _tests(count: int) -> str:
    return "test" if count == 1 else "tests"


def _single_line(description: Any) -> str:
    # A line break would end the result line early and let the rest be
    # read as TAP, so breaks are written as visible escapes.
    return str(description).replace("\r", "\\r").replace("\n", "\\n")
