"""
TAP Reporting

This package provides the reporter that writes Test Anything Protocol
output and the session state it keeps.

Features:
    - Plan line ("1..N"), set exactly once
    - Sequentially numbered "ok" / "not ok" result lines
    - "#" diagnostics with escaping
    - Optional end-of-run check against the plan

Usage:
    from tapline.reporting import TapReporter
    from tapline.sinks import MemorySink

    sink = MemorySink()
    t = TapReporter(sink)
    t.plan(2)
    t.ok(True, "a")
    t.is_(1, 2, "b")

    print(sink.lines)  # ['1..2', 'ok 1 - a', 'not ok 2 - b']
    t.finish()         # emits "# Looks like you failed 1 test of 2 run."
"""

# Models
from .models import (
    SessionState,
    TaplineError,
    TestSession,
    UsagePanic,
)

# Reporter
from .reporter import TapReporter

__all__ = [
    # Models
    "SessionState",
    "TestSession",
    # Errors
    "TaplineError",
    "UsagePanic",
    # Reporter
    "TapReporter",
]
