"""
tapline - Test Anything Protocol assertions for the command line

This package provides a small assertion library that reports results
as TAP lines to a configurable sink.

Subpackages:
    - reporting: TapReporter and the plan/counter session state
    - assertions: The checks behind each assertion
    - sinks: Where TAP lines are written (stdout, stderr, file, memory)
    - config: Optional YAML configuration for reporters

Usage:
    from tapline import TapReporter

    t = TapReporter()
    t.plan(3)

    t.ok(True, "True is True")       # ok 1 - True is True
    t.is_(1, 2, "one is two")        # not ok 2 - one is two
    t.like("hello world", r"wor", "greeting")  # ok 3 - greeting

    t.finish()  # "# Looks like you failed 1 test of 3 run."
"""

__version__ = "0.1.0"
__author__ = "tapline contributors"

# Re-export reporting for convenience
from .reporting import (
    SessionState,
    TaplineError,
    TapReporter,
    TestSession,
    UsagePanic,
)

# Re-export assertions for convenience
from .assertions import (
    AssertionEngine,
    AssertionResult,
    AssertionStatus,
    has_callable_member,
    loose_equal,
    matches,
)

# Re-export sinks for convenience
from .sinks import (
    BaseSink,
    FileSink,
    MemorySink,
    StreamSink,
    create_sink,
)

# Re-export config for convenience
from .config import (
    ReporterConfig,
    SinkConfig,
    SinkType,
    ValidationResult,
    load_config,
    validate_config_yaml,
)

__all__ = [
    # Package info
    "__version__",
    "__author__",
    # Reporting
    "TapReporter",
    "TestSession",
    "SessionState",
    "TaplineError",
    "UsagePanic",
    # Assertions
    "AssertionEngine",
    "AssertionResult",
    "AssertionStatus",
    "loose_equal",
    "matches",
    "has_callable_member",
    # Sinks
    "create_sink",
    "BaseSink",
    "StreamSink",
    "FileSink",
    "MemorySink",
    # Config
    "load_config",
    "validate_config_yaml",
    "ReporterConfig",
    "SinkConfig",
    "SinkType",
    "ValidationResult",
]
