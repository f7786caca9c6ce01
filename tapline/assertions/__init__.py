"""
Assertion Engine

This package provides the checks behind the TAP reporter. Each check
returns an AssertionResult and has no side effects, so it can be used
on its own as well.

Supported checks:
    - equals: coercive equality (5 equals "5")
    - truthy: Python truthiness
    - like / unlike: regular expression search
    - can: object exposes callable members
    - throws / dies / lives: guarded invocation of a callable

Usage:
    from tapline.assertions import AssertionEngine, assert_equals

    engine = AssertionEngine()
    result = engine.like("hello world", r"wor", "greeting mentions the world")
    result = engine.can(obj, "connect", "close")

    # Using convenience functions
    result = assert_equals(5, "5")

    # Check result
    if not result.passed:
        print(result)  # Detailed failure message
"""

# Models
from .models import AssertionResult, AssertionStatus

# Engine
from .engine import (
    AssertionEngine,
    # Check helpers
    has_callable_member,
    loose_equal,
    matches,
    # Convenience functions
    assert_can,
    assert_equals,
    assert_like,
)

__all__ = [
    # Models
    "AssertionResult",
    "AssertionStatus",
    # Engine
    "AssertionEngine",
    # Check helpers
    "loose_equal",
    "matches",
    "has_callable_member",
    # Convenience functions
    "assert_equals",
    "assert_like",
    "assert_can",
]
