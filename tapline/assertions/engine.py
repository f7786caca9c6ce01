"""
Assertion engine for evaluating checks.

This module provides the core assertion logic behind the TAP reporter.
Every check is a pure function of its arguments: it decides pass or fail,
builds the description for the result line and collects diagnostics, but
never writes anything itself.
"""

from __future__ import annotations

import inspect
import logging
import numbers
import re
from collections.abc import Callable, Mapping
from typing import Any, Union

from .models import AssertionResult

logger = logging.getLogger(__name__)

PatternLike = Union[str, re.Pattern[str]]

# Stands in for the exception text when the code under test raised nothing.
BLANK = " "

# Numeric strings accepted by coercive equality. Narrower than float():
# no underscores, no "nan"/"inf" spellings.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z")
_PREFIXED = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)\Z")
_INFINITIES = {
    "Infinity": float("inf"),
    "+Infinity": float("inf"),
    "-Infinity": float("-inf"),
}


class AssertionEngine:
    """
    Engine for running assertion checks.

    Supports the following checks:
    - equals: coercive equality (numeric strings equal their numbers)
    - truthy: Python truthiness
    - like / unlike: regular expression search
    - can: object exposes callable members
    - throws / dies / lives: guarded invocation of a zero-argument callable

    Example:
        engine = AssertionEngine()

        result = engine.equals(5, "5", "five is five")
        result = engine.like("hello world", r"wor", "has wor")
        result = engine.can(obj, "start", "stop")
    """

    def equals(self, actual: Any, expected: Any, description: str) -> AssertionResult:
        """Check that two values are equal after type coercion."""
        return AssertionResult.from_outcome(
            loose_equal(actual, expected),
            description,
            expected=expected,
            actual=actual,
        )

    def truthy(self, value: Any, description: str) -> AssertionResult:
        """Check that a value is truthy."""
        return AssertionResult.from_outcome(bool(value), description, actual=value)

    def like(self, text: Any, pattern: PatternLike, description: str) -> AssertionResult:
        """Check that text matches a pattern."""
        return AssertionResult.from_outcome(
            matches(text, pattern),
            description,
            expected=pattern_source(pattern),
            actual=text,
        )

    def unlike(self, text: Any, pattern: PatternLike, description: str) -> AssertionResult:
        """Check that text does not match a pattern."""
        return AssertionResult.from_outcome(
            not matches(text, pattern),
            description,
            expected=pattern_source(pattern),
            actual=text,
        )

    def can(self, obj: Any, *names: str) -> AssertionResult:
        """
        Check that an object exposes a callable member for every name.

        Args:
            obj: The object, class or mapping to probe
            names: Member names that must be callable

        Returns:
            AssertionResult with one diagnostic per missing member
        """
        diagnostics = [
            f"Missing {name} method"
            for name in names
            if not has_callable_member(obj, name)
        ]
        description = "object can [" + "".join(f" {name}" for name in names) + " ]"
        return AssertionResult.from_outcome(not diagnostics, description, diagnostics)

    def throws(self, func: Any, pattern: PatternLike) -> AssertionResult:
        """
        Check that calling func raises an exception matching pattern.

        The exception is rendered as "<Type>: <message>" before matching.
        A non-callable func fails immediately and is never invoked.
        """
        expected = pattern_source(pattern)
        if not callable(func):
            return _not_callable("throws_ok", f"code threw [{BLANK}] expected: [{expected}]")

        _, captured = invoke_guarded(func)
        return AssertionResult.from_outcome(
            matches(captured, pattern),
            f"code threw [{captured}] expected: [{expected}]",
            expected=expected,
            actual=captured,
        )

    def dies(self, func: Any) -> AssertionResult:
        """Check that calling func raises any exception."""
        if not callable(func):
            return _not_callable("dies_ok", f"code died with [{BLANK}]")

        raised, captured = invoke_guarded(func)
        return AssertionResult.from_outcome(raised, f"code died with [{captured}]")

    def lives(self, func: Any, description: str) -> AssertionResult:
        """Check that calling func raises nothing."""
        if not callable(func):
            return _not_callable("lives_ok", description)

        raised, captured = invoke_guarded(func)
        diagnostics = [f"code died with [{captured}]"] if raised else []
        return AssertionResult.from_outcome(not raised, description, diagnostics)


def loose_equal(actual: Any, expected: Any) -> bool:
    """
    Compare two values with type coercion.

    None only equals None. Values that already compare equal are equal.
    When a number or bool meets a number, bool or string, the string side
    is converted to a number first, so 5 == "5" and True == "1". Two
    strings are never coerced.

    Strings convert like JavaScript's Number(): surrounding whitespace is
    ignored, "" is 0, decimal and exponent forms parse, as do 0x/0o/0b
    prefixes and "Infinity". Anything else, including "1_000", "nan" and
    "inf", is NaN and equals nothing. Numbers are compared exactly, so
    very large ints never overflow.
    """
    if actual is None or expected is None:
        return actual is None and expected is None

    try:
        if bool(actual == expected):
            return True
    except (TypeError, ValueError):
        # e.g. array-like values whose == result has no truth value
        pass

    if not (_is_scalar(actual) and _is_scalar(expected)):
        return False
    if not (_is_number(actual) or _is_number(expected)):
        return False

    # NaN never equals anything, including itself
    return _to_number(actual) == _to_number(expected)


def matches(text: Any, pattern: PatternLike) -> bool:
    """Return True if pattern is found anywhere in str(text)."""
    if isinstance(pattern, re.Pattern):
        return pattern.search(str(text)) is not None
    return re.search(pattern, str(text)) is not None


def pattern_source(pattern: PatternLike) -> str:
    """Render a pattern for display in a description."""
    if isinstance(pattern, re.Pattern):
        return pattern.pattern
    return str(pattern)


def has_callable_member(obj: Any, name: str) -> bool:
    """
    Return True if obj exposes a callable member called name.

    The object's own members are checked first (the items of a mapping,
    otherwise the instance ``__dict__``), then the class-level member
    table. Lookups are static: properties and ``__getattr__`` hooks are
    never run.
    """
    own = obj if isinstance(obj, Mapping) else getattr(obj, "__dict__", {})
    try:
        if name in own:
            return _is_callable_member(own[name])
    except TypeError:
        # mapping with unhashable or non-str keys
        pass

    owner = obj if isinstance(obj, type) else type(obj)
    try:
        member = inspect.getattr_static(owner, name)
    except AttributeError:
        return False
    return _is_callable_member(member)


def invoke_guarded(func: Callable[[], Any]) -> tuple[bool, str]:
    """
    Call func with no arguments, trapping any exception it raises.

    Returns:
        Tuple of (raised, captured). captured is the rendered exception,
        or BLANK if nothing was raised.
    """
    try:
        func()
    except Exception as e:
        captured = describe_exception(e)
        logger.debug(f"Code under test raised {captured}")
        return True, captured
    return False, BLANK


def describe_exception(error: BaseException) -> str:
    """Render an exception as "<Type>: <message>"."""
    message = str(error)
    if message:
        return f"{type(error).__name__}: {message}"
    return type(error).__name__


def _not_callable(assertion: str, description: str) -> AssertionResult:
    logger.debug(f"{assertion} called with a non-callable")
    return AssertionResult.from_outcome(
        False,
        description,
        [f"{assertion} needs a function to run"],
    )


def _is_callable_member(member: Any) -> bool:
    return callable(member) or isinstance(member, (staticmethod, classmethod))


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real)


def _is_scalar(value: Any) -> bool:
    return _is_number(value) or isinstance(value, str)


def _to_number(value: Any) -> Any:
    # Numbers are returned as-is: int/float comparison is exact and cannot
    # overflow the way float(10**400) does.
    if not isinstance(value, str):
        return value

    text = value.strip()
    if not text:
        return 0
    if _DECIMAL.match(text):
        return float(text)
    if _PREFIXED.match(text):
        return int(text, 0)
    if text in _INFINITIES:
        return _INFINITIES[text]
    return float("nan")


# Convenience functions for quick checks
def assert_equals(actual: Any, expected: Any, description: str = "") -> AssertionResult:
    """Check coercive equality without a reporter."""
    return AssertionEngine().equals(actual, expected, description)


def assert_like(text: Any, pattern: PatternLike, description: str = "") -> AssertionResult:
    """Check a pattern match without a reporter."""
    return AssertionEngine().like(text, pattern, description)


def assert_can(obj: Any, *names: str) -> AssertionResult:
    """Check callable members without a reporter."""
    return AssertionEngine().can(obj, *names)
