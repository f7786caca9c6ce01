"""Tests for TapReporter: plan, numbering, assertions and diagnostics."""

import logging
import re

import pytest

from tapline.reporting import SessionState, TapReporter, UsagePanic
from tapline.sinks import FileSink, MemorySink


def boom():
    raise RuntimeError("boom")


def divide_by_zero():
    return 1 / 0


# --- plan ---


@pytest.mark.parametrize("count", [0, 1, 3, 250])
def test_plan_emits_single_plan_line(reporter, sink, count):
    reporter.plan(count)
    assert sink.lines == [f"1..{count}"]
    assert reporter.planned == count
    assert reporter.counter == 0
    assert reporter.session.state == SessionState.PLANNED


@pytest.mark.parametrize("first,second", [(2, 2), (2, 5), (0, 0), (0, 3)])
def test_plan_twice_raises(reporter, sink, first, second):
    reporter.plan(first)
    with pytest.raises(UsagePanic, match="plan twice"):
        reporter.plan(second)
    assert sink.lines == [f"1..{first}"]
    assert reporter.planned == first


@pytest.mark.parametrize("bad", [-1, "3", 2.5, None, True])
def test_plan_rejects_non_counts(reporter, sink, bad):
    with pytest.raises(ValueError, match="non-negative integer"):
        reporter.plan(bad)
    assert sink.lines == []
    assert reporter.session.state == SessionState.UNPLANNED


def test_usage_panic_is_logged(reporter, caplog):
    reporter.plan(1)
    with caplog.at_level(logging.ERROR, logger="tapline"):
        with pytest.raises(UsagePanic):
            reporter.plan(1)
    assert "plan twice" in caplog.text


# --- assertions before plan ---


@pytest.mark.parametrize(
    "call",
    [
        lambda t: t.pass_("a"),
        lambda t: t.fail("a"),
        lambda t: t.ok(True, "a"),
        lambda t: t.is_(1, 1, "a"),
        lambda t: t.like("x", "x", "a"),
        lambda t: t.unlike("x", "y", "a"),
        lambda t: t.can_ok({}, "g"),
        lambda t: t.throws_ok(boom, "boom"),
        lambda t: t.dies_ok(boom),
        lambda t: t.lives_ok(lambda: None, "a"),
        lambda t: t.record_outcome(True, "a"),
    ],
)
def test_assertion_before_plan_raises(reporter, sink, call):
    with pytest.raises(UsagePanic, match="without a plan"):
        call(reporter)
    assert reporter.counter == 0
    assert not any(re.match(r"^(not )?ok ", line) for line in sink.lines)
    assert sink.lines[-1].startswith("# You tried to run tests without a plan")


def test_guarded_assertion_before_plan_does_not_run_code(reporter):
    calls = []
    with pytest.raises(UsagePanic):
        reporter.lives_ok(lambda: calls.append(1), "never runs")
    assert calls == []


@pytest.mark.parametrize(
    "call",
    [
        lambda t: t.can_ok({}, "g"),
        lambda t: t.throws_ok("not a function", "boom"),
        lambda t: t.dies_ok(boom),
    ],
)
def test_assertion_before_plan_writes_one_diagnostic(reporter, sink, call):
    with pytest.raises(UsagePanic):
        call(reporter)
    assert sink.lines == ["# You tried to run tests without a plan. Gotta have a plan."]


# --- numbering ---


def test_counter_and_sequence_numbers(planned, sink):
    t = planned(4)
    t.ok(True, "first")
    t.ok(False, "second")
    t.pass_("third")
    assert t.counter == 3
    assert sink.lines == [
        "1..4",
        "ok 1 - first",
        "not ok 2 - second",
        "ok 3 - third",
    ]


def test_diagnostics_are_not_numbered(planned, sink):
    t = planned(2)
    t.pass_("a")
    t.diag("between")
    t.fail("b")
    assert t.counter == 2
    assert sink.lines == ["1..2", "ok 1 - a", "# between", "not ok 2 - b"]


def test_overrun_is_not_enforced_while_running(planned, sink):
    t = planned(1)
    t.pass_("a")
    t.pass_("b")
    assert t.counter == 2
    assert sink.lines[-1] == "ok 2 - b"


def test_record_outcome_returns_outcome(planned):
    t = planned(2)
    assert t.record_outcome(True, "yes") is True
    assert t.record_outcome(False, "no") is False
    assert t.session.passed == 1
    assert t.session.failed == 1


def test_end_to_end_stream(reporter, sink):
    reporter.plan(2)
    reporter.ok(True, "a")
    reporter.is_(1, 2, "b")
    assert sink.getvalue() == "1..2\nok 1 - a\nnot ok 2 - b\n"


def test_description_line_breaks_are_escaped(planned, sink):
    t = planned(2)
    t.ok(True, "a\nok 2 - forged")
    t.fail("line one\r\nline two")
    assert t.counter == 2
    assert sink.lines == [
        "1..2",
        "ok 1 - a\\nok 2 - forged",
        "not ok 2 - line one\\r\\nline two",
    ]


# --- is_ / ok ---


def test_is_uses_coercive_equality(planned, sink):
    t = planned(3)
    assert t.is_(5, "5", "number equals numeric string") is True
    assert t.is_(5, 6, "five is not six") is False
    assert t.is_("abc", "abc", "same strings") is True
    assert sink.lines[1:] == [
        "ok 1 - number equals numeric string",
        "not ok 2 - five is not six",
        "ok 3 - same strings",
    ]


@pytest.mark.parametrize(
    "value,expected",
    [(0, False), ("x", True), (None, False), (False, False), ("", False), (1, True), ([0], True)],
)
def test_ok_uses_truthiness(planned, value, expected):
    t = planned(1)
    assert t.ok(value, "truthiness") is expected


# --- like / unlike ---


def test_like_and_unlike(planned, sink):
    t = planned(4)
    t.like("hello world", re.compile(r"wor"), "compiled pattern")
    t.unlike("hello world", re.compile(r"wor"), "compiled pattern, negated")
    t.like("hello world", r"^hel+o", "string pattern")
    t.unlike("hello world", "xyz", "absent substring")
    assert sink.lines[1:] == [
        "ok 1 - compiled pattern",
        "not ok 2 - compiled pattern, negated",
        "ok 3 - string pattern",
        "ok 4 - absent substring",
    ]


# --- can_ok ---


class Widget:
    def __init__(self):
        self.label = "not callable"

    def spin(self):
        return "spinning"

    @staticmethod
    def build():
        return Widget()

    @property
    def broken(self):
        raise AssertionError("properties must not be evaluated")


def test_can_ok_mapping_with_callable(planned, sink):
    t = planned(1)
    assert t.can_ok({"f": lambda: None}, "f") is True
    assert sink.lines == ["1..1", "ok 1 - object can [ f ]"]


def test_can_ok_missing_member_emits_diagnostic(planned, sink):
    t = planned(1)
    assert t.can_ok({}, "g") is False
    assert sink.lines == ["1..1", "# Missing g method", "not ok 1 - object can [ g ]"]


def test_can_ok_multiple_names(planned, sink):
    t = planned(1)
    t.can_ok(Widget(), "spin", "fly", "build", "label")
    assert sink.lines == [
        "1..1",
        "# Missing fly method",
        "# Missing label method",
        "not ok 1 - object can [ spin fly build label ]",
    ]


def test_can_ok_class_level_members(planned):
    t = planned(3)
    assert t.can_ok(Widget(), "spin", "build") is True
    assert t.can_ok(Widget, "spin", "build") is True
    assert t.can_ok(Widget(), "broken") is False


# --- throws_ok / dies_ok / lives_ok ---


def test_throws_ok_matching_exception(planned, sink):
    t = planned(1)
    assert t.throws_ok(boom, r"boom") is True
    assert sink.lines[-1] == "ok 1 - code threw [RuntimeError: boom] expected: [boom]"


def test_throws_ok_can_match_exception_type(planned):
    t = planned(1)
    assert t.throws_ok(divide_by_zero, re.compile(r"^ZeroDivisionError")) is True


def test_throws_ok_multiline_exception_stays_on_one_line(planned, sink):
    def raise_multiline():
        raise ValueError("first\nsecond")

    t = planned(1)
    assert t.throws_ok(raise_multiline, r"first\nsecond") is True
    assert sink.lines == [
        "1..1",
        "ok 1 - code threw [ValueError: first\\nsecond] expected: [first\\nsecond]",
    ]


def test_dies_ok_multiline_exception_stays_on_one_line(planned, sink):
    def raise_multiline():
        raise ValueError("first\nsecond")

    t = planned(1)
    t.dies_ok(raise_multiline)
    assert sink.lines[-1] == "ok 1 - code died with [ValueError: first\\nsecond]"


def test_throws_ok_without_exception_fails(planned, sink):
    t = planned(1)
    assert t.throws_ok(lambda: 1, r"boom") is False
    assert sink.lines[-1] == "not ok 1 - code threw [ ] expected: [boom]"


def test_throws_ok_non_callable_fails_without_calling(planned, sink):
    t = planned(1)
    assert t.throws_ok("not a function", r"boom") is False
    assert sink.lines == [
        "1..1",
        "# throws_ok needs a function to run",
        "not ok 1 - code threw [ ] expected: [boom]",
    ]


def test_dies_ok(planned, sink):
    t = planned(2)
    assert t.dies_ok(boom) is True
    assert t.dies_ok(lambda: 1) is False
    assert sink.lines[1:] == [
        "ok 1 - code died with [RuntimeError: boom]",
        "not ok 2 - code died with [ ]",
    ]


def test_dies_ok_non_callable(planned, sink):
    t = planned(1)
    assert t.dies_ok(42) is False
    assert sink.lines[1] == "# dies_ok needs a function to run"


def test_lives_ok(planned, sink):
    t = planned(2)
    assert t.lives_ok(lambda: 1, "quiet code") is True
    assert t.lives_ok(divide_by_zero, "loud code") is False
    assert sink.lines[1:] == [
        "ok 1 - quiet code",
        "# code died with [ZeroDivisionError: division by zero]",
        "not ok 2 - loud code",
    ]


def test_keyboard_interrupt_is_not_swallowed(planned):
    t = planned(1)

    def interrupt():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        t.dies_ok(interrupt)
    assert t.counter == 0


def test_usage_panic_inside_code_under_test_is_an_outcome(planned):
    t = planned(2)
    inner = TapReporter(MemorySink())
    assert t.throws_ok(lambda: inner.pass_("x"), r"UsagePanic: .*without a plan") is True
    assert t.counter == 1


# --- diag ---


def test_diag_escapes_pound_signs(reporter, sink):
    reporter.diag("issue #12 and #13")
    assert sink.lines == ["# issue <pound>12 and <pound>13"]
    assert reporter.counter == 0
    assert reporter.planned is None


def test_diag_multiline(reporter, sink):
    reporter.diag("first\nsecond")
    assert sink.lines == ["# first", "# second"]


def test_diag_empty_message(reporter, sink):
    reporter.diag("")
    assert sink.lines == ["# "]


def test_diag_custom_pound_token(sink):
    t = TapReporter(sink, pound_token="(hash)")
    t.diag("#1")
    assert sink.lines == ["# (hash)1"]


# --- finish ---


def test_finish_clean_run_emits_nothing(planned, sink):
    t = planned(2)
    t.pass_("a")
    t.pass_("b")
    assert t.finish() is True
    assert sink.lines == ["1..2", "ok 1 - a", "ok 2 - b"]


def test_finish_reports_underrun(planned, sink, caplog):
    t = planned(3)
    t.pass_("a")
    with caplog.at_level(logging.WARNING, logger="tapline"):
        assert t.finish() is False
    assert sink.lines[-1] == "# Looks like you planned 3 tests but ran 1."
    assert "planned 3 tests" in caplog.text


def test_finish_reports_failures(planned, sink):
    t = planned(2)
    t.pass_("a")
    t.fail("b")
    assert t.finish() is False
    assert sink.lines[-1] == "# Looks like you failed 1 test of 2 run."


def test_finish_reports_overrun_and_failures(planned, sink):
    t = planned(1)
    t.fail("a")
    t.fail("b")
    assert t.finish() is False
    assert sink.lines[-2:] == [
        "# Looks like you planned 1 test but ran 2.",
        "# Looks like you failed 2 tests of 2 run.",
    ]


def test_finish_before_plan_raises(reporter):
    with pytest.raises(UsagePanic):
        reporter.finish()


# --- sinks ---


def test_default_sink_is_stdout(capsys):
    t = TapReporter()
    t.plan(1)
    t.ok(True, "to stdout")
    assert capsys.readouterr().out == "1..1\nok 1 - to stdout\n"


def test_context_manager_closes_file_sink(tmp_path):
    path = tmp_path / "out.tap"
    with TapReporter(FileSink(path)) as t:
        t.plan(1)
        t.pass_("written")
    assert not t.sink.is_open
    assert path.read_text() == "1..1\nok 1 - written\n"
