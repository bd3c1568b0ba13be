from __future__ import annotations

import io

import pytest
from junitparser import Error, Failure, JUnitXml

from litest.reporting import (
    HtmlReporter,
    JUnitReporter,
    LogLevel,
    MarkdownReporter,
    PlainReporter,
    format_line,
)
from litest.reporting.markdown import RULE
from litest.reporting.plain import BANNER
from litest.suite import TestSuite


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


def _math(t):
    t.check(lambda: True, "1 == 1", line=3)
    t.equal(5, lambda: 6, "f()", line=4)
    t.message("hello", line=5)
    t.print_expr("x", 42, line=6)


def _boom(t):
    t.require(lambda: False, "ready", line=9)


@pytest.fixture
def sample_suite() -> TestSuite:
    suite = TestSuite("Sample")
    suite.add_test("math", _math, "math.py")
    suite.add_test("boom", _boom)
    return suite


@pytest.fixture
def passing_suite() -> TestSuite:
    suite = TestSuite("Green")
    suite.add_test("one", lambda t: t.check(lambda: True, "ok", line=1), "a.py")
    suite.add_test("two", lambda t: t.throws(lambda: 1 / 0, "1 / 0", line=2), "a.py")
    return suite


def test_format_line():
    assert format_line(12) == "12"
    assert format_line(0) == "???"


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------


def test_markdown_messages_level(sample_suite):
    buf = io.StringIO()
    sample_suite.run(lambda: MarkdownReporter(buf))

    assert buf.getvalue() == (
        f"\n Test 1: *math* in file *math.py*\n{RULE}\n"
        "- Line 4:\tEquals failed: `f()` != `5` (got `6`)\n"
        "- Line 5:\thello.\n"
        "- Line 6:\t`x` evaluates to `42`.\n"
        "\n**Total passed / failed assertions: 1 / 1**\n"
        f"\n Test 2: *boom* in file *N/A*\n{RULE}\n"
        "- Line 9:\tAssertion failed: `ready`\n"
        "- Line 9:\t**Test aborted: Check failed.**\n"
        "\n**Total passed / failed assertions: 0 / 1**\n"
        f"\n Summary\n{RULE}\n"
        "**Total passed / failed assertions: 1 / 2**\n\n"
    )


def test_markdown_errors_level_hides_messages(sample_suite):
    buf = io.StringIO()
    sample_suite.run(lambda: MarkdownReporter(buf, LogLevel.ERRORS))
    out = buf.getvalue()
    assert "hello." not in out
    assert "evaluates to" not in out
    assert "Equals failed" in out
    assert "**Test aborted: Check failed.**" in out


def test_markdown_everything_level_shows_passes(passing_suite):
    buf = io.StringIO()
    passing_suite.run(lambda: MarkdownReporter(buf, LogLevel.EVERYTHING))
    out = buf.getvalue()
    assert "- Line 1:\tPassed check: `ok`\n" in out
    assert "- Line 2:\tPassed throw: `1 / 0`\n" in out


def test_markdown_unknown_line_and_fault():
    suite = TestSuite("faults")
    suite.add_test("t", lambda t: t.check(lambda: {}["k"], "lookup", line=0))
    buf = io.StringIO()
    suite.run(lambda: MarkdownReporter(buf))
    out = buf.getvalue()
    assert "- Line ???:\tException was caught: 'k' in `lookup`\n" in out
    assert "- Line ???:\t**Test aborted: Caught in assertion**\n" in out


def test_markdown_writes_file(sample_suite, tmp_path):
    path = tmp_path / "out" / "report.md"
    sample_suite.run(lambda: MarkdownReporter(path=path))
    content = path.read_text()
    assert content.startswith("\n Test 1: *math*")
    assert "**Total passed / failed assertions: 1 / 2**" in content


def test_markdown_manual_failure_and_throw():
    suite = TestSuite("manual")

    def body(t):
        t.fail("not yet", line=7)
        t.throws(lambda: None, "noop()", line=8)

    suite.add_test("t", body)
    buf = io.StringIO()
    suite.run(lambda: MarkdownReporter(buf))
    out = buf.getvalue()
    assert "- Line 7:\tManual failure, reason: 'not yet'\n" in out
    assert "- Line 8:\tExpected exception: `noop()`\n" in out


# ---------------------------------------------------------------------------
# Plain
# ---------------------------------------------------------------------------


def test_plain_failed_run(sample_suite):
    buf = io.StringIO()
    sample_suite.run(lambda: PlainReporter(buf))
    assert buf.getvalue() == (
        "Starting new test: math\n"
        "Starting new test: boom\n"
        "Test aborted at line 9: Check failed.\n"
        f"\n{BANNER}\n"
        "Not all test cases passed.\n"
    )


def test_plain_passing_run(passing_suite):
    buf = io.StringIO()
    passing_suite.run(lambda: PlainReporter(buf))
    assert buf.getvalue().endswith(
        f"\n{BANNER}\nAll tests passed (2 assertions in 2 test cases).\n"
    )


def test_plain_unexpected_exception():
    suite = TestSuite("faults")
    suite.add_test("t", lambda t: t.equal(0, lambda: 1 / 0, line=4))
    buf = io.StringIO()
    suite.run(lambda: PlainReporter(buf))
    assert "Unexpected exception at line 4!\n" in buf.getvalue()
    assert "Test aborted at line 4: Caught in assertion\n" in buf.getvalue()


def test_plain_repeated_position_reports_earlier_abort():
    calls = []

    def flaky(t):
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("first call only")

    suite = TestSuite("repeat")
    suite.add_test("flaky", flaky)
    buf = io.StringIO()
    suite.run_some(lambda: PlainReporter(buf), [0, 0])
    assert buf.getvalue().endswith(f"\n{BANNER}\nNot all test cases passed.\n")


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


def test_html_report_written(sample_suite, tmp_path):
    path = tmp_path / "report.html"
    sample_suite.run(lambda: HtmlReporter(path))

    html = path.read_text()
    assert "<title>Sample</title>" in html
    assert 'class="failed">Test 1: <span class="test-title">math</span>' in html
    assert 'class="aborted">Test 2: <span class="test-title">boom</span>' in html
    assert "Failed equals: <code>f()</code> != <code>5</code>, got <code>6</code>" in html
    assert "Print expression <code>x</code>: <code>42</code>" in html
    assert "Test aborted: Check failed." in html
    assert "Total passed assertions: 1" in html
    assert "Total failed assertions: 2" in html


def test_html_escapes_values():
    suite = TestSuite("escape")
    suite.add_test("t", lambda t: t.check(lambda: True, "a < b", line=1))
    buf = io.StringIO()
    suite.run(lambda: HtmlReporter(stream=buf))
    html = buf.getvalue()
    assert "<code>a &lt; b</code>" in html
    assert 'class="passed">' in html
    assert "Success rate: 100.0%" in html


def test_html_sections_track_status(sample_suite):
    reporter = HtmlReporter(stream=io.StringIO())
    sample_suite.run(lambda: reporter)
    assert [(s.status, s.badge) for s in reporter.sections] == [
        ("failed", "×"),
        ("aborted", "╳"),
    ]
    assert reporter.sections[0].passes == 1
    assert reporter.sections[1].duration is None


# ---------------------------------------------------------------------------
# JUnit
# ---------------------------------------------------------------------------


def test_junit_writes_one_case_per_test(sample_suite, tmp_path):
    path = tmp_path / "reports" / "junit.xml"
    sample_suite.run(lambda: JUnitReporter(path))

    xml = JUnitXml.fromfile(str(path))
    suites = list(xml)
    assert len(suites) == 1
    junit_suite = suites[0]
    assert junit_suite.name == "Sample"

    props = {p.name: p.value for p in junit_suite.properties()}
    assert props == {"assertion_passes": "1", "assertion_fails": "2"}

    cases = {case.name: case for case in junit_suite}
    assert set(cases) == {"math", "boom"}
    assert cases["math"].classname == "math.py"

    [math_result] = cases["math"].result
    assert isinstance(math_result, Failure)
    assert math_result.message == "Line 4: Failed equals: f() != 5 (got 6)"

    boom_results = cases["boom"].result
    assert [type(r) for r in boom_results] == [Failure, Error]
    assert boom_results[1].message == "Line 9: Test aborted: Check failed."


def test_junit_passing_cases_have_no_result(passing_suite, tmp_path):
    path = tmp_path / "junit.xml"
    passing_suite.run(lambda: JUnitReporter(path))

    xml = JUnitXml.fromfile(str(path))
    cases = [case for suite in xml for case in suite]
    assert len(cases) == 2
    assert all(not case.result for case in cases)
    assert all(case.time >= 0 for case in cases)
