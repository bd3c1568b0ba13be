from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from junitparser import Error, Failure, JUnitXml, TestCase
from junitparser import TestSuite as JUnitSuite

from litest.reporting.base import Reporter, format_line

if TYPE_CHECKING:
    from litest.models import Test, TestStats
    from litest.suite import TestSuite


class JUnitReporter(Reporter):
    """Writes one <testcase> per executed test to a JUnit XML file at suite end.

    Failed assertions of a test are joined into a single Failure; an aborted
    test is reported as an Error carrying the abort reason.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.cases: list[TestCase] = []
        self._failures: list[str] = []
        self._abort: str | None = None

    def _failure(self, line: int, text: str) -> None:
        self._failures.append(f"Line {format_line(line)}: {text}")

    def on_test_header(self, test: Test) -> None:
        self._failures = []
        self._abort = None

    def on_test_aborted(self, line: int, reason: str) -> None:
        self._abort = f"Line {format_line(line)}: Test aborted: {reason}"

    def on_failed_check(self, line: int, expr: str) -> None:
        self._failure(line, f"Failed check: {expr}")

    def on_failed_throw(self, line: int, expr: str) -> None:
        self._failure(line, f"Expected exception: {expr}")

    def on_failed_equals(
        self, line: int, expr: str, expected: str, actual: str
    ) -> None:
        self._failure(line, f"Failed equals: {expr} != {expected} (got {actual})")

    def on_unexpected_fault(self, line: int, expr: str, message: str) -> None:
        self._failure(line, f"Caught exception: {message} in: {expr}")

    def on_manual_failure(self, line: int, reason: str) -> None:
        self._failure(line, f"Manual failure: {reason}")

    def on_test_footer(self, test: Test, stats: TestStats) -> None:
        case = TestCase(test.name)
        case.classname = test.file
        case.time = float(test.duration or 0.0)
        results = []
        if self._failures:
            results.append(Failure("\n".join(self._failures)))
        if self._abort is not None:
            results.append(Error(self._abort))
        if results:
            case.result = results
        self.cases.append(case)

    def on_suite_end(self, suite: TestSuite) -> None:
        junit_suite = JUnitSuite(suite.name)
        total = suite.total_stats
        junit_suite.add_property("assertion_passes", str(total.passes))
        junit_suite.add_property("assertion_fails", str(total.fails))
        for case in self.cases:
            junit_suite.add_testcase(case)

        # Set time after add_testcase (add_testcase resets it via update_statistics)
        junit_suite.time = float(suite.duration or 0.0)

        xml = JUnitXml()
        xml.append(junit_suite)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        xml.write(str(self.path), pretty=True)
