from __future__ import annotations

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from litest.assertions import evaluator
from litest.assertions.base import (
    NOT_AVAILABLE,
    AssertionOutcome,
    FailurePolicy,
    describe,
)
from litest.models import SuiteMode, Test, TestFunc, TestResult, TestStats
from litest.reporting.base import Reporter, ReporterFactory
from litest.runner import run_test

logger = logging.getLogger(__name__)


def _caller_line() -> int:
    # 0: this helper, 1: the suite method, 2: the test body calling it
    return sys._getframe(2).f_lineno


class TestSuite:
    """An ordered collection of tests and the state of the run executing them.

    Tests are registered with :meth:`add_test` (or the :meth:`test`
    decorator) and executed with :meth:`run` or :meth:`run_some`. A reporter
    is attached only while a run is in progress, so the same suite can be run
    again with a different reporter. Each run starts from zero statistics.
    """

    __test__ = False

    def __init__(self, name: str):
        self.name = name
        self.tests: list[Test] = []
        self.mode = SuiteMode.CONTINUE
        self.reporter: Reporter | None = None
        self.start_time: datetime | None = None
        self.end_time: datetime | None = None
        self.duration: float | None = None
        self.results: list[TestResult] = []
        self._total_stats = TestStats()

    # Registration

    def add_test(self, name: str, func: TestFunc, file: str = NOT_AVAILABLE) -> int:
        """Register a test and return its 1-based index."""
        index = len(self.tests) + 1
        self.tests.append(Test(file=file, name=name, func=func, index=index))
        return index

    def test(
        self, name: str | None = None, file: str | None = None
    ) -> Callable[[TestFunc], TestFunc]:
        """Decorator form of :meth:`add_test`."""

        def register(func: TestFunc) -> TestFunc:
            code = getattr(func, "__code__", None)
            label = file or (code.co_filename if code is not None else NOT_AVAILABLE)
            self.add_test(name or func.__name__, func, label)
            return func

        return register

    # Running

    def run(
        self, reporter_factory: ReporterFactory, mode: SuiteMode = SuiteMode.CONTINUE
    ) -> None:
        """Run every registered test in registration order."""
        self.run_some(reporter_factory, range(len(self.tests)), mode)

    def run_some(
        self,
        reporter_factory: ReporterFactory,
        indices: Iterable[int],
        mode: SuiteMode = SuiteMode.CONTINUE,
    ) -> None:
        """Run the tests at the given 0-based positions, in the given order.

        Positions outside the registered range are skipped.
        """
        if self.reporter is not None:
            raise RuntimeError(f"Suite '{self.name}' is already running")

        self.mode = SuiteMode(mode)
        self.reporter = reporter_factory()
        self._total_stats = TestStats()
        self.results = []
        self.end_time = None
        self.duration = None

        try:
            logger.debug(f"Starting suite '{self.name}' in {self.mode.value} mode")
            self.start_time = datetime.now(timezone.utc)
            started = time.monotonic()
            self.reporter.on_suite_start(self)

            for position in indices:
                if not 0 <= position < len(self.tests):
                    logger.debug(f"Skipping test position {position}: out of range")
                    continue
                run_test(self, self.tests[position])

            self.end_time = datetime.now(timezone.utc)
            self.duration = time.monotonic() - started
            self.reporter.on_suite_end(self)
            logger.debug(
                f"Suite '{self.name}' finished in {self.duration:.3f}s: "
                f"{self._total_stats.passes} passed, {self._total_stats.fails} failed"
            )
        finally:
            reporter, self.reporter = self.reporter, None
            reporter.close()

    # Run state

    @property
    def output(self) -> Reporter:
        """The reporter of the run in progress."""
        if self.reporter is None:
            raise RuntimeError(f"Suite '{self.name}' is not running")
        return self.reporter

    def start_test(self, test: Test) -> TestResult:
        """Open a fresh result record for one execution of *test*."""
        result = TestResult(test=test)
        self.results.append(result)
        return result

    def record_pass(self) -> AssertionOutcome:
        self._running_stats().passes += 1
        self._total_stats.passes += 1
        return AssertionOutcome.PASSED

    def record_fail(self) -> AssertionOutcome:
        self._running_stats().fails += 1
        self._total_stats.fails += 1
        return AssertionOutcome.FAILED

    def _running_stats(self) -> TestStats:
        if self.reporter is None or not self.results:
            raise RuntimeError(f"No test of suite '{self.name}' is running")
        return self.results[-1].stats

    @property
    def current_test_stats(self) -> TestStats:
        if not self.results:
            raise RuntimeError(f"Suite '{self.name}' has not run a test yet")
        return self.results[-1].stats

    @property
    def total_stats(self) -> TestStats:
        return self._total_stats.snapshot()

    @property
    def test_stats(self) -> list[TestStats]:
        """Per-test stats of the last run, in execution order."""
        return [r.stats.snapshot() for r in self.results]

    @property
    def executed_tests(self) -> list[Test]:
        """Tests executed by the last run, once per execution."""
        return [r.test for r in self.results]

    # Call-site helpers. Without an explicit ``line`` these record the line of
    # the test body that called them.

    def check(
        self, func: Callable[[], Any], expr: str = NOT_AVAILABLE, line: int | None = None
    ) -> AssertionOutcome:
        """Check that ``func()`` is truthy; the test continues on failure."""
        line = _caller_line() if line is None else line
        return evaluator.check(self, func, FailurePolicy.CONTINUE, expr, line)

    def require(
        self, func: Callable[[], Any], expr: str = NOT_AVAILABLE, line: int | None = None
    ) -> AssertionOutcome:
        """Check that ``func()`` is truthy; the test aborts on failure."""
        line = _caller_line() if line is None else line
        return evaluator.check(self, func, FailurePolicy.ABORT, expr, line)

    def equal(
        self,
        expected: Any,
        func: Callable[[], Any],
        expr: str = NOT_AVAILABLE,
        line: int | None = None,
    ) -> AssertionOutcome:
        """Check that ``func()`` equals *expected*; the test continues on failure."""
        line = _caller_line() if line is None else line
        return evaluator.equal(self, expected, func, FailurePolicy.CONTINUE, expr, line)

    def equal_req(
        self,
        expected: Any,
        func: Callable[[], Any],
        expr: str = NOT_AVAILABLE,
        line: int | None = None,
    ) -> AssertionOutcome:
        line = _caller_line() if line is None else line
        return evaluator.equal(self, expected, func, FailurePolicy.ABORT, expr, line)

    def throws(
        self, func: Callable[[], Any], expr: str = NOT_AVAILABLE, line: int | None = None
    ) -> AssertionOutcome:
        line = _caller_line() if line is None else line
        return evaluator.throws_any(self, func, FailurePolicy.CONTINUE, expr, line)

    def throws_req(
        self, func: Callable[[], Any], expr: str = NOT_AVAILABLE, line: int | None = None
    ) -> AssertionOutcome:
        line = _caller_line() if line is None else line
        return evaluator.throws_any(self, func, FailurePolicy.ABORT, expr, line)

    def raises(
        self,
        exc_type: evaluator.ExceptionTypes,
        func: Callable[[], Any],
        expr: str = NOT_AVAILABLE,
        line: int | None = None,
    ) -> AssertionOutcome:
        line = _caller_line() if line is None else line
        return evaluator.throws_of_type(
            self, exc_type, func, FailurePolicy.CONTINUE, expr, line
        )

    def raises_req(
        self,
        exc_type: evaluator.ExceptionTypes,
        func: Callable[[], Any],
        expr: str = NOT_AVAILABLE,
        line: int | None = None,
    ) -> AssertionOutcome:
        line = _caller_line() if line is None else line
        return evaluator.throws_of_type(
            self, exc_type, func, FailurePolicy.ABORT, expr, line
        )

    def fail(self, reason: str, line: int | None = None) -> AssertionOutcome:
        """Record a failure; the test continues."""
        line = _caller_line() if line is None else line
        return evaluator.manual_failure(self, reason, FailurePolicy.CONTINUE, line)

    def abort(self, reason: str, line: int | None = None) -> AssertionOutcome:
        """Record a failure and abort the test."""
        line = _caller_line() if line is None else line
        return evaluator.manual_failure(self, reason, FailurePolicy.ABORT, line)

    def message(self, text: str, line: int | None = None) -> None:
        line = _caller_line() if line is None else line
        self.output.on_message(line, text)

    def print_expr(self, expr: str, value: Any, line: int | None = None) -> None:
        line = _caller_line() if line is None else line
        self.output.on_expr_print(line, expr, describe(value))
