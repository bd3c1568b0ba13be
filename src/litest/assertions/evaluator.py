"""Assertion evaluators.

Each evaluator runs one assertion against a suite that is currently running,
updates the suite's counters, emits exactly one reporter event and then applies
the failure policy. Callables are evaluated inside ``except FAULTS``
(``Exception`` and ``SystemExit``) so an unexpected fault is recorded instead
of escaping into the test body.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TYPE_CHECKING

from litest.assertions.base import (
    FAULTS,
    NOT_AVAILABLE,
    AssertionOutcome,
    FailurePolicy,
    describe,
    fault_message,
)
from litest.errors import AssertionFailure, TestAbort
from litest.models import SuiteMode

if TYPE_CHECKING:
    from litest.suite import TestSuite

logger = logging.getLogger(__name__)

ExceptionTypes = type[BaseException] | tuple[type[BaseException], ...]


def resolve_failure(
    suite: TestSuite,
    on_fail: FailurePolicy,
    line: int,
    reason: str,
    hard_message: str,
) -> AssertionOutcome:
    """Apply the suite mode and failure policy after a failed assertion.

    THROW mode wins over any policy. Otherwise ABORT unwinds the test body and
    CONTINUE hands control back to it.
    """
    if suite.mode == SuiteMode.THROW:
        raise AssertionFailure(hard_message)
    if on_fail == FailurePolicy.ABORT:
        raise TestAbort(line, reason)
    return AssertionOutcome.FAILED


def report_exception(
    suite: TestSuite,
    exc: BaseException,
    expr: str,
    line: int,
) -> AssertionOutcome:
    """Record an unexpected exception raised inside an assertion.

    Always resolves with an ABORT policy: the rest of the body cannot be
    trusted once something blew up where nothing was expected.
    """
    logger.debug(f"Unexpected {type(exc).__name__} in assertion '{expr}' (line {line})")
    suite.record_fail()
    suite.output.on_unexpected_fault(line, expr, fault_message(exc))
    return resolve_failure(
        suite,
        FailurePolicy.ABORT,
        line,
        "Caught in assertion",
        f"Unexpected exception in: {expr}",
    )


def check(
    suite: TestSuite,
    func: Callable[[], Any],
    on_fail: FailurePolicy = FailurePolicy.CONTINUE,
    expr: str = NOT_AVAILABLE,
    line: int = 0,
) -> AssertionOutcome:
    """Assert that ``func()`` returns a truthy value."""
    try:
        result = func()
    except FAULTS as e:
        return report_exception(suite, e, expr, line)

    if not result:
        suite.record_fail()
        suite.output.on_failed_check(line, expr)
        return resolve_failure(
            suite, on_fail, line, "Check failed.", f"Broken assertion in: {expr}"
        )

    suite.record_pass()
    suite.output.on_passed_check(line, expr)
    return AssertionOutcome.PASSED


def equal(
    suite: TestSuite,
    expected: Any,
    func: Callable[[], Any],
    on_fail: FailurePolicy = FailurePolicy.CONTINUE,
    expr: str = NOT_AVAILABLE,
    line: int = 0,
) -> AssertionOutcome:
    """Assert that ``func()`` compares equal to *expected*."""
    try:
        actual = func()
        matched = bool(actual == expected)
    except FAULTS as e:
        return report_exception(suite, e, expr, line)

    if not matched:
        suite.record_fail()
        suite.output.on_failed_equals(line, expr, describe(expected), describe(actual))
        return resolve_failure(
            suite, on_fail, line, "Equal failed.", f"Unexpected value in: {expr}"
        )

    suite.record_pass()
    suite.output.on_passed_equals(line, expr, describe(expected))
    return AssertionOutcome.PASSED


def _no_exception(
    suite: TestSuite, on_fail: FailurePolicy, expr: str, line: int
) -> AssertionOutcome:
    suite.record_fail()
    suite.output.on_failed_throw(line, expr)
    return resolve_failure(
        suite,
        on_fail,
        line,
        "No exception in throw assertion.",
        f"No exception in: {expr}",
    )


def throws_any(
    suite: TestSuite,
    func: Callable[[], Any],
    on_fail: FailurePolicy = FailurePolicy.CONTINUE,
    expr: str = NOT_AVAILABLE,
    line: int = 0,
) -> AssertionOutcome:
    """Assert that ``func()`` raises any exception. The exception is absorbed."""
    try:
        func()
    except FAULTS:
        suite.record_pass()
        suite.output.on_passed_throw(line, expr)
        return AssertionOutcome.PASSED
    return _no_exception(suite, on_fail, expr, line)


def throws_of_type(
    suite: TestSuite,
    exc_type: ExceptionTypes,
    func: Callable[[], Any],
    on_fail: FailurePolicy = FailurePolicy.CONTINUE,
    expr: str = NOT_AVAILABLE,
    line: int = 0,
) -> AssertionOutcome:
    """Assert that ``func()`` raises an instance of *exc_type*.

    Any other exception is reported as unexpected and aborts the test.
    """
    try:
        func()
    except exc_type:
        suite.record_pass()
        suite.output.on_passed_throw(line, expr)
        return AssertionOutcome.PASSED
    except FAULTS as e:
        return report_exception(suite, e, expr, line)
    return _no_exception(suite, on_fail, expr, line)


def manual_failure(
    suite: TestSuite,
    reason: str,
    on_fail: FailurePolicy = FailurePolicy.CONTINUE,
    line: int = 0,
) -> AssertionOutcome:
    """Record a failure with a free-text reason."""
    suite.record_fail()
    suite.output.on_manual_failure(line, reason)
    return resolve_failure(
        suite, on_fail, line, "Manual failure", f"Manual failure, reason: {reason}"
    )
