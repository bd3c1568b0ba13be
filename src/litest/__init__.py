"""litest: a small unit-test execution engine with pluggable reporters."""

from litest.assertions import (
    AssertionOutcome,
    FailurePolicy,
    check,
    describe,
    equal,
    manual_failure,
    throws_any,
    throws_of_type,
)
from litest.errors import AssertionFailure, TestAbort
from litest.models import SuiteMode, Test, TestResult, TestStats
from litest.reporting import (
    HtmlReporter,
    JUnitReporter,
    LogLevel,
    MarkdownReporter,
    PlainReporter,
    Reporter,
)
from litest.suite import TestSuite

__all__ = [
    "AssertionFailure",
    "AssertionOutcome",
    "FailurePolicy",
    "HtmlReporter",
    "JUnitReporter",
    "LogLevel",
    "MarkdownReporter",
    "PlainReporter",
    "Reporter",
    "SuiteMode",
    "Test",
    "TestAbort",
    "TestResult",
    "TestStats",
    "TestSuite",
    "check",
    "describe",
    "equal",
    "manual_failure",
    "throws_any",
    "throws_of_type",
]
