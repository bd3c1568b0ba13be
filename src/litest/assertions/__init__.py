"""Assertion system for evaluating test outcomes."""

from litest.assertions.base import AssertionOutcome, FailurePolicy, describe
from litest.assertions.evaluator import (
    check,
    equal,
    manual_failure,
    throws_any,
    throws_of_type,
)

__all__ = [
    "AssertionOutcome",
    "FailurePolicy",
    "check",
    "describe",
    "equal",
    "manual_failure",
    "throws_any",
    "throws_of_type",
]
