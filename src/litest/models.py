from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from litest.suite import TestSuite

TestFunc = Callable[["TestSuite"], Any]


class SuiteMode(str, Enum):
    """How a suite reacts to a failed assertion during a run."""

    CONTINUE = "continue"
    # Raise AssertionFailure on the first failure. Useful for debugging.
    THROW = "throw"


@dataclass
class TestStats:
    """Passed and failed assertion counters."""

    __test__ = False

    passes: int = 0
    fails: int = 0

    @property
    def total(self) -> int:
        return self.passes + self.fails

    def snapshot(self) -> TestStats:
        return replace(self)

    def __add__(self, other: TestStats) -> TestStats:
        if not isinstance(other, TestStats):
            return NotImplemented
        return TestStats(self.passes + other.passes, self.fails + other.fails)


@dataclass
class Test:
    """A registered test.

    Attributes:
        file: Label of the file the test was defined in. Informational only.
        name: Display name.
        func: Test body, called with the owning suite.
        index: 1-based position in the suite, assigned at registration.
        aborted: Whether the last execution was cut short.
        duration: Wall time of the last execution in seconds. None if the
            test was aborted or has not run.
    """

    __test__ = False

    file: str
    name: str
    func: TestFunc = field(repr=False)
    index: int
    aborted: bool = False
    duration: float | None = None


@dataclass
class TestResult:
    """Outcome of one execution of a test within a run.

    A test run twice in the same run (a repeated position) gets two results.
    """

    __test__ = False

    test: Test
    stats: TestStats = field(default_factory=TestStats)
    aborted: bool = False
    duration: float | None = None
