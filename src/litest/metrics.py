from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from litest.suite import TestSuite


@dataclass
class MetricStatistics:
    """Statistics for a single metric across tests."""

    avg: float | None
    min: float | None
    max: float | None
    stddev: float | None

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)


@dataclass
class SuiteSummary:
    """Aggregate view of the last run of a suite."""

    passes: int
    fails: int
    tests_run: int
    tests_passed: int
    tests_failed: int
    tests_aborted: int
    duration: MetricStatistics
    suite_seconds: float | None

    @property
    def assertions(self) -> int:
        return self.passes + self.fails

    @property
    def pass_rate(self) -> float | None:
        """Percentage of passed assertions, None if nothing was asserted."""
        if self.assertions == 0:
            return None
        return round(self.passes / self.assertions * 100, 2)

    @property
    def all_passed(self) -> bool:
        return self.fails == 0 and self.tests_aborted == 0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["assertions"] = self.assertions
        data["pass_rate"] = self.pass_rate
        data["all_passed"] = self.all_passed
        return data


def compute_stats(values: list[float | int | None]) -> MetricStatistics:
    """Compute avg, min, max, stddev for a list of numeric values."""
    nums = [v for v in values if v is not None]
    if not nums:
        return MetricStatistics(avg=None, min=None, max=None, stddev=None)

    arr = np.array(nums)
    return MetricStatistics(
        avg=round(float(np.mean(arr)), 6),
        min=round(float(np.min(arr)), 6),
        max=round(float(np.max(arr)), 6),
        stddev=round(float(np.std(arr)), 6),
    )


def summarize(suite: TestSuite) -> SuiteSummary:
    """Summarize the most recent run of *suite*."""
    total = suite.total_stats
    results = suite.results

    aborted = sum(1 for r in results if r.aborted)
    failed = sum(1 for r in results if not r.aborted and r.stats.fails > 0)

    return SuiteSummary(
        passes=total.passes,
        fails=total.fails,
        tests_run=len(results),
        tests_passed=len(results) - aborted - failed,
        tests_failed=failed,
        tests_aborted=aborted,
        duration=compute_stats([r.duration for r in results if not r.aborted]),
        suite_seconds=suite.duration,
    )
