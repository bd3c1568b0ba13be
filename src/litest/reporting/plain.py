"""Plain-text renderer with a one-line verdict."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO, TYPE_CHECKING

from litest.metrics import summarize
from litest.reporting.base import Reporter, close_sink, format_line, open_sink

if TYPE_CHECKING:
    from litest.models import Test
    from litest.suite import TestSuite

BANNER = "=" * 79


class PlainReporter(Reporter):
    def __init__(self, stream: TextIO | None = None, path: Path | str | None = None):
        self.stream, self._owns_stream = open_sink(stream, path)

    def on_test_header(self, test: Test) -> None:
        self.stream.write(f"Starting new test: {test.name}\n")

    def on_unexpected_fault(self, line: int, expr: str, message: str) -> None:
        self.stream.write(f"Unexpected exception at line {format_line(line)}!\n")

    def on_test_aborted(self, line: int, reason: str) -> None:
        self.stream.write(f"Test aborted at line {format_line(line)}: {reason}\n")

    def on_suite_end(self, suite: TestSuite) -> None:
        summary = summarize(suite)
        self.stream.write(f"\n{BANNER}\n")
        if summary.all_passed:
            self.stream.write(
                f"All tests passed ({summary.assertions} assertions "
                f"in {summary.tests_run} test cases).\n"
            )
        else:
            self.stream.write("Not all test cases passed.\n")

    def close(self) -> None:
        close_sink(self.stream, self._owns_stream)
