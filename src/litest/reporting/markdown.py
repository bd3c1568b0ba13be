"""Markdown renderer."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import TextIO, TYPE_CHECKING

from litest.reporting.base import Reporter, close_sink, format_line, open_sink

if TYPE_CHECKING:
    from litest.models import Test, TestStats
    from litest.suite import TestSuite

RULE = "-" * 48


class LogLevel(IntEnum):
    """What the Markdown renderer writes during a test."""

    ERRORS = 1  # failed assertions and aborted tests
    MESSAGES = 2  # also messages and printed expressions
    EVERYTHING = 3  # also passed assertions


class MarkdownReporter(Reporter):
    def __init__(
        self,
        stream: TextIO | None = None,
        level: LogLevel = LogLevel.MESSAGES,
        path: Path | str | None = None,
    ):
        self.stream, self._owns_stream = open_sink(stream, path)
        self.level = LogLevel(level)

    @property
    def log_messages(self) -> bool:
        return self.level >= LogLevel.MESSAGES

    @property
    def log_passes(self) -> bool:
        return self.level >= LogLevel.EVERYTHING

    def _write(self, text: str) -> None:
        self.stream.write(text + "\n")

    def _item(self, line: int, text: str) -> None:
        self._write(f"- Line {format_line(line)}:\t{text}")

    def on_test_header(self, test: Test) -> None:
        self._write(f"\n Test {test.index}: *{test.name}* in file *{test.file}*")
        self._write(RULE)

    def on_test_footer(self, test: Test, stats: TestStats) -> None:
        self._write(
            f"\n**Total passed / failed assertions: {stats.passes} / {stats.fails}**"
        )

    def on_suite_end(self, suite: TestSuite) -> None:
        total = suite.total_stats
        self._write("\n Summary")
        self._write(RULE)
        self._write(
            f"**Total passed / failed assertions: {total.passes} / {total.fails}**\n"
        )

    def on_test_aborted(self, line: int, reason: str) -> None:
        self._item(line, f"**Test aborted: {reason}**")

    def on_passed_check(self, line: int, expr: str) -> None:
        if self.log_passes:
            self._item(line, f"Passed check: `{expr}`")

    def on_passed_throw(self, line: int, expr: str) -> None:
        if self.log_passes:
            self._item(line, f"Passed throw: `{expr}`")

    def on_passed_equals(self, line: int, expr: str, value: str) -> None:
        if self.log_passes:
            self._item(line, f"Passed equals: `{expr}` == `{value}`")

    def on_message(self, line: int, text: str) -> None:
        if self.log_messages:
            self._item(line, f"{text}.")

    def on_expr_print(self, line: int, expr: str, value: str) -> None:
        if self.log_messages:
            self._item(line, f"`{expr}` evaluates to `{value}`.")

    def on_unexpected_fault(self, line: int, expr: str, message: str) -> None:
        self._item(line, f"Exception was caught: {message} in `{expr}`")

    def on_failed_check(self, line: int, expr: str) -> None:
        self._item(line, f"Assertion failed: `{expr}`")

    def on_failed_throw(self, line: int, expr: str) -> None:
        self._item(line, f"Expected exception: `{expr}`")

    def on_failed_equals(
        self, line: int, expr: str, expected: str, actual: str
    ) -> None:
        self._item(line, f"Equals failed: `{expr}` != `{expected}` (got `{actual}`)")

    def on_manual_failure(self, line: int, reason: str) -> None:
        self._item(line, f"Manual failure, reason: '{reason}'")

    def close(self) -> None:
        close_sink(self.stream, self._owns_stream)
