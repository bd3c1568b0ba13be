"""Reporter protocol driven by the suite during a run."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from litest.models import Test, TestStats
    from litest.suite import TestSuite


def format_line(line: int) -> str:
    """Render a source line number, ``"???"`` when unknown (0)."""
    return str(line) if line > 0 else "???"


def open_sink(
    stream: TextIO | None, path: Path | str | None
) -> tuple[TextIO, bool]:
    """Pick a text sink for a renderer: *path* if given, else *stream*, else stdout.

    Returns the sink and whether the renderer owns (and must close) it.
    """
    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return open(path, "w", encoding="utf-8"), True
    return (stream if stream is not None else sys.stdout), False


def close_sink(stream: TextIO, owned: bool) -> None:
    stream.flush()
    if owned:
        stream.close()


class Reporter:
    """Receives lifecycle and outcome events from a suite run.

    Every hook is a no-op; renderers override the ones they care about. All
    value arguments are already rendered to text.
    """

    # Lifecycle

    def on_suite_start(self, suite: TestSuite) -> None:
        pass

    def on_suite_end(self, suite: TestSuite) -> None:
        pass

    def on_test_header(self, test: Test) -> None:
        pass

    def on_test_footer(self, test: Test, stats: TestStats) -> None:
        pass

    def on_test_aborted(self, line: int, reason: str) -> None:
        pass

    # Events

    def on_passed_check(self, line: int, expr: str) -> None:
        pass

    def on_passed_throw(self, line: int, expr: str) -> None:
        pass

    def on_passed_equals(self, line: int, expr: str, value: str) -> None:
        pass

    def on_failed_check(self, line: int, expr: str) -> None:
        pass

    def on_failed_throw(self, line: int, expr: str) -> None:
        pass

    def on_failed_equals(
        self, line: int, expr: str, expected: str, actual: str
    ) -> None:
        pass

    def on_unexpected_fault(self, line: int, expr: str, message: str) -> None:
        pass

    def on_manual_failure(self, line: int, reason: str) -> None:
        pass

    def on_message(self, line: int, text: str) -> None:
        pass

    def on_expr_print(self, line: int, expr: str, value: str) -> None:
        pass

    def close(self) -> None:
        """Release the reporter's sink. Called once when the run finishes."""


ReporterFactory = Callable[[], Reporter]
