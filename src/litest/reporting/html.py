from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TextIO, TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader

from litest.metrics import summarize
from litest.reporting.base import Reporter, format_line

if TYPE_CHECKING:
    from litest.models import Test, TestStats
    from litest.suite import TestSuite


@dataclass
class LogItem:
    kind: str  # pass | fail | message | abort
    css: str
    line: str
    text: str
    parts: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class TestSection:
    index: int
    name: str
    file: str
    items: list[LogItem] = field(default_factory=list)
    status: str = "passed"
    badge: str = "✓"
    passes: int = 0
    fails: int = 0
    duration: float | None = None


class HtmlReporter(Reporter):
    """Collects a run and renders it as a standalone HTML page at suite end.

    Writes to ``path`` when given, otherwise to ``stream`` (stdout by default).
    """

    def __init__(self, path: Path | str | None = None, stream: TextIO | None = None):
        self.path = Path(path) if path is not None else None
        self.stream = stream
        self.sections: list[TestSection] = []

    def _add(
        self, kind: str, css: str, line: int, text: str, *parts: tuple[str, str]
    ) -> None:
        if not self.sections:
            return
        self.sections[-1].items.append(
            LogItem(
                kind=kind, css=css, line=format_line(line), text=text, parts=list(parts)
            )
        )

    def on_test_header(self, test: Test) -> None:
        self.sections.append(
            TestSection(index=test.index, name=test.name, file=test.file)
        )

    def on_test_footer(self, test: Test, stats: TestStats) -> None:
        section = self.sections[-1]
        section.passes, section.fails = stats.passes, stats.fails
        section.duration = test.duration
        if test.aborted:
            section.status, section.badge = "aborted", "╳"
        elif stats.fails == 0:
            section.status, section.badge = "passed", "✓"
        else:
            section.status, section.badge = "failed", "×"

    def on_test_aborted(self, line: int, reason: str) -> None:
        self._add("abort", "abort", line, f"Test aborted: {reason}")

    def on_message(self, line: int, text: str) -> None:
        self._add("message", "message", line, text)

    def on_expr_print(self, line: int, expr: str, value: str) -> None:
        self._add(
            "message", "message", line, "Print expression", (" ", expr), (": ", value)
        )

    def on_passed_check(self, line: int, expr: str) -> None:
        self._add("pass", "pass check", line, "Passed check", (": ", expr))

    def on_passed_throw(self, line: int, expr: str) -> None:
        self._add("pass", "pass throw", line, "Passed throw check", (": ", expr))

    def on_passed_equals(self, line: int, expr: str, value: str) -> None:
        self._add(
            "pass", "pass equals", line, "Passed equals", (": ", expr), (" == ", value)
        )

    def on_unexpected_fault(self, line: int, expr: str, message: str) -> None:
        self._add(
            "fail",
            "fail unexpected-exception",
            line,
            f"Caught exception: {message}",
            (" in: ", expr),
        )

    def on_failed_check(self, line: int, expr: str) -> None:
        self._add("fail", "fail broken-assertion", line, "Failed check", (": ", expr))

    def on_failed_throw(self, line: int, expr: str) -> None:
        self._add("fail", "fail no-exception", line, "Expected exception", (": ", expr))

    def on_failed_equals(
        self, line: int, expr: str, expected: str, actual: str
    ) -> None:
        self._add(
            "fail",
            "fail unexpected-value",
            line,
            "Failed equals",
            (": ", expr),
            (" != ", expected),
            (", got ", actual),
        )

    def on_manual_failure(self, line: int, reason: str) -> None:
        self._add("fail", "fail manual", line, f"Manual failure: {reason}")

    def render(self, suite: TestSuite) -> str:
        tmpl_dir = Path(__file__).parent / "templates"
        env = Environment(loader=FileSystemLoader(str(tmpl_dir)), autoescape=True)
        template = env.get_template("report.html.j2")
        return template.render(
            suite_name=suite.name,
            generated=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            sections=self.sections,
            summary=summarize(suite),
        )

    def on_suite_end(self, suite: TestSuite) -> None:
        html = self.render(suite)
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(html, encoding="utf-8")
        else:
            out = self.stream if self.stream is not None else sys.stdout
            out.write(html)
            out.flush()
