"""Reporter protocol and bundled renderers."""

from litest.reporting.base import Reporter, ReporterFactory, format_line
from litest.reporting.html import HtmlReporter
from litest.reporting.junit import JUnitReporter
from litest.reporting.markdown import LogLevel, MarkdownReporter
from litest.reporting.plain import PlainReporter

__all__ = [
    "HtmlReporter",
    "JUnitReporter",
    "LogLevel",
    "MarkdownReporter",
    "PlainReporter",
    "Reporter",
    "ReporterFactory",
    "format_line",
]
