"""Pytest configuration and fixtures."""

import logging

import pytest

from litest.reporting.base import Reporter


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up litest loggers after each test so handlers don't leak."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name == "litest" or name.startswith("litest.")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()


# ---------------------------------------------------------------------------
# Recording reporter
# ---------------------------------------------------------------------------

HOOKS = [
    "on_suite_start",
    "on_suite_end",
    "on_test_header",
    "on_test_footer",
    "on_test_aborted",
    "on_passed_check",
    "on_passed_throw",
    "on_passed_equals",
    "on_failed_check",
    "on_failed_throw",
    "on_failed_equals",
    "on_unexpected_fault",
    "on_manual_failure",
    "on_message",
    "on_expr_print",
]


class RecordingReporter(Reporter):
    """Reporter that records every hook call as ``(hook_name, *args)``."""

    def __init__(self):
        self.events: list[tuple] = []
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def named(self, hook: str) -> list[tuple]:
        return [e[1:] for e in self.events if e[0] == hook]

    def kinds(self) -> list[str]:
        return [e[0] for e in self.events]


def _make_hook(hook_name):
    def hook(self, *args):
        self.events.append((hook_name, *args))

    return hook


for _hook in HOOKS:
    setattr(RecordingReporter, _hook, _make_hook(_hook))


@pytest.fixture
def recorder() -> RecordingReporter:
    return RecordingReporter()
