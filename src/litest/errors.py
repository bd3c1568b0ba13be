"""Control-flow signals raised by the assertion engine.

Both signals derive from ``BaseException`` so that ``except Exception`` blocks
in test bodies, and in the evaluators themselves, never swallow them.
"""

from __future__ import annotations


class LitestSignal(BaseException):
    """Base for engine signals that must not be caught as ordinary faults."""


class TestAbort(LitestSignal):
    """Unwinds the remainder of a test body after an aborting failure.

    Caught only by the run controller.
    """

    __test__ = False

    def __init__(self, line: int, reason: str):
        super().__init__(reason)
        self.line = line
        self.reason = reason


class AssertionFailure(LitestSignal):
    """Raised on the first failed assertion when the suite runs in THROW mode.

    Escapes the whole run so a debugger stops at the failing assertion.
    """
