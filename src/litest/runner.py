from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from litest.assertions.base import FAULTS, fault_message
from litest.errors import TestAbort
from litest.models import Test

if TYPE_CHECKING:
    from litest.suite import TestSuite

logger = logging.getLogger(__name__)


def run_test(suite: TestSuite, test: Test) -> None:
    """Execute a single test body with *suite* as its context.

    This is the outermost recovery boundary for one test: TestAbort, any
    ordinary exception and SystemExit escaping the body (or the reporter's
    header hook) mark the test aborted and are not re-raised.
    AssertionFailure (THROW mode) and KeyboardInterrupt propagate.
    """
    result = suite.start_test(test)
    output = suite.output
    test.aborted = False
    test.duration = None

    try:
        output.on_test_header(test)
        started = time.monotonic()
        test.func(suite)
        test.duration = time.monotonic() - started
    except TestAbort as e:
        test.aborted = True
        logger.debug(f"Test {test.index} '{test.name}' aborted at line {e.line}: {e.reason}")
        output.on_test_aborted(e.line, e.reason)
    except FAULTS as e:
        test.aborted = True
        logger.debug(
            f"Test {test.index} '{test.name}' raised {type(e).__name__} outside of an assertion"
        )
        output.on_test_aborted(0, f"Uncaught exception: {fault_message(e)}")

    result.aborted = test.aborted
    result.duration = test.duration
    stats = result.stats
    if not test.aborted:
        logger.debug(
            f"Test {test.index} '{test.name}' finished in {test.duration:.6f}s: "
            f"{stats.passes} passed, {stats.fails} failed"
        )
    output.on_test_footer(test, stats.snapshot())
