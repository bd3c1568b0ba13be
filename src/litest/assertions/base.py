"""Base data structures for the assertion system."""

from __future__ import annotations

from enum import Enum
from typing import Any

NOT_AVAILABLE = "N/A"

# Faults raised by test code. KeyboardInterrupt and engine signals are not
# among them and always propagate.
FAULTS = (Exception, SystemExit)


class AssertionOutcome(str, Enum):
    """Result of evaluating a single assertion."""

    PASSED = "passed"
    FAILED = "failed"


class FailurePolicy(str, Enum):
    """What to do with the rest of the test body after a failed assertion."""

    CONTINUE = "continue"
    ABORT = "abort"


def _has_text_form(value: Any) -> bool:
    cls = type(value)
    return cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__


def describe(value: Any) -> str:
    """Render *value* for a reporter, or ``"N/A"`` if it has no text form.

    Objects relying on ``object``'s default ``<Foo object at 0x...>`` repr are
    treated as having no text form.
    """
    if not _has_text_form(value):
        return NOT_AVAILABLE
    try:
        return str(value)
    except Exception:
        return NOT_AVAILABLE


def fault_message(exc: BaseException) -> str:
    """Return the exception's message, or ``"N/A"`` when it has none."""
    try:
        message = str(exc)
    except Exception:
        return NOT_AVAILABLE
    return message or NOT_AVAILABLE
