"""Import a TestSuite object from a Python file."""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path

from litest.suite import TestSuite

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE = "suite"


def parse_target(target: str) -> tuple[Path, str]:
    """Split ``path/to/file.py[:attr]`` into the file path and attribute name."""
    head, sep, tail = target.rpartition(":")
    if sep and tail.isidentifier():
        return Path(head), tail
    return Path(target), DEFAULT_ATTRIBUTE


def load_suite(target: str) -> TestSuite:
    """Execute the file named by *target* and return its suite object.

    Raises ValueError when the file is missing, cannot be imported, or does
    not define a TestSuite under the requested name.
    """
    path, attr = parse_target(target)
    if not path.is_file():
        raise ValueError(f"suite file not found: {path}")

    module_name = f"litest_suite_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ValueError(f"cannot import {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[module_name]
        raise ValueError(f"failed to import {path}: {e}") from e

    suite = getattr(module, attr, None)
    if not isinstance(suite, TestSuite):
        raise ValueError(f"{path} does not define a TestSuite named '{attr}'")

    logger.debug(f"Loaded suite '{suite.name}' with {len(suite.tests)} test(s) from {path}")
    return suite
