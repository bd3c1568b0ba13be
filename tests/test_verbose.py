"""Tests for verbose logging."""

import logging
from pathlib import Path

from litest.reporting.base import Reporter
from litest.suite import TestSuite
from litest.verbose import setup_logger


def test_verbose_logger_creates_debug_log(tmp_path):
    """Logger should create the debug file when one is given."""
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_verbose_logger_writes_to_file(tmp_path):
    """Logger should write messages to debug file."""
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert "[" in content  # timestamp


def test_verbose_mode_adds_stderr_handler(tmp_path):
    """Logger should have stderr handler when verbose=True."""
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    assert len(logger.handlers) == 2
    handler_types = [type(h).__name__ for h in logger.handlers]
    assert "StreamHandler" in handler_types
    assert "FileHandler" in handler_types


def test_non_verbose_mode_only_file_handler(tmp_path):
    """Logger should only have file handler when verbose=False."""
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=False)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.FileHandler)


def test_no_outputs_gets_null_handler():
    logger = setup_logger()
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.NullHandler)


def test_logger_creates_parent_directories(tmp_path):
    """Logger should create parent directories for debug file."""
    debug_file = tmp_path / "nested" / "dir" / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    assert debug_file.exists()
    assert debug_file.parent.exists()


def test_setup_twice_replaces_handlers(tmp_path: Path):
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"

    logger = setup_logger(first)
    logger.debug("one")
    logger = setup_logger(second)
    logger.debug("two")

    assert len(logger.handlers) == 1
    assert "two" not in first.read_text()
    assert "two" in second.read_text()


def test_engine_records_reach_debug_file(tmp_path):
    """Engine modules log under the litest namespace."""
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file)

    suite = TestSuite("logged")
    suite.add_test("aborts", lambda t: t.require(lambda: False, "x", line=3))
    suite.run(Reporter)

    content = debug_file.read_text()
    assert "Starting suite 'logged' in continue mode" in content
    assert "Test 1 'aborts' aborted at line 3: Check failed." in content
