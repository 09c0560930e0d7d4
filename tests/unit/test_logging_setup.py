"""Tests for logging setup."""

import logging

import pytest

from task_tracker.logging_setup import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_installs_single_handler(restore_root_logger):
    setup_logging("DEBUG")
    setup_logging("DEBUG")

    root = restore_root_logger
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG


def test_accepts_int_level(restore_root_logger):
    setup_logging(logging.WARNING)
    assert restore_root_logger.level == logging.WARNING


def test_unknown_level_name_falls_back_to_info(restore_root_logger):
    setup_logging("chatty")
    assert restore_root_logger.level == logging.INFO
