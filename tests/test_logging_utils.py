"""Tests for lsn's logging setup."""

import logging

import pytest

from lsn.logging_utils import LOG_FORMAT, configure_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("lsn")
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def test_configure_logging_sets_level(clean_logger):
    logger = configure_logging("debug")
    assert logger is clean_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_configure_logging_is_idempotent(clean_logger):
    configure_logging("INFO")
    configure_logging("ERROR")
    assert len(clean_logger.handlers) == 1
    assert clean_logger.level == logging.ERROR


@pytest.mark.parametrize("level", ["", "verbose", "BASIC_FORMAT"])
def test_unknown_level_falls_back_to_warning(clean_logger, level):
    assert configure_logging(level).level == logging.WARNING


def test_child_loggers_propagate(clean_logger, caplog):
    configure_logging("WARNING")
    with caplog.at_level(logging.WARNING, logger="lsn"):
        logging.getLogger("lsn.walker.walker").warning("Skipping %s: permission denied", "x")
    assert "Skipping x: permission denied" in caplog.text
