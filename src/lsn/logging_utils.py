"""Logging setup for the lsn command-line tool."""

import logging

LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """
    Configure the ``lsn`` package logger to write to stderr.

    Safe to call more than once: the handler is only attached the first time, later
    calls just change the level. Unknown level names fall back to WARNING.

    Args:
        level: Name of the logging level, case-insensitive.

    Returns:
        The configured ``lsn`` logger.
    """
    normalized = (level or "WARNING").upper()
    log_level = getattr(logging, normalized, logging.WARNING)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    logger = logging.getLogger("lsn")
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
