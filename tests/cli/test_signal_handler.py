"""Unit tests for the signal handler module in the lsn CLI."""

import os
import signal
from unittest.mock import MagicMock, patch

import pytest

from lsn.cli.signal_handler import SignalHandler, cleanup, setup_signal_handling, signal_handler


@pytest.fixture
def mock_signal():
    """Create a mock for the signal module."""
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def fresh_signal_handler():
    """Create a SignalHandler that does not share state with the singleton."""
    return SignalHandler()


def test_signal_handler_initialization(fresh_signal_handler):
    assert not fresh_signal_handler.sigpipe_received.is_set()
    assert not fresh_signal_handler.sigint_received.is_set()
    assert not fresh_signal_handler.interrupted
    assert fresh_signal_handler.exit_code() is None


def test_handle_sigpipe(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigpipe(signal.SIGPIPE, MagicMock())

    assert fresh_signal_handler.sigpipe_received.is_set()
    assert fresh_signal_handler.interrupted
    mock_signal.assert_called_once_with(signal.SIGPIPE, fresh_signal_handler.original_sigpipe_handler)


def test_handle_sigint(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigint(signal.SIGINT, None)

    assert fresh_signal_handler.sigint_received.is_set()
    assert fresh_signal_handler.interrupted
    mock_signal.assert_called_once_with(signal.SIGINT, fresh_signal_handler.original_sigint_handler)


@pytest.mark.parametrize(
    "pipe,interrupt,expected",
    [(False, False, None), (True, False, 141), (False, True, 130), (True, True, 141)],
)
def test_exit_code(fresh_signal_handler, pipe, interrupt, expected):
    if pipe:
        fresh_signal_handler.sigpipe_received.set()
    if interrupt:
        fresh_signal_handler.sigint_received.set()
    assert fresh_signal_handler.exit_code() == expected


def test_setup_signal_handling(mock_signal):
    setup_signal_handling()

    assert mock_signal.call_count == 2
    mock_signal.assert_any_call(signal.SIGPIPE, signal_handler.handle_sigpipe)
    mock_signal.assert_any_call(signal.SIGINT, signal_handler.handle_sigint)


def test_cleanup_without_signals():
    with patch("lsn.cli.signal_handler.signal_handler", SignalHandler()), patch("os.dup2") as mock_dup2:
        cleanup()
        mock_dup2.assert_not_called()


def test_cleanup_after_sigpipe():
    handler = SignalHandler()
    handler.sigpipe_received.set()
    with patch("lsn.cli.signal_handler.signal_handler", handler), patch(
        "lsn.cli.signal_handler.os", autospec=True
    ) as mock_os, patch("lsn.cli.signal_handler.sys") as mock_sys:
        mock_os.open.return_value = 123
        mock_os.devnull = "/dev/null"
        mock_os.O_WRONLY = os.O_WRONLY
        mock_sys.stdout.fileno.return_value = 1

        cleanup()

        mock_os.open.assert_called_once_with("/dev/null", os.O_WRONLY)
        mock_os.dup2.assert_called_once_with(123, 1)
