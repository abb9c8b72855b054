"""Unit tests for the SafeWriter class in the lsn CLI."""

import errno
import os
import threading
from unittest.mock import MagicMock, patch

import pytest

from lsn.cli.safe_writer import SafeWriter


@pytest.fixture
def mock_signals():
    """Create a mock for signal handler checks."""
    with patch("lsn.cli.safe_writer.signal_handler") as mock:
        mock.interrupted = False
        yield mock


def test_init_with_fd():
    writer = SafeWriter(3)
    assert writer.file == 3
    assert writer.fd == 3
    assert writer._file_obj is None
    assert not writer._closed


def test_init_with_invalid_type():
    with pytest.raises(TypeError, match="Expected int, str, or PathLike, got float"):
        SafeWriter(1.5)


def test_write_to_file(tmp_path, mock_signals):
    output = tmp_path / "out.txt"
    with SafeWriter(output) as writer:
        writer.write_line("a")
        writer.write_line("a/b.txt")
    assert output.read_text() == "a\na/b.txt\n"


def test_write_to_path_string(tmp_path, mock_signals):
    output = tmp_path / "out.txt"
    with SafeWriter(str(output)) as writer:
        writer.write("x")
    assert output.read_text() == "x"


def test_write_to_fd(mock_signals):
    read_fd, write_fd = os.pipe()
    try:
        SafeWriter(write_fd).write_line("c.txt")
        assert os.read(read_fd, 100) == b"c.txt\n"
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_write_undecodable_filename(tmp_path, mock_signals):
    output = tmp_path / "out.txt"
    name = os.fsdecode(b"caf\xe9")
    with SafeWriter(output) as writer:
        writer.write_line(name)
    assert output.read_bytes() == b"caf\xe9\n"


def test_write_after_signal_raises_broken_pipe(mock_signals):
    mock_signals.interrupted = True
    writer = SafeWriter(3)
    with patch("os.write") as mock_write:
        with pytest.raises(BrokenPipeError):
            writer.write("data")
        mock_write.assert_not_called()


def test_epipe_becomes_broken_pipe(mock_signals):
    writer = SafeWriter(3)
    with patch("os.write", side_effect=OSError(errno.EPIPE, "Broken pipe")):
        with pytest.raises(BrokenPipeError):
            writer.write("data")


def test_other_write_errors_propagate(mock_signals):
    writer = SafeWriter(3)
    with patch("os.write", side_effect=OSError(errno.ENOSPC, "No space left on device")):
        with pytest.raises(OSError) as excinfo:
            writer.write("data")
    assert excinfo.value.errno == errno.ENOSPC


def test_partial_writes_are_completed(mock_signals):
    writer = SafeWriter(3)
    chunks = []

    def fake_write(fd, data):
        chunks.append(bytes(data[:2]))
        return min(2, len(data))

    with patch("os.write", side_effect=fake_write):
        writer.write("abcde")
    assert b"".join(chunks) == b"abcde"


def test_write_after_close(tmp_path, mock_signals):
    writer = SafeWriter(tmp_path / "out.txt")
    writer.close()
    writer.close()
    with pytest.raises(ValueError, match="Cannot write to closed SafeWriter"):
        writer.write("x")


def test_close_tolerates_broken_pipe(mock_signals):
    with patch("pathlib.Path.open") as mock_open_func:
        mock_file = MagicMock()
        mock_file.fileno.return_value = 5
        mock_file.close.side_effect = OSError(errno.EPIPE, "Broken pipe")
        mock_open_func.return_value = mock_file

        writer = SafeWriter("/path/to/file.txt")
        writer.close()
        assert writer._closed


def test_exit_prioritises_original_exception(mock_signals):
    with patch("pathlib.Path.open") as mock_open_func:
        mock_file = MagicMock()
        mock_file.fileno.return_value = 5
        mock_file.close.side_effect = OSError(errno.EIO, "Input/output error")
        mock_open_func.return_value = mock_file

        with pytest.raises(RuntimeError, match="original"):
            with SafeWriter("/path/to/file.txt"):
                raise RuntimeError("original")


def test_concurrent_writes_do_not_interleave(tmp_path, mock_signals):
    output = tmp_path / "out.txt"
    lines = [f"thread-{t}/entry-{i}" for t in range(4) for i in range(200)]

    with SafeWriter(output) as writer:

        def worker(thread_id):
            for i in range(200):
                writer.write_line(f"thread-{thread_id}/entry-{i}")

        threads = [threading.Thread(target=worker, args=(t,)) for t in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert sorted(output.read_text().splitlines()) == sorted(lines)
