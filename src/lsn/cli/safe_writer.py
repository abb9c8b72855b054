"""Thread-safe, signal-aware line output for the lsn CLI."""

import errno
import os
import threading
import types
from pathlib import Path
from typing import Optional, Type, Union

from lsn.cli.signal_handler import signal_handler


class SafeWriter:
    """Write output lines to a file descriptor or a file, one whole line at a time.

    Every write holds a lock, so lines written from several threads never
    interleave. Once SIGPIPE or SIGINT has been received, or the descriptor reports a
    broken pipe, writes raise BrokenPipeError, which the caller uses to stop the walk.

    Attributes:
        file: Either a file path or file descriptor for output.
        fd: The actual file descriptor being written to.
    """

    def __init__(self, file: Union[int, str, Path]):
        """Initialize the safe writer.

        Args:
            file: Either a file descriptor (int) or a path to open for writing.

        Raises:
            TypeError: If ``file`` is neither an int nor path-like.
        """
        self.file = file
        self._closed = False
        self._lock = threading.Lock()

        if isinstance(file, int):
            self.fd = file
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            path = Path(file)
            self._file_obj = path.open("w")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write ``data`` atomically with respect to other writers.

        Args:
            data: String data to write.

        Raises:
            BrokenPipeError: If SIGPIPE/SIGINT was received or the pipe is broken.
            OSError: If another I/O error occurs during writing.
            ValueError: If the writer has been closed.
        """
        with self._lock:
            if self._closed:
                raise ValueError("Cannot write to closed SafeWriter")

            if signal_handler.interrupted:
                raise BrokenPipeError()

            payload = data.encode("utf-8", "surrogateescape")
            try:
                while payload:
                    written = os.write(self.fd, payload)
                    payload = payload[written:]
            except OSError as e:
                if e.errno == errno.EPIPE:
                    raise BrokenPipeError()
                raise

    def write_line(self, line: str) -> None:
        """Write ``line`` followed by a newline as a single write."""
        self.write(line + "\n")

    def close(self) -> None:
        """Close the file if it was opened by this class.

        The writer is marked as closed even if closing fails with a broken pipe.
        """
        with self._lock:
            if self._closed:
                return

            if self._file_obj is not None:
                try:
                    self._file_obj.close()
                except OSError as e:
                    if e.errno != errno.EPIPE:
                        raise

            self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the writer, letting an exception from the with block take priority."""
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
