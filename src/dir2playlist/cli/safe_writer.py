"""Safe output writing utilities for dir2playlist CLI.

This module provides a writing interface that never leaves a partial playlist
behind: file output goes to a temporary file that replaces the destination only
when the write completed.
"""

import errno
import os
import tempfile
import types
from pathlib import Path
from typing import Optional, Type, Union


class SafeWriter:
    """Write output to a file descriptor or atomically to a file.

    For a file descriptor (stdout), data is written directly. For a path, data is
    written to a temporary file in the destination directory, which is renamed over
    the destination by :meth:`commit`. Leaving the context manager with an exception
    discards the temporary file and keeps any existing destination untouched.

    Attributes:
        file: Either a file path or file descriptor for output.
        fd: The actual file descriptor being written to.
    """

    def __init__(self, file: Union[int, str, os.PathLike]):
        """Initialize the safe writer.

        Args:
            file: Either a file descriptor (int) or a path for writing output.

        Raises:
            TypeError: If file is neither an int nor a path.
            OSError: If the temporary file cannot be created.
        """
        self.file = file
        self._closed = False
        self._target: Optional[Path] = None
        self._temp_path: Optional[str] = None

        if isinstance(file, int):
            self.fd = file
        elif isinstance(file, (str, os.PathLike)):
            self._target = Path(file)
            self.fd, self._temp_path = tempfile.mkstemp(
                prefix=f".{self._target.name}.", suffix=".tmp", dir=str(self._target.parent)
            )
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write data, encoded as UTF-8.

        Args:
            data: String data to write.

        Raises:
            BrokenPipeError: If the pipe is broken.
            OSError: If an I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        view = memoryview(data.encode("utf-8"))
        try:
            # os.write may write less than asked for
            while view:
                written = os.write(self.fd, view)
                view = view[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def commit(self) -> None:
        """Finish writing and move the temporary file into place.

        For file descriptor output this only marks the writer as closed; the
        descriptor belongs to the caller.

        Raises:
            OSError: If the file cannot be synced or moved into place. The temporary
                file is removed before the error propagates.
        """
        if self._closed:
            return

        if self._temp_path is None or self._target is None:
            self._closed = True
            return

        try:
            try:
                os.fsync(self.fd)
            finally:
                os.close(self.fd)

            try:
                mode = self._target.stat().st_mode & 0o777
            except FileNotFoundError:
                mode = 0o644
            os.chmod(self._temp_path, mode)
            os.replace(self._temp_path, self._target)
        except BaseException:
            # The descriptor is closed by now; only the temporary file is left to remove
            try:
                os.unlink(self._temp_path)
            except FileNotFoundError:
                pass
            raise
        finally:
            self._temp_path = None
            self._closed = True

    def discard(self) -> None:
        """Close the writer and remove the temporary file, keeping the destination as it was."""
        if self._closed:
            return
        self._closed = True

        if self._temp_path is None:
            return

        try:
            os.close(self.fd)
        finally:
            try:
                os.unlink(self._temp_path)
            except FileNotFoundError:
                pass
            self._temp_path = None

    def close(self) -> None:
        """Close the writer, committing what was written."""
        self.commit()

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Commit on success, discard on error.

        Args:
            exc_type: The exception type, if an exception was raised.
            exc_val: The exception value, if an exception was raised.
            exc_tb: The exception traceback, if an exception was raised.
        """
        if exc_type is None:
            self.commit()
        else:
            self.discard()
