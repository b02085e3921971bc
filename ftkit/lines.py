"""Reading a file descriptor one line at a time.

A reader keeps, for every descriptor it has seen, the bytes read past the
last line it returned. Separate descriptors can therefore be read in any
interleaving without their lines getting mixed up.
"""

from __future__ import annotations

import argparse
import os
import sys
from contextlib import ExitStack
from typing import Dict, Optional, Sequence

__all__ = ["LineReader", "get_next_line", "main", "BUFFER_SIZE", "MAX_FD"]

BUFFER_SIZE = 1024
MAX_FD = 10240
_INT_MAX = 2**31 - 1
_ROUNDS = 4


class LineReader:
    """Splits the data of file descriptors into newline-terminated lines."""

    def __init__(self, buffer_size: int = BUFFER_SIZE) -> None:
        if not 0 < buffer_size < _INT_MAX:
            raise ValueError(
                f"buffer size must be between 1 and {_INT_MAX - 1}, got {buffer_size}"
            )
        self.buffer_size = buffer_size
        self._pending: Dict[int, bytes] = {}

    def read_line(self, fd: int) -> Optional[bytes]:
        """Return the next line of ``fd``, newline included, or None at the end.

        The last line of the data is returned without a newline if it has
        none. A read error discards whatever was pending for ``fd`` and
        propagates as OSError.
        """
        if not 0 <= fd < MAX_FD:
            raise ValueError(f"file descriptor must be between 0 and {MAX_FD - 1}, got {fd}")

        pending = self._pending.pop(fd, b"")
        chunks = [pending]
        seen_newline = b"\n" in pending
        while not seen_newline:
            chunk = os.read(fd, self.buffer_size)
            if not chunk:
                break
            chunks.append(chunk)
            seen_newline = b"\n" in chunk
        data = b"".join(chunks)

        if not data:
            return None
        end = data.find(b"\n")
        if end < 0:
            return data
        line, rest = data[: end + 1], data[end + 1 :]
        if rest:
            self._pending[fd] = rest
        return line


_default_reader = LineReader()


def get_next_line(fd: int) -> Optional[bytes]:
    """Return the next line of ``fd`` using a reader shared by all callers."""
    return _default_reader.read_line(fd)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the first lines of several files, one line of each in turn."""
    parser = argparse.ArgumentParser(
        prog="ftkit-lines",
        description="Print the first lines of the given files, taking turns.",
    )
    parser.add_argument("files", nargs="+", help="files to read")
    args = parser.parse_args(argv)

    reader = LineReader()
    with ExitStack() as stack:
        fds = []
        for path in args.files:
            try:
                fd = os.open(path, os.O_RDONLY)
            except OSError as exc:
                print(f"{path}: {exc.strerror}", file=sys.stderr)
                return 1
            stack.callback(os.close, fd)
            fds.append(fd)

        for _ in range(_ROUNDS):
            for fd in fds:
                line = reader.read_line(fd)
                text = "(null)" if line is None else line.decode(errors="replace")
                sys.stdout.write(text)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())