"""A text file opened for reading and appending."""

from __future__ import annotations

import os
from typing import IO, Any

from utilkit.text import Text


class TextFile:
    """A file opened in append-and-read mode; writes always go to the end."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        path = os.fspath(path)
        if not path:
            raise ValueError("no file path given")
        self.path = path
        self.data = ""
        self._fh: IO[str] | None = open(path, "a+", encoding="utf-8")

    def __repr__(self) -> str:
        return f"TextFile({self.path!r})"

    def __enter__(self) -> TextFile:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _handle(self) -> IO[str]:
        if self._fh is None:
            raise ValueError(f"file {self.path!r} is closed")
        return self._fh

    def read(self) -> str:
        """Read the whole file, keep it in ``data`` and return it."""
        fh = self._handle()
        fh.flush()
        fh.seek(0)
        self.data = fh.read()
        return self.data

    def write(self, data: str) -> int:
        """Append ``data`` to the file and return the number of characters written."""
        written = self._handle().write(str(data))
        self._fh.flush()
        return written

    def close(self) -> None:
        """Close the file; closing twice is harmless."""
        if self._fh is not None:
            self._fh.close()
            self._fh = None


def create_file(filename: str | Text | os.PathLike[str], output: str | Text) -> TextFile:
    """Write ``output`` to ``filename`` (replacing it) and open it as a :class:`TextFile`."""
    path = filename if isinstance(filename, os.PathLike) else str(filename)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(str(output))
    return TextFile(path)