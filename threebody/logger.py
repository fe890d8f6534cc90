"""Thread-safe line writer for simulation output files."""

from __future__ import annotations

import os
import threading
from types import TracebackType
from typing import Any, TextIO


class Logger:
    """Writes formatted lines to a file opened for truncation.

    If the file cannot be opened, writes are silently dropped.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._lock = threading.Lock()
        self._file: TextIO | None
        try:
            self._file = open(path, "w", encoding="utf-8")
        except OSError:
            self._file = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def write_line(self, fmt: str, *args: Any) -> None:
        """Format ``args`` into ``fmt`` with ``str.format`` and append a newline."""
        line = fmt.format(*args)
        with self._lock:
            if self._file is None:
                return
            self._file.write(line + "\n")

    def close(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> Logger:
        return self

    def __exit__(
        self,
        *args: type[BaseException] | BaseException | TracebackType | None,
    ) -> None:
        self.close()

    def __del__(self) -> None:
        file = getattr(self, "_file", None)
        if file is not None:
            file.close()