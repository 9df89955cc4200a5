from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .errors import WriteError

logger = logging.getLogger("todoscan.writers")


class Writer:
    def write(self, lines: Iterable[str]) -> None:
        raise NotImplementedError("write must be implemented in subclasses")


class StdoutWriter(Writer):
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def write(self, lines: Iterable[str]) -> None:
        stream = self.stream or sys.stdout
        for line in lines:
            print(line, file=stream)


class FileWriter(Writer):
    """Truncate ``path`` and write one line per item.

    There is no temp-file swap, so a failure part-way through can leave a
    partial file behind.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def write(self, lines: Iterable[str]) -> None:
        try:
            with self.path.open("w", encoding="utf-8", newline="\n") as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")
                f.flush()
        except OSError as exc:
            raise WriteError(f"Unable to write {self.path}: {exc}") from exc
        logger.info("Written annotations to file: %s", self.path)
