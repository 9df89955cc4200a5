from __future__ import annotations
from pathlib import Path


class TodoscanError(Exception):
    """Base class for every failure todoscan reports."""


class ConfigError(TodoscanError):
    pass


class PatternCompileError(TodoscanError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Pattern {pattern!r} is not usable: {reason}")
        self.pattern = pattern
        self.reason = reason


class UnknownMarkerTypeError(PatternCompileError):
    def __init__(self, pattern: str) -> None:
        super().__init__(pattern, "no TODO/FIXME/HACK/NOTE/BUG keyword in pattern source")


class WalkError(TodoscanError):
    pass


# Per-file failures: the directory scanner logs these and moves on.
class FileScanError(TodoscanError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


class FileReadError(FileScanError):
    pass


class InvalidPathError(FileScanError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, "path could not be canonicalized")


class PathTraversalError(FileScanError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, "path traversal is not supported")


class OutputError(TodoscanError):
    pass


class InvalidOutputPathError(OutputError):
    pass


class FormatterError(OutputError):
    pass


class WriteError(OutputError):
    pass
