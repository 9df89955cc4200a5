from __future__ import annotations
from pathlib import Path
from typing import List

import chardet  # type: ignore

from .errors import FileReadError

BINARY_BYTES = bytes(range(0, 32)) + b"\x7f"
MAX_FILE_BYTES = 20_000_000


def is_likely_binary(data: bytes, control_threshold: float = 0.30) -> bool:
    if not data:
        return False
    if 0 in data:
        return True
    control = sum(1 for b in data if b in BINARY_BYTES and b not in (9, 10, 12, 13))
    return (control / len(data)) > control_threshold


def decode_text(data: bytes) -> str:
    # utf-8 first: chardet guesses badly on short inputs
    candidates = ["utf-8"]
    enc = chardet.detect(data).get("encoding")
    if enc and enc.lower() not in ("utf-8", "ascii"):
        candidates.append(enc)
    for candidate in candidates:
        try:
            return data.decode(candidate, errors="strict")
        except (LookupError, UnicodeDecodeError):
            continue
    raise UnicodeDecodeError("utf-8", data, 0, len(data), "no candidate encoding decoded the content")


def read_text(path: Path, max_bytes: int = MAX_FILE_BYTES) -> str:
    """Read a source file as text.

    Raises ``FileReadError`` when the file cannot be opened, looks binary,
    is larger than ``max_bytes`` or cannot be decoded.
    """
    try:
        with path.open("rb") as f:
            data = f.read(max_bytes + 1)
    except OSError as exc:
        raise FileReadError(path, f"unable to read file: {exc}") from exc
    if len(data) > max_bytes:
        raise FileReadError(path, f"file is larger than {max_bytes:,} bytes")
    if is_likely_binary(data[:4096]):
        raise FileReadError(path, "file looks binary")
    try:
        return decode_text(data)
    except UnicodeDecodeError as exc:
        raise FileReadError(path, f"unable to decode file: {exc.reason}") from exc


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` / ``\\r\\n`` only; a trailing newline adds no empty line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
