from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from .errors import UnknownMarkerTypeError


class MarkerType(Enum):
    """Annotation kinds. Declaration order is the order groups are rendered in."""

    TODO = "Todo"
    FIXME = "Fixme"
    HACK = "Hack"
    NOTE = "Note"
    BUG = "Bug"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_pattern(cls, source: str) -> "MarkerType":
        # keyword order matters: a pattern mentioning both TODO and BUG is a Todo
        upper = source.upper()
        for member in cls:
            if member.name in upper:
                return member
        raise UnknownMarkerTypeError(source)

    @classmethod
    def from_name(cls, name: str) -> "MarkerType":
        wanted = name.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        valid = ", ".join(m.value.lower() for m in cls)
        raise ValueError(f"unknown marker type {name!r} (expected one of: {valid})")


@dataclass(frozen=True)
class MarkerMatch:
    marker_type: MarkerType
    column_start: int
    column_end: int
    description: str


@dataclass(frozen=True)
class AnnotationRecord:
    id: str
    file_path: Path
    line_number: int
    column_start: int
    column_end: int
    marker_type: MarkerType
    original_text: str
    description: str
    context_lines: Tuple[str, ...] = ()
    declaration_context: Optional[str] = None  # "name:line" of the nearest preceding declaration

    @property
    def location(self) -> str:
        return f"{self.file_path}:{self.line_number}"
