from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Sequence

from ..core.models import AnnotationRecord
from ..core.utils import split_lines
from ..patterns.base import PatternSet


def extract_context(lines: Sequence[str], current: int, window: int) -> List[str]:
    """Neighbouring lines within ``window`` of ``current``, excluding it.

    Each entry is ``"<1-indexed line>: <raw line>"``.
    """
    start = max(current - window, 0)
    end = min(current + window + 1, len(lines))
    return [f"{i + 1}: {lines[i]}" for i in range(start, end) if i != current]


def find_declaration(patterns: PatternSet, lines: Sequence[str], current: int) -> Optional[str]:
    # Nearest preceding declaration wins; nesting and indentation are ignored,
    # so a sibling or enclosing scope may be reported instead of the true one.
    for i in range(current, -1, -1):
        name = patterns.match_declaration(lines[i])
        if name is not None:
            return f"{name}:{i + 1}"
    return None


class AnnotationParser:
    NAME = "text"

    def __init__(self, patterns: PatternSet, context_lines: int = 3) -> None:
        self.patterns = patterns
        self.context_lines = context_lines

    def parse(self, path: Path, content: str) -> List[AnnotationRecord]:
        lines = split_lines(content)
        records: List[AnnotationRecord] = []
        for idx, line in enumerate(lines):
            for match in self.patterns.classify_line(line):
                line_number = idx + 1
                records.append(
                    AnnotationRecord(
                        id=f"{path.name}_L{line_number}_C{match.column_start}",
                        file_path=path,
                        line_number=line_number,
                        column_start=match.column_start,
                        column_end=match.column_end,
                        marker_type=match.marker_type,
                        original_text=line,
                        description=match.description,
                        context_lines=tuple(extract_context(lines, idx, self.context_lines)),
                        declaration_context=find_declaration(self.patterns, lines, idx),
                    )
                )
        return records
