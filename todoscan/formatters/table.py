from __future__ import annotations
import unicodedata
from typing import List, Sequence

from .base import Formatter, GroupedRecords

HEADERS = ("Type", "Description", "File", "Line", "Function")
# Per-column cap on the width a value may claim; None means uncapped.
MAX_WIDTHS = (None, 50, 40, None, 30)
ELLIPSIS = "…"


def char_width(char: str) -> int:
    """Terminal cells taken by one character: wide CJK is 2, combining marks 0."""
    if unicodedata.combining(char):
        return 0
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1


def display_width(value: str) -> int:
    return sum(char_width(c) for c in value)


def truncate(value: str, max_width: int) -> str:
    if display_width(value) <= max_width:
        return value
    budget = max(max_width - 1, 0)
    kept = []
    used = 0
    for char in value:
        size = char_width(char)
        if used + size > budget:
            break
        kept.append(char)
        used += size
    return "".join(kept) + ELLIPSIS


def _pad(value: str, width: int, right: bool = False) -> str:
    fill = " " * max(width - display_width(value), 0)
    return fill + value if right else value + fill


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


class TableFormatter(Formatter):
    NAME = "table"

    def format(self, groups: GroupedRecords, total_count: int) -> List[str]:
        if total_count == 0:
            return ["No TODO comments found."]

        rows = []
        for marker_type, records in groups.items():
            for record in records:
                rows.append(
                    (
                        str(marker_type),
                        record.description.strip(),
                        str(record.file_path),
                        str(record.line_number),
                        record.declaration_context or "",
                    )
                )

        widths = self._column_widths(rows)
        output = [
            f"Found {total_count} TODO comment{_plural(total_count)} "
            f"in {len(groups)} group{_plural(len(groups))}",
            "",
            self._border(widths, "┌", "┬", "┐"),
            self._row(HEADERS, widths, header=True),
            self._border(widths, "├", "┼", "┤"),
        ]
        output.extend(self._row(row, widths) for row in rows)
        output.append(self._border(widths, "└", "┴", "┘"))
        return output

    @staticmethod
    def _column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
        widths = [display_width(h) for h in HEADERS]
        for row in rows:
            for i, value in enumerate(row):
                cap = MAX_WIDTHS[i]
                size = display_width(value) if cap is None else min(display_width(value), cap)
                widths[i] = max(widths[i], size)
        return widths

    @staticmethod
    def _row(values: Sequence[str], widths: Sequence[int], header: bool = False) -> str:
        cells = []
        for i, (value, width) in enumerate(zip(values, widths)):
            value = truncate(value, width)
            # line numbers are right-aligned in data rows
            cells.append(_pad(value, width, right=(i == 3 and not header)))
        return "│ " + " │ ".join(cells) + " │"

    @staticmethod
    def _border(widths: Sequence[int], left: str, cross: str, right: str) -> str:
        return left + cross.join("─" * (w + 2) for w in widths) + right
