from __future__ import annotations
import csv
import io
from typing import List, Sequence

from .base import Formatter, GroupedRecords

HEADER = [
    "Type",
    "Description",
    "File",
    "Line",
    "Column Start",
    "Column End",
    "Function",
    "Original Text",
]


def csv_row(fields: Sequence[object]) -> str:
    # Minimal quoting: only fields holding a comma, quote or newline get quoted.
    buf = io.StringIO()
    csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n").writerow(fields)
    return buf.getvalue()[:-1]


class CsvFormatter(Formatter):
    NAME = "csv"

    def format(self, groups: GroupedRecords, total_count: int) -> List[str]:
        lines = [",".join(HEADER)]
        for marker_type, records in groups.items():
            for record in records:
                lines.append(
                    csv_row(
                        [
                            str(marker_type),
                            record.description.strip(),
                            str(record.file_path),
                            record.line_number,
                            record.column_start,
                            record.column_end,
                            record.declaration_context or "",
                            record.original_text.strip(),
                        ]
                    )
                )
        return lines
