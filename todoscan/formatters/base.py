from __future__ import annotations
from typing import Dict, List

from ..core.models import AnnotationRecord, MarkerType

GroupedRecords = Dict[MarkerType, List[AnnotationRecord]]


class Formatter:
    """Turns grouped records into output lines. Subclasses set NAME."""

    NAME = "base"

    def format(self, groups: GroupedRecords, total_count: int) -> List[str]:
        raise NotImplementedError("format must be implemented in subclasses")


def record_fields(record: AnnotationRecord) -> Dict[str, object]:
    """Flat field mapping shared by the document formats."""
    data: Dict[str, object] = {
        "id": record.id,
        "description": record.description.strip(),
        "file": str(record.file_path),
        "line": record.line_number,
        "column_start": record.column_start,
        "column_end": record.column_end,
        "original_text": record.original_text.strip(),
        "context_lines": list(record.context_lines),
    }
    if record.declaration_context is not None:
        data["function"] = record.declaration_context
    return data
