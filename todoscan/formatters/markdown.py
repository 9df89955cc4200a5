from __future__ import annotations
from typing import List

from .base import Formatter, GroupedRecords


class MarkdownFormatter(Formatter):
    NAME = "markdown"

    def format(self, groups: GroupedRecords, total_count: int) -> List[str]:
        lines = ["# TODO Comments", "", f"Found {total_count} TODO comments:", ""]
        for marker_type, records in groups.items():
            lines.append(f"## {marker_type} ({len(records)} items)")
            lines.append("")
            for record in records:
                bullet = f"- **{record.description.strip()}** @ `{record.location}`"
                if record.declaration_context:
                    bullet += f" (in `{record.declaration_context}`)"
                lines.append(bullet)
            lines.append("")
        return lines
