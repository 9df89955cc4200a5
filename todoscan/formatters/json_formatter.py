from __future__ import annotations
import json
from typing import List

from ..core.errors import FormatterError
from .base import Formatter, GroupedRecords, record_fields


class JsonFormatter(Formatter):
    NAME = "json"

    def format(self, groups: GroupedRecords, total_count: int) -> List[str]:
        document = {
            "summary": {
                "total_todos": total_count,
                "total_groups": len(groups),
            },
            "groups": [
                {
                    "type": str(marker_type),
                    "count": len(records),
                    "items": [record_fields(r) for r in records],
                }
                for marker_type, records in groups.items()
            ],
        }
        try:
            return [json.dumps(document, indent=2, ensure_ascii=False)]
        except (TypeError, ValueError) as exc:
            raise FormatterError(f"Unable to serialize annotations as JSON: {exc}") from exc
