from __future__ import annotations
from typing import Any, Dict, List

import tomli_w

from ..core.errors import FormatterError
from .base import Formatter, GroupedRecords, record_fields


class TomlFormatter(Formatter):
    NAME = "toml"

    def format(self, groups: GroupedRecords, total_count: int) -> List[str]:
        root: Dict[str, Any] = {
            "summary": {
                "total_todos": total_count,
                "total_groups": len(groups),
            }
        }
        for marker_type, records in groups.items():
            root[str(marker_type).lower()] = {
                "count": len(records),
                "items": [record_fields(r) for r in records],
            }
        try:
            return [tomli_w.dumps(root).rstrip("\n")]
        except (TypeError, ValueError) as exc:
            raise FormatterError(f"Unable to serialize annotations as TOML: {exc}") from exc
