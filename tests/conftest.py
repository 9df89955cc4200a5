from pathlib import Path
from typing import Optional

import pytest

from todoscan.core.config import ScanConfig
from todoscan.core.models import AnnotationRecord, MarkerType
from todoscan.patterns.base import PatternSet


def make_config(**overrides) -> ScanConfig:
    config = ScanConfig(
        file_extensions=["rs", "py", "txt"],
        exclude_patterns=["target/*", "*.log"],
        include_context_lines=3,
        comment_prefixes=[r"//", r"^\s*#", r"/\*", r"^\s*\*"],
        todo_patterns=[
            r"(?i)\bTODO:\s*(.*)",
            r"(?i)\bFIXME:\s*(.*)",
            r"(?i)\bHACK:\s*(.*)",
            r"(?i)\bNOTE:\s*(.*)",
            r"(?i)\bBUG:\s*(.*)",
        ],
        function_patterns=[r"^\s*(pub\s+)?fn\s+(\w+)", r"^\s*def\s+(\w+)"],
    )
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


def make_record(
    marker_type: MarkerType = MarkerType.TODO,
    description: str = "do the thing",
    file_path: str = "src/lib.rs",
    line_number: int = 1,
    declaration: Optional[str] = None,
    original_text: Optional[str] = None,
) -> AnnotationRecord:
    text = original_text if original_text is not None else f"// {marker_type.name}: {description}"
    return AnnotationRecord(
        id=f"{Path(file_path).name}_L{line_number}_C3",
        file_path=Path(file_path),
        line_number=line_number,
        column_start=3,
        column_end=len(text),
        marker_type=marker_type,
        original_text=text,
        description=description,
        context_lines=(),
        declaration_context=declaration,
    )


@pytest.fixture()
def scan_config() -> ScanConfig:
    return make_config()


@pytest.fixture()
def patterns(scan_config: ScanConfig) -> PatternSet:
    return PatternSet.from_config(scan_config)
