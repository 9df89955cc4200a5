from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..formatters.base import Formatter, GroupedRecords
from ..formatters.csv_formatter import CsvFormatter
from ..formatters.json_formatter import JsonFormatter
from ..formatters.markdown import MarkdownFormatter
from ..formatters.table import TableFormatter
from ..formatters.toml_formatter import TomlFormatter
from .errors import InvalidOutputPathError
from .models import AnnotationRecord, MarkerType
from .writers import FileWriter, StdoutWriter, Writer


class OutputFormat(Enum):
    TABLE = "table"
    TERMINAL = "terminal"
    JSON = "json"
    CSV = "csv"
    TOML = "toml"
    MARKDOWN = "markdown"

    def __str__(self) -> str:
        return self.value


# format -> (formatter class, required file suffix; None means console only)
FORMATS = {
    OutputFormat.TABLE: (TableFormatter, None),
    OutputFormat.TERMINAL: (MarkdownFormatter, None),
    OutputFormat.JSON: (JsonFormatter, ".json"),
    OutputFormat.CSV: (CsvFormatter, ".csv"),
    OutputFormat.TOML: (TomlFormatter, ".toml"),
    OutputFormat.MARKDOWN: (MarkdownFormatter, ".md"),
}


def group_by_type(records: Sequence[AnnotationRecord]) -> GroupedRecords:
    """Group records by marker type, in ``MarkerType`` declaration order."""
    buckets: Dict[MarkerType, List[AnnotationRecord]] = {}
    for record in records:
        buckets.setdefault(record.marker_type, []).append(record)
    return {t: buckets[t] for t in MarkerType if t in buckets}


def filter_by_type(records: Sequence[AnnotationRecord], marker_type: Optional[MarkerType]) -> List[AnnotationRecord]:
    if marker_type is None:
        return list(records)
    return [r for r in records if r.marker_type is marker_type]


def validate_file_extension(path: Path, expected: str) -> None:
    if not path.suffix:
        raise InvalidOutputPathError(f"Output file must have '{expected[1:]}' extension")
    if path.suffix != expected:
        raise InvalidOutputPathError(
            f"File extension '{path.suffix[1:]}' does not match expected extension "
            f"'{expected[1:]}' for this format"
        )


class Reporter:
    """Pairs a formatter with a sink.

    The pairing is checked at construction so a bad request fails before any
    scanning or file I/O happens.
    """

    def __init__(self, output_format: OutputFormat, output_path: Optional[Path] = None) -> None:
        formatter_cls, suffix = FORMATS[output_format]
        name = output_format.value.capitalize()
        if suffix is None:
            if output_path is not None:
                raise InvalidOutputPathError(f"{name} format cannot write to file")
            writer: Writer = StdoutWriter()
        else:
            if output_path is None:
                raise InvalidOutputPathError(f"{name} format requires an output file path")
            validate_file_extension(output_path, suffix)
            writer = FileWriter(output_path)
        self.output_format = output_format
        self.formatter: Formatter = formatter_cls()
        self.writer = writer

    def render(self, records: Sequence[AnnotationRecord]) -> List[str]:
        return self.formatter.format(group_by_type(records), len(records))

    def write_all(self, records: Sequence[AnnotationRecord]) -> None:
        self.writer.write(self.render(records))
