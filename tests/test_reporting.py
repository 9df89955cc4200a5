import json
from pathlib import Path

import pytest

from todoscan.core.errors import InvalidOutputPathError, WriteError
from todoscan.core.models import MarkerType
from todoscan.core.reporting import OutputFormat, Reporter, filter_by_type, group_by_type
from todoscan.core.writers import FileWriter, StdoutWriter

from .conftest import make_record


def test_group_by_type_uses_fixed_order():
    records = [
        make_record(MarkerType.BUG, "b1"),
        make_record(MarkerType.TODO, "t1"),
        make_record(MarkerType.NOTE, "n1"),
        make_record(MarkerType.TODO, "t2"),
    ]
    groups = group_by_type(records)
    assert list(groups) == [MarkerType.TODO, MarkerType.NOTE, MarkerType.BUG]
    assert [r.description for r in groups[MarkerType.TODO]] == ["t1", "t2"]


def test_group_by_type_empty():
    assert group_by_type([]) == {}


def test_filter_by_type():
    records = [make_record(MarkerType.BUG, "b"), make_record(MarkerType.TODO, "t")]
    assert [r.description for r in filter_by_type(records, MarkerType.BUG)] == ["b"]
    assert filter_by_type(records, None) == records


@pytest.mark.parametrize("fmt", [OutputFormat.TABLE, OutputFormat.TERMINAL])
def test_console_formats_reject_output_path(fmt):
    with pytest.raises(InvalidOutputPathError):
        Reporter(fmt, Path("report.txt"))


@pytest.mark.parametrize(
    "fmt", [OutputFormat.JSON, OutputFormat.CSV, OutputFormat.TOML, OutputFormat.MARKDOWN]
)
def test_file_formats_require_output_path(fmt):
    with pytest.raises(InvalidOutputPathError):
        Reporter(fmt, None)


@pytest.mark.parametrize(
    "fmt,path",
    [
        (OutputFormat.JSON, "report.csv"),
        (OutputFormat.JSON, "report.JSON"),
        (OutputFormat.CSV, "report"),
        (OutputFormat.TOML, "report.tml"),
        (OutputFormat.MARKDOWN, "report.markdown"),
    ],
)
def test_file_formats_check_extension(fmt, path):
    with pytest.raises(InvalidOutputPathError):
        Reporter(fmt, Path(path))


@pytest.mark.parametrize(
    "fmt,path",
    [
        (OutputFormat.JSON, "report.json"),
        (OutputFormat.CSV, "report.csv"),
        (OutputFormat.TOML, "report.toml"),
        (OutputFormat.MARKDOWN, "report.md"),
    ],
)
def test_file_formats_accept_matching_extension(fmt, path, tmp_path: Path):
    reporter = Reporter(fmt, tmp_path / path)
    assert isinstance(reporter.writer, FileWriter)
    assert not (tmp_path / path).exists()


def test_console_formats_use_stdout():
    assert isinstance(Reporter(OutputFormat.TABLE).writer, StdoutWriter)
    assert isinstance(Reporter(OutputFormat.TERMINAL).writer, StdoutWriter)


def test_write_all_to_json_file(tmp_path: Path):
    out = tmp_path / "report.json"
    Reporter(OutputFormat.JSON, out).write_all(
        [make_record(MarkerType.FIXME, "f"), make_record(MarkerType.TODO, "t")]
    )
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"] == {"total_todos": 2, "total_groups": 2}
    assert [g["type"] for g in data["groups"]] == ["Todo", "Fixme"]


def test_terminal_prints_markdown(capsys):
    Reporter(OutputFormat.TERMINAL).write_all([make_record(MarkerType.NOTE, "remember")])
    out = capsys.readouterr().out
    assert out.startswith("# TODO Comments\n")
    assert "## Note (1 items)" in out


def test_file_writer_truncates(tmp_path: Path):
    out = tmp_path / "report.md"
    out.write_text("old content that is quite long\n" * 10)
    FileWriter(out).write(["a", "b"])
    assert out.read_text() == "a\nb\n"


def test_file_writer_failure_surfaces(tmp_path: Path):
    with pytest.raises(WriteError):
        FileWriter(tmp_path / "missing-dir" / "report.json").write(["{}"])
