from pathlib import Path
from .conftest import run_cli, load_json, assert_exit_ok, assert_file

def test_scan_json_end_to_end(dataset_dir: Path, out_dir: Path, workdir: Path):
    report = out_dir / "report.json"
    proc = run_cli(["scan", dataset_dir, "--format", "json", "--output", report, "--no-progress"], cwd=workdir)
    assert_exit_ok(proc)

    data = load_json(assert_file(report))
    assert data["summary"] == {"total_todos": 5, "total_groups": 4}
    assert [g["type"] for g in data["groups"]] == ["Todo", "Fixme", "Hack", "Bug"]

    items = [item for g in data["groups"] for item in g["items"]]
    files = {Path(item["file"]).name for item in items}
    # .log is not an allowed extension and target/ is excluded; hidden dirs are walked
    assert files == {"main.rs", "tool.py", "secret.rs"}
    assert not any("not a comment" in item["description"] for item in items)

    by_description = {item["description"]: item for item in items}
    assert by_description["Implement main function"]["function"] == "main:3"
    assert by_description["Python TODO"]["line"] == 5
    assert by_description["hidden files are scanned too"]["function"] == "hidden:1"

def test_table_to_stdout(dataset_dir: Path, workdir: Path):
    proc = run_cli(["scan", dataset_dir, "--no-progress"], cwd=workdir)
    assert_exit_ok(proc)
    assert "Found 5 TODO comments in 4 groups" in proc.stdout
    assert "│ Type" in proc.stdout

def test_terminal_format_prints_markdown(dataset_dir: Path, workdir: Path):
    proc = run_cli(["scan", dataset_dir, "-f", "terminal", "--no-progress"], cwd=workdir)
    assert_exit_ok(proc)
    assert proc.stdout.startswith("# TODO Comments")
    assert "## Fixme (1 items)" in proc.stdout

def test_empty_tree_reports_nothing(tmp_path: Path, workdir: Path):
    empty = tmp_path / "empty"
    empty.mkdir()
    proc = run_cli(["scan", empty, "--no-progress"], cwd=workdir)
    assert_exit_ok(proc)
    assert proc.stdout.strip() == "No TODO comments found."
