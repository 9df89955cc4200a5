import tomllib
from pathlib import Path
from .conftest import run_cli, assert_exit_ok, assert_file

def test_init_writes_config_and_refuses_overwrite(workdir: Path):
    proc = run_cli(["init", "--path", "custom.toml"], cwd=workdir)
    assert_exit_ok(proc)
    data = tomllib.loads(assert_file(workdir / "custom.toml").read_text())
    assert "rs" in data["parsing"]["file_extensions"]
    assert "token" not in data["github"]

    again = run_cli(["init", "--path", "custom.toml"], cwd=workdir)
    assert again.returncode == 1
    forced = run_cli(["init", "--path", "custom.toml", "--force"], cwd=workdir)
    assert_exit_ok(forced)

def test_config_show_and_validate(workdir: Path):
    (workdir / ".todoscan.toml").write_text('[parsing]\nfile_extensions = ["go"]\n')
    shown = run_cli(["config"], cwd=workdir)
    assert_exit_ok(shown)
    assert tomllib.loads(shown.stdout)["parsing"]["file_extensions"] == ["go"]

    everything = run_cli(["config", "--all"], cwd=workdir)
    assert_exit_ok(everything)
    assert tomllib.loads(everything.stdout)["github"]["token"] == "(not set)"

    valid = run_cli(["config", "--validate"], cwd=workdir)
    assert_exit_ok(valid)
    assert "Configuration is valid." in valid.stdout

def test_config_validate_reports_bad_pattern(workdir: Path):
    (workdir / ".todoscan.toml").write_text('[parsing]\ntodo_patterns = ["(?i)WIP:(.*)"]\n')
    proc = run_cli(["config", "--validate"], cwd=workdir)
    assert proc.returncode == 1
