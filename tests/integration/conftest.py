import os
import sys
import json
import shutil
import subprocess
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]


def run_cli(args, cwd=None, env=None, timeout=60):
    """
    Run the CLI as a subprocess: python -m todoscan.cli <args>
    Returns CompletedProcess with stdout/stderr text captured.
    """
    cmd = [sys.executable, "-m", "todoscan.cli"] + list(map(str, args))
    env = dict(os.environ if env is None else env)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True, timeout=timeout)


@pytest.fixture()
def dataset_dir(tmp_path: Path) -> Path:
    """
    Copy the embedded dataset into a temporary directory and return its path.
    """
    src = Path(__file__).parent / "assets" / "dataset"
    dst = tmp_path / "dataset"
    shutil.copytree(src, dst)
    return dst


@pytest.fixture()
def out_dir(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d


@pytest.fixture()
def workdir(tmp_path: Path) -> Path:
    """Empty working directory so no stray .todoscan.toml is picked up."""
    d = tmp_path / "work"
    d.mkdir()
    return d


def load_json(p: Path):
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def assert_exit_ok(proc):
    assert proc.returncode == 0, f"Non-zero exit:\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"


def assert_file(p: Path):
    assert p.exists(), f"Expected file missing: {p}"
    return p
