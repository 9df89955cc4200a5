from __future__ import annotations
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import ConfigError

SSH_PREFIX = "git@github.com:"
HTTPS_PREFIX = "https://github.com/"


@dataclass(frozen=True)
class GitRepoInfo:
    owner: str
    repo: str


def parse_github_url(url: str) -> GitRepoInfo:
    url = url.strip()
    for prefix, kind in ((SSH_PREFIX, "SSH"), (HTTPS_PREFIX, "HTTPS")):
        if not url.startswith(prefix):
            continue
        path = url[len(prefix):]
        if path.endswith(".git"):
            path = path[: -len(".git")]
        parts = path.split("/")
        if len(parts) != 2 or not all(parts):
            raise ConfigError(f"Invalid Git URL {url!r}: invalid {kind} URL format")
        return GitRepoInfo(owner=parts[0], repo=parts[1])
    raise ConfigError(f"Invalid Git URL {url!r}: URL is not a GitHub repository")


def repo_info_from_path(path: Union[str, Path] = ".") -> GitRepoInfo:
    """Owner and repository name of the ``origin`` remote of the repo at ``path``."""
    try:
        proc = subprocess.run(
            ["git", "config", "--get", "remote.origin.url"],
            cwd=str(path),
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise ConfigError(f"Git repository not found: {exc}") from exc
    if proc.returncode != 0 or not proc.stdout.strip():
        raise ConfigError("Git remote not found: no URL configured for 'origin'")
    return parse_github_url(proc.stdout)
