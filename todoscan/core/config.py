from __future__ import annotations
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..patterns.defaults import (
    DEFAULT_COMMENT_PREFIXES,
    DEFAULT_CONTEXT_LINES,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_FILE_EXTENSIONS,
    DEFAULT_FUNCTION_PATTERNS,
    DEFAULT_TODO_PATTERNS,
)
from .errors import ConfigError

DEFAULT_CONFIG_PATH = ".todoscan.toml"
ENV_PREFIX = "TODOSCAN_"
ENV_SEPARATOR = "__"
# Regex lists cannot be comma-split; the environment gives them as a TOML array.
PATTERN_KEYS = {"comment_prefixes", "todo_patterns", "function_patterns"}

logger = logging.getLogger("todoscan.config")


class ScanConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file_extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_FILE_EXTENSIONS))
    exclude_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    include_context_lines: int = Field(default=DEFAULT_CONTEXT_LINES, ge=0)
    comment_prefixes: List[str] = Field(default_factory=lambda: list(DEFAULT_COMMENT_PREFIXES))
    # strings, or {pattern = "...", type = "..."} tables
    todo_patterns: List[Union[str, Dict[str, str]]] = Field(default_factory=lambda: list(DEFAULT_TODO_PATTERNS))
    function_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_FUNCTION_PATTERNS))

    @field_validator("file_extensions", "exclude_patterns", mode="before")
    @classmethod
    def _split_comma_list(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


class OutputConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    progress_bar: bool = True
    verbose: bool = False


class GitHubConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    owner: str = "no owner"
    repo: str = "no repo"
    token: str = Field(default="", repr=False)  # environment only, never saved


class TodoscanConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    parsing: ScanConfig = Field(default_factory=ScanConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)

    def to_dict(self, include_token: bool = False) -> Dict[str, Dict[str, Any]]:
        exclude = None if include_token else {"github": {"token"}}
        return self.model_dump(exclude=exclude)


def validate_config_path(path: Path) -> None:
    if ".." in str(path):
        raise ConfigError(f"Config file should be under the repo root: {path}")


def _merge(target: Dict[str, Any], source: Mapping[str, Any]) -> None:
    for section, values in source.items():
        if isinstance(values, Mapping) and isinstance(target.get(section), dict):
            target[section].update(values)
        else:
            target[section] = values


def _pattern_list(name: str, raw: str) -> List[Any]:
    try:
        value = tomllib.loads(f"value = {raw}")["value"]
    except tomllib.TOMLDecodeError:
        value = None
    if not isinstance(value, list):
        raise ConfigError(f"{name} must be a TOML array of patterns, e.g. ['(?i)TODO:(.*)']")
    return value


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Dict[str, Any]]:
    """Collect ``TODOSCAN_<SECTION>__<KEY>`` variables; unknown names are skipped."""
    overrides: Dict[str, Dict[str, Any]] = {}
    for name, value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, sep, key = name[len(ENV_PREFIX):].lower().partition(ENV_SEPARATOR)
        if not sep or not key:
            continue
        section_model = TodoscanConfig.model_fields.get(section)
        if section_model is None or key not in section_model.annotation.model_fields:
            logger.warning("Ignoring unknown config variable %s", name)
            continue
        if key in PATTERN_KEYS:
            value = _pattern_list(name, value)
        overrides.setdefault(section, {})[key] = value
    return overrides


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Could not parse config file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc


def load_config(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> TodoscanConfig:
    """Build the effective config: defaults, then the TOML file, then environment."""
    config_path = path if path is not None else Path(DEFAULT_CONFIG_PATH)
    validate_config_path(config_path)
    environ = os.environ if environ is None else environ

    merged: Dict[str, Any] = TodoscanConfig().to_dict(include_token=True)
    if config_path.exists():
        logger.info("Loading config from %s", config_path)
        _merge(merged, _read_toml(config_path))
    elif path is not None:
        raise ConfigError(f"Config file not found: {config_path}")
    _merge(merged, _env_overrides(environ))

    try:
        return TodoscanConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def save_config(config: TodoscanConfig, path: Path) -> None:
    validate_config_path(path)
    try:
        with path.open("wb") as f:
            tomli_w.dump(config.to_dict(include_token=False), f)
    except OSError as exc:
        raise ConfigError(f"Config file could not be written to path {path}: {exc}") from exc

