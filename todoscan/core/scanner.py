from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Iterator, List, Optional

import pathspec
from tqdm import tqdm

from ..parsers.text import AnnotationParser
from ..patterns.base import PatternSet
from .config import ScanConfig
from .errors import FileScanError, InvalidPathError, PathTraversalError, WalkError
from .models import AnnotationRecord
from .utils import read_text


DEFAULT_LOGGER_NAME = "todoscan"
SLOW_SCAN_THRESHOLD_SECONDS = 2.0
TRAVERSAL_MARKER = ".."


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    Handlers go to stderr so console output on stdout stays clean. Calling
    this twice does not stack handlers; ``verbose`` raises the level to INFO.
    """

    logger = logging.getLogger(logger_name)
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


def _raise_walk_error(err: OSError) -> None:
    raise WalkError(f"Unable to walk {err.filename}: {err.strerror or err}") from err


class DirectoryScanner:
    """Walk a tree and collect annotation records from every eligible file.

    Files are scanned one at a time. A file that cannot be read or parsed is
    logged and skipped; only a failure to enumerate the tree aborts the scan.
    """

    def __init__(
        self,
        root: Path,
        config: ScanConfig,
        patterns: Optional[PatternSet] = None,
        *,
        logger: Optional[logging.Logger] = None,
        verbose: bool = False,
        show_progress: bool = True,
        progress_desc: str = "Scanning files",
    ) -> None:
        self.root = root
        self.config = config
        self.patterns = patterns if patterns is not None else PatternSet.from_config(config)
        self.parser = AnnotationParser(self.patterns, context_lines=config.include_context_lines)
        self.extensions = set(config.file_extensions)
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.verbose = verbose
        if verbose:
            self.logger.setLevel(logging.INFO)
        self.show_progress = bool(show_progress)
        self.progress_desc = progress_desc
        self.excludes = self._build_excludes(config.exclude_patterns)
        self.failed_files = 0
        self._slow_log_threshold = SLOW_SCAN_THRESHOLD_SECONDS

    def _build_excludes(self, patterns: List[str]) -> List[pathspec.PathSpec]:
        specs = []
        for pattern in patterns:
            try:
                specs.append(pathspec.PathSpec.from_lines("gitwildmatch", [pattern]))
            except (ValueError, TypeError) as exc:
                self.logger.warning("Failed to add exclude pattern %r: %s", pattern, exc)
        return specs

    def _is_excluded(self, relative: str) -> bool:
        return any(spec.match_file(relative) for spec in self.excludes)

    def should_scan(self, path: Path) -> bool:
        if not path.is_file():
            return False
        if TRAVERSAL_MARKER in str(path):
            return False
        return path.suffix[1:] in self.extensions

    def iter_files(self) -> Iterator[Path]:
        if not self.root.exists():
            raise WalkError(f"Unable to walk {self.root}: no such file or directory")
        if not self.root.is_dir():
            yield self.root
            return
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=_raise_walk_error):
            current = Path(dirpath)
            kept = []
            for name in sorted(dirnames):
                rel = (current / name).relative_to(self.root).as_posix() + "/"
                if self._is_excluded(rel):
                    self.logger.debug("Excluding directory %s", current / name)
                    continue
                kept.append(name)
            dirnames[:] = kept
            for name in sorted(filenames):
                path = current / name
                if self._is_excluded(path.relative_to(self.root).as_posix()):
                    self.logger.debug("Excluding %s", path)
                    continue
                yield path

    def scan(self) -> List[AnnotationRecord]:
        files = [p for p in self.iter_files() if self._eligible(p)]
        total_files = len(files)
        self.failed_files = 0

        if self.verbose:
            self.logger.info("Discovered %d file(s) to scan", total_files)

        records: List[AnnotationRecord] = []
        progress_bar = tqdm(
            files,
            total=total_files,
            desc=self.progress_desc,
            unit="file",
            disable=not self.show_progress or not total_files,
        )
        try:
            for path in progress_bar:
                display_path = self._format_display_path(path)
                progress_bar.set_postfix_str(_shorten(display_path), refresh=False)
                start_time = time.perf_counter()
                try:
                    file_records = self.scan_file(path)
                except FileScanError as exc:
                    self.failed_files += 1
                    self.logger.error("Error scanning %s", exc)
                    continue
                except Exception as exc:
                    self.failed_files += 1
                    if self.verbose:
                        self.logger.exception("Failed while scanning %s", path)
                    else:
                        self.logger.error("Failed while scanning %s: %s", path, exc)
                    continue
                self.logger.debug("Found %d annotation(s) in %s", len(file_records), display_path)
                self._maybe_log_slow_file(display_path, time.perf_counter() - start_time, len(file_records))
                records.extend(file_records)
        finally:
            progress_bar.close()

        if self.failed_files:
            self.logger.warning("%d file(s) could not be scanned", self.failed_files)
        if self.verbose:
            self.logger.info("Found %d annotation(s) in %d file(s)", len(records), total_files)
        return records

    def scan_file(self, path: Path) -> List[AnnotationRecord]:
        try:
            canonical = path.resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise InvalidPathError(path) from exc
        if TRAVERSAL_MARKER in str(canonical):
            raise PathTraversalError(path)
        content = read_text(path)
        return self.parser.parse(path, content)

    def _eligible(self, path: Path) -> bool:
        if self.should_scan(path):
            return True
        self.logger.debug("%s will not be scanned", path)
        return False

    def _format_display_path(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.root))
        except ValueError:
            return str(path)

    def _maybe_log_slow_file(self, display_path: str, duration: float, record_count: int) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        if duration < self._slow_log_threshold:
            return
        self.logger.debug(
            "Slow scan for %s took %.2fs (records=%d)",
            display_path,
            duration,
            record_count,
        )


def _shorten(label: str, limit: int = 60) -> str:
    if len(label) > limit:
        return f"...{label[-(limit - 3):]}"
    return label
