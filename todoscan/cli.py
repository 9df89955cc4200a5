import argparse
import sys
from pathlib import Path
from typing import List, Optional

import tomli_w

from .core.config import DEFAULT_CONFIG_PATH, TodoscanConfig, load_config, save_config
from .core.errors import ConfigError, TodoscanError
from .core.git import repo_info_from_path
from .core.models import MarkerType
from .core.reporting import OutputFormat, Reporter, filter_by_type
from .core.scanner import DirectoryScanner, configure_logging
from .patterns.base import PatternSet


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="todoscan",
        description="Scan a source tree for TODO/FIXME/HACK/NOTE/BUG comments and report them grouped by type.",
    )
    sub = p.add_subparsers(dest="mode", required=True)

    # scan
    s = sub.add_parser("scan", help="Scan a directory (or a single file) for annotation comments.")
    s.add_argument("path", type=Path, nargs="?", default=Path("."), help="Directory or file to scan (default: current directory).")
    s.add_argument("-f", "--format", type=OutputFormat, choices=list(OutputFormat), default=OutputFormat.TABLE, help="Output format (default: table).")
    s.add_argument("-o", "--output", type=Path, default=None, help="Output file; required for json, csv, toml and markdown, rejected for table and terminal.")
    s.add_argument("-t", "--todo-type", default=None, help="Only report one marker type (todo, fixme, hack, note, bug).")
    s.add_argument("-c", "--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH} if present).")
    s.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    s.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging output.")

    # init
    i = sub.add_parser("init", help="Write a default config file.")
    i.add_argument("-p", "--path", type=Path, default=Path(DEFAULT_CONFIG_PATH), help=f"Where to write the config (default: {DEFAULT_CONFIG_PATH}).")
    i.add_argument("-f", "--force", action="store_true", help="Overwrite an existing config file.")
    i.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging output.")

    # config
    c = sub.add_parser("config", help="Show the effective configuration.")
    c.add_argument("-a", "--all", action="store_true", help="Show every section, not only [parsing].")
    c.add_argument("--validate", action="store_true", help="Compile all configured patterns and report problems.")
    c.add_argument("-c", "--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH} if present).")
    c.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging output.")

    return p


def run_scan(args: argparse.Namespace) -> int:
    # Reject bad format/output pairings before touching the filesystem.
    reporter = Reporter(args.format, args.output)
    config = load_config(args.config)
    verbose = args.verbose or config.output.verbose
    logger = configure_logging(verbose=verbose)

    marker_type = None
    if args.todo_type:
        try:
            marker_type = MarkerType.from_name(args.todo_type)
        except ValueError as exc:
            print(f"todoscan: {exc}", file=sys.stderr)
            return 2

    scanner = DirectoryScanner(
        root=args.path,
        config=config.parsing,
        logger=logger,
        verbose=verbose,
        show_progress=config.output.progress_bar and not args.no_progress,
    )
    records = filter_by_type(scanner.scan(), marker_type)
    reporter.write_all(records)
    return 0


def run_init(args: argparse.Namespace) -> int:
    logger = configure_logging(verbose=args.verbose)
    path: Path = args.path
    if path.exists() and not args.force:
        print(f"Config file already exists at {path}; use --force to overwrite.", file=sys.stderr)
        return 1

    config = TodoscanConfig()
    try:
        info = repo_info_from_path(path.parent)
        config.github.owner = info.owner
        config.github.repo = info.repo
    except ConfigError as exc:
        logger.warning("GitHub repository not detected: %s", exc)

    save_config(config, path)
    print(f"Initialized config file at: {path}")
    return 0


def run_config(args: argparse.Namespace) -> int:
    configure_logging(verbose=args.verbose)
    config = load_config(args.config)

    if args.validate:
        PatternSet.from_config(config.parsing)
        print("Configuration is valid.")
        return 0

    data = config.to_dict(include_token=False)
    if args.all:
        data["github"]["token"] = "***" if config.github.token else "(not set)"
    else:
        data = {"parsing": data["parsing"]}
    print(tomli_w.dumps(data), end="")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    handlers = {"scan": run_scan, "init": run_init, "config": run_config}
    handler = handlers.get(args.mode)
    if handler is None:
        parser.print_help()
        return 2
    try:
        return handler(args)
    except TodoscanError as exc:
        configure_logging(verbose=getattr(args, "verbose", False)).error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
