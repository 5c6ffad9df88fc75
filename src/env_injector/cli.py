"""
Command line interface for loading declaration files into the environment.
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
from typing import List, Optional, Sequence

import pandas as pd

from .config import ConfigError, LoaderConfig, load_config, normalize_separator
from .engine import AssignmentResult
from .env import DeclarationFileError, load_env_file
from .resolver import CircularReferenceError
from .store import OSEnvironmentStore, OverlayStore

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inject declarations from a .env file into the process environment")
    parser.add_argument(
        "--file",
        default=os.getenv("ENV_INJECTOR_FILE"),
        help="Declaration file to load (defaults to the configured env_file, usually .env)",
    )
    parser.add_argument(
        "--config",
        default=os.getenv("ENV_INJECTOR_CONFIG"),
        help="Optional YAML config file with loader settings",
    )
    parser.add_argument(
        "--separator",
        help="Separator for prefix/suffix declarations. Use 'pathsep' for the platform path separator.",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show the computed assignments without applying them")
    parser.add_argument("--confirm", action="store_true", help="Ask before applying each assignment")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run with the updated environment (prefix with --)",
    )
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> LoaderConfig:
    config = load_config(args.config) if args.config else LoaderConfig()
    if args.separator is not None:
        config.separator = normalize_separator(args.separator)
    return config


def prompt_for_confirmation(key: str, value: str) -> bool:
    try:
        answer = input(f"Apply {key}={value}? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def _status(result: AssignmentResult, dry_run: bool) -> str:
    if result.error:
        return "error"
    if not result.applied:
        return "skipped"
    return "planned" if dry_run else "applied"


def results_frame(results: List[AssignmentResult], dry_run: bool = False) -> pd.DataFrame:
    rows = []
    for result in results:
        declaration = result.declaration
        rows.append(
            {
                "line": declaration.line_number,
                "key": declaration.key,
                "operator": declaration.operator.value,
                "value": result.assignment.value if result.assignment else "",
                "status": _status(result, dry_run),
            }
        )
    return pd.DataFrame(rows, columns=["line", "key", "operator", "value", "status"])


def _strip_separator(command: List[str]) -> List[str]:
    if command and command[0] == "--":
        return command[1:]
    return command


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _build_config(args)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    store = OSEnvironmentStore()
    if args.dry_run:
        store = OverlayStore(store)
    should_apply = prompt_for_confirmation if args.confirm else None

    try:
        results = load_env_file(args.file, store=store, config=config, should_apply=should_apply)
    except (DeclarationFileError, CircularReferenceError) as exc:
        logger.error("%s", exc)
        return 1

    command = _strip_separator(args.command or [])
    if command and args.dry_run:
        logger.info("Dry run: not running %s", " ".join(command))
    elif command:
        try:
            return subprocess.call(command, env=os.environ.copy())
        except OSError as exc:
            logger.error("Could not run %s: %s", command[0], exc)
            return 127

    frame = results_frame(results, dry_run=args.dry_run)
    if frame.empty:
        print("No declarations applied.")
    else:
        title = "Planned Assignments" if args.dry_run else "Applied Assignments"
        print(f"\n{title}\n{'-' * len(title)}")
        print(frame.to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
