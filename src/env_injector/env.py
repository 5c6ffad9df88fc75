"""
Helpers to load declarations from a ``.env`` style file into the environment.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .config import LoaderConfig
from .engine import AssignmentResult, DeclarationEngine, ShouldApply
from .store import EnvironmentStore, OSEnvironmentStore

logger = logging.getLogger(__name__)


class DeclarationFileError(RuntimeError):
    """Base class for problems reading a declaration file."""

    def __init__(self, path: str | Path, message: str):
        super().__init__(message)
        self.path = Path(path)


class DeclarationFileNotFound(DeclarationFileError):
    """The declaration file does not exist."""


class DeclarationReadError(DeclarationFileError):
    """The declaration file exists but could not be read."""


def read_declaration_lines(dotenv_path: str | Path) -> List[str]:
    """Read the whole file up front and return its lines."""

    path = Path(dotenv_path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DeclarationFileNotFound(path, f"Declaration file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DeclarationReadError(path, f"Could not read declaration file {path}: {exc}") from exc
    return text.splitlines()


def load_env_file(
    dotenv_path: str | Path | None = None,
    store: EnvironmentStore | None = None,
    config: LoaderConfig | None = None,
    should_apply: ShouldApply | None = None,
) -> List[AssignmentResult]:
    """
    Apply declarations from ``dotenv_path`` (if it exists) to ``store``.

    ``store`` defaults to ``os.environ`` of the current process. A missing file
    is reported as a warning and results in no writes; any other read failure
    raises :class:`DeclarationReadError`.
    """

    config = config or LoaderConfig()
    path = Path(dotenv_path if dotenv_path is not None else config.env_file)
    try:
        lines = read_declaration_lines(path)
    except DeclarationFileNotFound:
        logger.warning("No declaration file at %s, nothing to load", path)
        return []

    engine = DeclarationEngine(store or OSEnvironmentStore(), config)
    results = engine.run(lines, should_apply=should_apply)
    logger.info(
        "Loaded %s: %d applied, %d skipped, %d failed",
        path,
        sum(1 for result in results if result.applied),
        sum(1 for result in results if result.assignment is not None and not result.applied),
        sum(1 for result in results if result.error),
    )
    return results


__all__ = [
    "DeclarationFileError",
    "DeclarationFileNotFound",
    "DeclarationReadError",
    "load_env_file",
    "read_declaration_lines",
]
