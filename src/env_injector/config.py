"""
Configuration loading helpers for the declaration loader.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from .resolver import DEFAULT_MAX_ROUNDS

DEFAULT_ENV_FILE = ".env"
DEFAULT_SEPARATOR = ";"
PATHSEP_KEYWORD = "pathsep"


class ConfigError(RuntimeError):
    """Raised when the user provided configuration is invalid."""


@dataclass
class LoaderConfig:
    """Settings shared by the engine, the file loader and the CLI."""

    env_file: str = DEFAULT_ENV_FILE
    separator: str = DEFAULT_SEPARATOR
    max_rounds: int = DEFAULT_MAX_ROUNDS
    abort_on_circular: bool = False


def normalize_separator(value: Any) -> str:
    if value is None:
        return DEFAULT_SEPARATOR
    separator = str(value)
    if separator.lower() == PATHSEP_KEYWORD:
        return os.pathsep
    return separator


def _positive_int(raw: Dict[str, Any], key: str, default: int) -> int:
    value = raw.get(key, default)
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid integer for {key}: {value!r}") from exc
    if number <= 0:
        raise ConfigError(f"{key} must be positive, got {number}")
    return number


def config_from_mapping(raw: Dict[str, Any]) -> LoaderConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(raw).__name__}")

    abort = raw.get("abort_on_circular", False)
    if not isinstance(abort, bool):
        raise ConfigError(f"abort_on_circular must be a boolean, got {abort!r}")

    return LoaderConfig(
        env_file=str(raw.get("env_file") or DEFAULT_ENV_FILE),
        separator=normalize_separator(raw.get("separator")),
        max_rounds=_positive_int(raw, "max_rounds", DEFAULT_MAX_ROUNDS),
        abort_on_circular=abort,
    )


def load_config(path: str | Path) -> LoaderConfig:
    """Load LoaderConfig from a YAML file."""

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    with config_path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}") from exc

    return config_from_mapping(raw)


__all__ = [
    "ConfigError",
    "DEFAULT_ENV_FILE",
    "DEFAULT_SEPARATOR",
    "LoaderConfig",
    "config_from_mapping",
    "load_config",
    "normalize_separator",
]
