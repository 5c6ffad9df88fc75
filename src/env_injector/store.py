"""
Environment store implementations used by the declaration engine.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Dict, MutableMapping


class EnvironmentStore(ABC):
    @abstractmethod
    def get(self, name: str) -> str | None:
        """Return the current value of ``name`` or ``None`` when unset."""

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """Write ``value`` under ``name``."""


class OSEnvironmentStore(EnvironmentStore):
    """Reads and writes the current process environment (never a parent shell)."""

    def __init__(self, environ: MutableMapping[str, str] | None = None):
        self._environ = environ if environ is not None else os.environ

    def get(self, name: str) -> str | None:
        return self._environ.get(name)

    def set(self, name: str, value: str) -> None:
        self._environ[name] = value


class InMemoryStore(EnvironmentStore):
    """Dictionary backed store, handy for tests and embedding."""

    def __init__(self, values: Dict[str, str] | None = None):
        self.values: Dict[str, str] = dict(values or {})

    def get(self, name: str) -> str | None:
        return self.values.get(name)

    def set(self, name: str, value: str) -> None:
        self.values[name] = value


class OverlayStore(EnvironmentStore):
    """
    Records writes in a private layer while reading through to ``base``.

    Used for previews: later declarations observe earlier simulated writes but
    the underlying store is left untouched.
    """

    def __init__(self, base: EnvironmentStore):
        self.base = base
        self.changes: Dict[str, str] = {}

    def get(self, name: str) -> str | None:
        if name in self.changes:
            return self.changes[name]
        return self.base.get(name)

    def set(self, name: str, value: str) -> None:
        self.changes[name] = value


__all__ = [
    "EnvironmentStore",
    "InMemoryStore",
    "OSEnvironmentStore",
    "OverlayStore",
]
