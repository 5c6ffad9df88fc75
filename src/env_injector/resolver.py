"""
Placeholder resolution for ``${NAME}`` references inside declaration values.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from .store import EnvironmentStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 100

_OPEN = "${"
_CLOSE = "}"


class CircularReferenceError(RuntimeError):
    """Raised when placeholder substitution does not converge."""

    def __init__(self, name: str, value: str, rounds: int):
        super().__init__(f"Circular reference while resolving ${{{name}}} in {value!r} after {rounds} substitution(s)")
        self.name = name
        self.value = value
        self.rounds = rounds


def find_placeholder(value: str) -> Optional[Tuple[int, int, str]]:
    """
    Locate the leftmost complete ``${NAME}`` token.

    Returns ``(start, end, name)`` where ``value[start:end]`` is the whole token,
    or ``None`` when no closed placeholder is present.
    """

    start = value.find(_OPEN)
    if start < 0:
        return None
    close = value.find(_CLOSE, start + len(_OPEN))
    if close < 0:
        return None
    return start, close + 1, value[start + len(_OPEN) : close]


def _substitute_pass(value: str, store: EnvironmentStore) -> Tuple[str, Optional[str]]:
    """
    Replace every complete placeholder found scanning ``value`` left to right.

    Replacement text is not rescanned within the same pass. Returns the new
    string and the first name substituted (``None`` when nothing matched).
    """

    parts: List[str] = []
    first_name: Optional[str] = None
    position = 0
    while True:
        match = find_placeholder(value[position:])
        if match is None:
            break
        start, end, name = match
        if first_name is None:
            first_name = name
        parts.append(value[position : position + start])
        parts.append(store.get(name) or "")
        position += end
    if first_name is None:
        return value, None
    parts.append(value[position:])
    return "".join(parts), first_name


def resolve(value: str | None, store: EnvironmentStore, max_rounds: int = DEFAULT_MAX_ROUNDS) -> str:
    """
    Substitute placeholders with values from ``store`` until none remain.

    Each round replaces every placeholder present in the current string; nested
    references introduced by a replacement are handled in the next round. Unset
    names resolve to an empty string. A round that revisits an earlier
    intermediate string, or more than ``max_rounds`` rounds, raises
    :class:`CircularReferenceError`.
    """

    if not value:
        return ""

    original = value
    seen: Set[str] = {value}
    rounds = 0
    while True:
        substituted, name = _substitute_pass(value, store)
        if name is None:
            return value
        rounds += 1
        if rounds > max_rounds:
            raise CircularReferenceError(name, original, rounds - 1)
        if substituted in seen:
            raise CircularReferenceError(name, original, rounds)
        seen.add(substituted)
        value = substituted
        logger.debug("Resolution round %d of %r", rounds, original)


__all__ = [
    "DEFAULT_MAX_ROUNDS",
    "CircularReferenceError",
    "find_placeholder",
    "resolve",
]
