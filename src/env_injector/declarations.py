"""
Line classification for declaration files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"


class Operator(str, Enum):
    ASSIGN = "="
    PREFIX = ":="
    SUFFIX = "=:"


# first match wins
OPERATOR_PRIORITY = (Operator.PREFIX, Operator.SUFFIX, Operator.ASSIGN)


@dataclass(frozen=True)
class Declaration:
    """A single parsed ``KEY<op>VALUE`` line."""

    key: str
    operator: Operator
    raw_value: str
    line_number: int = 0


def strip_comment(line: str) -> str:
    """Drop everything from the first ``#`` and trim the remainder."""

    marker = line.find(COMMENT_MARKER)
    if marker >= 0:
        line = line[:marker]
    return line.strip()


def detect_operator(line: str) -> Optional[Operator]:
    for operator in OPERATOR_PRIORITY:
        if operator.value in line:
            return operator
    return None


def parse_line(line: str, line_number: int = 0) -> Optional[Declaration]:
    """
    Classify one raw line.

    Returns ``None`` for blank lines, comments, lines without an operator and
    lines with an empty key. Never raises on malformed input.
    """

    stripped = line.strip()
    if not stripped or stripped.startswith(COMMENT_MARKER):
        return None

    effective = strip_comment(stripped)
    operator = detect_operator(effective)
    if operator is None:
        logger.debug("Line %d has no operator, skipping: %r", line_number, effective)
        return None

    key, raw_value = effective.split(operator.value, 1)
    key = key.strip()
    if not key:
        logger.debug("Line %d has an empty key, skipping", line_number)
        return None
    return Declaration(key=key, operator=operator, raw_value=raw_value.strip(), line_number=line_number)


def parse_lines(lines: Iterable[str]) -> Iterator[Declaration]:
    for index, line in enumerate(lines, start=1):
        declaration = parse_line(line, line_number=index)
        if declaration is not None:
            yield declaration


__all__ = [
    "COMMENT_MARKER",
    "Declaration",
    "OPERATOR_PRIORITY",
    "Operator",
    "detect_operator",
    "parse_line",
    "parse_lines",
    "strip_comment",
]
