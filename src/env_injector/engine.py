"""
High level orchestration: turn declaration lines into environment writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .config import LoaderConfig
from .declarations import Declaration, Operator, parse_lines
from .resolver import CircularReferenceError, resolve
from .store import EnvironmentStore

logger = logging.getLogger(__name__)

ShouldApply = Callable[[str, str], bool]


@dataclass(frozen=True)
class Assignment:
    """Computed write for one declaration, not yet committed."""

    key: str
    value: str
    previous: str | None
    declaration: Declaration


@dataclass
class AssignmentResult:
    declaration: Declaration
    assignment: Optional[Assignment] = None
    applied: bool = False
    error: str | None = None


def _always_apply(key: str, value: str) -> bool:
    return True


class DeclarationEngine:
    """Resolves declarations in file order and writes them to a store."""

    def __init__(self, store: EnvironmentStore, config: LoaderConfig | None = None):
        self.store = store
        self.config = config or LoaderConfig()

    def compose(self, operator: Operator, resolved: str, previous: str) -> str:
        separator = self.config.separator
        if operator is Operator.PREFIX:
            return f"{resolved}{separator}{previous}"
        if operator is Operator.SUFFIX:
            return f"{previous}{separator}{resolved}"
        return resolved

    def evaluate(self, declaration: Declaration) -> Assignment:
        """Compute the final value for ``declaration`` without writing it."""

        resolved = resolve(declaration.raw_value, self.store, max_rounds=self.config.max_rounds)
        previous = self.store.get(declaration.key)
        value = self.compose(declaration.operator, resolved, previous or "")
        return Assignment(key=declaration.key, value=value, previous=previous, declaration=declaration)

    def commit(self, assignment: Assignment) -> None:
        self.store.set(assignment.key, assignment.value)

    def run(self, lines: Iterable[str], should_apply: ShouldApply | None = None) -> List[AssignmentResult]:
        """
        Process ``lines`` strictly in order.

        Every accepted write is committed before the next line is evaluated, so
        later placeholders see earlier declarations. ``should_apply`` is called
        once per computed assignment; returning ``False`` skips that write only.
        """

        gate = should_apply or _always_apply
        results: List[AssignmentResult] = []
        for declaration in parse_lines(lines):
            try:
                assignment = self.evaluate(declaration)
            except CircularReferenceError as exc:
                if self.config.abort_on_circular:
                    raise
                logger.error("Line %d (%s): %s", declaration.line_number, declaration.key, exc)
                results.append(AssignmentResult(declaration=declaration, error=str(exc)))
                continue

            applied = bool(gate(assignment.key, assignment.value))
            if applied:
                try:
                    self.commit(assignment)
                except ValueError as exc:
                    logger.error("Line %d (%s): store rejected write: %s", declaration.line_number, assignment.key, exc)
                    results.append(AssignmentResult(declaration=declaration, assignment=assignment, error=str(exc)))
                    continue
                logger.debug("Set %s (line %d)", assignment.key, declaration.line_number)
            else:
                logger.info("Skipped %s (line %d)", assignment.key, declaration.line_number)
            results.append(AssignmentResult(declaration=declaration, assignment=assignment, applied=applied))
        return results


__all__ = ["Assignment", "AssignmentResult", "DeclarationEngine", "ShouldApply"]
