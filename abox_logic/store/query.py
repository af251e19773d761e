"""
Conjunctive queries over a fact source.

Query patterns are relation values whose ``?``-prefixed terms are
variables, e.g. ``type(?x, Person) ^ hasChild(?x, ?y)``. Any other term
must match literally.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from abox_logic.core.exceptions import PreconditionViolation
from abox_logic.core.interfaces import FactSource
from abox_logic.core.types import RelationValue, Term

logger = logging.getLogger(__name__)

VARIABLE_PREFIX = "?"

Bindings = dict[str, Term]


def is_variable(term: Term) -> bool:
    """Check if a term is a query variable."""
    return isinstance(term, str) and term.startswith(VARIABLE_PREFIX)


class QueryEvaluator:
    """
    Answers conjunctive queries against a fact source.

    Example:
        >>> evaluator = QueryEvaluator(store)
        >>> evaluator.answer([RelationValue("subClassOf", "?x", "Animal")])
        [{'?x': 'Mammal'}]
    """

    def __init__(self, source: FactSource) -> None:
        if not isinstance(source, FactSource):
            raise PreconditionViolation("QueryEvaluator", f"{type(source).__name__} is not a fact source")
        self.source = source

    def _resolve(self, term: Term, bindings: Bindings) -> Term | None:
        """The concrete value of a term, or None for an unbound variable."""
        if is_variable(term):
            return bindings.get(term)  # type: ignore[arg-type]
        return term

    def _find_bindings(
        self,
        pattern: RelationValue,
        bindings: Bindings,
    ) -> Iterator[Bindings]:
        """Find all extensions of ``bindings`` that satisfy one pattern."""
        left = self._resolve(pattern.left, bindings)
        right = self._resolve(pattern.right, bindings)

        for fact in self.source.get_facts(name=pattern.name, left=left, right=right):
            merged = bindings.copy()
            consistent = True
            for term, value in ((pattern.left, fact.left), (pattern.right, fact.right)):
                if not is_variable(term):
                    continue
                if merged.setdefault(term, value) != value:  # type: ignore[arg-type]
                    consistent = False
                    break
            if consistent:
                yield merged

    def _match(
        self,
        patterns: Sequence[RelationValue],
        bindings: Bindings,
    ) -> Iterator[Bindings]:
        """Find all bindings that satisfy all patterns."""
        if not patterns:
            yield bindings
            return

        first_pattern, rest_patterns = patterns[0], patterns[1:]
        for binding in self._find_bindings(first_pattern, bindings):
            yield from self._match(rest_patterns, binding)

    def answer(
        self,
        patterns: Sequence[RelationValue],
        variables: Sequence[str] | None = None,
    ) -> list[Bindings]:
        """
        Evaluate a conjunction of patterns.

        Args:
            patterns: Query patterns
            variables: Variables to project on; all variables when None

        Returns:
            Distinct bindings, in a stable order
        """
        if variables is None:
            variables = []
            for pattern in patterns:
                for term in pattern.terms:
                    if is_variable(term) and term not in variables:
                        variables.append(term)  # type: ignore[arg-type]

        seen: set[tuple[Term, ...]] = set()
        results: list[Bindings] = []
        for bindings in self._match(list(patterns), {}):
            row = tuple(bindings.get(v, "") for v in variables)
            if row not in seen:
                seen.add(row)
                results.append({v: bindings[v] for v in variables if v in bindings})

        logger.debug("Query with %d patterns: %d results", len(patterns), len(results))
        return sorted(results, key=lambda r: tuple(str(r.get(v, "")) for v in variables))

    def ask(self, pattern: RelationValue) -> bool:
        """Check whether at least one fact satisfies a pattern."""
        return next(self._match([pattern], {}), None) is not None
