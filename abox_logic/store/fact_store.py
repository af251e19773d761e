"""
In-memory fact store.

Holds an ABox of relation values with indexes on relation name and on
both terms. Ideal for testing, prototyping, and small datasets.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Iterable, Iterator

from abox_logic.core.types import ClosureResult, RelationValue, Term
from abox_logic.symbolic.rules import Rule, RuleEngine

if TYPE_CHECKING:
    import networkx

logger = logging.getLogger(__name__)


class FactStore:
    """
    In-memory ABox using indexed sets.

    Features:
    - Fast lookups by relation name, left term or right term
    - In-place saturation under a rule engine
    - Query statistics

    Example:
        >>> store = FactStore()
        >>> store.add(RelationValue("subClassOf", "Cat", "Mammal"))
        True
        >>> store.get_facts(left="Cat")
        [RelationValue(name='subClassOf', left='Cat', right='Mammal')]
    """

    def __init__(self, facts: Iterable[RelationValue] | None = None, name: str = "FactStore") -> None:
        self._name = name
        self._facts: set[RelationValue] = set()
        self._stats: dict[str, Any] = {"queries": 0, "saturations": 0}

        # Indexes for fast lookups
        self._name_index: dict[str, set[RelationValue]] = defaultdict(set)
        self._left_index: dict[Term, set[RelationValue]] = defaultdict(set)
        self._right_index: dict[Term, set[RelationValue]] = defaultdict(set)

        if facts is not None:
            self.add_all(facts)

    @property
    def name(self) -> str:
        return self._name

    @property
    def stats(self) -> dict[str, Any]:
        """Query statistics."""
        return self._stats.copy()

    @property
    def relation_names(self) -> set[str]:
        return {name for name, facts in self._name_index.items() if facts}

    @property
    def individuals(self) -> set[Term]:
        """Every term appearing on either side of a fact."""
        return {term for fact in self._facts for term in fact.terms}

    def _increment_stat(self, key: str, value: int = 1) -> None:
        self._stats[key] = self._stats.get(key, 0) + value

    def __len__(self) -> int:
        return len(self._facts)

    def __iter__(self) -> Iterator[RelationValue]:
        return iter(self._facts)

    def __contains__(self, fact: object) -> bool:
        return fact in self._facts

    # Read operations

    def get_facts(
        self,
        name: str | None = None,
        left: Term | None = None,
        right: Term | None = None,
    ) -> list[RelationValue]:
        """Query facts with optional filters, sorted for stable output."""
        self._increment_stat("queries")

        # Choose the most selective index
        if left is not None:
            candidates = self._left_index.get(left, set())
        elif right is not None:
            candidates = self._right_index.get(right, set())
        elif name is not None:
            candidates = self._name_index.get(name, set())
        else:
            candidates = self._facts

        results = [
            fact
            for fact in candidates
            if (name is None or fact.name == name)
            and (left is None or fact.left == left)
            and (right is None or fact.right == right)
        ]
        return sorted(results, key=RelationValue.sort_key)

    def snapshot(self) -> frozenset[RelationValue]:
        return frozenset(self._facts)

    # Write operations

    def add(self, fact: RelationValue) -> bool:
        """Add a fact. Returns False if it was already present."""
        if fact in self._facts:
            return False
        self._facts.add(fact)
        self._name_index[fact.name].add(fact)
        self._left_index[fact.left].add(fact)
        self._right_index[fact.right].add(fact)
        return True

    def add_all(self, facts: Iterable[RelationValue]) -> int:
        """Add multiple facts, returning how many were new."""
        count = 0
        for fact in facts:
            if self.add(fact):
                count += 1
        return count

    def remove(self, fact: RelationValue) -> bool:
        """Remove a specific fact."""
        if fact not in self._facts:
            return False
        self._facts.remove(fact)
        self._name_index[fact.name].discard(fact)
        self._left_index[fact.left].discard(fact)
        self._right_index[fact.right].discard(fact)
        return True

    def clear(self) -> None:
        """Remove all facts."""
        self._facts.clear()
        self._name_index.clear()
        self._left_index.clear()
        self._right_index.clear()

    def saturate(
        self,
        rules: RuleEngine | Iterable[Rule],
        max_rounds: int | None = None,
    ) -> ClosureResult:
        """
        Add everything the rules derive from the current facts.

        Args:
            rules: A rule engine, or rules to build one from
            max_rounds: Forwarded to ``RuleEngine.forward_chain``

        Returns:
            The closure result; its facts are now part of the store
        """
        engine = rules if isinstance(rules, RuleEngine) else RuleEngine(rules)
        result = engine.forward_chain(self.snapshot(), max_rounds=max_rounds)
        added = self.add_all(result.facts)
        self._increment_stat("saturations")
        logger.info("%s: saturation added %d facts (%d total)", self.name, added, len(self))
        return result

    # Convenience methods

    @classmethod
    def from_tuples(
        cls,
        tuples: Iterable[tuple[str, Term, Term]],
        name: str = "FactStore",
    ) -> "FactStore":
        """Create a store from (name, left, right) tuples."""
        return cls((RelationValue(*t) for t in tuples), name=name)

    def to_networkx(self) -> "networkx.MultiDiGraph":
        """Convert to a NetworkX graph, one edge per fact."""
        import networkx as nx

        G = nx.MultiDiGraph()
        for fact in self._facts:
            G.add_edge(fact.left, fact.right, relation=fact.name)
        return G

    def __repr__(self) -> str:
        return f"FactStore(facts={len(self)}, relations={len(self.relation_names)})"

    def summary(self) -> str:
        """Get a summary of the store contents."""
        lines = [
            f"Fact store: {self.name}",
            f"  Facts: {len(self)}",
            f"  Relations: {len(self.relation_names)}",
            f"  Individuals: {len(self.individuals)}",
        ]

        rel_counts = {name: len(facts) for name, facts in self._name_index.items() if facts}
        if rel_counts:
            lines.append("  Top Relations:")
            for rel, count in sorted(rel_counts.items(), key=lambda x: (-x[1], x[0]))[:5]:
                lines.append(f"    {rel}: {count}")

        return "\n".join(lines)
