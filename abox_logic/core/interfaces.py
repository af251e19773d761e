"""
Core interfaces (protocols) for abox-logic.

The query evaluator and the engines only need read access to a set of
facts, so they are written against these protocols rather than against
the in-memory store.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, Iterator, Protocol, runtime_checkable

if TYPE_CHECKING:
    from abox_logic.core.types import ClosureResult, RelationValue, Term


@runtime_checkable
class FactSource(Protocol):
    """
    Protocol for anything that can hand out the facts of an ABox.
    """

    @abstractmethod
    def get_facts(
        self,
        name: str | None = None,
        left: Term | None = None,
        right: Term | None = None,
    ) -> list[RelationValue]:
        """
        Query facts with optional filters.

        Args:
            name: Filter by relation name
            left: Filter by left term
            right: Filter by right term

        Returns:
            List of matching facts
        """
        ...

    @abstractmethod
    def snapshot(self) -> frozenset[RelationValue]:
        """Return an immutable copy of all current facts."""
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[RelationValue]:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...


@runtime_checkable
class Reasoner(Protocol):
    """
    Protocol for anything that computes the closure of a fact set.
    """

    @abstractmethod
    def forward_chain(
        self,
        facts: Iterable[RelationValue],
        max_rounds: int | None = None,
    ) -> ClosureResult:
        """
        Derive every fact implied by ``facts``.

        Returns:
            ClosureResult holding only facts absent from the input
        """
        ...
