"""
Core data types for abox-logic.

This module defines the relation value (axiom/fact) that every other
component is built on, plus the small enums and result containers shared
by the rule engine and the fact store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from abox_logic.core.exceptions import CompositionInconsistency, InvalidFactError

# Individuals and pattern variables are plain strings; canonical indices are ints.
Term = Union[str, int]
CanonicalMapping = Dict[Term, int]


class MatchMode(str, Enum):
    """How a candidate conjunction is compared against a rule body."""

    EXACT = "exact"  # identical canonical shape
    HOMOMORPHIC = "homomorphic"  # rule variables may collapse onto one term


class ClosureStatus(str, Enum):
    """How a closure computation ended."""

    FIXPOINT = "fixpoint"
    ROUND_LIMIT = "round_limit"


class RelationValue(BaseModel):
    """
    A binary relational statement ``name(left, right)``.

    Used both for ground facts (``subClassOf(Cat, Animal)``) and for rule
    patterns (``subClassOf(x, y)``); which one a term is depends only on
    where the value is used.

    Attributes:
        name: Relation name, e.g. ``subClassOf``
        left: Left term
        right: Right term
    """

    model_config = ConfigDict(frozen=True)

    name: str
    left: Term
    right: Term

    def __init__(
        self,
        name: Optional[str] = None,
        left: Optional[Term] = None,
        right: Optional[Term] = None,
        **data: Any,
    ) -> None:
        """Allow positional arguments for name, left, right."""
        if name is not None:
            data["name"] = name
        if left is not None:
            data["left"] = left
        if right is not None:
            data["right"] = right
        super().__init__(**data)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("relation name must not be blank")
        return value

    @classmethod
    def _build(cls, name: str, left: Term, right: Term) -> "RelationValue":
        """Build without validation, for values derived from validated ones."""
        return cls.model_construct(name=name, left=left, right=right)

    def __str__(self) -> str:
        return f"{self.name}({self.left},{self.right})"

    @property
    def terms(self) -> Tuple[Term, Term]:
        """The (left, right) pair."""
        return (self.left, self.right)

    def to_tuple(self) -> Tuple[str, Term, Term]:
        """Convert to a plain (name, left, right) tuple."""
        return (self.name, self.left, self.right)

    def to_dict(self) -> dict[str, Term]:
        """Convert to dictionary format."""
        return {"name": self.name, "left": self.left, "right": self.right}

    def sort_key(self) -> Tuple[str, str, str]:
        """Stable ordering key across str and int terms."""
        return (self.name, str(self.left), str(self.right))

    def canonicalize(
        self, mapping: Mapping[Term, int] | None = None
    ) -> Tuple["RelationValue", CanonicalMapping]:
        """
        Replace both terms by their canonical index.

        Terms missing from ``mapping`` get the next free index, left before
        right. The given mapping is left untouched; the extended copy is
        returned next to the canonical value.
        """
        extended: CanonicalMapping = dict(mapping or {})
        for term in (self.left, self.right):
            if term not in extended:
                extended[term] = len(extended)
        value = RelationValue._build(self.name, extended[self.left], extended[self.right])
        return value, extended

    def instantiate(self, bindings: Mapping[int, Term]) -> "RelationValue":
        """
        Replace canonical indices by the terms bound to them.

        Raises:
            CompositionInconsistency: if either index is unbound
        """
        try:
            left = bindings[self.left]  # type: ignore[index]
            right = bindings[self.right]  # type: ignore[index]
        except KeyError as e:
            raise CompositionInconsistency(
                f"no term bound to index {e.args[0]!r}", {"value": str(self)}
            ) from None
        return RelationValue._build(self.name, left, right)

    def reattribute(self, substitution: Mapping[Term, int]) -> "RelationValue":
        """
        Inverse of :meth:`canonicalize`.

        For each canonical index held by this value, look up the original
        term that ``substitution`` maps to it.

        Raises:
            CompositionInconsistency: if no original term maps to an index
        """
        inverse = {index: term for term, index in substitution.items()}
        return self.instantiate(inverse)


# Axioms and facts share one representation.
Axiom = RelationValue
Fact = RelationValue


@dataclass
class ClosureResult:
    """
    The outcome of computing consequences to a fixpoint.

    Attributes:
        facts: Newly derived facts (never contains an input fact)
        rounds: Number of derivation rounds performed
        status: Whether a fixpoint was reached or the round limit hit
        per_rule: Count of derived facts credited to each rule name
        elapsed_ms: Wall-clock time of the computation
    """

    facts: frozenset[RelationValue] = field(default_factory=frozenset)
    rounds: int = 0
    status: ClosureStatus = ClosureStatus.FIXPOINT
    per_rule: dict[str, int] = field(default_factory=dict)
    elapsed_ms: float = 0.0

    @property
    def reached_fixpoint(self) -> bool:
        return self.status == ClosureStatus.FIXPOINT

    @property
    def size(self) -> int:
        """Number of derived facts."""
        return len(self.facts)

    def sorted_facts(self) -> list[RelationValue]:
        return sorted(self.facts, key=RelationValue.sort_key)

    def to_text(self, max_facts: int = 50) -> str:
        """Convert to a line-per-fact text representation."""
        ordered = self.sorted_facts()
        lines = [str(f) for f in ordered[:max_facts]]
        if len(ordered) > max_facts:
            lines.append(f"... and {len(ordered) - max_facts} more facts")
        return "\n".join(lines)


def make_fact(name: str, left: Term, right: Term) -> RelationValue:
    """
    Build a relation value, raising the package's own error on bad input.

    Raises:
        InvalidFactError: if the name is blank or a term is not a str/int
    """
    try:
        return RelationValue(name=name, left=left, right=right)
    except PydanticValidationError as e:
        raise InvalidFactError(f"{name}({left},{right})", e.errors()[0]["msg"]) from e
