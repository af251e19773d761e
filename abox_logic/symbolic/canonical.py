"""
Canonicalization of relational conjunctions.

Renaming every term of a conjunction to the index of its first appearance
gives a form that only depends on relation names and on which positions
share a term. Two conjunctions with the same canonical shape are equal up
to renaming, e.g. both

    hasChild(Dad, Kid) ^ hasBrother(Dad, Uncle)
    hasChild(x, y) ^ hasBrother(x, z)

canonicalize to ``hasChild(0,1) ^ hasBrother(0,2)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from abox_logic.core.exceptions import CompositionInconsistency
from abox_logic.core.types import CanonicalMapping, RelationValue, Term

CONJUNCTION = " ^ "


def conjunction_to_string(values: Iterable[RelationValue]) -> str:
    """Render a conjunction as ``a ^ b ^ c``."""
    return CONJUNCTION.join(str(v) for v in values)


@dataclass(frozen=True)
class CanonicalForm:
    """
    A canonicalized conjunction and the mapping that produced it.

    Attributes:
        mapping: Original term -> canonical index
        body: Canonical body values
        head: Canonical head, if one was given
    """

    mapping: Mapping[Term, int]
    body: Tuple[RelationValue, ...]
    head: Optional[RelationValue] = None

    @property
    def shape(self) -> str:
        """The pattern shape, e.g. ``subClassOf(0,1) ^ subClassOf(1,2)``."""
        return conjunction_to_string(self.body)

    @property
    def names(self) -> Tuple[str, ...]:
        """Relation names of the body, in order."""
        return tuple(v.name for v in self.body)


def canonicalize(
    body: Sequence[RelationValue],
    head: RelationValue | None = None,
    mapping: Mapping[Term, int] | None = None,
) -> CanonicalForm:
    """
    Canonicalize a body, and optionally a head, in first-appearance order.

    The body is scanned in order, then the head, so head-only terms receive
    the highest indices.

    Args:
        body: Conjunction to canonicalize
        head: Optional consequent scanned after the body
        mapping: Pre-assigned indices to start from

    Returns:
        CanonicalForm with the final mapping
    """
    current: CanonicalMapping = dict(mapping or {})
    canonical_body = []
    for value in body:
        canonical, current = value.canonicalize(current)
        canonical_body.append(canonical)

    canonical_head = None
    if head is not None:
        canonical_head, current = head.canonicalize(current)

    return CanonicalForm(mapping=current, body=tuple(canonical_body), head=canonical_head)


def pattern_shape(body: Sequence[RelationValue]) -> str:
    """Return only the canonical shape string of a conjunction."""
    return canonicalize(body).shape


def merge_mappings(
    candidate: CanonicalForm,
    rule: CanonicalForm,
    injective: bool = False,
) -> dict[int, Term]:
    """
    Compose a candidate's mapping with a rule's canonical body.

    Walks both canonical bodies position by position and binds each rule
    index to the concrete term sitting at the same place in the candidate.

    Args:
        candidate: Canonical form of a conjunction of concrete facts
        rule: Canonical form of the rule being matched
        injective: Also reject two rule indices bound to one term

    Returns:
        Rule canonical index -> concrete term

    Raises:
        CompositionInconsistency: if the bodies differ in length or relation
            names, or an index would be bound to two different terms
    """
    if len(candidate.body) != len(rule.body):
        raise CompositionInconsistency(
            "conjunctions differ in length",
            {"candidate": candidate.shape, "rule": rule.shape},
        )

    concrete = {index: term for term, index in candidate.mapping.items()}
    bindings: dict[int, Term] = {}

    for rule_value, candidate_value in zip(rule.body, candidate.body):
        if rule_value.name != candidate_value.name:
            raise CompositionInconsistency(
                f"relation {candidate_value.name} does not match {rule_value.name}",
                {"candidate": candidate.shape, "rule": rule.shape},
            )
        for rule_index, candidate_index in zip(rule_value.terms, candidate_value.terms):
            term = concrete[candidate_index]
            bound = bindings.setdefault(rule_index, term)  # type: ignore[arg-type]
            if bound != term:
                raise CompositionInconsistency(
                    f"index {rule_index} bound to both {bound!r} and {term!r}",
                    {"candidate": candidate.shape, "rule": rule.shape},
                )

    if injective and len(set(bindings.values())) != len(bindings):
        raise CompositionInconsistency(
            "distinct rule terms collapse onto one term",
            {"candidate": candidate.shape, "rule": rule.shape},
        )
    return bindings


# Set helpers over relation values


def merge_dedup(
    first: Iterable[RelationValue], second: Iterable[RelationValue]
) -> list[RelationValue]:
    """Union of two collections without duplicates, first-seen order kept."""
    seen: set[RelationValue] = set()
    merged: list[RelationValue] = []
    for value in (*first, *second):
        if value not in seen:
            seen.add(value)
            merged.append(value)
    return merged


def difference(
    first: Iterable[RelationValue], second: Iterable[RelationValue]
) -> list[RelationValue]:
    """Elements of ``first`` absent from ``second``, order kept."""
    excluded = set(second)
    return [value for value in first if value not in excluded]
