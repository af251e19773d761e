"""
Symbolic rule representation and forward chaining.

A rule is a conjunction of relation patterns implying one relation
pattern, e.g.

    subClassOf(x, y) ^ subClassOf(y, z) -> subClassOf(x, z)

Every term of a rule is a variable. Matching works on canonical forms:
a conjunction of facts matches a rule body when it can be laid over the
body position by position (see ``MatchMode``).
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from dataclasses import dataclass
from itertools import product
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from abox_logic.core.config import Config, get_config
from abox_logic.core.exceptions import (
    CompositionInconsistency,
    PreconditionViolation,
    RoundLimitExceeded,
    RuleConstructionError,
    UnknownRuleError,
)
from abox_logic.core.types import (
    ClosureResult,
    ClosureStatus,
    MatchMode,
    RelationValue,
    Term,
)
from abox_logic.symbolic.canonical import (
    CanonicalForm,
    canonicalize,
    conjunction_to_string,
    difference,
    merge_mappings,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """
    A logical rule with a body of patterns and a single head.

    A rule without a head only serves to canonicalize its body; asking it
    for consequences is an error.

    Example:
        hasChild(x, y) ^ hasBrother(x, z) -> hasUncle(y, z)
    """

    body: Tuple[RelationValue, ...]
    head: Optional[RelationValue] = None
    name: str = ""
    priority: int = 0
    description: str = ""
    match_mode: Optional[MatchMode] = None  # None: use the configured default

    def __post_init__(self) -> None:
        body = tuple(self.body)
        object.__setattr__(self, "body", body)

        if not body:
            raise RuleConstructionError("body must contain at least one pattern", self.name)
        for value in body:
            if not isinstance(value, RelationValue):
                raise RuleConstructionError(f"body pattern {value!r} is not a relation value", self.name)
        if self.head is not None and not isinstance(self.head, RelationValue):
            raise RuleConstructionError(f"head {self.head!r} is not a relation value", self.name)

        if self.head is not None:
            body_terms = {term for value in body for term in value.terms}
            unbound = [term for term in self.head.terms if term not in body_terms]
            if unbound:
                logger.warning(
                    "Rule %s: head terms %s do not occur in the body, it will never fire",
                    self.label,
                    unbound,
                )

    @property
    def arity(self) -> int:
        """Number of body patterns."""
        return len(self.body)

    @property
    def label(self) -> str:
        """The rule's name, or its text when unnamed."""
        return self.name or str(self)

    def body_to_string(self) -> str:
        return conjunction_to_string(self.body)

    def __str__(self) -> str:
        if self.head is None:
            return self.body_to_string()
        return f"{self.body_to_string()} -> {self.head}"

    def canonical_form(self) -> CanonicalForm:
        """Canonicalize the body, then the head."""
        return canonicalize(self.body, self.head)

    def match(
        self,
        conjunction: Sequence[RelationValue],
        match_mode: MatchMode | None = None,
    ) -> dict[Term, Term] | None:
        """
        Match a conjunction of facts against the body.

        Returns:
            Rule term -> fact term bindings, or None if it does not match
        """
        target = self.canonical_form()
        mode = self._resolve_mode(match_mode)
        try:
            bindings = _compose(tuple(conjunction), target, mode)
        except CompositionInconsistency:
            return None
        if bindings is None:
            return None
        return {term: bindings[index] for term, index in target.mapping.items() if index in bindings}

    def consequences(
        self,
        facts: Iterable[RelationValue],
        max_rounds: int | None = None,
        match_mode: MatchMode | None = None,
    ) -> frozenset[RelationValue]:
        """
        Derive every fact this rule implies from ``facts``.

        Args:
            facts: Known facts; never modified
            max_rounds: Round limit, defaults to ``engine.max_rounds``
            match_mode: Overrides the rule's and the configured mode

        Returns:
            Only the derived facts that are not in ``facts``

        Raises:
            PreconditionViolation: if the rule has no head
            RoundLimitExceeded: if no fixpoint is reached within the limit;
                the partial result is attached to the exception
        """
        result = self.closure(facts, max_rounds=max_rounds, match_mode=match_mode)
        if not result.reached_fixpoint:
            raise RoundLimitExceeded(result.rounds, result.facts)
        return result.facts

    def closure(
        self,
        facts: Iterable[RelationValue],
        max_rounds: int | None = None,
        match_mode: MatchMode | None = None,
        config: Config | None = None,
    ) -> ClosureResult:
        """
        Like :meth:`consequences`, but report a round limit in the result.
        """
        if self.head is None:
            raise PreconditionViolation("consequences", f"rule '{self.label}' has no head")

        config = config or get_config()
        if max_rounds is None:
            max_rounds = config.engine.max_rounds
        mode = self._resolve_mode(match_mode, config)

        start = time.time()
        original = frozenset(facts)
        known, rounds, done = self._saturate(original, max_rounds, mode)
        derived = frozenset(difference(known, original))
        elapsed_ms = (time.time() - start) * 1000

        if not done:
            logger.warning(
                "Rule %s: no fixpoint after %d rounds, %d facts derived so far",
                self.label,
                rounds,
                len(derived),
            )
        return ClosureResult(
            facts=derived,
            rounds=rounds,
            status=ClosureStatus.FIXPOINT if done else ClosureStatus.ROUND_LIMIT,
            per_rule={self.label: len(derived)},
            elapsed_ms=elapsed_ms,
        )

    def _resolve_mode(self, match_mode: MatchMode | None, config: Config | None = None) -> MatchMode:
        if match_mode is not None:
            return match_mode
        if self.match_mode is not None:
            return self.match_mode
        return (config or get_config()).engine.match_mode

    def _saturate(
        self,
        original: frozenset[RelationValue],
        max_rounds: int | None,
        mode: MatchMode,
    ) -> tuple[set[RelationValue], int, bool]:
        """Run derivation rounds until one adds nothing or the limit is hit."""
        target = self.canonical_form()
        known = set(original)
        rounds = 0

        while max_rounds is None or rounds < max_rounds:
            rounds += 1
            new_this_round: set[RelationValue] = set()
            scanned = discarded = 0

            for candidate in _candidates(known, target):
                scanned += 1
                try:
                    derived = _derive(candidate, target, mode)
                except CompositionInconsistency:
                    discarded += 1
                    continue
                if derived is not None and derived not in known:
                    new_this_round.add(derived)

            logger.debug(
                "Rule %s round %d: %d candidates, %d discarded, %d new facts",
                self.label,
                rounds,
                scanned,
                discarded,
                len(new_this_round),
            )
            if not new_this_round:
                return known, rounds, True
            known |= new_this_round

        return known, rounds, False


def _candidates(
    known: Iterable[RelationValue], target: CanonicalForm
) -> Iterator[Tuple[RelationValue, ...]]:
    """
    Every ordered tuple of known facts, with repetition, that could match.

    Tuples whose relation names differ from the body at some position can
    never match in any mode, so each position only draws from facts with
    the right name.
    """
    by_name: dict[str, list[RelationValue]] = defaultdict(list)
    for fact in known:
        by_name[fact.name].append(fact)
    pools = [by_name.get(name, []) for name in target.names]
    return product(*pools)


def _compose(
    candidate: Tuple[RelationValue, ...],
    target: CanonicalForm,
    mode: MatchMode,
) -> dict[int, Term] | None:
    """Bindings of the target's indices, or None when the shapes differ."""
    form = canonicalize(candidate)
    if mode == MatchMode.EXACT and form.shape != target.shape:
        return None
    return merge_mappings(form, target, injective=mode == MatchMode.EXACT)


def _derive(
    candidate: Tuple[RelationValue, ...],
    target: CanonicalForm,
    mode: MatchMode,
) -> RelationValue | None:
    """Instantiate the target's head for one candidate conjunction."""
    bindings = _compose(candidate, target, mode)
    if bindings is None or target.head is None:
        return None
    return target.head.instantiate(bindings)


def make_rule(
    body: Sequence[RelationValue],
    head: RelationValue | None,
    name: str = "",
    **kwargs: object,
) -> Rule:
    """Build a rule from a body and a head."""
    return Rule(body=tuple(body), head=head, name=name, **kwargs)  # type: ignore[arg-type]


class RuleEngine:
    """
    Forward-chaining engine over a set of rules.

    Each pass saturates every rule in priority order against the facts
    known so far; passes repeat until none of the rules derives anything.

    Example:
        >>> engine = RuleEngine()
        >>> engine.add_rule(make_rule(
        ...     [RelationValue("hasParent", "x", "y"), RelationValue("hasParent", "y", "z")],
        ...     RelationValue("hasGrandparent", "x", "z"),
        ...     name="grandparent",
        ... ))
        >>> facts = [
        ...     RelationValue("hasParent", "Alice", "Bob"),
        ...     RelationValue("hasParent", "Bob", "Charlie"),
        ... ]
        >>> engine.forward_chain(facts).to_text()
        'hasGrandparent(Alice,Charlie)'
    """

    def __init__(self, rules: Iterable[Rule] | None = None, config: Config | None = None) -> None:
        self.rules: list[Rule] = []
        self._config = config
        if rules:
            self.add_rules(rules)

    @property
    def config(self) -> Config:
        return self._config or get_config()

    def add_rule(self, rule: Rule) -> None:
        """Add a rule to the engine."""
        if rule.head is None:
            raise PreconditionViolation("add_rule", f"rule '{rule.label}' has no head")
        self.rules.append(rule)
        # Keep sorted by priority
        self.rules.sort(key=lambda r: -r.priority)

    def add_rules(self, rules: Iterable[Rule]) -> None:
        """Add multiple rules."""
        for rule in rules:
            self.add_rule(rule)

    def get_rule(self, name: str) -> Rule:
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise UnknownRuleError(name)

    def remove_rule(self, name: str) -> Rule:
        """Remove a rule by name and return it."""
        rule = self.get_rule(name)
        self.rules.remove(rule)
        return rule

    def clear_rules(self) -> None:
        """Remove all rules."""
        self.rules.clear()

    def apply_rule(
        self,
        rule: Rule,
        facts: Iterable[RelationValue],
    ) -> frozenset[RelationValue]:
        """Saturate a single rule and return the new facts."""
        return rule.consequences(facts, max_rounds=self.config.engine.max_rounds)

    def forward_chain(
        self,
        facts: Iterable[RelationValue],
        max_rounds: int | None = None,
    ) -> ClosureResult:
        """
        Perform forward chaining to derive all possible facts.

        Args:
            facts: Starting facts
            max_rounds: Maximum passes over the rule set, also used as the
                per-rule round limit

        Returns:
            ClosureResult with the inferred facts (not including the input)
        """
        if max_rounds is None:
            max_rounds = self.config.engine.max_rounds

        start = time.time()
        original = frozenset(facts)
        known = set(original)
        per_rule = {rule.label: 0 for rule in self.rules}
        rounds = 0
        status = ClosureStatus.FIXPOINT

        while True:
            if max_rounds is not None and rounds >= max_rounds:
                status = ClosureStatus.ROUND_LIMIT
                break
            rounds += 1
            added = 0

            for rule in self.rules:
                result = rule.closure(known, max_rounds=max_rounds, config=self.config)
                if not result.reached_fixpoint:
                    status = ClosureStatus.ROUND_LIMIT
                known |= result.facts
                per_rule[rule.label] += result.size
                added += result.size

            logger.debug("Pass %d: %d new facts", rounds, added)
            if not added or status == ClosureStatus.ROUND_LIMIT:
                break

        derived = frozenset(difference(known, original))
        elapsed_ms = (time.time() - start) * 1000

        if status == ClosureStatus.FIXPOINT:
            logger.info(
                "Fixpoint after %d passes over %d rules: %d new facts",
                rounds,
                len(self.rules),
                len(derived),
            )
        else:
            logger.warning("Stopped at round limit %s with %d new facts", max_rounds, len(derived))

        return ClosureResult(
            facts=derived,
            rounds=rounds,
            status=status,
            per_rule=per_rule,
            elapsed_ms=elapsed_ms,
        )


def _pattern(name: str, left: str, right: str) -> RelationValue:
    return RelationValue(name, left, right)


# Predefined common rules
TRANSITIVITY_RULES = [
    Rule(
        body=(_pattern("subClassOf", "x", "y"), _pattern("subClassOf", "y", "z")),
        head=_pattern("subClassOf", "x", "z"),
        name="subclass_transitivity",
        description="Subclass relation is transitive",
    ),
    Rule(
        body=(_pattern("subPropertyOf", "x", "y"), _pattern("subPropertyOf", "y", "z")),
        head=_pattern("subPropertyOf", "x", "z"),
        name="subproperty_transitivity",
        description="Subproperty relation is transitive",
    ),
    Rule(
        body=(_pattern("partOf", "x", "y"), _pattern("partOf", "y", "z")),
        head=_pattern("partOf", "x", "z"),
        name="part_of_transitivity",
        description="Part-of relation is transitive",
    ),
    Rule(
        body=(_pattern("locatedIn", "x", "y"), _pattern("locatedIn", "y", "z")),
        head=_pattern("locatedIn", "x", "z"),
        name="located_in_transitivity",
        description="Located-in relation is transitive",
    ),
]

INHERITANCE_RULES = [
    Rule(
        body=(_pattern("type", "x", "c"), _pattern("subClassOf", "c", "d")),
        head=_pattern("type", "x", "d"),
        name="type_inheritance",
        description="Instances belong to every superclass of their class",
    ),
]

INVERSE_RULES = [
    Rule(
        body=(_pattern("hasChild", "x", "y"),),
        head=_pattern("hasParent", "y", "x"),
        name="child_parent_inverse",
        description="hasChild and hasParent are inverse relations",
    ),
    Rule(
        body=(_pattern("hasParent", "x", "y"),),
        head=_pattern("hasChild", "y", "x"),
        name="parent_child_inverse",
        description="hasParent and hasChild are inverse relations",
    ),
]

SYMMETRY_RULES = [
    Rule(
        body=(_pattern("sameAs", "x", "y"),),
        head=_pattern("sameAs", "y", "x"),
        name="same_as_symmetric",
        description="sameAs is symmetric",
    ),
    Rule(
        body=(_pattern("hasSpouse", "x", "y"),),
        head=_pattern("hasSpouse", "y", "x"),
        name="spouse_symmetric",
        description="Spouse relation is symmetric",
    ),
]
