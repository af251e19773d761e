"""
abox-logic: rule-based deductive inference over binary-relation facts

Derives every fact implied by a set of rules from an ABox and answers
conjunctive queries over the result.

Example:
    >>> from abox_logic import FactStore, RelationValue, parse_rule
    >>>
    >>> store = FactStore([
    ...     RelationValue("subClassOf", "Cat", "Mammal"),
    ...     RelationValue("subClassOf", "Mammal", "Animal"),
    ... ])
    >>> rule = parse_rule("subClassOf(x,y) ^ subClassOf(y,z) -> subClassOf(x,z)")
    >>>
    >>> sorted(str(f) for f in rule.consequences(store.snapshot()))
    ['subClassOf(Cat,Animal)']
"""

__version__ = "0.1.0"

# Core types
from abox_logic.core import (
    # Data types
    Axiom,
    CanonicalMapping,
    ClosureResult,
    ClosureStatus,
    Fact,
    MatchMode,
    RelationValue,
    Term,
    make_fact,
    # Interfaces
    FactSource,
    Reasoner,
    # Configuration
    Config,
    get_config,
    set_config,
    # Exceptions
    AboxLogicError,
    CompositionInconsistency,
    InvalidConfigError,
    InvalidFactError,
    PreconditionViolation,
    RoundLimitExceeded,
    RuleConstructionError,
    RuleError,
    RuleParseError,
)

# Symbolic modules
from abox_logic.symbolic import (
    INHERITANCE_RULES,
    INVERSE_RULES,
    SYMMETRY_RULES,
    TRANSITIVITY_RULES,
    CanonicalForm,
    Rule,
    RuleEngine,
    canonicalize,
    difference,
    make_rule,
    merge_dedup,
    merge_mappings,
    parse_fact,
    parse_facts,
    parse_rule,
    parse_rules,
    pattern_shape,
)

# Storage and queries
from abox_logic.store import FactStore, QueryEvaluator

# Utilities
from abox_logic.utils import configure_logging

__all__ = [
    # Version
    "__version__",
    # Core types
    "Axiom",
    "CanonicalMapping",
    "ClosureResult",
    "ClosureStatus",
    "Fact",
    "MatchMode",
    "RelationValue",
    "Term",
    "make_fact",
    # Interfaces
    "FactSource",
    "Reasoner",
    # Configuration
    "Config",
    "get_config",
    "set_config",
    # Exceptions
    "AboxLogicError",
    "CompositionInconsistency",
    "InvalidConfigError",
    "InvalidFactError",
    "PreconditionViolation",
    "RoundLimitExceeded",
    "RuleConstructionError",
    "RuleError",
    "RuleParseError",
    # Symbolic
    "CanonicalForm",
    "Rule",
    "RuleEngine",
    "canonicalize",
    "difference",
    "make_rule",
    "merge_dedup",
    "merge_mappings",
    "parse_fact",
    "parse_facts",
    "parse_rule",
    "parse_rules",
    "pattern_shape",
    "TRANSITIVITY_RULES",
    "INHERITANCE_RULES",
    "INVERSE_RULES",
    "SYMMETRY_RULES",
    # Storage
    "FactStore",
    "QueryEvaluator",
    # Utilities
    "configure_logging",
]
