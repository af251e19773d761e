"""
Symbolic reasoning modules for abox-logic.

Provides tools for:
- Canonicalizing conjunctions of relation values
- Rule representation and fixpoint computation
- Multi-rule forward chaining
- Reading facts and rules from text
"""

from abox_logic.symbolic.canonical import (
    CanonicalForm,
    canonicalize,
    difference,
    merge_dedup,
    merge_mappings,
    pattern_shape,
)
from abox_logic.symbolic.parsing import (
    parse_conjunction,
    parse_fact,
    parse_facts,
    parse_rule,
    parse_rules,
)
from abox_logic.symbolic.rules import (
    INHERITANCE_RULES,
    INVERSE_RULES,
    SYMMETRY_RULES,
    TRANSITIVITY_RULES,
    Rule,
    RuleEngine,
    make_rule,
)

__all__ = [
    # Canonicalization
    "CanonicalForm",
    "canonicalize",
    "pattern_shape",
    "merge_mappings",
    "merge_dedup",
    "difference",
    # Rules
    "Rule",
    "RuleEngine",
    "make_rule",
    # Parsing
    "parse_fact",
    "parse_facts",
    "parse_conjunction",
    "parse_rule",
    "parse_rules",
    # Predefined rules
    "TRANSITIVITY_RULES",
    "INHERITANCE_RULES",
    "INVERSE_RULES",
    "SYMMETRY_RULES",
]
