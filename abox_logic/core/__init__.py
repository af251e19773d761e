"""
Core types, interfaces, configuration and exceptions for abox-logic.
"""

from abox_logic.core.config import (
    Config,
    EngineConfig,
    LoggingConfig,
    get_config,
    set_config,
)
from abox_logic.core.exceptions import (
    AboxLogicError,
    CompositionInconsistency,
    ConfigurationError,
    InvalidConfigError,
    InvalidFactError,
    PreconditionViolation,
    RoundLimitExceeded,
    RuleConstructionError,
    RuleError,
    RuleParseError,
    StoreError,
    UnknownRuleError,
    ValidationError,
)
from abox_logic.core.interfaces import FactSource, Reasoner
from abox_logic.core.types import (
    Axiom,
    CanonicalMapping,
    ClosureResult,
    ClosureStatus,
    Fact,
    MatchMode,
    RelationValue,
    Term,
    make_fact,
)

__all__ = [
    # Types
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
    "EngineConfig",
    "LoggingConfig",
    "get_config",
    "set_config",
    # Exceptions
    "AboxLogicError",
    "CompositionInconsistency",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidFactError",
    "PreconditionViolation",
    "RoundLimitExceeded",
    "RuleConstructionError",
    "RuleError",
    "RuleParseError",
    "StoreError",
    "UnknownRuleError",
    "ValidationError",
]
