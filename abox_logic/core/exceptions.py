"""
Custom exceptions for abox-logic.

Provides a hierarchy of exceptions for the rule engine, the fact store and
configuration, so callers can tell a malformed rule from a bounded-out
computation.
"""

from __future__ import annotations

from typing import Any


class AboxLogicError(Exception):
    """Base exception for all abox-logic errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# Rule Exceptions
class RuleError(AboxLogicError):
    """Base exception for rule-related errors."""

    pass


class RuleConstructionError(RuleError):
    """Raised when a rule is malformed, e.g. its body is empty."""

    def __init__(self, reason: str, rule_name: str = "") -> None:
        message = "Invalid rule"
        if rule_name:
            message += f" '{rule_name}'"
        message += f": {reason}"
        super().__init__(message, {"rule_name": rule_name, "reason": reason})


class PreconditionViolation(RuleError):
    """Raised when an operation is called on a rule that cannot support it."""

    def __init__(self, operation: str, reason: str) -> None:
        message = f"Cannot call {operation}: {reason}"
        super().__init__(message, {"operation": operation, "reason": reason})


class CompositionInconsistency(RuleError):
    """
    Raised when a matched conjunction does not yield a usable substitution.

    The engine discards the offending candidate and carries on; this never
    escapes a consequences call.
    """

    pass


class RoundLimitExceeded(RuleError):
    """Raised when a fixpoint is not reached within the allowed rounds."""

    def __init__(self, rounds: int, partial: frozenset[Any]) -> None:
        message = f"No fixpoint after {rounds} rounds ({len(partial)} facts derived so far)"
        super().__init__(message, {"rounds": rounds, "derived": len(partial)})
        self.rounds = rounds
        self.partial = partial


class RuleParseError(RuleError):
    """Raised when a fact or rule cannot be parsed."""

    def __init__(self, text: str, reason: str = "") -> None:
        message = "Failed to parse"
        if reason:
            message += f": {reason}"
        super().__init__(message, {"text": text[:200], "reason": reason})


# Validation Exceptions
class ValidationError(AboxLogicError):
    """Base exception for validation errors."""

    pass


class InvalidFactError(ValidationError):
    """Raised when a relation value cannot be built."""

    def __init__(self, fact_str: str, reason: str = "") -> None:
        message = f"Invalid fact: {fact_str}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"fact": fact_str, "reason": reason})


# Store Exceptions
class StoreError(AboxLogicError):
    """Base exception for fact store errors."""

    pass


class UnknownRuleError(StoreError):
    """Raised when a rule name is not registered."""

    def __init__(self, rule_name: str) -> None:
        super().__init__(f"Rule '{rule_name}' not found", {"rule_name": rule_name})
        self.rule_name = rule_name


# Configuration Exceptions
class ConfigurationError(AboxLogicError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration value is invalid."""

    def __init__(self, config_key: str, value: Any, reason: str = "") -> None:
        message = f"Invalid configuration for '{config_key}': {value}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"config_key": config_key, "value": value, "reason": reason})
