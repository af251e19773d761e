"""
Fact storage and query answering for abox-logic.

- FactStore: indexed in-memory ABox
- QueryEvaluator: conjunctive pattern queries over any fact source
"""

from abox_logic.store.fact_store import FactStore
from abox_logic.store.query import QueryEvaluator, is_variable

__all__ = [
    "FactStore",
    "QueryEvaluator",
    "is_variable",
]
