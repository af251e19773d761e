"""
Utility modules for abox-logic.
"""

from abox_logic.utils.logging_setup import JsonFormatter, configure_logging

__all__ = [
    "JsonFormatter",
    "configure_logging",
]
