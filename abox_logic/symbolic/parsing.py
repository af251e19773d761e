"""
Text syntax for facts and rules.

Facts are written ``name(left,right)``; rules join body facts with ``^``
and put the head after ``->``:

    subClassOf(x,y) ^ subClassOf(y,z) -> subClassOf(x,z)

This is the same form ``str()`` produces, so printed facts and rules can
be read back.
"""

from __future__ import annotations

import re
from typing import Iterable

from abox_logic.core.exceptions import InvalidFactError, RuleParseError
from abox_logic.core.types import RelationValue, make_fact
from abox_logic.symbolic.rules import Rule

_FACT_RE = re.compile(r"^\s*([^\s(),^]+)\s*\(\s*([^\s(),]+)\s*,\s*([^\s(),]+)\s*\)\s*$")
_IMPLIES = "->"
_AND = "^"
# "#" opens a comment only at line start or after whitespace (IRIs keep theirs)
_COMMENT_RE = re.compile(r"(?:^|\s)#")
_NAMED_RE = re.compile(r"^([\w.-]+)\s*:\s+(.*)$")


def parse_fact(text: str) -> RelationValue:
    """
    Parse ``name(left,right)`` into a relation value.

    Terms always come back as strings, so ``str()`` of a value with int
    (canonical) terms does not parse back to an equal value.

    Raises:
        RuleParseError: if the text is not a single well-formed fact
    """
    match = _FACT_RE.match(text)
    if match is None:
        raise RuleParseError(text, "expected name(left,right)")
    name, left, right = match.groups()
    try:
        return make_fact(name, left, right)
    except InvalidFactError as e:
        raise RuleParseError(text, e.message) from e


def parse_conjunction(text: str) -> list[RelationValue]:
    """Parse ``a ^ b ^ c`` into a list of relation values."""
    parts = text.split(_AND)
    if any(not part.strip() for part in parts):
        raise RuleParseError(text, "empty conjunct")
    return [parse_fact(part) for part in parts]


def parse_rule(text: str, name: str = "", **kwargs: object) -> Rule:
    """
    Parse ``body -> head`` into a rule.

    Args:
        text: Rule text
        name: Optional rule name
        **kwargs: Extra Rule fields (priority, description, match_mode)

    Raises:
        RuleParseError: on malformed text
    """
    sides = text.split(_IMPLIES)
    if len(sides) != 2:
        raise RuleParseError(text, f"expected exactly one '{_IMPLIES}'")
    body_text, head_text = sides
    body = parse_conjunction(body_text)
    head = parse_fact(head_text)
    return Rule(body=tuple(body), head=head, name=name, **kwargs)  # type: ignore[arg-type]


def _content_lines(text: str) -> Iterable[str]:
    for line in text.splitlines():
        line = _COMMENT_RE.split(line, maxsplit=1)[0].strip()
        if line:
            yield line


def parse_facts(text: str) -> list[RelationValue]:
    """Parse one fact per line; blank lines and ``#`` comments are skipped."""
    return [parse_fact(line) for line in _content_lines(text)]


def parse_rules(text: str) -> list[Rule]:
    """
    Parse one rule per line.

    A line may start with ``name: `` (colon then whitespace) to name the rule.
    """
    rules = []
    for line in _content_lines(text):
        name = ""
        named = _NAMED_RE.match(line)
        if named:
            name, line = named.groups()
        rules.append(parse_rule(line, name=name))
    return rules
