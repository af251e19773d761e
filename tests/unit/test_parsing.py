"""
Unit tests for the fact and rule text syntax.
"""

import pytest
from abox_logic.core.exceptions import RuleParseError
from abox_logic.core.types import RelationValue
from abox_logic.symbolic.parsing import (
    parse_conjunction,
    parse_fact,
    parse_facts,
    parse_rule,
    parse_rules,
)
from abox_logic.symbolic.rules import TRANSITIVITY_RULES


class TestParseFact:
    """Tests for parse_fact."""

    def test_simple(self):
        assert parse_fact("subClassOf(A,B)") == RelationValue("subClassOf", "A", "B")

    def test_whitespace(self):
        assert parse_fact("  R ( a , b ) ") == RelationValue("R", "a", "b")

    def test_prefixed_name(self):
        assert parse_fact("rdf:type(x,Person)").name == "rdf:type"

    def test_round_trip(self):
        fact = RelationValue("hasChild", "Anne", "Bob")
        assert parse_fact(str(fact)) == fact

    def test_int_terms_parse_as_strings(self):
        value = RelationValue("R", 0, 1)
        parsed = parse_fact(str(value))
        assert parsed == RelationValue("R", "0", "1")
        assert parsed != value

    @pytest.mark.parametrize("text", ["", "R(a)", "R(a,b,c)", "R a b", "(a,b)", "R(a,b) x"])
    def test_malformed(self, text):
        with pytest.raises(RuleParseError):
            parse_fact(text)


class TestParseRule:
    """Tests for parse_rule and parse_conjunction."""

    def test_conjunction(self):
        assert parse_conjunction("R(a,b) ^ S(b,c)") == [
            RelationValue("R", "a", "b"),
            RelationValue("S", "b", "c"),
        ]

    def test_empty_conjunct(self):
        with pytest.raises(RuleParseError):
            parse_conjunction("R(a,b) ^ ")

    def test_rule(self):
        rule = parse_rule("R(x,y) ^ R(y,z) -> T(x,z)", name="chain", priority=3)
        assert rule.body == (RelationValue("R", "x", "y"), RelationValue("R", "y", "z"))
        assert rule.head == RelationValue("T", "x", "z")
        assert rule.name == "chain"
        assert rule.priority == 3

    def test_rule_round_trip(self):
        for rule in TRANSITIVITY_RULES:
            parsed = parse_rule(str(rule))
            assert parsed.body == rule.body
            assert parsed.head == rule.head

    @pytest.mark.parametrize("text", ["R(x,y)", "R(x,y) -> S(x,y) -> T(x,y)", "-> S(x,y)"])
    def test_malformed_rule(self, text):
        with pytest.raises(RuleParseError):
            parse_rule(text)

    def test_parsed_rule_derives(self):
        rule = parse_rule("R(x,y) -> S(y,x)")
        assert rule.consequences({RelationValue("R", "a", "b")}) == {RelationValue("S", "b", "a")}


class TestParseMany:
    """Tests for multi-line input."""

    def test_parse_facts(self):
        text = """
        # a small ABox
        subClassOf(A,B)
        subClassOf(B,C)  # chain

        type(x,A)
        """
        assert parse_facts(text) == [
            RelationValue("subClassOf", "A", "B"),
            RelationValue("subClassOf", "B", "C"),
            RelationValue("type", "x", "A"),
        ]

    def test_iri_terms_keep_their_fragment(self):
        text = """
        # zoo ABox
        type(http://ex.org/zoo#Simba,http://ex.org/zoo#Lion)  # a lion
        """
        assert parse_facts(text) == [
            RelationValue("type", "http://ex.org/zoo#Simba", "http://ex.org/zoo#Lion"),
        ]

    def test_iri_terms_in_rules(self):
        rules = parse_rules("t: ex:p(x,y) ^ ex:p(y,z) -> http://ex.org/zoo#p(x,z)")
        assert rules[0].name == "t"
        assert rules[0].head == RelationValue("http://ex.org/zoo#p", "x", "z")

    def test_parse_rules(self):
        text = """
        trans: subClassOf(x,y) ^ subClassOf(y,z) -> subClassOf(x,z)
        rdf:type(x,c) ^ subClassOf(c,d) -> rdf:type(x,d)
        """
        rules = parse_rules(text)
        assert [r.name for r in rules] == ["trans", ""]
        assert rules[1].head == RelationValue("rdf:type", "x", "d")
