"""
Unit tests for core types.
"""

import pytest
from abox_logic.core.exceptions import CompositionInconsistency, InvalidFactError
from abox_logic.core.types import (
    Axiom,
    ClosureResult,
    ClosureStatus,
    Fact,
    RelationValue,
    make_fact,
)


class TestRelationValue:
    """Tests for RelationValue class."""

    def test_positional_creation(self):
        fact = RelationValue("subClassOf", "Cat", "Mammal")
        assert fact.name == "subClassOf"
        assert fact.left == "Cat"
        assert fact.right == "Mammal"

    def test_keyword_creation(self):
        fact = RelationValue(name="R", left="a", right="b")
        assert fact.to_tuple() == ("R", "a", "b")

    def test_string_form(self):
        assert str(RelationValue("subClassOf", "A", "B")) == "subClassOf(A,B)"
        assert str(RelationValue("R", 0, 1)) == "R(0,1)"

    def test_structural_equality(self):
        f1 = RelationValue("R", "a", "b")
        f2 = RelationValue("R", "a", "b")
        f3 = RelationValue("R", "b", "a")

        assert f1 == f2
        assert f1 != f3
        assert len({f1, f2, f3}) == 2

    def test_int_and_str_terms_differ(self):
        assert RelationValue("R", 0, 1) != RelationValue("R", "0", "1")

    def test_immutable(self):
        fact = RelationValue("R", "a", "b")
        with pytest.raises(Exception):
            fact.left = "c"

    def test_aliases(self):
        assert Axiom is RelationValue
        assert Fact is RelationValue

    def test_to_dict(self):
        fact = RelationValue("R", "a", "b")
        assert fact.to_dict() == {"name": "R", "left": "a", "right": "b"}


class TestMakeFact:
    """Tests for the make_fact constructor."""

    def test_make_fact(self):
        assert make_fact("R", "a", "b") == RelationValue("R", "a", "b")

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidFactError):
            make_fact("  ", "a", "b")

    def test_bad_term_rejected(self):
        with pytest.raises(InvalidFactError):
            make_fact("R", ["a"], "b")


class TestCanonicalizeValue:
    """Tests for RelationValue.canonicalize."""

    def test_fresh_mapping(self):
        value, mapping = RelationValue("hasChild", "Dad", "Kid").canonicalize()
        assert value == RelationValue("hasChild", 0, 1)
        assert mapping == {"Dad": 0, "Kid": 1}

    def test_existing_mapping_is_extended(self):
        start = {"Dad": 0, "Kid": 1}
        value, mapping = RelationValue("hasBrother", "Dad", "Uncle").canonicalize(start)

        assert value == RelationValue("hasBrother", 0, 2)
        assert mapping == {"Dad": 0, "Kid": 1, "Uncle": 2}
        # Input mapping untouched
        assert start == {"Dad": 0, "Kid": 1}

    def test_reflexive_value(self):
        value, mapping = RelationValue("R", "a", "a").canonicalize()
        assert value == RelationValue("R", 0, 0)
        assert mapping == {"a": 0}


class TestReattribute:
    """Tests for RelationValue.reattribute and instantiate."""

    def test_inverse_lookup(self):
        canonical = RelationValue("hasUncle", 1, 2)
        restored = canonical.reattribute({"Dad": 0, "Kid": 1, "Uncle": 2})
        assert restored == RelationValue("hasUncle", "Kid", "Uncle")

    def test_missing_index(self):
        with pytest.raises(CompositionInconsistency):
            RelationValue("R", 0, 5).reattribute({"a": 0, "b": 1})

    def test_instantiate(self):
        value = RelationValue("T", 0, 2).instantiate({0: "a", 1: "b", 2: "a"})
        assert value == RelationValue("T", "a", "a")

    def test_round_trip_through_canonical_form(self):
        original = RelationValue("R", "x", "y")
        canonical, mapping = original.canonicalize()
        assert canonical.reattribute(mapping) == original


class TestClosureResult:
    """Tests for ClosureResult class."""

    def test_defaults(self):
        result = ClosureResult()
        assert result.size == 0
        assert result.reached_fixpoint

    def test_round_limit(self):
        result = ClosureResult(status=ClosureStatus.ROUND_LIMIT)
        assert not result.reached_fixpoint

    def test_to_text_sorted(self):
        result = ClosureResult(
            facts=frozenset({RelationValue("R", "b", "c"), RelationValue("R", "a", "b")})
        )
        assert result.to_text() == "R(a,b)\nR(b,c)"

    def test_to_text_truncates(self):
        facts = frozenset(RelationValue("R", f"a{i}", "b") for i in range(5))
        text = ClosureResult(facts=facts).to_text(max_facts=2)
        assert "... and 3 more facts" in text
