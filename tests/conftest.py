"""
Pytest configuration and shared fixtures.
"""

import pytest
from abox_logic import (
    FactStore,
    RelationValue,
    Rule,
    set_config,
)


@pytest.fixture(autouse=True)
def reset_config():
    """Make every test start from the environment configuration."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def transitive_rule():
    """subClassOf(x,y) ^ subClassOf(y,z) -> subClassOf(x,z)"""
    return Rule(
        body=(
            RelationValue("subClassOf", "x", "y"),
            RelationValue("subClassOf", "y", "z"),
        ),
        head=RelationValue("subClassOf", "x", "z"),
        name="subclass_transitivity",
    )


@pytest.fixture
def chain_facts():
    """A three-link subClassOf chain A < B < C < D."""
    return {
        RelationValue("subClassOf", "A", "B"),
        RelationValue("subClassOf", "B", "C"),
        RelationValue("subClassOf", "C", "D"),
    }


@pytest.fixture
def family_store():
    """Create a small family ABox."""
    return FactStore.from_tuples(
        [
            ("hasChild", "Anne", "Bob"),
            ("hasChild", "Bob", "Carla"),
            ("hasChild", "Bob", "Dan"),
            ("hasSpouse", "Anne", "Ed"),
            ("type", "Anne", "Woman"),
            ("type", "Bob", "Man"),
            ("subClassOf", "Woman", "Person"),
            ("subClassOf", "Man", "Person"),
        ],
        name="Family",
    )


# Markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Fast unit tests (no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "slow: Slow tests"
    )
