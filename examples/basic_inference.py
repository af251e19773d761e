#!/usr/bin/env python3
"""
Basic Inference Example

Demonstrates how to saturate a small ABox with abox-logic and query the result.
"""

from abox_logic import (
    INHERITANCE_RULES,
    TRANSITIVITY_RULES,
    FactStore,
    QueryEvaluator,
    RelationValue,
    RuleEngine,
    configure_logging,
    parse_facts,
    parse_rule,
)


def main():
    configure_logging()

    # A small zoo ABox
    store = FactStore(name="Zoo ABox")
    store.add_all(parse_facts("""
        subClassOf(Lion,BigCat)
        subClassOf(BigCat,Mammal)
        subClassOf(Mammal,Animal)
        type(Simba,Lion)
        type(Nala,Lion)
        livesIn(Simba,Savanna)
        partOf(Savanna,Africa)
    """))

    print(store.summary())
    print()

    # A single rule, applied on its own
    print("=" * 50)
    print("Single rule")
    print("=" * 50)
    rule = parse_rule("livesIn(x,y) ^ partOf(y,z) -> livesIn(x,z)", name="lives_in_region")
    print(f"Rule: {rule}")
    for fact in sorted(rule.consequences(store.snapshot()), key=RelationValue.sort_key):
        print(f"  {fact}")
    print()

    # Full saturation with the predefined rules plus our own
    print("=" * 50)
    print("Saturation")
    print("=" * 50)
    engine = RuleEngine(TRANSITIVITY_RULES + INHERITANCE_RULES)
    engine.add_rule(rule)
    result = store.saturate(engine)
    print(f"Status: {result.status.value} after {result.rounds} passes ({result.elapsed_ms:.1f} ms)")
    print(result.to_text())
    print()

    # Queries over the closure
    print("=" * 50)
    print("Queries")
    print("=" * 50)
    evaluator = QueryEvaluator(store)
    mammals = evaluator.answer([RelationValue("type", "?x", "Mammal")])
    print(f"Mammals: {[row['?x'] for row in mammals]}")

    where = evaluator.answer([
        RelationValue("type", "?x", "Animal"),
        RelationValue("livesIn", "?x", "?place"),
    ])
    for row in where:
        print(f"  {row['?x']} lives in {row['?place']}")


if __name__ == "__main__":
    main()
