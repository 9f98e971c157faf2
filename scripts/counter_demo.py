#!/usr/bin/env python3
"""Demo of unit classification and both army comparisons.

Classifies a small sample roster, draws two random two-unit armies and
prints the value-adjusted and count-based matchups between them. Armies are
deterministic for a given seed.

Usage:
    python scripts/counter_demo.py [--seed SEED] [--units PATH]

--units points at a reference-data JSON file ({"units": [...]}). Its
resource costs are used as unit values, and its units join the sample roster
for classification and army sampling. Without it a fallback cost table is
used.
"""

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Any

from aoe4_counters.army_analysis import UnitCount, analyze_army_matchup
from aoe4_counters.classifier import UnitDescriptor, classify_unit
from aoe4_counters.formatting import format_matchup_analysis, format_value_adjusted_matchup
from aoe4_counters.value_matchup import UnitWithValue, calculate_value_adjusted_matchup

SAMPLE_UNITS: list[dict[str, Any]] = [
    {
        "id": "spearman", "name": "Spearman", "baseId": "spearman",
        "costs": {"food": 60, "wood": 20},
        "classes": ["Spear", "Light Melee Infantry"],
        "displayClasses": ["Spear Infantry"],
    },
    {
        "id": "knight", "name": "Knight", "baseId": "knight",
        "costs": {"food": 140, "gold": 100},
        "classes": ["Heavy Melee Cavalry"],
        "displayClasses": ["Cavalry"],
    },
    {
        "id": "crossbowman", "name": "Crossbowman", "baseId": "crossbowman",
        "costs": {"food": 80, "gold": 40},
        "classes": ["Heavy Ranged Infantry"],
        "displayClasses": ["Ranged Infantry"],
    },
    {
        "id": "man_at_arms", "name": "Man-at-Arms", "baseId": "man_at_arms",
        "costs": {"food": 120, "gold": 20},
        "classes": ["Heavy Melee Infantry"],
        "displayClasses": ["Infantry"],
    },
]

FALLBACK_COST: dict[str, int] = {
    "spearman": 80,
    "crossbowman": 120,
    "knight": 240,
    "man_at_arms": 140,
}
DEFAULT_COST = 100

ARMY_SIZE = 2
MIN_COUNT = 8
MAX_COUNT = 12


def unit_resource_cost(costs: dict[str, int] | None) -> int:
    """Total resource cost (food + wood + gold + stone)."""
    costs = costs or {}
    return sum(costs.get(r, 0) or 0 for r in ("food", "wood", "gold", "stone"))


def load_reference_units(path: Path) -> list[dict[str, Any]]:
    """Read the unit records of a reference-data JSON file."""
    data = json.loads(path.read_text())
    return list(data.get("units", []))


def cost_lookup_from_units(units: list[dict[str, Any]]) -> dict[str, int]:
    """Resource cost per unit, keyed by lowercased base id (or id)."""
    lookup: dict[str, int] = {}
    for unit in units:
        key = (unit.get("baseId") or unit.get("id", "")).lower()
        lookup[key] = unit_resource_cost(unit.get("costs"))
    return lookup


def load_cost_lookup(path: Path) -> dict[str, int]:
    """Read unit costs from a reference-data JSON file, keyed by base id."""
    return cost_lookup_from_units(load_reference_units(path))


def build_roster(extra_units: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """SAMPLE_UNITS followed by reference units not already in it.

    Records without an id are skipped. Later duplicates of an id are dropped.
    """
    roster = list(SAMPLE_UNITS)
    seen = {unit["id"] for unit in roster}
    for unit in extra_units:
        unit_id = unit.get("id")
        if not unit_id or unit_id in seen:
            continue
        seen.add(unit_id)
        roster.append(unit)
    return roster


def unit_value(unit: dict[str, Any], cost_lookup: dict[str, int]) -> int:
    key = (unit.get("baseId") or unit["id"]).lower()
    return cost_lookup.get(key, FALLBACK_COST.get(key, DEFAULT_COST))


def draw_army(
    rng: random.Random,
    cost_lookup: dict[str, int],
    roster: list[dict[str, Any]] | None = None,
) -> list[UnitWithValue]:
    """Pick ARMY_SIZE distinct roster units with random counts.

    The roster defaults to SAMPLE_UNITS.
    """
    roster = SAMPLE_UNITS if roster is None else roster
    return [
        UnitWithValue(
            unit_id=unit["id"],
            name=unit.get("name") or unit["id"],
            count=rng.randint(MIN_COUNT, MAX_COUNT),
            effective_value=unit_value(unit, cost_lookup),
            classes=list(unit.get("classes") or []),
        )
        for unit in rng.sample(roster, ARMY_SIZE)
    ]


def print_composition(title: str, army: list[UnitWithValue]) -> None:
    print(f"\n{title} composition:")
    for entry in army:
        print(f"  - {entry.count}x {entry.name} ({entry.effective_value} each) "
              f"raw {entry.raw_value:.2f}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Demo counter classification and matchup analysis")
    parser.add_argument("--seed", default="demo-seed",
                        help="Seed for deterministic army sampling")
    parser.add_argument("--units", type=Path, default=None,
                        help="Reference-data JSON with unit costs and extra units")
    parser.add_argument("--player1", default="Army 1", help="Label for the first army")
    parser.add_argument("--player2", default="Army 2", help="Label for the second army")
    args = parser.parse_args()

    reference_units: list[dict[str, Any]] = []
    if args.units is not None:
        if not args.units.exists():
            print(f"ERROR: units file not found: {args.units}")
            sys.exit(1)
        reference_units = load_reference_units(args.units)
        print(f"Loaded {len(reference_units)} units from {args.units}")
    cost_lookup = cost_lookup_from_units(reference_units)
    roster = build_roster(reference_units)

    descriptors = {u["id"]: UnitDescriptor.from_dict(u) for u in roster}

    print("Unit classification:")
    for unit in descriptors.values():
        archetypes = classify_unit(unit)
        print(f"  {unit.name or unit.id}: {', '.join(archetypes) or '(none)'}")

    rng = random.Random(args.seed)
    army1 = draw_army(rng, cost_lookup, roster)
    army2 = draw_army(rng, cost_lookup, roster)

    print(f"\nSeed used: {args.seed}")
    print_composition(args.player1, army1)
    print_composition(args.player2, army2)

    print("\nValue-adjusted matchup:")
    matchup = calculate_value_adjusted_matchup(army1, army2)
    print(format_value_adjusted_matchup(matchup, args.player1, args.player2))

    print("\nCount-based matchup:")
    analysis = analyze_army_matchup(
        [UnitCount(u.unit_id, u.count, u.effective_value) for u in army1],
        [UnitCount(u.unit_id, u.count, u.effective_value) for u in army2],
        descriptors,
    )
    print(format_matchup_analysis(analysis, args.player1, args.player2))


if __name__ == "__main__":
    main()
