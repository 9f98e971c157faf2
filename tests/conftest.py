"""Shared sample units and armies for AoE4 Counter Util tests."""

import pytest

from aoe4_counters.army_analysis import UnitCount
from aoe4_counters.classifier import UnitDescriptor
from aoe4_counters.value_matchup import UnitWithValue

SPEARMAN = UnitDescriptor(
    id="spearman", name="Spearman", base_id="spearman",
    classes=("Spear", "Light Melee Infantry"),
    display_classes=("Spear Infantry",),
)
KNIGHT = UnitDescriptor(
    id="knight", name="Knight", base_id="knight",
    classes=("Heavy Melee Cavalry",),
    display_classes=("Cavalry",),
)
HORSEMAN = UnitDescriptor(
    id="horseman", name="Horseman", base_id="horseman",
    classes=("Light Melee Cavalry",),
    display_classes=("Cavalry",),
)
HORSE_ARCHER = UnitDescriptor(
    id="horse_archer", name="Horse Archer", base_id="horse_archer",
    classes=("Ranged Cavalry", "Light"),
    display_classes=("Ranged Cavalry",),
)
CROSSBOWMAN = UnitDescriptor(
    id="crossbowman", name="Crossbowman", base_id="crossbowman",
    classes=("Ranged", "Infantry", "Light"),
    display_classes=("Light Ranged Infantry",),
)
MAN_AT_ARMS = UnitDescriptor(
    id="man_at_arms", name="Man-at-Arms", base_id="man_at_arms",
    classes=("Heavy Melee Infantry",),
    display_classes=("Infantry",),
)
MONK = UnitDescriptor(
    id="monk", name="Monk", base_id="monk",
    classes=("Religious",),
    display_classes=("Monk",),
)
RAM = UnitDescriptor(
    id="ram", name="Battering Ram", base_id="ram",
    classes=("Siege",),
    display_classes=("Siege",),
)
KHAN = UnitDescriptor(
    id="khan", name="Khan", base_id="khan",
    classes=("Ranged Cavalry",),
    display_classes=("Ranged Cavalry", "Hero"),
)

ALL_UNITS = [SPEARMAN, KNIGHT, HORSEMAN, HORSE_ARCHER, CROSSBOWMAN,
             MAN_AT_ARMS, MONK, RAM, KHAN]


def value_unit(unit: UnitDescriptor, count: int, value: float) -> UnitWithValue:
    """Value-analyzer entry for a sample unit."""
    return UnitWithValue(unit.id, unit.name, count, value, list(unit.classes))


@pytest.fixture
def units_by_id():
    return {u.id: u for u in ALL_UNITS}


@pytest.fixture
def count_armies():
    """10 spearmen + 10 crossbowmen vs 5 knights."""
    army1 = [UnitCount("spearman", 10, 1), UnitCount("crossbowman", 10, 1)]
    army2 = [UnitCount("knight", 5, 1.2)]
    return army1, army2


@pytest.fixture
def spears_vs_knight():
    """Three spearmen vs one knight, equal raw value."""
    return [value_unit(SPEARMAN, 3, 80)], [value_unit(KNIGHT, 1, 240)]


@pytest.fixture
def single_spear_vs_knight():
    return [value_unit(SPEARMAN, 1, 80)], [value_unit(KNIGHT, 1, 240)]


@pytest.fixture
def mixed_armies():
    """10 crossbowmen + 5 spearmen vs 5 knights, 1200 raw each."""
    army1 = [value_unit(CROSSBOWMAN, 10, 80), value_unit(SPEARMAN, 5, 80)]
    army2 = [value_unit(KNIGHT, 5, 240)]
    return army1, army2
