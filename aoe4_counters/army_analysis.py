"""Count-based army comparison.

Each army is a list of unit counts with a scalar effective value per unit
type. Every attacking unit type is scored against the opposing composition:
its power (count * value) is scaled by the counter multiplier against each
defending unit type, weighted by that defender's share of the opposing
strength. The side with the higher total is favored.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from aoe4_counters.classifier import UnitDescriptor, classify_unit
from aoe4_counters.counter_matrix import evaluate_counter, round_half_up

IMPACT_NOISE_FLOOR = 0.001         # Impacts at or below this are not recorded
FAVORED_TOLERANCE = 0.001          # Score gap needed to favor a side
KEY_MATCHUP_MIN_DEVIATION = 0.01   # |multiplier - 1| needed to be a key matchup
MAX_KEY_MATCHUPS = 5


@dataclass
class UnitCount:
    unit_id: str
    count: int
    effective_value: float


@dataclass
class KeyMatchup:
    """One impactful attacker-vs-defender unit pairing."""

    attacker: str
    defender: str
    effectiveness: float
    impact_value: float

    @property
    def impact(self) -> str:
        sign = "+" if self.impact_value >= 0 else ""
        return f"Weighted impact {sign}{self.impact_value:.2f}"


@dataclass
class MatchupAnalysis:
    """Result of analyze_army_matchup().

    favored_army is 1 or 2, or 0 when neither side is ahead. score is the
    signed army1 - army2 difference.
    """

    favored_army: int
    score: float
    advantage_percent: float
    key_matchups: list[KeyMatchup] = field(default_factory=list)


@dataclass
class _ArmyScore:
    total: float
    matchups: list[KeyMatchup]


def army_strength(army: list[UnitCount]) -> float:
    """Sum of count * effective value over an army."""
    return sum(unit.count * unit.effective_value for unit in army)


def _score_army(
    attacking: list[UnitCount],
    defending: list[UnitCount],
    units_by_id: Mapping[str, UnitDescriptor],
    class_cache: dict[str, tuple[str, ...]],
) -> _ArmyScore:
    defending_strength = army_strength(defending)
    matchups: list[KeyMatchup] = []

    def resolve(unit_id: str) -> tuple[str, ...]:
        if unit_id not in class_cache:
            unit = units_by_id.get(unit_id)
            class_cache[unit_id] = classify_unit(unit) if unit else ()
        return class_cache[unit_id]

    total = 0.0
    for attacker in attacking:
        attacker_classes = resolve(attacker.unit_id)
        attacker_power = attacker.count * attacker.effective_value
        if defending_strength == 0:
            total += attacker_power
            continue

        weighted = 0.0
        for defender in defending:
            weight = defender.count * defender.effective_value / defending_strength
            effectiveness = evaluate_counter(
                attacker_classes, resolve(defender.unit_id)
            ).value
            impact = attacker_power * weight * (effectiveness - 1)

            weighted += effectiveness * weight
            if abs(impact) > IMPACT_NOISE_FLOOR:
                matchups.append(KeyMatchup(
                    attacker.unit_id, defender.unit_id, effectiveness, impact,
                ))

        total += attacker_power * weighted

    return _ArmyScore(total, matchups)


def select_key_matchups(
    favored_army: int,
    army1_matchups: list[KeyMatchup],
    army2_matchups: list[KeyMatchup],
) -> list[KeyMatchup]:
    """Pick the favored side's most impactful matchups (both sides if even)."""
    if favored_army == 1:
        source = army1_matchups
    elif favored_army == 2:
        source = army2_matchups
    else:
        source = army1_matchups + army2_matchups

    candidates = [
        m for m in source
        if abs(m.effectiveness - 1) > KEY_MATCHUP_MIN_DEVIATION
    ]
    candidates.sort(key=lambda m: abs(m.impact_value), reverse=True)
    return [
        KeyMatchup(
            m.attacker, m.defender, round_half_up(m.effectiveness, 2), m.impact_value
        )
        for m in candidates[:MAX_KEY_MATCHUPS]
    ]


def analyze_army_matchup(
    army1: list[UnitCount],
    army2: list[UnitCount],
    units_by_id: Optional[Mapping[str, UnitDescriptor]] = None,
    class_cache: Optional[dict[str, tuple[str, ...]]] = None,
) -> MatchupAnalysis:
    """Compare two armies by counter-weighted strength.

    Args:
        army1: Unit counts of the first army.
        army2: Unit counts of the second army.
        units_by_id: Unit metadata for classification. Ids missing here
            classify to no archetype and trade neutrally.
        class_cache: Optional id -> archetypes cache. A fresh one is used
            per call when omitted.

    Returns:
        MatchupAnalysis with the favored side, the rounded score difference,
        the advantage as a fraction of both totals, and up to five key
        matchups.
    """
    units_by_id = units_by_id or {}
    if class_cache is None:
        class_cache = {}

    army1_result = _score_army(army1, army2, units_by_id, class_cache)
    army2_result = _score_army(army2, army1, units_by_id, class_cache)

    difference = army1_result.total - army2_result.total
    combined = army1_result.total + army2_result.total
    advantage = 0.0 if combined == 0 else abs(difference) / combined

    if difference > FAVORED_TOLERANCE:
        favored = 1
    elif difference < -FAVORED_TOLERANCE:
        favored = 2
    else:
        favored = 0

    return MatchupAnalysis(
        favored_army=favored,
        score=round_half_up(difference, 2),
        advantage_percent=round_half_up(advantage, 4),
        key_matchups=select_key_matchups(
            favored, army1_result.matchups, army2_result.matchups
        ),
    )
