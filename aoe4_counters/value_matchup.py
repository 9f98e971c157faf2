"""Cost-aware, counter-adjusted army comparison.

Armies are valued by what they cost (count * effective value per unit). Each
attacking unit's raw value is then spread over the opposing units in
proportion to their share of the opposing value and scaled by the counter
multiplier of every pairing. Unlike the count-based analysis in
army_analysis.py, every individual pairing is kept as a MatchupDetail with a
narrative, so the verdict can be explained unit by unit.
"""

from dataclasses import dataclass, field
from typing import Optional

from aoe4_counters.classifier import classify_classes
from aoe4_counters.counter_matrix import evaluate_counter, round_half_up

VALUE_FAVORED_TOLERANCE = 0.01
HIGH_IMPACT_DEVIATION = 0.2
MEDIUM_IMPACT_DEVIATION = 0.1
MAX_KEY_MATCHUPS = 5

EVEN_EXPLANATION = (
    "Direct engagement is roughly even after adjusting for counters and value."
)


@dataclass
class UnitWithValue:
    unit_id: str
    name: str
    count: int
    effective_value: float
    classes: list[str] = field(default_factory=list)

    @property
    def raw_value(self) -> float:
        return self.count * self.effective_value


@dataclass
class MatchupDetail:
    """One attacker unit against one defender unit."""

    unit1_name: str
    unit1_value: float
    unit1_class: str
    unit2_name: str
    unit2_value: float
    unit2_class: str
    counter_multiplier: float
    value_after_counter: float
    impact: str
    narrative: str

    @property
    def impact_score(self) -> float:
        """Ranking key for key matchups."""
        return abs(self.counter_multiplier - 1) * self.value_after_counter


@dataclass
class UnitAdjustedSummary:
    unit_name: str
    raw_total: float
    adjusted_total: float


@dataclass
class ValueAdjustedMatchup:
    """Full comparison result, rounded for presentation."""

    army1_raw_value: float
    army2_raw_value: float
    army1_adjusted_value: float
    army2_adjusted_value: float
    favored_army: int
    advantage_percent: float
    key_matchups: list[MatchupDetail]
    explanation: str
    army1_breakdown: list[UnitAdjustedSummary]
    army2_breakdown: list[UnitAdjustedSummary]


@dataclass
class _AdjustedArmy:
    adjusted: float
    details: list[MatchupDetail]
    breakdown: list[UnitAdjustedSummary]


def impact_label(multiplier: float, weight: float, raw_value: float) -> str:
    """Tier a pairing as 'high', 'medium' or 'low' by its deviation from neutral."""
    deviation = abs(multiplier - 1)
    impact_score = deviation * weight * raw_value
    if impact_score >= raw_value * HIGH_IMPACT_DEVIATION * weight:
        return "high"
    if impact_score >= raw_value * MEDIUM_IMPACT_DEVIATION * weight:
        return "medium"
    return "low"


def describe_matchup(attacker: str, defender: str, multiplier: float) -> str:
    if multiplier == 1:
        return f"{attacker} trades evenly into {defender}"
    verb = "exploits" if multiplier > 1 else "is punished by"
    return f"{attacker} {verb} {defender} ({multiplier:.2f}x)"


def _adjust_army(
    attacking: list[UnitWithValue],
    defending: list[UnitWithValue],
    defending_raw_total: float,
    class_cache: dict[str, tuple[str, ...]],
) -> _AdjustedArmy:
    def resolve(unit: UnitWithValue) -> tuple[str, ...]:
        if unit.unit_id not in class_cache:
            class_cache[unit.unit_id] = classify_classes(
                unit.unit_id, unit.name, unit.classes
            )
        return class_cache[unit.unit_id]

    details: list[MatchupDetail] = []
    # Keyed by unit name, first-seen order
    per_unit: dict[str, UnitAdjustedSummary] = {}
    adjusted = 0.0

    for attacker in attacking:
        attacker_classes = resolve(attacker)
        attacker_raw = attacker.raw_value
        summary = per_unit.setdefault(
            attacker.name, UnitAdjustedSummary(attacker.name, 0.0, 0.0)
        )
        summary.raw_total += attacker_raw

        if defending_raw_total == 0:
            adjusted += attacker_raw
            continue

        for defender in defending:
            defender_classes = resolve(defender)
            defender_raw = defender.raw_value
            weight = defender_raw / defending_raw_total
            result = evaluate_counter(attacker_classes, defender_classes)
            value_after_counter = attacker_raw * result.value * weight
            summary.adjusted_total += value_after_counter

            details.append(MatchupDetail(
                unit1_name=attacker.name,
                unit1_value=attacker_raw,
                unit1_class=result.attacker_class or _first_class(attacker_classes),
                unit2_name=defender.name,
                unit2_value=defender_raw,
                unit2_class=result.defender_class or _first_class(defender_classes),
                counter_multiplier=round_half_up(result.value, 2),
                value_after_counter=round_half_up(value_after_counter, 2),
                impact=impact_label(result.value, weight, attacker_raw),
                narrative=describe_matchup(attacker.name, defender.name, result.value),
            ))
            adjusted += value_after_counter

    breakdown = [
        UnitAdjustedSummary(
            s.unit_name,
            round_half_up(s.raw_total, 2),
            round_half_up(s.adjusted_total, 2),
        )
        for s in per_unit.values()
    ]
    return _AdjustedArmy(adjusted, details, breakdown)


def _first_class(classes: tuple[str, ...]) -> str:
    return classes[0] if classes else "unknown"


def summarize_explanation(
    favored_army: int,
    army1_raw: float,
    army2_raw: float,
    key_matchups: list[MatchupDetail],
) -> str:
    """One-sentence reason for the verdict."""
    if favored_army == 0:
        return EVEN_EXPLANATION

    raw_gap = army1_raw - army2_raw
    raw_deficit = (favored_army == 1 and raw_gap < 0) or (favored_army == 2 and raw_gap > 0)
    driver = key_matchups[0].narrative if key_matchups else "counter advantages"
    if raw_deficit:
        return "Counters overcome the raw value disadvantage: " + driver
    return "Raw value lead is reinforced by " + driver


def calculate_value_adjusted_matchup(
    army1: list[UnitWithValue],
    army2: list[UnitWithValue],
    class_cache: Optional[dict[str, tuple[str, ...]]] = None,
) -> ValueAdjustedMatchup:
    """Compare two cost-valued armies with counters applied per unit pairing.

    Raw values are summed unrounded and only rounded to two decimals in the
    result. A side is favored when its adjusted value exceeds the other's by
    more than VALUE_FAVORED_TOLERANCE; the advantage is expressed relative
    to the underdog's adjusted value.

    Args:
        army1: First army.
        army2: Second army.
        class_cache: Optional unit id -> archetypes cache shared by both
            sides. A fresh one is used per call when omitted.

    Returns:
        ValueAdjustedMatchup with per-pairing details for the top five
        matchups and per-unit breakdowns for both sides.
    """
    if class_cache is None:
        class_cache = {}

    army1_raw = sum(unit.raw_value for unit in army1)
    army2_raw = sum(unit.raw_value for unit in army2)

    army1_result = _adjust_army(army1, army2, army2_raw, class_cache)
    army2_result = _adjust_army(army2, army1, army1_raw, class_cache)

    army1_adjusted = round_half_up(army1_result.adjusted, 2)
    army2_adjusted = round_half_up(army2_result.adjusted, 2)

    if army1_adjusted > army2_adjusted + VALUE_FAVORED_TOLERANCE:
        favored = 1
    elif army2_adjusted > army1_adjusted + VALUE_FAVORED_TOLERANCE:
        favored = 2
    else:
        favored = 0

    favored_value = army1_adjusted if favored == 1 else army2_adjusted
    underdog_value = army2_adjusted if favored == 1 else army1_adjusted
    if favored == 0 or underdog_value == 0:
        advantage = 0.0
    else:
        advantage = round_half_up((favored_value - underdog_value) / underdog_value, 4)

    all_details = army1_result.details + army2_result.details
    all_details.sort(key=lambda d: d.impact_score, reverse=True)
    key_matchups = all_details[:MAX_KEY_MATCHUPS]

    return ValueAdjustedMatchup(
        army1_raw_value=round_half_up(army1_raw, 2),
        army2_raw_value=round_half_up(army2_raw, 2),
        army1_adjusted_value=army1_adjusted,
        army2_adjusted_value=army2_adjusted,
        favored_army=favored,
        advantage_percent=advantage,
        key_matchups=key_matchups,
        explanation=summarize_explanation(favored, army1_raw, army2_raw, key_matchups),
        army1_breakdown=army1_result.breakdown,
        army2_breakdown=army2_result.breakdown,
    )
