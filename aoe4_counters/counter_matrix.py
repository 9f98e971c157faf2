"""Counter relationships between tactical unit archetypes.

Every unit is reduced to one or more archetypes (see classifier.py). This
module holds the directed, weighted "attacker is effective against defender"
relation over those archetypes and the evaluator that resolves two sets of
archetypes to a single multiplier.

Multiplier semantics:
  - 1.0  neutral, no counter relationship
  - >1.0 attacker counters defender
  - <1.0 attacker is countered by defender

Only the clear counters are listed in BASE_COUNTER_PAIRS. The opposite
direction of each pair is derived as 1 / value rounded to two decimals, so
every counter has a matching "is countered by" entry. Pairs absent from the
relation carry no data and resolve to neutral at evaluation time.

All reported numbers go through round_half_up: exact halves round away from
zero (100.125 -> 100.13) rather than to the even digit as round() does.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

# ── Archetypes ───────────────────────────────────────────────────────────────

ARCHETYPES: tuple[str, ...] = (
    "heavy_melee_infantry",
    "light_melee_infantry",
    "spearman",
    "heavy_melee_cavalry",
    "light_melee_cavalry",
    "ranged_infantry",
    "heavy_ranged_infantry",
    "light_ranged_cavalry",
    "siege",
    "monk",
    "hero",
)

NEUTRAL = 1.0

# ── Base counter table ───────────────────────────────────────────────────────
#
# (attacker, defender, multiplier). Reciprocals are derived, never listed.

BASE_COUNTER_PAIRS: tuple[tuple[str, str, float], ...] = (
    # Spearmen vs cavalry
    ("spearman", "heavy_melee_cavalry", 1.5),
    ("spearman", "light_melee_cavalry", 1.4),
    ("spearman", "light_ranged_cavalry", 1.4),
    # Crossbows / gunpowder vs heavy armor, poor into light targets
    ("heavy_ranged_infantry", "heavy_melee_infantry", 1.5),
    ("heavy_ranged_infantry", "heavy_melee_cavalry", 1.4),
    ("heavy_ranged_infantry", "light_melee_infantry", 0.9),
    ("heavy_ranged_infantry", "light_melee_cavalry", 0.7),
    ("heavy_ranged_infantry", "siege", 1.1),
    ("heavy_ranged_infantry", "monk", 1.2),
    # Stat advantage
    ("heavy_melee_infantry", "light_melee_infantry", 1.3),
    # Cavalry dives ranged and light infantry
    ("heavy_melee_cavalry", "ranged_infantry", 1.4),
    ("heavy_melee_cavalry", "light_melee_infantry", 1.3),
    ("heavy_melee_cavalry", "light_melee_cavalry", 1.1),
    ("heavy_melee_cavalry", "siege", 1.5),
    ("heavy_melee_cavalry", "monk", 1.3),
    # Light cavalry cleanup
    ("light_melee_cavalry", "siege", 1.5),
    ("light_ranged_cavalry", "siege", 1.5),
    ("light_melee_cavalry", "monk", 1.5),
    ("light_ranged_cavalry", "monk", 1.5),
    # Archers vs light infantry
    ("ranged_infantry", "light_melee_infantry", 1.25),
    ("ranged_infantry", "spearman", 1.25),
    # Men-at-arms vs archers
    ("heavy_melee_infantry", "ranged_infantry", 1.25),
)


def round_half_up(value: float, places: int) -> float:
    """Round to a fixed number of decimals, exact halves away from zero.

    Args:
        value: Number to round. The float is taken at its exact binary value.
        places: Decimal places to keep.

    Returns:
        The rounded float. Negative zero is returned as 0.0.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)) + 0.0


def reciprocal(value: float) -> float:
    """Effectiveness of the defender back against the attacker."""
    return round_half_up(1 / value, 2)


def build_counter_matrix(
    pairs: Iterable[tuple[str, str, float]],
) -> dict[tuple[str, str], float]:
    """Build the (attacker, defender) -> multiplier relation.

    Each pair is inserted together with its derived reciprocal. A key is
    set at most once; a table that would assign the same key twice is
    rejected instead of silently overwritten.

    Args:
        pairs: (attacker, defender, multiplier) triples.

    Returns:
        Dict keyed by (attacker, defender) archetype tuples.

    Raises:
        ValueError: On an unknown archetype, a non-positive multiplier,
            or a key assigned twice.
    """
    matrix: dict[tuple[str, str], float] = {}

    def _set(attacker: str, defender: str, value: float) -> None:
        key = (attacker, defender)
        if key in matrix:
            raise ValueError(
                f"Counter entry {attacker} -> {defender} is already set "
                f"to {matrix[key]}, refusing to overwrite with {value}"
            )
        matrix[key] = value

    for attacker, defender, value in pairs:
        for archetype in (attacker, defender):
            if archetype not in ARCHETYPES:
                raise ValueError(f"Unknown archetype: {archetype!r}")
        if value <= 0:
            raise ValueError(
                f"Multiplier must be positive, got {value} for {attacker} -> {defender}"
            )
        _set(attacker, defender, value)
        _set(defender, attacker, reciprocal(value))

    return matrix


COUNTER_MATRIX: Mapping[tuple[str, str], float] = MappingProxyType(
    build_counter_matrix(BASE_COUNTER_PAIRS)
)


# ── Query functions ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CounterResult:
    """Resolved multiplier and the archetype pair that produced it."""

    value: float = NEUTRAL
    attacker_class: Optional[str] = None
    defender_class: Optional[str] = None


def get_effectiveness(attacker: str, defender: str) -> Optional[float]:
    """Get the multiplier for one archetype pair, or None if there is no entry."""
    return COUNTER_MATRIX.get((attacker, defender))


def evaluate_counter(
    attacker_classes: Iterable[str],
    defender_classes: Iterable[str],
) -> CounterResult:
    """Resolve multi-archetype units to a single effectiveness multiplier.

    Walks every attacker/defender archetype pair with a relation entry,
    starting from a neutral 1.0. A candidate replaces the current best when
    it is strictly greater, or when the best is still neutral and the
    candidate is below 1.0. The strongest advantage therefore always wins.
    Without any advantage the first disadvantage found is kept unless a
    milder one follows it; the worst one is never preferred.

    Args:
        attacker_classes: Archetypes of the attacking unit, in order.
        defender_classes: Archetypes of the defending unit, in order.

    Returns:
        CounterResult; neutral with no chosen classes when no pair has data.
    """
    best = CounterResult()
    defenders = list(defender_classes)

    for attacker in attacker_classes:
        for defender in defenders:
            value = get_effectiveness(attacker, defender)
            if value is None:
                continue
            if value > best.value or (best.value == NEUTRAL and value < NEUTRAL):
                best = CounterResult(value, attacker, defender)

    return best


def get_counter_effectiveness(
    attacker_classes: Iterable[str],
    defender_classes: Iterable[str],
) -> float:
    """Get only the resolved multiplier for two archetype sets."""
    return evaluate_counter(attacker_classes, defender_classes).value
