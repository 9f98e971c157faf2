"""Heuristic mapping of unit metadata onto tactical archetypes.

Reference data describes units with free-text gameplay classes
("Heavy Melee Cavalry"), display classes ("Ranged Cavalry", "Hero"), a name
and a base id. None of these map cleanly onto counter archetypes, so every
text field is normalized into a flat token list and a fixed, ordered list of
keyword rules is applied. Rules are independent: a unit may match several
(a hero that is also ranged cavalry). Two rules are suppressed by earlier
matches: plain ranged infantry is skipped for heavy ranged infantry, and
light melee infantry is skipped for spearmen.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

# ── Keywords ─────────────────────────────────────────────────────────────────

HERO_KEYWORDS = ("hero", "jeanne", "khan", "daimyo")
MONK_KEYWORDS = ("monk", "imam", "prelate", "scholar", "religious")
SIEGE_KEYWORDS = ("siege", "ram", "bombard", "mangonel", "trebuchet", "springald")
SPEAR_KEYWORDS = ("spear", "pike")
HEAVY_RANGED_KEYWORDS = ("crossbow", "arbaletrier", "handcannon")
RANGED_CAVALRY_NAMES = ("horse archer", "mangudai")
LIGHT_CAVALRY_NAMES = ("horseman", "sofa")
HEAVY_CAVALRY_NAMES = ("knight", "lancer")
HEAVY_INFANTRY_NAMES = ("man at arms", "samurai")
ARCHER_KEYWORDS = ("archer",)
LIGHT_INFANTRY_NAMES = ("musofadi", "warrior")


@dataclass(frozen=True)
class UnitDescriptor:
    """Read-only unit metadata used for classification."""

    id: str
    name: str = ""
    base_id: str = ""
    classes: tuple[str, ...] = ()
    display_classes: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnitDescriptor":
        """Build from a reference-data unit record (camelCase keys)."""
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            base_id=data.get("baseId", ""),
            classes=tuple(data.get("classes") or ()),
            display_classes=tuple(data.get("displayClasses") or ()),
        )


# ── Normalization ────────────────────────────────────────────────────────────

_SEPARATORS = re.compile(r"[_-]")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def normalize_values(values: Iterable[str]) -> list[str]:
    """Lowercase, turn '_'/'-' into spaces, strip other punctuation."""
    normalized = []
    for value in values:
        if not value:
            continue
        value = _SEPARATORS.sub(" ", value.lower())
        normalized.append(_NON_ALNUM.sub("", value).strip())
    return normalized


def _has_keyword(tokens: list[str], *keywords: str) -> bool:
    return any(keyword in token for token in tokens for keyword in keywords)


def _has_all_keywords(tokens: list[str], *keywords: str) -> bool:
    # All keywords must appear inside the same token
    return any(all(keyword in token for keyword in keywords) for token in tokens)


# ── Rules ────────────────────────────────────────────────────────────────────
#
# Evaluated top to bottom. Each predicate sees the normalized tokens and the
# archetypes assigned so far.

Predicate = Callable[[list[str], tuple[str, ...]], bool]

CLASSIFICATION_RULES: tuple[tuple[str, Predicate], ...] = (
    ("hero", lambda t, found: _has_keyword(t, *HERO_KEYWORDS)),
    ("monk", lambda t, found: _has_keyword(t, *MONK_KEYWORDS)),
    ("siege", lambda t, found: _has_keyword(t, *SIEGE_KEYWORDS)),
    ("spearman", lambda t, found: _has_keyword(t, *SPEAR_KEYWORDS)),
    ("heavy_ranged_infantry", lambda t, found: (
        _has_keyword(t, *HEAVY_RANGED_KEYWORDS)
        or _has_all_keywords(t, "heavy", "ranged", "infantry")
    )),
    ("light_ranged_cavalry", lambda t, found: (
        _has_all_keywords(t, "ranged", "cavalry")
        or _has_keyword(t, *RANGED_CAVALRY_NAMES)
    )),
    ("light_melee_cavalry", lambda t, found: (
        _has_all_keywords(t, "light", "melee", "cavalry")
        or _has_keyword(t, *LIGHT_CAVALRY_NAMES)
    )),
    ("heavy_melee_cavalry", lambda t, found: (
        _has_all_keywords(t, "heavy", "melee", "cavalry")
        or _has_keyword(t, *HEAVY_CAVALRY_NAMES)
    )),
    ("heavy_melee_infantry", lambda t, found: (
        _has_all_keywords(t, "heavy", "melee", "infantry")
        or _has_keyword(t, *HEAVY_INFANTRY_NAMES)
    )),
    ("ranged_infantry", lambda t, found: (
        "heavy_ranged_infantry" not in found
        and (
            _has_keyword(t, *ARCHER_KEYWORDS)
            or (_has_keyword(t, "ranged") and _has_keyword(t, "infantry"))
        )
    )),
    ("light_melee_infantry", lambda t, found: (
        "spearman" not in found
        and (
            _has_all_keywords(t, "light", "melee", "infantry")
            or _has_keyword(t, *LIGHT_INFANTRY_NAMES)
        )
    )),
)


def classify_tokens(tokens: list[str]) -> tuple[str, ...]:
    """Apply CLASSIFICATION_RULES to already-normalized tokens."""
    found: tuple[str, ...] = ()
    for archetype, predicate in CLASSIFICATION_RULES:
        if predicate(tokens, found):
            found += (archetype,)
    return found


def classify_unit(unit: UnitDescriptor) -> tuple[str, ...]:
    """Classify a unit into archetypes.

    Args:
        unit: Unit metadata. Empty or missing text fields are fine.

    Returns:
        Archetypes in rule order, without duplicates. Empty when nothing
        matches, which the evaluator treats as neutral against everything.
    """
    tokens = normalize_values(
        [*(unit.classes or ()), *(unit.display_classes or ()), unit.name, unit.base_id]
    )
    return classify_tokens(tokens)


def classify_classes(
    unit_id: str, name: str, classes: Optional[Iterable[str]]
) -> tuple[str, ...]:
    """Classify a unit known only by id, name and one class list.

    The class list doubles as the display classes and the id as the base id.
    """
    classes = tuple(classes or ())
    return classify_unit(UnitDescriptor(
        id=unit_id, name=name, base_id=unit_id,
        classes=classes, display_classes=classes,
    ))
