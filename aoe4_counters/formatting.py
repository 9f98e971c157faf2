"""Plain-text rendering of matchup results.

Both formatters are pure: fixed section order, two decimals for every
number, no colors.
"""

from aoe4_counters.army_analysis import MatchupAnalysis
from aoe4_counters.value_matchup import UnitAdjustedSummary, ValueAdjustedMatchup


def _favored_label(favored_army: int, player1_name: str, player2_name: str) -> str:
    if favored_army == 1:
        return player1_name
    if favored_army == 2:
        return player2_name
    return "Even"


def _edge(favored_army: int, advantage_percent: float, kind: str) -> str:
    if favored_army == 0:
        return ""
    return f" (+{advantage_percent * 100:.2f}% {kind} edge)"


def _breakdown_lines(title: str, breakdown: list[UnitAdjustedSummary]) -> list[str]:
    lines = ["", title]
    for entry in breakdown:
        lines.append(
            f"  - {entry.unit_name}: raw {entry.raw_total:.2f}"
            f" -> adjusted {entry.adjusted_total:.2f}"
        )
    return lines


def format_value_adjusted_matchup(
    matchup: ValueAdjustedMatchup,
    player1_name: str,
    player2_name: str,
) -> str:
    """Render a value-adjusted matchup as a multi-line report."""
    favored = _favored_label(matchup.favored_army, player1_name, player2_name)
    edge = _edge(matchup.favored_army, matchup.advantage_percent, "adjusted")

    lines = [
        "Raw Values:",
        f"  {player1_name}: {matchup.army1_raw_value:.2f}",
        f"  {player2_name}: {matchup.army2_raw_value:.2f}",
        "",
        "Adjusted Values:",
        f"  {player1_name}: {matchup.army1_adjusted_value:.2f}",
        f"  {player2_name}: {matchup.army2_adjusted_value:.2f}",
        "",
        f"Favored: {favored}{edge}",
        f"Explanation: {matchup.explanation}",
        "",
        "Key Matchups:",
    ]

    for md in matchup.key_matchups:
        lines.append(
            f"  - {md.unit1_name} ({md.unit1_class}) vs {md.unit2_name} ({md.unit2_class}): "
            f"{md.counter_multiplier:.2f}x -> {md.value_after_counter:.2f} "
            f"({md.narrative}) [impact: {md.impact}]"
        )
    if not matchup.key_matchups:
        lines.append("  (none)")

    lines += _breakdown_lines("Army 1 Breakdown:", matchup.army1_breakdown)
    lines += _breakdown_lines("Army 2 Breakdown:", matchup.army2_breakdown)
    return "\n".join(lines)


def format_matchup_analysis(
    analysis: MatchupAnalysis,
    player1_name: str,
    player2_name: str,
) -> str:
    """Render a count-based analysis as a multi-line report."""
    favored = _favored_label(analysis.favored_army, player1_name, player2_name)
    edge = _edge(analysis.favored_army, analysis.advantage_percent, "weighted")

    lines = [
        f"Favored: {favored}{edge}",
        f"Score difference: {analysis.score:.2f}",
        "",
        "Key Matchups:",
    ]
    for km in analysis.key_matchups:
        lines.append(
            f"  - {km.attacker} vs {km.defender}: "
            f"{km.effectiveness:.2f}x ({km.impact})"
        )
    if not analysis.key_matchups:
        lines.append("  (none)")
    return "\n".join(lines)
