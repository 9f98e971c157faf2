"""AoE4 Counter Util — counter-aware army comparison for Age of Empires IV.

Provides:
- classifier: Unit metadata -> tactical archetypes (spearman, siege, hero, ...)
- counter_matrix: Archetype counter relation and multi-archetype evaluation
- army_analysis: Count-based army comparison with key matchups
- value_matchup: Cost-adjusted army comparison with per-unit breakdowns
- formatting: Plain-text reports for both comparisons
"""

__version__ = "0.1.0"
