"""
Coverage Scoring - Category Scorer.

============================================================
PURPOSE
============================================================
Partitions reconciled signals into the four categories,
sums earned points, and labels each category and the
headline score with a coverage level.

============================================================
TWO COVERAGE MAPPINGS
============================================================
Category percentage (six levels):
    >= 85 Excellent | >= 70 Good | >= 50 Moderate
    >= 30 Limited   | > 0 Minimal | else None

Headline score (five levels):
    same thresholds, but anything below Limited is Minimal.
    A zero headline score still reads "Minimal".

============================================================
"""

from typing import List, Optional, Sequence

from .config import CoverageThresholds
from .registry import category_info
from .types import CategoryScore, CoverageLevel, Signal, SignalCategory


# ============================================================
# COVERAGE LEVEL MAPPINGS
# ============================================================


def coverage_level_for_percentage(
    percentage: float,
    thresholds: Optional[CoverageThresholds] = None,
) -> CoverageLevel:
    """
    Six-level mapping used for category rollups.

    Args:
        percentage: Category score as percent of its budget
        thresholds: Optional threshold override

    Returns:
        CoverageLevel, NONE only when percentage is 0 or below
    """
    t = thresholds or CoverageThresholds()

    if percentage >= t.excellent:
        return CoverageLevel.EXCELLENT
    elif percentage >= t.good:
        return CoverageLevel.GOOD
    elif percentage >= t.moderate:
        return CoverageLevel.MODERATE
    elif percentage >= t.limited:
        return CoverageLevel.LIMITED
    elif percentage > 0:
        return CoverageLevel.MINIMAL
    return CoverageLevel.NONE


def headline_coverage_level(
    score: float,
    thresholds: Optional[CoverageThresholds] = None,
) -> CoverageLevel:
    """
    Five-level mapping used for the clamped headline score.

    Never returns NONE.
    """
    t = thresholds or CoverageThresholds()

    if score >= t.excellent:
        return CoverageLevel.EXCELLENT
    elif score >= t.good:
        return CoverageLevel.GOOD
    elif score >= t.moderate:
        return CoverageLevel.MODERATE
    elif score >= t.limited:
        return CoverageLevel.LIMITED
    return CoverageLevel.MINIMAL


# ============================================================
# CATEGORY SCORER
# ============================================================


class CategoryScorer:
    """Builds the four category rollups from a signal list."""

    def __init__(self, thresholds: Optional[CoverageThresholds] = None):
        self._thresholds = thresholds or CoverageThresholds()

    def score_category(
        self,
        category: SignalCategory,
        signals: Sequence[Signal],
    ) -> CategoryScore:
        """
        Roll up a single category.

        Args:
            category: Category to roll up
            signals: Full signal list (filtered here)

        Returns:
            CategoryScore for the category
        """
        info = category_info(category)
        members = tuple(s for s in signals if s.category == category)
        score = sum(s.points for s in members)
        percentage = score / info.max_score * 100 if info.max_score > 0 else 0.0

        return CategoryScore(
            category=category,
            name=info.name,
            score=score,
            max_score=info.max_score,
            signals=members,
            coverage_level=coverage_level_for_percentage(percentage, self._thresholds),
        )

    def score_all(self, signals: Sequence[Signal]) -> List[CategoryScore]:
        """Roll up every category, in reporting order."""
        return [
            self.score_category(category, signals)
            for category in SignalCategory.all_categories()
        ]
