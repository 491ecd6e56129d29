"""
Coverage Scoring Engine - Main Orchestrator.

============================================================
PURPOSE
============================================================
The CoverageScoringEngine is the pure, synchronous entry
point that turns a reconciled signal list into a score.

It orchestrates:
1. Category rollups
2. Penalty evaluation
3. Total score composition (sum, penalty, clamp)
4. Headline coverage level
5. Effort estimate

============================================================
DESIGN PRINCIPLES
============================================================
- Deterministic: same signals, same output
- Stateless per call, no I/O, no clock reads
- Never raises for incomplete data
- Point values come only from the registry

============================================================
USAGE
============================================================
    from coverage_scoring import CoverageScoringEngine, merge_signals

    engine = CoverageScoringEngine()
    signals = merge_signals(raw_findings)
    output = engine.score(signals)

    print(f"Score: {output.score}/100 ({output.coverage_level.value})")

============================================================
"""

import logging
from typing import Iterable, Optional, Sequence

from .config import ScoringConfig
from .effort import EffortEstimator
from .merger import merge_signals
from .penalties import PenaltyEngine
from .scorers import CategoryScorer, headline_coverage_level
from .types import (
    CategoryScore,
    RawFinding,
    ScoringError,
    ScoringOutput,
    Signal,
)


logger = logging.getLogger(__name__)


class CoverageScoringEngine:
    """
    Main orchestrator for coverage scoring.

    ============================================================
    RESPONSIBILITIES
    ============================================================
    1. Configure scorer, penalty engine and effort estimator
    2. Run category rollups
    3. Apply penalties
    4. Compose and clamp the headline score
    5. Classify coverage and estimate effort
    6. Package output

    ============================================================
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Scoring configuration. Uses defaults if not provided.
        """
        self.config = config or ScoringConfig()

        self._category_scorer = CategoryScorer(self.config.coverage)
        self._penalty_engine = PenaltyEngine(self.config.penalties)
        self._effort_estimator = EffortEstimator(self.config.effort)

    def score(self, signals: Sequence[Signal]) -> ScoringOutput:
        """
        Score a reconciled signal list.

        Args:
            signals: Output of merge_signals (one entry per definition)

        Returns:
            ScoringOutput with categories, penalties, score and effort

        Raises:
            ScoringError: On unexpected internal failure
        """
        try:
            # --------------------------------------------------
            # Step 1: Category rollups
            # --------------------------------------------------
            categories = self._category_scorer.score_all(signals)

            # --------------------------------------------------
            # Step 2: Penalties
            # --------------------------------------------------
            penalties, total_penalty = self._penalty_engine.evaluate(signals, categories)

            # --------------------------------------------------
            # Step 3: Compose total score
            # --------------------------------------------------
            score = self._compose_score(categories, total_penalty)

            # --------------------------------------------------
            # Step 4: Headline coverage level
            # --------------------------------------------------
            coverage_level = headline_coverage_level(score, self.config.coverage)

            # --------------------------------------------------
            # Step 5: Effort estimate
            # --------------------------------------------------
            missing = [s for s in signals if not s.found]
            effort = self._effort_estimator.estimate(score, missing)

            # --------------------------------------------------
            # Step 6: Build output
            # --------------------------------------------------
            output = ScoringOutput(
                score=score,
                coverage_level=coverage_level,
                categories=tuple(categories),
                penalties=tuple(penalties),
                total_penalty=total_penalty,
                signals=tuple(signals),
                effort_estimate=effort,
                engine_version=self.config.engine_version,
            )

            logger.debug(
                f"Scored {len(signals)} signals: score={score}, "
                f"penalty={total_penalty}, level={coverage_level.value}"
            )

            return output

        except Exception as e:
            raise ScoringError(f"Scoring failed: {str(e)}") from e

    def score_findings(self, raw_findings: Iterable[RawFinding]) -> ScoringOutput:
        """Merge raw findings against the registry, then score."""
        return self.score(merge_signals(raw_findings))

    def _compose_score(
        self,
        categories: Sequence[CategoryScore],
        total_penalty: int,
    ) -> int:
        """
        Sum category scores, add the (negative) penalty, clamp.

        Total = Identity(0-25) + Leadership(0-20) + Validation(0-25)
                + Operational(0-15) + Penalty(-15-0)
        Clamped to [min_score, max_score].
        """
        raw = sum(c.score for c in categories) + total_penalty
        return max(self.config.min_score, min(self.config.max_score, raw))

    def get_config(self) -> ScoringConfig:
        """Return the current engine configuration."""
        return self.config


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================


def score_signals(
    signals: Sequence[Signal],
    config: Optional[ScoringConfig] = None,
) -> ScoringOutput:
    """
    Convenience function to score in one call.

    Args:
        signals: Reconciled signal list
        config: Optional engine configuration

    Returns:
        ScoringOutput with complete assessment
    """
    engine = CoverageScoringEngine(config=config)
    return engine.score(signals)


def format_score_summary(output: ScoringOutput) -> str:
    """
    Format a human-readable coverage summary.

    Useful for logging and the command-line report.

    Args:
        output: Scoring output

    Returns:
        Formatted summary string
    """
    lines = [
        "=" * 50,
        "COVERAGE SCORE SUMMARY",
        "=" * 50,
        f"Score: {output.score}/100",
        f"Coverage Level: {output.coverage_level.value}",
        f"Estimated Effort: {output.effort_estimate.level.value}",
        "",
        "Category Breakdown:",
    ]

    for category in output.categories:
        lines.append(
            f"  {category.name:<30} {category.score:>3}/{category.max_score:<3} "
            f"{category.coverage_level.value}"
        )

    lines.append("")
    lines.append(f"Penalties ({output.total_penalty}):")
    applied = output.applied_penalties
    if applied:
        for penalty in applied:
            lines.append(f"  {penalty.name}: {penalty.points} ({penalty.reason})")
    else:
        lines.append("  None")

    lines.append("")
    lines.append("Effort Factors:")
    for reason in output.effort_estimate.reasons:
        lines.append(f"  - {reason}")

    lines.append("=" * 50)

    return "\n".join(lines)
