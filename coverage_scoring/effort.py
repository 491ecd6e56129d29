"""
Coverage Scoring - Effort Estimator.

Translates the headline score and the set of missing
signals into a diligence workload tier (Low / Medium / High)
with human-readable reasons.
"""

from typing import List, Optional, Sequence

from .config import EffortThresholds
from .types import EffortEstimate, EffortLevel, Signal, SignalCategory


_FALLBACK_REASONS = {
    EffortLevel.LOW: "Standard validation of existing signals",
    EffortLevel.MEDIUM: "Moderate research needed for gaps",
    EffortLevel.HIGH: "Extensive primary research required",
}


class EffortEstimator:
    """Derives an EffortEstimate from score and missing signals."""

    def __init__(self, thresholds: Optional[EffortThresholds] = None):
        self._thresholds = thresholds or EffortThresholds()

    def level_for_score(self, score: int) -> EffortLevel:
        t = self._thresholds
        if score >= t.low_min_score:
            return EffortLevel.LOW
        elif score >= t.medium_min_score:
            return EffortLevel.MEDIUM
        return EffortLevel.HIGH

    def estimate(self, score: int, missing_signals: Sequence[Signal]) -> EffortEstimate:
        """
        Build the effort estimate.

        Args:
            score: Clamped headline score
            missing_signals: Signals with found == False

        Returns:
            EffortEstimate with at least one reason
        """
        t = self._thresholds
        reasons: List[str] = []

        critical = [s for s in missing_signals if s.max_points >= t.critical_min_points]
        if critical:
            reasons.append(
                f"{len(critical)} critical signal(s) require manual verification"
            )

        missing_leadership = self._count(missing_signals, SignalCategory.LEADERSHIP)
        if missing_leadership > t.leadership_missing_limit:
            reasons.append("Leadership information requires extensive research")

        missing_validation = self._count(missing_signals, SignalCategory.VALIDATION)
        if missing_validation > t.validation_missing_limit:
            reasons.append("Limited external validation will require primary research")

        missing_identity = self._count(missing_signals, SignalCategory.IDENTITY)
        if missing_identity > t.identity_missing_limit:
            reasons.append("Basic company identity needs verification")

        level = self.level_for_score(score)
        if not reasons:
            reasons.append(_FALLBACK_REASONS[level])

        return EffortEstimate(level=level, reasons=tuple(reasons))

    @staticmethod
    def _count(signals: Sequence[Signal], category: SignalCategory) -> int:
        return sum(1 for s in signals if s.category == category)
