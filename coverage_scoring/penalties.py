"""
Coverage Scoring - Penalty Engine.

============================================================
PURPOSE
============================================================
Cross-cutting risk adjustments triggered by absence of
evidence. Each rule is independent and yields exactly one
Penalty record, applied or not.

============================================================
RULES
============================================================
no_leadership  (-5)  leadership category score below cut-off
website_only   (-5)  no third-party mentions AND no news
no_social      (-3)  no LinkedIn company page
new_domain     (-2)  domain_age not found and its value
                     reads "< 1 year ..."

Total penalty range: -15 to 0.

============================================================
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from .config import PenaltyThresholds
from .registry import get_penalty_definition
from .types import CategoryScore, Penalty, Signal, SignalCategory


# ============================================================
# BASE RULE
# ============================================================


class BasePenaltyRule(ABC):
    """
    Abstract base class for penalty rules.

    Subclasses decide whether the rule applies and why. Name,
    description and points always come from the registry.
    """

    def __init__(self, thresholds: Optional[PenaltyThresholds] = None):
        self._thresholds = thresholds or PenaltyThresholds()

    @property
    @abstractmethod
    def penalty_id(self) -> str:
        """Return the registry id this rule evaluates."""
        pass

    @abstractmethod
    def check(
        self,
        signals: Dict[str, Signal],
        categories: Dict[SignalCategory, CategoryScore],
    ) -> Tuple[bool, Optional[str]]:
        """
        Decide whether the penalty applies.

        Returns:
            (applied, reason); reason is None when not applied
        """
        pass

    def evaluate(
        self,
        signals: Dict[str, Signal],
        categories: Dict[SignalCategory, CategoryScore],
    ) -> Penalty:
        definition = get_penalty_definition(self.penalty_id)
        applied, reason = self.check(signals, categories)

        return Penalty(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            points=definition.points,
            applied=applied,
            reason=reason if applied else None,
        )

    @staticmethod
    def _is_found(signals: Dict[str, Signal], signal_id: str) -> bool:
        signal = signals.get(signal_id)
        return signal is not None and signal.found


# ============================================================
# RULES
# ============================================================


class NoLeadershipRule(BasePenaltyRule):
    """Leadership category score below the configured cut-off."""

    @property
    def penalty_id(self) -> str:
        return "no_leadership"

    def check(self, signals, categories):
        leadership = categories.get(SignalCategory.LEADERSHIP)
        score = leadership.score if leadership is not None else 0

        if score < self._thresholds.leadership_min_score:
            return True, "Leadership category score below threshold"
        return False, None


class WebsiteOnlyRule(BasePenaltyRule):
    """Neither third-party mentions nor news coverage were found."""

    @property
    def penalty_id(self) -> str:
        return "website_only"

    def check(self, signals, categories):
        if not self._is_found(signals, "third_party_mentions") and \
                not self._is_found(signals, "news_coverage"):
            return True, "No external validation signals found"
        return False, None


class NoSocialRule(BasePenaltyRule):
    """LinkedIn company page not found."""

    @property
    def penalty_id(self) -> str:
        return "no_social"

    def check(self, signals, categories):
        if not self._is_found(signals, "linkedin_company"):
            return True, "LinkedIn company page not found"
        return False, None


class NewDomainRule(BasePenaltyRule):
    """
    Domain younger than a year.

    Keyed on the domain_age value string produced by the
    domain collector ("< 1 year (N months)"). A missing value
    never applies the penalty.
    """

    @property
    def penalty_id(self) -> str:
        return "new_domain"

    def check(self, signals, categories):
        domain_age = signals.get("domain_age")
        if domain_age is None or domain_age.found:
            return False, None

        value = domain_age.value or ""
        if self._thresholds.new_domain_marker in value:
            return True, value
        return False, None


# ============================================================
# PENALTY ENGINE
# ============================================================


class PenaltyEngine:
    """Runs every penalty rule and totals the applied points."""

    def __init__(self, thresholds: Optional[PenaltyThresholds] = None):
        self._rules: List[BasePenaltyRule] = [
            NoLeadershipRule(thresholds),
            WebsiteOnlyRule(thresholds),
            NoSocialRule(thresholds),
            NewDomainRule(thresholds),
        ]

    @property
    def rules(self) -> List[BasePenaltyRule]:
        return list(self._rules)

    def evaluate(
        self,
        signals: Sequence[Signal],
        categories: Sequence[CategoryScore],
    ) -> Tuple[List[Penalty], int]:
        """
        Evaluate all rules.

        Args:
            signals: Reconciled signal list
            categories: Category rollups

        Returns:
            (penalties in registry order, total applied points)
        """
        by_id = {s.id: s for s in signals}
        by_category = {c.category: c for c in categories}

        penalties = [rule.evaluate(by_id, by_category) for rule in self._rules]
        total = sum(p.points for p in penalties if p.applied)

        return penalties, total
