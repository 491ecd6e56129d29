"""
Coverage Scoring - Configuration.

============================================================
CONFIGURABLE SCORING THRESHOLDS
============================================================

Point values live in the registry and are NOT configurable.
Only the label thresholds and rule cut-offs are:
- Coverage level thresholds
- Penalty rule cut-offs
- Effort tier thresholds and reason limits
- Headline score bounds

Configuration can be loaded from:
- Default values
- Environment variables
- YAML config file

============================================================
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import logging


logger = logging.getLogger(__name__)


# =============================================================
# COVERAGE THRESHOLDS
# =============================================================


@dataclass
class CoverageThresholds:
    """
    Lower bounds (inclusive) for each coverage label.

    Applied to a category percentage or to the headline score.
    """
    excellent: float = 85.0
    good: float = 70.0
    moderate: float = 50.0
    limited: float = 30.0

    def __post_init__(self) -> None:
        """Validate ordering."""
        if not (self.excellent >= self.good >= self.moderate >= self.limited >= 0):
            raise ValueError(
                "Coverage thresholds must satisfy excellent >= good >= moderate >= limited >= 0"
            )

    def to_dict(self) -> Dict[str, float]:
        return {
            "excellent": self.excellent,
            "good": self.good,
            "moderate": self.moderate,
            "limited": self.limited,
        }


# =============================================================
# PENALTY THRESHOLDS
# =============================================================


@dataclass
class PenaltyThresholds:
    """Cut-offs used by the penalty rules."""
    # no_leadership applies when leadership score is strictly below this
    leadership_min_score: int = 6

    # new_domain applies when the domain_age value contains this marker
    new_domain_marker: str = "< 1"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leadership_min_score": self.leadership_min_score,
            "new_domain_marker": self.new_domain_marker,
        }


# =============================================================
# EFFORT THRESHOLDS
# =============================================================


@dataclass
class EffortThresholds:
    """
    Effort tier thresholds.

    - LOW:    score >= low_min_score
    - MEDIUM: medium_min_score <= score < low_min_score
    - HIGH:   score < medium_min_score
    """
    low_min_score: int = 70
    medium_min_score: int = 50

    # Missing signals worth at least this much are "critical"
    critical_min_points: int = 5

    # Reason is emitted when missing count is strictly above the limit
    leadership_missing_limit: int = 2
    validation_missing_limit: int = 3
    identity_missing_limit: int = 2

    def __post_init__(self) -> None:
        if self.medium_min_score > self.low_min_score:
            raise ValueError("medium_min_score must be <= low_min_score")

    def to_dict(self) -> Dict[str, int]:
        return {
            "low_min_score": self.low_min_score,
            "medium_min_score": self.medium_min_score,
            "critical_min_points": self.critical_min_points,
            "leadership_missing_limit": self.leadership_missing_limit,
            "validation_missing_limit": self.validation_missing_limit,
            "identity_missing_limit": self.identity_missing_limit,
        }


# =============================================================
# MAIN CONFIGURATION
# =============================================================


@dataclass
class ScoringConfig:
    """
    Main configuration for coverage scoring.

    Combines all sub-configurations.
    """
    coverage: CoverageThresholds = field(default_factory=CoverageThresholds)
    penalties: PenaltyThresholds = field(default_factory=PenaltyThresholds)
    effort: EffortThresholds = field(default_factory=EffortThresholds)

    # Headline clamp
    min_score: int = 0
    max_score: int = 100

    engine_version: str = "1.0.0"

    @classmethod
    def from_env(cls) -> "ScoringConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - COVERAGE_THRESHOLD_EXCELLENT
        - COVERAGE_THRESHOLD_GOOD
        - COVERAGE_THRESHOLD_MODERATE
        - COVERAGE_THRESHOLD_LIMITED
        - PENALTY_LEADERSHIP_MIN_SCORE
        - EFFORT_LOW_MIN_SCORE
        - EFFORT_MEDIUM_MIN_SCORE
        - EFFORT_CRITICAL_MIN_POINTS
        """
        config = cls()

        if os.getenv("COVERAGE_THRESHOLD_EXCELLENT"):
            config.coverage.excellent = float(os.getenv("COVERAGE_THRESHOLD_EXCELLENT"))
        if os.getenv("COVERAGE_THRESHOLD_GOOD"):
            config.coverage.good = float(os.getenv("COVERAGE_THRESHOLD_GOOD"))
        if os.getenv("COVERAGE_THRESHOLD_MODERATE"):
            config.coverage.moderate = float(os.getenv("COVERAGE_THRESHOLD_MODERATE"))
        if os.getenv("COVERAGE_THRESHOLD_LIMITED"):
            config.coverage.limited = float(os.getenv("COVERAGE_THRESHOLD_LIMITED"))

        if os.getenv("PENALTY_LEADERSHIP_MIN_SCORE"):
            config.penalties.leadership_min_score = int(os.getenv("PENALTY_LEADERSHIP_MIN_SCORE"))

        if os.getenv("EFFORT_LOW_MIN_SCORE"):
            config.effort.low_min_score = int(os.getenv("EFFORT_LOW_MIN_SCORE"))
        if os.getenv("EFFORT_MEDIUM_MIN_SCORE"):
            config.effort.medium_min_score = int(os.getenv("EFFORT_MEDIUM_MIN_SCORE"))
        if os.getenv("EFFORT_CRITICAL_MIN_POINTS"):
            config.effort.critical_min_points = int(os.getenv("EFFORT_CRITICAL_MIN_POINTS"))

        # Re-run ordering checks on values that bypassed __init__
        config.coverage.__post_init__()
        config.effort.__post_init__()

        return config

    @classmethod
    def from_yaml(cls, path: Path) -> "ScoringConfig":
        """Load configuration from YAML file."""
        try:
            import yaml
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}

            config = cls()

            if 'coverage' in data:
                c = data['coverage']
                config.coverage = CoverageThresholds(
                    excellent=c.get('excellent', 85.0),
                    good=c.get('good', 70.0),
                    moderate=c.get('moderate', 50.0),
                    limited=c.get('limited', 30.0),
                )

            if 'penalties' in data:
                p = data['penalties']
                config.penalties = PenaltyThresholds(
                    leadership_min_score=p.get('leadership_min_score', 6),
                    new_domain_marker=p.get('new_domain_marker', "< 1"),
                )

            if 'effort' in data:
                e = data['effort']
                config.effort = EffortThresholds(
                    low_min_score=e.get('low_min_score', 70),
                    medium_min_score=e.get('medium_min_score', 50),
                    critical_min_points=e.get('critical_min_points', 5),
                    leadership_missing_limit=e.get('leadership_missing_limit', 2),
                    validation_missing_limit=e.get('validation_missing_limit', 3),
                    identity_missing_limit=e.get('identity_missing_limit', 2),
                )

            return config

        except Exception as e:
            logger.warning(f"Failed to load YAML config from {path}: {e}")
            return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "coverage": self.coverage.to_dict(),
            "penalties": self.penalties.to_dict(),
            "effort": self.effort.to_dict(),
            "min_score": self.min_score,
            "max_score": self.max_score,
            "engine_version": self.engine_version,
        }


# =============================================================
# GLOBAL CONFIG SINGLETON
# =============================================================


_default_config: Optional[ScoringConfig] = None


def get_config() -> ScoringConfig:
    """Get the global scoring configuration."""
    global _default_config
    if _default_config is None:
        _default_config = ScoringConfig.from_env()
    return _default_config


def set_config(config: ScoringConfig) -> None:
    """Set the global scoring configuration."""
    global _default_config
    _default_config = config
