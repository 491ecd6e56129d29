"""
Coverage Scoring - Type Definitions.

============================================================
PURPOSE
============================================================
Data contracts for the coverage scoring core.

This module defines the enums and dataclasses that flow
between the registry, the merger, the category scorer, the
penalty engine, the composer and the effort estimator.

============================================================
DESIGN PRINCIPLES
============================================================
- Every output type is frozen
- Enums for discrete labels (category, coverage, effort)
- Collector output (RawFinding) is kept separate from the
  registry-reconciled Signal
- No I/O and no clock reads

============================================================
CATEGORIES
============================================================
Exactly four signal categories, each with a fixed budget:

1. IDENTITY     - 25 points
2. LEADERSHIP   - 20 points
3. VALIDATION   - 25 points
4. OPERATIONAL  - 15 points

Signal ceiling is 85. The headline score is clamped to
0-100 after penalties, so 100 is never reached by signals.

============================================================
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# ============================================================
# ENUMS
# ============================================================


class SignalCategory(str, Enum):
    """The four fixed signal categories, in reporting order."""

    IDENTITY = "identity"
    LEADERSHIP = "leadership"
    VALIDATION = "validation"
    OPERATIONAL = "operational"

    @classmethod
    def all_categories(cls) -> List["SignalCategory"]:
        """Return all categories in reporting order."""
        return [cls.IDENTITY, cls.LEADERSHIP, cls.VALIDATION, cls.OPERATIONAL]


class CoverageLevel(str, Enum):
    """
    Qualitative coverage label.

    Category rollups use all six values. The headline score
    never maps to NONE (see scorers.headline_coverage_level).
    """

    EXCELLENT = "Excellent"
    GOOD = "Good"
    MODERATE = "Moderate"
    LIMITED = "Limited"
    MINIMAL = "Minimal"
    NONE = "None"


class EffortLevel(str, Enum):
    """Estimated diligence workload tier."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ChecklistPriority(str, Enum):
    """Urgency of a follow-up diligence task."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def all_priorities(cls) -> List["ChecklistPriority"]:
        """Return priorities from most to least urgent."""
        return [cls.HIGH, cls.MEDIUM, cls.LOW]


# ============================================================
# REGISTRY CONTRACTS
# ============================================================


@dataclass(frozen=True)
class SignalDefinition:
    """A checkable fact and its fixed point value."""

    id: str
    name: str
    description: str
    category: SignalCategory
    points: int
    source: str


@dataclass(frozen=True)
class CategoryInfo:
    """Display name, point budget and description of a category."""

    category: SignalCategory
    name: str
    max_score: int
    description: str


@dataclass(frozen=True)
class PenaltyDefinition:
    """Fixed metadata for a penalty rule."""

    id: str
    name: str
    description: str
    points: int  # Always negative


# ============================================================
# COLLECTOR OUTPUT
# ============================================================


@dataclass(frozen=True)
class RawFinding:
    """
    A single collector observation.

    Only id, found and value survive the merge. Category and
    points are always re-derived from the registry.
    """

    id: str
    found: bool
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "found": self.found, "value": self.value}


# ============================================================
# SCORING OUTPUT CONTRACTS
# ============================================================


@dataclass(frozen=True)
class Signal:
    """A registry-reconciled signal with its earned points."""

    id: str
    name: str
    description: str
    category: SignalCategory
    found: bool
    points: int
    max_points: int
    source: str
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "found": self.found,
            "value": self.value,
            "points": self.points,
            "max_points": self.max_points,
            "source": self.source,
        }


@dataclass(frozen=True)
class CategoryScore:
    """Rollup of one category's signals."""

    category: SignalCategory
    name: str
    score: int
    max_score: int
    signals: Tuple[Signal, ...]
    coverage_level: CoverageLevel

    @property
    def percentage(self) -> float:
        """Score as a percentage of the category budget."""
        if self.max_score <= 0:
            return 0.0
        return self.score / self.max_score * 100

    @property
    def found_signals(self) -> List[Signal]:
        return [s for s in self.signals if s.found]

    @property
    def missing_signals(self) -> List[Signal]:
        return [s for s in self.signals if not s.found]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "name": self.name,
            "score": self.score,
            "max_score": self.max_score,
            "percentage": round(self.percentage, 1),
            "coverage_level": self.coverage_level.value,
            "signals": [s.to_dict() for s in self.signals],
        }


@dataclass(frozen=True)
class Penalty:
    """Outcome of a single penalty rule."""

    id: str
    name: str
    description: str
    points: int
    applied: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "points": self.points,
            "applied": self.applied,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class EffortEstimate:
    """Diligence workload tier with supporting reasons."""

    level: EffortLevel
    reasons: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level.value, "reasons": list(self.reasons)}


@dataclass(frozen=True)
class ChecklistItem:
    """A follow-up diligence task derived from coverage gaps."""

    id: str
    task: str
    reason: str
    priority: ChecklistPriority
    search_query: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "task": self.task,
            "reason": self.reason,
            "priority": self.priority.value,
            "search_query": self.search_query,
        }


@dataclass(frozen=True)
class ScoringOutput:
    """
    Complete output of a scoring pass.

    Invariant:
        score == clamp(sum(c.score for c in categories) + total_penalty, 0, 100)
    """

    score: int
    coverage_level: CoverageLevel
    categories: Tuple[CategoryScore, ...]
    penalties: Tuple[Penalty, ...]
    total_penalty: int
    signals: Tuple[Signal, ...]
    effort_estimate: EffortEstimate
    engine_version: str = "1.0.0"

    @property
    def category_total(self) -> int:
        return sum(c.score for c in self.categories)

    @property
    def applied_penalties(self) -> List[Penalty]:
        return [p for p in self.penalties if p.applied]

    @property
    def missing_signals(self) -> List[Signal]:
        return [s for s in self.signals if not s.found]

    def get_category(self, category: SignalCategory) -> Optional[CategoryScore]:
        """Return the rollup for a category, if present."""
        for c in self.categories:
            if c.category == category:
                return c
        return None

    def get_signal(self, signal_id: str) -> Optional[Signal]:
        """Return a signal by id, if present."""
        for s in self.signals:
            if s.id == signal_id:
                return s
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "score": self.score,
            "coverage_level": self.coverage_level.value,
            "categories": [c.to_dict() for c in self.categories],
            "penalties": [p.to_dict() for p in self.penalties],
            "total_penalty": self.total_penalty,
            "signals": [s.to_dict() for s in self.signals],
            "effort_estimate": self.effort_estimate.to_dict(),
            "engine_version": self.engine_version,
        }


# ============================================================
# EXCEPTIONS
# ============================================================


class ScoringError(Exception):
    """Unexpected internal failure inside the scoring engine."""
    pass


class RegistryError(ScoringError):
    """The signal catalog violates its own invariants."""
    pass
