"""
Coverage Scoring - Package.

============================================================
PURPOSE
============================================================
Deterministic aggregation of a company's public footprint
into a 0-100 coverage score used to triage diligence effort.

============================================================
WHAT IT IS
============================================================
- A pure function from collector findings to a score
- Registry-driven: every point value is declared once
- Total: works with any subset of findings, never raises
  for missing data

============================================================
WHAT IT IS NOT
============================================================
- NOT a truthfulness check of discovered data
- NOT a valuation
- NOT stateful across scans

============================================================
FOUR CATEGORIES
============================================================
1. IDENTITY     (25): website, contact, location, domain, TLS
2. LEADERSHIP   (20): LinkedIn, founders, team page, headcount
3. VALIDATION   (25): mentions, case studies, partners, news
4. OPERATIONAL  (15): careers, job listings, tech stack, blog

Signal ceiling 85, penalties down to -15, headline clamped
to 0-100.

============================================================
USAGE
============================================================
    from coverage_scoring import CoverageScoringEngine, RawFinding

    engine = CoverageScoringEngine()
    output = engine.score_findings([
        RawFinding(id="website_reachable", found=True),
        RawFinding(id="linkedin_company", found=False),
    ])

    print(output.score, output.coverage_level.value)

============================================================
"""

from .types import (
    SignalCategory,
    CoverageLevel,
    EffortLevel,
    ChecklistPriority,
    SignalDefinition,
    CategoryInfo,
    PenaltyDefinition,
    RawFinding,
    Signal,
    CategoryScore,
    Penalty,
    EffortEstimate,
    ChecklistItem,
    ScoringOutput,
    ScoringError,
    RegistryError,
)
from .registry import (
    all_definitions,
    get_definition,
    definitions_for_category,
    category_info,
    penalty_definitions,
    max_signal_score,
    validate_registry,
)
from .config import (
    CoverageThresholds,
    PenaltyThresholds,
    EffortThresholds,
    ScoringConfig,
    get_config,
    set_config,
)
from .merger import merge_signals
from .scorers import (
    CategoryScorer,
    coverage_level_for_percentage,
    headline_coverage_level,
)
from .penalties import PenaltyEngine
from .effort import EffortEstimator
from .next_steps import build_checklist, group_by_priority
from .engine import (
    CoverageScoringEngine,
    score_signals,
    format_score_summary,
)


__all__ = [
    # Enums
    "SignalCategory",
    "CoverageLevel",
    "EffortLevel",
    "ChecklistPriority",
    # Registry
    "SignalDefinition",
    "CategoryInfo",
    "PenaltyDefinition",
    "all_definitions",
    "get_definition",
    "definitions_for_category",
    "category_info",
    "penalty_definitions",
    "max_signal_score",
    "validate_registry",
    # Inputs / outputs
    "RawFinding",
    "Signal",
    "CategoryScore",
    "Penalty",
    "EffortEstimate",
    "ChecklistItem",
    "ScoringOutput",
    # Errors
    "ScoringError",
    "RegistryError",
    # Config
    "CoverageThresholds",
    "PenaltyThresholds",
    "EffortThresholds",
    "ScoringConfig",
    "get_config",
    "set_config",
    # Components
    "merge_signals",
    "CategoryScorer",
    "coverage_level_for_percentage",
    "headline_coverage_level",
    "PenaltyEngine",
    "EffortEstimator",
    "build_checklist",
    "group_by_priority",
    # Engine
    "CoverageScoringEngine",
    "score_signals",
    "format_score_summary",
]
