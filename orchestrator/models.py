"""
Orchestrator - Models.

============================================================
RESPONSIBILITY
============================================================
Defines data models for the scan orchestrator.

- Scan job lifecycle (queued, processing, completed, failed)
- Scan result aggregate (scoring output plus scan context)
- Progress reporting

============================================================
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.exceptions import StateTransitionError
from coverage_scoring.next_steps import build_checklist
from coverage_scoring.types import (
    CategoryScore,
    ChecklistItem,
    CoverageLevel,
    EffortEstimate,
    Penalty,
    ScoringOutput,
    Signal,
)
from data_ingestion.types import CollectorError, FinancialData


ProgressCallback = Callable[[int, str], None]


# ============================================================
# SCAN STATUS
# ============================================================

class ScanStatus(Enum):
    """Scan job lifecycle status."""

    QUEUED = "queued"
    """Job created, scan not started."""

    PROCESSING = "processing"
    """Collectors or scoring in progress."""

    COMPLETED = "completed"
    """Scan finished with a result."""

    FAILED = "failed"
    """Scan aborted with an error."""

    @property
    def is_terminal(self) -> bool:
        """Check if no further transitions are allowed."""
        return self in (ScanStatus.COMPLETED, ScanStatus.FAILED)


# Allowed transitions; there are no retries
_TRANSITIONS = {
    ScanStatus.QUEUED: (ScanStatus.PROCESSING, ScanStatus.FAILED),
    ScanStatus.PROCESSING: (ScanStatus.COMPLETED, ScanStatus.FAILED),
    ScanStatus.COMPLETED: (),
    ScanStatus.FAILED: (),
}


# ============================================================
# SCAN STEPS
# ============================================================

class ScanStep(Enum):
    """Progress checkpoints reported during a scan."""

    CHECKING_WEBSITE = (10, "Checking website...")
    ANALYZING = (30, "Analyzing company data...")
    SCORING = (85, "Calculating score...")
    ENRICHING = (90, "Generating AI analysis...")
    COMPLETE = (100, "Complete")

    def __init__(self, progress: int, label: str):
        self._progress = progress
        self._label = label

    @property
    def progress(self) -> int:
        """Get progress percentage."""
        return self._progress

    @property
    def label(self) -> str:
        """Get human-readable step label."""
        return self._label


# ============================================================
# SCAN RESULT
# ============================================================

@dataclass(frozen=True)
class ScanResult:
    """
    Top-level result of one scan.

    Scoring fields are copied from the ScoringOutput so that
    score == clamp(sum(category scores) + total_penalty, 0, 100)
    holds here as well. Enrichment returns a new instance.
    """

    job_id: str
    url: str
    domain: str
    company_name: str

    # Scoring
    score: int
    coverage_level: CoverageLevel
    categories: Tuple[CategoryScore, ...]
    penalties: Tuple[Penalty, ...]
    total_penalty: int
    signals: Tuple[Signal, ...]
    effort_estimate: EffortEstimate

    checklist: Tuple[ChecklistItem, ...] = ()
    engine_version: str = "1.0.0"

    # Context
    financial_data: Optional[FinancialData] = None
    ai_interpretation: Optional[str] = None
    financial_analysis: Optional[str] = None
    collector_errors: Tuple[CollectorError, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    duration_seconds: float = 0.0

    @classmethod
    def from_scoring(
        cls,
        output: ScoringOutput,
        job_id: str,
        url: str,
        domain: str,
        company_name: str,
        financial_data: Optional[FinancialData] = None,
        collector_errors: Tuple[CollectorError, ...] = (),
        duration_seconds: float = 0.0,
    ) -> "ScanResult":
        """
        Build a result from a scoring output and scan context.

        The follow-up checklist is derived here, where the company
        name is known.
        """
        return cls(
            job_id=job_id,
            url=url,
            domain=domain,
            company_name=company_name,
            score=output.score,
            coverage_level=output.coverage_level,
            categories=output.categories,
            penalties=output.penalties,
            total_penalty=output.total_penalty,
            signals=output.signals,
            effort_estimate=output.effort_estimate,
            checklist=build_checklist(output.signals, output.categories, company_name),
            engine_version=output.engine_version,
            financial_data=financial_data,
            collector_errors=tuple(collector_errors),
            duration_seconds=duration_seconds,
        )

    @property
    def applied_penalties(self) -> List[Penalty]:
        return [p for p in self.penalties if p.applied]

    @property
    def found_signals(self) -> List[Signal]:
        return [s for s in self.signals if s.found]

    @property
    def missing_signals(self) -> List[Signal]:
        return [s for s in self.signals if not s.found]

    def with_enrichment(
        self,
        ai_interpretation: Optional[str] = None,
        financial_analysis: Optional[str] = None,
    ) -> "ScanResult":
        """Return a copy carrying the interpretation texts."""
        return replace(
            self,
            ai_interpretation=ai_interpretation,
            financial_analysis=financial_analysis,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "job_id": self.job_id,
            "url": self.url,
            "domain": self.domain,
            "company_name": self.company_name,
            "score": self.score,
            "coverage_level": self.coverage_level.value,
            "categories": [c.to_dict() for c in self.categories],
            "penalties": [p.to_dict() for p in self.penalties],
            "total_penalty": self.total_penalty,
            "signals": [s.to_dict() for s in self.signals],
            "effort_estimate": self.effort_estimate.to_dict(),
            "checklist": [item.to_dict() for item in self.checklist],
            "engine_version": self.engine_version,
            "financial_data": self.financial_data.to_dict() if self.financial_data else None,
            "ai_interpretation": self.ai_interpretation,
            "financial_analysis": self.financial_analysis,
            "collector_errors": [e.to_dict() for e in self.collector_errors],
            "timestamp": self.timestamp.isoformat(),
            "duration_seconds": round(self.duration_seconds, 3),
        }


# ============================================================
# SCAN JOB
# ============================================================

@dataclass
class ScanJob:
    """A scan request and its lifecycle."""

    job_id: str
    url: str
    status: ScanStatus = ScanStatus.QUEUED
    progress: int = 0
    current_step: str = "Queued"
    result: Optional[ScanResult] = None
    error: Optional[Dict[str, str]] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def _transition(self, to_status: ScanStatus) -> None:
        if to_status not in _TRANSITIONS[self.status]:
            raise StateTransitionError(
                f"Cannot move scan {self.job_id} from {self.status.value} to {to_status.value}",
                from_state=self.status.value,
                to_state=to_status.value,
            )
        self.status = to_status
        self.updated_at = datetime.now(timezone.utc)

    def start(self) -> None:
        """queued -> processing."""
        self._transition(ScanStatus.PROCESSING)

    def update_progress(self, progress: int, step: str) -> None:
        """Record a progress checkpoint while processing."""
        if self.status != ScanStatus.PROCESSING:
            raise StateTransitionError(
                f"Cannot report progress for scan {self.job_id} in state {self.status.value}",
                from_state=self.status.value,
            )
        self.progress = max(0, min(100, progress))
        self.current_step = step
        self.updated_at = datetime.now(timezone.utc)

    def complete(self, result: ScanResult) -> None:
        """processing -> completed."""
        self._transition(ScanStatus.COMPLETED)
        self.result = result
        self.progress = ScanStep.COMPLETE.progress
        self.current_step = ScanStep.COMPLETE.label

    def fail(self, code: str, message: str) -> None:
        """queued|processing -> failed."""
        self._transition(ScanStatus.FAILED)
        self.error = {"code": code, "message": message}
        self.current_step = "Failed"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "job_id": self.job_id,
            "url": self.url,
            "status": self.status.value,
            "progress": self.progress,
            "current_step": self.current_step,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    # Enums
    "ScanStatus",
    "ScanStep",

    # Results
    "ScanResult",
    "ScanJob",

    # Callbacks
    "ProgressCallback",
]
