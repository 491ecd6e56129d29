"""
Data Ingestion - Type Definitions.

============================================================
PURPOSE
============================================================
Shared types for the collector layer.

- Configuration dataclasses
- Collector context and result types
- Financial filing types
- Error types

============================================================
DESIGN PRINCIPLES
============================================================
- Immutable data structures where possible
- Clear typing for all fields
- No scoring logic (point values live in the registry)
- Serializable for logging

============================================================
"""

import os
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from coverage_scoring.types import RawFinding


# =============================================================
# ENUMS
# =============================================================

class CollectorSource(str, Enum):
    """Identifiers for collectors."""
    WEBSITE = "website"
    DOMAIN = "domain"
    SEARCH = "search"
    LINKEDIN = "linkedin"
    CAREERS = "careers"
    TECHSTACK = "techstack"
    FINANCIALS = "financials"


class CollectorStatus(str, Enum):
    """Status of a collection run."""
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
    SKIPPED = "skipped"


# =============================================================
# CONFIGURATION TYPES
# =============================================================

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; DiligenceScanner/1.0)"
BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


@dataclass(frozen=True)
class CollectorConfig:
    """Configuration shared by all collectors."""
    enabled: bool = True
    timeout_seconds: float = 5.0
    user_agent: str = DEFAULT_USER_AGENT
    verify_user_agent: str = BROWSER_USER_AGENT
    version: str = "1.0.0"

    # Search API (Serper)
    serper_api_key: Optional[str] = None
    serper_base_url: str = "https://google.serper.dev"

    # Registries
    rdap_base_url: str = "https://rdap.org"
    sec_search_url: str = "https://efts.sec.gov/LATEST/search-index"
    sec_user_agent: str = "DiligenceScanner/1.0 (contact@example.com)"

    @property
    def has_search_api(self) -> bool:
        return bool(self.serper_api_key)

    @classmethod
    def from_env(cls) -> "CollectorConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - SERPER_API_KEY
        - COLLECTOR_HTTP_TIMEOUT_SECONDS
        - SCANNER_USER_AGENT
        """
        config = cls(serper_api_key=os.getenv("SERPER_API_KEY") or None)

        if os.getenv("COLLECTOR_HTTP_TIMEOUT_SECONDS"):
            config = replace(
                config,
                timeout_seconds=float(os.getenv("COLLECTOR_HTTP_TIMEOUT_SECONDS")),
            )
        if os.getenv("SCANNER_USER_AGENT"):
            config = replace(config, user_agent=os.getenv("SCANNER_USER_AGENT"))

        return config


# =============================================================
# CONTEXT
# =============================================================

@dataclass(frozen=True)
class CollectorContext:
    """What every collector knows about the scan target."""
    url: str
    domain: str
    company_name: Optional[str] = None

    @property
    def search_query(self) -> str:
        """Company name if known, otherwise the domain."""
        return self.company_name or self.domain or ""

    def with_company_name(self, company_name: str) -> "CollectorContext":
        return replace(self, company_name=company_name)


# =============================================================
# COLLECTION RESULT TYPES
# =============================================================

@dataclass(frozen=True)
class CollectorError:
    """A non-fatal problem reported by a collector."""
    code: str
    message: str
    recoverable: bool = True
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "code": self.code,
            "message": self.message,
            "recoverable": self.recoverable,
        }


@dataclass
class CollectorResult:
    """Result of a single collector run."""
    source: str = ""
    status: CollectorStatus = CollectorStatus.SUCCESS

    findings: List[RawFinding] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    errors: List[CollectorError] = field(default_factory=list)

    # Timing
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_seconds: float = 0.0

    def add_finding(self, signal_id: str, found: bool, value: Optional[str] = None) -> None:
        """Record an observation for a signal id."""
        self.findings.append(RawFinding(id=signal_id, found=found, value=value))

    def add_error(self, code: str, message: str, recoverable: bool = True) -> None:
        """Add an error; a successful run becomes partial."""
        self.errors.append(CollectorError(
            code=code,
            message=message,
            recoverable=recoverable,
            source=self.source,
        ))
        if self.status == CollectorStatus.SUCCESS:
            self.status = CollectorStatus.PARTIAL

    def mark_failed(self, code: str, message: str, recoverable: bool = True) -> None:
        """Mark the run as failed."""
        self.add_error(code, message, recoverable)
        self.status = CollectorStatus.FAILED

    def mark_complete(self, completed_at: datetime) -> None:
        """Mark the run as complete and calculate duration."""
        self.completed_at = completed_at
        if self.started_at:
            delta = completed_at - self.started_at
            self.duration_seconds = delta.total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "source": self.source,
            "status": self.status.value,
            "findings": len(self.findings),
            "found": sum(1 for f in self.findings if f.found),
            "duration_seconds": round(self.duration_seconds, 3),
            "error_count": len(self.errors),
            "errors": [e.to_dict() for e in self.errors[:5]],  # Limit for logging
        }


# =============================================================
# FINANCIAL FILING TYPES
# =============================================================

class FinancialSource(str, Enum):
    SEC = "SEC"
    COMPANIES_HOUSE = "Companies House"
    PUBLIC_FILING = "Public Filing"
    NONE = "None"


class CompanyType(str, Enum):
    PUBLIC_US = "Public US"
    UK_COMPANY = "UK Company"
    PRIVATE = "Private"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class FilingLink:
    name: str
    url: str
    date: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "url": self.url, "date": self.date}


@dataclass(frozen=True)
class FinancialRecord:
    source: str
    source_url: str
    verified: bool
    period: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "source_url": self.source_url,
            "verified": self.verified,
            "period": self.period,
            "description": self.description,
        }


@dataclass(frozen=True)
class FinancialData:
    """Pointers to public financial filings for the company."""
    available: bool = False
    source: FinancialSource = FinancialSource.NONE
    company_type: CompanyType = CompanyType.UNKNOWN
    records: Tuple[FinancialRecord, ...] = ()
    filing_links: Tuple[FilingLink, ...] = ()
    ticker: Optional[str] = None
    cik: Optional[str] = None
    company_number: Optional[str] = None
    message: str = "No public financial filings found"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "source": self.source.value,
            "company_type": self.company_type.value,
            "records": [r.to_dict() for r in self.records],
            "filing_links": [f.to_dict() for f in self.filing_links],
            "ticker": self.ticker,
            "cik": self.cik,
            "company_number": self.company_number,
            "message": self.message,
        }


# =============================================================
# ERROR TYPES
# =============================================================

class IngestionError(Exception):
    """Base exception for collector errors."""

    def __init__(
        self,
        message: str,
        source: str,
        recoverable: bool = True,
        details: Optional[Dict[str, Any]] = None,
        code: str = "INGESTION_ERROR",
    ):
        super().__init__(message)
        self.source = source
        self.recoverable = recoverable
        self.details = details or {}
        self.code = code


class FetchError(IngestionError):
    """Error fetching data from external source."""

    def __init__(self, message: str, source: str, **kwargs):
        kwargs.setdefault("code", "FETCH_ERROR")
        super().__init__(message, source, **kwargs)


class ParseError(IngestionError):
    """Error parsing data from external source."""

    def __init__(self, message: str, source: str, **kwargs):
        kwargs.setdefault("code", "PARSE_ERROR")
        super().__init__(message, source, **kwargs)
