"""
Data Ingestion Package.

This package handles all footprint collection.
No scoring logic - only data acquisition.

Sub-packages:
- collectors: Collection from websites, registries and search
"""

from data_ingestion.collectors import (
    BaseCollector,
    CareersCollector,
    DomainCollector,
    FinancialsCollector,
    LinkedInCollector,
    SearchCollector,
    SerperClient,
    TechStackCollector,
    WebsiteCollector,
)
from data_ingestion.types import (
    CollectorSource,
    CollectorStatus,
    CollectorConfig,
    CollectorContext,
    CollectorError,
    CollectorResult,
    FinancialSource,
    CompanyType,
    FilingLink,
    FinancialRecord,
    FinancialData,
    IngestionError,
    FetchError,
    ParseError,
)


__all__ = [
    # Collectors
    "BaseCollector",
    "SerperClient",
    "WebsiteCollector",
    "DomainCollector",
    "SearchCollector",
    "LinkedInCollector",
    "CareersCollector",
    "TechStackCollector",
    "FinancialsCollector",
    # Types - Enums
    "CollectorSource",
    "CollectorStatus",
    "FinancialSource",
    "CompanyType",
    # Types - Collection
    "CollectorConfig",
    "CollectorContext",
    "CollectorError",
    "CollectorResult",
    # Types - Financials
    "FilingLink",
    "FinancialRecord",
    "FinancialData",
    # Types - Errors
    "IngestionError",
    "FetchError",
    "ParseError",
]
