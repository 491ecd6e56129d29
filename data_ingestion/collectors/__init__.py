"""
Data Ingestion - Collectors Package.

This package contains all footprint collectors.
Each collector is responsible for a specific source.

Collectors:
- website: Company website pages and homepage content
- domain: RDAP registration age and TLS
- search: Third-party, news and general search visibility
- linkedin: LinkedIn company page and leadership profiles
- careers: Live job listings
- techstack: Homepage technology fingerprints
- financials: Public financial filings (metadata only)
"""

from data_ingestion.collectors.base import BaseCollector
from data_ingestion.collectors.careers import CareersCollector
from data_ingestion.collectors.domain import DomainCollector
from data_ingestion.collectors.financials import FinancialsCollector
from data_ingestion.collectors.linkedin import LinkedInCollector
from data_ingestion.collectors.search import SearchCollector
from data_ingestion.collectors.serper import SerperClient
from data_ingestion.collectors.techstack import TechStackCollector
from data_ingestion.collectors.website import WebsiteCollector


__all__ = [
    "BaseCollector",
    "SerperClient",
    "WebsiteCollector",
    "DomainCollector",
    "SearchCollector",
    "LinkedInCollector",
    "CareersCollector",
    "TechStackCollector",
    "FinancialsCollector",
]
