"""
Core Module Package.

This package contains the cross-cutting pieces that the
collectors, the orchestrator and the CLI all depend on.

Components:
- exceptions: Scanner exception hierarchy
- urls: Target normalization and job ids
"""

from .exceptions import (
    Severity,
    ErrorClassification,
    ScannerException,
    ConfigurationError,
    InvalidTargetError,
    StateTransitionError,
    ScanError,
    classify_exception,
    wrap_exception,
)
from .urls import (
    normalize_url,
    extract_domain,
    domain_to_company_name,
    is_company_website,
    generate_job_id,
)


__all__ = [
    "Severity",
    "ErrorClassification",
    "ScannerException",
    "ConfigurationError",
    "InvalidTargetError",
    "StateTransitionError",
    "ScanError",
    "classify_exception",
    "wrap_exception",
    "normalize_url",
    "extract_domain",
    "domain_to_company_name",
    "is_company_website",
    "generate_job_id",
]
