"""
Core Module - Exceptions.

============================================================
RESPONSIBILITY
============================================================
Defines the scanner-level exception hierarchy.

- Provides clear exception hierarchy
- Separates scan-fatal errors from recoverable ones
- Includes context for debugging

Collector-level fetch problems live in data_ingestion.types
and never escape a collector. Scoring-internal failures live
in coverage_scoring.types.

============================================================
EXCEPTION HIERARCHY
============================================================
ScannerException (base)
├── ConfigurationError
├── InvalidTargetError        (scan-fatal, pre-flight)
├── StateTransitionError      (scan job state machine)
└── ScanError                 (unexpected failure during a scan)

============================================================
"""

from enum import Enum
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# ============================================================
# SEVERITY LEVELS
# ============================================================

class Severity(Enum):
    """Exception severity levels for logging."""

    LOW = "low"
    """Minor issue, informational."""

    MEDIUM = "medium"
    """Moderate issue, requires attention."""

    HIGH = "high"
    """Serious issue, the scan cannot produce a result."""


# ============================================================
# ERROR CLASSIFICATION
# ============================================================

class ErrorClassification(Enum):
    """Classification of error recoverability."""

    RECOVERABLE = "recoverable"
    """Error is absorbed and the scan continues."""

    TRANSIENT = "transient"
    """Temporary error, a later scan may succeed."""

    NON_RECOVERABLE = "non_recoverable"
    """Permanent error, requires different input."""


# ============================================================
# BASE EXCEPTION
# ============================================================

class ScannerException(Exception):
    """
    Base exception for all scanner errors.

    All exceptions carry:
    - severity: for logging
    - context: for debugging
    - recoverable: for error handling decisions
    - timestamp: when the error occurred
    """

    default_severity: Severity = Severity.MEDIUM
    default_recoverable: bool = True
    default_classification: ErrorClassification = ErrorClassification.RECOVERABLE
    error_code: str = "SCANNER_ERROR"

    def __init__(
        self,
        message: str,
        severity: Optional[Severity] = None,
        context: Optional[Dict[str, Any]] = None,
        recoverable: Optional[bool] = None,
        classification: Optional[ErrorClassification] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.severity = severity or self.default_severity
        self.context = context or {}
        self.recoverable = recoverable if recoverable is not None else self.default_recoverable
        self.classification = classification or self.default_classification
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

        if cause:
            self.context["cause_type"] = type(cause).__name__
            self.context["cause_message"] = str(cause)

    @property
    def is_recoverable(self) -> bool:
        """Check if error is recoverable."""
        return self.classification in (
            ErrorClassification.RECOVERABLE,
            ErrorClassification.TRANSIENT,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging."""
        return {
            "type": type(self).__name__,
            "code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recoverable": self.recoverable,
            "classification": self.classification.value,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }


# ============================================================
# CONFIGURATION ERRORS
# ============================================================

class ConfigurationError(ScannerException):
    """Error in configuration."""

    default_severity = Severity.HIGH
    default_recoverable = False
    default_classification = ErrorClassification.NON_RECOVERABLE
    error_code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if config_key:
            context["config_key"] = config_key
        if actual_value is not None:
            context["actual_value"] = str(actual_value)[:100]

        super().__init__(message, context=context, **kwargs)


# ============================================================
# SCAN ERRORS
# ============================================================

class InvalidTargetError(ScannerException):
    """
    The scan target cannot be turned into a URL.

    The only scan-fatal error: raised before any collector runs.
    """

    default_severity = Severity.HIGH
    default_recoverable = False
    default_classification = ErrorClassification.NON_RECOVERABLE
    error_code = "INVALID_TARGET"

    def __init__(self, message: str, target: Optional[str] = None, **kwargs):
        context = kwargs.pop("context", {})

        if target is not None:
            context["target"] = str(target)[:200]

        super().__init__(message, context=context, **kwargs)


class StateTransitionError(ScannerException):
    """Invalid scan job state transition."""

    default_recoverable = False
    default_classification = ErrorClassification.NON_RECOVERABLE
    error_code = "INVALID_STATE_TRANSITION"

    def __init__(
        self,
        message: str,
        from_state: Optional[str] = None,
        to_state: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if from_state:
            context["from_state"] = from_state
        if to_state:
            context["to_state"] = to_state

        super().__init__(message, context=context, **kwargs)


class ScanError(ScannerException):
    """Unexpected failure while running a scan."""

    default_severity = Severity.HIGH
    default_recoverable = False
    default_classification = ErrorClassification.TRANSIENT
    error_code = "SCAN_ERROR"


# ============================================================
# EXCEPTION UTILITIES
# ============================================================

def classify_exception(exc: BaseException) -> ErrorClassification:
    """Classify an exception for error handling."""
    if isinstance(exc, ScannerException):
        return exc.classification

    if isinstance(exc, (ConnectionError, TimeoutError, OSError)):
        return ErrorClassification.TRANSIENT

    if isinstance(exc, (ValueError, TypeError, KeyError)):
        return ErrorClassification.RECOVERABLE

    if isinstance(exc, (SystemExit, KeyboardInterrupt, MemoryError)):
        return ErrorClassification.NON_RECOVERABLE

    return ErrorClassification.RECOVERABLE


def wrap_exception(
    exc: Exception,
    wrapper_class: type = ScanError,
    message: Optional[str] = None,
    **kwargs,
) -> ScannerException:
    """Wrap a standard exception in a ScannerException."""
    msg = message or f"{type(exc).__name__}: {exc}"
    return wrapper_class(message=msg, cause=exc, **kwargs)


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
]
