"""
Tests for the scanner exception hierarchy.
"""

from core import (
    ErrorClassification,
    InvalidTargetError,
    ScanError,
    ScannerException,
    Severity,
    StateTransitionError,
    classify_exception,
    wrap_exception,
)


class TestScannerExceptions:
    """Tests for exception metadata."""

    def test_invalid_target_defaults(self):
        error = InvalidTargetError("Invalid URL format", target="nope")

        assert error.error_code == "INVALID_TARGET"
        assert error.severity == Severity.HIGH
        assert not error.recoverable
        assert not error.is_recoverable
        assert error.context["target"] == "nope"

    def test_state_transition_context(self):
        error = StateTransitionError("bad", from_state="completed", to_state="processing")

        assert error.context == {"from_state": "completed", "to_state": "processing"}

    def test_to_dict(self):
        data = ScanError("boom").to_dict()

        assert data["type"] == "ScanError"
        assert data["code"] == "SCAN_ERROR"
        assert data["classification"] == "transient"
        assert data["cause"] is None


class TestExceptionUtilities:
    """Tests for classify_exception and wrap_exception."""

    def test_classify(self):
        assert classify_exception(InvalidTargetError("x")) == ErrorClassification.NON_RECOVERABLE
        assert classify_exception(ConnectionError()) == ErrorClassification.TRANSIENT
        assert classify_exception(ValueError()) == ErrorClassification.RECOVERABLE
        assert classify_exception(MemoryError()) == ErrorClassification.NON_RECOVERABLE

    def test_wrap_exception(self):
        cause = RuntimeError("disk full")
        wrapped = wrap_exception(cause, ScanError, message="Scan failed: disk full")

        assert isinstance(wrapped, ScannerException)
        assert wrapped.message == "Scan failed: disk full"
        assert wrapped.cause is cause
        assert wrapped.context["cause_type"] == "RuntimeError"

    def test_wrap_default_message(self):
        wrapped = wrap_exception(KeyError("k"))

        assert isinstance(wrapped, ScanError)
        assert wrapped.message.startswith("KeyError")
