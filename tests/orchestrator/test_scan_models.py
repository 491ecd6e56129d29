"""
Tests for scan job lifecycle and scan result models.
"""

from dataclasses import replace

import pytest

from core.exceptions import StateTransitionError
from coverage_scoring import CoverageScoringEngine
from data_ingestion.types import CollectorError
from orchestrator import ScanConfig, ScanJob, ScanResult, ScanStatus, ScanStep


@pytest.fixture
def scan_result(findings_factory):
    output = CoverageScoringEngine().score_findings(findings_factory(found={"about_page", "news_coverage"}))
    return ScanResult.from_scoring(
        output,
        job_id="scan_1",
        url="https://acme.com",
        domain="acme.com",
        company_name="Acme",
        collector_errors=[CollectorError(code="SERPER_ERROR", message="HTTP 500", source="search")],
        duration_seconds=1.23456,
    )


# ============================================================
# SCAN JOB
# ============================================================

class TestScanJob:
    """Tests for ScanJob state transitions."""

    def test_initial_state(self):
        job = ScanJob(job_id="scan_1", url="https://acme.com")

        assert job.status == ScanStatus.QUEUED
        assert job.progress == 0
        assert job.current_step == "Queued"
        assert not job.status.is_terminal

    def test_happy_path(self, scan_result):
        job = ScanJob(job_id="scan_1", url="https://acme.com")

        job.start()
        job.update_progress(30, "Analyzing company data...")
        assert job.progress == 30

        job.complete(scan_result)
        assert job.status == ScanStatus.COMPLETED
        assert job.status.is_terminal
        assert job.progress == 100
        assert job.result is scan_result

    def test_fail_from_queued(self):
        job = ScanJob(job_id="scan_1", url="bad")

        job.fail("INVALID_TARGET", "Invalid URL format")

        assert job.status == ScanStatus.FAILED
        assert job.error == {"code": "INVALID_TARGET", "message": "Invalid URL format"}
        assert job.current_step == "Failed"

    def test_cannot_complete_from_queued(self, scan_result):
        job = ScanJob(job_id="scan_1", url="https://acme.com")

        with pytest.raises(StateTransitionError) as exc_info:
            job.complete(scan_result)

        assert exc_info.value.context["from_state"] == "queued"
        assert exc_info.value.context["to_state"] == "completed"

    def test_terminal_states_are_final(self, scan_result):
        job = ScanJob(job_id="scan_1", url="https://acme.com")
        job.start()
        job.complete(scan_result)

        with pytest.raises(StateTransitionError):
            job.fail("SCAN_ERROR", "late failure")
        with pytest.raises(StateTransitionError):
            job.start()

    def test_progress_requires_processing(self):
        job = ScanJob(job_id="scan_1", url="https://acme.com")

        with pytest.raises(StateTransitionError):
            job.update_progress(10, "Checking website...")

    def test_progress_clamped(self):
        job = ScanJob(job_id="scan_1", url="https://acme.com")
        job.start()

        job.update_progress(150, "Complete")

        assert job.progress == 100

    def test_to_dict(self, scan_result):
        job = ScanJob(job_id="scan_1", url="https://acme.com")
        job.start()
        job.complete(scan_result)

        data = job.to_dict()

        assert data["status"] == "completed"
        assert data["result"]["score"] == scan_result.score
        assert data["error"] is None


# ============================================================
# SCAN RESULT
# ============================================================

class TestScanResult:
    """Tests for ScanResult."""

    def test_score_invariant(self, scan_result):
        raw = sum(c.score for c in scan_result.categories) + scan_result.total_penalty

        assert scan_result.score == max(0, min(100, raw))

    def test_signal_views(self, scan_result):
        assert [s.id for s in scan_result.found_signals] == ["about_page", "news_coverage"]
        assert len(scan_result.missing_signals) == 18
        assert {p.id for p in scan_result.applied_penalties} == {"no_leadership", "no_social"}

    def test_with_enrichment_returns_copy(self, scan_result):
        enriched = scan_result.with_enrichment(ai_interpretation="Summary", financial_analysis=None)

        assert enriched.ai_interpretation == "Summary"
        assert scan_result.ai_interpretation is None
        assert enriched.score == scan_result.score

    def test_to_dict(self, scan_result):
        data = scan_result.to_dict()

        assert data["coverage_level"] == scan_result.coverage_level.value
        assert data["financial_data"] is None
        assert data["collector_errors"] == [{
            "source": "search",
            "code": "SERPER_ERROR",
            "message": "HTTP 500",
            "recoverable": True,
        }]
        assert data["duration_seconds"] == 1.235
        assert len(data["categories"]) == 4
        assert data["engine_version"] == "1.0.0"
        assert data["checklist"][0] == {
            "id": "verify_founders",
            "task": "Identify and verify founding team",
            "reason": "No founders or CEO publicly identifiable - request org chart or team bios",
            "priority": "High",
            "search_query": "\"Acme\" founder CEO linkedin",
        }

    def test_checklist_from_scoring(self, scan_result):
        ids = [item.id for item in scan_result.checklist]

        assert "verify_customers" not in ids
        assert ids[-1] == "request_financials"

    def test_engine_version_carried(self, findings_factory):
        output = CoverageScoringEngine().score_findings(findings_factory())
        output = replace(output, engine_version="2.0.0")

        result = ScanResult.from_scoring(
            output, job_id="scan_9", url="https://acme.com", domain="acme.com", company_name="Acme",
        )

        assert result.engine_version == "2.0.0"


class TestScanStepAndConfig:
    """Tests for progress steps and scan configuration."""

    def test_step_checkpoints(self):
        assert [s.progress for s in ScanStep] == [10, 30, 85, 90, 100]
        assert ScanStep.COMPLETE.label == "Complete"

    def test_config_from_env(self, monkeypatch):
        monkeypatch.setenv("SCAN_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("SCAN_INCLUDE_AI", "false")

        config = ScanConfig.from_env()

        assert config.scan_timeout_seconds == 30.0
        assert config.collector_timeout_seconds == 20.0
        assert config.include_ai is False

    def test_config_validate(self):
        errors = ScanConfig(collector_timeout_seconds=0, ai_timeout_seconds=-1).validate()

        assert errors == [
            "collector_timeout_seconds must be positive",
            "ai_timeout_seconds must be positive",
        ]
