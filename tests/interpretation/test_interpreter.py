"""
Tests for the chat-completion interpreter and its prompts.
"""

import json
from types import SimpleNamespace

import httpx
import pytest

from coverage_scoring import CoverageScoringEngine
from data_ingestion.types import (
    CompanyType,
    FilingLink,
    FinancialData,
    FinancialRecord,
    FinancialSource,
)
from interpretation import Interpreter, InterpreterConfig
from interpretation.interpreter import extract_message_content
from interpretation.prompts import format_financial_data_for_ai, format_scan_result_for_ai
from orchestrator.models import ScanResult


SEC_DATA = FinancialData(
    available=True,
    source=FinancialSource.SEC,
    company_type=CompanyType.PUBLIC_US,
    records=(FinancialRecord(
        source="SEC EDGAR",
        source_url="https://www.sec.gov/cgi-bin/browse-edgar?action=getcompany&CIK=1&type=10-K",
        verified=True,
        period="Annual Filings Available",
        description="View official SEC filings",
    ),),
    filing_links=(FilingLink(name="10-K - Acme Inc.", url="https://www.sec.gov/x", date="2024-02-01"),),
    ticker="ACME",
    cik="1",
)


@pytest.fixture
def scan_result(findings_factory):
    output = CoverageScoringEngine().score_findings(
        findings_factory(found={"website_reachable", "about_page"}, values={"about_page": "/about"})
    )
    return ScanResult.from_scoring(
        output, job_id="scan_1", url="https://acme.com", domain="acme.com", company_name="Acme",
    )


def _config(**overrides):
    return InterpreterConfig(api_key="mistral-key", **overrides)


def _completion(text):
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": text}}]})


# ============================================================
# INTERPRETER
# ============================================================

class TestInterpreter:
    """Tests for Interpreter."""

    @pytest.mark.asyncio
    async def test_interpret_request(self, scan_result):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["authorization"]
            captured["body"] = json.loads(request.content)
            return _completion("## Executive Summary")

        interpreter = Interpreter(_config(), transport=httpx.MockTransport(handler))

        text = await interpreter.interpret(scan_result)

        assert text == "## Executive Summary"
        assert captured["url"] == "https://api.mistral.ai/v1/chat/completions"
        assert captured["auth"] == "Bearer mistral-key"
        body = captured["body"]
        assert body["model"] == "mistral-small-latest"
        assert body["temperature"] == 0.4
        assert body["max_tokens"] == 1500
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
        assert "OVERALL SCORE: 0/100 - Minimal Coverage" in body["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_financial_request(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return _completion("Revenue not disclosed.")

        interpreter = Interpreter(_config(), transport=httpx.MockTransport(handler))

        text = await interpreter.analyze_financials(SEC_DATA, "Acme")

        assert text == "Revenue not disclosed."
        assert captured["body"]["temperature"] == 0.3
        assert captured["body"]["max_tokens"] == 1200

    @pytest.mark.asyncio
    async def test_disabled_without_key(self, scan_result):
        def handler(request):
            raise AssertionError("no request expected")

        interpreter = Interpreter(InterpreterConfig(), transport=httpx.MockTransport(handler))

        assert not interpreter.is_enabled
        assert await interpreter.interpret(scan_result) is None
        assert await interpreter.analyze_financials(SEC_DATA, "Acme") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [None, FinancialData(), FinancialData(available=True)])
    async def test_no_filings_no_analysis(self, data):
        def handler(request):
            raise AssertionError("no request expected")

        interpreter = Interpreter(_config(), transport=httpx.MockTransport(handler))

        assert await interpreter.analyze_financials(data, "Acme") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(500, text="server error"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"choices": []}),
    ])
    async def test_failures_yield_none(self, scan_result, response):
        interpreter = Interpreter(_config(), transport=httpx.MockTransport(lambda request: response))

        assert await interpreter.interpret(scan_result) is None

    @pytest.mark.asyncio
    async def test_network_error_yields_none(self, scan_result):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        interpreter = Interpreter(_config(), transport=httpx.MockTransport(handler))

        assert await interpreter.interpret(scan_result) is None

    def test_config_from_env(self, monkeypatch):
        monkeypatch.setenv("MISTRAL_API_KEY", "env-key")
        monkeypatch.setenv("MISTRAL_MODEL", "mistral-large-latest")

        config = InterpreterConfig.from_env()

        assert config.is_configured
        assert config.model == "mistral-large-latest"
        assert config.max_retries == 0

    @pytest.mark.asyncio
    async def test_server_error_not_retried(self, scan_result):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, json={"message": "unavailable"})

        interpreter = Interpreter(_config(), transport=httpx.MockTransport(handler))

        assert await interpreter.interpret(scan_result) is None
        assert len(calls) == 1

    @pytest.mark.parametrize("completion,expected", [
        (SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="hi"))]), "hi"),
        (SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))]), None),
        (SimpleNamespace(choices=["oops"]), None),
        (SimpleNamespace(choices=[]), None),
        ("not json", None),
    ])
    def test_extract_message_content(self, completion, expected):
        assert extract_message_content(completion) == expected


# ============================================================
# PROMPTS
# ============================================================

class TestPrompts:
    """Tests for prompt rendering."""

    def test_scan_prompt(self, scan_result):
        prompt = format_scan_result_for_ai(scan_result)

        assert "Company Name: Acme" in prompt
        assert "Company Identity (9/25 - Limited):" in prompt
        assert "Found: Website Reachable, About Page Exists (/about)" in prompt
        assert "- No Social Presence: LinkedIn company page not found (-3 pts)" in prompt
        assert "Estimated Diligence Effort: High" in prompt

    def test_financial_prompt(self):
        prompt = format_financial_data_for_ai(SEC_DATA, "Acme")

        assert "Data Source: SEC (Verified)" in prompt
        assert "Stock Ticker: ACME" in prompt
        assert "- 10-K - Acme Inc. (2024-02-01): https://www.sec.gov/x" in prompt

    def test_financial_prompt_without_links(self):
        data = FinancialData(available=True, records=SEC_DATA.records)

        assert "No detailed metrics available." in format_financial_data_for_ai(data, "Acme")
