"""
Tests for the search-backed collectors: search visibility,
LinkedIn and careers.

Serper and the verification HEAD requests are both served
by one httpx.MockTransport per test.
"""

import json

import httpx
import pytest

from data_ingestion import (
    CareersCollector,
    CollectorConfig,
    CollectorContext,
    CollectorStatus,
    LinkedInCollector,
    SearchCollector,
)
from data_ingestion.collectors.linkedin import select_leadership_profiles
from data_ingestion.collectors.search import NO_API_KEY_VALUE


CONFIG = CollectorConfig(serper_api_key="test-key")


def _context():
    return CollectorContext(url="https://acme.com", domain="acme.com", company_name="Acme")


def _findings(result):
    return {f.id: f for f in result.findings}


def _transport(search, head=None):
    """
    Route Serper POSTs to `search(path, query)` and every other
    request to `head(request)`.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            assert request.headers["x-api-key"] == "test-key"
            body = json.loads(request.content)
            return search(request.url.path, body["q"])
        if head is None:
            return httpx.Response(404)
        return head(request)
    return httpx.MockTransport(handler)


def _organic(*links, **extra):
    return httpx.Response(200, json={"organic": [dict(link=link, **extra) for link in links]})


# ============================================================
# SEARCH COLLECTOR
# ============================================================

class TestSearchCollector:
    """Tests for SearchCollector."""

    @pytest.mark.asyncio
    async def test_visible_company(self):
        def search(path, query):
            if path == "/news":
                assert query == '"Acme"'
                return httpx.Response(200, json={"news": [{"title": "a"}, {"title": "b"}]})
            if "-site:acme.com" in query:
                return _organic(*[f"https://blog{i}.com" for i in range(3)])
            return _organic(*[f"https://r{i}.com" for i in range(12)])

        collector = SearchCollector(CONFIG, transport=_transport(search))
        result = await collector.collect(_context())
        findings = _findings(result)

        assert result.status == CollectorStatus.SUCCESS
        assert findings["third_party_mentions"].found
        assert findings["third_party_mentions"].value == "3 mentions found"
        assert findings["news_coverage"].found
        assert findings["news_coverage"].value == "2 articles"
        assert findings["search_presence"].found
        assert findings["search_presence"].value == "12 results"
        assert result.metadata["search_results"] == {
            "total_results": 12,
            "third_party_count": 3,
            "news_count": 2,
        }

    @pytest.mark.asyncio
    async def test_below_thresholds(self):
        def search(path, query):
            if path == "/news":
                return httpx.Response(200, json={"news": []})
            if "-site:" in query:
                return _organic("https://a.com", "https://b.com")
            return _organic(*[f"https://r{i}.com" for i in range(9)])

        collector = SearchCollector(CONFIG, transport=_transport(search))
        findings = _findings(await collector.collect(_context()))

        assert not findings["third_party_mentions"].found
        assert not findings["news_coverage"].found
        assert findings["news_coverage"].value is None
        assert not findings["search_presence"].found
        assert findings["search_presence"].value == "9 results"

    @pytest.mark.asyncio
    async def test_without_api_key(self):
        collector = SearchCollector(CollectorConfig(), transport=_transport(lambda p, q: None))
        result = await collector.collect(_context())

        assert result.status == CollectorStatus.SUCCESS
        assert [(f.id, f.found, f.value) for f in result.findings] == [
            ("third_party_mentions", False, NO_API_KEY_VALUE),
            ("news_coverage", False, NO_API_KEY_VALUE),
            ("search_presence", False, NO_API_KEY_VALUE),
        ]

    @pytest.mark.asyncio
    async def test_api_error(self):
        collector = SearchCollector(
            CONFIG,
            transport=_transport(lambda p, q: httpx.Response(500, text="upstream down")),
        )
        result = await collector.collect(_context())

        assert result.status == CollectorStatus.PARTIAL
        assert result.errors[0].code == "SERPER_ERROR"
        assert result.errors[0].recoverable
        assert all(not f.found for f in result.findings)
        assert len(result.findings) == 3


# ============================================================
# LINKEDIN COLLECTOR
# ============================================================

def _linkedin_search(path, query):
    if "site:linkedin.com/company" in query:
        return _organic("https://www.linkedin.com/company/acme")
    if "LinkedIn company profile" in query:
        return _organic("https://www.linkedin.com/company/acme", "https://acme.com/about")
    return httpx.Response(200, json={"organic": [
        {"link": "https://www.linkedin.com/in/jane", "title": "Jane Doe - CEO - Acme", "snippet": ""},
        {"link": "https://www.linkedin.com/in/bob", "title": "Bob Roe", "snippet": "Founder at Other"},
    ]})


class TestLinkedInCollector:
    """Tests for LinkedInCollector."""

    @pytest.mark.asyncio
    async def test_status_999_counts_as_live(self):
        collector = LinkedInCollector(
            CONFIG,
            transport=_transport(_linkedin_search, head=lambda r: httpx.Response(999)),
        )
        result = await collector.collect(_context())
        findings = _findings(result)

        assert findings["linkedin_company"].found
        assert findings["linkedin_company"].value == "https://www.linkedin.com/company/acme"
        assert result.metadata["linkedin_url"] == "https://www.linkedin.com/company/acme"
        assert findings["founders_identifiable"].found
        assert findings["founders_identifiable"].value == "1 verified profile(s)"
        assert result.metadata["founder_profiles"] == [
            {"name": "Jane Doe - CEO - Acme", "url": "https://www.linkedin.com/in/jane"},
        ]
        assert not findings["employee_count"].found
        assert findings["employee_count"].value == "Requires LinkedIn API access"

    @pytest.mark.asyncio
    async def test_dead_links_not_found(self):
        collector = LinkedInCollector(CONFIG, transport=_transport(_linkedin_search))
        result = await collector.collect(_context())
        findings = _findings(result)

        assert not findings["linkedin_company"].found
        assert findings["linkedin_company"].value == "Not found"
        assert not findings["founders_identifiable"].found
        assert "founder_profiles" not in result.metadata

    @pytest.mark.asyncio
    async def test_without_api_key(self):
        collector = LinkedInCollector(CollectorConfig(), transport=_transport(_linkedin_search))
        findings = _findings(await collector.collect(_context()))

        assert findings["linkedin_company"].value == "API key required"
        assert findings["founders_identifiable"].value == "API key required"
        assert not findings["employee_count"].found

    @pytest.mark.asyncio
    async def test_search_error_recorded(self):
        collector = LinkedInCollector(
            CONFIG,
            transport=_transport(lambda p, q: httpx.Response(429, text="slow down")),
        )
        result = await collector.collect(_context())

        assert result.status == CollectorStatus.PARTIAL
        assert {e.code for e in result.errors} == {"LINKEDIN_SEARCH_ERROR"}
        assert len(result.findings) == 3

    def test_select_leadership_profiles(self):
        results = [
            {"link": "https://www.linkedin.com/company/acme", "title": "Acme"},
            {"link": "https://www.linkedin.com/in/a", "title": "A", "snippet": "CTO at ACME"},
            {"link": "https://www.linkedin.com/in/b", "title": "B", "snippet": "nothing"},
        ]

        assert select_leadership_profiles(results, "Acme") == [
            {"name": "A", "url": "https://www.linkedin.com/in/a"},
        ]


# ============================================================
# CAREERS COLLECTOR
# ============================================================

def _careers_search(path, query):
    if "site:linkedin.com/jobs" in query:
        return _organic("https://www.linkedin.com/jobs/view/1", "https://elsewhere.com/job", title="Engineer")
    if "site:indeed.com" in query:
        return _organic("https://www.indeed.com/viewjob?jk=1")
    if "site:glassdoor.com" in query:
        return _organic()
    return _organic("https://acme.com/careers")


def _careers_head(request: httpx.Request) -> httpx.Response:
    if request.url.host == "www.linkedin.com":
        return httpx.Response(403)
    if request.url.host == "acme.com":
        return httpx.Response(200)
    return httpx.Response(404)


class TestCareersCollector:
    """Tests for CareersCollector."""

    @pytest.mark.asyncio
    async def test_listings_verified(self):
        collector = CareersCollector(CONFIG, transport=_transport(_careers_search, _careers_head))
        result = await collector.collect(_context())
        active_jobs = _findings(result)["active_jobs"]

        assert active_jobs.found
        assert active_jobs.value == "3 listings found (2 verified)"
        assert result.metadata["total_found"] == 3
        assert result.metadata["verified"] == 2
        assert [j["source"] for j in result.metadata["job_listings"]] == ["LinkedIn", "Company Website"]
        assert result.metadata["job_listings"][0]["title"] == "Engineer"

    @pytest.mark.asyncio
    async def test_no_verified_listings(self):
        collector = CareersCollector(CONFIG, transport=_transport(_careers_search))
        result = await collector.collect(_context())
        active_jobs = _findings(result)["active_jobs"]

        assert not active_jobs.found
        assert active_jobs.value == "No verified listings found"
        assert "job_listings" not in result.metadata

    @pytest.mark.asyncio
    async def test_without_api_key(self):
        collector = CareersCollector(CollectorConfig(), transport=_transport(_careers_search))
        result = await collector.collect(_context())

        assert [(f.id, f.found, f.value) for f in result.findings] == [
            ("active_jobs", False, "API key required"),
        ]
