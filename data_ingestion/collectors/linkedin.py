"""
Data Ingestion - LinkedIn Collector.

============================================================
RESPONSIBILITY
============================================================
Finds the company's LinkedIn footprint through search.

- Company page: two queries, candidates verified live
- Leadership: founder/CEO profiles that mention the company
- Employee count: not available without LinkedIn API access

============================================================
DATA FLOW
============================================================
1. Search "site:linkedin.com/company" for candidates
2. Cross-reference with a second, looser query
3. Verify up to three candidates (2xx / 403 / 999 = live)
4. Search leadership profiles on linkedin.com/in
5. Verify up to two profiles

============================================================
"""

from typing import Dict, List, Optional

import httpx

from data_ingestion.collectors.base import BaseCollector
from data_ingestion.types import (
    CollectorConfig,
    CollectorContext,
    CollectorResult,
    CollectorSource,
)


# LinkedIn answers unauthenticated HEAD requests with 999 for live pages
LINKEDIN_LIVE_STATUSES = (403, 999)

MAX_COMPANY_CANDIDATES = 3
MAX_PROFILE_CANDIDATES = 5
MAX_PROFILES_VERIFIED = 2


class LinkedInCollector(BaseCollector):
    """
    Collector for LinkedIn company and leadership presence.

    ============================================================
    WIRING
    ============================================================
    Source: Serper web search + HEAD verification
    Signals: linkedin_company, founders_identifiable, employee_count
    Metadata: linkedin_url, founder_profiles

    ============================================================
    """

    def __init__(
        self,
        config: CollectorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            config=config,
            source=CollectorSource.LINKEDIN,
            transport=transport,
        )

    async def fetch_findings(
        self,
        context: CollectorContext,
        client: httpx.AsyncClient,
        result: CollectorResult,
    ) -> None:
        query = context.search_query
        serper = self._serper_client(client)
        api_available = serper is not None
        missing_value = "Not found" if api_available else "API key required"

        linkedin_url: Optional[str] = None
        profiles: List[Dict[str, str]] = []

        if serper is not None and query:
            # --------------------------------------------------
            # Step 1-2: Company page candidates
            # --------------------------------------------------
            candidates: List[str] = []
            primary = await self._search_or_record(
                serper, f'"{query}" site:linkedin.com/company', 10,
                result, "LINKEDIN_SEARCH_ERROR",
            )
            secondary = await self._search_or_record(
                serper, f"{query} LinkedIn company profile", 10,
                result, "LINKEDIN_SEARCH_ERROR",
            )
            for item in primary + secondary:
                link = item.get("link") or ""
                if "linkedin.com/company/" in link and link not in candidates:
                    candidates.append(link)

            self._logger.info(f"LinkedIn company candidates for {query!r}: {len(candidates)}")

            # --------------------------------------------------
            # Step 3: Verify company page
            # --------------------------------------------------
            for candidate in candidates[:MAX_COMPANY_CANDIDATES]:
                if await self._verify_url(client, candidate, LINKEDIN_LIVE_STATUSES):
                    linkedin_url = candidate
                    result.metadata["linkedin_url"] = candidate
                    break

            # --------------------------------------------------
            # Step 4-5: Leadership profiles
            # --------------------------------------------------
            leaders = await self._search_or_record(
                serper,
                f'"{query}" CEO OR founder OR "co-founder" site:linkedin.com/in',
                15,
                result,
                "LINKEDIN_SEARCH_ERROR",
            )
            profiles = select_leadership_profiles(leaders, query)

            verified = False
            for profile in profiles[:MAX_PROFILES_VERIFIED]:
                if await self._verify_url(client, profile["url"], LINKEDIN_LIVE_STATUSES):
                    verified = True
                    break

            if verified:
                result.metadata["founder_profiles"] = profiles
            else:
                profiles = []

        result.add_finding(
            "linkedin_company",
            linkedin_url is not None,
            linkedin_url if linkedin_url is not None else missing_value,
        )
        result.add_finding(
            "founders_identifiable",
            bool(profiles),
            f"{len(profiles)} verified profile(s)" if profiles else missing_value,
        )
        result.add_finding("employee_count", False, "Requires LinkedIn API access")


def select_leadership_profiles(
    results: List[Dict[str, str]],
    company: str,
) -> List[Dict[str, str]]:
    """Keep linkedin.com/in results whose title or snippet names the company."""
    profiles: List[Dict[str, str]] = []
    needle = company.lower()

    for item in results:
        link = item.get("link") or ""
        if "linkedin.com/in/" not in link:
            continue

        title = (item.get("title") or "").lower()
        snippet = (item.get("snippet") or "").lower()
        if needle in title or needle in snippet:
            profiles.append({"name": item.get("title") or "Unknown", "url": link})

        if len(profiles) >= MAX_PROFILE_CANDIDATES:
            break

    return profiles
