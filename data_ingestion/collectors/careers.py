"""
Data Ingestion - Careers Collector.

============================================================
RESPONSIBILITY
============================================================
Looks for live job listings on the major boards and on the
company's own careers pages.

============================================================
DATA FLOW
============================================================
1. Search LinkedIn Jobs, Indeed, Glassdoor, company site
2. Pool listings in that order
3. Verify up to five listings, stop after three are live
4. active_jobs is found when at least one listing is live

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


MAX_LISTINGS_CHECKED = 5
ENOUGH_VERIFIED = 3


class CareersCollector(BaseCollector):
    """
    Collector for hiring activity.

    ============================================================
    WIRING
    ============================================================
    Source: Serper web search + HEAD verification
    Signals: active_jobs
    Metadata: job_listings, total_found, verified

    ============================================================
    """

    def __init__(
        self,
        config: CollectorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            config=config,
            source=CollectorSource.CAREERS,
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

        if serper is None or not query:
            result.add_finding(
                "active_jobs",
                False,
                "API key required" if serper is None else "No verified listings found",
            )
            return

        boards = [
            (f'"{query}" site:linkedin.com/jobs', 10, "linkedin.com", "LinkedIn"),
            (f'"{query}" jobs site:indeed.com', 10, "indeed.com", "Indeed"),
            (f'"{query}" jobs site:glassdoor.com', 10, "glassdoor.com", "Glassdoor"),
        ]
        if context.domain:
            boards.append(
                (f'site:{context.domain} careers OR jobs OR "open positions"', 5, "", "Company Website")
            )

        listings: List[Dict[str, str]] = []
        for search_query, num, required_host, label in boards:
            items = await self._search_or_record(
                serper, search_query, num, result, "JOBS_SEARCH_ERROR",
            )
            for item in items:
                link = item.get("link") or ""
                if not link or required_host not in link:
                    continue
                listings.append({
                    "title": item.get("title") or "Job Listing",
                    "url": link,
                    "source": label,
                })

        self._logger.info(f"Job listings found for {query!r}: {len(listings)}")

        verified: List[Dict[str, str]] = []
        for listing in listings[:MAX_LISTINGS_CHECKED]:
            if await self._verify_url(client, listing["url"]):
                verified.append(listing)
            if len(verified) >= ENOUGH_VERIFIED:
                break

        if verified:
            result.metadata["job_listings"] = verified
            result.metadata["total_found"] = len(listings)
            result.metadata["verified"] = len(verified)
            result.add_finding(
                "active_jobs",
                True,
                f"{len(listings)} listings found ({len(verified)} verified)",
            )
        else:
            result.add_finding("active_jobs", False, "No verified listings found")
