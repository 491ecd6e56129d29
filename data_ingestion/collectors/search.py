"""
Data Ingestion - Search Collector.

============================================================
RESPONSIBILITY
============================================================
Measures how visible the company is beyond its own site.

- General search result count
- Third-party results (company domain excluded)
- News articles

Without a search API key every signal is reported as not
found with an explanatory value.

============================================================
"""

import asyncio
from typing import Optional

import httpx

from data_ingestion.collectors.base import BaseCollector
from data_ingestion.types import (
    CollectorConfig,
    CollectorContext,
    CollectorResult,
    CollectorSource,
    IngestionError,
)


THIRD_PARTY_MIN_RESULTS = 3
SEARCH_PRESENCE_MIN_RESULTS = 10
NO_API_KEY_VALUE = "API key required for accurate detection"


class SearchCollector(BaseCollector):
    """
    Collector for search-engine visibility.

    ============================================================
    WIRING
    ============================================================
    Source: Serper web + news search
    Signals: third_party_mentions, news_coverage, search_presence
    Metadata: search_results (counts)

    ============================================================
    """

    def __init__(
        self,
        config: CollectorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            config=config,
            source=CollectorSource.SEARCH,
            transport=transport,
        )

    async def fetch_findings(
        self,
        context: CollectorContext,
        client: httpx.AsyncClient,
        result: CollectorResult,
    ) -> None:
        serper = self._serper_client(client)
        if serper is None:
            self._add_unmeasured(result)
            return

        query = context.search_query

        # All three queries run in parallel and settle together
        responses = await asyncio.gather(
            serper.search(f'"{query}"', num=20),
            serper.search(f'"{query}" -site:{context.domain}', num=20),
            serper.news(f'"{query}"', num=10),
            return_exceptions=True,
        )

        failure = next((r for r in responses if isinstance(r, BaseException)), None)
        if failure is not None:
            if not isinstance(failure, IngestionError):
                raise failure
            result.add_error("SERPER_ERROR", f"Search API error: {failure}", failure.recoverable)
            self._add_unmeasured(result)
            return

        general, third_party, news = responses

        total_count = len(general)
        third_party_count = len(third_party)
        news_count = len(news)

        result.add_finding(
            "third_party_mentions",
            third_party_count >= THIRD_PARTY_MIN_RESULTS,
            f"{third_party_count} mentions found",
        )
        result.add_finding(
            "news_coverage",
            news_count > 0,
            f"{news_count} articles" if news_count > 0 else None,
        )
        result.add_finding(
            "search_presence",
            total_count >= SEARCH_PRESENCE_MIN_RESULTS,
            f"{total_count} results",
        )

        result.metadata["search_results"] = {
            "total_results": total_count,
            "third_party_count": third_party_count,
            "news_count": news_count,
        }

    @staticmethod
    def _add_unmeasured(result: CollectorResult) -> None:
        for signal_id in ("third_party_mentions", "news_coverage", "search_presence"):
            result.add_finding(signal_id, False, NO_API_KEY_VALUE)
