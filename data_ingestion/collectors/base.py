"""
Data Ingestion - Base Collector.

============================================================
PURPOSE
============================================================
Abstract base class for all footprint collectors.

============================================================
DESIGN PRINCIPLES
============================================================
- No scoring logic - collection only
- Standardized error handling: fetch problems become
  CollectorError entries, never exceptions
- One HTTP client per run, closed when the run ends
- Full observability

============================================================
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

import httpx

from data_ingestion.collectors.serper import SerperClient
from data_ingestion.types import (
    CollectorConfig,
    CollectorContext,
    CollectorResult,
    CollectorSource,
    CollectorStatus,
    FetchError,
    IngestionError,
)


class BaseCollector(ABC):
    """
    Abstract base class for collectors.

    ============================================================
    RESPONSIBILITIES
    ============================================================
    - Query one external source
    - Report raw findings (signal id, found, value)
    - Report metadata for the orchestrator
    - Handle errors gracefully

    ============================================================
    LIFECYCLE
    ============================================================
    1. Initialize with config (and optional transport)
    2. Call collect(context) to run a collection
    3. Findings, metadata and errors come back in a
       CollectorResult

    ============================================================
    """

    def __init__(
        self,
        config: CollectorConfig,
        source: CollectorSource,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the collector.

        Args:
            config: Collector configuration
            source: Collector identifier
            transport: Optional httpx transport (used by tests)
        """
        self._config = config
        self._source = source
        self._transport = transport
        self._logger = logging.getLogger(f"collector.{source.value}")

    @property
    def source_name(self) -> str:
        """Get the source name."""
        return self._source.value

    @property
    def is_enabled(self) -> bool:
        """Check if collector is enabled."""
        return self._config.enabled

    @property
    def version(self) -> str:
        """Get collector version."""
        return self._config.version

    # =========================================================
    # ABSTRACT METHODS - Must be implemented by subclasses
    # =========================================================

    @abstractmethod
    async def fetch_findings(
        self,
        context: CollectorContext,
        client: httpx.AsyncClient,
        result: CollectorResult,
    ) -> None:
        """
        Query the source and record findings on the result.

        Implementations add findings, metadata and recoverable
        errors to `result` as they go.

        Raises:
            FetchError: When the source cannot be reached at all
        """
        pass

    # =========================================================
    # COLLECTION WORKFLOW
    # =========================================================

    async def collect(self, context: CollectorContext) -> CollectorResult:
        """
        Run a complete collection.

        This method:
        1. Opens an HTTP client
        2. Delegates to fetch_findings
        3. Converts any failure to a CollectorError
        4. Returns the result

        Returns:
            CollectorResult with findings and status
        """
        result = CollectorResult(
            source=self.source_name,
            started_at=datetime.utcnow(),
        )

        if not self.is_enabled:
            result.status = CollectorStatus.SKIPPED
            result.mark_complete(datetime.utcnow())
            self._logger.info(f"Collector {self.source_name} is disabled, skipping")
            return result

        self._logger.info(f"Starting collection for {self.source_name}: {context.domain}")

        try:
            async with self._create_client() as client:
                await self.fetch_findings(context, client, result)

        except IngestionError as e:
            result.mark_failed(e.code, str(e), e.recoverable)
            self._logger.warning(f"Fetch failed for {self.source_name}: {e}")

        except Exception as e:
            result.mark_failed("UNEXPECTED_ERROR", f"Unexpected error: {e}")
            self._logger.exception(f"Unexpected error in {self.source_name}")

        result.mark_complete(datetime.utcnow())
        self._log_result(result)
        return result

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._config.timeout_seconds,
            headers={"User-Agent": self._config.user_agent},
            follow_redirects=True,
            transport=self._transport,
        )

    def _log_result(self, result: CollectorResult) -> None:
        """Log the collection result."""
        log_data = result.to_dict()

        if result.status == CollectorStatus.SUCCESS:
            self._logger.info(f"Collection complete: {log_data}")
        else:
            self._logger.warning(f"Collection {result.status.value}: {log_data}")

    # =========================================================
    # HTTP HELPERS
    # =========================================================

    async def _check_url(self, client: httpx.AsyncClient, url: str) -> bool:
        """
        Check a URL answers with a 2xx status.

        HEAD first. Servers that reject HEAD at the transport
        level get a GET.
        """
        try:
            response = await client.head(url)
            return response.is_success
        except httpx.HTTPError:
            try:
                response = await client.get(url)
                return response.is_success
            except httpx.HTTPError:
                return False

    async def _check_paths(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        paths: Iterable[str],
    ) -> bool:
        """Return True as soon as one of base_url + path is reachable."""
        for path in paths:
            if await self._check_url(client, f"{base_url}{path}"):
                return True
        return False

    async def _verify_url(
        self,
        client: httpx.AsyncClient,
        url: str,
        accepted_statuses: Tuple[int, ...] = (403,),
    ) -> bool:
        """
        Verify a discovered URL is live.

        Some sites answer bots with 403 (or 999 for LinkedIn)
        for pages that exist; those count as live.
        """
        try:
            response = await client.head(
                url,
                headers={"User-Agent": self._config.verify_user_agent},
            )
        except httpx.HTTPError:
            return False
        return response.is_success or response.status_code in accepted_statuses

    def _serper_client(self, client: httpx.AsyncClient) -> Optional[SerperClient]:
        """Return a search client, or None when no API key is configured."""
        if not self._config.has_search_api:
            return None
        return SerperClient(
            client=client,
            api_key=self._config.serper_api_key,
            base_url=self._config.serper_base_url,
            source=self.source_name,
        )

    async def _search_or_record(
        self,
        serper: SerperClient,
        query: str,
        num: int,
        result: CollectorResult,
        error_code: str,
    ) -> List[Dict[str, Any]]:
        """Run a web search; a failure is recorded and yields no results."""
        try:
            return await serper.search(query, num=num)
        except IngestionError as e:
            result.add_error(error_code, f"Search failed for {query!r}: {e}", e.recoverable)
            self._logger.warning(f"Search failed for {self.source_name}: {e}")
            return []

    async def _get(
        self,
        client: httpx.AsyncClient,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        GET a URL, mapping transport failures to FetchError.

        Raises:
            FetchError: On network errors or timeouts
        """
        try:
            return await client.get(url, **kwargs)
        except httpx.TimeoutException as e:
            raise FetchError(
                message=f"Request timeout: {e}",
                source=self.source_name,
                recoverable=True,
            )
        except httpx.RequestError as e:
            raise FetchError(
                message=f"Request error: {e}",
                source=self.source_name,
                recoverable=True,
            )
