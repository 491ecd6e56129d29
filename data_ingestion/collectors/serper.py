"""
Data Ingestion - Serper Search Client.

Thin wrapper over the Serper web and news search endpoints,
shared by every search-backed collector. Errors map to
FetchError the same way the other HTTP collectors map them.
"""

from typing import Any, Dict, List

import httpx

from data_ingestion.types import FetchError, ParseError


class SerperClient:
    """POSTs queries to Serper and returns result lists."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str,
        source: str,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._source = source

    async def search(self, query: str, num: int = 10) -> List[Dict[str, Any]]:
        """Return the organic web results for a query."""
        data = await self._post("/search", {"q": query, "num": num})
        return list(data.get("organic") or [])

    async def news(self, query: str, num: int = 10) -> List[Dict[str, Any]]:
        """Return the news results for a query."""
        data = await self._post("/news", {"q": query, "num": num})
        return list(data.get("news") or [])

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a query.

        Raises:
            FetchError: On HTTP, network or timeout errors
            ParseError: When the body is not a JSON object
        """
        try:
            response = await self._client.post(
                f"{self._base_url}{path}",
                json=payload,
                headers={"X-API-KEY": self._api_key},
            )
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            # Rate limit (429) is recoverable
            is_rate_limit = e.response.status_code == 429
            raise FetchError(
                message=f"HTTP {e.response.status_code}: {e.response.text[:200]}",
                source=self._source,
                recoverable=e.response.status_code >= 500 or is_rate_limit,
                details={"status_code": e.response.status_code, "path": path},
                code="SERPER_ERROR",
            )
        except httpx.TimeoutException as e:
            raise FetchError(
                message=f"Request timeout: {e}",
                source=self._source,
                recoverable=True,
                code="SERPER_ERROR",
            )
        except httpx.RequestError as e:
            raise FetchError(
                message=f"Request error: {e}",
                source=self._source,
                recoverable=True,
                code="SERPER_ERROR",
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(
                message=f"Invalid JSON from search API: {e}",
                source=self._source,
                recoverable=True,
                code="SERPER_ERROR",
            )

        if not isinstance(data, dict):
            raise ParseError(
                message="Unexpected search API payload",
                source=self._source,
                recoverable=True,
                code="SERPER_ERROR",
            )
        return data
