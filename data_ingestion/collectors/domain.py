"""
Data Ingestion - Domain Collector.

============================================================
RESPONSIBILITY
============================================================
Registry-level facts about the domain.

- Registration age via RDAP (no API key required)
- TLS availability via an HTTPS HEAD request

============================================================
DOMAIN AGE VALUES
============================================================
>= 2 years   "N years"                (found)
1-2 years    "N months"               (not found)
< 1 year     "< 1 year (N months)"    (not found, new_domain penalty)
unknown      no value                 (not found)

============================================================
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from data_ingestion.collectors.base import BaseCollector
from data_ingestion.types import (
    CollectorConfig,
    CollectorContext,
    CollectorResult,
    CollectorSource,
    FetchError,
)


DAYS_PER_YEAR = 365
MIN_ESTABLISHED_YEARS = 2


class DomainCollector(BaseCollector):
    """
    Collector for domain registration and TLS.

    ============================================================
    WIRING
    ============================================================
    Source: RDAP (rdap.org), company site over HTTPS
    Signals: domain_age, ssl_valid
    Metadata: domain_age_years, creation_date, ssl_valid

    ============================================================
    """

    def __init__(
        self,
        config: CollectorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            config=config,
            source=CollectorSource.DOMAIN,
            transport=transport,
        )

    async def fetch_findings(
        self,
        context: CollectorContext,
        client: httpx.AsyncClient,
        result: CollectorResult,
    ) -> None:
        await self._collect_domain_age(context, client, result)
        await self._collect_ssl(context, client, result)

    # =========================================================
    # DOMAIN AGE
    # =========================================================

    async def _collect_domain_age(
        self,
        context: CollectorContext,
        client: httpx.AsyncClient,
        result: CollectorResult,
    ) -> None:
        age_years: Optional[float] = None

        try:
            response = await self._get(
                client,
                f"{self._config.rdap_base_url}/domain/{context.domain}",
                headers={"Accept": "application/json"},
            )
            if response.is_success:
                creation = find_creation_date(response.json())
                if creation is not None:
                    age_years = years_since(creation)
                    result.metadata["domain_age_years"] = age_years
                    result.metadata["creation_date"] = creation.isoformat()
        except (FetchError, ValueError) as e:
            result.add_error("RDAP_ERROR", f"RDAP lookup failed: {e}", recoverable=True)

        established = age_years is not None and age_years >= MIN_ESTABLISHED_YEARS
        result.add_finding(
            "domain_age",
            established,
            format_domain_age(age_years) if age_years is not None else None,
        )

    # =========================================================
    # TLS
    # =========================================================

    async def _collect_ssl(
        self,
        context: CollectorContext,
        client: httpx.AsyncClient,
        result: CollectorResult,
    ) -> None:
        try:
            response = await client.head(context.url)
        except httpx.HTTPError:
            result.add_finding("ssl_valid", False, "Invalid or missing")
            return

        if response.is_success and context.url.startswith("https://"):
            result.metadata["ssl_valid"] = True
            result.add_finding("ssl_valid", True, "Valid HTTPS")
        else:
            result.add_finding("ssl_valid", False)


# =============================================================
# HELPERS
# =============================================================


def find_creation_date(rdap: Dict[str, Any]) -> Optional[datetime]:
    """
    Return the registration/creation event date of an RDAP record.

    Raises:
        ValueError: If the event date is not an ISO 8601 string
    """
    if not isinstance(rdap, dict):
        return None

    for event in rdap.get("events") or []:
        if not isinstance(event, dict):
            continue
        if event.get("eventAction") in ("registration", "creation") and event.get("eventDate"):
            event_date = event["eventDate"]
            if not isinstance(event_date, str):
                raise ValueError(f"RDAP eventDate is not a string: {event_date!r}")
            created = datetime.fromisoformat(event_date.replace("Z", "+00:00"))
            if created.tzinfo is None:
                created = created.replace(tzinfo=timezone.utc)
            return created
    return None


def years_since(moment: datetime, now: Optional[datetime] = None) -> float:
    now = now or datetime.now(timezone.utc)
    return (now - moment).total_seconds() / (DAYS_PER_YEAR * 24 * 3600)


def format_domain_age(age_years: float) -> str:
    """Human-readable domain age, as consumed by the new_domain penalty."""
    if age_years >= MIN_ESTABLISHED_YEARS:
        return f"{math.floor(age_years)} years"
    months = math.floor(age_years * 12)
    if age_years >= 1:
        return f"{months} months"
    return f"< 1 year ({months} months)"
