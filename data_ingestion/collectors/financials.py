"""
Data Ingestion - Financial Filings Collector.

============================================================
RESPONSIBILITY
============================================================
Locates public financial filings for the company. Produces
no scoring findings; the FinancialData it builds travels in
result.metadata["financial_data"].

============================================================
LOOKUP ORDER
============================================================
1. SEC EDGAR full-text search (US public companies)
2. Companies House via search (UK companies)
3. Credible public financial documents via search

The first source that yields filings wins.

============================================================
"""

import re
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote_plus

import httpx

from data_ingestion.collectors.base import BaseCollector
from data_ingestion.collectors.serper import SerperClient
from data_ingestion.types import (
    CollectorConfig,
    CollectorContext,
    CollectorResult,
    CollectorSource,
    CompanyType,
    FetchError,
    FilingLink,
    FinancialData,
    FinancialRecord,
    FinancialSource,
)


SEC_FILINGS_START = "2020-01-01"
SEC_FORMS = "10-K,10-Q"
SEC_MAX_HITS = 5
SEC_COMPANY_URL = (
    "https://www.sec.gov/cgi-bin/browse-edgar?action=getcompany"
    "&CIK={cik}&type={form}&dateb=&owner=include&count=10"
)
SEC_RECORD_URL = "https://www.sec.gov/cgi-bin/browse-edgar?action=getcompany&CIK={cik}&type=10-K"

COMPANIES_HOUSE_URL = "https://find-and-update.company-information.service.gov.uk/"
COMPANY_NUMBER_PATTERN = re.compile(r"/company/([A-Z0-9]+)")

CREDIBLE_MARKERS = (
    "sec.gov",
    "companieshouse.gov.uk",
    "annualreports.com",
    ".gov",
    "investor",
    "ir.",
)
MAX_PUBLIC_FILINGS = 5


class FinancialsCollector(BaseCollector):
    """
    Collector for public financial filings.

    ============================================================
    WIRING
    ============================================================
    Source: SEC EDGAR full-text search, Serper web search
    Signals: none
    Metadata: financial_data (FinancialData)

    ============================================================
    """

    def __init__(
        self,
        config: CollectorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            config=config,
            source=CollectorSource.FINANCIALS,
            transport=transport,
        )

    async def fetch_findings(
        self,
        context: CollectorContext,
        client: httpx.AsyncClient,
        result: CollectorResult,
    ) -> None:
        name = context.search_query
        self._logger.info(f"Searching financial filings for {name!r}")

        data = await self._check_sec(client, name, result)

        serper = self._serper_client(client)
        if data is None and serper is not None:
            data = await self._check_companies_house(serper, name, result)
        if data is None and serper is not None:
            data = await self._search_public_filings(serper, name, result)

        financial_data = data or FinancialData()
        result.metadata["financial_data"] = financial_data
        self._logger.info(
            f"Financial filings for {name!r}: available={financial_data.available} "
            f"source={financial_data.source.value}"
        )

    # =========================================================
    # SEC EDGAR
    # =========================================================

    async def _check_sec(
        self,
        client: httpx.AsyncClient,
        name: str,
        result: CollectorResult,
    ) -> Optional[FinancialData]:
        try:
            response = await self._get(
                client,
                self._config.sec_search_url,
                params={
                    "q": name,
                    "dateRange": "custom",
                    "startdt": SEC_FILINGS_START,
                    "enddt": date.today().isoformat(),
                    "forms": SEC_FORMS,
                },
                headers={
                    "User-Agent": self._config.sec_user_agent,
                    "Accept": "application/json",
                },
            )
            if not response.is_success:
                return None
            filings, cik, ticker = parse_sec_hits(response.json(), name)
        except (FetchError, ValueError) as e:
            result.add_error("SEC_ERROR", f"SEC lookup failed: {e}", recoverable=True)
            return None

        if not filings or not cik:
            return None

        message = f"Public company - SEC filings available (CIK: {cik}"
        if ticker:
            message += f", Ticker: {ticker}"
        message += ")"

        return FinancialData(
            available=True,
            source=FinancialSource.SEC,
            company_type=CompanyType.PUBLIC_US,
            records=(
                FinancialRecord(
                    source="SEC EDGAR",
                    source_url=SEC_RECORD_URL.format(cik=cik),
                    verified=True,
                    period="Annual Filings Available",
                    description="View official SEC filings for verified financial data",
                ),
            ),
            filing_links=tuple(filings),
            ticker=ticker,
            cik=cik,
            message=message,
        )

    # =========================================================
    # COMPANIES HOUSE
    # =========================================================

    async def _check_companies_house(
        self,
        serper: SerperClient,
        name: str,
        result: CollectorResult,
    ) -> Optional[FinancialData]:
        items = await self._search_or_record(
            serper,
            f'"{name}" site:find-and-update.company-information.service.gov.uk',
            5,
            result,
            "UK_ERROR",
        )

        filings: List[FilingLink] = []
        company_number: Optional[str] = None
        for item in items:
            link = item.get("link") or ""
            match = COMPANY_NUMBER_PATTERN.search(link)
            if match:
                company_number = match.group(1)
                filings.append(FilingLink(
                    name=item.get("title") or "Companies House Filing",
                    url=link,
                ))

        if not filings:
            return None

        return FinancialData(
            available=True,
            source=FinancialSource.COMPANIES_HOUSE,
            company_type=CompanyType.UK_COMPANY,
            records=(
                FinancialRecord(
                    source="Companies House",
                    source_url=filings[0].url or COMPANIES_HOUSE_URL,
                    verified=True,
                    period="UK Company Filings",
                    description="View official UK company filings",
                ),
            ),
            filing_links=tuple(filings),
            company_number=company_number,
            message=f"UK company filings available (Company #: {company_number})",
        )

    # =========================================================
    # PUBLIC DOCUMENTS
    # =========================================================

    async def _search_public_filings(
        self,
        serper: SerperClient,
        name: str,
        result: CollectorResult,
    ) -> Optional[FinancialData]:
        items = await self._search_or_record(
            serper,
            f'"{name}" (annual report OR investor relations OR financial statements)',
            10,
            result,
            "SEARCH_ERROR",
        )

        filings = [
            FilingLink(name=item.get("title") or "Financial Document", url=item["link"])
            for item in items
            if is_credible_filing_url(item.get("link"))
        ][:MAX_PUBLIC_FILINGS]

        if not filings:
            return None

        return FinancialData(
            available=True,
            source=FinancialSource.PUBLIC_FILING,
            company_type=CompanyType.PRIVATE,
            records=(
                FinancialRecord(
                    source="Public Documents",
                    source_url=filings[0].url,
                    verified=False,
                    period="Various",
                    description="Financial documents found via search - verify independently",
                ),
            ),
            filing_links=tuple(filings),
            message="Financial documents found - click links to verify",
        )


# =============================================================
# HELPERS
# =============================================================


def parse_sec_hits(
    payload: Dict[str, Any],
    company_name: str,
) -> Tuple[List[FilingLink], Optional[str], Optional[str]]:
    """
    Extract filing links plus the first CIK and ticker from an
    EDGAR full-text search response.
    """
    if not isinstance(payload, dict):
        return [], None, None

    hits = payload.get("hits")
    if not isinstance(hits, dict):
        return [], None, None

    total = hits.get("total")
    if isinstance(total, dict) and total.get("value") == 0:
        return [], None, None

    filings: List[FilingLink] = []
    cik: Optional[str] = None
    ticker: Optional[str] = None

    hit_list = hits.get("hits")
    if not isinstance(hit_list, list):
        return [], None, None

    for hit in hit_list[:SEC_MAX_HITS]:
        source = hit.get("_source") if isinstance(hit, dict) else None
        if not isinstance(source, dict):
            continue
        ciks = source.get("ciks")
        ciks = ciks if isinstance(ciks, list) else []
        tickers = source.get("tickers")
        tickers = tickers if isinstance(tickers, list) else []
        form = source.get("form") or "10-K"

        filing_cik = ciks[0] if ciks else None
        cik = cik or filing_cik
        ticker = ticker or (tickers[0] if tickers else None)

        if filing_cik:
            url = SEC_COMPANY_URL.format(cik=filing_cik, form=form)
        else:
            url = (
                "https://www.sec.gov/cgi-bin/browse-edgar"
                f"?company={quote_plus(company_name)}&type=10-K"
            )

        filings.append(FilingLink(
            name=f"{source.get('form') or 'Filing'} - {source.get('company_name') or company_name}",
            url=url,
            date=source.get("file_date") or source.get("period_of_report") or "",
        ))

    return filings, cik, ticker


def is_credible_filing_url(link: Optional[str]) -> bool:
    if not link:
        return False
    lower = link.lower()
    return any(marker in lower for marker in CREDIBLE_MARKERS)
