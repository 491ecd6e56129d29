"""
Data Ingestion - Website Collector.

============================================================
RESPONSIBILITY
============================================================
Crawls the company website itself.

- Reachability of the homepage
- Company name from the homepage <title>
- Well-known pages (about, team, careers, blog, ...)
- Contact details and location markers in the homepage

============================================================
DATA FLOW
============================================================
1. HEAD (then GET) the homepage
2. If unreachable: report every website signal as not found
3. Fetch homepage HTML, derive company name
4. Probe page groups concurrently
5. Scan homepage text for contact / location / customers

============================================================
"""

import asyncio
import html
import re
from typing import Dict, Optional, Tuple

import httpx

from data_ingestion.collectors.base import BaseCollector
from data_ingestion.types import (
    CollectorConfig,
    CollectorContext,
    CollectorResult,
    CollectorSource,
    FetchError,
)


# =============================================================
# PAGE PATHS
# =============================================================

WEBSITE_PATHS: Dict[str, Tuple[str, ...]] = {
    "about": ("/about", "/about-us", "/company", "/who-we-are"),
    "contact": ("/contact", "/contact-us", "/get-in-touch"),
    "team": ("/team", "/leadership", "/about/team", "/people", "/our-team"),
    "careers": ("/careers", "/jobs", "/work-with-us", "/join-us", "/open-positions"),
    "case_studies": ("/case-studies", "/customers", "/success-stories", "/clients"),
    "blog": ("/blog", "/news", "/insights", "/resources", "/articles"),
    "privacy": ("/privacy", "/privacy-policy", "/legal/privacy"),
    "partners": ("/partners", "/integrations", "/ecosystem"),
}

# Signals that depend on the website being reachable
WEBSITE_SIGNAL_IDS = (
    "about_page",
    "contact_info",
    "physical_location",
    "privacy_policy",
    "team_page",
    "careers_page",
    "case_studies",
    "partnerships",
    "blog_present",
)


# =============================================================
# CONTENT PATTERNS
# =============================================================

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"(\+?1?\s*[-.\s]?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4})")
ADDRESS_PATTERN = re.compile(
    r"\d+\s+[\w\s]+(?:street|st|avenue|ave|road|rd|boulevard|blvd|drive|dr|lane|ln|way|court|ct|place|pl)"
    r"[,.\s]+[\w\s]+,?\s*[A-Z]{2}\s*\d{5}",
    re.IGNORECASE,
)
TITLE_PATTERN = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)

IGNORED_EMAIL_MARKERS = ("example", "placeholder", "@sentry", "@webpack")

LOCATION_KEYWORDS = (
    "headquarter",
    "headquarters",
    "hq",
    "office",
    "offices",
    "located in",
    "based in",
    "address",
)

SCHEMA_LOCATION_MARKERS = (
    '"@type":"PostalAddress"',
    '"@type":"Place"',
    'itemtype="http://schema.org/PostalAddress"',
)

MAX_COMPANY_NAME_LENGTH = 50


class WebsiteCollector(BaseCollector):
    """
    Collector for the company website.

    ============================================================
    WIRING
    ============================================================
    Source: Company website (HTTP)
    Signals: website_reachable plus WEBSITE_SIGNAL_IDS
    Metadata: company_name (from <title>)

    ============================================================
    """

    def __init__(
        self,
        config: CollectorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            config=config,
            source=CollectorSource.WEBSITE,
            transport=transport,
        )

    async def fetch_findings(
        self,
        context: CollectorContext,
        client: httpx.AsyncClient,
        result: CollectorResult,
    ) -> None:
        url = context.url

        # --------------------------------------------------
        # Step 1: Reachability
        # --------------------------------------------------
        reachable = await self._check_url(client, url)
        result.add_finding(
            "website_reachable",
            reachable,
            "HTTP 200 OK" if reachable else "Not reachable",
        )

        if not reachable:
            for signal_id in WEBSITE_SIGNAL_IDS:
                result.add_finding(signal_id, False, "Website not accessible")
            return

        # --------------------------------------------------
        # Step 2: Homepage content
        # --------------------------------------------------
        content = ""
        try:
            response = await self._get(client, url)
            content = response.text
        except FetchError as e:
            result.add_error("FETCH_ERROR", f"Failed to fetch homepage: {e}", recoverable=True)

        company_name = extract_company_name(content)
        if company_name:
            result.metadata["company_name"] = company_name

        # --------------------------------------------------
        # Step 3: Page probes (groups run concurrently)
        # --------------------------------------------------
        groups = ("about", "privacy", "team", "careers", "case_studies", "partners", "blog")
        found_flags = await asyncio.gather(*[
            self._check_paths(client, url, WEBSITE_PATHS[group]) for group in groups
        ])
        pages = dict(zip(groups, found_flags))

        # --------------------------------------------------
        # Step 4: Homepage analysis
        # --------------------------------------------------
        contact_value = extract_contact_info(content)
        lower = content.lower()
        has_customers = any(k in lower for k in ("customer", "trusted by", "used by"))
        has_partners = any(k in lower for k in ("partner", "integration"))

        result.add_finding("about_page", pages["about"])
        result.add_finding("contact_info", contact_value is not None, contact_value)
        result.add_finding("physical_location", has_location(content))
        result.add_finding("privacy_policy", pages["privacy"])
        result.add_finding("team_page", pages["team"])
        result.add_finding("careers_page", pages["careers"])
        result.add_finding("case_studies", pages["case_studies"] or has_customers)
        result.add_finding("partnerships", pages["partners"] or has_partners)
        result.add_finding("blog_present", pages["blog"])


# =============================================================
# CONTENT HELPERS
# =============================================================


def extract_company_name(content: str) -> Optional[str]:
    """
    Derive a company name from the homepage <title>.

    "Acme Corp | Official Home" -> "Acme Corp"
    Names of 50 characters or more are discarded.
    """
    match = TITLE_PATTERN.search(content or "")
    if not match:
        return None

    title = html.unescape(match.group(1)).strip()
    cleaned = re.sub(
        r"\s*[-|–—:]\s*.*(home|homepage|welcome|official).*",
        "",
        title,
        count=1,
        flags=re.IGNORECASE,
    )
    cleaned = re.sub(r"\s*[-|–—:]\s*$", "", cleaned, count=1).strip()

    if cleaned and len(cleaned) < MAX_COMPANY_NAME_LENGTH:
        return cleaned
    return None


def extract_contact_info(content: str) -> Optional[str]:
    """Return the first plausible contact email, else a phone number."""
    for email in EMAIL_PATTERN.findall(content or ""):
        lower = email.lower()
        if not any(marker in lower for marker in IGNORED_EMAIL_MARKERS):
            return email

    phone = PHONE_PATTERN.search(content or "")
    if phone:
        return phone.group(0)
    return None


def has_location(content: str) -> bool:
    """Check the homepage for an address, HQ keyword or schema.org place."""
    lower = (content or "").lower()

    if any(keyword in lower for keyword in LOCATION_KEYWORDS):
        return True
    if ADDRESS_PATTERN.search(content or ""):
        return True
    return any(marker in (content or "") for marker in SCHEMA_LOCATION_MARKERS)
