"""
Data Ingestion - Tech Stack Collector.

============================================================
RESPONSIBILITY
============================================================
Fingerprints the technologies behind the company homepage
from its HTML, script references, response headers and
<meta> tags.

============================================================
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Pattern, Tuple

import httpx

from data_ingestion.collectors.base import BaseCollector
from data_ingestion.types import (
    CollectorConfig,
    CollectorContext,
    CollectorResult,
    CollectorSource,
    FetchError,
)


@dataclass(frozen=True)
class TechSignature:
    """Detection patterns for one technology."""
    name: str
    category: str
    html: Tuple[Pattern[str], ...] = ()
    scripts: Tuple[Pattern[str], ...] = ()
    headers: Mapping[str, Pattern[str]] = field(default_factory=dict)
    meta: Tuple[Tuple[str, Pattern[str]], ...] = ()

    def matches(self, content: str, headers: Mapping[str, str]) -> bool:
        if any(p.search(content) for p in self.html):
            return True
        if any(p.search(content) for p in self.scripts):
            return True

        for header_name, pattern in self.headers.items():
            value = headers.get(header_name)
            if value and pattern.search(value):
                return True

        for meta_name, pattern in self.meta:
            match = meta_content(content, meta_name)
            if match is not None and pattern.search(match):
                return True

        return False


def _p(expression: str) -> Pattern[str]:
    return re.compile(expression, re.IGNORECASE)


# =============================================================
# SIGNATURES
# =============================================================

TECH_SIGNATURES: Tuple[TechSignature, ...] = (
    # Frameworks
    TechSignature(
        name="React",
        category="Frontend Framework",
        html=(_p(r"data-reactroot"), _p(r"data-reactid"), _p(r"__NEXT_DATA__")),
        scripts=(_p(r"react\.production\.min\.js"), _p(r"react-dom")),
    ),
    TechSignature(
        name="Vue.js",
        category="Frontend Framework",
        html=(_p(r"data-v-[a-f0-9]"), _p(r'id="app"')),
        scripts=(_p(r"vue\.min\.js"), _p(r"vue\.runtime")),
    ),
    TechSignature(
        name="Angular",
        category="Frontend Framework",
        html=(_p(r"ng-version"), _p(r"\[ng-"), _p(r"\(ng-")),
        scripts=(_p(r"angular\.min\.js"), _p(r"zone\.js")),
    ),
    TechSignature(
        name="Next.js",
        category="Frontend Framework",
        html=(_p(r"__NEXT_DATA__"), _p(r"_next/static")),
    ),
    TechSignature(
        name="WordPress",
        category="CMS",
        html=(_p(r"wp-content"), _p(r"wp-includes")),
        meta=(("generator", _p(r"WordPress")),),
    ),
    TechSignature(
        name="Shopify",
        category="E-commerce",
        html=(_p(r"cdn\.shopify\.com"), _p(r"Shopify\.theme")),
    ),
    TechSignature(
        name="Webflow",
        category="Website Builder",
        html=(_p(r"webflow\.com"), _p(r"wf-")),
    ),
    TechSignature(
        name="Squarespace",
        category="Website Builder",
        html=(_p(r"static\.squarespace\.com"), _p(r"squarespace-cdn")),
    ),
    # Analytics
    TechSignature(
        name="Google Analytics",
        category="Analytics",
        html=(_p(r"UA-\d+-\d+"), _p(r"G-[A-Z0-9]+")),
        scripts=(_p(r"google-analytics\.com/analytics\.js"), _p(r"gtag"), _p(r"ga\.js")),
    ),
    TechSignature(name="Mixpanel", category="Analytics", scripts=(_p(r"mixpanel"),)),
    TechSignature(
        name="Segment",
        category="Analytics",
        scripts=(_p(r"segment\.com/analytics\.js"), _p(r"cdn\.segment\.com")),
    ),
    TechSignature(
        name="Hotjar",
        category="Analytics",
        scripts=(_p(r"hotjar\.com"), _p(r"static\.hotjar\.com")),
    ),
    # Marketing and support
    TechSignature(
        name="HubSpot",
        category="Marketing",
        scripts=(_p(r"js\.hs-scripts\.com"), _p(r"hubspot")),
    ),
    TechSignature(
        name="Intercom",
        category="Customer Support",
        scripts=(_p(r"widget\.intercom\.io"), _p(r"intercom")),
    ),
    TechSignature(
        name="Drift",
        category="Customer Support",
        scripts=(_p(r"drift\.com"), _p(r"js\.driftt\.com")),
    ),
    TechSignature(
        name="Zendesk",
        category="Customer Support",
        scripts=(_p(r"static\.zdassets\.com"), _p(r"zendesk")),
    ),
    # CDN
    TechSignature(
        name="Cloudflare",
        category="CDN/Security",
        html=(_p(r"cdn-cgi"),),
        headers={"server": _p(r"cloudflare")},
    ),
    TechSignature(
        name="Fastly",
        category="CDN",
        headers={"x-served-by": _p(r"cache-"), "via": _p(r"varnish")},
    ),
    # Payment
    TechSignature(name="Stripe", category="Payment", scripts=(_p(r"js\.stripe\.com"),)),
)

MAX_LISTED_TECHNOLOGIES = 5


class TechStackCollector(BaseCollector):
    """
    Collector for homepage technology fingerprints.

    Signals: tech_stack
    Metadata: technologies, categories
    """

    def __init__(
        self,
        config: CollectorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        signatures: Tuple[TechSignature, ...] = TECH_SIGNATURES,
    ) -> None:
        super().__init__(
            config=config,
            source=CollectorSource.TECHSTACK,
            transport=transport,
        )
        self._signatures = signatures

    async def fetch_findings(
        self,
        context: CollectorContext,
        client: httpx.AsyncClient,
        result: CollectorResult,
    ) -> None:
        technologies: List[str] = []

        try:
            response = await self._get(client, context.url)
            headers = {k.lower(): v for k, v in response.headers.items()}
            technologies, categories = detect_technologies(
                response.text, headers, self._signatures
            )
            result.metadata["technologies"] = technologies
            result.metadata["categories"] = categories
        except FetchError as e:
            result.add_error(
                "TECH_DETECTION_ERROR",
                f"Tech stack detection failed: {e}",
                recoverable=True,
            )

        result.add_finding(
            "tech_stack",
            bool(technologies),
            format_technologies(technologies) if technologies else None,
        )


# =============================================================
# HELPERS
# =============================================================


def meta_content(content: str, name: str) -> Optional[str]:
    """Return the content attribute of <meta name="..."> if present."""
    pattern = re.compile(
        rf"<meta[^>]*name=[\"']{re.escape(name)}[\"'][^>]*content=[\"']([^\"']+)[\"']",
        re.IGNORECASE,
    )
    match = pattern.search(content)
    return match.group(1) if match else None


def detect_technologies(
    content: str,
    headers: Dict[str, str],
    signatures: Tuple[TechSignature, ...] = TECH_SIGNATURES,
) -> Tuple[List[str], List[str]]:
    """
    Match every signature against a page.

    Returns:
        (technology names, distinct categories), both in signature order
    """
    technologies: List[str] = []
    categories: List[str] = []

    for signature in signatures:
        if signature.matches(content, headers):
            technologies.append(signature.name)
            if signature.category not in categories:
                categories.append(signature.category)

    return technologies, categories


def format_technologies(technologies: List[str]) -> str:
    listed = ", ".join(technologies[:MAX_LISTED_TECHNOLOGIES])
    if len(technologies) > MAX_LISTED_TECHNOLOGIES:
        listed += "..."
    return listed
