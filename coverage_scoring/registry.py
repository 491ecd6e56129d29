"""
Coverage Scoring - Signal Definition Registry.

============================================================
PURPOSE
============================================================
Static catalog of every checkable signal, the category
budgets and the penalty metadata.

The registry is the single source of truth for point values.
Collectors never decide how much a signal is worth.

============================================================
DESIGN PRINCIPLES
============================================================
- Module-level immutable data (tuples / mapping proxies)
- Validated once at import time
- Definition order is the reporting order

============================================================
"""

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .types import (
    CategoryInfo,
    PenaltyDefinition,
    RegistryError,
    SignalCategory,
    SignalDefinition,
)


logger = logging.getLogger(__name__)


# ============================================================
# SIGNAL DEFINITIONS
# ============================================================


SIGNAL_DEFINITIONS: Tuple[SignalDefinition, ...] = (
    # Company Identity (25)
    SignalDefinition(
        id="website_reachable",
        name="Website Reachable",
        description="Company website returns HTTP 200 status",
        category=SignalCategory.IDENTITY,
        points=5,
        source="HTTP request",
    ),
    SignalDefinition(
        id="about_page",
        name="About Page Exists",
        description="Company has an about/company page",
        category=SignalCategory.IDENTITY,
        points=4,
        source="Website crawl",
    ),
    SignalDefinition(
        id="contact_info",
        name="Contact Information",
        description="Email or phone contact available",
        category=SignalCategory.IDENTITY,
        points=4,
        source="Website crawl",
    ),
    SignalDefinition(
        id="physical_location",
        name="Physical Location",
        description="Address or headquarters location stated",
        category=SignalCategory.IDENTITY,
        points=4,
        source="Website crawl",
    ),
    SignalDefinition(
        id="domain_age",
        name="Domain Age > 2 Years",
        description="Domain registered for at least 2 years",
        category=SignalCategory.IDENTITY,
        points=4,
        source="WHOIS/RDAP lookup",
    ),
    SignalDefinition(
        id="ssl_valid",
        name="SSL Certificate Valid",
        description="Website has valid TLS/SSL certificate",
        category=SignalCategory.IDENTITY,
        points=2,
        source="TLS connection",
    ),
    SignalDefinition(
        id="privacy_policy",
        name="Privacy Policy",
        description="Privacy policy page exists",
        category=SignalCategory.IDENTITY,
        points=2,
        source="Website crawl",
    ),
    # Management & Leadership (20)
    SignalDefinition(
        id="linkedin_company",
        name="LinkedIn Company Page",
        description="Company has LinkedIn presence",
        category=SignalCategory.LEADERSHIP,
        points=6,
        source="Search engine lookup",
    ),
    SignalDefinition(
        id="founders_identifiable",
        name="Founders/CEO Identifiable",
        description="Leadership names discoverable online",
        category=SignalCategory.LEADERSHIP,
        points=6,
        source="Search engine lookup",
    ),
    SignalDefinition(
        id="team_page",
        name="Team Page Exists",
        description="Website has team or leadership page",
        category=SignalCategory.LEADERSHIP,
        points=4,
        source="Website crawl",
    ),
    SignalDefinition(
        id="employee_count",
        name="Employee Count Available",
        description="Employee range discoverable",
        category=SignalCategory.LEADERSHIP,
        points=4,
        source="LinkedIn or website",
    ),
    # Market & External Validation (25)
    SignalDefinition(
        id="third_party_mentions",
        name="Third-Party Mentions",
        description="3+ mentions excluding company domain",
        category=SignalCategory.VALIDATION,
        points=6,
        source="Search engine API",
    ),
    SignalDefinition(
        id="case_studies",
        name="Case Studies/Testimonials",
        description="Customer success stories present",
        category=SignalCategory.VALIDATION,
        points=5,
        source="Website crawl",
    ),
    SignalDefinition(
        id="partnerships",
        name="Partnership Mentions",
        description="Partner logos or text on website",
        category=SignalCategory.VALIDATION,
        points=4,
        source="Website crawl",
    ),
    SignalDefinition(
        id="news_coverage",
        name="News/Press Coverage",
        description="News articles mentioning company",
        category=SignalCategory.VALIDATION,
        points=5,
        source="News search",
    ),
    SignalDefinition(
        id="search_presence",
        name="Strong Search Presence",
        description="10+ search results for company name",
        category=SignalCategory.VALIDATION,
        points=5,
        source="Search engine API",
    ),
    # Operational Signals (15)
    SignalDefinition(
        id="careers_page",
        name="Careers Page Exists",
        description="Company has careers/jobs page",
        category=SignalCategory.OPERATIONAL,
        points=4,
        source="Website crawl",
    ),
    SignalDefinition(
        id="active_jobs",
        name="Active Job Listings",
        description="Open positions on job boards",
        category=SignalCategory.OPERATIONAL,
        points=4,
        source="Job board search",
    ),
    SignalDefinition(
        id="tech_stack",
        name="Tech Stack Identifiable",
        description="Technologies detected on website",
        category=SignalCategory.OPERATIONAL,
        points=4,
        source="Tech detection",
    ),
    SignalDefinition(
        id="blog_present",
        name="Blog/Content Present",
        description="Blog or news section exists",
        category=SignalCategory.OPERATIONAL,
        points=3,
        source="Website crawl",
    ),
)


# ============================================================
# CATEGORY METADATA
# ============================================================


CATEGORY_INFO: Mapping[SignalCategory, CategoryInfo] = MappingProxyType({
    SignalCategory.IDENTITY: CategoryInfo(
        category=SignalCategory.IDENTITY,
        name="Company Identity",
        max_score=25,
        description="Basic company information and web presence",
    ),
    SignalCategory.LEADERSHIP: CategoryInfo(
        category=SignalCategory.LEADERSHIP,
        name="Management & Leadership",
        max_score=20,
        description="Executive team and organizational structure visibility",
    ),
    SignalCategory.VALIDATION: CategoryInfo(
        category=SignalCategory.VALIDATION,
        name="Market & External Validation",
        max_score=25,
        description="Third-party mentions, customers, and market presence",
    ),
    SignalCategory.OPERATIONAL: CategoryInfo(
        category=SignalCategory.OPERATIONAL,
        name="Operational Signals",
        max_score=15,
        description="Hiring activity, technology, and operational indicators",
    ),
})


# ============================================================
# PENALTY METADATA
# ============================================================


PENALTY_DEFINITIONS: Tuple[PenaltyDefinition, ...] = (
    PenaltyDefinition(
        id="no_leadership",
        name="No Leadership Identifiable",
        description="No founders, team page, or LinkedIn leaders found",
        points=-5,
    ),
    PenaltyDefinition(
        id="website_only",
        name="Website-Only Footprint",
        description="No third-party mentions detected",
        points=-5,
    ),
    PenaltyDefinition(
        id="no_social",
        name="No Social Presence",
        description="No LinkedIn or social profiles found",
        points=-3,
    ),
    PenaltyDefinition(
        id="new_domain",
        name="Very New Domain",
        description="Domain less than 1 year old",
        points=-2,
    ),
)


_DEFINITIONS_BY_ID: Mapping[str, SignalDefinition] = MappingProxyType(
    {d.id: d for d in SIGNAL_DEFINITIONS}
)
_PENALTIES_BY_ID: Mapping[str, PenaltyDefinition] = MappingProxyType(
    {p.id: p for p in PENALTY_DEFINITIONS}
)


# ============================================================
# ACCESSORS
# ============================================================


def all_definitions() -> Tuple[SignalDefinition, ...]:
    """Return every signal definition in reporting order."""
    return SIGNAL_DEFINITIONS


def get_definition(signal_id: str) -> Optional[SignalDefinition]:
    """Return the definition for a signal id, or None if unknown."""
    return _DEFINITIONS_BY_ID.get(signal_id)


def is_known_signal(signal_id: str) -> bool:
    return signal_id in _DEFINITIONS_BY_ID


def definitions_for_category(category: SignalCategory) -> Tuple[SignalDefinition, ...]:
    """Return the definitions of one category, in reporting order."""
    return tuple(d for d in SIGNAL_DEFINITIONS if d.category == category)


def category_info(category: SignalCategory) -> CategoryInfo:
    """Return name, budget and description for a category."""
    return CATEGORY_INFO[category]


def penalty_definitions() -> Tuple[PenaltyDefinition, ...]:
    return PENALTY_DEFINITIONS


def get_penalty_definition(penalty_id: str) -> PenaltyDefinition:
    """
    Return penalty metadata by id.

    Raises:
        KeyError: If the penalty id is not registered
    """
    return _PENALTIES_BY_ID[penalty_id]


def max_signal_score() -> int:
    """Sum of every category budget (the signal ceiling)."""
    return sum(info.max_score for info in CATEGORY_INFO.values())


# ============================================================
# VALIDATION
# ============================================================


def validate_registry(
    definitions: Tuple[SignalDefinition, ...] = SIGNAL_DEFINITIONS,
    categories: Mapping[SignalCategory, CategoryInfo] = CATEGORY_INFO,
) -> None:
    """
    Check the catalog invariants.

    - Catalog is non-empty
    - Signal ids are unique
    - Every point value is positive
    - Per category, definition points sum to the category budget

    Raises:
        RegistryError: On any violation
    """
    if not definitions:
        raise RegistryError("Signal registry is empty")

    seen: Dict[str, SignalDefinition] = {}
    for definition in definitions:
        if definition.id in seen:
            raise RegistryError(f"Duplicate signal id: {definition.id}")
        if definition.points <= 0:
            raise RegistryError(
                f"Signal {definition.id} has non-positive points: {definition.points}"
            )
        seen[definition.id] = definition

    for category in SignalCategory.all_categories():
        if category not in categories:
            raise RegistryError(f"Missing category metadata: {category.value}")
        budget = categories[category].max_score
        total = sum(d.points for d in definitions if d.category == category)
        if total != budget:
            raise RegistryError(
                f"Category {category.value} points sum to {total}, "
                f"expected {budget}"
            )


validate_registry()
logger.debug(
    f"Signal registry loaded: {len(SIGNAL_DEFINITIONS)} signals, "
    f"max score {max_signal_score()}"
)
