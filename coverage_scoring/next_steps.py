"""
Coverage Scoring - Next Steps Checklist.

============================================================
PURPOSE
============================================================
Turns coverage gaps into a prioritized list of follow-up
diligence tasks.

Rules are evaluated in a fixed order and each produces at
most one item. The audited financials request is always
present, so the checklist is never empty.

============================================================
RULES
============================================================
verify_founders       founders_identifiable missing      High
find_linkedin         linkedin_company missing           Medium
request_cap_table     leadership score < 10              High
verify_customers      third_party_mentions AND
                      news_coverage missing              High
request_case_studies  case_studies missing               Medium
verify_headcount      active_jobs AND careers_page
                      missing                            Medium
verify_entity         contact_info OR physical_location
                      missing                            Medium
verify_history        domain_age missing                 Low
tech_due_diligence    tech_stack missing                 Low
request_financials    always                             High

============================================================
"""

from typing import Dict, List, Sequence, Set, Tuple

from .types import (
    CategoryScore,
    ChecklistItem,
    ChecklistPriority,
    Signal,
    SignalCategory,
)


# Leadership scores below this ask for ownership documents
CAP_TABLE_LEADERSHIP_MAX = 10


def build_checklist(
    signals: Sequence[Signal],
    categories: Sequence[CategoryScore],
    company_name: str,
) -> Tuple[ChecklistItem, ...]:
    """
    Build the follow-up checklist for a scored scan.

    Args:
        signals: Reconciled signals
        categories: Category rollups
        company_name: Used in suggested search queries

    Returns:
        Items in rule order
    """
    missing: Set[str] = {s.id for s in signals if not s.found}
    quoted = f'"{company_name}"'
    items: List[ChecklistItem] = []

    # --------------------------------------------------------
    # Leadership
    # --------------------------------------------------------
    if "founders_identifiable" in missing:
        items.append(ChecklistItem(
            id="verify_founders",
            task="Identify and verify founding team",
            reason="No founders or CEO publicly identifiable - request org chart or team bios",
            priority=ChecklistPriority.HIGH,
            search_query=f"{quoted} founder CEO linkedin",
        ))

    if "linkedin_company" in missing:
        items.append(ChecklistItem(
            id="find_linkedin",
            task="Locate LinkedIn company page",
            reason="No LinkedIn presence found - verify company has official social accounts",
            priority=ChecklistPriority.MEDIUM,
            search_query=f"{quoted} site:linkedin.com/company",
        ))

    leadership = next(
        (c for c in categories if c.category == SignalCategory.LEADERSHIP), None
    )
    if leadership is not None and leadership.score < CAP_TABLE_LEADERSHIP_MAX:
        items.append(ChecklistItem(
            id="request_cap_table",
            task="Request cap table and ownership structure",
            reason="Limited leadership visibility - need to verify equity ownership",
            priority=ChecklistPriority.HIGH,
        ))

    # --------------------------------------------------------
    # Market validation
    # --------------------------------------------------------
    if {"third_party_mentions", "news_coverage"} <= missing:
        items.append(ChecklistItem(
            id="verify_customers",
            task="Request customer references",
            reason="No third-party mentions or press coverage found - verify customer base exists",
            priority=ChecklistPriority.HIGH,
        ))

    if "case_studies" in missing:
        items.append(ChecklistItem(
            id="request_case_studies",
            task="Request customer case studies or testimonials",
            reason="No public case studies found - need proof of customer success",
            priority=ChecklistPriority.MEDIUM,
        ))

    # --------------------------------------------------------
    # Operations and identity
    # --------------------------------------------------------
    if {"active_jobs", "careers_page"} <= missing:
        items.append(ChecklistItem(
            id="verify_headcount",
            task="Request current headcount and org structure",
            reason="No careers page or active job listings - verify team size and hiring plans",
            priority=ChecklistPriority.MEDIUM,
        ))

    if missing & {"contact_info", "physical_location"}:
        items.append(ChecklistItem(
            id="verify_entity",
            task="Verify legal entity and registered address",
            reason="Limited contact/location info - confirm legal incorporation details",
            priority=ChecklistPriority.MEDIUM,
            search_query=f"{quoted} registered office incorporation",
        ))

    if "domain_age" in missing:
        items.append(ChecklistItem(
            id="verify_history",
            task="Verify company founding date and history",
            reason="Domain age not confirmed - verify when company was actually founded",
            priority=ChecklistPriority.LOW,
            search_query=f"{quoted} founded established history",
        ))

    if "tech_stack" in missing:
        items.append(ChecklistItem(
            id="tech_due_diligence",
            task="Request technology stack documentation",
            reason="Unable to detect tech stack - need technical architecture review",
            priority=ChecklistPriority.LOW,
        ))

    items.append(ChecklistItem(
        id="request_financials",
        task="Request audited financial statements",
        reason="Standard diligence requirement - request 3 years of P&L, balance sheet, cash flow",
        priority=ChecklistPriority.HIGH,
    ))

    return tuple(items)


def group_by_priority(
    items: Sequence[ChecklistItem],
) -> Dict[ChecklistPriority, List[ChecklistItem]]:
    """Group items by priority, most urgent first, keeping rule order within a group."""
    groups: Dict[ChecklistPriority, List[ChecklistItem]] = {
        p: [] for p in ChecklistPriority.all_priorities()
    }
    for item in items:
        groups[item.priority].append(item)
    return groups
