"""
Interpretation - Prompt Templates.

System prompts and deterministic formatters that turn a scan
result or financial filing summary into chat-completion input.
"""

from typing import Any, List

from data_ingestion.types import FinancialData


SCAN_SYSTEM_PROMPT = """You are a senior Private Equity due diligence analyst. Your task is to provide a comprehensive pre-diligence interpretation based on automated scan results.

You must provide analysis in the following structured format:

## Executive Summary
A 2-3 sentence high-level overview of the company's public diligence coverage.

## Key Strengths
Bullet points highlighting the strongest aspects of their public presence and what this suggests about the company.

## Coverage Gaps
Bullet points identifying missing signals and what additional verification will be needed.

## Industry & Market Context
Based on what you can infer from the company name, domain, and detected technologies:
- What industry/sector does this company likely operate in?
- What type of business model might they have (B2B SaaS, marketplace, e-commerce, etc.)?
- Who are potential competitors or comparable companies?
- What market trends are relevant to this space?

## Risk Indicators
Note any red flags or areas of concern based on:
- Missing leadership information
- Limited external validation
- New domain age
- Lack of social presence

## Recommended Diligence Focus
Prioritized list of areas that should receive the most attention during full diligence, based on the gaps identified.

## Additional Research Notes
Any other relevant observations or context that would be valuable for a PE analyst preparing for diligence.

Guidelines:
- Be analytical and insightful, not just descriptive
- Draw reasonable inferences but clearly label speculation
- Use professional, institutional language
- Be specific about what the data shows vs. what requires verification
- Do NOT make investment recommendations
- Format with proper markdown headers and bullet points"""


FINANCIAL_SYSTEM_PROMPT = """You are a senior financial analyst specializing in Private Equity due diligence. Analyze the following verified public financial data and provide insights.

Your analysis should include:

## Financial Overview
Brief summary of the company's financial position based on the available data.

## Key Metrics Analysis
- Revenue analysis (if available): growth implications, scale
- Profitability assessment: margins, net income trends
- Balance sheet strength: asset base, leverage indicators

## Financial Health Indicators
- Positive indicators based on the data
- Areas of potential concern
- Metrics that need deeper investigation

## Comparable Context
How do these metrics compare to typical companies in this space? (provide general industry context)

## Due Diligence Recommendations
Specific financial areas that require further investigation during full diligence.

Guidelines:
- Only analyze the data provided - do not invent numbers
- Clearly state when making inferences vs. reporting facts
- Use professional financial terminology
- Do NOT make investment recommendations
- If data is limited, acknowledge this and focus on what IS available"""


def _signal_label(signal: Any) -> str:
    return f"{signal.name} ({signal.value})" if signal.value else signal.name


def format_scan_result_for_ai(result: Any) -> str:
    """
    Render a ScanResult as the user message for interpretation.

    Args:
        result: ScanResult (or anything exposing the same fields)

    Returns:
        Plain-text prompt
    """
    lines: List[str] = [
        "COMPANY SCAN RESULTS",
        "====================",
        f"Company Name: {result.company_name}",
        f"Domain: {result.domain}",
        f"Website URL: {result.url}",
        "",
        f"OVERALL SCORE: {result.score}/100 - {result.coverage_level.value} Coverage",
        f"Estimated Diligence Effort: {result.effort_estimate.level.value}",
        "",
        "CATEGORY BREAKDOWN:",
    ]

    for category in result.categories:
        found = [_signal_label(s) for s in category.signals if s.found]
        missing = [s.name for s in category.signals if not s.found]
        lines.append("")
        lines.append(
            f"{category.name} ({category.score}/{category.max_score} - "
            f"{category.coverage_level.value}):"
        )
        lines.append(f"  Found: {', '.join(found) if found else 'None'}")
        lines.append(f"  Missing: {', '.join(missing) if missing else 'None'}")

    lines.append("")
    lines.append("RISK PENALTIES APPLIED:")
    applied = [p for p in result.penalties if p.applied]
    if applied:
        for penalty in applied:
            lines.append(
                f"- {penalty.name}: {penalty.reason or penalty.description} ({penalty.points} pts)"
            )
    else:
        lines.append("None")

    lines.append("")
    lines.append("EFFORT FACTORS:")
    for reason in result.effort_estimate.reasons:
        lines.append(f"- {reason}")

    lines.append("")
    lines.append(
        "Please provide a comprehensive pre-diligence interpretation "
        "following the structured format specified."
    )
    return "\n".join(lines)


def format_financial_data_for_ai(data: FinancialData, company_name: str) -> str:
    """Render filing pointers as the user message for financial analysis."""
    record = data.records[0] if data.records else None

    lines: List[str] = [
        "VERIFIED PUBLIC FINANCIAL DATA",
        "==============================",
        f"Company: {company_name}",
        f"Data Source: {data.source.value} "
        f"({'Verified' if record is not None and record.verified else 'Unverified'})",
        f"Company Type: {data.company_type.value}",
    ]
    if data.ticker:
        lines.append(f"Stock Ticker: {data.ticker}")
    if data.cik:
        lines.append(f"SEC CIK: {data.cik}")
    if data.company_number:
        lines.append(f"UK Company Number: {data.company_number}")

    lines.append("")
    lines.append(f"Reporting Period: {record.period if record is not None else 'Unknown'}")
    lines.append(f"Data Source URL: {record.source_url if record is not None else 'N/A'}")

    lines.append("")
    lines.append("FILINGS:")
    if data.filing_links:
        for link in data.filing_links:
            dated = f" ({link.date})" if link.date else ""
            lines.append(f"- {link.name}{dated}: {link.url}")
    else:
        lines.append("No detailed metrics available.")

    lines.append("")
    lines.append("Please provide a professional financial analysis based on this verified data.")
    return "\n".join(lines)
