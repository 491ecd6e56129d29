"""
Orchestrator - CLI.

============================================================
RESPONSIBILITY
============================================================
Command-line interface for the footprint scanner.

- Provides argparse-based CLI
- Loads configuration from CLI, .env and environment
- Prints a text report or the JSON result
- Entry point for the application

============================================================
USAGE
============================================================
python -m orchestrator.cli acme.com
python -m orchestrator.cli https://acme.com --no-ai --json
python -m orchestrator.cli acme.com --scan-timeout 30 --log-level DEBUG

Exit codes: 0 completed, 2 invalid target, 1 unexpected error

============================================================
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from core.exceptions import InvalidTargetError
from core.urls import generate_job_id, is_company_website, normalize_url
from coverage_scoring import format_score_summary, group_by_priority

from .config import ScanConfig
from .core import create_orchestrator
from .models import ScanJob, ScanResult, ScanStatus


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_TARGET = 2

DISCLAIMER_TEXT = """\
This tool provides an automated assessment of publicly available information only. \
The coverage score reflects the discoverability of public signals and does NOT \
constitute financial, legal, or investment advice.

Key limitations:
- Automated checks may miss information that requires human interpretation
- Third-party data sources may be incomplete or outdated
- A high score does not guarantee company legitimacy or financial health
- A low score may reflect limited public disclosure rather than risk

This tool is intended to help prioritize due diligence efforts and should never \
replace comprehensive professional investigation. Always conduct thorough \
independent research before making investment decisions."""


# ============================================================
# CLI ARGUMENT PARSER
# ============================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="coverage-scan",
        description="Score the public web footprint of a company",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s acme.com                       # Full scan with AI analysis
  %(prog)s acme.com --no-ai --json        # Machine-readable result only
  %(prog)s acme.com --scan-timeout 30     # Tighter overall ceiling
        """
    )

    parser.add_argument(
        "url",
        type=str,
        help="Company website (e.g. acme.com)",
    )

    # --------------------------------------------------------
    # Output Options
    # --------------------------------------------------------
    output_group = parser.add_argument_group("Output Options")

    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )

    output_group.add_argument(
        "--log-level", "-l",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=os.getenv("LOG_LEVEL", "WARNING").upper(),
        help="Logging level (default: LOG_LEVEL or WARNING)",
    )

    # --------------------------------------------------------
    # Scan Options
    # --------------------------------------------------------
    scan_group = parser.add_argument_group("Scan Options")

    scan_group.add_argument(
        "--no-ai",
        action="store_true",
        help="Skip AI interpretation",
    )

    scan_group.add_argument(
        "--scan-timeout",
        type=float,
        default=None,
        help="Overall scan ceiling in seconds (default: SCAN_TIMEOUT_SECONDS or 55)",
    )

    scan_group.add_argument(
        "--collector-timeout",
        type=float,
        default=None,
        help="Per-collector timeout in seconds (default: COLLECTOR_TIMEOUT_SECONDS or 20)",
    )

    return parser


# ============================================================
# CLI CONFIGURATION BUILDER
# ============================================================

def build_config(args: argparse.Namespace) -> ScanConfig:
    """
    Build scan configuration from environment and CLI arguments.

    CLI flags take precedence over environment variables.
    """
    config = ScanConfig.from_env()

    if args.scan_timeout is not None:
        config.scan_timeout_seconds = args.scan_timeout
    if args.collector_timeout is not None:
        config.collector_timeout_seconds = args.collector_timeout
    if args.no_ai:
        config.include_ai = False

    return config


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging (stderr, so JSON output stays clean)."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ============================================================
# REPORT
# ============================================================

def format_report(result: ScanResult) -> str:
    """Human-readable scan report."""
    lines = [
        f"Company: {result.company_name}",
        f"URL:     {result.url}",
        f"Job:     {result.job_id} ({result.duration_seconds:.1f}s)",
        f"Engine:  v{result.engine_version}",
        "",
        format_score_summary(result),
        "",
        "Signals:",
    ]

    for signal in result.signals:
        mark = "x" if signal.found else " "
        value = f" - {signal.value}" if signal.value else ""
        lines.append(f"  [{mark}] {signal.name} ({signal.points}/{signal.max_points}){value}")

    if result.checklist:
        lines.append("")
        lines.append("Next steps:")
        for priority, items in group_by_priority(result.checklist).items():
            if not items:
                continue
            lines.append(f"  {priority.value} priority:")
            for item in items:
                lines.append(f"    [ ] {item.task}")
                lines.append(f"        {item.reason}")
                if item.search_query:
                    lines.append(f"        Search: {item.search_query}")

    if result.financial_data is not None:
        lines.append("")
        lines.append(f"Financials: {result.financial_data.message}")
        for link in result.financial_data.filing_links:
            lines.append(f"  - {link.name}: {link.url}")

    if result.collector_errors:
        lines.append("")
        lines.append(f"Collector errors ({len(result.collector_errors)}):")
        for error in result.collector_errors:
            lines.append(f"  - {error.source}: {error.code} {error.message}")

    if result.ai_interpretation:
        lines.append("")
        lines.append(result.ai_interpretation)

    if result.financial_analysis:
        lines.append("")
        lines.append(result.financial_analysis)

    lines.append("")
    lines.append("Disclaimer:")
    lines.append(DISCLAIMER_TEXT)

    return "\n".join(lines)


# ============================================================
# MAIN ENTRY POINT
# ============================================================

async def async_main(args: argparse.Namespace) -> int:
    """
    Async main entry point.

    Returns:
        Exit code
    """
    try:
        normalized = normalize_url(args.url)
    except InvalidTargetError:
        print("Error: Please enter a valid website URL (e.g., acme.com)", file=sys.stderr)
        return EXIT_INVALID_TARGET

    if not is_company_website(normalized):
        print("Error: Please enter a company website, not a social media profile", file=sys.stderr)
        return EXIT_INVALID_TARGET

    orchestrator = create_orchestrator(config=build_config(args))
    job = ScanJob(job_id=generate_job_id(), url=normalized)

    await orchestrator.run_job(job)

    if job.status == ScanStatus.COMPLETED and job.result is not None:
        if args.json:
            print(json.dumps(job.result.to_dict(), indent=2))
        else:
            print(format_report(job.result))
        return EXIT_OK

    error = job.error or {}
    print(f"Error: {error.get('message', 'Scan failed')}", file=sys.stderr)
    if error.get("code") == InvalidTargetError.error_code:
        return EXIT_INVALID_TARGET
    return EXIT_ERROR


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    config_errors = build_config(args).validate()
    if config_errors:
        for error in config_errors:
            print(f"Error: {error}", file=sys.stderr)
        return EXIT_ERROR

    try:
        return asyncio.run(async_main(args))
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 130


# ============================================================
# MODULE EXECUTION
# ============================================================

if __name__ == "__main__":
    sys.exit(main())
