"""
Orchestrator - Core.

============================================================
RESPONSIBILITY
============================================================
Runs one footprint scan end to end.

- Pre-flight: validate and normalize the target URL
- Bootstrap: website collector alone (it may name the company)
- Fan-out: remaining collectors concurrently, each isolated
  and bounded, the phase bounded by the scan ceiling
- Merge findings, score, optional interpretation

============================================================
ARCHITECTURAL POSITION
============================================================
- This orchestrator has NO scoring logic
- Collector failures never abort a scan
- Only an invalid target is scan-fatal
- Aggregation starts after every collector has settled

============================================================
"""

import asyncio
import logging
import time
from typing import Awaitable, List, Optional, Sequence, Tuple

from core.exceptions import (
    ErrorClassification,
    InvalidTargetError,
    ScanError,
    classify_exception,
    wrap_exception,
)
from core.urls import domain_to_company_name, extract_domain, generate_job_id, normalize_url
from coverage_scoring import CoverageScoringEngine, merge_signals
from data_ingestion.collectors import (
    BaseCollector,
    CareersCollector,
    DomainCollector,
    FinancialsCollector,
    LinkedInCollector,
    SearchCollector,
    TechStackCollector,
    WebsiteCollector,
)
from data_ingestion.types import (
    CollectorConfig,
    CollectorContext,
    CollectorError,
    CollectorResult,
    FinancialData,
)
from interpretation import Interpreter

from .config import ScanConfig, get_config
from .models import ProgressCallback, ScanJob, ScanResult, ScanStep


logger = logging.getLogger(__name__)


# ============================================================
# SCAN ORCHESTRATOR
# ============================================================

class ScanOrchestrator:
    """
    Coordinates collectors, scoring and enrichment for a scan.

    Collectors and the interpreter are injectable so that a
    scan can run against fakes.
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        bootstrap_collector: Optional[BaseCollector] = None,
        collectors: Optional[Sequence[BaseCollector]] = None,
        interpreter: Optional[Interpreter] = None,
        engine: Optional[CoverageScoringEngine] = None,
        collector_config: Optional[CollectorConfig] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            config: Scan configuration (default: global config)
            bootstrap_collector: Runs alone before the fan-out
            collectors: Fan-out collectors, in merge order
            interpreter: Optional enrichment
            engine: Scoring engine
            collector_config: Used to build default collectors
        """
        self._config = config or get_config()

        errors = self._config.validate()
        if errors:
            raise ValueError(f"Invalid scan configuration: {', '.join(errors)}")

        collector_config = collector_config or CollectorConfig.from_env()
        self._bootstrap = bootstrap_collector or WebsiteCollector(collector_config)
        self._collectors: List[BaseCollector] = list(
            collectors if collectors is not None else default_collectors(collector_config)
        )
        self._interpreter = interpreter
        self._engine = engine or CoverageScoringEngine()

    # --------------------------------------------------------
    # Properties
    # --------------------------------------------------------

    @property
    def config(self) -> ScanConfig:
        """Get configuration."""
        return self._config

    @property
    def collectors(self) -> List[BaseCollector]:
        """Get fan-out collectors in merge order."""
        return list(self._collectors)

    # --------------------------------------------------------
    # Scan
    # --------------------------------------------------------

    async def run_scan(
        self,
        url: str,
        include_ai: Optional[bool] = None,
        on_progress: Optional[ProgressCallback] = None,
        job_id: Optional[str] = None,
    ) -> ScanResult:
        """
        Run a complete scan.

        Args:
            url: Target company website
            include_ai: Override config.include_ai
            on_progress: Called with (progress, step label)
            job_id: Identifier carried into the result

        Returns:
            ScanResult

        Raises:
            InvalidTargetError: If the URL cannot be normalized
        """
        started = time.monotonic()
        include_ai = self._config.include_ai if include_ai is None else include_ai
        job_id = job_id or generate_job_id()

        # --------------------------------------------------
        # Step 1: Pre-flight
        # --------------------------------------------------
        normalized = normalize_url(url)
        domain = extract_domain(normalized)
        context = CollectorContext(
            url=normalized,
            domain=domain,
            company_name=domain_to_company_name(domain),
        )
        logger.info(f"[{job_id}] Scan started | url={normalized} | domain={domain}")

        # --------------------------------------------------
        # Step 2: Bootstrap
        # --------------------------------------------------
        _report(on_progress, ScanStep.CHECKING_WEBSITE)
        bootstrap_timeout = min(self._config.collector_timeout_seconds, self._config.scan_timeout_seconds)
        bootstrap = await self._run_collector(self._bootstrap, context, bootstrap_timeout)

        discovered_name = bootstrap.metadata.get("company_name")
        if discovered_name:
            context = context.with_company_name(discovered_name)

        # --------------------------------------------------
        # Step 3: Fan-out
        # --------------------------------------------------
        _report(on_progress, ScanStep.ANALYZING)
        remaining = max(0.0, self._config.scan_timeout_seconds - (time.monotonic() - started))
        fanned_out = await self._fan_out(context, remaining)

        # --------------------------------------------------
        # Step 4: Merge
        # --------------------------------------------------
        results = [bootstrap] + fanned_out
        findings = [finding for r in results for finding in r.findings]
        collector_errors: Tuple[CollectorError, ...] = tuple(
            error for r in results for error in r.errors
        )
        signals = merge_signals(findings)

        # --------------------------------------------------
        # Step 5: Score
        # --------------------------------------------------
        _report(on_progress, ScanStep.SCORING)
        output = self._engine.score(signals)

        result = ScanResult.from_scoring(
            output,
            job_id=job_id,
            url=normalized,
            domain=domain,
            company_name=context.company_name or domain,
            financial_data=_financial_data(results),
            collector_errors=collector_errors,
            duration_seconds=time.monotonic() - started,
        )
        logger.info(
            f"[{job_id}] Scan scored | score={result.score} | "
            f"coverage={result.coverage_level.value} | errors={len(collector_errors)}"
        )

        # --------------------------------------------------
        # Step 6: Enrichment
        # --------------------------------------------------
        if include_ai and self._interpreter is not None:
            _report(on_progress, ScanStep.ENRICHING)
            result = await self._enrich(result)

        _report(on_progress, ScanStep.COMPLETE)
        return result

    async def run_job(self, job: ScanJob, include_ai: Optional[bool] = None) -> ScanJob:
        """
        Drive a job through queued -> processing -> completed | failed.

        Failures are recorded on the job, not raised.
        """
        job.start()

        try:
            result = await self.run_scan(
                job.url,
                include_ai=include_ai,
                on_progress=job.update_progress,
                job_id=job.job_id,
            )
            job.complete(result)

        except InvalidTargetError as e:
            logger.warning(f"[{job.job_id}] Invalid target: {e.message}")
            job.fail(e.error_code, e.message)

        except Exception as e:
            error = wrap_exception(e, ScanError, message=f"Scan failed: {e}")
            logger.error(f"[{job.job_id}] {error.message}", exc_info=True)
            job.fail(error.error_code, error.message)

        return job

    # --------------------------------------------------------
    # Collectors
    # --------------------------------------------------------

    async def _fan_out(
        self,
        context: CollectorContext,
        timeout: float,
    ) -> List[CollectorResult]:
        """Run fan-out collectors; results come back in registration order."""
        if not self._collectors:
            return []

        tasks = [
            asyncio.create_task(
                self._run_collector(collector, context, self._config.collector_timeout_seconds)
            )
            for collector in self._collectors
        ]

        done, pending = await asyncio.wait(tasks, timeout=timeout)

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        results: List[CollectorResult] = []
        for task, collector in zip(tasks, self._collectors):
            if task in done:
                results.append(task.result())
            else:
                logger.warning(f"Collector {collector.source_name} cancelled at scan ceiling")
                results.append(_failed_result(
                    collector,
                    "SCAN_TIMEOUT",
                    f"Scan time limit of {self._config.scan_timeout_seconds}s reached",
                ))
        return results

    async def _run_collector(
        self,
        collector: BaseCollector,
        context: CollectorContext,
        timeout: float,
    ) -> CollectorResult:
        """Run one collector; it always returns a result."""
        try:
            return await asyncio.wait_for(collector.collect(context), timeout=timeout)

        except asyncio.TimeoutError:
            logger.warning(f"Collector {collector.source_name} timed out after {timeout}s")
            return _failed_result(
                collector,
                "COLLECTOR_TIMEOUT",
                f"Collector timed out after {timeout}s",
            )

        except Exception as e:
            logger.warning(f"Collector {collector.source_name} failed: {e}", exc_info=True)
            return _failed_result(
                collector,
                "COLLECTOR_ERROR",
                f"Collector failed: {e}",
                recoverable=classify_exception(e) != ErrorClassification.NON_RECOVERABLE,
            )

    # --------------------------------------------------------
    # Enrichment
    # --------------------------------------------------------

    async def _enrich(self, result: ScanResult) -> ScanResult:
        """Interpretation and financial analysis, concurrently."""
        interpretation, analysis = await asyncio.gather(
            self._bounded(self._interpreter.interpret(result), "interpretation"),
            self._bounded(
                self._interpreter.analyze_financials(result.financial_data, result.company_name),
                "financial analysis",
            ),
        )
        return result.with_enrichment(
            ai_interpretation=interpretation,
            financial_analysis=analysis,
        )

    async def _bounded(self, call: Awaitable[Optional[str]], label: str) -> Optional[str]:
        try:
            return await asyncio.wait_for(call, timeout=self._config.ai_timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(f"AI {label} timed out after {self._config.ai_timeout_seconds}s")
            return None
        except Exception as e:
            logger.warning(f"AI {label} failed: {e}")
            return None


# ============================================================
# HELPERS
# ============================================================

def _report(callback: Optional[ProgressCallback], step: ScanStep) -> None:
    if callback is not None:
        callback(step.progress, step.label)


def _failed_result(
    collector: BaseCollector,
    code: str,
    message: str,
    recoverable: bool = True,
) -> CollectorResult:
    result = CollectorResult(source=collector.source_name)
    result.mark_failed(code, message, recoverable)
    return result


def _financial_data(results: Sequence[CollectorResult]) -> Optional[FinancialData]:
    for result in results:
        data = result.metadata.get("financial_data")
        if isinstance(data, FinancialData):
            return data
    return None


def default_collectors(
    config: CollectorConfig,
) -> List[BaseCollector]:
    """Fan-out collectors in merge order."""
    return [
        DomainCollector(config),
        SearchCollector(config),
        LinkedInCollector(config),
        CareersCollector(config),
        TechStackCollector(config),
        FinancialsCollector(config),
    ]


# ============================================================
# ORCHESTRATOR FACTORY
# ============================================================

def create_orchestrator(
    config: Optional[ScanConfig] = None,
    collector_config: Optional[CollectorConfig] = None,
    interpreter: Optional[Interpreter] = None,
) -> ScanOrchestrator:
    """
    Factory function to create an orchestrator.

    Args:
        config: Scan configuration (or load from environment)
        collector_config: Collector configuration (or load from environment)
        interpreter: Interpreter (or build one from environment)

    Returns:
        Configured ScanOrchestrator instance
    """
    config = config or ScanConfig.from_env()
    collector_config = collector_config or CollectorConfig.from_env()

    return ScanOrchestrator(
        config=config,
        collector_config=collector_config,
        interpreter=interpreter or Interpreter(),
    )


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    "ScanOrchestrator",
    "create_orchestrator",
    "default_collectors",
]
