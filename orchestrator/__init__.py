"""
Orchestrator Package.

============================================================
PURPOSE
============================================================
Runs footprint scans: pre-flight, bootstrap collector,
concurrent fan-out, merge, scoring and optional enrichment.

============================================================
USAGE
============================================================
    from orchestrator import create_orchestrator

    orchestrator = create_orchestrator()
    result = await orchestrator.run_scan("acme.com", include_ai=False)

Command line:
    python -m orchestrator.cli acme.com --json

============================================================
"""

from .config import ScanConfig, get_config, set_config
from .core import ScanOrchestrator, create_orchestrator, default_collectors
from .models import ProgressCallback, ScanJob, ScanResult, ScanStatus, ScanStep


__all__ = [
    # Orchestrator
    "ScanOrchestrator",
    "create_orchestrator",
    "default_collectors",
    # Models
    "ScanStatus",
    "ScanStep",
    "ScanJob",
    "ScanResult",
    "ProgressCallback",
    # Configuration
    "ScanConfig",
    "get_config",
    "set_config",
]
