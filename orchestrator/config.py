"""
Orchestrator - Configuration.

Timeouts and enrichment switches for a scan. HTTP-level
settings live in data_ingestion.types.CollectorConfig.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class ScanConfig:
    """Configuration for the scan orchestrator."""

    collector_timeout_seconds: float = 20.0
    """Upper bound for a single collector run."""

    scan_timeout_seconds: float = 55.0
    """Ceiling for bootstrap plus fan-out."""

    include_ai: bool = True
    """Run interpretation after scoring."""

    ai_timeout_seconds: float = 30.0
    """Upper bound for each interpretation call."""

    @classmethod
    def from_env(cls) -> "ScanConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - COLLECTOR_TIMEOUT_SECONDS
        - SCAN_TIMEOUT_SECONDS
        - SCAN_INCLUDE_AI
        - AI_TIMEOUT_SECONDS
        """
        return cls(
            collector_timeout_seconds=float(os.getenv("COLLECTOR_TIMEOUT_SECONDS", "20")),
            scan_timeout_seconds=float(os.getenv("SCAN_TIMEOUT_SECONDS", "55")),
            include_ai=os.getenv("SCAN_INCLUDE_AI", "true").lower() == "true",
            ai_timeout_seconds=float(os.getenv("AI_TIMEOUT_SECONDS", "30")),
        )

    def validate(self) -> List[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.collector_timeout_seconds <= 0:
            errors.append("collector_timeout_seconds must be positive")

        if self.scan_timeout_seconds <= 0:
            errors.append("scan_timeout_seconds must be positive")

        if self.ai_timeout_seconds <= 0:
            errors.append("ai_timeout_seconds must be positive")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "collector_timeout_seconds": self.collector_timeout_seconds,
            "scan_timeout_seconds": self.scan_timeout_seconds,
            "include_ai": self.include_ai,
            "ai_timeout_seconds": self.ai_timeout_seconds,
        }


# =============================================================
# GLOBAL CONFIG SINGLETON
# =============================================================


_default_config: Optional[ScanConfig] = None


def get_config() -> ScanConfig:
    """Get the global scan configuration."""
    global _default_config
    if _default_config is None:
        _default_config = ScanConfig.from_env()
    return _default_config


def set_config(config: ScanConfig) -> None:
    """Set the global scan configuration."""
    global _default_config
    _default_config = config
