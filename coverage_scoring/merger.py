"""
Coverage Scoring - Signal Merger.

Reconciles raw collector findings against the registry.

Output is total: every registry definition appears exactly
once, in registry order, whatever the collectors reported.
Unknown ids are dropped. On duplicate ids the last finding
wins.
"""

import logging
from typing import Dict, Iterable, List

from .registry import all_definitions, is_known_signal
from .types import RawFinding, Signal


logger = logging.getLogger(__name__)


def merge_signals(raw_findings: Iterable[RawFinding]) -> List[Signal]:
    """
    Build the canonical signal list from raw findings.

    Args:
        raw_findings: Findings from all collectors, in arrival order

    Returns:
        One Signal per registry definition, in registry order
    """
    latest: Dict[str, RawFinding] = {}

    for finding in raw_findings:
        if not is_known_signal(finding.id):
            logger.debug(f"Dropping finding for unknown signal id: {finding.id}")
            continue
        latest[finding.id] = finding

    signals: List[Signal] = []
    for definition in all_definitions():
        finding = latest.get(definition.id)
        found = bool(finding.found) if finding is not None else False

        signals.append(Signal(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            category=definition.category,
            found=found,
            points=definition.points if found else 0,
            max_points=definition.points,
            source=definition.source,
            value=finding.value if finding is not None else None,
        ))

    return signals
