"""
Shared fixtures for scanner tests.
"""

from typing import Dict, List, Optional

import pytest

from coverage_scoring import RawFinding, all_definitions


@pytest.fixture
def findings_factory():
    """
    Build raw findings for every registry signal.

    Usage:
        findings_factory(found={"domain_age"}, values={"domain_age": "3 years"})
        findings_factory(all_found=True, missing={"linkedin_company"})
    """
    def _build(
        found: Optional[set] = None,
        all_found: bool = False,
        missing: Optional[set] = None,
        values: Optional[Dict[str, str]] = None,
    ) -> List[RawFinding]:
        found = set(found or ())
        missing = set(missing or ())
        values = values or {}

        findings = []
        for definition in all_definitions():
            is_found = (all_found or definition.id in found) and definition.id not in missing
            findings.append(RawFinding(
                id=definition.id,
                found=is_found,
                value=values.get(definition.id),
            ))
        return findings

    return _build
