"""
Property tests for the scoring engine over many signal sets.

Each seed draws a batch of mixed found/missing states, with
domain_age values covering the new-domain penalty path, and
checks bounds, the clamp formula and single-flip monotonicity.
"""

import random
from typing import List

import pytest

from coverage_scoring import (
    CoverageLevel,
    CoverageScoringEngine,
    RawFinding,
    all_definitions,
    max_signal_score,
    penalty_definitions,
)


STATES_PER_SEED = 20

DOMAIN_AGE_VALUES = [None, "< 1 year (4 months)", "< 1 year (11 months)", "7 years", "18 months"]

# Worst to best
LEVEL_ORDER = [
    CoverageLevel.NONE,
    CoverageLevel.MINIMAL,
    CoverageLevel.LIMITED,
    CoverageLevel.MODERATE,
    CoverageLevel.GOOD,
    CoverageLevel.EXCELLENT,
]


def _random_state(rng: random.Random) -> List[RawFinding]:
    found_rate = rng.random()
    findings = []
    for definition in all_definitions():
        value = None
        if definition.id == "domain_age":
            value = rng.choice(DOMAIN_AGE_VALUES)
        findings.append(RawFinding(
            id=definition.id,
            found=rng.random() < found_rate,
            value=value,
        ))
    return findings


def _flip(findings: List[RawFinding], signal_id: str) -> List[RawFinding]:
    return [
        RawFinding(id=f.id, found=True, value=f.value) if f.id == signal_id else f
        for f in findings
    ]


@pytest.fixture(scope="module")
def engine():
    return CoverageScoringEngine()


@pytest.mark.parametrize("seed", range(50))
class TestScoringProperties:
    """Invariants that hold for every signal set."""

    def test_bounds_and_clamp(self, engine, seed):
        rng = random.Random(seed)
        penalty_floor = sum(p.points for p in penalty_definitions())

        for _ in range(STATES_PER_SEED):
            output = engine.score_findings(_random_state(rng))
            category_sum = sum(c.score for c in output.categories)

            assert 0 <= output.score <= 100
            assert penalty_floor == -15
            assert penalty_floor <= output.total_penalty <= 0
            assert 0 <= category_sum <= max_signal_score()
            assert output.score == max(0, min(100, category_sum + output.total_penalty))
            assert output.total_penalty == sum(p.points for p in output.applied_penalties)
            assert output.coverage_level != CoverageLevel.NONE
            for category in output.categories:
                assert 0 <= category.score <= category.max_score

    def test_single_flip_never_lowers_scores(self, engine, seed):
        rng = random.Random(seed)

        for _ in range(STATES_PER_SEED):
            findings = _random_state(rng)
            before = engine.score_findings(findings)

            for finding in findings:
                if finding.found:
                    continue

                after = engine.score_findings(_flip(findings, finding.id))

                assert after.score >= before.score, finding.id
                assert LEVEL_ORDER.index(after.coverage_level) >= LEVEL_ORDER.index(before.coverage_level)
                for old, new in zip(before.categories, after.categories):
                    assert new.category == old.category
                    assert new.score >= old.score, finding.id
                    assert LEVEL_ORDER.index(new.coverage_level) >= LEVEL_ORDER.index(old.coverage_level)
                assert after.total_penalty >= before.total_penalty, finding.id
