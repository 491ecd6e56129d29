"""
Tests for the coverage scoring pipeline.

============================================================
PURPOSE
============================================================
Merger, category scorer, penalty engine, effort estimator
and the engine that composes them.

TEST PRINCIPLES:
- Scoring is total: any finding set yields a full result
- Score = clamp(sum(categories) + penalties, 0, 100)
- Same input, same output

============================================================
"""

import pytest

from coverage_scoring import (
    CategoryScorer,
    CoverageLevel,
    CoverageScoringEngine,
    CoverageThresholds,
    EffortEstimator,
    EffortLevel,
    PenaltyEngine,
    RawFinding,
    ScoringError,
    SignalCategory,
    all_definitions,
    coverage_level_for_percentage,
    format_score_summary,
    headline_coverage_level,
    merge_signals,
    score_signals,
)


def _score(findings):
    return score_signals(merge_signals(findings))


# ============================================================
# MERGER
# ============================================================

class TestMergeSignals:
    """Tests for merge_signals."""

    def test_empty_findings_yield_full_catalog(self):
        signals = merge_signals([])

        assert [s.id for s in signals] == [d.id for d in all_definitions()]
        assert all(not s.found and s.points == 0 for s in signals)

    def test_found_signal_gets_definition_points(self):
        signals = merge_signals([RawFinding(id="linkedin_company", found=True)])
        linkedin = next(s for s in signals if s.id == "linkedin_company")

        assert linkedin.found
        assert linkedin.points == 6
        assert linkedin.max_points == 6

    def test_last_write_wins(self):
        signals = merge_signals([
            RawFinding(id="ssl_valid", found=True, value="Valid HTTPS"),
            RawFinding(id="ssl_valid", found=False, value="Invalid or missing"),
        ])
        ssl = next(s for s in signals if s.id == "ssl_valid")

        assert not ssl.found
        assert ssl.points == 0
        assert ssl.value == "Invalid or missing"

    def test_unknown_ids_dropped(self):
        signals = merge_signals([RawFinding(id="made_up", found=True)])

        assert len(signals) == len(all_definitions())
        assert all(s.id != "made_up" for s in signals)

    def test_value_carried_when_not_found(self):
        signals = merge_signals([
            RawFinding(id="domain_age", found=False, value="< 1 year (4 months)"),
        ])
        domain_age = next(s for s in signals if s.id == "domain_age")

        assert domain_age.value == "< 1 year (4 months)"


# ============================================================
# COVERAGE LEVELS
# ============================================================

class TestCoverageLevels:
    """Tests for the six-level and five-level mappings."""

    @pytest.mark.parametrize("percentage,expected", [
        (100, CoverageLevel.EXCELLENT),
        (85, CoverageLevel.EXCELLENT),
        (84.9, CoverageLevel.GOOD),
        (70, CoverageLevel.GOOD),
        (50, CoverageLevel.MODERATE),
        (30, CoverageLevel.LIMITED),
        (29.9, CoverageLevel.MINIMAL),
        (0.1, CoverageLevel.MINIMAL),
        (0, CoverageLevel.NONE),
    ])
    def test_category_mapping(self, percentage, expected):
        assert coverage_level_for_percentage(percentage) == expected

    @pytest.mark.parametrize("score,expected", [
        (85, CoverageLevel.EXCELLENT),
        (70, CoverageLevel.GOOD),
        (69, CoverageLevel.MODERATE),
        (30, CoverageLevel.LIMITED),
        (29, CoverageLevel.MINIMAL),
        (0, CoverageLevel.MINIMAL),
    ])
    def test_headline_mapping(self, score, expected):
        assert headline_coverage_level(score) == expected

    def test_headline_never_none(self):
        assert all(headline_coverage_level(s) != CoverageLevel.NONE for s in range(0, 101))

    def test_custom_thresholds(self):
        thresholds = CoverageThresholds(excellent=90, good=80, moderate=60, limited=40)

        assert coverage_level_for_percentage(85, thresholds) == CoverageLevel.GOOD

    def test_threshold_ordering_validated(self):
        with pytest.raises(ValueError):
            CoverageThresholds(excellent=50, good=70)


# ============================================================
# CATEGORY SCORER
# ============================================================

class TestCategoryScorer:
    """Tests for CategoryScorer."""

    def test_all_categories_in_order(self, findings_factory):
        categories = CategoryScorer().score_all(merge_signals(findings_factory()))

        assert [c.category for c in categories] == SignalCategory.all_categories()

    def test_partial_category(self):
        signals = merge_signals([
            RawFinding(id="linkedin_company", found=True),
            RawFinding(id="team_page", found=True),
        ])
        leadership = CategoryScorer().score_category(SignalCategory.LEADERSHIP, signals)

        assert leadership.score == 10
        assert leadership.max_score == 20
        assert leadership.percentage == 50.0
        assert leadership.coverage_level == CoverageLevel.MODERATE
        assert len(leadership.signals) == 4
        assert [s.id for s in leadership.found_signals] == ["linkedin_company", "team_page"]


# ============================================================
# PENALTIES
# ============================================================

class TestPenaltyEngine:
    """Tests for PenaltyEngine."""

    def _evaluate(self, findings):
        signals = merge_signals(findings)
        categories = CategoryScorer().score_all(signals)
        penalties, total = PenaltyEngine().evaluate(signals, categories)
        return {p.id: p for p in penalties}, total

    def test_rules_in_registry_order(self, findings_factory):
        penalties, _ = self._evaluate(findings_factory())

        assert list(penalties) == ["no_leadership", "website_only", "no_social", "new_domain"]

    def test_nothing_found(self, findings_factory):
        penalties, total = self._evaluate(findings_factory())

        assert penalties["no_leadership"].applied
        assert penalties["no_leadership"].reason == "Leadership category score below threshold"
        assert penalties["website_only"].applied
        assert penalties["website_only"].reason == "No external validation signals found"
        assert penalties["no_social"].applied
        assert penalties["no_social"].reason == "LinkedIn company page not found"
        assert not penalties["new_domain"].applied
        assert penalties["new_domain"].reason is None
        assert total == -13

    def test_leadership_threshold_is_strict(self):
        # linkedin_company alone scores exactly 6
        penalties, _ = self._evaluate([RawFinding(id="linkedin_company", found=True)])

        assert not penalties["no_leadership"].applied
        assert not penalties["no_social"].applied

    def test_one_external_signal_clears_website_only(self):
        penalties, _ = self._evaluate([RawFinding(id="news_coverage", found=True)])

        assert not penalties["website_only"].applied

    def test_new_domain_uses_value_marker(self, findings_factory):
        penalties, total = self._evaluate(
            findings_factory(values={"domain_age": "< 1 year (3 months)"})
        )

        assert penalties["new_domain"].applied
        assert penalties["new_domain"].reason == "< 1 year (3 months)"
        assert total == -15

    def test_new_domain_ignores_older_values(self, findings_factory):
        penalties, _ = self._evaluate(findings_factory(values={"domain_age": "18 months"}))

        assert not penalties["new_domain"].applied

    def test_new_domain_never_applies_when_found(self, findings_factory):
        penalties, _ = self._evaluate(
            findings_factory(found={"domain_age"}, values={"domain_age": "< 1 year"})
        )

        assert not penalties["new_domain"].applied

    def test_total_within_bounds(self, findings_factory):
        for findings in (findings_factory(), findings_factory(all_found=True)):
            _, total = self._evaluate(findings)
            assert -15 <= total <= 0


# ============================================================
# EFFORT
# ============================================================

class TestEffortEstimator:
    """Tests for EffortEstimator."""

    @pytest.mark.parametrize("score,expected", [
        (100, EffortLevel.LOW),
        (70, EffortLevel.LOW),
        (69, EffortLevel.MEDIUM),
        (50, EffortLevel.MEDIUM),
        (49, EffortLevel.HIGH),
        (0, EffortLevel.HIGH),
    ])
    def test_level_boundaries(self, score, expected):
        assert EffortEstimator().estimate(score, []).level == expected

    @pytest.mark.parametrize("score,reason", [
        (80, "Standard validation of existing signals"),
        (60, "Moderate research needed for gaps"),
        (10, "Extensive primary research required"),
    ])
    def test_fallback_reason_per_level(self, score, reason):
        assert EffortEstimator().estimate(score, []).reasons == (reason,)

    def test_reasons_in_order(self, findings_factory):
        missing = [s for s in merge_signals(findings_factory()) if not s.found]
        estimate = EffortEstimator().estimate(0, missing)

        assert estimate.reasons == (
            "7 critical signal(s) require manual verification",
            "Leadership information requires extensive research",
            "Limited external validation will require primary research",
            "Basic company identity needs verification",
        )

    def test_single_critical_signal(self, findings_factory):
        signals = merge_signals(findings_factory(all_found=True, missing={"third_party_mentions"}))
        missing = [s for s in signals if not s.found]

        estimate = EffortEstimator().estimate(79, missing)

        assert estimate.level == EffortLevel.LOW
        assert estimate.reasons == ("1 critical signal(s) require manual verification",)


# ============================================================
# ENGINE SCENARIOS
# ============================================================

class TestCoverageScoringEngine:
    """End-to-end scoring scenarios."""

    def test_all_signals_found(self, findings_factory):
        output = _score(findings_factory(all_found=True))

        assert [c.score for c in output.categories] == [25, 20, 25, 15]
        assert all(c.coverage_level == CoverageLevel.EXCELLENT for c in output.categories)
        assert output.total_penalty == 0
        assert output.applied_penalties == []
        assert output.score == 85
        assert output.coverage_level == CoverageLevel.EXCELLENT
        assert output.effort_estimate.level == EffortLevel.LOW

    def test_nothing_found(self, findings_factory):
        output = _score(findings_factory())

        assert [c.score for c in output.categories] == [0, 0, 0, 0]
        assert all(c.coverage_level == CoverageLevel.NONE for c in output.categories)
        assert {p.id for p in output.applied_penalties} == {"no_leadership", "website_only", "no_social"}
        assert output.total_penalty == -13
        assert output.score == 0
        assert output.coverage_level == CoverageLevel.MINIMAL
        assert output.effort_estimate.level == EffortLevel.HIGH

    def test_only_domain_age_found(self):
        output = _score([RawFinding(id="domain_age", found=True)])

        identity = output.get_category(SignalCategory.IDENTITY)
        assert identity.score == 4
        assert [c.score for c in output.categories[1:]] == [0, 0, 0]
        assert not next(p for p in output.penalties if p.id == "new_domain").applied
        assert output.score == 0

    def test_score_formula(self, findings_factory):
        output = _score(findings_factory(found={
            "website_reachable", "about_page", "linkedin_company", "news_coverage", "tech_stack",
        }))

        raw = sum(c.score for c in output.categories) + output.total_penalty
        assert output.score == max(0, min(100, raw))
        assert output.score == 5 + 4 + 6 + 5 + 4

    def test_idempotent(self, findings_factory):
        signals = merge_signals(findings_factory(found={"about_page", "news_coverage"}))

        assert score_signals(signals) == score_signals(signals)

    def test_monotonic_single_flip(self, findings_factory):
        full = _score(findings_factory(all_found=True)).score

        for definition in all_definitions():
            partial = _score(findings_factory(all_found=True, missing={definition.id})).score
            assert partial <= full

    def test_linkedin_flip_clears_two_penalties(self, findings_factory):
        without = _score(findings_factory(found={"news_coverage", "search_presence"}))
        with_linkedin = _score(findings_factory(found={"news_coverage", "search_presence", "linkedin_company"}))

        # +6 points, no_social (-3) and no_leadership (-5) both lifted
        assert without.score == 10 - 5 - 3
        assert with_linkedin.score == 10 + 6
        assert with_linkedin.total_penalty == 0

    def test_score_findings_shortcut(self, findings_factory):
        engine = CoverageScoringEngine()
        findings = findings_factory(all_found=True)

        assert engine.score_findings(findings) == engine.score(merge_signals(findings))

    def test_internal_failure_wrapped(self):
        engine = CoverageScoringEngine()

        with pytest.raises(ScoringError):
            engine.score([object()])

    def test_to_dict(self, findings_factory):
        data = _score(findings_factory(all_found=True)).to_dict()

        assert data["score"] == 85
        assert data["coverage_level"] == "Excellent"
        assert len(data["signals"]) == 20
        assert data["effort_estimate"]["level"] == "Low"

    def test_format_summary(self, findings_factory):
        summary = format_score_summary(_score(findings_factory()))

        assert "Score: 0/100" in summary
        assert "Coverage Level: Minimal" in summary
        assert "No Social Presence: -3" in summary
